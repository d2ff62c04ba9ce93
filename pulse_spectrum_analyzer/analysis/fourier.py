r"""Discrete Fourier transform of a real signal buffer.

Provides the forward and inverse DFT with the unnormalized forward convention

.. math::

    X_k = \sum_{n=0}^{N-1} x_n e^{-2\pi i nk/N}, \qquad
    x_n = \frac{1}{N} \sum_{k=0}^{N-1} X_k e^{2\pi i nk/N}

Two methods are available behind the same interface:

- ``"direct"``: the O(N^2) summation, evaluated in blocks of rows of the
  cos/sin kernel.  This is the reference algorithm.
- ``"fft"``: :mod:`numpy.fft`; agrees with the direct form to rounding.

Functions
---------
dft
    Forward transform to a :class:`~pulse_spectrum_analyzer.models.results.Spectrum`.
idft
    Inverse transform of a Spectrum back to N real samples.
spectrum_from_parts
    Build a Spectrum (amplitude and phase included) from real/imaginary arrays.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

from pulse_spectrum_analyzer.errors import DimensionMismatchError
from pulse_spectrum_analyzer.models.profile import TRANSFORM_METHODS
from pulse_spectrum_analyzer.models.results import Spectrum, frozen_array


DEFAULT_BLOCK_SIZE = 256


def _as_buffer(x: np.ndarray, name: str) -> np.ndarray:
    a = np.asarray(x, dtype=np.float64)
    if a.ndim != 1:
        raise DimensionMismatchError(f"{name} must be 1D, got shape {a.shape}")
    if a.size == 0:
        raise DimensionMismatchError(f"{name} must not be empty")
    if not np.all(np.isfinite(a)):
        raise ValueError(f"{name} contains NaN/Inf")
    return a


def _check_method(method: str) -> None:
    if method not in TRANSFORM_METHODS:
        raise ValueError(f"method must be one of {list(TRANSFORM_METHODS)}, got {method!r}")


def _kernel_angles(rows: np.ndarray, N: int) -> np.ndarray:
    """``2*pi*(r*c mod N)/N`` for every row index r and column 0..N-1."""
    cols = np.arange(N, dtype=np.int64)
    # Reducing the integer product first keeps the angle in [0, 2*pi).
    prod = np.mod(np.outer(rows.astype(np.int64), cols), N)
    return (2.0 * np.pi / N) * prod


def _dft_direct(x: np.ndarray, block_size: int) -> Tuple[np.ndarray, np.ndarray]:
    N = x.size
    re = np.empty(N, dtype=np.float64)
    im = np.empty(N, dtype=np.float64)
    for start in range(0, N, block_size):
        k = np.arange(start, min(start + block_size, N))
        ang = _kernel_angles(k, N)
        re[k] = np.cos(ang) @ x
        im[k] = -(np.sin(ang) @ x)
    return re, im


def _idft_direct(re: np.ndarray, im: np.ndarray, block_size: int) -> np.ndarray:
    N = re.size
    out = np.empty(N, dtype=np.float64)
    for start in range(0, N, block_size):
        n = np.arange(start, min(start + block_size, N))
        ang = _kernel_angles(n, N)
        out[n] = (np.cos(ang) @ re - np.sin(ang) @ im) / float(N)
    return out


def spectrum_from_parts(re: np.ndarray, im: np.ndarray, *, sample_interval_s: float = 1.0) -> Spectrum:
    """Build a :class:`Spectrum` from real and imaginary parts.

    ``amplitude = sqrt(re**2 + im**2)`` and ``phase = atan2(-im, re)``.
    """
    re = np.asarray(re, dtype=np.float64)
    im = np.asarray(im, dtype=np.float64)
    if re.ndim != 1 or im.ndim != 1:
        raise DimensionMismatchError(f"re/im must be 1D, got shapes {re.shape} and {im.shape}")
    if re.size != im.size:
        raise DimensionMismatchError(f"re and im lengths differ: {re.size} != {im.size}")
    if sample_interval_s <= 0:
        raise ValueError(f"sample_interval_s must be > 0, got {sample_interval_s}")

    amp = np.sqrt(re * re + im * im)
    phase = np.arctan2(-im, re)
    return Spectrum(
        re=frozen_array(re),
        im=frozen_array(im),
        amplitude=frozen_array(amp),
        phase=frozen_array(phase),
        sample_interval_s=float(sample_interval_s),
    )


def dft(
    x: np.ndarray,
    *,
    sample_interval_s: float = 1.0,
    method: str = "direct",
    block_size: int = DEFAULT_BLOCK_SIZE,
) -> Spectrum:
    r"""Compute the discrete Fourier transform of a real signal buffer.

    Parameters
    ----------
    x:
        Real samples, shape ``(N,)``.
    sample_interval_s:
        Ts, stored on the result for the bin-to-frequency mapping.
    method:
        ``"direct"`` (default) or ``"fft"``.
    block_size:
        Number of bins evaluated per kernel block by the direct method.
        Bounds the kernel memory to ``block_size * N`` floats.

    Returns
    -------
    Spectrum
        ``Re[k] = sum x[n] cos(2 pi nk/N)``, ``Im[k] = -sum x[n] sin(2 pi nk/N)``
        plus amplitude and phase.

    Notes
    -----
    For real input the result is conjugate symmetric (``X[N-k] = conj(X[k])``);
    this is not enforced, it follows from the definition.
    """
    _check_method(method)
    a = _as_buffer(x, "x")

    if method == "fft":
        X = np.fft.fft(a)
        re, im = X.real, X.imag
    else:
        if int(block_size) <= 0:
            raise ValueError(f"block_size must be > 0, got {block_size}")
        re, im = _dft_direct(a, int(block_size))

    return spectrum_from_parts(re, im, sample_interval_s=sample_interval_s)


def idft(
    spectrum: Spectrum,
    *,
    method: str = "direct",
    block_size: int = DEFAULT_BLOCK_SIZE,
) -> np.ndarray:
    r"""Reconstruct N real samples from a spectrum.

    .. math::

        x_n = \frac{1}{N} \sum_k \left[ \mathrm{Re}_k \cos(2\pi nk/N)
              - \mathrm{Im}_k \sin(2\pi nk/N) \right]

    Returns
    -------
    np.ndarray
        Read-only float64 array of shape ``(N,)``.  The imaginary residue of the
        full complex inverse is discarded; for a conjugate-symmetric spectrum it
        is rounding noise.
    """
    _check_method(method)
    re = _as_buffer(spectrum.re, "spectrum.re")
    im = _as_buffer(spectrum.im, "spectrum.im")
    if re.size != im.size:
        raise DimensionMismatchError(f"spectrum.re and spectrum.im lengths differ: {re.size} != {im.size}")

    if method == "fft":
        x = np.fft.ifft(re + 1j * im).real
    else:
        if int(block_size) <= 0:
            raise ValueError(f"block_size must be > 0, got {block_size}")
        x = _idft_direct(re, im, int(block_size))

    return frozen_array(x)
