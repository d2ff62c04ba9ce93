"""Spectral analysis of a finished transform.

Three independent steps, each a plain function over numpy arrays:

1) ``reconstruction_error``: per-sample |x - x_rec| with max and RMS.
2) ``classify_components``: bins in the lower half-spectrum with raw
   amplitude above a threshold are labelled DC, h-th harmonic of the pulse
   frequency, or "Other".
3) ``theoretical_comparison``: closed-form DC and fundamental levels of an
   ideal pulse train next to the measured values.

The threshold and the harmonic window are in raw DFT units and Hz
respectively; they are not rescaled with N or Ts.
"""

from __future__ import annotations

import math
from typing import List, Optional, Tuple

import numpy as np

from pulse_spectrum_analyzer.errors import DimensionMismatchError
from pulse_spectrum_analyzer.models.profile import SignalProfile
from pulse_spectrum_analyzer.models.results import (
    FrequencyComponent,
    ReconstructionError,
    Spectrum,
    TheoreticalComparison,
    frozen_array,
)


def round_half_up(x: float) -> int:
    """Round to nearest integer, halves away from zero for x >= 0."""
    return int(math.floor(float(x) + 0.5))


def reconstruction_error(signal: np.ndarray, reconstructed: np.ndarray) -> ReconstructionError:
    """Compare a buffer with its reconstruction sample by sample."""
    x = np.asarray(signal, dtype=np.float64)
    y = np.asarray(reconstructed, dtype=np.float64)
    if x.ndim != 1 or y.ndim != 1:
        raise DimensionMismatchError(f"signal/reconstructed must be 1D, got shapes {x.shape} and {y.shape}")
    if x.size != y.size:
        raise DimensionMismatchError(f"signal and reconstructed lengths differ: {x.size} != {y.size}")
    if x.size == 0:
        raise DimensionMismatchError("signal must not be empty")

    err = np.abs(x - y)
    return ReconstructionError(
        abs_error=frozen_array(err),
        max_error=float(np.max(err)),
        rms_error=float(np.sqrt(np.mean(err * err))),
    )


def classify_components(
    spectrum: Spectrum,
    *,
    fundamental_hz: float,
    threshold: float = 20.0,
    tolerance_hz: float = 2.0,
) -> Tuple[FrequencyComponent, ...]:
    """List the major components of the lower half-spectrum.

    Parameters
    ----------
    spectrum:
        Forward transform of the signal.
    fundamental_hz:
        Pulse repetition frequency; harmonics are multiples of it.
    threshold:
        Bins with ``amplitude > threshold`` (strict) are reported.
    tolerance_hz:
        A peak at ``freq`` is the h-th harmonic when ``h = round(freq/f)``
        and ``|freq - h*f| < tolerance_hz``.  A non-DC bin within tolerance of
        0 Hz is labelled "Harmonic 0".

    Returns
    -------
    tuple of FrequencyComponent
        Ordered by bin index, covering ``k = 0..N//2 - 1``.
    """
    if fundamental_hz <= 0:
        raise ValueError(f"fundamental_hz must be > 0, got {fundamental_hz}")

    amp = np.asarray(spectrum.amplitude)
    half = spectrum.n_bins // 2
    out: List[FrequencyComponent] = []

    for k in np.flatnonzero(amp[:half] > threshold):
        k = int(k)
        freq = spectrum.frequency(k)
        a = float(amp[k])
        ph = float(spectrum.phase[k])

        if k == 0:
            out.append(FrequencyComponent(bin=k, frequency_hz=freq, amplitude=a, phase_rad=ph, kind="dc"))
            continue

        h = round_half_up(freq / fundamental_hz)
        if abs(freq - h * fundamental_hz) < tolerance_hz:
            out.append(
                FrequencyComponent(bin=k, frequency_hz=freq, amplitude=a, phase_rad=ph, kind="harmonic", harmonic=h)
            )
        else:
            out.append(FrequencyComponent(bin=k, frequency_hz=freq, amplitude=a, phase_rad=ph, kind="other"))

    return tuple(out)


def fundamental_bin(profile: SignalProfile) -> Optional[int]:
    """Bin nearest the pulse frequency, ``round(f*N*Ts)``; None if >= N."""
    k = round_half_up(profile.frequency_hz * profile.n_samples * profile.sample_interval_s)
    if k >= profile.n_samples:
        return None
    return k


def theoretical_comparison(spectrum: Spectrum, profile: SignalProfile) -> TheoreticalComparison:
    """Closed-form pulse-train levels against the measured spectrum.

    For an ideal pulse of height A and duty d on offset D the mean is
    ``A*d + D``.  The fundamental is quoted two ways: ``2*A*d`` (the
    small-duty estimate) and the exact series coefficient
    ``(2A/pi) sin(pi d)``.
    """
    N = spectrum.n_bins
    if N != profile.n_samples:
        raise DimensionMismatchError(f"spectrum has {N} bins but profile.n_samples={profile.n_samples}")

    A, d = profile.amplitude, profile.duty_cycle
    k = fundamental_bin(profile)
    raw = None
    measured = None
    if k is not None:
        raw = float(spectrum.amplitude[k])
        # DC and Nyquist bins are not folded
        measured = raw / N if (k == 0 or 2 * k == N) else 2.0 * raw / N

    return TheoreticalComparison(
        dc_theory=A * d + profile.dc_offset,
        dc_measured=float(spectrum.re[0]) / N,
        fundamental_theory=2.0 * A * d,
        fundamental_fourier=2.0 * A / math.pi * math.sin(math.pi * d),
        fundamental_bin=k,
        fundamental_raw=raw,
        fundamental_measured=measured,
    )


def profile_warnings(profile: SignalProfile) -> Tuple[str, ...]:
    """Non-fatal observations about how the profile maps onto the bin grid."""
    msgs: List[str] = []
    nyquist = 0.5 * profile.sample_rate_hz
    if profile.frequency_hz >= nyquist:
        msgs.append(
            f"pulse frequency {profile.frequency_hz:g} Hz is at or above Nyquist ({nyquist:g} Hz); "
            "the spectrum is aliased."
        )

    cycles = profile.frequency_hz * profile.duration_s
    k = fundamental_bin(profile)
    if k is None:
        msgs.append(
            f"fundamental bin round(f*N*Ts)={round_half_up(cycles)} is outside the buffer (N={profile.n_samples}); "
            "measured fundamental is not available."
        )
    elif k >= profile.n_samples // 2:
        msgs.append(f"fundamental bin {k} lies outside the classified half-spectrum (k < {profile.n_samples // 2}).")
    elif abs(cycles - round(cycles)) > 1e-6:
        msgs.append(
            f"the window holds {cycles:.4g} pulse periods (not an integer); "
            "expect leakage around the harmonic bins."
        )
    return tuple(msgs)
