from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Tuple

import numpy as np

from pulse_spectrum_analyzer.models.profile import SignalProfile


ComponentKind = Literal["dc", "harmonic", "other"]


def frozen_array(x: np.ndarray) -> np.ndarray:
    """Return a float64 copy of ``x`` with the writeable flag cleared."""
    a = np.array(x, dtype=np.float64, copy=True)
    a.setflags(write=False)
    return a


@dataclass(frozen=True)
class Spectrum:
    """Complex DFT of one signal buffer, stored as parallel real arrays.

    Attributes
    ----------
    re, im:
        Real and imaginary parts, shape ``(N,)``, bin ``k = 0..N-1``.
    amplitude:
        ``sqrt(re**2 + im**2)``.
    phase:
        ``atan2(-im, re)`` in radians.
    sample_interval_s:
        Ts of the source buffer, used for the bin-to-frequency mapping.
    """

    re: np.ndarray
    im: np.ndarray
    amplitude: np.ndarray
    phase: np.ndarray
    sample_interval_s: float

    @property
    def n_bins(self) -> int:
        return int(self.re.size)

    def frequency(self, k: int) -> float:
        """Physical frequency of bin ``k``: ``k / (N*Ts)``."""
        return float(k) / (self.n_bins * self.sample_interval_s)

    @property
    def frequencies(self) -> np.ndarray:
        return np.arange(self.n_bins, dtype=np.float64) / (self.n_bins * self.sample_interval_s)


@dataclass(frozen=True)
class ReconstructionError:
    """Per-sample |x - x_rec| and its summary statistics."""

    abs_error: np.ndarray
    max_error: float
    rms_error: float


@dataclass(frozen=True)
class FrequencyComponent:
    """One spectral peak above the amplitude threshold.

    ``harmonic`` is the harmonic number for ``kind == "harmonic"`` and None
    otherwise.
    """

    bin: int
    frequency_hz: float
    amplitude: float
    phase_rad: float
    kind: ComponentKind
    harmonic: Optional[int] = None

    @property
    def label(self) -> str:
        if self.kind == "dc":
            return "DC Component"
        if self.kind == "harmonic":
            return f"Harmonic {self.harmonic}"
        return "Other"


@dataclass(frozen=True)
class TheoreticalComparison:
    """Closed-form predictions next to what the spectrum shows.

    Attributes
    ----------
    dc_theory:
        ``A*d + D``.
    dc_measured:
        ``Re[0] / N``.
    fundamental_theory:
        ``2*A*d`` (the simple duty-cycle estimate).
    fundamental_fourier:
        Exact Fourier-series coefficient of the pulse, ``(2A/pi) sin(pi d)``.
    fundamental_bin:
        ``round(f*N*Ts)``, or None when it falls outside the buffer.
    fundamental_raw:
        ``|X[fundamental_bin]|`` (unnormalized), or None.
    fundamental_measured:
        Single-sided amplitude ``2|X[k]|/N`` in volts, or None.
    """

    dc_theory: float
    dc_measured: float
    fundamental_theory: float
    fundamental_fourier: float
    fundamental_bin: Optional[int] = None
    fundamental_raw: Optional[float] = None
    fundamental_measured: Optional[float] = None


@dataclass(frozen=True)
class SpectralReport:
    """Everything one pipeline run produced.

    Arrays are read-only views owned by the report.  ``warnings`` carries
    non-fatal observations (aliasing, bin misalignment, ...).
    """

    profile: SignalProfile
    signal: np.ndarray
    reconstructed: np.ndarray
    spectrum: Spectrum
    error: ReconstructionError
    components: Tuple[FrequencyComponent, ...]
    theory: TheoreticalComparison
    warnings: Tuple[str, ...] = ()

    @property
    def n_samples(self) -> int:
        return int(self.signal.size)
