"""
Property self-check for a finished pipeline run.

This module does not compute anything new; it verifies that a SpectralReport
satisfies the identities every DFT/IDFT pair of a real buffer must satisfy:

- round trip: IDFT(DFT(x)) == x up to rounding
- DC bin: Re[0] == sum(x), Im[0] == 0
- conjugate symmetry: Re[k] == Re[N-k], Im[k] == -Im[N-k]
- amplitude >= 0
- max error >= RMS error

Examples
--------
>>> from pulse_spectrum_analyzer.analysis.pipeline import run_pipeline
>>> from pulse_spectrum_analyzer.models.profile import SignalProfile
>>> rep = check_report(run_pipeline(SignalProfile(n_samples=64, method="fft")))
>>> rep.ok
True
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np

from pulse_spectrum_analyzer.models.results import SpectralReport


# Relative to max(|x|) (or N*max(|x|) for spectral quantities).
DEFAULT_RTOL = 1e-9


@dataclass(frozen=True)
class CheckResult:
    """
    Result of checking one report.

    Attributes
    ----------
    ok:
        True if no errors were found.
    errors:
        Violated identities; the transform output should not be trusted.
    warnings:
        Observations carried over from the report (non-fatal).

    Examples
    --------
    >>> CheckResult(ok=True, errors=[], warnings=[]).ok
    True
    """
    ok: bool
    errors: List[str]
    warnings: List[str]

    def raise_if_errors(self) -> None:
        """
        Raise ValueError if errors exist.

        Examples
        --------
        >>> r = CheckResult(ok=False, errors=["bad"], warnings=[])
        >>> try:
        ...     r.raise_if_errors()
        ... except ValueError:
        ...     pass
        """
        if self.errors:
            msg = "Property check failed:\n" + "\n".join(f"- {e}" for e in self.errors)
            raise ValueError(msg)


def check_round_trip(x: np.ndarray, x_rec: np.ndarray, *, rtol: float = DEFAULT_RTOL) -> List[str]:
    scale = max(float(np.max(np.abs(x))), 1.0)
    dev = float(np.max(np.abs(np.asarray(x) - np.asarray(x_rec))))
    if dev > rtol * scale:
        return [f"round trip deviates by {dev:.3e} (limit {rtol * scale:.3e})."]
    return []


def check_dc_bin(x: np.ndarray, re: np.ndarray, im: np.ndarray, *, rtol: float = DEFAULT_RTOL) -> List[str]:
    errors: List[str] = []
    scale = max(float(np.sum(np.abs(x))), 1.0)
    s = float(np.sum(x))
    if abs(float(re[0]) - s) > rtol * scale:
        errors.append(f"Re[0]={float(re[0]):.12g} differs from sum(x)={s:.12g}.")
    if abs(float(im[0])) > rtol * scale:
        errors.append(f"Im[0]={float(im[0]):.3e} is not zero.")
    return errors


def check_conjugate_symmetry(re: np.ndarray, im: np.ndarray, *, atol: float) -> List[str]:
    N = int(np.asarray(re).size)
    if N < 2:
        return []
    k = np.arange(1, N)
    d_re = np.abs(re[k] - re[N - k])
    d_im = np.abs(im[k] + im[N - k])
    errors: List[str] = []
    if np.any(d_re > atol):
        bad = int(k[np.argmax(d_re)])
        errors.append(f"Re not symmetric: worst at k={bad} (|dRe|={float(np.max(d_re)):.3e}).")
    if np.any(d_im > atol):
        bad = int(k[np.argmax(d_im)])
        errors.append(f"Im not antisymmetric: worst at k={bad} (|dIm|={float(np.max(d_im)):.3e}).")
    return errors


def check_report(report: SpectralReport, *, rtol: float = DEFAULT_RTOL) -> CheckResult:
    """Run every identity check on ``report``."""
    x = np.asarray(report.signal)
    s = report.spectrum
    errors: List[str] = []

    if s.n_bins != x.size or report.reconstructed.size != x.size:
        errors.append(
            f"length mismatch: signal={x.size}, spectrum={s.n_bins}, reconstructed={report.reconstructed.size}."
        )
        return CheckResult(ok=False, errors=errors, warnings=list(report.warnings))

    errors += check_round_trip(x, report.reconstructed, rtol=rtol)
    errors += check_dc_bin(x, s.re, s.im, rtol=rtol)
    spec_scale = max(float(np.sum(np.abs(x))), 1.0)
    errors += check_conjugate_symmetry(s.re, s.im, atol=rtol * spec_scale)

    if np.any(s.amplitude < 0):
        errors.append("negative amplitude found.")
    # one ulp of slack: sqrt(mean(e**2)) may round above max(e) when all e are equal
    if report.error.max_error < report.error.rms_error * (1.0 - 1e-12):
        errors.append(
            f"max error {report.error.max_error:.3e} is below RMS error {report.error.rms_error:.3e}."
        )

    return CheckResult(ok=not errors, errors=errors, warnings=list(report.warnings))
