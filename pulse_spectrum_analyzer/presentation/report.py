"""Text report for one pipeline run.

Tables are built as pandas DataFrames so callers can export or inspect them;
``format_report`` renders them in the fixed section order:

1. configuration
2. time-domain samples
3. DFT bins
4. major frequency components
5. reconstruction quality
6. theoretical analysis
"""

from __future__ import annotations

from typing import Any, Dict, List

import numpy as np
import pandas as pd

from pulse_spectrum_analyzer.models.profile import SignalProfile
from pulse_spectrum_analyzer.models.results import SpectralReport


TIME_ROWS = 15
SPECTRUM_ROWS = 20

_RULE = "=" * 60


def time_domain_table(report: SpectralReport, n_rows: int = TIME_ROWS) -> pd.DataFrame:
    """First ``n_rows`` samples: original, reconstructed and |error|."""
    n = max(0, min(int(n_rows), report.n_samples))
    return pd.DataFrame(
        {
            "n": np.arange(n, dtype=int),
            "original": report.signal[:n],
            "reconstructed": report.reconstructed[:n],
            "abs_error": report.error.abs_error[:n],
        }
    )


def spectrum_table(report: SpectralReport, n_rows: int = SPECTRUM_ROWS) -> pd.DataFrame:
    """First ``n_rows`` bins with frequency, Re, Im, amplitude and phase."""
    s = report.spectrum
    n = max(0, min(int(n_rows), s.n_bins))
    return pd.DataFrame(
        {
            "k": np.arange(n, dtype=int),
            "freq_hz": s.frequencies[:n],
            "re": s.re[:n],
            "im": s.im[:n],
            "amplitude": s.amplitude[:n],
            "phase_rad": s.phase[:n],
        }
    )


def components_table(report: SpectralReport) -> pd.DataFrame:
    """Classified components above the amplitude threshold."""
    cols = ["k", "freq_hz", "amplitude", "phase_rad", "component"]
    rows: List[Dict[str, Any]] = [
        {
            "k": c.bin,
            "freq_hz": c.frequency_hz,
            "amplitude": c.amplitude,
            "phase_rad": c.phase_rad,
            "component": c.label,
        }
        for c in report.components
    ]
    return pd.DataFrame(rows, columns=cols)


def summary_dict(report: SpectralReport) -> Dict[str, Any]:
    """JSON-friendly summary: profile, error metrics, theory, components."""
    th = report.theory
    return {
        "profile": report.profile.to_dict(),
        "reconstruction": {
            "max_error": report.error.max_error,
            "rms_error": report.error.rms_error,
        },
        "theory": {
            "dc_theory": th.dc_theory,
            "dc_measured": th.dc_measured,
            "fundamental_theory": th.fundamental_theory,
            "fundamental_fourier": th.fundamental_fourier,
            "fundamental_bin": th.fundamental_bin,
            "fundamental_raw": th.fundamental_raw,
            "fundamental_measured": th.fundamental_measured,
        },
        "components": [
            {
                "k": c.bin,
                "freq_hz": c.frequency_hz,
                "amplitude": c.amplitude,
                "phase_rad": c.phase_rad,
                "kind": c.kind,
                "harmonic": c.harmonic,
            }
            for c in report.components
        ],
        "warnings": list(report.warnings),
    }


def _section(title: str) -> List[str]:
    return ["", f"=== {title} ==="]


def format_parameters(p: SignalProfile) -> str:
    """Configuration block that opens the report."""
    lines = [
        "=== Pulse Wave Parameters ===",
        f"Frequency: {p.frequency_hz:.1f} Hz",
        f"Amplitude: {p.amplitude:.2f} V",
        f"Duty Cycle: {p.duty_cycle * 100:.1f}%",
        f"DC Offset: {p.dc_offset:.2f} V",
        f"Noise Level: {p.noise_level:.3f} V",
        f"Sampling Rate: {p.sample_rate_hz:.0f} Hz",
        f"Samples: {p.n_samples} (method: {p.method}, seed: {p.seed})",
        _RULE,
    ]
    return "\n".join(lines)


def format_report(
    report: SpectralReport,
    *,
    time_rows: int = TIME_ROWS,
    spectrum_rows: int = SPECTRUM_ROWS,
    include_parameters: bool = True,
) -> str:
    """Render the full report as text.

    With ``include_parameters=False`` the configuration block is left out,
    for callers that printed :func:`format_parameters` before the run.
    Negative row counts print empty tables.
    """
    p = report.profile
    th = report.theory
    lines: List[str] = []

    if include_parameters:
        lines.append(format_parameters(p))

    td = time_domain_table(report, time_rows)
    lines += _section(f"Time Domain Samples (first {len(td)} points)")
    if td.empty:
        lines.append("(none)")
    else:
        lines.append(
            td.to_string(
                index=False,
                formatters={
                    "original": "{:.6f}".format,
                    "reconstructed": "{:.6f}".format,
                    "abs_error": "{:.8e}".format,
                },
            )
        )

    st = spectrum_table(report, spectrum_rows)
    lines += _section(f"DFT Results (first {len(st)} bins)")
    if st.empty:
        lines.append("(none)")
    else:
        lines.append(
            st.to_string(
                index=False,
                formatters={
                    "freq_hz": "{:.2f}".format,
                    "re": "{:.4f}".format,
                    "im": "{:.4f}".format,
                    "amplitude": "{:.4f}".format,
                    "phase_rad": "{:.4f}".format,
                },
            )
        )

    lines += _section(f"Major Frequency Components (amplitude > {p.peak_threshold:g})")
    comps = components_table(report)
    if comps.empty:
        lines.append("(none)")
    else:
        lines.append(
            comps.to_string(
                index=False,
                formatters={
                    "freq_hz": "{:.2f}".format,
                    "amplitude": "{:.2f}".format,
                    "phase_rad": "{:.4f}".format,
                },
            )
        )

    lines += _section("Reconstruction Quality")
    lines.append(f"Maximum Error: {report.error.max_error:.10f}")
    lines.append(f"RMS Error: {report.error.rms_error:.10f}")

    lines += _section("Theoretical Analysis")
    lines.append(f"Theoretical DC: {th.dc_theory:.4f} V")
    lines.append(f"Measured DC: {th.dc_measured:.4f} V")
    lines.append(f"Theoretical fundamental (2*A*d): {th.fundamental_theory:.4f} V")
    lines.append(f"Fourier-series fundamental (2A/pi*sin(pi*d)): {th.fundamental_fourier:.4f} V")
    if th.fundamental_bin is not None:
        lines.append(
            f"Measured fundamental (bin {th.fundamental_bin}): {th.fundamental_measured:.4f} V "
            f"(|X[k]| = {th.fundamental_raw:.4f})"
        )
    else:
        lines.append("Measured fundamental: n/a (bin outside buffer)")

    if report.warnings:
        lines.append("")
        for w in report.warnings:
            lines.append(f"WARNING: {w}")

    return "\n".join(lines)
