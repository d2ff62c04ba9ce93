"""Matplotlib figure for one pipeline run.

Uses the object-oriented :class:`matplotlib.figure.Figure` API so no GUI
backend is required.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

import numpy as np
from matplotlib.figure import Figure

from pulse_spectrum_analyzer.models.results import SpectralReport


def plot_report(report: SpectralReport, *, max_freq_hz: float | None = None) -> Figure:
    """Three stacked panels: signal vs reconstruction, spectrum, error.

    Parameters
    ----------
    report:
        Finished pipeline output.
    max_freq_hz:
        Upper x-limit of the spectrum panel.  Default: Nyquist.

    Returns
    -------
    matplotlib.figure.Figure
    """
    p = report.profile
    s = report.spectrum
    N = report.n_samples
    t_ms = 1e3 * p.sample_interval_s * np.arange(N)

    half = max(N // 2, 1)
    freqs = s.frequencies[:half]
    # Single-sided amplitude in volts; DC is not doubled.
    amp = 2.0 * s.amplitude[:half] / N
    amp[0] = s.amplitude[0] / N

    fig = Figure(figsize=(9.0, 8.0), dpi=120, layout="tight")
    ax_t, ax_f, ax_e = fig.subplots(3, 1)

    ax_t.plot(t_ms, report.signal, lw=0.8, label="original")
    ax_t.plot(t_ms, report.reconstructed, "--", lw=0.8, label="reconstructed (IDFT)")
    ax_t.set_xlabel("time (ms)")
    ax_t.set_ylabel("amplitude (V)")
    ax_t.set_title(f"Pulse train: {p.frequency_hz:g} Hz, duty {p.duty_cycle * 100:.0f}%")
    ax_t.legend(loc="upper right")

    ax_f.stem(freqs, amp, markerfmt=" ", basefmt=" ")
    for c in report.components:
        if c.kind == "harmonic":
            ax_f.plot(c.frequency_hz, 2.0 * c.amplitude / N, "o", ms=4, color="tab:red")
        elif c.kind == "other":
            ax_f.plot(c.frequency_hz, 2.0 * c.amplitude / N, "x", ms=5, color="tab:orange")
    ax_f.set_xlim(0.0, max_freq_hz if max_freq_hz is not None else 0.5 * p.sample_rate_hz)
    ax_f.set_xlabel("frequency (Hz)")
    ax_f.set_ylabel("|X| single-sided (V)")
    ax_f.set_title("Amplitude spectrum")

    ax_e.plot(t_ms, report.error.abs_error, lw=0.8)
    ax_e.set_xlabel("time (ms)")
    ax_e.set_ylabel("|x - x_rec| (V)")
    ax_e.set_title(f"Reconstruction error: max {report.error.max_error:.3g}, RMS {report.error.rms_error:.3g}")

    for ax in (ax_t, ax_f, ax_e):
        ax.grid(True, alpha=0.3)
    return fig


def savefig(fig: Figure, path: Union[str, Path]) -> str:
    """Save *fig* as a PNG.

    Returns
    -------
    str
        Absolute path of the saved image.
    """
    path = Path(path)
    if path.parent and not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(str(path), bbox_inches="tight", dpi=180, facecolor="white")
    return str(path.resolve())
