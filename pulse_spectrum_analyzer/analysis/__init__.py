"""Analysis package.

Design principle:
  - A validated :class:`~pulse_spectrum_analyzer.models.profile.SignalProfile`
    drives every stage; no stage reads global state.
  - Each stage returns new read-only arrays and never mutates its input.

Stages run strictly forward: synthesis -> DFT -> IDFT -> spectral analysis.
"""

from .synth import synthesize_pulse
from .fourier import dft, idft, spectrum_from_parts
from .spectral import classify_components, reconstruction_error, theoretical_comparison
from .pipeline import analyze_signal, run_pipeline

__all__ = [
    "synthesize_pulse",
    "dft",
    "idft",
    "spectrum_from_parts",
    "reconstruction_error",
    "classify_components",
    "theoretical_comparison",
    "analyze_signal",
    "run_pipeline",
]
