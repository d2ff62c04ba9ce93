"""Pulse Spectrum Analyzer -- DFT/IDFT analysis of a noisy, biased pulse train.

This package provides tools for:
- Synthesizing a rectangular pulse waveform with DC offset and uniform noise
- Computing the discrete Fourier transform by direct summation (FFT path optional)
- Reconstructing the time-domain signal with the inverse transform
- Classifying spectral peaks into DC / harmonic / other components
- Comparing measured DC and fundamental levels with closed-form predictions

Key principles:
- One validated profile: every parameter lives in a frozen SignalProfile
- Reproducible: randomness comes from an explicit, seeded generator
- No silent reshaping: buffers of mismatched length are rejected

Main subpackages:
- analysis: Synthesis, Fourier transforms, spectral analysis, pipeline driver
- models: Data models (SignalProfile, Spectrum, SpectralReport)
- presentation: Text report tables and matplotlib figures
- validation: Property self-checks on finished reports
- scripts: Command-line entry point
"""

__all__ = []
