from .profile import SignalProfile
from .results import (
    FrequencyComponent,
    ReconstructionError,
    SpectralReport,
    Spectrum,
    TheoreticalComparison,
)

__all__ = [
    "SignalProfile",
    "Spectrum",
    "ReconstructionError",
    "FrequencyComponent",
    "TheoreticalComparison",
    "SpectralReport",
]
