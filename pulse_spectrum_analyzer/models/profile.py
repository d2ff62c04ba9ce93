"""Signal profile -- bundles all pipeline-relevant configuration.

A SignalProfile groups every parameter that affects the analysis output
into one frozen dataclass.  It can be:

- Constructed with the documented defaults (50 Hz, 2.5 V, 30 % duty, ...)
- Overridden field-by-field via ``dataclasses.replace()``
- Serialized to/from a dict for JSON provenance

Validation runs at construction time, so an invalid profile never reaches
the synthesizer.
"""

from __future__ import annotations

import json
import math
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

from pulse_spectrum_analyzer.errors import ConfigurationError


TRANSFORM_METHODS: Tuple[str, ...] = ("direct", "fft")


@dataclass(frozen=True)
class SignalProfile:
    """Frozen configuration for the full analysis pipeline.

    Signal fields
    -------------
    frequency_hz : float
        Pulse repetition frequency in Hz (> 0).
    amplitude : float
        Pulse height in volts (>= 0).
    duty_cycle : float
        Fraction of each period spent High, in [0, 1].
    dc_offset : float
        Constant bias added to every sample, in volts.
    noise_level : float
        Peak-to-peak width of the uniform noise, in volts (>= 0).

    Sampling fields
    ---------------
    n_samples : int
        Buffer length N (> 0).
    sample_interval_s : float
        Sample interval Ts in seconds (> 0).
    seed : int
        Seed for the noise generator.

    Analysis fields
    ---------------
    peak_threshold : float
        Raw |X[k]| above which a bin is listed as a major component.
    harmonic_tolerance_hz : float
        Maximum distance from h*f for a peak to count as the h-th harmonic.
    method : str
        ``"direct"`` (O(N^2) summation, reference) or ``"fft"``.
    """

    frequency_hz: float = 50.0
    amplitude: float = 2.5
    duty_cycle: float = 0.3
    dc_offset: float = 0.8
    noise_level: float = 0.05

    n_samples: int = 1000
    sample_interval_s: float = 1e-4
    seed: int = 42

    peak_threshold: float = 20.0
    harmonic_tolerance_hz: float = 2.0
    method: str = "direct"

    def __post_init__(self) -> None:
        errors = self.validate()
        if errors:
            msg = "Invalid configuration:\n" + "\n".join(f"- {e}" for e in errors)
            raise ConfigurationError(msg)

    def validate(self) -> List[str]:
        """Return a list of problems with this profile (empty when valid)."""
        errors: List[str] = []

        bad = set()
        for name in ("frequency_hz", "amplitude", "duty_cycle", "dc_offset", "noise_level",
                     "sample_interval_s", "peak_threshold", "harmonic_tolerance_hz"):
            v = getattr(self, name)
            if isinstance(v, bool) or not isinstance(v, (int, float)) or not math.isfinite(v):
                errors.append(f"{name} must be a finite number, got {v!r}")
                bad.add(name)

        if isinstance(self.n_samples, bool) or not isinstance(self.n_samples, int):
            errors.append(f"n_samples must be an integer, got {self.n_samples!r}")
        elif self.n_samples <= 0:
            errors.append(f"n_samples must be > 0, got {self.n_samples}")
        if "sample_interval_s" not in bad and self.sample_interval_s <= 0:
            errors.append(f"sample_interval_s must be > 0, got {self.sample_interval_s}")
        if "frequency_hz" not in bad and self.frequency_hz <= 0:
            errors.append(f"frequency_hz must be > 0, got {self.frequency_hz}")
        if "duty_cycle" not in bad and not (0.0 <= self.duty_cycle <= 1.0):
            errors.append(f"duty_cycle must be in [0, 1], got {self.duty_cycle}")
        if "amplitude" not in bad and self.amplitude < 0:
            errors.append(f"amplitude must be >= 0, got {self.amplitude}")
        if "noise_level" not in bad and self.noise_level < 0:
            errors.append(f"noise_level must be >= 0, got {self.noise_level}")
        if "peak_threshold" not in bad and self.peak_threshold < 0:
            errors.append(f"peak_threshold must be >= 0, got {self.peak_threshold}")
        if "harmonic_tolerance_hz" not in bad and self.harmonic_tolerance_hz < 0:
            errors.append(f"harmonic_tolerance_hz must be >= 0, got {self.harmonic_tolerance_hz}")
        if isinstance(self.seed, bool) or not isinstance(self.seed, int) or self.seed < 0:
            errors.append(f"seed must be a non-negative integer, got {self.seed!r}")
        if self.method not in TRANSFORM_METHODS:
            errors.append(f"method must be one of {list(TRANSFORM_METHODS)}, got {self.method!r}")
        return errors

    # ------------------------------------------------------------------
    # Derived quantities
    # ------------------------------------------------------------------

    @property
    def period_s(self) -> float:
        return 1.0 / self.frequency_hz

    @property
    def sample_rate_hz(self) -> float:
        return 1.0 / self.sample_interval_s

    @property
    def duration_s(self) -> float:
        """Observation window N*Ts; also the inverse of the bin spacing."""
        return self.n_samples * self.sample_interval_s

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly dict."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> SignalProfile:
        """Reconstruct from a dict (e.g. loaded from JSON).

        Missing keys fall back to the defaults; unknown keys are rejected.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(d) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {unknown}")
        d = dict(d)  # shallow copy
        # JSON has no int/float distinction for whole numbers
        if isinstance(d.get("n_samples"), float) and float(d["n_samples"]).is_integer():
            d["n_samples"] = int(d["n_samples"])
        if isinstance(d.get("seed"), float) and float(d["seed"]).is_integer():
            d["seed"] = int(d["seed"])
        return cls(**d)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> SignalProfile:
        p = Path(path)
        try:
            data = json.loads(p.read_text(encoding="utf-8"))
        except OSError as exc:
            raise ConfigurationError(f"{p}: cannot read configuration ({exc})") from exc
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"{p}: not valid JSON ({exc})") from exc
        if not isinstance(data, dict):
            raise ConfigurationError(f"{p}: expected a JSON object, got {type(data).__name__}")
        return cls.from_dict(data)
