"""Tests for SignalProfile construction, validation and serialization."""

from __future__ import annotations

import dataclasses
import json

import pytest

from pulse_spectrum_analyzer.errors import ConfigurationError
from pulse_spectrum_analyzer.models.profile import SignalProfile


# -----------------------------------------------------------------------
# Basic construction
# -----------------------------------------------------------------------


def test_profile_defaults() -> None:
    p = SignalProfile()
    assert p.frequency_hz == 50.0
    assert p.amplitude == 2.5
    assert p.duty_cycle == 0.3
    assert p.dc_offset == 0.8
    assert p.noise_level == 0.05
    assert p.n_samples == 1000
    assert p.sample_interval_s == 0.0001
    assert p.seed == 42
    assert p.peak_threshold == 20.0
    assert p.harmonic_tolerance_hz == 2.0
    assert p.method == "direct"


def test_profile_derived_quantities() -> None:
    p = SignalProfile()
    assert p.period_s == pytest.approx(0.02)
    assert p.sample_rate_hz == pytest.approx(10000.0)
    assert p.duration_s == pytest.approx(0.1)


def test_profile_frozen() -> None:
    p = SignalProfile()
    with pytest.raises(dataclasses.FrozenInstanceError):
        p.amplitude = 3.0  # type: ignore[misc]


def test_profile_replace_revalidates() -> None:
    p = SignalProfile()
    p2 = dataclasses.replace(p, noise_level=0.0)
    assert p2.noise_level == 0.0
    assert p2.amplitude == 2.5  # unchanged

    with pytest.raises(ConfigurationError):
        dataclasses.replace(p, duty_cycle=1.2)


# -----------------------------------------------------------------------
# Rejection of invalid values
# -----------------------------------------------------------------------


@pytest.mark.parametrize(
    "overrides, fragment",
    [
        ({"n_samples": 0}, "n_samples"),
        ({"n_samples": -5}, "n_samples"),
        ({"n_samples": 10.5}, "n_samples"),
        ({"n_samples": True}, "n_samples"),
        ({"sample_interval_s": 0.0}, "sample_interval_s"),
        ({"sample_interval_s": -1e-4}, "sample_interval_s"),
        ({"duty_cycle": -0.1}, "duty_cycle"),
        ({"duty_cycle": 1.01}, "duty_cycle"),
        ({"amplitude": -1.0}, "amplitude"),
        ({"noise_level": -0.01}, "noise_level"),
        ({"frequency_hz": 0.0}, "frequency_hz"),
        ({"frequency_hz": float("nan")}, "frequency_hz"),
        ({"sample_interval_s": float("inf")}, "sample_interval_s"),
        ({"method": "goertzel"}, "method"),
        ({"seed": -1}, "seed"),
        ({"peak_threshold": -1.0}, "peak_threshold"),
    ],
)
def test_profile_rejects_invalid(overrides, fragment) -> None:
    with pytest.raises(ConfigurationError, match=fragment):
        SignalProfile(**overrides)


def test_configuration_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        SignalProfile(n_samples=0)


def test_profile_reports_all_problems_at_once() -> None:
    with pytest.raises(ConfigurationError) as ei:
        SignalProfile(n_samples=0, sample_interval_s=-1.0, duty_cycle=2.0)
    msg = str(ei.value)
    assert msg.startswith("Invalid configuration:")
    assert "n_samples" in msg
    assert "sample_interval_s" in msg
    assert "duty_cycle" in msg


def test_non_numeric_field_does_not_hide_other_problems() -> None:
    with pytest.raises(ConfigurationError) as ei:
        SignalProfile(frequency_hz="x", n_samples=0, duty_cycle=2.0, method="goertzel")
    lines = str(ei.value).splitlines()[1:]
    assert len(lines) == 4
    assert any("frequency_hz must be a finite number" in ln for ln in lines)
    assert any("n_samples must be > 0" in ln for ln in lines)
    assert any("duty_cycle must be in [0, 1]" in ln for ln in lines)
    assert any("method must be one of" in ln for ln in lines)


def test_nan_field_reported_once() -> None:
    with pytest.raises(ConfigurationError) as ei:
        SignalProfile(amplitude=float("nan"), noise_level=-1.0)
    msg = str(ei.value)
    assert msg.count("amplitude") == 1
    assert "noise_level must be >= 0" in msg


def test_duty_cycle_bounds_are_inclusive() -> None:
    assert SignalProfile(duty_cycle=0.0).duty_cycle == 0.0
    assert SignalProfile(duty_cycle=1.0).duty_cycle == 1.0


# -----------------------------------------------------------------------
# Serialization
# -----------------------------------------------------------------------


def test_profile_dict_roundtrip() -> None:
    p = SignalProfile(frequency_hz=60.0, n_samples=512, method="fft")
    d = p.to_dict()
    assert d["frequency_hz"] == 60.0
    assert d["method"] == "fft"
    assert SignalProfile.from_dict(d) == p


def test_from_dict_partial_uses_defaults() -> None:
    p = SignalProfile.from_dict({"noise_level": 0.0})
    assert p.noise_level == 0.0
    assert p.frequency_hz == 50.0


def test_from_dict_unknown_key() -> None:
    with pytest.raises(ConfigurationError, match="Unknown configuration keys"):
        SignalProfile.from_dict({"frequency": 50.0})


def test_from_dict_accepts_whole_float_counts() -> None:
    p = SignalProfile.from_dict({"n_samples": 200.0, "seed": 7.0})
    assert p.n_samples == 200
    assert isinstance(p.n_samples, int)
    assert p.seed == 7


def test_from_json(tmp_path) -> None:
    path = tmp_path / "profile.json"
    path.write_text(json.dumps({"duty_cycle": 0.5, "n_samples": 100}), encoding="utf-8")
    p = SignalProfile.from_json(path)
    assert p.duty_cycle == 0.5
    assert p.n_samples == 100


def test_from_json_rejects_bad_files(tmp_path) -> None:
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        SignalProfile.from_json(bad)

    arr = tmp_path / "list.json"
    arr.write_text("[1, 2, 3]", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        SignalProfile.from_json(arr)

    with pytest.raises(ConfigurationError):
        SignalProfile.from_json(tmp_path / "missing.json")
