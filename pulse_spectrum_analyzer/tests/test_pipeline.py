from __future__ import annotations

import dataclasses

import numpy as np
import pytest

from pulse_spectrum_analyzer.analysis.pipeline import analyze_signal, run_pipeline
from pulse_spectrum_analyzer.analysis.synth import make_rng
from pulse_spectrum_analyzer.errors import DimensionMismatchError
from pulse_spectrum_analyzer.models.profile import SignalProfile
from pulse_spectrum_analyzer.presentation.report import format_report


def test_default_run_reconstructs_signal() -> None:
    rep = run_pipeline()

    assert rep.n_samples == 1000
    assert rep.spectrum.n_bins == 1000
    assert rep.reconstructed.shape == (1000,)
    assert rep.error.max_error < 1e-9
    assert rep.error.rms_error <= rep.error.max_error
    assert rep.warnings == ()


def test_default_run_matches_theory_within_noise() -> None:
    rep = run_pipeline()
    # uniform noise of width 0.05 averages out to well under 1 mV over 1000 samples
    assert abs(rep.theory.dc_measured - rep.theory.dc_theory) < 5e-3
    assert rep.theory.fundamental_bin == 5
    assert rep.components[0].kind == "dc"
    assert any(c.kind == "harmonic" and c.harmonic == 1 for c in rep.components)


def test_determinism_same_seed() -> None:
    p = SignalProfile(n_samples=200)
    a = run_pipeline(p)
    b = run_pipeline(p)
    assert np.array_equal(a.signal, b.signal)
    assert np.array_equal(a.spectrum.re, b.spectrum.re)
    assert format_report(a) == format_report(b)


def test_explicit_generator_is_used() -> None:
    p = SignalProfile(n_samples=200, seed=3)
    a = run_pipeline(p, rng=make_rng(99))
    b = run_pipeline(dataclasses.replace(p, seed=99))
    assert np.array_equal(a.signal, b.signal)


def test_fft_method_agrees_with_direct() -> None:
    direct = run_pipeline(SignalProfile())
    fast = run_pipeline(SignalProfile(method="fft"))
    np.testing.assert_allclose(direct.spectrum.re, fast.spectrum.re, rtol=0.0, atol=1e-7)
    np.testing.assert_allclose(direct.spectrum.im, fast.spectrum.im, rtol=0.0, atol=1e-7)
    assert [c.bin for c in direct.components] == [c.bin for c in fast.components]


def test_noise_free_scenario() -> None:
    rep = run_pipeline(SignalProfile(noise_level=0.0))
    assert abs(rep.spectrum.re[0] / 1000 - 1.55) < 1e-6
    assert rep.theory.fundamental_bin == 5
    assert abs(rep.theory.fundamental_measured - 1.5) < 0.25
    assert rep.error.max_error < 1e-9


def test_single_sample_pipeline() -> None:
    rep = run_pipeline(SignalProfile(n_samples=1))
    assert rep.n_samples == 1
    assert rep.reconstructed[0] == pytest.approx(rep.signal[0], abs=1e-12)
    assert rep.components == ()


def test_report_arrays_are_read_only() -> None:
    rep = run_pipeline(SignalProfile(n_samples=16))
    for arr in (rep.signal, rep.reconstructed, rep.spectrum.re, rep.spectrum.amplitude, rep.error.abs_error):
        with pytest.raises(ValueError):
            arr[0] = 0.0


def test_analyze_signal_does_not_alias_input() -> None:
    p = SignalProfile(n_samples=8)
    x = np.arange(8.0)
    rep = analyze_signal(x, p)
    x[0] = 100.0
    assert rep.signal[0] == 0.0


def test_analyze_signal_rejects_wrong_length() -> None:
    with pytest.raises(DimensionMismatchError):
        analyze_signal(np.zeros(10), SignalProfile(n_samples=8))


def test_verbose_prints_progress(capsys) -> None:
    run_pipeline(SignalProfile(n_samples=8), verbose=True)
    out = capsys.readouterr().out
    assert "Computing DFT" in out
    assert "Computing IDFT" in out
