from __future__ import annotations

import json

import pytest

from pulse_spectrum_analyzer.scripts.run_pipeline import main


def test_main_defaults(capsys) -> None:
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "Computing DFT (direct)" in out
    assert "Frequency: 50.0 Hz" in out
    assert "Noise Level: 0.050 V" in out
    assert "=== Reconstruction Quality ===" in out
    assert "DC Component" in out


def test_main_overrides_and_outputs(tmp_path, capsys) -> None:
    js = tmp_path / "summary.json"
    png = tmp_path / "figs" / "report.png"
    rc = main(
        [
            "--noise-level", "0",
            "--method", "fft",
            "--check",
            "--json-out", str(js),
            "--plot", str(png),
        ]
    )
    assert rc == 0
    out = capsys.readouterr().out
    assert "Property check: OK" in out
    assert "wrote figure" in out

    d = json.loads(js.read_text(encoding="utf-8"))
    assert d["profile"]["method"] == "fft"
    assert d["profile"]["noise_level"] == 0.0
    assert abs(d["theory"]["dc_measured"] - 1.55) < 1e-6
    assert png.exists() and png.stat().st_size > 0


def test_main_config_file(tmp_path, capsys) -> None:
    cfg = tmp_path / "p.json"
    cfg.write_text(json.dumps({"frequency_hz": 100.0, "n_samples": 200}), encoding="utf-8")
    assert main(["--config", str(cfg), "--amplitude", "1.0"]) == 0
    out = capsys.readouterr().out
    assert "Frequency: 100.0 Hz" in out
    assert "Amplitude: 1.00 V" in out
    assert "Samples: 200" in out


def test_main_rejects_invalid_configuration(capsys) -> None:
    assert main(["--duty-cycle", "1.5"]) == 2
    captured = capsys.readouterr()
    assert "ERROR:" in captured.err
    assert "duty_cycle" in captured.err
    # nothing from the pipeline is printed
    assert "Computing DFT" not in captured.out


def test_main_rejects_unknown_method() -> None:
    with pytest.raises(SystemExit):
        main(["--method", "goertzel"])


def test_main_prints_parameters_before_progress(capsys) -> None:
    assert main(["--n-samples", "64", "--method", "fft"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("=== Pulse Wave Parameters ===")
    assert out.count("=== Pulse Wave Parameters ===") == 1
    assert out.index("Samples: 64") < out.index("Computing DFT (fft)")
    assert out.index("Computing IDFT (fft)") < out.index("=== Time Domain Samples")


@pytest.mark.parametrize("option", ["--time-rows", "--spectrum-rows"])
def test_main_rejects_negative_row_counts(option, capsys) -> None:
    with pytest.raises(SystemExit) as ei:
        main(["--n-samples", "16", option, "-1"])
    assert ei.value.code == 2
    assert "must be >= 0" in capsys.readouterr().err


def test_main_zero_rows(capsys) -> None:
    assert main(["--n-samples", "16", "--time-rows", "0", "--spectrum-rows", "0"]) == 0
    out = capsys.readouterr().out
    assert "=== Time Domain Samples (first 0 points) ===" in out
    assert "=== DFT Results (first 0 bins) ===" in out
