"""Command-line entry point: run the pulse spectrum pipeline once and print the report.

With no arguments the documented default profile is used (50 Hz, 2.5 V,
30 % duty, 0.8 V offset, 0.05 V noise, N=1000, Ts=0.1 ms, seed 42).
"""

from __future__ import annotations

import dataclasses
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from pulse_spectrum_analyzer.analysis.pipeline import run_pipeline
from pulse_spectrum_analyzer.errors import ConfigurationError
from pulse_spectrum_analyzer.models.profile import TRANSFORM_METHODS, SignalProfile
from pulse_spectrum_analyzer.presentation.report import (
    SPECTRUM_ROWS,
    TIME_ROWS,
    format_parameters,
    format_report,
    summary_dict,
)
from pulse_spectrum_analyzer.validation.properties import check_report


# CLI option dest -> SignalProfile field
_OVERRIDES = {
    "frequency": "frequency_hz",
    "amplitude": "amplitude",
    "duty_cycle": "duty_cycle",
    "dc_offset": "dc_offset",
    "noise_level": "noise_level",
    "n_samples": "n_samples",
    "sample_interval": "sample_interval_s",
    "seed": "seed",
    "threshold": "peak_threshold",
    "tolerance": "harmonic_tolerance_hz",
    "method": "method",
}


def _non_negative_int(text: str) -> int:
    import argparse

    try:
        v = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {text!r}") from None
    if v < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {v}")
    return v


def build_profile(ns: Any) -> SignalProfile:
    """Profile from ``--config`` (or defaults) with explicit CLI overrides applied."""
    base = SignalProfile.from_json(ns.config) if ns.config else SignalProfile()
    overrides: Dict[str, Any] = {
        field: getattr(ns, dest) for dest, field in _OVERRIDES.items() if getattr(ns, dest) is not None
    }
    return dataclasses.replace(base, **overrides) if overrides else base


def main(argv: Optional[Sequence[str]] = None) -> int:
    import argparse
    import textwrap

    p = argparse.ArgumentParser(
        prog="python -m pulse_spectrum_analyzer.scripts.run_pipeline",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=textwrap.dedent(
            """\
            Synthesize a noisy pulse train, compute its DFT and IDFT, and report
            reconstruction error and the harmonic content of the spectrum.

            Every signal option defaults to the value in --config, or to the
            built-in profile when no config file is given.
            """
        ),
    )

    p.add_argument("--config", default=None, help="JSON file with SignalProfile fields")
    p.add_argument("--frequency", type=float, default=None, help="Pulse frequency in Hz (default 50)")
    p.add_argument("--amplitude", type=float, default=None, help="Pulse amplitude in V (default 2.5)")
    p.add_argument("--duty-cycle", type=float, default=None, help="Duty cycle in [0, 1] (default 0.3)")
    p.add_argument("--dc-offset", type=float, default=None, help="DC offset in V (default 0.8)")
    p.add_argument("--noise-level", type=float, default=None, help="Uniform noise width in V (default 0.05)")
    p.add_argument("--n-samples", type=int, default=None, help="Number of samples N (default 1000)")
    p.add_argument("--sample-interval", type=float, default=None, help="Sample interval Ts in s (default 1e-4)")
    p.add_argument("--seed", type=int, default=None, help="Noise generator seed (default 42)")
    p.add_argument("--threshold", type=float, default=None, help="Major-component amplitude threshold (default 20)")
    p.add_argument("--tolerance", type=float, default=None, help="Harmonic match window in Hz (default 2)")
    p.add_argument("--method", choices=TRANSFORM_METHODS, default=None, help="Transform method (default direct)")
    p.add_argument("--time-rows", type=_non_negative_int, default=TIME_ROWS, help="Time-domain rows to print")
    p.add_argument("--spectrum-rows", type=_non_negative_int, default=SPECTRUM_ROWS, help="Spectrum rows to print")
    p.add_argument("--plot", default=None, help="Write a PNG figure to this path")
    p.add_argument("--json-out", default=None, help="Write profile and summary as JSON to this path")
    p.add_argument("--check", action="store_true", help="Verify DFT/IDFT identities on the result")

    ns = p.parse_args(list(argv) if argv is not None else None)

    try:
        profile = build_profile(ns)
    except ConfigurationError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    # parameters first, then progress lines, then the remaining sections
    print(format_parameters(profile))
    report = run_pipeline(profile, verbose=True)
    print(
        format_report(
            report,
            time_rows=ns.time_rows,
            spectrum_rows=ns.spectrum_rows,
            include_parameters=False,
        )
    )

    status = 0
    if ns.check:
        res = check_report(report)
        print()
        if res.ok:
            print("Property check: OK")
        else:
            for e in res.errors:
                print(f"ERROR: {e}")
            status = 1

    if ns.json_out:
        out = Path(ns.json_out)
        out.write_text(json.dumps(summary_dict(report), indent=2), encoding="utf-8")
        print(f"[info] wrote summary: {out}")

    if ns.plot:
        from pulse_spectrum_analyzer.presentation.plots import plot_report, savefig

        path = savefig(plot_report(report), ns.plot)
        print(f"[info] wrote figure: {path}")

    return status


if __name__ == "__main__":
    raise SystemExit(main())
