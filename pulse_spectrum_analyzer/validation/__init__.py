"""Validation utilities.

This package contains *non-interactive* checks that a finished report obeys
the algebraic identities of the DFT/IDFT pair.

Design goals
------------
1) Keep checks out of the pipeline path (the pipeline never calls them).
2) Report every violated identity, not only the first.
"""

from .properties import CheckResult, check_report

__all__ = ["CheckResult", "check_report"]
