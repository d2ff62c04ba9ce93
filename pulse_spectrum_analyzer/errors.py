"""Exception types raised by the analyzer.

Both derive from :class:`ValueError` so callers that already guard numeric
input with ``except ValueError`` keep working.
"""

from __future__ import annotations


class ConfigurationError(ValueError):
    """A SignalProfile field is out of range, non-finite or unknown."""


class DimensionMismatchError(ValueError):
    """Buffers passed between pipeline stages have incompatible shapes.

    This is a programming-contract violation: buffers are never truncated
    or padded to make them fit.
    """
