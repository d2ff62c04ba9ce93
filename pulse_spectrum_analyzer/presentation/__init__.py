"""Presentation package - text report and figures.

The report module only reads a finished SpectralReport; nothing here feeds
back into the analysis.
"""

from .report import (
    components_table,
    format_parameters,
    format_report,
    spectrum_table,
    summary_dict,
    time_domain_table,
)

__all__ = [
    "format_parameters",
    "format_report",
    "time_domain_table",
    "spectrum_table",
    "components_table",
    "summary_dict",
]
