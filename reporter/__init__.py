"""
reporter — agregacja wyników reguł i formaty raportu.

Interfejs publiczny:
    build_report  — lista Finding → Report (deterministyczna kolejność)
    Report, RuleSummary, ReportMode
    render_text, render_json, render_table
"""

from .summary import (
    EXIT_FINDINGS,
    EXIT_OK,
    Report,
    ReportMode,
    RuleSummary,
    build_report,
    is_inconsistent,
)
from .render import (
    OUTPUT_FORMATS,
    format_finding,
    render_json,
    render_table,
    render_text,
    report_to_dict,
)

__all__ = [
    "EXIT_FINDINGS",
    "EXIT_OK",
    "Report",
    "ReportMode",
    "RuleSummary",
    "build_report",
    "is_inconsistent",
    "OUTPUT_FORMATS",
    "format_finding",
    "render_json",
    "render_table",
    "render_text",
    "report_to_dict",
]
