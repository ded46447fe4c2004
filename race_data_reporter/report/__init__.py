"""Report package - static HTML output (statistics table + Chart.js scatter charts)."""

from .html_report import (
    CHART_JS_URL,
    DEFAULT_MAX_POINTS,
    DEFAULT_REPORT_FILENAME,
    render_report,
    sanitize_identifier,
    write_report,
)

__all__ = [
    "CHART_JS_URL",
    "DEFAULT_MAX_POINTS",
    "DEFAULT_REPORT_FILENAME",
    "render_report",
    "sanitize_identifier",
    "write_report",
]
