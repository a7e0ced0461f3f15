"""Report presentation: filters, terminal renderers and exporters."""

from gitaudit.reports.exporters import export_json, export_markdown
from gitaudit.reports.filters import filter_report
from gitaudit.reports.terminal import render_compact, render_report

__all__ = [
    "export_json",
    "export_markdown",
    "filter_report",
    "render_compact",
    "render_report",
]
