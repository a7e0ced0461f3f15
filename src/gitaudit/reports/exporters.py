"""Report exporters.

*  **JSON** — canonical, machine-readable; validated by ``report.schema.json``.
*  **Markdown** — human-readable, suitable for PR comments.
"""

from __future__ import annotations

from collections import Counter

from gitaudit.model import Severity
from gitaudit.model.report import Report
from gitaudit.utils.json_norm import stable_json_dumps

# worst first
_SEVERITY_ORDER = [Severity.CRITICAL, Severity.WARNING, Severity.INFO]


def export_json(report: Report, *, indent: int = 2) -> str:
    """Export a ``Report`` as indented JSON."""
    return stable_json_dumps(report.to_dict(), indent=indent)


def export_markdown(report: Report, *, top_n: int = 50) -> str:
    """Export a ``Report`` as a Markdown document."""
    lines: list[str] = []
    s = report.scores
    stats = report.statistics

    lines.append(f"# GitAudit Report: {report.repository}")
    lines.append("")
    lines.append(f"**Generated:** {report.timestamp}  ")
    lines.append(f"**Overall score:** {s.overall}/100  ")
    lines.append(
        f"**Files:** {stats.analyzed_files} analyzed of {stats.total_files}  "
    )
    lines.append(f"**Lines:** {stats.analyzed_lines:,}")
    lines.append("")
    lines.append(report.summary)
    lines.append("")

    lines.append("## Scores")
    lines.append("")
    lines.append("| Category | Score |")
    lines.append("|----------|------:|")
    for name, value in (
        ("Security", s.security),
        ("Performance", s.performance),
        ("Code Quality", s.quality),
        ("Cleanliness", s.cleanliness),
    ):
        lines.append(f"| {name} | {value} |")
    lines.append("")

    sev_counts = Counter(i.severity for i in report.issues)
    if sev_counts:
        lines.append("## By Severity")
        lines.append("")
        lines.append("| Severity | Count |")
        lines.append("|----------|------:|")
        for sev in _SEVERITY_ORDER:
            c = sev_counts.get(sev, 0)
            if c:
                lines.append(f"| {sev.value.upper()} | {c} |")
        lines.append("")

    ordered = sorted(
        report.issues,
        key=lambda i: (-i.severity.rank, i.file, i.line, i.id),
    )
    top = ordered[:top_n]
    if top:
        lines.append(f"## Top {len(top)} Issues")
        lines.append("")
        for n, issue in enumerate(top, 1):
            loc = f"{issue.file}:{issue.line}"
            lines.append(
                f"{n}. **[{issue.severity.value.upper()}]** `{loc}` "
                f"{issue.title}: {issue.description}"
            )
        lines.append("")

    if stats.languages:
        lines.append("## Languages")
        lines.append("")
        for name, count in sorted(stats.languages.items(), key=lambda kv: (-kv[1], kv[0])):
            lines.append(f"- {name}: {count}")
        lines.append("")

    lines.append("---")
    lines.append("*Exported by gitaudit*")
    lines.append("")
    return "\n".join(lines)
