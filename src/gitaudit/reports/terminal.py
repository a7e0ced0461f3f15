"""Plain-text renderers for the terminal.

Both renderers return a string; the CLI decides where it goes.
"""

from __future__ import annotations

from gitaudit.model import Category, Severity
from gitaudit.model.issue import Issue
from gitaudit.model.report import Report

MAX_LANGUAGES = 15
MAX_COMPACT_INFO = 20

_SEVERITY_LABEL = {
    Severity.CRITICAL: "[CRITICAL]",
    Severity.WARNING: "[WARNING] ",
    Severity.INFO: "[INFO]    ",
}

_CATEGORY_LABEL = {
    Category.SECURITY: "security",
    Category.PERFORMANCE: "performance",
    Category.QUALITY: "quality",
    Category.DEAD_CODE: "dead code",
}


def score_bar(score: int, width: int = 20) -> str:
    filled = int(score * width / 100 + 0.5)
    return "#" * filled + "." * (width - filled) + f" {score}%"


def _sorted_issues(issues: tuple[Issue, ...]) -> list[Issue]:
    # stable: within a severity, issues keep detection order
    return sorted(issues, key=lambda i: -i.severity.rank)


def render_report(report: Report) -> str:
    """Full report: scores, statistics, languages, then every issue."""
    s = report.scores
    stats = report.statistics
    counts = report.counts
    out: list[str] = []

    out.append("")
    out.append(f"  Audit Report: {report.repository}")
    out.append(f"  {report.timestamp}")
    out.append("")
    out.append(f"  {report.summary}")
    out.append("")

    # ── scores ──────────────────────────────────────────────────────
    out.append(f"  Overall      {score_bar(s.overall, 30)}")
    out.append(f"  Security     {score_bar(s.security)}")
    out.append(f"  Performance  {score_bar(s.performance)}")
    out.append(f"  Quality      {score_bar(s.quality)}")
    out.append(f"  Cleanliness  {score_bar(s.cleanliness)}")
    out.append("")

    # ── statistics ──────────────────────────────────────────────────
    out.append("  Statistics")
    out.append("  " + "-" * 29)
    out.append(f"  Files analyzed  : {stats.analyzed_files}")
    out.append(f"  Lines analyzed  : {stats.analyzed_lines:,}")
    out.append(f"  Total issues    : {counts.total}")
    out.append(f"  Critical        : {counts.critical}")
    out.append(f"  Warnings        : {counts.warnings}")
    out.append(f"  Suggestions     : {counts.suggestions}")
    out.append("")

    langs = sorted(stats.languages.items(), key=lambda kv: (-kv[1], kv[0]))
    if langs:
        out.append("  Languages")
        out.append("  " + "-" * 29)
        for name, count in langs[:MAX_LANGUAGES]:
            pct = count * 100 / stats.analyzed_files if stats.analyzed_files else 0.0
            out.append(f"  {name:<25} {count:>4} files  ({pct:.1f}%)")
        if len(langs) > MAX_LANGUAGES:
            out.append(f"  ... and {len(langs) - MAX_LANGUAGES} more")
        out.append("")

    # ── issues ──────────────────────────────────────────────────────
    if not report.issues:
        out.append("  No issues found.")
        out.append("")
        return "\n".join(out)

    out.append(f"  Issues ({len(report.issues)})")
    out.append("  " + "-" * 61)
    for issue in _sorted_issues(report.issues):
        out.append("")
        out.append(
            f"  {_SEVERITY_LABEL[issue.severity]} "
            f"({_CATEGORY_LABEL[issue.category]}) {issue.title}"
        )
        out.append(f"  File: {issue.file}:{issue.line}")
        out.append(f"  {issue.description}")
        for ctx in issue.context_lines:
            marker = ">" if ctx.is_highlighted else " "
            out.append(f"    {marker} {ctx.number:>4} | {ctx.text}")
        if issue.remediation:
            out.append(f"  Fix: {issue.remediation}")
    out.append("")
    return "\n".join(out)


def render_compact(report: Report) -> str:
    """One line per issue, grouped by severity; info entries are capped."""
    s = report.scores
    stats = report.statistics
    out: list[str] = [
        "",
        f"GitAudit: {report.repository} ({stats.analyzed_files} files, "
        f"{stats.analyzed_lines:,} lines)",
        f"Score: {s.overall}%  |  security {s.security}%  performance "
        f"{s.performance}%  quality {s.quality}%  cleanliness {s.cleanliness}%",
    ]
    if not report.issues:
        out.append("No issues found.")
        return "\n".join(out) + "\n"

    groups = (
        (Severity.CRITICAL, "Critical", "x", None),
        (Severity.WARNING, "Warnings", "!", None),
        (Severity.INFO, "Info", "-", MAX_COMPACT_INFO),
    )
    for severity, heading, mark, cap in groups:
        members = [i for i in report.issues if i.severity == severity]
        if not members:
            continue
        out.append("")
        out.append(f"  {heading} ({len(members)}):")
        shown = members if cap is None else members[:cap]
        for issue in shown:
            out.append(f"    {mark} {issue.file}:{issue.line}  {issue.title}")
        if len(members) > len(shown):
            out.append(f"    ... and {len(members) - len(shown)} more")
    out.append("")
    return "\n".join(out)
