"""Report assembler: read-only view over a finished run."""

from __future__ import annotations

from typing import Iterable

from gitaudit.model import Severity
from gitaudit.model.issue import Issue
from gitaudit.model.report import IssueCounts, Report, Scores, Statistics
from gitaudit.policy.thresholds import BAND_PHRASES, band_from_score


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count > 1 else ''}"


def summarize(statistics: Statistics, issues: Iterable[Issue], overall: int) -> str:
    """One-paragraph summary: counts, then the overall score band."""
    issues = tuple(issues)
    critical = sum(1 for i in issues if i.severity == Severity.CRITICAL)
    warnings = sum(1 for i in issues if i.severity == Severity.WARNING)

    parts = [
        f"Analyzed {statistics.analyzed_files} files "
        f"({statistics.analyzed_lines:,} lines). "
    ]
    if critical:
        parts.append(f"{_plural(critical, 'critical issue')} need immediate attention. ")
    if warnings:
        parts.append(f"{_plural(warnings, 'warning')} to review. ")
    parts.append(BAND_PHRASES[band_from_score(overall)])
    return "".join(parts)


def assemble_report(state, label: str, scores: Scores, *, timestamp: str) -> Report:
    """Build the ``Report`` for a finished run held in *state*."""
    return Report(
        repository=label,
        timestamp=timestamp,
        statistics=state.statistics,
        scores=scores,
        counts=IssueCounts.of(state.issues),
        issues=state.issues,
        files=state.files,
        summary=summarize(state.statistics, state.issues, scores.overall),
    )
