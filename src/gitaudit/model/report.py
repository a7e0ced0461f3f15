"""Report value types: file records, run statistics, scores and the report."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from gitaudit.model import Severity
from gitaudit.model.issue import Issue


@dataclass(frozen=True, slots=True)
class FileRecord:
    """One analyzed file, in analysis order."""

    path: str
    language: str
    family: str
    line_count: int
    byte_size: int

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "language": self.language,
            "family": self.family,
            "lineCount": self.line_count,
            "byteSize": self.byte_size,
        }


@dataclass(frozen=True, slots=True)
class Statistics:
    """Running counters for one run.

    ``languages`` is never mutated in place: every update builds a new dict.
    """

    total_files: int = 0
    analyzed_files: int = 0
    analyzed_lines: int = 0
    languages: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "totalFiles": self.total_files,
            "analyzedFiles": self.analyzed_files,
            # Lines of files that were actually read; kept for report consumers
            # that expect both keys.
            "totalLines": self.analyzed_lines,
            "analyzedLines": self.analyzed_lines,
            "languages": dict(self.languages),
        }


@dataclass(frozen=True, slots=True)
class Scores:
    """Category scores and the weighted overall score, all in [0, 100]."""

    security: int = 100
    performance: int = 100
    quality: int = 100
    cleanliness: int = 100
    overall: int = 100

    def to_dict(self) -> dict:
        return {
            "security": self.security,
            "performance": self.performance,
            "quality": self.quality,
            "cleanliness": self.cleanliness,
            "overall": self.overall,
        }


@dataclass(frozen=True, slots=True)
class IssueCounts:
    """Severity totals fixed at assembly time.

    Presentation filters narrow ``Report.issues`` but never these counts.
    """

    total: int = 0
    critical: int = 0
    warnings: int = 0
    suggestions: int = 0

    @classmethod
    def of(cls, issues: tuple[Issue, ...]) -> "IssueCounts":
        return cls(
            total=len(issues),
            critical=sum(1 for i in issues if i.severity == Severity.CRITICAL),
            warnings=sum(1 for i in issues if i.severity == Severity.WARNING),
            suggestions=sum(1 for i in issues if i.severity == Severity.INFO),
        )


@dataclass(frozen=True, slots=True)
class Report:
    """Assembled audit report matching ``report.schema.json``."""

    repository: str
    timestamp: str
    statistics: Statistics
    scores: Scores
    counts: IssueCounts = field(default_factory=IssueCounts)
    issues: tuple[Issue, ...] = ()
    files: tuple[FileRecord, ...] = ()
    summary: str = ""

    @property
    def has_critical(self) -> bool:
        return any(i.severity == Severity.CRITICAL for i in self.issues)

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        stats = self.statistics.to_dict()
        stats.update(
            {
                "totalIssues": self.counts.total,
                "criticalIssues": self.counts.critical,
                "warnings": self.counts.warnings,
                "suggestions": self.counts.suggestions,
            }
        )
        return {
            "repository": self.repository,
            "timestamp": self.timestamp,
            "statistics": stats,
            "scores": self.scores.to_dict(),
            "issues": [i.to_dict() for i in self.issues],
            "files": [f.to_dict() for f in self.files],
            "summary": self.summary,
        }
