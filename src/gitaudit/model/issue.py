"""Issue: the normalized engine output for a single detected problem."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from . import Category, Severity


@dataclass(frozen=True, slots=True)
class ContextLine:
    """One source line shown around an issue."""

    number: int
    text: str
    is_highlighted: bool = False

    def to_dict(self) -> dict:
        return {
            "number": self.number,
            "text": self.text,
            "isHighlighted": self.is_highlighted,
        }


@dataclass(frozen=True, slots=True)
class Candidate:
    """An issue as produced by the match engine, before it gets an id."""

    rule_id: str
    category: Category
    severity: Severity
    title: str
    description: str
    file: str
    line: int
    context_lines: tuple[ContextLine, ...] = ()
    remediation: Optional[str] = None

    @property
    def fingerprint(self) -> tuple[str, str, int]:
        """Deduplication key: at most one issue per (file, line, title)."""
        return (self.file, self.title, self.line)


@dataclass(frozen=True, slots=True)
class Issue:
    """Immutable, schema-aligned engine issue.

    Corresponds to ``issues[]`` in ``report.schema.json``.
    """

    id: int
    rule_id: str
    category: Category
    severity: Severity
    title: str
    description: str
    file: str
    line: int
    context_lines: tuple[ContextLine, ...] = ()
    remediation: Optional[str] = None

    @classmethod
    def from_candidate(cls, candidate: Candidate, issue_id: int) -> "Issue":
        return cls(
            id=issue_id,
            rule_id=candidate.rule_id,
            category=candidate.category,
            severity=candidate.severity,
            title=candidate.title,
            description=candidate.description,
            file=candidate.file,
            line=candidate.line,
            context_lines=candidate.context_lines,
            remediation=candidate.remediation,
        )

    @property
    def fingerprint(self) -> tuple[str, str, int]:
        return (self.file, self.title, self.line)

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict:
        d: dict = {
            "id": self.id,
            "ruleId": self.rule_id,
            "category": self.category.value,
            "severity": self.severity.value,
            "title": self.title,
            "description": self.description,
            "file": self.file,
            "line": self.line,
            "contextLines": [c.to_dict() for c in self.context_lines],
        }
        if self.remediation:
            d["remediation"] = self.remediation
        return d
