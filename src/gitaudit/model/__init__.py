"""Enums shared across the engine, scoring and presentation layers."""

from __future__ import annotations

from enum import Enum


class Severity(str, Enum):
    """Issue severity: three tiers, ordered by ``rank``."""

    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK: dict[Severity, int] = {
    Severity.INFO: 0,
    Severity.WARNING: 1,
    Severity.CRITICAL: 2,
}


class Category(str, Enum):
    """Canonical rule categories.  Each one feeds exactly one score."""

    SECURITY = "security"
    PERFORMANCE = "performance"
    QUALITY = "quality"
    DEAD_CODE = "dead_code"
