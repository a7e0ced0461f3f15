"""Presentation filters: narrow a report's issue list without touching it.

Statistics, scores and severity counts always describe the full run.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Union

from gitaudit.model import Category, Severity
from gitaudit.model.report import Report

_logger = logging.getLogger(__name__)

CATEGORY_ALIASES: dict[str, Category] = {
    "unused": Category.DEAD_CODE,
    "dead-code": Category.DEAD_CODE,
}


def parse_severity(value: Union[str, Severity, None]) -> Optional[Severity]:
    """Resolve a minimum severity; unknown values mean no filter."""
    if value is None or isinstance(value, Severity):
        return value
    try:
        return Severity(value.strip().lower())
    except ValueError:
        _logger.warning("Unknown severity %r; showing all severities", value)
        return None


def parse_category(value: Union[str, Category, None]) -> Optional[Category]:
    """Resolve a category (``unused`` is accepted for dead code)."""
    if value is None or isinstance(value, Category):
        return value
    key = value.strip().lower()
    if key in CATEGORY_ALIASES:
        return CATEGORY_ALIASES[key]
    try:
        return Category(key)
    except ValueError:
        _logger.warning("Unknown issue type %r; showing all categories", value)
        return None


def filter_report(
    report: Report,
    *,
    min_severity: Union[str, Severity, None] = None,
    category: Union[str, Category, None] = None,
) -> Report:
    """Return a copy of *report* keeping issues at or above *min_severity*
    and, when given, of *category* only."""
    floor = parse_severity(min_severity)
    only = parse_category(category)
    if floor is None and only is None:
        return report
    kept = tuple(
        issue
        for issue in report.issues
        if (floor is None or issue.severity.rank >= floor.rank)
        and (only is None or issue.category == only)
    )
    return replace(report, issues=kept)
