"""Scorer: category penalties, ceilings and the weighted overall score.

Policy:
  - penalty per issue: critical 15, warning 5, info 1
  - a category loses at most its ceiling: security 60, performance 40,
    quality 40, cleanliness (dead code) 30
  - overall = weighted sum, rounded half up

Pure function of the issue multiset: same issues, same scores.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from gitaudit.model import Category, Severity
from gitaudit.model.issue import Issue
from gitaudit.model.report import Scores

SEVERITY_PENALTY: dict[Severity, int] = {
    Severity.CRITICAL: 15,
    Severity.WARNING: 5,
    Severity.INFO: 1,
}

PENALTY_CEILING: dict[Category, int] = {
    Category.SECURITY: 60,
    Category.PERFORMANCE: 40,
    Category.QUALITY: 40,
    Category.DEAD_CODE: 30,
}


@dataclass(frozen=True, slots=True)
class ScoreWeights:
    """Weights of the category scores in the overall score (sum to 1)."""

    security: float = 0.35
    performance: float = 0.25
    quality: float = 0.25
    cleanliness: float = 0.15


DEFAULT_WEIGHTS = ScoreWeights()


def _round_half_up(value: float) -> int:
    # weights are decimal fractions; drop binary noise before rounding
    return int(math.floor(round(value, 6) + 0.5))


def category_penalties(issues: Iterable[Issue]) -> dict[Category, int]:
    """Raw (uncapped) penalty per category."""
    penalties = {category: 0 for category in PENALTY_CEILING}
    for issue in issues:
        penalties[issue.category] += SEVERITY_PENALTY[issue.severity]
    return penalties


def category_score(penalty: int, category: Category) -> int:
    return max(0, 100 - min(penalty, PENALTY_CEILING[category]))


def compute_scores(
    issues: Iterable[Issue],
    *,
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> Scores:
    """Compute category and overall scores for *issues*."""
    penalties = category_penalties(issues)
    security = category_score(penalties[Category.SECURITY], Category.SECURITY)
    performance = category_score(penalties[Category.PERFORMANCE], Category.PERFORMANCE)
    quality = category_score(penalties[Category.QUALITY], Category.QUALITY)
    cleanliness = category_score(penalties[Category.DEAD_CODE], Category.DEAD_CODE)
    overall = _round_half_up(
        security * weights.security
        + performance * weights.performance
        + quality * weights.quality
        + cleanliness * weights.cleanliness
    )
    return Scores(
        security=security,
        performance=performance,
        quality=quality,
        cleanliness=cleanliness,
        overall=max(0, min(100, overall)),
    )
