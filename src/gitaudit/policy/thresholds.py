"""Score → band policy — single source of truth for summary wording.

Every presentation layer (summary sentence, terminal renderer, HTTP API)
derives the band from this module instead of hard-coding thresholds.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ScoreBand(str, Enum):
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


BAND_PHRASES: dict[ScoreBand, str] = {
    ScoreBand.GOOD: "Overall the codebase is in good shape.",
    ScoreBand.FAIR: "Room for improvement.",
    ScoreBand.POOR: "Significant attention needed.",
}


@dataclass(frozen=True, slots=True)
class ScoreBands:
    """Tunable thresholds for score → band mapping."""

    good_min: int = 80
    fair_min: int = 60


DEFAULT_BANDS = ScoreBands()


def band_from_score(score: int, *, bands: ScoreBands = DEFAULT_BANDS) -> ScoreBand:
    """Map an overall score to its band.

    Policy: ≥80 good, 60-79 fair, <60 poor.
    """
    if score >= bands.good_min:
        return ScoreBand.GOOD
    if score >= bands.fair_min:
        return ScoreBand.FAIR
    return ScoreBand.POOR
