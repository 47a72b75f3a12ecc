from __future__ import annotations

import math
from typing import Literal

from data_designer_ai_likelihood.hyperparameters import NormalizationDomain, ThresholdBand

NEUTRAL_SCORE = 50.0

Category = Literal["low", "medium", "high"]
Interpretation = Literal["human", "ai", "neutral"]


def _is_finite_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def clamp_score(score: float) -> float:
    return max(0.0, min(100.0, score))


def normalize_score(value: float, min_expected: float, max_expected: float, invert: bool = False) -> float:
    """Rescale ``value`` clamped to [min, max] onto 0-100.

    Returns the neutral 50 for a degenerate range or a non-finite value.
    """
    if not _is_finite_number(value) or min_expected == max_expected:
        return NEUTRAL_SCORE
    lo, hi = min(min_expected, max_expected), max(min_expected, max_expected)
    clamped = max(lo, min(hi, value))
    normalized = (clamped - min_expected) / (max_expected - min_expected) * 100
    if invert:
        normalized = 100 - normalized
    return clamp_score(normalized)


def normalize_in(value: float, domain: NormalizationDomain) -> float:
    return normalize_score(value, domain.min, domain.max, domain.invert)


def categorize(value: float, band: ThresholdBand | None) -> Category:
    if band is None or not _is_finite_number(value):
        return "medium"
    if value < band.low:
        return "low"
    if value > band.high:
        return "high"
    return "medium"


def interpret(value: float, band: ThresholdBand | None, invert: bool = False) -> Interpretation:
    """Map a band category onto a lean.

    For direct heuristics a high value leans AI; for inverted ones a low value does.
    """
    if band is None:
        return "neutral"
    category = categorize(value, band)
    if category == "medium":
        return "neutral"
    ai_side = "low" if invert else "high"
    return "ai" if category == ai_side else "human"
