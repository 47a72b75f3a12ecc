from __future__ import annotations

from dataclasses import dataclass

from data_designer_ai_likelihood.hyperparameters import Hyperparameters
from data_designer_ai_likelihood.normalize import NEUTRAL_SCORE, clamp_score

LEVELS = ("Very Low", "Low", "Medium", "High")

_SKIPPED_NOTE = "Paragraph analysis skipped due to formatting issues"


@dataclass(frozen=True)
class Confidence:
    score: float
    level: str
    note: str = ""

    def to_payload(self) -> dict[str, object]:
        return {"score": self.score, "level": self.level, "note": self.note}


def _upgrade(level: str) -> str:
    return LEVELS[min(LEVELS.index(level) + 1, len(LEVELS) - 1)]


def estimate_confidence(score: float, word_count: int, skipped: bool, hp: Hyperparameters) -> Confidence:
    """Confidence grows with distance from 50 and with input length.

    A skipped paragraph analysis caps the level at "Very Low" regardless of length.
    """
    distance = abs(score - NEUTRAL_SCORE)
    note = ""
    if skipped:
        base = distance * hp.confidence_skipped_multiplier + hp.confidence_skipped_offset
        level = "Very Low"
        note = _SKIPPED_NOTE
    elif word_count < hp.confidence_short_text_words:
        base = distance * hp.confidence_short_multiplier + hp.confidence_short_offset
        level = "Very Low"
    elif word_count < hp.confidence_medium_text_words:
        base = distance * hp.confidence_medium_multiplier + hp.confidence_medium_offset
        level = "Low"
    else:
        base = distance * hp.confidence_long_multiplier + hp.confidence_long_offset
        level = "Medium"
    value = max(0.0, base)

    if distance > hp.confidence_extreme_distance and not skipped:
        value += hp.confidence_extreme_bonus
        level = _upgrade(level)

    return Confidence(score=clamp_score(value), level=level, note=note)
