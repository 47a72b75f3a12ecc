# Heuristic AI-likelihood scorer.
#
# Runs ~27 independent linguistic measurements over text, normalizes each to a
# 0-100 lean score, and combines them into one weighted score (0 = human-leaning,
# 100 = AI-leaning) plus a confidence estimate. Rule based and uncalibrated: the
# output is a heuristic signal, not a classification.

from __future__ import annotations

import logging
import random

from data_designer_ai_likelihood.aggregator import aggregate
from data_designer_ai_likelihood.confidence import estimate_confidence
from data_designer_ai_likelihood.hyperparameters import DEFAULT_HYPERPARAMETERS, Hyperparameters
from data_designer_ai_likelihood.normalize import NEUTRAL_SCORE
from data_designer_ai_likelihood.segmenter import SegmentedText, words

logger = logging.getLogger(__name__)

_VERDICT_LABELS = {
    "ai-leaning": "Likely AI-Generated (Based on Heuristics)",
    "human-leaning": "Likely Human-Written (Based on Heuristics)",
    "inconclusive": "Mixed Signals / Inconclusive",
}

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def verdict_for_score(score: float, hp: Hyperparameters | None = None) -> str:
    hp = hp or DEFAULT_HYPERPARAMETERS
    if score > hp.ai_leaning_min:
        return "ai-leaning"
    if score < hp.human_leaning_max:
        return "human-leaning"
    return "inconclusive"


def verdict_label(verdict: str) -> str:
    return _VERDICT_LABELS[verdict]


def check_input_size(text: str, hp: Hyperparameters | None = None) -> str | None:
    """Caller-side guard against oversized input. Returns a message, or None when the text fits."""
    hp = hp or DEFAULT_HYPERPARAMETERS
    if len(text) > hp.max_chars_approx:
        return f"Text exceeds the approximate maximum length of {hp.max_chars_approx} characters."
    if len(words(text)) > hp.max_words_approx:
        return f"Text exceeds the approximate maximum word count of {hp.max_words_approx}."
    return None


def _short_text_result(doc: SegmentedText, hp: Hyperparameters) -> dict:
    return {
        "error": True,
        "message": (
            f"Text is too short (minimum {hp.min_words_for_meaningful_analysis} words required). "
            f"Analysis may be unreliable."
        ),
        "results": [],
        "overall_score": NEUTRAL_SCORE,
        "word_count": doc.word_count,
        "sentence_count": doc.sentence_count,
        "paragraph_count": doc.paragraph_count,
    }


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def analyze_text(
    text: str,
    hyperparameters: Hyperparameters | None = None,
    rng: random.Random | None = None,
) -> dict:
    """Score text for AI-likelihood with linguistic heuristics.

    Args:
        text: The prose to analyze.
        hyperparameters: Optional tuning overrides. Uses the default weights and bands if omitted.
        rng: Source of the small score jitter. Pass a seeded ``random.Random`` (or set
            ``randomness_factor=0``) for reproducible output.

    Returns:
        Dict with ``error=True`` and a ``message`` when the text is below the minimum word
        count. Otherwise ``error=False`` with keys: results, overall_score, verdict,
        verdict_label, confidence, word_count, sentence_count, paragraph_count,
        paragraph_analysis_skipped, failures, weighted_sum, total_weight.
    """
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS
    doc = SegmentedText.from_text(text, hp)
    logger.info(
        f"Segmented text: {doc.word_count} words, {doc.sentence_count} sentences, "
        f"{doc.paragraph_count} paragraphs"
    )

    if doc.word_count < hp.min_words_for_meaningful_analysis:
        logger.warning(f"Text too short for meaningful analysis ({doc.word_count} words)")
        return _short_text_result(doc, hp)

    outcome = aggregate(doc, hp, rng or random.Random())
    confidence = estimate_confidence(outcome.score, doc.word_count, outcome.paragraph_analysis_skipped, hp)
    verdict = verdict_for_score(outcome.score, hp)
    logger.info(f"Overall score {outcome.score:.1f} ({verdict}), confidence {confidence.level}")

    return {
        "error": False,
        "results": [r.to_payload() for r in outcome.results],
        "overall_score": outcome.score,
        "verdict": verdict,
        "verdict_label": verdict_label(verdict),
        "confidence": confidence.to_payload(),
        "word_count": doc.word_count,
        "sentence_count": doc.sentence_count,
        "paragraph_count": doc.paragraph_count,
        "paragraph_analysis_skipped": outcome.paragraph_analysis_skipped,
        "failures": [f.to_payload() for f in outcome.failures],
        "weighted_sum": outcome.weighted_sum,
        "total_weight": outcome.total_weight,
    }
