from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Mapping

from data_designer_ai_likelihood.features import HEURISTICS, Heuristic, HeuristicFailure, HeuristicResult
from data_designer_ai_likelihood.hyperparameters import PARAGRAPH_KEYS, HeuristicKey, Hyperparameters
from data_designer_ai_likelihood.normalize import NEUTRAL_SCORE, clamp_score
from data_designer_ai_likelihood.segmenter import SegmentedText

logger = logging.getLogger(__name__)

_SKIPPED_DESCRIPTION = "Skipped due to suspected paragraph splitting failure."

_SKIPPED_NAMES = {
    HeuristicKey.PARAGRAPH_LENGTH_VARIANCE: "Paragraph Length Variance",
    HeuristicKey.AVG_PARAGRAPH_LENGTH: "Average Paragraph Length",
}


@dataclass(frozen=True)
class AggregateResult:
    score: float
    results: tuple[HeuristicResult, ...]
    failures: tuple[HeuristicFailure, ...]
    paragraph_analysis_skipped: bool
    weighted_sum: float
    total_weight: float


def paragraph_analysis_skipped(doc: SegmentedText, hp: Hyperparameters) -> bool:
    """Detect input where blank-line paragraph splitting most likely failed."""
    paragraphs = doc.paragraph_count
    if paragraphs == 0:
        return False
    avg_length = doc.word_count / paragraphs
    if avg_length > hp.paragraph_length_sanity_check and paragraphs <= hp.paragraph_sanity_max_paragraphs:
        logger.warning(
            f"Average paragraph length ({avg_length:.0f}) exceeds {hp.paragraph_length_sanity_check:g} "
            f"with only {paragraphs} paragraphs; skipping paragraph heuristics"
        )
        return True
    if paragraphs == 1 and doc.sentence_count >= hp.single_paragraph_sentence_limit:
        logger.warning(
            f"Single paragraph holds {doc.sentence_count} sentences; skipping paragraph heuristics"
        )
        return True
    return False


def skipped_placeholder(key: HeuristicKey) -> HeuristicResult:
    return HeuristicResult(
        key=key,
        name=_SKIPPED_NAMES.get(key, key.value),
        value=math.nan,
        description=_SKIPPED_DESCRIPTION,
        score=NEUTRAL_SCORE,
        interpretation="neutral",
        skipped=True,
    )


def invoke(key: HeuristicKey, heuristic: Heuristic, doc: SegmentedText, hp: Hyperparameters) -> HeuristicResult | HeuristicFailure:
    """Run one heuristic, converting any exception or invalid score into a failure record."""
    try:
        result = heuristic(doc, hp)
    except Exception as exc:
        logger.exception(f"Heuristic {key.value!r} raised; excluding it from the score")
        return HeuristicFailure(key, f"{type(exc).__name__}: {exc}")
    if not isinstance(result, HeuristicResult) or not result.is_valid:
        logger.warning(f"Heuristic {key.value!r} returned an invalid result; excluding it from the score")
        return HeuristicFailure(key, "invalid result")
    return result


def run_heuristics(
    doc: SegmentedText,
    hp: Hyperparameters,
    skip_paragraphs: bool,
    heuristics: Mapping[HeuristicKey, Heuristic] | None = None,
) -> tuple[list[HeuristicResult], list[HeuristicFailure]]:
    results: list[HeuristicResult] = []
    failures: list[HeuristicFailure] = []
    for key, heuristic in (heuristics if heuristics is not None else HEURISTICS).items():
        if skip_paragraphs and key in PARAGRAPH_KEYS:
            results.append(skipped_placeholder(key))
            continue
        outcome = invoke(key, heuristic, doc, hp)
        if isinstance(outcome, HeuristicFailure):
            failures.append(outcome)
        else:
            results.append(outcome)
    return results, failures


def combine_scores(results: list[HeuristicResult], hp: Hyperparameters) -> tuple[float, float, float]:
    """Weighted mean of centered scores, rescaled around the neutral midpoint.

    Returns ``(score, weighted_sum, total_weight)``. Falls back to the plain mean of
    all valid scores when no weight applies, and to 50 when there are none.
    The weighted score is not clamped; :func:`apply_jitter` brings it into range.
    """
    weighted_sum = 0.0
    total_weight = 0.0
    for result in results:
        if result.skipped or not result.is_valid:
            continue
        weight = hp.weights.get(result.key)
        if not weight:
            continue
        weighted_sum += (result.score - NEUTRAL_SCORE) * weight
        total_weight += abs(weight)

    if total_weight > 0:
        return NEUTRAL_SCORE + (weighted_sum / total_weight) * NEUTRAL_SCORE, weighted_sum, total_weight

    valid = [r.score for r in results if r.is_valid]
    if valid:
        logger.warning("No heuristic weight applied; falling back to the unweighted mean of scores")
        return sum(valid) / len(valid), weighted_sum, total_weight

    logger.warning("No valid heuristic results; defaulting to the neutral score")
    return NEUTRAL_SCORE, weighted_sum, total_weight


def apply_jitter(score: float, hp: Hyperparameters, rng: random.Random) -> float:
    noise = (rng.random() - 0.5) * 2 * hp.randomness_factor * 100
    return clamp_score(score + noise)


def aggregate(
    doc: SegmentedText,
    hp: Hyperparameters,
    rng: random.Random,
    heuristics: Mapping[HeuristicKey, Heuristic] | None = None,
) -> AggregateResult:
    skipped = paragraph_analysis_skipped(doc, hp)
    results, failures = run_heuristics(doc, hp, skipped, heuristics)
    score, weighted_sum, total_weight = combine_scores(results, hp)
    logger.debug(f"Weighted sum {weighted_sum:.3f}, total weight {total_weight:.1f}, pre-jitter score {score:.1f}")
    return AggregateResult(
        score=apply_jitter(score, hp, rng),
        results=tuple(results),
        failures=tuple(failures),
        paragraph_analysis_skipped=skipped,
        weighted_sum=round(weighted_sum, 4),
        total_weight=total_weight,
    )
