from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from data_designer.engine.column_generators.generators.base import ColumnGeneratorFullColumn

from data_designer_ai_likelihood.config import AILikelihoodColumnConfig
from data_designer_ai_likelihood.core import analyze_text

if TYPE_CHECKING:
    import pandas as pd

logger = logging.getLogger(__name__)


def score_row(text: str, config: AILikelihoodColumnConfig, rng: random.Random) -> dict:
    analysis = analyze_text(text, hyperparameters=config.hyperparameters(), rng=rng)
    if analysis["error"]:
        return {
            "is_valid": False,
            "ai_score": analysis["overall_score"],
            "verdict": None,
            "word_count": analysis["word_count"],
            "error": analysis["message"],
        }
    output: dict = {
        "is_valid": analysis["overall_score"] <= config.max_score,
        "ai_score": round(analysis["overall_score"], 1),
        "verdict": analysis["verdict"],
        "confidence": round(analysis["confidence"]["score"], 1),
        "confidence_level": analysis["confidence"]["level"],
        "word_count": analysis["word_count"],
        "paragraph_analysis_skipped": analysis["paragraph_analysis_skipped"],
    }
    if config.include_results:
        output["heuristics"] = analysis["results"]
    if config.include_failures:
        output["failures"] = analysis["failures"]
    return output


class AILikelihoodColumnGenerator(ColumnGeneratorFullColumn[AILikelihoodColumnConfig]):
    """Column generator that scores text for AI-likelihood via linguistic heuristics."""

    def generate(self, data: pd.DataFrame) -> pd.DataFrame:
        logger.info(f"\U0001f50e Scoring column {self.config.name!r} for AI-likelihood")
        logger.info(f"   target columns: {self.config.target_columns}")
        logger.info(f"   max_score: {self.config.max_score}")

        rng = random.Random(self.config.seed)
        results = []
        for _, row in data[self.config.target_columns].iterrows():
            text = " ".join(str(v) for v in row.values if v is not None)
            results.append(score_row(text, self.config, rng))

        data = data.copy()
        data[self.config.name] = results
        return data
