# SPDX-License-Identifier: Apache-2.0
"""AI-likelihood plugin for NeMo Data Designer.

Adds an ``ai-likelihood`` column type that scores text on a 0-100 AI-lean scale by
combining ~27 linguistic heuristics (lexical diversity, readability, repetition,
word-category ratios, a crude predictability proxy) into one weighted score with a
confidence estimate. No model or API calls.

Usage::

    from data_designer_ai_likelihood import AILikelihoodColumnConfig

    builder.add_column(AILikelihoodColumnConfig(
        name="ai_check",
        target_columns=["article"],
        max_score=65,
    ))
"""

from data_designer_ai_likelihood.config import AILikelihoodColumnConfig
from data_designer_ai_likelihood.core import analyze_text, check_input_size, verdict_for_score
from data_designer_ai_likelihood.hyperparameters import HeuristicKey, Hyperparameters

__all__ = [
    "AILikelihoodColumnConfig",
    "analyze_text",
    "check_input_size",
    "verdict_for_score",
    "HeuristicKey",
    "Hyperparameters",
]
