from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field

from data_designer.config.column_configs import SingleColumnConfig

from data_designer_ai_likelihood.hyperparameters import Hyperparameters


class AILikelihoodColumnConfig(SingleColumnConfig):
    """Score text columns for AI-likelihood using linguistic heuristics.

    Runs ~27 measurements (lexical diversity, readability, repetition, word-category
    ratios, a bigram predictability proxy) against each row's text and produces a
    0-100 AI-lean score, a verdict, and a confidence estimate.

    Attributes:
        target_columns: Columns whose text content will be concatenated and scored.
        max_score: Maximum AI-likelihood score (0-100) for ``is_valid=True``. Defaults to 65
            (the boundary above which text reads as AI-leaning).
        min_words: Rows with fewer words are reported as too short and marked invalid.
        randomness_factor: Score jitter as a fraction of the 0-100 range. 0 disables it.
        seed: Seed for the jitter. ``None`` draws fresh noise on every run.
        include_results: Include the per-heuristic breakdown in output.
        include_failures: Include heuristics that failed and were excluded from the score.
    """

    target_columns: list[str]
    max_score: float = Field(default=65.0, ge=0, le=100, description="Maximum AI-likelihood score for is_valid=True")
    min_words: int = Field(default=50, ge=1, description="Minimum word count for a meaningful analysis")
    randomness_factor: float = Field(default=0.05, ge=0, le=1, description="Score jitter as a fraction of the 0-100 range")
    seed: Optional[int] = Field(default=None, description="Seed for the score jitter")
    include_results: bool = Field(default=False, description="Include per-heuristic results in output")
    include_failures: bool = Field(default=False, description="Include failed heuristics in output")
    column_type: Literal["ai-likelihood"] = "ai-likelihood"

    @staticmethod
    def get_column_emoji() -> str:
        return "\U0001f50e"

    @property
    def required_columns(self) -> list[str]:
        return self.target_columns

    @property
    def side_effect_columns(self) -> list[str]:
        return []

    def hyperparameters(self) -> Hyperparameters:
        return Hyperparameters(
            min_words_for_meaningful_analysis=self.min_words,
            randomness_factor=self.randomness_factor,
        )
