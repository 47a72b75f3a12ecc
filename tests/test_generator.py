import random

import pytest
from pydantic import ValidationError

from data_designer_ai_likelihood import generator
from data_designer_ai_likelihood.config import AILikelihoodColumnConfig
from data_designer_ai_likelihood.generator import score_row

TEXT = (
    "Maria opened her bakery before sunrise every Tuesday. "
    "I can't remember ever seeing bread sell out so fast.\n\n"
    "Neighbors lined up along the cobbled street with baskets. "
    "Why do warm cinnamon rolls draw such devoted crowds?\n\n"
    "My uncle swore it's simply because flour tastes better here. "
    "Honestly, nobody argued, and we kept eating quietly until noon, grateful for crusty loaves."
)


def _config(**overrides) -> AILikelihoodColumnConfig:
    return AILikelihoodColumnConfig(name="ai_check", target_columns=["article"], **overrides)


class TestConfig:
    def test_defaults(self):
        config = _config()
        assert config.column_type == "ai-likelihood"
        assert config.max_score == 65
        assert config.min_words == 50
        assert config.required_columns == ["article"]
        assert config.side_effect_columns == []

    def test_score_bounds_validated(self):
        with pytest.raises(ValidationError):
            _config(max_score=150)
        with pytest.raises(ValidationError):
            _config(randomness_factor=1.5)

    def test_hyperparameters_follow_config(self):
        hp = _config(min_words=5, randomness_factor=0).hyperparameters()
        assert hp.min_words_for_meaningful_analysis == 5
        assert hp.randomness_factor == 0


class TestScoreRow:
    def test_scored_row(self):
        row = score_row(TEXT, _config(randomness_factor=0), random.Random(0))
        assert row["is_valid"] is True
        assert row["verdict"] == "human-leaning"
        assert row["word_count"] == 60
        assert 0 <= row["ai_score"] <= 100
        assert row["confidence_level"] in ("Very Low", "Low", "Medium", "High")
        assert "heuristics" not in row

    def test_short_row_is_invalid(self):
        row = score_row("too short", _config(), random.Random(0))
        assert row["is_valid"] is False
        assert row["verdict"] is None
        assert "too short" in row["error"]

    def test_max_score_threshold(self, monkeypatch):
        report = {
            "error": False,
            "overall_score": 80.0,
            "verdict": "ai-leaning",
            "confidence": {"score": 40.0, "level": "Low", "note": ""},
            "word_count": 60,
            "paragraph_analysis_skipped": False,
            "results": [],
            "failures": [],
        }
        monkeypatch.setattr(generator, "analyze_text", lambda *args, **kwargs: report)
        assert score_row(TEXT, _config(max_score=65), random.Random(0))["is_valid"] is False
        assert score_row(TEXT, _config(max_score=80), random.Random(0))["is_valid"] is True

    def test_optional_details(self):
        row = score_row(TEXT, _config(include_results=True, include_failures=True), random.Random(0))
        assert len(row["heuristics"]) == 27
        assert row["failures"] == []


class TestPlugin:
    def test_plugin_points_at_package_classes(self):
        from data_designer_ai_likelihood.plugin import ai_likelihood_plugin

        assert ai_likelihood_plugin.config_qualified_name.endswith("AILikelihoodColumnConfig")
        assert ai_likelihood_plugin.impl_qualified_name.endswith("AILikelihoodColumnGenerator")
