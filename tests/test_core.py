import math
import random

from data_designer_ai_likelihood.core import analyze_text, check_input_size, verdict_for_score
from data_designer_ai_likelihood.hyperparameters import Hyperparameters

DETERMINISTIC = Hyperparameters(randomness_factor=0)

# 60 distinct words, 6 sentences (one question), 3 paragraphs, 2 contractions.
HUMAN_TEXT = (
    "Maria opened her bakery before sunrise every Tuesday. "
    "I can't remember ever seeing bread sell out so fast.\n\n"
    "Neighbors lined up along the cobbled street with baskets. "
    "Why do warm cinnamon rolls draw such devoted crowds?\n\n"
    "My uncle swore it's simply because flour tastes better here. "
    "Honestly, nobody argued, and we kept eating quietly until noon, grateful for crusty loaves."
)

# The same 8-word sentence 40 times, no paragraph breaks.
REPETITIVE_TEXT = " ".join(["The quick fox jumps over the lazy dog."] * 40)


def _tokens(n: int) -> str:
    return " ".join(f"token{i}" for i in range(n))


def _by_key(result: dict) -> dict[str, dict]:
    return {r["key"]: r for r in result["results"]}


class TestAnalyzeText:
    def test_human_text_leans_human(self):
        result = analyze_text(HUMAN_TEXT, hyperparameters=DETERMINISTIC)
        assert result["error"] is False
        assert result["word_count"] == 60
        assert result["sentence_count"] == 6
        assert result["paragraph_count"] == 3
        assert result["paragraph_analysis_skipped"] is False
        assert result["overall_score"] < 50
        assert result["verdict"] == "human-leaning"

    def test_repetitive_text(self):
        result = analyze_text(REPETITIVE_TEXT, hyperparameters=DETERMINISTIC)
        by_key = _by_key(result)
        assert result["error"] is False
        assert result["paragraph_analysis_skipped"] is True
        assert by_key["word_repetition"]["score"] > 70
        assert by_key["bigram_repetition"]["score"] > 70
        assert by_key["trigram_repetition"]["score"] > 70
        assert result["confidence"]["level"] == "Very Low"

    def test_short_input_boundary(self):
        short = analyze_text(_tokens(49))
        assert short["error"] is True
        assert short["results"] == []
        assert short["overall_score"] == 50
        assert "50 words" in short["message"]

        enough = analyze_text(_tokens(50))
        assert enough["error"] is False

    def test_empty_text_is_too_short(self):
        result = analyze_text("")
        assert result["error"] is True
        assert result["word_count"] == 0

    def test_paragraph_skip_on_huge_blocks(self):
        block = " ".join(["The river runs past old stone mills today."] * 625)
        text = block + "\n\n" + block
        result = analyze_text(text, hyperparameters=DETERMINISTIC)
        assert result["word_count"] == 10000
        assert result["paragraph_analysis_skipped"] is True
        variance = _by_key(result)["paragraph_length_variance"]
        assert variance["score"] == 50
        assert variance["skipped"] is True
        assert math.isnan(variance["value"])

    def test_fallback_to_unweighted_mean(self):
        hp = Hyperparameters(weights={}, randomness_factor=0)
        result = analyze_text(HUMAN_TEXT, hyperparameters=hp)
        scores = [r["score"] for r in result["results"]]
        assert result["total_weight"] == 0
        assert math.isclose(result["overall_score"], sum(scores) / len(scores))

    def test_score_stays_clamped_with_full_jitter(self):
        hp = Hyperparameters(randomness_factor=1.0)
        for seed in range(20):
            result = analyze_text(REPETITIVE_TEXT, hyperparameters=hp, rng=random.Random(seed))
            assert 0 <= result["overall_score"] <= 100

    def test_seeded_rng_is_reproducible(self):
        first = analyze_text(HUMAN_TEXT, rng=random.Random(7))
        second = analyze_text(HUMAN_TEXT, rng=random.Random(7))
        assert first["overall_score"] == second["overall_score"]

    def test_jitter_stays_within_configured_band(self):
        baseline = analyze_text(HUMAN_TEXT, hyperparameters=DETERMINISTIC)["overall_score"]
        for seed in range(10):
            jittered = analyze_text(HUMAN_TEXT, rng=random.Random(seed))["overall_score"]
            assert abs(jittered - baseline) <= 5.0 + 1e-9

    def test_result_shape(self):
        result = analyze_text(HUMAN_TEXT, hyperparameters=DETERMINISTIC)
        expected_keys = {
            "error", "results", "overall_score", "verdict", "verdict_label", "confidence",
            "word_count", "sentence_count", "paragraph_count", "paragraph_analysis_skipped",
            "failures", "weighted_sum", "total_weight",
        }
        assert expected_keys == set(result.keys())
        assert set(result["confidence"].keys()) == {"score", "level", "note"}
        assert result["failures"] == []

    def test_result_structure(self):
        result = analyze_text(HUMAN_TEXT, hyperparameters=DETERMINISTIC)
        assert len(result["results"]) == 27
        for r in result["results"]:
            assert r["type"] == "HeuristicResult"
            assert {"key", "name", "value", "description", "score", "interpretation"} <= set(r)
            assert 0 <= r["score"] <= 100
            assert r["interpretation"] in ("human", "ai", "neutral")

    def test_custom_weights_shift_score(self):
        ai_only = Hyperparameters(weights={"bigram_repetition": 1.0}, randomness_factor=0)
        result = analyze_text(REPETITIVE_TEXT, hyperparameters=ai_only)
        assert result["weighted_sum"] == 50
        assert result["overall_score"] == 100
        assert result["verdict"] == "ai-leaning"


class TestVerdict:
    def test_cut_points(self):
        assert verdict_for_score(65.1) == "ai-leaning"
        assert verdict_for_score(65) == "inconclusive"
        assert verdict_for_score(50) == "inconclusive"
        assert verdict_for_score(35) == "inconclusive"
        assert verdict_for_score(34.9) == "human-leaning"


class TestCheckInputSize:
    def test_within_limits(self):
        assert check_input_size(HUMAN_TEXT) is None

    def test_too_many_characters(self):
        assert "characters" in check_input_size("x" * 70001)

    def test_too_many_words(self):
        hp = Hyperparameters(max_words_approx=10)
        assert "word count" in check_input_size(_tokens(11), hp)

    def test_contractions_count_as_one_word(self):
        hp = Hyperparameters(max_words_approx=10)
        assert check_input_size(" ".join(["don't"] * 10), hp) is None
        assert check_input_size(" ".join(["don't"] * 11), hp) is not None
