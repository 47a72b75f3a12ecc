import pytest

from data_designer_ai_likelihood.confidence import estimate_confidence
from data_designer_ai_likelihood.hyperparameters import Hyperparameters

HP = Hyperparameters()


class TestEstimateConfidence:
    @pytest.mark.parametrize(
        "score, words, expected_score, expected_level",
        [
            (80, 100, 20, "Very Low"),
            (80, 300, 40, "Low"),
            (80, 600, 60, "Medium"),
            (52, 100, 0, "Very Low"),
        ],
    )
    def test_length_tiers(self, score, words, expected_score, expected_level):
        confidence = estimate_confidence(score, words, False, HP)
        assert confidence.score == pytest.approx(expected_score)
        assert confidence.level == expected_level
        assert confidence.note == ""

    def test_extreme_score_upgrades_one_tier(self):
        long_text = estimate_confidence(95, 600, False, HP)
        assert long_text.score == pytest.approx(100)
        assert long_text.level == "High"

        short_text = estimate_confidence(95, 100, False, HP)
        assert short_text.score == pytest.approx(45)
        assert short_text.level == "Low"

    def test_symmetric_around_neutral(self):
        assert estimate_confidence(10, 600, False, HP) == estimate_confidence(90, 600, False, HP)

    def test_clamped_to_100(self):
        confidence = estimate_confidence(100, 600, False, HP)
        assert confidence.score == 100
        assert confidence.level == "High"

    def test_skipped_paragraphs_cap_confidence(self):
        confidence = estimate_confidence(100, 5000, True, HP)
        assert confidence.score == pytest.approx(10)
        assert confidence.level == "Very Low"
        assert "Paragraph analysis skipped" in confidence.note

    def test_neutral_score_has_no_confidence(self):
        assert estimate_confidence(50, 5000, False, HP).score == 0

    def test_payload(self):
        payload = estimate_confidence(80, 300, False, HP).to_payload()
        assert payload == {"score": pytest.approx(40), "level": "Low", "note": ""}
