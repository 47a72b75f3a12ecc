import pytest

from data_designer_ai_likelihood.hyperparameters import (
    DEFAULT_HYPERPARAMETERS,
    HeuristicKey,
    Hyperparameters,
    NormalizationDomain,
    ThresholdBand,
)


class TestHyperparameters:
    def test_defaults_cover_every_heuristic(self):
        assert set(DEFAULT_HYPERPARAMETERS.weights) == set(HeuristicKey)
        assert set(DEFAULT_HYPERPARAMETERS.domains) == set(HeuristicKey)

    def test_string_keys_are_coerced(self):
        hp = Hyperparameters(weights={"ttr": 3.0}, thresholds={"ttr": ThresholdBand(0.1, 0.2)})
        assert hp.weights == {HeuristicKey.TTR: 3.0}
        assert hp.thresholds[HeuristicKey.TTR] == ThresholdBand(0.1, 0.2)

    def test_unknown_key_rejected(self):
        with pytest.raises(ValueError, match="Unknown heuristic key"):
            Hyperparameters(weights={"burstiness": 1.0})

    def test_inverted_band_rejected(self):
        with pytest.raises(ValueError, match="low > high"):
            Hyperparameters(thresholds={"ttr": ThresholdBand(0.6, 0.4)})

    def test_non_finite_weight_rejected(self):
        with pytest.raises(ValueError, match="finite"):
            Hyperparameters(weights={"ttr": float("nan")})

    def test_non_finite_domain_rejected(self):
        with pytest.raises(ValueError, match="finite"):
            Hyperparameters(domains={"ttr": NormalizationDomain(0, float("inf"))})

    def test_randomness_factor_range(self):
        with pytest.raises(ValueError, match="randomness_factor"):
            Hyperparameters(randomness_factor=2)
        assert Hyperparameters(randomness_factor=0).randomness_factor == 0

    def test_min_words_positive(self):
        with pytest.raises(ValueError, match="min_words_for_meaningful_analysis"):
            Hyperparameters(min_words_for_meaningful_analysis=0)

    def test_verdict_cut_points_ordered(self):
        with pytest.raises(ValueError):
            Hyperparameters(human_leaning_max=70, ai_leaning_min=60)

    def test_partial_domains_fall_back_to_defaults(self):
        hp = Hyperparameters(domains={"ttr": NormalizationDomain(0, 1)})
        assert hp.domain_for(HeuristicKey.TTR) == NormalizationDomain(0, 1)
        assert hp.domain_for(HeuristicKey.GUNNING_FOG) == DEFAULT_HYPERPARAMETERS.domain_for(HeuristicKey.GUNNING_FOG)

    def test_mappings_are_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_HYPERPARAMETERS.weights[HeuristicKey.TTR] = 999.0
        with pytest.raises(TypeError):
            DEFAULT_HYPERPARAMETERS.thresholds[HeuristicKey.TTR] = ThresholdBand(0, 1)
        with pytest.raises(TypeError):
            DEFAULT_HYPERPARAMETERS.domains[HeuristicKey.TTR] = NormalizationDomain(0, 1)
        assert DEFAULT_HYPERPARAMETERS.weights[HeuristicKey.TTR] == 15.0

    def test_caller_dict_changes_do_not_leak(self):
        weights = {"ttr": 1.0}
        hp = Hyperparameters(weights=weights)
        weights["ttr"] = 50.0
        assert hp.weights[HeuristicKey.TTR] == 1.0

    def test_non_numeric_weight_rejected(self):
        with pytest.raises(ValueError, match="must be a number"):
            Hyperparameters(weights={"ttr": "heavy"})
        with pytest.raises(ValueError, match="must be a number"):
            Hyperparameters(weights={"ttr": None})

    def test_band_mapping_is_coerced(self):
        hp = Hyperparameters(thresholds={"ttr": {"low": 0.2, "high": 0.3}})
        assert hp.thresholds[HeuristicKey.TTR] == ThresholdBand(0.2, 0.3)

    def test_malformed_band_rejected(self):
        with pytest.raises(ValueError):
            Hyperparameters(thresholds={"ttr": {"lo": 0.2}})
        with pytest.raises(ValueError):
            Hyperparameters(thresholds={"ttr": (0.2, 0.3)})
        with pytest.raises(ValueError, match="numeric bounds"):
            Hyperparameters(thresholds={"ttr": ThresholdBand("a", "b")})

    def test_malformed_domain_rejected(self):
        with pytest.raises(ValueError):
            Hyperparameters(domains={"ttr": 0.5})
        with pytest.raises(ValueError, match="numeric bounds"):
            Hyperparameters(domains={"ttr": NormalizationDomain(None, 1)})

    def test_non_mapping_weights_rejected(self):
        with pytest.raises(ValueError, match="mapping"):
            Hyperparameters(weights=[("ttr", 1.0)])
