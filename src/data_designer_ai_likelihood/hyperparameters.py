from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

# ---------------------------------------------------------------------------
# Heuristic identifiers
# ---------------------------------------------------------------------------


class HeuristicKey(str, Enum):
    TTR = "ttr"
    AVG_WORD_LENGTH = "avg_word_length"
    FLESCH_READING_EASE = "flesch_reading_ease"
    GUNNING_FOG = "gunning_fog"
    AVG_SENTENCE_LENGTH = "avg_sentence_length"
    SENTENCE_LENGTH_VARIANCE = "sentence_length_variance"
    PARAGRAPH_LENGTH_VARIANCE = "paragraph_length_variance"
    DECLARATIVE_SENTENCE_RATIO = "declarative_sentence_ratio"
    QUESTION_SENTENCE_RATIO = "question_sentence_ratio"
    EXCLAMATION_SENTENCE_RATIO = "exclamation_sentence_ratio"
    WORD_REPETITION = "word_repetition"
    BIGRAM_REPETITION = "bigram_repetition"
    TRIGRAM_REPETITION = "trigram_repetition"
    SENTENCE_START_DIVERSITY = "sentence_start_diversity"
    TRANSITION_WORD_RATIO = "transition_word_ratio"
    PASSIVE_VOICE_RATIO = "passive_voice_ratio"
    MODAL_VERB_RATIO = "modal_verb_ratio"
    PERSONAL_PRONOUN_RATIO = "personal_pronoun_ratio"
    CONTRACTION_RATIO = "contraction_ratio"
    HEDGE_WORD_RATIO = "hedge_word_ratio"
    BOOSTER_WORD_RATIO = "booster_word_ratio"
    NOMINALIZATION_RATIO = "nominalization_ratio"
    COMMON_WORD_RATIO = "common_word_ratio"
    PREDICTABILITY_PROXY = "predictability_proxy"
    AVG_PARAGRAPH_LENGTH = "avg_paragraph_length"
    LIST_USAGE = "list_usage"
    QUOTE_USAGE = "quote_usage"


# Heuristics that only make sense when blank-line paragraph splitting worked.
PARAGRAPH_KEYS = frozenset({HeuristicKey.PARAGRAPH_LENGTH_VARIANCE, HeuristicKey.AVG_PARAGRAPH_LENGTH})


@dataclass(frozen=True)
class ThresholdBand:
    """Interpretation band: below ``low`` is "low", above ``high`` is "high"."""

    low: float
    high: float


@dataclass(frozen=True)
class NormalizationDomain:
    """Expected raw-value range mapped onto 0-100; ``invert`` flips the direction."""

    min: float
    max: float
    invert: bool = False


_K = HeuristicKey

# Positive weights lean AI, negative weights lean human. Hand-tuned, not derived
# from any corpus.
_DEFAULT_WEIGHTS: dict[HeuristicKey, float] = {
    _K.TTR: 15.0,
    _K.AVG_WORD_LENGTH: -8.0,
    _K.FLESCH_READING_EASE: 10.0,
    _K.GUNNING_FOG: -12.0,
    _K.AVG_SENTENCE_LENGTH: 5.0,
    _K.SENTENCE_LENGTH_VARIANCE: -25.0,
    _K.PARAGRAPH_LENGTH_VARIANCE: -15.0,
    _K.DECLARATIVE_SENTENCE_RATIO: 3.0,
    _K.QUESTION_SENTENCE_RATIO: -5.0,
    _K.EXCLAMATION_SENTENCE_RATIO: -8.0,
    _K.WORD_REPETITION: 20.0,
    _K.BIGRAM_REPETITION: 25.0,
    _K.TRIGRAM_REPETITION: 25.0,
    _K.SENTENCE_START_DIVERSITY: -10.0,
    _K.TRANSITION_WORD_RATIO: 18.0,
    _K.PASSIVE_VOICE_RATIO: 15.0,
    _K.MODAL_VERB_RATIO: 5.0,
    _K.PERSONAL_PRONOUN_RATIO: -20.0,
    _K.CONTRACTION_RATIO: -12.0,
    _K.HEDGE_WORD_RATIO: 8.0,
    _K.BOOSTER_WORD_RATIO: 6.0,
    _K.NOMINALIZATION_RATIO: 7.0,
    _K.COMMON_WORD_RATIO: 5.0,
    _K.PREDICTABILITY_PROXY: 15.0,
    _K.AVG_PARAGRAPH_LENGTH: 2.0,
    _K.LIST_USAGE: -3.0,
    _K.QUOTE_USAGE: -4.0,
}

_DEFAULT_THRESHOLDS: dict[HeuristicKey, ThresholdBand] = {
    _K.TTR: ThresholdBand(0.4, 0.6),
    _K.AVG_WORD_LENGTH: ThresholdBand(4.0, 5.5),
    _K.FLESCH_READING_EASE: ThresholdBand(50, 70),
    _K.GUNNING_FOG: ThresholdBand(10, 15),
    _K.SENTENCE_LENGTH_VARIANCE: ThresholdBand(5, 15),
    _K.PARAGRAPH_LENGTH_VARIANCE: ThresholdBand(10, 100),
    _K.DECLARATIVE_SENTENCE_RATIO: ThresholdBand(0.0, 0.98),
    _K.QUESTION_SENTENCE_RATIO: ThresholdBand(0.0, 0.01),
    _K.EXCLAMATION_SENTENCE_RATIO: ThresholdBand(0.0, 0.01),
    _K.WORD_REPETITION: ThresholdBand(0.02, 0.05),
    _K.BIGRAM_REPETITION: ThresholdBand(0.01, 0.03),
    _K.TRIGRAM_REPETITION: ThresholdBand(0.01, 0.03),
    _K.SENTENCE_START_DIVERSITY: ThresholdBand(0.1, 0.8),
    _K.PASSIVE_VOICE_RATIO: ThresholdBand(0.05, 0.15),
    _K.PERSONAL_PRONOUN_RATIO: ThresholdBand(0.01, 0.04),
    _K.CONTRACTION_RATIO: ThresholdBand(0.005, 0.02),
    _K.NOMINALIZATION_RATIO: ThresholdBand(0.0, 0.1),
    _K.LIST_USAGE: ThresholdBand(0, 0),
    _K.QUOTE_USAGE: ThresholdBand(0, 1),
}

_DEFAULT_DOMAINS: dict[HeuristicKey, NormalizationDomain] = {
    _K.TTR: NormalizationDomain(0.3, 0.7, invert=True),
    _K.AVG_WORD_LENGTH: NormalizationDomain(3.5, 6.0, invert=True),
    _K.FLESCH_READING_EASE: NormalizationDomain(0, 100),
    _K.GUNNING_FOG: NormalizationDomain(5, 20, invert=True),
    _K.AVG_SENTENCE_LENGTH: NormalizationDomain(10, 30),
    _K.SENTENCE_LENGTH_VARIANCE: NormalizationDomain(2, 20, invert=True),
    _K.PARAGRAPH_LENGTH_VARIANCE: NormalizationDomain(10, 100, invert=True),
    _K.DECLARATIVE_SENTENCE_RATIO: NormalizationDomain(0.5, 1.0),
    _K.QUESTION_SENTENCE_RATIO: NormalizationDomain(0, 0.1, invert=True),
    _K.EXCLAMATION_SENTENCE_RATIO: NormalizationDomain(0, 0.1, invert=True),
    _K.WORD_REPETITION: NormalizationDomain(0, 0.1),
    _K.BIGRAM_REPETITION: NormalizationDomain(0, 0.20),
    _K.TRIGRAM_REPETITION: NormalizationDomain(0, 0.20),
    _K.SENTENCE_START_DIVERSITY: NormalizationDomain(0.1, 0.8, invert=True),
    _K.TRANSITION_WORD_RATIO: NormalizationDomain(0, 0.05),
    _K.PASSIVE_VOICE_RATIO: NormalizationDomain(0, 0.25),
    _K.MODAL_VERB_RATIO: NormalizationDomain(0, 0.05),
    _K.PERSONAL_PRONOUN_RATIO: NormalizationDomain(0, 0.08, invert=True),
    _K.CONTRACTION_RATIO: NormalizationDomain(0, 0.05, invert=True),
    _K.HEDGE_WORD_RATIO: NormalizationDomain(0, 0.05),
    _K.BOOSTER_WORD_RATIO: NormalizationDomain(0, 0.04),
    _K.NOMINALIZATION_RATIO: NormalizationDomain(0, 0.1),
    _K.COMMON_WORD_RATIO: NormalizationDomain(0.3, 0.6),
    _K.PREDICTABILITY_PROXY: NormalizationDomain(-15, -5),
    _K.AVG_PARAGRAPH_LENGTH: NormalizationDomain(30, 250),
    _K.LIST_USAGE: NormalizationDomain(0, 1, invert=True),
    _K.QUOTE_USAGE: NormalizationDomain(0, 1, invert=True),
}

# ---------------------------------------------------------------------------
# Word lists
# ---------------------------------------------------------------------------

_TRANSITION_WORDS = [
    "furthermore", "moreover", "however", "nevertheless", "consequently", "therefore", "thus",
    "additionally", "likewise", "similarly", "nonetheless", "subsequently", "accordingly",
    "hence", "namely", "specifically", "indeed", "conclusion", "summary", "overall", "instance",
    "example", "contrast", "comparison", "result", "effect", "cause", "reason",
]
_MODAL_VERBS = ["can", "could", "may", "might", "shall", "should", "will", "would", "must"]
_PERSONAL_PRONOUNS = [
    "i", "me", "my", "mine", "myself", "we", "us", "our", "ours", "ourselves",
    "you", "your", "yours", "yourself", "yourselves",
]
_HEDGE_WORDS = [
    "perhaps", "maybe", "possibly", "likely", "probably", "suggests", "appears", "seems",
    "somewhat", "rather", "quite", "around", "about", "approximately", "generally", "often",
    "sometimes", "tend", "indicate", "assume", "believe", "guess",
]
_BOOSTER_WORDS = [
    "very", "really", "extremely", "highly", "clearly", "obviously", "definitely", "certainly",
    "always", "never", "undoubtedly", "surely", "truly", "actually",
]
_COMMON_WORDS = [
    "the", "a", "an", "is", "are", "was", "were", "be", "being", "been", "of", "in", "on", "at",
    "to", "for", "with", "by", "as", "and", "or", "but", "if", "then", "that", "this", "it", "he",
    "she", "they", "we", "you",
]
_NOMINALIZATION_SUFFIXES = ("tion", "sion", "ment", "ness", "ity", "ance", "ence", "ism", "age", "al")
_IRREGULAR_PARTICIPLES = [
    "taken", "given", "made", "seen", "known", "written", "found", "brought", "thought", "caught", "done",
]
_CONTRACTIONS = [
    "i'm", "i've", "i'll", "i'd", "you're", "you've", "you'll", "you'd", "he's", "he'll", "he'd",
    "she's", "she'll", "she'd", "it's", "it'll", "it'd", "we're", "we've", "we'll", "we'd",
    "they're", "they've", "they'll", "they'd", "can't", "won't", "shan't", "shouldn't", "wouldn't",
    "couldn't", "mustn't", "isn't", "aren't", "wasn't", "weren't", "hasn't", "haven't", "hadn't",
    "doesn't", "don't", "didn't",
]
_ABBREVIATIONS = [
    "Mr", "Mrs", "Ms", "Dr", "Sr", "Jr", "St", "Ave", "Rd", "Blvd", "Capt", "Cmdr", "Gen", "Gov",
    "Hon", "Lt", "Messrs", "Prof", "Rep", "Rev", "Sen", "Vol", "No", "Fig", "vs", "etc", "i.e", "e.g",
]


def _coerce_keys(mapping: Mapping, label: str) -> dict[HeuristicKey, object]:
    if not isinstance(mapping, Mapping):
        raise ValueError(f"{label} must be a mapping keyed by heuristic, got {type(mapping).__name__}")
    out: dict[HeuristicKey, object] = {}
    for key, value in mapping.items():
        try:
            out[HeuristicKey(key)] = value
        except ValueError:
            raise ValueError(f"Unknown heuristic key {key!r} in {label}") from None
    return out


def _coerce_weight(key: HeuristicKey, weight: object) -> float:
    if isinstance(weight, bool) or not isinstance(weight, (int, float)):
        raise ValueError(f"Weight for {key.value!r} must be a number, got {weight!r}")
    if not math.isfinite(weight):
        raise ValueError(f"Weight for {key.value!r} must be finite, got {weight!r}")
    return float(weight)


def _coerce_record(key: HeuristicKey, value: object, cls: type, label: str):
    """Accept an instance of ``cls`` or a mapping of its fields."""
    if isinstance(value, cls):
        return value
    if isinstance(value, Mapping):
        try:
            return cls(**value)
        except TypeError as exc:
            raise ValueError(f"Invalid {label} for {key.value!r}: {exc}") from None
    raise ValueError(f"{label.capitalize()} for {key.value!r} must be a {cls.__name__}, got {value!r}")


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


# ---------------------------------------------------------------------------
# Hyperparameters
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Hyperparameters:
    """Limits, weights, bands, and word lists used by the analyzer.

    Mapping fields accept plain string keys; they are coerced to
    :class:`HeuristicKey` and validated on construction.
    """

    max_words_approx: int = 10000
    max_chars_approx: int = 70000
    min_words_for_meaningful_analysis: int = 50
    randomness_factor: float = 0.05

    paragraph_length_sanity_check: float = 1000.0
    paragraph_sanity_max_paragraphs: int = 5
    single_paragraph_sentence_limit: int = 25

    weights: Mapping[HeuristicKey, float] = field(default_factory=lambda: dict(_DEFAULT_WEIGHTS))
    thresholds: Mapping[HeuristicKey, ThresholdBand] = field(default_factory=lambda: dict(_DEFAULT_THRESHOLDS))
    domains: Mapping[HeuristicKey, NormalizationDomain] = field(default_factory=lambda: dict(_DEFAULT_DOMAINS))

    transition_words: frozenset[str] = field(default_factory=lambda: frozenset(_TRANSITION_WORDS))
    modal_verbs: frozenset[str] = field(default_factory=lambda: frozenset(_MODAL_VERBS))
    personal_pronouns: frozenset[str] = field(default_factory=lambda: frozenset(_PERSONAL_PRONOUNS))
    hedge_words: frozenset[str] = field(default_factory=lambda: frozenset(_HEDGE_WORDS))
    booster_words: frozenset[str] = field(default_factory=lambda: frozenset(_BOOSTER_WORDS))
    common_words: frozenset[str] = field(default_factory=lambda: frozenset(_COMMON_WORDS))
    nominalization_suffixes: tuple[str, ...] = _NOMINALIZATION_SUFFIXES
    irregular_participles: frozenset[str] = field(default_factory=lambda: frozenset(_IRREGULAR_PARTICIPLES))
    contractions: tuple[str, ...] = tuple(_CONTRACTIONS)
    abbreviations: tuple[str, ...] = tuple(_ABBREVIATIONS)

    word_repetition_top_n: int = 5
    word_repetition_min_words: int = 10
    repetition_min_word_length: int = 3
    sentence_start_min_sentences: int = 5
    predictability_min_words: int = 10
    nominalization_min_word_length: int = 6

    confidence_short_text_words: int = 150
    confidence_medium_text_words: int = 500
    confidence_short_multiplier: float = 1.0
    confidence_short_offset: float = -10.0
    confidence_medium_multiplier: float = 1.5
    confidence_medium_offset: float = -5.0
    confidence_long_multiplier: float = 2.0
    confidence_long_offset: float = 0.0
    confidence_skipped_multiplier: float = 0.5
    confidence_skipped_offset: float = -15.0
    confidence_extreme_distance: float = 40.0
    confidence_extreme_bonus: float = 10.0

    ai_leaning_min: float = 65.0
    human_leaning_max: float = 35.0

    def __post_init__(self) -> None:
        weights = {k: _coerce_weight(k, w) for k, w in _coerce_keys(self.weights, "weights").items()}
        thresholds = {
            k: _coerce_record(k, b, ThresholdBand, "threshold band")
            for k, b in _coerce_keys(self.thresholds, "thresholds").items()
        }
        domains = {
            k: _coerce_record(k, d, NormalizationDomain, "normalization domain")
            for k, d in _coerce_keys(self.domains, "domains").items()
        }

        for key, band in thresholds.items():
            if not (_is_number(band.low) and _is_number(band.high)):
                raise ValueError(f"Threshold band for {key.value!r} must have numeric bounds")
            if band.low > band.high:
                raise ValueError(f"Threshold band for {key.value!r} has low > high ({band.low} > {band.high})")
        for key, domain in domains.items():
            if not (_is_number(domain.min) and _is_number(domain.max)):
                raise ValueError(f"Normalization domain for {key.value!r} must have numeric bounds")
            if not (math.isfinite(domain.min) and math.isfinite(domain.max)):
                raise ValueError(f"Normalization domain for {key.value!r} must be finite")
        if not 0.0 <= self.randomness_factor <= 1.0:
            raise ValueError(f"randomness_factor must be within [0, 1], got {self.randomness_factor}")
        if self.min_words_for_meaningful_analysis < 1:
            raise ValueError("min_words_for_meaningful_analysis must be at least 1")
        if self.human_leaning_max > self.ai_leaning_min:
            raise ValueError("human_leaning_max must not exceed ai_leaning_min")

        # Read-only views so the shared default instance cannot be altered.
        object.__setattr__(self, "weights", MappingProxyType(weights))
        object.__setattr__(self, "thresholds", MappingProxyType(thresholds))
        object.__setattr__(self, "domains", MappingProxyType(domains))

    def domain_for(self, key: HeuristicKey) -> NormalizationDomain:
        return self.domains.get(key) or _DEFAULT_DOMAINS[key]


DEFAULT_HYPERPARAMETERS = Hyperparameters()
