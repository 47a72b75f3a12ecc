"""Independent linguistic heuristics.

Every heuristic takes a :class:`SegmentedText` and the active
:class:`Hyperparameters` and returns one :class:`HeuristicResult`. Degenerate
input (too few words, sentences, or paragraphs) yields a neutral result
(value 0, score 50) instead of raising.
"""

from __future__ import annotations

import math
import re
from collections import Counter
from dataclasses import dataclass
from functools import lru_cache, partial
from typing import Callable, Hashable, Iterable, Sequence

from data_designer_ai_likelihood.hyperparameters import HeuristicKey, Hyperparameters
from data_designer_ai_likelihood.normalize import (
    NEUTRAL_SCORE,
    Interpretation,
    clamp_score,
    interpret,
    normalize_in,
    normalize_score,
)
from data_designer_ai_likelihood.segmenter import SegmentedText, count_syllables, words

_K = HeuristicKey

# ---------------------------------------------------------------------------
# Dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class HeuristicResult:
    key: HeuristicKey
    name: str
    value: float
    description: str
    score: float = NEUTRAL_SCORE
    interpretation: Interpretation = "neutral"
    skipped: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.score, (int, float)) and math.isfinite(self.score):
            object.__setattr__(self, "score", clamp_score(float(self.score)))

    @property
    def is_valid(self) -> bool:
        return isinstance(self.score, (int, float)) and math.isfinite(self.score)

    def to_payload(self) -> dict[str, object]:
        return {
            "type": "HeuristicResult",
            "key": self.key.value,
            "name": self.name,
            "value": self.value,
            "description": self.description,
            "score": self.score,
            "interpretation": self.interpretation,
            "skipped": self.skipped,
        }


@dataclass(frozen=True)
class HeuristicFailure:
    key: HeuristicKey
    error: str

    def to_payload(self) -> dict[str, object]:
        return {"type": "HeuristicFailure", "key": self.key.value, "error": self.error}


Heuristic = Callable[[SegmentedText, Hyperparameters], HeuristicResult]

# ---------------------------------------------------------------------------
# Compiled patterns
# ---------------------------------------------------------------------------

_PASSIVE_RE = re.compile(r"\b(am|is|are|was|were|be|being|been)\s+\w+?([aeiou]d|ed|en|t|ne|wn)\b", re.IGNORECASE)
_BE_VERB_RE = re.compile(r"\b(am|is|are|was|were|be|being|been)\s+", re.IGNORECASE)
_TRAILING_PUNCT_RE = re.compile(r"[.,!?;:]$")
_FOG_SUFFIX_RE = re.compile(r"(es|ed|ing)$", re.IGNORECASE)
_LIST_MARKER_RE = re.compile(r"^\s*([*•-])\s+|^\s*(\d+\.)\s+")
_LINE_BREAK_RE = re.compile(r"[\r\n]")
_QUOTE_RE = re.compile(r"[\"“”]")


@lru_cache(maxsize=8)
def _contraction_re(contractions: tuple[str, ...]) -> re.Pattern[str]:
    return re.compile(r"\b(?:" + "|".join(re.escape(c) for c in contractions) + r")\b", re.IGNORECASE)


@lru_cache(maxsize=8)
def _suffix_re(suffixes: tuple[str, ...]) -> re.Pattern[str]:
    return re.compile(r"(?:" + "|".join(re.escape(s) for s in suffixes) + r")$", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def frequencies(items: Iterable[Hashable]) -> Counter:
    return Counter(items)


def ngrams(tokens: Sequence[str], n: int) -> list[str]:
    if n <= 0 or len(tokens) < n:
        return []
    return [" ".join(tokens[i : i + n]) for i in range(len(tokens) - n + 1)]


def standard_deviation(values: Sequence[float]) -> float:
    """Sample standard deviation (n - 1 divisor); 0 for fewer than two values."""
    n = len(values)
    if n < 2:
        return 0.0
    mean = sum(values) / n
    return math.sqrt(sum((x - mean) ** 2 for x in values) / (n - 1))


def is_complex_word(word: str) -> bool:
    """Three or more syllables, not counting an inflectional -es/-ed/-ing."""
    syllables = count_syllables(word)
    if syllables < 3:
        return False
    if not _FOG_SUFFIX_RE.search(word) or syllables > 3:
        return True
    return count_syllables(_FOG_SUFFIX_RE.sub("", word)) >= 3


def _neutral(key: HeuristicKey, name: str, description: str) -> HeuristicResult:
    return HeuristicResult(key, name, 0, description, NEUTRAL_SCORE, "neutral")


def _scored(
    key: HeuristicKey, name: str, description: str, value: float, hp: Hyperparameters, digits: int = 4
) -> HeuristicResult:
    domain = hp.domain_for(key)
    score = normalize_in(value, domain)
    interpretation = interpret(value, hp.thresholds.get(key), domain.invert)
    return HeuristicResult(key, name, round(value, digits), description, score, interpretation)


# ---------------------------------------------------------------------------
# Vocabulary & complexity
# ---------------------------------------------------------------------------


def lexical_diversity(doc: SegmentedText, hp: Hyperparameters) -> HeuristicResult:
    name = "Type-Token Ratio (TTR)"
    description = (
        "Unique words divided by total words. Lower diversity (<~0.4) suggests the simpler, "
        "recycled vocabulary common in generated text."
    )
    if not doc.words:
        return _neutral(_K.TTR, name, description)
    ttr = len(set(doc.words)) / len(doc.words)
    return _scored(_K.TTR, name, description, ttr, hp, digits=3)


def average_word_length(doc: SegmentedText, hp: Hyperparameters) -> HeuristicResult:
    name = "Average Word Length"
    description = "Mean characters per word. Longer words (>~5.5) lean human, shorter (<~4.0) lean AI."
    if not doc.words:
        return _neutral(_K.AVG_WORD_LENGTH, name, description)
    avg = sum(len(w) for w in doc.words) / len(doc.words)
    return _scored(_K.AVG_WORD_LENGTH, name, description, avg, hp, digits=2)


def flesch_reading_ease(doc: SegmentedText, hp: Hyperparameters) -> HeuristicResult:
    name = "Flesch Reading Ease"
    description = (
        "Readability score (higher = easier). Very easy text (>~70) can correlate with generated "
        "prose; difficult text (<~50) leans human."
    )
    total_words = doc.word_count
    total_sentences = doc.sentence_count
    total_syllables = sum(count_syllables(w) for w in doc.words)
    if total_words == 0 or total_sentences == 0 or total_syllables == 0:
        return _neutral(_K.FLESCH_READING_EASE, name, description)
    ease = 206.835 - 1.015 * (total_words / total_sentences) - 84.6 * (total_syllables / total_words)
    return _scored(_K.FLESCH_READING_EASE, name, description, ease, hp, digits=2)


def gunning_fog(doc: SegmentedText, hp: Hyperparameters) -> HeuristicResult:
    name = "Gunning Fog Index"
    description = (
        "Estimated years of schooling needed to read the text. Simpler text (<~10) leans AI under "
        "this rule; complex text (>~15) leans human."
    )
    total_words = doc.word_count
    total_sentences = doc.sentence_count
    if total_words == 0 or total_sentences == 0:
        return _neutral(_K.GUNNING_FOG, name, description)
    complex_words = sum(1 for w in doc.words if is_complex_word(w))
    fog = 0.4 * (total_words / total_sentences + 100 * complex_words / total_words)
    return _scored(_K.GUNNING_FOG, name, description, fog, hp, digits=2)


# ---------------------------------------------------------------------------
# Sentence & paragraph structure
# ---------------------------------------------------------------------------


def average_sentence_length(doc: SegmentedText, hp: Hyperparameters) -> HeuristicResult:
    name = "Average Sentence Length"
    description = "Mean words per sentence. Moderate lengths (15-25 words) are typical of generated text."
    if doc.sentence_count == 0 or doc.word_count == 0:
        return _neutral(_K.AVG_SENTENCE_LENGTH, name, description)
    return _scored(_K.AVG_SENTENCE_LENGTH, name, description, doc.word_count / doc.sentence_count, hp, digits=2)


def sentence_length_variance(doc: SegmentedText, hp: Hyperparameters) -> HeuristicResult:
    name = "Sentence Length Variance ('Burstiness')"
    description = (
        "Standard deviation of sentence lengths in words. High variation (>~15) is typical of human "
        "writing; uniform lengths (<~5) may suggest AI."
    )
    if doc.sentence_count < 2:
        return _neutral(_K.SENTENCE_LENGTH_VARIANCE, name, description)
    spread = standard_deviation([len(words(s)) for s in doc.sentences])
    return _scored(_K.SENTENCE_LENGTH_VARIANCE, name, description, spread, hp, digits=2)


def paragraph_length_variance(doc: SegmentedText, hp: Hyperparameters) -> HeuristicResult:
    name = "Paragraph Length Variance"
    description = (
        "Standard deviation of paragraph lengths in words (blank-line separated). Higher variation "
        "leans human; zero suggests uniform paragraphs or failed splitting."
    )
    if doc.paragraph_count < 2:
        return _neutral(_K.PARAGRAPH_LENGTH_VARIANCE, name, description)
    spread = standard_deviation([len(words(p)) for p in doc.paragraphs])
    return _scored(_K.PARAGRAPH_LENGTH_VARIANCE, name, description, spread, hp, digits=2)


def _ending_ratio(
    doc: SegmentedText, hp: Hyperparameters, key: HeuristicKey, name: str, description: str,
    predicate: Callable[[str], bool],
) -> HeuristicResult:
    if doc.sentence_count == 0:
        return _neutral(key, name, description)
    ratio = sum(1 for s in doc.sentences if predicate(s.strip())) / doc.sentence_count
    return _scored(key, name, description, ratio, hp)


def declarative_ratio(doc: SegmentedText, hp: Hyperparameters) -> HeuristicResult:
    return _ending_ratio(
        doc, hp, _K.DECLARATIVE_SENTENCE_RATIO,
        "Declarative Sentence Ratio (Approx.)",
        "Share of sentences ending with a single period. A ratio near 100% leans AI.",
        lambda s: s.endswith(".") and not s.endswith(".."),
    )


def question_ratio(doc: SegmentedText, hp: Hyperparameters) -> HeuristicResult:
    return _ending_ratio(
        doc, hp, _K.QUESTION_SENTENCE_RATIO,
        "Question Mark Ratio",
        "Share of sentences ending with a question mark. Questions lean human.",
        lambda s: s.endswith("?"),
    )


def exclamation_ratio(doc: SegmentedText, hp: Hyperparameters) -> HeuristicResult:
    return _ending_ratio(
        doc, hp, _K.EXCLAMATION_SENTENCE_RATIO,
        "Exclamation Mark Ratio",
        "Share of sentences ending with an exclamation mark. Exclamations lean human.",
        lambda s: s.endswith("!"),
    )


# ---------------------------------------------------------------------------
# Repetition
# ---------------------------------------------------------------------------


def word_repetition(doc: SegmentedText, hp: Hyperparameters) -> HeuristicResult:
    name = "Word Repetition Score"
    description = (
        "Combined relative frequency of the most repeated content words. High repetition (>~5% for "
        "the top five) can indicate AI."
    )
    if doc.word_count < hp.word_repetition_min_words:
        return _neutral(_K.WORD_REPETITION, name, description)
    content = [
        count
        for word, count in frequencies(doc.words).most_common()
        if word not in hp.common_words and len(word) >= hp.repetition_min_word_length
    ]
    repetition = sum(count / doc.word_count for count in content[: hp.word_repetition_top_n])
    return _scored(_K.WORD_REPETITION, name, description, repetition, hp)


def phrase_repetition(doc: SegmentedText, hp: Hyperparameters, n: int = 2) -> HeuristicResult:
    key = {2: _K.BIGRAM_REPETITION, 3: _K.TRIGRAM_REPETITION}[n]
    name = f"{n}-Gram Phrase Repetition"
    band = hp.thresholds.get(key)
    high = band.high if band else 0.03
    description = f"Excess repetition of {n}-word sequences. High repetition (>~{high * 100:g}%) can indicate AI."
    if doc.word_count < n * 2:
        return _neutral(key, name, description)
    grams = ngrams(doc.words, n)
    if not grams:
        return _neutral(key, name, description)
    repetition = sum((count - 1) / len(grams) for count in frequencies(grams).values() if count > 1)
    return _scored(key, name, description, repetition, hp)


def sentence_start_diversity(doc: SegmentedText, hp: Hyperparameters) -> HeuristicResult:
    name = "Sentence Start Diversity"
    description = (
        "Distinct sentence-opening words divided by sentences. Little variety (<~10%) suggests "
        "formulaic structure."
    )
    if doc.sentence_count < hp.sentence_start_min_sentences:
        return _neutral(_K.SENTENCE_START_DIVERSITY, name, description)
    starters = [tokens[0] for tokens in (words(s) for s in doc.sentences) if tokens]
    if not starters:
        return _neutral(_K.SENTENCE_START_DIVERSITY, name, description)
    diversity = len(set(starters)) / len(starters)
    return _scored(_K.SENTENCE_START_DIVERSITY, name, description, diversity, hp, digits=3)


# ---------------------------------------------------------------------------
# Word choice & style
# ---------------------------------------------------------------------------


def category_ratio(
    doc: SegmentedText, hp: Hyperparameters, *, key: HeuristicKey, name: str, description: str, vocabulary: str
) -> HeuristicResult:
    """Share of tokens drawn from one of the configured word lists."""
    if not doc.words:
        return _neutral(key, name, description)
    members = getattr(hp, vocabulary)
    ratio = sum(1 for w in doc.words if w in members) / doc.word_count
    return _scored(key, name, description, ratio, hp)


def passive_voice_ratio(doc: SegmentedText, hp: Hyperparameters) -> HeuristicResult:
    name = "Passive Voice Ratio (Approx.)"
    description = (
        "Estimated share of sentences in the passive voice ('was taken'). Heavy use (>~15%) can "
        "correlate with formal generated text. Regex based, so false positives are common."
    )
    if doc.sentence_count == 0:
        return _neutral(_K.PASSIVE_VOICE_RATIO, name, description)
    passive = 0
    for sentence in doc.sentences:
        if _PASSIVE_RE.search(sentence):
            passive += 1
            continue
        m = _BE_VERB_RE.search(sentence)
        if m:
            following = sentence[m.end() :].split()
            if following and _TRAILING_PUNCT_RE.sub("", following[0].lower()) in hp.irregular_participles:
                passive += 1
    return _scored(_K.PASSIVE_VOICE_RATIO, name, description, passive / doc.sentence_count, hp, digits=3)


def contraction_ratio(doc: SegmentedText, hp: Hyperparameters) -> HeuristicResult:
    name = "Contraction Ratio"
    description = "Contractions ('don't', 'it's') per word. Frequent use (>~2%) is typical of informal human writing."
    if not doc.text or doc.word_count == 0:
        return _neutral(_K.CONTRACTION_RATIO, name, description)
    count = len(_contraction_re(tuple(hp.contractions)).findall(doc.text))
    return _scored(_K.CONTRACTION_RATIO, name, description, count / doc.word_count, hp)


def nominalization_ratio(doc: SegmentedText, hp: Hyperparameters) -> HeuristicResult:
    name = "Nominalization Ratio (Approx.)"
    description = "Share of longer words ending in a nominalizing suffix (-tion, -ment). High use (>~10%) reads abstract and formal."
    if not doc.words:
        return _neutral(_K.NOMINALIZATION_RATIO, name, description)
    suffix_re = _suffix_re(tuple(hp.nominalization_suffixes))
    count = sum(1 for w in doc.words if len(w) >= hp.nominalization_min_word_length and suffix_re.search(w))
    return _scored(_K.NOMINALIZATION_RATIO, name, description, count / doc.word_count, hp)


# ---------------------------------------------------------------------------
# Predictability
# ---------------------------------------------------------------------------


def predictability_proxy(doc: SegmentedText, hp: Hyperparameters) -> HeuristicResult:
    name = "Predictability Proxy (Simplified)"
    description = (
        "Average log2 probability of each word given the previous one, estimated only from pair "
        "counts inside the text with add-one smoothing. Not a language-model perplexity."
    )
    tokens = doc.words
    if len(tokens) < hp.predictability_min_words:
        return _neutral(_K.PREDICTABILITY_PROXY, name, description)
    unigrams = frequencies(tokens)
    bigrams = frequencies(ngrams(tokens, 2))
    vocabulary = len(unigrams)
    total = 0.0
    pairs = 0
    for current, following in zip(tokens, tokens[1:]):
        probability = (bigrams[f"{current} {following}"] + 1) / (unigrams[current] + vocabulary)
        total += math.log2(probability)
        pairs += 1
    if pairs == 0:
        return _neutral(_K.PREDICTABILITY_PROXY, name, description)
    return _scored(_K.PREDICTABILITY_PROXY, name, description, total / pairs, hp, digits=3)


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


def average_paragraph_length(doc: SegmentedText, hp: Hyperparameters) -> HeuristicResult:
    name = "Average Paragraph Length"
    description = (
        f"Average words per blank-line separated paragraph. Values above "
        f"{hp.paragraph_length_sanity_check:g} suggest the text has no paragraph breaks."
    )
    if doc.paragraph_count == 0:
        return _neutral(_K.AVG_PARAGRAPH_LENGTH, name, description)
    return _scored(_K.AVG_PARAGRAPH_LENGTH, name, description, doc.word_count / doc.paragraph_count, hp, digits=1)


def list_usage(doc: SegmentedText, hp: Hyperparameters) -> HeuristicResult:
    name = "List Usage Score"
    description = "Paragraphs opening with a bullet or number marker. Presence leans human."
    if not doc.paragraphs:
        return _neutral(_K.LIST_USAGE, name, description)
    list_count = sum(1 for p in doc.paragraphs if _LIST_MARKER_RE.match(_LINE_BREAK_RE.split(p)[0]))
    presence = 0.0 if list_count == 0 else (1.0 if list_count > 2 else 0.5)
    domain = hp.domain_for(_K.LIST_USAGE)
    return HeuristicResult(
        _K.LIST_USAGE, name, list_count, description,
        normalize_score(presence, domain.min, domain.max, domain.invert),
        interpret(list_count, hp.thresholds.get(_K.LIST_USAGE), domain.invert),
    )


def quote_usage(doc: SegmentedText, hp: Hyperparameters) -> HeuristicResult:
    name = "Quotation Mark Usage"
    description = "Double quotation marks in the text. Direct quotes lean human."
    if not doc.text.strip():
        return _neutral(_K.QUOTE_USAGE, name, description)
    quote_count = len(_QUOTE_RE.findall(doc.text))
    presence = 1.0 if quote_count >= 2 else 0.0
    domain = hp.domain_for(_K.QUOTE_USAGE)
    return HeuristicResult(
        _K.QUOTE_USAGE, name, quote_count, description,
        normalize_score(presence, domain.min, domain.max, domain.invert),
        interpret(quote_count, hp.thresholds.get(_K.QUOTE_USAGE), domain.invert),
    )


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

HEURISTICS: dict[HeuristicKey, Heuristic] = {
    _K.TTR: lexical_diversity,
    _K.AVG_WORD_LENGTH: average_word_length,
    _K.FLESCH_READING_EASE: flesch_reading_ease,
    _K.GUNNING_FOG: gunning_fog,
    _K.AVG_SENTENCE_LENGTH: average_sentence_length,
    _K.SENTENCE_LENGTH_VARIANCE: sentence_length_variance,
    _K.PARAGRAPH_LENGTH_VARIANCE: paragraph_length_variance,
    _K.DECLARATIVE_SENTENCE_RATIO: declarative_ratio,
    _K.QUESTION_SENTENCE_RATIO: question_ratio,
    _K.EXCLAMATION_SENTENCE_RATIO: exclamation_ratio,
    _K.WORD_REPETITION: word_repetition,
    _K.BIGRAM_REPETITION: partial(phrase_repetition, n=2),
    _K.TRIGRAM_REPETITION: partial(phrase_repetition, n=3),
    _K.SENTENCE_START_DIVERSITY: sentence_start_diversity,
    _K.TRANSITION_WORD_RATIO: partial(
        category_ratio, key=_K.TRANSITION_WORD_RATIO, name="Transition Word Ratio",
        description="Share of connective words ('furthermore', 'moreover'). Heavy use leans AI.",
        vocabulary="transition_words",
    ),
    _K.PASSIVE_VOICE_RATIO: passive_voice_ratio,
    _K.MODAL_VERB_RATIO: partial(
        category_ratio, key=_K.MODAL_VERB_RATIO, name="Modal Verb Ratio",
        description="Share of modal verbs ('might', 'could'). A weak indicator.",
        vocabulary="modal_verbs",
    ),
    _K.PERSONAL_PRONOUN_RATIO: partial(
        category_ratio, key=_K.PERSONAL_PRONOUN_RATIO, name="Personal Pronoun Ratio",
        description="Share of first and second person pronouns. Frequent use (>~4%) leans human.",
        vocabulary="personal_pronouns",
    ),
    _K.CONTRACTION_RATIO: contraction_ratio,
    _K.HEDGE_WORD_RATIO: partial(
        category_ratio, key=_K.HEDGE_WORD_RATIO, name="Hedging Word Ratio",
        description="Share of hedging words ('perhaps', 'generally'). Heavy hedging leans AI.",
        vocabulary="hedge_words",
    ),
    _K.BOOSTER_WORD_RATIO: partial(
        category_ratio, key=_K.BOOSTER_WORD_RATIO, name="Booster Word Ratio",
        description="Share of intensifiers ('clearly', 'definitely'). Heavy use leans AI.",
        vocabulary="booster_words",
    ),
    _K.NOMINALIZATION_RATIO: nominalization_ratio,
    _K.COMMON_WORD_RATIO: partial(
        category_ratio, key=_K.COMMON_WORD_RATIO, name="Common Word Ratio",
        description="Share of very common function words. A weak predictability indicator.",
        vocabulary="common_words",
    ),
    _K.PREDICTABILITY_PROXY: predictability_proxy,
    _K.AVG_PARAGRAPH_LENGTH: average_paragraph_length,
    _K.LIST_USAGE: list_usage,
    _K.QUOTE_USAGE: quote_usage,
}
