"""Splits raw text into words, sentences, and paragraphs.

All functions are pure: the same input always yields the same sequences.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache

from data_designer_ai_likelihood.hyperparameters import DEFAULT_HYPERPARAMETERS, Hyperparameters

_WORD_PUNCT_RE = re.compile(r"[.,!?;:\"“”‘’()\[\]{}]")
_WHITESPACE_RE = re.compile(r"\s+")
_SENTENCE_BOUNDARY_RE = re.compile(r"([.?!])\s+(?=[A-Z\"“\d]|$)")
_FALLBACK_SPLIT_RE = re.compile(r"(?<=[.?!])\s+")
_INITIALS_TAIL_RE = re.compile(r"\b\w\.\w$")
_PARAGRAPH_SPLIT_RE = re.compile(r"[\r\n]\s*[\r\n]+")
_VOWEL_GROUP_RE = re.compile(r"[aeiouy]+")
_SILENT_E_RE = re.compile(r"[aeiouy][^aeiouy]e$")


@lru_cache(maxsize=8)
def _abbreviation_tail_re(abbreviations: tuple[str, ...]) -> re.Pattern[str]:
    alternation = "|".join(re.escape(a) for a in abbreviations)
    return re.compile(r"\b(?:" + alternation + r")$")


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text or "").strip()


def words(text: str) -> list[str]:
    """Lowercased, punctuation-stripped tokens."""
    if not text:
        return []
    cleaned = _WORD_PUNCT_RE.sub("", text.lower())
    return [w for w in collapse_whitespace(cleaned).split(" ") if w]


def sentences(text: str, hp: Hyperparameters | None = None) -> list[str]:
    """Split on terminal punctuation followed by whitespace and a capital, digit, quote, or end.

    A period that closes a known abbreviation ("Dr.", "e.g.") or an initials run
    ("U.S.") does not end a sentence.
    """
    cleaned = collapse_whitespace(text)
    if not cleaned:
        return []
    abbreviations = tuple((hp or DEFAULT_HYPERPARAMETERS).abbreviations)
    abbreviation_re = _abbreviation_tail_re(abbreviations)
    # Only the tail before a terminator can hold an abbreviation or initials.
    window = max((len(a) for a in abbreviations), default=0) + 4

    result: list[str] = []
    start = 0
    for m in _SENTENCE_BOUNDARY_RE.finditer(cleaned):
        before = cleaned[max(0, m.start() - window) : m.start()]
        if m.group(1) == "." and (abbreviation_re.search(before) or _INITIALS_TAIL_RE.search(before)):
            continue
        sentence = cleaned[start : m.end(1)].strip()
        if sentence:
            result.append(sentence)
        start = m.end()
    tail = cleaned[start:].strip()
    if tail:
        result.append(tail)

    if not result:
        result = [s.strip() for s in _FALLBACK_SPLIT_RE.split(cleaned) if s.strip()]
    return result


def paragraphs(text: str) -> list[str]:
    """Blank-line separated blocks. A single line break never starts a new paragraph."""
    if not text:
        return []
    text = text.replace("\r\n", "\n")
    return [p.strip() for p in _PARAGRAPH_SPLIT_RE.split(text) if p.strip()]


def count_syllables(word: str) -> int:
    """Approximate syllable count from vowel groups (minimum 1)."""
    word = (word or "").lower().strip()
    if not word:
        return 0
    if len(word) <= 3:
        return 1
    # Silent trailing "e" ("make"), but "-le" keeps its syllable ("table").
    if word.endswith("e") and not word.endswith("le") and _SILENT_E_RE.search(word):
        if _VOWEL_GROUP_RE.search(word[:-1]):
            word = word[:-1]
    return max(1, len(_VOWEL_GROUP_RE.findall(word)))


@dataclass(frozen=True)
class SegmentedText:
    text: str
    words: tuple[str, ...]
    sentences: tuple[str, ...]
    paragraphs: tuple[str, ...]

    @classmethod
    def from_text(cls, text: str, hp: Hyperparameters | None = None) -> SegmentedText:
        text = text or ""
        return cls(
            text=text,
            words=tuple(words(text)),
            sentences=tuple(sentences(text, hp)),
            paragraphs=tuple(paragraphs(text)),
        )

    @property
    def word_count(self) -> int:
        return len(self.words)

    @property
    def sentence_count(self) -> int:
        return len(self.sentences)

    @property
    def paragraph_count(self) -> int:
        return len(self.paragraphs)
