"""Lexical similarity between short labels (category and skill names)."""

import re

_NON_WORD = re.compile(r"[^\w\s]")

EXACT_SCORE = 1.0
CONTAINS_SCORE = 0.9


def _normalize(text: str) -> str:
    """Lowercase and drop everything that is not a word character or whitespace."""
    return _NON_WORD.sub("", text.lower())


def jaccard_similarity(words_a: set[str], words_b: set[str]) -> float:
    """Intersection over union of two word sets; 0.0 when both are empty."""
    union = words_a | words_b
    if not union:
        return 0.0
    return len(words_a & words_b) / len(union)


def string_similarity(a: str, b: str) -> float:
    """Score two labels in [0, 1].

    Checks short-circuit in order: exact match after normalization (1.0),
    containment of one in the other (0.9), then word-level Jaccard.
    """
    s1 = _normalize(a)
    s2 = _normalize(b)

    if s1 == s2:
        return EXACT_SCORE
    if s1 in s2 or s2 in s1:
        return CONTAINS_SCORE

    return jaccard_similarity(set(s1.split()), set(s2.split()))
