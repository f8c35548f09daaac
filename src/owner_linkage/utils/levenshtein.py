"""Vowel-weighted Levenshtein similarity.

Spelling variants of owner names mostly differ in their vowels
(SMITH / SMYTH, ANDERSON / ANDERSEN), so vowel substitutions are charged a
fraction of a full edit. The distance is normalized by the longer string to
give a similarity in [0, 1].
"""

from __future__ import annotations

import threading

VOWELS = frozenset("aeiouy")

VOWEL_SUBSTITUTION_COST = 0.158
MIXED_SUBSTITUTION_COST = 0.632
CONSONANT_SUBSTITUTION_COST = 1.0
INDEL_COST = 1.0

SCORE_PRECISION = 10

# Two reusable rows per thread; only grown, never reallocated per call
_buffers = threading.local()


def _rows(size: int) -> tuple[list[float], list[float]]:
    prev = getattr(_buffers, "prev", None)
    if prev is None or len(prev) < size:
        _buffers.prev = prev = [0.0] * size
        _buffers.curr = [0.0] * size
    return prev, _buffers.curr


def substitution_cost(a: str, b: str) -> float:
    """Cost of replacing character ``a`` with ``b``."""
    if a == b:
        return 0.0
    a_vowel = a in VOWELS
    b_vowel = b in VOWELS
    if a_vowel and b_vowel:
        return VOWEL_SUBSTITUTION_COST
    if a_vowel or b_vowel:
        return MIXED_SUBSTITUTION_COST
    return CONSONANT_SUBSTITUTION_COST


def weighted_distance(s1: str, s2: str) -> float:
    """Edit distance between two case-folded strings with vowel-weighted substitutions."""
    if s1 == s2:
        return 0.0
    if not s1:
        return len(s2) * INDEL_COST
    if not s2:
        return len(s1) * INDEL_COST

    width = len(s2) + 1
    prev, curr = _rows(width)
    for j in range(width):
        prev[j] = j * INDEL_COST

    for i, c1 in enumerate(s1, start=1):
        curr[0] = i * INDEL_COST
        for j, c2 in enumerate(s2, start=1):
            curr[j] = min(
                prev[j] + INDEL_COST,
                curr[j - 1] + INDEL_COST,
                prev[j - 1] + substitution_cost(c1, c2),
            )
        prev, curr = curr, prev

    return prev[width - 1]


def clamp_score(score: float) -> float:
    """Clamp to [0, 1] and round to a fixed precision for run-to-run determinism."""
    return round(min(1.0, max(0.0, score)), SCORE_PRECISION)


def levenshtein_similarity(s1: str, s2: str) -> float:
    """Similarity of two strings in [0, 1].

    Both strings are case-folded before comparison. Two empty strings are
    identical (1.0); exactly one empty string scores 0.0.
    """
    a = (s1 or "").casefold()
    b = (s2 or "").casefold()
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0
    distance = weighted_distance(a, b)
    return clamp_score(1.0 - distance / max(len(a), len(b)))
