"""Owner Linkage utilities."""

from .levenshtein import (
    clamp_score,
    levenshtein_similarity,
    substitution_cost,
    weighted_distance,
)
from .normalize import fold_case, is_state_code, parse_po_box

__all__ = [
    # Similarity primitive
    "clamp_score",
    "levenshtein_similarity",
    "substitution_cost",
    "weighted_distance",
    # Normalize utilities
    "fold_case",
    "is_state_code",
    "parse_po_box",
]
