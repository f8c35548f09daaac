"""Weighted similarity scoring for terms and composite records."""
from __future__ import annotations

from owner_linkage.similarity.address import (
    address_comparison,
    is_local_address,
    state_similarity,
    term_similarity,
    zip_similarity,
)
from owner_linkage.similarity.contact import contact_info_comparison
from owner_linkage.similarity.entity import boosted_weights, entity_comparison, name_comparison
from owner_linkage.similarity.household import household_comparison
from owner_linkage.similarity.weighted import compare, explain, generic_comparison

__all__ = [
    # Dispatch
    "compare",
    "explain",
    "generic_comparison",
    # Calculators
    "address_comparison",
    "boosted_weights",
    "contact_info_comparison",
    "entity_comparison",
    "household_comparison",
    "name_comparison",
    # Address helpers
    "is_local_address",
    "state_similarity",
    "term_similarity",
    "zip_similarity",
]
