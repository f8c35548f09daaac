"""Household-membership comparison.

The left record's state picks one of three modes:

1. not in a household: membership flags must agree;
2. in a household with an identifier: 70% identifier, 30% head-of-household;
3. in a household without an identifier: 70% household name, 30% head-of-household.
"""

from __future__ import annotations

from owner_linkage.config import MatchingConfig
from owner_linkage.models.base import CalculatorKind
from owner_linkage.models.breakdown import ComparisonBreakdown
from owner_linkage.models.entity import HouseholdMembership
from owner_linkage.utils.levenshtein import levenshtein_similarity
from owner_linkage.utils.normalize import fold_case

KEY_WEIGHT = 0.7
HEAD_WEIGHT = 0.3


def _text_similarity(s1: str | None, s2: str | None) -> float:
    # a key missing on either side is no match, even when both are missing
    if not s1 or not s2:
        return 0.0
    if s1 == s2:
        return 1.0
    return levenshtein_similarity(fold_case(s1), fold_case(s2))


def household_comparison(
    a: HouseholdMembership,
    b: HouseholdMembership,
    config: MatchingConfig,
) -> ComparisonBreakdown:
    breakdown = ComparisonBreakdown(calculator=CalculatorKind.HOUSEHOLD.value)

    if not a.is_in_household:
        breakdown.mode = "not_in_household"
        score = 1.0 if a.is_in_household == b.is_in_household else 0.0
        breakdown.add("is_in_household", score, 1.0)
        return breakdown.finish(score)

    if a.household_identifier and a.household_identifier.strip():
        breakdown.mode = "identifier"
        key, key_score = "household_identifier", _text_similarity(a.household_identifier, b.household_identifier)
    else:
        breakdown.mode = "household_name"
        key, key_score = "household_name", _text_similarity(a.household_name, b.household_name)

    head_score = 1.0 if a.is_head_of_household == b.is_head_of_household else 0.0
    total = breakdown.add(key, key_score, KEY_WEIGHT) + breakdown.add("is_head_of_household", head_score, HEAD_WEIGHT)
    return breakdown.finish(total)
