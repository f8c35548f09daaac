"""Name and Entity comparison."""

from __future__ import annotations

from owner_linkage.config import MatchingConfig
from owner_linkage.models.base import CalculatorKind
from owner_linkage.models.breakdown import ComparisonBreakdown, weighted_total
from owner_linkage.models.entity import Entity, Name
from owner_linkage.models.terms import Term
from owner_linkage.similarity.contact import contact_info_comparison
from owner_linkage.utils.levenshtein import levenshtein_similarity
from owner_linkage.utils.normalize import fold_case

# Weight moved onto the name when names (nearly) agree
EXACT_NAME_BOOST = 0.12
NEAR_NAME_BOOST = 0.06
NEAR_NAME_FLOOR = 0.95


def _part(term: Term | None) -> str:
    return "" if term is None or term.is_blank() else fold_case(term.text)


def name_comparison(a: Name, b: Name, config: MatchingConfig) -> ComparisonBreakdown:
    """Weighted last / first / other-name similarity.

    A part contributes when it is filled on at least one side. Names without
    structured parts on either side fall back to the full text.
    """
    breakdown = ComparisonBreakdown(calculator=CalculatorKind.NAME.value)
    if not (a.has_parts and b.has_parts):
        breakdown.mode = "full_text"
        score = levenshtein_similarity(fold_case(a.full_text), fold_case(b.full_text))
        breakdown.add("full_name", score, 1.0)
        return breakdown.finish(score)

    breakdown.mode = "components"
    scores: dict[str, float] = {}
    for part in Name.COMPONENTS:
        left, right = _part(getattr(a, part)), _part(getattr(b, part))
        if (left or right) and part in a.weights:
            scores[part] = levenshtein_similarity(left, right)
    return weighted_total(breakdown, scores, a.weights)


def boosted_weights(weights: dict[str, float], name_similarity: float) -> dict[str, float]:
    """Shift weight onto the name from the other components, proportionally."""
    if name_similarity == 1.0:
        boost = EXACT_NAME_BOOST
    elif NEAR_NAME_FLOOR < name_similarity < 1.0:
        boost = NEAR_NAME_BOOST
    else:
        return dict(weights)

    donors = {k: w for k, w in weights.items() if k != "name"}
    donor_total = sum(donors.values())
    if donor_total <= 0:
        return dict(weights)
    boost = min(boost, donor_total)
    shifted = {k: w - boost * w / donor_total for k, w in donors.items()}
    shifted["name"] = weights["name"] + boost
    return shifted


def entity_comparison(a: Entity, b: Entity, config: MatchingConfig) -> ComparisonBreakdown:
    """Score two entities from name, contact info and the optional info blocks."""
    scores: dict[str, float] = {}
    name_similarity: float | None = None

    # unparsed (blank) names carry no evidence and drop out like missing ones
    if a.name is not None and b.name is not None and not a.name.is_blank and not b.name.is_blank:
        name_similarity = name_comparison(a.name, b.name, config).overall
        scores["name"] = name_similarity
    if a.contact_info is not None and b.contact_info is not None:
        scores["contact_info"] = contact_info_comparison(a.contact_info, b.contact_info, config).overall

    for block in ("other_info", "legacy_info"):
        left, right = getattr(a, block), getattr(b, block)
        if left is not None and right is not None and left.has_comparator and right.has_comparator:
            scores[block] = left.compare_to(right, config)

    weights = a.comparison_weights.as_dict()
    breakdown = ComparisonBreakdown(calculator=CalculatorKind.ENTITY.value, mode=a.kind.value)
    if name_similarity is not None:
        weights = boosted_weights(weights, name_similarity)
        if weights["name"] != a.comparison_weights.name:
            breakdown.mode = f"{a.kind.value}_name_boost"
    return weighted_total(breakdown, scores, weights)
