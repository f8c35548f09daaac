"""Address comparison.

Exactly one mode applies to a pair of addresses, checked in order:

1. PO box: either side is a box address.
2. Island-local: either side is on the island (local zip, or a known island
   street in a known island city alias). Island property addresses are
   identified by their fire number, so the street number dominates.
3. General: street number, street name, and zip or city/state.

Missing components contribute 0 and their weight is not handed to the
components that are present.
"""

from __future__ import annotations

from owner_linkage.config import MatchingConfig
from owner_linkage.models.base import CalculatorKind
from owner_linkage.models.breakdown import ComparisonBreakdown
from owner_linkage.models.contact import Address
from owner_linkage.models.terms import Term
from owner_linkage.utils.levenshtein import levenshtein_similarity
from owner_linkage.utils.normalize import fold_case, is_state_code

PO_BOX_ZIP_FLOOR = 0.74
PO_BOX_NUMBER_FLOOR = 0.8

PO_BOX_WEIGHTS = {"zip": 0.3, "po_box": 0.3, "city": 0.2, "state": 0.2}
PO_BOX_NO_ZIP_WEIGHTS = {"po_box": 0.6, "city": 0.2, "state": 0.2}
PO_BOX_EXACT_NO_ZIP_WEIGHTS = {"city": 0.5, "state": 0.5}
LOCAL_WEIGHTS = {"street_number": 0.85, "street_name": 0.15}
GENERAL_ZIP_WEIGHTS = {"street_number": 0.3, "street_name": 0.2, "zip": 0.4, "state": 0.1}
GENERAL_CITY_WEIGHTS = {"street_number": 0.3, "street_name": 0.2, "city": 0.25, "state": 0.25}


def _present(term: Term | None) -> bool:
    return term is not None and not term.is_blank()


def _zip_text(term: Term | None) -> str:
    # ZIP+4 compares on the five-digit code
    return term.text.split("-")[0].strip() if _present(term) else ""


def term_similarity(t1: Term | None, t2: Term | None) -> float:
    """Similarity of two optional terms; a missing side scores 0."""
    if not _present(t1) or not _present(t2):
        return 0.0
    return t1.compare_to(t2)


def zip_similarity(a: Address, b: Address) -> float:
    z1, z2 = _zip_text(a.zip), _zip_text(b.zip)
    if not z1 or not z2:
        return 0.0
    return levenshtein_similarity(z1, z2)


def state_similarity(a: Address, b: Address) -> float:
    """Two-letter state codes must match exactly; anything else is compared as text."""
    if not _present(a.state) or not _present(b.state):
        return 0.0
    s1, s2 = fold_case(a.state.text), fold_case(b.state.text)
    if is_state_code(s1) and is_state_code(s2):
        return 1.0 if s1 == s2 else 0.0
    return levenshtein_similarity(s1, s2)


def has_local_zip(address: Address, config: MatchingConfig) -> bool:
    return _zip_text(address.zip) == config.local_zip


def is_local_address(address: Address, config: MatchingConfig) -> bool:
    """Whether ``address`` is on the island."""
    if has_local_zip(address, config):
        return True
    if not _present(address.street_name) or not _present(address.city):
        return False
    return (
        fold_case(address.street_name.text) in config.local_streets
        and fold_case(address.city.text) in config.local_cities
    )


def _weighted(breakdown: ComparisonBreakdown, scores: dict[str, float], weights: dict[str, float]) -> ComparisonBreakdown:
    total = 0.0
    for name, weight in weights.items():
        total += breakdown.add(name, scores[name], weight)
    return breakdown.finish(total)


def _po_box_comparison(a: Address, b: Address, breakdown: ComparisonBreakdown) -> ComparisonBreakdown:
    scores = {
        "po_box": term_similarity(a.box_number, b.box_number),
        "city": term_similarity(a.city, b.city),
        "state": state_similarity(a, b),
    }

    if _present(a.zip) and _present(b.zip):
        scores["zip"] = zip_similarity(a, b)
        if scores["zip"] < PO_BOX_ZIP_FLOOR:
            breakdown.mode = "po_box_zip_mismatch"
            breakdown.add("zip", scores["zip"], 1.0)
            return breakdown.finish(0.0)
        if scores["zip"] == 1.0:
            breakdown.mode = "po_box_same_zip"
            breakdown.add("po_box", scores["po_box"], 1.0)
            return breakdown.finish(scores["po_box"])
        return _weighted(breakdown, scores, PO_BOX_WEIGHTS)

    breakdown.mode = "po_box_no_zip"
    if scores["po_box"] < PO_BOX_NUMBER_FLOOR:
        breakdown.add("po_box", scores["po_box"], 1.0)
        return breakdown.finish(0.0)
    if scores["po_box"] == 1.0:
        return _weighted(breakdown, scores, PO_BOX_EXACT_NO_ZIP_WEIGHTS)
    return _weighted(breakdown, scores, PO_BOX_NO_ZIP_WEIGHTS)


def _local_comparison(
    a: Address,
    b: Address,
    config: MatchingConfig,
    breakdown: ComparisonBreakdown,
) -> ComparisonBreakdown:
    number = term_similarity(a.street_number, b.street_number)
    if has_local_zip(a, config) or has_local_zip(b, config):
        street = term_similarity(a.street_name, b.street_name)
        return _weighted(breakdown, {"street_number": number, "street_name": street}, LOCAL_WEIGHTS)
    breakdown.mode = "local_no_zip"
    breakdown.add("street_number", number, 1.0)
    return breakdown.finish(number)


def _general_comparison(a: Address, b: Address, breakdown: ComparisonBreakdown) -> ComparisonBreakdown:
    scores = {
        "street_number": term_similarity(a.street_number, b.street_number),
        "street_name": term_similarity(a.street_name, b.street_name),
        "state": state_similarity(a, b),
    }
    if _present(a.zip) or _present(b.zip):
        scores["zip"] = zip_similarity(a, b)
        return _weighted(breakdown, scores, GENERAL_ZIP_WEIGHTS)
    breakdown.mode = "general_no_zip"
    scores["city"] = term_similarity(a.city, b.city)
    return _weighted(breakdown, scores, GENERAL_CITY_WEIGHTS)


def address_comparison(a: Address, b: Address, config: MatchingConfig) -> ComparisonBreakdown:
    """Score two addresses in [0, 1]."""
    if a.is_po_box or b.is_po_box:
        breakdown = ComparisonBreakdown(calculator=CalculatorKind.ADDRESS.value, mode="po_box")
        return _po_box_comparison(a, b, breakdown)
    if is_local_address(a, config) or is_local_address(b, config):
        breakdown = ComparisonBreakdown(calculator=CalculatorKind.ADDRESS.value, mode="local")
        return _local_comparison(a, b, config, breakdown)
    breakdown = ComparisonBreakdown(calculator=CalculatorKind.ADDRESS.value, mode="general")
    return _general_comparison(a, b, breakdown)
