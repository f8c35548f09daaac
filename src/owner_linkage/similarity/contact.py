"""ContactInfo comparison.

The primary similarity is the best pairing of either record's primary address
against every address of the other record; the two winning addresses are then
set aside and the secondary similarity is the best pairing among the rest.
Components present on only one side drop out and the remaining weights are
renormalized.
"""

from __future__ import annotations

from owner_linkage.config import MatchingConfig
from owner_linkage.models.base import CalculatorKind
from owner_linkage.models.breakdown import ComparisonBreakdown, weighted_total
from owner_linkage.models.contact import Address, ContactInfo
from owner_linkage.similarity.address import address_comparison
from owner_linkage.utils.levenshtein import levenshtein_similarity

CONTACT_WEIGHTS = {"primary_address": 0.6, "secondary_address": 0.2, "email": 0.2}


def _best_pair(
    left: list[Address],
    right: list[Address],
    config: MatchingConfig,
) -> tuple[float, int, int] | None:
    """Highest-scoring (score, left index, right index); the first pair wins ties."""
    best: tuple[float, int, int] | None = None
    for i, a in enumerate(left):
        for j, b in enumerate(right):
            score = address_comparison(a, b, config).overall
            if best is None or score > best[0]:
                best = (score, i, j)
    return best


def _primary_pair(
    left: list[Address],
    right: list[Address],
    left_has_primary: bool,
    right_has_primary: bool,
    config: MatchingConfig,
) -> tuple[float, int, int] | None:
    best: tuple[float, int, int] | None = None
    if left_has_primary:
        best = _best_pair(left[:1], right, config)
    if right_has_primary:
        candidate = _best_pair(left, right[:1], config)
        if candidate is not None and (best is None or candidate[0] > best[0]):
            best = candidate
    return best


def _email_text(contact: ContactInfo) -> str:
    if contact.email is None or contact.email.is_blank():
        return ""
    return contact.email.text.lower()


def contact_info_comparison(a: ContactInfo, b: ContactInfo, config: MatchingConfig) -> ComparisonBreakdown:
    """Score two ContactInfo records in [0, 1]."""
    left = a.all_addresses
    right = b.all_addresses
    scores: dict[str, float] = {}

    primary = _primary_pair(
        left,
        right,
        a.primary_address is not None,
        b.primary_address is not None,
        config,
    )
    if primary is not None:
        score, i, j = primary
        scores["primary_address"] = score
        left = left[:i] + left[i + 1:]
        right = right[:j] + right[j + 1:]

    secondary = _best_pair(left, right, config)
    if secondary is not None:
        scores["secondary_address"] = secondary[0]

    email1, email2 = _email_text(a), _email_text(b)
    if email1 and email2:
        scores["email"] = levenshtein_similarity(email1, email2)

    breakdown = ComparisonBreakdown(calculator=CalculatorKind.CONTACT_INFO.value)
    return weighted_total(breakdown, scores, CONTACT_WEIGHTS)
