"""Weighted comparison dispatch.

Every composite names a calculator (see :class:`CalculatorKind`). When the
left operand names one, that calculator produces the final score. Otherwise
the records are compared structurally: fields are walked in declaration
order and the first field that is not identical decides the score.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import lru_cache
from typing import Any

import structlog

from owner_linkage.config import CONFIG, MatchingConfig
from owner_linkage.exceptions import ComparisonTypeMismatch
from owner_linkage.models.base import CalculatorKind, Comparable, resolve_calculator
from owner_linkage.models.breakdown import ComparisonBreakdown
from owner_linkage.models.terms import Term

logger = structlog.get_logger(__name__)

Calculator = Callable[[Any, Any, MatchingConfig], ComparisonBreakdown]

# Bookkeeping fields never take part in structural comparison
GENERIC_EXCLUDED_FIELDS = frozenset({
    "comparison_calculator_name",
    "sources",
    "subdivisions",
    "weights",
    "external_id",
})

__all__ = [
    "CalculatorKind",
    "GENERIC_EXCLUDED_FIELDS",
    "compare",
    "explain",
    "generic_comparison",
    "resolve_calculator",
]


@lru_cache(maxsize=1)
def _calculator_table() -> dict[CalculatorKind, tuple[type[Comparable], Calculator]]:
    from owner_linkage.models.contact import Address, ContactInfo
    from owner_linkage.models.entity import Entity, HouseholdMembership, Name
    from owner_linkage.similarity.address import address_comparison
    from owner_linkage.similarity.contact import contact_info_comparison
    from owner_linkage.similarity.entity import entity_comparison, name_comparison
    from owner_linkage.similarity.household import household_comparison

    return {
        CalculatorKind.ADDRESS: (Address, address_comparison),
        CalculatorKind.CONTACT_INFO: (ContactInfo, contact_info_comparison),
        CalculatorKind.NAME: (Name, name_comparison),
        CalculatorKind.ENTITY: (Entity, entity_comparison),
        CalculatorKind.HOUSEHOLD: (HouseholdMembership, household_comparison),
    }


def explain(
    a: Comparable,
    b: Comparable | None,
    config: MatchingConfig | None = None,
) -> ComparisonBreakdown:
    """Compare two composites of the same kind and return the weighted breakdown.

    Raises:
        ComparisonTypeMismatch: ``a`` and ``b`` are different composite kinds.
    """
    kind = a.comparison_calculator_name or CalculatorKind.DEFAULT
    if b is None:
        return ComparisonBreakdown(calculator=kind.value, mode="missing").finish(0.0)
    if type(a) is not type(b):
        raise ComparisonTypeMismatch(type(a).__name__, type(b).__name__)

    config = config or CONFIG
    entry = _calculator_table().get(kind)
    if entry is None:
        return generic_comparison(a, b, config)

    model, calculator = entry
    if not isinstance(a, model):
        logger.warning(
            "calculator_model_mismatch",
            calculator=kind.value,
            model=type(a).__name__,
            fallback=CalculatorKind.DEFAULT.value,
        )
        return generic_comparison(a, b, config)
    return calculator(a, b, config)


def compare(a: Comparable, b: Comparable | None, config: MatchingConfig | None = None) -> float:
    """Similarity of two composites in [0, 1]; 1.0 means identical."""
    return explain(a, b, config).overall


def generic_comparison(a: Comparable, b: Comparable, config: MatchingConfig) -> ComparisonBreakdown:
    """Field-by-field comparison; the first field scoring below 1.0 decides."""
    breakdown = ComparisonBreakdown(calculator=CalculatorKind.DEFAULT.value, mode="structural")
    for field_name in type(a).model_fields:
        if field_name in GENERIC_EXCLUDED_FIELDS:
            continue
        score = _compare_values(getattr(a, field_name), getattr(b, field_name), config)
        if score is None:
            continue
        breakdown.add(field_name, score, 1.0)
        if score < 1.0:
            return breakdown.finish(score)
    return breakdown.finish(1.0)


def _compare_values(x: Any, y: Any, config: MatchingConfig) -> float | None:
    """Score one field; None when the field is absent on both sides."""
    if x is None and y is None:
        return None
    if x is None or y is None:
        return 0.0
    if isinstance(x, Comparable):
        return explain(x, y, config).overall
    if isinstance(x, Term):
        return x.compare_to(y) if isinstance(y, Term) else 0.0
    if isinstance(x, list | tuple):
        if not isinstance(y, list | tuple) or len(x) != len(y):
            return 0.0
        return _first_unequal(_compare_values(i, j, config) for i, j in zip(x, y))
    if isinstance(x, dict):
        if not isinstance(y, dict) or x.keys() != y.keys():
            return 0.0
        return _first_unequal(_compare_values(x[k], y[k], config) for k in x)
    return 1.0 if x == y else 0.0


def _first_unequal(scores) -> float:
    for score in scores:
        if score is not None and score < 1.0:
            return score
    return 1.0
