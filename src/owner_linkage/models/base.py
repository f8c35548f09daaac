"""Composite base model and calculator binding.

Composites name their comparison calculator instead of holding a function
reference, so a record read back from the external store re-binds to the
right comparator. Names outside :class:`CalculatorKind` fall back to the
generic field-by-field comparison with a warning.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import BaseModel, field_validator

if TYPE_CHECKING:
    from owner_linkage.config import MatchingConfig
    from owner_linkage.models.breakdown import ComparisonBreakdown

logger = structlog.get_logger(__name__)


class CalculatorKind(str, Enum):
    """Closed set of comparison calculators."""

    DEFAULT = "default_weighted_comparison"
    ADDRESS = "address_weighted_comparison"
    CONTACT_INFO = "contact_info_weighted_comparison"
    NAME = "name_weighted_comparison"
    ENTITY = "entity_weighted_comparison"
    HOUSEHOLD = "household_weighted_comparison"


def resolve_calculator(name: str | CalculatorKind) -> CalculatorKind:
    """Bind a persisted calculator name to its kind."""
    if isinstance(name, CalculatorKind):
        return name
    try:
        return CalculatorKind(name)
    except ValueError:
        logger.warning("unknown_calculator", name=name, fallback=CalculatorKind.DEFAULT.value)
        return CalculatorKind.DEFAULT


class Comparable(BaseModel):
    """A composite record that can be scored against another of the same kind."""

    comparison_calculator_name: CalculatorKind | None = CalculatorKind.DEFAULT

    @field_validator("comparison_calculator_name", mode="before")
    @classmethod
    def _bind_calculator(cls, value: Any) -> CalculatorKind | None:
        if value is None:
            return None
        return resolve_calculator(value)

    @property
    def has_comparator(self) -> bool:
        return self.comparison_calculator_name is not None

    def compare_to(self, other: Comparable | None, config: MatchingConfig | None = None) -> float:
        from owner_linkage.similarity.weighted import compare

        return compare(self, other, config)

    def explain(self, other: Comparable | None, config: MatchingConfig | None = None) -> ComparisonBreakdown:
        from owner_linkage.similarity.weighted import explain

        return explain(self, other, config)
