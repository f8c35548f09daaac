"""Weighted-component breakdown of a comparison."""

from __future__ import annotations

from pydantic import BaseModel, Field

from owner_linkage.utils.levenshtein import clamp_score


class ComponentScore(BaseModel):
    """One weighted component of a comparison."""

    similarity: float
    weight: float
    contribution: float


class ComparisonBreakdown(BaseModel):
    """Final score plus the components that produced it."""

    calculator: str
    mode: str | None = None
    overall: float = 0.0
    components: dict[str, ComponentScore] = Field(default_factory=dict)

    def add(self, name: str, similarity: float, weight: float) -> float:
        contribution = similarity * weight
        self.components[name] = ComponentScore(
            similarity=clamp_score(similarity),
            weight=round(weight, 10),
            contribution=round(contribution, 10),
        )
        return contribution

    def finish(self, total: float) -> ComparisonBreakdown:
        self.overall = clamp_score(total)
        return self


def weighted_total(breakdown: ComparisonBreakdown, scores: dict[str, float], weights: dict[str, float]) -> ComparisonBreakdown:
    """Sum ``scores`` under ``weights`` renormalized over the components present.

    Components absent from ``scores`` are left out and their weight is shared
    among the rest; no components at all scores 0.
    """
    total_weight = sum(weights[name] for name in scores)
    if total_weight <= 0:
        return breakdown.finish(0.0)
    total = 0.0
    for name, similarity in scores.items():
        total += breakdown.add(name, similarity, weights[name] / total_weight)
    return breakdown.finish(total)
