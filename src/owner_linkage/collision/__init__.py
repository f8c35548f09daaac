"""Fire-number collision registry and resolver."""
from __future__ import annotations

from .registry import CollisionRegistry, RegistryEntry, RegistryRow, RegistrySnapshot, RegistryStats
from .resolver import (
    CandidateScore,
    CollisionCase,
    ResolutionOutcome,
    ResolutionResult,
    address_collision_base,
    classify,
    resolve,
)

__all__ = [
    "CandidateScore",
    "CollisionCase",
    "CollisionRegistry",
    "RegistryEntry",
    "RegistryRow",
    "RegistrySnapshot",
    "RegistryStats",
    "ResolutionOutcome",
    "ResolutionResult",
    "address_collision_base",
    "classify",
    "resolve",
]
