"""Domain models for record reconciliation."""
from __future__ import annotations

from owner_linkage.models.base import CalculatorKind, Comparable, resolve_calculator
from owner_linkage.models.breakdown import ComparisonBreakdown, ComponentScore
from owner_linkage.models.contact import Address, ContactInfo
from owner_linkage.models.entity import (
    DataSource,
    Entity,
    EntityKind,
    EntityWeights,
    HouseholdMembership,
    LegacyInfo,
    LocationIdentifier,
    Name,
    OtherInfo,
    base_of,
)
from owner_linkage.models.terms import SourceAttribution, Term

__all__ = [
    # Terms
    "SourceAttribution",
    "Term",
    # Composites
    "Address",
    "CalculatorKind",
    "Comparable",
    "ComparisonBreakdown",
    "ComponentScore",
    "ContactInfo",
    "DataSource",
    "Entity",
    "EntityKind",
    "EntityWeights",
    "HouseholdMembership",
    "LegacyInfo",
    "LocationIdentifier",
    "Name",
    "OtherInfo",
    "base_of",
    "resolve_calculator",
]
