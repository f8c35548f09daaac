"""Entity models: names, household membership, auxiliary info and the entity itself."""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from owner_linkage.models.base import CalculatorKind, Comparable
from owner_linkage.models.contact import ContactInfo
from owner_linkage.models.terms import Term

LOCATION_IDENTIFIER_PATTERN = re.compile(r"^(\d+)([A-Z])?$")


class DataSource(str, Enum):
    """Registries the records are reconciled from."""

    BLOOMERANG = "bloomerang"  # donor / contact registry
    VISION_APPRAISAL = "vision_appraisal"  # property-appraisal registry


class EntityKind(str, Enum):
    INDIVIDUAL = "individual"
    HOUSEHOLD = "household"
    BUSINESS = "business"
    LEGAL_CONSTRUCT = "legal_construct"


class Name(Comparable):
    """Structured name produced by the external name classifier.

    Individuals carry first / other / last parts; household and business
    names usually carry only ``full_name``.
    """

    model_config = ConfigDict(frozen=True)

    comparison_calculator_name: CalculatorKind | None = CalculatorKind.NAME

    title: Term | None = None
    first_name: Term | None = None
    other_names: Term | None = None
    last_name: Term | None = None
    suffix: Term | None = None
    full_name: Term | None = None

    weights: dict[str, float] = Field(
        default_factory=lambda: {"last_name": 0.5, "first_name": 0.4, "other_names": 0.1}
    )

    COMPONENTS: ClassVar[tuple[str, ...]] = ("last_name", "first_name", "other_names")

    @property
    def has_parts(self) -> bool:
        return any(
            getattr(self, part) is not None and not getattr(self, part).is_blank()
            for part in self.COMPONENTS
        )

    @property
    def is_blank(self) -> bool:
        """No structured part and no full-name text."""
        return not self.has_parts and not self.full_text

    @property
    def full_text(self) -> str:
        if self.full_name is not None and not self.full_name.is_blank():
            return self.full_name.text
        parts = (self.title, self.first_name, self.other_names, self.last_name, self.suffix)
        return " ".join(p.text for p in parts if p is not None and not p.is_blank())

    def __str__(self) -> str:
        return self.full_text


class HouseholdMembership(Comparable):
    """Household metadata attached to an individual."""

    model_config = ConfigDict(frozen=True)

    comparison_calculator_name: CalculatorKind | None = CalculatorKind.HOUSEHOLD

    is_in_household: bool = False
    household_identifier: str | None = None
    household_name: str | None = None
    is_head_of_household: bool = False


class OtherInfo(Comparable):
    """Auxiliary data bag. Compared field by field when it exposes a comparator."""

    model_config = ConfigDict(frozen=True)

    household: HouseholdMembership | None = None
    terms: dict[str, Term] = Field(default_factory=dict)


class LegacyInfo(Comparable):
    """Fields kept from earlier versions of a source record."""

    model_config = ConfigDict(frozen=True)

    terms: dict[str, Term] = Field(default_factory=dict)


class LocationIdentifier(BaseModel):
    """Fire number: numeric base plus an optional one-letter suffix."""

    model_config = ConfigDict(frozen=True)

    base: str
    suffix: str | None = None

    @classmethod
    def parse(cls, raw: str | int | None) -> LocationIdentifier | None:
        if raw is None:
            return None
        text = str(raw).strip().upper()
        if not text:
            return None
        match = LOCATION_IDENTIFIER_PATTERN.match(text)
        if match:
            return cls(base=match.group(1), suffix=match.group(2))
        return cls(base=text)

    @property
    def value(self) -> str:
        return f"{self.base}{self.suffix or ''}"

    def with_suffix(self, suffix: str) -> LocationIdentifier:
        return LocationIdentifier(base=self.base, suffix=suffix)

    def __str__(self) -> str:
        return self.value


def base_of(raw: str | int | None) -> str | None:
    """Base fire number of ``raw`` ("72A" -> "72"); None when there is no identifier."""
    identifier = LocationIdentifier.parse(raw)
    return identifier.base if identifier else None


class EntityWeights(BaseModel):
    """Base component weights of the entity comparator."""

    model_config = ConfigDict(frozen=True)

    name: float = 0.5
    contact_info: float = 0.3
    other_info: float = 0.15
    legacy_info: float = 0.05

    @classmethod
    def for_kind(cls, kind: EntityKind) -> EntityWeights:
        # Household names are synthesized, so the address carries more of the evidence
        if kind == EntityKind.HOUSEHOLD:
            return cls(name=0.4, contact_info=0.4)
        return cls()

    def as_dict(self) -> dict[str, float]:
        return {
            "name": self.name,
            "contact_info": self.contact_info,
            "other_info": self.other_info,
            "legacy_info": self.legacy_info,
        }


class Entity(Comparable):
    """A person, household, business or legal construct from one registry.

    Created by external parsing. The collision resolver is the only writer:
    it folds merged records into ``subdivisions`` and suffixes the fire
    number of newly forked owners.
    """

    comparison_calculator_name: CalculatorKind | None = CalculatorKind.ENTITY

    external_id: str | None = None  # PID for appraisal records, account number for donors
    source: DataSource = DataSource.VISION_APPRAISAL
    kind: EntityKind = EntityKind.INDIVIDUAL
    name: Name | None = None
    contact_info: ContactInfo | None = None
    other_info: OtherInfo | None = None
    legacy_info: LegacyInfo | None = None
    location_identifier: LocationIdentifier | None = None
    weights: EntityWeights | None = None
    subdivisions: dict[str, dict[str, Any]] = Field(default_factory=dict)

    @property
    def comparison_weights(self) -> EntityWeights:
        return self.weights or EntityWeights.for_kind(self.kind)

    @property
    def display_name(self) -> str:
        if self.name is not None and self.name.full_text:
            return self.name.full_text
        return "Unknown"

    def snapshot(self) -> dict[str, Any]:
        """JSON-safe copy of the record, without its own subdivisions."""
        return self.model_dump(mode="json", exclude={"subdivisions"})

    def add_subdivision(self, key: str, other: Entity) -> None:
        self.subdivisions[key] = other.snapshot()
