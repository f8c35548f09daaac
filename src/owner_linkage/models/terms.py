"""Attributed terms: the atomic, provenance-tagged values records are built from."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from owner_linkage.utils.levenshtein import levenshtein_similarity
from owner_linkage.utils.normalize import fold_case


class SourceAttribution(BaseModel):
    """Where a term was read from."""

    model_config = ConfigDict(frozen=True)

    source: str
    index: int = -1  # row / field position in the source, -1 when unknown
    identifier: str | int | None = None


class Term(BaseModel):
    """An immutable comparable value with source attribution.

    Strings compare through the vowel-weighted Levenshtein similarity on
    case-folded text; every other value compares by exact equality.
    """

    model_config = ConfigDict(frozen=True)

    value: Any = None
    sources: tuple[SourceAttribution, ...] = Field(default_factory=tuple)
    field_name: str = ""

    @classmethod
    def of(
        cls,
        value: Any,
        source: str | None = None,
        field_name: str = "",
        index: int = -1,
        identifier: str | int | None = None,
    ) -> Term:
        sources = (SourceAttribution(source=source, index=index, identifier=identifier),) if source else ()
        return cls(value=value, sources=sources, field_name=field_name)

    @property
    def source_names(self) -> list[str]:
        return [s.source for s in self.sources]

    def has_source(self, source: str) -> bool:
        return any(s.source == source for s in self.sources)

    def with_source(
        self,
        source: str,
        index: int = -1,
        identifier: str | int | None = None,
    ) -> Term:
        """Return a copy attributed to one more source."""
        attribution = SourceAttribution(source=source, index=index, identifier=identifier)
        return self.model_copy(update={"sources": (*self.sources, attribution)})

    @property
    def text(self) -> str:
        """Value as display text ("" for None)."""
        return "" if self.value is None else str(self.value).strip()

    def is_blank(self) -> bool:
        return self.value is None or (isinstance(self.value, str) and not self.value.strip())

    def compare_to(self, other: Term | None) -> float:
        if other is None:
            return 0.0
        if isinstance(self.value, str) and isinstance(other.value, str):
            return levenshtein_similarity(fold_case(self.value), fold_case(other.value))
        return 1.0 if self.value == other.value else 0.0

    def __str__(self) -> str:
        return self.text
