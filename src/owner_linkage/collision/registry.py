"""Fire-number collision registry.

One registry per run, passed explicitly to the resolver. Each base fire
number maps to its owners in registration order: at most one unsuffixed
owner, then the owners forked off with suffixes A, B, C, ...
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict

from owner_linkage.exceptions import SuffixExhausted
from owner_linkage.models.entity import Entity, LocationIdentifier

logger = structlog.get_logger(__name__)

SUFFIXES = string.ascii_uppercase


@dataclass
class RegistryEntry:
    entity: Entity
    suffix: str | None = None

    def identifier(self, base: str) -> str:
        return f"{base}{self.suffix or ''}"


class RegistryRow(BaseModel):
    """One owner at one fire number, as handed to external storage."""

    model_config = ConfigDict(frozen=True)

    identifier: str
    base: str
    suffix: str | None = None
    external_id: str | None = None
    display_name: str
    merged_ids: tuple[str, ...] = ()


class RegistrySnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    rows: tuple[RegistryRow, ...] = ()
    collision_bases: tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.rows)

    def identifiers(self) -> list[str]:
        return [row.identifier for row in self.rows]


class RegistryStats(BaseModel):
    total_bases: int = 0
    total_entities: int = 0
    bases_with_multiple_owners: int = 0
    collision_bases: int = 0
    merged_records: int = 0


def _base(identifier: str | LocationIdentifier) -> str:
    if isinstance(identifier, LocationIdentifier):
        return identifier.base
    parsed = LocationIdentifier.parse(identifier)
    if parsed is None:
        raise ValueError("empty fire number")
    return parsed.base


class CollisionRegistry:
    """Owners registered under each base fire number."""

    def __init__(self) -> None:
        self._entries: dict[str, list[RegistryEntry]] = {}
        self._suffixes_used: dict[str, set[str]] = {}
        self._collision_bases: set[str] = set()

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._entries.values())

    def __contains__(self, base: str) -> bool:
        return self.is_registered(base)

    def clear(self) -> None:
        logger.info("collision_registry_cleared", bases=len(self._entries), entities=len(self))
        self._entries.clear()
        self._suffixes_used.clear()
        self._collision_bases.clear()

    def register(self, identifier: str | LocationIdentifier, entity: Entity) -> RegistryEntry:
        """Bind ``entity`` to ``identifier`` ("72" or "72B").

        Raises:
            ValueError: the identifier is empty, or the base already has an
                unsuffixed owner or an owner with the same suffix.
        """
        parsed = identifier if isinstance(identifier, LocationIdentifier) else LocationIdentifier.parse(identifier)
        if parsed is None:
            raise ValueError("empty fire number")

        entries = self._entries.setdefault(parsed.base, [])
        used = self._suffixes_used.setdefault(parsed.base, set())
        if parsed.suffix is None:
            if any(entry.suffix is None for entry in entries):
                raise ValueError(f"fire number {parsed.base} already has an unsuffixed owner")
        elif parsed.suffix in used:
            raise ValueError(f"fire number {parsed.value} is already bound")
        else:
            used.add(parsed.suffix)

        entry = RegistryEntry(entity=entity, suffix=parsed.suffix)
        entries.append(entry)
        return entry

    def entries_at(self, base: str) -> list[RegistryEntry]:
        return list(self._entries.get(_base(base), []))

    def is_registered(self, base: str) -> bool:
        return bool(self._entries.get(_base(base)))

    def next_suffix(self, base: str) -> str:
        """Lowest letter not yet bound at ``base``.

        Raises:
            SuffixExhausted: every letter A-Z is taken.
        """
        key = _base(base)
        used = self._suffixes_used.get(key, set())
        for letter in SUFFIXES:
            if letter not in used:
                return letter
        raise SuffixExhausted(key, len(self._entries.get(key, [])))

    def mark_collision(self, base: str) -> None:
        self._collision_bases.add(_base(base))

    def is_collision_base(self, base: str) -> bool:
        return _base(base) in self._collision_bases

    def stats(self) -> RegistryStats:
        merged = sum(len(e.entity.subdivisions) for entries in self._entries.values() for e in entries)
        return RegistryStats(
            total_bases=len(self._entries),
            total_entities=len(self),
            bases_with_multiple_owners=sum(1 for entries in self._entries.values() if len(entries) > 1),
            collision_bases=len(self._collision_bases),
            merged_records=merged,
        )

    def details(self, base: str) -> list[dict[str, Any]]:
        """Per-owner summary of one base, in registration order."""
        key = _base(base)
        return [
            {
                "identifier": entry.identifier(key),
                "external_id": entry.entity.external_id,
                "display_name": entry.entity.display_name,
                "merged_ids": list(entry.entity.subdivisions),
            }
            for entry in self._entries.get(key, [])
        ]

    def snapshot(self) -> RegistrySnapshot:
        rows = [
            RegistryRow(
                identifier=entry.identifier(base),
                base=base,
                suffix=entry.suffix,
                external_id=entry.entity.external_id,
                display_name=entry.entity.display_name,
                merged_ids=tuple(entry.entity.subdivisions),
            )
            for base, entries in self._entries.items()
            for entry in entries
        ]
        return RegistrySnapshot(rows=tuple(rows), collision_bases=tuple(sorted(self._collision_bases)))
