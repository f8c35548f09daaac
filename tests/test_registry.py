"""Tests for the fire-number collision registry."""

import pytest
from pydantic import ValidationError

from owner_linkage.collision import CollisionRegistry
from owner_linkage.exceptions import SuffixExhausted

from conftest import build_entity


@pytest.fixture
def registry():
    return CollisionRegistry()


class TestRegister:
    def test_register_unsuffixed(self, registry):
        entity = build_entity("P1", "John", "Smith")
        entry = registry.register("72", entity)
        assert entry.suffix is None
        assert registry.is_registered("72")
        assert registry.is_registered("72B")  # looked up by base
        assert registry.entries_at("72")[0].entity is entity

    def test_second_unsuffixed_owner_rejected(self, registry):
        registry.register("72", build_entity("P1"))
        with pytest.raises(ValueError):
            registry.register("72", build_entity("P2"))

    def test_suffix_cannot_be_reused(self, registry):
        registry.register("72A", build_entity("P1"))
        with pytest.raises(ValueError):
            registry.register("72A", build_entity("P2"))

    def test_empty_identifier(self, registry):
        with pytest.raises(ValueError):
            registry.register("", build_entity("P1"))

    def test_entries_at_returns_copy(self, registry):
        registry.register("72", build_entity("P1"))
        registry.entries_at("72").clear()
        assert len(registry.entries_at("72")) == 1


class TestSuffixes:
    def test_next_suffix_starts_at_a(self, registry):
        registry.register("72", build_entity("P1"))
        assert registry.next_suffix("72") == "A"

    def test_next_suffix_is_lowest_unused(self, registry):
        registry.register("72", build_entity("P1"))
        registry.register("72A", build_entity("P2"))
        assert registry.next_suffix("72") == "B"

    def test_exhausted(self, registry):
        registry.register("9", build_entity("P0"))
        for letter in "ABCDEFGHIJKLMNOPQRSTUVWXYZ":
            registry.register(f"9{letter}", build_entity(f"P{letter}"))
        with pytest.raises(SuffixExhausted) as exc:
            registry.next_suffix("9")
        assert exc.value.base == "9"
        assert exc.value.owners == 27


class TestCollisionBases:
    def test_mark(self, registry):
        assert not registry.is_collision_base("72")
        registry.mark_collision("72C")
        assert registry.is_collision_base("72")


class TestReporting:
    def test_stats(self, registry):
        registry.register("72", build_entity("P1"))
        registry.register("72A", build_entity("P2"))
        registry.register("100", build_entity("P3"))
        stats = registry.stats()
        assert stats.total_bases == 2
        assert stats.total_entities == 3
        assert stats.bases_with_multiple_owners == 1

    def test_snapshot_rows(self, registry):
        registry.register("72", build_entity("P1", "John", "Smith"))
        registry.register("72A", build_entity("P2", "Mary", "Jones"))
        snapshot = registry.snapshot()
        assert snapshot.identifiers() == ["72", "72A"]
        assert snapshot.rows[1].display_name == "Mary Jones"
        assert len(snapshot) == 2

    def test_snapshot_is_immutable(self, registry):
        registry.register("72", build_entity("P1"))
        snapshot = registry.snapshot()
        with pytest.raises(ValidationError):
            snapshot.rows[0].identifier = "73"

    def test_details(self, registry):
        registry.register("72", build_entity("P1", "John", "Smith"))
        assert registry.details("72") == [
            {"identifier": "72", "external_id": "P1", "display_name": "John Smith", "merged_ids": []}
        ]

    def test_clear(self, registry):
        registry.register("72", build_entity("P1"))
        registry.mark_collision("72")
        registry.clear()
        assert len(registry) == 0
        assert not registry.is_registered("72")
        assert not registry.is_collision_base("72")
