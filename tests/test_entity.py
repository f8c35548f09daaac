"""Tests for name and entity comparison."""

import pytest

from owner_linkage.config import MatchingConfig
from owner_linkage.models import (
    Entity,
    EntityKind,
    EntityWeights,
    LegacyInfo,
    LocationIdentifier,
    Name,
    OtherInfo,
    Term,
    base_of,
)
from owner_linkage.similarity import boosted_weights, entity_comparison, name_comparison
from owner_linkage.utils.levenshtein import levenshtein_similarity

from conftest import build_address, build_entity

BASE_WEIGHTS = {"name": 0.5, "contact_info": 0.3, "other_info": 0.15, "legacy_info": 0.05}


@pytest.fixture
def config():
    return MatchingConfig()


class TestNameComparison:
    def test_identical_parts(self, config):
        a = Name(first_name=Term.of("John"), last_name=Term.of("Smith"))
        result = name_comparison(a, a, config)
        assert result.mode == "components"
        assert result.overall == 1.0

    def test_missing_part_on_both_sides_drops_out(self, config):
        a = Name(first_name=Term.of("John"), last_name=Term.of("Smith"))
        b = Name(first_name=Term.of("John"), last_name=Term.of("Smyth"))
        last = levenshtein_similarity("smith", "smyth")
        result = name_comparison(a, b, config)
        assert "other_names" not in result.components
        assert result.overall == pytest.approx((0.5 * last + 0.4) / 0.9)

    def test_part_on_one_side_counts_as_mismatch(self, config):
        a = Name(first_name=Term.of("John"), last_name=Term.of("Smith"), other_names=Term.of("Q"))
        b = Name(first_name=Term.of("John"), last_name=Term.of("Smith"))
        assert name_comparison(a, b, config).overall == pytest.approx(0.9)

    def test_full_text_fallback(self, config):
        a = Name(full_name=Term.of("SMITH FAMILY TRUST"))
        b = Name(full_name=Term.of("Smith Family Trust"))
        result = name_comparison(a, b, config)
        assert result.mode == "full_text"
        assert result.overall == 1.0

    def test_custom_weights(self, config):
        a = Name(first_name=Term.of("John"), last_name=Term.of("Smith"), weights={"last_name": 1.0})
        b = Name(first_name=Term.of("Jack"), last_name=Term.of("Smith"))
        assert name_comparison(a, b, config).overall == 1.0


class TestBoostedWeights:
    def test_exact_name_boost(self):
        weights = boosted_weights(BASE_WEIGHTS, 1.0)
        assert weights["name"] == pytest.approx(0.62)
        assert weights["contact_info"] == pytest.approx(0.228)
        assert weights["other_info"] == pytest.approx(0.114)
        assert weights["legacy_info"] == pytest.approx(0.038)
        assert sum(weights.values()) == pytest.approx(1.0)

    def test_near_name_boost(self):
        assert boosted_weights(BASE_WEIGHTS, 0.97)["name"] == pytest.approx(0.56)

    def test_no_boost_below_floor(self):
        assert boosted_weights(BASE_WEIGHTS, 0.95) == BASE_WEIGHTS


class TestEntityWeights:
    def test_individual_defaults(self):
        assert EntityWeights.for_kind(EntityKind.INDIVIDUAL).as_dict() == BASE_WEIGHTS

    def test_household(self):
        weights = EntityWeights.for_kind(EntityKind.HOUSEHOLD)
        assert weights.name == 0.4
        assert weights.contact_info == 0.4


class TestEntityComparison:
    def test_identical(self, config, island_address):
        a = build_entity("P1", "John", "Smith", island_address)
        result = entity_comparison(a, a, config)
        assert result.overall == 1.0
        assert result.mode == "individual_name_boost"

    def test_shared_address_different_owner(self, config, island_address):
        a = build_entity("P1", "John", "Smith", island_address)
        b = build_entity("P2", "Mary", "Jones", island_address)
        result = entity_comparison(a, b, config)
        assert result.components["contact_info"].similarity == 1.0
        assert result.overall < config.same_owner_threshold

    def test_missing_contact_renormalizes(self, config):
        a = build_entity("P1", "John", "Smith")
        b = build_entity("P2", "John", "Smith")
        result = entity_comparison(a, b, config)
        assert set(result.components) == {"name"}
        assert result.overall == 1.0

    def test_info_blocks_without_comparator_are_skipped(self, config):
        info = OtherInfo(comparison_calculator_name=None, terms={"zoning": Term.of("R80")})
        a = build_entity("P1", "John", "Smith").model_copy(update={"other_info": info})
        assert "other_info" not in entity_comparison(a, a, config).components

    def test_info_blocks_compared_structurally(self, config):
        a = build_entity("P1", "John", "Smith").model_copy(
            update={"legacy_info": LegacyInfo(terms={"owner": Term.of("J SMITH")})}
        )
        b = build_entity("P2", "John", "Smith").model_copy(
            update={"legacy_info": LegacyInfo(terms={"owner": Term.of("J SMITH")})}
        )
        result = entity_comparison(a, b, config)
        assert result.components["legacy_info"].similarity == 1.0

    def test_blank_names_drop_out(self, config):
        a = build_entity("P1", address=build_address("7", "Old Town Road", "Block Island", "RI", "02807"))
        b = build_entity("P2", address=build_address("9", "Old Town Road", "Block Island", "RI", "02807"))
        a = a.model_copy(update={"name": Name()})
        b = b.model_copy(update={"name": Name()})
        assert a.name.is_blank
        result = entity_comparison(a, b, config)
        assert "name" not in result.components
        assert result.mode == "individual"
        assert result.overall == pytest.approx(0.15)

    def test_blank_name_on_one_side_drops_out(self, config, island_address):
        a = build_entity("P1", "John", "Smith", island_address)
        b = build_entity("P2", address=island_address).model_copy(update={"name": Name()})
        result = entity_comparison(a, b, config)
        assert set(result.components) == {"contact_info"}

    def test_household_kind_weights(self, config, island_address):
        a = build_entity("P1", None, None, island_address).model_copy(
            update={"kind": EntityKind.HOUSEHOLD, "name": Name(full_name=Term.of("Smith Household"))}
        )
        b = a.model_copy(update={"name": Name(full_name=Term.of("Jones Household"))})
        result = entity_comparison(a, b, config)
        assert result.mode == "household"
        assert result.components["contact_info"].weight == pytest.approx(0.5)


class TestEntityRecord:
    def test_display_name(self):
        assert build_entity("P1", "John", "Smith").display_name == "John Smith"
        assert Entity().display_name == "Unknown"

    def test_subdivision_snapshot(self):
        owner = build_entity("P1", "John", "Smith")
        owner.add_subdivision("P2", build_entity("P2", "John", "Smith"))
        assert owner.subdivisions["P2"]["external_id"] == "P2"
        assert "subdivisions" not in owner.subdivisions["P2"]

    def test_json_round_trip(self, island_address):
        entity = build_entity("P1", "John", "Smith", island_address)
        restored = Entity.model_validate(entity.model_dump(mode="json"))
        assert restored.compare_to(entity) == 1.0


class TestLocationIdentifier:
    @pytest.mark.parametrize(
        "raw,base,suffix",
        [("72", "72", None), ("72a", "72", "A"), (" 1423B ", "1423", "B"), (100, "100", None)],
    )
    def test_parse(self, raw, base, suffix):
        identifier = LocationIdentifier.parse(raw)
        assert identifier.base == base
        assert identifier.suffix == suffix

    def test_empty(self):
        assert LocationIdentifier.parse("  ") is None
        assert base_of(None) is None

    def test_base_of(self):
        assert base_of("72A") == "72"
