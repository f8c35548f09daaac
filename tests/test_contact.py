"""Tests for the ContactInfo comparator."""

import pytest

from owner_linkage.config import MatchingConfig
from owner_linkage.models import ContactInfo, Term
from owner_linkage.similarity import contact_info_comparison

from conftest import build_address


@pytest.fixture
def config():
    return MatchingConfig()


@pytest.fixture
def mailing():
    return build_address("10", "Main Street", "Providence", "RI", "02903")


class TestContactInfoComparison:
    def test_primary_only_renormalizes(self, config, island_address):
        a = ContactInfo(primary_address=island_address)
        result = contact_info_comparison(a, a, config)
        assert set(result.components) == {"primary_address"}
        assert result.components["primary_address"].weight == 1.0
        assert result.overall == 1.0

    def test_email_case_insensitive(self, config, island_address):
        a = ContactInfo(primary_address=island_address, email=Term.of("Owner@Example.com"))
        b = ContactInfo(primary_address=island_address, email=Term.of("owner@example.com"))
        result = contact_info_comparison(a, b, config)
        assert result.components["email"].similarity == 1.0
        assert result.overall == 1.0

    def test_swapped_primary_and_secondary(self, config, island_address, mailing):
        a = ContactInfo(primary_address=island_address, secondary_addresses=[mailing])
        b = ContactInfo(primary_address=mailing, secondary_addresses=[island_address])
        result = contact_info_comparison(a, b, config)
        assert result.components["primary_address"].similarity == 1.0
        assert result.components["secondary_address"].similarity == 1.0
        assert result.overall == 1.0

    def test_winning_pair_not_reused_for_secondary(self, config, island_address, mailing):
        a = ContactInfo(primary_address=island_address, secondary_addresses=[mailing])
        b = ContactInfo(primary_address=island_address)
        result = contact_info_comparison(a, b, config)
        # the island address is consumed by the primary pairing
        assert "secondary_address" not in result.components
        assert result.overall == 1.0

    def test_no_addresses_or_email_scores_zero(self, config):
        assert contact_info_comparison(ContactInfo(), ContactInfo(), config).overall == 0.0

    def test_weights(self, config, island_address, mailing):
        a = ContactInfo(
            primary_address=island_address,
            secondary_addresses=[mailing],
            email=Term.of("a@example.com"),
        )
        result = contact_info_comparison(a, a, config)
        assert result.components["primary_address"].weight == pytest.approx(0.6)
        assert result.components["secondary_address"].weight == pytest.approx(0.2)
        assert result.components["email"].weight == pytest.approx(0.2)
