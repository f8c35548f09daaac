"""Shared record builders."""

from __future__ import annotations

import pytest

from owner_linkage.models import Address, ContactInfo, DataSource, Entity, Name, Term


def _term(value):
    return Term.of(value) if value is not None else None


def build_address(number=None, street=None, city=None, state=None, zip=None, po_box=None) -> Address:
    return Address(
        street_number=_term(number),
        street_name=_term(street),
        city=_term(city),
        state=_term(state),
        zip=_term(zip),
        po_box=_term(po_box),
    )


def build_entity(
    external_id: str | None,
    first: str | None = None,
    last: str | None = None,
    address: Address | None = None,
    source: DataSource = DataSource.VISION_APPRAISAL,
) -> Entity:
    name = Name(first_name=_term(first), last_name=_term(last)) if first or last else None
    contact = ContactInfo(primary_address=address) if address is not None else None
    return Entity(external_id=external_id, source=source, name=name, contact_info=contact)


@pytest.fixture
def make_address():
    return build_address


@pytest.fixture
def make_entity():
    return build_entity


@pytest.fixture
def island_address():
    """Fire number 100 on Corn Neck Road."""
    return build_address("100", "Corn Neck Road", "Block Island", "RI", "02807")
