"""Address and contact-information composites."""

from __future__ import annotations

from pydantic import ConfigDict, Field

from owner_linkage.models.base import CalculatorKind, Comparable
from owner_linkage.models.terms import Term
from owner_linkage.utils.normalize import parse_po_box


class Address(Comparable):
    """Postal or property-location address built from optional terms.

    On the island, ``street_number`` carries the property's fire number.
    """

    model_config = ConfigDict(frozen=True)

    comparison_calculator_name: CalculatorKind | None = CalculatorKind.ADDRESS

    street_number: Term | None = None
    street_name: Term | None = None
    city: Term | None = None
    state: Term | None = None
    zip: Term | None = None
    secondary_unit_type: Term | None = None
    secondary_unit_number: Term | None = None
    po_box: Term | None = None

    @property
    def is_po_box(self) -> bool:
        if self.po_box is not None and not self.po_box.is_blank():
            return True
        return self.street_name is not None and parse_po_box(self.street_name.text) is not None

    @property
    def box_number(self) -> Term | None:
        """Box number term, from ``po_box`` or a box-style street line."""
        if self.po_box is not None and not self.po_box.is_blank():
            return self.po_box
        if self.street_name is None:
            return None
        number = parse_po_box(self.street_name.text)
        if number is None:
            return None
        if number:
            return self.street_name.model_copy(update={"value": number})
        return self.street_number

    def __str__(self) -> str:
        if self.is_po_box:
            head = f"PO Box {self.box_number or ''}".strip()
        else:
            head = " ".join(str(t) for t in (self.street_number, self.street_name) if t)
        tail = " ".join(str(t) for t in (self.state, self.zip) if t)
        return ", ".join(part for part in (head, str(self.city or ""), tail) if part)


class ContactInfo(Comparable):
    """Addresses and electronic contact points of one record."""

    model_config = ConfigDict(frozen=True)

    comparison_calculator_name: CalculatorKind | None = CalculatorKind.CONTACT_INFO

    primary_address: Address | None = None
    secondary_addresses: list[Address] = Field(default_factory=list)
    email: Term | None = None
    phone: Term | None = None

    @property
    def all_addresses(self) -> list[Address]:
        """Primary address first, then secondaries in order."""
        head = [self.primary_address] if self.primary_address is not None else []
        return head + list(self.secondary_addresses)
