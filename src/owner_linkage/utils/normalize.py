"""Normalization helpers applied before string comparison."""

from __future__ import annotations

import re

# "PO BOX", "P.O. BOX", "P O BOX", "POBOX", "BOX"
PO_BOX_PATTERN = re.compile(r"^\s*(?:p\.?\s*o\.?\s*)?box\b\.?\s*#?\s*(?P<number>\d[\w-]*)?\s*$", re.IGNORECASE)


def fold_case(text: str) -> str:
    """Collapse whitespace and case-fold for comparison."""
    if not text:
        return ""
    return " ".join(text.split()).casefold()


def is_state_code(text: str) -> bool:
    """Two-letter postal state code such as ``RI``."""
    return len(text) == 2 and text.isalpha()


def parse_po_box(text: str) -> str | None:
    """Return the box number when ``text`` reads as a PO box, else None.

    An empty string is returned for a box marker without a number
    (``"PO BOX"`` with the number carried in a separate field).
    """
    if not text:
        return None
    match = PO_BOX_PATTERN.match(text)
    if not match:
        return None
    return match.group("number") or ""
