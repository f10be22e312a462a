"""Resolve display names and supplier identity for customers and quotations.

Quotations do not carry a supplier foreign key. The supplier is written by
hand into the notes field (``Suppliers: Acme Corp, Beta Inc``) and matched
back against the suppliers table by a loose, case-insensitive substring test.
The result is advisory: a supplier synthesized from notes has no id and must
not be used for joins.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Iterable, Optional, Sequence

from salesdesk import models
from salesdesk.schemas import PartyRead

UNKNOWN_SUPPLIER = "Unknown Supplier"
SUPPLIER_PARTY_TYPE = "Supplier"

SUPPLIER_NOTES_PATTERN = re.compile(r"suppliers?:\s*([^\r\n]*)", re.IGNORECASE)

Accessor = Callable[[Any], Optional[str]]

NAME_ACCESSORS: tuple[Accessor, ...] = (
    lambda row: getattr(row, "name", None),
    lambda row: getattr(row, "customer_name", None),
    lambda row: getattr(row, "company_name", None),
    lambda row: getattr(row, "full_name", None),
)

ADDRESS_ACCESSORS: tuple[Accessor, ...] = (
    lambda row: getattr(row, "address", None),
    lambda row: getattr(row, "billing_address", None),
)


def first_non_empty(row: Any, accessors: Iterable[Accessor]) -> Optional[str]:
    for accessor in accessors:
        value = accessor(row)
        if value is not None and str(value).strip():
            return value
    return None


def display_name(row: Any) -> Optional[str]:
    if row is None:
        return None
    return first_non_empty(row, NAME_ACCESSORS)


def customer_party(customer: models.Customer | None) -> PartyRead | None:
    if customer is None:
        return None
    return PartyRead(
        id=customer.id,
        name=display_name(customer),
        email=customer.email,
        phone=customer.phone,
        address=first_non_empty(customer, ADDRESS_ACCESSORS),
        customer_type=customer.customer_type,
    )


def supplier_party(supplier: models.Supplier) -> PartyRead:
    return PartyRead(
        id=supplier.id,
        name=supplier.name,
        email=supplier.email,
        phone=supplier.phone,
        address=supplier.address,
        customer_type=SUPPLIER_PARTY_TYPE,
    )


def extract_supplier_name(notes: str | None) -> Optional[str]:
    """First comma-separated name after ``supplier:``/``suppliers:``, if any."""
    if not notes:
        return None
    match = SUPPLIER_NOTES_PATTERN.search(notes)
    if not match:
        return None
    first = match.group(1).split(",")[0].strip()
    return first or None


def match_supplier(
    name: str, suppliers: Sequence[models.Supplier]
) -> models.Supplier | None:
    needle = name.lower()
    for supplier in suppliers:
        candidate = (supplier.name or "").strip().lower()
        if not candidate:
            continue
        if needle in candidate or candidate in needle:
            return supplier
    return None


def resolve_supplier(
    notes: str | None, suppliers: Sequence[models.Supplier]
) -> tuple[PartyRead | None, str]:
    """Return ``(supplier, supplier_name)`` for a quotation's notes.

    ``supplier_name`` is never empty; it falls back to ``UNKNOWN_SUPPLIER``.
    """
    extracted = extract_supplier_name(notes)
    if extracted is None:
        return None, UNKNOWN_SUPPLIER

    matched = match_supplier(extracted, suppliers)
    if matched is not None:
        return supplier_party(matched), matched.name

    synthetic = PartyRead(id=None, name=extracted, customer_type=SUPPLIER_PARTY_TYPE)
    return synthetic, extracted
