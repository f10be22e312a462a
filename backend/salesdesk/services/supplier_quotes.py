from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Mapping, Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from salesdesk import models
from salesdesk.core.errors import (
    DatabaseError,
    DuplicateRecordError,
    RecordNotFoundError,
    RecordReferencedError,
    ValidationFailedError,
)
from salesdesk.schemas import (
    DeleteAck,
    QuotationCreate,
    QuotationDetail,
    QuotationListRow,
    QuotationRead,
    QuotationUpdate,
)
from salesdesk.services.quote_numbering import next_quote_number
from salesdesk.services.party_resolution import customer_party, display_name, resolve_supplier
from salesdesk.services.reference_guard import has_references

logger = logging.getLogger("salesdesk.supplier_quotes")

_NO_FILTER = {"", "all"}
# Columns that cannot be cleared through a partial update.
_REQUIRED_COLUMNS = {"quote_number", "status", "revision", "is_superseded"}


@dataclass(frozen=True)
class QuoteListParams:
    supplier: Optional[str] = None
    status: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    # Accepted for API compatibility; never applied to the query.
    search: Optional[str] = None


def _selected(raw: Optional[str]) -> bool:
    return raw is not None and raw.strip().lower() not in _NO_FILTER


def _supplier_filter_id(raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ValidationFailedError(
            "Invalid supplier quote filters",
            [
                {
                    "loc": ["query", "supplier"],
                    "msg": "Input should be a valid integer or 'all'",
                    "type": "int_parsing",
                }
            ],
        ) from exc


def _base_query(db: Session):
    return db.query(models.Quotation, models.Customer).outerjoin(
        models.Customer, models.Quotation.customer_id == models.Customer.id
    )


def list_quotes(db: Session, params: QuoteListParams) -> list[QuotationListRow]:
    """Quotations with customer and note-derived supplier embedded inline."""
    query = _base_query(db)

    if _selected(params.supplier):
        query = query.filter(models.Quotation.customer_id == _supplier_filter_id(params.supplier))
    if _selected(params.status):
        query = query.filter(models.Quotation.status == params.status.strip())
    if params.date_from is not None:
        query = query.filter(models.Quotation.valid_until >= params.date_from)
    if params.date_to is not None:
        query = query.filter(models.Quotation.valid_until <= params.date_to)
    if params.search and params.search.strip():
        logger.debug("supplier_quotes_search_not_applied", extra={"search": params.search})

    rows = query.order_by(models.Quotation.created_at.desc(), models.Quotation.id.desc()).all()
    if not rows:
        return []

    suppliers = db.query(models.Supplier).order_by(models.Supplier.id.asc()).all()

    result: list[QuotationListRow] = []
    for quote, customer in rows:
        supplier, supplier_name = resolve_supplier(quote.notes, suppliers)
        result.append(
            QuotationListRow(
                **QuotationRead.model_validate(quote).model_dump(),
                supplier=supplier,
                supplier_name=supplier_name,
                customer=customer_party(customer),
                customer_embedded=True,
            )
        )
    return result


def get_quote(db: Session, quote_id: int) -> QuotationDetail | None:
    row = _base_query(db).filter(models.Quotation.id == quote_id).first()
    if row is None:
        return None
    quote, customer = row
    return QuotationDetail(
        **QuotationRead.model_validate(quote).model_dump(),
        supplier_name=display_name(customer),
    )


def get_quote_items(db: Session, quote_id: int) -> list[models.QuotationItem]:
    return (
        db.query(models.QuotationItem)
        .filter(models.QuotationItem.quotation_id == quote_id)
        .order_by(models.QuotationItem.id.asc())
        .all()
    )


def _ensure_unique_quote_number(db: Session, quote_number: str, *, exclude_id: int | None = None) -> None:
    query = db.query(models.Quotation.id).filter(models.Quotation.quote_number == quote_number)
    if exclude_id is not None:
        query = query.filter(models.Quotation.id != exclude_id)
    if query.first() is not None:
        raise DuplicateRecordError(
            "Duplicate supplier quote",
            detail=f"Supplier quote {quote_number} already exists",
        )


def create_quote(db: Session, data: Mapping[str, Any]) -> QuotationDetail:
    """Insert a quotation and its items as one unit, then re-read it."""
    try:
        payload = QuotationCreate.model_validate(data)
    except ValidationError as exc:
        raise ValidationFailedError.from_pydantic("Invalid supplier quote data", exc) from exc

    values = payload.model_dump(exclude={"items"})
    if values.get("quote_number"):
        _ensure_unique_quote_number(db, values["quote_number"])

    try:
        if not values.get("quote_number"):
            values["quote_number"] = next_quote_number(db)

        quote = models.Quotation(**values)
        db.add(quote)
        db.flush()

        for item in payload.items:
            item_values = item.model_dump()
            if item_values.get("line_total") is None and item_values.get("unit_price") is not None:
                item_values["line_total"] = item_values["quantity"] * item_values["unit_price"]
            db.add(models.QuotationItem(**item_values, quotation_id=quote.id))

        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("supplier_quote_create_failed")
        raise DatabaseError("Failed to create supplier quote", detail=str(exc)) from exc

    logger.info(
        "supplier_quote_created",
        extra={"quotation_id": quote.id, "items": len(payload.items)},
    )
    return get_quote(db, quote.id)


def update_quote(db: Session, quote_id: int, data: Mapping[str, Any]) -> QuotationDetail:
    try:
        payload = QuotationUpdate.model_validate(data)
    except ValidationError as exc:
        raise ValidationFailedError.from_pydantic("Invalid supplier quote data", exc) from exc

    quote = db.get(models.Quotation, quote_id)
    if quote is None:
        raise RecordNotFoundError("Supplier quote not found")

    values = {
        field: value
        for field, value in payload.model_dump(exclude_unset=True).items()
        if not (field in _REQUIRED_COLUMNS and value is None)
    }
    if values.get("quote_number") and values["quote_number"] != quote.quote_number:
        _ensure_unique_quote_number(db, values["quote_number"], exclude_id=quote.id)

    try:
        for field, value in values.items():
            setattr(quote, field, value)
        quote.updated_at = datetime.now(timezone.utc)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("supplier_quote_update_failed", extra={"quotation_id": quote_id})
        raise DatabaseError("Failed to update supplier quote", detail=str(exc)) from exc

    return get_quote(db, quote_id)


def delete_quote(db: Session, quote_id: int) -> DeleteAck:
    """Delete a quotation and its items atomically.

    Refuses when a sales order, customer acceptance or purchase order still
    points at the quotation.
    """
    if db.get(models.Quotation, quote_id) is None:
        raise RecordNotFoundError("Supplier quote not found")

    if has_references(db, quote_id):
        raise RecordReferencedError(
            "Supplier quote is referenced by sales orders, customer acceptances "
            "or purchase orders and cannot be deleted"
        )

    try:
        # Items first: quotation_items.quotation_id references quotations.id.
        db.query(models.QuotationItem).filter(
            models.QuotationItem.quotation_id == quote_id
        ).delete()
        db.query(models.Quotation).filter(models.Quotation.id == quote_id).delete()
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("supplier_quote_delete_failed", extra={"quotation_id": quote_id})
        raise DatabaseError("Failed to delete supplier quote", detail=str(exc)) from exc

    logger.info("supplier_quote_deleted", extra={"quotation_id": quote_id})
    return DeleteAck(message="Supplier quote deleted successfully")
