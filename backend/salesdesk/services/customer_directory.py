from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from pydantic import ValidationError
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from salesdesk import models
from salesdesk.config import settings
from salesdesk.core.errors import (
    DatabaseError,
    DuplicateRecordError,
    RecordNotFoundError,
    ValidationFailedError,
)
from salesdesk.schemas import (
    CustomerCreate,
    CustomerDetails,
    CustomerQuotationSummary,
    CustomerRead,
    CustomerStats,
    CustomerUpdate,
    Pagination,
)
from salesdesk.services.party_resolution import display_name

logger = logging.getLogger("salesdesk.customers")

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_NO_FILTER = {"", "all"}
_TRUE_VALUES = {"1", "true", "yes", "y", "on"}
_FALSE_VALUES = {"0", "false", "no", "n", "off"}
_UNCLASSIFIED = "unclassified"
_RECENT_QUOTATIONS = 5
# Columns that cannot be cleared through a partial update.
_REQUIRED_COLUMNS = {"name", "is_active"}

_NAME_COLUMNS = (
    models.Customer.name,
    models.Customer.customer_name,
    models.Customer.company_name,
    models.Customer.full_name,
)


@dataclass(frozen=True)
class CustomerFilters:
    customer_type: Optional[str] = None
    classification: Optional[str] = None
    is_active: Optional[str] = None
    search: Optional[str] = None
    # Legacy name/email search.
    name: Optional[str] = None
    email: Optional[str] = None

    @property
    def uses_legacy_search(self) -> bool:
        return bool(self.name) or bool(self.email)


def parse_int(raw: Any, default: int) -> int:
    """Leading-integer parse: ``"20abc"`` -> 20, anything else -> ``default``."""
    if raw is None:
        return default
    if isinstance(raw, int):
        return raw
    m = _INT_PREFIX.match(str(raw))
    if not m:
        return default
    return int(m.group(1))


def normalize_window(limit_raw: Any, offset_raw: Any) -> tuple[int, int]:
    limit = parse_int(limit_raw, settings.default_page_limit)
    if limit <= 0:
        limit = settings.default_page_limit
    offset = max(0, parse_int(offset_raw, 0))
    return limit, offset


def build_pagination(limit: int, offset: int, total: int) -> Pagination:
    return Pagination(
        page=offset // limit + 1,
        limit=limit,
        total=total,
        pages=math.ceil(total / limit),
    )


def parse_bool(raw: Optional[str]) -> Optional[bool]:
    if raw is None:
        return None
    s = str(raw).strip().lower()
    if s in _TRUE_VALUES:
        return True
    if s in _FALSE_VALUES:
        return False
    return None


def _has_value(raw: Optional[str]) -> bool:
    return raw is not None and raw.strip().lower() not in _NO_FILTER


def _filtered_query(db: Session, filters: CustomerFilters) -> Query:
    query = db.query(models.Customer)

    if _has_value(filters.customer_type):
        query = query.filter(models.Customer.customer_type == filters.customer_type.strip())
    if _has_value(filters.classification):
        query = query.filter(models.Customer.classification == filters.classification.strip())

    active = parse_bool(filters.is_active)
    if active is not None:
        query = query.filter(models.Customer.is_active == active)
    elif filters.is_active:
        logger.debug("customers_is_active_ignored", extra={"value": filters.is_active})

    if filters.search and filters.search.strip():
        like_any = f"%{filters.search.strip()}%"
        query = query.filter(
            or_(
                *(column.ilike(like_any) for column in _NAME_COLUMNS),
                models.Customer.email.ilike(like_any),
                models.Customer.phone.ilike(like_any),
            )
        )
    return query


def search_customers(
    db: Session,
    *,
    name: Optional[str],
    email: Optional[str],
    limit: int,
    offset: int,
) -> list[models.Customer]:
    """Legacy lookup: partial match on any name column, exact match on email."""
    query = db.query(models.Customer)
    if name and name.strip():
        like_any = f"%{name.strip()}%"
        query = query.filter(or_(*(column.ilike(like_any) for column in _NAME_COLUMNS)))
    if email and email.strip():
        query = query.filter(func.lower(models.Customer.email) == email.strip().lower())
    return query.order_by(models.Customer.id.asc()).offset(offset).limit(limit).all()


def list_customers(
    db: Session, filters: CustomerFilters, limit: int, offset: int
) -> tuple[list[models.Customer], int]:
    if filters.uses_legacy_search:
        rows = search_customers(
            db, name=filters.name, email=filters.email, limit=limit, offset=offset
        )
        # The legacy path reports the directory-wide total, not the match count.
        return rows, customer_stats(db).total_customers

    query = _filtered_query(db, filters)
    total = query.order_by(None).count()
    rows = query.order_by(models.Customer.id.asc()).offset(offset).limit(limit).all()
    return rows, total


def customer_stats(db: Session) -> CustomerStats:
    total = db.query(func.count(models.Customer.id)).scalar() or 0
    active = (
        db.query(func.count(models.Customer.id))
        .filter(models.Customer.is_active == True)  # noqa: E712
        .scalar()
        or 0
    )

    by_type: dict[str, int] = {}
    for customer_type, count in (
        db.query(models.Customer.customer_type, func.count(models.Customer.id))
        .group_by(models.Customer.customer_type)
        .all()
    ):
        key = customer_type or _UNCLASSIFIED
        by_type[key] = by_type.get(key, 0) + int(count)

    by_classification: dict[str, int] = {}
    for classification, count in (
        db.query(models.Customer.classification, func.count(models.Customer.id))
        .group_by(models.Customer.classification)
        .all()
    ):
        key = classification or _UNCLASSIFIED
        by_classification[key] = by_classification.get(key, 0) + int(count)

    return CustomerStats(
        total_customers=int(total),
        active_customers=int(active),
        inactive_customers=int(total) - int(active),
        customers_by_type=by_type,
        customers_by_classification=by_classification,
    )


def get_customer(db: Session, customer_id: int) -> models.Customer:
    customer = db.get(models.Customer, customer_id)
    if customer is None:
        raise RecordNotFoundError("Customer not found")
    return customer


def get_customer_details(db: Session, customer_id: int) -> CustomerDetails:
    customer = get_customer(db, customer_id)

    quotation_count, quoted_amount, last_quotation_at = (
        db.query(
            func.count(models.Quotation.id),
            func.coalesce(func.sum(models.Quotation.total_amount), 0.0),
            func.max(models.Quotation.created_at),
        )
        .filter(models.Quotation.customer_id == customer.id)
        .one()
    )
    sales_order_count = (
        db.query(func.count(models.SalesOrder.id))
        .filter(models.SalesOrder.customer_id == customer.id)
        .scalar()
        or 0
    )
    recent = (
        db.query(models.Quotation)
        .filter(models.Quotation.customer_id == customer.id)
        .order_by(models.Quotation.created_at.desc(), models.Quotation.id.desc())
        .limit(_RECENT_QUOTATIONS)
        .all()
    )

    return CustomerDetails(
        **CustomerRead.model_validate(customer).model_dump(),
        display_name=display_name(customer),
        quotation_count=int(quotation_count or 0),
        sales_order_count=int(sales_order_count),
        total_quoted_amount=float(quoted_amount or 0.0),
        last_quotation_date=last_quotation_at,
        recent_quotations=[CustomerQuotationSummary.model_validate(q) for q in recent],
    )


def _email_taken(db: Session, email: Optional[str], *, exclude_id: int | None = None) -> bool:
    if not email:
        return False
    query = db.query(models.Customer.id).filter(func.lower(models.Customer.email) == email.lower())
    if exclude_id is not None:
        query = query.filter(models.Customer.id != exclude_id)
    return query.first() is not None


def _ensure_unique_email(db: Session, email: Optional[str], *, exclude_id: int | None = None) -> None:
    if _email_taken(db, email, exclude_id=exclude_id):
        raise DuplicateRecordError(
            "Duplicate customer", detail=f"Customer with email {email} already exists"
        )


def _commit_customer(db: Session, customer: models.Customer, *, failure: str) -> models.Customer:
    # Read before commit: a rollback expires the pending values.
    email, customer_id = customer.email, customer.id
    db.add(customer)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if _email_taken(db, email, exclude_id=customer_id):
            raise DuplicateRecordError(
                "Duplicate customer", detail=f"Customer with email {email} already exists"
            ) from exc
        logger.exception("customer_integrity_error", extra={"customer_id": customer_id})
        raise DatabaseError(failure, detail=str(exc)) from exc
    db.refresh(customer)
    return customer


def create_customer(db: Session, data: Mapping[str, Any]) -> models.Customer:
    try:
        payload = CustomerCreate.model_validate(data)
    except ValidationError as exc:
        raise ValidationFailedError.from_pydantic("Invalid customer data", exc) from exc

    values = payload.model_dump()
    _ensure_unique_email(db, values.get("email"))

    customer = _commit_customer(
        db, models.Customer(**values), failure="Failed to create customer"
    )
    logger.info("customer_created", extra={"customer_id": customer.id})
    return customer


def update_customer(db: Session, customer_id: int, data: Mapping[str, Any]) -> models.Customer:
    try:
        payload = CustomerUpdate.model_validate(data)
    except ValidationError as exc:
        raise ValidationFailedError.from_pydantic("Invalid customer data", exc) from exc

    customer = get_customer(db, customer_id)
    values = {
        field: value
        for field, value in payload.model_dump(exclude_unset=True).items()
        if not (field in _REQUIRED_COLUMNS and value is None)
    }
    if "email" in values:
        _ensure_unique_email(db, values["email"], exclude_id=customer.id)

    for field, value in values.items():
        setattr(customer, field, value)
    customer.updated_at = datetime.now(timezone.utc)

    customer = _commit_customer(db, customer, failure="Failed to update customer")
    logger.info(
        "customer_updated", extra={"customer_id": customer.id, "fields": sorted(values)}
    )
    return customer
