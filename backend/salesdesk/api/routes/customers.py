# ruff: noqa: B008

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.orm import Session

from salesdesk.core.errors import store_errors
from salesdesk.database import get_db
from salesdesk.schemas import (
    CustomerDetails,
    CustomerListResponse,
    CustomerRead,
    CustomerStats,
)
from salesdesk.services import customer_directory
from salesdesk.services.customer_directory import CustomerFilters

router = APIRouter(prefix="/customers", tags=["customers"])


@router.get("", response_model=CustomerListResponse)
def list_customers(
    limit: Optional[str] = Query(None, description="Page size; defaults to 50 when missing or unparseable."),
    offset: Optional[str] = Query(None, description="Rows to skip; defaults to 0."),
    customer_type: Optional[str] = Query(None, alias="customerType"),
    classification: Optional[str] = Query(None),
    is_active: Optional[str] = Query(None, alias="isActive"),
    search: Optional[str] = Query(None, description="Partial match on names, e-mail and phone."),
    name: Optional[str] = Query(None, description="Legacy name search."),
    email: Optional[str] = Query(None, description="Legacy e-mail search."),
    db: Session = Depends(get_db),
):
    page_limit, page_offset = customer_directory.normalize_window(limit, offset)
    filters = CustomerFilters(
        customer_type=customer_type,
        classification=classification,
        is_active=is_active,
        search=search,
        name=name,
        email=email,
    )
    with store_errors("Failed to fetch customers"):
        rows, total = customer_directory.list_customers(db, filters, page_limit, page_offset)

    return CustomerListResponse(
        customers=[CustomerRead.model_validate(row) for row in rows],
        pagination=customer_directory.build_pagination(page_limit, page_offset, total),
    )


@router.get("/stats", response_model=CustomerStats)
def customer_stats(db: Session = Depends(get_db)):
    with store_errors("Failed to fetch customer statistics"):
        return customer_directory.customer_stats(db)


@router.get("/{customer_id}", response_model=CustomerRead)
def get_customer(customer_id: int, db: Session = Depends(get_db)):
    with store_errors("Failed to fetch customer"):
        return customer_directory.get_customer(db, customer_id)


@router.get("/{customer_id}/details", response_model=CustomerDetails)
def get_customer_details(customer_id: int, db: Session = Depends(get_db)):
    with store_errors("Failed to fetch customer details"):
        return customer_directory.get_customer_details(db, customer_id)


@router.post("", response_model=CustomerRead, status_code=status.HTTP_201_CREATED)
def create_customer(payload: Any = Body(...), db: Session = Depends(get_db)):
    with store_errors("Failed to create customer"):
        return customer_directory.create_customer(db, payload)


@router.put("/{customer_id}", response_model=CustomerRead)
def update_customer(customer_id: int, payload: Any = Body(...), db: Session = Depends(get_db)):
    with store_errors("Failed to update customer"):
        return customer_directory.update_customer(db, customer_id, payload)
