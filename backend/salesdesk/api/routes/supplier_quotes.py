# ruff: noqa: B008

from datetime import date
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.orm import Session

from salesdesk.core.errors import RecordNotFoundError, store_errors
from salesdesk.database import get_db
from salesdesk.schemas import DeleteAck, QuotationDetail, QuotationItemRead, QuotationListRow
from salesdesk.services import supplier_quotes
from salesdesk.services.supplier_quotes import QuoteListParams

router = APIRouter(prefix="/supplier-quotes", tags=["supplier_quotes"])


@router.get("", response_model=List[QuotationListRow])
def list_supplier_quotes(
    supplier: Optional[str] = Query(None, description="Customer id the quotation belongs to, or 'all'."),
    status_filter: Optional[str] = Query(None, alias="status"),
    date_from: Optional[date] = Query(None, alias="dateFrom", description="valid_until >= dateFrom"),
    date_to: Optional[date] = Query(None, alias="dateTo", description="valid_until <= dateTo"),
    search: Optional[str] = Query(None, description="Accepted but not applied."),
    db: Session = Depends(get_db),
):
    params = QuoteListParams(
        supplier=supplier,
        status=status_filter,
        date_from=date_from,
        date_to=date_to,
        search=search,
    )
    with store_errors("Failed to fetch supplier quotes"):
        return supplier_quotes.list_quotes(db, params)


@router.get("/{quote_id}", response_model=QuotationDetail)
def get_supplier_quote(quote_id: int, db: Session = Depends(get_db)):
    with store_errors("Failed to fetch supplier quote"):
        quote = supplier_quotes.get_quote(db, quote_id)
    if quote is None:
        raise RecordNotFoundError("Supplier quote not found")
    return quote


@router.get("/{quote_id}/items", response_model=List[QuotationItemRead])
def list_supplier_quote_items(quote_id: int, db: Session = Depends(get_db)):
    with store_errors("Failed to fetch supplier quote items"):
        return supplier_quotes.get_quote_items(db, quote_id)


@router.post("", response_model=QuotationDetail, status_code=status.HTTP_201_CREATED)
def create_supplier_quote(payload: Any = Body(...), db: Session = Depends(get_db)):
    return supplier_quotes.create_quote(db, payload)


@router.put("/{quote_id}", response_model=QuotationDetail)
def update_supplier_quote(quote_id: int, payload: Any = Body(...), db: Session = Depends(get_db)):
    return supplier_quotes.update_quote(db, quote_id, payload)


@router.delete("/{quote_id}", response_model=DeleteAck)
def delete_supplier_quote(quote_id: int, db: Session = Depends(get_db)):
    with store_errors("Failed to delete supplier quote"):
        return supplier_quotes.delete_quote(db, quote_id)
