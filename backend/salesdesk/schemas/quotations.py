from datetime import date, datetime
from typing import List, Optional

from pydantic import Field

from salesdesk.schemas.common import ApiModel


class QuotationItemCreate(ApiModel):
    description: str = Field(..., min_length=1, max_length=500)
    quantity: float = Field(1.0, gt=0)
    unit: Optional[str] = Field(None, max_length=16)
    unit_price: Optional[float] = Field(None, ge=0)
    line_total: Optional[float] = None
    notes: Optional[str] = None


class QuotationItemRead(QuotationItemCreate):
    id: int
    quotation_id: int


class QuotationCreate(ApiModel):
    quote_number: Optional[str] = Field(None, max_length=50)
    revision: int = Field(0, ge=0)
    parent_quotation_id: Optional[int] = None
    revision_reason: Optional[str] = None
    enquiry_id: Optional[int] = None
    customer_id: Optional[int] = None
    customer_type: Optional[str] = Field(None, max_length=64)
    status: str = Field("draft", max_length=32)
    quote_date: Optional[date] = None
    valid_until: Optional[date] = None
    subtotal: Optional[float] = None
    discount_percentage: Optional[float] = Field(None, ge=0, le=100)
    discount_amount: Optional[float] = None
    tax_amount: Optional[float] = None
    total_amount: Optional[float] = None
    terms: Optional[str] = None
    notes: Optional[str] = None
    approval_status: Optional[str] = Field(None, max_length=32)
    required_approval_level: Optional[str] = Field(None, max_length=32)
    created_by: Optional[str] = Field(None, max_length=255)
    items: List[QuotationItemCreate] = Field(default_factory=list)


class QuotationUpdate(ApiModel):
    quote_number: Optional[str] = Field(None, max_length=50)
    revision: Optional[int] = Field(None, ge=0)
    parent_quotation_id: Optional[int] = None
    revision_reason: Optional[str] = None
    superseded_at: Optional[datetime] = None
    superseded_by: Optional[int] = None
    is_superseded: Optional[bool] = None
    enquiry_id: Optional[int] = None
    customer_id: Optional[int] = None
    customer_type: Optional[str] = Field(None, max_length=64)
    status: Optional[str] = Field(None, max_length=32)
    quote_date: Optional[date] = None
    valid_until: Optional[date] = None
    subtotal: Optional[float] = None
    discount_percentage: Optional[float] = Field(None, ge=0, le=100)
    discount_amount: Optional[float] = None
    tax_amount: Optional[float] = None
    total_amount: Optional[float] = None
    terms: Optional[str] = None
    notes: Optional[str] = None
    approval_status: Optional[str] = Field(None, max_length=32)
    required_approval_level: Optional[str] = Field(None, max_length=32)
    approved_by: Optional[str] = Field(None, max_length=255)
    approved_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None


class QuotationRead(ApiModel):
    id: int
    quote_number: str
    revision: int = 0
    parent_quotation_id: Optional[int] = None
    revision_reason: Optional[str] = None
    superseded_at: Optional[datetime] = None
    superseded_by: Optional[int] = None
    is_superseded: bool = False
    enquiry_id: Optional[int] = None
    customer_id: Optional[int] = None
    customer_type: Optional[str] = None
    status: str
    quote_date: Optional[date] = None
    valid_until: Optional[date] = None
    subtotal: Optional[float] = None
    discount_percentage: Optional[float] = None
    discount_amount: Optional[float] = None
    tax_amount: Optional[float] = None
    total_amount: Optional[float] = None
    terms: Optional[str] = None
    notes: Optional[str] = None
    approval_status: Optional[str] = None
    required_approval_level: Optional[str] = None
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class QuotationDetail(QuotationRead):
    supplier_name: Optional[str] = None


class PartyRead(ApiModel):
    # id is None for a supplier synthesized from quotation notes.
    id: Optional[int] = None
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    customer_type: Optional[str] = None


class QuotationListRow(QuotationRead):
    supplier: Optional[PartyRead] = None
    supplier_name: str
    customer: Optional[PartyRead] = None
    customer_embedded: bool = Field(True, alias="__customerEmbedded")


class DeleteAck(ApiModel):
    message: str
