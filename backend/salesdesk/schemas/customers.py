from datetime import date, datetime
from typing import Annotated, Dict, List, Optional

from pydantic import EmailStr, Field, StringConstraints

from salesdesk.schemas.common import ApiModel

CustomerName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]


class CustomerBase(ApiModel):
    name: CustomerName
    customer_name: Optional[str] = Field(None, max_length=255)
    company_name: Optional[str] = Field(None, max_length=255)
    full_name: Optional[str] = Field(None, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=64)
    address: Optional[str] = None
    billing_address: Optional[str] = None
    customer_type: Optional[str] = Field(None, max_length=64)
    classification: Optional[str] = Field(None, max_length=64)
    is_active: bool = True
    notes: Optional[str] = None


class CustomerCreate(CustomerBase):
    pass


class CustomerUpdate(ApiModel):
    name: Optional[CustomerName] = None
    customer_name: Optional[str] = Field(None, max_length=255)
    company_name: Optional[str] = Field(None, max_length=255)
    full_name: Optional[str] = Field(None, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=64)
    address: Optional[str] = None
    billing_address: Optional[str] = None
    customer_type: Optional[str] = Field(None, max_length=64)
    classification: Optional[str] = Field(None, max_length=64)
    is_active: Optional[bool] = None
    notes: Optional[str] = None


class CustomerRead(ApiModel):
    id: int
    name: Optional[str] = None
    customer_name: Optional[str] = None
    company_name: Optional[str] = None
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    billing_address: Optional[str] = None
    customer_type: Optional[str] = None
    classification: Optional[str] = None
    is_active: bool = True
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Pagination(ApiModel):
    page: int
    limit: int
    total: int
    pages: int


class CustomerListResponse(ApiModel):
    customers: List[CustomerRead]
    pagination: Pagination


class CustomerStats(ApiModel):
    total_customers: int
    active_customers: int
    inactive_customers: int
    customers_by_type: Dict[str, int] = Field(default_factory=dict)
    customers_by_classification: Dict[str, int] = Field(default_factory=dict)


class CustomerQuotationSummary(ApiModel):
    id: int
    quote_number: str
    status: str
    total_amount: Optional[float] = None
    valid_until: Optional[date] = None
    created_at: Optional[datetime] = None


class CustomerDetails(CustomerRead):
    display_name: Optional[str] = None
    quotation_count: int = 0
    sales_order_count: int = 0
    total_quoted_amount: float = 0.0
    last_quotation_date: Optional[datetime] = None
    recent_quotations: List[CustomerQuotationSummary] = Field(default_factory=list)
