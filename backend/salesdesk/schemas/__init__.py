from salesdesk.schemas.customers import (
    CustomerCreate,
    CustomerDetails,
    CustomerListResponse,
    CustomerQuotationSummary,
    CustomerRead,
    CustomerStats,
    CustomerUpdate,
    Pagination,
)
from salesdesk.schemas.quotations import (
    DeleteAck,
    PartyRead,
    QuotationCreate,
    QuotationDetail,
    QuotationItemCreate,
    QuotationItemRead,
    QuotationListRow,
    QuotationRead,
    QuotationUpdate,
)

__all__ = [
    "CustomerCreate",
    "CustomerDetails",
    "CustomerListResponse",
    "CustomerQuotationSummary",
    "CustomerRead",
    "CustomerStats",
    "CustomerUpdate",
    "DeleteAck",
    "Pagination",
    "PartyRead",
    "QuotationCreate",
    "QuotationDetail",
    "QuotationItemCreate",
    "QuotationItemRead",
    "QuotationListRow",
    "QuotationRead",
    "QuotationUpdate",
]
