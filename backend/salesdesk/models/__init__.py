from salesdesk.models.domain import (
    Customer,
    CustomerAcceptance,
    PurchaseOrder,
    Quotation,
    QuotationItem,
    QuoteNumberCounter,
    SalesOrder,
    Supplier,
)

__all__ = [
    "Customer",
    "CustomerAcceptance",
    "PurchaseOrder",
    "Quotation",
    "QuotationItem",
    "QuoteNumberCounter",
    "SalesOrder",
    "Supplier",
]
