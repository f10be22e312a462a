from salesdesk import models
from salesdesk.services.party_resolution import (
    UNKNOWN_SUPPLIER,
    customer_party,
    display_name,
    extract_supplier_name,
    resolve_supplier,
)


def test_display_name_falls_through_name_columns():
    assert display_name(models.Customer(name="Primary", company_name="Co")) == "Primary"
    assert display_name(models.Customer(name="  ", company_name="Co Ltd")) == "Co Ltd"
    assert display_name(models.Customer(full_name="Jane Roe")) == "Jane Roe"
    assert display_name(models.Customer()) is None
    assert display_name(None) is None


def test_customer_party_prefers_address_then_billing_address():
    party = customer_party(
        models.Customer(id=4, name="Acme", billing_address="PO Box 1", customer_type="retail")
    )
    assert party.id == 4
    assert party.name == "Acme"
    assert party.address == "PO Box 1"
    assert party.customer_type == "retail"
    assert customer_party(None) is None


def test_extract_supplier_name_takes_first_listed():
    assert extract_supplier_name("Suppliers: Acme Corp, Beta Inc") == "Acme Corp"
    assert extract_supplier_name("urgent\nsupplier:   Gamma SA\nother") == "Gamma SA"
    assert extract_supplier_name("SUPPLIERS:") is None
    assert extract_supplier_name("no supplier here") is None
    assert extract_supplier_name(None) is None


def test_resolve_supplier_without_match_synthesizes_party():
    supplier, name = resolve_supplier("Suppliers: Acme Corp, Beta Inc", [])

    assert name == "Acme Corp"
    assert supplier.id is None
    assert supplier.name == "Acme Corp"
    assert supplier.customer_type == "Supplier"


def test_resolve_supplier_matches_case_insensitive_substring():
    suppliers = [
        models.Supplier(id=1, name=""),
        models.Supplier(id=2, name="ACME CORP LTD", email="sales@acme.example.com"),
    ]

    supplier, name = resolve_supplier("Suppliers: Acme Corp, Beta Inc", suppliers)

    assert supplier.id == 2
    assert supplier.email == "sales@acme.example.com"
    assert name == "ACME CORP LTD"


def test_resolve_supplier_without_notes_pattern_is_unknown():
    assert resolve_supplier("call back on monday", []) == (None, UNKNOWN_SUPPLIER)
    assert resolve_supplier(None, []) == (None, UNKNOWN_SUPPLIER)
