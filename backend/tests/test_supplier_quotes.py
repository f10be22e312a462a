import re

from fastapi.testclient import TestClient
from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError

from salesdesk import models
from salesdesk.database import engine
from salesdesk.main import app

client = TestClient(app)


def _customer(db, **kwargs):
    customer = models.Customer(**kwargs)
    db.add(customer)
    db.commit()
    db.refresh(customer)
    return customer


def _quote(**overrides):
    payload = {
        "status": "draft",
        "validUntil": "2026-06-30",
        "notes": "Suppliers: Acme Corp, Beta Inc",
        "items": [
            {"description": "Aluminium coil", "quantity": 2, "unitPrice": 1200.0},
            {"description": "Freight", "quantity": 1, "unitPrice": 300.0, "lineTotal": 280.0},
        ],
    }
    payload.update(overrides)
    resp = client.post("/api/supplier-quotes", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()


def _fail_statements(prefix):
    def _raise(conn, cursor, statement, parameters, context, executemany):
        if statement.lstrip().upper().startswith(prefix):
            raise SQLAlchemyError("simulated failure")

    return _raise


def test_create_quote_with_items_assigns_monthly_number(db_session):
    customer = _customer(db_session, company_name="Globex Metals", email="globex@example.com")

    body = _quote(customerId=customer.id)

    assert re.fullmatch(r"SQ_\d{3}-\d{2}\.\d{2}", body["quoteNumber"])
    assert body["quoteNumber"].startswith("SQ_001-")
    assert body["status"] == "draft"
    assert body["supplierName"] == "Globex Metals"

    items = client.get(f"/api/supplier-quotes/{body['id']}/items").json()
    assert [i["description"] for i in items] == ["Aluminium coil", "Freight"]
    assert items[0]["lineTotal"] == 2400.0
    assert items[1]["lineTotal"] == 280.0
    assert all(i["quotationId"] == body["id"] for i in items)

    second = _quote()
    assert second["quoteNumber"].startswith("SQ_002-")


def test_create_quote_rejects_invalid_payload_and_duplicate_number():
    bad = client.post("/api/supplier-quotes", json={"items": [{"description": "", "quantity": 0}]})
    assert bad.status_code == 400
    assert bad.json()["message"] == "Invalid supplier quote data"

    _quote(quoteNumber="SQ-MANUAL-1")
    dup = client.post("/api/supplier-quotes", json={"quoteNumber": "SQ-MANUAL-1"})
    assert dup.status_code == 409


def test_create_quote_rolls_back_when_items_fail(db_session):
    listener = _fail_statements("INSERT INTO QUOTATION_ITEMS")
    event.listen(engine, "before_cursor_execute", listener)
    try:
        resp = client.post(
            "/api/supplier-quotes",
            json={"quoteNumber": "SQ-ATOMIC", "items": [{"description": "Coil", "quantity": 1}]},
        )
    finally:
        event.remove(engine, "before_cursor_execute", listener)

    assert resp.status_code == 500
    assert resp.json() == {"message": "Failed to create supplier quote"}
    assert db_session.query(models.Quotation).count() == 0
    assert db_session.query(models.QuotationItem).count() == 0


def test_list_quotes_embeds_customer_and_note_supplier(db_session):
    customer = _customer(db_session, name="Initech", email="initech@example.com", phone="555")
    db_session.add(models.Supplier(name="ACME CORP LTD", email="sales@acme.example.com"))
    db_session.commit()

    _quote(customerId=customer.id)
    _quote(notes="call back monday")
    _quote(notes="Supplier: Zenith Trading")

    resp = client.get("/api/supplier-quotes")
    assert resp.status_code == 200
    rows = resp.json()
    assert len(rows) == 3

    by_notes = {row["notes"]: row for row in rows}
    for row in rows:
        assert row["supplierName"]
        assert row["__customerEmbedded"] is True

    matched = by_notes["Suppliers: Acme Corp, Beta Inc"]
    assert matched["supplierName"] == "ACME CORP LTD"
    assert isinstance(matched["supplier"]["id"], int)
    assert matched["customer"]["name"] == "Initech"
    assert matched["customer"]["phone"] == "555"

    unknown = by_notes["call back monday"]
    assert unknown["supplierName"] == "Unknown Supplier"
    assert unknown["supplier"] is None
    assert unknown["customer"] is None

    synthetic = by_notes["Supplier: Zenith Trading"]
    assert synthetic["supplierName"] == "Zenith Trading"
    assert synthetic["supplier"]["id"] is None
    assert synthetic["supplier"]["customerType"] == "Supplier"


def test_list_quotes_filters(db_session):
    customer = _customer(db_session, name="Filter Co", email="filter@example.com")
    _quote(customerId=customer.id, status="sent", validUntil="2026-01-15")
    _quote(status="draft", validUntil="2026-03-15")
    _quote(status="sent", validUntil="2026-05-15")

    by_supplier = client.get("/api/supplier-quotes", params={"supplier": str(customer.id)}).json()
    assert [r["customerId"] for r in by_supplier] == [customer.id]

    assert len(client.get("/api/supplier-quotes", params={"supplier": "all"}).json()) == 3
    assert len(client.get("/api/supplier-quotes", params={"status": "sent"}).json()) == 2
    assert len(client.get("/api/supplier-quotes", params={"status": "all"}).json()) == 3

    window = client.get(
        "/api/supplier-quotes", params={"dateFrom": "2026-02-01", "dateTo": "2026-04-30"}
    ).json()
    assert [r["validUntil"] for r in window] == ["2026-03-15"]

    searched = client.get("/api/supplier-quotes", params={"search": "no-such-text"}).json()
    assert len(searched) == 3

    bad = client.get("/api/supplier-quotes", params={"supplier": "acme"})
    assert bad.status_code == 400


def test_get_quote_and_missing_quote(db_session):
    customer = _customer(db_session, full_name="Jane Roe", email="jane@example.com")
    created = _quote(customerId=customer.id)
    orphan = _quote()

    body = client.get(f"/api/supplier-quotes/{created['id']}").json()
    assert body["supplierName"] == "Jane Roe"
    assert body["quoteNumber"] == created["quoteNumber"]

    assert client.get(f"/api/supplier-quotes/{orphan['id']}").json()["supplierName"] is None

    missing = client.get("/api/supplier-quotes/999999")
    assert missing.status_code == 404
    assert missing.json() == {"message": "Supplier quote not found"}
    assert client.get("/api/supplier-quotes/999999/items").json() == []


def test_update_quote():
    first = _quote(quoteNumber="SQ-UPD-1")
    _quote(quoteNumber="SQ-UPD-2")

    resp = client.put(
        f"/api/supplier-quotes/{first['id']}",
        json={"status": "sent", "totalAmount": 2680.0, "quoteNumber": None},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "sent"
    assert body["totalAmount"] == 2680.0
    assert body["quoteNumber"] == "SQ-UPD-1"
    assert body["updatedAt"] is not None

    assert client.put("/api/supplier-quotes/999999", json={"status": "sent"}).status_code == 404
    assert (
        client.put(f"/api/supplier-quotes/{first['id']}", json={"discountPercentage": 150}).status_code
        == 400
    )
    assert (
        client.put(f"/api/supplier-quotes/{first['id']}", json={"quoteNumber": "SQ-UPD-2"}).status_code
        == 409
    )


def test_delete_quote_removes_items(db_session):
    created = _quote()

    resp = client.delete(f"/api/supplier-quotes/{created['id']}")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Supplier quote deleted successfully"}

    assert client.get(f"/api/supplier-quotes/{created['id']}").status_code == 404
    assert db_session.query(models.QuotationItem).count() == 0

    assert client.delete(f"/api/supplier-quotes/{created['id']}").status_code == 404


def test_delete_quote_blocked_by_references(db_session):
    created = _quote()
    db_session.add(models.PurchaseOrder(po_number="PO-1", quotation_id=created["id"]))
    db_session.commit()

    resp = client.delete(f"/api/supplier-quotes/{created['id']}")
    assert resp.status_code == 409
    assert "cannot be deleted" in resp.json()["message"]

    assert client.get(f"/api/supplier-quotes/{created['id']}").status_code == 200
    assert len(client.get(f"/api/supplier-quotes/{created['id']}/items").json()) == 2


def test_delete_quote_rolls_back_when_quotation_delete_fails(db_session):
    created = _quote()

    listener = _fail_statements("DELETE FROM QUOTATIONS ")
    event.listen(engine, "before_cursor_execute", listener)
    try:
        resp = client.delete(f"/api/supplier-quotes/{created['id']}")
    finally:
        event.remove(engine, "before_cursor_execute", listener)

    assert resp.status_code == 500
    assert resp.json() == {"message": "Failed to delete supplier quote"}
    assert db_session.query(models.Quotation).count() == 1
    assert (
        db_session.query(models.QuotationItem)
        .filter(models.QuotationItem.quotation_id == created["id"])
        .count()
        == 2
    )
