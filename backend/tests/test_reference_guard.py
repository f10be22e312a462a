import pytest

from salesdesk import models
from salesdesk.services.reference_guard import has_references


def _quotation(db, number="Q-REF"):
    quote = models.Quotation(quote_number=number, status="draft")
    db.add(quote)
    db.commit()
    db.refresh(quote)
    return quote


def test_unreferenced_quotation(db_session):
    quote = _quotation(db_session)
    assert has_references(db_session, quote.id) is False


@pytest.mark.parametrize(
    "dependent",
    [
        lambda qid: models.SalesOrder(order_number="SO-REF", quotation_id=qid),
        lambda qid: models.CustomerAcceptance(quotation_id=qid, accepted_by="buyer"),
        lambda qid: models.PurchaseOrder(po_number="PO-REF", quotation_id=qid),
    ],
    ids=["sales_order", "customer_acceptance", "purchase_order"],
)
def test_any_dependent_table_counts_as_reference(db_session, dependent):
    quote = _quotation(db_session)
    other = _quotation(db_session, number="Q-OTHER")
    db_session.add(dependent(quote.id))
    db_session.commit()

    assert has_references(db_session, quote.id) is True
    assert has_references(db_session, other.id) is False


def test_missing_quotation_has_no_references(db_session):
    assert has_references(db_session, 424242) is False
