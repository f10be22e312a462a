"""Existence checks that block deleting a quotation still in use."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from salesdesk import models
from salesdesk.config import settings

logger = logging.getLogger("salesdesk.reference_guard")

# Tables whose rows may point at a quotation via ``quotation_id``.
DEPENDENT_MODELS = (
    models.SalesOrder,
    models.CustomerAcceptance,
    models.PurchaseOrder,
)


def _is_referenced(session_factory: sessionmaker, model, quotation_id: int) -> bool:
    with session_factory() as session:
        hit = session.execute(
            select(model.id).where(model.quotation_id == quotation_id).limit(1)
        ).first()
        return hit is not None


def has_references(db: Session, quotation_id: int) -> bool:
    """True when any dependent table has a row for ``quotation_id``.

    The three lookups run in parallel, each on its own session bound to the
    caller's engine, so they only see committed rows.
    """
    session_factory = sessionmaker(bind=db.get_bind(), autoflush=False, future=True)
    with ThreadPoolExecutor(
        max_workers=settings.reference_check_workers,
        thread_name_prefix="reference-guard",
    ) as pool:
        futures = {
            model.__tablename__: pool.submit(_is_referenced, session_factory, model, quotation_id)
            for model in DEPENDENT_MODELS
        }
        hits = {table: future.result() for table, future in futures.items()}

    referenced = any(hits.values())
    if referenced:
        logger.info(
            "quotation_referenced",
            extra={
                "quotation_id": quotation_id,
                "tables": sorted(table for table, hit in hits.items() if hit),
            },
        )
    return referenced
