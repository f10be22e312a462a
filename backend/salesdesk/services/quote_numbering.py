"""Supplier quote numbers: ``SQ_<seq>-<MM>.<YY>``, restarting every UTC month.

Numbers come from a per-month counter row. A number already taken by a
manually numbered quotation is skipped, so the counter can run ahead of the
quotations table but never hands out a duplicate.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from salesdesk import models

logger = logging.getLogger("salesdesk.quote_numbering")

QUOTE_PREFIX = "SQ"
MAX_ATTEMPTS = 20


def format_quote_number(seq: int, when: datetime) -> str:
    return f"{QUOTE_PREFIX}_{seq:03d}-{when:%m}.{when:%y}"


def _counter_for(db: Session, period: str) -> models.QuoteNumberCounter:
    stmt = select(models.QuoteNumberCounter).where(models.QuoteNumberCounter.period == period)
    # SQLite has no FOR UPDATE; its writer lock serialises the bump instead.
    if db.get_bind().dialect.name != "sqlite":
        stmt = stmt.with_for_update()

    counter = db.execute(stmt).scalar_one_or_none()
    if counter is not None:
        return counter

    counter = models.QuoteNumberCounter(period=period, last_seq=0)
    db.add(counter)
    try:
        db.flush()
    except IntegrityError:
        # Another request opened this month first.
        db.rollback()
        return db.execute(stmt).scalar_one()
    return counter


def _number_taken(db: Session, quote_number: str) -> bool:
    stmt = select(models.Quotation.id).where(models.Quotation.quote_number == quote_number).limit(1)
    return db.execute(stmt).first() is not None


def next_quote_number(db: Session, *, now: datetime | None = None) -> str:
    """Reserve the next free quote number in the caller's transaction.

    Call before adding the quotation: opening a new month may roll the
    session back.
    """
    now = now or datetime.now(timezone.utc)
    counter = _counter_for(db, now.strftime("%Y%m"))

    for _ in range(MAX_ATTEMPTS):
        counter.last_seq += 1
        db.flush()
        candidate = format_quote_number(counter.last_seq, now)
        if not _number_taken(db, candidate):
            return candidate
        logger.info("quote_number_skipped", extra={"quote_number": candidate})

    raise RuntimeError(f"No free supplier quote number for period {counter.period}")
