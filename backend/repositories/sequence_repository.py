"""Barcode sequence repository: atomic next value, prefix administration, seeding.

Each category has one counter row per prefix it has used, and exactly one of
them is active. Issuance advances the active row. Rotation switches the active
flag, so no counter is ever lowered and a value is never handed out twice.
"""
import logging
from typing import Optional

from sqlalchemy import func, select, update
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from catalog_core.barcode import BarcodeCategory
from catalog_core.errors import InvalidPrefix, SequenceNotConfigured, StoreUnavailable
from models.barcode_sequence import BarcodeSequence
from utils import config

logger = logging.getLogger(__name__)


def next_sequence(session: Session, category: BarcodeCategory) -> tuple[int, int]:
    """Increment and read back the active counter for category in one statement, commit, return (sequence, prefix).

    The commit makes the consumed value durable before the caller does anything else,
    so a later rollback of the caller's own work leaves a gap rather than a reused value.
    """
    stmt = (
        update(BarcodeSequence)
        .where(BarcodeSequence.category == category.value, BarcodeSequence.active.is_(True))
        .values(last_value=BarcodeSequence.last_value + 1, updated_at=func.now())
        .returning(BarcodeSequence.last_value, BarcodeSequence.prefix)
        .execution_options(synchronize_session=False)
    )
    try:
        row = session.execute(stmt).one_or_none()
        session.commit()
    except OperationalError as e:
        session.rollback()
        raise StoreUnavailable(category=category.value, cause=e.orig) from e
    if row is None:
        logger.warning("No barcode sequence configured for category %s", category.value)
        raise SequenceNotConfigured(category=category.value)
    return int(row.last_value), int(row.prefix)


def get_sequence(session: Session, category: BarcodeCategory) -> Optional[BarcodeSequence]:
    """Return the active counter row for category or None."""
    result = session.execute(
        select(BarcodeSequence).where(
            BarcodeSequence.category == category.value,
            BarcodeSequence.active.is_(True),
        )
    )
    return result.scalars().first()


def get_sequence_for_prefix(session: Session, category: BarcodeCategory, prefix: int) -> Optional[BarcodeSequence]:
    """Return the counter row for category and prefix, active or not."""
    return session.get(BarcodeSequence, (category.value, prefix))


def list_sequences(session: Session, active_only: bool = False) -> list[BarcodeSequence]:
    """Return counter rows ordered by category and prefix."""
    stmt = select(BarcodeSequence).order_by(BarcodeSequence.category, BarcodeSequence.prefix)
    if active_only:
        stmt = stmt.where(BarcodeSequence.active.is_(True))
    return list(session.execute(stmt).scalars().all())


def set_prefix(
    session: Session,
    category: BarcodeCategory,
    prefix: int,
    description: Optional[str] = None,
) -> BarcodeSequence:
    """Make prefix the active one for category and return its counter row.

    A prefix the category has not used before gets a new row starting at 0.
    A prefix used before resumes from its own last_value. Re-setting the active
    prefix only updates the description.
    """
    if not config.prefix_in_range(prefix):
        raise InvalidPrefix(
            prefix=prefix,
            allowed=f"{config.BARCODE_PREFIX_MIN}..{config.BARCODE_PREFIX_MAX}",
        )
    # Deactivate first so the one-active-row index never sees two active rows.
    session.execute(
        update(BarcodeSequence)
        .where(
            BarcodeSequence.category == category.value,
            BarcodeSequence.prefix != prefix,
            BarcodeSequence.active.is_(True),
        )
        .values(active=False, updated_at=func.now())
        .execution_options(synchronize_session=False)
    )
    seq = get_sequence_for_prefix(session, category, prefix)
    if seq is None:
        seq = BarcodeSequence(
            category=category.value,
            prefix=prefix,
            description=description,
            last_value=0,
            active=True,
        )
        session.add(seq)
    else:
        if not seq.active:
            logger.info(
                "Reactivating barcode prefix %03d for %s at last_value %d",
                prefix,
                category.value,
                seq.last_value,
            )
        seq.active = True
        if description is not None:
            seq.description = description
        seq.updated_at = func.now()
    session.commit()
    session.refresh(seq)
    logger.info("Barcode prefix for %s set to %03d", category.value, prefix)
    return seq


def ensure_sequences(session: Session) -> list[BarcodeCategory]:
    """Seed missing counter rows with the configured prefixes. Returns the categories seeded."""
    defaults = {
        BarcodeCategory.BOOK: (config.BOOK_BARCODE_PREFIX, "Library books"),
        BarcodeCategory.LOCATION: (config.LOCATION_BARCODE_PREFIX, "Storage locations"),
    }
    seeded = []
    for category, (prefix, description) in defaults.items():
        if get_sequence(session, category) is None:
            set_prefix(session, category, prefix, description)
            seeded.append(category)
    return seeded
