import logging
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError

from models import db
from services.errors import SlotConflictError

logger = logging.getLogger(__name__)

SLOT_GRANT_CONSTRAINT = "uq_slot_grant"


def is_slot_grant_violation(exc: IntegrityError) -> bool:
    orig = getattr(exc, "orig", None)
    diag = getattr(orig, "diag", None)
    if diag is not None and getattr(diag, "constraint_name", None) == SLOT_GRANT_CONSTRAINT:
        return True

    # sqlite names the columns instead of the constraint
    text = str(orig if orig is not None else exc)
    return SLOT_GRANT_CONSTRAINT in text or "slot_grants.slot_label" in text


@contextmanager
def unit_of_work():
    """
    One all-or-nothing transaction over the session.
    Commits when the block finishes, rolls back on any exception.

    Usage:
        with unit_of_work() as session:
            session.add(...)
    """
    try:
        yield db.session
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        if is_slot_grant_violation(exc):
            # Another transaction committed an overlapping grant after our check
            logger.warning("Slot grant uniqueness violation, rolled back: %s", exc.orig)
            raise SlotConflictError(race=True) from exc
        raise
    except Exception:
        db.session.rollback()
        raise
