"""
Conflict detection against existing slot grants.

A grant row only means "slot in use" when its owning reservation is ACTIVE.
Grants whose owner is gone or CANCELLED/COMPLETED are zombies: they still
occupy the unique (court, date, slot) key and must be removed before a new
grant for the same key can be inserted.
"""
import logging
from collections import namedtuple

from models import db
from models.enums import ReservationStatus
from models.reservation import Reservation
from models.slot_grant import SlotGrant
from services.errors import SlotConflictError

logger = logging.getLogger(__name__)

Availability = namedtuple("Availability", ["available", "conflicting_slots"])


def find_slot_grants(court_id: int, day, slots, exclude_reservation_id=None):
    """
    Existing grants on (court, day, slot in slots) joined with their owner's status.
    Returns [(SlotGrant, ReservationStatus | None)]; None = owner missing.
    """
    if not slots:
        return []

    q = (
        db.session.query(SlotGrant, Reservation.status)
        .outerjoin(Reservation, SlotGrant.reservation_id == Reservation.id)
        .filter(
            SlotGrant.court_id == court_id,
            SlotGrant.date == day,
            SlotGrant.slot_label.in_(list(slots)),
        )
    )
    if exclude_reservation_id is not None:
        q = q.filter(SlotGrant.reservation_id != exclude_reservation_id)
    return q.all()


def partition_grants(rows):
    """Split rows into (live conflicts, zombies)."""
    live, zombies = [], []
    for grant, owner_status in rows:
        if owner_status == ReservationStatus.ACTIVE:
            live.append(grant)
        else:
            zombies.append(grant)
    return live, zombies


def resolve_availability(court_id: int, day, slots, exclude_reservation_id=None) -> int:
    """
    Check-then-clean inside the caller's transaction.
    Raises SlotConflictError (nothing mutated) when any slot is held by an
    ACTIVE reservation, otherwise deletes the zombie grants and returns how many.
    """
    rows = find_slot_grants(court_id, day, slots, exclude_reservation_id)
    live, zombies = partition_grants(rows)

    if live:
        raise SlotConflictError([g.slot_label for g in live])

    if zombies:
        zombie_ids = [g.id for g in zombies]
        zombie_labels = sorted({g.slot_label for g in zombies})
        (
            SlotGrant.query
            .filter(SlotGrant.id.in_(zombie_ids))
            .delete(synchronize_session="fetch")
        )
        logger.warning(
            "Removed %d zombie slot grant(s) on court %s for %s: %s",
            len(zombie_ids), court_id, day, zombie_labels,
        )
    return len(zombies)


def held_slots(court_id: int, day, slots, exclude_reservation_id=None) -> list:
    """Sorted distinct labels among `slots` held by ACTIVE reservations. Read-only."""
    live, _ = partition_grants(find_slot_grants(court_id, day, slots, exclude_reservation_id))
    return sorted({g.slot_label for g in live})
