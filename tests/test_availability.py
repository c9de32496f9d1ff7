import pytest

from models import db
from models.enums import ReservationStatus
from models.slot_grant import SlotGrant
from services.availability import find_slot_grants, held_slots, resolve_availability
from services.errors import SlotConflictError
from tests.conftest import MONDAY


def _labels():
    return sorted(g.slot_label for g in SlotGrant.query.all())


def test_live_conflict_reports_distinct_labels_and_mutates_nothing(court, book):
    book("10:00", "11:00")

    with pytest.raises(SlotConflictError) as info:
        resolve_availability(court.id, MONDAY, ["10:00", "10:15", "11:00"])

    assert info.value.slots == ["10:00", "10:15"]
    assert not info.value.race
    assert len(_labels()) == 4


def test_grants_of_cancelled_owner_are_zombies(court, book):
    reservation = book("10:00", "11:00")
    # legacy row: status flipped without releasing its grants
    reservation.status = ReservationStatus.CANCELLED
    db.session.commit()

    removed = resolve_availability(court.id, MONDAY, ["10:00", "10:15"])
    db.session.commit()

    assert removed == 2
    assert _labels() == ["10:30", "10:45"]


def test_grants_of_completed_owner_are_zombies(court, book):
    reservation = book("10:00", "10:30")
    reservation.status = ReservationStatus.COMPLETED
    db.session.commit()

    assert held_slots(court.id, MONDAY, ["10:00", "10:15"]) == []
    assert resolve_availability(court.id, MONDAY, ["10:00", "10:15"]) == 2


def test_grant_with_missing_owner_is_a_zombie(court):
    db.session.add(SlotGrant(court_id=court.id, date=MONDAY, slot_label="09:00", reservation_id=999))
    db.session.commit()

    rows = find_slot_grants(court.id, MONDAY, ["09:00"])
    assert [(g.slot_label, status) for g, status in rows] == [("09:00", None)]

    assert resolve_availability(court.id, MONDAY, ["09:00"]) == 1
    db.session.commit()
    assert SlotGrant.query.count() == 0


def test_own_grants_are_excluded_for_reschedule(court, book):
    reservation = book("10:00", "11:00")

    removed = resolve_availability(court.id, MONDAY, ["10:00", "10:15"],
                                   exclude_reservation_id=reservation.id)

    assert removed == 0
    assert len(_labels()) == 4


def test_other_dates_and_courts_do_not_conflict(court, other_court, book):
    book("10:00", "11:00")

    assert held_slots(other_court.id, MONDAY, ["10:00"]) == []
    assert resolve_availability(court.id, MONDAY.replace(day=11), ["10:00"]) == 0
