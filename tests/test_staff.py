import pytest

from models.enums import DiscountKind, PaymentStatus
from models.payment import Payment
from models.reservation import Reservation
from services.errors import (
    BookingValidationError,
    OverpaymentError,
    PaymentMismatchError,
    SlotConflictError,
)
from services.staff import StaffReservationRequest, create_staff_reservation
from tests.conftest import MONDAY


def staff_request(court_id, **overrides):
    data = dict(
        customer_name="Dawa",
        phone_number="9812345678",
        sport="Badminton",
        court_id=court_id,
        date=MONDAY,
        start_time="18:00",
        end_time="19:00",
        advance_paid=300,
        remaining_balance=500,
        created_by="staff-7",
    )
    data.update(overrides)
    return StaffReservationRequest(**data)


def test_staff_booking_is_priced_server_side(court):
    reservation = create_staff_reservation(staff_request(court.id))

    assert reservation.final_amount == 800
    assert reservation.discount_kind is DiscountKind.NONE
    assert reservation.customer_phone == "9812345678"
    assert reservation.created_by == "staff-7"

    payment = Payment.query.filter_by(reservation_id=reservation.id).one()
    assert payment.balance_amount == 500
    assert payment.status is PaymentStatus.PARTIAL


def test_remaining_balance_must_match(court):
    with pytest.raises(PaymentMismatchError) as info:
        create_staff_reservation(staff_request(court.id, remaining_balance=450))

    assert info.value.payload() == {"calculated_total": 800, "calculated_balance": 500}
    assert Reservation.query.count() == 0


def test_remaining_balance_required(court):
    with pytest.raises(PaymentMismatchError):
        create_staff_reservation(staff_request(court.id, remaining_balance=None))


@pytest.mark.parametrize("phone", ["98123", "98123456789", "98-1234567", ""])
def test_phone_number_validated(court, phone):
    with pytest.raises(BookingValidationError):
        create_staff_reservation(staff_request(court.id, phone_number=phone))


@pytest.mark.parametrize("start,end", [("05:45", "06:30"), ("22:30", "23:15")])
def test_outside_operating_hours(court, start, end):
    with pytest.raises(BookingValidationError):
        create_staff_reservation(staff_request(court.id, start_time=start, end_time=end))


def test_sport_must_match_dedicated_court(make_court):
    turf = make_court("Turf 1", sport="Football")

    with pytest.raises(BookingValidationError):
        create_staff_reservation(staff_request(turf.id))

    reservation = create_staff_reservation(staff_request(turf.id, sport="football"))
    assert reservation.court_id == turf.id


def test_staff_overpayment(court):
    with pytest.raises(OverpaymentError):
        create_staff_reservation(staff_request(court.id, advance_paid=900, remaining_balance=0))


def test_staff_and_admin_share_slots(book, court):
    book("18:30", "19:30")

    with pytest.raises(SlotConflictError) as info:
        create_staff_reservation(staff_request(court.id))

    assert info.value.slots == ["18:30", "18:45"]
    assert Reservation.query.count() == 1
