"""
Staff booking path.

Staff bookings never carry a discount and the payable amount is always
recomputed on the server; the client's idea of the remaining balance is
only checked against it.
"""
import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Optional

from flask import current_app

from models.enums import Discount
from services.availability import resolve_availability
from services.errors import BookingValidationError, OverpaymentError, PaymentMismatchError
from services.payments import balance_for
from services.pricing import calculate_price
from services.reservations import booking_settings, check_advance, check_date, insert_reservation_records, load_court
from services.slots import generate_slots, to_minutes
from services.uow import unit_of_work

logger = logging.getLogger(__name__)


@dataclass
class StaffReservationRequest:
    customer_name: str
    phone_number: str
    sport: str
    court_id: int
    date: date
    start_time: str
    end_time: str
    advance_paid: int = 0
    remaining_balance: Optional[int] = None
    payment_mode: Optional[str] = None
    created_by: Optional[str] = None


def _check_operating_hours(start_time: str, end_time: str):
    opening = current_app.config.get("OPENING_TIME", "06:00")
    closing = current_app.config.get("CLOSING_TIME", "23:00")
    if to_minutes(start_time) < to_minutes(opening) or to_minutes(end_time) > to_minutes(closing):
        raise BookingValidationError(f"Booking must be within operating hours ({opening} - {closing})")


def create_staff_reservation(request: StaffReservationRequest):
    required = (request.customer_name, request.phone_number, request.date,
                request.start_time, request.end_time, request.court_id, request.sport)
    if any(v in (None, "") for v in required):
        raise BookingValidationError("All fields are required")

    pattern = current_app.config.get("STAFF_PHONE_PATTERN", r"^\d{10}$")
    if not re.match(pattern, request.phone_number):
        raise BookingValidationError("Please provide a valid 10-digit phone number")

    check_date(request.date)
    _check_operating_hours(request.start_time, request.end_time)
    advance = check_advance(request.advance_paid)
    granularity, weekend_days = booking_settings()

    with unit_of_work() as session:
        court = load_court(request.court_id)
        if court.sport and court.sport.lower() != request.sport.lower():
            raise BookingValidationError(f"This court is for {court.sport}, not {request.sport}")

        slots = generate_slots(request.start_time, request.end_time, granularity)
        resolve_availability(court.id, request.date, slots)

        price = calculate_price(court, len(slots), request.date, Discount(),
                                granularity, weekend_days)
        total = price.final_amount
        if advance > total:
            raise OverpaymentError("Advance paid cannot exceed total amount")

        remaining = balance_for(total, advance)
        if request.remaining_balance is None or int(request.remaining_balance) != remaining:
            raise PaymentMismatchError(total, remaining)

        reservation = insert_reservation_records(
            session,
            court=court,
            day=request.date,
            start_time=request.start_time,
            end_time=request.end_time,
            slots=slots,
            price=price,
            discount=Discount(),
            customer_name=request.customer_name,
            customer_phone=request.phone_number,
            sport=request.sport,
            advance_paid=advance,
            payment_mode=request.payment_mode,
            notes=None,
            created_by=request.created_by,
        )

    logger.info("Staff reservation %s created on court %s", reservation.id, reservation.court_id)
    return reservation
