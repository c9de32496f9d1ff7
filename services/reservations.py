"""
Reservation transactions.

Every public operation here runs as one unit of work spanning the
Reservation, its SlotGrants and its Payment: either all writes land or none do.
"""
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from flask import current_app
from sqlalchemy import or_

from models import db
from models.court import Court
from models.enums import Discount, PaymentStatus, ReservationOrigin, ReservationStatus
from models.payment import Payment
from models.reservation import Reservation
from models.slot_grant import SlotGrant
from services.availability import Availability, held_slots, resolve_availability
from services.errors import (
    BookingValidationError,
    InactiveResourceError,
    NotFoundError,
    OverpaymentError,
)
from services.payments import balance_for, derive_payment_status
from services.pricing import apply_discount, calculate_price
from services.slots import generate_slots
from services.uow import unit_of_work

logger = logging.getLogger(__name__)


@dataclass
class ReservationRequest:
    customer_name: str
    customer_phone: str
    sport: str
    court_id: int
    date: date
    start_time: str
    end_time: str
    discount: Discount = field(default_factory=Discount)
    advance_paid: int = 0
    payment_mode: Optional[str] = None
    notes: Optional[str] = None
    created_by: Optional[str] = None
    origin: ReservationOrigin = ReservationOrigin.MANUAL


@dataclass
class RescheduleRequest:
    court_id: int
    date: date
    start_time: str
    end_time: str
    discount: Discount = field(default_factory=Discount)
    status: ReservationStatus = ReservationStatus.ACTIVE
    advance_paid: int = 0
    payment_mode: Optional[str] = None
    notes: Optional[str] = None
    payment_status_override: Optional[PaymentStatus] = None
    # left untouched when None
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    sport: Optional[str] = None


def booking_settings():
    cfg = current_app.config
    return cfg.get("SLOT_MINUTES", 15), tuple(cfg.get("WEEKEND_DAYS", (5, 6)))


def _default_payment_mode() -> str:
    return current_app.config.get("DEFAULT_PAYMENT_MODE", "CASH")


def check_advance(advance_paid) -> int:
    advance = advance_paid or 0
    if isinstance(advance, bool) or not isinstance(advance, int):
        raise BookingValidationError("advance_paid must be a whole amount")
    if advance < 0:
        raise BookingValidationError("advance_paid cannot be negative")
    return advance


def check_date(day):
    if not isinstance(day, date):
        raise BookingValidationError("Booking date must be a date (YYYY-MM-DD)")
    return day


def load_court(court_id, require_active: bool = True) -> Court:
    court = db.session.get(Court, court_id) if court_id is not None else None
    if not court:
        raise NotFoundError("Court not found")
    if require_active and not court.is_active:
        raise InactiveResourceError()
    return court


def _load_reservation(reservation_id) -> Reservation:
    reservation = db.session.get(Reservation, reservation_id)
    if not reservation:
        raise NotFoundError("Reservation not found")
    return reservation


def _insert_grants(session, reservation: Reservation, slots):
    session.add_all([
        SlotGrant(
            court_id=reservation.court_id,
            date=reservation.date,
            slot_label=label,
            reservation_id=reservation.id,
        )
        for label in slots
    ])


def _release_grants(reservation_id) -> int:
    return (
        SlotGrant.query
        .filter_by(reservation_id=reservation_id)
        .delete(synchronize_session="fetch")
    )


def insert_reservation_records(session, *, court, day, start_time, end_time, slots, price,
                               discount, customer_name, customer_phone, sport,
                               advance_paid, payment_mode, notes, created_by,
                               origin=ReservationOrigin.MANUAL) -> Reservation:
    """Write Reservation + one SlotGrant per slot + Payment. Caller owns the transaction."""
    reservation = Reservation(
        customer_name=customer_name,
        customer_phone=customer_phone,
        sport=sport,
        court_id=court.id,
        date=day,
        start_time=start_time,
        end_time=end_time,
        slot_count=len(slots),
        base_amount=price.base_amount,
        final_amount=price.final_amount,
        status=ReservationStatus.ACTIVE,
        origin=ReservationOrigin(origin),
        created_by=str(created_by) if created_by is not None else None,
    )
    reservation.discount = discount
    session.add(reservation)
    session.flush()  # need reservation.id for the grants

    _insert_grants(session, reservation, slots)

    session.add(Payment(
        reservation_id=reservation.id,
        total_amount=price.final_amount,
        advance_paid=advance_paid,
        balance_amount=balance_for(price.final_amount, advance_paid),
        mode=payment_mode or _default_payment_mode(),
        notes=notes,
        status=derive_payment_status(advance_paid, price.final_amount),
    ))
    # surface a grant key collision here rather than at commit
    session.flush()
    return reservation


def create_reservation(request: ReservationRequest, skip_availability_check: bool = False) -> Reservation:
    """
    Admin booking path: court check, slot generation, availability
    (unless the caller pre-validated), pricing with discount, then the
    three-record write.
    """
    if not request.customer_name or not request.customer_phone or not request.sport:
        raise BookingValidationError("customer_name, customer_phone and sport are required")
    check_date(request.date)
    advance = check_advance(request.advance_paid)
    granularity, weekend_days = booking_settings()

    with unit_of_work() as session:
        court = load_court(request.court_id)
        slots = generate_slots(request.start_time, request.end_time, granularity)

        if not skip_availability_check:
            resolve_availability(court.id, request.date, slots)

        price = calculate_price(court, len(slots), request.date, request.discount,
                                granularity, weekend_days)
        if advance > price.final_amount:
            raise OverpaymentError()

        reservation = insert_reservation_records(
            session,
            court=court,
            day=request.date,
            start_time=request.start_time,
            end_time=request.end_time,
            slots=slots,
            price=price,
            discount=request.discount,
            customer_name=request.customer_name,
            customer_phone=request.customer_phone,
            sport=request.sport,
            advance_paid=advance,
            payment_mode=request.payment_mode,
            notes=request.notes,
            created_by=request.created_by,
            origin=request.origin,
        )

    logger.info("Reservation %s created: court %s %s %s-%s (%d slots)",
                reservation.id, reservation.court_id, reservation.date,
                reservation.start_time, reservation.end_time, reservation.slot_count)
    return reservation


def reschedule_reservation(reservation_id, request: RescheduleRequest) -> Reservation:
    """
    Rewrite schedule, pricing, status and payment of an existing reservation.

    Slots are re-validated only when the reservation ends up ACTIVE and either
    its schedule moved or it was not ACTIVE before (re-activation). Moving to
    CANCELLED/COMPLETED always releases every grant.
    """
    check_date(request.date)
    advance = check_advance(request.advance_paid)
    try:
        target_status = ReservationStatus(request.status)
        override = PaymentStatus(request.payment_status_override) if request.payment_status_override else None
    except ValueError as exc:
        raise BookingValidationError(str(exc)) from exc
    granularity, weekend_days = booking_settings()

    with unit_of_work() as session:
        reservation = _load_reservation(reservation_id)

        schedule_changed = (
            reservation.court_id != request.court_id
            or reservation.date != request.date
            or reservation.start_time != request.start_time
            or reservation.end_time != request.end_time
        )
        discount_changed = reservation.discount != request.discount
        target_active = target_status is ReservationStatus.ACTIVE
        was_active = reservation.status is ReservationStatus.ACTIVE

        court = load_court(request.court_id, require_active=target_active)
        slots = generate_slots(request.start_time, request.end_time, granularity)

        base_amount = reservation.base_amount
        slot_count = reservation.slot_count
        final_amount = reservation.final_amount

        if target_active and (schedule_changed or not was_active):
            resolve_availability(court.id, request.date, slots, exclude_reservation_id=reservation.id)
            price = calculate_price(court, len(slots), request.date, request.discount,
                                    granularity, weekend_days)
            base_amount, slot_count, final_amount = price.base_amount, len(slots), price.final_amount
            _release_grants(reservation.id)
            reassign_slots = True
        elif target_active:
            reassign_slots = False
            if discount_changed:
                final_amount = apply_discount(base_amount, request.discount)
        else:
            # cancelling or completing: free the court, keep amounts for the record
            reassign_slots = False
            released = _release_grants(reservation.id)
            if released:
                logger.info("Released %d slot grant(s) of reservation %s", released, reservation.id)
            if schedule_changed:
                price = calculate_price(court, len(slots), request.date, request.discount,
                                        granularity, weekend_days)
                base_amount, slot_count, final_amount = price.base_amount, len(slots), price.final_amount
            elif discount_changed:
                final_amount = apply_discount(base_amount, request.discount)

        reservation.court_id = court.id
        reservation.date = request.date
        reservation.start_time = request.start_time
        reservation.end_time = request.end_time
        reservation.slot_count = slot_count
        reservation.base_amount = base_amount
        reservation.discount = request.discount
        reservation.final_amount = final_amount
        reservation.status = target_status
        if request.customer_name is not None:
            reservation.customer_name = request.customer_name
        if request.customer_phone is not None:
            reservation.customer_phone = request.customer_phone
        if request.sport is not None:
            reservation.sport = request.sport

        if reassign_slots:
            _insert_grants(session, reservation, slots)

        payment = Payment.query.filter_by(reservation_id=reservation.id).first()
        if payment is None:
            payment = Payment(reservation_id=reservation.id)
            session.add(payment)
        payment.total_amount = final_amount
        payment.advance_paid = advance
        payment.balance_amount = balance_for(final_amount, advance)
        payment.mode = request.payment_mode or payment.mode or _default_payment_mode()
        payment.notes = request.notes
        payment.status = derive_payment_status(advance, final_amount, override)
        payment.status_overridden = override is not None

        session.flush()

    logger.info("Reservation %s updated: status=%s schedule_changed=%s",
                reservation.id, target_status.value, schedule_changed)
    return reservation


def change_status(reservation_id, status) -> Reservation:
    """Status-only update; everything else stays as stored."""
    reservation = _load_reservation(reservation_id)
    payment = Payment.query.filter_by(reservation_id=reservation.id).first()

    request = RescheduleRequest(
        court_id=reservation.court_id,
        date=reservation.date,
        start_time=reservation.start_time,
        end_time=reservation.end_time,
        discount=reservation.discount,
        status=status,
        advance_paid=payment.advance_paid if payment else 0,
        payment_mode=payment.mode if payment else None,
        notes=payment.notes if payment else None,
        payment_status_override=payment.status if payment and payment.status_overridden else None,
    )
    return reschedule_reservation(reservation_id, request)


def cancel_reservation(reservation_id) -> None:
    """Mark CANCELLED and release the slots. Reservation and Payment stay for history."""
    with unit_of_work():
        reservation = _load_reservation(reservation_id)
        if reservation.status is ReservationStatus.COMPLETED:
            raise BookingValidationError("Completed reservations cannot be cancelled")
        released = _release_grants(reservation.id)
        reservation.status = ReservationStatus.CANCELLED

    logger.info("Reservation %s cancelled, %d slot grant(s) released", reservation_id, released)


def delete_reservation(reservation_id) -> None:
    """Remove the reservation together with its grants and payment."""
    with unit_of_work() as session:
        reservation = _load_reservation(reservation_id)
        _release_grants(reservation.id)
        (
            Payment.query
            .filter_by(reservation_id=reservation.id)
            .delete(synchronize_session="fetch")
        )
        session.delete(reservation)

    logger.info("Reservation %s deleted", reservation_id)


def check_availability(court_id, day, start_time, end_time) -> Availability:
    """Read-only: which of the requested slots are held by ACTIVE reservations."""
    granularity, _ = booking_settings()
    check_date(day)
    slots = generate_slots(start_time, end_time, granularity)
    load_court(court_id, require_active=False)

    conflicts = held_slots(court_id, day, slots)
    return Availability(not conflicts, conflicts)


def get_reservation(reservation_id):
    """(Reservation, Payment | None, [slot labels]) or NotFoundError."""
    reservation = _load_reservation(reservation_id)
    payment = Payment.query.filter_by(reservation_id=reservation.id).first()
    slots = [
        g.slot_label
        for g in SlotGrant.query.filter_by(reservation_id=reservation.id).order_by(SlotGrant.slot_label).all()
    ]
    return reservation, payment, slots


def list_reservations(day=None, court_id=None, status=None, search=None,
                      payment_status=None, limit: int = 200):
    """Newest first, each row is (Reservation, Payment | None)."""
    q = (
        db.session.query(Reservation, Payment)
        .outerjoin(Payment, Payment.reservation_id == Reservation.id)
    )
    if day is not None:
        q = q.filter(Reservation.date == day)
    if court_id is not None:
        q = q.filter(Reservation.court_id == court_id)
    if status:
        q = q.filter(Reservation.status == ReservationStatus(status))
    if search:
        like = f"%{search.strip()}%"
        q = q.filter(or_(
            Reservation.customer_name.ilike(like),
            Reservation.customer_phone.ilike(like),
        ))
    if payment_status:
        q = q.filter(Payment.status == PaymentStatus(payment_status))

    return (
        q.order_by(Reservation.created_at.desc(), Reservation.id.desc())
        .limit(limit)
        .all()
    )
