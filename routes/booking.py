from datetime import date

from flask import Blueprint, request, jsonify

from models.enums import Discount, PaymentStatus, ReservationStatus
from services.errors import BookingValidationError, SlotConflictError
from services.reservations import (
    ReservationRequest,
    RescheduleRequest,
    cancel_reservation,
    change_status,
    check_availability,
    create_reservation,
    delete_reservation,
    get_reservation,
    list_reservations,
    reschedule_reservation,
)
from services.staff import StaffReservationRequest, create_staff_reservation
from utils.audit import log_event

booking_bp = Blueprint("booking", __name__)


def _parse_date(value):
    # Expect ISO format like "2024-06-10"
    try:
        return date.fromisoformat((value or "").strip()[:10])
    except (TypeError, ValueError, AttributeError):
        raise BookingValidationError("Invalid date. Use YYYY-MM-DD")


def _parse_amount(value, name: str) -> int:
    if value in (None, ""):
        return 0
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise BookingValidationError(f"{name} must be a number")
    if not amount.is_integer():
        raise BookingValidationError(f"{name} must be a whole amount")
    return int(amount)


def _parse_int(value, name: str):
    try:
        return int(value)
    except (TypeError, ValueError):
        raise BookingValidationError(f"{name} must be an integer")


def _parse_discount(data) -> Discount:
    raw = data.get("discount")
    if raw is None:
        raw = {"kind": data.get("discount_type"), "value": data.get("discount_value")}
    if not isinstance(raw, dict):
        raise BookingValidationError("discount must be an object {kind, value}")
    return Discount.from_dict(raw)


def _parse_enum(enum_cls, value, name: str):
    try:
        return enum_cls(str(value).strip().upper())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise BookingValidationError(f"{name} must be one of {allowed}")


def _require(data, *names):
    missing = [n for n in names if data.get(n) in (None, "")]
    if missing:
        raise BookingValidationError(", ".join(missing) + " required")


def _reservation_json(reservation, payment=None, slots=None):
    out = reservation.to_dict()
    out["payment"] = payment.to_dict() if payment else None
    if slots is not None:
        out["slots"] = slots
    return out


def _details_json(reservation_id):
    reservation, payment, slots = get_reservation(reservation_id)
    return _reservation_json(reservation, payment, slots)


# ---------- ADMIN: create booking (discount allowed) ----------
@booking_bp.post("/bookings")
def create_booking():
    data = request.get_json(silent=True) or {}
    _require(data, "customer_name", "customer_phone", "sport", "court_id",
             "date", "start_time", "end_time")

    req = ReservationRequest(
        customer_name=str(data["customer_name"]).strip(),
        customer_phone=str(data["customer_phone"]).strip(),
        sport=str(data["sport"]).strip(),
        court_id=_parse_int(data["court_id"], "court_id"),
        date=_parse_date(data["date"]),
        start_time=data["start_time"],
        end_time=data["end_time"],
        discount=_parse_discount(data),
        advance_paid=_parse_amount(data.get("advance_paid"), "advance_paid"),
        payment_mode=data.get("payment_mode"),
        notes=data.get("notes"),
        created_by=data.get("created_by"),
    )

    try:
        reservation = create_reservation(req)
    except SlotConflictError as exc:
        log_event("BOOKING_FAIL_SLOT_CONFLICT", user_id=req.created_by, entity="court",
                  entity_id=req.court_id, metadata={"slots": exc.slots, "race": exc.race})
        raise

    log_event("BOOKING_CREATE", user_id=req.created_by, entity="reservation",
              entity_id=reservation.id, metadata={"court_id": req.court_id, "date": req.date.isoformat()})
    return jsonify(_details_json(reservation.id)), 201


@booking_bp.post("/bookings/check-availability")
def check_booking_availability():
    data = request.get_json(silent=True) or {}
    _require(data, "court_id", "date", "start_time", "end_time")

    result = check_availability(
        _parse_int(data["court_id"], "court_id"),
        _parse_date(data["date"]),
        data["start_time"],
        data["end_time"],
    )
    return jsonify(available=result.available, conflicting_slots=result.conflicting_slots), 200


@booking_bp.get("/bookings")
def list_bookings():
    date_str = request.args.get("date")
    status = request.args.get("status")
    payment_status = request.args.get("payment_status")

    rows = list_reservations(
        day=_parse_date(date_str) if date_str else None,
        court_id=request.args.get("court_id", type=int),
        status=_parse_enum(ReservationStatus, status, "status") if status else None,
        search=request.args.get("search"),
        payment_status=_parse_enum(PaymentStatus, payment_status, "payment_status") if payment_status else None,
    )
    return jsonify([_reservation_json(r, p) for r, p in rows]), 200


@booking_bp.get("/bookings/<int:booking_id>")
def booking_details(booking_id: int):
    return jsonify(_details_json(booking_id)), 200


# ---------- ADMIN: edit / reschedule ----------
@booking_bp.put("/bookings/<int:booking_id>")
def update_booking(booking_id: int):
    data = request.get_json(silent=True) or {}
    _require(data, "court_id", "date", "start_time", "end_time", "status")

    override = data.get("payment_status")
    req = RescheduleRequest(
        court_id=_parse_int(data["court_id"], "court_id"),
        date=_parse_date(data["date"]),
        start_time=data["start_time"],
        end_time=data["end_time"],
        discount=_parse_discount(data),
        status=_parse_enum(ReservationStatus, data["status"], "status"),
        advance_paid=_parse_amount(data.get("advance_paid"), "advance_paid"),
        payment_mode=data.get("payment_mode"),
        notes=data.get("notes"),
        payment_status_override=_parse_enum(PaymentStatus, override, "payment_status") if override else None,
        customer_name=data.get("customer_name"),
        customer_phone=data.get("customer_phone"),
        sport=data.get("sport"),
    )
    reschedule_reservation(booking_id, req)

    log_event("BOOKING_UPDATE", user_id=data.get("updated_by"), entity="reservation",
              entity_id=booking_id, metadata={"status": req.status.value})
    return jsonify(_details_json(booking_id)), 200


@booking_bp.patch("/bookings/<int:booking_id>/status")
def update_booking_status(booking_id: int):
    data = request.get_json(silent=True) or {}
    _require(data, "status")
    status = _parse_enum(ReservationStatus, data["status"], "status")

    change_status(booking_id, status)

    log_event("BOOKING_STATUS", user_id=data.get("updated_by"), entity="reservation",
              entity_id=booking_id, metadata={"status": status.value})
    return jsonify(_details_json(booking_id)), 200


@booking_bp.post("/bookings/<int:booking_id>/cancel")
def cancel_booking(booking_id: int):
    data = request.get_json(silent=True) or {}
    reason = (data.get("reason") or "").strip() or None

    cancel_reservation(booking_id)

    log_event("BOOKING_CANCEL", user_id=data.get("updated_by"), entity="reservation",
              entity_id=booking_id, metadata={"reason": reason})
    return jsonify(message="Cancelled"), 200


@booking_bp.delete("/bookings/<int:booking_id>")
def delete_booking(booking_id: int):
    delete_reservation(booking_id)

    log_event("BOOKING_DELETE", entity="reservation", entity_id=booking_id)
    return jsonify(message="Booking deleted"), 200


# ---------- STAFF: create booking (no discount, server-side pricing) ----------
@booking_bp.post("/staff/bookings")
def create_staff_booking():
    data = request.get_json(silent=True) or {}
    _require(data, "customer_name", "phone_number", "sport", "court_id",
             "date", "start_time", "end_time")

    remaining = data.get("remaining_balance")
    req = StaffReservationRequest(
        customer_name=str(data["customer_name"]).strip(),
        phone_number=str(data["phone_number"]).strip(),
        sport=str(data["sport"]).strip(),
        court_id=_parse_int(data["court_id"], "court_id"),
        date=_parse_date(data["date"]),
        start_time=data["start_time"],
        end_time=data["end_time"],
        advance_paid=_parse_amount(data.get("advance_paid"), "advance_paid"),
        remaining_balance=_parse_amount(remaining, "remaining_balance") if remaining not in (None, "") else None,
        payment_mode=data.get("payment_mode"),
        created_by=data.get("created_by"),
    )

    try:
        reservation = create_staff_reservation(req)
    except SlotConflictError as exc:
        log_event("BOOKING_FAIL_SLOT_CONFLICT", user_id=req.created_by, entity="court",
                  entity_id=req.court_id, metadata={"slots": exc.slots, "race": exc.race})
        raise

    log_event("STAFF_BOOKING_CREATE", user_id=req.created_by, entity="reservation",
              entity_id=reservation.id, metadata={"court_id": req.court_id, "date": req.date.isoformat()})
    return jsonify(_details_json(reservation.id)), 201
