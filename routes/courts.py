from flask import Blueprint, request, jsonify
from sqlalchemy.exc import IntegrityError

from models import db
from models.court import Court
from utils.audit import log_event

court_bp = Blueprint("court", __name__, url_prefix="/courts")


def _rate(value):
    try:
        rate = int(value)
    except (TypeError, ValueError):
        return None
    return rate if rate >= 0 else None


@court_bp.post("")
def create_court():
    data = request.get_json(silent=True) or {}
    name = (data.get("name") or "").strip()
    sport = (data.get("sport") or "").strip() or None
    weekday_rate = _rate(data.get("weekday_rate"))
    weekend_rate = _rate(data.get("weekend_rate"))

    if not name:
        return jsonify(error="Court name required"), 400
    if weekday_rate is None or weekend_rate is None:
        return jsonify(error="weekday_rate and weekend_rate must be non-negative integers"), 400

    court = Court(
        name=name,
        sport=sport,
        weekday_rate=weekday_rate,
        weekend_rate=weekend_rate,
        is_active=bool(data.get("is_active", True)),
    )
    db.session.add(court)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return jsonify(error="Court name already exists"), 409

    log_event("COURT_CREATE", entity="court", entity_id=court.id)
    return jsonify(court.to_dict()), 201


@court_bp.get("")
def list_courts():
    q = Court.query
    if request.args.get("active") in ("1", "true"):
        q = q.filter(Court.is_active.is_(True))
    courts = q.order_by(Court.name.asc()).all()
    return jsonify([c.to_dict() for c in courts]), 200


@court_bp.patch("/<int:court_id>/status")
def update_court_status(court_id: int):
    data = request.get_json(silent=True) or {}
    if not isinstance(data.get("is_active"), bool):
        return jsonify(error="is_active (true/false) required"), 400

    court = db.session.get(Court, court_id)
    if not court:
        return jsonify(error="Court not found"), 404

    court.is_active = data["is_active"]
    db.session.commit()

    log_event("COURT_STATUS", entity="court", entity_id=court.id, metadata={"is_active": court.is_active})
    return jsonify(court.to_dict()), 200
