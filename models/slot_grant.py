from datetime import datetime
from models.db import db

class SlotGrant(db.Model):
    __tablename__ = "slot_grants"

    id = db.Column(db.Integer, primary_key=True)

    court_id = db.Column(db.Integer, db.ForeignKey("courts.id"), nullable=False)
    date = db.Column(db.Date, nullable=False)
    slot_label = db.Column(db.String(5), nullable=False)  # "HH:MM"

    reservation_id = db.Column(db.Integer, db.ForeignKey("reservations.id"), nullable=False, index=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        # Hard rule: a court/date/slot row exists once, whatever its owner's status
        db.UniqueConstraint("court_id", "date", "slot_label", name="uq_slot_grant"),
    )
