from datetime import datetime
from models.db import db
from models.enums import PaymentStatus

class Payment(db.Model):
    __tablename__ = "payments"

    id = db.Column(db.Integer, primary_key=True)
    reservation_id = db.Column(db.Integer, db.ForeignKey("reservations.id"), nullable=False, unique=True, index=True)

    total_amount = db.Column(db.Integer, nullable=False)   # whole currency units
    advance_paid = db.Column(db.Integer, nullable=False, default=0)
    balance_amount = db.Column(db.Integer, nullable=False, default=0)

    mode = db.Column(db.String(20), nullable=False, default="CASH")
    notes = db.Column(db.Text, nullable=True)

    status = db.Column(db.Enum(PaymentStatus, native_enum=False, length=10), nullable=False, default=PaymentStatus.PENDING)
    # True when status was set by a caller instead of derived from the amounts
    status_overridden = db.Column(db.Boolean, default=False, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def to_dict(self):
        return {
            "total_amount": self.total_amount,
            "advance_paid": self.advance_paid,
            "balance_amount": self.balance_amount,
            "mode": self.mode,
            "notes": self.notes,
            "status": self.status.value,
            "status_overridden": self.status_overridden,
        }
