from datetime import datetime
from models.db import db
from models.enums import Discount, DiscountKind, ReservationOrigin, ReservationStatus

class Reservation(db.Model):
    __tablename__ = "reservations"

    id = db.Column(db.Integer, primary_key=True)

    customer_name = db.Column(db.String(120), nullable=False)
    customer_phone = db.Column(db.String(30), nullable=False)
    sport = db.Column(db.String(40), nullable=False)

    court_id = db.Column(db.Integer, db.ForeignKey("courts.id"), nullable=False, index=True)
    date = db.Column(db.Date, nullable=False, index=True)
    start_time = db.Column(db.String(5), nullable=False)
    end_time = db.Column(db.String(5), nullable=False)
    slot_count = db.Column(db.Integer, nullable=False)

    base_amount = db.Column(db.Integer, nullable=False)
    discount_kind = db.Column(db.Enum(DiscountKind, native_enum=False, length=10), nullable=False, default=DiscountKind.NONE)
    discount_value = db.Column(db.Float, nullable=False, default=0)
    final_amount = db.Column(db.Integer, nullable=False)

    status = db.Column(db.Enum(ReservationStatus, native_enum=False, length=10), nullable=False, default=ReservationStatus.ACTIVE)
    origin = db.Column(db.Enum(ReservationOrigin, native_enum=False, length=10), nullable=False, default=ReservationOrigin.MANUAL)
    created_by = db.Column(db.String(64), nullable=True)  # opaque caller reference

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    @property
    def discount(self) -> Discount:
        return Discount(self.discount_kind, self.discount_value)

    @discount.setter
    def discount(self, value: Discount):
        self.discount_kind = value.kind
        self.discount_value = float(value.value)

    def to_dict(self):
        return {
            "id": self.id,
            "customer_name": self.customer_name,
            "customer_phone": self.customer_phone,
            "sport": self.sport,
            "court_id": self.court_id,
            "date": self.date.isoformat(),
            "start_time": self.start_time,
            "end_time": self.end_time,
            "slot_count": self.slot_count,
            "base_amount": self.base_amount,
            "discount": self.discount.to_dict(),
            "final_amount": self.final_amount,
            "status": self.status.value,
            "origin": self.origin.value,
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
