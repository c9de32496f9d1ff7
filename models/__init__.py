from .db import db
from .enums import (
    Discount,
    DiscountKind,
    PaymentStatus,
    ReservationOrigin,
    ReservationStatus,
)
from .audit_log import AuditLog
from .court import Court
from .reservation import Reservation
from .slot_grant import SlotGrant
from .payment import Payment
