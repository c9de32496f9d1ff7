import enum
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from services.errors import InvalidRateError


class ReservationStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"


class ReservationOrigin(str, enum.Enum):
    MANUAL = "MANUAL"
    RECURRING = "RECURRING"


class PaymentStatus(str, enum.Enum):
    PENDING = "PENDING"
    PARTIAL = "PARTIAL"
    PAID = "PAID"


class DiscountKind(str, enum.Enum):
    NONE = "NONE"
    FLAT = "FLAT"
    PERCENT = "PERCENT"


@dataclass(frozen=True)
class Discount:
    """Discount applied to a reservation. ``Discount()`` means no discount."""

    kind: DiscountKind = DiscountKind.NONE
    value: Decimal = Decimal(0)

    def __post_init__(self):
        try:
            kind = DiscountKind(self.kind or DiscountKind.NONE)
        except ValueError:
            raise InvalidRateError("Invalid discount. kind must be NONE, FLAT or PERCENT")
        try:
            value = Decimal(0) if kind is DiscountKind.NONE else Decimal(str(self.value or 0))
        except (InvalidOperation, ValueError):
            raise InvalidRateError("Discount value must be a number")
        if not value.is_finite():
            raise InvalidRateError("Discount value must be a number")
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "value", value)

    @classmethod
    def from_dict(cls, data):
        data = data or {}
        kind = str(data.get("kind") or "NONE").strip().upper()
        return cls(kind, data.get("value") or 0)

    def to_dict(self):
        return {"kind": self.kind.value, "value": float(self.value)}
