import math
from collections import namedtuple
from datetime import date
from decimal import Decimal, InvalidOperation

from models.enums import Discount, DiscountKind
from services.errors import InvalidRateError
from services.slots import DEFAULT_GRANULARITY

DEFAULT_WEEKEND_DAYS = (5, 6)  # Saturday, Sunday

Price = namedtuple("Price", ["base_amount", "final_amount"])


def _as_decimal(value, what: str) -> Decimal:
    if value is None or isinstance(value, bool):
        raise InvalidRateError(f"{what} is required")
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise InvalidRateError(f"{what} must be a number")


def is_weekend(day: date, weekend_days=DEFAULT_WEEKEND_DAYS) -> bool:
    if not isinstance(day, date):
        raise InvalidRateError("Booking date must be a date")
    return day.weekday() in set(weekend_days)


def hourly_rate(court, day: date, weekend_days=DEFAULT_WEEKEND_DAYS) -> Decimal:
    if is_weekend(day, weekend_days):
        rate = _as_decimal(court.weekend_rate, "Weekend rate")
    else:
        rate = _as_decimal(court.weekday_rate, "Weekday rate")
    if rate < 0:
        raise InvalidRateError("Court rate cannot be negative")
    return rate


def base_amount(rate, slot_count: int, granularity: int = DEFAULT_GRANULARITY) -> int:
    """rate/hour x booked hours, rounded up so fractions are never undercharged."""
    rate = _as_decimal(rate, "Rate")
    return math.ceil(rate * slot_count * granularity / Decimal(60))


def apply_discount(base, discount: Discount = None) -> int:
    discount = discount or Discount()
    if discount.value < 0:
        raise InvalidRateError("Discount cannot be negative")

    amount = Decimal(base)
    if discount.kind is DiscountKind.PERCENT:
        amount -= amount * discount.value / Decimal(100)
    elif discount.kind is DiscountKind.FLAT:
        amount -= discount.value

    return max(0, math.ceil(amount))


def calculate_price(court, slot_count: int, day: date, discount: Discount = None,
                    granularity: int = DEFAULT_GRANULARITY,
                    weekend_days=DEFAULT_WEEKEND_DAYS) -> Price:
    rate = hourly_rate(court, day, weekend_days)
    base = base_amount(rate, slot_count, granularity)
    return Price(base, apply_discount(base, discount))
