"""
Booking errors. Each carries the HTTP status the route layer answers with;
the services themselves never build responses.
"""


class BookingError(Exception):
    status_code = 400
    default_message = "Booking operation failed"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def payload(self) -> dict:
        return {}


class InvalidRangeError(BookingError):
    default_message = "Invalid time range"


class NotFoundError(BookingError):
    status_code = 404
    default_message = "Not found"


class InactiveResourceError(BookingError):
    default_message = "Court is not active"


class SlotConflictError(BookingError):
    status_code = 409

    def __init__(self, slots=None, race: bool = False):
        self.slots = sorted(set(slots or []))
        self.race = race
        if race:
            message = "Slot already booked (race condition detected)"
        else:
            message = "Slots already booked: " + ", ".join(self.slots)
        super().__init__(message)

    def payload(self) -> dict:
        return {"conflicting_slots": self.slots, "race": self.race}


class OverpaymentError(BookingError):
    default_message = "Advance cannot be more than final amount"


class InvalidRateError(BookingError):
    default_message = "Invalid pricing input"


class BookingValidationError(BookingError):
    default_message = "Invalid booking request"


class PaymentMismatchError(BookingError):
    def __init__(self, calculated_total: int, calculated_balance: int):
        self.calculated_total = calculated_total
        self.calculated_balance = calculated_balance
        super().__init__("Payment mismatch. Remaining balance must equal Total - Advance Paid.")

    def payload(self) -> dict:
        return {
            "calculated_total": self.calculated_total,
            "calculated_balance": self.calculated_balance,
        }
