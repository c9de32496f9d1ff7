import re

from services.errors import InvalidRangeError

DEFAULT_GRANULARITY = 15

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def to_minutes(label: str) -> int:
    """'HH:MM' -> minutes since midnight."""
    m = _TIME_RE.match((label or "").strip()) if isinstance(label, str) else None
    if not m:
        raise InvalidRangeError(f"Invalid time '{label}'. Use HH:MM")
    return int(m.group(1)) * 60 + int(m.group(2))


def to_label(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def generate_slots(start_time: str, end_time: str, granularity: int = DEFAULT_GRANULARITY) -> list:
    """
    Slot-start labels covering [start_time, end_time) in steps of `granularity` minutes.
    Usage: generate_slots("10:00", "11:00") -> ["10:00", "10:15", "10:30", "10:45"]
    """
    if granularity <= 0:
        raise InvalidRangeError("Slot granularity must be positive")

    start = to_minutes(start_time)
    end = to_minutes(end_time)

    if end <= start:
        raise InvalidRangeError("end_time must be after start_time")
    if start % granularity or end % granularity:
        raise InvalidRangeError(f"Times must align to {granularity}-minute slots")

    slots = [to_label(m) for m in range(start, end, granularity)]
    if not slots:
        raise InvalidRangeError()
    return slots
