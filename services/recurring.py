"""
Caller side of recurring bookings: one create per occurrence date.

Turning a repeat rule into dates happens elsewhere; this only books the
dates it is handed and reports what happened to each.
"""
import dataclasses
import logging
from dataclasses import dataclass, field

from models.enums import ReservationOrigin
from services.errors import BookingError, SlotConflictError
from services.reservations import ReservationRequest, create_reservation

logger = logging.getLogger(__name__)


@dataclass
class SeriesReport:
    created: list = field(default_factory=list)   # reservation ids
    skipped: list = field(default_factory=list)   # {"date", "conflicting_slots", "race"}
    failed: list = field(default_factory=list)    # {"date", "error"}

    def to_dict(self):
        return dataclasses.asdict(self)


def book_occurrences(template: ReservationRequest, dates, skip_availability_check: bool = False) -> SeriesReport:
    """
    Each date is its own unit of work. A conflict skips that date only;
    the batch always runs to the end.
    """
    report = SeriesReport()
    for day in dates:
        occurrence = dataclasses.replace(template, date=day, origin=ReservationOrigin.RECURRING)
        try:
            reservation = create_reservation(occurrence, skip_availability_check=skip_availability_check)
        except SlotConflictError as exc:
            report.skipped.append({
                "date": day.isoformat(),
                "conflicting_slots": exc.slots,
                "race": exc.race,
            })
            continue
        except BookingError as exc:
            report.failed.append({"date": day.isoformat(), "error": exc.message})
            continue
        report.created.append(reservation.id)

    logger.info("Recurring series: %d created, %d skipped, %d failed",
                len(report.created), len(report.skipped), len(report.failed))
    return report
