from datetime import date, timedelta

from models.enums import ReservationOrigin
from models.reservation import Reservation
from services.recurring import book_occurrences
from tests.conftest import MONDAY, reservation_request


def _weekly(start, weeks):
    return [start + timedelta(weeks=i) for i in range(weeks)]


def test_series_skips_conflicting_dates(book, court):
    taken = MONDAY + timedelta(weeks=1)
    book("10:30", "11:30", date=taken, customer_name="Bikash")

    report = book_occurrences(reservation_request(court.id), _weekly(MONDAY, 3))

    assert len(report.created) == 2
    assert report.skipped == [{
        "date": taken.isoformat(),
        "conflicting_slots": ["10:30", "10:45"],
        "race": False,
    }]
    assert report.failed == []

    created = Reservation.query.filter(Reservation.id.in_(report.created)).all()
    assert {r.origin for r in created} == {ReservationOrigin.RECURRING}
    assert sorted(r.date for r in created) == [MONDAY, MONDAY + timedelta(weeks=2)]


def test_series_reports_failures_and_keeps_going(make_court):
    closed = make_court("Closed court", is_active=False)

    report = book_occurrences(reservation_request(closed.id), [date(2024, 6, 10), date(2024, 6, 17)])

    assert report.created == []
    assert [f["date"] for f in report.failed] == ["2024-06-10", "2024-06-17"]
    assert report.to_dict()["failed"][0]["error"] == "Court is not active"


def test_series_with_prevalidated_dates_still_guarded(book, court):
    book("10:00", "11:00")

    report = book_occurrences(reservation_request(court.id), [MONDAY], skip_availability_check=True)

    assert report.created == []
    assert report.skipped[0]["race"] is True
    assert Reservation.query.count() == 1
