from datetime import date

import pytest

from app import create_app
from config import TestConfig
from models import db
from models.court import Court
from services.reservations import ReservationRequest, create_reservation

MONDAY = date(2024, 6, 10)
SATURDAY = date(2024, 6, 15)


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def _make_court(name, **kwargs):
    court = Court(
        name=name,
        sport=kwargs.get("sport"),
        weekday_rate=kwargs.get("weekday_rate", 800),
        weekend_rate=kwargs.get("weekend_rate", 1000),
        is_active=kwargs.get("is_active", True),
    )
    db.session.add(court)
    db.session.commit()
    return court


@pytest.fixture
def court(app):
    return _make_court("Court A")


@pytest.fixture
def other_court(app):
    return _make_court("Court B")


@pytest.fixture
def make_court(app):
    return _make_court


def reservation_request(court_id, **overrides):
    data = dict(
        customer_name="Asha",
        customer_phone="9800000001",
        sport="Badminton",
        court_id=court_id,
        date=MONDAY,
        start_time="10:00",
        end_time="11:00",
        created_by="admin-1",
    )
    data.update(overrides)
    return ReservationRequest(**data)


@pytest.fixture
def book(court):
    """book(start, end, **overrides) -> Reservation on Court A."""
    def _book(start_time="10:00", end_time="11:00", **overrides):
        overrides.setdefault("court_id", court.id)
        court_id = overrides.pop("court_id")
        skip_check = overrides.pop("skip_availability_check", False)
        req = reservation_request(court_id, start_time=start_time, end_time=end_time, **overrides)
        return create_reservation(req, skip_availability_check=skip_check)
    return _book
