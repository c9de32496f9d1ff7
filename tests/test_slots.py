import pytest

from services.errors import InvalidRangeError
from services.slots import generate_slots, to_label, to_minutes


def test_one_hour_is_four_quarter_slots():
    assert generate_slots("10:00", "11:00") == ["10:00", "10:15", "10:30", "10:45"]


def test_single_slot():
    assert generate_slots("23:30", "23:45") == ["23:30"]


def test_custom_granularity():
    assert generate_slots("06:00", "07:30", granularity=30) == ["06:00", "06:30", "07:00"]


@pytest.mark.parametrize("start,end", [
    ("11:00", "10:00"),
    ("10:00", "10:00"),
    ("10:05", "11:00"),
    ("10:00", "10:50"),
    ("25:00", "26:00"),
    ("10am", "11am"),
    ("", "11:00"),
    (None, "11:00"),
])
def test_invalid_ranges_are_rejected(start, end):
    with pytest.raises(InvalidRangeError):
        generate_slots(start, end)


def test_label_round_trip_helpers():
    assert to_minutes("07:45") == 465
    assert to_label(465) == "07:45"
