import pytest

from helpers import week_hours
from models import BookingPolicy, BusinessSnapshot, Location, Service, StaffMember


@pytest.fixture
def location():
    return Location(id="loc_main", name="Main Street", hours=week_hours())


@pytest.fixture
def cut():
    return Service(id="svc_cut", name="Cut", duration=60)


@pytest.fixture
def colour():
    return Service(id="svc_colour", name="Colour", duration=90, buffer_time=15)


@pytest.fixture
def anna():
    return StaffMember(
        id="staff_anna",
        name="Anna",
        location_id="loc_main",
        working_hours=week_hours(),
        services=["all"],
    )


@pytest.fixture
def ben():
    return StaffMember(
        id="staff_ben",
        name="Ben",
        working_hours=week_hours(),
        services=["svc_cut"],
    )


@pytest.fixture
def open_policy():
    """No notice, wide advance window, 15 min grid."""
    return BookingPolicy(min_notice_hours=0, max_advance_days=365)


@pytest.fixture
def make_snapshot(location, anna, cut, colour, open_policy):
    def _make(**overrides):
        data = {
            "location": location,
            "staff": [anna],
            "services": [cut, colour],
            "appointments": [],
            "blocked_times": [],
            "policy": open_policy,
        }
        data.update(overrides)
        return BusinessSnapshot(**data)
    return _make

