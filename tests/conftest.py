from datetime import datetime, timedelta

import matplotlib
import pytest

matplotlib.use("Agg")

from solarclock.compute import compute_flight_clock  # noqa: E402
from solarclock.models import GeoPoint, TripContext  # noqa: E402

INCHEON = GeoPoint(lat=37.4602, lon=126.4407)
HEATHROW = GeoPoint(lat=51.4700, lon=-0.4543)


def make_trip(
    departure: GeoPoint = INCHEON,
    arrival: GeoPoint = HEATHROW,
    when: datetime = datetime(2022, 6, 25, 11, 50, 0),
    utc_offset: float = 9.0,
    flying_minutes: float = 900,
) -> TripContext:
    return TripContext(
        departure=departure,
        arrival=arrival,
        departure_local=when,
        utc_offset_hours=utc_offset,
        flying_time=timedelta(minutes=flying_minutes),
    )


@pytest.fixture(name="make_trip")
def make_trip_fixture():
    return make_trip


@pytest.fixture
def icn_lhr_trip() -> TripContext:
    """Asiana OZ 521, Seoul/Incheon -> London Heathrow."""
    return make_trip()


@pytest.fixture
def icn_lhr_result(icn_lhr_trip):
    return compute_flight_clock(icn_lhr_trip)
