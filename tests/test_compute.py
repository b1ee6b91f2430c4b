from datetime import datetime, time, timedelta

import pytest

from solarclock.compute import (
    build_route,
    build_sun_track,
    compute_flight_clock,
    compute_solar_clock,
    parse_flying_time,
    parse_utc_offset,
    parse_when,
    run,
)
from solarclock.config import settings
from solarclock.errors import (
    AntipodalRouteError,
    InvalidCoordinateError,
    InvalidTripInputError,
    NonPositiveDurationError,
)
from solarclock.geomath import great_circle_distance_km, normalize_longitude
from solarclock.models import GeoPoint, Route, SunTrack, TripQuery


def _seconds_of_day(value: time | datetime) -> int:
    return value.hour * 3600 + value.minute * 60 + value.second


def _clock_gap(a: time | datetime, b: time | datetime) -> int:
    """Distance between two clock readings in seconds, modulo 24 h."""
    d = (_seconds_of_day(a) - _seconds_of_day(b)) % 86400
    return min(d, 86400 - d)


def test_icn_lhr_series_are_aligned(icn_lhr_result, icn_lhr_trip):
    route, sun_track, solar_clock = icn_lhr_result.series()

    assert len(route) >= 2
    assert len(sun_track) == len(route)
    assert len(solar_clock) == len(route)
    assert route[0] == icn_lhr_trip.departure
    assert route[-1].lat == pytest.approx(51.4700)
    assert route[-1].lon == pytest.approx(-0.4543)
    assert len(list(icn_lhr_result.rows())) == len(route)


def test_icn_lhr_declination_constant(icn_lhr_result):
    assert icn_lhr_result.solar.day_of_year == 176
    lats = set(icn_lhr_result.sun_track.latitudes)
    assert len(lats) == 1
    assert lats.pop() == pytest.approx(23.4, abs=0.05)


def test_all_longitudes_normalized(icn_lhr_result):
    for lon in icn_lhr_result.route.longitudes + icn_lhr_result.sun_track.longitudes:
        assert -180.0 < lon <= 180.0


def test_route_spacing_within_tolerance(icn_lhr_result):
    points = icn_lhr_result.route.points
    gaps = [great_circle_distance_km(a, b) for a, b in zip(points, points[1:])]
    for gap in gaps[:-1]:
        assert abs(gap - 15.0) <= 0.01


def test_sun_drifts_west_evenly(icn_lhr_result):
    lons = icn_lhr_result.sun_track.longitudes
    step = 225.0 / (len(lons) - 1)
    for a, b in zip(lons, lons[1:]):
        assert normalize_longitude(a - b) == pytest.approx(step)


def test_clock_starts_at_departure_local_solar_time(icn_lhr_result):
    dep_lst = icn_lhr_result.solar.departure_local_solar_time

    assert _clock_gap(icn_lhr_result.solar_clock[0], dep_lst) <= 1


def test_clock_ends_after_flight_shifted_by_longitude(icn_lhr_result, icn_lhr_trip):
    dep_lst = icn_lhr_result.solar.departure_local_solar_time
    shift = 900 - 4 * (icn_lhr_trip.departure.lon - icn_lhr_trip.arrival.lon)
    expected = dep_lst + timedelta(minutes=shift)

    assert _clock_gap(icn_lhr_result.solar_clock[-1], expected) <= 1


def test_clock_advances_every_step(icn_lhr_result):
    # Westward drift of the Sun outpaces the plane's westward motion, so the
    # clock moves forward by under two minutes per 15 km, wrapping at midnight.
    clocks = icn_lhr_result.solar_clock.times
    for a, b in zip(clocks, clocks[1:]):
        step = (_seconds_of_day(b) - _seconds_of_day(a)) % 86400
        assert 0 < step < 120


def test_clock_times_are_whole_seconds(icn_lhr_result):
    assert all(t.microsecond == 0 for t in icn_lhr_result.solar_clock)


def test_degenerate_route_single_point(make_trip):
    airport = GeoPoint(lat=35.5494, lon=139.7798)
    result = compute_flight_clock(make_trip(departure=airport, arrival=airport))

    assert len(result.route) == 1
    assert len(result.sun_track) == 1
    assert len(result.solar_clock) == 1
    assert result.sun_track[0].lon == pytest.approx(
        normalize_longitude(result.solar.initial_sun_longitude)
    )


def test_zero_duration_allowed_only_for_degenerate_route(make_trip):
    airport = GeoPoint(lat=35.5494, lon=139.7798)
    result = compute_flight_clock(
        make_trip(departure=airport, arrival=airport, flying_minutes=0)
    )
    assert len(result) == 1

    with pytest.raises(NonPositiveDurationError):
        compute_flight_clock(make_trip(flying_minutes=0))


def test_negative_duration_rejected(make_trip):
    with pytest.raises(NonPositiveDurationError):
        compute_flight_clock(make_trip(flying_minutes=-10))


@pytest.mark.parametrize(
    "point",
    [GeoPoint(lat=91.0, lon=0.0), GeoPoint(lat=0.0, lon=-180.5), GeoPoint(lat=float("nan"), lon=0.0)],
)
def test_invalid_coordinates_rejected(make_trip, point):
    with pytest.raises(InvalidCoordinateError):
        compute_flight_clock(make_trip(arrival=point))


def test_antipodal_route_rejected(make_trip):
    trip = make_trip(
        departure=GeoPoint(lat=10.0, lon=20.0), arrival=GeoPoint(lat=-10.0, lon=-160.0)
    )
    with pytest.raises(AntipodalRouteError):
        compute_flight_clock(trip)


def test_build_route_uses_settings_spacing(monkeypatch, icn_lhr_trip):
    default_len = len(build_route(icn_lhr_trip))
    monkeypatch.setattr(settings, "route_spacing_km", 150.0)

    coarse = build_route(icn_lhr_trip)

    assert len(coarse) < default_len
    assert great_circle_distance_km(coarse[0], coarse[1]) == pytest.approx(150.0)


def test_build_sun_track_requires_points(icn_lhr_result):
    with pytest.raises(ValueError):
        build_sun_track(icn_lhr_result.solar, 0)


def test_compute_solar_clock_rejects_misaligned(icn_lhr_result):
    route = Route(points=icn_lhr_result.route.points[:-1])
    with pytest.raises(ValueError):
        compute_solar_clock(icn_lhr_result.solar, route, icn_lhr_result.sun_track)


def test_solar_clock_formula_sign(icn_lhr_result):
    # Sun 15 deg east of the plane reads one hour before noon
    solar = icn_lhr_result.solar
    route = Route(points=(GeoPoint(lat=0.0, lon=10.0),))
    sun = SunTrack(points=(GeoPoint(lat=0.0, lon=25.0),))

    clock = compute_solar_clock(solar, route, sun)

    assert clock[0] == time(11, 0, 0)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("2022-06-25 11:50", datetime(2022, 6, 25, 11, 50)),
        ("2022-06-25 11:50:30", datetime(2022, 6, 25, 11, 50, 30)),
        ("2022-06-25T11:50", datetime(2022, 6, 25, 11, 50)),
    ],
)
def test_parse_when(text, expected):
    assert parse_when(text) == expected


def test_parse_when_rejects_garbage():
    with pytest.raises(InvalidTripInputError):
        parse_when("25/06/2022")


@pytest.mark.parametrize(
    "value, expected",
    [(9, 9.0), ("+9", 9.0), ("5.5", 5.5), ("-03:30", -3.5), ("UTC+05:45", 5.75), ("0", 0.0)],
)
def test_parse_utc_offset(value, expected):
    assert parse_utc_offset(value) == pytest.approx(expected)


@pytest.mark.parametrize("value", ["abc", "+15", -13])
def test_parse_utc_offset_rejects(value):
    with pytest.raises(InvalidTripInputError):
        parse_utc_offset(value)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("15:00", timedelta(hours=15)),
        ("15:00:30", timedelta(hours=15, seconds=30)),
        ("900", timedelta(minutes=900)),
        (90.5, timedelta(minutes=90.5)),
    ],
)
def test_parse_flying_time(value, expected):
    assert parse_flying_time(value) == expected


def test_parse_flying_time_rejects_garbage():
    with pytest.raises(InvalidTripInputError):
        parse_flying_time("fifteen hours")


@pytest.mark.parametrize("value", ["inf", "1e30", "nan", "99999999999:00", float("inf")])
def test_parse_flying_time_rejects_unrepresentable(value):
    with pytest.raises(InvalidTripInputError):
        parse_flying_time(value)


def test_arrival_past_datetime_range_rejected(make_trip):
    trip = make_trip(flying_minutes=5_000_000_000)

    with pytest.raises(InvalidTripInputError):
        compute_flight_clock(trip)


def test_run_from_query_coordinates():
    query = TripQuery(
        departure="37.4602,126.4407",
        arrival="51.4700,-0.4543",
        when="2022-06-25 11:50:00",
        utc_offset="+9",
        flying_time="15:00:00",
    )

    result = run(query)

    assert result.trip.utc_offset_hours == 9.0
    assert result.trip.flying_minutes == 900
    assert len(result.solar_clock) == len(result.route)
