"""Solar-clock computation layer — route discretisation, Sun track, and aircraft solar time."""

import logging
import re
from datetime import datetime, timedelta

from solarclock.config import settings
from solarclock.errors import InvalidTripInputError, NonPositiveDurationError
from solarclock.geocode import parse_location
from solarclock.geomath import great_circle_interpolate, is_same_point, normalize_longitude
from solarclock.models import (
    FlightSolarClock,
    GeoPoint,
    Route,
    SolarClockSeries,
    SolarState,
    SunTrack,
    TripContext,
    TripQuery,
)
from solarclock.solar import MINUTES_PER_DEGREE, derive_solar_state

logger = logging.getLogger("solarclock.compute")

_WHEN_FORMATS = ("%Y-%m-%d %H:%M:%S", "%Y-%m-%d %H:%M", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%dT%H:%M")
_OFFSET_HM = re.compile(r"^([+-]?)(\d{1,2}):(\d{2})$")
_DURATION_HMS = re.compile(r"^(\d+):(\d{2})(?::(\d{2}))?$")


def parse_when(when: str) -> datetime:
    """Parse a naive local departure time ("YYYY-MM-DD HH:MM[:SS]")."""
    for fmt in _WHEN_FORMATS:
        try:
            return datetime.strptime(when.strip(), fmt)
        except ValueError:
            continue
    raise InvalidTripInputError(f"Unrecognised departure time: {when!r}")


def parse_utc_offset(offset: str | float) -> float:
    """Parse a UTC offset in hours: 9, "+9", "5.5", "-03:30", "UTC+09:00".

    Raises:
        InvalidTripInputError: unparseable or outside [-12, +14].
    """
    if isinstance(offset, (int, float)):
        hours = float(offset)
    else:
        text = offset.strip().upper().removeprefix("UTC").removeprefix("GMT").strip()
        match = _OFFSET_HM.match(text)
        try:
            if match:
                sign = -1.0 if match.group(1) == "-" else 1.0
                hours = sign * (int(match.group(2)) + int(match.group(3)) / 60.0)
            else:
                hours = float(text or "0")
        except ValueError as exc:
            raise InvalidTripInputError(f"Unrecognised UTC offset: {offset!r}") from exc
    if not -12.0 <= hours <= 14.0:
        raise InvalidTripInputError(f"UTC offset out of range [-12, +14]: {hours}")
    return hours


def parse_flying_time(flying_time: str | float) -> timedelta:
    """Parse flying time as "HH:MM[:SS]" or a number of minutes.

    Raises:
        InvalidTripInputError: unparseable, NaN, or too large for a timedelta.
    """
    try:
        if isinstance(flying_time, (int, float)):
            return timedelta(minutes=flying_time)
        text = flying_time.strip()
        match = _DURATION_HMS.match(text)
        if match:
            hours, mins, secs = (int(g or 0) for g in match.groups())
            return timedelta(hours=hours, minutes=mins, seconds=secs)
        return timedelta(minutes=float(text))
    except (ValueError, OverflowError) as exc:
        raise InvalidTripInputError(f"Unrecognised flying time: {flying_time!r}") from exc


def validate_trip(trip: TripContext) -> None:
    """Reject invalid trips before any computation.

    Raises:
        InvalidCoordinateError: an airport coordinate is out of range.
        NonPositiveDurationError: negative flying time, or zero flying time
            on a route that actually goes somewhere.
        InvalidTripInputError: the departure or arrival instant is outside the
            representable datetime range.
    """
    try:
        GeoPoint.checked(trip.departure.lat, trip.departure.lon)
        GeoPoint.checked(trip.arrival.lat, trip.arrival.lon)
        minutes = trip.flying_minutes
        if minutes < 0:
            raise NonPositiveDurationError(f"Flying time is negative: {minutes} min")
        if minutes == 0 and not is_same_point(trip.departure, trip.arrival):
            raise NonPositiveDurationError(
                "Flying time is zero but departure and arrival differ"
            )
        try:
            trip.arrival_utc
            trip.arrival_local
        except OverflowError as exc:
            raise InvalidTripInputError(
                f"Arrival time out of range for a {minutes:.0f} min flight"
            ) from exc
    except ValueError as exc:
        logger.warning("Rejected trip: %s", exc)
        raise


def build_route(
    trip: TripContext,
    spacing_km: float | None = None,
    tolerance_km: float | None = None,
) -> Route:
    """Discretize the departure → arrival great circle into aircraft positions.

    Args:
        trip: Validated trip.
        spacing_km: Target spacing (default ``settings.route_spacing_km``).
        tolerance_km: Spacing tolerance (default ``settings.route_tolerance_km``).

    Returns:
        Route with every longitude normalized into (-180, 180].
    """
    if spacing_km is None:
        spacing_km = settings.route_spacing_km
    if tolerance_km is None:
        tolerance_km = settings.route_tolerance_km

    points = great_circle_interpolate(trip.departure, trip.arrival, spacing_km, tolerance_km)
    route = Route(
        points=tuple(GeoPoint(lat=p.lat, lon=normalize_longitude(p.lon)) for p in points)
    )
    logger.debug("Route built: %d points at %.2f km spacing", len(route), spacing_km)
    return route


def build_sun_track(solar: SolarState, num_points: int) -> SunTrack:
    """Sun sub-points drifting west at Earth's rotation rate, one per route index.

    Index k stands for elapsed flight-time fraction k / (N - 1), so the drift
    is spread evenly over time while the route is spread evenly over distance.
    """
    if num_points < 1:
        raise ValueError("num_points must be at least 1")
    lon0 = solar.initial_sun_longitude
    step = solar.drift_deg / (num_points - 1) if num_points > 1 else 0.0
    return SunTrack(
        points=tuple(
            GeoPoint(lat=solar.declination, lon=normalize_longitude(lon0 - step * k))
            for k in range(num_points)
        )
    )


def _round_to_second(dt: datetime) -> datetime:
    return (dt + timedelta(microseconds=500_000)).replace(microsecond=0)


def compute_solar_clock(
    solar: SolarState, route: Route, sun_track: SunTrack
) -> SolarClockSeries:
    """Local solar time read aboard the aircraft at every route index.

    ``solar_noon - 4 * (sun_lon - plane_lon)`` minutes, to the nearest second.
    """
    if len(route) != len(sun_track):
        raise ValueError(
            f"Route and Sun track are misaligned: {len(route)} != {len(sun_track)}"
        )
    times = tuple(
        _round_to_second(
            solar.solar_noon
            - timedelta(minutes=(sun.lon - plane.lon) * MINUTES_PER_DEGREE)
        ).time()
        for plane, sun in zip(route, sun_track)
    )
    return SolarClockSeries(times=times)


def compute_flight_clock(
    trip: TripContext,
    spacing_km: float | None = None,
    tolerance_km: float | None = None,
) -> FlightSolarClock:
    """Run the whole pipeline for a validated TripContext.

    Args:
        trip: Departure/arrival, local departure time, UTC offset, flying time.
        spacing_km: Route spacing override.
        tolerance_km: Route tolerance override.

    Returns:
        FlightSolarClock with index-aligned route, Sun track and solar clock.

    Raises:
        InvalidCoordinateError, NonPositiveDurationError, InvalidTripInputError,
        AntipodalRouteError.
    """
    validate_trip(trip)
    solar = derive_solar_state(trip)
    logger.debug(
        "Solar state: day %d, declination %.3f deg, initial Sun longitude %.3f deg",
        solar.day_of_year,
        solar.declination,
        solar.initial_sun_longitude,
    )

    route = build_route(trip, spacing_km, tolerance_km)
    sun_track = build_sun_track(solar, len(route))
    solar_clock = compute_solar_clock(solar, route, sun_track)

    logger.info(
        "Computed solar clock for (%.4f, %.4f) -> (%.4f, %.4f): %d points",
        trip.departure.lat,
        trip.departure.lon,
        trip.arrival.lat,
        trip.arrival.lon,
        len(route),
    )
    return FlightSolarClock(
        trip=trip,
        solar=solar,
        route=route,
        sun_track=sun_track,
        solar_clock=solar_clock,
    )


def trip_from_query(query: TripQuery) -> TripContext:
    """Resolve a raw TripQuery (locations may be airport names) into a TripContext.

    Raises:
        InvalidTripInputError: unparseable time, offset or duration.
        InvalidCoordinateError: out-of-range coordinates.
        GeocodingError: an airport name could not be resolved.
    """
    return TripContext(
        departure=parse_location(query.departure),
        arrival=parse_location(query.arrival),
        departure_local=parse_when(query.when),
        utc_offset_hours=parse_utc_offset(query.utc_offset),
        flying_time=parse_flying_time(query.flying_time),
    )


def run(query: TripQuery) -> FlightSolarClock:
    """Top-level entry point: takes a TripQuery and returns a FlightSolarClock.

    Args:
        query: User input (locations, time strings).

    Returns:
        Fully computed FlightSolarClock.
    """
    return compute_flight_clock(trip_from_query(query))
