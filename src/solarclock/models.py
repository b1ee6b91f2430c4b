"""Data model definitions — explicit boundaries between input, compute, and render layers."""

import math
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime, time, timedelta

from pytz import FixedOffset, utc

from solarclock.errors import InvalidCoordinateError


@dataclass(frozen=True)
class GeoPoint:
    """A point on the Earth's surface."""

    lat: float  # Latitude (decimal degrees, -90 ~ +90)
    lon: float  # Longitude (decimal degrees, normalized to (-180, 180])

    @classmethod
    def checked(cls, lat: float, lon: float) -> "GeoPoint":
        """Build a GeoPoint from user input, rejecting out-of-range values.

        Raises:
            InvalidCoordinateError: latitude outside [-90, 90], longitude
                outside [-180, 180], or either value not a finite number.
        """
        lat = float(lat)
        lon = float(lon)
        if not (math.isfinite(lat) and math.isfinite(lon)):
            raise InvalidCoordinateError(f"Coordinates must be finite: ({lat}, {lon})")
        if not -90.0 <= lat <= 90.0:
            raise InvalidCoordinateError(f"Latitude out of range [-90, 90]: {lat}")
        if not -180.0 <= lon <= 180.0:
            raise InvalidCoordinateError(f"Longitude out of range [-180, 180]: {lon}")
        return cls(lat=lat, lon=lon)


@dataclass(frozen=True)
class TripQuery:
    """Raw user input. Not yet validated."""

    departure: str  # "lat,lon" pair or airport name ("37.4602,126.4407")
    arrival: str  # "lat,lon" pair or airport name
    when: str  # Departure local time, "YYYY-MM-DD HH:MM[:SS]"
    utc_offset: str  # Departure UTC offset in hours ("+9", "5.5", "-3:30")
    flying_time: str  # "HH:MM[:SS]" or plain minutes ("900")


@dataclass(frozen=True)
class TripContext:
    """Validated trip. Input to the solar computation."""

    departure: GeoPoint
    arrival: GeoPoint
    departure_local: datetime  # Naive local time written on the ticket
    utc_offset_hours: float  # Departure timezone, signed hours
    flying_time: timedelta

    @property
    def flying_minutes(self) -> float:
        return self.flying_time.total_seconds() / 60.0

    @property
    def departure_utc(self) -> datetime:
        """Departure instant as an aware UTC datetime."""
        tz = FixedOffset(round(self.utc_offset_hours * 60))
        return tz.localize(self.departure_local).astimezone(utc)

    @property
    def arrival_utc(self) -> datetime:
        return self.departure_utc + self.flying_time

    @property
    def arrival_local(self) -> datetime:
        """Arrival instant on the departure zone's wall clock (naive)."""
        return self.departure_local + self.flying_time


@dataclass(frozen=True)
class SolarState:
    """Sun parameters derived once per trip. Read-only thereafter."""

    day_of_year: int
    declination: float  # Degrees; constant for the whole flight
    equation_of_time_minutes: float
    solar_noon: datetime  # 12:00:00 on the departure date (LST reference)
    departure_local_solar_time: datetime
    initial_sun_longitude: float  # Sun sub-point longitude at departure (not normalized)
    drift_rate: float  # Westward drift, degrees per minute
    drift_deg: float  # Total westward drift over the flight


@dataclass(frozen=True)
class _PointSeries:
    points: tuple[GeoPoint, ...]

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[GeoPoint]:
        return iter(self.points)

    def __getitem__(self, index: int) -> GeoPoint:
        return self.points[index]

    @property
    def latitudes(self) -> tuple[float, ...]:
        return tuple(p.lat for p in self.points)

    @property
    def longitudes(self) -> tuple[float, ...]:
        return tuple(p.lon for p in self.points)


@dataclass(frozen=True)
class Route(_PointSeries):
    """Aircraft positions, departure → arrival, ~equally spaced on the great circle."""


@dataclass(frozen=True)
class SunTrack(_PointSeries):
    """Sun sub-points, index-aligned with Route by elapsed flight-time fraction."""


@dataclass(frozen=True)
class SolarClockSeries:
    """Apparent local solar time aboard the aircraft, index-aligned with Route."""

    times: tuple[time, ...]

    def __len__(self) -> int:
        return len(self.times)

    def __iter__(self) -> Iterator[time]:
        return iter(self.times)

    def __getitem__(self, index: int) -> time:
        return self.times[index]


@dataclass(frozen=True)
class FlightSolarClock:
    """The sole input to renderers and reports. Fully computed state."""

    trip: TripContext
    solar: SolarState
    route: Route
    sun_track: SunTrack
    solar_clock: SolarClockSeries

    def __len__(self) -> int:
        return len(self.route)

    def series(self) -> tuple[Route, SunTrack, SolarClockSeries]:
        """The three index-aligned output sequences."""
        return self.route, self.sun_track, self.solar_clock

    def rows(self) -> Iterator[tuple[GeoPoint, GeoPoint, time]]:
        """Per-index (plane, sun, solar clock) triples in flight order."""
        return zip(self.route, self.sun_track, self.solar_clock)
