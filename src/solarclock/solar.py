"""Simplified solar model: declination, equation of time, and local solar time.

Single-harmonic approximations referenced to day 81 (around the March
equinox). No refraction, no ephemeris.
"""

import math
from datetime import date, datetime, timedelta

from solarclock.models import SolarState, TripContext

# Earth turns 360 deg in 24 h: 0.25 deg per minute, 4 minutes per degree
EARTH_ROTATION_DEG_PER_MIN = 0.25
MINUTES_PER_DEGREE = 4.0

_OBLIQUITY_DEG = 23.45
_REFERENCE_DAY = 81


def _sind(deg: float) -> float:
    return math.sin(math.radians(deg))


def _cosd(deg: float) -> float:
    return math.cos(math.radians(deg))


def _seasonal_angle(day: int) -> float:
    return 360.0 / 365.0 * (day - _REFERENCE_DAY)


def day_of_year(when: date) -> int:
    """Ordinal day within the calendar year, 1 ~ 366."""
    return when.timetuple().tm_yday


def declination(day: int) -> float:
    """Solar declination in degrees."""
    return _OBLIQUITY_DEG * _sind(_seasonal_angle(day))


def equation_of_time_minutes(day: int) -> float:
    """Apparent minus mean solar time, in minutes."""
    b = _seasonal_angle(day)
    return 9.87 * _sind(2 * b) - 7.53 * _cosd(b) - 1.5 * _sind(b)


def local_solar_time(
    local_time: datetime, longitude: float, utc_offset_hours: float, day: int
) -> datetime:
    """Convert local standard (clock) time to local solar time at ``longitude``.

    The time correction is ``4 * (longitude - LSTM) + EoT`` minutes, where the
    Local Standard Time Meridian is ``15 * utc_offset_hours`` degrees.
    """
    standard_meridian = 15.0 * utc_offset_hours
    correction = (
        MINUTES_PER_DEGREE * (longitude - standard_meridian)
        + equation_of_time_minutes(day)
    )
    return local_time + timedelta(minutes=correction)


def solar_noon_local_time(when: date) -> datetime:
    """12:00:00 on the same calendar date: the Sun is highest at LST noon."""
    return datetime(when.year, when.month, when.day, 12, 0, 0)


def derive_solar_state(trip: TripContext) -> SolarState:
    """Sun declination, departure LST and initial Sun sub-point longitude for a trip.

    The Sun is overhead at solar noon, so the minutes remaining until noon
    at the departure airport, at 4 minutes per degree, give how far east of
    the airport the Sun's sub-point is.
    """
    dep = trip.departure_local
    day = day_of_year(dep)
    noon = solar_noon_local_time(dep)
    dep_lst = local_solar_time(dep, trip.departure.lon, trip.utc_offset_hours, day)

    minutes_till_noon = (noon - dep_lst).total_seconds() / 60.0
    sun_lon0 = trip.departure.lon + minutes_till_noon / MINUTES_PER_DEGREE

    return SolarState(
        day_of_year=day,
        declination=declination(day),
        equation_of_time_minutes=equation_of_time_minutes(day),
        solar_noon=noon,
        departure_local_solar_time=dep_lst,
        initial_sun_longitude=sun_lon0,
        drift_rate=EARTH_ROTATION_DEG_PER_MIN,
        drift_deg=EARTH_ROTATION_DEG_PER_MIN * trip.flying_minutes,
    )
