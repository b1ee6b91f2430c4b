"""Text reporting for a computed FlightSolarClock."""

from collections.abc import Iterator
from datetime import time

from solarclock.i18n import t
from solarclock.models import FlightSolarClock, GeoPoint


def format_clock(clock: time) -> str:
    return clock.strftime("%H:%M:%S")


def _format_point(point: GeoPoint) -> str:
    return f"{point.lat:.4f}, {point.lon:.4f}"


def clock_lines(result: FlightSolarClock, lang: str = "en") -> Iterator[str]:
    """One line per route index, in flight order."""
    template = t("clock_line", lang)
    for clock in result.solar_clock:
        yield template.format(clock=format_clock(clock))


def trip_summary(result: FlightSolarClock, lang: str = "en") -> str:
    """Multi-line header describing the trip and the derived Sun state."""
    trip = result.trip
    solar = result.solar
    utc_fmt = "%Y-%m-%d %H:%M UTC"
    lines = [
        f"{t('summary_departure', lang)}: ({_format_point(trip.departure)}) "
        f"{trip.departure_local:%Y-%m-%d %H:%M} / {trip.departure_utc.strftime(utc_fmt)}",
        f"{t('summary_arrival', lang)}: ({_format_point(trip.arrival)}) "
        f"{trip.arrival_utc.strftime(utc_fmt)}",
        f"{t('summary_declination', lang)}: {solar.declination:.2f} deg",
        f"{t('summary_sun_longitude', lang)}: {result.sun_track[0].lon:.2f} deg",
        f"{t('summary_points', lang)}: {len(result)}",
    ]
    return "\n".join(lines)
