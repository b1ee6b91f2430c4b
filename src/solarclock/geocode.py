"""Airport location parsing — "lat,lon" pairs or names resolved through Nominatim."""

import logging
import re

import httpx

from solarclock.config import settings
from solarclock.errors import GeocodingError
from solarclock.models import GeoPoint

logger = logging.getLogger("solarclock.geocode")

_LATLON = re.compile(r"^\s*([+-]?\d+(?:\.\d+)?)\s*[,/ ]\s*([+-]?\d+(?:\.\d+)?)\s*$")

_HEADERS = {"User-Agent": "SolarClock/1.0 (flight solar time calculator)"}


def locate_airport(name: str) -> GeoPoint:
    """Nominatim (OpenStreetMap) geocoder. Returns the first match.

    Raises:
        GeocodingError: on HTTP failure or when nothing matches.
    """
    params = {"q": name, "format": "json", "limit": 1}
    try:
        resp = httpx.get(
            settings.nominatim_url,
            params=params,
            headers=_HEADERS,
            timeout=settings.http_timeout,
        )
        resp.raise_for_status()
        results = resp.json()
    except httpx.HTTPError as exc:
        logger.error("Nominatim lookup failed for %r: %s", name, exc)
        raise GeocodingError(f"Lookup failed for {name!r}: {exc}") from exc
    if not results:
        raise GeocodingError(f"Airport not found: {name}")
    r = results[0]
    logger.info("Resolved %r to %s", name, r.get("display_name", ""))
    return GeoPoint.checked(float(r["lat"]), float(r["lon"]))


def parse_location(text: str) -> GeoPoint:
    """Parse "lat,lon" (also "lat lon" / "lat/lon"); anything else is looked up by name.

    Raises:
        InvalidCoordinateError: a coordinate pair is out of range.
        GeocodingError: a name could not be resolved.
    """
    match = _LATLON.match(text)
    if match:
        return GeoPoint.checked(float(match.group(1)), float(match.group(2)))
    if not text.strip():
        raise GeocodingError("Empty location")
    return locate_airport(text.strip())
