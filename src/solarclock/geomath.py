"""Spherical-geometry primitives on a spherical Earth."""

import math

import numpy as np

from solarclock.errors import AntipodalRouteError
from solarclock.models import GeoPoint

EARTH_RADIUS_KM = 6371.0

_DEGENERATE_ARC_RAD = 1e-12
_ANTIPODAL_ARC_RAD = 1e-9


def normalize_longitude(lon: float) -> float:
    """Wrap any longitude into (-180, 180], however many turns away it is."""
    return lon - 360.0 * math.ceil((lon - 180.0) / 360.0)


def _unit_vector(point: GeoPoint) -> np.ndarray:
    lat = math.radians(point.lat)
    lon = math.radians(point.lon)
    return np.array(
        [math.cos(lat) * math.cos(lon), math.cos(lat) * math.sin(lon), math.sin(lat)]
    )


def _central_angle(u0: np.ndarray, u1: np.ndarray) -> float:
    # atan2(|u0 x u1|, u0 . u1) is well-conditioned at both 0 and pi
    return math.atan2(float(np.linalg.norm(np.cross(u0, u1))), float(np.dot(u0, u1)))


def is_same_point(p0: GeoPoint, p1: GeoPoint) -> bool:
    """True when p0 and p1 coincide on the sphere (e.g. both poles at any longitude)."""
    return _central_angle(_unit_vector(p0), _unit_vector(p1)) < _DEGENERATE_ARC_RAD


def great_circle_distance_km(p0: GeoPoint, p1: GeoPoint) -> float:
    """Great-circle distance between two points (km)."""
    return EARTH_RADIUS_KM * _central_angle(_unit_vector(p0), _unit_vector(p1))


def great_circle_interpolate(
    p0: GeoPoint,
    p1: GeoPoint,
    target_spacing_km: float,
    tolerance_km: float,
) -> tuple[GeoPoint, ...]:
    """Discretize the minor-arc great circle from p0 to p1.

    Intermediate points sit exactly ``target_spacing_km`` apart, measured from
    p0. p1 closes the sequence; if the closing segment would be shorter than
    ``tolerance_km`` the last intermediate point is dropped, so every segment
    lies within ``target_spacing_km ± tolerance_km`` except possibly the last.

    Longitudes come straight from ``atan2`` and are not normalized here.

    Args:
        p0: Departure point (first element of the result).
        p1: Arrival point (last element of the result).
        target_spacing_km: Distance between consecutive points.
        tolerance_km: Allowed spacing deviation.

    Returns:
        Tuple of GeoPoint. A single point when p0 == p1.

    Raises:
        AntipodalRouteError: p0 and p1 are antipodes (ambiguous great circle).
        ValueError: non-positive spacing or tolerance, or a tolerance not
            smaller than the spacing.
    """
    if target_spacing_km <= 0 or tolerance_km <= 0:
        raise ValueError("Spacing and tolerance must be positive")
    if tolerance_km >= target_spacing_km:
        raise ValueError(
            f"Tolerance {tolerance_km} km must be smaller than spacing {target_spacing_km} km"
        )

    u0 = _unit_vector(p0)
    u1 = _unit_vector(p1)
    arc = _central_angle(u0, u1)
    if arc < _DEGENERATE_ARC_RAD:
        return (p0,)
    if math.pi - arc < _ANTIPODAL_ARC_RAD:
        raise AntipodalRouteError(
            f"Departure ({p0.lat}, {p0.lon}) and arrival ({p1.lat}, {p1.lon}) are antipodal"
        )

    total_km = EARTH_RADIUS_KM * arc
    steps = np.arange(target_spacing_km, total_km, target_spacing_km)
    if steps.size and total_km - steps[-1] < tolerance_km:
        steps = steps[:-1]

    # Spherical linear interpolation of the unit vectors
    fractions = steps / total_km
    sin_arc = math.sin(arc)
    a = np.sin((1.0 - fractions) * arc) / sin_arc
    b = np.sin(fractions * arc) / sin_arc
    xyz = np.outer(a, u0) + np.outer(b, u1)
    lats = np.degrees(np.arctan2(xyz[:, 2], np.hypot(xyz[:, 0], xyz[:, 1])))
    lons = np.degrees(np.arctan2(xyz[:, 1], xyz[:, 0]))

    inner = tuple(
        GeoPoint(lat=float(lat), lon=float(lon)) for lat, lon in zip(lats, lons)
    )
    return (p0, *inner, p1)
