"""Error taxonomy. Every failure is detected before or during the single pipeline run."""


class SolarClockError(Exception):
    """Base class for all solar-clock failures."""


class InvalidCoordinateError(SolarClockError, ValueError):
    """Latitude outside [-90, 90] or longitude outside [-180, 180]."""


class AntipodalRouteError(SolarClockError):
    """Departure and arrival are antipodes; the great circle is undefined."""


class NonPositiveDurationError(SolarClockError, ValueError):
    """Flying time is zero (for a non-degenerate route) or negative."""


class InvalidTripInputError(SolarClockError, ValueError):
    """A raw TripQuery field could not be parsed."""


class GeocodingError(SolarClockError):
    """Airport lookup failure."""
