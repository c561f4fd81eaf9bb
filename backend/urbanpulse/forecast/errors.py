"""
Forecast Errors
"""


class ForecastError(Exception):
    """Base exception for all crowd forecast errors."""
    pass


class EmptyZoneSet(ForecastError):
    """Raised when an operation needs at least one zone and got none."""
    pass


class InvalidCoordinate(ForecastError, ValueError):
    """Raised when latitude or longitude is outside its valid range."""
    pass
