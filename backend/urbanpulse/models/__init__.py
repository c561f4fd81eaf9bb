"""
Pydantic Models Package

All data models for the UrbanPulse backend.
Import from here for convenience.
"""

# Zone and coordinate models
from .zone import (
    CrowdLevel,
    CROWD_LEVEL_WEIGHTS,
    Coordinate,
    ZonePosition,
    Zone,
)

# Dashboard models
from .dashboard import (
    AlertType,
    AlertSeverity,
    CityMetrics,
    CityAlert,
    TrendingEvent,
    BusinessZone,
    CrowdForecastSample,
    SafetyTrend,
    TrafficSample,
)

# Location models
from .location import (
    LocationInfo,
    LocationUpdateRequest,
)

__all__ = [
    # Zones
    "CrowdLevel",
    "CROWD_LEVEL_WEIGHTS",
    "Coordinate",
    "ZonePosition",
    "Zone",

    # Dashboard
    "AlertType",
    "AlertSeverity",
    "CityMetrics",
    "CityAlert",
    "TrendingEvent",
    "BusinessZone",
    "CrowdForecastSample",
    "SafetyTrend",
    "TrafficSample",

    # Location
    "LocationInfo",
    "LocationUpdateRequest",
]
