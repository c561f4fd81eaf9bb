"""
Sample Data Package

Static datasets for the dashboard views.
"""

from .sample_data import (
    CITY_METRICS,
    CITY_ZONES,
    ACTIVE_ALERTS,
    TRENDING_EVENTS,
    BUSINESS_HOTSPOTS,
    CROWD_FORECAST_SAMPLE,
    SAFETY_TREND,
    TRAFFIC_BY_HOUR,
)

__all__ = [
    "CITY_METRICS",
    "CITY_ZONES",
    "ACTIVE_ALERTS",
    "TRENDING_EVENTS",
    "BUSINESS_HOTSPOTS",
    "CROWD_FORECAST_SAMPLE",
    "SAFETY_TREND",
    "TRAFFIC_BY_HOUR",
]
