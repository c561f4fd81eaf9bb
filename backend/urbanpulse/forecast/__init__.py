"""
Crowd Forecast Module

Location-aware crowd forecasting for the UrbanPulse dashboard.

Components:
- geo: Haversine distances and the nearby-zone filter
- diurnal: Hour-of-day crowd bands
- series: Baseline aggregation, hourly/24h series and best-time ranking
- ForecastEngine: Runs the whole pipeline for a location
- ForecastBroadcastService: Pushes live forecasts over WebSocket

Usage:
    from urbanpulse.forecast import get_forecast_engine

    engine = get_forecast_engine()
    snapshot = engine.generate(Coordinate(lat=40.71, lng=-74.0), datetime.now())
"""

from urbanpulse.forecast.errors import (
    ForecastError,
    EmptyZoneSet,
    InvalidCoordinate,
)

from urbanpulse.forecast.geo import (
    NearbyZone,
    EARTH_RADIUS_KM,
    validate_coordinate,
    haversine_km,
    approximate_geo_position,
    nearby_zones,
)

from urbanpulse.forecast.diurnal import (
    DiurnalBand,
    DiurnalProfile,
    HOURLY_PROFILE,
    FORECAST_PROFILE,
)

from urbanpulse.forecast.series import (
    RandomSource,
    HourlyPoint,
    ForecastPoint,
    BestTimeSlot,
    BEST_TIME_REASONS,
    aggregate_baseline,
    hourly_series,
    forecast_series,
    best_times,
    live_zone_traffic,
    hour_label_12h,
    format_window_label,
)

from urbanpulse.forecast.forecast_engine import (
    ForecastEngine,
    ForecastSnapshot,
    get_forecast_engine,
    init_forecast_engine,
)

from urbanpulse.forecast.forecast_broadcast import (
    ForecastBroadcastService,
    get_broadcast_service,
    init_broadcast_service,
)


__all__ = [
    # Errors
    'ForecastError',
    'EmptyZoneSet',
    'InvalidCoordinate',

    # Geometry
    'NearbyZone',
    'EARTH_RADIUS_KM',
    'validate_coordinate',
    'haversine_km',
    'approximate_geo_position',
    'nearby_zones',

    # Diurnal bands
    'DiurnalBand',
    'DiurnalProfile',
    'HOURLY_PROFILE',
    'FORECAST_PROFILE',

    # Series
    'RandomSource',
    'HourlyPoint',
    'ForecastPoint',
    'BestTimeSlot',
    'BEST_TIME_REASONS',
    'aggregate_baseline',
    'hourly_series',
    'forecast_series',
    'best_times',
    'live_zone_traffic',
    'hour_label_12h',
    'format_window_label',

    # Engine
    'ForecastEngine',
    'ForecastSnapshot',
    'get_forecast_engine',
    'init_forecast_engine',

    # Broadcast
    'ForecastBroadcastService',
    'get_broadcast_service',
    'init_broadcast_service',
]
