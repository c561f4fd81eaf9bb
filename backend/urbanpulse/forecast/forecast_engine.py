"""
Forecast Engine - Location-Aware Crowd Forecast

Runs the full forecast pipeline for a user location:
nearby zones -> crowd baseline -> hourly and 24h series -> best times.

The engine keeps no per-query state. Every call takes the location, the
current time and the random source explicitly, so repeated calls (the live
view refreshes every few seconds) are independent of each other.
"""

import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Sequence

from urbanpulse.config import get_config
from urbanpulse.data import CITY_ZONES
from urbanpulse.models import Coordinate, Zone
from urbanpulse.forecast.geo import NearbyZone, nearby_zones, DEFAULT_GEO_SCALE
from urbanpulse.forecast.series import (
    HourlyPoint,
    ForecastPoint,
    BestTimeSlot,
    RandomSource,
    aggregate_baseline,
    hourly_series,
    forecast_series,
    best_times,
    live_zone_traffic,
    resolve_rng,
)


@dataclass
class ForecastSnapshot:
    """
    One run of the forecast pipeline

    Everything the crowd forecast view renders for a location at a moment.
    """
    location: Coordinate
    zone_label: str
    generated_at: datetime
    nearby: List[NearbyZone]
    baseline: float
    hourly: List[HourlyPoint]
    forecast: List[ForecastPoint]
    best_times: List[BestTimeSlot]
    live_zones: List[NearbyZone] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses"""
        return {
            'location': {'lat': self.location.lat, 'lng': self.location.lng},
            'zoneLabel': self.zone_label,
            'generatedAt': self.generated_at.isoformat(),
            'nearbyZoneCount': len(self.nearby),
            'nearbyZones': [z.to_dict() for z in self.nearby],
            'baseline': round(self.baseline, 2),
            'hourly': [p.to_dict() for p in self.hourly],
            'forecast': [p.to_dict() for p in self.forecast],
            'bestTimes': [s.to_dict() for s in self.best_times],
            'liveZones': [z.to_dict() for z in self.live_zones]
        }


class ForecastEngine:
    """
    Crowd forecast engine

    Usage:
        engine = ForecastEngine(config={'maxDistanceKm': 5})
        snapshot = engine.generate(Coordinate(lat=40.71, lng=-74.0),
                                   now=datetime.now(),
                                   rng=np.random.default_rng(7))
    """

    def __init__(self, config: dict = None, zones: Optional[Sequence[Zone]] = None):
        """
        Initialize forecast engine

        Args:
            config: Configuration dict with options:
                - maxDistanceKm: Radius for nearby zones (default: 10)
                - geoScale: Degrees per planar zone unit (default: 0.01)
                - hourlyLength: Points in the hourly series (default: 9)
                - topN: Best-time slots to return (default: 3)
                - defaultZoneLabel: Label when no place name is known
                - liveZoneLimit: Zones in the live traffic panel (default: 4)
            zones: Zone list (default: the city sample zones)
        """
        if config is None:
            cfg = get_config()
            config = cfg.get_forecast_config() if cfg else {}

        self.config = config
        self.zones: List[Zone] = list(zones) if zones is not None else list(CITY_ZONES)

        self.max_distance_km = float(config.get('maxDistanceKm', 10.0))
        self.geo_scale = float(config.get('geoScale', DEFAULT_GEO_SCALE))
        self.hourly_length = int(config.get('hourlyLength', 9))
        self.top_n = int(config.get('topN', 3))
        self.default_zone_label = config.get('defaultZoneLabel', 'Your Area')
        self.live_zone_limit = int(config.get('liveZoneLimit', 4))

        # Statistics
        self.total_generations = 0
        self.last_generation_time: float = 0.0

        print("✅ Forecast Engine initialized")
        print(f"   Zones: {len(self.zones)}")
        print(f"   Radius: {self.max_distance_km} km")

    def find_nearby(self, location: Coordinate,
                    max_distance_km: Optional[float] = None) -> List[NearbyZone]:
        """Nearby zones for a location using the engine's radius and scale"""
        radius = self.max_distance_km if max_distance_km is None else max_distance_km
        return nearby_zones(location, self.zones, radius, self.geo_scale)

    def generate(self,
                 location: Coordinate,
                 now: datetime,
                 rng: Optional[RandomSource] = None,
                 zone_label: Optional[str] = None,
                 max_distance_km: Optional[float] = None) -> ForecastSnapshot:
        """
        Run the full forecast pipeline

        Args:
            location: User coordinate
            now: Current local time; its hour starts both series
            rng: Random source (default: fresh numpy Generator)
            zone_label: Place name attached to the 24h series
            max_distance_km: Override the configured radius

        Returns:
            ForecastSnapshot

        Raises:
            InvalidCoordinate: if the location is out of range
            EmptyZoneSet: if the engine has no zones at all
        """
        rng = resolve_rng(rng)
        label = zone_label or self.default_zone_label

        nearby = self.find_nearby(location, max_distance_km)
        baseline = aggregate_baseline(nearby)

        hourly = hourly_series(baseline, now.hour, self.hourly_length, rng)
        forecast = forecast_series(baseline, now.hour, label, rng)
        ranked = best_times(hourly, nearby, self.top_n)
        live = live_zone_traffic(nearby, rng, self.live_zone_limit)

        self.total_generations += 1
        self.last_generation_time = time.time()

        return ForecastSnapshot(
            location=location,
            zone_label=label,
            generated_at=now,
            nearby=nearby,
            baseline=baseline,
            hourly=hourly,
            forecast=forecast,
            best_times=ranked,
            live_zones=live
        )

    def get_stats(self) -> dict:
        """Get engine statistics"""
        return {
            'totalZones': len(self.zones),
            'maxDistanceKm': self.max_distance_km,
            'geoScale': self.geo_scale,
            'hourlyLength': self.hourly_length,
            'topN': self.top_n,
            'totalGenerations': self.total_generations,
            'lastGenerationTime': self.last_generation_time
        }


# Global forecast engine instance
_forecast_engine: Optional[ForecastEngine] = None


def get_forecast_engine() -> ForecastEngine:
    """Get the global ForecastEngine instance"""
    global _forecast_engine
    if _forecast_engine is None:
        _forecast_engine = ForecastEngine()
    return _forecast_engine


def init_forecast_engine(config: dict = None, zones: Optional[Sequence[Zone]] = None) -> ForecastEngine:
    """Initialize the global ForecastEngine with config"""
    global _forecast_engine
    _forecast_engine = ForecastEngine(config, zones)
    return _forecast_engine
