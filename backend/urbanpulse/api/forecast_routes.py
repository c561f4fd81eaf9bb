"""
Crowd Forecast API Routes

Endpoints:
- GET /api/forecast - Full forecast snapshot for a location
- GET /api/forecast/nearby - Zones near a location
- GET /api/forecast/stats - Engine and broadcast statistics
"""

from datetime import datetime
from typing import Optional, Tuple

import numpy as np
from fastapi import APIRouter, Depends, HTTPException, Query

from urbanpulse.models import Coordinate
from urbanpulse.forecast import (
    EmptyZoneSet,
    ForecastEngine,
    InvalidCoordinate,
    get_broadcast_service,
    get_forecast_engine,
)
from urbanpulse.location import LocationService, get_location_service

router = APIRouter(prefix="/api/forecast", tags=["forecast"])


def get_engine() -> ForecastEngine:
    """Dependency to get the forecast engine"""
    return get_forecast_engine()


def get_locations() -> LocationService:
    """Dependency to get the location service"""
    return get_location_service()


def _resolve_location(lat: Optional[float], lng: Optional[float],
                      locations: LocationService) -> Tuple[Coordinate, Optional[str]]:
    """Requested coordinate, or the saved location with its display name"""
    if lat is None and lng is None:
        current = locations.current()
        return current.coordinate, LocationService.display_name(current)

    if lat is None or lng is None:
        raise HTTPException(status_code=422, detail="lat and lng must be given together")

    return Coordinate(lat=lat, lng=lng), None


@router.get("")
async def get_forecast(
    lat: Optional[float] = Query(default=None, description="Latitude in degrees"),
    lng: Optional[float] = Query(default=None, description="Longitude in degrees"),
    radius: Optional[float] = Query(default=None, description="Nearby radius in km"),
    seed: Optional[int] = Query(default=None, ge=0, description="Seed for a repeatable forecast"),
    label: Optional[str] = Query(default=None, description="Place name for the 24h series"),
    engine: ForecastEngine = Depends(get_engine),
    locations: LocationService = Depends(get_locations)
):
    """
    Get the crowd forecast for a location

    Without lat/lng the saved user location is used. Returns nearby zones,
    hourly and 24h series, best times to visit and live zone traffic.
    """
    coordinate, saved_label = _resolve_location(lat, lng, locations)
    rng = np.random.default_rng(seed) if seed is not None else None

    try:
        snapshot = engine.generate(
            coordinate,
            now=datetime.now(),
            rng=rng,
            zone_label=label or saved_label,
            max_distance_km=radius
        )
    except InvalidCoordinate as e:
        raise HTTPException(status_code=422, detail=str(e))
    except EmptyZoneSet as e:
        raise HTTPException(status_code=400, detail=str(e))

    return snapshot.to_dict()


@router.get("/nearby")
async def get_nearby_zones(
    lat: Optional[float] = Query(default=None, description="Latitude in degrees"),
    lng: Optional[float] = Query(default=None, description="Longitude in degrees"),
    radius: Optional[float] = Query(default=None, description="Nearby radius in km"),
    engine: ForecastEngine = Depends(get_engine),
    locations: LocationService = Depends(get_locations)
):
    """
    Get zones near a location, closest first

    Falls back to the first four zones when none are in range.
    """
    coordinate, _ = _resolve_location(lat, lng, locations)

    try:
        nearby = engine.find_nearby(coordinate, radius)
    except InvalidCoordinate as e:
        raise HTTPException(status_code=422, detail=str(e))

    return {
        'location': {'lat': coordinate.lat, 'lng': coordinate.lng},
        'radiusKm': engine.max_distance_km if radius is None else radius,
        'count': len(nearby),
        'zones': [z.to_dict() for z in nearby]
    }


@router.get("/stats")
async def get_forecast_stats(engine: ForecastEngine = Depends(get_engine)):
    """Get forecast engine and live broadcast statistics"""
    broadcast = get_broadcast_service()

    return {
        'engine': engine.get_stats(),
        'broadcast': broadcast.get_statistics() if broadcast else None
    }
