"""
Zone Proximity

Great-circle distances between the user and the city zones, and the
nearby-zone filter that feeds the crowd forecast.

Zones only carry planar map positions, so each query places them around the
user with approximate_geo_position before measuring distances.
"""

import numpy as np
from dataclasses import dataclass
from typing import List, Sequence

from urbanpulse.models import Coordinate, Zone, ZonePosition
from urbanpulse.forecast.errors import InvalidCoordinate


EARTH_RADIUS_KM = 6371.0

# Degrees of offset per planar unit away from the map centre (50, 50)
DEFAULT_GEO_SCALE = 0.01

# Number of zones returned when nothing lies within the search radius
FALLBACK_ZONE_COUNT = 4


@dataclass
class NearbyZone:
    """
    Zone seen from a user location

    Wraps the static zone with its distance from the user and the synthetic
    geographic position used to measure it. Recomputed on every query.
    """
    zone: Zone
    distance_km: float
    lat: float
    lng: float

    @property
    def name(self) -> str:
        return self.zone.name

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses"""
        data = self.zone.to_dict()
        data.update({
            'distanceKm': round(self.distance_km, 2),
            'lat': round(self.lat, 6),
            'lng': round(self.lng, 6)
        })
        return data


def validate_coordinate(coordinate: Coordinate) -> Coordinate:
    """
    Check that a coordinate lies on the globe

    Raises:
        InvalidCoordinate: if lat is outside [-90, 90] or lng outside [-180, 180]
    """
    if not -90.0 <= coordinate.lat <= 90.0:
        raise InvalidCoordinate(f"Latitude out of range: {coordinate.lat}")
    if not -180.0 <= coordinate.lng <= 180.0:
        raise InvalidCoordinate(f"Longitude out of range: {coordinate.lng}")
    return coordinate


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """
    Great-circle distance between two points in kilometres

    Args:
        lat1, lng1: First point in degrees
        lat2, lng2: Second point in degrees
    """
    phi1, phi2 = np.radians(lat1), np.radians(lat2)
    d_phi = np.radians(lat2 - lat1)
    d_lambda = np.radians(lng2 - lng1)

    a = (np.sin(d_phi / 2) ** 2 +
         np.cos(phi1) * np.cos(phi2) * np.sin(d_lambda / 2) ** 2)
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    return float(EARTH_RADIUS_KM * c)


def approximate_geo_position(user: Coordinate,
                             position: ZonePosition,
                             scale: float = DEFAULT_GEO_SCALE) -> Coordinate:
    """
    Place a planar zone position around the user

    The map centre (50, 50) lands on the user; every planar unit away from it
    becomes `scale` degrees of latitude (y) or longitude (x).
    """
    return Coordinate(
        lat=user.lat + (position.y - 50) * scale,
        lng=user.lng + (position.x - 50) * scale
    )


def nearby_zones(user: Coordinate,
                 zones: Sequence[Zone],
                 max_distance_km: float = 10.0,
                 scale: float = DEFAULT_GEO_SCALE) -> List[NearbyZone]:
    """
    Zones within `max_distance_km` of the user, closest first

    When nothing qualifies (including any non-positive radius) the first four
    zones are returned in their original order with distance 0, so callers
    always have something to build a forecast from.

    Args:
        user: Query coordinate
        zones: Static zone list
        max_distance_km: Search radius
        scale: Degrees per planar unit (see approximate_geo_position)

    Returns:
        List of NearbyZone sorted by ascending distance

    Raises:
        InvalidCoordinate: if the user coordinate is out of range
    """
    validate_coordinate(user)

    found: List[NearbyZone] = []
    if max_distance_km > 0:
        for zone in zones:
            position = approximate_geo_position(user, zone.coordinates, scale)
            distance = haversine_km(user.lat, user.lng, position.lat, position.lng)
            if distance <= max_distance_km:
                found.append(NearbyZone(zone, distance, position.lat, position.lng))

    if found:
        return sorted(found, key=lambda z: z.distance_km)

    return [
        NearbyZone(zone, 0.0, user.lat, user.lng)
        for zone in list(zones)[:FALLBACK_ZONE_COUNT]
    ]
