"""
Zone & Coordinate Models

Models for city zones and the geographic coordinates they are queried from.
Zones carry abstract planar positions (0-100 on both axes) as drawn on the
dashboard map, not real latitude/longitude.
"""

from enum import Enum
from pydantic import BaseModel, Field


class CrowdLevel(str, Enum):
    """Crowd classification of a zone"""
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"


# Crowd percentage used when averaging zone crowd levels
CROWD_LEVEL_WEIGHTS = {
    CrowdLevel.LOW: 25,
    CrowdLevel.MODERATE: 50,
    CrowdLevel.HIGH: 75,
    CrowdLevel.CRITICAL: 95,
}


class Coordinate(BaseModel):
    """
    GPS coordinate (latitude, longitude)

    Range checks live in urbanpulse.forecast.geo.validate_coordinate so that
    callers get an InvalidCoordinate error rather than a ValidationError.
    """
    lat: float                            # Latitude (-90 to 90)
    lng: float                            # Longitude (-180 to 180)

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {"lat": 40.7128, "lng": -74.006}
        }


class ZonePosition(BaseModel):
    """Planar map position as a percentage of the map extent"""
    x: float = Field(ge=0, le=100)
    y: float = Field(ge=0, le=100)

    class Config:
        frozen = True


class Zone(BaseModel):
    """
    City zone

    Static descriptive record loaded once from the sample dataset.
    """
    id: str
    name: str
    crowd_level: CrowdLevel
    safety_score: int = Field(ge=0, le=100)
    traffic_level: int = Field(ge=0, le=100)
    active_events: int = Field(ge=0)
    business_activity: int = Field(ge=0, le=100)
    coordinates: ZonePosition

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "id": "1",
                "name": "Downtown Core",
                "crowd_level": "high",
                "safety_score": 78,
                "traffic_level": 85,
                "active_events": 5,
                "business_activity": 94,
                "coordinates": {"x": 45, "y": 35}
            }
        }

    @property
    def crowd_weight(self) -> int:
        """Crowd percentage implied by the crowd level"""
        return CROWD_LEVEL_WEIGHTS[self.crowd_level]

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses"""
        return {
            'id': self.id,
            'name': self.name,
            'crowdLevel': self.crowd_level.value,
            'safetyScore': self.safety_score,
            'trafficLevel': self.traffic_level,
            'activeEvents': self.active_events,
            'businessActivity': self.business_activity,
            'coordinates': {'x': self.coordinates.x, 'y': self.coordinates.y}
        }
