"""
Location Models

Resolved user location: the raw coordinate plus whatever the enrichment
collaborator could add (place name, population, region).
"""

from pydantic import BaseModel
from typing import Optional

from .zone import Coordinate


class LocationInfo(BaseModel):
    """User location with optional enrichment fields"""
    lat: float
    lng: float
    name: Optional[str] = None
    population: Optional[int] = None
    area: Optional[str] = None
    country: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None
    timezone: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "lat": 40.7128,
                "lng": -74.006,
                "name": "New York City",
                "population": 8336817,
                "state": "New York",
                "country": "United States",
                "timezone": "America/New_York"
            }
        }

    @property
    def coordinate(self) -> Coordinate:
        """Coordinate part only, which is all the forecast engine needs"""
        return Coordinate(lat=self.lat, lng=self.lng)


class LocationUpdateRequest(BaseModel):
    """Request to set the user location"""
    lat: float
    lng: float
    name: Optional[str] = None
