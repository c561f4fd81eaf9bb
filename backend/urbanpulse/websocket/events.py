"""
WebSocket Event Type Definitions

This module defines all WebSocket event types and their data structures.

Events are categorized as:
- Server → Client: Updates pushed from backend
- Client → Server: Requests from the dashboard
"""

from enum import Enum
from pydantic import BaseModel
from typing import Optional, List, Dict, Any


# ============================================
# Event Name Constants
# ============================================

class ServerEvent(str, Enum):
    """Events emitted from server to client"""

    # Connection
    CONNECTION_SUCCESS = "connection:success"

    # Forecast updates
    FORECAST_UPDATE = "forecast:update"

    # Location updates
    LOCATION_UPDATED = "location:updated"

    # Errors
    REQUEST_ERROR = "request:error"


class ClientEvent(str, Enum):
    """Events received from client"""

    # Connection
    CONNECT = "connect"
    DISCONNECT = "disconnect"

    # Location
    LOCATION_UPDATE = "location:update"

    # Forecast
    FORECAST_REFRESH = "forecast:refresh"


# ============================================
# Server → Client Event Data Models
# ============================================

class ConnectionSuccessData(BaseModel):
    """Data for connection:success event"""
    message: str
    timestamp: float
    serverVersion: str


class ForecastUpdateData(BaseModel):
    """Data for forecast:update event"""
    timestamp: float
    zoneLabel: str
    location: Dict[str, float]
    nearbyZoneCount: int
    hourly: List[Dict[str, Any]]
    forecast: List[Dict[str, Any]]
    bestTimes: List[Dict[str, Any]]
    liveZones: List[Dict[str, Any]]


class LocationUpdatedData(BaseModel):
    """Data for location:updated event"""
    lat: float
    lng: float
    name: Optional[str] = None
    timestamp: float


class RequestErrorData(BaseModel):
    """Data for request:error event"""
    event: str
    message: str
    timestamp: float


# ============================================
# Client → Server Request Models
# ============================================

class LocationUpdateRequest(BaseModel):
    """Request data for location:update"""
    lat: float
    lng: float
    label: Optional[str] = None
