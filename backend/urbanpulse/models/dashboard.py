"""
Dashboard Models

Records behind the overview, alerts, events, business and safety views.
"""

from enum import Enum
from pydantic import BaseModel, Field


class AlertType(str, Enum):
    """Category of a city alert"""
    OVERCROWDING = "overcrowding"
    SAFETY = "safety"
    TRAFFIC = "traffic"
    EMERGENCY = "emergency"
    EVENT = "event"


class AlertSeverity(str, Enum):
    """Alert severity, ordered from most to least urgent"""
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class CityMetrics(BaseModel):
    """City overview metrics"""
    health_score: int = Field(ge=0, le=100)
    crowd_index: int = Field(ge=0, le=100)
    safety_index: int = Field(ge=0, le=100)
    traffic_intensity: int = Field(ge=0, le=100)
    active_alerts: int = Field(ge=0)
    population: int = Field(ge=0)


class CityAlert(BaseModel):
    """Active alert shown in the alerts panel"""
    id: str
    type: AlertType
    severity: AlertSeverity
    title: str
    location: str
    time: str                             # relative label, e.g. "5 min ago"
    description: str


class TrendingEvent(BaseModel):
    """Event driving crowd movement"""
    id: str
    name: str
    location: str
    attendees: int = Field(ge=0)
    crowd_impact: int = Field(ge=0, le=100)
    popularity: int = Field(ge=0, le=100)
    start_time: str
    category: str


class BusinessZone(BaseModel):
    """Business hotspot statistics"""
    id: str
    name: str
    foot_traffic: int = Field(ge=0)
    profitability: int = Field(ge=0, le=100)
    growth_rate: float                    # percent
    business_count: int = Field(ge=0)


class CrowdForecastSample(BaseModel):
    """Static two-hourly crowd forecast sample"""
    hour: str
    predicted: int = Field(ge=0, le=100)
    actual: int = Field(ge=0, le=100)
    zone: str


class SafetyTrend(BaseModel):
    """Daily safety score"""
    date: str
    score: int = Field(ge=0, le=100)
    incidents: int = Field(ge=0)


class TrafficSample(BaseModel):
    """Hourly traffic intensity"""
    hour: str
    intensity: int = Field(ge=0, le=100)
