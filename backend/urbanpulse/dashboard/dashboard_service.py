"""
Dashboard Data Service

Serves the static datasets behind the dashboard pages: city overview,
zones, alerts, events, business hotspots, safety and traffic.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from urbanpulse.data import (
    CITY_METRICS,
    CITY_ZONES,
    ACTIVE_ALERTS,
    TRENDING_EVENTS,
    BUSINESS_HOTSPOTS,
    CROWD_FORECAST_SAMPLE,
    SAFETY_TREND,
    TRAFFIC_BY_HOUR,
)
from urbanpulse.models import (
    AlertSeverity,
    BusinessZone,
    CityAlert,
    CityMetrics,
    CrowdForecastSample,
    SafetyTrend,
    TrafficSample,
    TrendingEvent,
    Zone,
)


ALL_SEVERITIES = "all"


@dataclass
class DashboardDataset:
    """Bundle of every dataset the dashboard shows"""
    metrics: CityMetrics = field(default_factory=lambda: CITY_METRICS)
    zones: List[Zone] = field(default_factory=lambda: list(CITY_ZONES))
    alerts: List[CityAlert] = field(default_factory=lambda: list(ACTIVE_ALERTS))
    events: List[TrendingEvent] = field(default_factory=lambda: list(TRENDING_EVENTS))
    business: List[BusinessZone] = field(default_factory=lambda: list(BUSINESS_HOTSPOTS))
    crowd_forecast: List[CrowdForecastSample] = field(default_factory=lambda: list(CROWD_FORECAST_SAMPLE))
    safety_trend: List[SafetyTrend] = field(default_factory=lambda: list(SAFETY_TREND))
    traffic_by_hour: List[TrafficSample] = field(default_factory=lambda: list(TRAFFIC_BY_HOUR))


class DashboardService:
    """
    Read-only access to the dashboard datasets

    Usage:
        service = DashboardService()
        critical = service.list_alerts('critical')
    """

    def __init__(self, dataset: Optional[DashboardDataset] = None):
        self.dataset = dataset or DashboardDataset()

        print("✅ Dashboard Service initialized")
        print(f"   Zones: {len(self.dataset.zones)}, Alerts: {len(self.dataset.alerts)}")

    def get_metrics(self) -> CityMetrics:
        return self.dataset.metrics

    def list_zones(self) -> List[Zone]:
        return list(self.dataset.zones)

    def get_zone(self, zone_id: str) -> Optional[Zone]:
        """Zone by id, or None"""
        for zone in self.dataset.zones:
            if zone.id == zone_id:
                return zone
        return None

    def list_alerts(self, severity: str = ALL_SEVERITIES) -> List[CityAlert]:
        """
        Alerts, optionally filtered by severity

        Args:
            severity: 'all' or one of critical/high/medium/low

        Raises:
            ValueError: for an unknown severity
        """
        if severity == ALL_SEVERITIES:
            return list(self.dataset.alerts)

        try:
            wanted = AlertSeverity(severity)
        except ValueError:
            raise ValueError(f"Unknown severity: {severity}")

        return [a for a in self.dataset.alerts if a.severity == wanted]

    def alert_counts(self) -> Dict[str, int]:
        """Number of alerts per severity, plus the total"""
        counts = {s.value: 0 for s in AlertSeverity}
        for alert in self.dataset.alerts:
            counts[alert.severity.value] += 1
        counts[ALL_SEVERITIES] = len(self.dataset.alerts)
        return counts

    def list_events(self) -> List[TrendingEvent]:
        return list(self.dataset.events)

    def list_business_hotspots(self) -> List[BusinessZone]:
        return list(self.dataset.business)

    def get_crowd_forecast_sample(self) -> List[CrowdForecastSample]:
        return list(self.dataset.crowd_forecast)

    def get_safety_trend(self) -> List[SafetyTrend]:
        return list(self.dataset.safety_trend)

    def get_traffic_by_hour(self) -> List[TrafficSample]:
        return list(self.dataset.traffic_by_hour)


# Global dashboard service instance
_dashboard_service: Optional[DashboardService] = None


def get_dashboard_service() -> DashboardService:
    """Get the global DashboardService instance"""
    global _dashboard_service
    if _dashboard_service is None:
        _dashboard_service = DashboardService()
    return _dashboard_service


def init_dashboard_service(dataset: Optional[DashboardDataset] = None) -> DashboardService:
    """Initialize the global DashboardService"""
    global _dashboard_service
    _dashboard_service = DashboardService(dataset)
    return _dashboard_service
