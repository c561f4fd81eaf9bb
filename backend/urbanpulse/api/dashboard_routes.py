"""
Dashboard API Routes

Endpoints:
- GET /api/dashboard/metrics - City overview metrics
- GET /api/dashboard/zones - All city zones
- GET /api/dashboard/zones/{zone_id} - Specific zone
- GET /api/dashboard/alerts - Active alerts, optional severity filter
- GET /api/dashboard/alerts/counts - Alert counts per severity
- GET /api/dashboard/events - Trending events
- GET /api/dashboard/business - Business hotspots
- GET /api/dashboard/safety - Weekly safety trend
- GET /api/dashboard/traffic - Traffic intensity by hour
- GET /api/dashboard/crowd-forecast - Static 24h crowd forecast sample
"""

from fastapi import APIRouter, Depends, HTTPException, Query

from urbanpulse.dashboard import ALL_SEVERITIES, DashboardService, get_dashboard_service

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


def get_service() -> DashboardService:
    """Dependency to get the dashboard service"""
    return get_dashboard_service()


@router.get("/metrics")
async def get_metrics(service: DashboardService = Depends(get_service)):
    """Get city-wide health, crowd, safety and traffic indices"""
    return service.get_metrics().model_dump()


@router.get("/zones")
async def get_zones(service: DashboardService = Depends(get_service)):
    """Get all city zones"""
    return [zone.to_dict() for zone in service.list_zones()]


@router.get("/zones/{zone_id}")
async def get_zone(zone_id: str, service: DashboardService = Depends(get_service)):
    """
    Get a specific zone

    Args:
        zone_id: Zone identifier (e.g., "5")
    """
    zone = service.get_zone(zone_id)

    if not zone:
        raise HTTPException(status_code=404, detail=f"Zone {zone_id} not found")

    return zone.to_dict()


@router.get("/alerts")
async def get_alerts(
    severity: str = Query(default=ALL_SEVERITIES, description="all, critical, high, medium or low"),
    service: DashboardService = Depends(get_service)
):
    """Get active alerts, optionally filtered by severity"""
    try:
        alerts = service.list_alerts(severity)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return [alert.model_dump(mode='json') for alert in alerts]


@router.get("/alerts/counts")
async def get_alert_counts(service: DashboardService = Depends(get_service)):
    """Get the number of alerts per severity"""
    return service.alert_counts()


@router.get("/events")
async def get_events(service: DashboardService = Depends(get_service)):
    """Get trending events"""
    return [event.model_dump() for event in service.list_events()]


@router.get("/business")
async def get_business_hotspots(service: DashboardService = Depends(get_service)):
    """Get business hotspots"""
    return [zone.model_dump() for zone in service.list_business_hotspots()]


@router.get("/safety")
async def get_safety_trend(service: DashboardService = Depends(get_service)):
    """Get the weekly safety trend"""
    return [point.model_dump() for point in service.get_safety_trend()]


@router.get("/traffic")
async def get_traffic_by_hour(service: DashboardService = Depends(get_service)):
    """Get traffic intensity by hour"""
    return [sample.model_dump() for sample in service.get_traffic_by_hour()]


@router.get("/crowd-forecast")
async def get_crowd_forecast_sample(service: DashboardService = Depends(get_service)):
    """Get the static 24h crowd forecast sample"""
    return [point.model_dump() for point in service.get_crowd_forecast_sample()]
