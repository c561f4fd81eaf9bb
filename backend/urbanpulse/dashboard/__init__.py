"""
Dashboard Module

Static dataset access for the dashboard pages.
"""

from urbanpulse.dashboard.dashboard_service import (
    ALL_SEVERITIES,
    DashboardDataset,
    DashboardService,
    get_dashboard_service,
    init_dashboard_service,
)

__all__ = [
    'ALL_SEVERITIES',
    'DashboardDataset',
    'DashboardService',
    'get_dashboard_service',
    'init_dashboard_service',
]
