"""
API Routes Package

This module exports all FastAPI routers for the UrbanPulse backend.
"""

from .forecast_routes import router as forecast_router
from .location_routes import router as location_router
from .dashboard_routes import router as dashboard_router

__all__ = [
    "forecast_router",
    "location_router",
    "dashboard_router",
]
