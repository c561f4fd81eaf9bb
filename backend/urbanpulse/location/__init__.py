"""
Location Module

User location resolution, enrichment fallback and persistence.
"""

from urbanpulse.location.location_service import (
    LocationEnricher,
    LocationStore,
    LocationService,
    DEFAULT_DISPLAY_NAME,
    fallback_location_name,
    get_location_service,
    init_location_service,
)

__all__ = [
    'LocationEnricher',
    'LocationStore',
    'LocationService',
    'DEFAULT_DISPLAY_NAME',
    'fallback_location_name',
    'get_location_service',
    'init_location_service',
]
