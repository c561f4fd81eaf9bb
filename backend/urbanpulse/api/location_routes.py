"""
Location API Routes

Endpoints:
- GET /api/location - Saved user location (or the default)
- POST /api/location - Resolve and save a new location
- DELETE /api/location - Forget the saved location
"""

from fastapi import APIRouter, Depends, HTTPException

from urbanpulse.models import LocationInfo, LocationUpdateRequest
from urbanpulse.forecast import InvalidCoordinate
from urbanpulse.location import LocationService, get_location_service

router = APIRouter(prefix="/api/location", tags=["location"])


def get_locations() -> LocationService:
    """Dependency to get the location service"""
    return get_location_service()


def _location_response(info: LocationInfo) -> dict:
    data = info.model_dump()
    data['displayName'] = LocationService.display_name(info)
    return data


@router.get("")
async def get_location(locations: LocationService = Depends(get_locations)):
    """Get the saved user location, or the default location"""
    return _location_response(locations.current())


@router.post("")
async def set_location(
    request: LocationUpdateRequest,
    locations: LocationService = Depends(get_locations)
):
    """
    Set the user location

    The coordinate is always enriched and the enrichment merged over the
    request fields. If the lookup fails the request fields are kept.
    """
    try:
        info = await locations.set_location(
            LocationInfo(lat=request.lat, lng=request.lng, name=request.name)
        )
    except InvalidCoordinate as e:
        raise HTTPException(status_code=422, detail=str(e))

    return _location_response(info)


@router.delete("")
async def clear_location(locations: LocationService = Depends(get_locations)):
    """Forget the saved location"""
    locations.clear()

    return {
        'status': 'cleared',
        'location': _location_response(locations.current())
    }
