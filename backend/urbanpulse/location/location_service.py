"""
Location Service

Resolves the user's location for the forecast view:

1. Validate the coordinate
2. Ask the enrichment collaborator (geocoder, AI lookup) for place details
3. Fall back to a coordinate label when enrichment is missing or fails
4. Persist the result so the next session starts where the user left off
"""

import json
from pathlib import Path
from typing import Optional, Dict, Any, Protocol

from pydantic import ValidationError

from urbanpulse.config import get_config
from urbanpulse.models import Coordinate, LocationInfo
from urbanpulse.forecast.geo import validate_coordinate


DEFAULT_DISPLAY_NAME = "Your Area"
DEFAULT_LOCATION = {"lat": 40.7128, "lng": -74.006, "name": "New York City"}


class LocationEnricher(Protocol):
    """Anything that can look up place details for a coordinate"""

    async def enrich(self, lat: float, lng: float) -> Dict[str, Any]:
        ...


def fallback_location_name(lat: float, lng: float) -> str:
    """Display name used when no place name is known"""
    return f"Location ({lat:.4f}, {lng:.4f})"


class LocationStore:
    """
    JSON file persistence for the user location

    The file holds a single object keyed by storage key, so other settings
    can share it.
    """

    def __init__(self, path, key: str = "user-location"):
        self.path = Path(path)
        self.key = key

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            print(f"[WARN] Unreadable location store {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, Any]):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w') as f:
            json.dump(data, f, indent=2)

    def load(self) -> Optional[LocationInfo]:
        """
        Load the saved location

        Returns:
            LocationInfo, or None if nothing is saved. A corrupt entry is
            removed and treated as missing.
        """
        data = self._read()
        blob = data.get(self.key)
        if blob is None:
            return None

        try:
            return LocationInfo(**blob)
        except (TypeError, ValidationError) as e:
            print(f"[WARN] Discarding corrupt saved location: {e}")
            self.clear()
            return None

    def save(self, info: LocationInfo):
        """Save a location, replacing any previous one"""
        data = self._read()
        data[self.key] = info.model_dump(exclude_none=True)
        self._write(data)

    def clear(self):
        """Remove the saved location"""
        data = self._read()
        if self.key in data:
            data.pop(self.key)
            self._write(data)


class LocationService:
    """
    User location resolution and persistence

    Usage:
        service = LocationService(enricher=geocoder, store=LocationStore(path))
        info = await service.resolve(40.7128, -74.006)
    """

    def __init__(self,
                 enricher: Optional[LocationEnricher] = None,
                 store: Optional[LocationStore] = None,
                 config: dict = None):
        """
        Initialize location service

        Args:
            enricher: Place lookup collaborator (optional)
            store: Persistence for the resolved location (optional)
            config: Location config with 'default' {lat, lng, name}
        """
        if config is None:
            cfg = get_config()
            config = cfg.get_location_config() if cfg else {}

        self.config = config
        self.enricher = enricher
        self.store = store
        self.default_location = LocationInfo(**(config.get('default') or DEFAULT_LOCATION))

        # Statistics
        self.total_resolutions = 0
        self.enrichment_failures = 0

        print("✅ Location Service initialized")

    async def resolve(self, lat: float, lng: float) -> LocationInfo:
        """
        Resolve a bare coordinate into a location

        Raises:
            InvalidCoordinate: if lat/lng are out of range
        """
        return await self.set_location(LocationInfo(lat=lat, lng=lng))

    async def set_location(self, info: LocationInfo) -> LocationInfo:
        """
        Enrich and save a location

        Enrichment fields are merged over the supplied ones. If the enricher
        fails, or there is none, the supplied fields are kept. A location
        still without a name gets a coordinate label.

        Raises:
            InvalidCoordinate: if lat/lng are out of range
        """
        validate_coordinate(info.coordinate)
        lat, lng = info.lat, info.lng

        fields: Dict[str, Any] = {}
        if self.enricher is not None:
            try:
                fields = dict(await self.enricher.enrich(lat, lng) or {})
            except Exception as e:
                self.enrichment_failures += 1
                print(f"[WARN] Location enrichment failed: {e}")
                fields = {}

        # The coordinate always comes from the request
        fields.pop('lat', None)
        fields.pop('lng', None)
        known = {k: v for k, v in fields.items() if k in LocationInfo.model_fields and v is not None}

        try:
            info = LocationInfo.model_validate({**info.model_dump(), **known})
        except ValidationError as e:
            print(f"[WARN] Ignoring malformed enrichment: {e}")

        if not info.name:
            info = info.model_copy(update={'name': fallback_location_name(lat, lng)})

        if self.store is not None:
            self.store.save(info)

        self.total_resolutions += 1
        print(f"[OK] Location resolved: {info.name}")
        return info

    def current(self) -> LocationInfo:
        """Saved location, or the configured default"""
        if self.store is not None:
            saved = self.store.load()
            if saved is not None:
                return saved
        return self.default_location

    def clear(self):
        """Forget the saved location"""
        if self.store is not None:
            self.store.clear()

    @staticmethod
    def display_name(info: Optional[LocationInfo]) -> str:
        """Name to show for a location: name, then city, then a generic label"""
        if info is None:
            return DEFAULT_DISPLAY_NAME
        return info.name or info.city or DEFAULT_DISPLAY_NAME

    def get_stats(self) -> dict:
        """Get service statistics"""
        return {
            'hasEnricher': self.enricher is not None,
            'hasStore': self.store is not None,
            'totalResolutions': self.total_resolutions,
            'enrichmentFailures': self.enrichment_failures
        }


# Global location service instance
_location_service: Optional[LocationService] = None


def _default_store(config: dict) -> Optional[LocationStore]:
    path = config.get('storePath')
    if not path:
        return None
    path = Path(path)
    if not path.is_absolute():
        path = Path(__file__).parent.parent.parent / path
    return LocationStore(path, config.get('storageKey', 'user-location'))


def get_location_service() -> LocationService:
    """Get the global LocationService instance"""
    global _location_service
    if _location_service is None:
        _location_service = init_location_service()
    return _location_service


def init_location_service(enricher: Optional[LocationEnricher] = None,
                          store: Optional[LocationStore] = None,
                          config: dict = None) -> LocationService:
    """Initialize the global LocationService"""
    global _location_service
    if config is None:
        cfg = get_config()
        config = cfg.get_location_config() if cfg else {}
    if store is None:
        store = _default_store(config)
    _location_service = LocationService(enricher, store, config)
    return _location_service
