"""
WebSocket Client Event Handlers

This module handles all client→server WebSocket events.

All handlers are registered with the Socket.IO server in main.py.
"""

import time
from typing import Dict, Any, Optional

from pydantic import ValidationError

from urbanpulse.models import Coordinate
from urbanpulse.forecast.errors import InvalidCoordinate
from urbanpulse.forecast.geo import validate_coordinate
from urbanpulse.forecast.forecast_broadcast import ForecastBroadcastService
from .events import ClientEvent, LocationUpdateRequest
from .emitter import WebSocketEmitter


class WebSocketHandlers:
    """
    Centralized WebSocket event handlers

    Handles all client→server events and delegates to the forecast
    broadcast service.
    """

    def __init__(self, sio, emitter: WebSocketEmitter,
                 broadcast_service: Optional[ForecastBroadcastService] = None):
        """
        Initialize handlers

        Args:
            sio: Socket.IO AsyncServer instance
            emitter: WebSocket emitter instance
            broadcast_service: Service tracking client locations
        """
        self.sio = sio
        self.emitter = emitter
        self.broadcast_service = broadcast_service

        # Track connected clients
        self._clients: Dict[str, Dict[str, Any]] = {}

        self._register_handlers()

    def _register_handlers(self):
        """Register all Socket.IO event handlers"""

        # Connection events
        self.sio.on(ClientEvent.CONNECT.value, self.handle_connect)
        self.sio.on(ClientEvent.DISCONNECT.value, self.handle_disconnect)

        # Location
        self.sio.on(ClientEvent.LOCATION_UPDATE.value, self.handle_location_update)

        # Forecast
        self.sio.on(ClientEvent.FORECAST_REFRESH.value, self.handle_forecast_refresh)

    # ============================================
    # Connection Handlers
    # ============================================

    async def handle_connect(self, sid: str, environ: Dict):
        """
        Handle client connection

        Args:
            sid: Session ID
            environ: Connection environment
        """
        client_info = {
            "sid": sid,
            "connected_at": time.time(),
            "remote_addr": environ.get("REMOTE_ADDR", "unknown"),
            "user_agent": environ.get("HTTP_USER_AGENT", "unknown")
        }

        self._clients[sid] = client_info
        if self.broadcast_service:
            self.broadcast_service.add_client(sid)

        print(f"[WS] Client connected: {sid} from {client_info['remote_addr']}")

        await self.emitter.emit_connection_success(sid)

    async def handle_disconnect(self, sid: str, reason: Optional[str] = None):
        """
        Handle client disconnection

        Args:
            sid: Session ID
            reason: Disconnect reason (newer python-socketio versions only)
        """
        if sid in self._clients:
            client = self._clients.pop(sid)
            duration = time.time() - client["connected_at"]
            print(f"[WS] Client disconnected: {sid} (duration: {duration:.1f}s)")

        if self.broadcast_service:
            self.broadcast_service.remove_client(sid)

    # ============================================
    # Location Handlers
    # ============================================

    async def handle_location_update(self, sid: str, data: Dict):
        """
        Handle a client moving to a new location

        Args:
            sid: Session ID
            data: {lat, lng, label?}
        """
        event = ClientEvent.LOCATION_UPDATE.value

        try:
            request = LocationUpdateRequest.model_validate(data or {})
            coordinate = validate_coordinate(Coordinate(lat=request.lat, lng=request.lng))
            if self.broadcast_service:
                self.broadcast_service.set_client_location(sid, coordinate, request.label)
        except (ValidationError, InvalidCoordinate) as e:
            print(f"[WARN] Rejected location from {sid}: {e}")
            await self.emitter.emit_request_error(event, str(e), room=sid)
            return

        print(f"[WS] Location update: {sid} -> ({request.lat:.4f}, {request.lng:.4f})")

        await self.emitter.emit_location_updated(request.lat, request.lng, request.label, room=sid)

        # New location gets a forecast right away
        if self.broadcast_service:
            await self.broadcast_service.send_to_client(sid)

    # ============================================
    # Forecast Handlers
    # ============================================

    async def handle_forecast_refresh(self, sid: str, data: Optional[Dict] = None):
        """
        Handle a manual forecast refresh

        Args:
            sid: Session ID
            data: Unused
        """
        if not self.broadcast_service:
            await self.emitter.emit_request_error(
                ClientEvent.FORECAST_REFRESH.value,
                "Forecast service unavailable",
                room=sid
            )
            return

        print(f"[WS] Forecast refresh from {sid}")
        await self.broadcast_service.send_to_client(sid)

    # ============================================
    # Utility Methods
    # ============================================

    def get_connected_clients(self) -> Dict[str, Dict[str, Any]]:
        """Get all connected clients with their last known location"""
        clients = {}
        for sid, info in self._clients.items():
            coordinate = self.broadcast_service.get_client_location(sid) if self.broadcast_service else None
            clients[sid] = {**info, "location": coordinate.model_dump() if coordinate else None}
        return clients

    def get_client_count(self) -> int:
        """Get number of connected clients"""
        return len(self._clients)

    def is_client_connected(self, sid: str) -> bool:
        """Check if client is connected"""
        return sid in self._clients


# Global handlers instance (initialized in main.py)
handlers: Optional[WebSocketHandlers] = None


def get_handlers() -> Optional[WebSocketHandlers]:
    """Get the global WebSocket handlers instance"""
    return handlers


def set_handlers(h: WebSocketHandlers):
    """Set the global WebSocket handlers instance"""
    global handlers
    handlers = h
