"""
WebSocket Event Emitter

This module provides the WebSocketEmitter class for sending real-time
updates to connected dashboards. All server→client events are handled here.

Features:
- Centralized event emission
- Room-based targeting (one room per client session)
- Error handling and statistics
"""

import time
from typing import Dict, Any, Optional

from urbanpulse import __version__
from .events import (
    ServerEvent,
    ConnectionSuccessData,
    ForecastUpdateData,
    LocationUpdatedData,
    RequestErrorData,
)


class WebSocketEmitter:
    """
    Centralized WebSocket event emitter

    Handles all server→client emissions with error handling and
    statistics tracking.
    """

    def __init__(self, sio):
        """
        Initialize the WebSocket emitter

        Args:
            sio: Socket.IO AsyncServer instance
        """
        self.sio = sio

        # Statistics
        self._emit_count = 0
        self._error_count = 0
        self._last_emit_time = 0.0

    # ============================================
    # Connection Events
    # ============================================

    async def emit_connection_success(self, sid: str):
        """Emit connection success to specific client"""
        data = ConnectionSuccessData(
            message="Connected to UrbanPulse",
            timestamp=time.time(),
            serverVersion=__version__
        )
        await self._emit(ServerEvent.CONNECTION_SUCCESS.value, data.model_dump(), sid)

    # ============================================
    # Forecast Events
    # ============================================

    async def emit_forecast_update(self, snapshot, room: str = None):
        """
        Emit a crowd forecast snapshot

        Args:
            snapshot: ForecastSnapshot from the forecast engine
            room: Optional room to emit to (default: broadcast)
        """
        payload = snapshot.to_dict()
        data = ForecastUpdateData(
            timestamp=time.time(),
            zoneLabel=payload['zoneLabel'],
            location=payload['location'],
            nearbyZoneCount=payload['nearbyZoneCount'],
            hourly=payload['hourly'],
            forecast=payload['forecast'],
            bestTimes=payload['bestTimes'],
            liveZones=payload['liveZones']
        )
        await self._emit(ServerEvent.FORECAST_UPDATE.value, data.model_dump(), room)

    # ============================================
    # Location Events
    # ============================================

    async def emit_location_updated(self, lat: float, lng: float,
                                    name: Optional[str] = None, room: str = None):
        """Emit confirmation that a client location was accepted"""
        data = LocationUpdatedData(lat=lat, lng=lng, name=name, timestamp=time.time())
        await self._emit(ServerEvent.LOCATION_UPDATED.value, data.model_dump(), room)

    async def emit_request_error(self, event: str, message: str, room: str = None):
        """Emit an error for a rejected client request"""
        data = RequestErrorData(event=event, message=message, timestamp=time.time())
        await self._emit(ServerEvent.REQUEST_ERROR.value, data.model_dump(), room)

    # ============================================
    # Internal
    # ============================================

    async def _emit(self, event: str, data: Any, room: str = None):
        """
        Internal emit with error handling and statistics

        Args:
            event: Event name
            data: Event data
            room: Optional room to emit to
        """
        try:
            if room:
                await self.sio.emit(event, data, room=room)
            else:
                await self.sio.emit(event, data)

            self._emit_count += 1
            self._last_emit_time = time.time()

        except Exception as e:
            self._error_count += 1
            print(f"[WS ERROR] Failed to emit {event}: {e}")

    def get_stats(self) -> Dict[str, Any]:
        """Get emitter statistics"""
        return {
            "totalEmits": self._emit_count,
            "errorCount": self._error_count,
            "lastEmitTime": self._last_emit_time
        }


# Global emitter instance (initialized in main.py)
emitter: Optional[WebSocketEmitter] = None


def get_emitter() -> Optional[WebSocketEmitter]:
    """Get the global WebSocket emitter instance"""
    return emitter


def set_emitter(e: WebSocketEmitter):
    """Set the global WebSocket emitter instance"""
    global emitter
    emitter = e
