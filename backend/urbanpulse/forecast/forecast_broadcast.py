"""
Forecast Broadcast Service

Background task that keeps the crowd forecast view live: every few seconds
it re-runs the forecast for each connected client's location and pushes the
snapshot over WebSocket.

Broadcast frequency:
- forecast:update - every refresh interval (default 5 seconds)
- forecast:update - immediately for a client that changes location
"""

import asyncio
import time
from datetime import datetime
from typing import Dict, Optional, Tuple, TYPE_CHECKING

from urbanpulse.models import Coordinate
from urbanpulse.forecast.geo import validate_coordinate
from urbanpulse.forecast.forecast_engine import ForecastEngine, get_forecast_engine
from urbanpulse.forecast.series import RandomSource

if TYPE_CHECKING:
    from urbanpulse.websocket.emitter import WebSocketEmitter


class ForecastBroadcastService:
    """
    Background service to broadcast live crowd forecasts

    Each client gets a forecast for its own location, sent to its session
    room. Clients that have not sent a location get the default location
    forecast. With no known clients a single default forecast is broadcast
    to everyone.

    Usage:
        service = ForecastBroadcastService(ws_emitter, engine)
        service.set_client_location(sid, Coordinate(lat=40.7, lng=-74.0))
        await service.start()
        # ... later ...
        await service.stop()
    """

    def __init__(self,
                 ws_emitter: 'WebSocketEmitter' = None,
                 engine: Optional[ForecastEngine] = None,
                 broadcast_interval: float = 5.0,
                 default_location: Optional[Coordinate] = None,
                 default_label: Optional[str] = None,
                 rng: Optional[RandomSource] = None):
        """
        Initialize forecast broadcast service

        Args:
            ws_emitter: WebSocket emitter instance
            engine: Forecast engine (default: global engine)
            broadcast_interval: Seconds between broadcasts
            default_location: Location used when no client has one
            default_label: Place name for the default location
            rng: Random source shared by every broadcast (default: fresh per run)
        """
        self.ws_emitter = ws_emitter
        self.engine = engine
        self.broadcast_interval = broadcast_interval
        self.default_location = default_location or Coordinate(lat=40.7128, lng=-74.006)
        self.default_label = default_label
        self.rng = rng

        # sid -> (coordinate, label), or None until the client sends a location
        self._clients: Dict[str, Optional[Tuple[Coordinate, Optional[str]]]] = {}

        self._running = False
        self._task: Optional[asyncio.Task] = None

        # Statistics
        self.total_broadcasts = 0
        self.total_errors = 0
        self.last_broadcast_time = 0.0

    def set_ws_emitter(self, emitter: 'WebSocketEmitter'):
        """Set the WebSocket emitter"""
        self.ws_emitter = emitter

    def _get_engine(self) -> ForecastEngine:
        return self.engine if self.engine is not None else get_forecast_engine()

    # ============================================
    # Client Locations
    # ============================================

    def add_client(self, sid: str):
        """Register a connected client that has not sent a location yet"""
        self._clients.setdefault(sid, None)

    def set_client_location(self, sid: str, coordinate: Coordinate, label: Optional[str] = None):
        """
        Register or move a client

        Raises:
            InvalidCoordinate: if the coordinate is out of range
        """
        validate_coordinate(coordinate)
        self._clients[sid] = (coordinate, label)

    def remove_client(self, sid: str):
        """Forget a client (on disconnect)"""
        self._clients.pop(sid, None)

    def get_client_location(self, sid: str) -> Optional[Coordinate]:
        """Current coordinate for a client, if known"""
        entry = self._clients.get(sid)
        return entry[0] if entry else None

    @property
    def client_count(self) -> int:
        return len(self._clients)

    @property
    def located_count(self) -> int:
        return sum(1 for entry in self._clients.values() if entry is not None)

    # ============================================
    # Lifecycle
    # ============================================

    async def start(self):
        """Start the background broadcast task"""
        if self._running:
            return

        self._running = True
        self._task = asyncio.create_task(self._broadcast_loop())
        print("[OK] Forecast broadcast service started")

    async def stop(self):
        """Stop the background broadcast task"""
        self._running = False

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        print("🛑 Forecast broadcast service stopped")

    @property
    def is_running(self) -> bool:
        return self._running

    async def _broadcast_loop(self):
        """Main broadcast loop"""
        while self._running:
            try:
                await self.broadcast_once()
                await asyncio.sleep(self.broadcast_interval)

            except asyncio.CancelledError:
                break
            except Exception as e:
                self.total_errors += 1
                print(f"[ERROR] Forecast broadcast error: {e}")
                await asyncio.sleep(self.broadcast_interval)

    # ============================================
    # Broadcasting
    # ============================================

    async def broadcast_once(self, now: Optional[datetime] = None) -> int:
        """
        Run one broadcast round

        Args:
            now: Time to forecast from (default: current local time)

        Returns:
            Number of forecasts emitted
        """
        if not self.ws_emitter:
            return 0

        now = now or datetime.now()
        engine = self._get_engine()
        sent = 0

        if not self._clients:
            snapshot = engine.generate(self.default_location, now, self.rng, self.default_label)
            await self.ws_emitter.emit_forecast_update(snapshot)
            sent = 1
        else:
            default_snapshot = None
            for sid, entry in list(self._clients.items()):
                if entry is None:
                    if default_snapshot is None:
                        default_snapshot = engine.generate(
                            self.default_location, now, self.rng, self.default_label
                        )
                    snapshot = default_snapshot
                else:
                    coordinate, label = entry
                    snapshot = engine.generate(coordinate, now, self.rng, label)
                await self.ws_emitter.emit_forecast_update(snapshot, room=sid)
                sent += 1

        self.total_broadcasts += sent
        self.last_broadcast_time = time.time()
        return sent

    async def send_to_client(self, sid: str, now: Optional[datetime] = None) -> bool:
        """
        Push a fresh forecast to one client right away

        Clients without a location get the default location forecast.

        Returns:
            False if there is no emitter
        """
        if not self.ws_emitter:
            return False

        coordinate, label = self._clients.get(sid) or (self.default_location, self.default_label)
        snapshot = self._get_engine().generate(coordinate, now or datetime.now(), self.rng, label)
        await self.ws_emitter.emit_forecast_update(snapshot, room=sid)
        self.total_broadcasts += 1
        return True

    def get_statistics(self) -> dict:
        """Get broadcast service statistics"""
        return {
            'running': self._running,
            'clients': self.client_count,
            'locatedClients': self.located_count,
            'totalBroadcasts': self.total_broadcasts,
            'totalErrors': self.total_errors,
            'lastBroadcastTime': self.last_broadcast_time,
            'broadcastInterval': self.broadcast_interval
        }


# Global broadcast service instance
_broadcast_service: Optional[ForecastBroadcastService] = None


def get_broadcast_service() -> Optional[ForecastBroadcastService]:
    """Get the global broadcast service instance"""
    return _broadcast_service


def init_broadcast_service(ws_emitter=None,
                           engine: Optional[ForecastEngine] = None,
                           interval: float = 5.0,
                           default_location: Optional[Coordinate] = None,
                           default_label: Optional[str] = None) -> ForecastBroadcastService:
    """Initialize the global broadcast service"""
    global _broadcast_service
    _broadcast_service = ForecastBroadcastService(
        ws_emitter, engine, interval, default_location, default_label
    )
    return _broadcast_service
