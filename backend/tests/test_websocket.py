"""
WebSocket Tests

This module tests the WebSocket implementation including:
- Event definitions
- WebSocketEmitter methods
- WebSocketHandlers event handling
"""

import time
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import numpy as np
import pytest

from urbanpulse.models import Coordinate
from urbanpulse.forecast import ForecastEngine, ForecastBroadcastService
from urbanpulse.websocket.events import (
    ServerEvent,
    ClientEvent,
    ConnectionSuccessData,
    LocationUpdateRequest,
)
from urbanpulse.websocket.emitter import WebSocketEmitter
from urbanpulse.websocket.handlers import WebSocketHandlers


def _emitted_events(sio):
    return [c[0][0] for c in sio.emit.call_args_list]


@pytest.fixture
def mock_sio():
    """Create a mock Socket.IO server"""
    sio = MagicMock()
    sio.emit = AsyncMock()
    return sio


@pytest.fixture
def emitter(mock_sio):
    """Create an emitter with mock Socket.IO"""
    return WebSocketEmitter(mock_sio)


@pytest.fixture
def engine():
    return ForecastEngine(config={})


# ============================================
# Event Tests
# ============================================

class TestEvents:
    """Test event enum values and data models"""

    def test_server_events(self):
        assert ServerEvent.CONNECTION_SUCCESS.value == "connection:success"
        assert ServerEvent.FORECAST_UPDATE.value == "forecast:update"
        assert ServerEvent.LOCATION_UPDATED.value == "location:updated"
        assert ServerEvent.REQUEST_ERROR.value == "request:error"

    def test_client_events(self):
        assert ClientEvent.LOCATION_UPDATE.value == "location:update"
        assert ClientEvent.FORECAST_REFRESH.value == "forecast:refresh"

    def test_connection_success_data(self):
        data = ConnectionSuccessData(message="Connected", timestamp=time.time(), serverVersion="1.0.0")
        assert data.serverVersion == "1.0.0"

    def test_location_update_label_optional(self):
        request = LocationUpdateRequest(lat=1.0, lng=2.0)
        assert request.label is None


# ============================================
# WebSocketEmitter Tests
# ============================================

class TestWebSocketEmitter:
    """Test WebSocket emitter functionality"""

    @pytest.mark.asyncio
    async def test_emit_connection_success(self, emitter, mock_sio):
        await emitter.emit_connection_success("test-sid")

        mock_sio.emit.assert_called_once()
        call_args = mock_sio.emit.call_args
        assert call_args[0][0] == "connection:success"
        assert "message" in call_args[0][1]
        assert call_args[1]["room"] == "test-sid"

    @pytest.mark.asyncio
    async def test_emit_forecast_update_broadcast(self, emitter, mock_sio, engine):
        snapshot = engine.generate(Coordinate(lat=40.7128, lng=-74.006),
                                   datetime(2026, 10, 19, 9), np.random.default_rng(0))

        await emitter.emit_forecast_update(snapshot)

        call_args = mock_sio.emit.call_args
        assert call_args[0][0] == "forecast:update"
        payload = call_args[0][1]
        assert payload["zoneLabel"] == "Your Area"
        assert len(payload["hourly"]) == 9
        assert len(payload["forecast"]) == 24
        assert "room" not in call_args[1]

    @pytest.mark.asyncio
    async def test_emit_forecast_update_to_room(self, emitter, mock_sio, engine):
        snapshot = engine.generate(Coordinate(lat=0.0, lng=0.0), datetime(2026, 10, 19, 9))
        await emitter.emit_forecast_update(snapshot, room="sid-1")
        assert mock_sio.emit.call_args[1]["room"] == "sid-1"

    @pytest.mark.asyncio
    async def test_emit_location_updated(self, emitter, mock_sio):
        await emitter.emit_location_updated(1.0, 2.0, "Home", room="sid-1")

        call_args = mock_sio.emit.call_args
        assert call_args[0][0] == "location:updated"
        assert call_args[0][1]["name"] == "Home"

    @pytest.mark.asyncio
    async def test_emit_request_error(self, emitter, mock_sio):
        await emitter.emit_request_error("location:update", "bad latitude", room="sid-1")

        call_args = mock_sio.emit.call_args
        assert call_args[0][0] == "request:error"
        assert call_args[0][1]["event"] == "location:update"

    @pytest.mark.asyncio
    async def test_emit_failure_is_counted(self, mock_sio):
        mock_sio.emit = AsyncMock(side_effect=RuntimeError("socket closed"))
        emitter = WebSocketEmitter(mock_sio)

        await emitter.emit_connection_success("sid-1")

        assert emitter.get_stats()["errorCount"] == 1
        assert emitter.get_stats()["totalEmits"] == 0

    @pytest.mark.asyncio
    async def test_statistics(self, emitter):
        await emitter.emit_connection_success("a")
        await emitter.emit_connection_success("b")
        assert emitter.get_stats()["totalEmits"] == 2


# ============================================
# WebSocketHandlers Tests
# ============================================

class TestWebSocketHandlers:
    """Test client event handling"""

    @pytest.fixture
    def broadcast(self, emitter, engine):
        return ForecastBroadcastService(emitter, engine, rng=np.random.default_rng(5))

    @pytest.fixture
    def handlers(self, mock_sio, emitter, broadcast):
        return WebSocketHandlers(mock_sio, emitter, broadcast)

    def test_handlers_registered(self, handlers, mock_sio):
        registered = [c[0][0] for c in mock_sio.on.call_args_list]
        assert registered == ["connect", "disconnect", "location:update", "forecast:refresh"]

    @pytest.mark.asyncio
    async def test_connect_and_disconnect(self, handlers, mock_sio, broadcast):
        await handlers.handle_connect("sid-1", {"REMOTE_ADDR": "127.0.0.1"})

        assert handlers.is_client_connected("sid-1")
        assert handlers.get_client_count() == 1
        assert _emitted_events(mock_sio) == ["connection:success"]

        broadcast.set_client_location("sid-1", Coordinate(lat=1.0, lng=1.0))
        await handlers.handle_disconnect("sid-1")

        assert handlers.get_client_count() == 0
        assert broadcast.client_count == 0

    @pytest.mark.asyncio
    async def test_location_update(self, handlers, mock_sio, broadcast):
        await handlers.handle_connect("sid-1", {})
        await handlers.handle_location_update("sid-1", {"lat": 51.5, "lng": -0.12, "label": "London"})

        assert broadcast.get_client_location("sid-1") == Coordinate(lat=51.5, lng=-0.12)
        assert handlers.get_connected_clients()["sid-1"]["location"] == {"lat": 51.5, "lng": -0.12}
        assert _emitted_events(mock_sio) == ["connection:success", "location:updated", "forecast:update"]

        forecast = mock_sio.emit.call_args
        assert forecast[0][1]["zoneLabel"] == "London"
        assert forecast[1]["room"] == "sid-1"

    @pytest.mark.asyncio
    async def test_broadcast_reaches_clients_without_location(self, handlers, mock_sio, broadcast):
        await handlers.handle_connect("sid-1", {})
        await handlers.handle_connect("sid-2", {})
        await handlers.handle_location_update("sid-1", {"lat": 51.5, "lng": -0.12, "label": "London"})
        mock_sio.emit.reset_mock()

        await broadcast.broadcast_once(datetime(2026, 10, 19, 12))

        updates = {c[1]["room"]: c[0][1]["zoneLabel"] for c in mock_sio.emit.call_args_list
                   if c[0][0] == "forecast:update"}
        assert updates == {"sid-1": "London", "sid-2": "Your Area"}
        assert handlers.get_connected_clients()["sid-2"]["location"] is None

    @pytest.mark.asyncio
    async def test_location_update_out_of_range(self, handlers, mock_sio, broadcast):
        await handlers.handle_location_update("sid-1", {"lat": 120.0, "lng": 0.0})

        assert broadcast.get_client_location("sid-1") is None
        assert _emitted_events(mock_sio) == ["request:error"]
        assert mock_sio.emit.call_args[1]["room"] == "sid-1"

    @pytest.mark.asyncio
    async def test_location_update_malformed(self, handlers, mock_sio):
        await handlers.handle_location_update("sid-1", {"lat": "north"})
        assert _emitted_events(mock_sio) == ["request:error"]

    @pytest.mark.asyncio
    async def test_location_update_without_payload(self, handlers, mock_sio):
        await handlers.handle_location_update("sid-1", None)
        assert _emitted_events(mock_sio) == ["request:error"]

    @pytest.mark.asyncio
    async def test_location_update_non_object_payload(self, handlers, mock_sio):
        await handlers.handle_location_update("sid-1", "40.7,-74.0")
        assert _emitted_events(mock_sio) == ["request:error"]

    @pytest.mark.asyncio
    async def test_forecast_refresh(self, handlers, mock_sio):
        await handlers.handle_forecast_refresh("sid-1", {})

        assert _emitted_events(mock_sio) == ["forecast:update"]
        assert mock_sio.emit.call_args[1]["room"] == "sid-1"

    @pytest.mark.asyncio
    async def test_forecast_refresh_without_service(self, mock_sio, emitter):
        handlers = WebSocketHandlers(mock_sio, emitter)
        await handlers.handle_forecast_refresh("sid-1")
        assert _emitted_events(mock_sio) == ["request:error"]
