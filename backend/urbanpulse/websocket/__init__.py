"""
WebSocket Package

This package provides real-time WebSocket communication for the
UrbanPulse dashboard using Socket.IO.

Components:
- events: Event type definitions and data models
- emitter: Server→Client event emission
- handlers: Client→Server event handling

Usage:
    from urbanpulse.websocket import WebSocketEmitter, WebSocketHandlers

    emitter = WebSocketEmitter(sio)
    handlers = WebSocketHandlers(sio, emitter, broadcast_service)
"""

from .events import ServerEvent, ClientEvent
from .emitter import WebSocketEmitter, get_emitter, set_emitter
from .handlers import WebSocketHandlers, get_handlers, set_handlers

__all__ = [
    "ServerEvent",
    "ClientEvent",
    "WebSocketEmitter",
    "WebSocketHandlers",
    "get_emitter",
    "set_emitter",
    "get_handlers",
    "set_handlers",
]
