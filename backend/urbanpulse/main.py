"""
UrbanPulse Smart City API
Main FastAPI Application Entry Point

This is the main entry point for the backend server.
It initializes FastAPI, Socket.IO, configuration and the forecast components.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import socketio
from dotenv import load_dotenv

from urbanpulse import __version__
from urbanpulse.config import get_config

# Load environment variables
load_dotenv()

# Create Socket.IO server
sio = socketio.AsyncServer(
    async_mode='asgi',
    cors_allowed_origins='*',
    logger=False,
    engineio_logger=False,
    ping_interval=25,
    ping_timeout=60
)

# Global instances for WebSocket
ws_emitter = None
ws_handlers = None

_started_at = time.time()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events - startup and shutdown"""
    global ws_emitter, ws_handlers

    # Startup
    print("=" * 60)
    print("[STARTUP] UrbanPulse Smart City API")
    print("=" * 60)

    cfg = get_config()
    print("[OK] Configuration loaded")

    # Core services
    from urbanpulse.forecast import init_forecast_engine, init_broadcast_service
    from urbanpulse.location import init_location_service, LocationService
    from urbanpulse.dashboard import init_dashboard_service

    forecast_config = cfg.get_forecast_config() if cfg else {}

    engine = init_forecast_engine(forecast_config)
    locations = init_location_service()
    init_dashboard_service()

    # WebSocket emitter, broadcast service and handlers
    from urbanpulse.websocket import WebSocketEmitter, WebSocketHandlers, set_emitter, set_handlers

    ws_emitter = WebSocketEmitter(sio)
    set_emitter(ws_emitter)

    current = locations.current()
    broadcast_service = init_broadcast_service(
        ws_emitter=ws_emitter,
        engine=engine,
        interval=float(forecast_config.get('refreshInterval', 5.0)),
        default_location=current.coordinate,
        default_label=LocationService.display_name(current)
    )

    ws_handlers = WebSocketHandlers(sio, ws_emitter, broadcast_service)
    set_handlers(ws_handlers)

    print("[OK] WebSocket emitter and handlers initialized")

    await broadcast_service.start()

    print("=" * 60)
    print("[SERVER] Ready at http://localhost:8000")
    print("[DOCS] API docs at http://localhost:8000/docs")
    print("[WS] WebSocket ready for connections")
    print("=" * 60)

    yield

    # Shutdown
    print("[SHUTDOWN] Shutting down...")

    try:
        await broadcast_service.stop()
    except Exception as e:
        print(f"[SHUTDOWN] Error stopping forecast broadcast: {e}")

    print("[SHUTDOWN] Complete")


_system = (get_config().get_system_config() or {})
_server = _system.get('server', {})

# Create FastAPI application
app = FastAPI(
    title=_server.get('name', "UrbanPulse Smart City API"),
    description="Location-aware crowd forecasts and city dashboard data",
    version=_server.get('version', __version__),
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=_system.get('cors', {}).get('origins', ["*"]),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================
# Include API Routers
# ============================================

from urbanpulse.api import forecast_router, location_router, dashboard_router

# Forecast routes: /api/forecast, /api/forecast/nearby, /api/forecast/stats
app.include_router(forecast_router)

# Location routes: /api/location
app.include_router(location_router)

# Dashboard routes: /api/dashboard/*
app.include_router(dashboard_router)


# ============================================
# Root Endpoints
# ============================================

@app.get("/", tags=["root"])
async def root():
    """Root endpoint - API information"""
    return {
        "name": "UrbanPulse Smart City API",
        "version": __version__,
        "status": "operational",
        "documentation": "/docs",
        "websocket": "ws://localhost:8000",
        "endpoints": {
            "forecast": "/api/forecast",
            "nearby": "/api/forecast/nearby",
            "location": "/api/location",
            "dashboard": "/api/dashboard/*"
        }
    }


@app.get("/health", tags=["health"])
async def health_check():
    """Health check endpoint"""
    from urbanpulse.websocket import get_handlers

    handlers = get_handlers()
    ws_clients = handlers.get_client_count() if handlers else 0

    return {
        "status": "healthy",
        "timestamp": time.time(),
        "uptime": time.time() - _started_at,
        "websocket": {
            "connected_clients": ws_clients,
            "status": "ready"
        }
    }


@app.get("/ws/stats", tags=["websocket"])
async def websocket_stats():
    """Get WebSocket statistics"""
    from urbanpulse.websocket import get_emitter, get_handlers
    from urbanpulse.forecast import get_broadcast_service

    emitter = get_emitter()
    handlers = get_handlers()
    broadcast = get_broadcast_service()

    return {
        "emitter": emitter.get_stats() if emitter else None,
        "clients": {
            "count": handlers.get_client_count() if handlers else 0,
            "connected": list(handlers.get_connected_clients().keys()) if handlers else [],
            "located": broadcast.located_count if broadcast else 0
        },
        "timestamp": time.time()
    }


# Wrap with Socket.IO ASGI app
sio_app = socketio.ASGIApp(sio, app)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "urbanpulse.main:sio_app",
        host=_server.get('host', "0.0.0.0"),
        port=int(_server.get('port', 8000)),
        reload=True,
        log_level="info"
    )
