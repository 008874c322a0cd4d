"""
FastAPI main application
PeerPulse - live presentation evaluation server

Modular architecture with separated API routers in peerpulse/api/:
- health.py: Health check and live presentation status
- upload.py: Roster upload (participants / teams)
- events.py: Admin lifecycle events and evaluation submission
- socket.py: WebSocket relay (websocket transport)
- pusher_auth.py: Pusher channel authorization (pusher transport)
- results.py: Teams, per-team evaluations and evaluation criteria
- metrics.py: Prometheus request counter and exposition endpoint

All routers access shared state via the peerpulse.state module.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from peerpulse import state
from peerpulse.config import load_config
from peerpulse.db import connect_with_retry
from peerpulse.models import Settings
from peerpulse.transport.base import Transport
from peerpulse.transport.pusher_channel import PusherTransport
from peerpulse.transport.websocket import WebSocketTransport

# Import all API routers
from peerpulse.api import health, upload, events, socket, pusher_auth, results, metrics


# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def build_transport(settings: Settings) -> Transport:
    """Select the broadcast binding for this deployment"""
    if settings.transport == "pusher":
        return PusherTransport.from_settings(settings)
    return WebSocketTransport()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    # Startup: config -> database (retried until reachable) -> transport
    try:
        settings = load_config()
    except Exception as e:
        logger.error(f"❌ Failed to load configuration: {e}")
        raise

    store = await connect_with_retry(settings.mongodb_uri, settings.mongodb_db, settings.db_retry_delay)
    transport = build_transport(settings)
    state.wire(settings, store, transport)
    logger.info(f"✅ Server started with {transport.name} transport")

    yield

    # Shutdown
    await transport.close()
    store.db.client.close()
    state.reset()
    logger.info("🛑 Server shutting down")


# Create FastAPI app
app = FastAPI(
    title="PeerPulse",
    description="Live presentation lifecycle broadcast and peer evaluation server",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware (allow all origins for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request counter (http_requests_total)
app.middleware("http")(metrics.count_requests)


# ==================== INCLUDE ROUTERS ====================

# Health check (GET /health, GET /api/status)
app.include_router(health.router)

# Roster upload (POST /api/upload)
app.include_router(upload.router)

# Admin events and evaluations (POST /api/events, POST /api/evaluations)
app.include_router(events.router)

# WebSocket relay (WS /api/socket)
app.include_router(socket.router)

# Pusher channel authorization (POST /api/pusher-auth)
app.include_router(pusher_auth.router)

# Results (GET /api/teams, /api/teams/{name}/evaluations, /api/criteria)
app.include_router(results.router)

# Prometheus metrics (GET /api/metrics)
app.include_router(metrics.router)


# ==================== RUN SERVER ====================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8080)
