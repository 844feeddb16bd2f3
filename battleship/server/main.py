"""FastAPI server for Battleship.

Clients talk to the server over a single WebSocket; HTTP only exposes
service status.
"""

import json
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware

from .. import config
from ..engine.state_machine import GameStateMachine
from ..utils.rng import GameRNG
from .gateway import SessionGateway
from .registry import RoomRegistry

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if config.DEBUG else config.LOG_LEVEL, format=config.LOG_FORMAT
)
logger = logging.getLogger(__name__)

# Global gateway; rooms live in its registry
gateway = SessionGateway(
    registry=RoomRegistry(rng=GameRNG(config.SEED)),
    machine=GameStateMachine(rng=GameRNG(config.SEED)),
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown."""
    logger.info("Battleship server starting...")
    yield
    logger.info("Battleship server shutting down...")
    gateway.registry.clear()


app = FastAPI(
    title="Battleship API",
    description="Real-time two-player Battleship over WebSocket",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================
# API ENDPOINTS
# ============================================


@app.get("/api")
async def api_root():
    """API root endpoint - server status."""
    return {
        "service": "Battleship",
        "status": "operational",
        "activeRooms": len(gateway.registry.rooms),
        "connections": len(gateway.connections),
    }


@app.get("/api/health")
async def health():
    return {"status": "ok"}


# ============================================
# WEBSOCKET ENDPOINT
# ============================================


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """WebSocket connection for one participant.

    Clients send ``{"event": ..., "data": {...}}`` frames and receive:
    - connected: Assigned participant id
    - room-created / room-joined / player-joined / player-left
    - game-started / all-players-ready
    - game-update: The participant's own view of the room
    - game-over: Winner announcement
    - error: Rejected operation, sent to the offending participant only
    """
    await websocket.accept()
    participant_id = await gateway.connect(websocket)

    try:
        while True:
            text = await websocket.receive_text()
            try:
                frame = json.loads(text)
            except json.JSONDecodeError:
                logger.warning(f"Malformed JSON from {participant_id}")
                await gateway.send_error(participant_id, "Malformed JSON")
                continue
            await gateway.handle(participant_id, frame)

    except WebSocketDisconnect:
        logger.info(f"WebSocket closed for {participant_id}")
    except Exception as e:
        logger.error(f"WebSocket error for {participant_id}: {e}", exc_info=True)
    finally:
        await gateway.disconnect(participant_id)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())
