"""Dashboard WebSocket: pushes response-log events to connected frontends.

Architecture:
    capture client  →  POST /api/save-response  →  store
                                                     ↓
    dashboard       ←  /ws  ←  {"type": "new_response" | "clear_responses"}

Dashboards react to each event by re-querying the statistics endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from gazewatch.services.connection_manager import ConnectionManager

logger = logging.getLogger(__name__)


def create_updates_router(manager: ConnectionManager) -> APIRouter:
    """Factory that creates the dashboard WebSocket endpoint."""

    router = APIRouter()

    @router.websocket("/ws")
    async def updates_ws(websocket: WebSocket) -> None:
        await manager.connect(websocket)
        try:
            # Events are pushed server-side; the client only sends heartbeats
            while True:
                data = await websocket.receive_text()
                if data.strip().lower() == "ping":
                    await websocket.send_text("pong")
        except WebSocketDisconnect:
            await manager.disconnect(websocket)

    return router
