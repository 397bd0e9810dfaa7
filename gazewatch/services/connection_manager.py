"""Manages dashboard WebSocket connections and broadcasts store events."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Tracks connected dashboard clients and pushes JSON events to them."""

    def __init__(self) -> None:
        self._connections: set[WebSocket] = set()
        self._lock = asyncio.Lock()

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        async with self._lock:
            self._connections.add(websocket)
        logger.info("Dashboard client connected (%d total)", len(self._connections))

    async def disconnect(self, websocket: WebSocket) -> None:
        async with self._lock:
            self._connections.discard(websocket)
        logger.info("Dashboard client disconnected (%d remaining)", len(self._connections))

    @property
    def active_count(self) -> int:
        return len(self._connections)

    async def broadcast_json(self, data: dict[str, Any]) -> None:
        """Send *data* to every connected client, dropping the ones that fail."""
        async with self._lock:
            clients = set(self._connections)

        dead: set[WebSocket] = set()
        for ws in clients:
            try:
                await ws.send_json(data)
            except Exception as exc:
                logger.debug("Broadcast to dashboard client failed: %s", exc)
                dead.add(ws)

        if dead:
            async with self._lock:
                self._connections -= dead
            logger.info("Removed %d dead dashboard client(s)", len(dead))
