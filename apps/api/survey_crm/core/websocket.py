"""
WebSocket connection manager for real-time survey change notifications.

Keeps a registry of connected dashboard clients and fans each message out
to every client registered at the time of the broadcast. Nothing is
queued for clients that connect later.
"""

from typing import Set
import asyncio
import json
import logging

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Registry of active WebSocket connections."""

    def __init__(self):
        self._connections: Set[WebSocket] = set()
        self._lock = asyncio.Lock()

    async def connect(self, websocket: WebSocket) -> None:
        """Accept and register a new WebSocket connection."""
        await websocket.accept()
        async with self._lock:
            self._connections.add(websocket)

    async def disconnect(self, websocket: WebSocket) -> None:
        """Remove a WebSocket connection."""
        async with self._lock:
            self._connections.discard(websocket)

    async def broadcast(self, message: dict) -> int:
        """
        Send a message to every registered connection.

        Connections that fail to receive are dropped. Returns the number
        of clients the message was delivered to.
        """
        async with self._lock:
            connections = self._connections.copy()

        if not connections:
            return 0

        data = json.dumps(message)
        closed = []

        for ws in connections:
            try:
                await ws.send_text(data)
            except Exception:
                # Connection closed or errored
                logger.debug("Dropping WebSocket after failed send", exc_info=True)
                closed.append(ws)

        # Clean up closed connections
        if closed:
            async with self._lock:
                for ws in closed:
                    self._connections.discard(ws)

        return len(connections) - len(closed)

    def get_total_connections(self) -> int:
        """Get total number of active connections."""
        return len(self._connections)
