"""
Self-hosted relay: the server owns every open WebSocket and broadcasts to all of them
"""
import asyncio
import json
import logging
from typing import Any, Dict, Set

from fastapi import WebSocket

from peerpulse.transport.base import Transport


logger = logging.getLogger(__name__)


def encode_message(event: str, payload: Any = None) -> str:
    """Frame used in both directions on the socket"""
    return json.dumps({"event": event, "data": payload})


class WebSocketTransport(Transport):
    """Admin and peer sockets share one connection pool"""

    name = "websocket"

    def __init__(self) -> None:
        self._connections: Set[WebSocket] = set()
        self._lock = asyncio.Lock()

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    async def register(self, ws: WebSocket) -> None:
        await ws.accept()
        async with self._lock:
            self._connections.add(ws)
        logger.info(f"🔌 Client connected ({self.connection_count} open)")

    async def unregister(self, ws: WebSocket) -> None:
        async with self._lock:
            self._connections.discard(ws)
        logger.info(f"🔌 Client disconnected ({self.connection_count} open)")

    async def send(self, ws: WebSocket, event: str, payload: Any = None) -> None:
        """Send to a single socket (error replies to a sender)"""
        await ws.send_text(encode_message(event, payload))

    async def broadcast(self, event: str, payload: Any = None) -> None:
        async with self._lock:
            receivers = list(self._connections)
        if not receivers:
            return
        message = encode_message(event, payload)
        results = await asyncio.gather(
            *(ws.send_text(message) for ws in receivers),
            return_exceptions=True,
        )
        dead = [ws for ws, result in zip(receivers, results) if isinstance(result, Exception)]
        if dead:
            logger.warning(f"⚠️ Dropping {len(dead)} socket(s) that failed on {event}")
            async with self._lock:
                self._connections.difference_update(dead)

    async def close(self) -> None:
        async with self._lock:
            receivers = list(self._connections)
            self._connections.clear()
        for ws in receivers:
            try:
                await ws.close()
            except RuntimeError:
                # Already closed by the client
                pass

    def describe(self) -> Dict[str, Any]:
        return {"transport": self.name, "connections": self.connection_count}
