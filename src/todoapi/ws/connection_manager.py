"""In-process registry of connected WebSocket clients."""

from __future__ import annotations

from fastapi import WebSocket


class ConnectionManager:
    """Track accepted WebSocket connections by client id."""

    def __init__(self) -> None:
        self.clients: dict[str, WebSocket] = {}

    async def connect(self, websocket: WebSocket, client_id: str) -> None:
        """Accept a WebSocket connection and register it."""
        await websocket.accept()
        self.clients[client_id] = websocket

    def disconnect(self, client_id: str) -> None:
        self.clients.pop(client_id, None)

    @property
    def client_count(self) -> int:
        return len(self.clients)
