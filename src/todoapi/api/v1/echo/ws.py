"""WebSocket echo channel.

Clients connect to ``/ws`` and send ``{"event": "ping", "data": ...}``
frames; each ping is answered with ``{"event": "pong", "data": ...}``
carrying the same data. Malformed frames get an ``error`` event back and
frames with any other event are ignored.
"""

from __future__ import annotations

import uuid
from typing import Any

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from todoapi.domain.ports import Logger
from todoapi.schemas.ws import WebSocketMessage
from todoapi.ws.connection_manager import ConnectionManager

router = APIRouter()


class EchoGateway:
    """Connection lifecycle and message handling for the echo channel.

    Args:
        logger: Context-first logger.
        connection_manager: Registry of connected clients.
    """

    context = "WebsocketsGateway"

    def __init__(self, logger: Logger, connection_manager: ConnectionManager) -> None:
        self.logger = logger
        self.connection_manager = connection_manager

    async def handle_connection(self, websocket: WebSocket, client_id: str) -> None:
        await self.connection_manager.connect(websocket, client_id)
        self.logger.log(self.context, f"Client id: {client_id} connected")
        self.logger.debug(
            self.context,
            f"Number of connected clients: {self.connection_manager.client_count}",
        )

    def handle_disconnect(self, client_id: str) -> None:
        self.connection_manager.disconnect(client_id)
        self.logger.log(self.context, f"Client id: {client_id} disconnected")

    def handle_message(self, client_id: str, data: Any) -> dict[str, Any]:
        """Answer a ping with a pong carrying the same data."""
        self.logger.log(self.context, f"Message received from client id: {client_id}")
        self.logger.debug(self.context, f"Payload: {data}")
        return {"event": "pong", "data": data}

    def handle_frame(self, client_id: str, raw: str) -> dict[str, Any] | None:
        """Validate a raw text frame and return the reply to send, if any."""
        try:
            message = WebSocketMessage.model_validate_json(raw)
        except ValidationError as exc:
            return {
                "event": "error",
                "data": exc.errors(include_url=False, include_context=False, include_input=False),
            }
        if message.event == "ping":
            return self.handle_message(client_id, message.data)
        self.logger.debug(self.context, f"Ignoring unknown event '{message.event}' from {client_id}")
        return None


@router.websocket("/ws")
async def echo_websocket(websocket: WebSocket) -> None:
    """Serve one client until it disconnects."""
    gateway: EchoGateway = websocket.app.state.echo_gateway
    client_id = str(uuid.uuid4())
    await gateway.handle_connection(websocket, client_id)
    try:
        while True:
            reply = gateway.handle_frame(client_id, await websocket.receive_text())
            if reply is not None:
                await websocket.send_json(reply)
    except WebSocketDisconnect:
        pass
    finally:
        gateway.handle_disconnect(client_id)
