"""Pydantic v2 schemas for the WebSocket echo channel."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class WebSocketMessage(BaseModel):
    """An event frame exchanged with WebSocket clients, e.g. ``{"event": "ping", "data": ...}``."""

    event: str = Field(..., min_length=1)
    data: Any = None
