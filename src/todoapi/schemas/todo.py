"""Pydantic v2 schemas for todo request bodies.

Bodies are plain JSON objects; the response side is built by the todo
presenter and the JSON:API response interceptor.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class AddTodoRequest(BaseModel):
    """Request body for creating a todo."""

    content: str = Field(..., min_length=1, max_length=255)


class UpdateTodoRequest(BaseModel):
    """Request body for marking a todo as done or not done.

    Accepts the wire name ``isDone`` as well as ``is_done``.
    """

    model_config = ConfigDict(populate_by_name=True)

    is_done: bool = Field(..., alias="isDone")
