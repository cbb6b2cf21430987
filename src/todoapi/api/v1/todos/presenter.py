"""Wire representation of a todo."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from todoapi.domain.model import TodoM


@dataclass
class TodoPresenter:
    id: int
    content: str
    is_done: bool
    created_date: datetime | None
    updated_date: datetime | None

    @classmethod
    def from_model(cls, todo: TodoM) -> TodoPresenter:
        return cls(
            id=todo.id,
            content=todo.content,
            is_done=todo.is_done,
            created_date=todo.created_date,
            updated_date=todo.updated_date,
        )

    def to_jsonapi(self) -> dict[str, Any]:
        return {
            "type": "todos",
            "id": str(self.id),
            "attributes": {
                "content": self.content,
                "isDone": self.is_done,
                "createdDate": self.created_date,
                "updatedDate": self.updated_date,
            },
        }
