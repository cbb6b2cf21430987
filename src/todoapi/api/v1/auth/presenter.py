from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class IsAuthPresenter:
    username: str

    def to_jsonapi(self) -> dict[str, Any]:
        return {"type": "auth", "id": "1", "attributes": {"username": self.username}}
