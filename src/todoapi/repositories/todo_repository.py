"""Todo persistence on top of an async SQLAlchemy session."""

from __future__ import annotations

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from todoapi.domain.model import TodoM
from todoapi.models.todo import Todo


def to_todo_model(row: Todo) -> TodoM:
    return TodoM(
        id=row.id,
        content=row.content,
        is_done=row.is_done,
        created_date=row.created_date,
        updated_date=row.updated_date,
    )


class DatabaseTodoRepository:
    """Stores todos in the ``todos`` table and hands back ``TodoM`` values.

    Args:
        db: Async SQLAlchemy session for database operations.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def insert(self, todo: TodoM) -> TodoM:
        """Persist a new todo and return it with its id and timestamps."""
        row = Todo(content=todo.content, is_done=todo.is_done)
        self.db.add(row)
        await self.db.commit()
        await self.db.refresh(row)
        return to_todo_model(row)

    async def find_all(self) -> list[TodoM]:
        result = await self.db.execute(select(Todo).order_by(Todo.id.asc()))
        return [to_todo_model(row) for row in result.scalars().all()]

    async def find_by_id(self, id: int) -> TodoM | None:
        row = await self.db.get(Todo, id)
        return to_todo_model(row) if row is not None else None

    async def update_content(self, id: int, is_done: bool) -> None:
        await self.db.execute(update(Todo).where(Todo.id == id).values(is_done=is_done))
        await self.db.commit()

    async def delete_by_id(self, id: int) -> None:
        await self.db.execute(delete(Todo).where(Todo.id == id))
        await self.db.commit()
