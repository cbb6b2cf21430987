"""Todo use cases.

Each use case is a small class built per request with the repository (and
logger, where it logs) it needs, exposing a single ``execute`` method.
"""

from __future__ import annotations

from todoapi.domain.model import TodoM
from todoapi.domain.ports import Logger, TodoRepository
from todoapi.exceptions import NotFoundError

TODO_NOT_FOUND = "Todo not found"


class GetTodosUseCases:
    def __init__(self, todo_repository: TodoRepository) -> None:
        self.todo_repository = todo_repository

    async def execute(self) -> list[TodoM]:
        return await self.todo_repository.find_all()


class GetTodoUseCases:
    def __init__(self, todo_repository: TodoRepository) -> None:
        self.todo_repository = todo_repository

    async def execute(self, id: int) -> TodoM:
        """Return the todo with ``id``.

        Raises:
            NotFoundError: If no such todo exists.
        """
        todo = await self.todo_repository.find_by_id(id)
        if todo is None:
            raise NotFoundError(TODO_NOT_FOUND)
        return todo


class AddTodoUseCases:
    context = "addTodoUseCases execute"

    def __init__(self, logger: Logger, todo_repository: TodoRepository) -> None:
        self.logger = logger
        self.todo_repository = todo_repository

    async def execute(self, content: str) -> TodoM:
        result = await self.todo_repository.insert(TodoM(content=content, is_done=False))
        self.logger.log(self.context, "New todo have been inserted")
        return result


class UpdateTodoUseCases:
    context = "updateTodoUseCases execute"

    def __init__(self, logger: Logger, todo_repository: TodoRepository) -> None:
        self.logger = logger
        self.todo_repository = todo_repository

    async def execute(self, id: int, is_done: bool) -> TodoM:
        """Mark the todo as done or not done and return its new state.

        Raises:
            NotFoundError: If no such todo exists.
        """
        todo = await self.todo_repository.find_by_id(id)
        if todo is None:
            raise NotFoundError(TODO_NOT_FOUND)
        if is_done:
            todo.mark_as_done()
        else:
            todo.mark_as_undone()
        await self.todo_repository.update_content(id, is_done)
        self.logger.log(self.context, f"Todo {id} have been updated")
        return todo


class DeleteTodoUseCases:
    context = "deleteTodoUseCases execute"

    def __init__(self, logger: Logger, todo_repository: TodoRepository) -> None:
        self.logger = logger
        self.todo_repository = todo_repository

    async def execute(self, id: int) -> None:
        """Delete the todo with ``id``.

        Raises:
            NotFoundError: If no such todo exists.
        """
        if await self.todo_repository.find_by_id(id) is None:
            raise NotFoundError(TODO_NOT_FOUND)
        await self.todo_repository.delete_by_id(id)
        self.logger.log(self.context, f"Todo {id} have been deleted")
