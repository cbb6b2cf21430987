"""Todo CRUD endpoints.

Handlers return presenters (or ``None``); the JSON:API route class turns
them into envelopes and the exception normalizer handles ``NotFoundError``.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from todoapi.api.deps import (
    get_add_todo_usecases,
    get_delete_todo_usecases,
    get_todo_usecases,
    get_todos_usecases,
    get_update_todo_usecases,
)
from todoapi.api.v1.todos.presenter import TodoPresenter
from todoapi.jsonapi.interceptor import jsonapi_route
from todoapi.schemas.todo import AddTodoRequest, UpdateTodoRequest
from todoapi.usecases.todo import (
    AddTodoUseCases,
    DeleteTodoUseCases,
    GetTodoUseCases,
    GetTodosUseCases,
    UpdateTodoUseCases,
)

router = APIRouter(route_class=jsonapi_route("todos"))


@router.get("")
async def get_todos(
    usecases: GetTodosUseCases = Depends(get_todos_usecases),
) -> list[TodoPresenter]:
    todos = await usecases.execute()
    return [TodoPresenter.from_model(todo) for todo in todos]


@router.get("/{id}")
async def get_todo(
    id: int,
    usecases: GetTodoUseCases = Depends(get_todo_usecases),
) -> TodoPresenter:
    return TodoPresenter.from_model(await usecases.execute(id))


@router.post("", status_code=201)
async def add_todo(
    body: AddTodoRequest,
    usecases: AddTodoUseCases = Depends(get_add_todo_usecases),
) -> TodoPresenter:
    return TodoPresenter.from_model(await usecases.execute(body.content))


@router.put("/{id}")
async def update_todo(
    id: int,
    body: UpdateTodoRequest,
    usecases: UpdateTodoUseCases = Depends(get_update_todo_usecases),
) -> TodoPresenter:
    """Mark a todo as done or not done."""
    return TodoPresenter.from_model(await usecases.execute(id, body.is_done))


@router.delete("/{id}")
async def delete_todo(
    id: int,
    usecases: DeleteTodoUseCases = Depends(get_delete_todo_usecases),
) -> None:
    await usecases.execute(id)
