"""Todos API — CRUD over the persisted todo list."""

from fastapi import APIRouter, Depends

from ..dependencies import get_store, read_json_body
from ..responses import TodoJSONResponse
from ..schemas.errors import ErrorResponse
from ..services.todo_service import (
    TitleRequiredError,
    TodoNotFoundError,
    create_todo,
    delete_todo,
    get_todo,
    list_todos,
    parse_todo_id,
    update_todo,
)
from ..store import TodoStore

router = APIRouter(tags=["todos"], default_response_class=TodoJSONResponse)


def _not_found(e: Exception) -> TodoJSONResponse:
    return TodoJSONResponse(ErrorResponse(error=str(e)).body(), status_code=404)


# ── Endpoints ────────────────────────────────────────────────────────


@router.get("/todos")
def read_todos(store: TodoStore = Depends(get_store)):
    """Every todo, in insertion order."""
    return list_todos(store)


@router.get("/todos/{todo_id}")
def read_todo(todo_id: str, store: TodoStore = Depends(get_store)):
    try:
        return get_todo(store, parse_todo_id(todo_id))
    except TodoNotFoundError as e:
        return _not_found(e)


@router.post("/todos", status_code=201)
def add_todo(body: dict = Depends(read_json_body), store: TodoStore = Depends(get_store)):
    """Create a todo. Answers with the whole list, not just the new record.

    A missing title is a 404, not a 400; existing clients depend on it.
    """
    try:
        return create_todo(store, body)
    except TitleRequiredError as e:
        return _not_found(e)


@router.put("/todos/{todo_id}")
def replace_todo_fields(
    todo_id: str,
    body: dict = Depends(read_json_body),
    store: TodoStore = Depends(get_store),
):
    try:
        return update_todo(store, parse_todo_id(todo_id), body)
    except TodoNotFoundError as e:
        return _not_found(e)


@router.delete("/todos/{todo_id}")
def remove_todo(todo_id: str, store: TodoStore = Depends(get_store)):
    try:
        return delete_todo(store, parse_todo_id(todo_id))
    except TodoNotFoundError as e:
        return _not_found(e)
