"""Todo service — list, lookup and mutation of the persisted todo list.

Each function loads the list fresh from the store, applies one change,
writes the list back, and returns what the endpoint sends to the caller.
Mutations return the whole updated list, not just the touched record.

Usage:
    from todo_service.services.todo_service import create_todo, parse_todo_id
"""

import math
import re

from loguru import logger

from ..store import TodoStore, next_todo_id

TITLE_MANDATORY = "title mandatory"
ITEM_NOT_FOUND = "item not Found"


class TodoNotFoundError(LookupError):
    """No record has the requested id."""

    def __init__(self, todo_id: int | None):
        super().__init__(ITEM_NOT_FOUND)
        self.todo_id = todo_id


class TitleRequiredError(ValueError):
    """A new todo was submitted without a title."""

    def __init__(self):
        super().__init__(TITLE_MANDATORY)


_DECIMAL = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_PREFIXED = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")


def parse_todo_id(raw: str) -> int | None:
    """Coerce a path segment to a todo id, the way Number("...") would.

    Surrounding whitespace is ignored and a blank segment reads as 0.
    Decimal forms ("7", "7.0", "7e0") and 0x/0o/0b integer literals are
    accepted. Anything else, or a value that isn't a whole finite number,
    gives None, which matches no record.
    """
    text = raw.strip()
    if not text:
        return 0
    if _PREFIXED.fullmatch(text):
        return int(text, 0)
    if not _DECIMAL.fullmatch(text):
        return None
    value = float(text)
    if not math.isfinite(value) or not value.is_integer():
        return None
    return int(value)


def is_falsy(value) -> bool:
    """JavaScript falsiness for a decoded JSON value.

    Only null, false, "", 0 and NaN are falsy; empty arrays and objects
    are not.
    """
    if value is None or value is False or value == "":
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0 or math.isnan(value)
    return False


def _find_index(todos: list[dict], todo_id: int | None) -> int | None:
    if todo_id is None:
        return None
    for i, todo in enumerate(todos):
        if todo["id"] == todo_id:
            return i
    return None


def list_todos(store: TodoStore) -> list[dict]:
    return store.load()


def get_todo(store: TodoStore, todo_id: int | None) -> dict:
    todos = store.load()
    index = _find_index(todos, todo_id)
    if index is None:
        raise TodoNotFoundError(todo_id)
    return todos[index]


def create_todo(store: TodoStore, body: dict) -> list[dict]:
    """Append a new record with a generated id; returns the full list."""
    if is_falsy(body.get("title")):
        raise TitleRequiredError()

    with store.lock:
        todos = store.load()
        todo_id = next_todo_id(todos)
        todos.append({**body, "id": todo_id})
        store.save(todos)

    logger.info("Todo #{} created", todo_id)
    return todos


def update_todo(store: TodoStore, todo_id: int | None, changes: dict) -> list[dict]:
    """Shallow-merge changes over the record; the path id always wins."""
    with store.lock:
        todos = store.load()
        index = _find_index(todos, todo_id)
        if index is None:
            raise TodoNotFoundError(todo_id)
        todos[index] = {**todos[index], **changes, "id": todo_id}
        store.save(todos)

    logger.info("Todo #{} updated ({} fields)", todo_id, len(changes))
    return todos


def delete_todo(store: TodoStore, todo_id: int | None) -> list[dict]:
    with store.lock:
        todos = store.load()
        index = _find_index(todos, todo_id)
        if index is None:
            raise TodoNotFoundError(todo_id)
        del todos[index]
        store.save(todos)

    logger.info("Todo #{} deleted", todo_id)
    return todos
