"""
store.py — Flat-file persistence for the todo list

The whole list lives in one UTF-8 JSON array. Every operation reads the
file in full; every mutation writes it back in full.

Business Rules:
- Missing or empty file = empty list
- Malformed or wrongly-shaped file = StoreCorruptError (never overwritten)
- Writes go to a temp file in the same directory, then os.replace()
- Mutations run under the store lock so concurrent writers don't lose updates
- IDs are max(existing) + 1, recomputed on every creation

Called by: services/todo_service.py, main.py (lifespan open/close)
Depends on: schemas/todos.py
"""

import json
import os
import tempfile
import threading
from contextlib import nullcontext
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from .schemas.todos import TodoListAdapter


class StoreError(Exception):
    """The store file could not be read or written."""


class StoreCorruptError(StoreError):
    """The store file exists but does not hold a valid todo list."""


def next_todo_id(todos: list[dict]) -> int:
    """Return one past the highest id in the list (1 for an empty list)."""
    return max([0, *(t["id"] for t in todos)]) + 1


class TodoStore:
    """Handle on the store file.

    Opened once at startup, read/written per request, closed at shutdown.
    """

    def __init__(self, path: str | os.PathLike, serialize_writes: bool = True):
        self.path = Path(path)
        self.lock = threading.RLock() if serialize_writes else nullcontext()
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreError(f"cannot create store directory {self.path.parent}: {e}") from e
        self._open = True
        logger.info("Todo store opened at {}", self.path)

    def close(self) -> None:
        self._open = False
        logger.info("Todo store closed")

    def load(self) -> list[dict]:
        """Read and parse the full list."""
        self._check_open()
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except (OSError, UnicodeDecodeError) as e:
            raise StoreError(f"cannot read {self.path}: {e}") from e

        if not text.strip():
            return []

        try:
            todos = json.loads(text)
        except ValueError as e:
            logger.error("Store file {} is not valid JSON: {}", self.path, e)
            raise StoreCorruptError(f"{self.path} is not valid JSON") from e

        try:
            TodoListAdapter.validate_python(todos)
        except ValidationError as e:
            logger.error("Store file {} has an invalid shape: {}", self.path, e)
            raise StoreCorruptError(f"{self.path} does not hold a todo list") from e

        seen = set()
        for todo in todos:
            if todo["id"] in seen:
                logger.error("Store file {} repeats id {}", self.path, todo["id"])
                raise StoreCorruptError(f"{self.path} repeats id {todo['id']}")
            seen.add(todo["id"])

        return todos

    def save(self, todos: list[dict]) -> None:
        """Replace the store file with the given list.

        Non-ASCII text is written as \\u escapes so that any string JSON
        can carry (lone surrogates included) round-trips through the file.
        """
        self._check_open()

        tmp_name = None
        try:
            payload = json.dumps(todos, separators=(",", ":"))
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(payload)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, self.path)
        except (OSError, ValueError) as e:
            if tmp_name:
                try:
                    os.unlink(tmp_name)
                except FileNotFoundError:
                    pass
            raise StoreError(f"cannot write {self.path}: {e}") from e

        logger.debug("Wrote {} todos to {}", len(todos), self.path)

    def _check_open(self) -> None:
        if not self._open:
            raise StoreError("todo store is closed")
