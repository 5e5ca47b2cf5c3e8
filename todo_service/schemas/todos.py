"""
schemas/todos.py — Shape of a stored todo record

Records are open maps: only `id` is checked, every other field
(title, description, completed, anything the caller sent) passes
through untouched.

Called by: store.py (when loading the store file)
Depends on: pydantic
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, StrictInt, TypeAdapter


class TodoRecord(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: StrictInt
    title: Any = None
    description: Any = None
    completed: Any = None


TodoListAdapter = TypeAdapter(list[TodoRecord])
