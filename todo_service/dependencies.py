"""
dependencies.py — Shared FastAPI Dependencies

Business Rules:
- get_store returns the TodoStore opened by the app lifespan
- read_json_body only parses bodies sent with a JSON content type;
  anything else (including no body at all) reads as {}
- A JSON array body reads as an object keyed by index ("0", "1", ...),
  so it never carries a title
- Unparseable JSON, NaN/Infinity literals, or a scalar top level is a 400

Called by: routers/todos.py
Depends on: store.py
"""

import json

from fastapi import Request

from .store import TodoStore


class InvalidBodyError(ValueError):
    """The request body was sent as JSON but can't be used as a todo."""


def get_store(request: Request) -> TodoStore:
    return request.app.state.store


def _is_json(content_type: str) -> bool:
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


async def read_json_body(request: Request) -> dict:
    """Dependency: the request body as a dict."""
    if not _is_json(request.headers.get("content-type", "")):
        return {}
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw, parse_constant=_reject_constant)
    except ValueError:
        raise InvalidBodyError("invalid JSON body")
    if isinstance(data, list):
        return {str(i): item for i, item in enumerate(data)}
    if not isinstance(data, dict):
        raise InvalidBodyError("request body must be a JSON object or array")
    return data
