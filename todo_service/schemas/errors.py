"""
schemas/errors.py — Structured error response model

Shared by the todo router and the exception handlers in main.py.
"""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error: str
    request_id: str | None = None

    def body(self) -> dict:
        """Serialized body; request_id is only present on server errors."""
        return self.model_dump(exclude_none=True)
