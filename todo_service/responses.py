"""Response classes shared by the app and its routers."""

import json
from typing import Any

from fastapi.responses import JSONResponse


class TodoJSONResponse(JSONResponse):
    """JSONResponse that escapes non-ASCII text.

    Stored titles may hold any string JSON can carry, lone surrogates
    included; those cannot be encoded as raw UTF-8.
    """

    def render(self, content: Any) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=True,
            allow_nan=False,
            indent=None,
            separators=(",", ":"),
        ).encode("ascii")
