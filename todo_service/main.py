"""
Todo Service — CRUD over a single todo list kept in a JSON file.

App factory, lifespan, middleware and exception handlers live here;
routes live in routers/todos.py.

Launch:
    todo-service                          # console script
    python -m todo_service.main           # direct
"""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .dependencies import InvalidBodyError
from .logging_config import setup_logging
from .responses import TodoJSONResponse
from .routers import todos
from .schemas.errors import ErrorResponse
from .store import StoreError, TodoStore

VERSION = "1.0.0"

ROUTE_NOT_FOUND = "Route not found"


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "")


# --- Exception Handlers ---


async def route_not_found_handler(request: Request, exc: StarletteHTTPException):
    """Unknown paths, and unknown methods on known paths, are both 404s."""
    if exc.status_code in (404, 405):
        return PlainTextResponse(ROUTE_NOT_FOUND, status_code=404)
    return TodoJSONResponse(
        ErrorResponse(error=str(exc.detail)).body(),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def invalid_body_handler(request: Request, exc: InvalidBodyError):
    return TodoJSONResponse(ErrorResponse(error=str(exc)).body(), status_code=400)


async def store_error_handler(request: Request, exc: StoreError):
    logger.opt(exception=exc).error("Store failure on {} {}", request.method, request.url.path)
    return TodoJSONResponse(
        ErrorResponse(error="storage failure", request_id=_request_id(request)).body(),
        status_code=500,
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    """Last resort. Runs outside request_id_middleware, so it sets the header itself."""
    request_id = _request_id(request)
    logger.opt(exception=exc).error(
        "Unhandled error on {} {} [{}]", request.method, request.url.path, request_id
    )
    return TodoJSONResponse(
        ErrorResponse(error="internal server error", request_id=request_id).body(),
        status_code=500,
        headers={"X-Request-ID": request_id} if request_id else None,
    )


# --- Middleware ---


async def request_id_middleware(request: Request, call_next):
    """Tag each request with a short id, bind it to logs, and time it."""
    request_id = uuid.uuid4().hex[:8]
    request.state.request_id = request_id
    start = time.perf_counter()
    with logger.contextualize(request_id=request_id):
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "{} {} -> {} ({:.1f} ms)",
            request.method, request.url.path, response.status_code, elapsed_ms,
        )
    response.headers["X-Request-ID"] = request_id
    return response


# --- App Factory ---


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging()

    store = TodoStore(settings.store_path, serialize_writes=settings.store_lock_enabled)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store.open()
        yield
        store.close()

    app = FastAPI(
        title="Todo Service",
        version=VERSION,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        default_response_class=TodoJSONResponse,
        # "/todos/" is not "/todos": no redirect, it falls through to the 404
        redirect_slashes=False,
    )
    app.state.store = store
    app.state.settings = settings

    app.middleware("http")(request_id_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept"],
    )

    app.add_exception_handler(StarletteHTTPException, route_not_found_handler)
    app.add_exception_handler(InvalidBodyError, invalid_body_handler)
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(todos.router)
    return app


def serve() -> None:
    """Run the service under uvicorn on the configured host and port."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    serve()
