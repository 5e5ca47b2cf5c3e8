"""
logging_config.py — Centralized Logging Configuration for the Todo Service

Sets up Loguru as the single logging backend. Intercepts Python's stdlib
logging module so uvicorn's and starlette's getLogger() calls route
through Loguru with the same format and request context.

Business Rules:
- All logs go through Loguru (no direct print() or stdlib logging)
- JSON lines when LOG_JSON is set (container / log shipper deployments)
- Human-readable format otherwise
- Request ID from middleware is included when available
- Optional file sink via LOG_FILE: 50MB rotation, 7-day retention

Called by: todo_service/main.py (on app creation)
Depends on: environment (LOG_LEVEL, LOG_JSON, LOG_FILE)
"""

import logging
import os
import sys

from loguru import logger

_TRUTHY = {"1", "true", "yes", "on"}


def setup_logging() -> None:
    """Configure Loguru and intercept stdlib logging.

    Safe to call more than once; every call replaces the previous sinks.
    """
    logger.remove()

    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    json_logs = os.getenv("LOG_JSON", "").strip().lower() in _TRUTHY
    log_file = os.getenv("LOG_FILE", "").strip()

    if json_logs:
        logger.add(
            sys.stdout,
            level=log_level,
            format="{message}",
            serialize=True,
        )
    else:
        logger.add(
            sys.stdout,
            level=log_level,
            format=(
                "<green>{time:HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{extra[request_id]}</cyan> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
                "{message}"
            ),
            colorize=True,
        )

    if log_file:
        logger.add(
            log_file,
            level=log_level,
            rotation="50 MB",
            retention="7 days",
            compression="gz",
            serialize=True,
        )

    # Records logged outside a request still need the key for the format above
    logger.configure(extra={"request_id": "-"})

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)

    for noisy in ("httpx", "httpcore", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logger.info("Logging configured", level=log_level, json=json_logs)


class _InterceptHandler(logging.Handler):
    """Route stdlib logging records to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip frames from stdlib logging internals to report the real caller
        frame, depth = logging.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )
