"""
Logging middleware

Records method, path, duration and status code for every request.
"""
# mypy: ignore-errors

import os
import sys
import time
import uuid
from collections.abc import Callable
from typing import Optional

from fastapi import Request, Response
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | trace_id={extra[trace_id]} | "
    "{extra[method]} {extra[path]} | {name}:{function}:{line} | {message}"
)


class LoggingMiddleware(BaseHTTPMiddleware):
    """HTTP request logging middleware"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Handle the request and log it"""
        start_time = time.time()
        method = request.method
        path = request.url.path
        client_host = request.client.host if request.client else "unknown"

        trace_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.trace_id = trace_id
        log = logger.bind(trace_id=trace_id, method=method, path=path, client=client_host)

        log.info("request.start")

        try:
            response = await call_next(request)

            process_time = time.time() - start_time
            status_code = response.status_code
            message = f"request.completed status={status_code} duration={process_time:.3f}s"

            if status_code >= 500:
                log.error(message)
            elif status_code >= 400:
                log.warning(message)
            else:
                log.info(message)

            response.headers["X-Process-Time"] = str(process_time)
            response.headers["X-Trace-Id"] = trace_id
            return response

        except Exception as e:
            process_time = time.time() - start_time
            log.opt(exception=True).error(f"request.failed duration={process_time:.3f}s error={type(e).__name__}")
            raise


def setup_logging(level: str = "INFO", log_dir: Optional[str] = "logs"):
    """
    Configure loguru

    Console sink always; app.log and error.log when log_dir is writable.
    """
    logger.configure(extra={"trace_id": "-", "method": "-", "path": "-", "client": "-"})

    # Drop the default handler
    logger.remove()

    logger.add(
        sink=sys.stderr,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "trace_id={extra[trace_id]} | "
            "{extra[method]} {extra[path]} | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        ),
        level=level,
        colorize=True,
    )

    if not log_dir:
        return

    # Console only when the log directory cannot be created (e.g. read-only container)
    try:
        os.makedirs(log_dir, exist_ok=True)
        logger.add(
            os.path.join(log_dir, "app.log"),
            rotation="100 MB",
            retention="30 days",
            compression="zip",
            format=FILE_FORMAT,
            level=level,
        )
        logger.add(
            os.path.join(log_dir, "error.log"),
            rotation="50 MB",
            retention="30 days",
            compression="zip",
            format=FILE_FORMAT,
            level="ERROR",
        )
    except (PermissionError, OSError):
        logger.warning(f"Log directory {log_dir!r} is not writable, logging to console only")

    logger.info("Logging initialized")
