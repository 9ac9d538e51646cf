# src/taskboard/api/app.py

"""
HTTP application for the todo store.

Every response is a JSON envelope: {"success": bool, "data": ..., "message": ...}.
Errors raised by the store are mapped here:
- TaskValidationError / malformed body -> 400
- TaskNotFoundError / unknown route     -> 404
- TaskStorageError / anything else      -> 500 (details hidden in production)
"""

from __future__ import annotations

import logging
import time
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..tasks.task_errors import TaskError, TaskStorageError, TaskValidationError
from ..tasks.task_models import format_ts, utc_now
from ..tasks.task_store import TaskStore
from .routes import get_store, router

logger = logging.getLogger(__name__)

API_PREFIX = "/api/todos"
LEGACY_PREFIX = "/todos"


def _fail(status_code: int, message: str, **extra: Any) -> JSONResponse:
    body: dict[str, Any] = {"success": False, "message": message}
    body.update({k: v for k, v in extra.items() if v is not None})
    return JSONResponse(status_code=status_code, content=body)


def create_app(settings, store: TaskStore) -> FastAPI:
    """
    Build the FastAPI app around an already constructed store.

    `settings` needs app_name, is_production and cors_origins; tests pass a SimpleNamespace.
    """
    app = FastAPI(title=str(getattr(settings, "app_name", "taskboard")), version="1.0.0")
    app.state.store = store
    app.state.settings = settings

    show_details = not bool(getattr(settings, "is_production", False))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(getattr(settings, "cors_origins", None) or ["*"]),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000.0
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    # ---- error mapping ----

    @app.exception_handler(TaskValidationError)
    async def on_validation_error(request: Request, exc: TaskValidationError) -> JSONResponse:
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.message)
        return _fail(400, exc.message, field=exc.field)

    @app.exception_handler(TaskStorageError)
    async def on_storage_error(request: Request, exc: TaskStorageError) -> JSONResponse:
        logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
        return _fail(500, "Failed to access todo storage", error=exc.message if show_details else None)

    @app.exception_handler(TaskError)
    async def on_task_error(request: Request, exc: TaskError) -> JSONResponse:
        return _fail(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def on_bad_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = [
            {
                "field": ".".join(str(p) for p in err.get("loc", ()) if p != "body"),
                "message": str(err.get("msg", "")),
            }
            for err in exc.errors()
        ]
        return _fail(400, "Invalid request", errors=errors)

    @app.exception_handler(StarletteHTTPException)
    async def on_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            return _fail(404, f"Route {request.method} {request.url.path} not found")
        return _fail(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def on_unhandled(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _fail(500, "Internal server error", error=str(exc) if show_details else None)

    # ---- routes ----

    @app.get("/api/health")
    def health(request: Request) -> dict[str, Any]:
        st = get_store(request)
        return {
            "success": True,
            "message": "API running",
            "status": "ok",
            "storage": st.backend_name,
            "count": st.count_tasks(),
            "timestamp": format_ts(utc_now()),
        }

    app.include_router(router, prefix=API_PREFIX)
    app.include_router(router, prefix=LEGACY_PREFIX, include_in_schema=False)

    return app
