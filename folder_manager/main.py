"""FastAPI app factory: request logging, health endpoint and folder routes."""
from __future__ import annotations

import time
from collections.abc import Callable
from uuid import uuid4

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from folder_manager.api import router as folders_router
from folder_manager.backend import FileManagementBackend
from folder_manager.config import Settings, build_backend
from folder_manager.logging_conf import get_logger, setup_logging
from folder_manager.service import FolderService

# Configure logging before anything else.
setup_logging()
logger = get_logger("app")


def create_app(
    settings: Settings | None = None, backend: FileManagementBackend | None = None
) -> FastAPI:
    """Build the ASGI app.

    The folder service is created once here, around `backend` (or the one the
    settings select), and shared by every request through `app.state`.
    """
    settings = settings or Settings.from_env()
    backend = backend if backend is not None else build_backend(settings)

    app = FastAPI(title=settings.app_name, version=settings.app_version)
    app.state.settings = settings
    app.state.folder_service = FolderService(backend)

    @app.on_event("startup")
    async def _on_startup() -> None:
        logger.info(
            "startup",
            extra={"event": "startup", "backend": type(backend).__name__},
        )

    @app.on_event("shutdown")
    async def _on_shutdown() -> None:
        await backend.aclose()
        logger.info("shutdown", extra={"event": "shutdown"})

    @app.middleware("http")
    async def request_logger(request: Request, call_next: Callable[[Request], Response]):
        """JSON request logging with a correlation id.

        Reuses an incoming X-Request-ID or mints one, and echoes it on the
        response.
        """
        request_id = request.headers.get("X-Request-ID", str(uuid4()))
        request.state.request_id = request_id

        start = time.perf_counter()
        logger.info(
            "request.start",
            extra={
                "event": "request_start",
                "method": request.method,
                "path": request.url.path,
                "request_id": request_id,
            },
        )
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "request.error",
                extra={
                    "event": "request_error",
                    "path": request.url.path,
                    "method": request.method,
                    "request_id": request_id,
                },
            )
            raise
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000.0

        response.headers["X-Request-ID"] = request_id
        logger.info(
            "request.end",
            extra={
                "event": "request_end",
                "status_code": response.status_code,
                "elapsed_ms": round(elapsed_ms, 2),
                "request_id": request_id,
            },
        )
        return response

    @app.get("/health", summary="Liveness/readiness check")
    async def health() -> JSONResponse:
        return JSONResponse(content={"ok": True})

    app.include_router(folders_router)

    return app


def main() -> None:
    """Console entry point: serve the app with uvicorn."""
    settings = Settings.from_env()
    setup_logging(settings.log_level)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


# ASGI entrypoint for uvicorn: `uvicorn folder_manager.main:app --port 8000`
app = create_app()
