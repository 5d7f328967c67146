"""Process configuration read from environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass

from .backend import FileManagementBackend, HttpFileManagementBackend, InMemoryBackend
from .logging_conf import get_logger

__all__ = ["Settings", "build_backend"]

logger = get_logger("config")


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw, 10)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer") from e


def _float_from_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a float") from e


@dataclass(frozen=True)
class Settings:
    app_name: str = "folder-manager"
    app_version: str = "0.1.0"
    host: str = "127.0.0.1"
    port: int = 8000
    file_management_url: str | None = None
    file_management_timeout: float = 10.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from APP_NAME, PORT, FILE_MANAGEMENT_URL and friends.

        Raises ValueError naming the offending variable.
        """
        port = _int_from_env("PORT", cls.port)
        if not (1 <= port <= 65535):
            raise ValueError("PORT must be in [1,65535]")

        timeout = _float_from_env("FILE_MANAGEMENT_TIMEOUT", cls.file_management_timeout)
        if timeout <= 0:
            raise ValueError("FILE_MANAGEMENT_TIMEOUT must be > 0")

        return cls(
            app_name=os.getenv("APP_NAME", cls.app_name),
            app_version=os.getenv("APP_VERSION", cls.app_version),
            host=os.getenv("HOST", cls.host),
            port=port,
            file_management_url=os.getenv("FILE_MANAGEMENT_URL") or None,
            file_management_timeout=timeout,
            log_level=os.getenv("LOG_LEVEL", cls.log_level).upper(),
        )


def build_backend(settings: Settings) -> FileManagementBackend:
    """Return the backend the settings point at.

    Falls back to the in-memory tree when no FILE_MANAGEMENT_URL is set.
    """
    if settings.file_management_url:
        return HttpFileManagementBackend(
            settings.file_management_url, timeout=settings.file_management_timeout
        )
    logger.warning(
        "backend.in_memory",
        extra={"event": "backend_in_memory", "reason": "FILE_MANAGEMENT_URL not set"},
    )
    return InMemoryBackend()
