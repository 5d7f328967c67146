from __future__ import annotations

import asyncio
import time

import httpx

from folder_manager.logging_conf import get_logger
from runner.types import SmokeError, UnexpectedResponseError

logger = get_logger("runner.client")


async def wait_for_health(client: httpx.AsyncClient, timeout_s: float = 20.0) -> None:
    """Ping /health until it returns ok or raise after a timeout."""
    deadline = time.monotonic() + timeout_s
    while time.monotonic() < deadline:
        try:
            r = await client.get("/health")
            if r.status_code == 200 and r.json().get("ok") is True:
                logger.info("health.ok", extra={"event": "health_ok"})
                return
        except httpx.HTTPError as e:
            logger.debug("health.retry", extra={"event": "health_retry", "error": str(e)})
        await asyncio.sleep(0.25)
    raise SmokeError("Health check did not pass within timeout")


def _expect(r: httpx.Response, status_code: int) -> dict:
    if r.status_code != status_code:
        raise UnexpectedResponseError(
            f"{r.request.method} {r.request.url.path} returned {r.status_code}, "
            f"expected {status_code}: {r.text}"
        )
    return r.json()


async def create_folders(client: httpx.AsyncClient, client_id: str) -> list[dict]:
    """POST /folders and return the created folders."""
    r = await client.post("/folders", json={"clientId": client_id})
    body = _expect(r, 201)
    logger.info(
        "folders.created",
        extra={
            "event": "folders_created",
            "client_id": client_id,
            "location": r.headers.get("Location"),
        },
    )
    return body["folders"]


async def get_folders(client: httpx.AsyncClient, client_id: str) -> list[dict]:
    """GET /folders/{client_id} and return the folders."""
    r = await client.get(f"/folders/{client_id}")
    return _expect(r, 200)["folders"]


async def expect_error(
    client: httpx.AsyncClient, method: str, url: str, status_code: int, error_code: str, **kwargs
) -> None:
    """Issue a request that must fail with the given status and error code."""
    r = await client.request(method, url, **kwargs)
    detail = _expect(r, status_code).get("detail") or {}
    if detail.get("error_code") != error_code:
        raise UnexpectedResponseError(
            f"{method} {url} returned error_code {detail.get('error_code')!r}, "
            f"expected {error_code!r}"
        )
