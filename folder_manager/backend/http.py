from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError

from ..domain.folders import Folder
from ..logging_conf import get_logger
from .base import BackendError

__all__ = ["HttpFileManagementBackend"]

logger = get_logger("backend.http")


class HttpFileManagementBackend:
    """REST client for the document-management service.

    Endpoints:
      GET  /folders/{id}                      -> folder, 404 if unknown
      GET  /folders/{parent}/children?name=.. -> folder, 404 if no such child
      POST /folders/{parent}/children         -> created folder

    Transport failures and unexpected statuses raise BackendError.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def _request(self, op: str, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(
                "backend.transport_error",
                extra={"event": "backend_transport_error", "op": op, "error": str(e)},
            )
            raise BackendError(f"{op} failed: {e}") from e

    @staticmethod
    def _folder_from(op: str, response: httpx.Response) -> Folder:
        if response.status_code not in (httpx.codes.OK, httpx.codes.CREATED):
            raise BackendError(f"{op} failed: backend returned {response.status_code}")
        try:
            return Folder.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise BackendError(f"{op} failed: malformed folder payload") from e

    async def get_folder_by_id(self, folder_id: str) -> Folder | None:
        r = await self._request("get_folder_by_id", "GET", f"/folders/{folder_id}")
        if r.status_code == httpx.codes.NOT_FOUND:
            return None
        return self._folder_from("get_folder_by_id", r)

    async def get_folder_by_name(self, parent_folder_id: str, name: str) -> Folder | None:
        r = await self._request(
            "get_folder_by_name",
            "GET",
            f"/folders/{parent_folder_id}/children",
            params={"name": name},
        )
        if r.status_code == httpx.codes.NOT_FOUND:
            return None
        return self._folder_from("get_folder_by_name", r)

    async def create_folder(self, parent_folder_id: str, name: str) -> Folder:
        r = await self._request(
            "create_folder",
            "POST",
            f"/folders/{parent_folder_id}/children",
            json={"name": name},
        )
        return self._folder_from("create_folder", r)

    async def aclose(self) -> None:
        await self._client.aclose()
