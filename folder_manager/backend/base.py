from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..domain.folders import Folder

__all__ = ["BackendError", "FileManagementBackend"]


class BackendError(RuntimeError):
    """Raised by a backend when an operation fails.

    The message is surfaced verbatim to API callers as a 500.
    """


@runtime_checkable
class FileManagementBackend(Protocol):
    """Capabilities the folder service needs from the document store.

    Lookups return None when nothing matches; every other failure raises.
    """

    async def get_folder_by_id(self, folder_id: str) -> Folder | None: ...

    async def get_folder_by_name(self, parent_folder_id: str, name: str) -> Folder | None: ...

    async def create_folder(self, parent_folder_id: str, name: str) -> Folder: ...

    async def aclose(self) -> None: ...
