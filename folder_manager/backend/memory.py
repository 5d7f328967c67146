from __future__ import annotations

from dataclasses import dataclass

from ..domain.folders import Branch, Folder
from ..logging_conf import get_logger
from .base import BackendError

__all__ = ["InMemoryBackend"]

logger = get_logger("backend.memory")


@dataclass
class _Node:
    id: str
    name: str
    parent_id: str | None


class InMemoryBackend:
    """Process-local folder tree used for local development and tests.

    Starts with the two top-level branch folders; new folders get sequential
    string ids. Contents are lost on restart.
    """

    def __init__(self) -> None:
        self._nodes: dict[str, _Node] = {}
        self._next_id = 1
        for branch in Branch:
            self._nodes[branch.folder_id] = _Node(branch.folder_id, branch.label, None)
            self._next_id = max(self._next_id, int(branch.folder_id) + 1)

    def _mint_id(self) -> str:
        folder_id = str(self._next_id)
        self._next_id += 1
        return folder_id

    async def get_folder_by_id(self, folder_id: str) -> Folder | None:
        node = self._nodes.get(folder_id)
        return Folder(id=node.id, name=node.name) if node else None

    async def get_folder_by_name(self, parent_folder_id: str, name: str) -> Folder | None:
        for node in self._nodes.values():
            if node.parent_id == parent_folder_id and node.name == name:
                return Folder(id=node.id, name=node.name)
        return None

    async def create_folder(self, parent_folder_id: str, name: str) -> Folder:
        if parent_folder_id not in self._nodes:
            raise BackendError(f"parent folder '{parent_folder_id}' does not exist")
        node = _Node(self._mint_id(), name, parent_folder_id)
        self._nodes[node.id] = node
        logger.debug(
            "memory.create",
            extra={"event": "memory_create", "folder_id": node.id, "parent_id": parent_folder_id},
        )
        return Folder(id=node.id, name=node.name)

    async def aclose(self) -> None:
        return None
