"""Shared fixtures: a scriptable backend that records every call."""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from folder_manager.domain.folders import Folder
from folder_manager.main import create_app
from folder_manager.service import FolderService


class RecordingBackend:
    """Backend double answering from per-(parent, name) scripts.

    `lookups` maps (parent_id, name) to a Folder, None, or an exception to
    raise; unknown keys answer None. `creates` works the same way for
    create_folder, defaulting to a folder with a fresh id.
    """

    def __init__(self) -> None:
        self.lookups: dict[tuple[str, str], object] = {}
        self.creates: dict[tuple[str, str], object] = {}
        self.lookup_calls: list[tuple[str, str]] = []
        self.create_calls: list[tuple[str, str]] = []
        self.closed = False
        self._next_id = 100

    @staticmethod
    def _answer(value: object) -> object:
        if isinstance(value, BaseException):
            raise value
        return value

    async def get_folder_by_id(self, folder_id: str) -> Folder | None:
        return None

    async def get_folder_by_name(self, parent_folder_id: str, name: str) -> Folder | None:
        self.lookup_calls.append((parent_folder_id, name))
        return self._answer(self.lookups.get((parent_folder_id, name)))

    async def create_folder(self, parent_folder_id: str, name: str) -> Folder:
        self.create_calls.append((parent_folder_id, name))
        key = (parent_folder_id, name)
        if key in self.creates:
            return self._answer(self.creates[key])
        self._next_id += 1
        return Folder(id=str(self._next_id), name=name)

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def service(backend: RecordingBackend) -> FolderService:
    return FolderService(backend)


@pytest.fixture
def client(backend: RecordingBackend) -> TestClient:
    return TestClient(create_app(backend=backend))
