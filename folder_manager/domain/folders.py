from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "Branch",
    "Folder",
    "BranchFolder",
    "OutcomeKind",
    "BranchOutcome",
]


class Branch(Enum):
    """Top-level backend folders under which each client gets a year/serial tree.

    Member order is the order results are returned in.
    """

    UNRESTRICTED = ("1", "Unrestricted information")
    RESTRICTED = ("2", "Restricted information")

    def __init__(self, folder_id: str, label: str) -> None:
        self.folder_id = folder_id
        self.label = label


class Folder(BaseModel):
    """A folder as the backend reports it."""

    id: str
    name: str


class BranchFolder(Folder):
    """A client folder tagged with the branch it was resolved under."""

    model_config = ConfigDict(populate_by_name=True)

    top_level_folder: str = Field(..., alias="topLevelFolder")

    @classmethod
    def from_folder(cls, folder: Folder, branch: Branch) -> BranchFolder:
        return cls(id=folder.id, name=folder.name, top_level_folder=branch.label)


class OutcomeKind(str, Enum):
    found = "found"
    absent = "absent"
    conflict = "conflict"
    fault = "fault"


@dataclass(frozen=True)
class BranchOutcome:
    """Result of running the lookup/create workflow on one branch.

    `absent` and `conflict` are expected outcomes and carry only a message;
    `fault` carries the exception raised by the backend.
    """

    branch: Branch
    kind: OutcomeKind
    folder: BranchFolder | None = None
    message: str | None = None
    error: BaseException | None = None

    @classmethod
    def found(cls, branch: Branch, folder: Folder) -> BranchOutcome:
        return cls(branch, OutcomeKind.found, folder=BranchFolder.from_folder(folder, branch))

    @classmethod
    def absent(cls, branch: Branch, message: str) -> BranchOutcome:
        return cls(branch, OutcomeKind.absent, message=message)

    @classmethod
    def conflict(cls, branch: Branch, message: str) -> BranchOutcome:
        return cls(branch, OutcomeKind.conflict, message=message)

    @classmethod
    def fault(cls, branch: Branch, error: BaseException) -> BranchOutcome:
        return cls(branch, OutcomeKind.fault, message=str(error), error=error)
