from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from ..backend.base import FileManagementBackend
from ..domain.folders import Branch, BranchFolder, BranchOutcome, OutcomeKind
from ..logging_conf import get_logger

__all__ = ["FolderService"]

logger = get_logger("service.folders")

_BranchStep = Callable[[Branch, str, str], Awaitable[BranchOutcome]]


class FolderService:
    """Resolve or create a client's folder in every branch.

    Each branch holds a `<year>/<serial>` tree under its top-level folder. Both
    branches are worked concurrently and the call only succeeds when both do.
    Check-then-create is not atomic: two concurrent creates for the same
    client id can both pass the existence check.
    """

    def __init__(self, backend: FileManagementBackend) -> None:
        self.backend = backend

    # ------------------------
    # Use-cases
    # ------------------------

    async def resolve_folders(self, year: str, serial: str) -> list[BranchFolder] | None:
        """Return the client's folders as [unrestricted, restricted].

        None if either branch lacks the year or serial folder. Backend
        exceptions propagate unchanged.
        """
        return await self._across_branches(self._resolve_branch, year, serial)

    async def create_folders(self, year: str, serial: str) -> list[BranchFolder] | None:
        """Create the client's folders, creating year folders as needed.

        None if the serial folder already exists in either branch. Backend
        exceptions propagate unchanged.
        """
        return await self._across_branches(self._create_branch, year, serial)

    # ------------------------
    # Per-branch workflows
    # ------------------------

    async def _resolve_branch(self, branch: Branch, year: str, serial: str) -> BranchOutcome:
        year_folder = await self.backend.get_folder_by_name(branch.folder_id, year)
        if year_folder is None:
            return BranchOutcome.absent(branch, f"{branch.label} had no folder for year '{year}'")

        folder = await self.backend.get_folder_by_name(year_folder.id, serial)
        if folder is None:
            return BranchOutcome.absent(
                branch, f"{branch.label} for year '{year}' had no folder with name '{serial}'"
            )
        return BranchOutcome.found(branch, folder)

    async def _create_branch(self, branch: Branch, year: str, serial: str) -> BranchOutcome:
        year_folder = await self.backend.get_folder_by_name(branch.folder_id, year)
        if year_folder is None:
            logger.info(
                "folder.create",
                extra={"event": "folder_create", "branch": branch.label, "folder_name": year},
            )
            year_folder = await self.backend.create_folder(branch.folder_id, year)

        existing = await self.backend.get_folder_by_name(year_folder.id, serial)
        if existing is not None:
            return BranchOutcome.conflict(
                branch,
                f"{branch.label} has an existing folder in year '{year}' with name '{serial}'",
            )

        logger.info(
            "folder.create",
            extra={
                "event": "folder_create",
                "branch": branch.label,
                "year": year,
                "folder_name": serial,
            },
        )
        folder = await self.backend.create_folder(year_folder.id, serial)
        return BranchOutcome.found(branch, folder)

    # ------------------------
    # Fan-out / join
    # ------------------------

    @staticmethod
    async def _guarded(step: _BranchStep, branch: Branch, year: str, serial: str) -> BranchOutcome:
        try:
            return await step(branch, year, serial)
        except Exception as e:
            return BranchOutcome.fault(branch, e)

    async def _across_branches(
        self, step: _BranchStep, year: str, serial: str
    ) -> list[BranchFolder] | None:
        tasks = [asyncio.ensure_future(self._guarded(step, b, year, serial)) for b in Branch]

        # Completion order decides which failure is reported; both branches
        # still run to the end.
        decisive: BranchOutcome | None = None
        found: dict[Branch, BranchFolder] = {}
        for next_done in asyncio.as_completed(tasks):
            outcome = await next_done
            if outcome.kind is OutcomeKind.found:
                found[outcome.branch] = outcome.folder
            elif decisive is None:
                decisive = outcome
            else:
                logger.debug(
                    "branch.unreported",
                    extra={
                        "event": "branch_unreported",
                        "branch": outcome.branch.label,
                        "kind": outcome.kind.value,
                        "detail": outcome.message,
                    },
                )

        if decisive is None:
            return [found[b] for b in Branch]

        if decisive.kind is OutcomeKind.fault:
            logger.error(
                "branch.fault",
                exc_info=decisive.error,
                extra={
                    "event": "branch_fault",
                    "branch": decisive.branch.label,
                    "year": year,
                    "serial": serial,
                },
            )
            raise decisive.error

        logger.info(
            f"branch.{decisive.kind.value}",
            extra={
                "event": f"branch_{decisive.kind.value}",
                "branch": decisive.branch.label,
                "year": year,
                "serial": serial,
                "detail": decisive.message,
            },
        )
        return None
