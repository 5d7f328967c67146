#!/usr/bin/env python3
"""End-to-end smoke run against a live folder manager.

Steps:
- wait for server health
- create the folder pair for a fresh client id
- read it back and compare ids and order
- creating the same client id again must be rejected
- an invalid client id must be rejected
- emit a compact summary and exit code
"""
from __future__ import annotations

import asyncio
import random
import sys
from collections.abc import Awaitable, Callable

import httpx

from folder_manager.logging_conf import get_logger, setup_logging
from runner.cli import parse_args
from runner.client import create_folders, expect_error, get_folders, wait_for_health
from runner.types import CheckResult, SmokeError, UnexpectedResponseError

setup_logging()
logger = get_logger("runner")


def random_client_id() -> str:
    """Return a YYYY-SERIAL id unlikely to exist yet."""
    return f"{random.randint(1901, 2000)}-{random.randint(10**7, 10**8 - 1)}"


async def _check(name: str, fn: Callable[[], Awaitable[None]]) -> CheckResult:
    try:
        await fn()
    except (UnexpectedResponseError, httpx.HTTPError, KeyError, ValueError) as e:
        logger.warning(
            "check.failed",
            extra={"event": "check_failed", "check": name, "error": str(e)},
        )
        return CheckResult(name=name, ok=False, detail=str(e))
    return CheckResult(name=name, ok=True)


async def run_checks(client: httpx.AsyncClient, client_id: str) -> list[CheckResult]:
    """Run every check in order against an already-healthy service."""
    created: list[dict] = []

    async def create() -> None:
        created.extend(await create_folders(client, client_id))

    async def read_back() -> None:
        if not created:
            raise UnexpectedResponseError("nothing was created to read back")
        found = await get_folders(client, client_id)
        expected = [(f["id"], f["topLevelFolder"]) for f in created]
        actual = [(f["id"], f["topLevelFolder"]) for f in found]
        if actual != expected:
            raise UnexpectedResponseError(f"read back {actual}, expected {expected}")

    async def duplicate() -> None:
        await expect_error(
            client, "POST", "/folders", 400, "already_exists", json={"clientId": client_id}
        )

    async def invalid() -> None:
        await expect_error(client, "GET", "/folders/ABC", 400, "invalid_client_id")

    return [
        await _check("create", create),
        await _check("read_back", read_back),
        await _check("duplicate_rejected", duplicate),
        await _check("invalid_rejected", invalid),
    ]


def summarize(client_id: str, results: list[CheckResult]) -> tuple[dict, int]:
    """Compute summary dict and an exit code from check results."""
    failures = [{"check": r.name, "detail": r.detail} for r in results if not r.ok]
    summary = {
        "component": "runner",
        "event": "summary",
        "client_id": client_id,
        "checks": len(results),
        "passed": len(results) - len(failures),
        "failures": failures,
    }
    exit_code = 0 if results and not failures else 1
    return summary, exit_code


async def run_smoke(*, base_url: str, client_id: str | None = None, timeout_s: float = 20.0) -> int:
    client_id = client_id or random_client_id()
    async with httpx.AsyncClient(base_url=base_url, timeout=10.0) as client:
        await wait_for_health(client, timeout_s)
        results = await run_checks(client, client_id)
    summary, exit_code = summarize(client_id, results)
    logger.info("runner.summary", extra=summary)
    return exit_code


def main(argv: list[str] | None = None) -> None:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    try:
        code = asyncio.run(
            run_smoke(base_url=args.base_url, client_id=args.client_id, timeout_s=args.timeout)
        )
    except SmokeError as e:
        logger.error("runner.aborted", extra={"event": "runner_aborted", "error": str(e)})
        code = 1
    raise SystemExit(code)


if __name__ == "__main__":
    main()
