from __future__ import annotations

from dataclasses import dataclass


@dataclass
class CheckResult:
    """Outcome of one smoke check."""

    name: str
    ok: bool
    detail: str = ""


class SmokeError(RuntimeError):
    """Raised when the smoke flow cannot proceed (e.g., health never ready)."""


class UnexpectedResponseError(SmokeError):
    """Raised when an endpoint answers with an unexpected status or body."""
