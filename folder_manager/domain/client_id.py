from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

__all__ = [
    "ParsedClientId",
    "parse_client_id",
    "format_client_id",
]

# SSSSS(YY)
_SERIAL_YEAR_RE = re.compile(r"([0-9]{5,})\(([0-9]{2})\)")
# YYYY-SSSSS
_YEAR_SERIAL_RE = re.compile(r"([0-9]{4})-([0-9]{5,})")

# Exclusive bounds: only 20th-century years are accepted.
_MIN_YEAR = 1900
_MAX_YEAR = 2001


@dataclass(frozen=True)
class ParsedClientId:
    """A validated client identifier.

    `year` is always four digits in 1901..2000; `serial` is at least five digits.
    """

    year: str
    serial: str


def _parse_serial_year(raw: str) -> ParsedClientId | None:
    m = _SERIAL_YEAR_RE.search(raw)
    if m is None:
        return None
    serial, yy = m.groups()
    # "00" is the only short form that lands in 2000
    year = f"20{yy}" if yy == "00" else f"19{yy}"
    return ParsedClientId(year=year, serial=serial)


def _parse_year_serial(raw: str) -> ParsedClientId | None:
    m = _YEAR_SERIAL_RE.search(raw)
    if m is None:
        return None
    year, serial = m.groups()
    if not (_MIN_YEAR < int(year) < _MAX_YEAR):
        return None
    return ParsedClientId(year=year, serial=serial)


def parse_client_id(raw: str | None) -> ParsedClientId | None:
    """Parse a raw client identifier.

    Accepted forms, tried in order:
      SERIAL(YY)   e.g. "12345(67)" -> 1967/12345, "12345(00)" -> 2000/12345
      YYYY-SERIAL  e.g. "1967-12345" -> 1967/12345 (year must be 1901..2000)

    The first occurrence of a form anywhere in the string counts, so
    "1967-12345(67)" resolves through SERIAL(YY). Returns None when neither
    form occurs; an invalid id is a user error, not an exceptional condition.
    """
    if not isinstance(raw, str) or not raw:
        return None
    return _parse_serial_year(raw) or _parse_year_serial(raw)


def format_client_id(
    parsed: ParsedClientId, style: Literal["serial_year", "year_serial"] = "year_serial"
) -> str:
    """Render a parsed id back into one of the accepted syntaxes."""
    if style == "serial_year":
        return f"{parsed.serial}({parsed.year[2:]})"
    if style == "year_serial":
        return f"{parsed.year}-{parsed.serial}"
    raise ValueError(f"unknown client id style: {style!r}")
