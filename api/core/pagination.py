"""
Query-string pagination for list endpoints.

`?limit=&offset=` are optional but travel together: either no parameters at
all, or both present and both base-10 non-negative integers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .errors import MissingParametersError, ParseIntError

LIMIT_KEY = "limit"
OFFSET_KEY = "offset"


@dataclass(frozen=True)
class Pagination:
    # None means no upper bound (SQL `LIMIT NULL`).
    limit: int | None = None
    offset: int = 0


def _parse_non_negative(field: str, raw: str) -> int:
    # int() would also accept " 1", "+1", "1_000" and non-ASCII digits.
    if not (raw.isascii() and raw.isdigit()):
        raise ParseIntError(field, ValueError(f"invalid digit found in {raw!r}"))
    try:
        return int(raw, 10)
    except ValueError as exc:
        raise ParseIntError(field, exc) from exc


def extract_pagination(params: Mapping[str, str]) -> Pagination:
    if not params:
        return Pagination()

    if LIMIT_KEY not in params or OFFSET_KEY not in params:
        raise MissingParametersError()

    return Pagination(
        limit=_parse_non_negative(LIMIT_KEY, params[LIMIT_KEY]),
        offset=_parse_non_negative(OFFSET_KEY, params[OFFSET_KEY]),
    )
