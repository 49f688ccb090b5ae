from __future__ import annotations

import re

DEFAULT_DURATION_MINUTES = 60

_LEADING_INT_RE = re.compile(r"^\s*(\d+)")


def parse_duration_minutes(value: str | int | None, default: int = DEFAULT_DURATION_MINUTES) -> int:
    """
    Parse a free-text duration such as "90 minutes" into whole minutes.

    Only the leading integer token is read. Anything unparsable, or a
    non-positive result, falls back to `default`.
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value if value > 0 else default
    if not value:
        return default
    match = _LEADING_INT_RE.match(value)
    if not match:
        return default
    minutes = int(match.group(1))
    return minutes if minutes > 0 else default
