"""Relative duration expressions ("15m", "1h", "7 days", "2 hours ago")."""

import math
import re
from datetime import datetime, timedelta

MINUTE = 60
HOUR = MINUTE * 60
DAY = HOUR * 24
WEEK = DAY * 7
YEAR = DAY * 365.25

_DURATION_RE = re.compile(
    r"^(\+|-)? ?(\d+|\d+\.\d+) ?"
    r"(seconds?|secs?|s|minutes?|mins?|m|hours?|hrs?|h|days?|d|weeks?|w|years?|yrs?|y)"
    r"(?: (ago|from now))?$",
    re.IGNORECASE,
)


def _unit_seconds(unit: str) -> float:
    unit = unit.lower()
    if unit in ("s", "sec", "secs", "second", "seconds"):
        return 1
    if unit in ("m", "min", "mins", "minute", "minutes"):
        return MINUTE
    if unit in ("h", "hr", "hrs", "hour", "hours"):
        return HOUR
    if unit in ("d", "day", "days"):
        return DAY
    if unit in ("w", "week", "weeks"):
        return WEEK
    return YEAR


def _round_half_up(seconds: float) -> int:
    # built-in round() rounds half to even
    return math.floor(seconds + 0.5)


def parse_duration(expr: str | timedelta) -> int:
    """Convert a duration expression to whole seconds.

    A leading ``-`` or a trailing ``ago`` makes the result negative. Mixing a
    sign with ``ago``/``from now`` is rejected.

    Raises ValueError on anything that does not match the grammar.
    """
    if isinstance(expr, timedelta):
        return _round_half_up(expr.total_seconds())
    if not isinstance(expr, str):
        raise ValueError(f"Invalid duration type: {type(expr).__name__}")

    match = _DURATION_RE.fullmatch(expr)
    if match is None:
        raise ValueError(f"Invalid duration expression: {expr!r}")
    sign, value, unit, suffix = match.groups()
    if sign and suffix:
        raise ValueError(f"Invalid duration expression: {expr!r}")

    seconds = _round_half_up(float(value) * _unit_seconds(unit))
    if sign == "-" or (suffix and suffix.lower() == "ago"):
        return -seconds
    return seconds


def resolve_expiration(expiration: str | timedelta | int, now: datetime) -> int:
    """Return the absolute ``exp`` NumericDate for ``expiration``.

    Strings and timedeltas are relative to ``now``; an int is already an
    absolute NumericDate.
    """
    if isinstance(expiration, bool):
        raise ValueError("Invalid expiration type: bool")
    if isinstance(expiration, int):
        return expiration
    return int(now.timestamp()) + parse_duration(expiration)
