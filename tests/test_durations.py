from datetime import datetime, timedelta, timezone

import pytest

from tokenauth.auth.durations import parse_duration, resolve_expiration

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "expr, seconds",
    [
        ("1s", 1),
        ("30 seconds", 30),
        ("15m", 900),
        ("15 mins", 900),
        ("1h", 3600),
        ("2 hrs", 7200),
        ("1.5h", 5400),
        ("7d", 604800),
        ("1 week", 604800),
        ("1y", 31557600),
        ("15M", 900),
        ("+10m", 600),
        ("2 hours from now", 7200),
        ("0.5s", 1),
        ("2.5s", 3),
        ("0.5 minutes ago", -30),
    ],
)
def test_parse_duration(expr, seconds):
    assert parse_duration(expr) == seconds


def test_negative_durations():
    assert parse_duration("-5m") == -300
    assert parse_duration("5 minutes ago") == -300


@pytest.mark.parametrize("expr", ["", "15", "m", "15 fortnights", "1.h", "-5m ago", "+1h from now", "abc", " 15m ", "15m ", " 15m", "15m\n"])
def test_invalid_durations(expr):
    with pytest.raises(ValueError):
        parse_duration(expr)


def test_timedelta_passthrough():
    assert parse_duration(timedelta(minutes=2)) == 120
    assert parse_duration(timedelta(seconds=2.5)) == 3


def test_non_string_rejected():
    with pytest.raises(ValueError):
        parse_duration(900)


def test_resolve_relative_expiration():
    assert resolve_expiration("15m", NOW) == int(NOW.timestamp()) + 900
    assert resolve_expiration(timedelta(hours=1), NOW) == int(NOW.timestamp()) + 3600


def test_resolve_absolute_expiration():
    assert resolve_expiration(1800000000, NOW) == 1800000000


def test_resolve_rejects_bool():
    with pytest.raises(ValueError):
        resolve_expiration(True, NOW)
