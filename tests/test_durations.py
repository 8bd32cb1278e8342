from datetime import timedelta

import pytest

from core.durations import DurationError, parse_duration


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("2h10min", timedelta(hours=2, minutes=10)),
        ("1h 30m", timedelta(hours=1, minutes=30)),
        ("90s", timedelta(seconds=90)),
        ("10 seconds", timedelta(seconds=10)),
        ("1week 2d", timedelta(days=9)),
        ("250ms", timedelta(milliseconds=250)),
        ("1M", timedelta(days=30.44)),
        ("1y", timedelta(days=365.25)),
        (" 5min ", timedelta(minutes=5)),
    ],
)
def test_parse_duration(text, expected) -> None:
    assert parse_duration(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "10", "2h10", "abc", "5 lightyears", "1.5h", "h"])
def test_parse_duration_rejects_malformed(text) -> None:
    with pytest.raises(DurationError):
        parse_duration(text)


def test_missing_unit_message() -> None:
    with pytest.raises(ValueError, match="time unit needed"):
        parse_duration("10")


@pytest.mark.parametrize("text", ["1" + "0" * 400 + "s", "100000000000y", "9" * 5000 + "ms"])
def test_parse_duration_rejects_too_large(text) -> None:
    with pytest.raises(DurationError, match="too large"):
        parse_duration(text)


def test_missing_unit_hint_uses_trailing_number() -> None:
    with pytest.raises(DurationError) as exc_info:
        parse_duration("2h10")

    message = str(exc_info.value)
    assert "10sec" in message
    assert "2h10sec" not in message
