from __future__ import annotations

"""Human-readable duration parsing.

Accepted format is a sequence of `<integer><unit>` pieces, optionally
separated by whitespace:

    2h10min   -> 2 hours 10 minutes
    1h 30m    -> 1 hour 30 minutes
    90s       -> 90 seconds
    1week 2d  -> 9 days
"""

import re
from datetime import timedelta

# Unit name -> length in seconds. A month is 30.44 days and a year is 365.25 days.
_UNIT_SECONDS: dict[str, float] = {}

_UNIT_ALIASES: list[tuple[tuple[str, ...], float]] = [
    (("nanos", "nsec", "ns"), 1e-9),
    (("usec", "us"), 1e-6),
    (("millis", "msec", "ms"), 1e-3),
    (("seconds", "second", "secs", "sec", "s"), 1.0),
    (("minutes", "minute", "mins", "min", "m"), 60.0),
    (("hours", "hour", "hrs", "hr", "h"), 3600.0),
    (("days", "day", "d"), 86400.0),
    (("weeks", "week", "w"), 604800.0),
    (("months", "month", "M"), 2_630_016.0),
    (("years", "year", "y"), 31_557_600.0),
]

for _aliases, _seconds in _UNIT_ALIASES:
    for _alias in _aliases:
        _UNIT_SECONDS[_alias] = _seconds

_PIECE = re.compile(r"\s*(\d+)\s*([A-Za-z]+)\s*")


class DurationError(ValueError):
    """Raised when a duration expression cannot be parsed."""


def parse_duration(text: str) -> timedelta:
    """Parse a duration expression such as "2h10min" into a timedelta.

    Raises:
        DurationError: on empty input, a number without unit,
            an unknown unit, a value too large for a timedelta,
            or any other unparsed text.
    """
    if not text or not text.strip():
        raise DurationError("value was empty")

    total_seconds = 0.0
    position = 0
    while position < len(text):
        match = _PIECE.match(text, position)
        if match is None:
            rest = text[position:].strip()
            if rest.isdigit():
                raise DurationError(f"time unit needed, for example {rest}sec or {rest}ms")
            raise DurationError(f"invalid duration near {rest!r}")

        number, unit = match.groups()
        unit_seconds = _UNIT_SECONDS.get(unit)
        if unit_seconds is None:
            raise DurationError(f"unknown time unit {unit!r}, supported units: ns, us, ms, sec, min, hours, days, weeks, months, years")

        try:
            total_seconds += int(number) * unit_seconds
        except (OverflowError, ValueError):
            # int() refuses very long digit strings; float() refuses huge ints.
            raise DurationError("duration is too large") from None
        position = match.end()

    try:
        return timedelta(seconds=total_seconds)
    except OverflowError:
        raise DurationError("duration is too large") from None
