"""Start/end arguments for download mode.

The API resolves the expressions itself; here they are only checked and
typed so a bad argument fails before any request is made.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from enum import Enum

from .errors import InvalidTimeExpression

_RELATIVE = re.compile(r"-(?P<amount>[0-9]{1,3})(?P<unit>[a-z])")
_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

NOW = "now"


class TimeKind(str, Enum):
    RELATIVE = "relative"
    NOW = "now"
    DATE = "date"


@dataclass(frozen=True)
class TimeExpression:
    raw: str
    kind: TimeKind
    amount: int | None = None
    unit: str | None = None
    day: date | None = None

    def __str__(self) -> str:
        return self.raw


def parse_time_expression(text: str) -> TimeExpression:
    """Parse ``-1h``, ``-3d``, ``now`` or ``2022-09-01``; the whole string must match."""
    if text == NOW:
        return TimeExpression(raw=text, kind=TimeKind.NOW)

    m = _RELATIVE.fullmatch(text)
    if m:
        return TimeExpression(raw=text, kind=TimeKind.RELATIVE, amount=int(m.group("amount")), unit=m.group("unit"))

    if _DATE.fullmatch(text):
        try:
            day = date.fromisoformat(text)
        except ValueError:
            raise InvalidTimeExpression(f"Invalid input: {text} (not a calendar date)")
        return TimeExpression(raw=text, kind=TimeKind.DATE, day=day)

    raise InvalidTimeExpression(f"Invalid input: {text}")


@dataclass(frozen=True)
class TimeRange:
    start: TimeExpression
    end: TimeExpression
