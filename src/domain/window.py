"""Trailing time-window selection over match records."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta

from domain.common import InvalidInputError, MatchRecord

MIN_LOOKBACK_DAYS = 7
MIN_SPAN_DAYS = 1


@dataclass(frozen=True)
class TimeWindow:
    """Matches inside ``[start, end]`` plus the lookback actually applied.

    ``effective_days`` can differ from ``requested_days`` because the request
    is clamped to ``[min(7, span_days), span_days]``. A window over a dataset
    without any parseable start date is empty: ``start``/``end`` are ``None``
    and ``effective_days`` is 0.
    """

    requested_days: int
    effective_days: int
    span_days: int
    start: datetime | None
    end: datetime | None
    matches: tuple[MatchRecord, ...]

    @property
    def has_data(self) -> bool:
        return bool(self.matches)


def parse_start_date(value: object) -> datetime | None:
    """Parse a match start date into a naive UTC datetime, or None."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(UTC).replace(tzinfo=None)
    return parsed


def clamp_lookback(requested_days: int, span_days: int) -> int:
    lower = min(MIN_LOOKBACK_DAYS, span_days)
    return max(lower, min(requested_days, span_days))


def select_window(matches: Iterable[MatchRecord], lookback_days: int) -> TimeWindow:
    """Select matches within ``lookback_days`` of the most recent match."""
    if isinstance(lookback_days, bool) or not isinstance(lookback_days, int):
        raise InvalidInputError(f"lookback_days must be an int, got {lookback_days!r}")

    dated: list[tuple[MatchRecord, datetime]] = []
    for match in matches:
        if not isinstance(match, MatchRecord):
            raise InvalidInputError(f"expected MatchRecord, got {type(match).__name__}")
        start_time = parse_start_date(match.start_date)
        if start_time is None:
            continue
        dated.append((match, start_time))

    if not dated:
        return TimeWindow(
            requested_days=lookback_days,
            effective_days=0,
            span_days=0,
            start=None,
            end=None,
            matches=(),
        )

    as_of = max(start_time for _, start_time in dated)
    earliest = min(start_time for _, start_time in dated)
    span_days = max(MIN_SPAN_DAYS, math.ceil((as_of - earliest).total_seconds() / 86_400.0))
    effective_days = clamp_lookback(lookback_days, span_days)
    window_start = as_of - timedelta(days=effective_days)

    return TimeWindow(
        requested_days=lookback_days,
        effective_days=effective_days,
        span_days=span_days,
        start=window_start,
        end=as_of,
        matches=tuple(match for match, start_time in dated if window_start <= start_time <= as_of),
    )


__all__ = [
    "MIN_LOOKBACK_DAYS",
    "TimeWindow",
    "clamp_lookback",
    "parse_start_date",
    "select_window",
]
