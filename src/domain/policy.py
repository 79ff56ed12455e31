"""Row admission rules per computation.

Each computation in the aggregation engine excludes malformed rows on its own
terms. The rules live here in one table so the asymmetry stays visible:
a match with a garbled series score still counts towards tracked teams and
team performance, and a map with garbled round scores still counts towards
pick frequency and the percentage denominator of its map.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from enum import Enum
from typing import Any

from domain.common import MapRecord, MatchRecord


class Computation(str, Enum):
    """Aggregates that apply their own row admission rule."""

    TRACKED_TEAMS = "tracked_teams"
    PICK_PER_MAP = "pick_per_map"
    BO_DISTRIBUTION = "bo_distribution"
    MAP_VOLATILITY = "map_volatility"
    MAP_VOLATILITY_DENOMINATOR = "map_volatility_denominator"
    TEAM_PERFORMANCE = "team_performance"


def as_number(value: Any) -> float | None:
    """Return a finite float for numeric values and numeric strings, else None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def as_series_score(value: Any) -> int | None:
    number = as_number(value)
    if number is None or number < 0 or not number.is_integer():
        return None
    return int(number)


def has_series_scores(match: MatchRecord) -> bool:
    return (
        as_series_score(match.team1_score_bo) is not None
        and as_series_score(match.team2_score_bo) is not None
    )


def has_round_scores(map_row: MapRecord) -> bool:
    return as_number(map_row.map_winner_score) is not None and as_number(map_row.map_loser_score) is not None


def _always(_row: Any) -> bool:
    return True


MATCH_ROW_POLICY: dict[Computation, Callable[[MatchRecord], bool]] = {
    Computation.TRACKED_TEAMS: _always,
    Computation.BO_DISTRIBUTION: has_series_scores,
    Computation.TEAM_PERFORMANCE: _always,
}

MAP_ROW_POLICY: dict[Computation, Callable[[MapRecord], bool]] = {
    Computation.PICK_PER_MAP: _always,
    Computation.MAP_VOLATILITY: has_round_scores,
    Computation.MAP_VOLATILITY_DENOMINATOR: _always,
    Computation.TEAM_PERFORMANCE: _always,
}


def admits_match(computation: Computation, match: MatchRecord) -> bool:
    return MATCH_ROW_POLICY[computation](match)


def admits_map(computation: Computation, map_row: MapRecord) -> bool:
    return MAP_ROW_POLICY[computation](map_row)


__all__ = [
    "Computation",
    "MAP_ROW_POLICY",
    "MATCH_ROW_POLICY",
    "admits_map",
    "admits_match",
    "as_number",
    "as_series_score",
    "has_round_scores",
    "has_series_scores",
]
