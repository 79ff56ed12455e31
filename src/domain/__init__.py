"""Windowed match/map statistics."""

from domain.aggregation import compute_statistics
from domain.common import (
    AggregatedMapStat,
    BoResult,
    InvalidInputError,
    MapRecord,
    MatchRecord,
    PickCount,
    RankedTeam,
    RankingEntry,
    StatisticsResult,
    TeamPerformance,
)
from domain.pipeline import WindowReport, build_window_report
from domain.ranking import resolve_top_teams
from domain.window import TimeWindow, select_window

__all__ = [
    "AggregatedMapStat",
    "BoResult",
    "InvalidInputError",
    "MapRecord",
    "MatchRecord",
    "PickCount",
    "RankedTeam",
    "RankingEntry",
    "StatisticsResult",
    "TeamPerformance",
    "TimeWindow",
    "WindowReport",
    "build_window_report",
    "compute_statistics",
    "resolve_top_teams",
    "select_window",
]
