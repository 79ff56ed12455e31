"""Shared row and result types for map statistics."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


class InvalidInputError(TypeError):
    """Raised when a caller hands the engine something that is not a row set."""


@dataclass(frozen=True)
class MatchRecord:
    """One completed series between two teams."""

    match_id: int
    start_date: str | datetime | None
    tier: str | None
    team1_id: int | None
    team1_name: str | None
    team1_score_bo: Any
    team2_id: int | None
    team2_name: str | None
    team2_score_bo: Any
    winner_team_id: int | None
    winner_name: str | None = None
    loser_team_id: int | None = None
    loser_name: str | None = None
    end_date: str | None = None
    tournament_id: int | None = None
    tournament_name: str | None = None
    stage_name: str | None = None
    bo_type: int | None = None
    tier_rank: int | None = None


@dataclass(frozen=True)
class MapRecord:
    """One map played inside a match."""

    match_id: int
    map_name: str | None
    map_winner_name: str | None
    map_winner_score: Any
    map_loser_name: str | None
    map_loser_score: Any
    team1_name: str | None = None
    team2_name: str | None = None
    map_id: int | None = None
    map_number: int | None = None
    rounds_count: int | None = None


@dataclass(frozen=True)
class RankingEntry:
    """Externally supplied team rank, used for ordering only."""

    rank: int
    name: str


@dataclass(frozen=True)
class PickCount:
    map_name: str
    count: int


@dataclass(frozen=True)
class BoResult:
    label: str
    count: int


@dataclass(frozen=True)
class AggregatedMapStat:
    """Round-score volatility for one map name."""

    map_name: str
    matches: int
    avg_diff: float
    close_pct: float
    stomp_pct: float
    ot_pct: float
    valid_rows: int
    close_count: int
    stomp_count: int
    overtime_count: int


@dataclass(frozen=True)
class TeamPerformance:
    team_name: str
    team_id: int | None
    best_map: str
    best_map_matches: int
    best_map_wins: int
    best_map_win_rate: float
    best_map_win_rate_label: str
    total_matches: int
    matches_won: int


@dataclass(frozen=True)
class RankedTeam:
    """A team performance tagged with the rank it is displayed under."""

    rank: int
    performance: TeamPerformance
    source: str


@dataclass(frozen=True)
class StatisticsResult:
    total_matches: int
    total_maps: int
    tracked_teams: int
    pick_per_map: tuple[PickCount, ...]
    bo_results: tuple[BoResult, ...]
    map_stats: tuple[AggregatedMapStat, ...]
    team_performances: tuple[TeamPerformance, ...]
    top_teams: tuple[RankedTeam, ...]

    @property
    def has_data(self) -> bool:
        return self.total_matches > 0


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
]
