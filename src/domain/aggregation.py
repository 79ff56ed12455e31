"""Windowed match/map aggregation.

``compute_statistics`` is pure: it never mutates its inputs, keeps no state
between calls and returns tuples of frozen records, so two calls on the same
rows compare equal.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from domain.common import (
    AggregatedMapStat,
    BoResult,
    InvalidInputError,
    MapRecord,
    MatchRecord,
    PickCount,
    RankingEntry,
    StatisticsResult,
    TeamPerformance,
)
from domain.ingest import usable_maps
from domain.join import JoinedMap, build_match_index, join_maps
from domain.policy import Computation, admits_map, admits_match, as_number, as_series_score
from domain.ranking import resolve_top_teams

CLOSE_DIFF_MAX = 2
STOMP_DIFF_MIN = 6
# MR12: regulation ends at 13 round wins; overtime starts from 12-12.
REGULATION_WIN_ROUNDS = 13
OVERTIME_START_ROUNDS = REGULATION_WIN_ROUNDS - 1
NO_WINS_LABEL = "No wins"


@dataclass
class _MapTally:
    played: int = 0
    wins: int = 0


@dataclass
class _TeamRows:
    team_id: int | None
    matches: list[MatchRecord] = field(default_factory=list)
    maps: list[JoinedMap] = field(default_factory=list)


def _as_rows(rows: object, row_type: type, label: str) -> tuple:
    if isinstance(rows, (str, bytes)) or not isinstance(rows, Iterable):
        raise InvalidInputError(f"{label} must be an iterable of {row_type.__name__}")
    checked = tuple(rows)
    for row in checked:
        if not isinstance(row, row_type):
            raise InvalidInputError(f"expected {row_type.__name__} in {label}, got {type(row).__name__}")
    return checked


def _team_names(match: MatchRecord) -> list[str]:
    return [name for name in (match.team1_name, match.team2_name) if isinstance(name, str) and name]


def count_tracked_teams(matches: Sequence[MatchRecord]) -> int:
    names: set[str] = set()
    for match in matches:
        if admits_match(Computation.TRACKED_TEAMS, match):
            names.update(_team_names(match))
    return len(names)


def count_picks_per_map(joined: Sequence[JoinedMap]) -> tuple[PickCount, ...]:
    """Map rows per map name, most picked first; ties keep first-seen order."""
    counts: dict[str, int] = {}
    for row in joined:
        if admits_map(Computation.PICK_PER_MAP, row.map):
            counts[row.map.map_name] = counts.get(row.map.map_name, 0) + 1
    ordered = sorted(counts.items(), key=lambda item: -item[1])
    return tuple(PickCount(map_name=map_name, count=count) for map_name, count in ordered)


def bo_label(team1_score: int, team2_score: int) -> str:
    return f"{max(team1_score, team2_score)}-{min(team1_score, team2_score)}"


def count_bo_results(matches: Sequence[MatchRecord]) -> tuple[BoResult, ...]:
    """Series score distribution (``"2-1"``, ``"2-0"`` ...) in label order."""
    counts: Counter[str] = Counter()
    for match in matches:
        if not admits_match(Computation.BO_DISTRIBUTION, match):
            continue
        team1_score = as_series_score(match.team1_score_bo)
        team2_score = as_series_score(match.team2_score_bo)
        counts[bo_label(team1_score, team2_score)] += 1
    return tuple(BoResult(label=label, count=counts[label]) for label in sorted(counts))


def _map_volatility(map_name: str, rows: list[MapRecord]) -> AggregatedMapStat:
    diffs: list[float] = []
    close_count = 0
    stomp_count = 0
    overtime_count = 0

    for row in rows:
        if not admits_map(Computation.MAP_VOLATILITY, row):
            continue
        winner_score = as_number(row.map_winner_score)
        loser_score = as_number(row.map_loser_score)
        diff = abs(winner_score - loser_score)
        diffs.append(diff)
        if diff <= CLOSE_DIFF_MAX:
            close_count += 1
        if diff >= STOMP_DIFF_MIN:
            stomp_count += 1
        if winner_score > REGULATION_WIN_ROUNDS and loser_score >= OVERTIME_START_ROUNDS:
            overtime_count += 1

    total_rows = sum(1 for row in rows if admits_map(Computation.MAP_VOLATILITY_DENOMINATOR, row)) or 1
    return AggregatedMapStat(
        map_name=map_name,
        matches=total_rows,
        avg_diff=sum(diffs) / (len(diffs) or 1),
        close_pct=close_count / total_rows * 100.0,
        stomp_pct=stomp_count / total_rows * 100.0,
        ot_pct=overtime_count / total_rows * 100.0,
        valid_rows=len(diffs),
        close_count=close_count,
        stomp_count=stomp_count,
        overtime_count=overtime_count,
    )


def compute_map_stats(joined: Sequence[JoinedMap]) -> tuple[AggregatedMapStat, ...]:
    """Round differential, close/stomp/overtime shares per map, most played first.

    The average differential is taken over rows with numeric round scores,
    while the percentages divide by every row of the map.
    """
    by_map: dict[str, list[MapRecord]] = {}
    for row in joined:
        by_map.setdefault(row.map.map_name, []).append(row.map)

    stats = [_map_volatility(map_name, rows) for map_name, rows in by_map.items()]
    stats.sort(key=lambda stat: -stat.matches)
    return tuple(stats)


def _first_seen_team_ids(matches: Sequence[MatchRecord]) -> dict[str, int | None]:
    # A name later seen with another id keeps its first id.
    team_ids: dict[str, int | None] = {}
    for match in matches:
        for name, team_id in ((match.team1_name, match.team1_id), (match.team2_name, match.team2_id)):
            if isinstance(name, str) and name and name not in team_ids:
                team_ids[name] = team_id
    return team_ids


def _plays_in(match: MatchRecord, team_name: str, team_id: int | None) -> bool:
    if team_id is None:
        return team_name in (match.team1_name, match.team2_name)
    return team_id in (match.team1_id, match.team2_id)


def _won(match: MatchRecord, team_name: str, team_id: int | None) -> bool:
    if team_id is None:
        return match.winner_name == team_name
    return match.winner_team_id == team_id


def _won_map(map_row: MapRecord, team_name: str) -> bool:
    # Winner names can carry suffixes, so this is a containment check.
    winner_name = map_row.map_winner_name if isinstance(map_row.map_winner_name, str) else ""
    return team_name.casefold() in winner_name.casefold()


def win_rate_label(win_rate: float, *, matches_won: int, best_map_wins: int) -> str:
    if matches_won == 0 or best_map_wins == 0:
        return NO_WINS_LABEL
    return f"{win_rate * 100.0:.1f} %"


def _team_performance(team_name: str, rows: _TeamRows) -> TeamPerformance | None:
    if not rows.matches or not rows.maps:
        return None

    tallies: dict[str, _MapTally] = {}
    for joined in rows.maps:
        tally = tallies.setdefault(joined.map.map_name, _MapTally())
        tally.played += 1
        if _won_map(joined.map, team_name):
            tally.wins += 1

    best_map = ""
    best_played = 0
    best_wins = 0
    best_rate = 0.0
    for map_name, tally in tallies.items():
        if tally.played == 0:
            continue
        rate = tally.wins / tally.played
        if rate > best_rate or (rate == best_rate and tally.played > best_played):
            best_map = map_name
            best_played = tally.played
            best_wins = tally.wins
            best_rate = rate

    matches_won = sum(1 for match in rows.matches if _won(match, team_name, rows.team_id))
    return TeamPerformance(
        team_name=team_name,
        team_id=rows.team_id,
        best_map=best_map,
        best_map_matches=best_played,
        best_map_wins=best_wins,
        best_map_win_rate=best_rate,
        best_map_win_rate_label=win_rate_label(
            best_rate,
            matches_won=matches_won,
            best_map_wins=best_wins,
        ),
        total_matches=len(rows.matches),
        matches_won=matches_won,
    )


def compute_team_performances(
    matches: Sequence[MatchRecord],
    joined: Sequence[JoinedMap],
) -> tuple[TeamPerformance, ...]:
    """Per-team totals and best map, in first-seen team order.

    Teams without any map row in ``joined`` are left out.
    """
    team_rows = {name: _TeamRows(team_id=team_id) for name, team_id in _first_seen_team_ids(matches).items()}

    for match in matches:
        if not admits_match(Computation.TEAM_PERFORMANCE, match):
            continue
        for name, rows in team_rows.items():
            if _plays_in(match, name, rows.team_id):
                rows.matches.append(match)

    for row in joined:
        if not admits_map(Computation.TEAM_PERFORMANCE, row.map):
            continue
        for name in {row.map.team1_name, row.map.team2_name}:
            rows = team_rows.get(name) if isinstance(name, str) else None
            if rows is not None:
                rows.maps.append(row)

    performances: list[TeamPerformance] = []
    for name, rows in team_rows.items():
        performance = _team_performance(name, rows)
        if performance is not None:
            performances.append(performance)
    return tuple(performances)


def compute_statistics(
    matches: Sequence[MatchRecord],
    maps: Sequence[MapRecord],
    rankings: Sequence[RankingEntry] | None = None,
) -> StatisticsResult:
    """Aggregate one window's matches and maps.

    Map rows without a name or winner score, and map rows whose match is not
    in ``matches``, are dropped before any aggregate is computed.
    """
    matches = _as_rows(matches, MatchRecord, "matches")
    maps = _as_rows(maps, MapRecord, "maps")
    if rankings is not None:
        rankings = _as_rows(rankings, RankingEntry, "rankings")

    joined = join_maps(build_match_index(matches), usable_maps(maps))
    performances = compute_team_performances(matches, joined)

    return StatisticsResult(
        total_matches=len(matches),
        total_maps=len(joined),
        tracked_teams=count_tracked_teams(matches),
        pick_per_map=count_picks_per_map(joined),
        bo_results=count_bo_results(matches),
        map_stats=compute_map_stats(joined),
        team_performances=performances,
        top_teams=resolve_top_teams(performances, rankings),
    )


__all__ = [
    "CLOSE_DIFF_MAX",
    "NO_WINS_LABEL",
    "OVERTIME_START_ROUNDS",
    "REGULATION_WIN_ROUNDS",
    "STOMP_DIFF_MIN",
    "bo_label",
    "compute_map_stats",
    "compute_statistics",
    "compute_team_performances",
    "count_bo_results",
    "count_picks_per_map",
    "count_tracked_teams",
    "win_rate_label",
]
