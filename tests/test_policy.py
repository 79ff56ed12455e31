"""Tests for per-computation row admission rules."""

from __future__ import annotations

import pytest

from domain.common import MapRecord, MatchRecord
from domain.ingest import filter_tier, usable_maps
from domain.policy import (
    MAP_ROW_POLICY,
    MATCH_ROW_POLICY,
    Computation,
    admits_map,
    admits_match,
    as_number,
    as_series_score,
)


def _match(score1: object, score2: object, tier: str | None = "s") -> MatchRecord:
    return MatchRecord(
        match_id=1,
        start_date="2025-11-01",
        tier=tier,
        team1_id=1,
        team1_name="Alpha",
        team1_score_bo=score1,
        team2_id=2,
        team2_name="Beta",
        team2_score_bo=score2,
        winner_team_id=1,
    )


def _map(map_name: str | None, winner_score: object, loser_score: object) -> MapRecord:
    return MapRecord(
        match_id=1,
        map_name=map_name,
        map_winner_name="Alpha",
        map_winner_score=winner_score,
        map_loser_name="Beta",
        map_loser_score=loser_score,
    )


@pytest.mark.parametrize(
    ("value", "expected"),
    [(13, 13.0), ("16", 16.0), (" 7 ", 7.0), (12.5, 12.5), ("abc", None), (None, None), (True, None), (float("nan"), None)],
)
def test_as_number(value: object, expected: float | None) -> None:
    assert as_number(value) == expected


@pytest.mark.parametrize(("value", "expected"), [(2, 2), ("1", 1), (2.0, 2), (1.5, None), (-1, None), ("x", None)])
def test_as_series_score(value: object, expected: int | None) -> None:
    assert as_series_score(value) == expected


def test_every_computation_has_a_rule() -> None:
    covered = set(MATCH_ROW_POLICY) | set(MAP_ROW_POLICY)
    assert covered == set(Computation)


def test_bad_series_score_only_excludes_bo_distribution() -> None:
    match = _match("forfeit", 0)

    assert admits_match(Computation.BO_DISTRIBUTION, match) is False
    assert admits_match(Computation.TRACKED_TEAMS, match) is True
    assert admits_match(Computation.TEAM_PERFORMANCE, match) is True


def test_bad_round_score_only_excludes_volatility_numerator() -> None:
    map_row = _map("Nuke", 13, "n/a")

    assert admits_map(Computation.MAP_VOLATILITY, map_row) is False
    assert admits_map(Computation.MAP_VOLATILITY_DENOMINATOR, map_row) is True
    assert admits_map(Computation.PICK_PER_MAP, map_row) is True


def test_usable_maps_requires_name_and_winner_score() -> None:
    rows = [_map("Nuke", 13, 4), _map(None, 13, 4), _map("", 13, 4), _map("Mirage", None, 4), _map("Mirage", " ", 4)]

    assert [row.map_name for row in usable_maps(rows)] == ["Nuke"]


def test_filter_tier_is_case_insensitive() -> None:
    matches = [_match(2, 0, "s"), _match(2, 0, "S"), _match(2, 0, "a"), _match(2, 0, None)]

    assert len(filter_tier(matches, "s")) == 2
    assert len(filter_tier(matches, None)) == 4
