"""Read match and map rows from delimited text exports."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Any

from domain.common import MapRecord, MatchRecord


def _text(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def _optional_int(value: str | None) -> int | None:
    text = _text(value)
    if text is None:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    if number.is_integer():
        return int(number)
    return None


def _score(value: str | None) -> Any:
    # Keep non-integer text so the engine can exclude it per computation.
    parsed = _optional_int(value)
    if parsed is not None:
        return parsed
    return _text(value)


def _read_rows(path: Path) -> list[dict[str, str]]:
    with path.open("r", encoding="utf-8", newline="") as file:
        return list(csv.DictReader(file))


def match_from_row(row: dict[str, str]) -> MatchRecord | None:
    match_id = _optional_int(row.get("match_id"))
    if match_id is None:
        return None
    return MatchRecord(
        match_id=match_id,
        start_date=_text(row.get("start_date")),
        tier=_text(row.get("tier")),
        team1_id=_optional_int(row.get("team1_id")),
        team1_name=_text(row.get("team1_name")),
        team1_score_bo=_score(row.get("team1_score_bo")),
        team2_id=_optional_int(row.get("team2_id")),
        team2_name=_text(row.get("team2_name")),
        team2_score_bo=_score(row.get("team2_score_bo")),
        winner_team_id=_optional_int(row.get("winner_team_id")),
        winner_name=_text(row.get("winner_name")),
        loser_team_id=_optional_int(row.get("loser_team_id")),
        loser_name=_text(row.get("loser_name")),
        end_date=_text(row.get("end_date")),
        tournament_id=_optional_int(row.get("tournament_id")),
        tournament_name=_text(row.get("tournament_name")),
        stage_name=_text(row.get("stage_name")),
        bo_type=_optional_int(row.get("bo_type")),
        tier_rank=_optional_int(row.get("tier_rank")),
    )


def map_from_row(row: dict[str, str]) -> MapRecord | None:
    match_id = _optional_int(row.get("match_id"))
    if match_id is None:
        return None
    return MapRecord(
        match_id=match_id,
        map_name=_text(row.get("map_name")),
        map_winner_name=_text(row.get("map_winner_name")),
        map_winner_score=_score(row.get("map_winner_score")),
        map_loser_name=_text(row.get("map_loser_name")),
        map_loser_score=_score(row.get("map_loser_score")),
        team1_name=_text(row.get("team1_name")),
        team2_name=_text(row.get("team2_name")),
        map_id=_optional_int(row.get("map_id")),
        map_number=_optional_int(row.get("map_number")),
        rounds_count=_optional_int(row.get("rounds_count")),
    )


def load_matches_csv(path: Path) -> list[MatchRecord]:
    """Load match rows; rows without an integer match_id are skipped."""
    matches: list[MatchRecord] = []
    for row in _read_rows(path):
        match = match_from_row(row)
        if match is not None:
            matches.append(match)
    return matches


def load_maps_csv(path: Path) -> list[MapRecord]:
    """Load map rows; rows without an integer match_id are skipped."""
    maps: list[MapRecord] = []
    for row in _read_rows(path):
        map_row = map_from_row(row)
        if map_row is not None:
            maps.append(map_row)
    return maps


__all__ = ["load_maps_csv", "load_matches_csv", "map_from_row", "match_from_row"]
