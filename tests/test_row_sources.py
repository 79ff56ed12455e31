"""Tests for CSV and JSON row sources."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from domain.aggregation import compute_statistics
from repositories.csv_source import load_maps_csv, load_matches_csv
from repositories.rankings import load_ranking_entries

MATCH_HEADER = (
    "match_id,start_date,tier,team1_id,team1_name,team1_score_bo,"
    "team2_id,team2_name,team2_score_bo,winner_team_id,winner_name,loser_team_id,loser_name,bo_type"
)
MAP_HEADER = (
    "match_id,map_id,map_number,map_name,rounds_count,team1_name,team2_name,"
    "map_winner_name,map_winner_score,map_loser_name,map_loser_score"
)


def test_load_matches_csv_parses_types(tmp_path: Path) -> None:
    path = tmp_path / "matches.csv"
    path.write_text(
        "\n".join(
            [
                MATCH_HEADER,
                "1,2025-11-01 12:00:00,s,10,Alpha,2,20,Beta,1,10,Alpha,20,Beta,3",
                "2,2025-11-02 12:00:00,s,10,Alpha,-,20,Beta,1,10,Alpha,20,Beta,3",
                "x,2025-11-03 12:00:00,s,10,Alpha,2,20,Beta,0,10,Alpha,20,Beta,3",
                "3.0,,a,30,Gamma,0,40,Delta,2,40,Delta,30,Gamma,",
            ]
        )
        + "\n"
    )

    matches = load_matches_csv(path)

    assert [match.match_id for match in matches] == [1, 2, 3]
    first = matches[0]
    assert first.start_date == "2025-11-01 12:00:00"
    assert first.team1_id == 10
    assert first.team1_score_bo == 2
    assert first.winner_name == "Alpha"
    assert first.bo_type == 3
    assert matches[1].team1_score_bo == "-"
    assert matches[2].start_date is None
    assert matches[2].bo_type is None


def test_load_maps_csv_parses_types(tmp_path: Path) -> None:
    path = tmp_path / "maps.csv"
    path.write_text(
        "\n".join(
            [
                MAP_HEADER,
                "1,501,1,Mirage,29,Alpha,Beta,Alpha,16,Beta,13",
                "1,502,2,,20,Alpha,Beta,Beta,13,Alpha,7",
                "1,503,3,Nuke,,Alpha,Beta,Alpha,13,Beta,",
                ",504,1,Nuke,20,Alpha,Beta,Alpha,13,Beta,7",
            ]
        )
        + "\n"
    )

    maps = load_maps_csv(path)

    assert len(maps) == 3
    assert maps[0].map_winner_score == 16
    assert maps[0].rounds_count == 29
    assert maps[1].map_name is None
    assert maps[2].map_loser_score is None


def test_csv_rows_flow_through_the_engine(tmp_path: Path) -> None:
    matches_path = tmp_path / "matches.csv"
    maps_path = tmp_path / "maps.csv"
    matches_path.write_text(
        MATCH_HEADER + "\n" + "1,2025-11-01 12:00:00,s,10,Alpha,2,20,Beta,0,10,Alpha,20,Beta,3\n"
    )
    maps_path.write_text(
        MAP_HEADER
        + "\n"
        + "1,501,1,Mirage,20,Alpha,Beta,Alpha,16,Beta,4\n"
        + "1,502,2,,20,Alpha,Beta,Alpha,13,Beta,7\n"
    )

    result = compute_statistics(load_matches_csv(matches_path), load_maps_csv(maps_path))

    assert result.total_maps == 1
    assert result.map_stats[0].avg_diff == pytest.approx(12.0)


def test_load_ranking_entries_sorts_and_skips_invalid(tmp_path: Path) -> None:
    path = tmp_path / "rankings.json"
    path.write_text(
        json.dumps(
            {
                "teams": [
                    {"rank": 2, "name": " MOUZ "},
                    {"rank": 1, "name": "Vitality"},
                    {"rank": "3", "name": "Spirit"},
                    {"rank": 4},
                    "FaZe",
                    {"rank": 5, "name": ""},
                    {"rank": 6, "name": "Aurora"},
                ]
            }
        )
    )

    entries = load_ranking_entries(path)

    assert [(entry.rank, entry.name) for entry in entries] == [(1, "Vitality"), (2, "MOUZ"), (6, "Aurora")]
    assert [entry.name for entry in load_ranking_entries(path, top_n=2)] == ["Vitality", "MOUZ"]


def test_load_ranking_entries_requires_teams_list(tmp_path: Path) -> None:
    path = tmp_path / "rankings.json"
    path.write_text(json.dumps({"teams": {"rank": 1}}))

    with pytest.raises(ValueError, match="valid 'teams' list"):
        load_ranking_entries(path)
