"""Read match and map rows from the scraped HLTV database."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import (
    Column,
    DateTime,
    Integer,
    MetaData,
    String,
    Table,
    case,
    cast,
    func,
    or_,
    select,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from domain.common import MapRecord, MatchRecord

_metadata = MetaData()

_matches = Table(
    "matches",
    _metadata,
    Column("id", Integer, primary_key=True),
    Column("team1_id", Integer),
    Column("team2_id", Integer),
    Column("event_id", Integer),
    Column("format", String),
    Column("status", String),
    Column("date", DateTime(timezone=False)),
    Column("updated_at", DateTime(timezone=False)),
    Column("created_at", DateTime(timezone=False)),
)

_teams = Table(
    "teams",
    _metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String),
)

_events = Table(
    "events",
    _metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String),
    Column("tier", String),
)

_maps = Table(
    "maps",
    _metadata,
    Column("id", Integer, primary_key=True),
    Column("match_id", Integer),
    Column("map_name", String),
    Column("map_number", Integer),
    Column("winner_id", Integer),
    Column("score_team1", Integer),
    Column("score_team2", Integer),
)

_team1 = _teams.alias("team1")
_team2 = _teams.alias("team2")


def create_source_tables(engine: Engine) -> None:
    """Create the source tables if missing (local fixtures and tests)."""
    _metadata.create_all(engine)


def _event_time_expr():
    return func.coalesce(
        _matches.c.date,
        _matches.c.updated_at,
        _matches.c.created_at,
    ).label("event_time")


def _finished_map_conditions() -> list[Any]:
    return [
        cast(_matches.c.status, String) == "FINISHED",
        _maps.c.winner_id.is_not(None),
        or_(
            _maps.c.winner_id == _matches.c.team1_id,
            _maps.c.winner_id == _matches.c.team2_id,
        ),
    ]


def _bo_type(match_format: str | None) -> int | None:
    if not match_format:
        return None
    digits = "".join(char for char in match_format if char.isdigit())
    return int(digits) if digits else None


def fetch_match_records(session: Session) -> list[MatchRecord]:
    """Fetch finished matches with their series score, oldest first."""
    event_time = _event_time_expr()
    team1_maps_won = func.sum(case((_maps.c.winner_id == _matches.c.team1_id, 1), else_=0)).label(
        "team1_maps_won"
    )
    team2_maps_won = func.sum(case((_maps.c.winner_id == _matches.c.team2_id, 1), else_=0)).label(
        "team2_maps_won"
    )

    statement = (
        select(
            _matches.c.id.label("match_id"),
            event_time,
            _matches.c.event_id,
            cast(_matches.c.format, String).label("match_format"),
            _events.c.name.label("tournament_name"),
            _events.c.tier,
            _matches.c.team1_id,
            _team1.c.name.label("team1_name"),
            _matches.c.team2_id,
            _team2.c.name.label("team2_name"),
            team1_maps_won,
            team2_maps_won,
        )
        .select_from(
            _matches.join(_maps, _maps.c.match_id == _matches.c.id)
            .outerjoin(_events, _matches.c.event_id == _events.c.id)
            .outerjoin(_team1, _matches.c.team1_id == _team1.c.id)
            .outerjoin(_team2, _matches.c.team2_id == _team2.c.id)
        )
        .where(*_finished_map_conditions())
        .group_by(
            _matches.c.id,
            event_time,
            _matches.c.event_id,
            _matches.c.format,
            _events.c.name,
            _events.c.tier,
            _matches.c.team1_id,
            _team1.c.name,
            _matches.c.team2_id,
            _team2.c.name,
        )
        .order_by(event_time, _matches.c.id)
    )

    records: list[MatchRecord] = []
    for row in session.execute(statement).mappings().all():
        team1_score = int(row["team1_maps_won"] or 0)
        team2_score = int(row["team2_maps_won"] or 0)
        winner_id: int | None = None
        winner_name: str | None = None
        loser_id: int | None = None
        loser_name: str | None = None
        if team1_score > team2_score:
            winner_id, winner_name = row["team1_id"], row["team1_name"]
            loser_id, loser_name = row["team2_id"], row["team2_name"]
        elif team2_score > team1_score:
            winner_id, winner_name = row["team2_id"], row["team2_name"]
            loser_id, loser_name = row["team1_id"], row["team1_name"]

        event_time_value = row["event_time"]
        records.append(
            MatchRecord(
                match_id=int(row["match_id"]),
                start_date=event_time_value if isinstance(event_time_value, datetime) else None,
                tier=row["tier"],
                team1_id=row["team1_id"],
                team1_name=row["team1_name"],
                team1_score_bo=team1_score,
                team2_id=row["team2_id"],
                team2_name=row["team2_name"],
                team2_score_bo=team2_score,
                winner_team_id=winner_id,
                winner_name=winner_name,
                loser_team_id=loser_id,
                loser_name=loser_name,
                tournament_id=row["event_id"],
                tournament_name=row["tournament_name"],
                bo_type=_bo_type(row["match_format"]),
            )
        )
    return records


def fetch_map_records(session: Session) -> list[MapRecord]:
    """Fetch finished maps with winner/loser names and round scores."""
    event_time = _event_time_expr()
    statement = (
        select(
            _maps.c.id.label("map_id"),
            _maps.c.match_id,
            cast(_maps.c.map_name, String).label("map_name"),
            _maps.c.map_number,
            _maps.c.winner_id,
            _maps.c.score_team1,
            _maps.c.score_team2,
            _matches.c.team1_id,
            _team1.c.name.label("team1_name"),
            _team2.c.name.label("team2_name"),
        )
        .select_from(
            _maps.join(_matches, _maps.c.match_id == _matches.c.id)
            .outerjoin(_team1, _matches.c.team1_id == _team1.c.id)
            .outerjoin(_team2, _matches.c.team2_id == _team2.c.id)
        )
        .where(*_finished_map_conditions())
        .order_by(event_time.element, _maps.c.match_id, _maps.c.map_number, _maps.c.id)
    )

    records: list[MapRecord] = []
    for row in session.execute(statement).mappings().all():
        team1_won = row["winner_id"] == row["team1_id"]
        team1_score = row["score_team1"]
        team2_score = row["score_team2"]
        rounds_count = None
        if team1_score is not None and team2_score is not None:
            rounds_count = int(team1_score) + int(team2_score)

        records.append(
            MapRecord(
                match_id=int(row["match_id"]),
                map_name=row["map_name"],
                map_winner_name=row["team1_name"] if team1_won else row["team2_name"],
                map_winner_score=team1_score if team1_won else team2_score,
                map_loser_name=row["team2_name"] if team1_won else row["team1_name"],
                map_loser_score=team2_score if team1_won else team1_score,
                team1_name=row["team1_name"],
                team2_name=row["team2_name"],
                map_id=int(row["map_id"]),
                map_number=row["map_number"],
                rounds_count=rounds_count,
            )
        )
    return records


__all__ = ["create_source_tables", "fetch_map_records", "fetch_match_records"]
