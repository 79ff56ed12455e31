"""Attach parent match context to map rows."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from domain.common import MapRecord, MatchRecord


@dataclass(frozen=True)
class JoinedMap:
    map: MapRecord
    match: MatchRecord


def build_match_index(matches: Iterable[MatchRecord]) -> dict[int, MatchRecord]:
    """Index matches by id. The first record wins when an id repeats."""
    index: dict[int, MatchRecord] = {}
    for match in matches:
        index.setdefault(match.match_id, match)
    return index


def join_maps(index: dict[int, MatchRecord], maps: Iterable[MapRecord]) -> tuple[JoinedMap, ...]:
    """Keep map rows whose parent match is in ``index``, in input order."""
    joined: list[JoinedMap] = []
    for map_row in maps:
        match = index.get(map_row.match_id)
        if match is None:
            continue
        joined.append(JoinedMap(map=map_row, match=match))
    return tuple(joined)


__all__ = ["JoinedMap", "build_match_index", "join_maps"]
