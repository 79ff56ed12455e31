"""Load-time filters applied before any windowing."""

from __future__ import annotations

from collections.abc import Iterable

from domain.common import MapRecord, MatchRecord

DEFAULT_TIER = "s"


def filter_tier(matches: Iterable[MatchRecord], tier: str | None = DEFAULT_TIER) -> list[MatchRecord]:
    """Keep matches of one competitive tier (case-insensitive). ``None`` keeps everything."""
    if tier is None:
        return list(matches)

    wanted = tier.strip().casefold()
    return [
        match
        for match in matches
        if isinstance(match.tier, str) and match.tier.strip().casefold() == wanted
    ]


def is_usable_map(map_row: MapRecord) -> bool:
    if not isinstance(map_row.map_name, str) or not map_row.map_name.strip():
        return False
    if map_row.map_winner_score is None:
        return False
    if isinstance(map_row.map_winner_score, str) and not map_row.map_winner_score.strip():
        return False
    return True


def usable_maps(maps: Iterable[MapRecord]) -> list[MapRecord]:
    """Drop map rows without a map name or a winner round score."""
    return [map_row for map_row in maps if is_usable_map(map_row)]


__all__ = ["DEFAULT_TIER", "filter_tier", "is_usable_map", "usable_maps"]
