"""Order computed team performances for display."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from domain.common import RankedTeam, RankingEntry, TeamPerformance

TOP_TEAMS_LIMIT = 5
SOURCE_EXTERNAL = "external"
SOURCE_VOLUME = "volume"


def _name_key(name: str) -> str:
    return name.strip().casefold()


def resolve_top_teams(
    performances: Iterable[TeamPerformance],
    rankings: Sequence[RankingEntry] | None = None,
    *,
    limit: int = TOP_TEAMS_LIMIT,
) -> tuple[RankedTeam, ...]:
    """Rank teams by an external list when given, else by matches played.

    An empty ranking list counts as no list. Ranked names without a computed
    performance are dropped. The volume fallback keeps first-seen order
    between teams with equal match counts and is cut to ``limit`` entries;
    the external list is not cut.
    """
    performance_list = list(performances)

    if not rankings:
        by_volume = sorted(performance_list, key=lambda performance: -performance.total_matches)
        return tuple(
            RankedTeam(rank=position, performance=performance, source=SOURCE_VOLUME)
            for position, performance in enumerate(by_volume[:limit], start=1)
        )

    by_name: dict[str, TeamPerformance] = {}
    for performance in performance_list:
        by_name.setdefault(_name_key(performance.team_name), performance)

    ranked: list[RankedTeam] = []
    seen: set[str] = set()
    for entry in sorted(rankings, key=lambda item: item.rank):
        key = _name_key(entry.name)
        performance = by_name.get(key)
        if performance is None or key in seen:
            continue
        seen.add(key)
        ranked.append(RankedTeam(rank=entry.rank, performance=performance, source=SOURCE_EXTERNAL))
    return tuple(ranked)


__all__ = ["SOURCE_EXTERNAL", "SOURCE_VOLUME", "TOP_TEAMS_LIMIT", "resolve_top_teams"]
