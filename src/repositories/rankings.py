"""Load an external team ranking list (HLTV-style JSON)."""

from __future__ import annotations

import json
from pathlib import Path

from domain.common import RankingEntry


def load_ranking_entries(path: Path, top_n: int | None = None) -> list[RankingEntry]:
    """Read ``{"teams": [{"rank": 1, "name": "..."}, ...]}`` sorted by rank.

    Items without an integer rank or a string name are skipped.
    """
    payload = json.loads(path.read_text(encoding="utf-8"))
    teams = payload.get("teams") if isinstance(payload, dict) else None
    if not isinstance(teams, list):
        raise ValueError(f"Ranking file '{path}' does not contain a valid 'teams' list.")

    parsed: list[RankingEntry] = []
    for item in teams:
        if not isinstance(item, dict):
            continue
        rank = item.get("rank")
        name = item.get("name")
        if isinstance(rank, bool) or not isinstance(rank, int) or not isinstance(name, str):
            continue
        if not name.strip():
            continue
        parsed.append(RankingEntry(rank=rank, name=name.strip()))

    parsed.sort(key=lambda entry: entry.rank)
    if top_n is not None:
        return parsed[:top_n]
    return parsed


__all__ = ["load_ranking_entries"]
