"""Tier filter, window selection and aggregation for one report."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from domain.aggregation import compute_statistics
from domain.common import MapRecord, MatchRecord, RankingEntry, StatisticsResult
from domain.ingest import DEFAULT_TIER, filter_tier, usable_maps
from domain.window import TimeWindow, select_window


@dataclass(frozen=True)
class WindowReport:
    """Statistics for one window, alongside the window that produced them."""

    window: TimeWindow
    statistics: StatisticsResult

    @property
    def has_data(self) -> bool:
        return self.window.has_data


def build_window_report(
    matches: Sequence[MatchRecord],
    maps: Sequence[MapRecord],
    *,
    lookback_days: int,
    tier: str | None = DEFAULT_TIER,
    rankings: Sequence[RankingEntry] | None = None,
    echo: Callable[[str], None] | None = None,
) -> WindowReport:
    """Run the full selection for one lookback value.

    Every call recomputes from the raw rows; nothing is carried over between
    windows. An empty selection yields a report whose ``has_data`` is False.
    """
    tier_matches = filter_tier(matches, tier)
    candidate_maps = usable_maps(maps)
    window = select_window(tier_matches, lookback_days)

    if echo is not None:
        echo(
            f"loaded_matches={len(matches)} "
            f"tier={tier or '*'} "
            f"tier_matches={len(tier_matches)} "
            f"usable_maps={len(candidate_maps)}"
        )

    statistics = compute_statistics(window.matches, candidate_maps, rankings)

    if echo is not None:
        if not window.has_data:
            echo(f"no data for lookback_days={lookback_days} tier={tier or '*'}")
        else:
            echo(
                f"window_start={window.start.isoformat()} "
                f"window_end={window.end.isoformat()} "
                f"requested_days={window.requested_days} "
                f"effective_days={window.effective_days} "
                f"matches={statistics.total_matches} "
                f"maps={statistics.total_maps} "
                f"tracked_teams={statistics.tracked_teams}"
            )

    return WindowReport(window=window, statistics=statistics)


__all__ = ["WindowReport", "build_window_report"]
