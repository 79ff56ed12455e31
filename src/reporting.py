"""Plain-text rendering of a window report for terminal output."""

from __future__ import annotations

from domain.pipeline import WindowReport


def _window_line(report: WindowReport) -> str:
    window = report.window
    if not window.has_data:
        return f"window=none requested_days={window.requested_days} (no data for this selection)"
    return (
        f"window={window.start:%Y-%m-%d} -> {window.end:%Y-%m-%d} "
        f"requested_days={window.requested_days} effective_days={window.effective_days}"
    )


def render_report(report: WindowReport) -> list[str]:
    """Render a report as lines ready for ``typer.echo``."""
    stats = report.statistics
    lines = [_window_line(report)]
    if not report.has_data:
        return lines

    lines.append(
        f"matches={stats.total_matches} maps={stats.total_maps} tracked_teams={stats.tracked_teams}"
    )

    lines.append("")
    lines.append("Picks per map")
    for pick in stats.pick_per_map:
        lines.append(f"  {pick.map_name:<12} {pick.count:5d}")

    lines.append("")
    lines.append("Best-of results")
    for result in stats.bo_results:
        lines.append(f"  {result.label:<6} {result.count:5d}")

    lines.append("")
    lines.append("Map stats")
    lines.append("| Map | Maps | Avg diff | Close % | Stomp % | OT % |")
    lines.append("|---|---:|---:|---:|---:|---:|")
    for stat in stats.map_stats:
        lines.append(
            f"| {stat.map_name} | {stat.matches} | {stat.avg_diff:.2f} | "
            f"{stat.close_pct:.1f} | {stat.stomp_pct:.1f} | {stat.ot_pct:.1f} |"
        )

    lines.append("")
    lines.append("Top teams")
    for ranked in stats.top_teams:
        team = ranked.performance
        lines.append(
            f"{ranked.rank:2d}. {team.team_name:<20} "
            f"best_map={team.best_map or '-'} ({team.best_map_matches} maps, {team.best_map_win_rate_label}) "
            f"matches={team.total_matches} won={team.matches_won}"
        )
    return lines


__all__ = ["render_report"]
