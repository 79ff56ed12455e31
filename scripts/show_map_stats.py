#!/usr/bin/env python3
"""Show windowed map/team statistics from CSV exports or the HLTV database."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from db import DEFAULT_DB_URL, create_db_engine, create_session_factory
from domain.common import MapRecord, MatchRecord, RankingEntry
from domain.config import DEFAULT_LOOKBACK_DAYS, ReportConfig, load_report_configs
from domain.pipeline import build_window_report
from reporting import render_report
from repositories.csv_source import load_maps_csv, load_matches_csv
from repositories.rankings import load_ranking_entries
from repositories.sql_source import fetch_map_records, fetch_match_records

DEFAULT_CONFIG_DIR = ROOT_DIR / "configs" / "reports"

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Summarise picks, best-of results, map volatility and top teams over a trailing window.",
)


def _load_rows(
    *,
    matches_csv: Path | None,
    maps_csv: Path | None,
    db_url: str | None,
) -> tuple[list[MatchRecord], list[MapRecord]]:
    if db_url is not None:
        engine = create_db_engine(db_url)
        session_factory = create_session_factory(engine)
        with session_factory() as session:
            return fetch_match_records(session), fetch_map_records(session)

    if matches_csv is None or maps_csv is None:
        raise typer.BadParameter(
            "Provide both --matches-csv and --maps-csv, or --db-url.",
            param_hint="--matches-csv/--maps-csv",
        )
    for path, hint in ((matches_csv, "--matches-csv"), (maps_csv, "--maps-csv")):
        if not path.is_file():
            raise typer.BadParameter(f"File not found: {path}", param_hint=hint)
    return load_matches_csv(matches_csv), load_maps_csv(maps_csv)


def _load_rankings(rankings_json: Path | None, top_n: int | None) -> list[RankingEntry] | None:
    if rankings_json is None:
        return None
    try:
        rankings = load_ranking_entries(rankings_json, top_n=top_n)
    except (OSError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--rankings-json") from exc
    if not rankings:
        raise typer.BadParameter(
            f"No valid teams found in ranking file '{rankings_json}'.",
            param_hint="--rankings-json",
        )
    return rankings


def _print_report(
    *,
    matches: list[MatchRecord],
    maps: list[MapRecord],
    lookback_days: int,
    tier: str | None,
    rankings: list[RankingEntry] | None,
    verbose: bool,
) -> None:
    report = build_window_report(
        matches,
        maps,
        lookback_days=lookback_days,
        tier=tier,
        rankings=rankings,
        echo=typer.echo if verbose else None,
    )
    for line in render_report(report):
        typer.echo(line)


@app.command()
def show(
    matches_csv: Annotated[
        Path | None,
        typer.Option("--matches-csv", help="Matches export (one row per series)."),
    ] = None,
    maps_csv: Annotated[
        Path | None,
        typer.Option("--maps-csv", help="Maps export (one row per played map)."),
    ] = None,
    db_url: Annotated[
        str | None,
        typer.Option(
            "--db-url",
            help=f"Read rows from a database instead of CSV (for example: {DEFAULT_DB_URL}).",
        ),
    ] = None,
    lookback_days: Annotated[
        int,
        typer.Option("--lookback-days", help="Trailing window measured back from the latest match."),
    ] = DEFAULT_LOOKBACK_DAYS,
    tier: Annotated[
        str,
        typer.Option("--tier", help="Match tier to analyse. Use '*' for every tier."),
    ] = "s",
    rankings_json: Annotated[
        Path | None,
        typer.Option(
            "--rankings-json",
            help="Optional ranking list ({'teams': [{'rank': 1, 'name': ...}]}) to order top teams.",
        ),
    ] = None,
    top_n: Annotated[
        int | None,
        typer.Option("--top-n", help="Only use the first N entries of the ranking list."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose/--quiet", help="Print load and window summary lines."),
    ] = False,
) -> None:
    """Print statistics for one trailing window."""
    if lookback_days <= 0:
        raise typer.BadParameter("--lookback-days must be greater than 0")
    if top_n is not None and top_n <= 0:
        raise typer.BadParameter("--top-n must be greater than 0")

    matches, maps = _load_rows(matches_csv=matches_csv, maps_csv=maps_csv, db_url=db_url)
    _print_report(
        matches=matches,
        maps=maps,
        lookback_days=lookback_days,
        tier=None if tier.strip() in ("", "*") else tier,
        rankings=_load_rankings(rankings_json, top_n),
        verbose=verbose,
    )


def _run_config(config: ReportConfig, *, verbose: bool) -> None:
    typer.echo(
        f"report={config.name} config={config.file_path.name} "
        f"lookback_days={config.lookback_days} tier={config.tier or '*'}"
    )
    matches, maps = _load_rows(matches_csv=config.matches_csv, maps_csv=config.maps_csv, db_url=None)
    _print_report(
        matches=matches,
        maps=maps,
        lookback_days=config.lookback_days,
        tier=config.tier,
        rankings=_load_rankings(config.rankings_json, None),
        verbose=verbose,
    )


@app.command()
def show_config(
    config_dir: Annotated[
        Path,
        typer.Option("--config-dir", help="Directory of report TOML files."),
    ] = DEFAULT_CONFIG_DIR,
    config_name: Annotated[
        str | None,
        typer.Option(
            "--config-name",
            help="Optional single config filename (for example: default.toml).",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose/--quiet", help="Print load and window summary lines."),
    ] = False,
) -> None:
    """Print every report defined in a config directory."""
    configs = load_report_configs(config_dir)
    if config_name is not None:
        configs = [config for config in configs if config.file_path.name == config_name]
        if not configs:
            raise typer.BadParameter(
                f"No config named '{config_name}' found in {config_dir}",
                param_hint="--config-name",
            )

    for index, config in enumerate(configs):
        if index:
            typer.echo("")
        _run_config(config, verbose=verbose)


if __name__ == "__main__":
    app()
