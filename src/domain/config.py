"""Load report definitions from TOML files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any
import tomllib

from domain.ingest import DEFAULT_TIER

DEFAULT_LOOKBACK_DAYS = 30


@dataclass(frozen=True)
class ReportConfig:
    """One windowed report: which rows to read and which window to apply."""

    name: str
    description: str | None
    file_path: Path
    lookback_days: int
    tier: str | None
    matches_csv: Path | None
    maps_csv: Path | None
    rankings_json: Path | None

    def as_config_json(self) -> dict[str, Any]:
        return {
            "lookback_days": self.lookback_days,
            "tier": self.tier,
            "matches_csv": None if self.matches_csv is None else str(self.matches_csv),
            "maps_csv": None if self.maps_csv is None else str(self.maps_csv),
            "rankings_json": None if self.rankings_json is None else str(self.rankings_json),
        }


def load_report_configs(config_dir: Path) -> list[ReportConfig]:
    """Load all TOML files in a directory with duplicate-name validation."""
    if not config_dir.exists():
        raise FileNotFoundError(f"Config directory not found: {config_dir}")
    if not config_dir.is_dir():
        raise NotADirectoryError(f"Config path is not a directory: {config_dir}")

    config_files = sorted(config_dir.glob("*.toml"))
    if not config_files:
        raise ValueError(f"No .toml config files found in: {config_dir}")

    reports: list[ReportConfig] = []
    for file_path in config_files:
        with file_path.open("rb") as file:
            raw = tomllib.load(file)
        reports.append(parse_report_config(raw, file_path))

    names = [report.name for report in reports]
    if len(names) != len(set(names)):
        raise ValueError(f"Duplicate report names found in {config_dir}: {names}")

    return reports


def _optional_path(value: Any, *, file_path: Path, key: str) -> Path | None:
    if value is None:
        return None
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{file_path}: [sources].{key} must be a non-empty string")
    path = Path(value)
    if not path.is_absolute():
        path = file_path.parent / path
    return path


def parse_report_config(raw: dict[str, Any], file_path: Path) -> ReportConfig:
    report_raw = raw.get("report", {})
    sources_raw = raw.get("sources", {})

    name = str(report_raw.get("name", "")).strip()
    if not name:
        raise ValueError(f"{file_path}: [report].name is required")

    description_value = report_raw.get("description")
    description = None if description_value is None else str(description_value)

    lookback_value = report_raw.get("lookback_days", DEFAULT_LOOKBACK_DAYS)
    if isinstance(lookback_value, bool) or not isinstance(lookback_value, int):
        raise ValueError(f"{file_path}: [report].lookback_days must be an integer")
    if lookback_value <= 0:
        raise ValueError(f"{file_path}: [report].lookback_days must be > 0")

    tier_value = report_raw.get("tier", DEFAULT_TIER)
    tier = str(tier_value).strip() if tier_value is not None else None
    if tier is not None and (not tier or tier == "*"):
        tier = None

    return ReportConfig(
        name=name,
        description=description,
        file_path=file_path,
        lookback_days=lookback_value,
        tier=tier,
        matches_csv=_optional_path(sources_raw.get("matches_csv"), file_path=file_path, key="matches_csv"),
        maps_csv=_optional_path(sources_raw.get("maps_csv"), file_path=file_path, key="maps_csv"),
        rankings_json=_optional_path(
            sources_raw.get("rankings_json"),
            file_path=file_path,
            key="rankings_json",
        ),
    )


__all__ = ["DEFAULT_LOOKBACK_DAYS", "ReportConfig", "load_report_configs", "parse_report_config"]
