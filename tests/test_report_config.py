"""Tests for TOML-based report config loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from domain.config import DEFAULT_LOOKBACK_DAYS, load_report_configs

ROOT_DIR = Path(__file__).resolve().parents[1]


def test_load_report_configs_from_directory(tmp_path: Path) -> None:
    config_path = tmp_path / "default.toml"
    config_path.write_text(
        """
[report]
name = "tier_s_90d"
description = "A test report"
lookback_days = 90
tier = "S"

[sources]
matches_csv = "data/matches.csv"
maps_csv = "/abs/maps.csv"
rankings_json = "targets/hltv.json"
""".strip()
    )

    configs = load_report_configs(tmp_path)
    assert len(configs) == 1

    report = configs[0]
    assert report.name == "tier_s_90d"
    assert report.description == "A test report"
    assert report.lookback_days == 90
    assert report.tier == "S"
    assert report.matches_csv == tmp_path / "data" / "matches.csv"
    assert report.maps_csv == Path("/abs/maps.csv")
    assert report.rankings_json == tmp_path / "targets" / "hltv.json"
    assert report.file_path == config_path
    assert report.as_config_json()["lookback_days"] == 90


def test_report_defaults(tmp_path: Path) -> None:
    (tmp_path / "minimal.toml").write_text('[report]\nname = "minimal"\n')

    (report,) = load_report_configs(tmp_path)

    assert report.description is None
    assert report.lookback_days == DEFAULT_LOOKBACK_DAYS
    assert report.tier == "s"
    assert report.matches_csv is None
    assert report.maps_csv is None
    assert report.rankings_json is None


def test_wildcard_tier_disables_tier_filter(tmp_path: Path) -> None:
    (tmp_path / "all.toml").write_text('[report]\nname = "all"\ntier = "*"\n')

    (report,) = load_report_configs(tmp_path)

    assert report.tier is None


def test_duplicate_names_raise_error(tmp_path: Path) -> None:
    template = '[report]\nname = "dup"\nlookback_days = 30\n'
    (tmp_path / "a.toml").write_text(template)
    (tmp_path / "b.toml").write_text(template)

    with pytest.raises(ValueError, match="Duplicate report names"):
        load_report_configs(tmp_path)


@pytest.mark.parametrize(
    ("body", "message"),
    [
        ('[report]\nlookback_days = 30\n', r"\[report\].name is required"),
        ('[report]\nname = "x"\nlookback_days = 0\n', r"\[report\].lookback_days must be > 0"),
        ('[report]\nname = "x"\nlookback_days = "30"\n', r"\[report\].lookback_days must be an integer"),
        ('[report]\nname = "x"\n[sources]\nmaps_csv = ""\n', r"\[sources\].maps_csv must be a non-empty string"),
    ],
)
def test_invalid_report_raises(tmp_path: Path, body: str, message: str) -> None:
    (tmp_path / "bad.toml").write_text(body)

    with pytest.raises(ValueError, match=message):
        load_report_configs(tmp_path)


def test_missing_directory_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_report_configs(tmp_path / "missing")


def test_file_instead_of_directory_raises(tmp_path: Path) -> None:
    file_path = tmp_path / "report.toml"
    file_path.write_text('[report]\nname = "x"\n')

    with pytest.raises(NotADirectoryError):
        load_report_configs(file_path)


def test_empty_directory_raises(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="No .toml config files"):
        load_report_configs(tmp_path)


def test_shipped_default_config_points_at_sample_data() -> None:
    (report,) = load_report_configs(ROOT_DIR / "configs" / "reports")

    assert report.name == "tier_s_30d"
    assert report.matches_csv is not None and report.matches_csv.resolve().is_file()
    assert report.maps_csv is not None and report.maps_csv.resolve().is_file()
    assert report.rankings_json is not None and report.rankings_json.resolve().is_file()
