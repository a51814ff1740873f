"""Tests for TOML-based ladder config loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from domain.ladder.config import DEFAULT_CONFIG_PATH, load_ladder_config, load_ladder_configs
from domain.ladder.map_pool import Region


def test_load_ladder_config_from_file(tmp_path: Path) -> None:
    config_path = tmp_path / "ladder.toml"
    config_path.write_text(
        """
[system]
name = "test_ladder"
description = "A test ladder"

[divisions]
names = ["Iron", "Steel", "Mithril"]
count = 2
subdivisions = 3
points = 50

[points]
starting_points = 200
win_points_base = 40
lose_points_base = 20
win_points_increment = 10.0
lose_points_increment = 5.0

[matchmaking]
min_game_length = 90
max_map_vetoes = 2

[[maps]]
id = 10
region = "kr"
battle_net_name = "Ohana"
battle_net_id = 55
in_ranked_pool = true
""".strip()
    )

    config = load_ladder_config(config_path)
    assert config.name == "test_ladder"
    assert config.description == "A test ladder"
    assert config.points.starting_points == 200
    assert config.points.win_points_increment == pytest.approx(10.0)
    assert config.min_game_length == 90
    assert config.max_map_vetoes == 2

    table = config.build_division_table()
    assert [d.name for d in table.divisions] == [
        "Iron 3", "Iron 2", "Iron 1", "Steel 3", "Steel 2", "Steel 1", "Mithril",
    ]
    assert table[len(table) - 1].points == 300

    pool = config.build_map_pool()
    ohana = pool.resolve(Region.KR, "Ohana")
    assert ohana is not None
    assert ohana.battle_net_id == 55
    assert config.as_config_json()["division_count"] == 2


def test_defaults_when_sections_are_omitted(tmp_path: Path) -> None:
    config_path = tmp_path / "defaults.toml"
    config_path.write_text('[system]\nname = "bare"\n')

    config = load_ladder_config(config_path)
    assert config.divisions.count == 4
    assert config.divisions.subdivisions == 5
    assert config.points.starting_points == 1250
    assert config.points.lose_points_increment == pytest.approx(12.5)
    assert config.min_game_length == 120
    assert config.max_map_vetoes == 3
    assert config.maps == ()


def test_shipped_default_config_loads() -> None:
    config = load_ladder_config(DEFAULT_CONFIG_PATH)
    assert len(config.build_division_table()) == 21
    assert len(config.build_map_pool().ranked_maps(Region.NA)) == 3


def test_missing_name_raises(tmp_path: Path) -> None:
    config_path = tmp_path / "nameless.toml"
    config_path.write_text("[system]\n")
    with pytest.raises(ValueError, match=r"\[system\].name is required"):
        load_ladder_config(config_path)


def test_too_few_division_names_raises(tmp_path: Path) -> None:
    config_path = tmp_path / "short.toml"
    config_path.write_text('[system]\nname = "x"\n[divisions]\nnames = ["A", "B"]\ncount = 2\n')
    with pytest.raises(ValueError, match=r"\[divisions\].names needs 3 entries"):
        load_ladder_config(config_path)


def test_unknown_map_region_raises(tmp_path: Path) -> None:
    config_path = tmp_path / "bad_map.toml"
    config_path.write_text(
        '[system]\nname = "x"\n[[maps]]\nid = 1\nregion = "moon"\nbattle_net_name = "Crater"\n'
    )
    with pytest.raises(ValueError, match="not a known region"):
        load_ladder_config(config_path)


def test_duplicate_map_names_in_region_raise(tmp_path: Path) -> None:
    config_path = tmp_path / "dup_map.toml"
    config_path.write_text(
        '[system]\nname = "x"\n'
        '[[maps]]\nid = 1\nregion = "eu"\nbattle_net_name = "Crater"\n'
        '[[maps]]\nid = 2\nregion = "eu"\nbattle_net_name = "Crater"\n'
    )
    with pytest.raises(ValueError, match="duplicate"):
        load_ladder_config(config_path)


def test_duplicate_ladder_names_in_directory_raise(tmp_path: Path) -> None:
    (tmp_path / "a.toml").write_text('[system]\nname = "dup"\n')
    (tmp_path / "b.toml").write_text('[system]\nname = "dup"\n')
    with pytest.raises(ValueError, match="Duplicate ladder names"):
        load_ladder_configs(tmp_path)


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_ladder_config(tmp_path / "absent.toml")
