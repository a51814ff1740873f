"""Load ladder definitions (divisions, point rules, map pool) from TOML files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from domain.config_base import load_config_dir, load_config_file
from domain.ladder.divisions import DEFAULT_DIVISION_NAMES, DivisionTable, build_division_table
from domain.ladder.map_pool import LadderMap, MapPool, parse_region
from domain.ladder.points import LadderPointCalculator, LadderPointParameters

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[3] / "configs" / "ladder" / "default.toml"


@dataclass(frozen=True)
class DivisionSettings:
    names: tuple[str, ...] = DEFAULT_DIVISION_NAMES
    count: int = 4
    subdivisions: int = 5
    points: int = 100


@dataclass(frozen=True)
class LadderConfig:
    """Configuration for one ladder deployment."""

    name: str
    description: str | None
    file_path: Path
    divisions: DivisionSettings
    points: LadderPointParameters
    min_game_length: int
    max_map_vetoes: int
    maps: tuple[LadderMap, ...]

    def build_division_table(self) -> DivisionTable:
        return build_division_table(
            self.divisions.names,
            tier_count=self.divisions.count,
            subdivision_count=self.divisions.subdivisions,
            points_per_subdivision=self.divisions.points,
        )

    def build_map_pool(self) -> MapPool:
        return MapPool(self.maps)

    def build_point_calculator(self, divisions: DivisionTable | None = None) -> LadderPointCalculator:
        return LadderPointCalculator(self.points, divisions or self.build_division_table())

    def as_config_json(self) -> dict[str, Any]:
        return {
            "division_names": list(self.divisions.names),
            "division_count": self.divisions.count,
            "subdivision_count": self.divisions.subdivisions,
            "division_points": self.divisions.points,
            "starting_points": self.points.starting_points,
            "win_points_base": self.points.win_points_base,
            "lose_points_base": self.points.lose_points_base,
            "win_points_increment": self.points.win_points_increment,
            "lose_points_increment": self.points.lose_points_increment,
            "min_game_length": self.min_game_length,
            "max_map_vetoes": self.max_map_vetoes,
        }


def load_ladder_config(file_path: Path = DEFAULT_CONFIG_PATH) -> LadderConfig:
    """Load and validate one ladder TOML config file."""
    return load_config_file(file_path, _parse_ladder_config)


def load_ladder_configs(config_dir: Path) -> list[LadderConfig]:
    """Load and validate every ladder TOML config file in a directory."""
    return load_config_dir(
        config_dir,
        _parse_ladder_config,
        name_of=lambda config: config.name,
        duplicate_name_label="ladder",
    )


def _parse_ladder_config(raw: dict[str, Any], file_path: Path) -> LadderConfig:
    system_raw = raw.get("system", {})
    divisions_raw = raw.get("divisions", {})
    points_raw = raw.get("points", {})
    matchmaking_raw = raw.get("matchmaking", {})

    name = str(system_raw.get("name", "")).strip()
    if not name:
        raise ValueError(f"{file_path}: [system].name is required")

    description_value = system_raw.get("description")
    description = None if description_value is None else str(description_value)

    divisions = DivisionSettings(
        names=tuple(str(n) for n in divisions_raw.get("names", DEFAULT_DIVISION_NAMES)),
        count=int(divisions_raw.get("count", 4)),
        subdivisions=int(divisions_raw.get("subdivisions", 5)),
        points=int(divisions_raw.get("points", 100)),
    )
    _validate_divisions(file_path=file_path, divisions=divisions)

    points = LadderPointParameters(
        starting_points=int(points_raw.get("starting_points", 1250)),
        win_points_base=int(points_raw.get("win_points_base", 100)),
        lose_points_base=int(points_raw.get("lose_points_base", 50)),
        win_points_increment=float(points_raw.get("win_points_increment", 25.0)),
        lose_points_increment=float(points_raw.get("lose_points_increment", 12.5)),
    )
    _validate_points(file_path=file_path, points=points)

    min_game_length = int(matchmaking_raw.get("min_game_length", 120))
    if min_game_length < 0:
        raise ValueError(f"{file_path}: [matchmaking].min_game_length must be >= 0")
    max_map_vetoes = int(matchmaking_raw.get("max_map_vetoes", 3))
    if max_map_vetoes < 0:
        raise ValueError(f"{file_path}: [matchmaking].max_map_vetoes must be >= 0")

    maps = tuple(
        _parse_map(entry, file_path=file_path, index=index)
        for index, entry in enumerate(raw.get("maps", []))
    )
    _validate_maps(file_path=file_path, maps=maps)

    return LadderConfig(
        name=name,
        description=description,
        file_path=file_path,
        divisions=divisions,
        points=points,
        min_game_length=min_game_length,
        max_map_vetoes=max_map_vetoes,
        maps=maps,
    )


def _parse_map(entry: dict[str, Any], *, file_path: Path, index: int) -> LadderMap:
    if "id" not in entry:
        raise ValueError(f"{file_path}: [[maps]][{index}].id is required")
    region = parse_region(str(entry.get("region", "")))
    if region is None:
        raise ValueError(f"{file_path}: [[maps]][{index}].region is not a known region: {entry.get('region')!r}")
    name = str(entry.get("battle_net_name", "")).strip()
    if not name:
        raise ValueError(f"{file_path}: [[maps]][{index}].battle_net_name is required")

    return LadderMap(
        id=int(entry["id"]),
        region=region,
        battle_net_name=name,
        battle_net_id=int(entry.get("battle_net_id", 0)),
        in_ranked_pool=bool(entry.get("in_ranked_pool", False)),
    )


def _validate_divisions(*, file_path: Path, divisions: DivisionSettings) -> None:
    if divisions.count < 0:
        raise ValueError(f"{file_path}: [divisions].count must be >= 0")
    if divisions.subdivisions < 1:
        raise ValueError(f"{file_path}: [divisions].subdivisions must be >= 1")
    if divisions.points < 1:
        raise ValueError(f"{file_path}: [divisions].points must be >= 1")
    if len(divisions.names) < divisions.count + 1:
        raise ValueError(
            f"{file_path}: [divisions].names needs {divisions.count + 1} entries, "
            f"got {len(divisions.names)}"
        )


def _validate_points(*, file_path: Path, points: LadderPointParameters) -> None:
    if points.starting_points < 0:
        raise ValueError(f"{file_path}: [points].starting_points must be >= 0")
    if points.win_points_base < 0:
        raise ValueError(f"{file_path}: [points].win_points_base must be >= 0")
    if points.lose_points_base < 0:
        raise ValueError(f"{file_path}: [points].lose_points_base must be >= 0")
    if points.win_points_increment < 0.0:
        raise ValueError(f"{file_path}: [points].win_points_increment must be >= 0")
    if points.lose_points_increment < 0.0:
        raise ValueError(f"{file_path}: [points].lose_points_increment must be >= 0")


def _validate_maps(*, file_path: Path, maps: tuple[LadderMap, ...]) -> None:
    ids = [m.id for m in maps]
    if len(ids) != len(set(ids)):
        raise ValueError(f"{file_path}: duplicate [[maps]] ids: {ids}")
    keys = [(m.region, m.battle_net_name) for m in maps]
    if len(keys) != len(set(keys)):
        raise ValueError(f"{file_path}: duplicate [[maps]] region/battle_net_name pairs")


__all__ = ["DEFAULT_CONFIG_PATH", "DivisionSettings", "LadderConfig", "load_ladder_config", "load_ladder_configs"]
