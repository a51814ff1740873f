"""Shared TOML config-loading utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, TypeVar
import tomllib

T = TypeVar("T")


def load_config_file(
    file_path: Path,
    parser: Callable[[dict[str, Any], Path], T],
) -> T:
    """Read one TOML file and hand the raw mapping to ``parser``."""
    if not file_path.exists():
        raise FileNotFoundError(f"Config file not found: {file_path}")
    if not file_path.is_file():
        raise IsADirectoryError(f"Config path is not a file: {file_path}")

    with file_path.open("rb") as file:
        raw = tomllib.load(file)
    return parser(raw, file_path)


def load_config_dir(
    config_dir: Path,
    parser: Callable[[dict[str, Any], Path], T],
    *,
    name_of: Callable[[T], str],
    duplicate_name_label: str = "config",
) -> list[T]:
    """Load all TOML files in a directory with duplicate-name validation."""
    if not config_dir.exists():
        raise FileNotFoundError(f"Config directory not found: {config_dir}")
    if not config_dir.is_dir():
        raise NotADirectoryError(f"Config path is not a directory: {config_dir}")

    config_files = sorted(config_dir.glob("*.toml"))
    if not config_files:
        raise ValueError(f"No .toml config files found in: {config_dir}")

    configs = [load_config_file(file_path, parser) for file_path in config_files]

    names = [name_of(config) for config in configs]
    if len(names) != len(set(names)):
        raise ValueError(f"Duplicate {duplicate_name_label} names found in {config_dir}: {names}")

    return configs


__all__ = ["load_config_dir", "load_config_file"]
