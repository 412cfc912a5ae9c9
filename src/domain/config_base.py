"""Shared TOML config-loading utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, TypeVar
import tomllib

T = TypeVar("T")


def load_config_file(
    config_path: Path,
    parser: Callable[[dict[str, Any], Path], T],
) -> T:
    """Read one TOML file and hand the raw tables to ``parser``."""
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    if config_path.is_dir():
        raise IsADirectoryError(f"Config path is a directory: {config_path}")

    with config_path.open("rb") as file:
        raw = tomllib.load(file)
    return parser(raw, config_path)


def string_tuple(value: Any, *, file_path: Path, key: str) -> tuple[str, ...]:
    """Coerce a TOML array of strings, rejecting scalars and empty arrays."""
    if not isinstance(value, list):
        raise ValueError(f"{file_path}: {key} must be an array of strings")
    items = tuple(str(item).strip() for item in value if str(item).strip())
    if not items:
        raise ValueError(f"{file_path}: {key} must not be empty")
    return items


__all__ = ["load_config_file", "string_tuple"]
