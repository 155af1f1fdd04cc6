from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml
from plotly.colors import qualitative

"""Settings for parsing and colouring, optionally loaded from a YAML file.

Example config/sankey.yml:

    palette: T10            # plotly qualitative palette name, or a list of colours
    field_delimiter: ","
    path_delimiter: ","
    title: Energy flows
    value_suffix: " TWh"
"""

__all__ = [
    "ConfigError",
    "DEFAULT_PALETTE",
    "Settings",
    "load_settings",
    "resolve_palette",
]

DEFAULT_PALETTE: tuple[str, ...] = tuple(qualitative.T10)


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class Settings:
    palette: tuple[str, ...] = DEFAULT_PALETTE
    field_delimiter: str = ","
    path_delimiter: str = ","
    title: str = "Sankey Diagram"
    value_suffix: str = ""


def resolve_palette(value: Any) -> tuple[str, ...]:
    """A palette is either the name of a plotly qualitative palette or an explicit list of colours."""
    if isinstance(value, str):
        colours = getattr(qualitative, value, None)
        if not isinstance(colours, list):
            raise ConfigError(f"unknown palette: {value}")
        return tuple(colours)
    if isinstance(value, (list, tuple)):
        if not value:
            raise ConfigError("palette must not be empty")
        return tuple(str(c) for c in value)
    raise ConfigError(f"palette must be a name or a list of colours, got {type(value).__name__}")


def load_settings(path: Path) -> Settings:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config root must be a mapping")

    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"unknown config keys: {', '.join(unknown)}")

    values: dict[str, Any] = {}
    if "palette" in data:
        values["palette"] = resolve_palette(data["palette"])
    for key in ("field_delimiter", "path_delimiter"):
        if key in data:
            delim = data[key]
            if not isinstance(delim, str) or not delim:
                raise ConfigError(f"{key} must be a non-empty string")
            if key == "field_delimiter" and len(delim) != 1:
                raise ConfigError("field_delimiter must be a single character")
            values[key] = delim
    for key in ("title", "value_suffix"):
        if key in data:
            values[key] = "" if data[key] is None else str(data[key])
    return Settings(**values)
