"""
Load the palette, the resolution list and encoder settings (YAML).
Everything here is read once at startup and handed to the planner/orchestrator as immutable values.
"""
from pathlib import Path
from typing import Any

import yaml

from .schema import Color, Resolution


class ConfigError(Exception):
    """A config file could not be read or does not have the expected shape."""
    def __init__(self, message: str, path: Path | str | None = None):
        super().__init__(message)
        self.path = path


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _defaults() -> dict[str, Any]:
    return {
        "image": {
            "tool": "imagemagick",
            "convert_bin": "convert",
            "font": "Arial",
            "pointsize": 72,
            "text_color": "white",
        },
        "video": {
            "ffmpeg_bin": "ffmpeg",
            "frame_rate": "1/10",
            "codec": "libx264",
            "pix_fmt": "yuv420p",
        },
        "transition": {
            "type": "diagbr",
            "duration": 10,
        },
    }


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """
    Load encoder settings from YAML, merged over the defaults one section deep.
    With no path, config/default.yaml is used if present, else the defaults.
    An explicit path that cannot be read raises ConfigError.
    """
    if config_path is None:
        default_path = _project_root() / "config" / "default.yaml"
        if not default_path.exists():
            return _defaults()
        config_path = default_path
    data = _read_yaml(Path(config_path), loader=yaml.SafeLoader) or {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping", config_path)

    merged = _defaults()
    for section, values in data.items():
        if isinstance(values, dict) and isinstance(merged.get(section), dict):
            merged[section] = {**merged[section], **values}
        else:
            merged[section] = values
    return merged


def load_palette(path: Path) -> tuple[Color, ...]:
    """
    Ordered palette from a YAML list of {name, hex}.
    Scalars are read as plain strings so hex codes like 000000 keep their digits.
    """
    entries = _read_list(Path(path), loader=yaml.BaseLoader)
    colors: list[Color] = []
    for i, entry in enumerate(entries):
        name = _require(entry, "name", path, i)
        hex_code = _require(entry, "hex", path, i)
        colors.append(Color(name=str(name), hex=str(hex_code)))
    return tuple(colors)


def load_resolutions(path: Path) -> tuple[Resolution, ...]:
    """Resolutions from a YAML list of {width, height}; both must be positive integers."""
    entries = _read_list(Path(path), loader=yaml.SafeLoader)
    resolutions: list[Resolution] = []
    for i, entry in enumerate(entries):
        width = _positive_int(_require(entry, "width", path, i), "width", path, i)
        height = _positive_int(_require(entry, "height", path, i), "height", path, i)
        resolutions.append(Resolution(width=width, height=height))
    return tuple(resolutions)


def _read_yaml(path: Path, *, loader) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            return yaml.load(f, Loader=loader)
    except OSError as e:
        raise ConfigError(f"Error reading {path}: {e}", path) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing YAML in {path}: {e}", path) from e


def _read_list(path: Path, *, loader) -> list[dict[str, Any]]:
    data = _read_yaml(path, loader=loader)
    if data is None or data == "":
        return []
    if not isinstance(data, list):
        raise ConfigError(f"{path} must contain a list, got {type(data).__name__}", path)
    for i, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise ConfigError(f"{path}: entry {i} must be a mapping, got {type(entry).__name__}", path)
    return data


def _require(entry: dict[str, Any], key: str, path: Path, index: int) -> Any:
    if key not in entry or entry[key] is None:
        raise ConfigError(f"{path}: entry {index} is missing '{key}'", path)
    return entry[key]


def _positive_int(value: Any, key: str, path: Path, index: int) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{path}: entry {index} has non-integer {key} {value!r}", path)
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{path}: entry {index} has non-integer {key} {value!r}", path) from e
    if number != value and not isinstance(value, str):
        raise ConfigError(f"{path}: entry {index} has non-integer {key} {value!r}", path)
    if number <= 0:
        raise ConfigError(f"{path}: entry {index} has non-positive {key} {number}", path)
    return number
