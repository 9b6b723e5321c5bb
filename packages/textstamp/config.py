from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from textstamp.errors import ConfigError


CONF_ENV = "TEXTSTAMP_CONFIG"
LOG_LEVEL_ENV = "TEXTSTAMP_LOG_LEVEL"
FONT_ENV = "TEXTSTAMP_FONT"

DEFAULT: Dict[str, Any] = {
    "color": "#000000ff",
    "shadow_color": None,
    "font": None,
    "font_height": 12,
    "format": "Png",
    "log_level": "WARNING",
}


@dataclass(frozen=True)
class Settings:
    color: str
    shadow_color: Optional[str]
    font: Optional[str]
    font_height: int
    format: str
    log_level: str
    source: Optional[Path] = None


def default_config_path() -> Path:
    return Path.home() / ".config" / "textstamp" / "config.yaml"


def resolve_config_path(explicit: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """
    Config lookup order:
      - explicit path (CLI --config)
      - TEXTSTAMP_CONFIG
      - ~/.config/textstamp/config.yaml (only when it exists)
    """
    if explicit:
        return Path(explicit).expanduser()
    override = os.getenv(CONF_ENV)
    if override:
        return Path(override).expanduser()
    candidate = default_config_path()
    return candidate if candidate.exists() else None


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid config file {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"invalid config payload (expected a mapping): {path}")
    unknown = sorted(k for k in data if k not in DEFAULT)
    if unknown:
        raise ConfigError(f"unknown config keys in {path}: {', '.join(map(str, unknown))}")
    return data


def _as_height(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"font_height must be an integer: {value!r}") from exc


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    merged = dict(DEFAULT)
    source = resolve_config_path(path)
    if source is not None:
        if not source.exists():
            raise ConfigError(f"config file not found: {source}")
        merged.update(_read_yaml(source))

    level = os.getenv(LOG_LEVEL_ENV)
    if level:
        merged["log_level"] = level
    font = os.getenv(FONT_ENV)
    if font:
        merged["font"] = font

    return Settings(
        color=str(merged["color"]),
        shadow_color=str(merged["shadow_color"]) if merged.get("shadow_color") else None,
        font=str(merged["font"]) if merged.get("font") else None,
        font_height=_as_height(merged["font_height"]),
        format=str(merged["format"]),
        log_level=str(merged["log_level"]).upper(),
        source=source,
    )


def configure_logging(level: str) -> None:
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        resolved = logging.WARNING
    logging.basicConfig(level=resolved, format="%(levelname)s: %(message)s")
