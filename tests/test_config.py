from __future__ import annotations

from pathlib import Path

import pytest

from textstamp.config import load_settings
from textstamp.errors import ConfigError


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    for key in ("TEXTSTAMP_CONFIG", "TEXTSTAMP_LOG_LEVEL", "TEXTSTAMP_FONT"):
        monkeypatch.delenv(key, raising=False)


def test_defaults_without_config_file() -> None:
    s = load_settings()
    assert s.color == "#000000ff"
    assert s.shadow_color is None
    assert s.font is None
    assert s.font_height == 12
    assert s.format == "Png"
    assert s.log_level == "WARNING"
    assert s.source is None


def test_yaml_file_overrides_defaults(tmp_path: Path) -> None:
    cfg = tmp_path / "textstamp.yaml"
    cfg.write_text("color: '#ffffff'\nfont_height: 32\nformat: Jpeg\nshadow_color: '#00000080'\n", encoding="utf-8")
    s = load_settings(cfg)
    assert s.color == "#ffffff"
    assert s.font_height == 32
    assert s.format == "Jpeg"
    assert s.shadow_color == "#00000080"
    assert s.source == cfg


def test_home_config_is_picked_up(tmp_path: Path) -> None:
    cfg = tmp_path / "home" / ".config" / "textstamp" / "config.yaml"
    cfg.parent.mkdir(parents=True)
    cfg.write_text("font: /fonts/Sans.ttf\n", encoding="utf-8")
    s = load_settings()
    assert s.font == "/fonts/Sans.ttf"
    assert s.source == cfg


def test_env_config_path_and_overrides(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    cfg = tmp_path / "env.yaml"
    cfg.write_text("log_level: info\nfont: a.ttf\n", encoding="utf-8")
    monkeypatch.setenv("TEXTSTAMP_CONFIG", str(cfg))
    monkeypatch.setenv("TEXTSTAMP_FONT", "b.ttf")
    s = load_settings()
    assert s.log_level == "INFO"
    assert s.font == "b.ttf"


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    cfg = tmp_path / "empty.yaml"
    cfg.write_text("", encoding="utf-8")
    assert load_settings(cfg).font_height == 12


def test_explicit_missing_file_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_settings(tmp_path / "nope.yaml")


@pytest.mark.parametrize(
    "payload",
    [
        "- just\n- a list\n",
        "color: [unclosed\n",
        "colour: '#ffffff'\n",
        "font_height: tall\n",
    ],
)
def test_invalid_files_are_rejected(tmp_path: Path, payload: str) -> None:
    cfg = tmp_path / "bad.yaml"
    cfg.write_text(payload, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_settings(cfg)
