from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from textstamp.color import Color
from textstamp.errors import FontLoadError
from textstamp.io_utils import Format
from textstamp.layout import Gravity
from textstamp.pair import Pair
from textstamp.render import DrawingOptions, draw_text_luma_alpha, draw_text_rgba, shadow_positions


def _options(src: Path, out: Path, font: Path, **overrides) -> DrawingOptions:
    values = dict(
        in_path=src,
        out_path=out,
        text="Hello\nWorld",
        color=Color.black(),
        shadow_color=None,
        font_path=font,
        height=20,
        position=None,
        gravity=Gravity.CENTERED,
        format=Format.PNG,
    )
    values.update(overrides)
    return DrawingOptions(**values)


def test_shadow_positions_surround_origin() -> None:
    assert shadow_positions(10, 5) == [(12, 7), (8, 7), (8, 3), (12, 3)]


def test_shadow_positions_saturate_at_zero() -> None:
    assert shadow_positions(1, 0) == [(3, 2), (0, 2), (0, 0), (3, 0)]
    assert shadow_positions(-30, -4) == [(2, 2), (0, 2), (0, 0), (2, 0)]


def test_draw_text_rgba_writes_dark_text(white_png: Path, font_path: Path, tmp_path: Path) -> None:
    out = tmp_path / "out.png"
    draw_text_rgba(_options(white_png, out, font_path))
    with Image.open(out) as img:
        assert img.size == (200, 100)
        assert img.mode == "RGBA"
        darkest = img.convert("L").getextrema()[0]
    assert darkest < 128


def test_draw_text_rgba_with_shadow_uses_both_colors(white_png: Path, font_path: Path, tmp_path: Path) -> None:
    out = tmp_path / "out.png"
    draw_text_rgba(
        _options(white_png, out, font_path, color=Color.blue(), shadow_color=Color.red(), height=30)
    )
    with Image.open(out) as img:
        pixels = list(img.convert("RGB").getdata())
    assert any(r > 200 and g < 60 and b < 60 for r, g, b in pixels)
    assert any(b > 200 and r < 60 and g < 60 for r, g, b in pixels)


def test_text_outside_canvas_is_clamped(white_png: Path, font_path: Path, tmp_path: Path) -> None:
    out = tmp_path / "out.png"
    draw_text_rgba(_options(white_png, out, font_path, text="a very long line of text indeed", gravity=Gravity.RIGHT_CENTERED))
    with Image.open(out) as img:
        left_strip = img.convert("L").crop((0, 0, 10, 100))
        assert left_strip.getextrema()[0] < 200


def test_explicit_position(white_png: Path, font_path: Path, tmp_path: Path) -> None:
    out = tmp_path / "out.png"
    draw_text_rgba(_options(white_png, out, font_path, text="X", gravity=None, position=Pair(150, 60)))
    with Image.open(out) as img:
        gray = img.convert("L")
        assert gray.crop((0, 0, 140, 100)).getextrema()[0] == 255
        assert gray.crop((140, 55, 200, 100)).getextrema()[0] < 128


def test_draw_text_luma_alpha_ignores_requested_colors(white_png: Path, font_path: Path, tmp_path: Path) -> None:
    out = tmp_path / "out.png"
    draw_text_luma_alpha(
        _options(white_png, out, font_path, color=Color.red(), shadow_color=Color.green(), height=30)
    )
    with Image.open(out) as img:
        assert img.mode == "LA"
        luma, alpha = img.split()
        assert luma.getextrema()[0] < 64
        assert alpha.getextrema() == (255, 255)


def test_jpeg_output_drops_alpha(white_png: Path, font_path: Path, tmp_path: Path) -> None:
    out = tmp_path / "out.jpg"
    draw_text_rgba(_options(white_png, out, font_path, format=Format.JPEG))
    with Image.open(out) as img:
        assert img.format == "JPEG"
        assert img.mode == "RGB"


def test_bad_font_writes_nothing(white_png: Path, tmp_path: Path) -> None:
    bogus = tmp_path / "bogus.ttf"
    bogus.write_bytes(b"nope")
    out = tmp_path / "out.png"
    with pytest.raises(FontLoadError):
        draw_text_rgba(_options(white_png, out, bogus))
    assert not out.exists()
