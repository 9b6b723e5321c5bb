from __future__ import annotations

from pathlib import Path
from typing import List

import pytest
from PIL import Image, ImageFont

from textstamp.font import Scale, VMetrics


_SYSTEM_FONTS = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu-sans-fonts/DejaVuSans.ttf",
    "/Library/Fonts/Arial.ttf",
    "C:/Windows/Fonts/arial.ttf",
]


class FakeMetrics:
    """Monospace metrics: ascent is 3/4 of the scale, every glyph advances scale/2."""

    def __init__(self) -> None:
        self.calls = 0

    def v_metrics(self, scale: Scale) -> VMetrics:
        ascent = scale.y * 3 / 4
        return VMetrics(ascent=ascent, descent=-(scale.y - ascent))

    def advance_widths(self, text: str, scale: Scale) -> List[float]:
        self.calls += 1
        return [scale.x / 2 for _ in text]


@pytest.fixture
def metrics() -> FakeMetrics:
    return FakeMetrics()


@pytest.fixture(scope="session")
def font_path(tmp_path_factory: pytest.TempPathFactory) -> Path:
    for candidate in _SYSTEM_FONTS:
        p = Path(candidate)
        if p.exists():
            return p
    try:
        bundled = ImageFont.load_default(size=20)
    except TypeError:
        pytest.skip("no TrueType font available")
    data = getattr(bundled, "font_bytes", None)
    if not data:
        pytest.skip("no TrueType font available")
    out = tmp_path_factory.mktemp("fonts") / "bundled.ttf"
    out.write_bytes(data)
    return out


@pytest.fixture
def white_png(tmp_path: Path) -> Path:
    path = tmp_path / "in.png"
    Image.new("RGBA", (200, 100), (255, 255, 255, 255)).save(path)
    return path
