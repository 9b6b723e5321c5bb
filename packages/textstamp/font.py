from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Union

from PIL import ImageFont

from textstamp.errors import FontLoadError


logger = logging.getLogger(__name__)

# Pillow sizes fonts by em; metrics are sampled once at this size and scaled
# linearly so that hinting at small sizes does not leak into the layout.
REFERENCE_SIZE = 1024


@dataclass(frozen=True)
class Scale:
    """Font scale in pixels: the height of ascent plus descent on each axis."""

    x: float
    y: float

    @classmethod
    def uniform(cls, value: float) -> "Scale":
        return cls(float(value), float(value))


@dataclass(frozen=True)
class VMetrics:
    ascent: float
    descent: float  # negative: distance below the baseline


class FontFace:
    """
    Glyph-metrics provider bound to one loaded font face.

    The face is decoded from an in-memory buffer at index 0 of the font (or
    collection). `v_metrics` and `advance_widths` answer in pixels for a given
    `Scale`; `truetype` returns the matching Pillow font for rasterization.
    """

    def __init__(self, data: bytes, *, index: int = 0) -> None:
        self._data = bytes(data)
        self._index = int(index)
        try:
            self._reference = ImageFont.truetype(io.BytesIO(self._data), REFERENCE_SIZE, index=self._index)
        except (OSError, ValueError) as exc:
            raise FontLoadError(f"cannot decode font face {self._index}: {exc}") from exc
        ascent, descent = self._reference.getmetrics()
        self._ref_ascent = float(abs(ascent))
        self._ref_descent = float(abs(descent))
        self._ref_height = self._ref_ascent + self._ref_descent
        if self._ref_height <= 0:
            raise FontLoadError(f"font face {self._index} has no vertical extent")
        self._ref_advances: Dict[str, float] = {}
        self._sized: Dict[float, ImageFont.FreeTypeFont] = {}

    @classmethod
    def load(cls, path: Union[str, Path], *, index: int = 0) -> "FontFace":
        data = Path(path).read_bytes()
        logger.debug("read %d font bytes from %s", len(data), path)
        return cls(data, index=index)

    def v_metrics(self, scale: Scale) -> VMetrics:
        ascent = float(scale.y) * self._ref_ascent / self._ref_height
        return VMetrics(ascent=ascent, descent=ascent - float(scale.y))

    def _reference_advance(self, ch: str) -> float:
        adv = self._ref_advances.get(ch)
        if adv is None:
            adv = float(self._reference.getlength(ch))
            self._ref_advances[ch] = adv
        return adv

    def advance_widths(self, text: str, scale: Scale) -> List[float]:
        """Horizontal advance of each glyph of `text`, without kerning."""
        factor = float(scale.x) / self._ref_height
        return [self._reference_advance(ch) * factor for ch in text]

    def em_size(self, scale: Scale) -> float:
        return REFERENCE_SIZE * float(scale.y) / self._ref_height

    def truetype(self, scale: Scale) -> ImageFont.FreeTypeFont:
        size = self.em_size(scale)
        font = self._sized.get(size)
        if font is None:
            font = ImageFont.truetype(io.BytesIO(self._data), size, index=self._index)
            self._sized[size] = font
        return font
