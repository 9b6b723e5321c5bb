from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, List, Optional, Protocol, Sequence, Tuple

from textstamp.decoration import DecoratedString
from textstamp.font import Scale, VMetrics


logger = logging.getLogger(__name__)


class GlyphMetrics(Protocol):
    def v_metrics(self, scale: Scale) -> VMetrics:
        ...

    def advance_widths(self, text: str, scale: Scale) -> Sequence[float]:
        ...


class Gravity(Enum):
    UPPER_CENTERED = "UpperCentered"
    LEFT_CENTERED = "LeftCentered"
    LOWER_CENTERED = "LowerCentered"
    RIGHT_CENTERED = "RightCentered"
    CENTERED = "Centered"

    @classmethod
    def parse(cls, value: str) -> "Gravity":
        key = str(value).strip().lower()
        for g in cls:
            if g.value.lower() == key:
                return g
        raise ValueError(f"unknown gravity: {value!r} (expected one of {', '.join(g.value for g in cls)})")

    def offset(self, canvas_size: Tuple[int, int], max_width: int, total_height: int) -> Tuple[int, int]:
        """Translation that anchors a block of `max_width` x `total_height` on the canvas."""
        w, h = int(canvas_size[0]), int(canvas_size[1])
        margin = _half_up(total_height / 16.0)
        if self is Gravity.UPPER_CENTERED:
            return (_half_up((w - max_width) / 2.0), margin)
        if self is Gravity.LEFT_CENTERED:
            return (margin, _half_up((h - total_height) / 2.0))
        if self is Gravity.LOWER_CENTERED:
            return (_half_up((w - max_width) / 2.0), (h - total_height) - margin)
        if self is Gravity.RIGHT_CENTERED:
            return (w - max_width, _half_up((h - total_height) / 2.0))
        return (_half_up((w - max_width) / 2.0), _half_up((h - total_height) / 2.0))


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    def translated(self, dx: int, dy: int) -> "Rect":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.x, self.y, self.width, self.height)


@dataclass(frozen=True)
class TextBox:
    body: str
    scale: Scale
    rect: Rect


def _half_up(value: float) -> int:
    # int() truncates toward zero, like a float-to-int cast.
    return int(value + 0.5)


def split_lines(text: str) -> List[str]:
    """
    Split on `\\n`, dropping one trailing `\\r` per line.

    A trailing newline does not produce an extra empty line.
    """
    if not text:
        return []
    parts = str(text).split("\n")
    if parts[-1] == "":
        parts.pop()
    return [p[:-1] if p.endswith("\r") else p for p in parts]


def _stack(
    lines: Iterable[str],
    metrics: GlyphMetrics,
    height: int,
    origin: Tuple[int, int],
) -> List[TextBox]:
    previous = Rect(int(origin[0]), int(origin[1]), 0, 0)
    boxes: List[TextBox] = []
    for raw in lines:
        line = DecoratedString.parse(raw)
        scale = Scale.uniform(float(height) * line.scale_factor())

        vm = metrics.v_metrics(scale)
        line_height = abs(vm.ascent) + abs(vm.descent)
        line_width = sum(metrics.advance_widths(line.body, scale), 0.0) + 0.5

        # Each line is centred under its predecessor, not under the widest line.
        dx = _half_up((previous.width - line_width) / 2.0) if previous.width != 0 else 0

        rect = Rect(
            x=previous.x + dx,
            y=previous.y + previous.height,
            width=int(line_width),
            height=int(line_height),
        )
        boxes.append(TextBox(body=line.body, scale=scale, rect=rect))
        previous = rect
    return boxes


def textboxes(
    lines: Iterable[str],
    metrics: GlyphMetrics,
    height: int,
    canvas_size: Tuple[int, int],
    *,
    position: Optional[Tuple[int, int]] = None,
    gravity: Optional[Gravity] = None,
) -> List[TextBox]:
    """
    Lay out `lines` (raw, still decorated) as stacked text boxes.

    With an explicit `position` the first line's top-left corner sits there and
    each following line starts at the previous line's bottom. Without one, the
    block is stacked at (0, 0) and then translated as a whole according to
    `gravity` (Centered when unset).
    """
    if position is not None:
        return _stack(lines, metrics, height, position)

    provisional = _stack(lines, metrics, height, (0, 0))
    max_width = max((tb.rect.width for tb in provisional), default=0)
    total_height = sum(tb.rect.height for tb in provisional)
    g = gravity or Gravity.CENTERED

    logger.info("canvas size: %s", tuple(canvas_size))
    logger.info("max_width: %d", max_width)

    dx, dy = g.offset(canvas_size, max_width, total_height)
    return [replace(tb, rect=tb.rect.translated(dx, dy)) for tb in provisional]
