from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple, Union

from PIL import Image, ImageDraw, ImageFont

from textstamp.color import Color
from textstamp.font import FontFace
from textstamp.io_utils import Format, save_image_atomic
from textstamp.layout import Gravity, TextBox, split_lines, textboxes
from textstamp.pair import Pair


logger = logging.getLogger(__name__)

SHADOW_OFFSET = 2

# Grayscale path: fixed inks regardless of the requested colours.
LUMA_SHADOW_INK = (255, 255)
LUMA_TEXT_INK = (0, 255)

Paint = Callable[[Tuple[int, int], str, ImageFont.FreeTypeFont, bool], None]


@dataclass(frozen=True)
class DrawingOptions:
    in_path: Path
    out_path: Path
    text: str
    color: Color
    shadow_color: Optional[Color]
    font_path: Path
    height: int
    position: Optional[Pair] = None
    gravity: Optional[Gravity] = None
    format: Format = Format.PNG


def shadow_positions(x: int, y: int) -> List[Tuple[int, int]]:
    """Four diagonal shadow origins around (x, y); the subtracting side stops at 0."""
    x = max(0, int(x))
    y = max(0, int(y))
    o = SHADOW_OFFSET
    return [
        (x + o, y + o),
        (max(0, x - o), y + o),
        (max(0, x - o), max(0, y - o)),
        (x + o, max(0, y - o)),
    ]


def _paint_boxes(boxes: Sequence[TextBox], face: FontFace, paint: Paint, *, shadow: bool) -> None:
    for box in boxes:
        if not box.body or box.scale.y <= 0:
            continue
        font = face.truetype(box.scale)
        x = max(0, box.rect.x)
        y = max(0, box.rect.y)
        if shadow:
            for pos in shadow_positions(x, y):
                paint(pos, box.body, font, True)
        paint((x, y), box.body, font, False)


def layout_for(options: DrawingOptions, face: FontFace, canvas_size: Tuple[int, int]) -> List[TextBox]:
    position = options.position.as_tuple() if options.position is not None else None
    return textboxes(
        split_lines(options.text),
        face,
        options.height,
        canvas_size,
        position=position,
        gravity=options.gravity,
    )


def _open_converted(path: Union[str, Path], mode: str) -> Image.Image:
    with Image.open(path) as src:
        return src.convert(mode)


def draw_text_rgba(options: DrawingOptions) -> Image.Image:
    face = FontFace.load(options.font_path)
    img = _open_converted(options.in_path, "RGBA")
    boxes = layout_for(options, face, img.size)

    draw = ImageDraw.Draw(img)
    text_ink = options.color.as_tuple()
    shadow_ink = options.shadow_color.as_tuple() if options.shadow_color is not None else None

    def paint(pos: Tuple[int, int], body: str, font: ImageFont.FreeTypeFont, is_shadow: bool) -> None:
        ink = shadow_ink if is_shadow else text_ink
        draw.text(pos, body, font=font, fill=ink, anchor="la")

    _paint_boxes(boxes, face, paint, shadow=shadow_ink is not None)
    save_image_atomic(img, options.out_path, options.format)
    return img


def draw_text_luma_alpha(options: DrawingOptions) -> Image.Image:
    """
    Grayscale variant: the image is converted to luminance + alpha.

    The requested colours are ignored; the shadow is opaque white and the text
    opaque black. Each band is painted separately with its scalar ink.
    """
    face = FontFace.load(options.font_path)
    img = _open_converted(options.in_path, "LA")
    boxes = layout_for(options, face, img.size)

    luma, alpha = img.split()
    draw_luma = ImageDraw.Draw(luma)
    draw_alpha = ImageDraw.Draw(alpha)

    def paint(pos: Tuple[int, int], body: str, font: ImageFont.FreeTypeFont, is_shadow: bool) -> None:
        l_ink, a_ink = LUMA_SHADOW_INK if is_shadow else LUMA_TEXT_INK
        draw_luma.text(pos, body, font=font, fill=l_ink, anchor="la")
        draw_alpha.text(pos, body, font=font, fill=a_ink, anchor="la")

    _paint_boxes(boxes, face, paint, shadow=options.shadow_color is not None)
    out = Image.merge("LA", (luma, alpha))
    save_image_atomic(out, options.out_path, options.format)
    return out
