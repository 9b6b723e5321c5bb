from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Tuple, Union

from PIL import Image

from textstamp.io_utils import Format, save_image_atomic


logger = logging.getLogger(__name__)

# Bicubic with a = -0.5, i.e. Catmull-Rom.
RESAMPLE = Image.Resampling.BICUBIC


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def fit_within(size: Tuple[int, int], bounds: Tuple[int, int]) -> Tuple[int, int]:
    """
    Largest size with the aspect ratio of `size` that fits inside `bounds`.

    Each side is rounded half away from zero and never drops below 1.
    """
    src_w, src_h = int(size[0]), int(size[1])
    if src_w <= 0 or src_h <= 0:
        raise ValueError(f"invalid image size: {size}")
    ratio = min(bounds[0] / src_w, bounds[1] / src_h)
    return (max(1, _round_half_up(src_w * ratio)), max(1, _round_half_up(src_h * ratio)))


def resize_image_keep_aspect_ratio(
    in_path: Union[str, Path],
    out_path: Union[str, Path],
    width: int,
    fmt: Format,
) -> Image.Image:
    with Image.open(in_path) as src:
        src.load()
        # Height is unbounded: only the target width constrains the result.
        target = fit_within(src.size, (int(width), 0xFFFFFFFF))
        logger.info("resize %s -> %s (keep aspect)", src.size, target)
        new_image = src.resize(target, RESAMPLE)
    save_image_atomic(new_image, out_path, fmt)
    return new_image


def resize_image(
    in_path: Union[str, Path],
    out_path: Union[str, Path],
    dimensions: Tuple[int, int],
    fmt: Format,
) -> Image.Image:
    target = (int(dimensions[0]), int(dimensions[1]))
    if target[0] <= 0 or target[1] <= 0:
        raise ValueError(f"invalid target size: {target[0]}x{target[1]}")
    with Image.open(in_path) as src:
        src.load()
        logger.info("resize %s -> %s", src.size, target)
        new_image = src.resize(target, RESAMPLE)
    save_image_atomic(new_image, out_path, fmt)
    return new_image
