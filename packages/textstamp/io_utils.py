from __future__ import annotations

import logging
import os
import tempfile
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

from PIL import Image

from textstamp.errors import InputFileNotFoundError


logger = logging.getLogger(__name__)


class Format(Enum):
    JPEG = "Jpeg"
    PNG = "Png"

    @classmethod
    def parse(cls, value: str) -> "Format":
        key = str(value).strip().lower()
        for fmt in cls:
            if fmt.value.lower() == key:
                return fmt
        raise ValueError(f"unknown output format: {value!r} (expected Jpeg or Png)")

    @property
    def pil_format(self) -> str:
        return "JPEG" if self is Format.JPEG else "PNG"

    def save_params(self) -> Dict[str, Any]:
        if self is Format.JPEG:
            return {"quality": 100}
        return {}

    def prepare(self, img: Image.Image) -> Image.Image:
        """JPEG has no alpha channel: RGBA becomes RGB and LA becomes L."""
        if self is not Format.JPEG:
            return img
        if img.mode == "LA":
            return img.convert("L")
        if img.mode not in ("RGB", "L", "CMYK"):
            return img.convert("RGB")
        return img


def check_file_exists(path: Union[str, Path]) -> None:
    if not Path(path).exists():
        raise InputFileNotFoundError(path)


def save_image_atomic(img: Image.Image, path: Union[str, Path], fmt: Format) -> None:
    """
    Encode `img` to `path` via temp file + replace to avoid truncated/partial files.
    """
    path = Path(path)
    if path.parent and not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)

    tmp_path: Optional[Path] = None
    handle = tempfile.NamedTemporaryFile(
        prefix=f"{path.name}.",
        suffix=".tmp",
        dir=str(path.parent),
        delete=False,
    )
    try:
        tmp_path = Path(handle.name)
    finally:
        handle.close()

    try:
        fmt.prepare(img).save(tmp_path, format=fmt.pil_format, **fmt.save_params())
        os.replace(tmp_path, path)
        logger.info("wrote %s (%s)", path, fmt.value)
    finally:
        if tmp_path and tmp_path.exists():
            try:
                tmp_path.unlink()
            except OSError:
                logger.warning("could not remove temp file %s", tmp_path)
