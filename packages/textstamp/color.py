from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Tuple

from textstamp.errors import ColorParseError


RGBA = Tuple[int, int, int, int]

_HEX_RE = re.compile(r"[0-9A-Fa-f]+")


@dataclass(frozen=True)
class Color:
    r: int
    g: int
    b: int
    a: int

    @classmethod
    def parse(cls, value: str) -> "Color":
        """
        Parse `#RRGGBB` or `#RRGGBBAA`.

        The first character is treated as the `#` prefix and skipped. Six digits
        mean an opaque colour; eight carry their own alpha.
        """
        digits = str(value)[1:]
        if len(digits) not in (6, 8) or not _HEX_RE.fullmatch(digits):
            raise ColorParseError(f"Expected #RRGGBB or #RRGGBBAA: {value!r}")
        code = int(digits, 16)
        if len(digits) < 8:
            code = (code << 8) | 0x000000FF
        return cls.from_code(code)

    @classmethod
    def from_code(cls, code: int) -> "Color":
        code = int(code) & 0xFFFFFFFF
        return cls(
            r=(code & 0xFF000000) >> 24,
            g=(code & 0x00FF0000) >> 16,
            b=(code & 0x0000FF00) >> 8,
            a=code & 0x000000FF,
        )

    @classmethod
    def clear(cls) -> "Color":
        return cls(0, 0, 0, 0)

    @classmethod
    def white(cls) -> "Color":
        return cls(255, 255, 255, 255)

    @classmethod
    def black(cls) -> "Color":
        return cls(0, 0, 0, 255)

    @classmethod
    def red(cls) -> "Color":
        return cls(255, 0, 0, 255)

    @classmethod
    def green(cls) -> "Color":
        return cls(0, 255, 0, 255)

    @classmethod
    def blue(cls) -> "Color":
        return cls(0, 0, 255, 255)

    def as_tuple(self) -> RGBA:
        return (self.r, self.g, self.b, self.a)

    def __str__(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}{self.a:02x}"
