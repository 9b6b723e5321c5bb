from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


_U32_MAX = 0xFFFFFFFF


def parse_u32(token: str) -> Optional[int]:
    """Strict unsigned parse: ASCII digits with an optional leading "+", within 32 bits."""
    t = token[1:] if token.startswith("+") else token
    if not t or not t.isascii() or not t.isdigit():
        return None
    value = int(t)
    return value if value <= _U32_MAX else None


@dataclass(frozen=True)
class Pair:
    x: int
    y: int

    @classmethod
    def parse(cls, value: str) -> "Pair":
        """
        Parse a dimension flag such as `640x480` or `640`.

        Unparseable components become 0 instead of raising; exactly two
        `x`-separated tokens give (x, y), anything else repeats the first token.
        """
        tokens = [parse_u32(tok) or 0 for tok in str(value).split("x")]
        if len(tokens) == 2:
            return cls(tokens[0], tokens[1])
        return cls(tokens[0], tokens[0])

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def __str__(self) -> str:
        return f"{self.x}x{self.y}"
