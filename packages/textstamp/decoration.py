from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Decoration(Enum):
    LARGER = "larger"
    NORMAL = "normal"
    SMALLER = "smaller"

    def scale_factor(self) -> float:
        if self is Decoration.LARGER:
            return 1.3
        if self is Decoration.SMALLER:
            return 0.6
        return 1.0


_MARKERS = (
    ("*", Decoration.LARGER),
    ("_", Decoration.SMALLER),
)


@dataclass(frozen=True)
class DecoratedString:
    decoration: Decoration
    body: str

    @classmethod
    def parse(cls, line: str) -> "DecoratedString":
        """
        Classify one line of input text by its surrounding markers.

        `*text*` renders larger, `_text_` renders smaller; the markers are
        stripped. A lone marker character is plain text.
        """
        s = str(line)
        if len(s) >= 2:
            for marker, decoration in _MARKERS:
                if s[0] == marker and s[-1] == marker:
                    return cls(decoration, s[1:-1])
        return cls(Decoration.NORMAL, s)

    def scale_factor(self) -> float:
        return self.decoration.scale_factor()
