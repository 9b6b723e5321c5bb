from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class TextstampError(Exception):
    pass


class InputFileNotFoundError(TextstampError):
    def __init__(self, path: Optional[Union[str, Path]]) -> None:
        super().__init__(f"specified file does not exist: {path!r}")
        self.path = None if path is None else str(path)


class ColorParseError(TextstampError, ValueError):
    pass


class FontLoadError(TextstampError):
    pass


class ConfigError(TextstampError):
    pass
