"""
Load TEXTSTAMP_* settings from the project root .env at interpreter startup.

Variables already present in the environment win over the file.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Iterable


PROJECT_ROOT = Path(__file__).resolve().parent
ENV_PREFIX = "TEXTSTAMP_"


def parse_env_text(text: str) -> Dict[str, str]:
    values: Dict[str, str] = {}
    for line in text.splitlines():
        stripped = line.strip()
        if stripped.startswith("export "):
            stripped = stripped[len("export "):].lstrip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, raw = stripped.split("=", 1)
        raw = raw.strip()
        if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in "\"'":
            raw = raw[1:-1]
        values[key.strip()] = raw
    return values


def load_env_files(paths: Iterable[Path]) -> None:
    for env_path in paths:
        try:
            text = env_path.read_text(encoding="utf-8")
        except OSError:
            # Missing or unreadable .env must not break python startup.
            continue
        for key, value in parse_env_text(text).items():
            if key.startswith(ENV_PREFIX):
                os.environ.setdefault(key, value)


load_env_files([PROJECT_ROOT / ".env"])
