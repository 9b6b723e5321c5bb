"""Overlay styled multi-line text onto images, or resize them."""

from __future__ import annotations

__version__ = "0.1.0"
