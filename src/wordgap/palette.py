"""Fixed highlight palette, indexed circularly by query ordinal.

Colors are space-separated ``"R G B"`` triples.
"""
from __future__ import annotations

from collections.abc import Sequence

COLORS: tuple[str, ...] = (
    "255 60 60",   # red
    "60 200 60",   # green
    "60 60 255",   # blue
    "230 200 60",  # yellow
    "255 60 255",  # pink
    "60 220 220",  # cyan
)

HIGHLIGHT_FOREGROUND = "255 255 255"


def color_for(index: int, palette: Sequence[str] = COLORS) -> str:
    """Return the color for the ``index``-th query, wrapping around."""
    if not palette:
        raise ValueError("palette must not be empty")
    return palette[index % len(palette)]


def parse_rgb(color: str) -> tuple[int, int, int]:
    """Parse an ``"R G B"`` triple into integer channels."""
    parts = color.split()
    if len(parts) != 3:
        raise ValueError(f"Expected 'R G B', got {color!r}")
    r, g, b = (int(p) for p in parts)
    for channel in (r, g, b):
        if not 0 <= channel <= 255:
            raise ValueError(f"Channel out of range in {color!r}")
    return r, g, b


def rgb_to_hex(color: str) -> str:
    """``"255 60 60"`` -> ``"#ff3c3c"``."""
    r, g, b = parse_rgb(color)
    return f"#{r:02x}{g:02x}{b:02x}"
