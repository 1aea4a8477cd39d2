"""Color-rotating highlight spans for query tokens in raw text.

Each query is matched literally, followed by exactly one space or newline,
over the UTF-8 bytes of the text. Byte offsets are converted to character
offsets because renderers address text by character.

This is a plain literal search, independent of ``wordgap.tokenizer``: it can
highlight a word inside a verse marker or after a waw that the tokenizer
split off, and the two are left to disagree.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass

from wordgap.palette import COLORS, color_for

log = logging.getLogger(__name__)

_TRAILING_SEPARATOR = rb"[ \n]"
_ENCODING = "utf-8"
# Lone surrogates (undecodable argv bytes) round-trip instead of raising.
_ERRORS = "surrogatepass"


@dataclass(frozen=True, slots=True)
class HighlightSpan:
    """Half-open character span ``[start, end)`` to paint with ``color``."""

    start: int
    end: int
    color: str
    query: str

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError(f"start must be >= 0, got {self.start}")
        if self.end < self.start:
            raise ValueError(f"end must be >= start, got {self.end} < {self.start}")

    def to_dict(self) -> dict[str, int | str]:
        return {
            "start": self.start,
            "end": self.end,
            "color": self.color,
            "query": self.query,
        }


def display_text(text: str) -> str:
    """Drop carriage returns so offsets match what a text widget shows."""
    return text.replace("\r", "")


def encode_text(text: str) -> bytes:
    """UTF-8 bytes of ``text`` as searched by ``find_query_offsets``."""
    return text.encode(_ENCODING, _ERRORS)


def byte_to_char_offset(data: bytes, byte_offset: int) -> int:
    """Count the characters encoded in ``data[:byte_offset]``.

    ``byte_offset`` must fall on a character boundary.
    """
    return len(data[:byte_offset].decode(_ENCODING, _ERRORS))


def query_pattern(query: str) -> re.Pattern[bytes]:
    """Compile ``query`` as a literal followed by one space or newline."""
    return re.compile(re.escape(encode_text(query)) + _TRAILING_SEPARATOR)


def find_query_offsets(text: str | bytes, query: str) -> list[int]:
    """Character start offsets of every non-overlapping match of ``query``.

    ``text`` may be passed already encoded with ``encode_text`` so several
    queries can share one encoding pass.
    """
    if not query:
        return []
    data = encode_text(text) if isinstance(text, str) else text
    offsets: list[int] = []
    byte_pos = 0
    char_pos = 0
    for match in query_pattern(query).finditer(data):
        # Matches arrive in order, so only the bytes since the last one
        # need decoding.
        char_pos += byte_to_char_offset(data[byte_pos:], match.start() - byte_pos)
        byte_pos = match.start()
        offsets.append(char_pos)
    return offsets


def compute_highlights(
    text: str,
    queries: Sequence[str],
    palette: Sequence[str] = COLORS,
) -> list[HighlightSpan]:
    """Build highlight spans for every query, grouped in query order.

    Query ``i`` is painted with ``palette[i % len(palette)]`` whether or not
    it matches. Duplicate queries are matched again with their own color.
    Spans may overlap; nothing is merged.
    """
    data = encode_text(text)
    spans: list[HighlightSpan] = []
    for i, query in enumerate(queries):
        color = color_for(i, palette)
        length = len(query)
        offsets = find_query_offsets(data, query)
        spans.extend(
            HighlightSpan(start=start, end=start + length, color=color, query=query)
            for start in offsets
        )
        log.debug("Query %r: %d highlight span(s)", query, len(offsets))
    return spans
