"""One query run: read a text, index the query tokens, compute highlights.

``analyze_text`` is the pure part and works on text already in memory;
``run_query`` adds reading the source file. Both return a ``QueryResult``
holding independent copies of everything they computed.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from wordgap.highlight import HighlightSpan, compute_highlights, display_text
from wordgap.io_utils import read_text_source
from wordgap.palette import COLORS
from wordgap.positions import PositionIndex, build_position_index, to_gaps
from wordgap.tokenizer import tokenize

log = logging.getLogger(__name__)


def _json_safe(s: str) -> str:
    """Replace lone surrogates (undecodable argv bytes) with U+FFFD for JSON."""
    return "".join("\ufffd" if "\ud800" <= ch <= "\udfff" else ch for ch in s)


def parse_queries(raw: str) -> list[str]:
    """Split user input into query tokens on any whitespace."""
    return raw.split()


@dataclass(frozen=True, slots=True)
class QueryResult:
    """Outputs of a query run over one document."""

    queries: tuple[str, ...]
    text: str  # display text, carriage returns removed
    token_count: int
    positions: PositionIndex
    gaps: PositionIndex
    spans: tuple[HighlightSpan, ...]

    def to_dict(self) -> dict[str, Any]:
        spans = []
        for span in self.spans:
            row = span.to_dict()
            row["query"] = _json_safe(span.query)
            spans.append(row)
        return {
            "queries": [_json_safe(q) for q in self.queries],
            "token_count": self.token_count,
            "positions": {_json_safe(k): list(v) for k, v in self.positions.items()},
            "gaps": {_json_safe(k): list(v) for k, v in self.gaps.items()},
            "spans": spans,
        }


def analyze_text(
    text: str,
    queries: Sequence[str],
    palette: Sequence[str] = COLORS,
) -> QueryResult:
    """Index and highlight ``queries`` in ``text``."""
    tokens = tokenize(text)
    positions = build_position_index(tokens, queries)
    shown = display_text(text)
    spans = compute_highlights(shown, queries, palette)
    log.debug(
        "%d tokens, %d/%d queries found, %d spans",
        len(tokens), len(positions), len(set(queries)), len(spans),
    )
    return QueryResult(
        queries=tuple(queries),
        text=shown,
        token_count=len(tokens),
        positions=positions,
        gaps=to_gaps(positions),
        spans=tuple(spans),
    )


def run_query(
    queries: Sequence[str],
    source: Path,
    palette: Sequence[str] = COLORS,
) -> QueryResult:
    """Read ``source`` and analyze it.

    Raises:
        InputUnavailable: ``source`` cannot be read.
    """
    text = read_text_source(source)
    log.info("Read %d characters from %s", len(text), source)
    return analyze_text(text, queries, palette)
