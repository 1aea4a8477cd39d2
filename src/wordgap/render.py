"""Presentation of highlight spans: standalone HTML and ANSI terminal output.

Spans are applied like stacked format tags on a text widget: where several
spans cover the same characters, the one registered last decides the color.
The text is cut at every span edge and each piece is painted once.
"""
from __future__ import annotations

from collections.abc import Sequence

from bs4 import BeautifulSoup

from wordgap.highlight import HighlightSpan
from wordgap.palette import HIGHLIGHT_FOREGROUND, parse_rgb, rgb_to_hex

_HTML_SKELETON = (
    "<!DOCTYPE html>"
    "<html><head><meta charset=\"utf-8\"/><title></title></head><body></body></html>"
)

_ANSI_RESET = "\x1b[0m"


def paint_segments(
    text: str,
    spans: Sequence[HighlightSpan],
) -> list[tuple[str, HighlightSpan | None]]:
    """Cut ``text`` at span edges and pair each piece with its top span.

    Spans reaching past the end of the text are clipped; empty spans are
    ignored. Concatenating the pieces gives back ``text``.
    """
    n = len(text)
    live = [s for s in spans if s.start < min(s.end, n)]
    cuts = sorted({0, n, *(s.start for s in live), *(min(s.end, n) for s in live)})
    segments: list[tuple[str, HighlightSpan | None]] = []
    for a, b in zip(cuts, cuts[1:]):
        top: HighlightSpan | None = None
        for span in live:
            if span.start <= a and b <= span.end:
                top = span
        segments.append((text[a:b], top))
    return segments


def _style(color: str) -> str:
    return f"color: {rgb_to_hex(HIGHLIGHT_FOREGROUND)}; background-color: {rgb_to_hex(color)}"


def render_html(
    text: str,
    spans: Sequence[HighlightSpan],
    *,
    title: str = "wordgap",
    stats: str | None = None,
) -> str:
    """Render ``text`` as an HTML document with highlighted spans.

    Right-to-left text is handled by ``dir="auto"`` on the text block.
    ``stats`` (usually the formatted report) is appended below the text.
    """
    soup = BeautifulSoup(_HTML_SKELETON, "html.parser")
    soup.title.string = title

    block = soup.new_tag("pre", attrs={"class": "text", "dir": "auto"})
    for piece, span in paint_segments(text, spans):
        if span is None:
            block.append(piece)
            continue
        tag = soup.new_tag(
            "span",
            attrs={"class": "hit", "style": _style(span.color), "data-query": span.query},
        )
        tag.string = piece
        block.append(tag)
    soup.body.append(block)

    if stats:
        stats_block = soup.new_tag("pre", attrs={"class": "stats", "dir": "auto"})
        stats_block.string = stats
        soup.body.append(stats_block)
    return str(soup)


def _ansi_color(color: str) -> str:
    fr, fg, fb = parse_rgb(HIGHLIGHT_FOREGROUND)
    br, bg, bb = parse_rgb(color)
    return f"\x1b[38;2;{fr};{fg};{fb};48;2;{br};{bg};{bb}m"


def render_ansi(text: str, spans: Sequence[HighlightSpan]) -> str:
    """Render ``text`` with 24-bit ANSI background colors for each span."""
    parts: list[str] = []
    for piece, span in paint_segments(text, spans):
        if span is None:
            parts.append(piece)
        else:
            parts.append(f"{_ansi_color(span.color)}{piece}{_ANSI_RESET}")
    return "".join(parts)
