"""Word splitting for Quranic and classical Arabic text.

Tokens are maximal runs of characters between boundaries. Two rules go
beyond plain whitespace splitting:

  marker      — a parenthesized verse number such as ``(13)`` is dropped
                whole; every character from ``(`` through ``)`` is a boundary.
  conjunction — the letter waw (``و``) is a boundary when the character right
                before it is whitespace, so a waw opening a word is cut off
                and the rest of the word is counted on its own.

The boundary predicate is a small state machine (``BoundaryClassifier``)
with one character of look-back. ``split_fields`` is the generic splitter
that consumes any such predicate.
"""
from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass

CONJUNCTION_LETTER = "\u0648"  # ARABIC LETTER WAW
WHITESPACE: frozenset[str] = frozenset({" ", "\n", "\r"})
MARKER_OPEN = "("
MARKER_CLOSE = ")"


def is_whitespace(ch: str) -> bool:
    """Return True for the plain whitespace set (space, LF, CR)."""
    return ch in WHITESPACE


@dataclass(slots=True)
class BoundaryClassifier:
    """Per-character boundary predicate with one character of look-back.

    ``last_char`` starts as ``"."`` so a waw at the very start of the text is
    not a boundary. A marker that is never closed keeps ``inside_marker`` set
    for the rest of the input.
    """

    last_char: str = "."
    inside_marker: bool = False

    def classify(self, ch: str) -> bool:
        """Return True if ``ch`` is a boundary, then remember it."""
        try:
            return self._is_boundary(ch)
        finally:
            self.last_char = ch

    def _is_boundary(self, ch: str) -> bool:
        if ch == MARKER_OPEN:
            self.inside_marker = True
            return True
        if ch == MARKER_CLOSE:
            self.inside_marker = False
            return True
        if self.inside_marker:
            return True
        if is_whitespace(ch):
            return True
        return ch == CONJUNCTION_LETTER and is_whitespace(self.last_char)

    def __call__(self, ch: str) -> bool:
        return self.classify(ch)


def iter_fields(text: str, is_boundary: Callable[[str], bool]) -> Iterator[str]:
    """Yield the non-empty runs of ``text`` between boundary characters.

    ``is_boundary`` is called exactly once per character, left to right, so
    stateful predicates see the whole text in order.
    """
    start: int | None = None
    for i, ch in enumerate(text):
        if is_boundary(ch):
            if start is not None:
                yield text[start:i]
                start = None
        elif start is None:
            start = i
    if start is not None:
        yield text[start:]


def split_fields(text: str, is_boundary: Callable[[str], bool]) -> list[str]:
    """Split ``text`` on boundary characters, dropping empty fields."""
    return list(iter_fields(text, is_boundary))


def tokenize(text: str) -> list[str]:
    """Split raw corpus text into tokens using the verse/conjunction rules.

    >>> tokenize("الر (1) كتاب أنزلناه")
    ['الر', 'كتاب', 'أنزلناه']
    """
    return split_fields(text, BoundaryClassifier())
