"""Plain-text report of a position or gap index.

One line per query token, sorted by token, followed by its numbers. Cells
are laid out in aligned columns: every cell is padded to the widest cell of
its column block plus two spaces, where a column block is a run of
consecutive lines that all have a cell in that column. Widths are counted in
characters, not bytes.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path

CELL_PADDING = 2


def _column_widths(rows: list[list[str]]) -> list[list[int]]:
    widths = [[0] * len(row) for row in rows]
    max_cols = max((len(row) for row in rows), default=0)
    for col in range(max_cols):
        r = 0
        while r < len(rows):
            if len(rows[r]) <= col:
                r += 1
                continue
            block_end = r
            while block_end < len(rows) and len(rows[block_end]) > col:
                block_end += 1
            width = max(len(rows[i][col]) for i in range(r, block_end)) + CELL_PADDING
            for i in range(r, block_end):
                widths[i][col] = width
            r = block_end
    return widths


def format_results(index: Mapping[str, Sequence[int]]) -> str:
    """Render ``index`` as aligned text, keys sorted lexicographically."""
    rows = [[key, *(str(n) for n in index[key])] for key in sorted(index)]
    widths = _column_widths(rows)
    lines = [
        "".join(cell.ljust(width) for cell, width in zip(row, row_widths))
        for row, row_widths in zip(rows, widths)
    ]
    return "".join(line + "\n" for line in lines)


def write_report(index: Mapping[str, Sequence[int]], path: Path) -> None:
    """Write the formatted report to ``path`` as UTF-8."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(format_results(index), encoding="utf-8")


def parse_report(text: str) -> dict[str, list[int]]:
    """Read a report produced by ``format_results`` back into an index.

    Lines are split on newlines and fields on runs of spaces only, the
    padding ``format_results`` writes, so keys holding tabs, no-break spaces or
    other Unicode whitespace read back intact. A trailing carriage return is
    dropped. Blank lines are skipped.
    Raises ValueError on a non-integer field.
    """
    index: dict[str, list[int]] = {}
    for lineno, line in enumerate(text.split("\n"), start=1):
        fields = [f for f in line.removesuffix("\r").split(" ") if f]
        if not fields:
            continue
        key, *numbers = fields
        try:
            index[key] = [int(n) for n in numbers]
        except ValueError as exc:
            raise ValueError(f"line {lineno}: non-integer field in {line!r}") from exc
    return index
