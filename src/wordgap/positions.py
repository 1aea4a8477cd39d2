"""Query position index and the gap transform.

Positions are 1-based token ordinals. The gap form keeps the first absolute
position and then records how many tokens sit strictly between each pair of
consecutive occurrences, which is what the report shows.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import TypeAlias

log = logging.getLogger(__name__)

PositionIndex: TypeAlias = dict[str, list[int]]


def build_position_index(
    tokens: Iterable[str],
    queries: Iterable[str],
) -> PositionIndex:
    """Map each query token found in ``tokens`` to its ordered positions.

    Queries that never occur are left out of the result rather than mapped
    to an empty list. Duplicate queries collapse onto one key.

    Args:
        tokens: Token sequence as produced by ``tokenize``.
        queries: Query tokens, compared by exact string equality.

    Returns:
        Mapping of query token to strictly increasing 1-based positions.
    """
    wanted = set(queries)
    index: PositionIndex = {}
    if not wanted:
        return index
    for position, token in enumerate(tokens, start=1):
        if token in wanted:
            index.setdefault(token, []).append(position)
    log.debug("Indexed %d of %d query tokens", len(index), len(wanted))
    return index


def to_gaps(positions: Mapping[str, Sequence[int]]) -> PositionIndex:
    """Replace absolute positions with gaps between consecutive occurrences.

    ``out[0]`` is the first absolute position; ``out[i]`` for ``i >= 1`` is
    ``p[i] - p[i-1] - 1``, the count of tokens strictly between two hits.
    """
    gaps: PositionIndex = {}
    for key, seq in positions.items():
        out = list(seq[:1])
        for prev, cur in zip(seq, seq[1:]):
            out.append(cur - prev - 1)
        gaps[key] = out
    return gaps


def from_gaps(gaps: Mapping[str, Sequence[int]]) -> PositionIndex:
    """Recover absolute positions from a gap index (inverse of ``to_gaps``)."""
    positions: PositionIndex = {}
    for key, seq in gaps.items():
        out = list(seq[:1])
        for gap in seq[1:]:
            out.append(out[-1] + gap + 1)
        positions[key] = out
    return positions
