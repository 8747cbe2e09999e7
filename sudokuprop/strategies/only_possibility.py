"""Naked-single strategy: a cell with exactly one candidate."""

from __future__ import annotations

from ..core.grid import NO_MOVE, NOT_FOUND, CandidateGrid, Field, Grid


def only_possibility(candidates: CandidateGrid, grid: Grid) -> Field:
    """
    Propose the first cell (row-major) whose candidate set has one member.

    Returns:
        The move, or ``NO_MOVE`` if no cell is down to a single candidate.
    """
    pos = candidates.find(lambda options: len(options) == 1)
    if pos == NOT_FOUND:
        return NO_MOVE
    (digit,) = candidates[pos]
    return Field(pos, digit)
