"""Hidden-single strategy restricted to boxes."""

from __future__ import annotations

from ..core.grid import BOX_CENTERS, DIGITS, NO_MOVE, CandidateGrid, Field, Grid, Position


def _admits(digit: int):
    return lambda options: digit in options


def fill_box(candidates: CandidateGrid, grid: Grid) -> Field:
    """
    Propose a digit that fits only one cell of its box.

    For every box and every digit not yet written in it, count the box cells
    whose candidates still admit the digit. A count of exactly one is a
    guaranteed move.

    Returns:
        The first such move (boxes row-major, digits ascending), or ``NO_MOVE``.
    """
    for center in BOX_CENTERS:
        box = candidates.copy_neighborhood(center)
        placed = grid.get_neighborhood(center)
        for digit in DIGITS:
            if digit in placed:
                continue
            admits = _admits(digit)
            if box.count(admits) == 1:
                local = box.find(admits)
                return Field(Position(center.row + local.row - 1, center.col + local.col - 1), digit)
    return NO_MOVE
