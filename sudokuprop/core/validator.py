"""Validation utilities for Sudoku grids."""

from __future__ import annotations
from typing import TYPE_CHECKING, Callable, Iterable, Optional

from .grid import BOX_CENTERS, EMPTY, Container

if TYPE_CHECKING:
    from .grid import Grid


def has_duplicates(values: Iterable[int], ignored: Iterable[int] = (EMPTY,)) -> bool:
    """
    Check a row, column or box for repeated values.

    Args:
        values: Values in any order.
        ignored: Values allowed to repeat (empty cells by default).

    Returns:
        True if any value outside ``ignored`` occurs more than once.
    """
    ignored = set(ignored)
    seen = set()
    for value in values:
        if value in ignored:
            continue
        if value in seen:
            return True
        seen.add(value)
    return False


def is_valid(grid: Grid, extra_check: Optional[Callable[[Grid], bool]] = None) -> bool:
    """
    Check that a fully or partially filled grid has no conflicts.

    Args:
        grid: The grid to validate.
        extra_check: Optional predicate evaluated after the built-in checks.

    Returns:
        True if no row, column or box holds the same non-empty value twice
        and ``extra_check`` (if any) holds.
    """
    for i in range(grid.height):
        if has_duplicates(grid.get_row(i, Container.SEQUENCE)):
            return False

    for j in range(grid.width):
        if has_duplicates(grid.get_column(j, Container.SEQUENCE)):
            return False

    for center in BOX_CENTERS:
        box = grid.copy_neighborhood(center)
        if has_duplicates(box.cells.flatten().tolist()):
            return False

    return extra_check is None or extra_check(grid)


def is_solved(grid: Grid) -> bool:
    """Check if the grid is completely and correctly filled."""
    return grid.is_complete() and is_valid(grid)


def validate_solution(puzzle: Grid, solution: Grid) -> bool:
    """
    Validate that a solution correctly solves the puzzle.

    Args:
        puzzle: The original puzzle.
        solution: The proposed solution.

    Returns:
        True if solution is complete, valid and keeps every clue of the puzzle.
    """
    if puzzle.shape != solution.shape:
        return False

    for pos in puzzle.positions():
        if puzzle[pos] != EMPTY and puzzle[pos] != solution[pos]:
            return False

    return is_solved(solution)
