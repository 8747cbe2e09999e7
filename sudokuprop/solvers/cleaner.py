"""Locked-candidate elimination on the candidate grid."""

from __future__ import annotations
from enum import Enum
from typing import List, NamedTuple, Optional
import logging

from .base_solver import SolverLogicError
from ..core.grid import (
    BOX_CENTERS, BOX_SIZE, DIGITS, EMPTY, NOT_FOUND, SIZE,
    CandidateGrid, Grid, Position, box_center,
)
from ..trace import NullTraceSink, TraceSink

log = logging.getLogger(__name__)


class Relation(Enum):
    """What is known about a digit and one line of a box."""
    MUST_BE_IN_ROW = "must be in row"
    MUST_BE_IN_COLUMN = "must be in column"
    MUST_NOT_BE_IN_ROW = "must not be in row"
    MUST_NOT_BE_IN_COLUMN = "must not be in column"


class Rule(NamedTuple):
    """A relation to one of the box's local lines, numbered 1 to 3."""
    relation: Relation
    index: int


class Cleaner:
    """
    Shrinks candidates by reasoning about lines inside a box.

    For a digit missing from a box, each of the box's three local columns is
    ruled out when the full grid column already holds the digit or when the
    local column has no empty cell left. If two columns are ruled out the
    digit is locked into the third, so it can be removed from every other
    cell of that grid column outside the box.

    Only columns are examined unless ``mirror_rows`` is set, in which case
    the same rule also runs on the box's rows.
    """

    def __init__(self, trace: Optional[TraceSink] = None, mirror_rows: bool = False):
        self.trace = trace or NullTraceSink()
        self.mirror_rows = mirror_rows

    def clean_all(self, grid: Grid, candidates: CandidateGrid) -> int:
        """
        Run the elimination for every digit.

        Raises:
            SolverLogicError: The grid has no empty cell left to clean.

        Returns:
            Number of candidates removed.
        """
        if grid.is_complete():
            raise SolverLogicError("Cannot clean candidates of a complete grid")
        removed = sum(self.clean(grid, candidates, digit) for digit in DIGITS)
        log.debug("Cleaner removed %d candidates", removed)
        return removed

    def clean(self, grid: Grid, candidates: CandidateGrid, digit: int) -> int:
        """Run the elimination for one digit. Returns the number of candidates removed."""
        placed = grid.count(digit)
        if placed == 0 or placed == SIZE:
            return 0

        self.trace.append(f"clean digit {digit}: {placed} placed, {grid.count_filled()} cells known")
        removed = 0
        for center in BOX_CENTERS:
            box = grid.copy_neighborhood(center)
            if box.find(digit) != NOT_FOUND:
                continue
            removed += self._clean_box(grid, candidates, box, center, digit, column=True)
            if self.mirror_rows:
                removed += self._clean_box(grid, candidates, box, center, digit, column=False)
        return removed

    def local_rules(self, grid: Grid, box: Grid, center: Position, digit: int, column: bool = True) -> List[Rule]:
        """
        Derive rules for ``digit`` on the local columns (or rows) of a box.

        Returns the ``MUST_NOT`` rules for excluded lines, followed by a
        ``MUST_BE`` rule when exactly one line is left.
        """
        if column:
            excluded, forced = Relation.MUST_NOT_BE_IN_COLUMN, Relation.MUST_BE_IN_COLUMN
            first = center.col - 1
        else:
            excluded, forced = Relation.MUST_NOT_BE_IN_ROW, Relation.MUST_BE_IN_ROW
            first = center.row - 1

        rules = []
        for offset in range(BOX_SIZE):
            if column:
                full_line = grid.get_column(first + offset)
                local_line = box.get_column(offset)
            else:
                full_line = grid.get_row(first + offset)
                local_line = box.get_row(offset)
            if digit in full_line or EMPTY not in local_line:
                rules.append(Rule(excluded, offset + 1))

        if len(rules) >= 2:
            remaining = set(range(1, BOX_SIZE + 1)) - {rule.index for rule in rules}
            if len(remaining) == 1:
                rules.append(Rule(forced, remaining.pop()))
        return rules

    def _clean_box(self, grid: Grid, candidates: CandidateGrid, box: Grid,
                   center: Position, digit: int, column: bool) -> int:
        rules = self.local_rules(grid, box, center, digit, column)
        forced = [rule for rule in rules if rule.relation in (Relation.MUST_BE_IN_COLUMN, Relation.MUST_BE_IN_ROW)]
        if not forced:
            return 0

        rule = forced[0]
        line = (center.col if column else center.row) + rule.index - 2
        self.trace.append(f"box {tuple(center)}: digit {digit} {rule.relation.value} {line}")

        removed = 0
        for i in range(SIZE):
            pos = Position(i, line) if column else Position(line, i)
            if box_center(pos) == center:
                continue
            if candidates.discard(pos, digit):
                self.trace.append(f"erase {digit} from candidates at {tuple(pos)}")
                removed += 1
        return removed
