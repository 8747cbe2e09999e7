"""Single-level hypothesis testing for stalled puzzles."""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional
import logging

from ..core.grid import BOX_CENTERS, DIGITS, EMPTY, CandidateGrid, Field, Grid, Position
from ..core.validator import is_valid
from ..trace import NullTraceSink, TraceSink

log = logging.getLogger(__name__)

# Only strict two-way choices are tried; one way is a plain move and
# three or more get too expensive.
MAX_AMBIGUITY = 2


class Outcome(Enum):
    """Result of solving a puzzle under one hypothesis."""
    CONTRADICTION = "contradiction"
    SOLUTION = "solution"
    INCONCLUSIVE = "inconclusive"


@dataclass
class BruteforceReport:
    """What one bruteforce pass found."""
    tested: int = 0
    eliminated: List[Field] = field(default_factory=list)
    solution: Optional[Field] = None

    @property
    def changed(self) -> bool:
        return bool(self.eliminated) or self.solution is not None


def propose_hypotheses(candidates: CandidateGrid, grid: Grid) -> List[Field]:
    """
    List the placements worth testing.

    For every box and every digit missing from it, if exactly
    ``MAX_AMBIGUITY`` cells of the box admit the digit, each of them
    becomes a hypothesis. Order: boxes row-major, digits ascending, cells
    row-major within the box.
    """
    hypotheses = []
    for center in BOX_CENTERS:
        placed = grid.get_neighborhood(center)
        box = candidates.copy_neighborhood(center)
        for digit in DIGITS:
            if digit in placed:
                continue
            cells = box.find_all(lambda options: digit in options)
            if len(cells) != MAX_AMBIGUITY:
                continue
            for local in cells:
                pos = Position(center.row + local.row - 1, center.col + local.col - 1)
                hypotheses.append(Field(pos, digit))
    return hypotheses


def classify(result: Grid) -> Outcome:
    """Judge the grid a hypothesis led to."""
    has_empty = result.count(EMPTY) > 0
    valid = is_valid(result)
    if has_empty and not valid:
        return Outcome.CONTRADICTION
    if not has_empty and valid:
        return Outcome.SOLUTION
    return Outcome.INCONCLUSIVE


class BruteforcePass:
    """
    Tests hypotheses in isolated copies of the puzzle.

    Args:
        solve_hypothesis: Solves a cloned grid holding one hypothesis and
            returns the resulting grid. The solver passes a nested session
            that does no bruteforcing of its own, which keeps the search to
            a single level.
        trace: Sink for step-by-step events.
    """

    def __init__(self, solve_hypothesis: Callable[[Grid], Grid], trace: Optional[TraceSink] = None):
        self.solve_hypothesis = solve_hypothesis
        self.trace = trace or NullTraceSink()

    def run(self, grid: Grid, candidates: CandidateGrid) -> BruteforceReport:
        """
        Test every hypothesis of the current state.

        Disproved hypotheses are removed from ``candidates`` right away. The
        first hypothesis that leads to a complete valid grid is returned as
        ``report.solution`` and ends the pass; committing it is up to the
        caller. ``grid`` itself is never modified.
        """
        report = BruteforceReport()
        hypotheses = propose_hypotheses(candidates, grid)
        if not hypotheses:
            self.trace.append("bruteforce: nothing to do")
            return report

        for hypothesis in hypotheses:
            (row, col), digit = hypothesis
            scenario = grid.copy()
            scenario.set(row, col, digit)
            report.tested += 1
            outcome = classify(self.solve_hypothesis(scenario))

            if outcome is Outcome.CONTRADICTION:
                self.trace.append(f"bruteforce: contradiction from {digit} at {(row, col)}")
                candidates.discard(hypothesis.position, digit)
                report.eliminated.append(hypothesis)
            elif outcome is Outcome.SOLUTION:
                self.trace.append(f"bruteforce: solution from {digit} at {(row, col)}")
                report.solution = hypothesis
                break
            else:
                self.trace.append(f"bruteforce: nothing from {digit} at {(row, col)}")

        log.debug(
            "Bruteforce tested %d hypotheses, eliminated %d, solution %s",
            report.tested, len(report.eliminated), report.solution,
        )
        return report
