"""Constraint-propagation solver with single-level hypothesis testing."""

from __future__ import annotations
from typing import Iterable, Optional, Set
import logging

from .base_solver import BaseSolver
from .bruteforce import BruteforcePass
from .cleaner import Cleaner
from ..core.grid import EMPTY, CandidateGrid, Field, Grid
from ..core.validator import is_solved, is_valid
from ..strategies import DEFAULT_STRATEGIES, Strategy
from ..trace import NullTraceSink, TraceSink

log = logging.getLogger(__name__)


class PropagationSolver(BaseSolver):
    """
    Sudoku solver narrowing per-cell candidates to a fixed point.

    One session:
    - INIT: compute the candidate grid from the puzzle.
    - Clean candidates (locked candidates) and run the bruteforce pass.
    - Repeatedly collect every strategy's move, apply the batch and update
      candidates until no strategy proposes anything, then clean again.
    - When propagation stalls, run the bruteforce pass and clean once more.
    - Stop when a whole pass makes no progress.

    The bruteforce pass solves each hypothesis with a nested solver that has
    bruteforce disabled, so hypotheses are only ever one level deep.
    Deeper lookahead would mean enabling it in nested sessions.

    The result is best effort: a puzzle the strategies cannot finish comes
    back partly filled, without an error.
    """

    name = "Constraint Propagation"

    def __init__(
        self,
        strategies: Iterable[Strategy] = DEFAULT_STRATEGIES,
        use_bruteforce: bool = True,
        mirror_rows: bool = False,
        trace: Optional[TraceSink] = None,
    ):
        """
        Args:
            strategies: Move functions ``(candidates, grid) -> Field`` asked on every pass.
            use_bruteforce: Test two-way hypotheses when propagation stalls.
            mirror_rows: Let the cleaner reason about box rows as well as columns.
            trace: Sink for step-by-step events (default: discard).
        """
        super().__init__()
        self.strategies = tuple(strategies)
        self.use_bruteforce = use_bruteforce
        self.mirror_rows = mirror_rows
        self.trace = trace or NullTraceSink()
        self.cleaner = Cleaner(self.trace, mirror_rows=mirror_rows)
        self.candidates: Optional[CandidateGrid] = None

    def _solve(self, grid: Grid) -> Grid:
        """Solve using propagation, cleaning and hypothesis testing."""
        result = self.run_session(grid)

        self.stats.solved = is_solved(result)
        self.stats.extra["filled_cells"] = result.count_filled()
        self.stats.extra["valid"] = is_valid(result)
        if self.stats.solved:
            log.info("Solved in %d passes", self.stats.iterations)
        else:
            log.info("Stopped after %d passes with %d empty cells", self.stats.iterations, result.count_empty())
        return result

    def run_session(self, grid: Grid) -> Grid:
        """
        Run one solving session on ``grid``, filling it in place.

        Unlike ``solve`` this does no timing or memory tracking, which makes
        it suitable for nested hypothesis sessions.

        Returns:
            ``grid``, as far as it could be filled.
        """
        self.candidates = CandidateGrid.from_grid(grid)
        self.stats.extra.update({"moves": 0, "eliminations": 0, "commits": 0})
        self.trace.append(f"new session, bruteforce {'on' if self.use_bruteforce else 'off'}:\n{grid.render()}")
        log.debug("Session started with %d empty cells", grid.count_empty())

        self._clean(grid)
        self._bruteforce(grid)

        while True:
            self.stats.iterations += 1
            moves = self.collect_moves(grid)
            while moves:
                self._propagate(grid, moves)
                self._clean(grid)
                moves = self.collect_moves(grid)

            progress = self._bruteforce(grid)
            progress = self._clean(grid) > 0 or progress
            if not progress and not self.collect_moves(grid):
                break

        self.trace.append(f"session done, {grid.count_empty()} empty cells left")
        return grid

    def collect_moves(self, grid: Grid) -> Set[Field]:
        """Ask every strategy for a move; identical proposals collapse."""
        moves = set()
        for strategy in self.strategies:
            move = strategy(self.candidates, grid)
            if move.value != EMPTY:
                moves.add(move)
        return moves

    def _propagate(self, grid: Grid, moves: Set[Field]) -> None:
        """Apply move batches until the strategies run dry."""
        while moves:
            for move in sorted(moves):
                if grid[move.position] != EMPTY:
                    # Two proposals for one cell; the first one wins.
                    self.trace.append(f"skip {move.value} at {tuple(move.position)}: cell already filled")
                    continue
                self._place(grid, move)
            moves = self.collect_moves(grid)

    def _place(self, grid: Grid, move: Field) -> None:
        (row, col), value = move
        grid.set(row, col, value)
        self.candidates.eliminate_placed(move)
        self.stats.extra["moves"] += 1
        self.trace.append(f"insert {value} at {(row, col)}")

    def _clean(self, grid: Grid) -> int:
        if grid.is_complete():
            return 0
        removed = self.cleaner.clean_all(grid, self.candidates)
        self.stats.extra["eliminations"] += removed
        return removed

    def _bruteforce(self, grid: Grid) -> bool:
        if not self.use_bruteforce or grid.is_complete():
            return False

        report = BruteforcePass(self._solve_hypothesis, self.trace).run(grid, self.candidates)
        self.stats.nodes_explored += report.tested
        self.stats.backtracks += len(report.eliminated)
        if report.solution is not None:
            self._place(grid, report.solution)
            self.stats.extra["commits"] += 1
        return report.changed

    def _solve_hypothesis(self, scenario: Grid) -> Grid:
        nested = PropagationSolver(
            self.strategies,
            use_bruteforce=False,
            mirror_rows=self.mirror_rows,
            trace=self.trace,
        )
        return nested.run_session(scenario)
