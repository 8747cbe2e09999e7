"""Benchmarking framework for comparing solver configurations."""

from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor, TimeoutError
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import json
import logging
import os

from tqdm import tqdm

from ..core.grid import Grid
from ..core.validator import validate_solution
from ..solvers import BaseSolver, PropagationSolver

log = logging.getLogger(__name__)


def load_puzzles(path: str) -> List[Grid]:
    """
    Read puzzles from a text file, one 81-character puzzle per line.

    Blank lines and lines starting with ``#`` are skipped.
    """
    puzzles = []
    with open(path, "r") as f:
        for line_no, line in enumerate(f, 1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            try:
                puzzles.append(Grid.from_string(line))
            except ValueError as e:
                raise ValueError(f"{path}:{line_no}: {e}") from e
    log.info("Loaded %d puzzles from %s", len(puzzles), path)
    return puzzles


@dataclass
class BenchmarkResult:
    """Results from a single benchmark run."""
    puzzle_id: int
    algorithm: str
    solved: bool
    valid: bool
    filled_cells: int
    clues: int
    time_seconds: float
    memory_bytes: int
    iterations: int
    backtracks: int
    nodes_explored: int
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "puzzle_id": self.puzzle_id,
            "algorithm": self.algorithm,
            "solved": self.solved,
            "valid": self.valid,
            "filled_cells": self.filled_cells,
            "clues": self.clues,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "memory_mb": self.memory_bytes / (1024 * 1024),
            "iterations": self.iterations,
            "backtracks": self.backtracks,
            "nodes_explored": self.nodes_explored,
            **self.extra
        }


class Benchmark:
    """
    Runs several solver configurations over a set of puzzles and collects
    performance metrics.
    """

    def __init__(
        self,
        puzzles: List[Grid],
        solvers: Optional[Dict[str, BaseSolver]] = None,
        timeout_seconds: float = 60.0,
    ):
        """
        Initialize the benchmark.

        Args:
            puzzles: Puzzles to solve.
            solvers: Dict of solver_name -> solver_instance (default: all
                propagation configurations).
            timeout_seconds: How long to wait for each puzzle and solver. A run
                that takes longer is recorded as a timeout but keeps running
                until it finishes; threads cannot be interrupted.
        """
        self.puzzles = puzzles
        self.timeout_seconds = timeout_seconds

        if solvers is None:
            self.solvers = {
                "Propagation": PropagationSolver(),
                "Propagation (rows)": PropagationSolver(mirror_rows=True),
                "No bruteforce": PropagationSolver(use_bruteforce=False),
            }
        else:
            self.solvers = solvers

        self.results: List[BenchmarkResult] = []

    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Run every solver on every puzzle.

        Returns:
            List of BenchmarkResult objects.
        """
        self.results = []

        total_tests = len(self.puzzles) * len(self.solvers)
        pbar = tqdm(total=total_tests, desc="Benchmarking", disable=not show_progress)

        for puzzle_id, puzzle in enumerate(self.puzzles):
            for solver_name, solver in self.solvers.items():
                result = self._run_single(puzzle, puzzle_id, solver_name, solver)
                self.results.append(result)
                pbar.update(1)

        pbar.close()
        return self.results

    def _run_single(
        self,
        puzzle: Grid,
        puzzle_id: int,
        solver_name: str,
        solver: BaseSolver
    ) -> BenchmarkResult:
        """Run a single solver on a single puzzle."""
        # The executor joins its worker on exit, so a timed-out run still completes
        with ThreadPoolExecutor(max_workers=1) as executor:
            future = executor.submit(solver.solve, puzzle)
            try:
                grid, stats = future.result(timeout=self.timeout_seconds)
            except TimeoutError:
                log.warning("Puzzle %d timed out with %s", puzzle_id, solver_name)
                return self._failed(puzzle, puzzle_id, solver_name, "Timeout")
            except Exception as e:
                log.warning("Puzzle %d failed with %s: %s", puzzle_id, solver_name, e)
                return self._failed(puzzle, puzzle_id, solver_name, str(e))

        return BenchmarkResult(
            puzzle_id=puzzle_id,
            algorithm=solver_name,
            solved=stats.solved and validate_solution(puzzle, grid),
            valid=stats.extra.get("valid", False),
            filled_cells=grid.count_filled(),
            clues=puzzle.count_filled(),
            time_seconds=stats.time_seconds,
            memory_bytes=stats.memory_bytes,
            iterations=stats.iterations,
            backtracks=stats.backtracks,
            nodes_explored=stats.nodes_explored,
            extra={k: v for k, v in stats.extra.items() if k not in ("valid", "filled_cells")}
        )

    def _failed(self, puzzle: Grid, puzzle_id: int, solver_name: str, error: str) -> BenchmarkResult:
        return BenchmarkResult(
            puzzle_id=puzzle_id,
            algorithm=solver_name,
            solved=False,
            valid=False,
            filled_cells=puzzle.count_filled(),
            clues=puzzle.count_filled(),
            time_seconds=self.timeout_seconds,
            memory_bytes=0,
            iterations=0,
            backtracks=0,
            nodes_explored=0,
            extra={"error": error}
        )

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics from benchmark results."""
        summary = {
            "total_puzzles": len(self.puzzles),
            "solvers_tested": list(self.solvers.keys()),
            "results_by_algorithm": {},
        }

        for solver_name in self.solvers:
            solver_results = [r for r in self.results if r.algorithm == solver_name]
            if not solver_results:
                continue
            solved = [r for r in solver_results if r.solved]
            times = [r.time_seconds for r in solver_results]
            memory = [r.memory_bytes for r in solver_results]
            gained = [r.filled_cells - r.clues for r in solver_results]

            summary["results_by_algorithm"][solver_name] = {
                "accuracy": len(solved) / len(solver_results) * 100,
                "avg_time_seconds": sum(times) / len(times),
                "max_time_seconds": max(times),
                "min_time_seconds": min(times),
                "avg_memory_mb": sum(memory) / len(memory) / (1024 * 1024),
                "avg_cells_filled": sum(gained) / len(gained),
                "invalid_results": sum(1 for r in solver_results if not r.valid),
                "total_solved": len(solved),
                "total_tested": len(solver_results)
            }

        return summary

    def save_results(self, output_dir: str) -> None:
        """Save benchmark results and summary to JSON files."""
        os.makedirs(output_dir, exist_ok=True)

        results_file = os.path.join(output_dir, "benchmark_results.json")
        with open(results_file, "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)

        summary_file = os.path.join(output_dir, "benchmark_summary.json")
        with open(summary_file, "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        log.info("Results saved to %s", output_dir)
