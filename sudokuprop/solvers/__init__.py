"""Solvers module for Sudoku puzzles."""

from .base_solver import BaseSolver, SolverLogicError, SolverStats
from .bruteforce import MAX_AMBIGUITY, BruteforcePass, BruteforceReport, Outcome, classify, propose_hypotheses
from .cleaner import Cleaner, Relation, Rule
from .propagation_solver import PropagationSolver

__all__ = [
    "BaseSolver",
    "SolverLogicError",
    "SolverStats",
    "MAX_AMBIGUITY",
    "BruteforcePass",
    "BruteforceReport",
    "Outcome",
    "classify",
    "propose_hypotheses",
    "Cleaner",
    "Relation",
    "Rule",
    "PropagationSolver",
]
