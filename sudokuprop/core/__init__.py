"""Core module for grid representation and validation."""

from .grid import (
    BOX_CENTERS,
    DIGITS,
    EMPTY,
    NO_MOVE,
    NOT_FOUND,
    SIZE,
    CandidateGrid,
    Container,
    Field,
    Grid,
    Position,
    box_center,
    box_positions,
)
from .validator import has_duplicates, is_solved, is_valid, validate_solution

__all__ = [
    "BOX_CENTERS",
    "DIGITS",
    "EMPTY",
    "NO_MOVE",
    "NOT_FOUND",
    "SIZE",
    "CandidateGrid",
    "Container",
    "Field",
    "Grid",
    "Position",
    "box_center",
    "box_positions",
    "has_duplicates",
    "is_solved",
    "is_valid",
    "validate_solution",
]
