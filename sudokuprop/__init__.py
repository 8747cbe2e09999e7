"""Sudoku solving by candidate propagation with single-level lookahead."""

__version__ = "1.0.0"
