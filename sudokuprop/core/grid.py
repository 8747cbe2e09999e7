"""Grid and candidate-grid representation for 9x9 Sudoku."""

from __future__ import annotations
from enum import Enum
from typing import Any, Callable, Iterator, List, NamedTuple, Optional, Set, Tuple, Union
import numpy as np


SIZE = 9
BOX_SIZE = 3
EMPTY = 0
DIGITS = tuple(range(1, SIZE + 1))


class Position(NamedTuple):
    """Cell coordinates on a grid."""
    row: int
    col: int


class Field(NamedTuple):
    """A move: ``value`` written at ``position``."""
    position: Position
    value: int


NOT_FOUND = Position(-1, -1)
NO_MOVE = Field(Position(0, 0), EMPTY)

# Centers of the nine 3x3 boxes, row-major.
BOX_CENTERS = tuple(Position(row, col) for row in (1, 4, 7) for col in (1, 4, 7))


def box_center(pos: Tuple[int, int]) -> Position:
    """Center of the 3x3 box containing ``pos``."""
    row, col = pos
    return Position(row // BOX_SIZE * BOX_SIZE + 1, col // BOX_SIZE * BOX_SIZE + 1)


def box_positions(center: Tuple[int, int]) -> List[Position]:
    """All positions of the box around ``center``, row-major."""
    row, col = center
    return [
        Position(row + i, col + j)
        for i in (-1, 0, 1)
        for j in (-1, 0, 1)
    ]


class Container(Enum):
    """How row and column values are collected."""
    SEQUENCE = "sequence"  # ordered, keeps duplicates
    SET = "set"


Predicate = Union[Any, Callable[[Any], bool]]


def _as_predicate(target: Predicate) -> Callable[[Any], bool]:
    if callable(target):
        return target
    return lambda value: value == target


class Grid:
    """
    Fixed-size 2D grid of cell values.

    A 9x9 grid holds a puzzle; 3x3 grids are produced by
    ``copy_neighborhood`` so box-local code can reuse the same row and
    column extraction. Cells are stored in a numpy array; the logical API
    is ``get(row, col)`` / ``set(row, col, value)``.
    """

    def __init__(self, cells: Optional[np.ndarray] = None, shape: Tuple[int, int] = (SIZE, SIZE)):
        """
        Initialize a grid.

        Args:
            cells: Optional 2D array of initial values. If None, creates an empty grid.
            shape: Grid shape used when ``cells`` is None.
        """
        if cells is None:
            cells = self._blank(shape)
        else:
            cells = self._coerce(cells)
            if cells.ndim != 2:
                raise ValueError(f"Grid cells must be 2D, got shape {cells.shape}")
        self.cells = cells

    # Hooks overridden by CandidateGrid

    @staticmethod
    def _blank(shape: Tuple[int, int]) -> np.ndarray:
        return np.zeros(shape, dtype=np.int32)

    @staticmethod
    def _coerce(cells: Any) -> np.ndarray:
        return np.array(cells, dtype=np.int32)

    @staticmethod
    def _copy_cells(cells: np.ndarray) -> np.ndarray:
        return cells.copy()

    @staticmethod
    def _wrap(raw: Any) -> Any:
        return int(raw)

    def _check_value(self, value: Any) -> Any:
        if value < EMPTY or value > SIZE:
            raise ValueError(f"Value must be 0-{SIZE}, got {value}")
        return value

    # Construction

    @classmethod
    def empty(cls) -> Grid:
        """A 9x9 grid with every cell empty."""
        return cls()

    def copy(self) -> Grid:
        """Create a deep copy of the grid."""
        return type(self)(self._copy_cells(self.cells))

    # Shape and access

    @property
    def height(self) -> int:
        return self.cells.shape[0]

    @property
    def width(self) -> int:
        return self.cells.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self.cells.shape

    def _check_position(self, row: int, col: int) -> None:
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(
                f"Position ({row}, {col}) outside {self.height}x{self.width} grid"
            )

    def get(self, row: int, col: int) -> Any:
        """Get value at position (row, col). 0 means empty."""
        self._check_position(row, col)
        return self._wrap(self.cells[row, col])

    def set(self, row: int, col: int, value: Any) -> None:
        """Set value at position (row, col). Use 0 to clear."""
        self._check_position(row, col)
        self.cells[row, col] = self._check_value(value)

    def __getitem__(self, pos: Tuple[int, int]) -> Any:
        row, col = pos
        return self.get(row, col)

    def __setitem__(self, pos: Tuple[int, int], value: Any) -> None:
        row, col = pos
        self.set(row, col, value)

    def is_empty(self, row: int, col: int) -> bool:
        """Check if cell is empty (value is 0)."""
        return self.get(row, col) == EMPTY

    def positions(self) -> Iterator[Position]:
        """Iterate over all positions, row-major."""
        for row in range(self.height):
            for col in range(self.width):
                yield Position(row, col)

    # Row, column and box extraction

    def _collect(self, values: List[Any], container: Container) -> Union[List[Any], Set[Any]]:
        if container is Container.SEQUENCE:
            return values
        return set(values)

    def get_row(self, row: int, container: Container = Container.SET) -> Union[List[Any], Set[Any]]:
        """
        Get the values of a row.

        ``Container.SEQUENCE`` keeps order and duplicates (validation),
        ``Container.SET`` gives fast membership tests (solving).
        """
        return self._collect([self.get(row, col) for col in range(self.width)], container)

    def get_column(self, col: int, container: Container = Container.SET) -> Union[List[Any], Set[Any]]:
        """Get the values of a column. See ``get_row``."""
        return self._collect([self.get(row, col) for row in range(self.height)], container)

    def get_neighborhood(self, pos: Tuple[int, int]) -> Set[Any]:
        """Get the set of values in the 3x3 box containing ``pos``."""
        return {self[p] for p in box_positions(box_center(pos))}

    def copy_neighborhood(self, pos: Tuple[int, int]) -> Grid:
        """
        Copy the 3x3 box containing ``pos`` into a new 3x3 grid.

        The relative layout is preserved, so local (0..2) coordinates of the
        result map back to the box by adding ``box_center(pos) - (1, 1)``.
        """
        row, col = box_center(pos)
        self._check_position(row, col)
        block = self.cells[row - 1:row + 2, col - 1:col + 2]
        return type(self)(self._copy_cells(block))

    def transposed(self) -> Grid:
        """Return a new grid with rows and columns swapped."""
        return type(self)(self._copy_cells(self.cells.T))

    # Scans

    def find(self, target: Predicate) -> Position:
        """
        Find the first cell (row-major) matching ``target``.

        Args:
            target: A value to compare against, or a predicate on cell values.

        Returns:
            Its position, or ``NOT_FOUND`` when nothing matches.
        """
        predicate = _as_predicate(target)
        for pos in self.positions():
            if predicate(self[pos]):
                return pos
        return NOT_FOUND

    def find_all(self, target: Predicate) -> List[Position]:
        """All positions (row-major) whose value matches ``target``."""
        predicate = _as_predicate(target)
        return [pos for pos in self.positions() if predicate(self[pos])]

    def count(self, target: Predicate) -> int:
        """Count cells whose value matches ``target``."""
        predicate = _as_predicate(target)
        return sum(1 for pos in self.positions() if predicate(self[pos]))

    def count_empty(self) -> int:
        """Count the number of empty cells."""
        return int(np.sum(self.cells == EMPTY))

    def count_filled(self) -> int:
        """Count the number of filled cells."""
        return self.height * self.width - self.count_empty()

    def is_complete(self) -> bool:
        """Check if all cells are filled."""
        return self.count_empty() == 0

    def modal_value(self) -> Tuple[Optional[int], int]:
        """
        Most frequent value together with its number of occurrences.

        Values occurring at least as many times as there are columns are
        skipped, so an all-empty grid does not report 0. Ties go to the
        smallest value. Returns ``(None, 0)`` when every value is skipped.
        """
        values, counts = np.unique(self.cells, return_counts=True)
        best_value, best_count = None, 0
        for value, count in zip(values, counts):
            if best_count < count < self.width:
                best_value, best_count = int(value), int(count)
        return best_value, best_count

    # Parsing and formatting

    @classmethod
    def from_string(cls, s: str) -> Grid:
        """
        Create a grid from an 81-character string, row by row.

        Args:
            s: 0 or . for empty cells, 1-9 for values.
        """
        if len(s) != SIZE * SIZE:
            raise ValueError(f"String length must be {SIZE * SIZE}, got {len(s)}")

        cells = np.zeros((SIZE, SIZE), dtype=np.int32)
        for idx, c in enumerate(s):
            if c == '.':
                continue
            if not c.isdigit():
                raise ValueError(f"Invalid character {c!r} at index {idx}")
            cells[idx // SIZE, idx % SIZE] = int(c)
        return cls(cells)

    @classmethod
    def from_text(cls, text: str, order: str = "rows") -> Grid:
        """
        Create a grid from 81 whitespace-separated integers.

        Args:
            text: Integers 0-9, 0 for empty cells.
            order: "rows" fills row by row (the order the grid is printed in),
                "columns" fills column by column.
        """
        tokens = text.split()
        if len(tokens) != SIZE * SIZE:
            raise ValueError(f"Expected {SIZE * SIZE} values, got {len(tokens)}")
        try:
            values = [int(token) for token in tokens]
        except ValueError as e:
            raise ValueError(f"Grid values must be integers: {e}") from e
        bad = [v for v in values if v < EMPTY or v > SIZE]
        if bad:
            raise ValueError(f"Values must be 0-{SIZE}, got {bad[0]}")

        cells = np.array(values, dtype=np.int32).reshape(SIZE, SIZE)
        if order == "columns":
            cells = cells.T.copy()
        elif order != "rows":
            raise ValueError(f"Unknown fill order {order!r}")
        return cls(cells)

    @classmethod
    def from_2d_list(cls, data: List[List[int]]) -> Grid:
        """Create a grid from a list of rows."""
        return cls(np.array(data, dtype=np.int32))

    def to_string(self) -> str:
        """Compact 81-character representation, 0 for empty cells."""
        return ''.join(str(self[pos]) for pos in self.positions())

    def render(self) -> str:
        """Plain rendering: filled cells as the digit and a space, empty cells as two spaces."""
        lines = []
        for row in range(self.height):
            values = self.get_row(row, Container.SEQUENCE)
            lines.append(''.join(f"{v} " if v != EMPTY else "  " for v in values))
        return '\n'.join(lines)

    def __str__(self) -> str:
        """Pretty-print the grid."""
        lines = []
        horizontal_sep = '+' + (('-' * (BOX_SIZE * 2 + 1)) + '+') * BOX_SIZE

        for i in range(self.height):
            if i % BOX_SIZE == 0:
                lines.append(horizontal_sep)

            row_str = '|'
            for j in range(self.width):
                val = self.get(i, j)
                row_str += ' .' if val == EMPTY else f' {val}'
                if (j + 1) % BOX_SIZE == 0:
                    row_str += ' |'
            lines.append(row_str)

        lines.append(horizontal_sep)
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(shape={self.shape}, filled={self.count_filled()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid) or type(other) is not type(self):
            return False
        return self.shape == other.shape and bool(np.all(self.cells == other.cells))


class CandidateGrid(Grid):
    """
    Grid whose cells are sets of digits still placeable there.

    A filled cell of the companion value grid has an empty set. Within one
    solving session sets only ever shrink.
    """

    @staticmethod
    def _blank(shape: Tuple[int, int]) -> np.ndarray:
        cells = np.empty(shape, dtype=object)
        for index in np.ndindex(*shape):
            cells[index] = set()
        return cells

    @staticmethod
    def _coerce(cells: Any) -> np.ndarray:
        if isinstance(cells, np.ndarray) and cells.dtype == object:
            return cells
        rows = [list(row) for row in cells]
        result = np.empty((len(rows), len(rows[0]) if rows else 0), dtype=object)
        for i, row in enumerate(rows):
            for j, candidates in enumerate(row):
                result[i, j] = set(candidates)
        return result

    @staticmethod
    def _copy_cells(cells: np.ndarray) -> np.ndarray:
        result = np.empty(cells.shape, dtype=object)
        for index, candidates in np.ndenumerate(cells):
            result[index] = set(candidates)
        return result

    @staticmethod
    def _wrap(raw: Any) -> Any:
        return raw

    def _check_value(self, value: Any) -> Set[int]:
        candidates = set(value)
        if not candidates <= set(DIGITS):
            raise ValueError(f"Candidates must be digits 1-{SIZE}, got {sorted(candidates)}")
        return candidates

    @classmethod
    def from_grid(cls, grid: Grid) -> CandidateGrid:
        """
        Compute the initial candidates of ``grid``.

        Every empty cell gets the digits not already used in its row, column
        or box; filled cells get an empty set.
        """
        candidates = cls(shape=grid.shape)
        for pos in grid.positions():
            if grid[pos] != EMPTY:
                continue
            used = (
                grid.get_row(pos.row)
                | grid.get_column(pos.col)
                | grid.get_neighborhood(pos)
            )
            candidates.cells[pos.row, pos.col] = set(DIGITS) - used
        return candidates

    def discard(self, pos: Tuple[int, int], digit: int) -> bool:
        """Remove ``digit`` from the candidates at ``pos``; True if it was there."""
        candidates = self[pos]
        if digit in candidates:
            candidates.discard(digit)
            return True
        return False

    def eliminate_placed(self, field: Field) -> None:
        """Update candidates after ``field`` was written to the value grid."""
        (row, col), value = field
        for i in range(self.width):
            self.cells[row, i].discard(value)
        for i in range(self.height):
            self.cells[i, col].discard(value)
        for pos in box_positions(box_center((row, col))):
            self.cells[pos.row, pos.col].discard(value)
        self.cells[row, col] = set()

    def count_empty(self) -> int:
        """Count cells without any candidate."""
        return self.count(lambda candidates: not candidates)

    def render(self) -> str:
        """One line per row, each cell's candidates as a fixed-width digit string."""
        lines = []
        for row in range(self.height):
            cells = [self.get(row, col) for col in range(self.width)]
            lines.append(' '.join(''.join(str(d) for d in sorted(c)).ljust(SIZE) for c in cells))
        return '\n'.join(lines)

    def __str__(self) -> str:
        return self.render()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CandidateGrid) or self.shape != other.shape:
            return False
        return all(self[pos] == other[pos] for pos in self.positions())
