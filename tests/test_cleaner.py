"""Unit tests for locked-candidate cleaning."""

import pytest
from sudokuprop.core.grid import CandidateGrid, Grid, Position
from sudokuprop.solvers import Cleaner, Relation, Rule, SolverLogicError
from sudokuprop.trace import MemoryTraceSink


SOLUTION = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)


@pytest.fixture
def column_case():
    """
    Top-left box with its first column full and a 5 in grid column 1.

    5 is then locked into the box's third column, so it cannot appear in
    column 2 below the box.
    """
    grid = Grid.empty()
    grid.set(0, 0, 1)
    grid.set(1, 0, 2)
    grid.set(2, 0, 3)
    grid.set(4, 1, 5)
    return grid, CandidateGrid.from_grid(grid)


@pytest.fixture
def row_case():
    """The column case mirrored along the diagonal."""
    grid = Grid.empty()
    grid.set(0, 0, 1)
    grid.set(0, 1, 2)
    grid.set(0, 2, 3)
    grid.set(1, 4, 5)
    return grid, CandidateGrid.from_grid(grid)


class TestLocalRules:
    """Tests for rule derivation inside one box."""

    def test_locked_column(self, column_case):
        grid, _ = column_case
        center = Position(1, 1)
        rules = Cleaner().local_rules(grid, grid.copy_neighborhood(center), center, 5)
        assert rules == [
            Rule(Relation.MUST_NOT_BE_IN_COLUMN, 1),
            Rule(Relation.MUST_NOT_BE_IN_COLUMN, 2),
            Rule(Relation.MUST_BE_IN_COLUMN, 3),
        ]

    def test_single_exclusion_forces_nothing(self, column_case):
        grid, _ = column_case
        center = Position(7, 1)
        rules = Cleaner().local_rules(grid, grid.copy_neighborhood(center), center, 5)
        assert rules == [Rule(Relation.MUST_NOT_BE_IN_COLUMN, 2)]

    def test_rows(self, row_case):
        grid, _ = row_case
        center = Position(1, 1)
        rules = Cleaner().local_rules(grid, grid.copy_neighborhood(center), center, 5, column=False)
        assert rules[-1] == Rule(Relation.MUST_BE_IN_ROW, 3)


class TestClean:
    """Tests for Cleaner.clean and Cleaner.clean_all."""

    def test_removes_digit_below_box(self, column_case):
        grid, candidates = column_case
        for row in (6, 7, 8):
            assert 5 in candidates.get(row, 2)

        removed = Cleaner().clean(grid, candidates, 5)

        assert removed == 3
        for row in (6, 7, 8):
            assert 5 not in candidates.get(row, 2)
        # Inside the box the digit stays possible
        assert 5 in candidates.get(0, 2)
        assert 5 in candidates.get(2, 2)

    def test_rows_ignored_by_default(self, row_case):
        grid, candidates = row_case
        assert Cleaner().clean(grid, candidates, 5) == 0
        assert 5 in candidates.get(2, 7)

    def test_mirror_rows(self, row_case):
        grid, candidates = row_case
        removed = Cleaner(mirror_rows=True).clean(grid, candidates, 5)

        assert removed == 3
        for col in (6, 7, 8):
            assert 5 not in candidates.get(2, col)
        assert 5 in candidates.get(2, 2)

    def test_unplaced_digit_is_skipped(self, column_case):
        grid, candidates = column_case
        before = candidates.copy()
        assert Cleaner().clean(grid, candidates, 9) == 0
        assert candidates == before

    def test_only_removes_candidates(self, column_case):
        grid, candidates = column_case
        before = candidates.copy()
        Cleaner(mirror_rows=True).clean_all(grid, candidates)
        for pos in candidates.positions():
            assert candidates[pos] <= before[pos]

    def test_clean_all_totals_digits(self, column_case):
        grid, candidates = column_case
        assert Cleaner().clean_all(grid, candidates) == 3

    def test_does_not_touch_grid(self, column_case):
        grid, candidates = column_case
        before = grid.copy()
        Cleaner().clean_all(grid, candidates)
        assert grid == before

    def test_complete_grid_is_an_error(self):
        grid = Grid.from_string(SOLUTION)
        with pytest.raises(SolverLogicError):
            Cleaner().clean_all(grid, CandidateGrid.from_grid(grid))

    def test_trace_events(self, column_case):
        grid, candidates = column_case
        trace = MemoryTraceSink()
        Cleaner(trace).clean(grid, candidates, 5)
        assert any("must be in column 2" in event for event in trace.events)
        assert sum(event.startswith("erase 5") for event in trace.events) == 3


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
