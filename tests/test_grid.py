"""Unit tests for Grid and CandidateGrid."""

import pytest
from sudokuprop.core.grid import (
    BOX_CENTERS, DIGITS, NOT_FOUND,
    CandidateGrid, Container, Field, Grid, Position, box_center,
)


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


class TestGrid:
    """Tests for Grid class."""

    def test_create_empty_grid(self):
        """Test creating an empty 9x9 grid."""
        grid = Grid.empty()
        assert grid.shape == (9, 9)
        assert grid.count_empty() == 81
        assert grid.count_filled() == 0
        assert not grid.is_complete()

    def test_set_and_get(self):
        """Test setting and getting values."""
        grid = Grid.empty()
        grid.set(0, 0, 5)
        assert grid.get(0, 0) == 5
        assert grid[Position(0, 0)] == 5
        assert not grid.is_empty(0, 0)

        grid[(0, 0)] = 0
        assert grid.is_empty(0, 0)

    def test_out_of_range_position(self):
        """Indices outside the grid are programming errors."""
        grid = Grid.empty()
        with pytest.raises(IndexError):
            grid.get(9, 0)
        with pytest.raises(IndexError):
            grid.get(0, -1)
        with pytest.raises(IndexError):
            grid.set(-1, 0, 3)

    def test_out_of_range_value(self):
        grid = Grid.empty()
        with pytest.raises(ValueError):
            grid.set(0, 0, 10)

    def test_row_and_column_containers(self):
        """Sequences keep duplicates, sets do not."""
        grid = Grid.empty()
        grid.set(2, 0, 4)
        grid.set(2, 8, 4)

        row = grid.get_row(2, Container.SEQUENCE)
        assert row == [4, 0, 0, 0, 0, 0, 0, 0, 4]
        assert grid.get_row(2, Container.SET) == {0, 4}
        assert grid.get_column(8, Container.SEQUENCE)[2] == 4
        assert grid.get_column(8) == {0, 4}

    def test_neighborhood(self):
        """Test the set of values in a box."""
        grid = Grid.empty()
        grid.set(0, 0, 5)
        grid.set(2, 2, 7)
        grid.set(3, 3, 9)

        assert grid.get_neighborhood((1, 1)) == {0, 5, 7}
        assert grid.get_neighborhood((2, 0)) == {0, 5, 7}
        assert grid.get_neighborhood((4, 4)) == {0, 9}

    def test_copy_neighborhood_keeps_layout(self):
        grid = Grid.empty()
        grid.set(3, 4, 8)
        box = grid.copy_neighborhood((5, 5))

        assert box.shape == (3, 3)
        assert box.get(0, 1) == 8
        assert box.count_filled() == 1

        box.set(0, 0, 1)
        assert grid.get(3, 3) == 0

    def test_box_centers(self):
        assert len(BOX_CENTERS) == 9
        assert box_center((0, 0)) == Position(1, 1)
        assert box_center((8, 3)) == Position(7, 4)
        assert all(box_center(center) == center for center in BOX_CENTERS)

    def test_find_and_count(self):
        grid = Grid.from_string(SOLUTION)
        assert grid.find(5) == Position(0, 0)
        assert grid.find(6) == Position(0, 3)
        assert grid.find(lambda v: v > 9) == NOT_FOUND
        assert len(grid.find_all(1)) == 9
        assert grid.find_all(1)[0] == Position(0, 7)
        assert grid.count(9) == 9
        assert grid.count(0) == 0

    def test_transposed(self):
        grid = Grid.empty()
        grid.set(0, 5, 3)
        transposed = grid.transposed()
        assert transposed.get(5, 0) == 3
        assert transposed.get(0, 5) == 0
        assert grid.get(0, 5) == 3

    def test_modal_value_excludes_saturated_values(self):
        """The all-empty value never wins."""
        assert Grid.empty().modal_value() == (None, 0)

        grid = Grid.empty()
        for col in range(3):
            grid.set(0, col, 5)
        grid.set(1, 0, 2)
        assert grid.modal_value() == (5, 3)

    def test_modal_value_ties_go_to_smallest(self):
        grid = Grid.empty()
        grid.set(0, 0, 6)
        grid.set(1, 0, 6)
        grid.set(0, 1, 4)
        grid.set(1, 1, 4)
        assert grid.modal_value() == (4, 2)

    def test_modal_value_of_solution(self):
        """Every digit fills a column's worth of cells in a solved grid."""
        assert Grid.from_string(SOLUTION).modal_value() == (None, 0)

    def test_from_string(self):
        """Test creating grid from string."""
        grid = Grid.from_string("." * 80 + "9")
        assert grid.get(8, 8) == 9
        assert grid.count_filled() == 1

    def test_from_string_rejects_bad_input(self):
        with pytest.raises(ValueError):
            Grid.from_string("123")
        with pytest.raises(ValueError):
            Grid.from_string("x" + "0" * 80)

    def test_to_string(self):
        """Test converting grid to string."""
        assert Grid.from_string(SOLUTION).to_string() == SOLUTION

    def test_from_text_orders(self):
        values = ["0"] * 81
        values[0] = "1"
        values[1] = "2"
        text = "\n".join(" ".join(values[i:i + 9]) for i in range(0, 81, 9))

        by_rows = Grid.from_text(text)
        assert by_rows.get(0, 0) == 1
        assert by_rows.get(0, 1) == 2

        by_columns = Grid.from_text(text, order="columns")
        assert by_columns.get(0, 0) == 1
        assert by_columns.get(1, 0) == 2

    def test_from_text_rejects_bad_input(self):
        with pytest.raises(ValueError):
            Grid.from_text("1 2 3")
        with pytest.raises(ValueError):
            Grid.from_text(" ".join(["10"] + ["0"] * 80))
        with pytest.raises(ValueError):
            Grid.from_text(" ".join(["a"] + ["0"] * 80))
        with pytest.raises(ValueError):
            Grid.from_text(" ".join(["0"] * 81), order="diagonal")

    def test_render(self):
        grid = Grid.empty()
        grid.set(0, 0, 5)
        lines = grid.render().split("\n")
        assert len(lines) == 9
        assert lines[0] == "5 " + "  " * 8
        assert lines[1] == "  " * 9

    def test_str_has_box_borders(self):
        text = str(Grid.from_string(SOLUTION))
        assert text.startswith("+-------+")
        assert "| 5 3 4 | 6 7 8 | 9 1 2 |" in text

    def test_copy(self):
        """Test grid copy."""
        grid = Grid.empty()
        grid.set(4, 4, 7)
        copy = grid.copy()

        assert copy == grid
        copy.set(4, 4, 8)
        assert grid.get(4, 4) == 7
        assert copy != grid


class TestCandidateGrid:
    """Tests for CandidateGrid class."""

    def test_empty_grid_admits_everything(self):
        """Every cell of an empty puzzle starts with all nine digits."""
        candidates = CandidateGrid.from_grid(Grid.empty())
        for pos in candidates.positions():
            assert candidates[pos] == set(DIGITS)

    def test_initial_candidates(self):
        """Test getting valid candidates for a cell."""
        grid = Grid.empty()
        grid.set(0, 0, 5)
        grid.set(0, 1, 3)
        grid.set(8, 2, 9)
        candidates = CandidateGrid.from_grid(grid)

        assert candidates.get(0, 0) == set()
        assert candidates.get(0, 2) == set(DIGITS) - {3, 5, 9}
        assert candidates.get(0, 8) == set(DIGITS) - {3, 5}
        assert candidates.get(1, 1) == set(DIGITS) - {3, 5}

    def test_solved_grid_has_no_candidates(self):
        candidates = CandidateGrid.from_grid(Grid.from_string(SOLUTION))
        assert candidates.count(lambda c: len(c) > 0) == 0

    def test_eliminate_placed(self):
        candidates = CandidateGrid.from_grid(Grid.empty())
        candidates.eliminate_placed(Field(Position(4, 4), 6))

        assert candidates.get(4, 4) == set()
        assert 6 not in candidates.get(4, 0)
        assert 6 not in candidates.get(0, 4)
        assert 6 not in candidates.get(3, 5)
        assert 6 in candidates.get(0, 0)
        assert candidates.count(lambda c: 6 in c) == 81 - 21

    def test_discard(self):
        candidates = CandidateGrid.from_grid(Grid.empty())
        assert candidates.discard((2, 3), 4)
        assert not candidates.discard((2, 3), 4)
        assert 4 not in candidates.get(2, 3)

    def test_copy_is_deep(self):
        candidates = CandidateGrid.from_grid(Grid.empty())
        copy = candidates.copy()
        copy.discard((0, 0), 1)

        assert 1 in candidates.get(0, 0)
        assert copy != candidates

    def test_copy_neighborhood_is_candidate_grid(self):
        candidates = CandidateGrid.from_grid(Grid.empty())
        box = candidates.copy_neighborhood((7, 7))
        assert isinstance(box, CandidateGrid)
        assert box.shape == (3, 3)
        assert box.count(lambda c: 1 in c) == 9

    def test_set_rejects_non_digits(self):
        candidates = CandidateGrid()
        candidates.set(0, 0, {1, 2})
        assert candidates.get(0, 0) == {1, 2}
        with pytest.raises(ValueError):
            candidates.set(0, 0, {0})


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
