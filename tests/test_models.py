import random

import pytest

from sudokugame.models import LEVELS, Cell, Move, copy_grid, empty_grid
from sudokugame.solver import generate_puzzle


def test_empty_grid_shape_and_contents():
    grid = empty_grid()
    assert len(grid) == 9
    assert all(len(row) == 9 for row in grid)
    assert all(cell == Cell(0, False) for row in grid for cell in row)


def test_empty_grid_rows_are_distinct():
    grid = empty_grid()
    grid[0][0].num = 5
    assert grid[1][0].num == 0


def test_copy_grid_is_independent():
    grid = empty_grid()
    grid[2][3].num = 7
    copy = copy_grid(grid)
    copy[2][3].num = 1
    copy[4][4].is_hole = True
    assert grid[2][3].num == 7
    assert grid[4][4].is_hole is False
    assert copy[2][3].num == 1


def test_levels_follow_difficulty():
    assert [level.clues for level in LEVELS] == [32, 30, 27, 17]
    assert LEVELS[0].name == "简单"
    puzzle = generate_puzzle(LEVELS[0].clues, random.Random(1))
    givens = sum(1 for row in copy_grid(puzzle) for cell in row if cell.num)
    assert givens == 32


def test_move_is_frozen():
    move = Move(1, 2, 0, 5)
    with pytest.raises(AttributeError):
        move.new = 3
    assert move.new == 5
    assert move == Move(1, 2, 0, 5)