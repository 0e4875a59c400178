"""Sudoku generation, validity checks and solution counting."""

from __future__ import annotations

import random
from typing import List, Optional, Tuple

from .models import CELL_COUNT, GRID_SIZE, Grid, empty_grid

_ALL_DIGITS = 0b1111111110  # bits 1..9


def _box(row: int, col: int) -> int:
    return row // 3 * 3 + col // 3


def is_valid(grid: Grid, row: int, col: int, num: int) -> bool:
    """Whether ``num`` is absent from the row, column and box of (row, col)."""
    if any(cell.num == num for cell in grid[row]):
        return False
    if any(line[col].num == num for line in grid):
        return False
    top, left = row // 3 * 3, col // 3 * 3
    return all(
        grid[r][c].num != num for r in range(top, top + 3) for c in range(left, left + 3)
    )


def generate_complete(rng: Optional[random.Random] = None) -> Grid:
    """Return a randomly filled, valid 9x9 grid."""
    rng = rng or random.Random()
    grid = empty_grid()
    rows = [0] * GRID_SIZE
    cols = [0] * GRID_SIZE
    boxes = [0] * GRID_SIZE

    def fill(index: int) -> bool:
        if index == CELL_COUNT:
            return True
        row, col = divmod(index, GRID_SIZE)
        box = _box(row, col)
        for num in rng.sample(range(1, 10), 9):
            bit = 1 << num
            if (rows[row] | cols[col] | boxes[box]) & bit:
                continue
            rows[row] |= bit
            cols[col] |= bit
            boxes[box] |= bit
            grid[row][col].num = num
            if fill(index + 1):
                return True
            rows[row] ^= bit
            cols[col] ^= bit
            boxes[box] ^= bit
            grid[row][col].num = 0
        return False

    fill(0)
    return grid


def count_solutions(grid: Grid, limit: int = 2) -> int:
    """Count the completions of ``grid``, stopping once ``limit`` are found."""
    if limit < 1:
        raise ValueError("limit must be at least 1")
    rows = [0] * GRID_SIZE
    cols = [0] * GRID_SIZE
    boxes = [0] * GRID_SIZE
    empties: List[Tuple[int, int, int]] = []
    for r, line in enumerate(grid):
        for c, cell in enumerate(line):
            if cell.num:
                bit = 1 << cell.num
                rows[r] |= bit
                cols[c] |= bit
                boxes[_box(r, c)] |= bit
            else:
                empties.append((r, c, _box(r, c)))

    def search(remaining: List[Tuple[int, int, int]], budget: int) -> int:
        if not remaining:
            return 1
        best_index, best, best_count = 0, 0, 10
        for i, (r, c, b) in enumerate(remaining):
            candidates = _ALL_DIGITS & ~(rows[r] | cols[c] | boxes[b])
            count = bin(candidates).count("1")
            if count < best_count:
                best_index, best, best_count = i, candidates, count
                if count <= 1:
                    break
        if not best:
            return 0
        r, c, b = remaining[best_index]
        rest = remaining[:best_index] + remaining[best_index + 1:]
        found = 0
        while best and found < budget:
            bit = best & -best
            best ^= bit
            rows[r] |= bit
            cols[c] |= bit
            boxes[b] |= bit
            found += search(rest, budget - found)
            rows[r] ^= bit
            cols[c] ^= bit
            boxes[b] ^= bit
        return found

    return search(empties, limit)


def generate_puzzle(clues: int, rng: Optional[random.Random] = None) -> Grid:
    """Return a puzzle with a unique solution keeping ``clues`` digits where possible.

    Cells are emptied in random order and only while the solution stays
    unique, so fewer removals than asked may be possible.
    """
    rng = rng or random.Random()
    puzzle = generate_complete(rng)
    to_remove = CELL_COUNT - clues
    for index in rng.sample(range(CELL_COUNT), CELL_COUNT):
        if to_remove <= 0:
            break
        row, col = divmod(index, GRID_SIZE)
        cell = puzzle[row][col]
        if cell.num == 0:
            continue
        original = cell.num
        cell.num = 0
        if count_solutions(puzzle) == 1:
            to_remove -= 1
            cell.is_hole = True
        else:
            cell.num = original
    return puzzle