"""Board, move and difficulty types."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List

from .colors import RGBA, rgb

GRID_SIZE = 9
CELL_COUNT = GRID_SIZE * GRID_SIZE


@dataclass(frozen=True)
class Level:
    """A difficulty: its name, how many digits are given, and its colour."""

    name: str
    clues: int
    color: RGBA


@dataclass
class Cell:
    """One square: its digit (0 when empty) and whether the player may fill it."""

    num: int = 0
    is_hole: bool = False


@dataclass(frozen=True)
class Move:
    """A change made to one cell, kept so that it can be undone."""

    row: int
    col: int
    old: int
    new: int


Grid = List[List[Cell]]


def empty_grid() -> Grid:
    """Return a 9x9 grid of empty cells."""
    return [[Cell() for _ in range(GRID_SIZE)] for _ in range(GRID_SIZE)]


def copy_grid(grid: Grid) -> Grid:
    """Return a copy of ``grid`` that shares no cells with it."""
    return [[replace(cell) for cell in row] for row in grid]


LEVELS = (
    Level("简单", 32, rgb(50, 173, 94)),
    Level("中间", 30, rgb(50, 94, 214)),
    Level("高级", 27, rgb(173, 94, 173)),
    Level("困难", 17, rgb(253, 94, 94)),
)