"""The state of one sudoku game: board, move history, counts and saves."""

from __future__ import annotations

import random
from dataclasses import dataclass, replace
from typing import List, Optional

from .events import (
    GAME_REFRESH,
    GAME_UNDO_STEP,
    GAME_VICTORY,
    NUMBER_FILL_COMPLETED,
    NUMBER_FILL_ROLLBACK,
    TIME_RESTART,
    Event,
    EventBus,
)
from .models import CELL_COUNT, LEVELS, Cell, Grid, Level, Move, copy_grid
from .solver import generate_puzzle, is_valid


@dataclass
class _Snapshot:
    level: Level
    grid: Grid
    moves: List[Move]
    fill: List[int]


class SudokuGame:
    """A game in progress; announces its changes on ``bus``."""

    def __init__(
        self,
        level: Level = LEVELS[0],
        bus: Optional[EventBus] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.bus = bus if bus is not None else EventBus()
        self._rng = rng or random.Random()
        self._saved: Optional[_Snapshot] = None
        self.new_game(level)

    @property
    def level(self) -> Level:
        return self._level

    @property
    def grid(self) -> Grid:
        """A copy of the current board."""
        return copy_grid(self._grid)

    @property
    def step_count(self) -> int:
        return len(self._moves)

    def new_game(self, level: Level) -> None:
        """Start a fresh puzzle of ``level``."""
        self._level = level
        self._grid = generate_puzzle(level.clues, self._rng)
        self._moves = []
        self._fill = [0] * 10
        for row in self._grid:
            for cell in row:
                self._fill[cell.num] += 1

    def place(self, row: int, col: int, value: int) -> bool:
        """Put ``value`` into a fillable cell; the same value again clears it.

        Returns whether the board changed.
        """
        if not 1 <= value <= 9:
            raise ValueError(f"value must be within 1..9, got {value}")
        cell = self._grid[row][col]
        if not cell.is_hole:
            return False
        old = cell.num
        if self._fill[value] == 9 and old != value:
            return False

        if old == value:
            value = 0
            accepted = True
        else:
            accepted = is_valid(self._grid, row, col, value)

        if accepted:
            cell.num = value
            self._moves.append(Move(row, col, old, value))
            if self._fill[old] == 9 and old != 0:
                self.bus.publish(Event(f"{NUMBER_FILL_ROLLBACK}{old}", value))
            self._fill[old] -= 1
            self._fill[value] += 1
            if self._fill[value] == 9 and value != 0:
                self.bus.publish(Event(f"{NUMBER_FILL_COMPLETED}{value}", value))

        if self.step_count == 1:
            self.bus.publish(Event(TIME_RESTART))
        if self.step_count + self._level.clues == CELL_COUNT:
            self.bus.publish(Event(GAME_VICTORY))
        return accepted

    def cell(self, row: int, col: int) -> Cell:
        """A copy of the cell at (row, col)."""
        return replace(self._grid[row][col])

    def fill_count(self, num: int) -> int:
        """How many cells hold ``num``; 0 counts the empty cells."""
        return self._fill[num]

    def undo(self) -> Optional[Move]:
        """Take back the last move and return it, or None if there is none."""
        if not self._moves:
            return None
        move = self._moves.pop()
        self._grid[move.row][move.col].num = move.old
        self._fill[move.old] += 1
        self._fill[move.new] -= 1
        self.bus.publish(Event(f"{GAME_UNDO_STEP}{move.row}{move.col}"))
        return move

    def restart(self) -> None:
        """Start a new puzzle at the current level."""
        self.new_game(self._level)
        self.bus.publish(Event(GAME_REFRESH))

    def save(self) -> None:
        """Remember the current game so that ``restore`` can return to it."""
        self._saved = _Snapshot(
            self._level, copy_grid(self._grid), list(self._moves), list(self._fill)
        )

    def restore(self) -> bool:
        """Return to the saved game; False if nothing was saved."""
        if self._saved is None:
            return False
        saved = self._saved
        self._level = saved.level
        self._grid = copy_grid(saved.grid)
        self._moves = list(saved.moves)
        self._fill = list(saved.fill)
        self.bus.publish(Event(GAME_REFRESH))
        return True