"""View state of the sudoku board: cells, 3x3 groups and the hover marker."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Callable, List, Optional, Sequence, Tuple, Union

from .colors import RGBA, SIMPLE_TEXT, TRANSPARENT, rgb
from .events import GAME_UNDO_STEP, SELECTED_NUM_CHANGE, Event, EventBus
from .game import SudokuGame
from .models import Cell
from .storage import SELECTED_NUM, DataStore

CELL_DIAMETER = 60.0
CELL_TEXT_SIZE = 34.0
GROUP_SIZE = 3 * CELL_DIAMETER

BORDER_COLOR = rgb(0, 0, 136)
CELL_BORDER_WIDTH = 1.0
GROUP_BORDER_WIDTH = 2.0
FILLED_TEXT = rgb(0, 187, 0)
SELECTED_STROKE = rgb(238, 119, 80)
SELECTED_STROKE_WIDTH = 2.0
CELL_BACKGROUND = rgb(255, 255, 255)
ODD_GROUP_BACKGROUND = rgb(230, 243, 220)
EVEN_GROUP_BACKGROUND = rgb(245, 245, 245)
HOVER_TEXT = rgb(0, 0, 255)
HOVER_TEXT_SIZE = 14.0

Point = Tuple[float, float]


class Side(IntEnum):
    """Which edge of a square a border line runs along."""

    TOP = 0
    RIGHT = 1
    BOTTOM = 2
    LEFT = 3


@dataclass(frozen=True)
class BorderLine:
    """A straight line between two points within a square."""

    start: Point
    end: Point


@dataclass(frozen=True)
class CellStyle:
    """How a cell is drawn."""

    text: str
    text_color: RGBA
    italic: bool
    stroke_color: RGBA
    stroke_width: float


def board_position(group_index: int, x: int, y: int) -> Tuple[int, int]:
    """Board (row, col) of the cell at (x, y) inside 3x3 group ``group_index``."""
    if not 0 <= group_index < 9:
        raise ValueError(f"group index must be within 0..8, got {group_index}")
    if not (0 <= x < 3 and 0 <= y < 3):
        raise ValueError(f"position within a group must be within 0..2, got ({x}, {y})")
    return 3 * (group_index // 3) + x, (group_index % 3) * 3 + y


def border_line(length: float, side: Union[Side, int]) -> BorderLine:
    """The line along ``side`` of a square whose edges are ``length`` long."""
    try:
        side = Side(side)
    except ValueError:
        raise ValueError(f"unknown side {side!r}") from None
    if side is Side.TOP:
        return BorderLine((0, 0), (length, 0))
    if side is Side.RIGHT:
        return BorderLine((length, 0), (length, length))
    if side is Side.BOTTOM:
        return BorderLine((0, length), (length, length))
    return BorderLine((0, 0), (0, length))


def _border_lines(length: float, flags: Sequence[bool]) -> List[BorderLine]:
    return [border_line(length, side) for side, wanted in zip(Side, flags) if wanted]


def cell_style(cell: Cell, selected_num: Optional[int]) -> CellStyle:
    """Style of ``cell`` while ``selected_num`` is the chosen digit.

    Player-filled digits are green and italic; cells holding the chosen
    digit get a highlighted outline.
    """
    if cell.num and cell.is_hole:
        text, color, italic = str(cell.num), FILLED_TEXT, True
    elif cell.num:
        text, color, italic = str(cell.num), SIMPLE_TEXT, False
    else:
        text, color, italic = "", SIMPLE_TEXT, False
    if selected_num == cell.num:
        return CellStyle(text, color, italic, SELECTED_STROKE, SELECTED_STROKE_WIDTH)
    return CellStyle(text, color, italic, TRANSPARENT, 0.0)


class SudokuCell:
    """One board square bound to a game; redraws itself on relevant events."""

    def __init__(
        self,
        game: SudokuGame,
        store: DataStore,
        group_index: int,
        x: int,
        y: int,
        borders: Sequence[bool] = (False, False, False, False),
        on_tap: Optional[Callable[[], None]] = None,
        text_color: RGBA = SIMPLE_TEXT,
        diameter: float = CELL_DIAMETER,
        bus: Optional[EventBus] = None,
    ) -> None:
        self.game = game
        self.store = store
        self.group_index = group_index
        self.row, self.col = board_position(group_index, x, y)
        self.diameter = diameter
        self.text_size = CELL_TEXT_SIZE
        self.background = CELL_BACKGROUND
        self.border_color = BORDER_COLOR
        self.border_width = CELL_BORDER_WIDTH
        self.border_lines = _border_lines(diameter, borders)
        self._on_tap = on_tap
        self._text_color = text_color
        self.style = self.redraw()
        bus = bus if bus is not None else game.bus
        bus.subscribe(SELECTED_NUM_CHANGE, self._on_event)
        bus.subscribe(f"{GAME_UNDO_STEP}{self.row}{self.col}", self._on_event)

    def _on_event(self, _event: Event) -> None:
        self.redraw()

    def redraw(self) -> CellStyle:
        """Recompute the style from the game and the chosen digit."""
        cell = self.game.cell(self.row, self.col)
        style = cell_style(cell, self.store.get(SELECTED_NUM))
        if not style.italic:
            style = replace(style, text_color=self._text_color)
        self.style = style
        return self.style

    def tap(self) -> bool:
        """Handle a click: run the callback, or place the chosen digit.

        Returns whether the board changed.
        """
        if self._on_tap is not None:
            self._on_tap()
            return False
        selected = self.store.get(SELECTED_NUM)
        if not isinstance(selected, int) or not 1 <= selected <= 9:
            return False
        changed = self.game.place(self.row, self.col, selected)
        if changed:
            self.redraw()
        return changed


class SudokuGroup:
    """A 3x3 block of cells with its own background and outer borders."""

    def __init__(
        self,
        game: SudokuGame,
        store: DataStore,
        row: int,
        col: int,
        borders: Sequence[bool] = (False, False, False, False),
        bus: Optional[EventBus] = None,
    ) -> None:
        if not (0 <= row < 3 and 0 <= col < 3):
            raise ValueError(f"group position must be within 0..2, got ({row}, {col})")
        self.row = row
        self.col = col
        self.index = 3 * row + col
        self.cells: List[List[SudokuCell]] = [
            [
                SudokuCell(
                    game,
                    store,
                    self.index,
                    i,
                    j,
                    borders=(i > 0, j < 2, False, False),
                    bus=bus,
                )
                for j in range(3)
            ]
            for i in range(3)
        ]
        self.background = (
            ODD_GROUP_BACKGROUND if self.index % 2 == 1 else EVEN_GROUP_BACKGROUND
        )
        self.border_color = BORDER_COLOR
        self.border_width = GROUP_BORDER_WIDTH
        self.border_lines = _border_lines(GROUP_SIZE, borders)

    def __iter__(self):
        return (cell for line in self.cells for cell in line)


class HoverCircle:
    """A small disc following the pointer that shows the chosen digit."""

    def __init__(
        self,
        size: Tuple[float, float],
        color: RGBA,
        text: str,
        bus: Optional[EventBus] = None,
    ) -> None:
        self.width, self.height = size
        self.color = color
        self.text = text
        self.text_size = HOVER_TEXT_SIZE
        self.visible = False
        self.position: Point = (0.0, 0.0)
        self.fill_color = TRANSPARENT
        self.text_color = TRANSPARENT
        if bus is not None:
            bus.subscribe(SELECTED_NUM_CHANGE, self._on_selection)

    def _on_selection(self, event: Event) -> None:
        self.text = str(event.data)

    def show_at(self, x: float, y: float) -> Point:
        """Show the disc centred on (x, y); return its top-left corner."""
        self.visible = True
        self.fill_color = self.color
        self.text_color = HOVER_TEXT
        self.position = (x - self.width / 2, y - self.height / 2)
        return self.position

    def hide(self) -> None:
        """Hide the disc."""
        self.visible = False