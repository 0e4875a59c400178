"""The whole game put together, with a line-oriented console front end."""

from __future__ import annotations

import argparse
import random
import sys
from dataclasses import dataclass
from functools import partial
from typing import Callable, Dict, List, Optional, Sequence, TextIO, Tuple

from .board import HoverCircle, SudokuCell, SudokuGroup
from .colors import rgb
from .controls import LEVEL_LABEL, TIME_LABEL, HelpTip, NumberButton, StatusBar
from .events import GAME_REFRESH, GAME_VICTORY, TIME_STOP, Event
from .fireworks import FireworkGroup
from .game import SudokuGame
from .models import GRID_SIZE, LEVELS, Level
from .stopwatch import Stopwatch
from .storage import SELECTED_NUM, DataStore

WINDOW_SIZE = (740.0, 640.0)
PANEL_SIZE = 540.0
MENU_WIDTH = 200.0
MENU_PADDING = 20.0
THEME_TEXT_SIZE = 14.0
HOVER_SIZE = (30.0, 30.0)
HOVER_COLOR = rgb(176, 157, 121)
WINDOW_BORDER = rgb(187, 187, 187)
NEW_GAME_TITLE = "新游戏"
HELP_LABEL = "提示"
HELP_TEXT = (
    "1.滚动滑轮实现数字切换\r\n"
    "2.点击下方数字按钮区域实现数字切换\r\n"
    "3.点击数独内容区域实现数字填入和取消"
)

UNDO_LABEL = "撤销"
RESTART_LABEL = "重新开始"
PRINT_LABEL = "打印"
SAVE_LABEL = "保存"
RESTORE_LABEL = "恢复"

_COMMANDS = (
    "select N      choose digit N (1-9)",
    "up | down     scroll the chosen digit",
    "place R C     put the chosen digit at row R, column C (1-9)",
    "undo          take back the last move",
    "restart       new puzzle at the current level",
    "new L         new puzzle at level L (number or name)",
    "save          remember this game",
    "restore       return to the remembered game",
    "print         show the board",
    "help          show this help",
    "quit          leave",
)


@dataclass(frozen=True)
class TitleGeometry:
    """Where a menu group's caption sits and how large it is."""

    x: float
    y: float
    width: float
    height: float


def cycle_selection(current: int, delta: float) -> int:
    """The digit chosen after scrolling by ``delta`` from ``current``.

    Scrolling up steps down (1 wraps to 9); scrolling down steps up
    (9 wraps to 1); no movement keeps the digit.
    """
    if not 1 <= current <= 9:
        raise ValueError(f"digit must be within 1..9, got {current}")
    if delta > 0:
        return 9 if current == 1 else current - 1
    if delta < 0:
        return 1 if current == 9 else current + 1
    return current


def title_geometry(
    title: str, container_width: float, padding: float, text_size: float
) -> Optional[TitleGeometry]:
    """Caption box centred across the group's top edge; None for a blank title."""
    if not title.strip():
        return None
    width = text_size * len(title)
    return TitleGeometry((container_width - width) / 2, padding + text_size, width, text_size)


def _popup_size(text: str, text_size: float) -> Tuple[float, float]:
    lines = text.splitlines() or [""]
    return max(len(line) for line in lines) * text_size, len(lines) * text_size * 1.5


class SudokuApp:
    """The board, number pad, status bar and menus wired to one game."""

    def __init__(
        self,
        game: Optional[SudokuGame] = None,
        level: Level = LEVELS[0],
        rng: Optional[random.Random] = None,
        fireworks=None,
        stopwatch: Optional[Stopwatch] = None,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ) -> None:
        self.game = game if game is not None else SudokuGame(level, rng=rng)
        self.bus = self.game.bus
        self.store = DataStore()
        self.store.set(SELECTED_NUM, 1)
        self._stdin = stdin
        self._stdout = stdout

        self.groups: List[List[SudokuGroup]] = [
            [
                SudokuGroup(self.game, self.store, i, j, borders=(i == 0, True, True, j == 0))
                for j in range(3)
            ]
            for i in range(3)
        ]
        self.cells: Dict[Tuple[int, int], SudokuCell] = {
            (cell.row, cell.col): cell for line in self.groups for group in line for cell in group
        }
        self.hover = HoverCircle(HOVER_SIZE, HOVER_COLOR, "1", bus=self.bus)
        self.fireworks = fireworks if fireworks is not None else FireworkGroup(3, 300)
        self.status = StatusBar(self.game, stopwatch, size=(PANEL_SIZE, 50.0))
        self.number_buttons = [
            NumberButton(num, self.game, self.store, on_tap=partial(self.select_number, num))
            for num in range(1, 10)
        ]
        self.help = HelpTip(
            HELP_LABEL,
            HELP_TEXT,
            size=(50.0, 50.0),
            popup_size=_popup_size(HELP_TEXT, THEME_TEXT_SIZE),
            anchor=(WINDOW_SIZE[0] - MENU_WIDTH + (MENU_WIDTH - 50.0) / 2, 0.0),
            window_size=WINDOW_SIZE,
        )
        self.menu_title = title_geometry(NEW_GAME_TITLE, MENU_WIDTH, MENU_PADDING, THEME_TEXT_SIZE)
        self.level_buttons: Dict[str, Callable[[], None]] = {
            lvl.name: partial(self._start_level, lvl) for lvl in LEVELS
        }
        self.action_buttons: Dict[str, Callable[[], object]] = {
            UNDO_LABEL: self.game.undo,
            RESTART_LABEL: self.game.restart,
            PRINT_LABEL: self._print_board,
            SAVE_LABEL: self.game.save,
            RESTORE_LABEL: self.game.restore,
        }
        self.bus.subscribe(GAME_REFRESH, self._on_refresh)
        self.bus.subscribe(GAME_VICTORY, self._on_victory)

    @property
    def selected(self) -> int:
        return self.store.get(SELECTED_NUM)

    def select_number(self, num: int) -> None:
        """Make ``num`` the chosen digit and announce it."""
        if not 1 <= num <= 9:
            raise ValueError(f"digit must be within 1..9, got {num}")
        self.store.set(SELECTED_NUM, num)
        self.bus.publish(Event(SELECTED_NUM_CHANGE_TYPE, num))

    def scroll(self, delta: float) -> int:
        """Move the chosen digit as a scroll wheel would; return the new digit."""
        current = self.selected
        new = cycle_selection(current, delta)
        if delta != 0:
            self.select_number(new)
        return new

    def _start_level(self, level: Level) -> None:
        self.game.new_game(level)
        self.bus.publish(Event(GAME_REFRESH))

    def _on_refresh(self, _event: Event) -> None:
        for cell in self.cells.values():
            cell.redraw()

    def _on_victory(self, _event: Event) -> None:
        self.bus.publish(Event(TIME_STOP))
        self.fireworks.start(PANEL_SIZE / 2, PANEL_SIZE / 2)

    def _render(self) -> str:
        lines = [
            f"{LEVEL_LABEL}{self.status.level_text}  {TIME_LABEL}{self.status.time_text}",
            "    1 2 3   4 5 6   7 8 9",
        ]
        for row in range(GRID_SIZE):
            if row and row % 3 == 0:
                lines.append("   -------+-------+-------")
            parts = []
            for col in range(GRID_SIZE):
                if col and col % 3 == 0:
                    parts.append("|")
                style = self.cells[(row, col)].style
                mark = "*" if style.italic else " "
                parts.append(f"{mark}{style.text or '.'}")
            lines.append(f"{row + 1}  " + "".join(parts))
        pad = []
        for button in self.number_buttons:
            label = f"{button.num}~" if self.game.fill_count(button.num) == 9 else str(button.num)
            pad.append(f"[{label}]" if button.selected else f" {label} ")
        lines.append("digits:" + "".join(pad))
        return "\n".join(lines)

    def _print_board(self) -> None:
        self._write(self._render())

    def _write(self, text: str) -> None:
        out = self._stdout if self._stdout is not None else sys.stdout
        out.write(text + "\n")

    def _level_from(self, token: str) -> Level:
        if token.isdigit() and 1 <= int(token) <= len(LEVELS):
            return LEVELS[int(token) - 1]
        for lvl in LEVELS:
            if lvl.name == token:
                return lvl
        raise ValueError(f"unknown level {token!r}")

    def _place(self, row_text: str, col_text: str) -> None:
        row, col = int(row_text), int(col_text)
        if not (1 <= row <= 9 and 1 <= col <= 9):
            raise ValueError("row and column must be within 1..9")
        changed = self.cells[(row - 1, col - 1)].tap()
        self._write("ok" if changed else "rejected")

    def _execute(self, words: Sequence[str]) -> bool:
        command, args = words[0].lower(), list(words[1:])
        simple = {
            "undo": self.action_buttons[UNDO_LABEL],
            "restart": self.action_buttons[RESTART_LABEL],
            "save": self.action_buttons[SAVE_LABEL],
        }
        if command in ("quit", "exit"):
            return False
        if command == "select" and len(args) == 1:
            self.select_number(int(args[0]))
        elif command == "up":
            self.scroll(1)
        elif command == "down":
            self.scroll(-1)
        elif command == "place" and len(args) == 2:
            self._place(*args)
        elif command in simple and not args:
            simple[command]()
        elif command == "restore" and not args:
            if not self.action_buttons[RESTORE_LABEL]():
                self._write("nothing saved")
        elif command == "new" and len(args) == 1:
            self.level_buttons[self._level_from(args[0]).name]()
        elif command == "print":
            pass
        elif command == "help":
            self._write(HELP_TEXT.replace("\r\n", "\n"))
            self._write("\n".join(_COMMANDS))
            return True
        else:
            self._write(f"unknown command: {' '.join(words)}")
            return True
        self._print_board()
        return True

    def run(self) -> int:
        """Read commands line by line until ``quit`` or end of input."""
        source = self._stdin if self._stdin is not None else sys.stdin
        self._print_board()
        for line in source:
            words = line.split()
            if not words:
                continue
            try:
                if not self._execute(words):
                    break
            except ValueError as exc:
                self._write(f"error: {exc}")
        return 0


from .events import SELECTED_NUM_CHANGE as SELECTED_NUM_CHANGE_TYPE  # noqa: E402


def _level_arg(text: str) -> Level:
    if text.isdigit() and 1 <= int(text) <= len(LEVELS):
        return LEVELS[int(text) - 1]
    for lvl in LEVELS:
        if lvl.name == text:
            return lvl
    raise argparse.ArgumentTypeError(f"unknown level {text!r}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Play sudoku in the terminal."""
    parser = argparse.ArgumentParser(prog="sudokugame", description="Play sudoku.")
    parser.add_argument(
        "--level", type=_level_arg, default=LEVELS[0], help="level number (1-4) or name"
    )
    parser.add_argument("--seed", type=int, default=None, help="seed for puzzle generation")
    args = parser.parse_args(argv)
    app = SudokuApp(level=args.level, rng=random.Random(args.seed))
    return app.run()


if __name__ == "__main__":
    sys.exit(main())