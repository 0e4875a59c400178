"""Number buttons, the level/time status bar and the help tip."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from .colors import RGBA, rgb
from .events import (
    GAME_REFRESH,
    NUMBER_FILL_COMPLETED,
    NUMBER_FILL_ROLLBACK,
    SELECTED_NUM_CHANGE,
    TIME_RESTART,
    TIME_STOP,
    Event,
    EventBus,
)
from .stopwatch import Stopwatch
from .storage import SELECTED_NUM, DataStore

NUMBER_DEFAULT = rgb(26, 56, 226)
NUMBER_SELECTED = rgb(225, 137, 92)
NUMBER_TEXT = rgb(255, 255, 255)
NUMBER_TEXT_SIZE = 20.0
FULL_DEFAULT_ALPHA = 120
FULL_SELECTED_ALPHA = 180

TIMER_COLOR = rgb(242, 136, 80)
LEVEL_LABEL = "难易度: "
TIME_LABEL = "时间: "

TIP_NORMAL_FILL = rgb(255, 255, 255)
TIP_NORMAL_BORDER = rgb(220, 223, 230)
TIP_NORMAL_TEXT = rgb(103, 105, 109)
TIP_HOVER_FILL = rgb(236, 245, 255)
TIP_HOVER_BORDER = rgb(198, 226, 255)
TIP_HOVER_TEXT = rgb(71, 161, 255)
POPUP_GAP = 5.0

Size = Tuple[float, float]
Point = Tuple[float, float]


@dataclass(frozen=True)
class ButtonColors:
    """Background colours of a number button in its two states."""

    default: RGBA
    selected: RGBA


def number_button_colors(fill_count: int) -> ButtonColors:
    """Button colours for a digit placed ``fill_count`` times; faded once all nine are in."""
    if fill_count == 9:
        return ButtonColors(
            NUMBER_DEFAULT.with_alpha(FULL_DEFAULT_ALPHA),
            NUMBER_SELECTED.with_alpha(FULL_SELECTED_ALPHA),
        )
    return ButtonColors(NUMBER_DEFAULT, NUMBER_SELECTED)


def popup_position(
    anchor_x: float,
    anchor_y: float,
    anchor_height: float,
    popup_width: float,
    popup_height: float,
    window_width: float,
    window_height: float,
) -> Point:
    """Place a popup left of its anchor, vertically centred, nudged back into the window."""
    x = anchor_x - popup_width - POPUP_GAP
    y = anchor_y + (anchor_height - popup_height) / 2
    if x < 0:
        x = POPUP_GAP
    if x + popup_width > window_width:
        x = x + popup_width - window_width
    if y < 0:
        y = POPUP_GAP
    if y + popup_height > window_height:
        y = y + popup_height - window_height
    return x, y


class NumberButton:
    """A round button choosing one digit; follows selection and fill events."""

    def __init__(
        self,
        num: int,
        game,
        store: DataStore,
        on_tap: Optional[Callable[[], None]] = None,
        bus: Optional[EventBus] = None,
        size: Size = (55.0, 55.0),
    ) -> None:
        if not 1 <= num <= 9:
            raise ValueError(f"digit must be within 1..9, got {num}")
        self.num = num
        self.text = str(num)
        self.text_color = NUMBER_TEXT
        self.text_size = NUMBER_TEXT_SIZE
        self.bold = True
        self.size = size
        self.game = game
        self.store = store
        self._on_tap = on_tap
        colors = number_button_colors(0)
        self.default_color = colors.default
        self.selected_color = colors.selected
        self.selected = False
        self.fill_color = self.default_color
        self.redraw()
        bus = bus if bus is not None else game.bus
        bus.subscribe(f"{NUMBER_FILL_COMPLETED}{num}", self._on_completed)
        bus.subscribe(f"{NUMBER_FILL_ROLLBACK}{num}", self._on_rollback)
        bus.subscribe(SELECTED_NUM_CHANGE, self._on_selection)
        bus.subscribe(GAME_REFRESH, lambda _event: self.redraw())

    def _apply(self, selected: bool) -> None:
        self.selected = selected
        self.fill_color = self.selected_color if selected else self.default_color

    def _set_colors(self, colors: ButtonColors) -> None:
        self.default_color = colors.default
        self.selected_color = colors.selected
        self._apply(self.selected)

    def _on_completed(self, _event: Event) -> None:
        self._set_colors(number_button_colors(9))

    def _on_rollback(self, _event: Event) -> None:
        self._set_colors(number_button_colors(0))

    def _on_selection(self, event: Event) -> None:
        self._apply(event.data == self.num)

    def tap(self) -> None:
        """Run the click callback, if any."""
        if self._on_tap is not None:
            self._on_tap()

    def redraw(self) -> RGBA:
        """Recompute colours from the game's counts and the chosen digit."""
        colors = number_button_colors(self.game.fill_count(self.num))
        self.default_color = colors.default
        self.selected_color = colors.selected
        self._apply(self.store.get(SELECTED_NUM) == self.num)
        return self.fill_color


class StatusBar:
    """Shows the current level and the time spent on the game."""

    def __init__(
        self,
        game,
        stopwatch: Optional[Stopwatch] = None,
        bus: Optional[EventBus] = None,
        size: Size = (540.0, 50.0),
    ) -> None:
        self.game = game
        self.stopwatch = stopwatch if stopwatch is not None else Stopwatch()
        self.size = size
        self.level_label = LEVEL_LABEL
        self.time_label = TIME_LABEL
        self.time_color = TIMER_COLOR
        self.refresh()
        bus = bus if bus is not None else game.bus
        bus.subscribe(GAME_REFRESH, self._on_game_refresh)
        bus.subscribe(TIME_RESTART, self._on_time_restart)
        bus.subscribe(TIME_STOP, lambda _event: self.stopwatch.stop())

    @property
    def time_text(self) -> str:
        return self.stopwatch.text()

    def _on_game_refresh(self, _event: Event) -> None:
        self.stopwatch.stop()
        self.stopwatch.reset()
        self.refresh()

    def _on_time_restart(self, _event: Event) -> None:
        self.stopwatch.reset()
        self.stopwatch.start()

    def refresh(self) -> None:
        """Take the level's name and colour from the game."""
        level = self.game.level
        self.level_text = level.name
        self.level_color = level.color


class HelpTip:
    """A round "?" style button that pops up help text beside itself."""

    def __init__(
        self,
        label: str,
        content: str,
        size: Size = (50.0, 50.0),
        popup_size: Size = (0.0, 0.0),
        anchor: Point = (0.0, 0.0),
        window_size: Size = (740.0, 640.0),
    ) -> None:
        self.label = label
        self.content = content
        self.size = size
        self.popup_size = popup_size
        self.anchor = anchor
        self.window_size = window_size
        self.popup_at: Optional[Point] = None
        self.popup_visible = False
        self.hovered = False
        self.stroke_width = 1.0
        self.mouse_out()

    def mouse_in(self) -> None:
        """Switch to the hover colours."""
        self.hovered = True
        self.fill_color = TIP_HOVER_FILL
        self.border_color = TIP_HOVER_BORDER
        self.text_color = TIP_HOVER_TEXT

    def mouse_out(self) -> None:
        """Switch back to the normal colours."""
        self.hovered = False
        self.fill_color = TIP_NORMAL_FILL
        self.border_color = TIP_NORMAL_BORDER
        self.text_color = TIP_NORMAL_TEXT

    def toggle(self) -> bool:
        """Show the popup, or hide it if shown; return whether it is now visible.

        Its position is worked out the first time it is shown.
        """
        if self.popup_visible:
            self.popup_visible = False
            return False
        if self.popup_at is None:
            self.popup_at = popup_position(
                self.anchor[0],
                self.anchor[1],
                self.size[1],
                self.popup_size[0],
                self.popup_size[1],
                self.window_size[0],
                self.window_size[1],
            )
        self.popup_visible = True
        return True