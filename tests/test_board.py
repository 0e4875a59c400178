import random

import pytest

from sudokugame.board import (
    BORDER_COLOR,
    EVEN_GROUP_BACKGROUND,
    FILLED_TEXT,
    ODD_GROUP_BACKGROUND,
    SELECTED_STROKE,
    BorderLine,
    HoverCircle,
    Side,
    SudokuCell,
    SudokuGroup,
    board_position,
    border_line,
    cell_style,
)
from sudokugame.colors import SIMPLE_TEXT, TRANSPARENT, rgb
from sudokugame.events import SELECTED_NUM_CHANGE, Event, EventBus
from sudokugame.game import SudokuGame
from sudokugame.models import LEVELS, Cell
from sudokugame.solver import is_valid
from sudokugame.storage import SELECTED_NUM, DataStore


@pytest.fixture(scope="module")
def base_game():
    return SudokuGame(LEVELS[0], rng=random.Random(7))


@pytest.fixture
def game():
    return SudokuGame(LEVELS[0], rng=random.Random(7))


@pytest.fixture
def store():
    s = DataStore()
    s.set(SELECTED_NUM, 1)
    return s


def _find_hole(game):
    for r in range(9):
        for c in range(9):
            if game.cell(r, c).is_hole:
                return r, c
    raise AssertionError("no hole")


def _find_given(game):
    for r in range(9):
        for c in range(9):
            if not game.cell(r, c).is_hole:
                return r, c
    raise AssertionError("no given")


def _valid_digit(game, r, c):
    grid = game.grid
    for n in range(1, 10):
        if is_valid(grid, r, c, n) and game.fill_count(n) < 9:
            return n
    raise AssertionError("no digit")


def _cell_at(game, store, r, c, **kwargs):
    group = 3 * (r // 3) + c // 3
    return SudokuCell(game, store, group, r % 3, c % 3, **kwargs)


def test_board_position_covers_every_cell_in_its_box():
    seen = set()
    for g in range(9):
        for x in range(3):
            for y in range(3):
                r, c = board_position(g, x, y)
                assert (r // 3) * 3 + c // 3 == g
                assert r % 3 == x and c % 3 == y
                seen.add((r, c))
    assert len(seen) == 81


def test_board_position_rejects_out_of_range():
    with pytest.raises(ValueError):
        board_position(9, 0, 0)
    with pytest.raises(ValueError):
        board_position(0, 3, 0)


def test_border_line_sides():
    assert border_line(60, Side.TOP) == BorderLine((0, 0), (60, 0))
    assert border_line(60, 1) == BorderLine((60, 0), (60, 60))
    assert border_line(60, Side.BOTTOM) == BorderLine((0, 60), (60, 60))
    assert border_line(60, Side.LEFT) == BorderLine((0, 0), (0, 60))


def test_border_line_unknown_side():
    with pytest.raises(ValueError):
        border_line(60, 4)


def test_cell_style_given_digit_selected():
    style = cell_style(Cell(5, False), 5)
    assert style.text == "5"
    assert style.italic is False
    assert style.text_color == SIMPLE_TEXT
    assert style.stroke_color == SELECTED_STROKE
    assert style.stroke_width == 2


def test_cell_style_filled_hole_not_selected():
    style = cell_style(Cell(3, True), 5)
    assert style.text == "3"
    assert style.italic is True
    assert style.text_color == FILLED_TEXT
    assert style.stroke_width == 0


def test_cell_style_empty_cell():
    style = cell_style(Cell(0, True), 4)
    assert style.text == ""
    assert style.stroke_color == TRANSPARENT


def test_cell_shows_game_digit(base_game, store):
    r, c = _find_given(base_game)
    cell = _cell_at(base_game, store, r, c)
    assert (cell.row, cell.col) == (r, c)
    assert cell.style.text == str(base_game.cell(r, c).num)
    assert cell.style.italic is False


def test_cell_borders_follow_flags(base_game, store):
    cell = SudokuCell(base_game, store, 0, 0, 0, borders=(True, False, False, True))
    assert cell.border_lines == [
        border_line(cell.diameter, Side.TOP),
        border_line(cell.diameter, Side.LEFT),
    ]


def test_tap_places_and_toggles(game, store):
    r, c = _find_hole(game)
    n = _valid_digit(game, r, c)
    store.set(SELECTED_NUM, n)
    cell = _cell_at(game, store, r, c)
    assert cell.tap() is True
    assert game.cell(r, c).num == n
    assert cell.style.text == str(n)
    assert cell.style.italic is True
    assert cell.style.stroke_color == SELECTED_STROKE
    assert cell.tap() is True
    assert game.cell(r, c).num == 0
    assert cell.style.text == ""


def test_tap_on_given_cell_does_nothing(game, store):
    r, c = _find_given(game)
    before = game.cell(r, c)
    cell = _cell_at(game, store, r, c)
    assert cell.tap() is False
    assert game.cell(r, c) == before


def test_tap_callback_replaces_placement(game, store):
    r, c = _find_hole(game)
    store.set(SELECTED_NUM, _valid_digit(game, r, c))
    calls = []
    cell = _cell_at(game, store, r, c, on_tap=lambda: calls.append(1))
    assert cell.tap() is False
    assert calls == [1]
    assert game.cell(r, c).num == 0


def test_undo_event_redraws_cell(game, store):
    r, c = _find_hole(game)
    store.set(SELECTED_NUM, _valid_digit(game, r, c))
    cell = _cell_at(game, store, r, c)
    cell.tap()
    game.undo()
    assert cell.style.text == ""


def test_selection_event_redraws_cell(game, store):
    r, c = _find_given(game)
    num = game.cell(r, c).num
    other = num % 9 + 1
    store.set(SELECTED_NUM, other)
    cell = _cell_at(game, store, r, c)
    assert cell.style.stroke_width == 0
    store.set(SELECTED_NUM, num)
    game.bus.publish(Event(SELECTED_NUM_CHANGE, num))
    assert cell.style.stroke_color == SELECTED_STROKE


def test_group_backgrounds_alternate(base_game, store):
    assert SudokuGroup(base_game, store, 0, 1).background == ODD_GROUP_BACKGROUND
    assert SudokuGroup(base_game, store, 1, 1).background == EVEN_GROUP_BACKGROUND
    group = SudokuGroup(base_game, store, 0, 0, borders=(True, True, True, True))
    assert len(group.border_lines) == 4
    assert group.border_color == BORDER_COLOR


def test_group_rejects_bad_position(base_game, store):
    with pytest.raises(ValueError):
        SudokuGroup(base_game, store, 3, 0)


def test_hover_circle_show_and_hide():
    color = rgb(176, 157, 121)
    hover = HoverCircle((30, 30), color, "1")
    assert hover.visible is False
    assert hover.show_at(100, 50) == (85, 35)
    assert hover.visible is True
    assert hover.fill_color == color
    hover.hide()
    assert hover.visible is False


def test_hover_circle_follows_selection():
    bus = EventBus()
    hover = HoverCircle((30, 30), rgb(176, 157, 121), "1", bus=bus)
    bus.publish(Event(SELECTED_NUM_CHANGE, 7))
    assert hover.text == "7"