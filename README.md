# sudokugame

A Sudoku game played in the terminal. It generates puzzles that have exactly
one solution, offers four difficulty levels, keeps a history of moves so that
each move can be taken back, and can remember a game and return to it later.

## Installing

    pip install .

## Playing

    sudokugame [--level LEVEL] [--seed SEED]

`--level` takes a level number (1 to 4) or a level name; the default is the
first level. `--seed` fixes the random seed used to generate puzzles.

The board is printed after every command. Digits you placed are marked with
`*`, empty cells show `.`. The digit row below the board brackets the chosen
digit and marks with `~` any digit of which all nine are on the board.

Commands, one per line:

| Command      | Effect                                                  |
|--------------|---------------------------------------------------------|
| `select N`   | choose digit N (1-9)                                    |
| `up`, `down` | step the chosen digit down or up, wrapping between 1 and 9 |
| `place R C`  | put the chosen digit at row R, column C (both 1-9)      |
| `undo`       | take back the last move                                 |
| `restart`    | new puzzle at the current level                         |
| `new L`      | new puzzle at level L (number or name)                  |
| `save`       | remember this game                                      |
| `restore`    | return to the remembered game                           |
| `print`      | show the board                                          |
| `help`       | show the help text and the command list                 |
| `quit`       | leave (`exit` and end of input also leave)              |

Only empty cells of the puzzle can be filled. Placing the digit a cell already
holds clears it. A digit is accepted only when it does not already appear in
the same row, column or 3x3 box, and never once all nine of it are on the
board. `place` answers `ok` or `rejected`.

The clock in the status line starts with the first move. Victory is announced
when the number of moves made plus the level's given digits reaches 81; the
clock then stops.

## Difficulty levels

| Number | Level | Given digits |
|--------|-------|--------------|
| 1      | 简单   | 32           |
| 2      | 中间   | 30           |
| 3      | 高级   | 27           |
| 4      | 困难   | 17           |

Digits are removed only while the puzzle keeps a single solution, so a puzzle
may end up with more given digits than its level asks for.

## Using it as a library

    import random
    from sudokugame.solver import generate_puzzle, count_solutions

    grid = generate_puzzle(30, random.Random(1))
    assert count_solutions(grid, 2) == 1

- `sudokugame.solver`: `is_valid`, `generate_complete`, `count_solutions`
  (stops counting at `limit`) and `generate_puzzle`.
- `sudokugame.game.SudokuGame`: one game's state, with `new_game`, `place`
  (returns whether the board changed, raises `ValueError` for a digit outside
  1-9), `cell`, `fill_count`, `undo` (returns the `Move` taken back, or
  `None`), `restart`, `save` and `restore` (returns `False` if nothing was
  saved). It announces changes on a `sudokugame.events.EventBus`.
- `sudokugame.models`: `Level`, `Cell`, `Move`, `LEVELS`, `empty_grid` and
  `copy_grid`.
- `sudokugame.stopwatch.Stopwatch` and `format_elapsed` for the `MM:SS` clock.
- `sudokugame.board`, `sudokugame.controls` and `sudokugame.app` hold the
  view state (cell styles, number buttons, status bar, help tip) and
  `SudokuApp`, which wires them to a game.

## What it does not do

There is no graphical window: the game is played through the text commands
above. Colours, sizes and popup positions are computed as view state but not
drawn. The victory fireworks (`sudokugame.fireworks`) animate particle
positions in background threads without displaying them. Saved games live
only in memory and are lost when the program ends.

## Running the tests

    pip install .[test]
    pytest