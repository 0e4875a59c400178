"""A terminal Sudoku game with unique-solution puzzle generation, undo, save and restore."""

__version__ = "0.1.0"