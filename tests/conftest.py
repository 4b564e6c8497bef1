import random

import pytest

from sudoku_game import GameManager, GameView

SOLVED = [
    [5, 3, 4, 6, 7, 8, 9, 1, 2],
    [6, 7, 2, 1, 9, 5, 3, 4, 8],
    [1, 9, 8, 3, 4, 2, 5, 6, 7],
    [8, 5, 9, 7, 6, 1, 4, 2, 3],
    [4, 2, 6, 8, 5, 3, 7, 9, 1],
    [7, 1, 3, 9, 2, 4, 8, 5, 6],
    [9, 6, 1, 5, 3, 7, 2, 8, 4],
    [2, 8, 7, 4, 1, 9, 6, 3, 5],
    [3, 4, 5, 2, 8, 6, 1, 7, 9],
]

PUZZLE = [
    [5, 3, 0, 0, 7, 0, 0, 0, 0],
    [6, 0, 0, 1, 9, 5, 0, 0, 0],
    [0, 9, 8, 0, 0, 0, 0, 6, 0],
    [8, 0, 0, 0, 6, 0, 0, 0, 3],
    [4, 0, 0, 8, 0, 3, 0, 0, 1],
    [7, 0, 0, 0, 2, 0, 0, 0, 6],
    [0, 6, 0, 0, 0, 0, 2, 8, 0],
    [0, 0, 0, 4, 1, 9, 0, 0, 5],
    [0, 0, 0, 0, 8, 0, 0, 7, 9],
]


class RecordingView(GameView):
    """Keeps what the game asked to display, and the order it asked."""

    def __init__(self):
        self.calls = []
        self.grid = None
        self.fixed = frozenset()
        self.invalid = set()
        self.messages = {}

    def render_grid(self, grid, fixed):
        self.calls.append(("render_grid",))
        self.grid = [row[:] for row in grid]
        self.fixed = fixed
        self.invalid = set()

    def update_cell(self, coord, value):
        self.calls.append(("update_cell", coord, value))
        self.grid[coord[0]][coord[1]] = value

    def mark_invalid(self, coord):
        self.calls.append(("mark_invalid", coord))
        self.invalid.add(coord)

    def clear_invalid(self, coord):
        self.calls.append(("clear_invalid", coord))
        self.invalid.discard(coord)

    def show_message(self, kind, text):
        self.calls.append(("show_message", kind, text))
        self.messages[kind] = text

    def hide_message(self, kind):
        self.calls.append(("hide_message", kind))
        self.messages.pop(kind, None)


@pytest.fixture
def solved():
    return [row[:] for row in SOLVED]


@pytest.fixture
def puzzle():
    return [row[:] for row in PUZZLE]


@pytest.fixture
def empty():
    return [[0] * 9 for _ in range(9)]


@pytest.fixture
def view():
    return RecordingView()


@pytest.fixture
def game(view):
    return GameManager(view=view, rng=random.Random(1234))
