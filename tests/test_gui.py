import os

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

pygame = pytest.importorskip("pygame")

from sudoku_game import ERROR  # noqa: E402
from sudoku_gui import SudokuApp, parse_args  # noqa: E402


@pytest.fixture
def app():
    app = SudokuApp(seed=42)
    yield app
    pygame.quit()


def free_cell(app):
    return next((i, j) for i in range(9) for j in range(9) if (i, j) not in app.fixed)


def button(app, label):
    return dict(app.picker_buttons())[label]


def test_app_shows_generated_puzzle(app):
    assert app.board == app.game.grid
    assert app.fixed == app.game.fixed
    assert len(app.fixed) == 41
    assert app.picker_cell is None


def test_click_on_free_cell_opens_picker(app):
    cell = free_cell(app)
    app.handle_click(app.cell_rect(*cell).center)
    assert app.picker_cell == cell
    assert app.selected == cell
    assert [label for label, _ in app.picker_buttons()] == list("123456789X")


def test_click_on_fixed_cell_does_nothing(app):
    cell = sorted(app.fixed)[0]
    app.handle_click(app.cell_rect(*cell).center)
    assert app.picker_cell is None


def test_picking_a_digit_edits_the_game(app):
    row, col = free_cell(app)
    digit = app.game.solution[row][col]
    app.handle_click(app.cell_rect(row, col).center)
    app.handle_click(button(app, str(digit)).center)

    assert app.picker_cell is None
    assert app.game.grid[row][col] == digit
    assert app.board[row][col] == digit


def test_picking_x_clears_the_cell(app):
    row, col = free_cell(app)
    app.game.on_cell_edited((row, col), 4)
    app.handle_click(app.cell_rect(row, col).center)
    app.handle_click(button(app, "X").center)
    assert app.game.grid[row][col] == 0
    assert app.board[row][col] == 0


def test_click_outside_closes_picker(app):
    app.handle_click(app.cell_rect(*free_cell(app)).center)
    app.handle_click((app.WINDOW_WIDTH - 2, 2))
    assert app.picker_cell is None


def test_picker_stays_on_screen(app):
    app.open_picker((8, 8))
    area = app.picker_rect()
    assert pygame.Rect(0, 0, app.WINDOW_WIDTH, app.WINDOW_HEIGHT).contains(area)


def test_conflicting_key_entry_marks_cells(app):
    row, col, given = next(
        (i, j, app.board[i][k])
        for i in range(9) for j in range(9) for k in range(9)
        if (i, j) not in app.fixed and (i, k) in app.fixed
    )
    app.selected = (row, col)
    app.handle_key(pygame.K_1 + given - 1)

    assert (row, col) in app.invalid
    assert app.messages[ERROR] == "Number %d already exists in this row!" % given

    app.handle_key(pygame.K_BACKSPACE)
    assert app.invalid == set()
    assert ERROR not in app.messages


def test_arrow_keys_move_selection(app):
    app.selected = (4, 4)
    app.handle_key(pygame.K_UP)
    app.handle_key(pygame.K_LEFT)
    assert app.selected == (3, 3)
    app.selected = (0, 0)
    app.handle_key(pygame.K_UP)
    assert app.selected == (0, 0)


def test_buttons_trigger_game_actions(app):
    app.handle_click(app.check_rect.center)
    assert "empty cells left" in app.messages[ERROR]

    first = [row[:] for row in app.board]
    app.handle_click(app.new_game_rect.center)
    assert app.board != first
    assert app.messages == {}


def test_draw_does_not_fail(app):
    app.open_picker(free_cell(app))
    app.show_message(ERROR, "Number 1 already exists in this row!")
    app.draw()


def test_parse_args():
    args = parse_args(["--seed", "5", "-v"])
    assert args.seed == 5
    assert args.verbose is True
    assert parse_args([]).seed is None


def test_solved_game_locks_the_board(app):
    for row in range(9):
        for col in range(9):
            if (row, col) not in app.fixed:
                app.game.on_cell_edited((row, col), app.game.solution[row][col])
    assert app.game.solved is True

    cell = free_cell(app)
    app.handle_click(app.cell_rect(*cell).center)
    assert app.picker_cell is None
    app.selected = cell
    app.handle_key(pygame.K_BACKSPACE)
    assert app.game.grid[cell[0]][cell[1]] != 0
