import logging

from sudoku_engine import (
    REMOVAL_COUNT, SIZE, SUCCESS_MESSAGE, PuzzleGenerator, check_all_conflicts,
    conflict_kind, conflict_message, copy_grid, find_conflicts, is_complete,
    move_message, verify_solution,
)

logger = logging.getLogger("sudoku")

ERROR = 'error'
SUCCESS = 'success'


class InvalidMoveError(ValueError):
    """Raised for an edit outside the grid or with a digit outside 0-9."""


class GameView:
    """
    Notifications sent by the game to its presentation layer.
    Every method is a no-op here; a view overrides what it displays.
    """

    def render_grid(self, grid, fixed):
        """Shows a new board; the previous invalid marks are already cleared."""

    def update_cell(self, coord, value):
        pass

    def mark_invalid(self, coord):
        pass

    def clear_invalid(self, coord):
        pass

    def show_message(self, kind, text):
        pass

    def hide_message(self, kind):
        pass


# =========================================================================
# GAME STATE OWNER
# Holds puzzle, solution and fixed cells; all edits go through here.
# =========================================================================
class GameManager:
    def __init__(self, view=None, removal_count=REMOVAL_COUNT, rng=None):
        self.view = view if view is not None else GameView()
        self.generator = PuzzleGenerator(removal_count, rng)

        self.grid = None
        self.solution = None
        self.fixed = frozenset()
        self.solved = False

        # Cells currently flagged on the view; always diffed against the grid
        self._marked = set()

        self.on_new_game_requested()

    def on_new_game_requested(self):
        """Generates a fresh puzzle and resets the view."""
        puzzle, solution = self.generator.generate()
        self.load(puzzle, solution)
        logger.info("New puzzle ready (%d cells to fill)", self.empty_count())

    def load(self, puzzle, solution):
        """Replaces the whole game state; every filled cell becomes fixed."""
        self.grid = copy_grid(puzzle)
        self.solution = copy_grid(solution)
        self.fixed = frozenset((i, j)
                               for i in range(SIZE)
                               for j in range(SIZE)
                               if puzzle[i][j] != 0)
        self.solved = False

        # Clear the previous game's marks on the view
        for coord in sorted(self._marked):
            self.view.clear_invalid(coord)
        self._marked = set()

        self.view.hide_message(ERROR)
        self.view.hide_message(SUCCESS)
        self.view.render_grid(self.grid, self.fixed)
        self._sync_marks()

    @property
    def invalid_cells(self):
        """Cells taking part in a conflict, derived from the grid every time."""
        invalid_cells, _ = check_all_conflicts(self.grid)
        return invalid_cells

    def is_fixed(self, coord):
        return tuple(coord) in self.fixed

    def empty_count(self):
        return sum(1 for row in self.grid for value in row if value == 0)

    def on_cell_edited(self, coord, digit):
        """
        Places `digit` at `coord`, or clears the cell when digit is None or 0.
        Returns the cells clashing with the placed digit (empty when the move
        is clean or the cell was cleared). Edits to fixed cells are ignored.
        """
        row, col = self._check_coord(coord)
        num = 0 if digit is None else digit
        if isinstance(num, bool) or not isinstance(num, int) or num not in range(0, SIZE + 1):
            raise InvalidMoveError("Digit must be 1-9 (or 0/None to clear), got %r" % (digit,))

        if (row, col) in self.fixed:
            logger.debug("Ignoring edit of fixed cell (%d, %d)", row, col)
            return []

        self.grid[row][col] = num
        self.solved = False
        self.view.update_cell((row, col), num)
        self.view.hide_message(SUCCESS)
        logger.debug("Cell (%d, %d) set to %d", row, col, num)

        if num == 0:
            self._refresh()
            return []

        conflicts = find_conflicts(self.grid, row, col, num)
        if conflicts:
            self._sync_marks()
            message = move_message(num, conflict_kind(row, col, conflicts))
            logger.debug("Conflict at (%d, %d): %s", row, col, message)
            self.view.show_message(ERROR, message)
            return conflicts

        invalid_cells = self._refresh()
        if is_complete(self.grid, invalid_cells):
            self._declare_solved()
        return []

    def on_check_requested(self):
        """Runs the full verification and reports the outcome on the view."""
        verdict = verify_solution(self.grid)
        if verdict.ok:
            self._declare_solved()
        else:
            logger.info("Check failed: %s", verdict.message)
            self.view.hide_message(SUCCESS)
            self.view.show_message(ERROR, verdict.message)
        return verdict

    def is_complete(self):
        """Incremental completion check: no conflicts and no empty cell."""
        return is_complete(self.grid)

    def _check_coord(self, coord):
        try:
            row, col = coord
        except (TypeError, ValueError):
            raise InvalidMoveError("Expected a (row, col) pair, got %r" % (coord,))
        if row not in range(SIZE) or col not in range(SIZE):
            raise InvalidMoveError("Cell (%r, %r) is outside the grid" % (row, col))
        return row, col

    def _refresh(self):
        # Full rescan after a clean edit or a clear
        invalid_cells, summary = self._sync_marks()
        if summary is not None:
            self.view.show_message(ERROR, conflict_message(summary))
        else:
            self.view.hide_message(ERROR)
        return invalid_cells

    def _sync_marks(self):
        invalid_cells, summary = check_all_conflicts(self.grid)
        for coord in sorted(self._marked - invalid_cells):
            self.view.clear_invalid(coord)
        for coord in sorted(invalid_cells - self._marked):
            self.view.mark_invalid(coord)
        self._marked = invalid_cells
        return invalid_cells, summary

    def _declare_solved(self):
        self.solved = True
        self.view.hide_message(ERROR)
        self.view.show_message(SUCCESS, SUCCESS_MESSAGE)
        logger.info("Puzzle solved")
