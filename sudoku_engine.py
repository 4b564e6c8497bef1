import logging
import random
from collections import namedtuple

logger = logging.getLogger("sudoku")

# Apps that don't configure logging won't see "No handler found" warnings.
logger.addHandler(logging.NullHandler())

SIZE = 9
BOX = 3
DIGITS = range(1, SIZE + 1)
UNIT_SUM = sum(DIGITS)

# Cells cleared from the solution to build the playable puzzle
REMOVAL_COUNT = 40

UNIT_NAMES = {
    'row': 'row',
    'column': 'column',
    'box': '3x3 box',
}

SUCCESS_MESSAGE = "Congratulations! You solved the Sudoku puzzle correctly!"

ConflictSummary = namedtuple('ConflictSummary', 'kind digit')
Verdict = namedtuple('Verdict', 'ok reason message')


def empty_grid():
    return [[0] * SIZE for _ in range(SIZE)]


def copy_grid(grid):
    return [row[:] for row in grid]


def box_origin(row, col):
    """Top-left corner of the 3x3 box containing (row, col)."""
    return (row // BOX) * BOX, (col // BOX) * BOX


# =========================================================================
# MODULE 1: BACKTRACKING SOLVER
# Fills every empty cell of a grid, trying digits in ascending order.
# =========================================================================
def find_empty_cell(grid):
    """
    Finds the first empty cell (value 0) scanning rows top to bottom.
    Returns (row, col) or None if the grid is full.
    """
    for i in range(SIZE):
        for j in range(SIZE):
            if grid[i][j] == 0:
                return (i, j)
    return None


def solve(grid, rng=None):
    """
    Recursive backtracking solver. Mutates `grid` in place and returns True
    once every empty cell holds a digit that breaks no Sudoku rule.

    Candidates are tried 1 through 9, so a given starting grid always yields
    the same completion. Passing a `random.Random` as `rng` shuffles the
    candidates of every cell instead.
    """
    cell = find_empty_cell(grid)
    if cell is None:
        return True  # Grid is complete

    row, col = cell
    candidates = list(DIGITS)
    if rng is not None:
        rng.shuffle(candidates)

    for num in candidates:
        if is_valid(grid, row, col, num):
            grid[row][col] = num

            if solve(grid, rng):
                return True

            grid[row][col] = 0  # Backtrack

    return False


# =========================================================================
# MODULE 2: CONFLICT DETECTOR
# Row, column and box uniqueness checks used by the solver and the game.
# =========================================================================
def is_valid_row(grid, row, num):
    return num not in grid[row]


def is_valid_column(grid, col, num):
    for i in range(SIZE):
        if grid[i][col] == num:
            return False
    return True


def is_valid_box(grid, row, col, num):
    box_row, box_col = box_origin(row, col)
    for i in range(box_row, box_row + BOX):
        for j in range(box_col, box_col + BOX):
            if grid[i][j] == num:
                return False
    return True


def is_valid(grid, row, col, num):
    """Checks if placing 'num' at (row, col) keeps all three Sudoku rules."""
    return (is_valid_row(grid, row, num) and
            is_valid_column(grid, col, num) and
            is_valid_box(grid, row, col, num))


def find_conflicts(grid, row, col, num):
    """
    Lists every other cell sharing a row, column or box with (row, col) that
    holds `num`: row conflicts first, then column, then box (row-major).
    A cell sharing both a line and the box is listed once for each.
    """
    conflicts = []

    # Row conflicts
    for j in range(SIZE):
        if j != col and grid[row][j] == num:
            conflicts.append((row, j))

    # Column conflicts
    for i in range(SIZE):
        if i != row and grid[i][col] == num:
            conflicts.append((i, col))

    # Box conflicts
    box_row, box_col = box_origin(row, col)
    for i in range(box_row, box_row + BOX):
        for j in range(box_col, box_col + BOX):
            if (i != row or j != col) and grid[i][j] == num:
                conflicts.append((i, j))

    return conflicts


def conflict_kind(row, col, conflicts):
    """Names the unit of a conflict list, row winning over column over box."""
    if any(r == row for r, _ in conflicts):
        return 'row'
    if any(c == col for _, c in conflicts):
        return 'column'
    if any(box_origin(r, c) == box_origin(row, col) for r, c in conflicts):
        return 'box'
    return None


def check_all_conflicts(grid):
    """
    Rebuilds the set of conflicting cells from scratch.

    Returns (invalid_cells, summary) where summary is the first conflict met
    in row-major order as a ConflictSummary, or None when the grid is clean.
    """
    invalid_cells = set()
    summary = None

    for i in range(SIZE):
        for j in range(SIZE):
            num = grid[i][j]
            if num == 0:
                continue
            conflicts = find_conflicts(grid, i, j, num)
            if conflicts:
                invalid_cells.add((i, j))
                invalid_cells.update(conflicts)
                if summary is None:
                    summary = ConflictSummary(conflict_kind(i, j, conflicts), num)

    return invalid_cells, summary


def conflict_message(summary):
    """Message shown while conflicts remain somewhere on the grid."""
    if summary is None or summary.kind is None:
        return "Fix the highlighted conflicts to proceed."
    return "Number %d appears multiple times in the same %s!" % (
        summary.digit, UNIT_NAMES[summary.kind])


def move_message(num, kind):
    """Message shown when the digit just placed clashes with another cell."""
    if kind is None:
        return "This number violates Sudoku rules!"
    return "Number %d already exists in this %s!" % (num, UNIT_NAMES[kind])


# =========================================================================
# MODULE 3: PUZZLE GENERATOR
# Builds a full solution, then clears random cells to create the puzzle.
# =========================================================================
class PuzzleGenerator:
    """
    Only the existence of a solution is guaranteed: the retained solution.
    The puzzle may admit other completions.
    """

    def __init__(self, removal_count=REMOVAL_COUNT, rng=None):
        if not 0 <= removal_count <= SIZE * SIZE:
            raise ValueError("removal_count must be between 0 and %d, got %r"
                             % (SIZE * SIZE, removal_count))
        self.removal_count = removal_count
        self.rng = rng if rng is not None else random.Random()

    def generate_complete_board(self):
        """Solves an empty grid, which always succeeds."""
        board = empty_grid()
        solve(board, self.rng)
        return board

    def create_puzzle(self, solution):
        """Clears exactly `removal_count` distinct cells of a copy of solution."""
        puzzle = copy_grid(solution)

        remaining = self.removal_count
        while remaining > 0:
            row = self.rng.randrange(SIZE)
            col = self.rng.randrange(SIZE)
            # Already cleared cells are retried without counting
            if puzzle[row][col] != 0:
                puzzle[row][col] = 0
                remaining -= 1

        return puzzle

    def generate(self):
        """Main entry point: returns (puzzle, solution)."""
        solution = self.generate_complete_board()
        puzzle = self.create_puzzle(solution)
        logger.debug("Generated puzzle with %d givens", SIZE * SIZE - self.removal_count)
        return puzzle, solution


# =========================================================================
# MODULE 4: COMPLETION VERIFIER
# Incremental check reusing conflict state, and a full re-verification.
# =========================================================================
def row_sum(grid, row):
    return sum(grid[row])


def column_sum(grid, col):
    return sum(grid[i][col] for i in range(SIZE))


def box_sum(grid, row, col):
    return sum(box_values(grid, row, col))


def box_values(grid, row, col):
    box_row, box_col = box_origin(row, col)
    return [grid[i][j]
            for i in range(box_row, box_row + BOX)
            for j in range(box_col, box_col + BOX)]


def is_complete(grid, invalid_cells=None):
    """Every cell filled and no conflict left."""
    if invalid_cells is None:
        invalid_cells, _ = check_all_conflicts(grid)
    if invalid_cells:
        return False
    return find_empty_cell(grid) is None


def _units(grid):
    # (label, values, total) for every row, then column, then box
    for i in range(SIZE):
        yield "Row %d" % (i + 1), grid[i], row_sum(grid, i)
    for j in range(SIZE):
        yield ("Column %d" % (j + 1),
               [grid[i][j] for i in range(SIZE)],
               column_sum(grid, j))
    for b in range(SIZE):
        row, col = (b // BOX) * BOX, (b % BOX) * BOX
        yield "Box %d" % (b + 1), box_values(grid, row, col), box_sum(grid, row, col)


def verify_solution(grid):
    """
    Independently re-checks a whole grid. A unit summing to 45 can still hold
    a repeated digit, so the sum and the distinct-values checks both run.

    Returns a Verdict for the first failing constraint, or a successful one.
    """
    for i in range(SIZE):
        for j in range(SIZE):
            value = grid[i][j]
            if value != 0 and value not in DIGITS:
                return Verdict(False, 'range',
                               "Cell at row %d, column %d holds %r, expected a digit from 1 to 9."
                               % (i + 1, j + 1, value))

    empty = sum(1 for row in grid for value in row if value == 0)
    if empty:
        return Verdict(False, 'incomplete',
                       "The puzzle is not finished: %d empty cell%s left."
                       % (empty, "" if empty == 1 else "s"))

    for label, values, total in _units(grid):
        if total != UNIT_SUM:
            return Verdict(False, 'sum',
                           "%s adds up to %d instead of %d." % (label, total, UNIT_SUM))
        if len(set(values)) != SIZE:
            return Verdict(False, 'duplicate', "%s contains a duplicate digit." % label)

    return Verdict(True, 'solved', SUCCESS_MESSAGE)
