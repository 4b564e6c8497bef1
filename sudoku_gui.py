import argparse
import logging
import random

import pygame

from sudoku_engine import SIZE
from sudoku_game import ERROR, SUCCESS, GameManager, GameView

logger = logging.getLogger("sudoku")

PICKER_LABELS = ["1", "2", "3", "4", "5", "6", "7", "8", "9", "X"]


# =========================================================================
# PYGAME GUI
# Draws the board, the number picker and messages; forwards user input to
# the GameManager and receives its notifications as a GameView.
# =========================================================================
class SudokuApp(GameView):
    def __init__(self, seed=None):
        pygame.init()
        self.WINDOW_WIDTH = 530
        self.WINDOW_HEIGHT = 700

        self.screen = pygame.display.set_mode((self.WINDOW_WIDTH, self.WINDOW_HEIGHT))
        pygame.display.set_caption("Sudoku")

        # Color Palette
        self.BG_COLOR = (245, 247, 250)
        self.GRID_BG = (255, 255, 255)
        self.BLACK = (30, 30, 30)
        self.WHITE = (255, 255, 255)
        self.PRIMARY = (79, 70, 229)
        self.PRIMARY_LIGHT = (129, 140, 248)
        self.PRIMARY_DARK = (55, 48, 163)
        self.SUCCESS = (34, 197, 94)
        self.SUCCESS_LIGHT = (134, 239, 172)
        self.ERROR = (239, 68, 68)
        self.ERROR_LIGHT = (254, 202, 202)
        self.WARNING = (251, 191, 36)
        self.SELECTION = (224, 231, 255)
        self.SELECTION_BORDER = (129, 140, 248)
        self.TEXT_GRAY = (100, 116, 139)
        self.SUBGRID_LINE = (203, 213, 225)
        self.CONFLICT_HIGHLIGHT = (255, 100, 100)
        self.CONFLICT_BORDER = (200, 50, 50)

        # Grid positioning
        self.GRID_SIZE = 450
        self.CELL_SIZE = self.GRID_SIZE // SIZE
        self.GRID_X = 40
        self.GRID_Y = 80

        # Picker: three columns of digits, the clear button on its own row
        self.PICKER_BUTTON = 40
        self.PICKER_GAP = 4
        self.PICKER_COLUMNS = 3

        # Buttons under the grid
        button_y = self.GRID_Y + self.GRID_SIZE + 20
        self.new_game_rect = pygame.Rect(self.GRID_X, button_y, 215, 45)
        self.check_rect = pygame.Rect(self.GRID_X + 235, button_y, 215, 45)
        self.MESSAGE_Y = button_y + 60

        # Fonts
        self.font_title = pygame.font.Font(None, 48)
        self.font_large = pygame.font.Font(None, 42)
        self.font_medium = pygame.font.Font(None, 32)
        self.font_small = pygame.font.Font(None, 22)

        # Key Mapping for Numpad support
        self.key_mapping = {
            pygame.K_1: 1, pygame.K_2: 2, pygame.K_3: 3, pygame.K_4: 4, pygame.K_5: 5,
            pygame.K_6: 6, pygame.K_7: 7, pygame.K_8: 8, pygame.K_9: 9,
            pygame.K_KP1: 1, pygame.K_KP2: 2, pygame.K_KP3: 3, pygame.K_KP4: 4, pygame.K_KP5: 5,
            pygame.K_KP6: 6, pygame.K_KP7: 7, pygame.K_KP8: 8, pygame.K_KP9: 9
        }
        self.clear_keys = (pygame.K_DELETE, pygame.K_BACKSPACE, pygame.K_0, pygame.K_KP0)

        # What the game told us to display
        self.board = [[0] * SIZE for _ in range(SIZE)]
        self.fixed = frozenset()
        self.invalid = set()
        self.messages = {}

        self.selected = None
        self.picker_cell = None

        # Created last: it renders the first puzzle through this view
        self.game = GameManager(view=self, rng=random.Random(seed))

    # ---------------------------------------------------------------------
    # GameView notifications
    # ---------------------------------------------------------------------
    def render_grid(self, grid, fixed):
        self.board = [row[:] for row in grid]
        self.fixed = frozenset(fixed)
        self.selected = None
        self.picker_cell = None

    def update_cell(self, coord, value):
        row, col = coord
        self.board[row][col] = value

    def mark_invalid(self, coord):
        self.invalid.add(coord)

    def clear_invalid(self, coord):
        self.invalid.discard(coord)

    def show_message(self, kind, text):
        self.messages[kind] = text

    def hide_message(self, kind):
        self.messages.pop(kind, None)

    # ---------------------------------------------------------------------
    # Geometry
    # ---------------------------------------------------------------------
    def cell_rect(self, row, col):
        return pygame.Rect(self.GRID_X + col * self.CELL_SIZE,
                           self.GRID_Y + row * self.CELL_SIZE,
                           self.CELL_SIZE, self.CELL_SIZE)

    def cell_at(self, pos):
        """Returns the (row, col) under a screen position, or None."""
        x, y = pos
        if (self.GRID_X <= x < self.GRID_X + self.GRID_SIZE and
                self.GRID_Y <= y < self.GRID_Y + self.GRID_SIZE):
            return ((y - self.GRID_Y) // self.CELL_SIZE,
                    (x - self.GRID_X) // self.CELL_SIZE)
        return None

    def picker_rect(self):
        """Picker popup area, centered under the picked cell and kept on screen."""
        step = self.PICKER_BUTTON + self.PICKER_GAP
        rows = -(-len(PICKER_LABELS) // self.PICKER_COLUMNS)
        width = self.PICKER_COLUMNS * step + self.PICKER_GAP
        height = rows * step + self.PICKER_GAP

        cell = self.cell_rect(*self.picker_cell)
        x = cell.centerx - width // 2
        y = cell.bottom + 5
        if y + height > self.WINDOW_HEIGHT:
            y = cell.top - 5 - height
        x = max(0, min(x, self.WINDOW_WIDTH - width))
        return pygame.Rect(x, y, width, height)

    def picker_buttons(self):
        """(label, rect) for every picker button, empty when the picker is closed."""
        if self.picker_cell is None:
            return []
        area = self.picker_rect()
        step = self.PICKER_BUTTON + self.PICKER_GAP
        buttons = []
        for index, label in enumerate(PICKER_LABELS):
            row, col = divmod(index, self.PICKER_COLUMNS)
            if label == "X":
                # Clear button spans the last row
                rect = pygame.Rect(area.x + self.PICKER_GAP, area.y + self.PICKER_GAP + row * step,
                                   area.width - 2 * self.PICKER_GAP, self.PICKER_BUTTON)
            else:
                rect = pygame.Rect(area.x + self.PICKER_GAP + col * step,
                                   area.y + self.PICKER_GAP + row * step,
                                   self.PICKER_BUTTON, self.PICKER_BUTTON)
            buttons.append((label, rect))
        return buttons

    # ---------------------------------------------------------------------
    # Input
    # ---------------------------------------------------------------------
    def open_picker(self, cell):
        self.selected = cell
        self.picker_cell = cell

    def hide_picker(self):
        self.picker_cell = None

    def pick(self, label):
        """Applies a picker choice to the cell the picker was opened for."""
        cell = self.picker_cell
        self.hide_picker()
        if cell is None:
            return
        digit = None if label == "X" else int(label)
        self.game.on_cell_edited(cell, digit)

    def handle_click(self, pos):
        """Processes mouse clicks for the picker, the grid and the buttons."""
        if self.picker_cell is not None:
            for label, rect in self.picker_buttons():
                if rect.collidepoint(pos):
                    self.pick(label)
                    return
            # Any click outside the popup closes it
            inside = self.picker_rect().collidepoint(pos)
            self.hide_picker()
            if inside:
                return

        if self.new_game_rect.collidepoint(pos):
            self.game.on_new_game_requested()
            return
        if self.check_rect.collidepoint(pos):
            self.game.on_check_requested()
            return

        cell = self.cell_at(pos)
        if cell is not None and cell not in self.fixed and not self.game.solved:
            self.open_picker(cell)

    def handle_key(self, key):
        """Processes keyboard input for number entry and navigation."""
        if key == pygame.K_ESCAPE:
            self.hide_picker()
            return

        if not self.selected or self.game.solved:
            return
        row, col = self.selected

        num = self.key_mapping.get(key)
        if num is not None:
            self.hide_picker()
            self.game.on_cell_edited((row, col), num)
        elif key in self.clear_keys:
            self.hide_picker()
            self.game.on_cell_edited((row, col), None)

        # Arrow Key Navigation
        if key == pygame.K_UP and row > 0:
            self.move_selection(row - 1, col)
        elif key == pygame.K_DOWN and row < SIZE - 1:
            self.move_selection(row + 1, col)
        elif key == pygame.K_LEFT and col > 0:
            self.move_selection(row, col - 1)
        elif key == pygame.K_RIGHT and col < SIZE - 1:
            self.move_selection(row, col + 1)

    def move_selection(self, row, col):
        self.hide_picker()
        self.selected = (row, col)

    # ---------------------------------------------------------------------
    # Drawing
    # ---------------------------------------------------------------------
    def draw_rounded_rect(self, surface, color, rect, radius=10):
        pygame.draw.rect(surface, color, rect, border_radius=radius)

    def draw_button(self, text, rect, color, text_color):
        """Draws a clickable button with a shadow effect."""
        self.draw_rounded_rect(self.screen, (200, 200, 210), rect.move(2, 2), 8)
        self.draw_rounded_rect(self.screen, color, rect, 8)
        text_surface = self.font_medium.render(text, True, text_color)
        self.screen.blit(text_surface, text_surface.get_rect(center=rect.center))

    def draw_grid(self):
        """Draws the grid background and lines, thicker around boxes."""
        background = self.SUCCESS_LIGHT if self.game.solved else self.GRID_BG
        self.draw_rounded_rect(self.screen, (200, 200, 200),
                               (self.GRID_X + 4, self.GRID_Y + 4, self.GRID_SIZE, self.GRID_SIZE), 12)
        self.draw_rounded_rect(self.screen, background,
                               (self.GRID_X, self.GRID_Y, self.GRID_SIZE, self.GRID_SIZE), 12)

        for i in range(SIZE + 1):
            thickness = 3 if i % 3 == 0 else 1
            color = self.BLACK if i % 3 == 0 else self.SUBGRID_LINE

            # Horizontal line
            pygame.draw.line(self.screen, color,
                             (self.GRID_X, self.GRID_Y + i * self.CELL_SIZE),
                             (self.GRID_X + self.GRID_SIZE, self.GRID_Y + i * self.CELL_SIZE), thickness)

            # Vertical line
            pygame.draw.line(self.screen, color,
                             (self.GRID_X + i * self.CELL_SIZE, self.GRID_Y),
                             (self.GRID_X + i * self.CELL_SIZE, self.GRID_Y + self.GRID_SIZE), thickness)

    def draw_selection(self):
        if self.selected and not self.game.solved:
            rect = self.cell_rect(*self.selected).inflate(-4, -4)
            pygame.draw.rect(self.screen, self.SELECTION, rect)
            pygame.draw.rect(self.screen, self.SELECTION_BORDER, rect, 3)

    def draw_conflict_highlights(self):
        """Highlights cells that are part of a conflict (Red)."""
        for (row, col) in self.invalid:
            rect = self.cell_rect(row, col).inflate(-4, -4)
            conflict_surf = pygame.Surface(rect.size)
            conflict_surf.set_alpha(80)
            conflict_surf.fill(self.CONFLICT_HIGHLIGHT)
            self.screen.blit(conflict_surf, rect.topleft)
            pygame.draw.rect(self.screen, self.CONFLICT_BORDER, rect, 2)

    def draw_numbers(self):
        """Renders the digits: givens in black, user entries in blue or red."""
        for i in range(SIZE):
            for j in range(SIZE):
                value = self.board[i][j]
                if value == 0:
                    continue
                if (i, j) in self.fixed:
                    color = self.BLACK
                else:
                    color = self.ERROR if (i, j) in self.invalid else self.PRIMARY
                text = self.font_large.render(str(value), True, color)
                self.screen.blit(text, text.get_rect(center=self.cell_rect(i, j).center))

    def draw_picker(self):
        if self.picker_cell is None:
            return
        self.draw_rounded_rect(self.screen, self.PRIMARY_DARK, self.picker_rect(), 8)
        for label, rect in self.picker_buttons():
            color = self.ERROR if label == "X" else self.GRID_BG
            text_color = self.WHITE if label == "X" else self.PRIMARY_DARK
            self.draw_rounded_rect(self.screen, color, rect, 6)
            text = self.font_medium.render(label, True, text_color)
            self.screen.blit(text, text.get_rect(center=rect.center))

    def draw_ui(self):
        """Title, buttons and message banners."""
        title = self.font_title.render("Sudoku", True, self.PRIMARY_DARK)
        self.screen.blit(title, title.get_rect(center=(self.WINDOW_WIDTH // 2, 40)))

        self.draw_button("New Game", self.new_game_rect, self.PRIMARY, self.WHITE)
        self.draw_button("Check", self.check_rect, self.WARNING, self.WHITE)

        msg_y = self.MESSAGE_Y
        banners = ((ERROR, self.ERROR_LIGHT, self.ERROR), (SUCCESS, self.SUCCESS_LIGHT, self.SUCCESS))
        for kind, background, color in banners:
            text = self.messages.get(kind)
            if not text:
                continue
            rect = pygame.Rect(self.GRID_X, msg_y, self.GRID_SIZE, 35)
            self.draw_rounded_rect(self.screen, background, rect, 8)
            t = self.font_small.render(text, True, color)
            self.screen.blit(t, t.get_rect(center=rect.center))
            msg_y += 45

    def draw(self):
        self.screen.fill(self.BG_COLOR)
        self.draw_grid()
        self.draw_selection()
        self.draw_conflict_highlights()
        self.draw_numbers()
        self.draw_ui()
        self.draw_picker()

    def run(self):
        """Main game loop."""
        clock = pygame.time.Clock()
        running = True

        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    self.handle_click(event.pos)
                elif event.type == pygame.KEYDOWN:
                    self.handle_key(event.key)

            self.draw()
            pygame.display.flip()
            clock.tick(60)

        pygame.quit()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="sudoku",
        description="Play Sudoku with live conflict highlighting.",
    )
    parser.add_argument("--seed", type=int, help="Random seed for reproducible puzzles.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting Sudoku (seed=%s)", args.seed)
    SudokuApp(seed=args.seed).run()


if __name__ == "__main__":
    main()
