"""
Pygame renderer for the falling-block game.

Draws the board grid, ghost piece, current piece, next and held piece
previews, and a sidebar with the cleared-lines counter. It only reads the
TetrisGame; all state changes happen in TetrisGame.update().
"""

from __future__ import annotations

import numpy as np

try:
    import pygame
except ImportError:
    pygame = None  # type: ignore[assignment]

from src.game.piece import PieceInstance
from src.game.pieces import PIECE_COLORS
from src.game.tetris import HoldPolicy, TetrisGame


# ── Color constants ───────────────────────────────────────────────────────
BACKGROUND_COLOR = (30, 30, 30)
GRID_LINE_COLOR = (60, 60, 60)
BORDER_COLOR = (200, 200, 200)
TEXT_COLOR = (255, 255, 255)
GHOST_ALPHA = 80  # transparency for ghost piece (0-255)
SIDEBAR_BG_COLOR = (20, 20, 20)
EMPTY_CELL_COLOR = (40, 40, 40)
UNKNOWN_COLOR = (128, 128, 128)


class TetrisRenderer:
    """Pygame-based renderer for a TetrisGame.

    The window is divided into:
      - Left: board area (cell_size * width) x (cell_size * height)
      - Right: sidebar with next piece, held piece and lines cleared

    Attributes:
        board_width: Board width in cells.
        board_height: Board height in cells.
        cell_size: Pixel size of each grid cell.
        board_pixel_width: Pixel width of the board area.
        board_pixel_height: Pixel height of the board area.
        sidebar_width: Pixel width of the sidebar.
        window_width: Total window width.
        window_height: Total window height.
    """

    # Sidebar dimensions
    SIDEBAR_WIDTH_CELLS: int = 7  # sidebar width in cell units

    def __init__(self, board_width: int = 10, board_height: int = 20, cell_size: int = 30) -> None:
        """Initialize the renderer.

        Does NOT create a window: the host owns the display surface and
        passes it to draw().

        Args:
            board_width: Board width in cells.
            board_height: Board height in cells.
            cell_size: Size of each grid cell in pixels.
        """
        if pygame is None:
            raise ImportError("pygame is required for rendering. Install it: pip install pygame")

        self.board_width = board_width
        self.board_height = board_height
        self.cell_size = cell_size

        self.board_pixel_width = cell_size * board_width
        self.board_pixel_height = cell_size * board_height
        self.sidebar_width = cell_size * self.SIDEBAR_WIDTH_CELLS
        self.window_width = self.board_pixel_width + self.sidebar_width
        self.window_height = self.board_pixel_height

        self._font: pygame.font.Font | None = None
        self._large_font: pygame.font.Font | None = None

    @property
    def window_size(self) -> tuple[int, int]:
        return self.window_width, self.window_height

    def draw(self, game: TetrisGame, surface: pygame.Surface) -> None:
        """Draw the current game state onto the surface.

        Args:
            game: The game to draw.
            surface: Target surface, at least window_size large.
        """
        if self._font is None:
            self._init_fonts()

        surface.fill(BACKGROUND_COLOR)
        self._draw_board(game, surface)
        if game.ghost_piece is not None and game.current_piece is not None:
            if game.ghost_piece.y != game.current_piece.y:
                self._draw_ghost_piece(game.ghost_piece, surface)
        if game.current_piece is not None:
            self._draw_piece(game.current_piece, surface)
        self._draw_sidebar(game, surface)

        # Draw border around the board
        pygame.draw.rect(
            surface,
            BORDER_COLOR,
            (0, 0, self.board_pixel_width, self.board_pixel_height),
            2,
        )

        if game.is_game_over:
            self._draw_game_over(surface)

    def _init_fonts(self) -> None:
        if not pygame.font.get_init():
            pygame.font.init()
        self._font = pygame.font.SysFont("monospace", 20)
        self._large_font = pygame.font.SysFont("monospace", 36, bold=True)

    def _draw_cell(self, surface: pygame.Surface, color: tuple[int, int, int], x: int, y: int, size: int) -> None:
        pygame.draw.rect(surface, color, (x, y, size, size))
        # Slightly darker border for 3D effect
        darker = tuple(max(0, c - 40) for c in color)
        pygame.draw.rect(surface, darker, (x, y, size, size), 1)

    def _draw_board(self, game: TetrisGame, surface: pygame.Surface) -> None:
        """Draw the board grid with filled cells and grid lines.

        Each filled cell is colored according to its color id.
        """
        grid = game.board.grid
        for row in range(game.board.height):
            for col in range(game.board.width):
                cell_value = int(grid[row, col])
                x = col * self.cell_size
                y = row * self.cell_size

                if cell_value != 0:
                    color = PIECE_COLORS.get(cell_value, UNKNOWN_COLOR)
                    self._draw_cell(surface, color, x, y, self.cell_size)
                else:
                    pygame.draw.rect(
                        surface, EMPTY_CELL_COLOR, (x, y, self.cell_size, self.cell_size)
                    )

                # Grid lines
                pygame.draw.rect(
                    surface, GRID_LINE_COLOR, (x, y, self.cell_size, self.cell_size), 1
                )

    def _visible_cells(self, piece: PieceInstance):
        for board_col, board_row in piece.board_cells():
            if 0 <= board_row < self.board_height and 0 <= board_col < self.board_width:
                yield board_col * self.cell_size, board_row * self.cell_size

    def _draw_piece(self, piece: PieceInstance, surface: pygame.Surface) -> None:
        """Draw a piece at its position on the board."""
        color = PIECE_COLORS.get(piece.color, UNKNOWN_COLOR)
        for x, y in self._visible_cells(piece):
            self._draw_cell(surface, color, x, y, self.cell_size)

    def _draw_ghost_piece(self, ghost: PieceInstance, surface: pygame.Surface) -> None:
        """Draw the ghost piece (drop preview) with transparency."""
        color = PIECE_COLORS.get(ghost.color, UNKNOWN_COLOR)
        ghost_surface = pygame.Surface((self.cell_size, self.cell_size), pygame.SRCALPHA)
        ghost_surface.fill((*color, GHOST_ALPHA))

        for x, y in self._visible_cells(ghost):
            surface.blit(ghost_surface, (x, y))
            # Draw outline
            pygame.draw.rect(surface, color, (x, y, self.cell_size, self.cell_size), 1)

    def _draw_sidebar(self, game: TetrisGame, surface: pygame.Surface) -> None:
        """Draw the sidebar with next piece, held piece, and lines cleared."""
        sidebar_x = self.board_pixel_width
        pygame.draw.rect(
            surface,
            SIDEBAR_BG_COLOR,
            (sidebar_x, 0, self.sidebar_width, self.window_height),
        )
        # Draw border between board and sidebar
        pygame.draw.line(
            surface,
            BORDER_COLOR,
            (sidebar_x, 0),
            (sidebar_x, self.window_height),
            2,
        )

        margin = 15
        x_left = sidebar_x + margin

        self._draw_piece_preview(surface, game.next_piece, x_left, 20, "NEXT")

        hold_label = "HOLD"
        if not game.can_hold and game.hold_policy is HoldPolicy.ONCE_PER_PIECE:
            hold_label = "HOLD (used)"
        self._draw_piece_preview(surface, game.held_piece, x_left, 160, hold_label)

        self._draw_text(surface, "LINES", x_left, 310)
        self._draw_text(surface, str(game.lines_cleared), x_left, 335)

    def _draw_piece_preview(
        self,
        surface: pygame.Surface,
        piece: PieceInstance | None,
        x_offset: int,
        y_offset: int,
        label: str,
    ) -> None:
        """Draw a small piece preview (for next/held piece display).

        Args:
            surface: Target surface.
            piece: Piece to preview, or None (draws empty box).
            x_offset: Pixel X position for the preview box.
            y_offset: Pixel Y position for the preview box.
            label: Text label to display above the preview (e.g., 'NEXT').
        """
        preview_cell = self.cell_size * 2 // 3  # smaller cells for preview
        box_size = preview_cell * 5

        self._draw_text(surface, label, x_offset, y_offset)

        box_y = y_offset + 25
        pygame.draw.rect(surface, EMPTY_CELL_COLOR, (x_offset, box_y, box_size, box_size))
        pygame.draw.rect(surface, BORDER_COLOR, (x_offset, box_y, box_size, box_size), 1)

        if piece is None:
            return

        shape = piece.definition.rotations[0]
        color = PIECE_COLORS.get(piece.color, UNKNOWN_COLOR)
        rows, cols = np.nonzero(shape)
        min_row, max_row = int(rows.min()), int(rows.max())
        min_col, max_col = int(cols.min()), int(cols.max())

        # Center the filled cells in the preview box
        piece_pixel_w = (max_col - min_col + 1) * preview_cell
        piece_pixel_h = (max_row - min_row + 1) * preview_cell
        offset_x = x_offset + (box_size - piece_pixel_w) // 2 - min_col * preview_cell
        offset_y = box_y + (box_size - piece_pixel_h) // 2 - min_row * preview_cell

        for r, c in zip(rows.tolist(), cols.tolist()):
            self._draw_cell(
                surface, color, offset_x + c * preview_cell, offset_y + r * preview_cell, preview_cell
            )

    def _draw_game_over(self, surface: pygame.Surface) -> None:
        """Draw a semi-transparent game over overlay with restart instructions."""
        overlay = pygame.Surface((self.board_pixel_width, self.board_pixel_height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 150))
        surface.blit(overlay, (0, 0))

        text_go = self._large_font.render("GAME OVER", True, (255, 50, 50))
        text_restart = self._font.render("R: restart", True, TEXT_COLOR)

        cx = self.board_pixel_width // 2
        cy = self.board_pixel_height // 2
        surface.blit(text_go, (cx - text_go.get_width() // 2, cy - 40))
        surface.blit(text_restart, (cx - text_restart.get_width() // 2, cy + 10))

    def _draw_text(
        self,
        surface: pygame.Surface,
        text: str,
        x: int,
        y: int,
        color: tuple[int, int, int] = TEXT_COLOR,
    ) -> None:
        rendered = self._font.render(text, True, color)
        surface.blit(rendered, (x, y))
