"""
Board logic for the falling-block grid.

The board is a 2D numpy array (height x width) of int8 values:
  - 0 = empty cell
  - 1-7 = color id of the piece that filled the cell

Row 0 is the top of the board. The row-major linear index of cell (x, y) is
y * width + x.
"""

from __future__ import annotations

import numpy as np

from src.game.piece import PieceInstance


class Board:
    """Grid with fit/collision queries and line clearing.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        grid: 2D numpy array of shape (height, width), dtype int8.
    """

    def __init__(self, width: int = 10, height: int = 20) -> None:
        """Initialize an empty board.

        Args:
            width: Number of columns.
            height: Number of rows.
        """
        self.width = width
        self.height = height
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    @property
    def cells(self) -> np.ndarray:
        """Read-only flat, row-major view of the grid."""
        view = self.grid.ravel()
        view.flags.writeable = False
        return view

    def index(self, x: int, y: int) -> int:
        return y * self.width + x

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cell_at(self, x: int, y: int) -> int:
        """Return the color id at column x, row y.

        Raises:
            IndexError: If (x, y) lies outside the board.
        """
        if not self.in_bounds(x, y):
            raise IndexError(f"Cell ({x}, {y}) is outside a {self.width}x{self.height} board")
        return int(self.grid[y, x])

    def is_location_valid(self, piece: PieceInstance) -> bool:
        """Check whether the piece's current rotation fits where it stands.

        A location is valid if every filled cell of the piece:
          - Is within the board boundaries (0 <= col < width, 0 <= row < height).
            Cells above the top row (row < 0) are out of bounds.
          - Does not overlap a filled cell on the board grid.

        Args:
            piece: The piece to test. It is not modified.

        Returns:
            True if the location is valid, False otherwise.
        """
        for bx, by in piece.board_cells():
            if not self.in_bounds(bx, by):
                return False
            if self.grid[by, bx] != 0:
                return False
        return True

    def fit_piece(self, piece: PieceInstance) -> bool:
        """Clamp the piece into the board's side walls and below the top edge.

        For every filled cell, x is nudged left while the cell is past the
        right wall, right while it is past the left wall, and y is increased
        while the cell is above row 0. Overlaps with the stack are never
        resolved and the piece is never moved up, so a piece spawned onto
        filled cells stays invalid.

        Args:
            piece: The piece to clamp; modified in place.

        Returns:
            The result of is_location_valid() after clamping.
        """
        for c, r in piece.filled_cells():
            while piece.x + c >= self.width:
                piece.x -= 1
            while piece.x + c < 0:
                piece.x += 1
            while piece.y + r < 0:
                piece.y += 1
        return self.is_location_valid(piece)

    def place_piece(self, piece: PieceInstance) -> int:
        """Lock a piece onto the board and clear any rows it completes.

        Writes the piece's color into the board grid at each filled cell.
        Does NOT check for overlaps; the caller must ensure the location is
        valid.

        Args:
            piece: The piece to lock.

        Returns:
            The number of rows cleared.

        Raises:
            ValueError: If a filled cell lies outside the board.
        """
        cells = list(piece.board_cells())
        for bx, by in cells:
            if not self.in_bounds(bx, by):
                raise ValueError(
                    f"Cannot place {piece.definition.name} piece: cell ({bx}, {by}) is off the board"
                )
        for bx, by in cells:
            self.grid[by, bx] = piece.color
        return self.clear_filled_rows()

    def clear_filled_rows(self) -> int:
        """Remove all fully filled rows and shift everything above them down.

        Surviving rows keep their relative order; empty rows are padded in at
        the top so the grid keeps its shape.

        Returns:
            The number of rows cleared.
        """
        filled = np.all(self.grid != 0, axis=1)
        rows_cleared = int(filled.sum())
        if rows_cleared == 0:
            return 0

        remaining = self.grid[~filled]
        empty_rows = np.zeros((rows_cleared, self.width), dtype=np.int8)
        self.grid = np.vstack([empty_rows, remaining])
        return rows_cleared

    def get_grid(self) -> np.ndarray:
        """Return a copy of the board grid."""
        return self.grid.copy()

    def reset(self) -> None:
        """Clear the entire board, setting all cells to 0."""
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)
