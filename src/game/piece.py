"""
A piece in play: a PieceDefinition bound to a rotation, position and color.

PieceInstance.copy() is a shallow value copy. The definition (and its
read-only shape arrays) is shared; rotation, x, y and color are copied, so
moving or rotating the copy never touches the original.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np

from src.game.pieces import PieceDefinition


@dataclass
class PieceInstance:
    """Mutable piece state.

    Attributes:
        definition: Shared, immutable piece template.
        rotation: Rotation index (0-3).
        x: Column of the bounding square's top-left corner.
        y: Row of the bounding square's top-left corner.
        color: Color id written into the board when the piece locks.
    """

    definition: PieceDefinition
    rotation: int = 0
    x: int = 0
    y: int = 0
    color: int = 0

    @property
    def size(self) -> int:
        return self.definition.size

    @property
    def shape(self) -> np.ndarray:
        """The shape array of the current rotation."""
        return self.definition.rotations[self.rotation]

    def copy(self) -> PieceInstance:
        return dataclasses.replace(self)

    def rotate(self, direction: int = 1) -> None:
        self.rotation = (self.rotation + direction) % 4

    def filled_cells(self) -> Iterator[tuple[int, int]]:
        """Yield (col, row) offsets of the filled cells in the current rotation."""
        rows, cols = np.nonzero(self.shape)
        for r, c in zip(rows.tolist(), cols.tolist()):
            yield c, r

    def board_cells(self) -> Iterator[tuple[int, int]]:
        """Yield absolute (x, y) board coordinates of the filled cells."""
        for c, r in self.filled_cells():
            yield self.x + c, self.y + r


def init_piece_position(piece: PieceInstance, board_width: int) -> PieceInstance:
    """Reset a piece to the spawn location: rotation 0, centered, y = -1.

    The piece is modified in place and returned for convenience. Callers
    clamp it into the board with Board.fit_piece() afterwards.
    """
    piece.rotation = 0
    piece.x = (board_width - piece.size) // 2
    piece.y = -1
    return piece


def spawn_piece(definition: PieceDefinition, board_width: int) -> PieceInstance:
    """Create a new piece of the given definition at the spawn location."""
    piece = PieceInstance(definition, color=definition.color)
    return init_piece_position(piece, board_width)
