"""Ghost piece: where the current piece would come to rest if hard-dropped."""

from __future__ import annotations

from src.game.board import Board
from src.game.piece import PieceInstance


def drop_to_rest(board: Board, piece: PieceInstance) -> PieceInstance | None:
    """Simulate a hard drop on a copy of the piece.

    Neither the board nor the given piece is modified.

    Args:
        board: The board to drop onto.
        piece: The piece to project.

    Returns:
        A copy of the piece at its resting row, or None if the piece's
        current location is already invalid.
    """
    ghost = piece.copy()
    if not board.is_location_valid(ghost):
        return None
    while board.is_location_valid(ghost):
        ghost.y += 1
    ghost.y -= 1
    return ghost
