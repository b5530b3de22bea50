"""Game rules: board, pieces, input timing and game orchestrator."""

from src.game.pieces import PIECE_BY_NAME, PIECE_COLORS, PIECE_TYPES, PieceDefinition
from src.game.piece import PieceInstance
from src.game.board import Board
from src.game.ghost import drop_to_rest
from src.game.input import Action, InputState, KeyBindings
from src.game.tetris import TetrisGame, GameStatus, HoldPolicy

__all__ = [
    "PIECE_TYPES",
    "PIECE_BY_NAME",
    "PIECE_COLORS",
    "PieceDefinition",
    "PieceInstance",
    "Board",
    "drop_to_rest",
    "Action",
    "InputState",
    "KeyBindings",
    "TetrisGame",
    "GameStatus",
    "HoldPolicy",
]
