from __future__ import annotations

import random

import pytest

from src.game.input import Action, KeyBindings
from src.game.piece import PieceInstance
from src.game.pieces import PIECE_BY_NAME
from src.game.tetris import TetrisGame

# Arbitrary host key codes used throughout the tests
KEY_LEFT = 37
KEY_UP = 38
KEY_RIGHT = 39
KEY_DOWN = 40
KEY_SPACE = 32
KEY_C = 67

TEST_BINDINGS = {
    Action.MOVE_LEFT: [KEY_LEFT],
    Action.MOVE_RIGHT: [KEY_RIGHT],
    Action.ROTATE: [KEY_UP],
    Action.SOFT_DROP: [KEY_DOWN],
    Action.HARD_DROP: [KEY_SPACE],
    Action.HOLD: [KEY_C],
}


@pytest.fixture
def make_piece():
    """Factory for pieces at an explicit location."""
    def _make(name: str, x: int = 0, y: int = 0, rotation: int = 0) -> PieceInstance:
        definition = PIECE_BY_NAME[name]
        return PieceInstance(definition, rotation=rotation, x=x, y=y, color=definition.color)
    return _make


@pytest.fixture
def bindings() -> KeyBindings:
    return KeyBindings(TEST_BINDINGS)


@pytest.fixture
def game(bindings) -> TetrisGame:
    return TetrisGame(10, 20, bindings=bindings, rng=random.Random(1234))


@pytest.fixture
def set_current():
    """Replace a game's current piece and refresh its ghost."""
    def _set(game: TetrisGame, piece: PieceInstance) -> PieceInstance:
        game.current_piece = piece
        game._update_ghost()
        return piece
    return _set
