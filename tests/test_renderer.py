import os
import random

import pytest

pygame = pytest.importorskip("pygame")

from src.game.input import Action  # noqa: E402
from src.game.pieces import PIECE_COLORS  # noqa: E402
from src.game.tetris import GameStatus, TetrisGame  # noqa: E402
from src.play import build_key_bindings  # noqa: E402
from src.renderer import TetrisRenderer  # noqa: E402


@pytest.fixture(scope="module", autouse=True)
def headless_pygame():
    os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
    pygame.init()
    yield
    pygame.quit()


def test_window_size():
    renderer = TetrisRenderer(10, 20, cell_size=30)
    assert renderer.window_size == (300 + 7 * 30, 600)


def test_draws_game_in_progress_and_game_over():
    renderer = TetrisRenderer(10, 20, cell_size=20)
    game = TetrisGame(rng=random.Random(0), renderer=renderer)
    surface = pygame.Surface(renderer.window_size)

    game.board.grid[19, 0:5] = 3
    game.render(surface)
    # Filled board cell keeps its piece color
    assert tuple(surface.get_at((10, 19 * 20 + 10)))[:3] == PIECE_COLORS[3]

    game.status = GameStatus.GAME_OVER
    game.render(surface)


def test_build_key_bindings_defaults_and_overrides():
    bindings = build_key_bindings({"hold": ["h"]})
    assert bindings.action_for(pygame.K_LEFT) is Action.MOVE_LEFT
    assert bindings.action_for(pygame.K_SPACE) is Action.HARD_DROP
    assert bindings.action_for(pygame.K_h) is Action.HOLD
    assert bindings.action_for(pygame.K_c) is None


@pytest.mark.parametrize("names", [{"jump": ["j"]}, {"hold": ["not-a-key"]}])
def test_build_key_bindings_rejects_unknown_names(names):
    with pytest.raises(ValueError):
        build_key_bindings(names)


def test_build_key_bindings_override_takes_a_default_key():
    bindings = build_key_bindings({"hold": ["x"]})
    assert bindings.action_for(pygame.K_x) is Action.HOLD
    assert bindings.action_for(pygame.K_UP) is Action.ROTATE
    assert bindings.action_for(pygame.K_c) is None
