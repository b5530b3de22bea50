"""
Manual play and headless simulation.

Provides two modes:
  - play_manual: Human plays with keyboard controls in a pygame window.
  - simulate: The game runs without a window on a fixed-step clock.

Both are hosts around TetrisGame: they own the clock, translate pygame key
events into key_pressed / key_released calls, and call update() then
render() once per frame.
"""

from __future__ import annotations

from typing import Any

try:
    import pygame
except ImportError:
    pygame = None  # type: ignore[assignment]

from src.clock import Clock, FixedStepClock, PygameClock
from src.game.input import Action, KeyBindings
from src.game.tetris import TetrisGame
from src.renderer import TetrisRenderer


# ── Default keyboard mapping for manual play (pygame key names) ──────────
# Arrow keys for movement, Up to rotate, Space for hard drop, C for hold
DEFAULT_KEY_NAMES: dict[str, list[str]] = {
    "move_left": ["left"],
    "move_right": ["right"],
    "rotate": ["up", "x"],
    "soft_drop": ["down"],
    "hard_drop": ["space"],
    "hold": ["c"],
}


def build_key_bindings(key_names: dict[str, list[str]] | None = None) -> KeyBindings:
    """Resolve a table of action names -> pygame key names into KeyBindings.

    Args:
        key_names: Mapping like {"move_left": ["left", "a"]}. Actions that
            are missing keep their DEFAULT_KEY_NAMES keys, minus any key the
            mapping assigns to another action.

    Returns:
        KeyBindings keyed by pygame key codes.

    Raises:
        ValueError: If an action name or a key name is unknown.
    """
    if pygame is None:
        raise ImportError("pygame is required for key bindings. Install it: pip install pygame")

    overrides = dict(key_names or {})
    claimed = {name for names in overrides.values() for name in names}
    merged = {
        action_name: [name for name in names if name not in claimed]
        for action_name, names in DEFAULT_KEY_NAMES.items()
    }
    merged.update(overrides)

    bindings: dict[Action, list[int]] = {}
    for action_name, names in merged.items():
        try:
            action = Action[action_name.upper()]
        except KeyError:
            raise ValueError(f"Unknown action in key_bindings: {action_name!r}") from None
        codes = []
        for name in names:
            try:
                codes.append(pygame.key.key_code(name))
            except ValueError:
                raise ValueError(f"Unknown key name for {action_name}: {name!r}") from None
        bindings[action] = codes
    return KeyBindings(bindings)


def run_frame(game: TetrisGame, clock: Clock, surface: Any = None) -> None:
    """One host frame: advance the game by the clock's delta, then draw it."""
    game.update(clock.tick())
    game.render(surface)


def play_manual(config: dict[str, Any]) -> None:
    """Run the game in manual (human) play mode.

    Default controls:
      - Left/Right arrow: move piece
      - Up arrow / X: rotate
      - Down arrow: soft drop
      - Space: hard drop
      - C: hold piece
      - R: restart after game over
      - Escape / close window: quit

    Args:
        config: Config dict loaded from game.yaml.
    """
    if pygame is None:
        raise ImportError("pygame is required for play mode. Install it: pip install pygame")

    pygame.init()
    bindings = build_key_bindings(config.get("key_bindings"))

    board_width = config.get("board_width", 10)
    board_height = config.get("board_height", 20)
    renderer = TetrisRenderer(board_width, board_height, cell_size=config.get("cell_size", 30))
    game = TetrisGame.from_config(config, bindings=bindings, renderer=renderer)

    screen = pygame.display.set_mode(renderer.window_size)
    pygame.display.set_caption("Tetris")
    clock = PygameClock(config.get("fps", 60))

    running = True
    announced = False
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
                break
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                    break
                if game.is_game_over and event.key == pygame.K_r:
                    game.reset()
                    announced = False
                    continue
                game.key_pressed(event.key)
            elif event.type == pygame.KEYUP:
                game.key_released(event.key)

        if not running:
            break

        run_frame(game, clock, screen)
        pygame.display.flip()

        if game.is_game_over and not announced:
            print(f"Game over | Lines: {game.lines_cleared}")
            announced = True

    pygame.quit()


def simulate(config: dict[str, Any], frames: int = 3600, frame_ms: float = 1000.0 / 60) -> TetrisGame:
    """Run a game headlessly with no input until it ends or frames run out.

    Pieces fall straight down under gravity, so this mainly exercises the
    lock / spawn cycle up to game over.

    Args:
        config: Config dict loaded from game.yaml.
        frames: Maximum number of frames to run (0 = until game over).
        frame_ms: Simulated milliseconds per frame.

    Returns:
        The finished game.
    """
    game = TetrisGame.from_config(config)
    clock = FixedStepClock(frame_ms)

    frame = 0
    while not game.is_game_over and (frames == 0 or frame < frames):
        run_frame(game, clock)
        frame += 1

    status = "game over" if game.is_game_over else "running"
    print(
        f"Simulated {frame} frames ({clock.elapsed_ms / 1000:.1f}s)"
        f" | Status: {status} | Lines: {game.lines_cleared}"
    )
    return game
