"""
Game orchestrator: piece lifecycle, fixed-quantum timers, hold and lock.

This module ties the Board, the piece catalog and the InputState together.
A host calls update(delta_ms) every frame with the elapsed time, then
render(surface). Two accumulators turn arbitrary frame times into whole
quanta:

  - move quantum (default 100 ms): apply inputs to the current piece
  - gravity quantum (default 1000 ms): drop the current piece one row, and
    lock it when it cannot fall

A large delta runs the quantum bodies several times in one call, so the
outcome does not depend on the frame rate.
"""

from __future__ import annotations

import enum
import math
import random
from typing import Any, Protocol

from src.game.board import Board
from src.game.ghost import drop_to_rest
from src.game.input import Action, InputState, KeyBindings, should_shift
from src.game.piece import PieceInstance, init_piece_position, spawn_piece
from src.game.pieces import MAX_PIECE_SIZE, random_definition

MOVE_INTERVAL_MS: float = 100.0
DROP_INTERVAL_MS: float = 1000.0
SOFT_DROP_BONUS_MS: float = 1000.0


class GameStatus(enum.Enum):
    PLAYING = "playing"
    GAME_OVER = "game_over"


class HoldPolicy(enum.Enum):
    """How often the current piece may be swapped with the held piece."""
    UNLIMITED = "unlimited"
    ONCE_PER_PIECE = "once_per_piece"


class Renderer(Protocol):
    def draw(self, game: TetrisGame, surface: Any) -> None: ...


class TetrisGame:
    """Single game: board, current/next/held/ghost pieces, timers and input.

    Attributes:
        board: The game board.
        input: Key state consumed on each move tick.
        current_piece: The falling piece.
        next_piece: The piece that spawns after the current one locks.
        held_piece: The piece set aside with HOLD, or None.
        ghost_piece: Resting location of the current piece, or None when the
            current location is invalid.
        move_timer: Milliseconds accumulated toward the next move tick.
        drop_timer: Milliseconds accumulated toward the next gravity tick.
        can_hold: Whether HOLD is currently allowed under the hold policy.
        lines_cleared: Total rows cleared since the game started.
        status: PLAYING or GAME_OVER.
    """

    def __init__(
        self,
        board_width: int = 10,
        board_height: int = 20,
        *,
        bindings: KeyBindings | None = None,
        move_interval_ms: float = MOVE_INTERVAL_MS,
        drop_interval_ms: float = DROP_INTERVAL_MS,
        soft_drop_bonus_ms: float = SOFT_DROP_BONUS_MS,
        hold_policy: HoldPolicy | str = HoldPolicy.UNLIMITED,
        rng: random.Random | None = None,
        renderer: Renderer | None = None,
    ) -> None:
        """Create a game and spawn its first two pieces.

        Args:
            board_width: Board width in columns.
            board_height: Board height in rows.
            bindings: Key code table for capture_key / key_pressed /
                key_released.
            move_interval_ms: Length of the move quantum.
            drop_interval_ms: Length of the gravity quantum.
            soft_drop_bonus_ms: Added to the drop timer on every move tick
                while SOFT_DROP is held.
            hold_policy: A HoldPolicy or its string value.
            rng: Random source for piece selection.
            renderer: Object whose draw(game, surface) is called by render().

        Raises:
            ValueError: If the board cannot hold the largest piece or a
                quantum is not positive.
        """
        if board_width < MAX_PIECE_SIZE or board_height < MAX_PIECE_SIZE:
            raise ValueError(
                f"Board must be at least {MAX_PIECE_SIZE}x{MAX_PIECE_SIZE}, "
                f"got {board_width}x{board_height}"
            )
        if move_interval_ms <= 0 or drop_interval_ms <= 0:
            raise ValueError("move_interval_ms and drop_interval_ms must be positive")
        if soft_drop_bonus_ms < 0:
            raise ValueError("soft_drop_bonus_ms must not be negative")

        self.board = Board(board_width, board_height)
        self.input = InputState(bindings)
        self.move_interval_ms = float(move_interval_ms)
        self.drop_interval_ms = float(drop_interval_ms)
        self.soft_drop_bonus_ms = float(soft_drop_bonus_ms)
        self.hold_policy = HoldPolicy(hold_policy)
        self.rng = rng or random.Random()
        self.renderer = renderer

        self.current_piece: PieceInstance | None = None
        self.next_piece: PieceInstance | None = None
        self.held_piece: PieceInstance | None = None
        self.ghost_piece: PieceInstance | None = None
        self.move_timer: float = 0.0
        self.drop_timer: float = 0.0
        self.can_hold: bool = True
        self.lines_cleared: int = 0
        self.status = GameStatus.PLAYING

        self.reset()

    @classmethod
    def from_config(
        cls,
        config: dict[str, Any],
        bindings: KeyBindings | None = None,
        renderer: Renderer | None = None,
    ) -> TetrisGame:
        """Build a game from a config dict (as loaded from game.yaml).

        Missing keys fall back to the constructor defaults.
        """
        seed = config.get("seed")
        return cls(
            config.get("board_width", 10),
            config.get("board_height", 20),
            bindings=bindings,
            move_interval_ms=config.get("move_interval_ms", MOVE_INTERVAL_MS),
            drop_interval_ms=config.get("drop_interval_ms", DROP_INTERVAL_MS),
            soft_drop_bonus_ms=config.get("soft_drop_bonus_ms", SOFT_DROP_BONUS_MS),
            hold_policy=config.get("hold_policy", HoldPolicy.UNLIMITED.value),
            rng=random.Random(seed) if seed is not None else None,
            renderer=renderer,
        )

    @property
    def is_game_over(self) -> bool:
        return self.status is GameStatus.GAME_OVER

    def reset(self) -> None:
        """Start a new game on an empty board, keeping the configuration."""
        self.board.reset()
        self.input.reset()
        self.held_piece = None
        self.ghost_piece = None
        self.move_timer = 0.0
        self.drop_timer = 0.0
        self.can_hold = True
        self.lines_cleared = 0
        self.status = GameStatus.PLAYING

        self.next_piece = self._random_piece()
        self._spawn_next()

    # ── Host boundary ───────────────────────────────────────────────────

    def capture_key(self, code: int) -> bool:
        return self.input.capture_key(code)

    def key_pressed(self, code: int) -> None:
        self.input.key_pressed(code)

    def key_released(self, code: int) -> None:
        self.input.key_released(code)

    def update(self, delta_ms: float) -> None:
        """Advance the game by delta_ms milliseconds.

        Drains the move timer first, then the drop timer. Does nothing once
        the game is over. Negative and non-finite deltas count as zero.
        """
        if self.is_game_over:
            return
        delta_ms = float(delta_ms)
        if not math.isfinite(delta_ms) or delta_ms < 0:
            delta_ms = 0.0

        self.move_timer += delta_ms
        while self.move_timer >= self.move_interval_ms and not self.is_game_over:
            self.move_timer -= self.move_interval_ms
            self._move_tick()

        self.drop_timer += delta_ms
        while self.drop_timer >= self.drop_interval_ms and not self.is_game_over:
            self.drop_timer -= self.drop_interval_ms
            self._gravity_tick()

    def render(self, surface: Any) -> None:
        """Hand the game to the injected renderer, if any."""
        if self.renderer is not None:
            self.renderer.draw(self, surface)

    # ── Quantum bodies ──────────────────────────────────────────────────

    def _move_tick(self) -> None:
        """Apply one move quantum of input to the current piece.

        Hold and hard drop replace the current piece and end the tick; the
        other pending inputs are left for the next tick, where they apply to
        the incoming piece. For everything else the piece is changed on a
        trial basis: if the result is not a valid location, the piece reverts
        to its pre-tick copy.
        """
        if self.input.states[Action.HOLD] == 1:
            self.input.step([Action.HOLD])
            self._hold()
            return
        if self.input.states[Action.HARD_DROP] == 1:
            self.input.step([Action.HARD_DROP])
            self._hard_drop()
            return

        states = self.input.step()

        piece = self.current_piece
        before = piece.copy()

        if states[Action.ROTATE] == 1:
            piece.rotate()
            self.board.fit_piece(piece)

        dx = 0
        if should_shift(states[Action.MOVE_LEFT]):
            dx -= 1
        if should_shift(states[Action.MOVE_RIGHT]):
            dx += 1
        if dx:
            piece.x += dx
            self.board.fit_piece(piece)

        if states[Action.SOFT_DROP] >= 1:
            self.drop_timer += self.soft_drop_bonus_ms

        if self.board.is_location_valid(piece):
            self._update_ghost()
        else:
            self.current_piece = before

    def _gravity_tick(self) -> None:
        """Drop the current piece one row, locking it if it cannot fall."""
        piece = self.current_piece
        piece.y += 1
        if self.board.is_location_valid(piece):
            self._update_ghost()
            return
        piece.y -= 1
        self._lock_piece()
        self.drop_timer = 0.0

    # ── Piece lifecycle ─────────────────────────────────────────────────

    def _random_piece(self) -> PieceInstance:
        return spawn_piece(random_definition(self.rng), self.board.width)

    def _spawn_next(self) -> None:
        """Promote next_piece to current_piece and draw a new next piece."""
        self.current_piece = self.next_piece
        self.next_piece = self._random_piece()
        self.can_hold = True
        self._enter_play(self.current_piece)

    def _enter_play(self, piece: PieceInstance) -> None:
        """Clamp a freshly positioned piece into the board.

        A piece that still does not fit means the stack has reached the
        spawn area: the game is over.
        """
        if self.board.fit_piece(piece):
            self._update_ghost()
        else:
            self.ghost_piece = None
            self.status = GameStatus.GAME_OVER

    def _lock_piece(self) -> None:
        """Merge the current piece into the board and spawn the next one."""
        self.lines_cleared += self.board.place_piece(self.current_piece)
        self._spawn_next()

    def _hard_drop(self) -> None:
        ghost = drop_to_rest(self.board, self.current_piece)
        if ghost is None:
            return
        self.current_piece = ghost
        self._lock_piece()
        self.drop_timer = 0.0

    def _hold(self) -> None:
        """Swap the current piece with the held one.

        The first hold of a game has nothing to swap with, so the current
        piece is set aside and the next piece comes into play instead.
        """
        if self.hold_policy is HoldPolicy.ONCE_PER_PIECE and not self.can_hold:
            return

        incoming = self.held_piece
        if incoming is None:
            incoming = self.next_piece
            self.next_piece = self._random_piece()

        self.held_piece = init_piece_position(self.current_piece, self.board.width)
        self.current_piece = init_piece_position(incoming, self.board.width)
        self.can_hold = False
        self._enter_play(self.current_piece)

    def _update_ghost(self) -> None:
        self.ghost_piece = drop_to_rest(self.board, self.current_piece)
