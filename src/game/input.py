"""
Discrete key input: per-action repeat / one-shot state machine.

Each action carries an integer state:
  - 0  = released
  - 1  = just pressed (not yet seen by a move tick)
  - n  = held for n consecutive move ticks (n >= 2)
  - -1 = one-shot action already fired; ignored until the key is released

Key events only touch these integers. They are read, and advanced, once per
move tick by the game (see InputState.step()).

Key codes are opaque integers supplied by the host through a KeyBindings
table; nothing here knows about any particular keyboard API.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping

RELEASED = 0
JUST_PRESSED = 1
CONSUMED = -1


class Action(enum.IntEnum):
    """Actions a player can bind keys to."""
    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    ROTATE = 2
    SOFT_DROP = 3
    HARD_DROP = 4
    HOLD = 5


# Fire once per press, then wait for release
ONE_SHOT_ACTIONS: frozenset[Action] = frozenset({Action.ROTATE, Action.HARD_DROP, Action.HOLD})


def should_shift(state: int) -> bool:
    """Delayed auto-repeat for horizontal moves.

    Moves on the first tick (state 1), pauses for one tick (state 2), then
    moves on every tick from state 3 onward.
    """
    return state == JUST_PRESSED or state >= 3


class KeyBindings:
    """Action -> key codes table, with the reverse lookup used on key events.

    Args:
        bindings: Mapping of Action to one or more key codes. A code may be
            bound to a single action only.

    Raises:
        ValueError: If one key code is bound to two different actions.
    """

    def __init__(self, bindings: Mapping[Action, Iterable[int]]) -> None:
        self._by_code: dict[int, Action] = {}
        for action, codes in bindings.items():
            action = Action(action)
            for code in codes:
                bound = self._by_code.get(code)
                if bound is not None and bound != action:
                    raise ValueError(
                        f"Key code {code} is bound to both {bound.name} and {action.name}"
                    )
                self._by_code[code] = action

    def action_for(self, code: int) -> Action | None:
        return self._by_code.get(code)

    def codes_for(self, action: Action) -> list[int]:
        return [code for code, bound in self._by_code.items() if bound == action]

    def __contains__(self, code: object) -> bool:
        return code in self._by_code


class InputState:
    """Per-action key state driven by press / release events.

    Attributes:
        bindings: The key code table used by the *_key methods.
        states: Current integer state of every Action.
    """

    def __init__(self, bindings: KeyBindings | None = None) -> None:
        self.bindings = bindings or KeyBindings({})
        self.states: dict[Action, int] = {action: RELEASED for action in Action}

    def capture_key(self, code: int) -> bool:
        """Return True if the code is bound to an action.

        Hosts use this to decide whether to suppress the key's default
        behavior.
        """
        return code in self.bindings

    def key_pressed(self, code: int) -> None:
        action = self.bindings.action_for(code)
        if action is not None:
            self.press(action)

    def key_released(self, code: int) -> None:
        action = self.bindings.action_for(code)
        if action is not None:
            self.release(action)

    def press(self, action: Action) -> None:
        if self.states[action] != CONSUMED:
            self.states[action] = JUST_PRESSED

    def release(self, action: Action) -> None:
        self.states[action] = RELEASED

    def step(self, actions: Iterable[Action] | None = None) -> dict[Action, int]:
        """Advance actions by one move tick.

        Args:
            actions: The actions the tick acted upon; defaults to all of
                them. The others keep their state for the next tick.

        Returns:
            The states as they were before advancing; this is what the tick
            acts upon. Held repeating actions count up, one-shot actions that
            were just pressed become consumed.
        """
        snapshot = dict(self.states)
        advance = set(Action) if actions is None else set(actions)
        for action, state in snapshot.items():
            if state < JUST_PRESSED or action not in advance:
                continue
            if action in ONE_SHOT_ACTIONS:
                self.states[action] = CONSUMED
            else:
                self.states[action] = state + 1
        return snapshot

    def reset(self) -> None:
        """Forget every key, as if all were released."""
        for action in Action:
            self.states[action] = RELEASED
