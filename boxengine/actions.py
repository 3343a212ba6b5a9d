"""In-game actions that input sources are mapped onto."""

from __future__ import annotations

import enum

__all__ = ["GameAction", "action_to_string", "string_to_action"]


class GameAction(enum.IntEnum):
    """An action the player can perform, independent of the input device."""

    MOVE_UP = 0
    MOVE_DOWN = 1
    MOVE_LEFT = 2
    MOVE_RIGHT = 3
    ACTION_WALK = 4
    ACTION_INTERACT = 5
    ACTION_THROW = 6


_ACTION_NAMES: dict[GameAction, str] = {action: action.name.lower() for action in GameAction}
_NAME_TO_ACTION: dict[str, GameAction] = {name: action for action, name in _ACTION_NAMES.items()}


def action_to_string(action: GameAction | int) -> str:
    """Return the configuration name of an action, or "unknown"."""
    try:
        return _ACTION_NAMES[GameAction(action)]
    except ValueError:
        return "unknown"


def string_to_action(name: str) -> GameAction:
    """Return the action with the given configuration name.

    Raises ValueError if the name does not denote an action.
    """
    try:
        return _NAME_TO_ACTION[name]
    except KeyError:
        raise ValueError(f"unknown game action: {name!r}") from None