"""Gives a game object access to action values from one or more input sources."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from boxengine.actions import GameAction
from boxengine.component import DEFAULT_DELTA_TIME, Component, register_component
from boxengine.input_manager import INPUT_SOURCE_KEYBOARD, InputManager, get_input_manager

__all__ = ["InputComponent"]

_PRESS_THRESHOLD = 0.5
_ACTIVITY_ACTIONS = (
    GameAction.MOVE_UP,
    GameAction.MOVE_DOWN,
    GameAction.MOVE_LEFT,
    GameAction.MOVE_RIGHT,
    GameAction.ACTION_INTERACT,
    GameAction.ACTION_THROW,
)


def _source_list(value: Any) -> list[int]:
    if not isinstance(value, list) or any(
        isinstance(item, bool) or not isinstance(item, int) for item in value
    ):
        raise ValueError(f"'inputSources' must be a list of integers, got {value!r}")
    return list(value)


@register_component("InputComponent")
class InputComponent(Component):
    """Reads actions from its input sources; with several, the highest value wins."""

    def __init__(
        self,
        parent: Any,
        sources: int | Iterable[int] = INPUT_SOURCE_KEYBOARD,
        *,
        manager: InputManager | None = None,
    ) -> None:
        super().__init__(parent)
        self._manager = manager if manager is not None else get_input_manager()
        if isinstance(sources, int):
            self._sources = [sources]
        else:
            self._sources = list(sources) or [INPUT_SOURCE_KEYBOARD]

    @classmethod
    def from_dict(cls, parent: Any, data: Mapping[str, Any]) -> InputComponent:
        """Build from JSON; raises ValueError if "inputSources" is malformed."""
        sources = _source_list(data["inputSources"]) if "inputSources" in data else []
        return cls(parent, sources)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type_name, "inputSources": list(self._sources)}

    def update(self, delta_time: float = DEFAULT_DELTA_TIME) -> None:
        """Input is polled by the input manager; nothing to do per frame."""

    def draw(self) -> None:
        """An input component has nothing to draw."""

    @property
    def input_source(self) -> int:
        """The primary (first) input source."""
        return self._sources[0] if self._sources else INPUT_SOURCE_KEYBOARD

    @property
    def input_sources(self) -> list[int]:
        return list(self._sources)

    def get_input(self, action: GameAction) -> float:
        """Return the highest value of an action over all sources."""
        return max(
            (self._manager.input_value(source, action) for source in self._sources),
            default=0.0,
        )

    def input_from_source(self, source: int, action: GameAction) -> float:
        return self._manager.input_value(source, action)

    def is_pressed(self, action: GameAction) -> bool:
        return self.get_input(action) > _PRESS_THRESHOLD

    @property
    def move_up(self) -> float:
        return self.get_input(GameAction.MOVE_UP)

    @property
    def move_down(self) -> float:
        return self.get_input(GameAction.MOVE_DOWN)

    @property
    def move_left(self) -> float:
        return self.get_input(GameAction.MOVE_LEFT)

    @property
    def move_right(self) -> float:
        return self.get_input(GameAction.MOVE_RIGHT)

    @property
    def action_walk(self) -> float:
        return self.get_input(GameAction.ACTION_WALK)

    @property
    def action_interact(self) -> float:
        return self.get_input(GameAction.ACTION_INTERACT)

    @property
    def action_throw(self) -> float:
        return self.get_input(GameAction.ACTION_THROW)

    def set_input_source(self, source: int) -> None:
        """Listen to a single source only."""
        self._sources = [source]

    def set_input_sources(self, sources: Iterable[int]) -> None:
        """Replace the sources; an empty list falls back to the keyboard."""
        self._sources = list(sources) or [INPUT_SOURCE_KEYBOARD]

    def add_input_source(self, source: int) -> None:
        if source not in self._sources:
            self._sources.append(source)

    def remove_input_source(self, source: int) -> None:
        """Remove a source; the keyboard is used if none remain."""
        if source in self._sources:
            self._sources.remove(source)
        if not self._sources:
            self._sources.append(INPUT_SOURCE_KEYBOARD)

    def is_active(self) -> bool:
        """Return True if any source is connected."""
        return any(self._manager.is_source_active(source) for source in self._sources)

    def is_source_active(self, source: int) -> bool:
        return self._manager.is_source_active(source)

    def active_source(self) -> int:
        """Return the source currently giving the most movement and action input."""
        best_source = self.input_source
        best_total = 0.0
        for source in self._sources:
            total = sum(self._manager.input_value(source, a) for a in _ACTIVITY_ACTIONS)
            if total > best_total:
                best_total = total
                best_source = source
        return best_source