"""Game objects: ordered collections of components, with JSON serialization."""

from __future__ import annotations

import logging
from typing import Any, TypeVar

# Imported so that the built-in component types are registered.
from boxengine import body, box_behavior, input_component, player_movement  # noqa: F401
from boxengine import sprite_component  # noqa: F401
from boxengine.component import DEFAULT_DELTA_TIME, Component, get_component_library

__all__ = ["GameObject", "set_engine", "get_engine"]

logger = logging.getLogger(__name__)

_C = TypeVar("_C", bound=Component)

_engine: Any = None


def set_engine(engine: Any) -> None:
    """Set the engine that game objects can reach."""
    global _engine
    _engine = engine


def get_engine() -> Any:
    """Return the engine set by set_engine, or None."""
    return _engine


class GameObject:
    """An entity made of components, updated and drawn in the order added."""

    def __init__(self) -> None:
        self._components: list[Component] = []
        self._by_class: dict[type, Component] = {}

    @property
    def engine(self) -> Any:
        """The engine shared by all game objects, or None."""
        return get_engine()

    @property
    def components(self) -> tuple[Component, ...]:
        return tuple(self._components)

    def add_component(self, component: _C) -> _C:
        """Attach a component; it becomes the one found for its class."""
        self._components.append(component)
        self._by_class[type(component)] = component
        return component

    def get_component(self, component_class: type[_C]) -> _C | None:
        """Return the component of exactly this class, or None."""
        found = self._by_class.get(component_class)
        return found  # type: ignore[return-value]

    def has_component(self, component_class: type[Component]) -> bool:
        return component_class in self._by_class

    def update(self, delta_time: float = DEFAULT_DELTA_TIME) -> None:
        for component in self._components:
            component.update(delta_time)

    def render(self, surface: Any = None) -> None:
        """Draw every component; components draw through the sprite manager."""
        for component in self._components:
            component.draw()

    def to_dict(self) -> dict[str, Any]:
        return {"components": [component.to_dict() for component in self._components]}

    def from_dict(self, data: Any) -> None:
        """Replace all components with those described in the JSON form.

        Entries without a type, of unregistered types or with bad values
        are skipped; a type that is not a string raises ValueError.
        """
        self._components.clear()
        self._by_class.clear()
        if not isinstance(data, dict) or "components" not in data:
            return
        entries = data["components"]
        if not isinstance(entries, list):
            return
        library = get_component_library()
        for entry in entries:
            if not isinstance(entry, dict) or "type" not in entry:
                continue
            type_name = entry["type"]
            if not isinstance(type_name, str):
                raise ValueError(f"component type must be a string, got {type_name!r}")
            try:
                component = library.create(type_name, self, entry)
            except (KeyError, ValueError, TypeError) as exc:
                logger.warning("failed to create component %r: %s", type_name, exc)
                continue
            self._components.append(component)
            self._by_class[library.component_class(type_name)] = component