"""Component base class and the registry that builds components by type name."""

from __future__ import annotations

import abc
import functools
from typing import Any, Callable, Mapping, TypeVar

__all__ = [
    "Component",
    "ComponentLibrary",
    "get_component_library",
    "register_component",
]

DEFAULT_DELTA_TIME = 1.0 / 60.0

_C = TypeVar("_C", bound="Component")


class Component(abc.ABC):
    """A piece of behaviour or data attached to a game object."""

    type_name: str = "Component"

    def __init__(self, parent: Any) -> None:
        self.parent = parent

    @classmethod
    def from_dict(cls: type[_C], parent: Any, data: Mapping[str, Any]) -> _C:
        """Build a component from its JSON form; the base ignores the data."""
        return cls(parent)

    @abc.abstractmethod
    def update(self, delta_time: float = DEFAULT_DELTA_TIME) -> None:
        """Advance the component by one frame."""

    @abc.abstractmethod
    def draw(self) -> None:
        """Draw the component, if it has anything to show."""

    @abc.abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """Return the component in its JSON form, including its "type"."""


class ComponentLibrary:
    """Maps component type names to the classes that build them."""

    def __init__(self) -> None:
        self._classes: dict[str, type[Component]] = {}

    def register(self, type_name: str, component_class: type[Component]) -> None:
        """Register a class under a type name, replacing any earlier one."""
        self._classes[type_name] = component_class

    def create(self, type_name: str, parent: Any, data: Mapping[str, Any]) -> Component:
        """Build a component of a registered type from its JSON form.

        Raises KeyError if the type is not registered.
        """
        return self.component_class(type_name).from_dict(parent, data)

    def is_registered(self, type_name: str) -> bool:
        return type_name in self._classes

    def registered_types(self) -> list[str]:
        return list(self._classes)

    def component_class(self, type_name: str) -> type[Component]:
        """Return the class registered under a type name; KeyError if none."""
        try:
            return self._classes[type_name]
        except KeyError:
            raise KeyError(f"component type not registered: {type_name}") from None


@functools.lru_cache(maxsize=None)
def get_component_library() -> ComponentLibrary:
    """Return the shared component library."""
    return ComponentLibrary()


def register_component(type_name: str) -> Callable[[type[_C]], type[_C]]:
    """Class decorator that names a component type and registers it."""

    def decorate(component_class: type[_C]) -> type[_C]:
        component_class.type_name = type_name
        get_component_library().register(type_name, component_class)
        return component_class

    return decorate