"""Position, velocity and drag of a game object."""

from __future__ import annotations

import math
from typing import Any, Mapping

from boxengine.component import DEFAULT_DELTA_TIME, Component, register_component

__all__ = ["BodyComponent"]

DEFAULT_DRAG = 0.95
_SPEED_NORMALISER = 800.0
_SPEED_DRAG = 0.025
_MIN_DRAG = 0.5

_FIELDS = (
    ("posX", "pos_x"),
    ("posY", "pos_y"),
    ("angle", "angle"),
    ("velX", "vel_x"),
    ("velY", "vel_y"),
    ("velAngle", "vel_angle"),
    ("drag", "drag"),
)


def _number(value: Any, key: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"expected a number for {key!r}, got {value!r}")
    return float(value)


@register_component("BodyComponent")
class BodyComponent(Component):
    """Kinematic body: position and angle integrated from velocity with drag."""

    def __init__(self, parent: Any, drag: float = DEFAULT_DRAG) -> None:
        super().__init__(parent)
        self.pos_x = 0.0
        self.pos_y = 0.0
        self.angle = 0.0
        self.vel_x = 0.0
        self.vel_y = 0.0
        self.vel_angle = 0.0
        self.drag = float(drag)

    @classmethod
    def from_dict(cls, parent: Any, data: Mapping[str, Any]) -> BodyComponent:
        """Build a body from its JSON form; raises ValueError on non-numbers."""
        body = cls(parent)
        for key, attr in _FIELDS:
            if key in data:
                setattr(body, attr, _number(data[key], key))
        return body

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"type": self.type_name}
        result.update((key, getattr(self, attr)) for key, attr in _FIELDS)
        return result

    def set_position(self, x: float, y: float, angle: float) -> None:
        self.pos_x, self.pos_y, self.angle = x, y, angle

    def set_velocity(self, x: float, y: float, angle: float) -> None:
        self.vel_x, self.vel_y, self.vel_angle = x, y, angle

    def mod_velocity(self, x: float, y: float, angle: float) -> None:
        """Add to the current velocity."""
        self.vel_x += x
        self.vel_y += y
        self.vel_angle += angle

    def position(self) -> tuple[float, float, float]:
        return (self.pos_x, self.pos_y, self.angle)

    def velocity(self) -> tuple[float, float, float]:
        return (self.vel_x, self.vel_y, self.vel_angle)

    def update(self, delta_time: float = DEFAULT_DELTA_TIME) -> None:
        """Apply speed-dependent drag, then integrate position."""
        speed = math.hypot(self.vel_x, self.vel_y)
        linear_drag = self.drag
        if speed > 0.0:
            linear_drag = max(
                self.drag - (speed / _SPEED_NORMALISER) * _SPEED_DRAG, _MIN_DRAG
            )
        self.vel_x *= linear_drag
        self.vel_y *= linear_drag
        self.vel_angle *= self.drag

        self.pos_x += self.vel_x * delta_time
        self.pos_y += self.vel_y * delta_time
        self.angle += self.vel_angle * delta_time

    def draw(self) -> tuple[float, float, float]:
        """Draw nothing; return the pose other components render at."""
        return self.position()