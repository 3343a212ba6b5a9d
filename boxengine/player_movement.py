"""Turns input actions into velocity and facing for a game object's body."""

from __future__ import annotations

import logging
import math
from typing import Any, Mapping

from boxengine.actions import GameAction
from boxengine.body import BodyComponent
from boxengine.component import DEFAULT_DELTA_TIME, Component, register_component
from boxengine.input_component import InputComponent

__all__ = ["PlayerMovementComponent"]

logger = logging.getLogger(__name__)

DEFAULT_MOVE_SPEED = 200.0
_WALK_SLOWDOWN = 0.5
_MIN_MOVE_MAGNITUDE = 0.01
_ROTATION_SPEED = 8.0
_MAX_ANGULAR_VELOCITY = _ROTATION_SPEED * 2.0
_ROTATION_DAMPING = 0.5


def _sibling(parent: Any, component_class: type[Component]) -> Any:
    if parent is None:
        return None
    return parent.get_component(component_class)


@register_component("PlayerMovementComponent")
class PlayerMovementComponent(Component):
    """Drives the parent's body from its input component.

    The input and body components are looked up once, when this component
    is created, so they must be added to the parent before it.
    """

    def __init__(self, parent: Any, move_speed: float = DEFAULT_MOVE_SPEED) -> None:
        super().__init__(parent)
        self.move_speed = float(move_speed)
        self._input: InputComponent | None = _sibling(parent, InputComponent)
        self._body: BodyComponent | None = _sibling(parent, BodyComponent)
        if self._input is None:
            logger.warning("PlayerMovementComponent requires an InputComponent")
        if self._body is None:
            logger.warning("PlayerMovementComponent requires a BodyComponent")

    @classmethod
    def from_dict(cls, parent: Any, data: Mapping[str, Any]) -> PlayerMovementComponent:
        """Build from JSON; raises ValueError if "moveSpeed" is not a number."""
        speed = DEFAULT_MOVE_SPEED
        if "moveSpeed" in data:
            value = data["moveSpeed"]
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"expected a number for 'moveSpeed', got {value!r}")
            speed = float(value)
        return cls(parent, speed)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type_name, "moveSpeed": self.move_speed}

    def update(self, delta_time: float = DEFAULT_DELTA_TIME) -> None:
        """Add input-driven velocity and turn the body toward its direction of travel."""
        controls, body = self._input, self._body
        if controls is None or body is None:
            return
        if not controls.is_active():
            logger.warning("input source not active")
            return

        horizontal = controls.move_right - controls.move_left
        vertical = controls.move_down - controls.move_up
        speed = self.move_speed * (1.0 - controls.action_walk * _WALK_SLOWDOWN)
        body.mod_velocity(horizontal * speed, vertical * speed, 0.0)

        vel_x, vel_y, vel_angle = body.velocity()
        if math.hypot(vel_x, vel_y) > _MIN_MOVE_MAGNITUDE:
            target = math.atan2(vel_y, vel_x) - math.pi / 2.0 + math.pi
            diff = target - body.angle
            while diff > math.pi:
                diff -= 2.0 * math.pi
            while diff < -math.pi:
                diff += 2.0 * math.pi
            angular = max(-_MAX_ANGULAR_VELOCITY, min(_MAX_ANGULAR_VELOCITY, diff * _ROTATION_SPEED))
            body.mod_velocity(0.0, 0.0, angular)
        elif abs(vel_angle) > _MIN_MOVE_MAGNITUDE:
            body.mod_velocity(0.0, 0.0, -vel_angle * _ROTATION_DAMPING)

        if controls.is_pressed(GameAction.ACTION_INTERACT):
            logger.info("action interact pressed")
        if controls.is_pressed(GameAction.ACTION_THROW):
            logger.info("action throw pressed")

    def draw(self) -> None:
        """Movement has nothing to draw."""