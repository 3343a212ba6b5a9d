"""A box that is pushed away by moving bodies that overlap it."""

from __future__ import annotations

import logging
import math
from typing import Any, Mapping

from boxengine.body import BodyComponent
from boxengine.component import DEFAULT_DELTA_TIME, Component, register_component

__all__ = ["BoxBehaviorComponent"]

logger = logging.getLogger(__name__)

DEFAULT_PUSH_FORCE = 100.0
_HALF_WIDTH = 16.0
_HALF_HEIGHT = 16.0
_OVERLAP = _HALF_WIDTH + _HALF_HEIGHT
_MIN_PUSHER_SPEED = 10.0
_FULL_FORCE_SPEED = 200.0


@register_component("BoxBehaviorComponent")
class BoxBehaviorComponent(Component):
    """Pushes the parent's body away from overlapping moving bodies.

    Other objects are found through the parent's engine, which must expose
    its objects as ``objects``.
    """

    def __init__(self, parent: Any, push_force: float = DEFAULT_PUSH_FORCE) -> None:
        super().__init__(parent)
        self.push_force = float(push_force)
        self._body: BodyComponent | None = (
            parent.get_component(BodyComponent) if parent is not None else None
        )
        if self._body is None:
            logger.warning("BoxBehaviorComponent requires a BodyComponent")

    @classmethod
    def from_dict(cls, parent: Any, data: Mapping[str, Any]) -> BoxBehaviorComponent:
        """Build from JSON; raises ValueError if "pushForce" is not a number."""
        force = DEFAULT_PUSH_FORCE
        if "pushForce" in data:
            value = data["pushForce"]
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"expected a number for 'pushForce', got {value!r}")
            force = float(value)
        return cls(parent, force)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type_name, "pushForce": self.push_force}

    def update(self, delta_time: float = DEFAULT_DELTA_TIME) -> None:
        """Add push velocity for every overlapping body moving fast enough."""
        body = self._body
        if body is None:
            return
        engine = getattr(self.parent, "engine", None)
        if engine is None:
            return

        pos_x, pos_y, _ = body.position()
        for obj in engine.objects:
            if obj is self.parent:
                continue
            other = obj.get_component(BodyComponent)
            if other is None:
                continue
            other_x, other_y, _ = other.position()
            dx = pos_x - other_x
            dy = pos_y - other_y
            if abs(dx) >= _OVERLAP or abs(dy) >= _OVERLAP:
                continue
            distance = math.hypot(dx, dy)
            if distance <= 0.0:
                continue
            other_vx, other_vy, _ = other.velocity()
            other_speed = math.hypot(other_vx, other_vy)
            if other_speed <= _MIN_PUSHER_SPEED:
                continue
            scale = min(other_speed / _FULL_FORCE_SPEED, 1.0)
            body.mod_velocity(
                dx / distance * self.push_force * scale,
                dy / distance * self.push_force * scale,
                0.0,
            )

    def draw(self) -> None:
        """A box behaviour has nothing to draw."""