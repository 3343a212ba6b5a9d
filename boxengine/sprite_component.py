"""Draws a game object's sprite and steps through its animation frames."""

from __future__ import annotations

from typing import Any, Mapping

from boxengine.body import BodyComponent
from boxengine.component import DEFAULT_DELTA_TIME, Component, register_component
from boxengine.sprite_manager import Flip, SpriteManager, get_sprite_manager

__all__ = ["SpriteComponent"]

DEFAULT_ANIMATION_SPEED = 10.0


def _typed(data: Mapping[str, Any], key: str, kind: type | tuple[type, ...]) -> Any:
    value = data[key]
    if (isinstance(value, bool) and bool not in (kind if isinstance(kind, tuple) else (kind,))) \
            or not isinstance(value, kind):
        raise ValueError(f"invalid value for {key!r}: {value!r}")
    return value


@register_component("SpriteComponent")
class SpriteComponent(Component):
    """A sprite drawn at the parent's body position, optionally animated."""

    def __init__(
        self,
        parent: Any,
        sprite_name: str = "",
        animate: bool = False,
        loop: bool = False,
        *,
        sprites: SpriteManager | None = None,
    ) -> None:
        super().__init__(parent)
        self._sprites = sprites if sprites is not None else get_sprite_manager()
        self.sprite_name = sprite_name
        self.current_frame = 0
        self.animating = animate
        self.looping = loop
        self.animation_speed = DEFAULT_ANIMATION_SPEED
        self.animation_timer = 0.0
        self.flip = Flip.NONE
        self.alpha = 255

    @classmethod
    def from_dict(cls, parent: Any, data: Mapping[str, Any]) -> SpriteComponent:
        """Build from JSON; raises ValueError on values of the wrong type."""
        sprite = cls(parent)
        if "spriteName" in data:
            sprite.sprite_name = _typed(data, "spriteName", str)
        if "currentFrame" in data:
            sprite.current_frame = int(_typed(data, "currentFrame", int))
        if "animating" in data:
            sprite.animating = _typed(data, "animating", bool)
        if "looping" in data:
            sprite.looping = _typed(data, "looping", bool)
        if "animationSpeed" in data:
            sprite.animation_speed = float(_typed(data, "animationSpeed", (int, float)))
        if "animationTimer" in data:
            sprite.animation_timer = float(_typed(data, "animationTimer", (int, float)))
        if "flipFlags" in data:
            sprite.flip = Flip(int(_typed(data, "flipFlags", int)))
        if "alpha" in data:
            sprite.alpha = int(_typed(data, "alpha", int)) & 0xFF
        return sprite

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type_name,
            "spriteName": self.sprite_name,
            "currentFrame": self.current_frame,
            "animating": self.animating,
            "looping": self.looping,
            "animationSpeed": self.animation_speed,
            "animationTimer": self.animation_timer,
            "flipFlags": int(self.flip),
            "alpha": self.alpha,
        }

    def update(self, delta_time: float = DEFAULT_DELTA_TIME) -> None:
        """Advance the animation by at most one frame."""
        if not self.animating:
            return
        data = self._sprites.sprite_data(self.sprite_name)
        if data is None or data.frame_count() <= 1:
            return
        self.animation_timer += self.animation_speed * delta_time
        if self.animation_timer < 1.0:
            return
        self.animation_timer -= 1.0
        self.current_frame += 1
        if self.current_frame >= data.frame_count():
            if self.looping:
                self.current_frame = 0
            else:
                self.current_frame = data.frame_count() - 1
                self.animating = False

    def draw(self) -> None:
        """Render the current frame at the parent body's position and angle."""
        if self._sprites.sprite_data(self.sprite_name) is None:
            return
        x = y = angle = 0.0
        body = self.parent.get_component(BodyComponent) if self.parent is not None else None
        if body is not None:
            x, y, angle = body.position()
        self._sprites.render_sprite(
            self.sprite_name, self.current_frame, int(x), int(y), angle, self.flip, self.alpha
        )

    def set_frame(self, frame_index: int) -> None:
        """Show a frame; indices past the last frame go back to the first."""
        self.current_frame = frame_index
        data = self._sprites.sprite_data(self.sprite_name)
        if data is not None and self.current_frame >= data.frame_count():
            self.current_frame = 0

    def play_animation(self, loop: bool = True) -> None:
        self.animating = True
        self.looping = loop
        self.animation_timer = 0.0

    def stop_animation(self) -> None:
        self.animating = False
        self.animation_timer = 0.0

    def set_flip_horizontal(self, flip: bool) -> None:
        self.flip = self.flip | Flip.HORIZONTAL if flip else self.flip & ~Flip.HORIZONTAL

    def set_flip_vertical(self, flip: bool) -> None:
        self.flip = self.flip | Flip.VERTICAL if flip else self.flip & ~Flip.VERTICAL