"""Sprite sheet metadata and texture cache, drawn with pygame."""

from __future__ import annotations

import enum
import functools
import json
import logging
import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

__all__ = ["Flip", "SpriteFrame", "SpriteData", "SpriteManager", "get_sprite_manager"]

logger = logging.getLogger(__name__)

DEFAULT_SPRITE_DATA_PATH = "assets/spriteData.json"
DEFAULT_TEXTURE_PATH = "assets/textures/"


class Flip(enum.IntFlag):
    NONE = 0
    HORIZONTAL = 1
    VERTICAL = 2


@dataclass(frozen=True)
class SpriteFrame:
    """A rectangle inside a texture."""

    x: int = 0
    y: int = 0
    w: int = 0
    h: int = 0


@dataclass
class SpriteData:
    """A named sprite: its texture and one or more frames."""

    texture_name: str = ""
    frames: list[SpriteFrame] = field(default_factory=list)

    def frame(self, index: int = 0) -> SpriteFrame:
        """Return a frame, the first one if out of range, or an empty one if none."""
        if not self.frames:
            return SpriteFrame()
        if not 0 <= index < len(self.frames):
            return self.frames[0]
        return self.frames[index]

    def frame_count(self) -> int:
        return len(self.frames)


def _coord(entry: Any, key: str) -> int:
    if not isinstance(entry, dict):
        raise ValueError(f"expected a frame object, got {entry!r}")
    value = entry.get(key, 0)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"expected a number for {key!r}, got {value!r}")
    return int(value)


def _frame(entry: Any) -> SpriteFrame:
    return SpriteFrame(*(_coord(entry, key) for key in ("x", "y", "w", "h")))


class SpriteManager:
    """Keeps sprite definitions and loaded textures and draws sprites."""

    def __init__(self) -> None:
        self.surface: pygame.Surface | None = None
        self.base_path: str = DEFAULT_TEXTURE_PATH
        self._sprites: dict[str, SpriteData] = {}
        self._textures: dict[str, pygame.Surface] = {}

    def init(
        self, surface: pygame.Surface | None, sprite_data_path: str | Path = DEFAULT_SPRITE_DATA_PATH
    ) -> None:
        """Set the drawing target and load sprite definitions."""
        self.surface = surface
        self.base_path = DEFAULT_TEXTURE_PATH
        if sprite_data_path:
            self.load_sprite_data(sprite_data_path)

    def load_sprite_data(self, filepath: str | Path) -> bool:
        """Load sprite definitions from a JSON file; False on any failure."""
        try:
            with open(filepath, encoding="utf-8") as handle:
                data = json.load(handle)
        except OSError:
            logger.error("could not open sprite data file: %s", filepath)
            return False
        except ValueError as exc:
            logger.error("sprite data JSON parsing error: %s", exc)
            return False
        try:
            loaded = self.load_sprite_dict(data)
        except ValueError as exc:
            logger.error("invalid sprite data in %s: %s", filepath, exc)
            return False
        if loaded:
            logger.info("loaded %d sprites from %s", len(self._sprites), filepath)
        return loaded

    def load_sprite_dict(self, data: Any) -> bool:
        """Add sprite definitions from a parsed mapping.

        Returns False if there is no "textures" field; raises ValueError on
        malformed entries.
        """
        if not isinstance(data, dict) or "textures" not in data:
            logger.error("no 'textures' field in sprite data")
            return False
        textures = data["textures"]
        if not isinstance(textures, dict):
            raise ValueError("'textures' must be an object")
        for texture_name, texture_data in textures.items():
            if not isinstance(texture_data, dict) or "sprites" not in texture_data:
                continue
            sprites = texture_data["sprites"]
            if not isinstance(sprites, dict):
                raise ValueError(f"'sprites' of {texture_name!r} must be an object")
            for sprite_name, info in sprites.items():
                frames = info.get("frames") if isinstance(info, dict) else None
                if isinstance(frames, list):
                    parsed = [_frame(entry) for entry in frames]
                else:
                    parsed = [_frame(info)]
                self._sprites[sprite_name] = SpriteData(texture_name, parsed)
        return True

    def sprite_data(self, sprite_name: str) -> SpriteData | None:
        return self._sprites.get(sprite_name)

    def texture(self, texture_name: str) -> pygame.Surface | None:
        """Return a texture, loading it from the base path on first use."""
        cached = self._textures.get(texture_name)
        if cached is not None:
            return cached
        path = os.path.join(self.base_path, texture_name)
        try:
            image = pygame.image.load(path)
        except (pygame.error, OSError) as exc:
            logger.error("failed to load image %s: %s", path, exc)
            return None
        if pygame.display.get_init() and pygame.display.get_surface() is not None:
            image = image.convert_alpha()
        self._textures[texture_name] = image
        logger.info("loaded texture %s", path)
        return image

    def render_sprite(
        self,
        sprite_name: str,
        frame: int,
        x: int,
        y: int,
        angle: float = 0.0,
        flip: Flip | int = Flip.NONE,
        alpha: int = 255,
    ) -> None:
        """Draw one frame of a sprite; the angle is in radians, clockwise."""
        if self.surface is None:
            logger.error("renderer not initialized")
            return
        data = self.sprite_data(sprite_name)
        if data is None:
            logger.error("sprite not found: %s", sprite_name)
            return
        texture = self.texture(data.texture_name)
        if texture is None:
            logger.error("texture not found: %s", data.texture_name)
            return

        rect = data.frame(frame)
        try:
            image = texture.subsurface(pygame.Rect(rect.x, rect.y, rect.w, rect.h)).copy()
        except ValueError as exc:
            logger.error("frame of %s outside its texture: %s", sprite_name, exc)
            return

        flip = Flip(flip)
        if flip:
            image = pygame.transform.flip(
                image, bool(flip & Flip.HORIZONTAL), bool(flip & Flip.VERTICAL)
            )
        destination: Any = (x, y)
        if angle:
            image = pygame.transform.rotate(image, -math.degrees(angle))
            destination = image.get_rect(center=(x + rect.w / 2, y + rect.h / 2))
        image.set_alpha(alpha)
        self.surface.blit(image, destination)

    def unload_texture(self, texture_name: str) -> None:
        if self._textures.pop(texture_name, None) is not None:
            logger.info("unloaded texture: %s", texture_name)

    def unload_all(self) -> None:
        """Forget all textures and sprite definitions."""
        self._textures.clear()
        self._sprites.clear()
        logger.info("all sprites and textures unloaded")

    def cleanup(self) -> None:
        self.unload_all()
        self.surface = None


@functools.lru_cache(maxsize=None)
def get_sprite_manager() -> SpriteManager:
    """Return the shared sprite manager."""
    return SpriteManager()