"""The main loop: window, events, per-frame update and drawing of game objects."""

from __future__ import annotations

import argparse
import json
import logging
import os
from pathlib import Path
from typing import Any

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from boxengine.game_object import GameObject, set_engine  # noqa: E402
from boxengine.input_manager import get_input_manager  # noqa: E402
from boxengine.sprite_manager import DEFAULT_SPRITE_DATA_PATH, get_sprite_manager  # noqa: E402

__all__ = ["Engine", "main"]

logger = logging.getLogger(__name__)

DEFAULT_LEVEL_PATH = "assets/level1.json"
WINDOW_TITLE = "Engine"
_BACKGROUND = (0, 0, 0)


class Engine:
    """Owns the window and the game objects and drives them frame by frame."""

    screen_width: int = 800
    screen_height: int = 600
    target_fps: int = 60

    def __init__(self) -> None:
        self.running = True
        self.objects: list[GameObject] = []
        self.surface: pygame.Surface | None = None
        self._display_started = False

    def __enter__(self) -> Engine:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.cleanup()

    @classmethod
    def delta_time(cls) -> float:
        """The fixed time step of one frame, in seconds."""
        return 1.0 / cls.target_fps

    def init(self) -> None:
        """Open the window and start the sprite and input managers.

        Raises RuntimeError if the video system or window cannot be created.
        """
        try:
            pygame.display.init()
            self._display_started = True
            self.surface = pygame.display.set_mode((self.screen_width, self.screen_height))
        except pygame.error as exc:
            self.running = False
            raise RuntimeError(f"could not initialise video: {exc}") from exc
        pygame.display.set_caption(WINDOW_TITLE)

        get_sprite_manager().init(self.surface, DEFAULT_SPRITE_DATA_PATH)
        get_input_manager().init()
        logger.info("video initialised")

    def run(self) -> None:
        """Run frames at the target rate until the engine stops running."""
        logger.info("engine running")
        delta_time = self.delta_time()
        frame_ms = 1000 // self.target_fps
        while self.running:
            start = pygame.time.get_ticks()
            self.process_events()
            self.update(delta_time)
            if self.surface is not None:
                self.surface.fill(_BACKGROUND)
            self.render()
            if self.surface is not None:
                pygame.display.flip()
            elapsed = pygame.time.get_ticks() - start
            if elapsed < frame_ms:
                pygame.time.delay(frame_ms - elapsed)

    def process_events(self) -> None:
        """Handle quit and controller hot-plug events, then poll input."""
        manager = get_input_manager()
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.CONTROLLERDEVICEADDED:
                manager.controller_added(event.device_index)
            elif event.type == pygame.CONTROLLERDEVICEREMOVED:
                manager.controller_removed(event.instance_id)

        if pygame.key.get_pressed()[pygame.K_ESCAPE]:
            self.running = False

        manager.update()

    def update(self, delta_time: float) -> None:
        for obj in self.objects:
            obj.update(delta_time)

    def render(self) -> None:
        for obj in self.objects:
            obj.render(self.surface)

    def cleanup(self) -> None:
        """Release input, sprites and the window; safe to call more than once."""
        get_input_manager().cleanup()
        get_sprite_manager().cleanup()
        if self._display_started:
            pygame.display.quit()
            self._display_started = False
        self.surface = None

    def load_file(self, filename: str | Path) -> None:
        """Replace the game objects with those in a level file.

        Raises OSError if the file cannot be read and ValueError if it is not
        valid JSON or has no "objects" array; in the latter case the engine
        is left without objects.
        """
        with open(filename, encoding="utf-8") as handle:
            data = json.load(handle)
        logger.info("JSON file parsed successfully")

        self.objects.clear()
        set_engine(self)

        entries = data.get("objects") if isinstance(data, dict) else None
        if not isinstance(entries, list):
            raise ValueError(f"{filename} must contain an 'objects' array")

        for entry in entries:
            obj = GameObject()
            obj.from_dict(entry)
            self.objects.append(obj)
        logger.info("loaded %d objects from %s", len(self.objects), filename)


def main(argv: list[str] | None = None) -> int:
    """Open the window, load a level and run it until the player quits."""
    parser = argparse.ArgumentParser(description="Run a level in the engine.")
    parser.add_argument("level", nargs="?", default=DEFAULT_LEVEL_PATH, help="level JSON file")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=== Engine Start ===")
    print("Controls: WASD/Arrows to move, Shift to walk, Space/E to interact")

    with Engine() as engine:
        try:
            engine.init()
        except RuntimeError as exc:
            logger.error("%s", exc)
            return 1

        print(f"Connected controllers: {get_input_manager().num_controllers()}")

        try:
            engine.load_file(args.level)
        except (OSError, ValueError) as exc:
            logger.error("could not load level %s: %s", args.level, exc)

        print("Level loaded! Center object is controllable with keyboard/controller.")
        print("Press ESC to quit")
        engine.run()

    print("Engine finished")
    return 0