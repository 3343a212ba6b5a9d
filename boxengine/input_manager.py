"""Polls keyboard and game controllers and maps them onto game actions."""

from __future__ import annotations

import functools
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Collection, Mapping

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from boxengine.actions import GameAction  # noqa: E402
from boxengine.input_config import Axis, Button, InputConfig, Key, MappingType  # noqa: E402

__all__ = [
    "INPUT_SOURCE_KEYBOARD",
    "MAX_CONTROLLERS",
    "ControllerSnapshot",
    "InputManager",
    "apply_deadzone",
    "get_input_manager",
]

logger = logging.getLogger(__name__)

INPUT_SOURCE_KEYBOARD = -1
MAX_CONTROLLERS = 4
DEFAULT_CONFIG_PATH = "assets/input_config.json"
CONTROLLER_DB_PATH = "assets/gamecontrollerdb.txt"

_AXIS_MAX = 32767.0
_DPAD_ACTIONS = (
    (Button.DPAD_UP, GameAction.MOVE_UP),
    (Button.DPAD_DOWN, GameAction.MOVE_DOWN),
    (Button.DPAD_LEFT, GameAction.MOVE_LEFT),
    (Button.DPAD_RIGHT, GameAction.MOVE_RIGHT),
)


def _pygame_keycode(key: Key) -> int:
    name = key.name
    if name.startswith("DIGIT_"):
        attr = "K_" + name[-1]
    elif len(name) == 1:
        attr = "K_" + name.lower()
    else:
        attr = "K_" + name
    return getattr(pygame, attr)


_PYGAME_KEYS: dict[Key, int] = {key: _pygame_keycode(key) for key in Key}


@dataclass(frozen=True)
class ControllerSnapshot:
    """The state of one controller at a moment: pressed buttons and raw axis values."""

    buttons: Collection[Button] = frozenset()
    axes: Mapping[Axis, int] = field(default_factory=dict)


def apply_deadzone(value: float, deadzone: float) -> float:
    """Zero values inside the deadzone and rescale the rest to the full range."""
    if abs(value) < deadzone:
        return 0.0
    sign = 1.0 if value > 0 else -1.0
    return sign * ((abs(value) - deadzone) / (1.0 - deadzone))


def _pressed_keys() -> set[Key]:
    if not pygame.display.get_init():
        return set()
    state = pygame.key.get_pressed()
    return {key for key, code in _PYGAME_KEYS.items() if state[code]}


def _snapshot(handle: Any) -> ControllerSnapshot:
    return ControllerSnapshot(
        buttons=frozenset(b for b in Button if handle.get_button(int(b))),
        axes={a: handle.get_axis(int(a)) for a in Axis},
    )


class InputManager:
    """Holds per-source action values, refreshed once per frame."""

    def __init__(self) -> None:
        self.config = InputConfig()
        self._source_configs: dict[int, InputConfig] = {}
        self._states: list[list[float]] = self._empty_states()
        self._controllers: list[Any | None] = [None] * MAX_CONTROLLERS
        self._device_to_slot: dict[int, int] = {}
        self._backend: Any = None

    @staticmethod
    def _empty_states() -> list[list[float]]:
        return [[0.0] * len(GameAction) for _ in range(MAX_CONTROLLERS + 1)]

    def init(self, config_path: str | Path = DEFAULT_CONFIG_PATH) -> None:
        """Start the controller subsystem, load bindings and open controllers."""
        if Path(CONTROLLER_DB_PATH).is_file():
            os.environ.setdefault("SDL_GAMECONTROLLERCONFIG_FILE", CONTROLLER_DB_PATH)
        try:
            from pygame._sdl2 import controller as backend

            backend.init()
        except (ImportError, pygame.error) as exc:
            logger.error("failed to initialise the game controller subsystem: %s", exc)
            return
        self._backend = backend

        if not config_path or not self.config.load_from_file(config_path):
            logger.info("using default input configuration")

        count = backend.get_count()
        logger.info("found %d joystick(s)", count)
        for index in range(min(count, MAX_CONTROLLERS)):
            if backend.is_controller(index):
                self._open_controller(index)
        logger.info("input manager initialised")

    def _open_controller(self, index: int) -> None:
        if not 0 <= index < MAX_CONTROLLERS or self._backend is None:
            return
        try:
            handle = self._backend.Controller(index)
        except pygame.error as exc:
            logger.error("could not open controller %d: %s", index, exc)
            return
        self._controllers[index] = handle
        logger.info("opened controller %d: %s", index, getattr(handle, "name", None) or "Unknown")

    def _close_controller(self, slot: int) -> None:
        handle = self._controllers[slot]
        if handle is None:
            return
        handle.quit()
        self._controllers[slot] = None

    def cleanup(self) -> None:
        """Close every controller and stop the controller subsystem."""
        for slot in range(MAX_CONTROLLERS):
            self._close_controller(slot)
        self._device_to_slot.clear()
        if self._backend is not None:
            self._backend.quit()
            self._backend = None

    def update(self) -> None:
        """Poll the keyboard and all attached controllers."""
        snapshots = {
            slot: _snapshot(handle)
            for slot, handle in enumerate(self._controllers)
            if handle is not None and handle.attached()
        }
        self.update_from(_pressed_keys(), snapshots)

    def update_from(
        self, pressed_keys: Collection[Key], controllers: Mapping[int, ControllerSnapshot]
    ) -> None:
        """Recompute all action values from given keyboard and controller states."""
        self._states = self._empty_states()
        self._update_keyboard(pressed_keys)
        for slot, snapshot in controllers.items():
            if 0 <= slot < MAX_CONTROLLERS:
                self._update_controller(slot, snapshot)

    def _update_keyboard(self, pressed: Collection[Key]) -> None:
        row = self._states[INPUT_SOURCE_KEYBOARD + 1]
        config = self.config_for_source(INPUT_SOURCE_KEYBOARD)
        for action in GameAction:
            if any(key in pressed for key in config.keyboard_mapping(action).keys):
                row[action] = 1.0

    def _update_controller(self, slot: int, snapshot: ControllerSnapshot) -> None:
        row = self._states[slot + 1]
        config = self.config_for_source(slot)
        for action in GameAction:
            mapping = config.controller_mapping(action)
            if mapping.type is MappingType.BUTTON:
                if any(b in snapshot.buttons for b in mapping.button_mapping.buttons):
                    row[action] = 1.0
                continue
            axis = mapping.axis_mapping
            value = apply_deadzone(snapshot.axes.get(axis.axis, 0) / _AXIS_MAX, config.deadzone)
            if axis.full_range:
                row[action] = max(0.0, value)
            elif axis.positive:
                if value > 0.0:
                    row[action] = value
            elif value < 0.0:
                row[action] = abs(value)

        if config.dpad_as_axis:
            for button, action in _DPAD_ACTIONS:
                if button in snapshot.buttons:
                    row[action] = 1.0

    def input_value(self, source: int, action: GameAction | int) -> float:
        """Return the value (0.0 to 1.0) of an action on a source, 0.0 if invalid."""
        index = source + 1
        if not 0 <= index < len(self._states):
            return 0.0
        try:
            action = GameAction(action)
        except ValueError:
            return 0.0
        return self._states[index][action]

    def is_source_active(self, source: int) -> bool:
        """Return True for the keyboard and for attached controllers."""
        if source == INPUT_SOURCE_KEYBOARD:
            return True
        if not 0 <= source < MAX_CONTROLLERS:
            return False
        handle = self._controllers[source]
        return handle is not None and bool(handle.attached())

    def num_controllers(self) -> int:
        """Return how many controllers are attached."""
        return sum(1 for slot in range(MAX_CONTROLLERS) if self.is_source_active(slot))

    def config_for_source(self, source: int) -> InputConfig:
        """Return the configuration used by a source, falling back to the default."""
        return self._source_configs.get(source) or self.config

    def set_config_for_source(self, source: int, config: InputConfig) -> None:
        self._source_configs[source] = config
        logger.info("set custom configuration for input source %d", source)

    def load_config_for_source(self, source: int, config_path: str | Path) -> bool:
        """Load a configuration file for one source; keep the old one on failure."""
        config = InputConfig()
        if not config.load_from_file(config_path):
            logger.error("failed to load configuration for input source %d", source)
            return False
        self._source_configs[source] = config
        logger.info("loaded configuration for input source %d from %s", source, config_path)
        return True

    def reload_config(self, config_path: str | Path = DEFAULT_CONFIG_PATH) -> bool:
        """Reload the default configuration from a file."""
        return self.config.load_from_file(config_path)

    def controller_added(self, device_index: int) -> None:
        """Open a newly connected controller in the first free slot."""
        backend = self._backend
        if backend is not None:
            for slot, handle in enumerate(self._controllers):
                if handle is not None or not backend.is_controller(device_index):
                    continue
                try:
                    handle = backend.Controller(device_index)
                except pygame.error:
                    continue
                self._controllers[slot] = handle
                self._device_to_slot[device_index] = slot
                logger.info(
                    "controller connected in slot %d: %s",
                    slot,
                    getattr(handle, "name", None) or "Unknown",
                )
                return
        logger.info("no available slot for new controller (max %d)", MAX_CONTROLLERS)

    def controller_removed(self, instance_id: int) -> None:
        """Close the controller whose joystick has the given instance id."""
        for slot, handle in enumerate(self._controllers):
            if handle is None or handle.as_joystick().get_instance_id() != instance_id:
                continue
            self._close_controller(slot)
            for device, mapped in list(self._device_to_slot.items()):
                if mapped == slot:
                    del self._device_to_slot[device]
                    break
            logger.info("controller disconnected from slot %d", slot)
            return


@functools.lru_cache(maxsize=None)
def get_input_manager() -> InputManager:
    """Return the shared input manager."""
    return InputManager()