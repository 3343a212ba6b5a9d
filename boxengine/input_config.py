"""Keyboard and controller bindings for game actions, stored as JSON."""

from __future__ import annotations

import enum
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

from boxengine.actions import GameAction, action_to_string

__all__ = [
    "Key",
    "Button",
    "Axis",
    "MappingType",
    "KeyboardMapping",
    "ControllerButtonMapping",
    "ControllerAxisMapping",
    "ControllerMapping",
    "InputConfig",
    "key_from_name",
    "key_name",
    "button_from_name",
    "button_name",
    "axis_from_name",
    "axis_name",
]

logger = logging.getLogger(__name__)

DEFAULT_DEADZONE = 0.15


class Key(enum.IntEnum):
    """Keyboard scancodes understood by the configuration."""

    A = 4
    B = 5
    C = 6
    D = 7
    E = 8
    F = 9
    G = 10
    H = 11
    I = 12  # noqa: E741
    J = 13
    K = 14
    L = 15
    M = 16
    N = 17
    O = 18  # noqa: E741
    P = 19
    Q = 20
    R = 21
    S = 22
    T = 23
    U = 24
    V = 25
    W = 26
    X = 27
    Y = 28
    Z = 29
    DIGIT_1 = 30
    DIGIT_2 = 31
    DIGIT_3 = 32
    DIGIT_4 = 33
    DIGIT_5 = 34
    DIGIT_6 = 35
    DIGIT_7 = 36
    DIGIT_8 = 37
    DIGIT_9 = 38
    DIGIT_0 = 39
    RETURN = 40
    ESCAPE = 41
    BACKSPACE = 42
    TAB = 43
    SPACE = 44
    RIGHT = 79
    LEFT = 80
    DOWN = 81
    UP = 82
    LCTRL = 224
    LSHIFT = 225
    LALT = 226
    RCTRL = 228
    RSHIFT = 229
    RALT = 230


class Button(enum.IntEnum):
    """Game controller buttons."""

    A = 0
    B = 1
    X = 2
    Y = 3
    BACK = 4
    GUIDE = 5
    START = 6
    LEFT_STICK = 7
    RIGHT_STICK = 8
    LEFT_SHOULDER = 9
    RIGHT_SHOULDER = 10
    DPAD_UP = 11
    DPAD_DOWN = 12
    DPAD_LEFT = 13
    DPAD_RIGHT = 14


class Axis(enum.IntEnum):
    """Game controller analog axes."""

    LEFT_X = 0
    LEFT_Y = 1
    RIGHT_X = 2
    RIGHT_Y = 3
    TRIGGER_LEFT = 4
    TRIGGER_RIGHT = 5


class MappingType(enum.Enum):
    BUTTON = "button"
    AXIS = "axis"


_KEYS_BY_NAME: dict[str, Key] = {
    "W": Key.W, "A": Key.A, "S": Key.S, "D": Key.D, "E": Key.E, "Q": Key.Q,
    "F": Key.F, "R": Key.R,
    "Space": Key.SPACE, "LShift": Key.LSHIFT, "RShift": Key.RSHIFT,
    "LCtrl": Key.LCTRL, "RCtrl": Key.RCTRL, "LAlt": Key.LALT, "RAlt": Key.RALT,
    "Up": Key.UP, "Down": Key.DOWN, "Left": Key.LEFT, "Right": Key.RIGHT,
    "0": Key.DIGIT_0, "1": Key.DIGIT_1, "2": Key.DIGIT_2, "3": Key.DIGIT_3,
    "4": Key.DIGIT_4, "5": Key.DIGIT_5, "6": Key.DIGIT_6, "7": Key.DIGIT_7,
    "8": Key.DIGIT_8, "9": Key.DIGIT_9,
    "B": Key.B, "C": Key.C, "G": Key.G, "H": Key.H, "I": Key.I, "J": Key.J,
    "K": Key.K, "L": Key.L, "M": Key.M, "N": Key.N, "O": Key.O, "P": Key.P,
    "T": Key.T, "U": Key.U, "V": Key.V, "X": Key.X, "Y": Key.Y, "Z": Key.Z,
    "Tab": Key.TAB, "Enter": Key.RETURN, "Escape": Key.ESCAPE,
    "Backspace": Key.BACKSPACE,
}

# Only these keys are written back by name; any other key saves as "Unknown".
_KEY_LABELS: dict[Key, str] = {
    Key.W: "W", Key.A: "A", Key.S: "S", Key.D: "D", Key.E: "E", Key.Q: "Q",
    Key.F: "F", Key.R: "R", Key.SPACE: "Space", Key.LSHIFT: "LShift",
    Key.RSHIFT: "RShift", Key.LCTRL: "LCtrl", Key.RCTRL: "RCtrl",
    Key.UP: "Up", Key.DOWN: "Down", Key.LEFT: "Left", Key.RIGHT: "Right",
}

_BUTTONS_BY_NAME: dict[str, Button] = {
    "A": Button.A, "B": Button.B, "X": Button.X, "Y": Button.Y,
    "Back": Button.BACK, "Guide": Button.GUIDE, "Start": Button.START,
    "LeftStick": Button.LEFT_STICK, "RightStick": Button.RIGHT_STICK,
    "LeftShoulder": Button.LEFT_SHOULDER, "RightShoulder": Button.RIGHT_SHOULDER,
    "DPadUp": Button.DPAD_UP, "DPadDown": Button.DPAD_DOWN,
    "DPadLeft": Button.DPAD_LEFT, "DPadRight": Button.DPAD_RIGHT,
}
_BUTTON_LABELS: dict[Button, str] = {b: n for n, b in _BUTTONS_BY_NAME.items()}

_AXES_BY_NAME: dict[str, Axis] = {
    "LeftX": Axis.LEFT_X, "LeftY": Axis.LEFT_Y,
    "RightX": Axis.RIGHT_X, "RightY": Axis.RIGHT_Y,
    "TriggerLeft": Axis.TRIGGER_LEFT, "TriggerRight": Axis.TRIGGER_RIGHT,
}
_AXIS_LABELS: dict[Axis, str] = {a: n for n, a in _AXES_BY_NAME.items()}


def key_from_name(name: str) -> Key | None:
    """Return the key with a configuration name, or None if unknown."""
    return _KEYS_BY_NAME.get(name)


def key_name(key: Key) -> str:
    """Return the configuration name written for a key."""
    return _KEY_LABELS.get(key, "Unknown")


def button_from_name(name: str) -> Button | None:
    """Return the controller button with a configuration name, or None."""
    return _BUTTONS_BY_NAME.get(name)


def button_name(button: Button) -> str:
    """Return the configuration name of a controller button."""
    return _BUTTON_LABELS.get(button, "Unknown")


def axis_from_name(name: str) -> Axis | None:
    """Return the controller axis with a configuration name, or None."""
    return _AXES_BY_NAME.get(name)


def axis_name(axis: Axis) -> str:
    """Return the configuration name of a controller axis."""
    return _AXIS_LABELS.get(axis, "Unknown")


@dataclass
class KeyboardMapping:
    keys: list[Key] = field(default_factory=list)


@dataclass
class ControllerButtonMapping:
    buttons: list[Button] = field(default_factory=list)


@dataclass
class ControllerAxisMapping:
    axis: Axis = Axis.LEFT_X
    positive: bool = False
    full_range: bool = False


@dataclass
class ControllerMapping:
    """A controller binding: either a set of buttons or one axis direction."""

    type: MappingType = MappingType.BUTTON
    button_mapping: ControllerButtonMapping = field(default_factory=ControllerButtonMapping)
    axis_mapping: ControllerAxisMapping = field(default_factory=ControllerAxisMapping)


def _as_str(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f"expected a string, got {value!r}")
    return value


def _as_float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"expected a number, got {value!r}")
    return float(value)


def _as_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"expected a boolean, got {value!r}")
    return value


def _names(value: Any) -> list[str]:
    if isinstance(value, list):
        return [_as_str(item) for item in value]
    if isinstance(value, str):
        return [value]
    return []


class InputConfig:
    """Bindings from keys, buttons and axes to game actions, plus settings."""

    def __init__(self) -> None:
        self._keyboard: dict[GameAction, KeyboardMapping] = {}
        self._controller: dict[GameAction, ControllerMapping] = {}
        self.deadzone: float = DEFAULT_DEADZONE
        self.dpad_as_axis: bool = True
        self.load_defaults()

    def load_defaults(self) -> None:
        """Install the built-in bindings and settings."""
        self.set_keyboard_mapping(GameAction.MOVE_UP, [Key.W, Key.UP])
        self.set_keyboard_mapping(GameAction.MOVE_DOWN, [Key.S, Key.DOWN])
        self.set_keyboard_mapping(GameAction.MOVE_LEFT, [Key.A, Key.LEFT])
        self.set_keyboard_mapping(GameAction.MOVE_RIGHT, [Key.D, Key.RIGHT])
        self.set_keyboard_mapping(GameAction.ACTION_WALK, [Key.LSHIFT, Key.RSHIFT])
        self.set_keyboard_mapping(GameAction.ACTION_INTERACT, [Key.SPACE, Key.E])
        self.set_keyboard_mapping(GameAction.ACTION_THROW, [Key.F, Key.Q])

        self.set_controller_axis_mapping(GameAction.MOVE_UP, Axis.LEFT_Y, False)
        self.set_controller_axis_mapping(GameAction.MOVE_DOWN, Axis.LEFT_Y, True)
        self.set_controller_axis_mapping(GameAction.MOVE_LEFT, Axis.LEFT_X, False)
        self.set_controller_axis_mapping(GameAction.MOVE_RIGHT, Axis.LEFT_X, True)
        self.set_controller_axis_mapping(GameAction.ACTION_WALK, Axis.TRIGGER_LEFT, True, True)
        self.set_controller_button_mapping(GameAction.ACTION_INTERACT, [Button.A])
        self.set_controller_button_mapping(GameAction.ACTION_THROW, [Button.X, Button.B])

        self.deadzone = DEFAULT_DEADZONE
        self.dpad_as_axis = True

    def keyboard_mapping(self, action: GameAction) -> KeyboardMapping:
        """Return the keys bound to an action (empty if none)."""
        return self._keyboard.get(action, KeyboardMapping())

    def controller_mapping(self, action: GameAction) -> ControllerMapping:
        """Return the controller binding of an action (empty buttons if none)."""
        return self._controller.get(action, ControllerMapping())

    def set_keyboard_mapping(self, action: GameAction, keys: Iterable[Key]) -> None:
        self._keyboard[action] = KeyboardMapping(list(keys))

    def set_controller_button_mapping(self, action: GameAction, buttons: Iterable[Button]) -> None:
        self._controller[action] = ControllerMapping(
            type=MappingType.BUTTON,
            button_mapping=ControllerButtonMapping(list(buttons)),
        )

    def set_controller_axis_mapping(
        self, action: GameAction, axis: Axis, positive: bool, full_range: bool = False
    ) -> None:
        self._controller[action] = ControllerMapping(
            type=MappingType.AXIS,
            axis_mapping=ControllerAxisMapping(axis, positive, full_range),
        )

    def load_from_file(self, filename: str | Path) -> bool:
        """Read bindings from a JSON file.

        Returns False, with the defaults restored, if the file cannot be
        opened or does not hold a valid configuration.
        """
        try:
            with open(filename, encoding="utf-8") as handle:
                data = json.load(handle)
        except OSError:
            logger.warning("could not open input config file %s; using defaults", filename)
            self.load_defaults()
            return False
        except ValueError as exc:
            logger.error("error parsing input config: %s; using defaults", exc)
            self.load_defaults()
            return False

        try:
            self.update_from_dict(data)
        except ValueError as exc:
            logger.error("error parsing input config: %s; using defaults", exc)
            self.load_defaults()
            return False

        logger.info("input configuration loaded from %s", filename)
        return True

    def save_to_file(self, filename: str | Path) -> None:
        """Write the configuration to a JSON file with two-space indent."""
        with open(filename, "w", encoding="utf-8") as handle:
            handle.write(json.dumps(self.to_dict(), indent=2, sort_keys=True))
        logger.info("input configuration saved to %s", filename)

    def to_dict(self) -> dict[str, Any]:
        """Return the configuration in its JSON form."""
        keyboard: dict[str, Any] = {}
        controller: dict[str, Any] = {}
        for action in GameAction:
            name = action_to_string(action)
            if action in self._keyboard:
                keyboard[name] = [key_name(k) for k in self._keyboard[action].keys]
            if action in self._controller:
                controller[name] = self._controller_entry(self._controller[action])
        return {
            "keyboard": keyboard,
            "controller": controller,
            "settings": {"deadzone": self.deadzone, "dpad_as_axis": self.dpad_as_axis},
        }

    @staticmethod
    def _controller_entry(mapping: ControllerMapping) -> dict[str, Any]:
        if mapping.type is MappingType.BUTTON:
            return {
                "type": "button",
                "buttons": [button_name(b) for b in mapping.button_mapping.buttons],
            }
        axis = mapping.axis_mapping
        entry: dict[str, Any] = {
            "type": "axis",
            "axis": axis_name(axis.axis),
            "direction": "positive" if axis.positive else "negative",
        }
        if axis.full_range:
            entry["range"] = "full"
        return entry

    def update_from_dict(self, data: Any) -> None:
        """Apply the sections present in a configuration mapping.

        Raises ValueError if a value has the wrong JSON type.
        """
        if not isinstance(data, dict):
            return
        if "keyboard" in data:
            self._parse_keyboard(data["keyboard"])
        if "controller" in data:
            self._parse_controller(data["controller"])
        if "settings" in data:
            self._parse_settings(data["settings"])

    def _parse_keyboard(self, section: Any) -> None:
        if not isinstance(section, dict):
            return
        for action in GameAction:
            name = action_to_string(action)
            if name not in section:
                continue
            keys = [k for k in map(key_from_name, _names(section[name])) if k is not None]
            if keys:
                self.set_keyboard_mapping(action, keys)

    def _parse_controller(self, section: Any) -> None:
        if not isinstance(section, dict):
            return
        for action in GameAction:
            mapping = section.get(action_to_string(action))
            if not isinstance(mapping, dict) or "type" not in mapping:
                continue
            kind = _as_str(mapping["type"])
            if kind == "button" and "buttons" in mapping:
                buttons = [
                    b for b in map(button_from_name, _names(mapping["buttons"])) if b is not None
                ]
                if buttons:
                    self.set_controller_button_mapping(action, buttons)
            elif kind == "axis" and "axis" in mapping:
                axis = axis_from_name(_as_str(mapping["axis"]))
                positive = True
                full_range = False
                if "direction" in mapping:
                    positive = _as_str(mapping["direction"]) == "positive"
                if "range" in mapping:
                    full_range = _as_str(mapping["range"]) == "full"
                if axis is not None:
                    self.set_controller_axis_mapping(action, axis, positive, full_range)

    def _parse_settings(self, section: Any) -> None:
        if not isinstance(section, dict):
            return
        if "deadzone" in section:
            self.deadzone = _as_float(section["deadzone"])
        if "dpad_as_axis" in section:
            self.dpad_as_axis = _as_bool(section["dpad_as_axis"])