"""Saving and loading game objects as JSON files and strings."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from boxengine.game_object import GameObject

__all__ = [
    "save_object",
    "load_object",
    "save_objects",
    "load_objects",
    "object_to_string",
    "object_from_string",
]

_FILE_INDENT = 4


def _write(data: object, filename: str | Path) -> None:
    with open(filename, "w", encoding="utf-8") as handle:
        handle.write(json.dumps(data, indent=_FILE_INDENT, sort_keys=True))


def _read(filename: str | Path) -> object:
    with open(filename, encoding="utf-8") as handle:
        return json.load(handle)


def save_object(obj: GameObject, filename: str | Path) -> None:
    """Write one object to a JSON file; raises OSError if it cannot be written."""
    _write(obj.to_dict(), filename)


def load_object(obj: GameObject, filename: str | Path) -> None:
    """Replace an object's components with those in a JSON file.

    Raises OSError if the file cannot be read and ValueError if it is not
    valid JSON.
    """
    obj.from_dict(_read(filename))


def save_objects(objects: Iterable[GameObject | None], filename: str | Path) -> None:
    """Write objects to a JSON file as an array, skipping None entries."""
    _write([obj.to_dict() for obj in objects if obj is not None], filename)


def load_objects(filename: str | Path) -> list[GameObject]:
    """Read a JSON array of objects from a file.

    Raises OSError if the file cannot be read and ValueError if it is not
    a JSON array.
    """
    data = _read(filename)
    if not isinstance(data, list):
        raise ValueError(f"{filename} does not hold a JSON array of objects")
    objects = []
    for entry in data:
        obj = GameObject()
        obj.from_dict(entry)
        objects.append(obj)
    return objects


def object_to_string(obj: GameObject, indent: int | None = None) -> str:
    """Return an object's JSON form; compact when indent is None or negative."""
    if indent is None or indent < 0:
        return json.dumps(obj.to_dict(), separators=(",", ":"), sort_keys=True)
    return json.dumps(obj.to_dict(), indent=indent, sort_keys=True)


def object_from_string(obj: GameObject, text: str) -> None:
    """Load an object from a JSON string; raises ValueError if it is not JSON."""
    obj.from_dict(json.loads(text))