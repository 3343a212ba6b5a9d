"""Component-based 2D game engine on pygame with JSON levels and configurable input."""

__version__ = "0.1.0"