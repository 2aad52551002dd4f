"""Input and random-number collaborators."""

from __future__ import annotations

from .keypad import KEY_COUNT, QWERTY_LAYOUT, KeyInput, Keypad
from .rng import RandomSource, SystemRandomSource

__all__ = [
    "KEY_COUNT",
    "QWERTY_LAYOUT",
    "KeyInput",
    "Keypad",
    "RandomSource",
    "SystemRandomSource",
]
