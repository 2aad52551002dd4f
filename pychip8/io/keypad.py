"""CHIP-8 hexadecimal keypad handling."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Mapping

from pychip8.utils import debug_enabled, debug_log

KEY_COUNT = 16

# Conventional mapping of the COSMAC VIP keypad onto a QWERTY keyboard:
#   1 2 3 C      1 2 3 4
#   4 5 6 D  ->  q w e r
#   7 8 9 E      a s d f
#   A 0 B F      z x c v
QWERTY_LAYOUT: Mapping[str, int] = {
    "1": 0x1,
    "2": 0x2,
    "3": 0x3,
    "4": 0xC,
    "q": 0x4,
    "w": 0x5,
    "e": 0x6,
    "r": 0xD,
    "a": 0x7,
    "s": 0x8,
    "d": 0x9,
    "f": 0xE,
    "z": 0xA,
    "x": 0x0,
    "c": 0xB,
    "v": 0xF,
}

KeyListener = Callable[[int, bool], None]


class KeyInput:
    """Interface for the keypad consumed by the execution engine."""

    def is_key_down(self, key: int) -> bool:  # pragma: no cover - interface
        raise NotImplementedError

    def add_listener(self, listener: KeyListener) -> None:  # pragma: no cover - interface
        raise NotImplementedError


@dataclass
class Keypad(KeyInput):
    """Sixteen-key keypad with counted presses and change listeners."""

    _active: Dict[int, int] = field(default_factory=dict)
    _listeners: list[KeyListener] = field(default_factory=list)

    def press(self, key: int) -> None:
        key = self._check(key)
        count = self._active.get(key, 0)
        self._active[key] = count + 1
        if debug_enabled("input"):
            debug_log("input", "press key=%X count=%d", key, count + 1)
        if count == 0:
            self._notify_listeners(key, True)

    def release(self, key: int) -> None:
        key = self._check(key)
        count = self._active.get(key, 0)
        if count == 0:
            return
        if count == 1:
            self._active.pop(key)
        else:
            self._active[key] = count - 1
        if debug_enabled("input"):
            debug_log("input", "release key=%X count=%d", key, count - 1)
        if count == 1:
            self._notify_listeners(key, False)

    def press_name(self, name: str) -> None:
        key = QWERTY_LAYOUT.get(name.lower())
        if key is None:
            if debug_enabled("input"):
                debug_log("input", "unmapped_press=%s", name)
            return
        self.press(key)

    def release_name(self, name: str) -> None:
        key = QWERTY_LAYOUT.get(name.lower())
        if key is None:
            return
        self.release(key)

    def is_key_down(self, key: int) -> bool:
        return self._active.get(self._check(key), 0) > 0

    def reset(self) -> None:
        self._active.clear()

    def snapshot(self) -> tuple[bool, ...]:
        return tuple(key in self._active for key in range(KEY_COUNT))

    def add_listener(self, listener: KeyListener) -> None:
        self._listeners.append(listener)

    def _check(self, key: int) -> int:
        if not 0 <= key < KEY_COUNT:
            raise ValueError(f"key {key:#x} outside keypad range 0x0-0xF")
        return key

    def _notify_listeners(self, key: int, pressed: bool) -> None:
        for listener in tuple(self._listeners):
            listener(key, pressed)
