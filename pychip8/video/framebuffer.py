"""Display collaborator and an in-memory 64x32 frame buffer."""

from __future__ import annotations

from typing import Sequence

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32
SPRITE_WIDTH = 8


class Display:
    """Interface for the display consumed by the execution engine."""

    def clear(self) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def draw_sprite(self, x: int, y: int, sprite: bytes) -> bool:  # pragma: no cover - interface
        """XOR ``sprite`` onto the screen and report whether a lit pixel was erased."""

        raise NotImplementedError


class FrameBuffer(Display):
    """Monochrome frame buffer with XOR sprite compositing.

    The sprite origin wraps around the screen; rows and columns that run past
    the right or bottom edge are clipped.
    """

    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("frame buffer dimensions must be positive")
        self.width = width
        self.height = height
        self._pixels = bytearray(width * height)
        self.dirty = False

    def clear(self) -> None:
        self._pixels[:] = bytes(len(self._pixels))
        self.dirty = True

    def draw_sprite(self, x: int, y: int, sprite: bytes) -> bool:
        origin_x = x % self.width
        origin_y = y % self.height
        collided = False
        for row, bits in enumerate(sprite):
            py = origin_y + row
            if py >= self.height:
                break
            for column in range(SPRITE_WIDTH):
                if not bits & (0x80 >> column):
                    continue
                px = origin_x + column
                if px >= self.width:
                    break
                index = py * self.width + px
                if self._pixels[index]:
                    collided = True
                self._pixels[index] ^= 1
        self.dirty = True
        return collided

    def is_set(self, x: int, y: int) -> bool:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} screen")
        return self._pixels[y * self.width + x] != 0

    def pixels(self) -> Sequence[int]:
        return bytes(self._pixels)

    def render_text(self, on: str = "#", off: str = ".") -> str:
        lines = []
        for y in range(self.height):
            row = self._pixels[y * self.width : (y + 1) * self.width]
            lines.append("".join(on if value else off for value in row))
        return "\n".join(lines)
