"""Display helpers for the CHIP-8 core."""

from __future__ import annotations

from .framebuffer import SCREEN_HEIGHT, SCREEN_WIDTH, Display, FrameBuffer

__all__ = [
    "Display",
    "FrameBuffer",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
]
