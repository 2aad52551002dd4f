"""Memory bus for the CHIP-8 core."""

from .memory import (
    FONT_ADDRESS,
    FONT_GLYPH_SIZE,
    MEMORY_SIZE,
    PROGRAM_START,
    AddressOutOfRangeError,
    Memory,
    MemoryError,
    MemorySnapshot,
)

__all__ = [
    "FONT_ADDRESS",
    "FONT_GLYPH_SIZE",
    "MEMORY_SIZE",
    "PROGRAM_START",
    "AddressOutOfRangeError",
    "Memory",
    "MemoryError",
    "MemorySnapshot",
]
