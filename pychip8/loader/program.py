"""Font set and raw program image loading."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pychip8.bus import FONT_ADDRESS, MEMORY_SIZE, PROGRAM_START, Memory
from pychip8.utils import debug_enabled, debug_log

MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START

# 4x5 glyphs for the hexadecimal digits 0-F, one byte per row.
FONT_SET = bytes(
    (
        0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
        0x20, 0x60, 0x20, 0x20, 0x70,  # 1
        0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
        0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
        0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
        0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
        0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
        0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
        0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
        0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
        0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
        0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
        0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
        0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
        0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
        0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
    )
)


class ProgramFormatError(ValueError):
    """Raised when a program image cannot be placed in memory."""


@dataclass(frozen=True)
class ProgramImage:
    """Raw program bytes together with a display name."""

    data: bytes
    name: str = ""

    def __post_init__(self) -> None:
        if not self.data:
            raise ProgramFormatError("program image is empty")
        if len(self.data) > MAX_PROGRAM_SIZE:
            raise ProgramFormatError(
                f"program image of {len(self.data)} bytes exceeds {MAX_PROGRAM_SIZE} bytes available at {PROGRAM_START:#05x}"
            )

    @property
    def end(self) -> int:
        return PROGRAM_START + len(self.data)


def load_font(memory: Memory) -> None:
    """Write the built-in font set at ``FONT_ADDRESS``."""

    memory.copy_block(FONT_ADDRESS, FONT_SET)


def load_program(memory: Memory, image: ProgramImage | bytes) -> ProgramImage:
    """Copy a raw program image verbatim to ``PROGRAM_START``."""

    if not isinstance(image, ProgramImage):
        image = ProgramImage(bytes(image))
    memory.copy_block(PROGRAM_START, image.data)
    if debug_enabled("loader"):
        debug_log("loader", "loaded %s %d bytes at %03x-%03x", image.name or "<image>", len(image.data), PROGRAM_START, image.end - 1)
    return image


def load_program_from_path(path: str | Path) -> ProgramImage:
    """Read a raw program image from ``path``."""

    file_path = Path(path)
    return ProgramImage(file_path.read_bytes(), name=file_path.stem)
