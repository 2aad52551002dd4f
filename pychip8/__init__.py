"""CHIP-8 instruction set emulator core.

The package hosts the memory bus, the opcode decoder and execution engine,
the machine/cycle driver, and small reference implementations of the
display, keypad, random source, loader and timer collaborators.
"""

from __future__ import annotations

from . import bus, cpu, io, loader, system, utils, video

__all__: list[str] = [
    "bus",
    "cpu",
    "io",
    "loader",
    "system",
    "utils",
    "video",
]
