"""Loaders for the CHIP-8 font set and program images."""

from __future__ import annotations

from .program import (
    FONT_SET,
    MAX_PROGRAM_SIZE,
    ProgramFormatError,
    ProgramImage,
    load_font,
    load_program,
    load_program_from_path,
)

__all__ = [
    "FONT_SET",
    "MAX_PROGRAM_SIZE",
    "ProgramFormatError",
    "ProgramImage",
    "load_font",
    "load_program",
    "load_program_from_path",
]
