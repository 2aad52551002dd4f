"""Tests for font and raw program loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from pychip8.bus import Memory
from pychip8.loader import (
    FONT_SET,
    MAX_PROGRAM_SIZE,
    ProgramFormatError,
    ProgramImage,
    load_font,
    load_program,
    load_program_from_path,
)


def test_font_set_has_sixteen_glyphs() -> None:
    assert len(FONT_SET) == 16 * 5
    assert FONT_SET[:5] == b"\xF0\x90\x90\x90\xF0"


def test_load_font_writes_at_font_address() -> None:
    memory = Memory()

    load_font(memory)

    assert memory.read_range(0x050, 0x0A0) == FONT_SET
    assert memory.read(0x04F) == 0
    assert memory.read(0x0A0) == 0


def test_load_program_copies_bytes_verbatim() -> None:
    memory = Memory()

    image = load_program(memory, b"\x60\x05\x00\xE0")

    assert memory.read_range(0x200, 0x204) == b"\x60\x05\x00\xE0"
    assert image.end == 0x204


def test_program_filling_all_of_ram_fits() -> None:
    memory = Memory()

    load_program(memory, bytes([0xAB]) * MAX_PROGRAM_SIZE)

    assert memory.read(0xFFF) == 0xAB


@pytest.mark.parametrize("data", [b"", bytes(MAX_PROGRAM_SIZE + 1)])
def test_program_image_size_is_validated(data: bytes) -> None:
    with pytest.raises(ProgramFormatError):
        ProgramImage(data)


def test_load_program_from_path(tmp_path: Path) -> None:
    rom = tmp_path / "maze.ch8"
    rom.write_bytes(b"\xA2\x1E\xC2\x01")

    image = load_program_from_path(rom)

    assert image.name == "maze"
    assert image.data == b"\xA2\x1E\xC2\x01"
