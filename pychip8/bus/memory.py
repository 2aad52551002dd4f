"""Flat 4 KiB memory for the CHIP-8 core.

The CHIP-8 address space is a single block of byte cells. Every accessor is
bounds checked against ``[0, MEMORY_SIZE)`` and multi-byte writes validate the
whole range before touching any cell, so a failing access never leaves memory
half-updated.

Memory map:

* ``0x000-0x1FF``: reserved for the interpreter
* ``0x050-0x09F``: built-in 4x5 font glyphs (0-F)
* ``0x200-0xFFF``: program image and work RAM
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

MEMORY_SIZE = 0x1000
ROW_WIDTH = 16

FONT_ADDRESS = 0x050
FONT_GLYPH_SIZE = 5
PROGRAM_START = 0x200


class MemoryError(Exception):
    """Raised when memory is accessed incorrectly."""


class AddressOutOfRangeError(MemoryError):
    """Raised when an access touches an address outside the 4 KiB space."""

    def __init__(self, address: int, length: int = 1) -> None:
        self.address = address
        self.length = length
        if length > 1:
            message = f"access {address:#06x}+{length} escapes memory 0x000-{MEMORY_SIZE - 1:#05x}"
        else:
            message = f"address {address:#06x} outside memory 0x000-{MEMORY_SIZE - 1:#05x}"
        super().__init__(message)


@dataclass(frozen=True)
class MemorySnapshot:
    """Immutable copy of memory contents captured for diagnostics."""

    data: bytes

    def rows(self, *, skip_empty: bool = False) -> Iterable[tuple[int, bytes]]:
        for offset in range(0, len(self.data), ROW_WIDTH):
            row = self.data[offset : offset + ROW_WIDTH]
            if skip_empty and not any(row):
                continue
            yield offset, row

    def format(self, *, skip_empty: bool = False) -> str:
        lines: list[str] = []
        for offset, row in self.rows(skip_empty=skip_empty):
            hex_part = " ".join(f"{value:02X}" for value in row)
            ascii_part = "".join(chr(value) if 0x20 <= value < 0x7F else "." for value in row)
            lines.append(f"{offset:03X}: {hex_part} |{ascii_part}|")
        return "\n".join(lines)


class Memory:
    """Byte-addressable CHIP-8 memory."""

    def __init__(self, size: int = MEMORY_SIZE) -> None:
        if size <= 0 or size > MEMORY_SIZE:
            raise MemoryError(f"memory size {size} out of range (1-{MEMORY_SIZE})")
        self._data = bytearray(size)

    def __len__(self) -> int:
        return len(self._data)

    def read(self, address: int) -> int:
        self._check(address)
        return self._data[address]

    def read_word(self, address: int) -> int:
        self._check(address, 2)
        return (self._data[address] << 8) | self._data[address + 1]

    def read_range(self, start: int, end: int) -> bytes:
        """Return the bytes in ``[start, end)``."""

        if end < start:
            raise MemoryError(f"range end {end:#06x} precedes start {start:#06x}")
        if end == start:
            self._check(start)
            return b""
        self._check(start, end - start)
        return bytes(self._data[start:end])

    def write(self, address: int, value: int) -> None:
        self._check(address)
        self._data[address] = value & 0xFF

    def copy_block(self, address: int, data: Sequence[int]) -> None:
        """Write ``data`` contiguously starting at ``address``."""

        payload = bytes(value & 0xFF for value in data)
        if not payload:
            return
        self._check(address, len(payload))
        self._data[address : address + len(payload)] = payload

    def clear(self) -> None:
        self._data[:] = bytes(len(self._data))

    def snapshot(self) -> MemorySnapshot:
        return MemorySnapshot(bytes(self._data))

    def dump(self, *, skip_empty: bool = False) -> str:
        return self.snapshot().format(skip_empty=skip_empty)

    def _check(self, address: int, length: int = 1) -> None:
        if address < 0 or address + length > len(self._data):
            raise AddressOutOfRangeError(address, length)
