"""Unit tests for the CHIP-8 memory bus."""

import pytest

from pychip8.bus import MEMORY_SIZE, AddressOutOfRangeError, Memory, MemoryError


def test_memory_starts_zeroed() -> None:
    memory = Memory()

    assert len(memory) == MEMORY_SIZE
    assert memory.read(0x000) == 0x00
    assert memory.read(0xFFF) == 0x00


@pytest.mark.parametrize("address", [0x000, 0x050, 0x200, 0x7FF, 0xFFF])
@pytest.mark.parametrize("value", [0x00, 0x5A, 0xFF])
def test_write_then_read(address: int, value: int) -> None:
    memory = Memory()

    memory.write(address, value)

    assert memory.read(address) == value


def test_write_masks_value_to_byte() -> None:
    memory = Memory()

    memory.write(0x300, 0x1AB)

    assert memory.read(0x300) == 0xAB


def test_read_word_is_big_endian() -> None:
    memory = Memory()
    memory.copy_block(0x200, [0x12, 0x34])

    assert memory.read_word(0x200) == 0x1234


def test_read_range_is_half_open() -> None:
    memory = Memory()
    memory.copy_block(0x300, b"\x01\x02\x03\x04")

    assert memory.read_range(0x300, 0x303) == b"\x01\x02\x03"
    assert memory.read_range(0x300, 0x300) == b""


def test_read_range_rejects_reversed_bounds() -> None:
    memory = Memory()

    with pytest.raises(MemoryError):
        memory.read_range(0x301, 0x300)


@pytest.mark.parametrize(
    "access",
    [
        lambda m: m.read(MEMORY_SIZE),
        lambda m: m.read(-1),
        lambda m: m.read_word(0xFFF),
        lambda m: m.read_range(0xFFE, 0x1001),
        lambda m: m.write(0x1000, 0x01),
        lambda m: m.copy_block(0xFFE, b"\x01\x02\x03"),
    ],
)
def test_out_of_range_access_raises(access) -> None:
    memory = Memory()

    with pytest.raises(AddressOutOfRangeError):
        access(memory)


def test_failed_copy_block_leaves_memory_untouched() -> None:
    memory = Memory()

    with pytest.raises(AddressOutOfRangeError) as excinfo:
        memory.copy_block(0xFFD, b"\xAA\xBB\xCC\xDD")

    assert excinfo.value.address == 0xFFD
    assert memory.read_range(0xFFD, 0x1000) == b"\x00\x00\x00"


def test_read_word_at_last_valid_pair() -> None:
    memory = Memory()
    memory.copy_block(0xFFE, b"\xBE\xEF")

    assert memory.read_word(0xFFE) == 0xBEEF


def test_snapshot_is_detached_copy() -> None:
    memory = Memory()
    memory.write(0x200, 0x11)

    snapshot = memory.snapshot()
    memory.write(0x200, 0x22)

    assert snapshot.data[0x200] == 0x11


def test_dump_renders_hex_and_ascii_columns() -> None:
    memory = Memory()
    memory.copy_block(0x200, b"HI\x00\x7f")

    lines = memory.dump(skip_empty=True).splitlines()

    assert lines == [
        "200: 48 49 00 7F 00 00 00 00 00 00 00 00 00 00 00 00 |HI..............|",
    ]


def test_full_dump_has_one_row_per_sixteen_bytes() -> None:
    memory = Memory()

    assert len(memory.dump().splitlines()) == MEMORY_SIZE // 16


def test_invalid_size_rejected() -> None:
    with pytest.raises(MemoryError):
        Memory(0)
    with pytest.raises(MemoryError):
        Memory(MEMORY_SIZE + 1)
