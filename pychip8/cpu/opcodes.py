"""Instruction shapes and the word decoder for the CHIP-8 instruction set.

Every instruction word maps to exactly one frozen dataclass below. Each shape
only carries the operand fields it needs; ``mnemonic``, ``handler`` and
``control_transfer`` are class-level metadata consumed by the execution
engine. ``decode`` is pure and total: words outside the published ISA come
back as ``Invalid``.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import ClassVar, Mapping, Sequence, Type


@dataclass(frozen=True)
class Opcode:
    """Base class for decoded instructions."""

    mnemonic: ClassVar[str] = "?"
    handler: ClassVar[str] = ""
    control_transfer: ClassVar[bool] = False
    pattern: ClassVar[int] = 0x0000
    operand_format: ClassVar[str] = ""

    def encode(self) -> int:
        return self.pattern

    def operands(self) -> str:
        return self.operand_format.format(**asdict(self))

    def __str__(self) -> str:
        operands = self.operands()
        if operands:
            return f"{self.mnemonic} {operands}"
        return self.mnemonic


@dataclass(frozen=True)
class AddressOpcode(Opcode):
    """``?nnn`` shapes carrying a 12-bit address."""

    n: int
    operand_format: ClassVar[str] = "{n:#05x}"

    def encode(self) -> int:
        return self.pattern | (self.n & 0x0FFF)


@dataclass(frozen=True)
class RegisterByteOpcode(Opcode):
    """``?xkk`` shapes carrying a register index and an 8-bit immediate."""

    x: int
    k: int
    operand_format: ClassVar[str] = "V{x:X}, {k:#04x}"

    def encode(self) -> int:
        return self.pattern | ((self.x & 0xF) << 8) | (self.k & 0xFF)


@dataclass(frozen=True)
class RegisterPairOpcode(Opcode):
    """``?xy?`` shapes carrying two register indices."""

    x: int
    y: int
    operand_format: ClassVar[str] = "V{x:X}, V{y:X}"

    def encode(self) -> int:
        return self.pattern | ((self.x & 0xF) << 8) | ((self.y & 0xF) << 4)


@dataclass(frozen=True)
class RegisterOpcode(Opcode):
    """``?x??`` shapes carrying a single register index."""

    x: int
    operand_format: ClassVar[str] = "V{x:X}"

    def encode(self) -> int:
        return self.pattern | ((self.x & 0xF) << 8)


# ----------------------------------------------------------------------
# 0 group


@dataclass(frozen=True)
class SysCall(AddressOpcode):
    mnemonic: ClassVar[str] = "SYS"
    handler: ClassVar[str] = "op_sys"
    control_transfer: ClassVar[bool] = True
    pattern: ClassVar[int] = 0x0000


@dataclass(frozen=True)
class ClearScreen(Opcode):
    mnemonic: ClassVar[str] = "CLS"
    handler: ClassVar[str] = "op_cls"
    pattern: ClassVar[int] = 0x00E0


@dataclass(frozen=True)
class Return(Opcode):
    mnemonic: ClassVar[str] = "RET"
    handler: ClassVar[str] = "op_ret"
    control_transfer: ClassVar[bool] = True
    pattern: ClassVar[int] = 0x00EE


# ----------------------------------------------------------------------
# Flow control


@dataclass(frozen=True)
class Jump(AddressOpcode):
    mnemonic: ClassVar[str] = "JP"
    handler: ClassVar[str] = "op_jp"
    control_transfer: ClassVar[bool] = True
    pattern: ClassVar[int] = 0x1000


@dataclass(frozen=True)
class Call(AddressOpcode):
    mnemonic: ClassVar[str] = "CALL"
    handler: ClassVar[str] = "op_call"
    control_transfer: ClassVar[bool] = True
    pattern: ClassVar[int] = 0x2000


@dataclass(frozen=True)
class SkipIfEqualImmediate(RegisterByteOpcode):
    mnemonic: ClassVar[str] = "SE"
    handler: ClassVar[str] = "op_se_byte"
    pattern: ClassVar[int] = 0x3000


@dataclass(frozen=True)
class SkipIfNotEqualImmediate(RegisterByteOpcode):
    mnemonic: ClassVar[str] = "SNE"
    handler: ClassVar[str] = "op_sne_byte"
    pattern: ClassVar[int] = 0x4000


@dataclass(frozen=True)
class SkipIfEqual(RegisterPairOpcode):
    mnemonic: ClassVar[str] = "SE"
    handler: ClassVar[str] = "op_se_register"
    pattern: ClassVar[int] = 0x5000


@dataclass(frozen=True)
class SkipIfNotEqual(RegisterPairOpcode):
    mnemonic: ClassVar[str] = "SNE"
    handler: ClassVar[str] = "op_sne_register"
    pattern: ClassVar[int] = 0x9000


@dataclass(frozen=True)
class JumpOffset(AddressOpcode):
    mnemonic: ClassVar[str] = "JP"
    handler: ClassVar[str] = "op_jp_offset"
    control_transfer: ClassVar[bool] = True
    pattern: ClassVar[int] = 0xB000
    operand_format: ClassVar[str] = "V0, {n:#05x}"


# ----------------------------------------------------------------------
# Register loads and arithmetic


@dataclass(frozen=True)
class LoadImmediate(RegisterByteOpcode):
    mnemonic: ClassVar[str] = "LD"
    handler: ClassVar[str] = "op_ld_byte"
    pattern: ClassVar[int] = 0x6000


@dataclass(frozen=True)
class AddImmediate(RegisterByteOpcode):
    mnemonic: ClassVar[str] = "ADD"
    handler: ClassVar[str] = "op_add_byte"
    pattern: ClassVar[int] = 0x7000


@dataclass(frozen=True)
class Move(RegisterPairOpcode):
    mnemonic: ClassVar[str] = "LD"
    handler: ClassVar[str] = "op_ld_register"
    pattern: ClassVar[int] = 0x8000


@dataclass(frozen=True)
class Or(RegisterPairOpcode):
    mnemonic: ClassVar[str] = "OR"
    handler: ClassVar[str] = "op_or"
    pattern: ClassVar[int] = 0x8001


@dataclass(frozen=True)
class And(RegisterPairOpcode):
    mnemonic: ClassVar[str] = "AND"
    handler: ClassVar[str] = "op_and"
    pattern: ClassVar[int] = 0x8002


@dataclass(frozen=True)
class Xor(RegisterPairOpcode):
    mnemonic: ClassVar[str] = "XOR"
    handler: ClassVar[str] = "op_xor"
    pattern: ClassVar[int] = 0x8003


@dataclass(frozen=True)
class Add(RegisterPairOpcode):
    mnemonic: ClassVar[str] = "ADD"
    handler: ClassVar[str] = "op_add_register"
    pattern: ClassVar[int] = 0x8004


@dataclass(frozen=True)
class Subtract(RegisterPairOpcode):
    mnemonic: ClassVar[str] = "SUB"
    handler: ClassVar[str] = "op_sub"
    pattern: ClassVar[int] = 0x8005


@dataclass(frozen=True)
class ShiftRight(RegisterPairOpcode):
    mnemonic: ClassVar[str] = "SHR"
    handler: ClassVar[str] = "op_shr"
    pattern: ClassVar[int] = 0x8006


@dataclass(frozen=True)
class SubtractReverse(RegisterPairOpcode):
    mnemonic: ClassVar[str] = "SUBN"
    handler: ClassVar[str] = "op_subn"
    pattern: ClassVar[int] = 0x8007


@dataclass(frozen=True)
class ShiftLeft(RegisterPairOpcode):
    mnemonic: ClassVar[str] = "SHL"
    handler: ClassVar[str] = "op_shl"
    pattern: ClassVar[int] = 0x800E


@dataclass(frozen=True)
class Random(RegisterByteOpcode):
    mnemonic: ClassVar[str] = "RND"
    handler: ClassVar[str] = "op_rnd"
    pattern: ClassVar[int] = 0xC000


# ----------------------------------------------------------------------
# Index register, display and keypad


@dataclass(frozen=True)
class LoadIndex(AddressOpcode):
    mnemonic: ClassVar[str] = "LD"
    handler: ClassVar[str] = "op_ld_index"
    pattern: ClassVar[int] = 0xA000
    operand_format: ClassVar[str] = "I, {n:#05x}"


@dataclass(frozen=True)
class Draw(Opcode):
    x: int
    y: int
    n: int
    mnemonic: ClassVar[str] = "DRW"
    handler: ClassVar[str] = "op_drw"
    pattern: ClassVar[int] = 0xD000
    operand_format: ClassVar[str] = "V{x:X}, V{y:X}, {n:#x}"

    def encode(self) -> int:
        return self.pattern | ((self.x & 0xF) << 8) | ((self.y & 0xF) << 4) | (self.n & 0xF)


@dataclass(frozen=True)
class SkipIfKeyDown(RegisterOpcode):
    mnemonic: ClassVar[str] = "SKP"
    handler: ClassVar[str] = "op_skp"
    pattern: ClassVar[int] = 0xE09E


@dataclass(frozen=True)
class SkipIfKeyUp(RegisterOpcode):
    mnemonic: ClassVar[str] = "SKNP"
    handler: ClassVar[str] = "op_sknp"
    pattern: ClassVar[int] = 0xE0A1


# ----------------------------------------------------------------------
# F group


@dataclass(frozen=True)
class LoadDelayTimer(RegisterOpcode):
    mnemonic: ClassVar[str] = "LD"
    handler: ClassVar[str] = "op_ld_from_delay"
    pattern: ClassVar[int] = 0xF007
    operand_format: ClassVar[str] = "V{x:X}, DT"


@dataclass(frozen=True)
class WaitForKey(RegisterOpcode):
    mnemonic: ClassVar[str] = "LD"
    handler: ClassVar[str] = "op_wait_key"
    pattern: ClassVar[int] = 0xF00A
    operand_format: ClassVar[str] = "V{x:X}, K"


@dataclass(frozen=True)
class SetDelayTimer(RegisterOpcode):
    mnemonic: ClassVar[str] = "LD"
    handler: ClassVar[str] = "op_ld_delay"
    pattern: ClassVar[int] = 0xF015
    operand_format: ClassVar[str] = "DT, V{x:X}"


@dataclass(frozen=True)
class SetSoundTimer(RegisterOpcode):
    mnemonic: ClassVar[str] = "LD"
    handler: ClassVar[str] = "op_ld_sound"
    pattern: ClassVar[int] = 0xF018
    operand_format: ClassVar[str] = "ST, V{x:X}"


@dataclass(frozen=True)
class AddIndex(RegisterOpcode):
    mnemonic: ClassVar[str] = "ADD"
    handler: ClassVar[str] = "op_add_index"
    pattern: ClassVar[int] = 0xF01E
    operand_format: ClassVar[str] = "I, V{x:X}"


@dataclass(frozen=True)
class LoadFontGlyph(RegisterOpcode):
    mnemonic: ClassVar[str] = "LD"
    handler: ClassVar[str] = "op_ld_glyph"
    pattern: ClassVar[int] = 0xF029
    operand_format: ClassVar[str] = "F, V{x:X}"


@dataclass(frozen=True)
class StoreBcd(RegisterOpcode):
    mnemonic: ClassVar[str] = "LD"
    handler: ClassVar[str] = "op_ld_bcd"
    pattern: ClassVar[int] = 0xF033
    operand_format: ClassVar[str] = "B, V{x:X}"


@dataclass(frozen=True)
class StoreRegisters(RegisterOpcode):
    mnemonic: ClassVar[str] = "LD"
    handler: ClassVar[str] = "op_store_registers"
    pattern: ClassVar[int] = 0xF055
    operand_format: ClassVar[str] = "[I], V{x:X}"


@dataclass(frozen=True)
class LoadRegisters(RegisterOpcode):
    mnemonic: ClassVar[str] = "LD"
    handler: ClassVar[str] = "op_load_registers"
    pattern: ClassVar[int] = 0xF065
    operand_format: ClassVar[str] = "V{x:X}, [I]"


@dataclass(frozen=True)
class Invalid(Opcode):
    """Word that does not belong to the instruction set."""

    code: int
    mnemonic: ClassVar[str] = "DW"
    handler: ClassVar[str] = "op_invalid"
    operand_format: ClassVar[str] = "{code:#06x}"

    def encode(self) -> int:
        return self.code & 0xFFFF


# ----------------------------------------------------------------------
# Decoder

_ADDRESS_GROUPS: Mapping[int, Type[AddressOpcode]] = {
    0x0: SysCall,
    0x1: Jump,
    0x2: Call,
    0xA: LoadIndex,
    0xB: JumpOffset,
}

_REGISTER_BYTE_GROUPS: Mapping[int, Type[RegisterByteOpcode]] = {
    0x3: SkipIfEqualImmediate,
    0x4: SkipIfNotEqualImmediate,
    0x6: LoadImmediate,
    0x7: AddImmediate,
    0xC: Random,
}

_ALU_SHAPES: Mapping[int, Type[RegisterPairOpcode]] = {
    0x0: Move,
    0x1: Or,
    0x2: And,
    0x3: Xor,
    0x4: Add,
    0x5: Subtract,
    0x6: ShiftRight,
    0x7: SubtractReverse,
    0xE: ShiftLeft,
}

_KEY_SHAPES: Mapping[int, Type[RegisterOpcode]] = {
    0x9E: SkipIfKeyDown,
    0xA1: SkipIfKeyUp,
}

_MISC_SHAPES: Mapping[int, Type[RegisterOpcode]] = {
    0x07: LoadDelayTimer,
    0x0A: WaitForKey,
    0x15: SetDelayTimer,
    0x18: SetSoundTimer,
    0x1E: AddIndex,
    0x29: LoadFontGlyph,
    0x33: StoreBcd,
    0x55: StoreRegisters,
    0x65: LoadRegisters,
}

OPCODE_SHAPES: Sequence[Type[Opcode]] = (
    ClearScreen,
    Return,
    *_ADDRESS_GROUPS.values(),
    *_REGISTER_BYTE_GROUPS.values(),
    SkipIfEqual,
    SkipIfNotEqual,
    *_ALU_SHAPES.values(),
    Draw,
    *_KEY_SHAPES.values(),
    *_MISC_SHAPES.values(),
)


def decode(word: int) -> Opcode:
    """Decode a 16-bit instruction word."""

    word &= 0xFFFF
    if word == 0x00E0:
        return ClearScreen()
    if word == 0x00EE:
        return Return()

    group = word >> 12
    x = (word >> 8) & 0xF
    y = (word >> 4) & 0xF
    low_nibble = word & 0xF
    low_byte = word & 0xFF

    if group in _ADDRESS_GROUPS:
        return _ADDRESS_GROUPS[group](word & 0x0FFF)
    if group in _REGISTER_BYTE_GROUPS:
        return _REGISTER_BYTE_GROUPS[group](x, low_byte)
    if group == 0x5 and low_nibble == 0x0:
        return SkipIfEqual(x, y)
    if group == 0x9 and low_nibble == 0x0:
        return SkipIfNotEqual(x, y)
    if group == 0x8 and low_nibble in _ALU_SHAPES:
        return _ALU_SHAPES[low_nibble](x, y)
    if group == 0xD:
        return Draw(x, y, low_nibble)
    if group == 0xE and low_byte in _KEY_SHAPES:
        return _KEY_SHAPES[low_byte](x)
    if group == 0xF and low_byte in _MISC_SHAPES:
        return _MISC_SHAPES[low_byte](x)
    return Invalid(word)
