"""CHIP-8 execution engine.

``ExecutionEngine.execute`` applies one decoded instruction to a memory and a
register file. Handlers are looked up by the ``handler`` name carried on each
opcode class. Sequential instructions get ``pc += 2`` after their handler
runs; control-transfer instructions set ``pc`` themselves.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from pychip8.bus import FONT_ADDRESS, FONT_GLYPH_SIZE, AddressOutOfRangeError, Memory
from pychip8.io import KeyInput, Keypad, RandomSource, SystemRandomSource
from pychip8.video import Display, FrameBuffer

from . import opcodes as op
from .errors import (
    ExecutionError,
    InvalidOpcodeError,
    MemoryAccessError,
    UnsupportedOpcodeError,
)
from .registers import FLAG_REGISTER, RegisterFile

INSTRUCTION_SIZE = 2


class Outcome(Enum):
    """What the driver should do after an instruction."""

    CONTINUE = auto()
    AWAIT_KEY = auto()


@dataclass
class ExecutionEngine:
    """Applies decoded instructions using the display, keypad and RNG collaborators."""

    display: Display = field(default_factory=FrameBuffer)
    keypad: KeyInput = field(default_factory=Keypad)
    rng: RandomSource = field(default_factory=SystemRandomSource)

    def execute(self, opcode: op.Opcode, memory: Memory, registers: RegisterFile) -> Outcome:
        handler = getattr(self, opcode.handler, None)
        if handler is None:
            raise ExecutionError(f"handler '{opcode.handler}' not implemented")

        pc = registers.pc
        try:
            outcome = handler(opcode, memory, registers) or Outcome.CONTINUE
        except AddressOutOfRangeError as exc:
            raise MemoryAccessError(exc.address, f"{opcode} at pc={pc:#06x}: {exc}") from exc

        if outcome is Outcome.CONTINUE and not opcode.control_transfer:
            self._advance(registers)
        return outcome

    # ------------------------------------------------------------------
    # Flow control

    def op_sys(self, opcode: op.SysCall, memory: Memory, registers: RegisterFile) -> None:
        raise UnsupportedOpcodeError(opcode.encode())

    def op_cls(self, opcode: op.ClearScreen, memory: Memory, registers: RegisterFile) -> None:
        self.display.clear()

    def op_ret(self, opcode: op.Return, memory: Memory, registers: RegisterFile) -> None:
        registers.pop_stack()

    def op_jp(self, opcode: op.Jump, memory: Memory, registers: RegisterFile) -> None:
        registers.pc = opcode.n

    def op_call(self, opcode: op.Call, memory: Memory, registers: RegisterFile) -> None:
        registers.push_stack(registers.pc + INSTRUCTION_SIZE)
        registers.pc = opcode.n

    def op_jp_offset(self, opcode: op.JumpOffset, memory: Memory, registers: RegisterFile) -> None:
        registers.pc = (opcode.n + registers.read_v(0x0)) & 0xFFFF

    def op_se_byte(self, opcode: op.SkipIfEqualImmediate, memory: Memory, registers: RegisterFile) -> None:
        if registers.read_v(opcode.x) == opcode.k:
            self._advance(registers)

    def op_sne_byte(self, opcode: op.SkipIfNotEqualImmediate, memory: Memory, registers: RegisterFile) -> None:
        if registers.read_v(opcode.x) != opcode.k:
            self._advance(registers)

    def op_se_register(self, opcode: op.SkipIfEqual, memory: Memory, registers: RegisterFile) -> None:
        if registers.read_v(opcode.x) == registers.read_v(opcode.y):
            self._advance(registers)

    def op_sne_register(self, opcode: op.SkipIfNotEqual, memory: Memory, registers: RegisterFile) -> None:
        if registers.read_v(opcode.x) != registers.read_v(opcode.y):
            self._advance(registers)

    # ------------------------------------------------------------------
    # Register loads and ALU

    def op_ld_byte(self, opcode: op.LoadImmediate, memory: Memory, registers: RegisterFile) -> None:
        registers.write_v(opcode.x, opcode.k)

    def op_add_byte(self, opcode: op.AddImmediate, memory: Memory, registers: RegisterFile) -> None:
        registers.write_v(opcode.x, registers.read_v(opcode.x) + opcode.k)

    def op_ld_register(self, opcode: op.Move, memory: Memory, registers: RegisterFile) -> None:
        registers.write_v(opcode.x, registers.read_v(opcode.y))

    def op_or(self, opcode: op.Or, memory: Memory, registers: RegisterFile) -> None:
        vx, vy = registers.read_v(opcode.x), registers.read_v(opcode.y)
        registers.write_v(opcode.x, vx | vy)

    def op_and(self, opcode: op.And, memory: Memory, registers: RegisterFile) -> None:
        vx, vy = registers.read_v(opcode.x), registers.read_v(opcode.y)
        registers.write_v(opcode.x, vx & vy)

    def op_xor(self, opcode: op.Xor, memory: Memory, registers: RegisterFile) -> None:
        vx, vy = registers.read_v(opcode.x), registers.read_v(opcode.y)
        registers.write_v(opcode.x, vx ^ vy)

    def op_add_register(self, opcode: op.Add, memory: Memory, registers: RegisterFile) -> None:
        vx, vy = registers.read_v(opcode.x), registers.read_v(opcode.y)
        total = vx + vy
        self._store_with_flag(registers, opcode.x, total, total > 0xFF)

    def op_sub(self, opcode: op.Subtract, memory: Memory, registers: RegisterFile) -> None:
        vx, vy = registers.read_v(opcode.x), registers.read_v(opcode.y)
        self._store_with_flag(registers, opcode.x, vx - vy, vx >= vy)

    def op_subn(self, opcode: op.SubtractReverse, memory: Memory, registers: RegisterFile) -> None:
        vx, vy = registers.read_v(opcode.x), registers.read_v(opcode.y)
        self._store_with_flag(registers, opcode.x, vy - vx, vy >= vx)

    def op_shr(self, opcode: op.ShiftRight, memory: Memory, registers: RegisterFile) -> None:
        vx = registers.read_v(opcode.x)
        self._store_with_flag(registers, opcode.x, vx >> 1, bool(vx & 0x01))

    def op_shl(self, opcode: op.ShiftLeft, memory: Memory, registers: RegisterFile) -> None:
        vx = registers.read_v(opcode.x)
        self._store_with_flag(registers, opcode.x, vx << 1, bool(vx >> 7))

    def op_rnd(self, opcode: op.Random, memory: Memory, registers: RegisterFile) -> None:
        registers.write_v(opcode.x, self.rng.next_byte() & opcode.k)

    # ------------------------------------------------------------------
    # Index register, display and keypad

    def op_ld_index(self, opcode: op.LoadIndex, memory: Memory, registers: RegisterFile) -> None:
        registers.i = opcode.n

    def op_add_index(self, opcode: op.AddIndex, memory: Memory, registers: RegisterFile) -> None:
        registers.i = (registers.i + registers.read_v(opcode.x)) & 0xFFFF

    def op_ld_glyph(self, opcode: op.LoadFontGlyph, memory: Memory, registers: RegisterFile) -> None:
        registers.i = FONT_ADDRESS + registers.read_v(opcode.x) * FONT_GLYPH_SIZE

    def op_drw(self, opcode: op.Draw, memory: Memory, registers: RegisterFile) -> None:
        sprite = memory.read_range(registers.i, registers.i + opcode.n)
        x, y = registers.read_v(opcode.x), registers.read_v(opcode.y)
        collided = self.display.draw_sprite(x, y, sprite)
        registers.write_v(FLAG_REGISTER, 1 if collided else 0)

    def op_skp(self, opcode: op.SkipIfKeyDown, memory: Memory, registers: RegisterFile) -> None:
        if self.keypad.is_key_down(registers.read_v(opcode.x) & 0x0F):
            self._advance(registers)

    def op_sknp(self, opcode: op.SkipIfKeyUp, memory: Memory, registers: RegisterFile) -> None:
        if not self.keypad.is_key_down(registers.read_v(opcode.x) & 0x0F):
            self._advance(registers)

    def op_wait_key(self, opcode: op.WaitForKey, memory: Memory, registers: RegisterFile) -> Outcome:
        return Outcome.AWAIT_KEY

    # ------------------------------------------------------------------
    # Timers and memory transfers

    def op_ld_from_delay(self, opcode: op.LoadDelayTimer, memory: Memory, registers: RegisterFile) -> None:
        registers.write_v(opcode.x, registers.delay_timer)

    def op_ld_delay(self, opcode: op.SetDelayTimer, memory: Memory, registers: RegisterFile) -> None:
        registers.delay_timer = registers.read_v(opcode.x)

    def op_ld_sound(self, opcode: op.SetSoundTimer, memory: Memory, registers: RegisterFile) -> None:
        registers.sound_timer = registers.read_v(opcode.x)

    def op_ld_bcd(self, opcode: op.StoreBcd, memory: Memory, registers: RegisterFile) -> None:
        value = registers.read_v(opcode.x)
        memory.copy_block(registers.i, (value // 100, (value // 10) % 10, value % 10))

    def op_store_registers(self, opcode: op.StoreRegisters, memory: Memory, registers: RegisterFile) -> None:
        memory.copy_block(registers.i, registers.v[: opcode.x + 1])

    def op_load_registers(self, opcode: op.LoadRegisters, memory: Memory, registers: RegisterFile) -> None:
        data = memory.read_range(registers.i, registers.i + opcode.x + 1)
        for index, value in enumerate(data):
            registers.write_v(index, value)

    def op_invalid(self, opcode: op.Invalid, memory: Memory, registers: RegisterFile) -> None:
        raise InvalidOpcodeError(opcode.code)

    # ------------------------------------------------------------------
    # Helpers

    def _advance(self, registers: RegisterFile) -> None:
        registers.pc = (registers.pc + INSTRUCTION_SIZE) & 0xFFFF

    def _store_with_flag(self, registers: RegisterFile, x: int, result: int, flag: bool) -> None:
        # VF is written last so a VF destination ends up holding the flag.
        registers.write_v(x, result)
        registers.write_v(FLAG_REGISTER, 1 if flag else 0)
