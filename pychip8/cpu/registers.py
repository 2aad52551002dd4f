"""CHIP-8 register file."""

from __future__ import annotations

from dataclasses import dataclass, field

from pychip8.bus import PROGRAM_START

from .errors import StackOverflowError, StackUnderflowError

REGISTER_COUNT = 16
STACK_DEPTH = 16
FLAG_REGISTER = 0xF


@dataclass(frozen=True)
class RegisterSnapshot:
    """Immutable copy of the register file used for halt diagnostics."""

    pc: int
    sp: int
    stack: tuple[int, ...]
    v: tuple[int, ...]
    i: int
    delay_timer: int
    sound_timer: int

    def format(self) -> str:
        lines = [f"{'PC':<4}{self.pc:#06X}", f"{'SP':<4}{self.sp:#04X}", "stack:"]
        # Highest slot first so the stack grows upwards in the listing.
        for slot in range(len(self.stack) - 1, -1, -1):
            marker = ">" if slot == self.sp else " "
            lines.append(f"  {marker} {slot:X} {self.stack[slot]:#06X}")
        lines.append("registers:")
        for index in range(0, len(self.v), 2):
            left = f"V{index:X}"
            right = f"V{index + 1:X}"
            lines.append(f"{left:<4}{self.v[index]:#04X}    {right:<4}{self.v[index + 1]:#04X}")
        lines.append(f"{'I':<4}{self.i:#06X}")
        lines.append(f"{'DT':<4}{self.delay_timer:#04X}")
        lines.append(f"{'ST':<4}{self.sound_timer:#04X}")
        return "\n".join(lines)


@dataclass
class RegisterFile:
    """Program counter, call stack, V registers, index register and timers.

    ``sp`` is the depth of the call stack. A push increments it before
    storing, so slot 0 is never written and at most ``STACK_DEPTH - 1``
    return addresses can be held at once.
    """

    pc: int = PROGRAM_START
    sp: int = 0
    stack: list[int] = field(default_factory=lambda: [0] * STACK_DEPTH)
    v: bytearray = field(default_factory=lambda: bytearray(REGISTER_COUNT))
    i: int = 0
    delay_timer: int = 0
    sound_timer: int = 0

    def reset(self) -> None:
        self.pc = PROGRAM_START
        self.sp = 0
        self.stack = [0] * STACK_DEPTH
        self.v = bytearray(REGISTER_COUNT)
        self.i = 0
        self.delay_timer = 0
        self.sound_timer = 0

    def read_v(self, index: int) -> int:
        if not 0 <= index < REGISTER_COUNT:
            raise IndexError(f"register V{index} does not exist")
        return self.v[index]

    def write_v(self, index: int, value: int) -> None:
        if not 0 <= index < REGISTER_COUNT:
            raise IndexError(f"register V{index} does not exist")
        self.v[index] = value & 0xFF

    def peek_stack(self) -> int:
        return self.stack[self.sp]

    def push_stack(self, address: int) -> None:
        if self.sp >= STACK_DEPTH - 1:
            raise StackOverflowError(f"call stack full (depth {self.sp}) pushing {address:#06x}")
        self.sp += 1
        self.stack[self.sp] = address & 0xFFFF

    def pop_stack(self) -> int:
        """Pop the return address and load it into ``pc``."""

        if self.sp == 0:
            raise StackUnderflowError(f"return with empty call stack at pc={self.pc:#06x}")
        self.pc = self.peek_stack()
        self.sp -= 1
        return self.pc

    def snapshot(self) -> RegisterSnapshot:
        return RegisterSnapshot(
            pc=self.pc,
            sp=self.sp,
            stack=tuple(self.stack),
            v=tuple(self.v),
            i=self.i,
            delay_timer=self.delay_timer,
            sound_timer=self.sound_timer,
        )

    def dump(self) -> str:
        return self.snapshot().format()
