"""CHIP-8 machine assembly and cycle driver."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Sequence

from pychip8.bus import AddressOutOfRangeError, Memory, MemorySnapshot
from pychip8.cpu import (
    ExecutionEngine,
    ExecutionError,
    MemoryAccessError,
    Outcome,
    RegisterFile,
    RegisterSnapshot,
    decode,
)
from pychip8.cpu.opcodes import Opcode, WaitForKey
from pychip8.io import KeyInput, Keypad, RandomSource, SystemRandomSource
from pychip8.loader import ProgramImage, load_font, load_program
from pychip8.utils import TraceRecorder, debug_enabled, debug_log
from pychip8.video import Display, FrameBuffer


class MachineState(Enum):
    RUNNING = auto()
    AWAITING_KEY = auto()
    HALTED = auto()


@dataclass
class MachineConfig:
    """Runtime configuration for a CHIP-8 machine."""

    program: Optional[ProgramImage | bytes] = None
    display: Optional[Display] = None
    keypad: Optional[KeyInput] = None
    rng: Optional[RandomSource] = None
    trace_capacity: int = 0
    resume_on_keypress: bool = True


@dataclass(frozen=True)
class HaltReport:
    """Diagnostics captured when the machine halts."""

    error: ExecutionError
    pc: int
    word: Optional[int]
    memory: MemorySnapshot
    registers: RegisterSnapshot
    trace: Sequence[str] = ()

    def format(self) -> str:
        word = "----" if self.word is None else f"{self.word:04X}"
        sections = [
            f"CPU halted at pc={self.pc:#06x} op={word}: {self.error}",
            self.registers.format(),
        ]
        if self.trace:
            sections.append("trace:\n" + "\n".join(self.trace))
        sections.append(self.memory.format(skip_empty=True))
        return "\n\n".join(sections)


@dataclass
class Machine:
    """Owns the memory and register file of one CHIP-8 instance and drives cycles."""

    memory: Memory
    registers: RegisterFile
    engine: ExecutionEngine
    program: Optional[ProgramImage] = None
    trace: Optional[TraceRecorder] = None
    state: MachineState = MachineState.RUNNING
    halt_report: Optional[HaltReport] = None
    cycle_count: int = 0
    _key_register: Optional[int] = field(default=None, repr=False)

    @property
    def display(self) -> Display:
        return self.engine.display

    @property
    def keypad(self) -> KeyInput:
        return self.engine.keypad

    def reset(self) -> None:
        """Restore power-on state and reload the font and program."""

        self.memory.clear()
        self.registers.reset()
        load_font(self.memory)
        if self.program is not None:
            load_program(self.memory, self.program)
        self.display.clear()
        if self.trace is not None:
            self.trace.clear()
        self.halt_report = None
        self.cycle_count = 0
        self._key_register = None
        self._set_state(MachineState.RUNNING)

    def cycle(self) -> MachineState:
        """Fetch, decode and execute one instruction.

        Does nothing while waiting for a key or after a halt. Any
        ``ExecutionError`` halts the machine, records a ``HaltReport`` and is
        re-raised to the caller.
        """

        if self.state is not MachineState.RUNNING:
            return self.state

        pc = self.registers.pc
        word: Optional[int] = None
        opcode: Optional[Opcode] = None
        try:
            word = self._fetch(pc)
            opcode = decode(word)
            if debug_enabled("cpu"):
                debug_log("cpu", "pc=%03x op=%04x %s", pc, word, opcode)
            outcome = self.engine.execute(opcode, self.memory, self.registers)
        except ExecutionError as exc:
            self._halt(exc, pc, word, opcode)
            raise

        self.cycle_count += 1
        if outcome is Outcome.AWAIT_KEY and isinstance(opcode, WaitForKey):
            self._key_register = opcode.x
            self._set_state(MachineState.AWAITING_KEY)
        self._record(pc, word, opcode)
        return self.state

    def run(self, max_cycles: int) -> int:
        """Cycle until ``max_cycles`` instructions ran or the machine stops running."""

        executed = 0
        while executed < max_cycles and self.state is MachineState.RUNNING:
            self.cycle()
            executed += 1
        return executed

    def press_key(self, key: int) -> bool:
        """Deliver a key press to a pending ``Fx0A``; return whether it resumed."""

        if self.state is not MachineState.AWAITING_KEY or self._key_register is None:
            return False
        if not 0 <= key <= 0xF:
            raise ValueError(f"key {key:#x} outside keypad range 0x0-0xF")
        self.registers.write_v(self._key_register, key)
        self.registers.pc = (self.registers.pc + 2) & 0xFFFF
        self._key_register = None
        self._set_state(MachineState.RUNNING)
        return True

    def _on_key_event(self, key: int, pressed: bool) -> None:
        if pressed:
            self.press_key(key)

    def _fetch(self, pc: int) -> int:
        try:
            return self.memory.read_word(pc)
        except AddressOutOfRangeError as exc:
            raise MemoryAccessError(exc.address, f"fetch at pc={pc:#06x}: {exc}") from exc

    def _record(self, pc: int, word: Optional[int], opcode: Optional[Opcode], note: str = "") -> None:
        if self.trace is None:
            return
        self.trace.record_step(
            pc,
            word,
            self.registers,
            listing="" if opcode is None else str(opcode),
            awaiting_key=self.state is MachineState.AWAITING_KEY,
            halted=self.state is MachineState.HALTED,
            note=note,
        )

    def _halt(self, error: ExecutionError, pc: int, word: Optional[int], opcode: Optional[Opcode]) -> None:
        self._set_state(MachineState.HALTED)
        self._record(pc, word, opcode, note=type(error).__name__)
        trace_lines: Sequence[str] = ()
        if self.trace is not None:
            trace_lines = tuple(self.trace.format_entries())
        self.halt_report = HaltReport(
            error=error,
            pc=pc,
            word=word,
            memory=self.memory.snapshot(),
            registers=self.registers.snapshot(),
            trace=trace_lines,
        )
        if debug_enabled("halt"):
            for line in self.halt_report.format().splitlines():
                debug_log("halt", line)

    def _set_state(self, state: MachineState) -> None:
        if state is not self.state and debug_enabled("machine"):
            debug_log("machine", "state %s -> %s pc=%03x", self.state.name, state.name, self.registers.pc)
        self.state = state


def create_machine(config: MachineConfig | None = None) -> Machine:
    """Instantiate a CHIP-8 machine with the font and program loaded."""

    config = config or MachineConfig()

    keypad = config.keypad or Keypad()
    engine = ExecutionEngine(
        display=config.display or FrameBuffer(),
        keypad=keypad,
        rng=config.rng or SystemRandomSource(),
    )

    memory = Memory()
    load_font(memory)
    program: Optional[ProgramImage] = None
    if config.program is not None:
        program = load_program(memory, config.program)

    trace = TraceRecorder(config.trace_capacity) if config.trace_capacity > 0 else None

    machine = Machine(
        memory=memory,
        registers=RegisterFile(),
        engine=engine,
        program=program,
        trace=trace,
    )
    if config.resume_on_keypress:
        keypad.add_listener(machine._on_key_event)
    return machine
