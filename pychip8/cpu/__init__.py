"""CPU package for the CHIP-8 core: decoder, register file and execution engine."""

from .core import ExecutionEngine, Outcome
from .errors import (
    ExecutionError,
    InvalidOpcodeError,
    MemoryAccessError,
    StackOverflowError,
    StackUnderflowError,
    UnsupportedOpcodeError,
)
from .opcodes import Opcode, decode
from .registers import RegisterFile, RegisterSnapshot
from . import opcodes

__all__ = [
    "ExecutionEngine",
    "Outcome",
    "ExecutionError",
    "InvalidOpcodeError",
    "MemoryAccessError",
    "StackOverflowError",
    "StackUnderflowError",
    "UnsupportedOpcodeError",
    "Opcode",
    "decode",
    "RegisterFile",
    "RegisterSnapshot",
    "opcodes",
]
