"""Execution errors raised by the CHIP-8 core."""

from __future__ import annotations


class ExecutionError(Exception):
    """Base error for failures while executing an instruction."""


class InvalidOpcodeError(ExecutionError):
    """Raised when the decoder could not map a word to an instruction."""

    def __init__(self, code: int) -> None:
        self.code = code & 0xFFFF
        super().__init__(f"invalid opcode {self.code:#06x}")


class UnsupportedOpcodeError(ExecutionError):
    """Raised for instructions the engine deliberately does not run (0nnn)."""

    def __init__(self, code: int) -> None:
        self.code = code & 0xFFFF
        super().__init__(f"unsupported opcode {self.code:#06x}")


class StackOverflowError(ExecutionError):
    """Raised when a call would exceed the call stack depth."""


class StackUnderflowError(ExecutionError):
    """Raised when returning with an empty call stack."""


class MemoryAccessError(ExecutionError):
    """Raised when an instruction touches memory outside the address space."""

    def __init__(self, address: int, message: str) -> None:
        self.address = address
        super().__init__(message)
