"""Baseline tests ensuring the package layout loads correctly."""

import pychip8


def test_package_exports() -> None:
    for name in ("bus", "cpu", "io", "loader", "system", "utils", "video"):
        assert hasattr(pychip8, name), f"missing submodule: {name}"


def test_cpu_exports() -> None:
    from pychip8 import cpu

    for name in ("decode", "ExecutionEngine", "RegisterFile", "ExecutionError", "Outcome"):
        assert hasattr(cpu, name), f"cpu missing symbol: {name}"


def test_memory_errors_are_not_execution_errors() -> None:
    from pychip8.bus import AddressOutOfRangeError
    from pychip8.cpu import ExecutionError, MemoryAccessError

    assert not issubclass(AddressOutOfRangeError, ExecutionError)
    assert issubclass(MemoryAccessError, ExecutionError)
