"""CHIP-8 system assembly helpers."""

from __future__ import annotations

from .machine import HaltReport, Machine, MachineConfig, MachineState, create_machine
from .timers import TIMER_HZ, TimerDriver

__all__ = [
    "HaltReport",
    "Machine",
    "MachineConfig",
    "MachineState",
    "create_machine",
    "TIMER_HZ",
    "TimerDriver",
]
