"""60 Hz countdown driver for the delay and sound timers."""

from __future__ import annotations

from typing import Callable, Optional

from pychip8.cpu import RegisterFile
from pychip8.utils import debug_enabled, debug_log

TIMER_HZ = 60

SoundCallback = Callable[[bool], None]


class TimerDriver:
    """Decrements ``delay_timer`` and ``sound_timer`` toward zero.

    The driver is independent of instruction execution: hosts call ``tick``
    once per 60 Hz frame, or ``advance`` with elapsed wall-clock seconds and
    let the driver work out how many frames have passed.
    """

    def __init__(self, *, frequency: int = TIMER_HZ, sound_callback: Optional[SoundCallback] = None) -> None:
        if frequency <= 0:
            raise ValueError("timer frequency must be positive")
        self._period = 1.0 / frequency
        self._remainder = 0.0
        self._sound_callback = sound_callback
        self._sound_active = False

    def tick(self, registers: RegisterFile) -> None:
        if registers.delay_timer > 0:
            registers.delay_timer -= 1
        if registers.sound_timer > 0:
            registers.sound_timer -= 1
        self._update_sound(registers)

    def advance(self, registers: RegisterFile, elapsed: float) -> int:
        """Apply as many ticks as fit in ``elapsed`` seconds; return the tick count."""

        if elapsed < 0:
            raise ValueError("elapsed time must not be negative")
        self._remainder += elapsed
        ticks = int(self._remainder / self._period)
        self._remainder -= ticks * self._period
        for _ in range(ticks):
            self.tick(registers)
        if ticks == 0:
            self._update_sound(registers)
        return ticks

    def reset(self) -> None:
        self._remainder = 0.0
        if self._sound_active:
            self._sound_active = False
            self._notify(False)

    def _update_sound(self, registers: RegisterFile) -> None:
        active = registers.sound_timer > 0
        if active != self._sound_active:
            self._sound_active = active
            if debug_enabled("timer"):
                debug_log("timer", "sound=%s st=%02x", "on" if active else "off", registers.sound_timer)
            self._notify(active)

    def _notify(self, active: bool) -> None:
        if self._sound_callback is not None:
            self._sound_callback(active)
