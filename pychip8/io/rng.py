"""Random byte sources for the ``Cxkk`` instruction."""

from __future__ import annotations

import random


class RandomSource:
    """Interface for the random number collaborator."""

    def next_byte(self) -> int:  # pragma: no cover - interface
        raise NotImplementedError


class SystemRandomSource(RandomSource):
    """Uniform bytes from a (optionally seeded) ``random.Random``."""

    def __init__(self, seed: int | None = None) -> None:
        self._random = random.Random(seed)

    def next_byte(self) -> int:
        return self._random.randrange(0x100)
