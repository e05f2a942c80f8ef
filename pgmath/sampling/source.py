from __future__ import annotations

from typing import Protocol, runtime_checkable

__all__ = ["RandomSource"]


@runtime_checkable
class RandomSource(Protocol):
    """
    The two draws the samplers need from a random number generator.

    `numpy.random.Generator` follows this protocol. The samplers advance the
    source as a side effect; sharing one source between threads needs
    external locking.
    """

    def standard_exponential(self) -> float:
        ...

    def random(self) -> float:
        ...
