"""
Sources of randomness for building networks.

Network construction never reaches for a global generator. Every constructor
takes a `RandomSource`, so a fixed seed (or a scripted source in tests) always
produces the same network.
"""

from typing import Optional, Protocol

import numpy as np


class RandomSource(Protocol):
    """
    The two uniform draws needed to build a network.
    """

    def next_bool(self) -> bool:
        ...

    def next_in_range(self, lo: int, hi_exclusive: int) -> int:
        ...


class NumpyRandomSource:
    """
    A `RandomSource` backed by a numpy `Generator`.

    Parameters
    ----------
    seed : Optional[int] (default: None)
        Seed for the underlying generator. If None, fresh OS entropy is used.
    generator : Optional[np.random.Generator] (default: None)
        An existing generator to draw from. Takes precedence over `seed`.
    """

    generator: np.random.Generator

    def __init__(
        self,
        seed: Optional[int] = None,
        generator: Optional[np.random.Generator] = None,
    ):
        self.generator = generator if generator is not None else np.random.default_rng(seed)

    def next_bool(self) -> bool:
        return bool(self.generator.integers(0, 2))

    def next_in_range(self, lo: int, hi_exclusive: int) -> int:
        if hi_exclusive <= lo:
            raise ValueError(f"empty range [{lo}, {hi_exclusive})")
        return int(self.generator.integers(lo, hi_exclusive))


def default_source(seed: Optional[int] = None) -> RandomSource:
    return NumpyRandomSource(seed)
