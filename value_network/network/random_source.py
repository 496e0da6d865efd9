"""
Random number sources for network generation.

The network never touches a global generator. Every sampling call goes
through an object satisfying the ``RandomSource`` protocol, so that
generation is reproducible given a seed and independent networks can be
built side by side with independent streams.
"""

from typing import List, Optional, Protocol

import numpy as np


class RandomSource(Protocol):
    """The sampling capability consumed by ``Network``."""

    def normal(self, mean: float, stddev: float) -> float:
        ...

    def poisson(self, rate: float) -> int:
        ...

    def uniform_int(self, low: int, high: int) -> int:
        """Sample uniformly from the inclusive range [low, high]."""
        ...


class NumpyRandomSource:
    """
    ``RandomSource`` backed by a ``numpy.random.Generator``.

    Samples are returned as plain Python ``float``/``int`` so callers
    never see numpy scalar types leak into node values or indices.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    @classmethod
    def from_generator(cls, generator: np.random.Generator) -> "NumpyRandomSource":
        """Wrap an existing generator instead of seeding a new one."""
        source = cls.__new__(cls)
        source.seed = None
        source._rng = generator
        return source

    def normal(self, mean: float, stddev: float) -> float:
        return float(self._rng.normal(mean, stddev))

    def poisson(self, rate: float) -> int:
        return int(self._rng.poisson(rate))

    def uniform_int(self, low: int, high: int) -> int:
        if high < low:
            raise ValueError(f"Empty range for uniform_int: [{low}, {high}]")
        return int(self._rng.integers(low, high, endpoint=True))

    def spawn(self, n: int) -> List["NumpyRandomSource"]:
        """Derive ``n`` statistically independent child sources."""
        return [self.from_generator(child) for child in self._rng.spawn(n)]

    def __repr__(self) -> str:
        return f"NumpyRandomSource(seed={self.seed})"
