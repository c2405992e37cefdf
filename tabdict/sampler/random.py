"""Injectable integer randomness providers."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from ..errors import InvalidInputError


class RandomProvider(ABC):
    """Source of uniformly distributed integers."""

    @abstractmethod
    def next_in_range(self, low: int, high: int) -> int:
        """Return an integer drawn uniformly from ``[low, high]`` inclusive."""


def _check_bounds(low: int, high: int) -> None:
    if low > high:
        raise InvalidInputError(f"Empty range [{low}, {high}]")


class PythonRandom(RandomProvider):
    """Provider backed by ``random.Random``."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def next_in_range(self, low: int, high: int) -> int:
        _check_bounds(low, high)
        return self._rng.randint(low, high)


class NumpyRandom(RandomProvider):
    """Provider backed by a NumPy ``Generator``."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = np.random.default_rng(seed)

    def next_in_range(self, low: int, high: int) -> int:
        _check_bounds(low, high)
        return int(self._rng.integers(low, high, endpoint=True))


_DEFAULT = PythonRandom()


def default_provider() -> RandomProvider:
    """Return the shared, unseeded process-wide provider."""

    return _DEFAULT
