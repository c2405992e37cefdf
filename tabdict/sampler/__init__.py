"""Weighted value sampling utilities."""

from .lottery import draw
from .random import NumpyRandom, PythonRandom, RandomProvider, default_provider

__all__ = [
    "draw",
    "NumpyRandom",
    "PythonRandom",
    "RandomProvider",
    "default_provider",
]
