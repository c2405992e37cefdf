"""Lottery-style weighted selection over count-descending value lists."""

from __future__ import annotations

from typing import Sequence, Tuple

from ..errors import InvalidStateError
from .random import RandomProvider


def draw(
    values: Sequence[Tuple[object, int]],
    total: int,
    rng: RandomProvider,
) -> object:
    """
    Pick a value with probability ``count / total``.

    A ticket is drawn from ``[1, total]`` and the value list is walked in
    order, subtracting each count until the ticket falls inside the current
    value's range. No expanded weight array is built.
    """

    if total <= 0:
        raise InvalidStateError("Cannot sample from an entry without observed values")
    lottery = rng.next_in_range(1, total)
    for value, count in values:
        if lottery > count:
            lottery -= count
            continue
        return value
    raise InvalidStateError(
        f"Lottery walk exhausted all values; counts do not add up to total {total}"
    )
