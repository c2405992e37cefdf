"""Normalization of driver, NumPy and pandas scalars."""

from __future__ import annotations

import numpy as np
import pandas as pd


def plain_value(value: object) -> object:
    """
    Convert a scalar into a built-in or standard library type.

    ``Decimal`` is kept as is; converting it to ``float`` would merge
    distinct NUMERIC values.
    """

    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, pd.Timedelta):
        return value.to_pytimedelta()
    if isinstance(value, np.datetime64):
        return pd.Timestamp(value).to_pydatetime()
    if isinstance(value, np.timedelta64):
        return pd.Timedelta(value).to_pytimedelta()
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, (memoryview, bytearray)):
        return bytes(value)
    return value
