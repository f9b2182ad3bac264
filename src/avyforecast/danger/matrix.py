"""Likelihood x size risk matrix.

Rows run from likelihood 5 (Certain) down to 1 (Unlikely), columns from
size 1 (Small) to 5 (Catastrophic), so the cell for (likelihood, size) is
``RISK_MATRIX[5 - likelihood, size - 1]``.
"""

from __future__ import annotations

import numpy as np

from avyforecast.models.enums import DangerLevel

RISK_MATRIX = np.array(
    [
        [3, 4, 4, 5, 5],  # 5 Certain
        [2, 3, 4, 4, 5],  # 4 Very Likely
        [2, 3, 3, 4, 4],  # 3 Likely
        [1, 2, 3, 3, 4],  # 2 Possible
        [1, 1, 2, 3, 3],  # 1 Unlikely
    ],
    dtype=np.int8,
)
RISK_MATRIX.setflags(write=False)

MIN_LEVEL = 1
MAX_LEVEL = 5


def _check_level(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ValueError(f"{name} must be an integer in [1, 5], got {value!r}")
    if not MIN_LEVEL <= value <= MAX_LEVEL:
        raise ValueError(f"{name} must be in [1, 5], got {value}")
    return int(value)


def risk_level(likelihood: int, size: int) -> DangerLevel:
    """Danger level for a single (likelihood, size) pair."""
    likelihood = _check_level("likelihood", likelihood)
    size = _check_level("size", size)
    return DangerLevel(int(RISK_MATRIX[MAX_LEVEL - likelihood, size - 1]))


def risk_levels(likelihoods, sizes) -> np.ndarray:
    """Vectorized lookup over equally shaped integer arrays.

    Returns an int8 array of danger levels with the same shape as the inputs.
    """
    lk = np.asarray(likelihoods)
    sz = np.asarray(sizes)
    if lk.shape != sz.shape:
        raise ValueError(f"Shape mismatch: likelihoods {lk.shape} vs sizes {sz.shape}")
    if lk.size == 0:
        return np.empty(lk.shape, dtype=RISK_MATRIX.dtype)
    for name, arr in (("likelihood", lk), ("size", sz)):
        if not np.issubdtype(arr.dtype, np.integer):
            raise ValueError(f"{name} values must be integers, got dtype {arr.dtype}")
        if arr.min() < MIN_LEVEL or arr.max() > MAX_LEVEL:
            raise ValueError(f"{name} values must be in [1, 5]")
    return RISK_MATRIX[MAX_LEVEL - lk, sz - 1]
