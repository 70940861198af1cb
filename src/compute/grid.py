"""
Time grids
"""

import math

import numpy as np


def evenly_spaced_times(horizon: float, points: int) -> np.ndarray:
    """points grid times i / (points - 1) * horizon, i = 0 .. points - 1"""
    if points < 2:
        raise ValueError(f"need at least 2 time points, got {points}")
    if not math.isfinite(horizon) or horizon <= 0:
        raise ValueError(f"horizon must be a positive finite number, got {horizon}")
    return np.arange(points, dtype=np.float64) / (points - 1) * horizon
