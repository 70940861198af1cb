"""
Uniform random sources for trajectory sampling
"""

from typing import Callable, Optional

import numpy as np

# zero-argument callable returning a float in [0, 1)
RandomSource = Callable[[], float]


def seeded_source(seed: int) -> RandomSource:
    """reproducible source backed by numpy's default generator"""
    return np.random.default_rng(seed).random


def system_source(seed: Optional[int] = None) -> RandomSource:
    """seeded if a seed is given, otherwise drawn from OS entropy"""
    if seed is not None:
        return seeded_source(seed)
    return np.random.default_rng().random
