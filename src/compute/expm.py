"""
Matrix exponential via scaling-and-squaring with a degree-2 rational approximation
"""

import math
from typing import Sequence, Tuple

import numpy as np

from .linalg import gauss_jordan_inverse


def infinity_norm(matrix: np.ndarray) -> float:
    """maximum absolute row sum"""
    if matrix.size == 0:
        return 0.0
    return float(np.max(np.sum(np.abs(matrix), axis=1)))


def scaling_exponent(norm: float) -> int:
    """smallest m >= 0 with norm / 2**m <= 1"""
    if norm <= 0.0:
        return 0
    return max(0, math.ceil(math.log2(norm)))


def pade_approximant(m: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """numerator I + M/2 + M^2/12 and denominator I - M/2 + M^2/12"""
    identity = np.eye(m.shape[0], dtype=np.float64)
    m2 = m @ m
    numerator = identity + m / 2.0 + m2 / 12.0
    denominator = identity - m / 2.0 + m2 / 12.0
    return numerator, denominator


def matrix_exponential(q: np.ndarray, states: Sequence[str], t: float) -> np.ndarray:
    """
    Transition matrix P(t) = exp(Q t), P[i, j] = Pr(X(t) = j | X(0) = i).

    args:
        q: generator matrix in the order of `states`
        states: state ordering of q
        t: time (>= 0)

    raises:
        SingularMatrixError: the rational denominator could not be inverted
    """
    n = len(states)
    if n == 0:
        return np.zeros((0, 0), dtype=np.float64)

    qt = np.asarray(q, dtype=np.float64) * t

    # scale so the norm is at most 1
    m = scaling_exponent(infinity_norm(qt))
    scaled = qt / (2.0 ** m)

    numerator, denominator = pade_approximant(scaled)
    result = gauss_jordan_inverse(denominator, raise_on_singular=True) @ numerator

    # undo scaling
    for _ in range(m):
        result = result @ result

    return result
