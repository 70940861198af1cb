"""
Stationary distribution of an irreducible chain
"""

import warnings
from typing import Dict, Optional

import numpy as np

from chains.base import ChainDefinition
from chains.generator import build_generator_matrix, is_irreducible
from compute.linalg import PIVOT_TOLERANCE, gaussian_elimination


def stationary_vector(chain: ChainDefinition) -> Optional[np.ndarray]:
    """
    Solve π Q = 0, Σπ = 1 as a square system.

    Q^T π^T = 0 is rank deficient for an irreducible chain, so the last
    equation is replaced by the normalization row of ones. Returns None for
    reducible chains (no unique stationary distribution), and also, with a
    RuntimeWarning, when the system is numerically singular under the pivot
    tolerance (e.g. every rate far below 1e-10).
    """
    if not is_irreducible(chain):
        return None

    n = chain.num_states
    if n == 0:
        return np.zeros(0, dtype=np.float64)

    system = build_generator_matrix(chain).T.copy()
    system[-1, :] = 1.0
    rhs = np.zeros(n, dtype=np.float64)
    rhs[-1] = 1.0

    pi = gaussian_elimination(system, rhs)
    if pi is None:
        warnings.warn(f"stationary system is numerically singular (pivot below {PIVOT_TOLERANCE}); "
                      f"rescale the rates", RuntimeWarning)
        return None

    # clamp round-off negatives
    return np.maximum(pi, 0.0)


def stationary_distribution(chain: ChainDefinition) -> Optional[Dict[str, float]]:
    """state -> long-run probability, or None if the chain is not irreducible"""
    pi = stationary_vector(chain)
    if pi is None:
        return None
    return {state: float(p) for state, p in zip(chain.states, pi)}
