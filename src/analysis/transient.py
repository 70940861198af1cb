"""
Exact time-dependent distribution through the matrix exponential
"""

from dataclasses import dataclass
from typing import Dict, Sequence

import numpy as np

from chains.base import ChainDefinition
from chains.generator import build_generator_matrix
from compute.expm import matrix_exponential


@dataclass
class DistributionResult:
    """time grid with one probability series per state"""
    times: np.ndarray
    distributions: Dict[str, np.ndarray]

    def at(self, index: int) -> Dict[str, float]:
        """distribution at a single grid index"""
        return {s: float(values[index]) for s, values in self.distributions.items()}

    def as_matrix(self, states: Sequence[str]) -> np.ndarray:
        """grid x state array"""
        return np.column_stack([self.distributions[s] for s in states])


def distribution_over_time(chain: ChainDefinition, times: Sequence[float]) -> DistributionResult:
    """
    Marginal Pr(X(t) = s) for each requested t.

    Each time point costs one matrix exponential, so large t·||Q|| degrades
    through the repeated squaring.
    """
    grid = np.asarray(times, dtype=np.float64)
    q = build_generator_matrix(chain)
    mu = chain.initial_vector()

    values = np.zeros((len(grid), chain.num_states), dtype=np.float64)
    for idx, t in enumerate(grid):
        values[idx] = mu @ matrix_exponential(q, chain.states, float(t))

    distributions = {s: values[:, i].copy() for i, s in enumerate(chain.states)}
    return DistributionResult(times=grid, distributions=distributions)
