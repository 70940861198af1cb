"""
Generator matrix construction and reachability analysis
"""

from collections import deque
from typing import Dict, Sequence, Set

import numpy as np

from .base import ChainDefinition


def build_generator_matrix(chain: ChainDefinition) -> np.ndarray:
    """
    Build the rate matrix Q in state order.

    Q[i, j] is the summed rate of all transitions i -> j, and the diagonal
    holds minus the off-diagonal row sum so every row sums to zero.
    """
    n = chain.num_states
    q = np.zeros((n, n), dtype=np.float64)

    for transition in chain.transitions:
        i = chain.index_of(transition.source)
        j = chain.index_of(transition.target)
        q[i, j] += transition.rate

    np.fill_diagonal(q, 0.0)
    np.fill_diagonal(q, -q.sum(axis=1))
    return q


def matrix_to_dict(matrix: np.ndarray, states: Sequence[str]) -> Dict[str, Dict[str, float]]:
    """state-keyed view {from: {to: value}} of a state-indexed matrix"""
    return {
        src: {dst: float(matrix[i, j]) for j, dst in enumerate(states)}
        for i, src in enumerate(states)
    }


def _successors(q: np.ndarray) -> Dict[int, list]:
    n = q.shape[0]
    return {i: [j for j in range(n) if j != i and q[i, j] > 0] for i in range(n)}


def _bfs(start: int, successors: Dict[int, list]) -> Set[int]:
    visited = {start}
    queue = deque([start])
    while queue:
        u = queue.popleft()
        for v in successors[u]:
            if v not in visited:
                visited.add(v)
                queue.append(v)
    return visited


def reachable_from(chain: ChainDefinition, state: str) -> Set[str]:
    """states reachable from `state` through positive-rate paths (itself included)"""
    successors = _successors(build_generator_matrix(chain))
    visited = _bfs(chain.index_of(state), successors)
    return {chain.states[i] for i in visited}


def is_irreducible(chain: ChainDefinition) -> bool:
    """every state reachable from every other state"""
    n = chain.num_states
    if n <= 1:
        return True

    successors = _successors(build_generator_matrix(chain))
    for start in range(n):
        if len(_bfs(start, successors)) != n:
            return False
    return True
