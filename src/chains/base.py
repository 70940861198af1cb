"""
Chain definition data model
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple, NamedTuple

import numpy as np


class Transition(NamedTuple):
    source: str
    target: str
    rate: float


@dataclass(frozen=True)
class ChainDefinition:
    """validated continuous-time markov chain, immutable once parsed"""
    states: Tuple[str, ...]
    initial_distribution: Dict[str, float]
    transitions: Tuple[Transition, ...] = ()
    _index: Dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'states', tuple(self.states))
        object.__setattr__(self, 'transitions', tuple(Transition(*t) for t in self.transitions))
        object.__setattr__(self, '_index', {s: i for i, s in enumerate(self.states)})

    @property
    def num_states(self) -> int:
        return len(self.states)

    def index_of(self, state: str) -> int:
        return self._index[state]

    def initial_vector(self) -> np.ndarray:
        """initial distribution μ in state order"""
        return np.array([self.initial_distribution.get(s, 0.0) for s in self.states],
                        dtype=np.float64)
