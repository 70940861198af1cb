"""
Embedded jump chain: exit rates and cumulative target thresholds per state
"""

import math
import sys
from dataclasses import dataclass
from typing import Dict, Tuple

from chains.base import ChainDefinition
from chains.generator import build_generator_matrix

from .random_source import RandomSource


@dataclass(frozen=True)
class JumpRow:
    total_rate: float
    targets: Tuple[str, ...]
    thresholds: Tuple[float, ...]

    @property
    def is_absorbing(self) -> bool:
        return self.total_rate == 0.0


def build_jump_chain(chain: ChainDefinition) -> Dict[str, JumpRow]:
    """aggregate outgoing rates of every state from the generator matrix"""
    q = build_generator_matrix(chain)
    table: Dict[str, JumpRow] = {}

    for i, state in enumerate(chain.states):
        targets = []
        thresholds = []
        total = 0.0
        for j, target in enumerate(chain.states):
            if j == i or q[i, j] <= 0.0:
                continue
            total += q[i, j]
            targets.append(target)
            thresholds.append(total)
        table[state] = JumpRow(total_rate=total, targets=tuple(targets),
                               thresholds=tuple(thresholds))

    return table


def sample_jump(state: str, jump_chain: Dict[str, JumpRow],
                rand: RandomSource) -> Tuple[str, float]:
    """
    Draw (next_state, holding_time) from `state`.

    Absorbing states return (state, inf). Otherwise the holding time is
    Exponential(total_rate) by inverse CDF and the target is chosen with a
    second draw scaled by the total rate.
    """
    row = jump_chain.get(state)
    if row is None or row.is_absorbing:
        return state, math.inf

    # u == 0 would give an infinite holding time
    u = max(rand(), sys.float_info.min)
    holding_time = -math.log(u) / row.total_rate

    threshold = rand() * row.total_rate
    next_state = row.targets[-1]
    for target, cumulative in zip(row.targets, row.thresholds):
        if threshold < cumulative:
            next_state = target
            break

    return next_state, holding_time
