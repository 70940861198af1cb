"""
Continuous-time sample paths
"""

import bisect
import math
from typing import Dict, List, NamedTuple, Optional, Sequence

from chains.base import ChainDefinition

from .jump_chain import JumpRow, build_jump_chain, sample_jump
from .random_source import RandomSource


class TrajectoryEvent(NamedTuple):
    time: float
    state: str


def sample_initial_state(chain: ChainDefinition, rand: RandomSource) -> str:
    """single uniform draw against the cumulative initial distribution"""
    u = rand()
    cumulative = 0.0
    for state in chain.states:
        cumulative += chain.initial_distribution.get(state, 0.0)
        if u < cumulative:
            return state
    return chain.states[-1]


def sample_trajectory(chain: ChainDefinition, horizon: float, rand: RandomSource,
                      jump_chain: Optional[Dict[str, JumpRow]] = None) -> List[TrajectoryEvent]:
    """
    Sample jump events up to `horizon`.

    The first event is always (0, initial state). A jump landing at or past
    the horizon, or an absorbing state, ends the path at its last recorded
    state.
    """
    if jump_chain is None:
        jump_chain = build_jump_chain(chain)

    current = sample_initial_state(chain, rand)
    trajectory = [TrajectoryEvent(0.0, current)]
    time = 0.0

    while time < horizon:
        next_state, holding_time = sample_jump(current, jump_chain, rand)
        if math.isinf(holding_time) or time + holding_time >= horizon:
            break
        time += holding_time
        trajectory.append(TrajectoryEvent(time, next_state))
        current = next_state

    return trajectory


def states_at(trajectory: List[TrajectoryEvent], times: Sequence[float]) -> List[str]:
    """state occupied at each of `times` (last event at or before t)"""
    event_times = [event.time for event in trajectory]
    states = []
    for t in times:
        idx = bisect.bisect_right(event_times, t) - 1
        states.append(trajectory[max(idx, 0)].state)
    return states


def state_at(trajectory: List[TrajectoryEvent], t: float) -> str:
    """state occupied at time t"""
    return states_at(trajectory, [t])[0]
