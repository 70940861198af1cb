"""
Stochastic simulation of chain trajectories
"""

from .random_source import RandomSource, seeded_source, system_source
from .jump_chain import JumpRow, build_jump_chain, sample_jump
from .trajectory import TrajectoryEvent, sample_initial_state, sample_trajectory, state_at, states_at
from .monte_carlo import SimulationConfig, SimulationResult, simulate

__all__ = ['RandomSource', 'seeded_source', 'system_source', 'JumpRow', 'build_jump_chain',
           'sample_jump', 'TrajectoryEvent', 'sample_initial_state', 'sample_trajectory',
           'state_at', 'states_at', 'SimulationConfig', 'SimulationResult', 'simulate']
