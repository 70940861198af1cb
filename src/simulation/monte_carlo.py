"""
Monte-Carlo estimate of marginal state probabilities on a time grid
"""

import json
import math
import time
from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np

from compute.grid import evenly_spaced_times
from chains.base import ChainDefinition

from .jump_chain import build_jump_chain
from .random_source import RandomSource
from .trajectory import sample_trajectory, states_at


@dataclass
class SimulationConfig:
    """configuration for a monte-carlo run"""
    trajectory_count: int = 500
    horizon: float = 10.0
    grid_points: int = 100
    verbose: bool = False
    progress_every: int = 1000  # trajectories between progress lines when verbose

    def __post_init__(self):
        if self.trajectory_count < 1:
            raise ValueError(f"trajectory_count must be >= 1, got {self.trajectory_count}")
        if not math.isfinite(self.horizon) or self.horizon <= 0:
            raise ValueError(f"horizon must be a positive finite number, got {self.horizon}")
        if self.grid_points < 2:
            raise ValueError(f"grid_points must be >= 2, got {self.grid_points}")


@dataclass
class SimulationResult:
    """empirical occupation probabilities, shaped like DistributionResult"""
    times: np.ndarray
    proportions: Dict[str, np.ndarray]
    counts: Dict[str, np.ndarray]
    trajectory_count: int
    compute_time: float = 0.0

    def at(self, index: int) -> Dict[str, float]:
        return {s: float(values[index]) for s, values in self.proportions.items()}

    def final(self) -> Dict[str, float]:
        return self.at(len(self.times) - 1)

    def standard_errors(self) -> Dict[str, np.ndarray]:
        """binomial standard error of each proportion"""
        m = self.trajectory_count
        return {s: np.sqrt(p * (1.0 - p) / m) for s, p in self.proportions.items()}

    def confidence_band(self, confidence_level: float = 0.95) -> Dict[str, Tuple[np.ndarray, np.ndarray]]:
        """normal-approximation band per state, clipped to [0, 1]"""
        z = get_z_score(confidence_level)
        errors = self.standard_errors()
        return {
            s: (np.clip(p - z * errors[s], 0.0, 1.0), np.clip(p + z * errors[s], 0.0, 1.0))
            for s, p in self.proportions.items()
        }

    def save(self, filepath: str):
        """save result (not the chain) to json"""
        data = {
            'times': self.times.tolist(),
            'proportions': {s: v.tolist() for s, v in self.proportions.items()},
            'counts': {s: v.tolist() for s, v in self.counts.items()},
            'trajectory_count': self.trajectory_count,
            'compute_time': self.compute_time,
        }
        with open(filepath, 'w') as f:
            json.dump(data, f, indent=2, default=str)

    @classmethod
    def load(cls, filepath: str) -> 'SimulationResult':
        with open(filepath, 'r') as f:
            data = json.load(f)
        return cls(
            times=np.array(data['times'], dtype=np.float64),
            proportions={s: np.array(v, dtype=np.float64) for s, v in data['proportions'].items()},
            counts={s: np.array(v, dtype=np.int64) for s, v in data['counts'].items()},
            trajectory_count=data['trajectory_count'],
            compute_time=data.get('compute_time', 0.0),
        )


def get_z_score(confidence_level: float) -> float:
    """two-sided z-score for confidence level"""
    if confidence_level == 0.95:
        return 1.96
    elif confidence_level == 0.99:
        return 2.576
    else:
        from scipy.stats import norm
        return float(norm.ppf((1 + confidence_level) / 2))


def simulate(chain: ChainDefinition, config: SimulationConfig, rand: RandomSource) -> SimulationResult:
    """
    Run independent trajectories and bin the occupied state at each grid time.

    args:
        chain: parsed chain definition
        config: trajectory count, horizon and grid size
        rand: uniform source on [0, 1); seed it for reproducible output
    """
    start_time = time.time()
    grid = evenly_spaced_times(config.horizon, config.grid_points)
    jump_chain = build_jump_chain(chain)
    counts = np.zeros((chain.num_states, config.grid_points), dtype=np.int64)

    for traj_idx in range(config.trajectory_count):
        trajectory = sample_trajectory(chain, config.horizon, rand, jump_chain)

        for i, state in enumerate(states_at(trajectory, grid)):
            counts[chain.index_of(state), i] += 1

        if config.verbose and (traj_idx + 1) % config.progress_every == 0:
            print(f"    simulated {traj_idx + 1}/{config.trajectory_count} trajectories")

    proportions = counts / config.trajectory_count
    compute_time = time.time() - start_time
    if config.verbose:
        print(f"    simulation finished in {compute_time:.2f}s")

    return SimulationResult(
        times=grid,
        proportions={s: proportions[i].copy() for i, s in enumerate(chain.states)},
        counts={s: counts[i].copy() for i, s in enumerate(chain.states)},
        trajectory_count=config.trajectory_count,
        compute_time=compute_time,
    )
