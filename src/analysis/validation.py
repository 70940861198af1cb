"""
- parse a chain and compute its exact transient distribution
- run the monte-carlo simulation on the same grid
- compare both with total variation, and the simulation's end point with π
"""

import time
import json
from dataclasses import dataclass, asdict
from typing import Dict, Any, Optional

import numpy as np
import yaml

from chains import EXAMPLE_CHAINS, ChainDefinition, parse_or_raise
from chains.generator import build_generator_matrix, is_irreducible, matrix_to_dict
from compute.grid import evenly_spaced_times
from simulation import SimulationConfig, SimulationResult, simulate, system_source

from .convergence import (
    ConvergenceConfig, ConvergenceReport, distance_series, distance_to_stationary,
    summarize_convergence, total_variation_distance,
)
from .stationary import stationary_distribution
from .transient import DistributionResult, distribution_over_time


@dataclass
class ValidationConfig:
    """configuration for a theory-vs-simulation comparison"""
    # chain source: literal description text or a registered example name
    chain_text: Optional[str] = None
    example: Optional[str] = None

    # simulation settings
    horizon: float = 10.0
    grid_points: int = 100
    trajectory_count: int = 500
    seed: Optional[int] = None

    # analysis settings
    confidence_level: float = 0.95
    convergence: Optional[ConvergenceConfig] = None

    # output settings
    output_dir: str = "validation_results"
    verbose: bool = True

    def __post_init__(self):
        if self.convergence is None:
            self.convergence = ConvergenceConfig()
        elif isinstance(self.convergence, dict):
            self.convergence = ConvergenceConfig(**self.convergence)

        if self.chain_text is None and self.example is None:
            raise ValueError("either 'chain_text' or 'example' must be given")
        if self.example is not None and self.example not in EXAMPLE_CHAINS:
            raise ValueError(f"unknown example '{self.example}', "
                             f"must be one of {sorted(EXAMPLE_CHAINS)}")
        if not 0.0 < self.confidence_level < 1.0:
            raise ValueError(f"confidence_level must lie in (0, 1), got {self.confidence_level}")

        # horizon, grid and trajectory checks
        self.simulation_config()

    def source_text(self) -> str:
        if self.chain_text is not None:
            return self.chain_text
        return EXAMPLE_CHAINS[self.example]

    def simulation_config(self) -> SimulationConfig:
        return SimulationConfig(
            trajectory_count=self.trajectory_count,
            horizon=self.horizon,
            grid_points=self.grid_points,
            verbose=self.verbose,
        )

    @classmethod
    def from_yaml(cls, yaml_path: str) -> 'ValidationConfig':
        """load validation config from yaml file"""
        with open(yaml_path, 'r') as f:
            config = yaml.safe_load(f) or {}
        return cls(**config)

    def to_yaml(self, yaml_path: str):
        """save validation config to yaml file"""
        with open(yaml_path, 'w') as f:
            yaml.dump(asdict(self), f, default_flow_style=False)


@dataclass
class ValidationResults:
    """exact and simulated distributions for one chain plus their distances"""
    chain: ChainDefinition
    generator: np.ndarray
    irreducible: bool
    stationary: Optional[Dict[str, float]]
    exact: DistributionResult
    simulated: SimulationResult
    simulation_distance: np.ndarray  # tv(simulated, exact) per grid point
    exact_to_stationary: Optional[np.ndarray]
    convergence_report: Optional[ConvergenceReport]
    final_distance_to_stationary: Optional[float]
    compute_time: float
    confidence_level: float = 0.95

    @property
    def max_simulation_distance(self) -> float:
        return float(np.max(self.simulation_distance))

    def band_coverage(self) -> float:
        """fraction of (state, time) points where the exact value lies in the simulation band"""
        bands = self.simulated.confidence_band(self.confidence_level)
        inside = [
            (self.exact.distributions[s] >= low - 1e-12) & (self.exact.distributions[s] <= high + 1e-12)
            for s, (low, high) in bands.items()
        ]
        return float(np.mean(np.concatenate(inside)))

    def summary(self) -> Dict[str, Any]:
        return {
            'states': list(self.chain.states),
            'irreducible': self.irreducible,
            'stationary': self.stationary,
            'trajectory_count': self.simulated.trajectory_count,
            'horizon': float(self.exact.times[-1]),
            'max_simulation_distance': self.max_simulation_distance,
            'mean_simulation_distance': float(np.mean(self.simulation_distance)),
            'band_coverage': self.band_coverage(),
            'confidence_level': self.confidence_level,
            'final_distance_to_stationary': self.final_distance_to_stationary,
            'convergence': asdict(self.convergence_report) if self.convergence_report else None,
            'compute_time': self.compute_time,
        }

    def save(self, filepath: str):
        """save comprehensive results"""
        data = {
            'summary': self.summary(),
            'generator': matrix_to_dict(self.generator, self.chain.states),
            'times': self.exact.times.tolist(),
            'exact': {s: v.tolist() for s, v in self.exact.distributions.items()},
            'simulated': {s: v.tolist() for s, v in self.simulated.proportions.items()},
            'simulation_distance': self.simulation_distance.tolist(),
            'exact_to_stationary': (self.exact_to_stationary.tolist()
                                    if self.exact_to_stationary is not None else None),
            'timestamp': time.time(),
        }
        with open(filepath, 'w') as f:
            json.dump(data, f, indent=2, default=str)


class ValidationRunner:
    """theory vs simulation for a single chain"""

    def __init__(self, config: ValidationConfig):
        self.config = config
        self.chain = parse_or_raise(config.source_text())

    def _log(self, message: str) -> None:
        if self.config.verbose:
            print(message)

    def run(self) -> ValidationResults:
        start_time = time.time()
        chain = self.chain
        states = chain.states

        self._log(f"  chain with {chain.num_states} states, {len(chain.transitions)} transitions")
        generator = build_generator_matrix(chain)
        irreducible = is_irreducible(chain)
        stationary = stationary_distribution(chain)
        self._log(f"  irreducible: {'yes' if irreducible else 'no'}")

        times = evenly_spaced_times(self.config.horizon, self.config.grid_points)
        self._log(f"  computing exact distribution at {len(times)} time points...")
        exact = distribution_over_time(chain, times)

        self._log(f"  simulating {self.config.trajectory_count} trajectories...")
        rand = system_source(self.config.seed)
        simulated = simulate(chain, self.config.simulation_config(), rand)

        simulation_distance = distance_series(simulated.proportions, exact.distributions, states)

        exact_to_stationary = None
        report = None
        final_distance = None
        if stationary is not None:
            exact_to_stationary = distance_to_stationary(exact.distributions, stationary, states)
            report = summarize_convergence(times, exact_to_stationary, self.config.convergence)
            final_distance = total_variation_distance(simulated.final(), stationary, states)

        return ValidationResults(
            chain=chain,
            generator=generator,
            irreducible=irreducible,
            stationary=stationary,
            exact=exact,
            simulated=simulated,
            simulation_distance=simulation_distance,
            exact_to_stationary=exact_to_stationary,
            convergence_report=report,
            final_distance_to_stationary=final_distance,
            compute_time=time.time() - start_time,
            confidence_level=self.config.confidence_level,
        )
