"""
Distances between distributions and convergence toward equilibrium
"""

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

import numpy as np


@dataclass
class ConvergenceConfig:
    """configuration for convergence summaries"""
    tolerance: float = 0.01  # tv threshold defining the mixing time
    monotone_slack: float = 1e-6  # allowed increase between consecutive grid points
    trend_window: int = 5  # trailing points used for the slope estimate


@dataclass
class ConvergenceReport:
    """summary of a total variation series over a time grid"""
    initial_distance: float
    final_distance: float
    max_distance: float
    mixing_time: Optional[float]
    is_monotone: bool
    final_trend: float

    @property
    def converged(self) -> bool:
        return self.mixing_time is not None


def total_variation_distance(p: Mapping[str, float], q: Mapping[str, float],
                             states: Sequence[str]) -> float:
    """(1/2) Σ_s |p(s) - q(s)|, missing states count as 0"""
    return 0.5 * sum(abs(p.get(s, 0.0) - q.get(s, 0.0)) for s in states)


def distance_series(a: Mapping[str, Sequence[float]], b: Mapping[str, Sequence[float]],
                    states: Sequence[str]) -> np.ndarray:
    """total variation at each aligned grid index of two per-state series"""
    left = np.column_stack([np.asarray(a[s], dtype=np.float64) for s in states])
    right = np.column_stack([np.asarray(b[s], dtype=np.float64) for s in states])
    if left.shape != right.shape:
        raise ValueError(f"grid mismatch: {left.shape[0]} vs {right.shape[0]} points")
    return 0.5 * np.sum(np.abs(left - right), axis=1)


def distance_to_stationary(distributions: Mapping[str, Sequence[float]],
                           stationary: Mapping[str, float],
                           states: Sequence[str]) -> np.ndarray:
    """total variation of every grid point against a fixed distribution"""
    values = np.column_stack([np.asarray(distributions[s], dtype=np.float64) for s in states])
    target = np.array([stationary.get(s, 0.0) for s in states], dtype=np.float64)
    return 0.5 * np.sum(np.abs(values - target), axis=1)


def mixing_time(times: Sequence[float], distances: Sequence[float],
                tolerance: float) -> Optional[float]:
    """first grid time where the distance is within tolerance"""
    hits = np.nonzero(np.asarray(distances) <= tolerance)[0]
    if len(hits) == 0:
        return None
    return float(np.asarray(times)[hits[0]])


def summarize_convergence(times: Sequence[float], distances: Sequence[float],
                          config: Optional[ConvergenceConfig] = None) -> ConvergenceReport:
    if config is None:
        config = ConvergenceConfig()

    times = np.asarray(times, dtype=np.float64)
    distances = np.asarray(distances, dtype=np.float64)
    if len(distances) == 0:
        raise ValueError("empty distance series")

    increases = np.diff(distances)
    is_monotone = bool(np.all(increases <= config.monotone_slack))

    # trend analysis (linear fit slope)
    window = min(config.trend_window, len(distances))
    if window > 2:
        slope, _ = np.polyfit(times[-window:], distances[-window:], 1)
    else:
        slope = 0.0

    return ConvergenceReport(
        initial_distance=float(distances[0]),
        final_distance=float(distances[-1]),
        max_distance=float(np.max(distances)),
        mixing_time=mixing_time(times, distances, config.tolerance),
        is_monotone=is_monotone,
        final_trend=float(slope),
    )
