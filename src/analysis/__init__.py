"""
Exact distributions, equilibrium and convergence analysis
"""

from .stationary import stationary_distribution, stationary_vector
from .transient import DistributionResult, distribution_over_time

# distances between distributions
from .convergence import (
    ConvergenceConfig, ConvergenceReport, total_variation_distance, distance_series,
    distance_to_stationary, mixing_time, summarize_convergence,
)

# theory vs simulation
from .validation import ValidationConfig, ValidationRunner, ValidationResults

__all__ = ['stationary_distribution', 'stationary_vector', 'DistributionResult',
           'distribution_over_time', 'ConvergenceConfig', 'ConvergenceReport',
           'total_variation_distance', 'distance_series', 'distance_to_stationary',
           'mixing_time', 'summarize_convergence', 'ValidationConfig', 'ValidationRunner',
           'ValidationResults']
