"""
Visualization and plotting modules
"""

from .plots import plot_distribution, plot_validation, save_distribution_data

__all__ = ['plot_distribution', 'plot_validation', 'save_distribution_data']
