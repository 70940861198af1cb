"""
Dense numerical kernels
"""

from .linalg import gaussian_elimination, gauss_jordan_inverse, SingularMatrixError, PIVOT_TOLERANCE
from .expm import matrix_exponential
from .grid import evenly_spaced_times

__all__ = ['gaussian_elimination', 'gauss_jordan_inverse', 'SingularMatrixError',
           'PIVOT_TOLERANCE', 'matrix_exponential', 'evenly_spaced_times']
