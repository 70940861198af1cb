"""
Dense linear algebra primitives: gaussian elimination and gauss-jordan inversion
"""

import warnings
from typing import Optional

import numpy as np

PIVOT_TOLERANCE = 1e-10


class SingularMatrixError(ArithmeticError):
    """pivot magnitude fell below PIVOT_TOLERANCE"""


def _pivot_row(work: np.ndarray, col: int) -> int:
    return col + int(np.argmax(np.abs(work[col:, col])))


def _swap_rows(matrix: np.ndarray, i: int, j: int) -> None:
    if i != j:
        matrix[[i, j]] = matrix[[j, i]]


def gaussian_elimination(a: np.ndarray, b: np.ndarray) -> Optional[np.ndarray]:
    """
    Solve a x = b with partial pivoting.

    args:
        a: square coefficient matrix (not modified)
        b: right-hand side vector (not modified)

    returns:
        solution vector, or None when the system is singular
    """
    work = np.array(a, dtype=np.float64, copy=True)
    rhs = np.array(b, dtype=np.float64, copy=True)
    n = work.shape[0]

    # forward elimination
    for col in range(n):
        pivot = _pivot_row(work, col)
        if abs(work[pivot, col]) < PIVOT_TOLERANCE:
            return None
        _swap_rows(work, col, pivot)
        _swap_rows(rhs, col, pivot)

        factors = work[col + 1:, col] / work[col, col]
        work[col + 1:, col:] -= np.outer(factors, work[col, col:])
        rhs[col + 1:] -= factors * rhs[col]

    # back substitution
    x = np.zeros(n, dtype=np.float64)
    for i in range(n - 1, -1, -1):
        x[i] = (rhs[i] - work[i, i + 1:] @ x[i + 1:]) / work[i, i]
    return x


def gauss_jordan_inverse(a: np.ndarray, raise_on_singular: bool = False) -> np.ndarray:
    """
    Invert a square matrix by gauss-jordan elimination with partial pivoting.

    Columns whose best pivot is negligible are skipped and the matching
    inverse row keeps its identity template, so the result is meaningless for
    singular input. Pass raise_on_singular=True to get SingularMatrixError
    instead.
    """
    work = np.array(a, dtype=np.float64, copy=True)
    n = work.shape[0]
    inverse = np.eye(n, dtype=np.float64)
    skipped = []

    for col in range(n):
        pivot = _pivot_row(work, col)
        if abs(work[pivot, col]) < PIVOT_TOLERANCE:
            if raise_on_singular:
                raise SingularMatrixError(
                    f"matrix is singular to working precision (column {col}, "
                    f"pivot {work[pivot, col]:.3e})"
                )
            skipped.append(col)
            continue

        _swap_rows(work, col, pivot)
        _swap_rows(inverse, col, pivot)

        scale = work[col, col]
        work[col] /= scale
        inverse[col] /= scale

        factors = work[:, col].copy()
        factors[col] = 0.0
        work -= np.outer(factors, work[col])
        inverse -= np.outer(factors, inverse[col])

    if skipped:
        warnings.warn(f"gauss-jordan inversion skipped negligible pivots in columns {skipped}",
                      RuntimeWarning)
    return inverse
