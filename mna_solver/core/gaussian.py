"""
Gaussian elimination with partial pivoting.

Used to solve the dense MNA system. Ground-adjacent nodes and voltage source
auxiliary rows routinely produce zero diagonal entries, so the row with the
largest magnitude in the pivot column is always swapped into place before
eliminating.
"""

import logging
import numpy as np

from .errors import SingularMatrix

logger = logging.getLogger(__name__)

PIVOT_TOLERANCE = 1e-9


def gaussian_elimination(A, B, tolerance: float = PIVOT_TOLERANCE) -> np.ndarray:
    """
    Solve A x = B by forward elimination with partial pivoting and back substitution.

    The inputs are copied and never modified.

    Args:
        A: (n,n) coefficient matrix
        B: (n,) right-hand side vector
        tolerance: Smallest absolute pivot accepted

    Returns:
        np.ndarray: (n,) solution vector

    Raises:
        ValueError: If the shapes are inconsistent
        SingularMatrix: If a pivot below tolerance is found
    """
    A = np.array(A, dtype=float, copy=True)
    B = np.array(B, dtype=float, copy=True).ravel()

    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        raise ValueError(f"A must be a square matrix, got shape {A.shape}")
    n = A.shape[0]
    if B.size != n:
        raise ValueError(f"B must have size {n}, got {B.size}")

    for i in range(n):
        # First row with the largest magnitude wins ties
        pivot_row = i + int(np.argmax(np.abs(A[i:, i])))
        if pivot_row != i:
            A[[i, pivot_row]] = A[[pivot_row, i]]
            B[[i, pivot_row]] = B[[pivot_row, i]]
            logger.debug(f"Column {i}: swapped rows {i} and {pivot_row}")

        if abs(A[i, i]) < tolerance:
            raise SingularMatrix(
                "Singular matrix detected! The circuit may have floating nodes, "
                "no ground reference, or an invalid voltage source loop."
            )

        for k in range(i + 1, n):
            factor = A[k, i] / A[i, i]
            if factor == 0.0:
                continue
            B[k] -= factor * B[i]
            A[k, i:] -= factor * A[i, i:]

    x = np.zeros(n, dtype=float)
    for i in range(n - 1, -1, -1):
        residual = B[i] - np.dot(A[i, i + 1:], x[i + 1:])
        x[i] = residual / A[i, i]
    return x
