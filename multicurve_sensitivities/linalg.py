from __future__ import annotations

import numpy as np
from typing import Sequence

from .exceptions import NumericalError


def assemble_matrix(values: Sequence[float], n: int) -> np.ndarray:
    """
    Build the n x n sensitivity matrix from finite-difference columns
    concatenated in quote order: values[j * n + i] = S[i, j].
    """
    flat = np.asarray(values, dtype=float)
    if flat.size != n * n:
        raise NumericalError(f"Expected {n * n} sensitivities for a {n}x{n} matrix, got {flat.size}.")
    return flat.reshape((n, n), order="F")


def invert_matrix(matrix: np.ndarray, max_condition_number: float = 1e12) -> np.ndarray:
    m = np.asarray(matrix, dtype=float)
    if m.ndim != 2 or m.shape[0] != m.shape[1]:
        raise NumericalError(f"Cannot invert a non-square matrix of shape {m.shape}.")
    if not np.all(np.isfinite(m)):
        raise NumericalError("Sensitivity matrix contains non-finite entries.")

    cond = np.linalg.cond(m)
    if not np.isfinite(cond) or cond > max_condition_number:
        raise NumericalError(f"Sensitivity matrix is singular or ill-conditioned (cond={cond:.3e}).")

    try:
        inv = np.linalg.inv(m)
    except np.linalg.LinAlgError as exc:
        raise NumericalError(f"Sensitivity matrix is singular: {exc}") from exc

    if not np.all(np.isfinite(inv)):
        raise NumericalError("Inverse sensitivity matrix contains non-finite entries.")
    return inv
