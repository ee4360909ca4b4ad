from __future__ import annotations

from typing import Any

import numpy as np

DEFAULT_TOL: float = float(np.finfo(np.float64).eps)


class SingularMatrixError(np.linalg.LinAlgError):
    """Raised when a matrix is singular, or too close to singular for `tol`."""


def reciprocal_condition(a: Any, inv: Any) -> float:
    """Reciprocal 1-norm condition number of `a`, given its inverse."""

    denom = float(np.linalg.norm(a, 1)) * float(np.linalg.norm(inv, 1))
    if denom == 0.0:
        return 0.0
    return 1.0 / denom


def solve(a: Any, *, tol: float | None = None) -> np.ndarray:
    """Inverse of the square matrix `a`.

    `tol` is the tolerance for detecting near-singularity: if the reciprocal
    1-norm condition number of `a` falls below it, `SingularMatrixError` is
    raised instead of returning a numerically meaningless result. It defaults
    to float64 machine epsilon; pass ``tol=0`` to skip the check.

    Non-square input raises `numpy.linalg.LinAlgError`.
    """

    arr = np.asarray(a)
    if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
        raise np.linalg.LinAlgError(f"'a' must be a square matrix, got shape {arr.shape}")
    if arr.shape[0] == 0:
        raise np.linalg.LinAlgError("'a' must not be empty")

    if tol is None:
        tol = DEFAULT_TOL

    try:
        inv = np.linalg.inv(arr)
    except np.linalg.LinAlgError as exc:
        raise SingularMatrixError("Lapack routine reported an exactly singular matrix") from exc

    if tol > 0:
        rcond = reciprocal_condition(arr, inv)
        # NaN entries make rcond NaN; treat that as singular too.
        if not rcond >= tol:
            raise SingularMatrixError(
                f"system is computationally singular: reciprocal condition number = {rcond:g}"
            )

    return inv
