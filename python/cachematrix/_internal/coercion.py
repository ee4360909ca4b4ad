from __future__ import annotations

from typing import Any

import numpy as np


def placeholder_value() -> np.ndarray:
    """Default matrix value: a single missing entry."""

    return freeze(np.full((1, 1), np.nan))


def freeze(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array


def own_value(candidate: Any) -> np.ndarray:
    """Private, read-only copy of a matrix-like value.

    Shape and contents are not checked here; a malformed value only surfaces
    when the solver sees it.
    """

    if candidate is None:
        return placeholder_value()
    return freeze(np.array(candidate, copy=True))
