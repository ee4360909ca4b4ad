from __future__ import annotations

import logging
from typing import Any, Callable

import numpy as np

from .coercion import freeze, own_value
from .formatting import CachingMatrixDisplay
from .solve import solve

logger = logging.getLogger(__name__)


class SelfCachingMatrix(CachingMatrixDisplay):
    """Matrix that computes and caches its own inverse.

    `get_inverse` is the only way to reach the cached inverse, and there is
    no way to write it from outside. The cache is filled on the first call
    after construction or `set_value` and reused until the next `set_value`.
    The returned inverse is read-only, so it cannot be edited in place either.

    Solver errors (singular or non-square values) propagate from
    `get_inverse` and leave the cache empty.

    Not thread-safe.
    """

    def __init__(self, value: Any = None, *, solver: Callable[..., Any] = solve) -> None:
        self._value = own_value(value)
        self._inverse: np.ndarray | None = None
        self._version = 0
        self._solver = solver

    @property
    def version(self) -> int:
        return self._version

    @property
    def value(self) -> np.ndarray:
        return self._value

    @property
    def shape(self) -> tuple[int, ...]:
        return tuple(self._value.shape)

    def set_value(self, new_value: Any) -> None:
        owned = own_value(new_value)
        self._inverse = None
        self._value = owned
        self._version += 1

    def get_value(self) -> np.ndarray:
        return self._value

    def is_cached(self) -> bool:
        return self._inverse is not None

    def get_inverse(self, *args: Any, **kwargs: Any) -> np.ndarray:
        """Inverse of the current value.

        Extra arguments are handed to the solver unchanged, but only on the
        call that actually computes; cached results are returned as they are.
        """

        if self._inverse is None:
            logger.debug(
                "computing inverse (shape=%s, version=%d)", self._value.shape, self._version
            )
            inverse = np.asarray(self._solver(self._value, *args, **kwargs))
            # A view could still be written through its base.
            if not inverse.flags.owndata:
                inverse = inverse.copy()
            self._inverse = freeze(inverse)
        return self._inverse


def fetch_inverse(obj: SelfCachingMatrix, *args: Any, **kwargs: Any) -> np.ndarray:
    return obj.get_inverse(*args, **kwargs)
