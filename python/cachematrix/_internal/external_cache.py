from __future__ import annotations

import logging
from typing import Any, Callable

import numpy as np

from .coercion import own_value
from .formatting import CachingMatrixDisplay
from .solve import solve

logger = logging.getLogger(__name__)


class ExternallyCachedMatrix(CachingMatrixDisplay):
    """Matrix whose cached inverse is managed from the outside.

    The object only stores what it is given. `compute_or_fetch_inverse` is the
    one caller known to fill the cache correctly; nothing stops any other code
    from calling `set_cached_inverse` with an arbitrary array, and the object
    will hand that array back as "the inverse" until the next `set_value`.
    `SelfCachingMatrix` is the variant that closes this hole.

    Not thread-safe.
    """

    def __init__(self, value: Any = None, *, solver: Callable[..., Any] = solve) -> None:
        self._value = own_value(value)
        self._inverse: Any | None = None
        self._version = 0
        self._solver = solver

    @property
    def version(self) -> int:
        return self._version

    @property
    def solver(self) -> Callable[..., Any]:
        """Inversion routine `compute_or_fetch_inverse` uses for this matrix."""
        return self._solver

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

    def set_cached_inverse(self, candidate: Any) -> None:
        """Store `candidate` as the cached inverse. No check is made that it is one."""
        self._inverse = candidate

    def get_cached_inverse(self) -> Any | None:
        """Cached inverse, or None when nothing has been stored for this value."""
        return self._inverse


def compute_or_fetch_inverse(
    obj: ExternallyCachedMatrix,
    *args: Any,
    **kwargs: Any,
) -> Any:
    """Return the inverse of `obj`, computing and storing it on a cache miss.

    Extra positional and keyword arguments go to `obj.solver` untouched.
    A value planted through `set_cached_inverse` is returned as-is.
    """

    inverse = obj.get_cached_inverse()
    if inverse is None:
        data = obj.get_value()
        logger.debug("computing inverse (shape=%s, version=%d)", data.shape, obj.version)
        inverse = obj.solver(data, *args, **kwargs)
        obj.set_cached_inverse(inverse)
    return inverse
