"""Square matrices that cache their own inverse.

Two designs live side by side:

- `ExternallyCachedMatrix` exposes its cached inverse through get/set
  accessors and relies on `compute_or_fetch_inverse` to fill it correctly.
- `SelfCachingMatrix` computes and stores its inverse itself in
  `get_inverse`; nothing outside the object can write the cache.
"""
from __future__ import annotations

try:
    from ._version import version as __version__
except ImportError:
    __version__ = "unknown"

import logging as _logging

from ._internal import formatting as _formatting
from ._internal import runtime as _runtime_mod
from ._internal.external_cache import ExternallyCachedMatrix, compute_or_fetch_inverse
from ._internal.self_cache import SelfCachingMatrix, fetch_inverse
from ._internal.solve import DEFAULT_TOL, SingularMatrixError, solve

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

_runtime = _runtime_mod.Runtime(logger_name=__name__)
_runtime.apply_environment()


def enable_debug(stream=None) -> None:
    """Print a line to stderr (or `stream`) whenever an inverse is computed."""
    _runtime.enable_debug(stream)


def disable_debug() -> None:
    _runtime.disable_debug()


def debug_enabled() -> bool:
    return _runtime.debug_enabled()


def set_print_options(*, edge_items: int = 4) -> None:
    """Number of leading/trailing rows and columns shown by ``str(matrix)``."""
    _formatting.configure(edge_items=edge_items)


__all__ = [
    "DEFAULT_TOL",
    "ExternallyCachedMatrix",
    "SelfCachingMatrix",
    "SingularMatrixError",
    "compute_or_fetch_inverse",
    "debug_enabled",
    "disable_debug",
    "enable_debug",
    "fetch_inverse",
    "set_print_options",
    "solve",
]
