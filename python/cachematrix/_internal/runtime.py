from __future__ import annotations

import logging
import os
import sys
from typing import Any

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_DEBUG_FORMAT = "%(name)s: %(message)s"


class Runtime:
    """Process-wide switches for the optional debug trace.

    The "computing inverse" messages are ordinary ``logger.debug`` calls; this
    object only decides whether a stderr handler is attached to the package
    logger so they become visible.
    """

    def __init__(
        self,
        *,
        logger_name: str = "cachematrix",
        env_var: str = "CACHEMATRIX_DEBUG",
        stream: Any | None = None,
    ) -> None:
        self._logger = logging.getLogger(logger_name)
        self._env_var = env_var
        self._stream = stream
        self._handler: logging.Handler | None = None
        self._previous_level: int | None = None

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def env_requests_debug(self) -> bool:
        raw = os.environ.get(self._env_var)
        if not raw:
            return False
        return raw.strip().lower() in _TRUTHY

    def apply_environment(self) -> None:
        if self.env_requests_debug():
            self.enable_debug()

    def debug_enabled(self) -> bool:
        return self._handler is not None

    def enable_debug(self, stream: Any | None = None) -> None:
        if self._handler is not None:
            return

        handler = logging.StreamHandler(stream or self._stream or sys.stderr)
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter(_DEBUG_FORMAT))

        self._previous_level = self._logger.level
        self._logger.setLevel(logging.DEBUG)
        self._logger.addHandler(handler)
        self._handler = handler

    def disable_debug(self) -> None:
        if self._handler is None:
            return

        self._logger.removeHandler(self._handler)
        try:
            self._handler.flush()
        finally:
            self._handler = None

        if self._previous_level is not None:
            self._logger.setLevel(self._previous_level)
            self._previous_level = None
