import io
import logging

import numpy as np
import pytest

import cachematrix
from cachematrix import (
    ExternallyCachedMatrix,
    SelfCachingMatrix,
    compute_or_fetch_inverse,
)
from cachematrix._internal.runtime import Runtime


@pytest.fixture
def debug_off():
    was_enabled = cachematrix.debug_enabled()
    cachematrix.disable_debug()
    yield
    if was_enabled:
        cachematrix.enable_debug()
    else:
        cachematrix.disable_debug()


def _computing_messages(caplog):
    return [r for r in caplog.records if "computing inverse" in r.getMessage()]


def test_self_caching_logs_only_when_computing(caplog):
    caplog.set_level(logging.DEBUG, logger="cachematrix")
    m = SelfCachingMatrix(np.eye(2))

    m.get_inverse()
    m.get_inverse()
    assert len(_computing_messages(caplog)) == 1

    m.set_value(np.eye(2) * 2)
    m.get_inverse()
    messages = _computing_messages(caplog)
    assert len(messages) == 2
    assert "version=1" in messages[-1].getMessage()
    assert all(r.levelno == logging.DEBUG for r in messages)


def test_externally_cached_logs_only_when_computing(caplog):
    caplog.set_level(logging.DEBUG, logger="cachematrix")
    m = ExternallyCachedMatrix(np.eye(3))

    compute_or_fetch_inverse(m)
    compute_or_fetch_inverse(m)
    assert len(_computing_messages(caplog)) == 1


def test_enable_debug_writes_to_stream(debug_off):
    buf = io.StringIO()
    cachematrix.enable_debug(stream=buf)
    try:
        assert cachematrix.debug_enabled()
        SelfCachingMatrix([[2.0, 0.0], [0.0, 2.0]]).get_inverse()
    finally:
        cachematrix.disable_debug()

    assert "computing inverse (shape=(2, 2), version=0)" in buf.getvalue()
    assert not cachematrix.debug_enabled()


def test_disable_debug_restores_silence(debug_off):
    buf = io.StringIO()
    cachematrix.enable_debug(stream=buf)
    cachematrix.disable_debug()

    SelfCachingMatrix(np.eye(2)).get_inverse()
    assert buf.getvalue() == ""


@pytest.mark.parametrize("raw, expected", [("1", True), ("Yes", True), ("on", True), ("0", False), ("", False)])
def test_environment_switch(monkeypatch, raw, expected):
    monkeypatch.setenv("CACHEMATRIX_DEBUG", raw)
    runtime = Runtime(logger_name="cachematrix.tests.env")
    assert runtime.env_requests_debug() is expected

    runtime.apply_environment()
    try:
        assert runtime.debug_enabled() is expected
    finally:
        runtime.disable_debug()


def test_runtime_restores_logger_level():
    runtime = Runtime(logger_name="cachematrix.tests.level", stream=io.StringIO())
    logger = runtime.logger
    logger.setLevel(logging.WARNING)

    runtime.enable_debug()
    runtime.enable_debug()
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1

    runtime.disable_debug()
    assert logger.level == logging.WARNING
    assert logger.handlers == []
