import io

import pytest

from cachematrix import __main__ as cli
from cachematrix.harness import HarnessFailure


def test_driver_runs_both_variants():
    out = io.StringIO()
    assert cli.main(["--seed", "5"], out=out) == 0

    text = out.getvalue()
    assert "**** externally cached (ExternallyCachedMatrix, compute_or_fetch_inverse) ****" in text
    assert "**** self caching (SelfCachingMatrix, fetch_inverse) ****" in text
    assert text.count("ok: 32 checks (24 exact, 8 random)") == 2


def test_verbose_prints_products():
    out = io.StringIO()
    assert cli.main(["--seed", "5", "--trials", "1", "--verbose"], out=out) == 0

    text = out.getvalue()
    assert "[exact] K=2 call 1 left" in text
    assert "[random] trial=1 call 2 right" in text
    assert "     [" in text


def test_failure_sets_exit_status(monkeypatch):
    def failing(*args, **kwargs):
        raise HarnessFailure("broken")

    monkeypatch.setattr(cli, "matrix_test", failing)
    out = io.StringIO()
    assert cli.main([], out=out) == 1
    assert out.getvalue().count("FAILED: broken") == 2


def test_debug_flag_traces_and_cleans_up(capsys):
    import cachematrix

    was_enabled = cachematrix.debug_enabled()
    cli.main(["--seed", "5", "--trials", "1", "--debug"], out=io.StringIO())

    assert cachematrix.debug_enabled() is was_enabled
    if not was_enabled:
        assert "computing inverse" in capsys.readouterr().err


def test_rejects_unknown_option():
    with pytest.raises(SystemExit):
        cli.main(["--nope"], out=io.StringIO())
