"""Identity-reconstruction harness shared by both caching designs.

`matrix_test` is parameterized over a constructor and an "invert" accessor,
so the same checks run against either variant::

    matrix_test(ExternallyCachedMatrix, compute_or_fetch_inverse)
    matrix_test(SelfCachingMatrix, fetch_inverse)

The exact suite uses 2 x 2 matrices whose entries are powers of two; their
products with the inverse must reproduce the identity bit for bit.
The random suite uses standard-normal matrices and passes a `tol` argument
through the accessor to the solver.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Sequence

import numpy as np

EXACT_ATOL: float = 0.0
MAX_CONDITION: float = 1e3
MAX_DRAWS: int = 100


class HarnessFailure(AssertionError):
    def __init__(self, message: str, check: "IdentityCheck | None" = None) -> None:
        super().__init__(message)
        self.check = check


@dataclass(frozen=True)
class IdentityCheck:
    suite: str
    label: str
    call: int
    side: str
    max_error: float
    atol: float

    @property
    def passed(self) -> bool:
        return self.max_error <= self.atol


@dataclass
class HarnessReport:
    checks: List[IdentityCheck] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.checks)

    def suite(self, name: str) -> List[IdentityCheck]:
        return [c for c in self.checks if c.suite == name]

    @property
    def max_error(self) -> float:
        return max((c.max_error for c in self.checks), default=0.0)

    @property
    def passed(self) -> bool:
        return all(c.passed for c in self.checks)


def identity_error(product: Any) -> float:
    prod = np.asarray(product)
    return float(np.max(np.abs(prod - np.eye(prod.shape[0]))))


def _check_identity(
    suite: str,
    label: str,
    call: int,
    value: np.ndarray,
    inverse: np.ndarray,
    atol: float,
    on_check: Callable[[IdentityCheck, np.ndarray], None] | None,
    sides: Sequence[str] = ("left", "right"),
) -> list[IdentityCheck]:
    checks: list[IdentityCheck] = []
    for side in sides:
        product = inverse @ value if side == "left" else value @ inverse
        check = IdentityCheck(
            suite=suite,
            label=label,
            call=call,
            side=side,
            max_error=identity_error(product),
            atol=atol,
        )
        if on_check is not None:
            on_check(check, product)
        if not check.passed:
            raise HarnessFailure(
                f"{suite} {label} call {call}: {side} product is off the identity "
                f"by {check.max_error:.3e} (atol={atol:.1e})",
                check,
            )
        checks.append(check)
    return checks


def _require_same(suite: str, label: str, call: int, first: np.ndarray, current: np.ndarray) -> None:
    if not np.array_equal(first, current):
        raise HarnessFailure(
            f"{suite} {label} call {call}: inverse differs from the first call's result"
        )


def exact_matrix(k: float) -> np.ndarray:
    """``[[1, -1/k], [-1/k, 1]]``."""

    off = -1.0 / k
    return np.array([[1.0, off], [off, 1.0]])


def draw_well_conditioned(
    rng: np.random.Generator,
    size: int,
    *,
    max_condition: float = MAX_CONDITION,
) -> np.ndarray:
    """Standard-normal ``size x size`` matrix, re-drawn while near-singular."""

    for _ in range(MAX_DRAWS):
        candidate = rng.standard_normal((size, size))
        if np.linalg.cond(candidate, 1) <= max_condition:
            return candidate
    raise RuntimeError(
        f"could not draw a {size}x{size} matrix with condition <= {max_condition:g} "
        f"in {MAX_DRAWS} attempts"
    )


def run_exact_suite(
    make_matrix: Callable[[Any], Any],
    solve_matrix: Callable[..., Any],
    *,
    ks: Iterable[float] = (2, 4, 8, 16),
    calls: int = 3,
    atol: float = EXACT_ATOL,
    on_check: Callable[[IdentityCheck, np.ndarray], None] | None = None,
) -> list[IdentityCheck]:
    checks: list[IdentityCheck] = []
    for k in ks:
        label = f"K={k:g}"
        m = make_matrix(exact_matrix(k))
        first: np.ndarray | None = None
        # Only the first call computes; the rest must come from the cache.
        for call in range(1, calls + 1):
            inverse = np.asarray(solve_matrix(m))
            if first is None:
                first = inverse
            else:
                _require_same("exact", label, call, first, inverse)
            value = np.asarray(m.get_value())
            checks.extend(_check_identity("exact", label, call, value, inverse, atol, on_check))
    return checks


def run_random_suite(
    make_matrix: Callable[[Any], Any],
    solve_matrix: Callable[..., Any],
    *,
    rng: np.random.Generator,
    size: int = 6,
    trials: int = 4,
    tol: float = 1e-4,
    atol: float = 1e-8,
    on_check: Callable[[IdentityCheck, np.ndarray], None] | None = None,
) -> list[IdentityCheck]:
    max_condition = MAX_CONDITION
    if tol > 0:
        max_condition = min(max_condition, 0.5 / tol)

    checks: list[IdentityCheck] = []
    for trial in range(1, trials + 1):
        label = f"trial={trial}"
        m = make_matrix(draw_well_conditioned(rng, size, max_condition=max_condition))

        # First call computes and is checked on the left, second comes from
        # the cache and is checked on the right.
        computed = np.asarray(solve_matrix(m, tol=tol))
        value = np.asarray(m.get_value())
        checks.extend(
            _check_identity("random", label, 1, value, computed, atol, on_check, sides=("left",))
        )

        cached = np.asarray(solve_matrix(m, tol=tol))
        _require_same("random", label, 2, computed, cached)
        checks.extend(
            _check_identity("random", label, 2, value, cached, atol, on_check, sides=("right",))
        )
    return checks


def matrix_test(
    make_matrix: Callable[[Any], Any],
    solve_matrix: Callable[..., Any],
    *,
    rng: np.random.Generator | None = None,
    seed: int | None = None,
    ks: Sequence[float] = (2, 4, 8, 16),
    size: int = 6,
    trials: int = 4,
    tol: float = 1e-4,
    atol: float = 1e-8,
    exact_atol: float = EXACT_ATOL,
    on_check: Callable[[IdentityCheck, np.ndarray], None] | None = None,
) -> HarnessReport:
    """Run both suites against one caching design.

    Args:
        make_matrix: builds a caching matrix from an initial value; the result
            must expose ``get_value()``.
        solve_matrix: ``solve_matrix(m, **extra)`` returns the inverse of `m`.
        rng / seed: randomness for the random suite (`rng` wins if both given).
        on_check: called with every check and the product it measured, before
            the check is enforced.

    Raises:
        HarnessFailure: on the first check that does not hold.
    """

    if rng is None:
        rng = np.random.default_rng(seed)

    report = HarnessReport()
    report.checks.extend(
        run_exact_suite(make_matrix, solve_matrix, ks=ks, atol=exact_atol, on_check=on_check)
    )
    report.checks.extend(
        run_random_suite(
            make_matrix,
            solve_matrix,
            rng=rng,
            size=size,
            trials=trials,
            tol=tol,
            atol=atol,
            on_check=on_check,
        )
    )
    return report
