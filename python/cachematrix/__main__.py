"""Run the identity-reconstruction harness against both caching designs.

Usage:
  - `python -m cachematrix`
  - `python -m cachematrix --seed 7 --verbose`
"""
from __future__ import annotations

import argparse
import sys
from typing import Any, Callable, Sequence

import numpy as np

import cachematrix
from cachematrix._internal.formatting import array_lines
from cachematrix.harness import HarnessFailure, IdentityCheck, matrix_test

VARIANTS: list[tuple[str, Callable[[Any], Any], Callable[..., Any]]] = [
    ("externally cached", cachematrix.ExternallyCachedMatrix, cachematrix.compute_or_fetch_inverse),
    ("self caching", cachematrix.SelfCachingMatrix, cachematrix.fetch_inverse),
]


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="cachematrix", description=__doc__.splitlines()[0])
    parser.add_argument("--seed", type=int, default=None, help="seed for the random suite")
    parser.add_argument("--size", type=int, default=6, help="random matrix dimension")
    parser.add_argument("--trials", type=int, default=4, help="number of random matrices")
    parser.add_argument("--tol", type=float, default=1e-4, help="tolerance passed to the solver")
    parser.add_argument("--verbose", action="store_true", help="print every product checked")
    parser.add_argument("--debug", action="store_true", help="trace every inverse computation")
    return parser.parse_args(argv)


def _printer(out: Any) -> Callable[[IdentityCheck, np.ndarray], None]:
    def _print_check(check: IdentityCheck, product: np.ndarray) -> None:
        print(
            f"  [{check.suite}] {check.label} call {check.call} {check.side}: "
            f"max error {check.max_error:.3e}",
            file=out,
        )
        for line in array_lines(product):
            print(f"    {line}", file=out)

    return _print_check


def main(argv: Sequence[str] | None = None, out: Any = None) -> int:
    args = _parse_args(argv)
    out = out or sys.stdout

    if args.debug and not cachematrix.debug_enabled():
        cachematrix.enable_debug()
        try:
            return _run(args, out)
        finally:
            cachematrix.disable_debug()
    return _run(args, out)


def _run(args: argparse.Namespace, out: Any) -> int:
    status = 0
    for name, make_matrix, solve_matrix in VARIANTS:
        print(f"**** {name} ({make_matrix.__name__}, {solve_matrix.__name__}) ****", file=out)
        try:
            report = matrix_test(
                make_matrix,
                solve_matrix,
                seed=args.seed,
                size=args.size,
                trials=args.trials,
                tol=args.tol,
                on_check=_printer(out) if args.verbose else None,
            )
        except HarnessFailure as exc:
            print(f"  FAILED: {exc}", file=out)
            status = 1
            continue

        print(
            f"  ok: {len(report)} checks "
            f"({len(report.suite('exact'))} exact, {len(report.suite('random'))} random), "
            f"max error {report.max_error:.3e}",
            file=out,
        )
    return status


if __name__ == "__main__":
    sys.exit(main())
