from __future__ import annotations

import logging
from typing import Any

from accessopt.solvers import scipy_backend  # noqa: F401 - registers the built-in algorithms
from accessopt.solvers.function import OptimizationProblem, OptimizationSolution
from accessopt.solvers.registry import SolverBackend, resolve_algorithm


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


def solve(problem: OptimizationProblem, algorithm: str | SolverBackend, **options: Any) -> OptimizationSolution:
    """
    Run ``algorithm`` on a vector-level problem.

    Capability checks happen before the backend is called. Exceptions raised
    by the objective or constraint functions propagate unchanged.
    """
    if not isinstance(problem, OptimizationProblem):
        raise TypeError("solve() expects an OptimizationProblem instance.")
    backend = resolve_algorithm(algorithm)
    backend.check(problem)

    _logger().debug(
        "Running %s: n_var=%d, bounded=%s, n_cons=%d, options=%s",
        backend.name,
        problem.n_var,
        problem.bounded,
        problem.n_cons,
        sorted(options),
    )
    sol = backend.run(problem, **options)
    if sol.success:
        _logger().info("%s finished: objective=%.6g, nfev=%s", backend.name, sol.objective, sol.nfev)
    else:
        _logger().warning("%s stopped without success: %s", backend.name, sol.message)
    return sol


__all__ = ["solve"]
