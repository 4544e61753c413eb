"""
Solver backends built on ``scipy.optimize``.

Every backend accepts the portable ``maxiters`` option and maps it to the
scipy iteration limit; any other keyword is passed to scipy unchanged.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from scipy.optimize import Bounds, NonlinearConstraint, OptimizeResult, differential_evolution, dual_annealing, minimize

from accessopt.solvers.function import InPlaceConstraints, OptimizationProblem, OptimizationSolution
from accessopt.solvers.registry import SolverBackend, register_algorithm


class _ConstraintVector:
    """Adapts the in-place constraint callback to scipy's ``fun(u) -> array``."""

    def __init__(self, cons: InPlaceConstraints, n: int, p: Any) -> None:
        self.cons = cons
        self.n = n
        self.p = p

    def __call__(self, u: np.ndarray) -> np.ndarray:
        res = np.empty(self.n, dtype=float)
        self.cons(res, u, self.p)
        return res


def _u0(problem: OptimizationProblem) -> np.ndarray:
    return np.asarray(problem.u0, dtype=float)


def _bounds(problem: OptimizationProblem) -> Bounds:
    return Bounds(np.asarray(problem.lb, dtype=float), np.asarray(problem.ub, dtype=float))


def _nonlinear_constraint(problem: OptimizationProblem) -> NonlinearConstraint:
    fun = _ConstraintVector(problem.f.cons, problem.n_cons, problem.p)
    return NonlinearConstraint(fun, np.asarray(problem.lcons, dtype=float), np.asarray(problem.ucons, dtype=float))


def _clipped_u0(problem: OptimizationProblem) -> np.ndarray:
    # global methods reject a start point outside the box; it only seeds the search
    return np.clip(_u0(problem), np.asarray(problem.lb, dtype=float), np.asarray(problem.ub, dtype=float))


def _message(result: OptimizeResult) -> str:
    message = result.get("message", "")
    if isinstance(message, (list, tuple)):
        return "; ".join(str(m) for m in message)
    return str(message)


def _to_solution(result: OptimizeResult, algorithm: str, problem: OptimizationProblem) -> OptimizationSolution:
    nit = result.get("nit")
    nfev = result.get("nfev")
    return OptimizationSolution(
        u=np.asarray(result.x, dtype=float),
        objective=float(result.fun),
        success=bool(result.get("success", False)),
        message=_message(result),
        algorithm=algorithm,
        nit=None if nit is None else int(nit),
        nfev=None if nfev is None else int(nfev),
        original=result,
        problem=problem,
    )


def _minimize_runner(name: str, method: str):
    def run(problem: OptimizationProblem, **options: Any) -> OptimizationSolution:
        maxiters = options.pop("maxiters", None)
        method_options = dict(options.pop("options", None) or {})
        if maxiters is not None:
            method_options.setdefault("maxiter", int(maxiters))
        kwargs: dict[str, Any] = {}
        if problem.f.jac is not None:
            kwargs["jac"] = problem.f.jac
        if problem.f.hess is not None:
            kwargs["hess"] = problem.f.hess
        if problem.bounded:
            kwargs["bounds"] = _bounds(problem)
        if problem.constrained:
            kwargs["constraints"] = [_nonlinear_constraint(problem)]
        kwargs.update(options)
        result = minimize(
            problem.f.f,
            _u0(problem),
            args=(problem.p,),
            method=method,
            options=method_options,
            **kwargs,
        )
        return _to_solution(result, name, problem)

    run.__name__ = f"run_{name.replace('-', '_')}"
    return run


def run_differential_evolution(problem: OptimizationProblem, **options: Any) -> OptimizationSolution:
    maxiters = options.pop("maxiters", None)
    kwargs: dict[str, Any] = {"args": (problem.p,), "x0": _clipped_u0(problem)}
    if maxiters is not None:
        kwargs["maxiter"] = int(maxiters)
    if problem.constrained:
        kwargs["constraints"] = (_nonlinear_constraint(problem),)
    kwargs.update(options)
    result = differential_evolution(problem.f.f, _bounds(problem), **kwargs)
    return _to_solution(result, "differential-evolution", problem)


def run_dual_annealing(problem: OptimizationProblem, **options: Any) -> OptimizationSolution:
    maxiters = options.pop("maxiters", None)
    kwargs: dict[str, Any] = {"args": (problem.p,), "x0": _clipped_u0(problem)}
    if maxiters is not None:
        kwargs["maxiter"] = int(maxiters)
    kwargs.update(options)
    result = dual_annealing(problem.f.f, _bounds(problem), **kwargs)
    return _to_solution(result, "dual-annealing", problem)


SCIPY_BACKENDS: tuple[SolverBackend, ...] = (
    SolverBackend("nelder-mead", _minimize_runner("nelder-mead", "Nelder-Mead"), description="Downhill simplex"),
    SolverBackend("powell", _minimize_runner("powell", "Powell"), description="Conjugate direction search"),
    SolverBackend(
        "bfgs",
        _minimize_runner("bfgs", "BFGS"),
        supports_bounds=False,
        description="Quasi-Newton, unconstrained",
    ),
    SolverBackend("l-bfgs-b", _minimize_runner("l-bfgs-b", "L-BFGS-B"), description="Limited-memory quasi-Newton with box bounds"),
    SolverBackend(
        "slsqp",
        _minimize_runner("slsqp", "SLSQP"),
        supports_constraints=True,
        description="Sequential least squares programming",
    ),
    SolverBackend(
        "trust-constr",
        _minimize_runner("trust-constr", "trust-constr"),
        supports_constraints=True,
        description="Trust-region interior point",
    ),
    SolverBackend(
        "cobyla",
        _minimize_runner("cobyla", "COBYLA"),
        supports_constraints=True,
        description="Derivative-free linear approximations",
    ),
    SolverBackend(
        "differential-evolution",
        run_differential_evolution,
        requires_bounds=True,
        supports_constraints=True,
        description="Population-based global search",
    ),
    SolverBackend(
        "dual-annealing",
        run_dual_annealing,
        requires_bounds=True,
        description="Generalized simulated annealing",
    ),
)

for _backend in SCIPY_BACKENDS:
    register_algorithm(_backend)


__all__ = ["SCIPY_BACKENDS", "run_differential_evolution", "run_dual_annealing"]
