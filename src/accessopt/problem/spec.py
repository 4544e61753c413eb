"""
Problem specification over structured objects and its translation into a
vector-level OptimizationProblem.

Example::

    spec = OptProblemSpec(loss, model0, OptArgs(("comps[*].shift", (0, 10))), data=data)
    problem = build_problem(spec)   # objective, u0, p, lb, ub (+ constraints)
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from accessopt.problem.args import OptArgs, OptCons
from accessopt.problem.constraints import RawConstraints, constraint_bounds
from accessopt.problem.flatten import flatten, is_construction, raw_bounds, unflatten, validate_construction
from accessopt.problem.vectors import VectorType, VectorTypeLike
from accessopt.solvers.function import OptimizationFunction, OptimizationProblem


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


@dataclass(frozen=True)
class OptProblemSpec:
    """
    Immutable description of an optimization over a structured object.

    Attributes:
        func: Objective ``func(obj, data) -> float``, or an OptimizationFunction
            whose ``f`` has that signature.
        x0: Seed instance (mutation mode) or type (construction mode).
        vars: Which sub-values to optimize.
        cons: Optional nonlinear constraints; when their ``ctype`` is unset it
            follows ``utype``.
        data: Fixed parameters passed as the second argument to ``func`` and
            the constraint functions.
        utype: Container for the initial vector and box bounds.
    """

    func: Callable[[Any, Any], float] | OptimizationFunction
    x0: Any
    vars: OptArgs
    cons: OptCons | None = None
    data: Any = field(default=None, kw_only=True)
    utype: VectorTypeLike = field(default=None, kw_only=True)

    def __post_init__(self) -> None:
        if not callable(self.func):
            raise TypeError(f"func must be callable, got {type(self.func).__name__}.")
        if not isinstance(self.vars, OptArgs):
            raise TypeError(f"vars must be an OptArgs instance, got {type(self.vars).__name__}.")
        if self.cons is not None and not isinstance(self.cons, OptCons):
            raise TypeError(f"cons must be an OptCons instance or None, got {type(self.cons).__name__}.")
        utype = VectorType.parse(self.utype)
        object.__setattr__(self, "utype", utype)
        if self.cons is not None and self.cons.ctype is None:
            object.__setattr__(self, "cons", self.cons.with_ctype(utype))
        if is_construction(self.x0):
            validate_construction(self.x0, self.vars)

    @property
    def objective(self) -> Callable[[Any, Any], float]:
        """The structured-object objective, without solver metadata."""
        if isinstance(self.func, OptimizationFunction):
            return self.func.f
        return self.func

    def from_raw(self, u: Sequence[Any] | np.ndarray) -> Any:
        return unflatten(self.x0, self.vars, u)


class RawObjective:
    """Objective on raw vectors: ``func(unflatten(x0, vars, u), p)``."""

    __slots__ = ("func", "x0", "vars")

    def __init__(self, func: Callable[[Any, Any], float], x0: Any, vars: OptArgs) -> None:
        self.func = func
        self.x0 = x0
        self.vars = vars

    def __call__(self, u: Sequence[Any] | np.ndarray, p: Any) -> float:
        return self.func(unflatten(self.x0, self.vars, u), p)

    def __getstate__(self) -> tuple[Any, ...]:
        return (self.func, self.x0, self.vars)

    def __setstate__(self, state: tuple[Any, ...]) -> None:
        self.func, self.x0, self.vars = state


def raw_objective(spec: OptProblemSpec) -> RawObjective:
    return RawObjective(spec.objective, spec.x0, spec.vars)


def raw_u(spec: OptProblemSpec) -> Any:
    """Initial raw vector in the spec's container type."""
    return spec.utype.convert(flatten(spec.x0, spec.vars))


def build_problem(spec: OptProblemSpec) -> OptimizationProblem:
    """
    Translate ``spec`` into a vector-level problem.

    All validation (path resolution, bounds, construction arity) happens here,
    before any solver runs.
    """
    f = raw_objective(spec)
    if isinstance(spec.func, OptimizationFunction):
        func = dataclasses.replace(spec.func, f=f)
    else:
        func = OptimizationFunction(f)

    kwargs: dict[str, Any] = dict(raw_bounds(spec.x0, spec.vars, spec.utype).as_kwargs())
    if spec.cons is not None:
        func = dataclasses.replace(func, cons=RawConstraints(spec.cons, spec.x0, spec.vars))
        kwargs.update(constraint_bounds(spec.cons).as_kwargs())

    problem = OptimizationProblem(func, raw_u(spec), spec.data, **kwargs)
    _logger().debug(
        "Built problem from %s: n_var=%d, bounded=%s, n_cons=%d, utype=%s",
        "type" if is_construction(spec.x0) else "instance",
        problem.n_var,
        problem.bounded,
        problem.n_cons,
        spec.utype,
    )
    return problem


__all__ = ["OptProblemSpec", "RawObjective", "raw_objective", "raw_u", "build_problem"]
