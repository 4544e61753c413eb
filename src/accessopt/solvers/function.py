"""
Vector-level problem description consumed by the solver backends.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from accessopt.foundation.exceptions import SpecificationError

# (res, u, p) -> None, writes one value per constraint into res
InPlaceConstraints = Callable[[np.ndarray, np.ndarray, Any], None]


@dataclass(frozen=True)
class OptimizationFunction:
    """
    Objective ``f(u, p) -> float`` plus solver metadata.

    ``jac`` and ``hess`` are forwarded to scipy unchanged: either a
    finite-difference tag (``"2-point"``, ``"3-point"``, ``"cs"``) or a
    callable ``(u, p)``. ``cons`` is the in-place constraint callback.

    When an OptimizationFunction is given as the objective of an
    OptProblemSpec, only ``f`` (and ``cons``) are swapped for their raw-vector
    versions; every other field is kept.
    """

    f: Callable[[Any, Any], float]
    jac: str | bool | Callable[..., Any] | None = None
    hess: str | Callable[..., Any] | None = None
    cons: InPlaceConstraints | None = None

    def __call__(self, u: Any, p: Any) -> float:
        return self.f(u, p)


def _length(name: str, value: Any) -> int:
    try:
        return len(value)
    except TypeError:
        raise SpecificationError(f"{name} must be a sequence, got {type(value).__name__}.") from None


@dataclass(frozen=True)
class OptimizationProblem:
    """Everything a backend needs: objective, start point, parameters, bounds, constraints."""

    f: OptimizationFunction
    u0: Any
    p: Any = None
    lb: Any = None
    ub: Any = None
    lcons: Any = None
    ucons: Any = None

    def __post_init__(self) -> None:
        if not isinstance(self.f, OptimizationFunction):
            object.__setattr__(self, "f", OptimizationFunction(self.f))
        n = _length("u0", self.u0)
        if (self.lb is None) != (self.ub is None):
            raise SpecificationError("Pass both lb and ub, or neither.")
        if self.lb is not None and not (_length("lb", self.lb) == _length("ub", self.ub) == n):
            raise SpecificationError(
                f"Bounds have lengths {len(self.lb)}/{len(self.ub)} but u0 has {n} entries.",
            )
        if self.f.cons is not None:
            if self.lcons is None or self.ucons is None:
                raise SpecificationError(
                    "A constraint function needs lcons and ucons.",
                    suggestion="Pass one lower and one upper bound per constraint",
                )
            if _length("lcons", self.lcons) != _length("ucons", self.ucons):
                raise SpecificationError("lcons and ucons must have the same length.")

    @property
    def n_var(self) -> int:
        return len(self.u0)

    @property
    def bounded(self) -> bool:
        return self.lb is not None

    @property
    def constrained(self) -> bool:
        return self.f.cons is not None

    @property
    def n_cons(self) -> int:
        return len(self.lcons) if self.constrained else 0


@dataclass(frozen=True)
class OptimizationSolution:
    """Backend-independent view of a solver result; ``original`` is the native result."""

    u: np.ndarray
    objective: float
    success: bool
    message: str
    algorithm: str
    nit: int | None = None
    nfev: int | None = None
    original: Any = field(default=None, repr=False)
    problem: OptimizationProblem | None = field(default=None, repr=False)


__all__ = ["InPlaceConstraints", "OptimizationFunction", "OptimizationProblem", "OptimizationSolution"]
