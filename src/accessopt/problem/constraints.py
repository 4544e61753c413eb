"""
Constraint vectors for the solver and helpers to inspect a candidate.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, NamedTuple

import numpy as np

from accessopt.problem.args import OptArgs, OptCons
from accessopt.problem.flatten import unflatten
from accessopt.problem.vectors import VectorType


class ConsBounds(NamedTuple):
    lcons: Any
    ucons: Any

    def as_kwargs(self) -> dict[str, Any]:
        return {"lcons": self.lcons, "ucons": self.ucons}


def constraint_bounds(cons: OptCons) -> ConsBounds:
    """Lower/upper constraint bounds in declaration order, converted with ``cons.ctype``."""
    vtype = cons.ctype or VectorType.parse(None)
    return ConsBounds(
        lcons=vtype.convert(s.interval.lo for s in cons),
        ucons=vtype.convert(s.interval.hi for s in cons),
    )


class RawConstraints:
    """
    In-place constraint callback ``(res, u, p) -> None`` for the solver.

    ``u`` is unflattened against the fixed ``x0``; constraint ``i`` is
    evaluated on the result and written to ``res[i]``.
    """

    __slots__ = ("cons", "x0", "vars")

    def __init__(self, cons: OptCons, x0: Any, vars: OptArgs) -> None:
        self.cons = cons
        self.x0 = x0
        self.vars = vars

    def __call__(self, res: Any, u: Sequence[float] | np.ndarray, p: Any) -> None:
        x = unflatten(self.x0, self.vars, u)
        for i, spec in enumerate(self.cons):
            res[i] = spec.func(x, p)

    def __len__(self) -> int:
        return len(self.cons)

    def __getstate__(self) -> tuple[Any, ...]:
        return (self.cons, self.x0, self.vars)

    def __setstate__(self, state: tuple[Any, ...]) -> None:
        self.cons, self.x0, self.vars = state


def constraint_values(cons: OptCons, x: Any, p: Any) -> np.ndarray:
    """Constraint values for a structured candidate ``x``."""
    return np.asarray([spec.func(x, p) for spec in cons], dtype=float)


def constraint_violations(cons: OptCons, x: Any, p: Any) -> np.ndarray:
    """Distance of each constraint value outside its interval; 0 where satisfied."""
    values = constraint_values(cons, x, p)
    lo = np.asarray([s.interval.lo for s in cons], dtype=float)
    hi = np.asarray([s.interval.hi for s in cons], dtype=float)
    return np.maximum(lo - values, 0.0) + np.maximum(values - hi, 0.0)


def constraint_summary(cons: OptCons, x: Any, p: Any) -> str:
    """One line per constraint: ``cons #i: value in [lo, hi]`` (or ``not in``)."""
    lines = []
    for i, spec in enumerate(cons, start=1):
        value = spec.func(x, p)
        rel = "in" if spec.interval.contains(value) else "not in"
        lines.append(f"cons #{i}: {value} {rel} {spec.interval}")
    return "\n".join(lines)


__all__ = [
    "ConsBounds",
    "constraint_bounds",
    "RawConstraints",
    "constraint_values",
    "constraint_violations",
    "constraint_summary",
]
