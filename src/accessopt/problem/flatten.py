"""
Conversion between structured objects and flat raw vectors.

Two modes, chosen by what ``x0`` is:

* **mutation** -- ``x0`` is an instance. The vector holds the values matched
  by the OptArgs paths, in declaration order; unflatten returns a copy of
  ``x0`` with those positions replaced.
* **construction** -- ``x0`` is a type. Each OptArgs entry names one field;
  the initial vector is the midpoint of each interval and unflatten builds a
  brand-new instance from the field values.

None of these functions modify ``x0`` or cache anything, so they are safe
to call concurrently from solver workers.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, NamedTuple

import numpy as np

from accessopt.foundation.exceptions import ConstructionArityError, SpecificationError, VectorLengthError
from accessopt.optics import construct, count, getall, setall
from accessopt.problem.args import OptArgs
from accessopt.problem.vectors import VectorType, VectorTypeLike


def is_construction(x0: Any) -> bool:
    return isinstance(x0, type)


def validate_construction(x0: type, vars: OptArgs) -> None:
    """Check that OptArgs can build ``x0`` from scratch."""
    for spec in vars:
        if spec.path.single_field is None:
            raise ConstructionArityError(str(spec.path), x0.__name__)
    if not vars.bounded:
        raise SpecificationError(
            f"Cannot start from the type {x0.__name__} without bounds.",
            suggestion="Give every OptArgs entry an interval, or pass an instance as x0",
        )


def flatten(x0: Any, vars: OptArgs) -> tuple[Any, ...]:
    """Raw vector for ``x0``: matched values, or interval midpoints for a type."""
    if is_construction(x0):
        validate_construction(x0, vars)
        return tuple(spec.interval.mid for spec in vars)
    return getall(x0, vars.optic)


def unflatten(x0: Any, vars: OptArgs, u: Sequence[Any] | np.ndarray) -> Any:
    """Structured object for raw vector ``u``; a fresh value on every call."""
    if is_construction(x0):
        validate_construction(x0, vars)
        if len(u) != len(vars):
            raise VectorLengthError(len(vars), len(u), f"the fields of {x0.__name__}")
        return construct(x0, zip(vars.paths, u))
    return setall(x0, vars.optic, u)


class RawBounds(NamedTuple):
    """Box bounds for the raw vector; both None when OptArgs is unbounded."""

    lb: Any = None
    ub: Any = None

    @property
    def is_empty(self) -> bool:
        return self.lb is None

    def as_kwargs(self) -> dict[str, Any]:
        if self.is_empty:
            return {}
        return {"lb": self.lb, "ub": self.ub}


def raw_bounds(x0: Any, vars: OptArgs, utype: VectorTypeLike = None) -> RawBounds:
    """
    Lower/upper bound vectors aligned with :func:`flatten`.

    Each interval is repeated once per position its path matches (always once
    in construction mode).
    """
    construction = is_construction(x0)
    if construction:
        validate_construction(x0, vars)
    if not vars.bounded:
        return RawBounds()
    vtype = VectorType.parse(utype)
    if construction:
        intervals = [spec.interval for spec in vars]
    else:
        intervals = [spec.interval for spec in vars for _ in range(count(x0, spec.path))]
    return RawBounds(
        lb=vtype.convert(i.lo for i in intervals),
        ub=vtype.convert(i.hi for i in intervals),
    )


__all__ = ["is_construction", "validate_construction", "flatten", "unflatten", "RawBounds", "raw_bounds"]
