"""
Declarations of what to optimize (OptArgs) and which constraints apply (OptCons).

Example::

    vars = OptArgs(
        ("comps[*].shift", (0, 10)),
        ("comps[*].scale", (0.3, 10)),
    )
    cons = OptCons(
        (lambda m, _: np.mean([c.shift for c in m.comps]), (0.5, 4)),
    )
"""

from __future__ import annotations

import numbers
from collections.abc import Callable, Iterator, Mapping, Sequence
from typing import Any, NamedTuple, Union

import numpy as np

from accessopt.foundation.exceptions import MixedBoundsError, SpecificationError
from accessopt.optics import ConcatPath, Path, PathLike, Step, combine, resolve
from accessopt.problem.vectors import VectorType, VectorTypeLike


def _is_real(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, (bool, np.bool_))


class Interval(NamedTuple):
    """Closed interval ``[lo, hi]``."""

    lo: float
    hi: float

    @classmethod
    def coerce(cls, value: Any) -> Interval:
        if isinstance(value, Interval):
            return value
        if isinstance(value, (str, bytes)) or not isinstance(value, (Sequence, np.ndarray)) or len(value) != 2:
            raise SpecificationError(
                f"Bounds must be a (lower, upper) pair, got {value!r}.",
                suggestion="Write bounds as a 2-tuple, e.g. (0.0, 10.0)",
            )
        lo, hi = value
        if not (_is_real(lo) and _is_real(hi)):
            raise SpecificationError(
                f"Bounds must be real numbers, got {value!r}.",
                suggestion="Use numeric bounds, e.g. (0.0, 10.0); leave the interval out for an unbounded path",
            )
        if lo > hi:
            raise SpecificationError(
                f"Lower bound ({lo}) > upper bound ({hi}).",
                suggestion="Swap the bounds so that lower <= upper",
            )
        return cls(lo, hi)

    @property
    def mid(self) -> float:
        return (self.lo + self.hi) / 2

    def contains(self, value: float) -> bool:
        return bool(self.lo <= value <= self.hi)

    def __str__(self) -> str:
        return f"[{self.lo}, {self.hi}]"


class ArgSpec(NamedTuple):
    path: Path
    interval: Interval | None = None


ArgLike = Union[PathLike, ArgSpec, tuple[PathLike, Any]]


def _arg_spec(item: ArgLike) -> ArgSpec:
    if isinstance(item, ArgSpec):
        return item
    if isinstance(item, (str, Step, Path)):
        path = resolve(item)
        interval = None
    elif isinstance(item, tuple) and len(item) == 2:
        path = resolve(item[0])
        interval = None if item[1] is None else Interval.coerce(item[1])
    else:
        raise SpecificationError(
            f"Cannot interpret OptArgs entry {item!r}.",
            suggestion="Pass a path expression, or a (path, (lower, upper)) pair",
        )
    if isinstance(path, ConcatPath):
        raise SpecificationError("OptArgs entries take single paths; list the combined paths as separate entries.")
    return ArgSpec(path, interval)


class OptArgs:
    """
    Ordered set of paths to optimize, with optional per-path intervals.

    Either every entry carries an interval or none does. Each interval applies
    to every position its path matches.
    """

    __slots__ = ("specs", "optic")

    def __init__(self, *specs: ArgLike) -> None:
        parsed = tuple(_arg_spec(s) for s in specs)
        if not parsed:
            raise SpecificationError("OptArgs needs at least one path.")
        bounded = [str(s.path) for s in parsed if s.interval is not None]
        unbounded = [str(s.path) for s in parsed if s.interval is None]
        if bounded and unbounded:
            raise MixedBoundsError(bounded, unbounded)
        object.__setattr__(self, "specs", parsed)
        object.__setattr__(self, "optic", combine(s.path for s in parsed))

    @classmethod
    def from_mapping(cls, mapping: Mapping[PathLike, Any]) -> OptArgs:
        """Build from ``{path: interval_or_None}`` in insertion order."""
        return cls(*mapping.items())

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("OptArgs is immutable")

    @property
    def bounded(self) -> bool:
        return self.specs[0].interval is not None

    @property
    def paths(self) -> tuple[Path, ...]:
        return tuple(s.path for s in self.specs)

    @property
    def intervals(self) -> tuple[Interval | None, ...]:
        return tuple(s.interval for s in self.specs)

    def __len__(self) -> int:
        return len(self.specs)

    def __iter__(self) -> Iterator[ArgSpec]:
        return iter(self.specs)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, OptArgs) and self.specs == other.specs

    def __hash__(self) -> int:
        return hash(self.specs)

    def __repr__(self) -> str:
        parts = [str(s.path) if s.interval is None else f"{s.path} => {s.interval}" for s in self.specs]
        return f"OptArgs({', '.join(parts)})"

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), self.specs)


ConstraintFunc = Callable[[Any, Any], float]


class ConsSpec(NamedTuple):
    func: ConstraintFunc
    interval: Interval


class OptCons:
    """
    Ordered nonlinear constraints ``lo <= func(obj, params) <= hi``.

    ``ctype`` selects the container of the constraint bound vectors. When left
    as None, OptProblemSpec fills it with the problem's vector type.
    """

    __slots__ = ("specs", "ctype")

    def __init__(self, *specs: ConsSpec | tuple[ConstraintFunc, Any], ctype: VectorTypeLike = None) -> None:
        parsed: list[ConsSpec] = []
        for i, item in enumerate(specs):
            if not (isinstance(item, tuple) and len(item) == 2 and callable(item[0])):
                raise SpecificationError(
                    f"OptCons entry #{i + 1} must be a (function, (lower, upper)) pair, got {item!r}.",
                )
            parsed.append(ConsSpec(item[0], Interval.coerce(item[1])))
        if not parsed:
            raise SpecificationError("OptCons needs at least one constraint.")
        object.__setattr__(self, "specs", tuple(parsed))
        object.__setattr__(self, "ctype", None if ctype is None else VectorType.parse(ctype))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("OptCons is immutable")

    def with_ctype(self, ctype: VectorTypeLike) -> OptCons:
        return OptCons(*self.specs, ctype=ctype)

    def __len__(self) -> int:
        return len(self.specs)

    def __iter__(self) -> Iterator[ConsSpec]:
        return iter(self.specs)

    def __repr__(self) -> str:
        parts = [f"{getattr(s.func, '__name__', 'func')} => {s.interval}" for s in self.specs]
        return f"OptCons({', '.join(parts)}; ctype={self.ctype})"

    def __reduce__(self) -> tuple[Any, ...]:
        return (_rebuild_cons, (self.specs, self.ctype))


def _rebuild_cons(specs: tuple[ConsSpec, ...], ctype: VectorType | None) -> OptCons:
    return OptCons(*specs, ctype=ctype)


__all__ = ["Interval", "ArgSpec", "OptArgs", "ConsSpec", "OptCons"]
