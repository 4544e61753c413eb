"""
Container types for raw vectors.

The container is declared once, when the problem is specified, and the
conversion function is picked at that moment. Nothing here inspects the
values being converted to decide what to do.

Kinds:

* ``"tuple"`` -- immutable fixed-arity python tuple
* ``"list"`` -- dynamically sized python list
* ``"array"`` -- dynamically sized 1-D numpy array
* ``"static"`` -- fixed-size, read-only 1-D numpy array

A kind may carry an element type: ``"array[float64]"``,
``VectorType("static", dtype=np.float32)``.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, Literal, TypeAlias, Union

import numpy as np

from accessopt.foundation.exceptions import SpecificationError

VectorKind: TypeAlias = Literal["tuple", "list", "array", "static"]

VECTOR_KINDS: tuple[VectorKind, ...] = ("tuple", "list", "array", "static")

_ALIASES: dict[str, VectorKind] = {
    "tuple": "tuple",
    "list": "list",
    "array": "array",
    "vector": "array",
    "ndarray": "array",
    "static": "static",
    "svector": "static",
    "fixed": "static",
}

_SPEC = re.compile(r"^\s*(?P<kind>[A-Za-z_]+)\s*(?:\[\s*(?P<dtype>[A-Za-z0-9_]+)\s*\])?\s*$")


def _make_converter(kind: VectorKind, dtype: np.dtype | None) -> Callable[[Iterable[Any]], Any]:
    if kind == "tuple":
        if dtype is None:
            return tuple
        scalar = dtype.type
        return lambda values: tuple(scalar(v) for v in values)
    if kind == "list":
        if dtype is None:
            return list
        scalar = dtype.type
        return lambda values: [scalar(v) for v in values]
    if kind == "array":
        return lambda values: np.array(list(values), dtype=dtype)

    def _static(values: Iterable[Any]) -> np.ndarray:
        arr = np.array(list(values), dtype=dtype)
        arr.flags.writeable = False
        return arr

    return _static


@dataclass(frozen=True)
class VectorType:
    """Declared container (and optional element type) for raw vectors."""

    kind: VectorKind = "tuple"
    dtype: np.dtype | None = None
    convert: Callable[[Iterable[Any]], Any] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.kind not in VECTOR_KINDS:
            raise SpecificationError(
                f"Unknown vector kind {self.kind!r}.",
                suggestion=f"Use one of: {', '.join(VECTOR_KINDS)}",
            )
        if self.dtype is not None and not isinstance(self.dtype, np.dtype):
            object.__setattr__(self, "dtype", np.dtype(self.dtype))
        object.__setattr__(self, "convert", _make_converter(self.kind, self.dtype))

    @classmethod
    def parse(cls, spec: VectorTypeLike) -> VectorType:
        """
        Normalize a user-facing vector type declaration.

        Accepts None (no conversion: tuple), a VectorType, a kind string with an
        optional ``[dtype]`` suffix, or one of the types ``tuple``, ``list``,
        ``numpy.ndarray``.
        """
        if spec is None:
            return cls("tuple")
        if isinstance(spec, VectorType):
            return spec
        if spec is tuple:
            return cls("tuple")
        if spec is list:
            return cls("list")
        if spec is np.ndarray:
            return cls("array")
        if isinstance(spec, str):
            m = _SPEC.match(spec)
            kind = _ALIASES.get(m.group("kind").lower()) if m else None
            if kind is None:
                expected = ", ".join(sorted(_ALIASES))
                raise SpecificationError(f"Unknown vector type {spec!r}.", suggestion=f"Expected one of: {expected}")
            dtype = m.group("dtype")
            try:
                return cls(kind, np.dtype(dtype) if dtype else None)
            except TypeError as exc:
                raise SpecificationError(f"Unknown element type {dtype!r} in {spec!r}.") from exc
        raise SpecificationError(f"Cannot interpret {spec!r} as a vector type.")

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), (self.kind, self.dtype))

    def __str__(self) -> str:
        return self.kind if self.dtype is None else f"{self.kind}[{self.dtype}]"


VectorTypeLike = Union[VectorType, str, type, None]


def to_sequence(vec: Iterable[Any]) -> list[Any]:
    """Plain python list with the same elements, in the same order."""
    if isinstance(vec, np.ndarray):
        return vec.tolist()
    return list(vec)


__all__ = ["VectorKind", "VECTOR_KINDS", "VectorType", "VectorTypeLike", "to_sequence"]
