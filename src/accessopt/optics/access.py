"""
Read, copy-with-replace and construct operations over paths.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any

from accessopt.foundation.exceptions import ConstructionArityError, SpecificationError, VectorLengthError
from accessopt.optics.path import Attr, ConcatPath, Path, PathLike, resolve


class _Exhausted(Exception):
    pass


def _paths(optic: PathLike | ConcatPath) -> tuple[Path, ...]:
    resolved = resolve(optic)
    if isinstance(resolved, ConcatPath):
        return resolved.paths
    return (resolved,)


def _get(obj: Any, path: Path, depth: int, out: list[Any]) -> None:
    if depth == len(path.steps):
        out.append(obj)
        return
    for child in path.steps[depth].foci(obj, str(path)):
        _get(child, path, depth + 1, out)


def _set(obj: Any, path: Path, depth: int, values: Iterator[Any]) -> Any:
    if depth == len(path.steps):
        try:
            return next(values)
        except StopIteration:
            raise _Exhausted from None
    return path.steps[depth].modify(obj, lambda child: _set(child, path, depth + 1, values), str(path))


def getall(obj: Any, optic: PathLike | ConcatPath) -> tuple[Any, ...]:
    """All values matched by ``optic`` in ``obj``, in match order."""
    out: list[Any] = []
    for path in _paths(optic):
        _get(obj, path, 0, out)
    return tuple(out)


def count(obj: Any, optic: PathLike | ConcatPath) -> int:
    """Number of positions ``optic`` matches in ``obj``."""
    return len(getall(obj, optic))


def setall(obj: Any, optic: PathLike | ConcatPath, values: Iterable[Any]) -> Any:
    """
    Copy of ``obj`` with the matched positions replaced by ``values``, in order.

    ``obj`` itself is never modified. The number of values must equal the
    number of matched positions.
    """
    items = values if isinstance(values, Sequence) else list(values)
    it = iter(items)
    result = obj
    try:
        for path in _paths(optic):
            result = _set(result, path, 0, it)
    except _Exhausted:
        raise VectorLengthError(count(obj, optic), len(items), f"'{resolve(optic)}'") from None
    leftover = sum(1 for _ in it)
    if leftover:
        raise VectorLengthError(len(items) - leftover, len(items), f"'{resolve(optic)}'")
    return result


def construct(cls: type, pairs: Iterable[tuple[PathLike, Any]]) -> Any:
    """
    Build a new instance of ``cls`` from (field path, value) pairs.

    Every path must name exactly one field: an attribute for dataclasses,
    named tuples and keyword-constructed classes, or a key for mapping types.
    """
    kwargs: dict[Any, Any] = {}
    for expr, value in pairs:
        path = resolve(expr)
        field = path.single_field if isinstance(path, Path) else None
        if field is None:
            raise ConstructionArityError(str(path), cls.__name__)
        name = field.name if isinstance(field, Attr) else field.key
        if name in kwargs:
            raise SpecificationError(f"Field {name!r} of {cls.__name__} is assigned more than once.")
        kwargs[name] = value
    if isinstance(cls, type) and issubclass(cls, Mapping):
        return cls(kwargs)
    return cls(**kwargs)


__all__ = ["getall", "setall", "count", "construct"]
