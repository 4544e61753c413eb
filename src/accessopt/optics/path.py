"""
Reference paths into structured values.

A :class:`Path` is an immutable sequence of steps. Each step knows how to list
the positions it focuses on inside a value (``foci``) and how to build a copy
of that value with every focused position transformed (``modify``). Paths never
mutate their input.

Supported steps:

* :class:`Attr` -- attribute of a dataclass, named tuple or plain object
* :class:`Key` -- mapping key
* :class:`Index` -- sequence / numpy array index
* :class:`Slice` -- every element of a sequence slice
* :class:`Each` -- every element of a sequence, every value of a mapping,
  every element of a numpy array (row-major)
* :class:`Leaves` -- every numeric leaf, recursively

String expressions are parsed by :func:`resolve`::

    resolve("comps[*].shift")
    resolve("weights['w1'][0:2]")
    resolve("**")
"""

from __future__ import annotations

import copy
import dataclasses
import numbers
import re
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Union

import numpy as np

from accessopt.foundation.exceptions import PathResolutionError, PathSyntaxError

Modifier = Callable[[Any], Any]


# ---------------------------------------------------------------------------
# Container helpers
# ---------------------------------------------------------------------------


def _is_namedtuple(obj: Any) -> bool:
    return isinstance(obj, tuple) and hasattr(type(obj), "_fields")


def _is_sequence(obj: Any) -> bool:
    if isinstance(obj, (str, bytes, bytearray)):
        return False
    return isinstance(obj, (Sequence, np.ndarray))


def is_numeric_leaf(obj: Any) -> bool:
    """True for real/complex scalars (python or numpy), excluding booleans."""
    if isinstance(obj, (bool, np.bool_)):
        return False
    return isinstance(obj, (numbers.Number, np.number))


def _rebuild_sequence(obj: Any, items: list[Any]) -> Any:
    if isinstance(obj, np.ndarray):
        if obj.dtype.kind == "O":
            out = np.empty(obj.shape, dtype=object)
            for i, item in enumerate(items):
                out.flat[i] = item
            return out
        new = np.asarray(items)
        dtype = np.result_type(obj.dtype, new.dtype) if new.size else obj.dtype
        return new.astype(dtype, copy=False).reshape(obj.shape)
    if _is_namedtuple(obj):
        return type(obj)(*items)
    if isinstance(obj, tuple):
        return tuple(items)
    if isinstance(obj, list):
        return list(items)
    return type(obj)(items)


def _rebuild_mapping(obj: Mapping[Any, Any], updates: Mapping[Any, Any]) -> Any:
    if isinstance(obj, dict):
        new = copy.copy(obj)
        new.update(updates)
        return new
    merged = dict(obj)
    merged.update(updates)
    return type(obj)(merged)


def _replace_attr(obj: Any, name: str, value: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        if any(f.name == name and f.init for f in dataclasses.fields(obj)):
            return dataclasses.replace(obj, **{name: value})
    if _is_namedtuple(obj):
        return obj._replace(**{name: value})
    new = copy.copy(obj)
    # object.__setattr__ also works for frozen dataclasses and __slots__ classes
    object.__setattr__(new, name, value)
    return new


def _array_with(obj: np.ndarray, index: Any, value: Any) -> np.ndarray:
    dtype = np.result_type(obj.dtype, np.asarray(value).dtype)
    new = obj.astype(dtype, copy=True)
    new[index] = value
    return new


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------


class Step:
    """One segment of a path."""

    def foci(self, obj: Any, where: str) -> list[Any]:
        raise NotImplementedError

    def modify(self, obj: Any, fn: Modifier, where: str) -> Any:
        raise NotImplementedError

    def _fail(self, obj: Any, where: str, reason: str | None = None) -> PathResolutionError:
        return PathResolutionError(where, str(self), obj, reason)


@dataclass(frozen=True)
class Attr(Step):
    name: str

    def foci(self, obj: Any, where: str) -> list[Any]:
        try:
            return [getattr(obj, self.name)]
        except AttributeError:
            raise self._fail(obj, where, f"It has no attribute '{self.name}'.") from None

    def modify(self, obj: Any, fn: Modifier, where: str) -> Any:
        (value,) = self.foci(obj, where)
        return _replace_attr(obj, self.name, fn(value))

    def __str__(self) -> str:
        return f".{self.name}"


@dataclass(frozen=True)
class Key(Step):
    key: Any

    def foci(self, obj: Any, where: str) -> list[Any]:
        if not isinstance(obj, Mapping):
            raise self._fail(obj, where, "Key steps need a mapping.")
        try:
            return [obj[self.key]]
        except KeyError:
            raise self._fail(obj, where, f"Key {self.key!r} is missing.") from None

    def modify(self, obj: Any, fn: Modifier, where: str) -> Any:
        (value,) = self.foci(obj, where)
        return _rebuild_mapping(obj, {self.key: fn(value)})

    def __str__(self) -> str:
        return f"[{self.key!r}]"


@dataclass(frozen=True)
class Index(Step):
    """Sequence position; on a mapping, the integer key of the same value."""

    index: int

    def foci(self, obj: Any, where: str) -> list[Any]:
        if isinstance(obj, Mapping):
            return Key(self.index).foci(obj, where)
        if not _is_sequence(obj):
            raise self._fail(obj, where, "Index steps need a sequence or array.")
        try:
            return [obj[self.index]]
        except IndexError:
            raise self._fail(obj, where, f"Index {self.index} is out of range for length {len(obj)}.") from None

    def modify(self, obj: Any, fn: Modifier, where: str) -> Any:
        if isinstance(obj, Mapping):
            return Key(self.index).modify(obj, fn, where)
        (value,) = self.foci(obj, where)
        new_value = fn(value)
        if isinstance(obj, np.ndarray):
            return _array_with(obj, self.index, new_value)
        items = list(obj)
        items[self.index] = new_value
        return _rebuild_sequence(obj, items)

    def __str__(self) -> str:
        return f"[{self.index}]"


@dataclass(frozen=True)
class Slice(Step):
    start: int | None = None
    stop: int | None = None
    step: int | None = None

    def _positions(self, obj: Any, where: str) -> range:
        if not _is_sequence(obj):
            raise self._fail(obj, where, "Slice steps need a sequence or array.")
        return range(len(obj))[slice(self.start, self.stop, self.step)]

    def foci(self, obj: Any, where: str) -> list[Any]:
        return [obj[i] for i in self._positions(obj, where)]

    def modify(self, obj: Any, fn: Modifier, where: str) -> Any:
        positions = self._positions(obj, where)
        if isinstance(obj, np.ndarray):
            new_values = [fn(obj[i]) for i in positions]
            if not new_values:
                return obj.copy()
            return _array_with(obj, list(positions), np.asarray(new_values))
        items = list(obj)
        for i in positions:
            items[i] = fn(items[i])
        return _rebuild_sequence(obj, items)

    def __str__(self) -> str:
        parts = ["" if v is None else str(v) for v in (self.start, self.stop)]
        text = ":".join(parts)
        if self.step is not None:
            text += f":{self.step}"
        return f"[{text}]"


@dataclass(frozen=True)
class Each(Step):
    def foci(self, obj: Any, where: str) -> list[Any]:
        if isinstance(obj, np.ndarray):
            return list(obj.flat)
        if isinstance(obj, Mapping):
            return list(obj.values())
        if _is_sequence(obj):
            return list(obj)
        raise self._fail(obj, where, "Each steps need a sequence, mapping or array.")

    def modify(self, obj: Any, fn: Modifier, where: str) -> Any:
        if isinstance(obj, Mapping):
            return _rebuild_mapping(obj, {k: fn(v) for k, v in obj.items()})
        items = [fn(item) for item in self.foci(obj, where)]
        return _rebuild_sequence(obj, items)

    def __str__(self) -> str:
        return "[*]"


@dataclass(frozen=True)
class Leaves(Step):
    """
    Every numeric leaf below the focus.

    Descends into dataclass init fields, named tuples, tuples, lists, mappings
    and numpy arrays. Any other object is opaque and contributes no leaves.
    """

    def foci(self, obj: Any, where: str) -> list[Any]:
        if is_numeric_leaf(obj):
            return [obj]
        if isinstance(obj, np.ndarray):
            if obj.dtype.kind in "iufc":
                return list(obj.flat)
            if obj.dtype.kind == "O":
                return [leaf for x in obj.flat for leaf in self.foci(x, where)]
            return []
        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            parts = [getattr(obj, f.name) for f in dataclasses.fields(obj) if f.init]
        elif isinstance(obj, Mapping):
            parts = list(obj.values())
        elif isinstance(obj, (tuple, list)):
            parts = list(obj)
        else:
            return []
        return [leaf for part in parts for leaf in self.foci(part, where)]

    def modify(self, obj: Any, fn: Modifier, where: str) -> Any:
        if is_numeric_leaf(obj):
            return fn(obj)
        if isinstance(obj, np.ndarray):
            if obj.dtype.kind in "iufc":
                return _rebuild_sequence(obj, [fn(x) for x in obj.flat])
            if obj.dtype.kind == "O":
                return _rebuild_sequence(obj, [self.modify(x, fn, where) for x in obj.flat])
            return obj
        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            updates = {
                f.name: self.modify(getattr(obj, f.name), fn, where) for f in dataclasses.fields(obj) if f.init
            }
            return dataclasses.replace(obj, **updates)
        if isinstance(obj, Mapping):
            return _rebuild_mapping(obj, {k: self.modify(v, fn, where) for k, v in obj.items()})
        if isinstance(obj, (tuple, list)):
            return _rebuild_sequence(obj, [self.modify(x, fn, where) for x in obj])
        return obj

    def __str__(self) -> str:
        return ".**"


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Path:
    """An ordered, immutable chain of steps."""

    steps: tuple[Step, ...] = ()

    def __truediv__(self, other: PathLike) -> Path:
        rhs = resolve(other)
        if isinstance(rhs, ConcatPath):
            raise TypeError("Cannot append a combined path; combine the composed paths instead.")
        return Path(self.steps + rhs.steps)

    @property
    def single_field(self) -> Attr | Key | None:
        """The step itself when the path names exactly one field, else None."""
        if len(self.steps) == 1 and isinstance(self.steps[0], (Attr, Key)):
            return self.steps[0]
        return None

    def __str__(self) -> str:
        return "".join(str(s) for s in self.steps).lstrip(".")

    def __repr__(self) -> str:
        return f"Path({str(self)!r})"


@dataclass(frozen=True)
class ConcatPath:
    """Several paths read and written one after the other, in order."""

    paths: tuple[Path, ...]

    def __str__(self) -> str:
        return " ++ ".join(str(p) or "<root>" for p in self.paths)

    def __repr__(self) -> str:
        return f"ConcatPath({[str(p) for p in self.paths]!r})"


PathLike = Union[str, Step, Path]


_TOKEN = re.compile(
    r"""
      (?P<dot>\.)?(?:(?P<leaves>\*\*)|(?P<name>[A-Za-z_][A-Za-z0-9_]*))
    | \[\s*(?:
          (?P<each>\*)
        | (?P<slice>-?\d*\s*:\s*-?\d*(?:\s*:\s*-?\d*)?)
        | (?P<index>-?\d+)
        | (?P<quoted>'[^']*'|"[^"]*")
      )\s*\]
    """,
    re.VERBOSE,
)


def _slice_bound(text: str) -> int | None:
    text = text.strip()
    return int(text) if text else None


@lru_cache(maxsize=512)
def parse(expr: str) -> Path:
    """Parse a path expression such as ``"comps[*].shift"``."""
    text = expr.strip()
    steps: list[Step] = []
    pos = 0
    while pos < len(text):
        m = _TOKEN.match(text, pos)
        if m is None:
            raise PathSyntaxError(expr, pos)
        if m.group("leaves") or m.group("name"):
            if not m.group("dot") and pos != 0:
                raise PathSyntaxError(expr, pos)
            steps.append(Leaves() if m.group("leaves") else Attr(m.group("name")))
        elif m.group("each"):
            steps.append(Each())
        elif m.group("slice") is not None:
            bounds = m.group("slice").split(":")
            steps.append(Slice(*(_slice_bound(b) for b in bounds)))
        elif m.group("index") is not None:
            steps.append(Index(int(m.group("index"))))
        else:
            steps.append(Key(m.group("quoted")[1:-1]))
        pos = m.end()
    return Path(tuple(steps))


def resolve(expr: PathLike | ConcatPath) -> Path | ConcatPath:
    """Turn a path expression, step or path into a path."""
    if isinstance(expr, (Path, ConcatPath)):
        return expr
    if isinstance(expr, Step):
        return Path((expr,))
    if isinstance(expr, str):
        return parse(expr)
    raise TypeError(f"Expected a path expression, Step or Path, got {type(expr).__name__}.")


def combine(paths: Iterable[PathLike]) -> ConcatPath:
    """Concatenate paths, preserving order. Nested combinations are flattened."""
    flat: list[Path] = []
    for p in paths:
        resolved = resolve(p)
        if isinstance(resolved, ConcatPath):
            flat.extend(resolved.paths)
        else:
            flat.append(resolved)
    return ConcatPath(tuple(flat))


__all__ = [
    "Step",
    "Attr",
    "Key",
    "Index",
    "Slice",
    "Each",
    "Leaves",
    "Path",
    "ConcatPath",
    "PathLike",
    "is_numeric_leaf",
    "parse",
    "resolve",
    "combine",
]
