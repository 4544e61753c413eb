from .path import (
    Attr,
    ConcatPath,
    Each,
    Index,
    Key,
    Leaves,
    Path,
    PathLike,
    Slice,
    Step,
    combine,
    is_numeric_leaf,
    parse,
    resolve,
)
from .access import construct, count, getall, setall

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
    "getall",
    "setall",
    "count",
    "construct",
]
