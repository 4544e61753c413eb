from .vectors import VECTOR_KINDS, VectorType, to_sequence
from .args import ArgSpec, ConsSpec, Interval, OptArgs, OptCons
from .flatten import RawBounds, flatten, raw_bounds, unflatten
from .constraints import (
    ConsBounds,
    RawConstraints,
    constraint_bounds,
    constraint_summary,
    constraint_values,
    constraint_violations,
)
from .spec import OptProblemSpec, RawObjective, build_problem, raw_objective, raw_u
from .solution import OptSolution, solve

__all__ = [
    "VECTOR_KINDS",
    "VectorType",
    "to_sequence",
    "ArgSpec",
    "ConsSpec",
    "Interval",
    "OptArgs",
    "OptCons",
    "RawBounds",
    "flatten",
    "raw_bounds",
    "unflatten",
    "ConsBounds",
    "RawConstraints",
    "constraint_bounds",
    "constraint_summary",
    "constraint_values",
    "constraint_violations",
    "OptProblemSpec",
    "RawObjective",
    "build_problem",
    "raw_objective",
    "raw_u",
    "OptSolution",
    "solve",
]
