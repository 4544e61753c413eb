"""Generic vector-level solver front-end over scipy.optimize."""

from .function import InPlaceConstraints, OptimizationFunction, OptimizationProblem, OptimizationSolution
from .registry import (
    ALGORITHMS,
    SolverBackend,
    available_algorithms,
    register_algorithm,
    resolve_algorithm,
    unregister_algorithm,
)
from .solve import solve

__all__ = [
    "InPlaceConstraints",
    "OptimizationFunction",
    "OptimizationProblem",
    "OptimizationSolution",
    "ALGORITHMS",
    "SolverBackend",
    "available_algorithms",
    "register_algorithm",
    "resolve_algorithm",
    "unregister_algorithm",
    "solve",
]
