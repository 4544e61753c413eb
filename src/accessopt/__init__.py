"""
accessopt: optimize structured Python objects with vector-based solvers.

Name the sub-values to optimize with paths, and accessopt flattens them into
the vector scipy works on and rebuilds the object from the result::

    from accessopt import OptArgs, OptProblemSpec, solve

    vars = OptArgs(("comps[*].shift", (0, 10)), ("comps[*].scale", (0.3, 10)))
    spec = OptProblemSpec(loss, model0, vars, data=data)
    sol = solve(spec, "differential-evolution", maxiters=300)
    sol.reconstructed_object
"""

from importlib import metadata as _metadata

from .foundation.exceptions import (
    AccessOptError,
    ConfigurationError,
    ConstructionArityError,
    InvalidAlgorithmError,
    MixedBoundsError,
    PathResolutionError,
    PathSyntaxError,
    SolverCapabilityError,
    SpecificationError,
    VectorLengthError,
)
from .foundation.config import SolveDefaults
from .foundation.logging import configure_accessopt_logging
from .optics import combine, construct, getall, resolve, setall
from .problem import (
    Interval,
    OptArgs,
    OptCons,
    OptProblemSpec,
    OptSolution,
    VectorType,
    build_problem,
    constraint_bounds,
    constraint_summary,
    constraint_violations,
    flatten,
    raw_bounds,
    raw_objective,
    solve,
    unflatten,
)
from .solvers import OptimizationFunction, OptimizationProblem, available_algorithms

try:
    __version__ = _metadata.version("accessopt")
except _metadata.PackageNotFoundError:  # pragma: no cover - running from a source tree
    __version__ = "0.0.0+unknown"

__all__ = [
    "__version__",
    # errors
    "AccessOptError",
    "ConfigurationError",
    "ConstructionArityError",
    "InvalidAlgorithmError",
    "MixedBoundsError",
    "PathResolutionError",
    "PathSyntaxError",
    "SolverCapabilityError",
    "SpecificationError",
    "VectorLengthError",
    # setup
    "SolveDefaults",
    "configure_accessopt_logging",
    # paths
    "resolve",
    "combine",
    "getall",
    "setall",
    "construct",
    # specs
    "Interval",
    "OptArgs",
    "OptCons",
    "OptProblemSpec",
    "OptSolution",
    "VectorType",
    # adapter layer
    "flatten",
    "unflatten",
    "raw_bounds",
    "raw_objective",
    "build_problem",
    "constraint_bounds",
    "constraint_summary",
    "constraint_violations",
    # solving
    "OptimizationFunction",
    "OptimizationProblem",
    "available_algorithms",
    "solve",
]
