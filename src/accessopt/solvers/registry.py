"""
Named solver backends and their capabilities.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from accessopt.foundation.exceptions import InvalidAlgorithmError, SolverCapabilityError
from accessopt.foundation.registry import Registry
from accessopt.solvers.function import OptimizationProblem, OptimizationSolution

SolverRun = Callable[..., OptimizationSolution]


@dataclass(frozen=True)
class SolverBackend:
    name: str
    run: SolverRun
    supports_bounds: bool = True
    requires_bounds: bool = False
    supports_constraints: bool = False
    description: str = ""

    def check(self, problem: OptimizationProblem) -> None:
        """Raise SolverCapabilityError if this backend cannot take ``problem`` as is."""
        if problem.bounded and not self.supports_bounds:
            raise SolverCapabilityError(
                self.name,
                "does not support box bounds",
                _names(lambda b: b.supports_bounds and (b.supports_constraints or not problem.constrained)),
            )
        if not problem.bounded and self.requires_bounds:
            raise SolverCapabilityError(
                self.name,
                "needs box bounds; give every OptArgs entry an interval",
                _names(lambda b: not b.requires_bounds),
            )
        if problem.constrained and not self.supports_constraints:
            raise SolverCapabilityError(
                self.name,
                "does not support nonlinear constraints",
                _names(lambda b: b.supports_constraints),
            )


ALGORITHMS: Registry[SolverBackend] = Registry("algorithms")


def _names(predicate: Callable[[SolverBackend], bool]) -> list[str]:
    return [name for name, backend in ALGORITHMS.items() if predicate(backend)]


def register_algorithm(backend: SolverBackend, *, override: bool = False) -> SolverBackend:
    ALGORITHMS.register(backend.name, backend, override=override)
    return backend


def unregister_algorithm(name: str) -> SolverBackend:
    return ALGORITHMS.unregister(name)


def available_algorithms() -> list[str]:
    return ALGORITHMS.list()


def resolve_algorithm(algorithm: str | SolverBackend) -> SolverBackend:
    if isinstance(algorithm, SolverBackend):
        return algorithm
    if not isinstance(algorithm, str) or algorithm not in ALGORITHMS:
        raise InvalidAlgorithmError(str(algorithm), available_algorithms())
    return ALGORITHMS.get(algorithm)


__all__ = [
    "SolverRun",
    "SolverBackend",
    "ALGORITHMS",
    "register_algorithm",
    "unregister_algorithm",
    "available_algorithms",
    "resolve_algorithm",
]
