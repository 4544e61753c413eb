from __future__ import annotations

from typing import Any

from accessopt.foundation.config import SolveDefaults
from accessopt.problem.constraints import constraint_summary
from accessopt.problem.spec import OptProblemSpec, build_problem
from accessopt.solvers import solve as solve_problem
from accessopt.solvers.function import OptimizationSolution
from accessopt.solvers.registry import SolverBackend


class OptSolution:
    """
    Solver result paired with the problem spec it came from.

    ``raw_vector`` (alias ``u``) is the solver's vector; ``reconstructed_object``
    (alias ``uobj``) is that vector turned back into a structured object.
    Any other attribute is looked up on the wrapped OptimizationSolution.
    """

    __slots__ = ("sol", "spec")

    def __init__(self, sol: OptimizationSolution, spec: OptProblemSpec) -> None:
        object.__setattr__(self, "sol", sol)
        object.__setattr__(self, "spec", spec)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("OptSolution is read-only")

    def __getattr__(self, name: str) -> Any:
        if name in OptSolution.__slots__:
            raise AttributeError(name)
        return getattr(self.sol, name)

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(vars(self.sol)))

    def __getstate__(self) -> tuple[Any, ...]:
        return (self.sol, self.spec)

    def __setstate__(self, state: tuple[Any, ...]) -> None:
        object.__setattr__(self, "sol", state[0])
        object.__setattr__(self, "spec", state[1])

    @property
    def raw_vector(self) -> Any:
        return self.sol.u

    @property
    def u(self) -> Any:
        return self.sol.u

    @property
    def reconstructed_object(self) -> Any:
        # rebuilt on every access; the result is a fresh value each time
        return self.spec.from_raw(self.sol.u)

    @property
    def uobj(self) -> Any:
        return self.reconstructed_object

    def constraint_summary(self) -> str:
        if self.spec.cons is None:
            return ""
        return constraint_summary(self.spec.cons, self.reconstructed_object, self.spec.data)

    def __repr__(self) -> str:
        return f"OptSolution(algorithm={self.sol.algorithm!r}, objective={self.sol.objective:.6g}, success={self.sol.success})"


def solve(
    spec: OptProblemSpec,
    algorithm: str | SolverBackend | None = None,
    *,
    defaults: SolveDefaults | None = None,
    **options: Any,
) -> OptSolution:
    """
    Optimize the structured problem ``spec``.

    ``algorithm`` and the ``maxiters`` option fall back to ``defaults``
    (environment-driven SolveDefaults when omitted). Remaining options are
    passed to the backend.
    """
    if not isinstance(spec, OptProblemSpec):
        raise TypeError("solve() expects an OptProblemSpec instance.")
    cfg = defaults or SolveDefaults()
    name = algorithm if isinstance(algorithm, SolverBackend) else cfg.resolve_algorithm(algorithm)
    problem = build_problem(spec)
    sol = solve_problem(problem, name, **cfg.apply(options))
    return OptSolution(sol, spec)


__all__ = ["OptSolution", "solve"]
