from __future__ import annotations

import numpy as np
import pytest

from accessopt.foundation.config import SolveDefaults
from accessopt.foundation.exceptions import SolverCapabilityError
from accessopt.problem import OptArgs, OptCons, OptProblemSpec, OptSolution, solve
from accessopt.solvers import OptimizationSolution, SolverBackend


def mean_shift(model, _data):
    return float(np.mean([c.shift for c in model.comps]))


def _fixed(u):
    def run(problem, **options):
        return OptimizationSolution(
            u=np.asarray(u, dtype=float),
            objective=0.25,
            success=True,
            message="converged",
            algorithm="fixed",
            nit=4,
            original={"options": options},
        )

    return SolverBackend("fixed", run, supports_constraints=True)


@pytest.fixture
def spec(model0, loss_fn, data):
    return OptProblemSpec(
        loss_fn,
        model0,
        OptArgs(("comps[*].shift", (0, 10))),
        OptCons((mean_shift, (0.5, 4))),
        data=data,
    )


def test_solution_exposes_vector_and_object(spec):
    sol = solve(spec, _fixed([2, 5, 8]))
    assert isinstance(sol, OptSolution)
    np.testing.assert_allclose(sol.u, [2, 5, 8])
    assert sol.raw_vector is sol.u
    obj = sol.reconstructed_object
    assert [c.shift for c in obj.comps] == [2, 5, 8]
    assert sol.uobj == obj
    assert sol.uobj is not obj


def test_solution_forwards_unknown_attributes(spec):
    sol = solve(spec, _fixed([1, 2, 3]))
    assert sol.message == "converged"
    assert sol.nit == 4
    assert sol.success
    assert "nit" in dir(sol)
    with pytest.raises(AttributeError):
        sol.not_a_field
    with pytest.raises(AttributeError):
        sol.u = None


def test_solution_constraint_summary(spec):
    assert solve(spec, _fixed([2, 5, 8])).constraint_summary() == "cons #1: 5.0 not in [0.5, 4]"
    assert solve(spec, _fixed([1, 2, 3])).constraint_summary() == "cons #1: 2.0 in [0.5, 4]"


def test_defaults_fill_maxiters(spec):
    sol = solve(spec, _fixed([1, 2, 3]), defaults=SolveDefaults(maxiters=5), tol=1e-3)
    assert sol.original == {"options": {"tol": 1e-3, "maxiters": 5}}
    sol = solve(spec, _fixed([1, 2, 3]), defaults=SolveDefaults(maxiters=5), maxiters=2)
    assert sol.original["options"]["maxiters"] == 2


def test_constrained_spec_needs_constraint_capable_backend(spec):
    def run(problem, **options):
        raise AssertionError("backend must not run")

    with pytest.raises(SolverCapabilityError):
        solve(spec, SolverBackend("plain", run))


def test_solve_rejects_non_spec():
    with pytest.raises(TypeError):
        solve("not a spec", "nelder-mead")
