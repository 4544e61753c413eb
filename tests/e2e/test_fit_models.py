from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from accessopt import OptArgs, OptCons, OptimizationFunction, OptProblemSpec, solve


def mean_shift(model, _data):
    return float(np.mean([c.shift for c in model.comps]))


@pytest.fixture
def scaled_seed(sum_model_cls, exp_model_cls):
    return sum_model_cls((exp_model_cls(2.0, 1.0), exp_model_cls(0.5, 2.0), exp_model_cls(0.5, 3.0)))


@pytest.fixture
def near_truth(sum_model_cls, exp_model_cls):
    return sum_model_cls((exp_model_cls(1.8, 4.8), exp_model_cls(0.6, 2.2), exp_model_cls(0.4, 7.8)))


@pytest.mark.slow
def test_global_fit_of_shifts(scaled_seed, loss_fn, data):
    vars = OptArgs(("comps[*].shift", (0, 10)))
    sol = solve(OptProblemSpec(loss_fn, scaled_seed, vars, data=data), "differential-evolution", maxiters=300, seed=0)
    shifts = sorted(c.shift for c in sol.uobj.comps)
    assert shifts == pytest.approx([2.0, 5.0, 8.0], abs=0.05)
    assert sol.uobj.comps[0].shift == pytest.approx(5.0, abs=0.05)
    assert [c.scale for c in sol.uobj.comps] == [2.0, 0.5, 0.5]


@pytest.mark.slow
def test_global_fit_with_thread_workers(scaled_seed, loss_fn, data):
    vars = OptArgs(("comps[*].shift", (0, 10)))
    spec = OptProblemSpec(loss_fn, scaled_seed, vars, data=data, utype="array")
    with ThreadPoolExecutor(max_workers=4) as pool:
        sol = solve(spec, "differential-evolution", maxiters=300, seed=0, workers=pool.map, updating="deferred")
    assert sorted(c.shift for c in sol.uobj.comps) == pytest.approx([2.0, 5.0, 8.0], abs=0.05)
    assert [c.shift for c in scaled_seed.comps] == [1.0, 2.0, 3.0]


def test_local_fit_of_shifts_and_scales(near_truth, true_model, loss_fn, data):
    vars = OptArgs(("comps[*].shift", (0, 10)), ("comps[*].scale", (0.3, 10)))
    sol = solve(OptProblemSpec(loss_fn, near_truth, vars, data=data), "l-bfgs-b")
    for fitted, expected in zip(sol.uobj.comps, true_model.comps):
        assert fitted.shift == pytest.approx(expected.shift, abs=0.05)
        assert fitted.scale == pytest.approx(expected.scale, abs=0.05)
    assert sol.objective < loss_fn(near_truth, data)


def test_unbounded_fit(near_truth, loss_fn, data):
    spec = OptProblemSpec(loss_fn, near_truth, OptArgs("comps[*].shift"), data=data)
    sol = solve(spec, "bfgs")
    assert [c.shift for c in sol.uobj.comps] == pytest.approx([5.0, 2.0, 8.0], abs=0.05)


def test_constrained_fit_stays_feasible(model0, loss_fn, data):
    vars = OptArgs(("comps[*].shift", (0, 10)))
    cons = OptCons((mean_shift, (0.5, 4)))
    spec = OptProblemSpec(loss_fn, model0, vars, cons, data=data)
    sol = solve(spec, "slsqp")
    assert 0.5 - 1e-4 <= mean_shift(sol.uobj, data) <= 4 + 1e-4
    assert sol.constraint_summary().startswith("cons #1: ")
    assert sol.objective <= loss_fn(model0, data)


def test_construction_mode_fit(exp_model_cls):
    x = np.linspace(0, 10, 41)
    target = exp_model_cls(2.0, 5.0)
    data = (x, target(x))

    def loss(model, d):
        xs, ys = d
        return float(np.sum((model(xs) - ys) ** 2))

    vars = OptArgs(("scale", (0.3, 10)), ("shift", (0, 10)))
    sol = solve(OptProblemSpec(loss, exp_model_cls, vars, data=data), "l-bfgs-b")
    assert isinstance(sol.uobj, exp_model_cls)
    assert sol.uobj.scale == pytest.approx(2.0, abs=1e-2)
    assert sol.uobj.shift == pytest.approx(5.0, abs=1e-2)


def test_objective_metadata_reaches_the_solver(near_truth, loss_fn, data):
    spec = OptProblemSpec(OptimizationFunction(loss_fn, jac="3-point"), near_truth, OptArgs("comps[*].shift"), data=data)
    sol = solve(spec, "bfgs")
    assert sol.problem.f.jac == "3-point"
    assert sorted(c.shift for c in sol.uobj.comps) == pytest.approx([2.0, 5.0, 8.0], abs=0.05)


@pytest.mark.parametrize("utype", [None, tuple, list, "array", "static", "array[float64]"])
def test_any_vector_type_runs(model0, loss_fn, data, utype):
    vars = OptArgs(("comps[*].shift", (0, 10)), ("comps[*].scale", (0.3, 10)))
    sol = solve(OptProblemSpec(loss_fn, model0, vars, data=data, utype=utype), "nelder-mead", maxiters=10)
    assert len(sol.u) == 6
    assert type(sol.uobj) is type(model0)
    assert len(sol.uobj.comps) == 3


def test_default_algorithm_from_environment(monkeypatch, model0, loss_fn, data):
    monkeypatch.setenv("ACCESSOPT_ALGORITHM", "powell")
    monkeypatch.setenv("ACCESSOPT_MAXITERS", "5")
    sol = solve(OptProblemSpec(loss_fn, model0, OptArgs(("comps[*].shift", (0, 10))), data=data))
    assert sol.algorithm == "powell"
    assert sol.nit <= 5
