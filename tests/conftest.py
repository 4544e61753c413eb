from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pytest


@dataclass(frozen=True)
class ExpModel:
    scale: float
    shift: float

    def __call__(self, x):
        return self.scale * np.exp(-((x - self.shift) ** 2))


@dataclass(frozen=True)
class SumModel:
    comps: tuple

    def __call__(self, x):
        return sum(c(x) for c in self.comps)


@dataclass(frozen=True)
class Curve:
    x: np.ndarray
    y: np.ndarray


def loss(model, data: Curve) -> float:
    return float(np.sum((data.y - model(data.x)) ** 2))


def mean_shift(model, _data) -> float:
    return float(np.mean([c.shift for c in model.comps]))


TRUE_MODEL = SumModel((ExpModel(2.0, 5.0), ExpModel(0.5, 2.0), ExpModel(0.5, 8.0)))


@pytest.fixture
def exp_model_cls() -> type:
    return ExpModel


@pytest.fixture
def sum_model_cls() -> type:
    return SumModel


@pytest.fixture
def true_model() -> SumModel:
    return TRUE_MODEL


@pytest.fixture
def model0() -> SumModel:
    return SumModel((ExpModel(1, 1), ExpModel(1, 2), ExpModel(1, 3)))


@pytest.fixture
def data() -> Curve:
    x = np.arange(0.0, 10.0 + 1e-9, 0.2)
    y = TRUE_MODEL(x) + np.linspace(-0.01, 0.01, len(x))
    return Curve(x=x, y=y)


@pytest.fixture
def loss_fn():
    return loss


@pytest.fixture
def mean_shift_fn():
    return mean_shift
