import numpy as np
import pytest

import LunarGraph.backend.backend as backend
from LunarGraph import ComputationGraph, LSTMBuilder, Model


@pytest.fixture(autouse=True)
def _seed():
    backend.set_seed(1234)


@pytest.fixture
def model():
    return Model()


@pytest.fixture
def cg():
    return ComputationGraph()


@pytest.fixture
def make_builder(model):
    def _make(layers=2, input_dim=3, hidden_dim=4):
        return LSTMBuilder(layers, input_dim, hidden_dim, model)
    return _make


@pytest.fixture
def make_inputs():
    def _make(cg, n, dim, seed=0):
        rng = np.random.RandomState(seed)
        values = [rng.uniform(-1, 1, size=dim).astype(backend.DTYPE) for _ in range(n)]
        return [cg.add_input((dim,), v) for v in values], values
    return _make
