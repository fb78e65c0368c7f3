import math
from types import SimpleNamespace

import highspy
import pytest


class FakeHighs:
    """Records every call; statuses are scripted per test."""

    def __init__(self, pass_status=highspy.HighsStatus.kOk,
                 run_status=highspy.HighsStatus.kOk,
                 model_status=highspy.HighsModelStatus.kOptimal,
                 col_value=None, objective=0.0, reject=(),
                 value_valid=True, solution_error=None):
        self.pass_status = pass_status
        self.run_status = run_status
        self.status = model_status
        self.col_value = col_value
        self.objective = objective
        self.reject = set(reject)
        self.value_valid = value_valid
        self.solution_error = solution_error
        self.calls = []
        self.options = {}
        self.model = None
        self.cleared = False

    def getInfinity(self):
        return math.inf

    def setOptionValue(self, name, value):
        self.calls.append(("setOptionValue", name, value))
        if name in self.reject:
            return highspy.HighsStatus.kError
        self.options[name] = value
        return highspy.HighsStatus.kOk

    def passModel(self, model):
        self.calls.append(("passModel",))
        self.model = model
        return self.pass_status

    def run(self):
        self.calls.append(("run",))
        return self.run_status

    def getModelStatus(self):
        return self.status

    def getSolution(self):
        if self.solution_error is not None:
            raise self.solution_error
        n = self.model.lp_.num_col_ if self.model is not None else 0
        cols = [0.0] * n if self.col_value is None else list(self.col_value)
        return SimpleNamespace(value_valid=self.value_valid, dual_valid=self.value_valid,
                               col_value=cols, col_dual=[0.0] * len(cols),
                               row_value=[], row_dual=[])

    def getInfo(self):
        return SimpleNamespace(objective_function_value=self.objective)

    def clear(self):
        self.cleared = True

    def called(self, name):
        return [c for c in self.calls if c[0] == name]


@pytest.fixture
def fake_engine():
    """fake_engine(**kw) -> (factory, created) where created collects FakeHighs instances."""
    created = []

    def make(**kw):
        def factory():
            h = FakeHighs(**kw)
            created.append(h)
            return h
        return factory, created

    return make
