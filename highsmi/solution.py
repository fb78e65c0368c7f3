# highsmi/solution.py
from __future__ import annotations

import sys
from dataclasses import dataclass, field
from datetime import timedelta

import numpy as np

from .status import SolutionStatus

PROVIDER = "HiGHS"

# Returned by Solution.value for variables the solution holds no value for.
NOT_FOUND = sys.float_info.max


def _frozen(values):
    arr = np.array(values, dtype=np.float64)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class Solution:
    status: SolutionStatus = SolutionStatus.UNKNOWN
    values: np.ndarray = field(default_factory=lambda: _frozen([]))
    objective_value: float = 0.0
    runtime: timedelta = timedelta(0)

    def __post_init__(self):
        object.__setattr__(self, "values", _frozen(self.values))

    @property
    def provider(self) -> str:
        return PROVIDER

    def value(self, var) -> float:
        i = var if isinstance(var, (int, np.integer)) else var.index
        if i < 0 or i >= self.values.size:
            return NOT_FOUND
        return float(self.values[i])

    @property
    def has_values(self) -> bool:
        return self.status.has_values

    @property
    def is_optimal(self) -> bool:
        return self.status.is_optimal

    @property
    def is_infeasible(self) -> bool:
        return self.status.is_infeasible

    @property
    def is_unbounded(self) -> bool:
        return self.status.is_unbounded

    @property
    def is_time_out(self) -> bool:
        return self.status.is_time_out

    @property
    def is_sub_optimal(self) -> bool:
        return False

    @property
    def is_numerical_failure(self) -> bool:
        return False
