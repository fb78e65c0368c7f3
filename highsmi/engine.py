# highsmi/engine.py
"""
Scoped ownership of one HiGHS instance. The raw handle never leaves this
module: callers get typed option setters, load/run and result accessors.

    with HighsEngine() as engine:
        inf = engine.infinity()
        ...
"""
from __future__ import annotations

import logging
from typing import Optional

import highspy
import numpy as np

from .assemble import CONTINUOUS, INTEGER, AssembledInput
from .errors import EngineUnavailableError, OptionError

logger = logging.getLogger(__name__)

_VAR_TYPES = {
    CONTINUOUS: highspy.HighsVarType.kContinuous,
    INTEGER: highspy.HighsVarType.kInteger,
}


def _present(buf):
    """None for zero-length buffers so they are never handed to the engine."""
    if buf is None or len(buf) == 0:
        return None
    return buf


def to_highs_model(inp: AssembledInput):
    """Copy the assembled arrays into a highspy.HighsModel."""
    lp = highspy.HighsLp()
    lp.num_col_ = inp.num_columns
    lp.num_row_ = inp.num_rows
    lp.sense_ = highspy.ObjSense.kMaximize if inp.maximize else highspy.ObjSense.kMinimize
    lp.offset_ = 0.0

    for attr, buf in (("col_cost_", inp.col_cost),
                      ("col_lower_", inp.col_lower),
                      ("col_upper_", inp.col_upper),
                      ("row_lower_", inp.row_lower),
                      ("row_upper_", inp.row_upper)):
        buf = _present(buf)
        if buf is not None:
            setattr(lp, attr, buf)

    A = inp.a_matrix
    lp.a_matrix_.format_ = highspy.MatrixFormat.kRowwise
    lp.a_matrix_.num_col_ = inp.num_columns
    lp.a_matrix_.num_row_ = inp.num_rows
    lp.a_matrix_.start_ = A.indptr
    if _present(A.indices) is not None:
        lp.a_matrix_.index_ = A.indices
        lp.a_matrix_.value_ = A.data

    if inp.is_integer_problem:
        lp.integrality_ = [_VAR_TYPES[int(k)] for k in inp.integrality]

    model = highspy.HighsModel()
    model.lp_ = lp
    if inp.is_quadratic_problem:
        Q = inp.hessian
        model.hessian_.dim_ = inp.num_columns
        model.hessian_.format_ = highspy.HessianFormat.kTriangular
        model.hessian_.start_ = Q.indptr
        model.hessian_.index_ = Q.indices
        model.hessian_.value_ = Q.data
    return model


def succeeded(status) -> bool:
    return status in (highspy.HighsStatus.kOk, highspy.HighsStatus.kWarning)


class HighsEngine:
    def __init__(self, factory=None):
        self._factory = factory or highspy.Highs
        self._h = None

    def __enter__(self):
        try:
            h = self._factory()
        except (RuntimeError, MemoryError, OSError) as exc:
            raise EngineUnavailableError("could not create a HiGHS instance") from exc
        if h is None:
            raise EngineUnavailableError("could not create a HiGHS instance")
        self._h = h
        return self

    def __exit__(self, exc_type, exc, tb):
        h, self._h = self._h, None
        if h is not None:
            h.clear()
        return False

    @property
    def _handle(self):
        if self._h is None:
            raise RuntimeError("HighsEngine used outside of its with-block")
        return self._h

    def infinity(self) -> float:
        return float(self._handle.getInfinity())

    # -- options --
    def _set(self, name, value, kind):
        status = self._handle.setOptionValue(name, value)
        if status != highspy.HighsStatus.kOk:
            raise OptionError(name, value, kind)

    def set_bool(self, name: str, value: bool) -> None:
        self._set(name, bool(value), "bool")

    def set_int(self, name: str, value: int) -> None:
        self._set(name, int(value), "int")

    def set_float(self, name: str, value: float) -> None:
        self._set(name, float(value), "float (double)")

    def set_string(self, name: str, value: str) -> None:
        self._set(name, str(value), "string")

    # -- model / run --
    def load(self, inp: AssembledInput) -> bool:
        status = self._handle.passModel(to_highs_model(inp))
        if status == highspy.HighsStatus.kWarning:
            logger.warning("HiGHS accepted the model with warnings")
        return succeeded(status)

    def run(self):
        return self._handle.run()

    def model_status(self):
        return self._handle.getModelStatus()

    def solution(self) -> Optional[np.ndarray]:
        """Column values, or None when HiGHS has no valid primal values to give."""
        try:
            sol = self._handle.getSolution()
        except RuntimeError:
            logger.warning("HiGHS failed returning the solution", exc_info=True)
            return None
        if not sol.value_valid:
            return None
        # column and row values/duals come back together; only column values are kept
        return np.asarray(sol.col_value, dtype=np.float64)

    def objective_value(self) -> float:
        return float(self._handle.getInfo().objective_function_value)
