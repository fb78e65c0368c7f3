# highsmi/assemble.py
"""
Flatten a model into the array layout HiGHS loads:

  columns   cost / lower / upper / integrality, one entry per variable
  rows      lower / upper, one entry per constraint that has terms
  A         CSR (row-wise), explicit zeros kept, term order kept
  Q         CSC, one triangle, diagonal doubled (HiGHS minimises c^T x + 0.5 x^T Q x)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

import numpy as np
import scipy.sparse as sp

from .errors import InvalidValueError
from .model import Sense

logger = logging.getLogger(__name__)

# match HighsVarType
CONTINUOUS = 0
INTEGER = 1


@dataclass(frozen=True)
class AssembledInput:
    num_columns: int
    num_rows: int
    col_cost: np.ndarray
    col_lower: np.ndarray
    col_upper: np.ndarray
    integrality: np.ndarray
    row_lower: np.ndarray
    row_upper: np.ndarray
    a_matrix: sp.csr_matrix
    hessian: sp.csc_matrix
    maximize: bool
    is_integer_problem: bool
    is_quadratic_problem: bool

    @property
    def num_nonzeros(self) -> int:
        return int(self.a_matrix.indptr[-1])

    @property
    def num_quadratic_nonzeros(self) -> int:
        return int(self.hessian.indptr[-1])


def _column(var, n):
    i = var.index
    if not 0 <= i < n:
        raise InvalidValueError(f"variable index {i} outside 0..{n - 1}")
    return i


def _no_nan(name, arr):
    if arr.size and np.isnan(arr).any():
        bad = np.flatnonzero(np.isnan(arr))[:5]
        raise InvalidValueError(f"NaN in {name} at positions {bad.tolist()}")
    return arr


def build_columns(variables, objective_terms, num_columns):
    """cost, lower, upper, integrality (+ whether any column is integer)."""
    cost = np.zeros(num_columns, dtype=np.float64)
    lower = np.empty(num_columns, dtype=np.float64)
    upper = np.empty(num_columns, dtype=np.float64)
    integrality = np.full(num_columns, CONTINUOUS, dtype=np.int32)

    for v in variables:
        i = _column(v, num_columns)
        lower[i] = v.lower_bound
        upper[i] = v.upper_bound
        if v.is_bool or v.is_int:
            integrality[i] = INTEGER

    seen = set()
    for t in objective_terms:
        i = _column(t.var, num_columns)
        if i in seen:
            logger.warning("duplicate objective term, keeping the last one",
                           extra={"column": i})
        seen.add(i)
        cost[i] = t.coefficient

    _no_nan("column costs", cost)
    _no_nan("column lower bounds", lower)
    _no_nan("column upper bounds", upper)
    return cost, lower, upper, integrality, bool((integrality == INTEGER).any())


def row_bounds(sense: Sense, rhs: float, infinity: float) -> Tuple[float, float]:
    if sense is Sense.LESS_THAN_OR_EQUAL:
        return -infinity, rhs
    if sense is Sense.EQUAL:
        return rhs, rhs
    if sense is Sense.GREATER_THAN_OR_EQUAL:
        return rhs, infinity
    raise InvalidValueError(f"unknown constraint sense {sense!r}")


def build_rows(constraints: Sequence, num_columns: int, infinity: float):
    """
    Row bounds and the CSR constraint matrix. `constraints` must already be
    restricted to constraints with at least one term; one shared cursor
    fills indptr so offsets are monotone and end at nnz.
    """
    m = len(constraints)
    nnz = sum(len(c.terms) for c in constraints)
    indptr = np.empty(m + 1, dtype=np.int32)
    indices = np.empty(nnz, dtype=np.int32)
    data = np.empty(nnz, dtype=np.float64)
    lower = np.empty(m, dtype=np.float64)
    upper = np.empty(m, dtype=np.float64)

    k = 0
    for r, c in enumerate(constraints):
        indptr[r] = k
        lower[r], upper[r] = row_bounds(c.sense, c.rhs, infinity)
        for t in c.terms:
            indices[k] = _column(t.var, num_columns)
            data[k] = t.coefficient
            k += 1
    indptr[m] = k

    _no_nan("row lower bounds", lower)
    _no_nan("row upper bounds", upper)
    _no_nan("constraint coefficients", data)
    A = sp.csr_matrix((data, indices, indptr), shape=(m, num_columns), copy=False)
    return lower, upper, A


def build_hessian(quadratic_terms, num_columns: int) -> sp.csc_matrix:
    # column (var1) -> row (var2) -> term; a repeated (i, j) pair keeps the last term
    grouped: Dict[int, Dict[int, object]] = {}
    for t in quadratic_terms:
        col = grouped.setdefault(_column(t.var1, num_columns), {})
        row = _column(t.var2, num_columns)
        if row in col:
            logger.warning("duplicate quadratic term, keeping the last one",
                           extra={"column": t.var1.index, "row": row})
        col[row] = t

    indptr = np.empty(num_columns + 1, dtype=np.int32)
    indices, data = [], []
    for c in range(num_columns):
        indptr[c] = len(indices)
        col = grouped.get(c)
        if not col:
            continue
        for t in sorted(col.values(), key=lambda t: t.var2.index):
            coef = t.coefficient
            if t.var1.index == t.var2.index:
                coef *= 2.0
            indices.append(t.var2.index)
            data.append(coef)
    indptr[num_columns] = len(indices)

    data = _no_nan("quadratic coefficients", np.asarray(data, dtype=np.float64))
    indices = np.asarray(indices, dtype=np.int32)
    return sp.csc_matrix((data, indices, indptr),
                         shape=(num_columns, num_columns), copy=False)


def assemble(model, infinity: float = np.inf) -> AssembledInput:
    """Build a fresh AssembledInput; `infinity` should come from the engine."""
    variables = model.vars
    objective = model.objective
    n = len(variables)
    rows = [c for c in model.constraints if len(c.terms) > 0]

    cost, col_lo, col_hi, integrality, is_integer = build_columns(variables, objective.terms, n)
    row_lo, row_hi, A = build_rows(rows, n, infinity)
    Q = build_hessian(objective.quadratic_terms, n)

    inp = AssembledInput(
        num_columns=n, num_rows=len(rows),
        col_cost=cost, col_lower=col_lo, col_upper=col_hi, integrality=integrality,
        row_lower=row_lo, row_upper=row_hi,
        a_matrix=A, hessian=Q,
        maximize=objective.is_maximize,
        is_integer_problem=is_integer,
        is_quadratic_problem=int(Q.indptr[-1]) > 0,
    )
    logger.debug(
        "assembled model",
        extra={"columns": inp.num_columns, "rows": inp.num_rows,
               "nonzeros": inp.num_nonzeros,
               "quadratic_nonzeros": inp.num_quadratic_nonzeros,
               "integer": inp.is_integer_problem},
    )
    return inp
