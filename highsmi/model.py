# highsmi/model.py
"""
Minimal mathematical-programming model: variables, a linear/quadratic
objective and linear constraints. The solver only reads from it.

    m = Model()
    x = m.new_float(0.0, 10.0)
    y = m.new_int(0, 5)
    c = m.new_constraint(Sense.LESS_THAN_OR_EQUAL, 8.0)
    c.new_term(1.0, x); c.new_term(1.0, y)
    m.objective.set_maximize()
    m.objective.new_term(1.0, x); m.objective.new_term(2.0, y)
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple


class Sense(Enum):
    LESS_THAN_OR_EQUAL = "<="
    EQUAL = "=="
    GREATER_THAN_OR_EQUAL = ">="


class VarKind(Enum):
    CONTINUOUS = "continuous"
    INTEGER = "integer"
    BOOL = "bool"


def _finite_or_inf(value, what):
    value = float(value)
    if math.isnan(value):
        raise ValueError(f"{what} must not be NaN")
    return value


class Var:
    __slots__ = ("_model", "index", "lower_bound", "upper_bound", "kind")

    def __init__(self, model, index, lower_bound, upper_bound, kind):
        self._model = model
        self.index = index
        self.lower_bound = _finite_or_inf(lower_bound, "lower bound")
        self.upper_bound = _finite_or_inf(upper_bound, "upper bound")
        self.kind = kind

    @property
    def is_bool(self) -> bool:
        return self.kind is VarKind.BOOL

    @property
    def is_int(self) -> bool:
        return self.kind is VarKind.INTEGER

    @property
    def is_float(self) -> bool:
        return self.kind is VarKind.CONTINUOUS

    def __repr__(self):
        return (f"Var(index={self.index}, kind={self.kind.value}, "
                f"bounds=[{self.lower_bound}, {self.upper_bound}])")


@dataclass(frozen=True)
class Term:
    var: Var
    coefficient: float


@dataclass(frozen=True)
class QuadraticTerm:
    """coefficient * var1 * var2"""

    var1: Var
    var2: Var
    coefficient: float


class Constraint:
    """
    Terms on the same variable are summed in place, keeping the position where
    the variable first appeared. Zero coefficients are kept.
    """

    def __init__(self, model, sense: Sense, rhs: float):
        self._model = model
        self.sense = sense
        self.rhs = _finite_or_inf(rhs, "right hand side")
        self._terms: Dict[int, Term] = {}

    def new_term(self, coefficient: float, var: Var) -> Term:
        self._model._check_owner(var)
        coefficient = _finite_or_inf(coefficient, "constraint coefficient")
        prev = self._terms.get(var.index)
        if prev is not None:
            coefficient += prev.coefficient
        term = self._terms[var.index] = Term(var, coefficient)
        return term

    @property
    def terms(self) -> Tuple[Term, ...]:
        return tuple(self._terms.values())

    def __repr__(self):
        return f"Constraint({len(self._terms)} terms {self.sense.value} {self.rhs})"


class Objective:
    """
    Terms on the same variable (or the same ordered variable pair) are
    summed, so the accessors never report duplicates.
    """

    def __init__(self, model):
        self._model = model
        self._maximize = False
        self._terms: Dict[int, Term] = {}
        self._quadratic: Dict[Tuple[int, int], QuadraticTerm] = {}

    def set_minimize(self):
        self._maximize = False

    def set_maximize(self):
        self._maximize = True

    @property
    def is_maximize(self) -> bool:
        return self._maximize

    def new_term(self, coefficient: float, var: Var) -> Term:
        self._model._check_owner(var)
        coefficient = _finite_or_inf(coefficient, "objective coefficient")
        prev = self._terms.get(var.index)
        if prev is not None:
            coefficient += prev.coefficient
        term = self._terms[var.index] = Term(var, coefficient)
        return term

    def new_quadratic_term(self, coefficient: float, var1: Var, var2: Var) -> QuadraticTerm:
        self._model._check_owner(var1)
        self._model._check_owner(var2)
        coefficient = _finite_or_inf(coefficient, "quadratic objective coefficient")
        key = (var1.index, var2.index)
        prev = self._quadratic.get(key)
        if prev is not None:
            coefficient += prev.coefficient
        term = self._quadratic[key] = QuadraticTerm(var1, var2, coefficient)
        return term

    @property
    def terms(self) -> Tuple[Term, ...]:
        return tuple(self._terms.values())

    @property
    def quadratic_terms(self) -> Tuple[QuadraticTerm, ...]:
        return tuple(self._quadratic.values())

    @property
    def is_quadratic(self) -> bool:
        return len(self._quadratic) > 0


class Model:
    def __init__(self):
        self._vars: List[Var] = []
        self._constraints: List[Constraint] = []
        self._objective = Objective(self)

    def _new_var(self, lb, ub, kind):
        var = Var(self, len(self._vars), lb, ub, kind)
        self._vars.append(var)
        return var

    def new_float(self, lb: float = -math.inf, ub: float = math.inf) -> Var:
        return self._new_var(lb, ub, VarKind.CONTINUOUS)

    def new_int(self, lb: float = -math.inf, ub: float = math.inf) -> Var:
        return self._new_var(lb, ub, VarKind.INTEGER)

    def new_bool(self) -> Var:
        return self._new_var(0.0, 1.0, VarKind.BOOL)

    def new_constraint(self, sense: Sense, rhs: float) -> Constraint:
        if not isinstance(sense, Sense):
            raise ValueError(f"unknown constraint sense {sense!r}")
        c = Constraint(self, sense, rhs)
        self._constraints.append(c)
        return c

    def _check_owner(self, var):
        if not isinstance(var, Var) or var._model is not self:
            raise ValueError(f"{var!r} does not belong to this model")

    @property
    def vars(self) -> Tuple[Var, ...]:
        return tuple(self._vars)

    @property
    def constraints(self) -> Tuple[Constraint, ...]:
        return tuple(self._constraints)

    @property
    def objective(self) -> Objective:
        return self._objective
