import math
from datetime import timedelta

import pytest

from highsmi import (ControlOptions, GapOptions, HighsSolver, MIPOptions, MIQPNotSupportedError,
                     Model, OptionError, Sense, SolveOptions, Verbosity, solve)


@pytest.fixture
def options():
    return SolveOptions(duration=timedelta(seconds=10), verbosity=Verbosity.OFF,
                        mip=MIPOptions(gap=GapOptions(absolute=0.0, relative=0.0)))


def test_empty_model(options):
    sol = solve(Model(), options)
    assert sol.is_optimal
    assert not sol.values.size


def test_no_objective(options):
    m = Model()
    m.new_float(0.0, 1.0)
    sol = solve(m, options)
    assert sol.is_optimal and sol.has_values


def test_constraint_without_terms(options):
    m = Model()
    m.new_bool()
    m.new_constraint(Sense.LESS_THAN_OR_EQUAL, 1)
    assert solve(m, options).is_optimal


def test_zero_coefficients(options):
    m = Model()
    x = m.new_bool()
    m.new_constraint(Sense.LESS_THAN_OR_EQUAL, 1).new_term(0, x)
    m.objective.new_term(0, x)
    assert solve(m, options).is_optimal


def test_repeated_variable_in_constraint(options):
    # x + x <= 3 is 2x <= 3
    m = Model()
    x = m.new_float(0, 10)
    c = m.new_constraint(Sense.LESS_THAN_OR_EQUAL, 3)
    c.new_term(1, x)
    c.new_term(1, x)
    m.objective.set_maximize()
    m.objective.new_term(1, x)
    sol = solve(m, options)
    assert sol.is_optimal
    assert sol.value(x) == pytest.approx(1.5)


@pytest.mark.parametrize("kind, lo, hi", [
    ("float", 0.1, 1.1),
    ("int", -1.0, 1.0),
    ("bool", 0.0, 1.0),
])
@pytest.mark.parametrize("minimize", [True, False])
def test_single_variable(options, kind, lo, hi, minimize):
    m = Model()
    if kind == "float":
        v = m.new_float(lo, hi)
    elif kind == "int":
        v = m.new_int(lo, hi)
    else:
        v = m.new_bool()
    if minimize:
        m.objective.set_minimize()
    else:
        m.objective.set_maximize()
    m.objective.new_term(1.0, v)

    sol = solve(m, options)
    assert sol.is_optimal and sol.has_values
    assert sol.value(v) == pytest.approx(lo if minimize else hi)


def test_diet_allocation(options):
    # max 6a + 5b  s.t. 3a + 2b <= 12, a + b <= 5, a, b integer in [0, 100]
    m = Model()
    a, b = m.new_int(0, 100), m.new_int(0, 100)
    m.objective.set_maximize()
    m.objective.new_term(6, a)
    m.objective.new_term(5, b)
    endive = m.new_constraint(Sense.LESS_THAN_OR_EQUAL, 12)
    endive.new_term(3, a); endive.new_term(2, b)
    carrot = m.new_constraint(Sense.LESS_THAN_OR_EQUAL, 5)
    carrot.new_term(1, a); carrot.new_term(1, b)

    sol = solve(m, options)
    assert sol.has_values
    assert sol.objective_value == pytest.approx(27)
    assert sol.runtime > timedelta(0)


def test_mixed_bounds(options):
    m = Model()
    x, y = m.new_float(0, 10), m.new_int(0, 5)
    c = m.new_constraint(Sense.LESS_THAN_OR_EQUAL, 8)
    c.new_term(1, x); c.new_term(1, y)
    m.objective.set_maximize()
    m.objective.new_term(1, x)
    m.objective.new_term(2, y)

    sol = solve(m, options)
    assert sol.has_values
    assert sol.objective_value == pytest.approx(13)
    assert sol.value(y) == pytest.approx(5)


def test_infeasible(options):
    m = Model()
    x = m.new_float(0, 1)
    m.new_constraint(Sense.GREATER_THAN_OR_EQUAL, 2).new_term(1, x)
    sol = solve(m, options)
    assert sol.is_infeasible
    assert not sol.has_values


def test_unbounded(options):
    m = Model()
    x = m.new_float(0, math.inf)
    m.objective.set_maximize()
    m.objective.new_term(1, x)
    m.new_constraint(Sense.GREATER_THAN_OR_EQUAL, 0).new_term(1, x)
    sol = solve(m, options)
    assert sol.is_unbounded
    assert not sol.has_values


def test_miqp_rejected(options):
    m = Model()
    x = m.new_int(4, math.inf)
    m.objective.new_quadratic_term(1.0, x, x)
    with pytest.raises(MIQPNotSupportedError):
        solve(m, options)


def test_unknown_control_option(options):
    m = Model()
    m.new_float(0, 1)
    opts = options.model_copy(update={"control": ControlOptions.parse(ints="no_such_option=1")})
    with pytest.raises(OptionError):
        solve(m, opts)


def test_control_options_accepted():
    m = Model()
    a, b = m.new_int(0, 100), m.new_int(0, 100)
    m.objective.set_maximize()
    m.objective.new_term(6, a)
    m.objective.new_term(5, b)
    c = m.new_constraint(Sense.LESS_THAN_OR_EQUAL, 12)
    c.new_term(3, a); c.new_term(2, b)
    opts = SolveOptions(
        duration=10,
        mip=MIPOptions(gap=GapOptions(absolute=80, relative=0.4)),
        control=ControlOptions.parse(floats="mip_heuristic_effort=0.7",
                                     ints="mip_max_nodes=200,threads=1",
                                     strings="presolve=off"),
    )
    assert solve(m, opts).has_values


def test_qp_with_constraint(options):
    # min -x2 - 3x3 + 2x1^2 - x1x3 + 0.2x2^2 + 2x3^2  s.t. x1 + x3 <= 2, x >= 0
    for _ in range(5):
        m = Model()
        x1, x2, x3 = (m.new_float(0, math.inf) for _ in range(3))
        obj = m.objective
        obj.new_term(-1.0, x2)
        obj.new_term(-3.0, x3)
        obj.new_quadratic_term(2.0, x1, x1)
        obj.new_quadratic_term(-1.0, x1, x3)
        obj.new_quadratic_term(0.2, x2, x2)
        obj.new_quadratic_term(2.0, x3, x3)
        c = m.new_constraint(Sense.LESS_THAN_OR_EQUAL, 2.0)
        c.new_term(1.0, x1); c.new_term(1.0, x3)

        sol = solve(m, options)
        assert sol.has_values
        assert sol.objective_value == pytest.approx(-2.45, abs=1e-3)


@pytest.mark.parametrize("linear, expected", [(-0.5, 30.0), (None, 20.0)])
def test_qp_bounded_below(options, linear, expected):
    m = Model()
    if linear is None:
        # min x1 + x2^2, x >= 4
        x1, x2 = m.new_float(4, math.inf), m.new_float(4, math.inf)
        m.objective.new_quadratic_term(1.0, x2, x2)
        m.objective.new_term(1.0, x1)
    else:
        # min -0.5x1 + 2x1^2, x1 >= 4
        x1 = m.new_float(4, math.inf)
        m.objective.new_quadratic_term(2.0, x1, x1)
        m.objective.new_term(linear, x1)
    sol = solve(m, options)
    assert sol.has_values
    assert sol.objective_value == pytest.approx(expected, abs=1e-3)


def test_linear_regression(options):
    ys = [1, 2, 3, 4, 5]
    xs = [y / 2.0 for y in ys]
    m = Model()
    x = m.new_float(-math.inf, math.inf)
    for xi, yi in zip(xs, ys):
        # (xi * x - yi)^2 without the constant
        m.objective.new_quadratic_term(xi * xi, x, x)
        m.objective.new_term(-2.0 * xi * yi, x)
    sol = solve(m, options)
    assert sol.has_values
    assert sol.value(x) == pytest.approx(2.0, abs=1e-3)


def test_portfolio(options):
    m = Model()
    x, y, z = m.new_float(0, 1000), m.new_float(0, 1000), m.new_float(0, 1000)
    obj = m.objective
    obj.new_quadratic_term(0.018641039983891217, x, x)
    obj.new_quadratic_term(0.0035985329276768114, x, y)
    obj.new_quadratic_term(0.0013097592536597557, x, z)
    obj.new_quadratic_term(0.0035985329276768114, y, x)
    obj.new_quadratic_term(0.0064369383226761, y, y)
    obj.new_quadratic_term(0.00488726515840726, y, z)
    obj.new_quadratic_term(0.0013097592536597557, z, x)
    obj.new_quadratic_term(0.00488726515840726, z, y)
    obj.new_quadratic_term(0.06868276545481435, z, z)
    ret = m.new_constraint(Sense.GREATER_THAN_OR_EQUAL, 50.0)
    ret.new_term(0.026002150277777348, x)
    ret.new_term(0.008101316405671457, y)
    ret.new_term(0.0737159094919898, z)
    budget = m.new_constraint(Sense.LESS_THAN_OR_EQUAL, 1000.0)
    for v in (x, y, z):
        budget.new_term(1, v)

    sol = solve(m, options)
    assert int(sol.objective_value) == 22634
    assert round(sol.value(x)) == 497
    assert round(sol.value(y)) == 0
    assert round(sol.value(z)) == 503


def test_qp_with_zero_terms(options):
    m = Model()
    x, y, z = (m.new_float(0, math.inf) for _ in range(3))
    for v in (x, y, z):
        m.objective.new_quadratic_term(0.5, v, v)
    m.objective.new_term(-5.0, y)
    c2 = m.new_constraint(Sense.GREATER_THAN_OR_EQUAL, -8)
    c2.new_term(-4, x); c2.new_term(-3, y); c2.new_term(0, z)
    c3 = m.new_constraint(Sense.GREATER_THAN_OR_EQUAL, 2)
    c3.new_term(2, x); c3.new_term(1, y)
    c2.new_term(0, z)
    c4 = m.new_constraint(Sense.GREATER_THAN_OR_EQUAL, 0)
    c4.new_term(0, x); c4.new_term(-2, y); c4.new_term(1, z)

    sol = solve(m, options)
    assert sol.objective_value == pytest.approx(-2.380952, abs=0.01)
    assert sol.value(x) == pytest.approx(0.4761905, abs=0.01)
    assert sol.value(y) == pytest.approx(1.0476190, abs=0.01)
    assert sol.value(z) == pytest.approx(2.0952381, abs=0.01)


SUDOKU = [
    [0, 0, 0, 0, 0, 6, 0, 3, 0],
    [1, 5, 0, 0, 0, 0, 0, 0, 4],
    [0, 0, 6, 0, 0, 0, 0, 0, 0],
    [0, 0, 3, 0, 0, 8, 4, 0, 0],
    [2, 0, 0, 0, 0, 0, 0, 6, 0],
    [0, 0, 0, 0, 4, 9, 0, 2, 5],
    [0, 0, 0, 7, 0, 5, 0, 0, 0],
    [0, 7, 0, 0, 9, 0, 1, 0, 3],
    [0, 6, 0, 0, 0, 0, 8, 0, 0],
]

SUDOKU_SOLVED = [
    "7 4 8 9 1 6 5 3 2",
    "1 5 9 3 2 7 6 8 4",
    "3 2 6 8 5 4 7 1 9",
    "5 9 3 2 6 8 4 7 1",
    "2 1 4 5 7 3 9 6 8",
    "6 8 7 1 4 9 3 2 5",
    "4 3 1 7 8 5 2 9 6",
    "8 7 5 6 9 2 1 4 3",
    "9 6 2 4 3 1 8 5 7",
]


def test_sudoku(options):
    m = Model()
    x = {(r, c, k): m.new_bool() for r in range(9) for c in range(9) for k in range(9)}

    def exactly_one(keys):
        con = m.new_constraint(Sense.EQUAL, 1)
        for key in keys:
            con.new_term(1, x[key])

    for r in range(9):
        for c in range(9):
            if SUDOKU[r][c]:
                exactly_one([(r, c, SUDOKU[r][c] - 1)])
            exactly_one([(r, c, k) for k in range(9)])
    for k in range(9):
        for i in range(9):
            exactly_one([(i, c, k) for c in range(9)])
            exactly_one([(r, i, k) for r in range(9)])
            br, bc = 3 * (i // 3), 3 * (i % 3)
            exactly_one([(br + dr, bc + dc, k) for dr in range(3) for dc in range(3)])

    sol = HighsSolver(m).solve(options)
    assert sol.has_values
    grid = [" ".join(str(next(k + 1 for k in range(9) if sol.value(x[r, c, k]) > 0.5))
                     for c in range(9)) for r in range(9)]
    assert grid == SUDOKU_SOLVED
