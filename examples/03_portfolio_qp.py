# highsmi/examples/03_portfolio_qp.py
# Minimum-variance portfolio with a return floor (x^T S x, S the covariance).
from __future__ import annotations
import argparse
import numpy as np
from highsmi import Model, Sense, solve
from _cli import add_solve_args, options_from_args

COV = np.array([
    [0.018641039983891217, 0.0035985329276768114, 0.0013097592536597557],
    [0.0035985329276768114, 0.0064369383226761, 0.00488726515840726],
    [0.0013097592536597557, 0.00488726515840726, 0.06868276545481435],
])
MEAN = np.array([0.026002150277777348, 0.008101316405671457, 0.0737159094919898])


def build(cov, mean, capital, min_return):
    n = mean.size
    m = Model()
    x = [m.new_float(0.0, capital) for _ in range(n)]
    for i in range(n):
        for j in range(n):
            if cov[i, j] != 0.0:
                m.objective.new_quadratic_term(float(cov[i, j]), x[i], x[j])
    ret = m.new_constraint(Sense.GREATER_THAN_OR_EQUAL, min_return)
    budget = m.new_constraint(Sense.LESS_THAN_OR_EQUAL, capital)
    for i in range(n):
        ret.new_term(float(mean[i]), x[i])
        budget.new_term(1.0, x[i])
    return m, x


def main():
    ap = add_solve_args(argparse.ArgumentParser())
    ap.add_argument("--capital", type=float, default=1000.0)
    ap.add_argument("--min_return", type=float, default=50.0)
    args = ap.parse_args()

    m, x = build(COV, MEAN, args.capital, args.min_return)
    sol = solve(m, options_from_args(args))
    print(f"status={sol.status.name} objective={sol.objective_value:.3f}")
    if sol.has_values:
        w = np.array([sol.value(v) for v in x])
        print("allocation:", np.round(w, 2), "return:", float(MEAN @ w))


if __name__ == "__main__":
    main()
