# highsmi/examples/01_binkies.py
# Pick how many units of diet A and diet B a bunny eats to maximise binkies.
from __future__ import annotations
import argparse
from highsmi import Model, Sense, solve
from _cli import add_solve_args, options_from_args


def build(endive_stock=12.0, carrot_stock=5.0):
    m = Model()
    a = m.new_int(0, 100)
    b = m.new_int(0, 100)
    m.objective.set_maximize()
    m.objective.new_term(6.0, a)   # binkies per unit of diet A
    m.objective.new_term(5.0, b)

    endive = m.new_constraint(Sense.LESS_THAN_OR_EQUAL, endive_stock)
    endive.new_term(3.0, a); endive.new_term(2.0, b)
    carrot = m.new_constraint(Sense.LESS_THAN_OR_EQUAL, carrot_stock)
    carrot.new_term(1.0, a); carrot.new_term(1.0, b)
    return m, a, b


def main():
    ap = add_solve_args(argparse.ArgumentParser())
    ap.add_argument("--endive", type=float, default=12.0)
    ap.add_argument("--carrots", type=float, default=5.0)
    args = ap.parse_args()

    m, a, b = build(args.endive, args.carrots)
    sol = solve(m, options_from_args(args))
    print(f"status={sol.status.name} runtime={sol.runtime.total_seconds():.3f}s")
    if sol.has_values:
        print(f"binkies={sol.objective_value:.0f}  diet A={sol.value(a):.0f}  diet B={sol.value(b):.0f}")


if __name__ == "__main__":
    main()
