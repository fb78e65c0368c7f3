# highsmi/examples/02_sudoku.py
# 9x9 sudoku as a pure binary feasibility model: x[r,c,k] = 1 iff cell (r,c) holds k+1.
from __future__ import annotations
import argparse
from highsmi import Model, Sense, solve
from _cli import add_solve_args, options_from_args

PUZZLE = """
.....6.3.
15......4
..6......
..3..84..
2......6.
....49.25
...7.5...
.7..9.1.3
.6....8..
"""


def parse(text):
    rows = [r for r in text.split() if r]
    return [[0 if ch in ".0" else int(ch) for ch in r] for r in rows]


def build(grid):
    m = Model()
    x = {(r, c, k): m.new_bool() for r in range(9) for c in range(9) for k in range(9)}

    def exactly_one(keys):
        con = m.new_constraint(Sense.EQUAL, 1)
        for key in keys:
            con.new_term(1, x[key])

    for r in range(9):
        for c in range(9):
            if grid[r][c]:
                exactly_one([(r, c, grid[r][c] - 1)])
            exactly_one([(r, c, k) for k in range(9)])
    for k in range(9):
        for i in range(9):
            exactly_one([(i, c, k) for c in range(9)])
            exactly_one([(r, i, k) for r in range(9)])
            br, bc = 3 * (i // 3), 3 * (i % 3)
            exactly_one([(br + dr, bc + dc, k) for dr in range(3) for dc in range(3)])
    return m, x


def main():
    ap = add_solve_args(argparse.ArgumentParser())
    ap.add_argument("--puzzle", default=None, help="file with 9 rows of digits, '.' for blanks")
    args = ap.parse_args()

    text = PUZZLE
    if args.puzzle:
        with open(args.puzzle, "r", encoding="utf-8") as f:
            text = f.read()
    m, x = build(parse(text))
    sol = solve(m, options_from_args(args))
    if not sol.has_values:
        print("No solution:", sol.status.name)
        return
    for r in range(9):
        print(" ".join(str(next(k + 1 for k in range(9) if sol.value(x[r, c, k]) > 0.5))
                       for c in range(9)))


if __name__ == "__main__":
    main()
