# highsmi/examples/_cli.py
from __future__ import annotations
import argparse
from highsmi import ControlOptions, GapOptions, MIPOptions, SolveOptions, Verbosity


def add_solve_args(ap: argparse.ArgumentParser) -> argparse.ArgumentParser:
    ap.add_argument("--duration", type=float, default=10.0, help="time limit in seconds")
    ap.add_argument("--verbosity", default="off", choices=[v.value for v in Verbosity])
    ap.add_argument("--gap_abs", type=float, default=1e-6)
    ap.add_argument("--gap_rel", type=float, default=1e-4)
    ap.add_argument("--control-bool", default="", help="name=value,...")
    ap.add_argument("--control-int", default="", help="e.g. mip_max_nodes=200,threads=1")
    ap.add_argument("--control-float", default="", help="e.g. mip_heuristic_effort=0.7")
    ap.add_argument("--control-string", default="", help="e.g. presolve=off")
    return ap


def options_from_args(args) -> SolveOptions:
    return SolveOptions(
        duration=args.duration,
        verbosity=args.verbosity,
        mip=MIPOptions(gap=GapOptions(absolute=args.gap_abs, relative=args.gap_rel)),
        control=ControlOptions.parse(bools=args.control_bool, ints=args.control_int,
                                     floats=args.control_float, strings=args.control_string),
    )
