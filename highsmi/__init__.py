"""HIGHSMI - mixed-integer / quadratic models solved with HiGHS"""
from .model import Model, Sense, VarKind, Var, Term, QuadraticTerm, Constraint, Objective
from .options import (
    SolveOptions, Verbosity, MIPOptions, GapOptions, ControlOptions,
    BoolOption, IntOption, FloatOption, StringOption, apply_options
)
from .assemble import AssembledInput, assemble
from .status import SolutionStatus, map_status
from .solution import Solution, NOT_FOUND
from .solver import HighsSolver, solve
from .errors import (
    HighsMIError, InvalidValueError, MIQPNotSupportedError, OptionError,
    EngineUnavailableError, SolveError, ModelLoadError, SolutionRetrievalError
)

__version__ = "0.1.0"
__all__ = [
    "Model", "Sense", "VarKind", "Var", "Term", "QuadraticTerm", "Constraint", "Objective",
    "SolveOptions", "Verbosity", "MIPOptions", "GapOptions", "ControlOptions",
    "BoolOption", "IntOption", "FloatOption", "StringOption", "apply_options",
    "AssembledInput", "assemble",
    "SolutionStatus", "map_status",
    "Solution", "NOT_FOUND",
    "HighsSolver", "solve",
    "HighsMIError", "InvalidValueError", "MIQPNotSupportedError", "OptionError",
    "EngineUnavailableError", "SolveError", "ModelLoadError", "SolutionRetrievalError",
]
