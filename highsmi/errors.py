# highsmi/errors.py
from __future__ import annotations


class HighsMIError(Exception):
    """Base class for everything raised by highsmi."""


class InvalidValueError(HighsMIError, ValueError):
    """A NaN (or otherwise unusable number) was about to reach an engine buffer."""


class MIQPNotSupportedError(HighsMIError):
    def __init__(self):
        super().__init__("highs does not support mixed integer quadratic programs")


class OptionError(HighsMIError):
    def __init__(self, name, value, kind=None):
        self.name = name
        self.value = value
        self.kind = kind
        what = f"{kind} option" if kind else "option"
        super().__init__(f"HiGHS failed setting {what} {name} to value {value!r}")


class EngineUnavailableError(HighsMIError):
    """The native engine could not hand out a handle."""


class SolveError(HighsMIError):
    """
    Failure after the model reached the engine. `solution` is the
    unknown-status Solution produced for the attempt.
    """
    def __init__(self, message, solution=None):
        super().__init__(message)
        self.solution = solution


class ModelLoadError(SolveError):
    def __init__(self, solution=None):
        super().__init__("highs failed passing the model", solution)


class SolutionRetrievalError(SolveError):
    def __init__(self, solution=None):
        super().__init__("highs failed getting the solution", solution)
