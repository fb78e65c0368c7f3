# highsmi/solver.py
from __future__ import annotations

import logging
import time
from datetime import timedelta
from typing import Optional

from .assemble import assemble
from .engine import HighsEngine, succeeded
from .errors import (EngineUnavailableError, MIQPNotSupportedError,
                     ModelLoadError, SolutionRetrievalError)
from .options import SolveOptions, apply_options
from .solution import Solution
from .status import SolutionStatus, map_status

logger = logging.getLogger(__name__)


def _elapsed(t0):
    return timedelta(seconds=time.perf_counter() - t0)


def _is_miqp(model) -> bool:
    if not model.objective.is_quadratic:
        return False
    return any(v.is_int or v.is_bool for v in model.vars)


class HighsSolver:
    """
    Solve a Model with HiGHS. Every call to solve() builds its own input
    and owns its own engine instance, so one solver (or many) can be used
    from several threads as long as the model is not mutated meanwhile.

    Outcomes:
      - no variables            -> optimal, empty Solution (engine untouched)
      - engine unavailable      -> UNKNOWN Solution
      - integer + quadratic     -> MIQPNotSupportedError, before any engine call
      - option rejected         -> OptionError
      - model rejected          -> ModelLoadError (.solution is UNKNOWN)
      - run neither ok nor warn -> UNKNOWN Solution
      - retrieval failed        -> SolutionRetrievalError (.solution is UNKNOWN)
    """

    def __init__(self, model, engine_factory=None):
        self.model = model
        self.engine_factory = engine_factory

    def solve(self, options: Optional[SolveOptions] = None) -> Solution:
        options = options or SolveOptions()
        t0 = time.perf_counter()

        if len(self.model.vars) == 0:
            return Solution(status=SolutionStatus.OPTIMAL, runtime=_elapsed(t0))

        if _is_miqp(self.model):
            raise MIQPNotSupportedError()

        try:
            with HighsEngine(self.engine_factory) as engine:
                return self._solve(engine, options, t0)
        except EngineUnavailableError:
            logger.warning("HiGHS instance unavailable", exc_info=True)
            return Solution(status=SolutionStatus.UNKNOWN, runtime=_elapsed(t0))

    def _solve(self, engine, options, t0):
        inp = assemble(self.model, engine.infinity())

        apply_options(engine, options, inp.is_integer_problem)

        if not engine.load(inp):
            raise ModelLoadError(Solution(status=SolutionStatus.UNKNOWN, runtime=_elapsed(t0)))

        run_status = engine.run()
        if not succeeded(run_status):
            logger.warning("HiGHS run did not succeed",
                           extra={"run_status": str(run_status)})
            return Solution(status=SolutionStatus.UNKNOWN, runtime=_elapsed(t0))

        raw_status = engine.model_status()
        status = map_status(raw_status)
        values = engine.solution()
        if status.has_values and (values is None or values.size != inp.num_columns):
            raise SolutionRetrievalError(
                Solution(status=SolutionStatus.UNKNOWN, runtime=_elapsed(t0)))

        solution = Solution(
            status=status,
            values=values if values is not None else (),
            objective_value=engine.objective_value(),
            runtime=_elapsed(t0),
        )
        logger.info("HiGHS solve finished",
                    extra={"model_status": str(raw_status),
                           "objective": solution.objective_value,
                           "runtime_s": solution.runtime.total_seconds()})
        return solution


def solve(model, options: Optional[SolveOptions] = None, engine_factory=None) -> Solution:
    return HighsSolver(model, engine_factory=engine_factory).solve(options)
