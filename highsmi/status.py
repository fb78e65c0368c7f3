# highsmi/status.py
from __future__ import annotations

from enum import IntEnum


class SolutionStatus(IntEnum):
    # values match HighsModelStatus
    OPTIMAL = 7
    INFEASIBLE = 8
    UNBOUNDED_OR_INFEASIBLE = 9
    UNBOUNDED = 10
    TIME_LIMIT = 13
    UNKNOWN = 15

    @property
    def has_values(self) -> bool:
        return self is SolutionStatus.OPTIMAL

    @property
    def is_optimal(self) -> bool:
        return self is SolutionStatus.OPTIMAL

    @property
    def is_infeasible(self) -> bool:
        return self in (SolutionStatus.INFEASIBLE, SolutionStatus.UNBOUNDED_OR_INFEASIBLE)

    @property
    def is_unbounded(self) -> bool:
        return self in (SolutionStatus.UNBOUNDED, SolutionStatus.UNBOUNDED_OR_INFEASIBLE)

    @property
    def is_time_out(self) -> bool:
        return self is SolutionStatus.TIME_LIMIT


_BY_CODE = {int(s): s for s in SolutionStatus}


def map_status(code) -> SolutionStatus:
    """Engine model status (enum or int) -> SolutionStatus; unlisted codes are UNKNOWN."""
    try:
        code = int(code)
    except (TypeError, ValueError):
        return SolutionStatus.UNKNOWN
    return _BY_CODE.get(code, SolutionStatus.UNKNOWN)
