# highsmi/options.py
from __future__ import annotations

import logging
from datetime import timedelta
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import OptionError

logger = logging.getLogger(__name__)


class Verbosity(str, Enum):
    OFF = "off"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# verbosity -> (output_flag, log_dev_level)
VERBOSITY_LEVELS = {
    Verbosity.OFF: (False, 0),
    Verbosity.LOW: (True, 0),
    Verbosity.MEDIUM: (True, 1),
    Verbosity.HIGH: (True, 2),
}


class GapOptions(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    absolute: float = Field(1e-6, ge=0.0)
    relative: float = Field(1e-4, ge=0.0)


class MIPOptions(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    gap: GapOptions = Field(default_factory=GapOptions)


class _ControlOption(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)


class BoolOption(_ControlOption):
    value: bool


class IntOption(_ControlOption):
    value: int


class FloatOption(_ControlOption):
    value: float


class StringOption(_ControlOption):
    value: str


def _parse_pairs(text, option_cls, kind):
    """'a=1,b=2' -> [option_cls(name='a', value=...), ...]"""
    out = []
    for item in (text or "").split(","):
        item = item.strip()
        if not item:
            continue
        name, sep, raw = item.partition("=")
        name, raw = name.strip(), raw.strip()
        if not sep or not name:
            raise OptionError(item, None, kind)
        try:
            out.append(option_cls(name=name, value=raw))
        except ValidationError as exc:
            raise OptionError(name, raw, kind) from exc
    return out


class ControlOptions(BaseModel):
    """Free-form engine options, applied verbatim by name."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    bools: List[BoolOption] = Field(default_factory=list)
    floats: List[FloatOption] = Field(default_factory=list)
    ints: List[IntOption] = Field(default_factory=list)
    strings: List[StringOption] = Field(default_factory=list)

    @classmethod
    def parse(cls, bools: str = "", ints: str = "", floats: str = "",
              strings: str = "") -> "ControlOptions":
        """
        Read the comma separated name=value form, one string per type:

            ControlOptions.parse(ints="mip_max_nodes=200,threads=1",
                                 strings="presolve=off")
        """
        return cls(
            bools=_parse_pairs(bools, BoolOption, "bool"),
            floats=_parse_pairs(floats, FloatOption, "float"),
            ints=_parse_pairs(ints, IntOption, "int"),
            strings=_parse_pairs(strings, StringOption, "string"),
        )

    def count(self) -> int:
        return len(self.bools) + len(self.floats) + len(self.ints) + len(self.strings)


class SolveOptions(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    duration: timedelta = Field(default=timedelta(seconds=30))
    verbosity: Verbosity = Verbosity.OFF
    mip: MIPOptions = Field(default_factory=MIPOptions)
    control: ControlOptions = Field(default_factory=ControlOptions)


def apply_options(engine, options: SolveOptions, is_integer_problem: bool) -> None:
    """
    Push `options` into an engine through its typed setters. The first
    rejected option raises OptionError and nothing after it is applied.
    Gap tolerances only exist for integer problems and are skipped otherwise.
    """
    output_flag, dev_level = VERBOSITY_LEVELS[Verbosity(options.verbosity)]
    engine.set_bool("output_flag", output_flag)
    engine.set_int("log_dev_level", dev_level)

    engine.set_float("time_limit", options.duration.total_seconds())

    if is_integer_problem:
        engine.set_float("mip_abs_gap", options.mip.gap.absolute)
        engine.set_float("mip_rel_gap", options.mip.gap.relative)

    control = options.control
    for o in control.bools:
        engine.set_bool(o.name, o.value)
    for o in control.floats:
        engine.set_float(o.name, o.value)
    for o in control.ints:
        engine.set_int(o.name, o.value)
    for o in control.strings:
        engine.set_string(o.name, o.value)

    logger.debug("applied solve options",
                 extra={"verbosity": Verbosity(options.verbosity).value,
                        "time_limit": options.duration.total_seconds(),
                        "control_options": control.count()})
