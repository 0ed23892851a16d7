from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Literal, Mapping, Optional, Tuple, Union

from .errors import DefinitionError

# Cycle id -> index. Built fresh for every evaluation; insertion order follows
# the order in which cycles resolved.
Instant = Dict[str, int]

Operation = Literal["mod", "div"]
OPERATIONS: Tuple[str, ...] = ("mod", "div")


def apply_operation(operation: str, index: int, value: int) -> int:
    if operation == "mod":
        return index % value
    return index // value


@dataclass(frozen=True)
class Guard:
    """A mod/div test on an already computed cycle value.

    The guard holds when the remainder (mod) or quotient (div) is zero.
    """
    ref: str
    operation: Operation
    value: int

    def apply(self, instant: Mapping[str, int]) -> int:
        if self.ref not in instant:
            raise DefinitionError(
                f"Guard refers to cycle '{self.ref}' which has not been computed yet. "
                f"Available: {list(instant)}"
            )
        return apply_operation(self.operation, instant[self.ref], self.value)

    def matches(self, instant: Mapping[str, int]) -> bool:
        return self.apply(instant) == 0

@dataclass(frozen=True)
class Alternative:
    guard: Guard
    quantum: int

@dataclass(frozen=True)
class LengthRule:
    """How many days one step of a repeat/sequence cycle consumes."""
    count: int
    quantum: int
    alternatives: Tuple[Alternative, ...] = ()
    guard: Optional[Guard] = None

@dataclass(frozen=True)
class RepeatCycle:
    id: str
    lengths: Tuple[LengthRule, ...]
    children: Tuple["Cycle", ...] = ()

@dataclass(frozen=True)
class SequenceCycle:
    id: str
    lengths: Tuple[LengthRule, ...]
    children: Tuple["Cycle", ...] = ()

@dataclass(frozen=True)
class CalculateCycle:
    id: str
    ref: str
    operation: Operation
    value: int
    children: Tuple["Cycle", ...] = ()

Cycle = Union[RepeatCycle, SequenceCycle, CalculateCycle]

@dataclass(frozen=True)
class CalendarDefinition:
    """Pure data payload describing one calendar."""
    version: int
    id: str
    cycles: Tuple[Cycle, ...] = ()
    epoch_offset: Optional[int] = None

@dataclass(frozen=True)
class TemporalFormat:
    ref: Optional[str] = None
    constant: Optional[str] = None
    digits: Optional[int] = None
    offset: Optional[int] = None

@dataclass(frozen=True)
class TemporalSection:
    calendars: Tuple[str, ...] = ()
    formats: Tuple[TemporalFormat, ...] = ()

@dataclass(frozen=True)
class CultureDefinition:
    id: str
    version: int
    temporal: Optional[TemporalSection] = None
