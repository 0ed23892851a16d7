"""
cyclecal.engines.cycles
-----------------------
The evaluator. Walks a calendar's cycle tree and consumes a day count,
writing one index per cycle id into an instant.

Three cycle strategies exist:

  repeat    - count whole steps while any length still fits (e.g. years)
  sequence  - one ordered pass over the lengths (e.g. months of a year)
  calculate - mod/div of a value computed earlier (e.g. century of a year)

Children of repeat/sequence cycles receive the day count left over after
the parent resolved; children of calculate cycles receive it unchanged.
"""

from __future__ import annotations

from typing import Iterable, Mapping

from cyclecal.core.errors import DefinitionError
from cyclecal.core.types import (
    CalculateCycle,
    CalendarDefinition,
    Cycle,
    Instant,
    LengthRule,
    RepeatCycle,
    SequenceCycle,
    apply_operation,
)


def evaluate(definition: CalendarDefinition, day_count: int) -> Instant:
    """
    Evaluates every top-level cycle against the same (epoch adjusted) day
    count and returns the resulting instant.
    """
    if definition.epoch_offset is not None:
        day_count += definition.epoch_offset

    instant: Instant = {}
    for cycle in definition.cycles:
        evaluate_cycle(cycle, day_count, instant)
    return instant


def evaluate_cycle(cycle: Cycle, day_count: int, instant: Instant) -> None:
    if isinstance(cycle, RepeatCycle):
        remaining = _repeat(cycle, day_count, instant)
    elif isinstance(cycle, SequenceCycle):
        remaining = _sequence(cycle, day_count, instant)
    elif isinstance(cycle, CalculateCycle):
        remaining = _calculate(cycle, day_count, instant)
    else:
        raise DefinitionError(f"Cannot handle cycle of type {type(cycle).__name__}.")

    _evaluate_children(cycle.children, remaining, instant)


def _evaluate_children(children: Iterable[Cycle], day_count: int, instant: Instant) -> None:
    for child in children:
        evaluate_cycle(child, day_count, instant)


def _calculate(cycle: CalculateCycle, day_count: int, instant: Instant) -> int:
    if cycle.ref not in instant:
        raise DefinitionError(
            f"Cycle '{cycle.id}' refers to '{cycle.ref}' before it is computed. "
            f"Declare '{cycle.ref}' earlier. Available: {list(instant)}"
        )
    instant[cycle.id] = apply_operation(cycle.operation, instant[cycle.ref], cycle.value)
    return day_count


def _repeat(cycle: RepeatCycle, day_count: int, instant: Instant) -> int:
    instant[cycle.id] = 0

    while day_count >= 0:
        for rule in cycle.lengths:
            quantum = resolve_length(rule, instant)
            if quantum <= 0:
                continue
            if quantum <= day_count:
                instant[cycle.id] += rule.count
                day_count -= quantum
                break
        else:
            # No length fits the remainder: this is where the cycle ends.
            break

    return day_count


def _sequence(cycle: SequenceCycle, day_count: int, instant: Instant) -> int:
    instant[cycle.id] = 0

    for rule in cycle.lengths:
        quantum = resolve_length(rule, instant)
        if quantum <= 0 or quantum > day_count:
            break

        instant[cycle.id] += 1
        day_count -= quantum

        if day_count <= 0:
            break

    return day_count


def resolve_length(rule: LengthRule, instant: Mapping[str, int]) -> int:
    """
    Returns the number of days one step of ``rule`` consumes given the values
    computed so far.

    The first alternative whose guard holds supplies the quantum. When none
    holds, the rule's own guard decides: a failing guard yields 0, which no
    caller ever takes as a step.
    """
    for alternative in rule.alternatives:
        if alternative.guard.matches(instant):
            return alternative.quantum

    if rule.guard is not None and not rule.guard.matches(instant):
        return 0

    return rule.quantum
