"""
cyclecal.engines.factory
------------------------
Transforms JSON-shaped definition data into typed definitions and live
Calendar objects.

Wire field names follow the data files: ``julian`` is a quantum (or the
calendar's epoch offset), ``single`` holds alternatives, ``ref`` /
``operation`` / ``value`` form a guard, ``cycles`` holds children and
``type`` selects the cycle strategy.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Tuple, Union

from cyclecal.core.errors import DefinitionError
from cyclecal.core.types import (
    OPERATIONS,
    Alternative,
    CalculateCycle,
    CalendarDefinition,
    CultureDefinition,
    Cycle,
    Guard,
    LengthRule,
    RepeatCycle,
    SequenceCycle,
    TemporalFormat,
    TemporalSection,
)
from cyclecal.engines.calendar import Calendar

LOGGER = logging.getLogger(__name__)

CYCLE_KINDS: Tuple[str, ...] = ("repeat", "calculate", "sequence")


def _require(data: Mapping[str, Any], key: str, where: str) -> Any:
    if key not in data or data[key] is None:
        raise DefinitionError(f"{where}: missing required field '{key}'")
    return data[key]


def _operation(data: Mapping[str, Any], where: str) -> Tuple[str, int]:
    op = _require(data, "operation", where)
    if op not in OPERATIONS:
        raise DefinitionError(f"{where}: unknown operation '{op}'. Available: {list(OPERATIONS)}")
    value = _require(data, "value", where)
    if value == 0:
        raise DefinitionError(f"{where}: '{op}' by zero")
    return op, value


def parse_guard(data: Mapping[str, Any], where: str) -> Guard:
    op, value = _operation(data, where)
    return Guard(ref=_require(data, "ref", where), operation=op, value=value)


def parse_length_rule(data: Mapping[str, Any], where: str = "length") -> LengthRule:
    alternatives = tuple(
        Alternative(
            guard=parse_guard(alt, f"{where}.single[{i}]"),
            quantum=_require(alt, "julian", f"{where}.single[{i}]"),
        )
        for i, alt in enumerate(data.get("single") or ())
    )
    guard = parse_guard(data, where) if data.get("operation") else None

    # A rule made only of alternatives has nothing of its own to fall back on.
    quantum = data.get("julian")
    if quantum is None:
        if not alternatives:
            raise DefinitionError(f"{where}: missing required field 'julian'")
        quantum = 0

    return LengthRule(
        count=data.get("count", 1),
        quantum=quantum,
        alternatives=alternatives,
        guard=guard,
    )


def parse_cycle(data: Mapping[str, Any]) -> Cycle:
    cycle_id = _require(data, "id", "cycle")
    where = f"cycle '{cycle_id}'"
    kind = data.get("type")
    children = tuple(parse_cycle(child) for child in data.get("cycles") or ())

    if kind == "calculate":
        op, value = _operation(data, where)
        return CalculateCycle(
            id=cycle_id,
            ref=_require(data, "ref", where),
            operation=op,
            value=value,
            children=children,
        )

    if kind in ("repeat", "sequence"):
        lengths = tuple(
            parse_length_rule(rule, f"{where}.lengths[{i}]")
            for i, rule in enumerate(_require(data, "lengths", where))
        )
        cls = RepeatCycle if kind == "repeat" else SequenceCycle
        return cls(id=cycle_id, lengths=lengths, children=children)

    raise DefinitionError(f"Cannot handle cycle type of {kind!r} in {where}. Available: {list(CYCLE_KINDS)}")


def parse_calendar_definition(data: Mapping[str, Any]) -> CalendarDefinition:
    cal_id = _require(data, "id", "calendar")
    cycles = tuple(parse_cycle(c) for c in data.get("cycles") or ())
    LOGGER.debug("parsed calendar %s with %d top-level cycles", cal_id, len(cycles))
    return CalendarDefinition(
        version=data.get("version", 0),
        id=cal_id,
        cycles=cycles,
        epoch_offset=data.get("julian"),
    )


def _parse_temporal(data: Optional[Mapping[str, Any]]) -> Optional[TemporalSection]:
    if data is None:
        return None
    formats = tuple(
        TemporalFormat(
            ref=f.get("ref"),
            constant=f.get("constant"),
            digits=f.get("digits"),
            offset=f.get("offset"),
        )
        for f in data.get("formats") or ()
    )
    return TemporalSection(calendars=tuple(data.get("calendars") or ()), formats=formats)


def parse_culture_definition(data: Mapping[str, Any]) -> CultureDefinition:
    return CultureDefinition(
        id=_require(data, "id", "culture"),
        version=data.get("version", 0),
        temporal=_parse_temporal(data.get("temporal")),
    )


def as_calendar_definition(data: Union[CalendarDefinition, Mapping[str, Any]]) -> CalendarDefinition:
    if isinstance(data, CalendarDefinition):
        return data
    return parse_calendar_definition(data)


def as_culture_definition(data: Union[CultureDefinition, Mapping[str, Any]]) -> CultureDefinition:
    if isinstance(data, CultureDefinition):
        return data
    return parse_culture_definition(data)


def build_calendar(data: Union[CalendarDefinition, Mapping[str, Any]]) -> Calendar:
    """Transforms a definition (typed or JSON-shaped) into a live Calendar."""
    return Calendar(as_calendar_definition(data))
