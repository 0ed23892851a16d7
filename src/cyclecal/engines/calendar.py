"""
cyclecal.engines.calendar
-------------------------
Live objects bound to loaded definitions. A Calendar turns Julian Day
Numbers into instants; a Culture groups at most one Calendar with the
display hints it was defined with.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from cyclecal.core.errors import UnsupportedOperationError
from cyclecal.core.types import CalendarDefinition, CultureDefinition, Instant
from cyclecal.engines.cycles import evaluate


class Calendar:
    """
    Evaluates its definition against Julian Day Numbers. Holds no state
    between calls; every call returns a fresh instant.
    """
    def __init__(self, definition: CalendarDefinition):
        self._definition = definition

    @property
    def id(self) -> str:
        return self._definition.id

    @property
    def definition(self) -> CalendarDefinition:
        return self._definition

    def get_instant(self, jdn: int) -> Instant:
        return evaluate(self._definition, jdn)

    def info(self) -> Dict[str, Any]:
        d = self._definition
        return {
            "id": d.id,
            "version": d.version,
            "epoch_offset": d.epoch_offset,
            "cycles": [c.id for c in d.cycles],
        }

    def __repr__(self) -> str:
        return f"Calendar(id={self.id!r})"


class Culture:
    def __init__(self, definition: CultureDefinition, calendar: Optional[Calendar] = None):
        self._definition = definition
        self.calendar = calendar

    @property
    def id(self) -> str:
        return self._definition.id

    @property
    def definition(self) -> CultureDefinition:
        return self._definition

    def format_instant(self, instant: Instant, format_id: str) -> str:
        raise UnsupportedOperationError(
            f"Culture '{self.id}' cannot format instants (format '{format_id}')."
        )

    def info(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "version": self._definition.version,
            "calendar": self.calendar.info() if self.calendar is not None else None,
        }

    def __repr__(self) -> str:
        cal = self.calendar.id if self.calendar is not None else None
        return f"Culture(id={self.id!r}, calendar={cal!r})"
