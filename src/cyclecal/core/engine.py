from __future__ import annotations
from typing import Any, Mapping, Protocol, Union

from .types import CalendarDefinition, CultureDefinition

CalendarPayload = Union[CalendarDefinition, Mapping[str, Any]]
CulturePayload = Union[CultureDefinition, Mapping[str, Any]]

class CultureDataProvider(Protocol):
    """
    Source of calendar and culture definitions, keyed by id.

    Implementations may return either parsed definitions or the JSON-shaped
    mappings they were read from; the loader parses mappings itself.
    Failures are raised as-is and reach the caller unchanged.
    """
    async def fetch_calendar_definition(self, id: str) -> CalendarPayload: ...
    async def fetch_culture_definition(self, id: str) -> CulturePayload: ...
