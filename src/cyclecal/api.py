from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Optional, Union

from .core.engine import CultureDataProvider
from .core.errors import DefinitionError
from .core.time import to_jdn
from .core.types import Instant
from .engines.calendar import Calendar, Culture
from .engines.factory import as_culture_definition, build_calendar
from .providers import default_data_provider

LOGGER = logging.getLogger(__name__)


class CultureProvider:
    """
    Assembles calendars and cultures from definitions served by a data
    provider. Holds no cache: every call fetches again.
    """
    def __init__(self, data_provider: Optional[CultureDataProvider]):
        if data_provider is None:
            raise ValueError("Cannot create a CultureProvider without a data provider.")
        self._data_provider = data_provider

    @property
    def data_provider(self) -> CultureDataProvider:
        return self._data_provider

    async def load_calendar(self, id: str) -> Calendar:
        LOGGER.debug("fetching calendar %s", id)
        data = await self._data_provider.fetch_calendar_definition(id)
        calendar = build_calendar(data)
        LOGGER.debug("loaded calendar %s", calendar.id)
        return calendar

    async def load_culture(self, id: str) -> Culture:
        LOGGER.debug("fetching culture %s", id)
        definition = as_culture_definition(await self._data_provider.fetch_culture_definition(id))

        calendar_ids = definition.temporal.calendars if definition.temporal is not None else ()
        # All fetches are in flight at once; the first failure propagates and
        # the remaining fetches run to completion on their own.
        calendars = await asyncio.gather(*(self.load_calendar(cid) for cid in calendar_ids))

        if len(calendars) > 1:
            raise DefinitionError(
                f"Culture '{definition.id}' lists {len(calendars)} calendars "
                f"{list(calendar_ids)}; only one calendar per culture is supported."
            )

        culture = Culture(definition, calendars[0] if calendars else None)
        LOGGER.debug("loaded %r", culture)
        return culture


# ============================================================
# Synchronous conveniences over the default provider
# ============================================================

def get_calendar(id: str, *, provider: Optional[CultureDataProvider] = None) -> Calendar:
    cp = CultureProvider(provider if provider is not None else default_data_provider())
    return asyncio.run(cp.load_calendar(id))

def get_culture(id: str, *, provider: Optional[CultureDataProvider] = None) -> Culture:
    cp = CultureProvider(provider if provider is not None else default_data_provider())
    return asyncio.run(cp.load_culture(id))

def instant(
    when: Union[int, date],
    *,
    calendar: str = "gregorian",
    provider: Optional[CultureDataProvider] = None,
) -> Instant:
    """Instant for a JDN (int) or a Gregorian date under the named calendar."""
    jdn = to_jdn(when) if isinstance(when, date) else when
    return get_calendar(calendar, provider=provider).get_instant(jdn)
