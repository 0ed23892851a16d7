"""cyclecal public API.

Keep this surface small: users should mostly interact with names re-exported here.
"""

from .api import (
    CultureProvider,
    get_calendar,
    get_culture,
    instant,
)
from .core.errors import (
    CyclecalError,
    DefinitionError,
    ProviderError,
    UnsupportedOperationError,
)
from .core.time import from_jdn, to_jdn
from .core.types import CalendarDefinition, CultureDefinition, Instant
from .engines.calendar import Calendar, Culture
from .engines.cycles import evaluate, resolve_length
from .engines.factory import build_calendar, parse_calendar_definition, parse_culture_definition
from .providers import (
    DirectoryDataProvider,
    MemoryDataProvider,
    PackageDataProvider,
    default_data_provider,
)

__all__ = [
    "CultureProvider",
    "get_calendar",
    "get_culture",
    "instant",
    "CyclecalError",
    "DefinitionError",
    "ProviderError",
    "UnsupportedOperationError",
    "from_jdn",
    "to_jdn",
    "CalendarDefinition",
    "CultureDefinition",
    "Instant",
    "Calendar",
    "Culture",
    "evaluate",
    "resolve_length",
    "build_calendar",
    "parse_calendar_definition",
    "parse_culture_definition",
    "DirectoryDataProvider",
    "MemoryDataProvider",
    "PackageDataProvider",
    "default_data_provider",
]
