# tests/test_loader.py

import asyncio

import pytest

from cyclecal.api import CultureProvider
from cyclecal.core.errors import DefinitionError, ProviderError, UnsupportedOperationError
from cyclecal.core.types import CultureDefinition, TemporalSection
from cyclecal.engines.calendar import Calendar, Culture
from cyclecal.engines.factory import parse_calendar_definition
from cyclecal.providers import MemoryDataProvider


def simple_calendar(cal_id, quantum=7):
    return {
        "version": 0,
        "id": cal_id,
        "cycles": [{"id": "week", "type": "repeat", "lengths": [{"count": 1, "julian": quantum}]}],
    }


def culture(cul_id, *calendars):
    return {"id": cul_id, "version": 0, "temporal": {"calendars": list(calendars), "formats": []}}


CALENDARS = {"a": simple_calendar("a"), "b": simple_calendar("b", 5)}
CULTURES = {
    "none": {"id": "none", "version": 0},
    "empty": culture("empty"),
    "one": culture("one", "a"),
    "two": culture("two", "a", "b"),
    "missing": culture("missing", "zzz"),
}


@pytest.fixture
def provider():
    return CultureProvider(MemoryDataProvider(CALENDARS, CULTURES))


def test_requires_data_provider():
    with pytest.raises(ValueError):
        CultureProvider(None)


@pytest.mark.asyncio
async def test_load_calendar(provider):
    cal = await provider.load_calendar("a")
    assert isinstance(cal, Calendar)
    assert cal.id == "a"
    assert cal.get_instant(15) == {"week": 2}


@pytest.mark.asyncio
async def test_load_calendar_accepts_typed_definitions():
    typed = parse_calendar_definition(CALENDARS["b"])
    cp = CultureProvider(MemoryDataProvider({"b": typed}))
    cal = await cp.load_calendar("b")
    assert cal.definition is typed


@pytest.mark.asyncio
async def test_load_calendar_propagates_provider_error(provider):
    with pytest.raises(ProviderError, match="zzz"):
        await provider.load_calendar("zzz")


@pytest.mark.asyncio
@pytest.mark.parametrize("cul_id", ["none", "empty"])
async def test_culture_without_calendars(provider, cul_id):
    c = await provider.load_culture(cul_id)
    assert isinstance(c, Culture)
    assert c.id == cul_id
    assert c.calendar is None


@pytest.mark.asyncio
async def test_culture_with_one_calendar(provider):
    c = await provider.load_culture("one")
    direct = await provider.load_calendar("a")
    assert c.calendar.id == "a"
    assert c.calendar.definition == direct.definition
    assert c.calendar.get_instant(100) == direct.get_instant(100)


@pytest.mark.asyncio
async def test_culture_with_two_calendars_fails(provider):
    with pytest.raises(DefinitionError, match="two"):
        await provider.load_culture("two")


@pytest.mark.asyncio
async def test_culture_calendar_failure_propagates(provider):
    with pytest.raises(ProviderError):
        await provider.load_culture("missing")


@pytest.mark.asyncio
async def test_unknown_culture(provider):
    with pytest.raises(ProviderError):
        await provider.load_culture("nope")


@pytest.mark.asyncio
async def test_bad_calendar_definition_fails_load():
    bad = {"version": 0, "id": "bad", "cycles": [{"id": "x", "type": "bogus"}]}
    cp = CultureProvider(MemoryDataProvider({"bad": bad}, {"c": culture("c", "bad")}))
    with pytest.raises(DefinitionError):
        await cp.load_culture("c")


class _RecordingProvider:
    """Calendar fetches block until released so concurrency is observable."""

    def __init__(self, fail=None):
        self.started = []
        self.finished = []
        self.release = asyncio.Event()
        self.fail = fail

    async def fetch_culture_definition(self, id):
        return CultureDefinition(id=id, version=0, temporal=TemporalSection(calendars=("a", "b", "c")))

    async def fetch_calendar_definition(self, id):
        self.started.append(id)
        if id == self.fail:
            raise RuntimeError(f"boom {id}")
        await self.release.wait()
        self.finished.append(id)
        return simple_calendar(id)


@pytest.mark.asyncio
async def test_calendar_fetches_are_concurrent_and_in_declared_order():
    rp = _RecordingProvider()
    task = asyncio.ensure_future(CultureProvider(rp).load_culture("multi"))

    # All three fetches are issued before any of them completes.
    for _ in range(10):
        await asyncio.sleep(0)
    assert rp.started == ["a", "b", "c"]
    assert rp.finished == []

    rp.release.set()
    with pytest.raises(DefinitionError):
        await task
    assert sorted(rp.finished) == ["a", "b", "c"]


@pytest.mark.asyncio
async def test_first_failure_propagates_unchanged():
    rp = _RecordingProvider(fail="b")
    with pytest.raises(RuntimeError, match="boom b"):
        await CultureProvider(rp).load_culture("multi")

    # The other fetches were not cancelled and still complete.
    rp.release.set()
    for _ in range(10):
        await asyncio.sleep(0)
    assert sorted(rp.finished) == ["a", "c"]


def test_format_instant_is_unsupported():
    c = Culture(CultureDefinition(id="x", version=0))
    with pytest.raises(UnsupportedOperationError):
        c.format_instant({"year": 1}, "short")
    with pytest.raises(NotImplementedError):
        c.format_instant({}, "long")
