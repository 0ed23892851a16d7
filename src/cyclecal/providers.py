"""Bundled definition providers.

Layout shared by the directory and package providers::

    calendars/<id>.json
    cultures/<id>.json

Search order for ``default_data_provider``:
  1) CYCLECAL_DATA_DIR environment variable (directory with the layout above)
  2) packaged data (cyclecal.data)
"""
from __future__ import annotations

import asyncio
import importlib.resources
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from .core.errors import ProviderError

LOGGER = logging.getLogger(__name__)

DATA_DIR_ENV = "CYCLECAL_DATA_DIR"

_KINDS = {"calendar": "calendars", "culture": "cultures"}


class MemoryDataProvider:
    """Serves definitions held in dicts. Handy for tests and embedding."""

    def __init__(
        self,
        calendars: Optional[Mapping[str, Any]] = None,
        cultures: Optional[Mapping[str, Any]] = None,
    ):
        self._calendars: Dict[str, Any] = dict(calendars or {})
        self._cultures: Dict[str, Any] = dict(cultures or {})

    async def fetch_calendar_definition(self, id: str) -> Any:
        if id not in self._calendars:
            raise ProviderError(f"Unknown calendar '{id}'. Available: {sorted(self._calendars)}")
        return self._calendars[id]

    async def fetch_culture_definition(self, id: str) -> Any:
        if id not in self._cultures:
            raise ProviderError(f"Unknown culture '{id}'. Available: {sorted(self._cultures)}")
        return self._cultures[id]


class _JsonTreeProvider:
    """Reads ``<kind>s/<id>.json`` below a root; subclasses supply the root."""

    def _root(self) -> Any:
        raise NotImplementedError

    def _read(self, kind: str, id: str) -> Dict[str, Any]:
        path = self._root().joinpath(_KINDS[kind], f"{id}.json")
        try:
            text = path.read_text(encoding="utf-8")
        except (FileNotFoundError, NotADirectoryError) as e:
            raise ProviderError(f"Unknown {kind} '{id}' (no file {path})") from e
        except OSError as e:
            raise ProviderError(f"Cannot read {kind} '{id}' from {path}: {e}") from e
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ProviderError(f"Malformed JSON in {path}: {e}") from e
        LOGGER.debug("read %s %s from %s", kind, id, path)
        return data

    async def fetch_calendar_definition(self, id: str) -> Dict[str, Any]:
        return await asyncio.to_thread(self._read, "calendar", id)

    async def fetch_culture_definition(self, id: str) -> Dict[str, Any]:
        return await asyncio.to_thread(self._read, "culture", id)

    def list_ids(self, kind: str) -> List[str]:
        folder = self._root().joinpath(_KINDS[kind])
        if not folder.is_dir():
            return []
        return sorted(p.name[: -len(".json")] for p in folder.iterdir() if p.name.endswith(".json"))


class DirectoryDataProvider(_JsonTreeProvider):
    def __init__(self, root: Union[str, Path]):
        self.root = Path(root).expanduser()

    def _root(self) -> Path:
        return self.root

    def __repr__(self) -> str:
        return f"DirectoryDataProvider({str(self.root)!r})"


class PackageDataProvider(_JsonTreeProvider):
    """Definitions shipped inside the cyclecal.data package."""

    def _root(self) -> Any:
        return importlib.resources.files("cyclecal.data")

    def __repr__(self) -> str:
        return "PackageDataProvider()"


def default_data_provider(data_dir: Optional[Union[str, Path]] = None) -> _JsonTreeProvider:
    if data_dir is None:
        data_dir = os.environ.get(DATA_DIR_ENV, "").strip() or None
    if data_dir is not None:
        LOGGER.info("using definitions from %s", data_dir)
        return DirectoryDataProvider(data_dir)
    return PackageDataProvider()
