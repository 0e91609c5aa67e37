"""
Source Loader

Fetches every named source concurrently, writes the parsed payload into the
DataStore and replays the renderers registered against that source.

Usage:
    loader = Loader(store, config)
    loader.register(SourceId.LAYOUTS, render_layouts_table)
    statuses = await loader.load_all()

Failures are logged and recorded on the store; they never propagate and
never trigger the source's renderers.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections import defaultdict
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Callable, Dict, Iterable, List, Optional

import httpx

from ..config import DashboardConfig
from ..errors import SourceLoadFailed
from .sources import SourceId, source_path
from .store import DataStore, SourceStatus

logger = logging.getLogger("bda.loader")

Renderer = Callable[[], None]


def _describe(payload: Any) -> str:
    if isinstance(payload, list):
        return f"{len(payload)} records"
    if isinstance(payload, dict):
        if payload.get("type") == "FeatureCollection":
            return f"{len(payload.get('features') or [])} features"
        for key in ("layouts", "boundaries", "departments"):
            if isinstance(payload.get(key), list):
                return f"{len(payload[key])} {key}"
        return f"{len(payload)} keys"
    return type(payload).__name__


class Loader:
    """Concurrent fetch-and-parse of dashboard sources."""

    def __init__(
        self,
        store: DataStore,
        config: Optional[DashboardConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.store = store
        self.config = config or DashboardConfig()
        self._client = client
        self._dependents: Dict[SourceId, List[Renderer]] = defaultdict(list)

    # =========================================================================
    # Dependents
    # =========================================================================

    def register(self, source_id: SourceId, renderer: Renderer) -> None:
        """Run `renderer` after every successful load of `source_id`."""
        self._dependents[source_id].append(renderer)

    def dependents(self, source_id: SourceId) -> List[Renderer]:
        return list(self._dependents.get(source_id, []))

    def _notify(self, source_id: SourceId) -> None:
        for renderer in self._dependents.get(source_id, []):
            try:
                renderer()
            except Exception:
                logger.exception(f"Renderer {getattr(renderer, '__name__', renderer)!r} failed for {source_id.value}")

    # =========================================================================
    # Fetching
    # =========================================================================

    def url_for(self, source_id: SourceId) -> str:
        relative = source_path(source_id, self.config.layouts_variant)
        if self.config.is_remote:
            return f"{self.config.data_base_path.rstrip('/')}/{relative}"
        return str(Path(self.config.data_base_path) / relative)

    @asynccontextmanager
    async def _client_scope(self) -> AsyncIterator[Optional[httpx.AsyncClient]]:
        if self._client is not None:
            yield self._client
        elif self.config.is_remote:
            async with httpx.AsyncClient(timeout=self.config.fetch_timeout) as client:
                yield client
        else:
            yield None

    async def _fetch_text(self, location: str, client: Optional[httpx.AsyncClient]) -> str:
        if client is not None:
            response = await client.get(location)
            response.raise_for_status()
            return response.text
        return await asyncio.to_thread(Path(location).read_text, encoding="utf-8")

    async def _load(self, source_id: SourceId, client: Optional[httpx.AsyncClient]) -> SourceStatus:
        location = self.url_for(source_id)
        try:
            text = await self._fetch_text(location, client)
            payload = json.loads(text)
        except (httpx.HTTPError, OSError, ValueError) as e:
            failure = SourceLoadFailed(source_id.value, e)
            logger.error(f"Error loading {source_id.value} from {location}: {e}")
            self.store.mark_failed(source_id, failure)
            return SourceStatus.FAILED

        self.store.mark_loaded(source_id, payload)
        logger.info(f"Loaded {source_id.value} ({_describe(payload)})")
        self._notify(source_id)
        return SourceStatus.LOADED

    async def load(self, source_id: SourceId) -> SourceStatus:
        """Fetch one source, store it and run its renderers on success."""
        async with self._client_scope() as client:
            return await self._load(source_id, client)

    async def load_all(self, sources: Optional[Iterable[SourceId]] = None) -> Dict[SourceId, SourceStatus]:
        """Start every load at once; completion order is arbitrary."""
        targets = list(sources) if sources is not None else list(SourceId)
        async with self._client_scope() as client:
            results = await asyncio.gather(*(self._load(s, client) for s in targets))
        statuses = dict(zip(targets, results))
        failed = [s.value for s, r in statuses.items() if r is SourceStatus.FAILED]
        if failed:
            logger.warning(f"{len(failed)} source(s) failed to load: {', '.join(failed)}")
        return statuses

    async def refresh(self) -> Dict[SourceId, SourceStatus]:
        """Re-issue every load; successful payloads replace the old ones wholesale."""
        logger.info("Refreshing all sources")
        return await self.load_all()
