"""
Data Store

Holds the outcome of every named source. Only the Loader writes here;
renderers read the latest payload and never mutate it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, Optional

from .sources import SourceId


class SourceStatus(str, Enum):
    """Outcome of the most recent load attempt."""
    UNLOADED = "unloaded"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass
class SourceEntry:
    """State of a single source."""
    status: SourceStatus = SourceStatus.UNLOADED
    payload: Any = None
    error: Optional[BaseException] = None
    loaded_at: Optional[datetime] = None


class DataStore:
    """
    Per-source payload cache.

    A payload is always replaced wholesale. A failed reload keeps the
    last good payload so whatever was displayed stays displayed.
    """

    def __init__(self, sources: Iterable[SourceId] = tuple(SourceId)):
        self._entries: Dict[SourceId, SourceEntry] = {s: SourceEntry() for s in sources}

    def entry(self, source_id: SourceId) -> SourceEntry:
        return self._entries.setdefault(source_id, SourceEntry())

    def status(self, source_id: SourceId) -> SourceStatus:
        return self.entry(source_id).status

    def payload(self, source_id: SourceId) -> Any:
        """Latest good payload, or None if the source never loaded."""
        return self.entry(source_id).payload

    def has_data(self, source_id: SourceId) -> bool:
        return self.entry(source_id).payload is not None

    def mark_loaded(self, source_id: SourceId, payload: Any) -> None:
        self._entries[source_id] = SourceEntry(
            status=SourceStatus.LOADED,
            payload=payload,
            loaded_at=datetime.now(),
        )

    def mark_failed(self, source_id: SourceId, error: BaseException) -> None:
        previous = self.entry(source_id)
        self._entries[source_id] = SourceEntry(
            status=SourceStatus.FAILED,
            payload=previous.payload,
            error=error,
            loaded_at=previous.loaded_at,
        )

    def summary(self) -> Dict[str, str]:
        """Status per source id, for logging and the sidebar."""
        return {s.value: e.status.value for s, e in self._entries.items()}
