"""
Headless page model.

Sections, mount points and navigation controls as plain objects. Renderers
write into mounts; the Streamlit surface paints the visible section's
mounts into placeholders at the end of each run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional

logger = logging.getLogger("bda.page")


class Mount:
    """A named slot whose content is always replaced wholesale."""

    def __init__(self, mount_id: str):
        self.mount_id = mount_id
        self.content: Any = None
        self.revision = 0

    def replace(self, content: Any) -> None:
        self.content = content
        self.revision += 1

    def clear(self) -> None:
        self.replace(None)

    def __repr__(self) -> str:
        return f"Mount({self.mount_id!r}, revision={self.revision})"


@dataclass
class SectionNode:
    """A section container; exactly one is unhidden at a time."""
    section_id: str
    category: Optional[str] = None
    mounts: Dict[str, Mount] = field(default_factory=dict)
    hidden: bool = True

    @property
    def dom_id(self) -> str:
        return f"{self.section_id}-section"


@dataclass
class NavControl:
    """
    A navigation control in one of the two control sets.

    Section controls carry `section`; category headers carry only
    `category`.
    """
    variant: str  # "full" | "condensed"
    section: Optional[str] = None
    category: Optional[str] = None
    label: str = ""
    active: bool = False


@dataclass
class ToggleControl:
    """A two-state button such as the plan version toggle."""
    value: str
    label: str = ""
    active: bool = False


class Page:
    """All sections, mounts and controls of the dashboard."""

    NAV_VARIANTS = ("full", "condensed")

    def __init__(self):
        self.sections: Dict[str, SectionNode] = {}
        self.nav_controls: List[NavControl] = []
        self.plan_controls: Dict[str, ToggleControl] = {}

    def add_section(self, section_id: str, category: Optional[str] = None,
                    mount_ids: Iterable[str] = ()) -> SectionNode:
        node = SectionNode(section_id, category, {m: Mount(m) for m in mount_ids})
        self.sections[section_id] = node
        return node

    def section(self, section_id: str) -> Optional[SectionNode]:
        return self.sections.get(section_id)

    def mount(self, mount_id: str) -> Optional[Mount]:
        """Find a mount anywhere on the page; None when it does not exist."""
        for node in self.sections.values():
            if mount_id in node.mounts:
                return node.mounts[mount_id]
        return None

    def remove_mount(self, mount_id: str) -> None:
        for node in self.sections.values():
            node.mounts.pop(mount_id, None)

    def visible_sections(self) -> List[SectionNode]:
        return [n for n in self.sections.values() if not n.hidden]

    def controls(self, variant: Optional[str] = None) -> List[NavControl]:
        if variant is None:
            return list(self.nav_controls)
        return [c for c in self.nav_controls if c.variant == variant]


class Scheduler:
    """
    Deferred work queue.

    Controllers defer follow-up work (map resize, re-render) so it runs after
    the current transition has finished. Keyed deferrals collapse into one.
    """

    def __init__(self):
        self._pending: List[Callable[[], None]] = []
        self._keys: Dict[Hashable, int] = {}

    def defer(self, fn: Callable[[], None], key: Optional[Hashable] = None) -> None:
        if key is not None:
            if key in self._keys:
                return
            self._keys[key] = len(self._pending)
        self._pending.append(fn)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def flush(self) -> int:
        """Run everything deferred so far, including work deferred while flushing."""
        ran = 0
        while self._pending:
            batch, self._pending, self._keys = self._pending, [], {}
            for fn in batch:
                try:
                    fn()
                except Exception:
                    logger.exception(f"Deferred task {getattr(fn, '__name__', fn)!r} failed")
                ran += 1
        return ran
