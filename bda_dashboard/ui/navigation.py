"""
Navigation Controller

Single-active-section navigation with two levels: standalone sections and
sections grouped under a category. The full-width and condensed control
sets are kept in sync on every transition.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..core.state import AppState
from .maps import MapRenderer
from .page import Page, Scheduler
from .registry import ViewRegistry

logger = logging.getLogger("bda.navigation")


class NavigationController:
    """Owns `state.nav`; no other component writes it."""

    def __init__(self, state: AppState, page: Page, registry: ViewRegistry,
                 maps: MapRenderer, scheduler: Scheduler):
        self.state = state
        self.page = page
        self.registry = registry
        self.maps = maps
        self.scheduler = scheduler

    @property
    def active_section(self) -> Optional[str]:
        return self.state.nav.active_section

    @property
    def active_category(self) -> Optional[str]:
        return self.state.nav.active_category

    def show(self, section: str, category: Optional[str] = None) -> None:
        """
        Make `section` the only visible section.

        Follow-up work (map resize, content replay) is deferred onto the
        scheduler and runs on the next flush. Unknown sections hide
        everything and show nothing.
        """
        known = section in self.registry
        if category is None:
            category = self.registry.category_of(section)

        for node in self.page.sections.values():
            node.hidden = True
        node = self.page.section(section)
        if node is not None:
            node.hidden = False

        for control in self.page.nav_controls:
            control.active = False
        for control in self.page.nav_controls:
            if control.section is not None:
                control.active = control.section == section
            elif known and category is not None:
                control.active = control.category == category

        self.state.nav.active_section = section if known else None
        self.state.nav.active_category = category if known else None

        if not known:
            logger.debug(f"Unknown section '{section}', nothing shown")
            return

        instance_id = self.registry.map_instance(section)
        if instance_id is not None:
            self.scheduler.defer(lambda: self._resize(instance_id), key=("resize", instance_id))

        if self.registry.has_loaded_source(section, self.state.store):
            for idx, renderer in enumerate(self.registry.renderers(section)):
                self.scheduler.defer(renderer, key=("render", section, idx))

    def _resize(self, instance_id: str) -> None:
        self.maps.invalidate_size(instance_id)
        self.maps.draw(instance_id, self.page)

    def toggle_category(self, category: str) -> bool:
        """Flip a category's dropdown; independent of the active section."""
        is_open = not self.state.nav.open_categories.get(category, False)
        self.state.nav.open_categories[category] = is_open
        return is_open

    def is_open(self, category: str) -> bool:
        return self.state.nav.open_categories.get(category, False)
