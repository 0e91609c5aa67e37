"""
Dashboard

Wires the store, loader, registry, renderers, maps, charts, navigation and
plan toggle into one object. Nothing here touches Streamlit; the app module
binds mounts to placeholders and drives this object.

Startup order:
    1. every source load is issued (none awaited individually)
    2. map instances are initialized while loads are in flight
    3. loads complete in any order, each replaying its own renderers
    4. deferred navigation work is flushed

Each map layer has one render function called from both completion points
(its source's load and its map's initialization), so whichever finishes
second draws the layer.
"""

from __future__ import annotations

import asyncio
import logging
from functools import partial
from typing import Dict, List, Optional

import httpx

from ..config import DashboardConfig
from ..core.export import ExportFile, export_layouts, export_sources, layout_rows
from ..core.filters import LayoutPredicate, filter_options
from ..core.loader import Loader
from ..core.models import layouts_from_payload
from ..core.sources import SourceId
from ..core.state import AppState
from ..core.store import SourceStatus
from . import renderers as r
from .charts import ChartRenderer
from .maps import MapRenderer
from .navigation import NavigationController
from .page import Scheduler
from .plan import PlanToggle
from .registry import ViewRegistry
from .theme import EARTH_THEME, ThemeColors

logger = logging.getLogger("bda.dashboard")


class Dashboard:
    """The assembled dashboard."""

    def __init__(
        self,
        config: Optional[DashboardConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
        theme: ThemeColors = EARTH_THEME,
    ):
        self.config = config or DashboardConfig()
        self.state = AppState()
        self.registry = ViewRegistry()
        self.page = self.registry.build_page()
        self.scheduler = Scheduler()
        self.charts = ChartRenderer(theme)
        self.maps = MapRenderer()
        self.loader = Loader(self.state.store, self.config, client=client)
        self.nav = NavigationController(self.state, self.page, self.registry, self.maps, self.scheduler)
        self.ctx = r.RenderContext(self.state, self.page, self.charts, self.maps, theme)
        self.plan = PlanToggle(self.state, self.page, on_change=self._bind(r.render_planning))

        self.charts.create_all()
        self._register_dependents()
        self._register_map_hooks()
        self._register_sections()

    def _bind(self, renderer):
        return partial(renderer, self.ctx)

    def _register_dependents(self) -> None:
        dependents = {
            SourceId.LAYOUTS: (
                r.apply_layout_summary,
                r.render_overview_stats,
                r.render_layouts_table,
                r.render_layout_markers,
            ),
            SourceId.LAYOUT_BOUNDARIES: (r.render_layout_boundaries, r.render_layout_markers),
            SourceId.ADMIN_BOUNDARIES: (r.render_master_plan, r.render_boundary_legend),
            SourceId.JURISDICTION_BOUNDARY: (r.render_jurisdiction,),
            SourceId.CORPORATION_BOUNDARIES: (r.render_corporations,),
            SourceId.PLANNING_DISTRICTS: (r.render_planning,),
            SourceId.DEPARTMENTS: (r.render_departments,),
            SourceId.SOURCES: (r.render_citations,),
            SourceId.ECONOMIC: (r.render_economic,),
            SourceId.AUCTION: (r.render_auction,),
            SourceId.INFRASTRUCTURE: (r.render_infrastructure,),
        }
        for source_id, renderers in dependents.items():
            for renderer in renderers:
                self.loader.register(source_id, self._bind(renderer))

    def _register_map_hooks(self) -> None:
        for renderer in (r.render_city_bounds, r.render_jurisdiction, r.render_corporations):
            self.maps.on_ready("overview", self._bind(renderer))
        for renderer in (r.render_layout_boundaries, r.render_layout_markers):
            self.maps.on_ready("layouts", self._bind(renderer))

    def _register_sections(self) -> None:
        sections = {
            "overview": (r.render_overview,),
            "layouts": (r.render_layouts_table,),
            "master-plan": (r.render_boundary_legend,),
            "planning-districts": (r.render_planning,),
            "departments": (r.render_departments,),
            "economic-development": (r.render_economic,),
            "e-auction": (r.render_auction,),
            "infrastructure": (r.render_infrastructure,),
            "sources": (r.render_citations,),
        }
        for section_id, renderers in sections.items():
            for renderer in renderers:
                self.registry.register_renderer(section_id, self._bind(renderer))

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def initialize_maps(self) -> None:
        for instance_id in self.maps.specs:
            if not self.maps.is_initialized(instance_id):
                self.maps.initialize(instance_id)

    async def start(self) -> Dict[SourceId, SourceStatus]:
        """Issue every load, initialize the maps while they run, then settle."""
        loads = asyncio.ensure_future(self.loader.load_all())
        await asyncio.sleep(0)
        self.initialize_maps()
        if self.state.nav.active_section is None:
            self.nav.show(self.config.default_section)
        statuses = await loads
        self.scheduler.flush()
        self.state.started = True
        loaded = sum(1 for s in statuses.values() if s is SourceStatus.LOADED)
        logger.info(f"Dashboard started: {loaded}/{len(statuses)} sources loaded")
        return statuses

    async def refresh(self) -> Dict[SourceId, SourceStatus]:
        statuses = await self.loader.refresh()
        self.scheduler.flush()
        return statuses

    # =========================================================================
    # Interaction
    # =========================================================================

    def open(self, section: str, category: Optional[str] = None) -> None:
        """Navigate without running the deferred follow-up work."""
        self.nav.show(section, category)

    def navigate(self, section: str, category: Optional[str] = None) -> None:
        self.nav.show(section, category)
        self.scheduler.flush()

    def replay(self) -> None:
        """Redraw the visible section into freshly bound mounts."""
        section = self.state.nav.active_section
        if section is None:
            return
        self.charts.draw_all(self.page)
        instance_id = self.registry.map_instance(section)
        if instance_id is not None:
            self.scheduler.defer(partial(self.maps.draw, instance_id, self.page), key=("draw", instance_id))
        for idx, renderer in enumerate(self.registry.renderers(section)):
            self.scheduler.defer(renderer, key=("render", section, idx))
        self.scheduler.flush()

    def set_filter(self, predicate: LayoutPredicate) -> None:
        """Every filter input change recomputes the visible table."""
        self.state.predicate = predicate
        r.render_layouts_table(self.ctx)

    def toggle_plan(self, version: str) -> bool:
        return self.plan.toggle(version)

    def filter_options(self) -> Dict[str, List[str]]:
        return filter_options(layouts_from_payload(self.state.store.payload(SourceId.LAYOUTS)))

    def export_layouts(self) -> Optional[ExportFile]:
        return export_layouts(layout_rows(self.state.store.payload(SourceId.LAYOUTS)))

    def export_sources(self) -> Optional[ExportFile]:
        return export_sources(self.state.store.payload(SourceId.SOURCES))
