"""
Section renderers.

Every public render function takes a RenderContext, checks its own
preconditions (payload loaded, mount present, map initialized) and returns
False without side effects when one is missing. They are safe to call any
number of times in any order; the latest call wins.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ...core.sources import SourceId
from ...core.state import AppState
from ..charts import ChartRenderer
from ..maps import MapRenderer
from ..page import Mount, Page
from ..theme import EARTH_THEME, ThemeColors


@dataclass
class RenderContext:
    state: AppState
    page: Page
    charts: ChartRenderer
    maps: MapRenderer
    theme: ThemeColors = field(default_factory=lambda: EARTH_THEME)

    def payload(self, source_id: SourceId) -> Any:
        return self.state.store.payload(source_id)

    def mount(self, mount_id: str) -> Optional[Mount]:
        return self.page.mount(mount_id)


from .overview import apply_layout_summary, render_overview, render_overview_stats  # noqa: E402
from .layouts import (  # noqa: E402
    layouts_frame,
    render_layout_boundaries,
    render_layout_markers,
    render_layouts_table,
)
from .boundaries import (  # noqa: E402
    CITY_BOUNDS,
    render_boundary_legend,
    render_city_bounds,
    render_corporations,
    render_jurisdiction,
    render_master_plan,
)
from .planning import render_planning  # noqa: E402
from .departments import render_departments  # noqa: E402
from .citations import render_citations  # noqa: E402
from .indicators import render_auction, render_economic, render_infrastructure  # noqa: E402

__all__ = [
    "RenderContext",
    "apply_layout_summary",
    "render_overview",
    "render_overview_stats",
    "layouts_frame",
    "render_layouts_table",
    "render_layout_boundaries",
    "render_layout_markers",
    "CITY_BOUNDS",
    "render_city_bounds",
    "render_jurisdiction",
    "render_corporations",
    "render_boundary_legend",
    "render_master_plan",
    "render_planning",
    "render_departments",
    "render_citations",
    "render_economic",
    "render_auction",
    "render_infrastructure",
]
