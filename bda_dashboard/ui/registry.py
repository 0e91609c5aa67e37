"""
View Registry

Static description of every section (category, data sources, mounts, map)
plus the render functions each section replays when it becomes visible.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from ..core.sources import SourceId
from ..core.store import DataStore
from .page import NavControl, Page

Renderer = Callable[[], None]


@dataclass(frozen=True)
class SectionSpec:
    section_id: str
    title: str
    category: Optional[str] = None
    sources: Tuple[SourceId, ...] = ()
    mounts: Tuple[str, ...] = ()
    map_instance: Optional[str] = None


CATEGORIES: Dict[str, str] = {
    "planning": "Planning",
    "economy": "Economy",
}

SECTION_SPECS: Tuple[SectionSpec, ...] = (
    SectionSpec(
        "overview", "Overview",
        sources=(SourceId.LAYOUTS,),
        mounts=("overviewStats", "decadeChart", "useTypeChart", "populationChart", "migrationChart"),
    ),
    SectionSpec(
        "layouts", "Layouts",
        sources=(SourceId.LAYOUTS, SourceId.LAYOUT_BOUNDARIES),
        mounts=("layoutCount", "layoutsTableBody", "layoutsMap"),
        map_instance="layouts",
    ),
    SectionSpec(
        "master-plan", "Master Plan", category="planning",
        sources=(SourceId.ADMIN_BOUNDARIES, SourceId.JURISDICTION_BOUNDARY, SourceId.CORPORATION_BOUNDARIES),
        mounts=("map", "boundaryLegend"),
        map_instance="overview",
    ),
    SectionSpec(
        "planning-districts", "Planning Districts", category="planning",
        sources=(SourceId.PLANNING_DISTRICTS,),
        mounts=("districtList", "planComparison", "zoneSummary"),
    ),
    SectionSpec(
        "departments", "Departments",
        sources=(SourceId.DEPARTMENTS,),
        mounts=(
            "departmentCardsContainer", "performanceHighlights", "criticalGaps",
            "departmentAnalysisContainer", "complianceRating", "complianceExplanation",
            "recommendations", "departmentSources",
        ),
    ),
    SectionSpec(
        "economic-development", "Economic Development", category="economy",
        sources=(SourceId.ECONOMIC,),
        mounts=("sectorsChart", "economicIndicators", "economicProjects"),
    ),
    SectionSpec(
        "e-auction", "E-Auction", category="economy",
        sources=(SourceId.AUCTION,),
        mounts=("auctionSummary", "auctionList"),
    ),
    SectionSpec(
        "infrastructure", "Infrastructure", category="economy",
        sources=(SourceId.INFRASTRUCTURE,),
        mounts=("infrastructureProjects", "infrastructureFunctions"),
    ),
    SectionSpec(
        "sources", "Data Sources",
        sources=(SourceId.SOURCES,),
        mounts=("sourceCitations",),
    ),
)


class ViewRegistry:
    """Section lookup plus per-section render functions."""

    def __init__(self, specs: Tuple[SectionSpec, ...] = SECTION_SPECS,
                 categories: Optional[Dict[str, str]] = None):
        self._specs: Dict[str, SectionSpec] = {s.section_id: s for s in specs}
        self.categories: Dict[str, str] = dict(CATEGORIES if categories is None else categories)
        self._renderers: Dict[str, List[Renderer]] = defaultdict(list)

    def __contains__(self, section_id: str) -> bool:
        return section_id in self._specs

    @property
    def section_ids(self) -> List[str]:
        return list(self._specs)

    def spec(self, section_id: str) -> Optional[SectionSpec]:
        return self._specs.get(section_id)

    def category_of(self, section_id: str) -> Optional[str]:
        spec = self._specs.get(section_id)
        return spec.category if spec else None

    def map_instance(self, section_id: str) -> Optional[str]:
        spec = self._specs.get(section_id)
        return spec.map_instance if spec else None

    def register_renderer(self, section_id: str, renderer: Renderer) -> None:
        self._renderers[section_id].append(renderer)

    def renderers(self, section_id: str) -> List[Renderer]:
        return list(self._renderers.get(section_id, []))

    def has_loaded_source(self, section_id: str, store: DataStore) -> bool:
        spec = self._specs.get(section_id)
        if spec is None:
            return False
        return any(store.has_data(s) for s in spec.sources)

    def build_page(self) -> Page:
        """Sections, mounts and both nav control sets for every spec."""
        page = Page()
        for spec in self._specs.values():
            page.add_section(spec.section_id, spec.category, spec.mounts)
        for variant in Page.NAV_VARIANTS:
            for spec in self._specs.values():
                page.nav_controls.append(NavControl(
                    variant=variant, section=spec.section_id,
                    category=spec.category, label=spec.title,
                ))
            for category, label in self.categories.items():
                page.nav_controls.append(NavControl(variant=variant, category=category, label=label))
        return page

