"""
Named data sources and the files they are fetched from.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict


class SourceId(str, Enum):
    """Independently fetchable data sources."""
    LAYOUTS = "layouts"
    LAYOUT_BOUNDARIES = "layouts-boundaries"
    ADMIN_BOUNDARIES = "administrative-boundaries"
    JURISDICTION_BOUNDARY = "jurisdiction-boundary"
    CORPORATION_BOUNDARIES = "corporation-boundaries"
    PLANNING_DISTRICTS = "planning-districts"
    DEPARTMENTS = "departments"
    SOURCES = "sources"
    ECONOMIC = "economic-development"
    AUCTION = "e-auction"
    INFRASTRUCTURE = "infrastructure"


# Paths relative to the data base path
SOURCE_FILES: Dict[SourceId, str] = {
    SourceId.LAYOUT_BOUNDARIES: "layouts-boundaries.json",
    SourceId.ADMIN_BOUNDARIES: "administrative-boundaries.json",
    SourceId.JURISDICTION_BOUNDARY: "bda-jurisdiction.geojson",
    SourceId.CORPORATION_BOUNDARIES: "gba-corporations.geojson",
    SourceId.PLANNING_DISTRICTS: "planning-districts.json",
    SourceId.DEPARTMENTS: "departments.json",
    SourceId.SOURCES: "sources.json",
    SourceId.ECONOMIC: "economic-development.json",
    SourceId.AUCTION: "e-auction.json",
    SourceId.INFRASTRUCTURE: "infrastructure.json",
}

LAYOUT_FILES: Dict[str, str] = {
    "all": "layouts-all.json",
    "sample": "layouts-sample.json",
}


def source_path(source_id: SourceId, layouts_variant: str = "all") -> str:
    """Relative file path for a source."""
    if source_id is SourceId.LAYOUTS:
        return LAYOUT_FILES[layouts_variant]
    return SOURCE_FILES[source_id]
