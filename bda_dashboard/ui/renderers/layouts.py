"""
Layouts section: the filterable table and the layouts map.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence

import pandas as pd

from ...core.filters import filter_layouts
from ...core.models import LayoutBoundary, LayoutRecord, boundaries_from_payload, layouts_from_payload
from ...core.sources import SourceId
from ..content import Text
from ..formatting import format_date, popup_html
from ..maps import Shape, ShapeStyle
from ..theme import marker_color

if TYPE_CHECKING:
    from . import RenderContext

logger = logging.getLogger("bda.renderers.layouts")

TABLE_COLUMNS = ["ID", "Layout Name", "Location", "Extent", "Approval Date", "Use Type"]

MAP_ID = "layouts"
BOUNDARY_STYLE = ShapeStyle(color="#8b6f47", weight=2, fill_opacity=0.2)


# =============================================================================
# Table
# =============================================================================

def layout_row(layout: LayoutRecord) -> Dict[str, str]:
    location = ", ".join(part for part in (layout.village, layout.taluk) if part)
    return {
        "ID": "" if layout.id is None else str(layout.id),
        "Layout Name": layout.name,
        "Location": location,
        "Extent": "" if layout.extent_original is None else str(layout.extent_original),
        "Approval Date": format_date(layout.approval_date),
        "Use Type": layout.use_type_category,
    }


def layouts_frame(layouts: Sequence[LayoutRecord]) -> pd.DataFrame:
    """One row per record; a record that fails to format is skipped."""
    rows = []
    for layout in layouts:
        try:
            rows.append(layout_row(layout))
        except (TypeError, ValueError) as e:
            logger.warning(f"Skipping layout {layout.id!r}: {e}")
    return pd.DataFrame(rows, columns=TABLE_COLUMNS)


def render_layouts_table(ctx: "RenderContext") -> bool:
    """Re-derive the filtered view and replace the table body and count."""
    payload = ctx.payload(SourceId.LAYOUTS)
    body = ctx.mount("layoutsTableBody")
    if payload is None or body is None:
        return False

    visible = filter_layouts(layouts_from_payload(payload), ctx.state.predicate)
    body.replace(layouts_frame(visible))

    count = ctx.mount("layoutCount")
    if count is not None:
        count.replace(Text(str(len(visible))))
    return True


# =============================================================================
# Map
# =============================================================================

def boundary_shape(boundary: LayoutBoundary) -> Shape:
    return Shape.polygon(
        [boundary.coordinates],
        style=BOUNDARY_STYLE,
        tooltip=boundary.name,
        popup=popup_html(boundary.name, {
            "Layout No": boundary.layout_no,
            "Area": boundary.area,
            "Taluk": boundary.taluk,
        }),
    )


def centroid(points: Sequence[tuple]) -> Optional[tuple]:
    if not points:
        return None
    lat = sum(p[0] for p in points) / len(points)
    lon = sum(p[1] for p in points) / len(points)
    return (lat, lon)


def render_layout_boundaries(ctx: "RenderContext") -> bool:
    payload = ctx.payload(SourceId.LAYOUT_BOUNDARIES)
    if payload is None or not ctx.maps.is_initialized(MAP_ID):
        return False

    shapes = [boundary_shape(b) for b in boundaries_from_payload(payload) if b.coordinates]
    ctx.maps.set_layer_group(MAP_ID, "boundaries", shapes)
    ctx.maps.draw(MAP_ID, ctx.page)
    logger.debug(f"Drew {len(shapes)} layout boundaries")
    return True


def render_layout_markers(ctx: "RenderContext") -> bool:
    """One marker per layout with a known outline, coloured by use type."""
    layouts_payload = ctx.payload(SourceId.LAYOUTS)
    boundaries_payload = ctx.payload(SourceId.LAYOUT_BOUNDARIES)
    if layouts_payload is None or boundaries_payload is None or not ctx.maps.is_initialized(MAP_ID):
        return False

    outlines = {
        b.name.strip().lower(): b
        for b in boundaries_from_payload(boundaries_payload)
        if b.name and b.coordinates
    }
    markers: List[Shape] = []
    for layout in layouts_from_payload(layouts_payload):
        boundary = outlines.get(layout.name.strip().lower())
        center = centroid(boundary.coordinates) if boundary else None
        if center is None:
            continue
        color = marker_color(layout.use_type_category)
        markers.append(Shape.circle(
            center,
            style=ShapeStyle(color=color, weight=1, fill_opacity=0.8),
            tooltip=layout.name,
            popup=popup_html(layout.name, {
                "Village": layout.village,
                "Taluk": layout.taluk,
                "Use": layout.use_type_category,
                "Approved": format_date(layout.approval_date),
            }),
        ))

    ctx.maps.set_layer_group(MAP_ID, "markers", markers)
    ctx.maps.draw(MAP_ID, ctx.page)
    return True
