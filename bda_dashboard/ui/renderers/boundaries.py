"""
Master plan section: BDA jurisdiction, GBA corporations and the static city
bounds on the overview map.

Corporation colours and descriptive fields come from the administrative
boundaries source and are joined to the GeoJSON features by name. Until it
arrives, corporations are drawn with the fallback palette and redrawn once
it loads.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Tuple

from ...core.models import AdministrativeBoundary, admin_boundaries_from_geojson
from ...core.sources import SourceId
from ..content import KeyValues
from ..formatting import popup_html
from ..maps import Shape, ShapeStyle
from ..theme import CORPORATION_PALETTE, JURISDICTION_COLOR

if TYPE_CHECKING:
    from . import RenderContext

logger = logging.getLogger("bda.renderers.boundaries")

MAP_ID = "overview"

# South-west and north-east corners of the Bengaluru metropolitan area
CITY_BOUNDS: Tuple[Tuple[float, float], Tuple[float, float]] = ((12.7342, 77.3791), (13.1734, 77.8746))


def _metadata(ctx: "RenderContext") -> Tuple[Dict[str, Any], Dict[str, Dict[str, Any]]]:
    """(jurisdiction info, corporation info by lower-cased name)."""
    payload = ctx.payload(SourceId.ADMIN_BOUNDARIES)
    if not isinstance(payload, dict):
        return {}, {}
    jurisdiction = payload.get("jurisdiction") or {}
    corporations = {}
    for item in payload.get("corporations") or []:
        if isinstance(item, dict) and item.get("name"):
            corporations[str(item["name"]).strip().lower()] = item
    return jurisdiction, corporations


def _describe(region: AdministrativeBoundary, info: Dict[str, Any]) -> str:
    rows = {k: v for k, v in info.items() if k not in ("name", "color")}
    if not rows:
        rows = {k: v for k, v in region.metadata.items() if k.lower() != "name"}
    return popup_html(region.name, rows)


def render_city_bounds(ctx: "RenderContext") -> bool:
    if not ctx.maps.is_initialized(MAP_ID):
        return False
    south_west, north_east = CITY_BOUNDS
    ctx.maps.set_layer_group(MAP_ID, "city-bounds", [
        Shape.rectangle(
            south_west, north_east,
            style=ShapeStyle(color=ctx.theme.earth, weight=1, fill_opacity=0.03, dash_array="4 4"),
            tooltip="Bengaluru metropolitan area",
        )
    ])
    ctx.maps.draw(MAP_ID, ctx.page)
    return True


def render_jurisdiction(ctx: "RenderContext") -> bool:
    payload = ctx.payload(SourceId.JURISDICTION_BOUNDARY)
    if payload is None or not ctx.maps.is_initialized(MAP_ID):
        return False

    info, _ = _metadata(ctx)
    color = info.get("color") or JURISDICTION_COLOR
    shapes = []
    for region in admin_boundaries_from_geojson(payload, "jurisdiction"):
        region.color = color
        shapes.append(Shape.polygon(
            region.rings,
            style=ShapeStyle(color=color, weight=3, fill_opacity=0.05, dash_array="8 6"),
            tooltip=info.get("name") or region.name,
            popup=_describe(region, info),
        ))
    ctx.maps.set_layer_group(MAP_ID, "jurisdiction", shapes)
    ctx.maps.draw(MAP_ID, ctx.page)
    return True


def corporation_regions(ctx: "RenderContext") -> List[AdministrativeBoundary]:
    """Corporations with their display colours resolved."""
    payload = ctx.payload(SourceId.CORPORATION_BOUNDARIES)
    _, info = _metadata(ctx)
    regions = admin_boundaries_from_geojson(payload, "corporation")
    for i, region in enumerate(regions):
        meta = info.get(region.name.strip().lower(), {})
        region.color = meta.get("color") or CORPORATION_PALETTE[i % len(CORPORATION_PALETTE)]
    return regions


def render_corporations(ctx: "RenderContext") -> bool:
    payload = ctx.payload(SourceId.CORPORATION_BOUNDARIES)
    if payload is None or not ctx.maps.is_initialized(MAP_ID):
        return False

    _, info = _metadata(ctx)
    shapes = [
        Shape.polygon(
            region.rings,
            style=ShapeStyle(color=region.color, weight=2, fill_opacity=0.25),
            tooltip=region.name,
            popup=_describe(region, info.get(region.name.strip().lower(), {})),
        )
        for region in corporation_regions(ctx)
    ]
    ctx.maps.set_layer_group(MAP_ID, "corporations", shapes)
    logger.debug(f"Drew {len(shapes)} corporations")
    ctx.maps.draw(MAP_ID, ctx.page)
    render_boundary_legend(ctx)
    return True


def render_boundary_legend(ctx: "RenderContext") -> bool:
    mount = ctx.mount("boundaryLegend")
    if ctx.payload(SourceId.CORPORATION_BOUNDARIES) is None or mount is None:
        return False
    info, _ = _metadata(ctx)
    items = {info.get("name") or "BDA jurisdiction": info.get("color") or JURISDICTION_COLOR}
    for region in corporation_regions(ctx):
        items[region.name] = region.color
    mount.replace(KeyValues(items, title="Legend"))
    return True


def render_master_plan(ctx: "RenderContext") -> bool:
    """Replay every overview-map layer; used when metadata arrives late."""
    drawn = [
        render_city_bounds(ctx),
        render_jurisdiction(ctx),
        render_corporations(ctx),
    ]
    return any(drawn)
