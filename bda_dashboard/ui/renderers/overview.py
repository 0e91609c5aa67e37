"""
Overview section: summary stats and the four overview charts.
"""
from __future__ import annotations

import logging
from collections import Counter
from typing import TYPE_CHECKING

from ...core.models import layouts_from_payload
from ...core.sources import SourceId
from ..content import KeyValues

if TYPE_CHECKING:
    from . import RenderContext

logger = logging.getLogger("bda.renderers.overview")

OVERVIEW_CHARTS = ("decade", "use_type", "population", "migration")


def apply_layout_summary(ctx: "RenderContext") -> bool:
    """Feed summary.by_decade / summary.by_use_type into their charts."""
    payload = ctx.payload(SourceId.LAYOUTS)
    if not isinstance(payload, dict):
        return False
    summary = payload.get("summary") or {}
    updated = False
    for key, chart in (("by_decade", "decade"), ("by_use_type", "use_type")):
        series = summary.get(key)
        if isinstance(series, dict) and series:
            updated = ctx.charts.update_chart(chart, list(series.values())) or updated
            ctx.charts.draw(chart, ctx.page)
            logger.debug(f"Chart '{chart}' fed from summary.{key}")
    return updated


def render_overview_stats(ctx: "RenderContext") -> bool:
    payload = ctx.payload(SourceId.LAYOUTS)
    mount = ctx.mount("overviewStats")
    if payload is None or mount is None:
        return False

    layouts = layouts_from_payload(payload)
    by_use = Counter(layout.use_type_category for layout in layouts)
    items = {
        "Approved layouts": len(layouts),
        "Taluks": len({layout.taluk for layout in layouts if layout.taluk}),
        "Villages": len({layout.village for layout in layouts if layout.village}),
    }
    for use_type, count in by_use.most_common():
        items[use_type] = count
    mount.replace(KeyValues(items, title="Layouts at a glance"))
    return True


def render_overview(ctx: "RenderContext") -> bool:
    """Replay the whole overview section."""
    for name in OVERVIEW_CHARTS:
        ctx.charts.draw(name, ctx.page)
    apply_layout_summary(ctx)
    return render_overview_stats(ctx)
