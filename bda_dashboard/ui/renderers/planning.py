"""
Planning districts section, drawn for the active master-plan version.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

import pandas as pd

from ...core.models import plan_versions_from_payload
from ...core.sources import SourceId
from ..content import KeyValues, Text
from ..formatting import format_value

if TYPE_CHECKING:
    from . import RenderContext

DISTRICT_COLUMNS = ["ID", "District", "Wards", "Villages"]


def render_district_list(ctx: "RenderContext") -> bool:
    payload = ctx.payload(SourceId.PLANNING_DISTRICTS)
    mount = ctx.mount("districtList")
    if payload is None or mount is None:
        return False

    version = plan_versions_from_payload(payload).get(ctx.state.plan_version)
    if version is None:
        mount.replace(Text(f"No districts published for RMP {ctx.state.plan_version}"))
        return True

    rows = [
        {
            "ID": format_value(d.id),
            "District": d.name,
            "Wards": len(d.wards),
            "Villages": format_value(d.villages),
        }
        for d in version.districts
    ]
    mount.replace(pd.DataFrame(rows, columns=DISTRICT_COLUMNS))
    return True


def render_zone_summary(ctx: "RenderContext") -> bool:
    payload = ctx.payload(SourceId.PLANNING_DISTRICTS)
    mount = ctx.mount("zoneSummary")
    if payload is None or mount is None:
        return False

    version = plan_versions_from_payload(payload).get(ctx.state.plan_version)
    zones = version.zones if version else {}
    items = {
        name: len(members) if isinstance(members, list) else format_value(members)
        for name, members in zones.items()
    }
    mount.replace(KeyValues(items, title=f"Zones (RMP {ctx.state.plan_version})"))
    return True


def render_plan_comparison(ctx: "RenderContext") -> bool:
    payload = ctx.payload(SourceId.PLANNING_DISTRICTS)
    mount = ctx.mount("planComparison")
    if not isinstance(payload, dict) or mount is None:
        return False
    comparison = payload.get("comparison") or {}
    mount.replace(KeyValues(
        {str(k): format_value(v) for k, v in comparison.items()},
        title="RMP 2015 vs RMP 2031",
    ))
    return True


def render_planning(ctx: "RenderContext") -> bool:
    drawn = [
        render_district_list(ctx),
        render_plan_comparison(ctx),
        render_zone_summary(ctx),
    ]
    return any(drawn)
