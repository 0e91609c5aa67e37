"""
Economy sections: economic development, e-auction and infrastructure.

These payloads are heterogeneous nested records; lists of records become
tables with nested values flattened into text, scalar mappings become
key/value panels.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List

import pandas as pd

from ...core.sources import SourceId
from ..content import Card, Cards, KeyValues, Text
from ..formatting import format_value

if TYPE_CHECKING:
    from . import RenderContext


def records_frame(records: Any) -> pd.DataFrame:
    """Table of dict records, columns in first-seen order."""
    rows: List[Dict[str, str]] = []
    for record in records or []:
        if isinstance(record, dict):
            rows.append({str(k): format_value(v) for k, v in record.items()})
    return pd.DataFrame(rows)


def scalar_items(mapping: Any) -> Dict[str, Any]:
    if not isinstance(mapping, dict):
        return {}
    return {str(k): v if isinstance(v, (int, float, str)) else format_value(v) for k, v in mapping.items()}


def sector_values(sectors: Any) -> List[float]:
    """Shares in payload order from {name: share} or [{"share"|"value": x}]."""
    if isinstance(sectors, dict):
        values = list(sectors.values())
    elif isinstance(sectors, list):
        values = [s.get("share", s.get("value")) if isinstance(s, dict) else s for s in sectors]
    else:
        return []
    shares = []
    for value in values:
        try:
            shares.append(float(value))
        except (TypeError, ValueError):
            shares.append(0.0)
    return shares


def render_economic(ctx: "RenderContext") -> bool:
    payload = ctx.payload(SourceId.ECONOMIC)
    if not isinstance(payload, dict):
        return False

    shares = sector_values(payload.get("sectors"))
    if shares:
        ctx.charts.update_chart("sectors", shares)
    ctx.charts.draw("sectors", ctx.page)

    indicators = ctx.mount("economicIndicators")
    if indicators is not None:
        indicators.replace(KeyValues(scalar_items(payload.get("indicators")), title="Key indicators"))
    projects = ctx.mount("economicProjects")
    if projects is not None:
        projects.replace(records_frame(payload.get("projects")))
    return True


def render_auction(ctx: "RenderContext") -> bool:
    payload = ctx.payload(SourceId.AUCTION)
    if not isinstance(payload, dict):
        return False

    summary = ctx.mount("auctionSummary")
    if summary is not None:
        summary.replace(KeyValues(scalar_items(payload.get("summary")), title="Auction summary"))
    listing = ctx.mount("auctionList")
    if listing is not None:
        records = payload.get("auctions") or payload.get("properties") or payload.get("projects")
        listing.replace(records_frame(records))
    return summary is not None or listing is not None


def render_infrastructure(ctx: "RenderContext") -> bool:
    payload = ctx.payload(SourceId.INFRASTRUCTURE)
    if not isinstance(payload, dict):
        return False

    projects = ctx.mount("infrastructureProjects")
    if projects is not None:
        projects.replace(records_frame(payload.get("projects")))

    functions = ctx.mount("infrastructureFunctions")
    if functions is not None:
        cards = [
            Card(
                title=str(d.get("name") or ""),
                subtitle=str(d.get("head") or ""),
                body=[format_value(f) for f in d.get("functions") or []],
            )
            for d in payload.get("departments") or []
            if isinstance(d, dict)
        ]
        functions.replace(Cards(cards) if cards else Text("No data"))
    return projects is not None or functions is not None
