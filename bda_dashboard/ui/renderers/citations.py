"""
Data sources section: citations grouped by category.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from ...core.models import SourceCitation, citations_from_payload
from ...core.sources import SourceId
from ..content import Card, Groups

if TYPE_CHECKING:
    from . import RenderContext


def citation_card(citation: SourceCitation) -> Card:
    stats = {}
    if citation.coverage:
        stats["Coverage"] = citation.coverage
    if citation.year not in (None, ""):
        stats["Year"] = citation.year
    body = []
    if citation.note:
        body.append(citation.note)
    if citation.used_in:
        body.append("Used in: " + ", ".join(citation.used_in))
    return Card(
        title=citation.title,
        subtitle=citation.organization,
        stats=stats,
        body=body,
        url=citation.url,
    )


def render_citations(ctx: "RenderContext") -> bool:
    payload = ctx.payload(SourceId.SOURCES)
    mount = ctx.mount("sourceCitations")
    if payload is None or mount is None:
        return False
    groups = {
        category: [citation_card(c) for c in citations]
        for category, citations in citations_from_payload(payload).items()
    }
    mount.replace(Groups(groups))
    return True
