"""
Departments section: cards, highlights, gaps, per-department analysis,
overall assessment and source links.

Each part has its own mount and renders independently; a missing mount only
skips that part.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from ...core.models import Department, assessment_from_payload, departments_from_payload
from ...core.sources import SourceId
from ..content import Bullets, Card, Cards, Link, Links, Text

if TYPE_CHECKING:
    from . import RenderContext


def department_card(dept: Department) -> Card:
    return Card(
        title=dept.name,
        subtitle=dept.head,
        stats={
            "Statutory Functions": len(dept.statutory_functions),
            "Strengths": len(dept.strengths),
            "Gaps": len(dept.weaknesses),
        },
    )


def department_analysis(dept: Department) -> Card:
    body = []
    for func in dept.statutory_functions:
        body.append(f"**{func.function}**: {func.description} (Act Section: {func.act_section})")
    body.append("**Strengths**")
    body.extend(f"+ {s}" for s in dept.strengths or ["No data"])
    body.append("**Gaps & Weaknesses**")
    body.extend(f"- {w}" for w in dept.weaknesses or ["No data"])
    return Card(title=dept.name, subtitle=dept.head, body=body)


def render_department_cards(ctx: "RenderContext") -> bool:
    payload = ctx.payload(SourceId.DEPARTMENTS)
    mount = ctx.mount("departmentCardsContainer")
    if payload is None or mount is None:
        return False
    mount.replace(Cards([department_card(d) for d in departments_from_payload(payload)]))
    return True


def render_department_analysis(ctx: "RenderContext") -> bool:
    payload = ctx.payload(SourceId.DEPARTMENTS)
    mount = ctx.mount("departmentAnalysisContainer")
    if payload is None or mount is None:
        return False
    mount.replace(Cards([department_analysis(d) for d in departments_from_payload(payload)]))
    return True


def render_assessment(ctx: "RenderContext") -> bool:
    """Highlights, gaps, rating, explanation and recommendations."""
    assessment = assessment_from_payload(ctx.payload(SourceId.DEPARTMENTS))
    if assessment is None:
        return False

    parts = (
        ("performanceHighlights", Bullets(assessment.highlights, tone="positive")),
        ("criticalGaps", Bullets(assessment.critical_gaps, tone="negative")),
        ("complianceRating", Text(assessment.rating, style="rating")),
        ("complianceExplanation", Text(assessment.explanation)),
        ("recommendations", Bullets(assessment.recommendations)),
    )
    drawn = 0
    for mount_id, content in parts:
        mount = ctx.mount(mount_id)
        if mount is not None:
            mount.replace(content)
            drawn += 1
    return drawn > 0


def render_department_sources(ctx: "RenderContext") -> bool:
    payload = ctx.payload(SourceId.DEPARTMENTS)
    mount = ctx.mount("departmentSources")
    if not isinstance(payload, dict) or not payload.get("sources") or mount is None:
        return False
    links = [
        Link(str(s.get("title") or s.get("url") or ""), str(s.get("url") or ""), str(s.get("type") or ""))
        for s in payload["sources"]
        if isinstance(s, dict)
    ]
    mount.replace(Links(links))
    return True


def render_departments(ctx: "RenderContext") -> bool:
    drawn = [
        render_department_cards(ctx),
        render_assessment(ctx),
        render_department_analysis(ctx),
        render_department_sources(ctx),
    ]
    return any(drawn)
