"""
Data Transfer Objects for the dashboard.

Every type is built from a parsed JSON mapping and tolerates missing keys:
payloads are consumed as delivered, never validated.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

LatLon = Tuple[float, float]


@dataclass
class LayoutRecord:
    """An approved layout."""
    id: Any
    name: str
    village: str
    taluk: str
    extent_original: Any = None
    approval_date: Optional[str] = None
    approval_year: Any = None
    use_type_category: str = "other"
    # Source mapping with its own key order (used by the CSV export)
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "LayoutRecord":
        return cls(
            id=d.get("id"),
            name=str(d.get("name") or ""),
            village=str(d.get("village") or ""),
            taluk=str(d.get("taluk") or ""),
            extent_original=d.get("extent_original"),
            approval_date=d.get("approval_date"),
            approval_year=d.get("approval_year"),
            use_type_category=str(d.get("use_type_category") or "other"),
            raw=dict(d),
        )


@dataclass
class LayoutBoundary:
    """Polygon outline of a layout, joined to LayoutRecord by name."""
    name: str
    coordinates: List[LatLon]
    layout_no: Optional[str] = None
    area: Optional[Any] = None
    taluk: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "LayoutBoundary":
        coords = []
        for pair in d.get("coordinates") or []:
            try:
                coords.append((float(pair[0]), float(pair[1])))
            except (TypeError, ValueError, IndexError):
                continue
        return cls(
            name=str(d.get("layout_name") or d.get("name") or ""),
            coordinates=coords,
            layout_no=d.get("layout_no"),
            area=d.get("area"),
            taluk=d.get("taluk"),
        )


@dataclass
class AdministrativeBoundary:
    """A named region: the outer jurisdiction or one corporation."""
    name: str
    rings: List[List[LatLon]]
    color: str = "#8b6f47"
    kind: str = "corporation"  # "jurisdiction" | "corporation"
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class PlanningDistrict:
    """A planning district in one master-plan version."""
    id: Any
    name: str
    wards: List[str] = field(default_factory=list)
    villages: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "PlanningDistrict":
        return cls(
            id=d.get("id"),
            name=str(d.get("name") or ""),
            wards=list(d.get("wards") or []),
            villages=list(d.get("villages") or []),
        )


@dataclass
class PlanVersion:
    """Districts and ring/zone categorization of one plan version."""
    version: str
    districts: List[PlanningDistrict] = field(default_factory=list)
    zones: Dict[str, List[Any]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, version: str, d: Dict[str, Any]) -> "PlanVersion":
        return cls(
            version=version,
            districts=[PlanningDistrict.from_dict(x) for x in d.get("districts") or []],
            zones=dict(d.get("zones") or d.get("rings") or {}),
        )


@dataclass
class StatutoryFunction:
    function: str
    description: str = ""
    act_section: str = ""

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "StatutoryFunction":
        return cls(
            function=str(d.get("function") or ""),
            description=str(d.get("description") or ""),
            act_section=str(d.get("act_section") or ""),
        )


@dataclass
class Department:
    """A department with its statutory functions and performance gap."""
    name: str
    head: str
    statutory_functions: List[StatutoryFunction] = field(default_factory=list)
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Department":
        gap = d.get("performance_gap") or {}
        return cls(
            name=str(d.get("name") or ""),
            head=str(d.get("head") or ""),
            statutory_functions=[
                StatutoryFunction.from_dict(f) for f in d.get("statutory_functions") or []
            ],
            strengths=list(gap.get("strengths") or []),
            weaknesses=list(gap.get("weaknesses") or []),
        )


@dataclass
class OverallAssessment:
    """Aggregate compliance assessment across departments."""
    rating: str = ""
    explanation: str = ""
    highlights: List[str] = field(default_factory=list)
    critical_gaps: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "OverallAssessment":
        compliance = d.get("statutory_compliance") or {}
        return cls(
            rating=str(compliance.get("rating") or ""),
            explanation=str(compliance.get("explanation") or ""),
            highlights=list(d.get("performance_highlights") or []),
            critical_gaps=list(d.get("critical_gaps") or []),
            recommendations=list(d.get("recommendations") or []),
        )


@dataclass
class SourceCitation:
    """A cited dataset or document."""
    title: str
    organization: str = ""
    coverage: str = ""
    url: str = ""
    year: Optional[Any] = None
    note: Optional[str] = None
    used_in: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "SourceCitation":
        return cls(
            title=str(d.get("title") or ""),
            organization=str(d.get("organization") or ""),
            coverage=str(d.get("coverage") or ""),
            url=str(d.get("url") or ""),
            year=d.get("year"),
            note=d.get("note"),
            used_in=list(d.get("used_in") or []),
        )


# =============================================================================
# Payload accessors
# =============================================================================

def layouts_from_payload(payload: Any) -> List[LayoutRecord]:
    """Layout records from a layouts payload ({"layouts": [...]} or a bare list)."""
    if isinstance(payload, dict):
        items = payload.get("layouts") or []
    elif isinstance(payload, list):
        items = payload
    else:
        return []
    return [LayoutRecord.from_dict(x) for x in items if isinstance(x, dict)]


def boundaries_from_payload(payload: Any) -> List[LayoutBoundary]:
    if isinstance(payload, dict):
        items = payload.get("boundaries") or payload.get("layouts") or []
    elif isinstance(payload, list):
        items = payload
    else:
        return []
    return [LayoutBoundary.from_dict(x) for x in items if isinstance(x, dict)]


def geojson_rings(geometry: Optional[Dict[str, Any]]) -> List[List[LatLon]]:
    """Outer rings of a Polygon/MultiPolygon as (lat, lon) lists."""
    if not geometry:
        return []
    kind = geometry.get("type")
    coords = geometry.get("coordinates") or []
    if kind == "Polygon":
        polygons = [coords]
    elif kind == "MultiPolygon":
        polygons = coords
    else:
        return []
    rings = []
    for polygon in polygons:
        if not polygon:
            continue
        ring = []
        # GeoJSON positions are [lon, lat]
        for p in polygon[0] or []:
            try:
                ring.append((float(p[1]), float(p[0])))
            except (TypeError, ValueError, IndexError):
                continue
        if ring:
            rings.append(ring)
    return rings


def feature_name(properties: Dict[str, Any]) -> str:
    for key in ("name", "NAME", "Name", "corporation", "CORPORATION"):
        if properties.get(key):
            return str(properties[key])
    return "Unnamed"


def departments_from_payload(payload: Any) -> List[Department]:
    if not isinstance(payload, dict):
        return []
    return [Department.from_dict(d) for d in payload.get("departments") or []]


def assessment_from_payload(payload: Any) -> Optional[OverallAssessment]:
    if not isinstance(payload, dict) or not payload.get("overall_assessment"):
        return None
    return OverallAssessment.from_dict(payload["overall_assessment"])


def citations_from_payload(payload: Any) -> Dict[str, List[SourceCitation]]:
    """Citations grouped by category, in payload order."""
    groups: Dict[str, List[SourceCitation]] = {}
    if not isinstance(payload, dict):
        return groups
    categories = payload.get("categories")
    if isinstance(categories, list):
        for group in categories:
            name = str(group.get("category") or "Other")
            groups[name] = [SourceCitation.from_dict(c) for c in group.get("citations") or []]
    elif isinstance(categories, dict):
        for name, citations in categories.items():
            groups[str(name)] = [SourceCitation.from_dict(c) for c in citations or []]
    return groups


def plan_versions_from_payload(payload: Any) -> Dict[str, PlanVersion]:
    if not isinstance(payload, dict):
        return {}
    versions = payload.get("versions") or {}
    return {str(v): PlanVersion.from_dict(str(v), d or {}) for v, d in versions.items()}


def admin_boundaries_from_geojson(payload: Any, kind: str) -> List[AdministrativeBoundary]:
    """Named regions from a GeoJSON FeatureCollection; features without polygons are skipped."""
    if not isinstance(payload, dict):
        return []
    regions = []
    for feature in payload.get("features") or []:
        if not isinstance(feature, dict):
            continue
        properties = feature.get("properties") or {}
        rings = geojson_rings(feature.get("geometry"))
        if not rings:
            continue
        regions.append(AdministrativeBoundary(
            name=feature_name(properties),
            rings=rings,
            kind=kind,
            metadata=dict(properties),
        ))
    return regions
