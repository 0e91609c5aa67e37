from __future__ import annotations

import json
from pathlib import Path

import pytest

from bda_dashboard.config import DashboardConfig
from bda_dashboard.core.models import LayoutRecord


LAYOUTS = {
    "summary": {
        "by_decade": {"1970s": 1, "1980s": 2, "1990s": 3, "2000s": 4, "2010s": 5, "2020s": 6},
        "by_use_type": {"Residential": 2, "Industrial": 1, "Commercial": 1},
    },
    "layouts": [
        {
            "id": 1, "name": "Wilson Garden HBCS", "village": "Hombegowda Nagar", "taluk": "Bangalore South",
            "extent_original": "12 acres", "approval_date": "2019-03-15", "approval_year": 2019,
            "use_type_category": "Residential",
        },
        {
            "id": 2, "name": "Peenya Industrial Estate", "village": "Peenya", "taluk": "Bangalore North",
            "extent_original": "40 acres", "approval_date": "1985-07-01", "approval_year": 1985,
            "use_type_category": "Industrial",
        },
        {
            "id": 3, "name": "Sunrise Enclave", "village": "Attibele", "taluk": "Anekal",
            "extent_original": None, "approval_date": "not a date", "approval_year": 2019,
            "use_type_category": "Residential",
        },
        {
            "id": 4, "name": "Market Square", "village": "Jigani", "taluk": "anekal",
            "extent_original": "2 acres", "approval_date": "2005-11-20", "approval_year": 2005,
            "use_type_category": "Commercial",
        },
    ],
}

LAYOUT_BOUNDARIES = {
    "boundaries": [
        {
            "layout_name": "Wilson Garden HBCS", "layout_no": "L-1", "area": 12, "taluk": "Bangalore South",
            "coordinates": [[12.94, 77.59], [12.95, 77.59], [12.95, 77.60], [12.94, 77.60]],
        },
        {
            "layout_name": "Peenya Industrial Estate", "layout_no": "L-2",
            "coordinates": [[13.02, 77.50], [13.03, 77.50], [13.03, 77.52]],
        },
    ],
}

SQUARE = [[[77.5, 12.9], [77.7, 12.9], [77.7, 13.1], [77.5, 13.1], [77.5, 12.9]]]

JURISDICTION = {
    "type": "FeatureCollection",
    "features": [
        {"type": "Feature", "properties": {"name": "BDA"}, "geometry": {"type": "Polygon", "coordinates": SQUARE}},
    ],
}

CORPORATIONS = {
    "type": "FeatureCollection",
    "features": [
        {"type": "Feature", "properties": {"name": "Bengaluru Central"},
         "geometry": {"type": "Polygon", "coordinates": SQUARE}},
        {"type": "Feature", "properties": {"name": "Bengaluru North"},
         "geometry": {"type": "MultiPolygon", "coordinates": [SQUARE, SQUARE]}},
        {"type": "Feature", "properties": {"name": "No Geometry"}, "geometry": None},
    ],
}

ADMIN_BOUNDARIES = {
    "jurisdiction": {"name": "BDA Local Planning Area", "color": "#111111", "area_sq_km": 1219},
    "corporations": [
        {"name": "Bengaluru Central", "color": "#aa0000", "wards": 63},
    ],
}

PLANNING_DISTRICTS = {
    "versions": {
        "2015": {
            "districts": [{"id": 1, "name": "Core Area", "wards": ["1", "2"], "villages": []}],
            "zones": {"Ring 1": ["Core Area"]},
        },
        "2031": {
            "districts": [
                {"id": 1, "name": "Core Area", "wards": ["1", "2", "3"], "villages": []},
                {"id": 2, "name": "Yelahanka", "wards": ["4"], "villages": ["Jakkur", "Agrahara"]},
            ],
            "rings": {"Ring 1": ["Core Area"], "Ring 2": ["Yelahanka"]},
        },
    },
    "comparison": {"districts": "47 -> 62"},
}

DEPARTMENTS = {
    "departments": [
        {
            "name": "Town Planning",
            "head": "Town Planning Member",
            "statutory_functions": [
                {"function": "Layout approval", "description": "Approve private layouts", "act_section": "32"},
            ],
            "performance_gap": {"strengths": ["Digitised approvals"], "weaknesses": []},
        },
        {
            "name": "Engineering",
            "head": "Engineering Member",
            "statutory_functions": [],
        },
    ],
    "overall_assessment": {
        "statutory_compliance": {"rating": "Partial", "explanation": "Some functions lag"},
        "performance_highlights": ["Online layout approvals"],
        "critical_gaps": ["Master plan delays"],
        "recommendations": ["Publish RMP 2031"],
    },
    "sources": [{"title": "BDA Act 1976", "url": "https://example.org/act", "type": "Act"}],
}

SOURCES = {
    "categories": [
        {
            "category": "Layouts",
            "citations": [
                {"title": "Approved layouts", "organization": "BDA", "coverage": "1970-2024",
                 "url": "https://example.org/layouts", "year": 2024, "used_in": ["Layouts"]},
            ],
        },
    ],
}

ECONOMIC = {
    "sectors": {"IT/ITES": 40, "Manufacturing": 20, "Services": 20, "Construction": 10, "Other": 10},
    "indicators": {"GDP (INR lakh crore)": 5.2, "Growth": "8%"},
    "projects": [{"name": "Metro Phase 3", "cost": 15000, "stations": ["A", "B"]}],
}

AUCTION = {
    "summary": {"sites": 120, "revenue": "INR 300 crore"},
    "auctions": [{"site": "HSR Layout Site 12", "reserve_price": 1.2e7}],
}

INFRASTRUCTURE = {
    "projects": [{"name": "Peripheral Ring Road", "length_km": 73.5}],
    "departments": [{"name": "Engineering", "functions": ["Roads", "Drains"]}],
}

PAYLOADS = {
    "layouts-all.json": LAYOUTS,
    "layouts-sample.json": {"layouts": LAYOUTS["layouts"][:1]},
    "layouts-boundaries.json": LAYOUT_BOUNDARIES,
    "administrative-boundaries.json": ADMIN_BOUNDARIES,
    "bda-jurisdiction.geojson": JURISDICTION,
    "gba-corporations.geojson": CORPORATIONS,
    "planning-districts.json": PLANNING_DISTRICTS,
    "departments.json": DEPARTMENTS,
    "sources.json": SOURCES,
    "economic-development.json": ECONOMIC,
    "e-auction.json": AUCTION,
    "infrastructure.json": INFRASTRUCTURE,
}


def write_data(directory: Path, payloads=None) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    for name, payload in (PAYLOADS if payloads is None else payloads).items():
        (directory / name).write_text(json.dumps(payload), encoding="utf-8")
    return directory


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return write_data(tmp_path / "data")


@pytest.fixture
def config(data_dir: Path) -> DashboardConfig:
    return DashboardConfig(data_base_path=str(data_dir))


@pytest.fixture
def layouts():
    return [LayoutRecord.from_dict(d) for d in LAYOUTS["layouts"]]
