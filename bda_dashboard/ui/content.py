"""
Content values written into mounts.

Tables are pandas DataFrames and charts are plotly Figures; everything else
uses one of the small types below so the Streamlit surface knows how to
draw it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Text:
    value: str
    style: str = ""  # optional CSS class


@dataclass
class Bullets:
    items: List[str] = field(default_factory=list)
    tone: str = "neutral"  # "positive" | "negative" | "neutral"
    empty_label: str = "No data"


@dataclass
class Card:
    title: str
    subtitle: str = ""
    stats: Dict[str, Any] = field(default_factory=dict)
    body: List[str] = field(default_factory=list)
    url: str = ""


@dataclass
class Cards:
    cards: List[Card] = field(default_factory=list)


@dataclass
class Link:
    title: str
    url: str
    note: str = ""


@dataclass
class Links:
    links: List[Link] = field(default_factory=list)


@dataclass
class KeyValues:
    items: Dict[str, Any] = field(default_factory=dict)
    title: Optional[str] = None


@dataclass
class Groups:
    """Titled groups of cards (e.g. citations per category)."""
    groups: Dict[str, List[Card]] = field(default_factory=dict)


@dataclass
class MapView:
    """A built folium map plus the size revision it was drawn at."""
    instance_id: str
    size_revision: int
    folium_map: Any
    height: int = 520
