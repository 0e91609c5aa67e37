"""
Explicit application state, passed by reference to every controller and
renderer.

Single writer per field:
    store          -> Loader
    nav            -> NavigationController
    predicate      -> layout filter controls
    plan_version   -> plan toggle
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from .filters import LayoutPredicate
from .store import DataStore

PLAN_VERSIONS = ("2015", "2031")


@dataclass
class NavigationState:
    active_section: Optional[str] = None
    active_category: Optional[str] = None
    # Dropdown/accordion state, independent of the active section
    open_categories: Dict[str, bool] = field(default_factory=dict)


@dataclass
class AppState:
    store: DataStore = field(default_factory=DataStore)
    predicate: LayoutPredicate = field(default_factory=LayoutPredicate)
    nav: NavigationState = field(default_factory=NavigationState)
    plan_version: str = "2031"
    started: bool = False
