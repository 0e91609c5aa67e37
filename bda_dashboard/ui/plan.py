"""
Master-plan version toggle (RMP 2015 / RMP 2031).
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from ..core.state import PLAN_VERSIONS, AppState
from .page import Page, ToggleControl

logger = logging.getLogger("bda.plan")


class PlanToggle:
    """Owns `state.plan_version` and the two toggle controls."""

    def __init__(self, state: AppState, page: Page, on_change: Optional[Callable[[], None]] = None):
        self.state = state
        self.page = page
        self.on_change = on_change
        page.plan_controls = {v: ToggleControl(v, label=f"RMP {v}") for v in PLAN_VERSIONS}
        self._restyle()

    @property
    def version(self) -> str:
        return self.state.plan_version

    def _restyle(self) -> None:
        for value, control in self.page.plan_controls.items():
            control.active = value == self.state.plan_version

    def toggle(self, version: str) -> bool:
        """Switch versions; unknown versions are ignored."""
        if version not in PLAN_VERSIONS:
            logger.warning(f"Unknown plan version '{version}'")
            return False
        self.state.plan_version = version
        self._restyle()
        logger.info(f"Switched to RMP {version}")
        if self.on_change is not None:
            self.on_change()
        return True
