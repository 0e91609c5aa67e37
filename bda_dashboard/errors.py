"""
Exception types for the dashboard.
"""

from __future__ import annotations

from typing import Optional


class DashboardError(Exception):
    """Base exception for dashboard errors."""
    pass


class ConfigError(DashboardError):
    """Raised when a configuration value is invalid."""
    pass


class SourceLoadFailed(DashboardError):
    """
    A data source could not be fetched or parsed.

    Transport and parse failures both collapse to this one outcome.
    """

    def __init__(self, source_id: str, cause: Optional[BaseException] = None):
        message = f"Failed to load source '{source_id}'"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.source_id = source_id
        self.cause = cause
