"""
Data layer: sources, store, loader, filtering and export.
"""
from .sources import SourceId, SOURCE_FILES, LAYOUT_FILES, source_path
from .store import DataStore, SourceEntry, SourceStatus
from .loader import Loader
from .filters import LayoutPredicate, filter_layouts, filter_options
from .export import ExportFile, to_csv, to_json, export_layouts, export_sources
from .state import AppState, NavigationState, PLAN_VERSIONS

__all__ = [
    "SourceId",
    "SOURCE_FILES",
    "LAYOUT_FILES",
    "source_path",
    "DataStore",
    "SourceEntry",
    "SourceStatus",
    "Loader",
    "LayoutPredicate",
    "filter_layouts",
    "filter_options",
    "ExportFile",
    "to_csv",
    "to_json",
    "export_layouts",
    "export_sources",
    "AppState",
    "NavigationState",
    "PLAN_VERSIONS",
]
