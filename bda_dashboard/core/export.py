"""
CSV / JSON export of in-memory datasets.

Serializers are pure; the UI hands the resulting ExportFile to a download
control.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

LAYOUTS_CSV_FILENAME = "bda-layouts.csv"
SOURCES_JSON_FILENAME = "bda-data-sources.json"


@dataclass
class ExportFile:
    """A file ready for client-side download."""
    filename: str
    mime: str
    data: str

    @property
    def size(self) -> int:
        return len(self.data.encode("utf-8"))


def _is_blank(value: Any) -> bool:
    """Values exported as an empty string: None, False, 0, NaN and ""."""
    if value is None or value is False or value == "":
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0 or (isinstance(value, float) and math.isnan(value))
    return False


def _plain(value: Any) -> Any:
    """Integral floats as ints, at any depth, so 12.0 serializes as 12."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def _cell(value: Any) -> str:
    return json.dumps("" if _is_blank(value) else _plain(value), ensure_ascii=False, separators=(",", ":"))


def to_csv(records: Sequence[Dict[str, Any]]) -> str:
    """
    Serialize records to CSV.

    Headers are the first record's keys; every value goes through JSON
    string-quoting so embedded commas survive.
    """
    if not records:
        return ""
    headers = list(records[0].keys())
    rows = [",".join(_cell(record.get(h)) for h in headers) for record in records]
    return "\n".join([",".join(headers)] + rows)


def to_json(data: Any) -> str:
    return json.dumps(_plain(data), indent=2, ensure_ascii=False)


def export_layouts(records: Sequence[Dict[str, Any]]) -> Optional[ExportFile]:
    """CSV export of the full layout collection, or None when nothing is loaded."""
    if not records:
        return None
    return ExportFile(LAYOUTS_CSV_FILENAME, "text/csv", to_csv(records))


def export_sources(payload: Any) -> Optional[ExportFile]:
    if payload is None:
        return None
    return ExportFile(SOURCES_JSON_FILENAME, "application/json", to_json(payload))


def layout_rows(payload: Any) -> List[Dict[str, Any]]:
    """Raw layout mappings from a layouts payload, in source order."""
    if isinstance(payload, dict):
        items = payload.get("layouts") or []
    elif isinstance(payload, list):
        items = payload
    else:
        items = []
    return [x for x in items if isinstance(x, dict)]
