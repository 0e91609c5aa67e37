"""
Display formatting helpers shared by the renderers.
"""

from __future__ import annotations

import html
import math
from datetime import datetime, timezone
from typing import Any, Optional

INVALID_DATE = "Invalid Date"

_DATE_FORMATS = ("%d-%m-%Y", "%d/%m/%Y", "%Y/%m/%d", "%d %b %Y", "%d %B %Y")


def parse_date(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, (int, float)):
        if isinstance(value, float) and math.isnan(value):
            return None
        # Epoch milliseconds
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    text = str(value).strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def format_date(value: Any) -> str:
    """'2019-03-15' -> '15 Mar 2019'; anything unparseable -> 'Invalid Date'."""
    parsed = parse_date(value)
    if parsed is None:
        return INVALID_DATE
    return parsed.strftime("%d %b %Y")


def format_value(value: Any) -> str:
    """Flatten nested payload values into a single table cell."""
    if value is None:
        return ""
    if isinstance(value, dict):
        return "; ".join(f"{k}: {format_value(v)}" for k, v in value.items())
    if isinstance(value, (list, tuple)):
        return ", ".join(format_value(v) for v in value)
    return str(value)


def popup_html(title: str, rows: dict) -> str:
    """Escaped popup body: bold title then one line per non-empty row."""
    lines = [f"<b>{html.escape(str(title))}</b>"]
    for label, value in rows.items():
        if value in (None, ""):
            continue
        lines.append(f"{html.escape(str(label))}: {html.escape(format_value(value))}")
    return "<br>".join(lines)
