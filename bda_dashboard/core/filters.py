"""
Filter Engine for layout records.

Filtering is a pure function of (collection, predicate): the displayed
subset is recomputed from the full collection on every input change.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence

from .models import LayoutRecord


@dataclass(frozen=True)
class LayoutPredicate:
    """Current filter-input values. Empty strings mean "no constraint"."""
    text: str = ""
    taluk: str = ""
    use_type: str = ""
    year: str = ""

    @property
    def is_empty(self) -> bool:
        return not (self.text or self.taluk or self.use_type or self.year)


def matches(layout: LayoutRecord, predicate: LayoutPredicate) -> bool:
    """True if the record satisfies every constraint of the predicate."""
    term = predicate.text.lower()
    if term and term not in layout.name.lower() and term not in layout.village.lower():
        return False
    if predicate.taluk and layout.taluk != predicate.taluk:
        return False
    if predicate.use_type and layout.use_type_category != predicate.use_type:
        return False
    if predicate.year and str(layout.approval_year) != predicate.year:
        return False
    return True


def filter_layouts(layouts: Sequence[LayoutRecord], predicate: LayoutPredicate) -> List[LayoutRecord]:
    """Order-preserving subsequence of layouts matching the predicate."""
    return [layout for layout in layouts if matches(layout, predicate)]


def filter_options(layouts: Sequence[LayoutRecord]) -> Dict[str, List[str]]:
    """Distinct values for the taluk and use-type selects."""
    taluks = sorted({l.taluk for l in layouts if l.taluk})
    use_types = sorted({l.use_type_category for l in layouts if l.use_type_category})
    return {"taluk": taluks, "use_type": use_types}
