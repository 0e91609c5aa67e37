"""
Chart Renderer

A fixed set of plotly figures created once from static configuration.
Fresh data only rebinds trace values; a figure is never rebuilt.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import plotly.graph_objects as go

from .page import Page
from .theme import EARTH_THEME, ThemeColors, get_plotly_theme

logger = logging.getLogger("bda.charts")


@dataclass(frozen=True)
class ChartSpec:
    name: str
    mount_id: Optional[str]
    kind: str  # "bar" | "hbar" | "line" | "doughnut" | "pie"
    labels: Tuple[str, ...]
    values: Tuple[float, ...]
    series_label: str = ""
    tick_suffix: str = ""
    axis_max: Optional[float] = None


# Placeholder values shown until a source supplies a summary
CHART_SPECS: Tuple[ChartSpec, ...] = (
    ChartSpec(
        "decade", "decadeChart", "bar",
        labels=("1970s", "1980s", "1990s", "2000s", "2010s", "2020s"),
        values=(48, 195, 287, 245, 156, 86),
        series_label="Layouts Approved",
    ),
    ChartSpec(
        "use_type", "useTypeChart", "doughnut",
        labels=("Residential", "Industrial", "Commercial"),
        values=(934, 51, 32),
    ),
    ChartSpec(
        "population", "populationChart", "line",
        labels=("1971", "1981", "1991", "2001", "2011", "2021", "2031"),
        values=(1.7, 2.9, 4.1, 5.7, 8.5, 13.6, 20.0),
        series_label="Population (Millions)",
        tick_suffix="M",
    ),
    ChartSpec(
        "migration", "migrationChart", "hbar",
        labels=("Work/Employment", "Marriage", "Family Move", "Education", "Other"),
        values=(35, 25, 15, 12, 13),
        series_label="Percentage",
        tick_suffix="%",
        axis_max=40,
    ),
    ChartSpec(
        "sectors", "sectorsChart", "pie",
        labels=("IT/ITES", "Manufacturing", "Services", "Construction", "Other"),
        values=(38, 22, 20, 12, 8),
    ),
)


class ChartRenderer:
    """Owns every chart instance, keyed by logical name."""

    def __init__(self, theme: ThemeColors = EARTH_THEME,
                 specs: Sequence[ChartSpec] = CHART_SPECS):
        self.theme = theme
        self.specs: Dict[str, ChartSpec] = {s.name: s for s in specs}
        self._charts: Dict[str, go.Figure] = {}
        self._revisions: Dict[str, int] = {}

    def create_all(self) -> None:
        for name in self.specs:
            if name not in self._charts:
                self._charts[name] = self._build(self.specs[name])
                self._revisions[name] = 0

    def figure(self, name: str) -> Optional[go.Figure]:
        return self._charts.get(name)

    def revision(self, name: str) -> int:
        return self._revisions.get(name, 0)

    def values(self, name: str) -> List[float]:
        fig = self._charts.get(name)
        if fig is None:
            return []
        trace = fig.data[0]
        kind = self.specs[name].kind
        if kind in ("doughnut", "pie"):
            data = trace.values
        elif kind == "hbar":
            data = trace.x
        else:
            data = trace.y
        return list(data) if data is not None else []

    def _build(self, spec: ChartSpec) -> go.Figure:
        t = self.theme
        labels = list(spec.labels)
        values = list(spec.values)
        if spec.kind == "bar":
            trace = go.Bar(x=labels, y=values, name=spec.series_label, marker_color=t.earth)
        elif spec.kind == "hbar":
            trace = go.Bar(x=values, y=labels, orientation="h", name=spec.series_label, marker_color=t.sage)
        elif spec.kind == "line":
            trace = go.Scatter(
                x=labels, y=values, name=spec.series_label, mode="lines+markers",
                line={"color": t.terracotta, "shape": "spline", "smoothing": 0.6},
                fill="tozeroy", fillcolor="rgba(200, 90, 54, 0.1)",
                marker={"size": 8, "color": t.terracotta},
            )
        elif spec.kind in ("doughnut", "pie"):
            trace = go.Pie(
                labels=labels, values=values,
                hole=0.5 if spec.kind == "doughnut" else 0,
                marker={"colors": [t.earth, t.sage, t.terracotta, t.earth_light, t.text_muted]},
                sort=False,
            )
        else:
            raise ValueError(f"Unknown chart kind: {spec.kind}")

        fig = go.Figure(trace)
        fig.update_layout(**get_plotly_theme(t), showlegend=spec.kind in ("doughnut", "pie"), height=300)
        if spec.tick_suffix:
            if spec.kind == "hbar":
                fig.update_xaxes(ticksuffix=spec.tick_suffix)
            else:
                fig.update_yaxes(ticksuffix=spec.tick_suffix)
        if spec.axis_max is not None:
            fig.update_xaxes(range=[0, spec.axis_max])
        if spec.kind == "doughnut":
            fig.update_layout(legend={"orientation": "h", "y": -0.1})
        return fig

    def update_chart(self, name: str, values: Sequence[float]) -> bool:
        """Replace the chart's numeric data and bump its revision."""
        fig = self._charts.get(name)
        if fig is None:
            return False
        data = list(values)
        kind = self.specs[name].kind
        with fig.batch_update():
            if kind in ("doughnut", "pie"):
                fig.data[0].values = data
            elif kind == "hbar":
                fig.data[0].x = data
            else:
                fig.data[0].y = data
            self._revisions[name] = self._revisions.get(name, 0) + 1
            fig.layout.datarevision = self._revisions[name]
        logger.debug(f"Chart '{name}' updated with {len(data)} values")
        return True

    def draw(self, name: str, page: Page) -> bool:
        fig = self._charts.get(name)
        spec = self.specs.get(name)
        if fig is None or spec is None or spec.mount_id is None:
            return False
        mount = page.mount(spec.mount_id)
        if mount is None:
            return False
        mount.replace(fig)
        return True

    def draw_all(self, page: Page) -> int:
        return sum(1 for name in self._charts if self.draw(name, page))
