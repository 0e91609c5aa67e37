"""
BDA Planning Dashboard: App

Sets up the page, keeps one Dashboard per session, draws the navigation
and binds the visible section's mounts before loading or replaying it.

Run with: streamlit run bda_dashboard/ui/app.py
"""

from __future__ import annotations

import asyncio
import logging

import streamlit as st

from bda_dashboard.config import DashboardConfig, configure_logging
from bda_dashboard.core.filters import LayoutPredicate
from bda_dashboard.core.state import PLAN_VERSIONS
from bda_dashboard.ui.dashboard import Dashboard
from bda_dashboard.ui.surface import Surface
from bda_dashboard.ui.theme import EARTH_THEME, generate_css

logger = logging.getLogger("bda.app")


def run_async(coro):
    """Run an async coroutine from synchronous Streamlit code.

    Creates a fresh event loop each time so that HTTP clients created
    inside the coroutine live and die within the same loop.
    """
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def _get_dashboard() -> Dashboard:
    if "dashboard" not in st.session_state:
        config = DashboardConfig.from_env()
        configure_logging(config.log_level)
        st.session_state.dashboard = Dashboard(config)
        logger.info(f"New session, data from {config.data_base_path}")
    return st.session_state.dashboard


def main():
    """Run the dashboard."""
    st.set_page_config(
        page_title="BDA Planning Dashboard",
        page_icon="🏙️",
        layout="wide",
        initial_sidebar_state="collapsed",
    )
    st.markdown(generate_css(EARTH_THEME), unsafe_allow_html=True)

    dashboard = _get_dashboard()
    if dashboard.state.nav.active_section is None:
        dashboard.open(dashboard.config.default_section)

    st.markdown("""
    <div class="bda-header">
        <h1>Bangalore Development Authority</h1>
        <p>Layouts, master plan, departments and economy at a glance</p>
    </div>
    """, unsafe_allow_html=True)

    _render_nav(dashboard)
    _render_sidebar(dashboard)

    surface = Surface(dashboard.page, EARTH_THEME)
    section = dashboard.state.nav.active_section
    layout = SECTION_LAYOUTS.get(section)
    if layout is not None:
        layout(dashboard, surface)

    if not dashboard.state.started:
        with st.spinner("Loading data..."):
            run_async(dashboard.start())
    else:
        dashboard.replay()
    surface.paint()


# =============================================================================
# Navigation
# =============================================================================

def _render_nav(dashboard: Dashboard):
    """Full-width nav: standalone sections plus one dropdown per category."""
    registry = dashboard.registry
    controls = dashboard.page.controls("full")
    headers = [c for c in controls if c.section is None or c.category is None]
    cols = st.columns(len(headers))
    for col, control in zip(cols, headers):
        with col:
            if control.section is not None:
                st.button(
                    control.label,
                    key=f"nav-full-{control.section}",
                    type="primary" if control.active else "secondary",
                    use_container_width=True,
                    on_click=dashboard.navigate,
                    args=(control.section,),
                )
                continue
            is_open = dashboard.nav.is_open(control.category)
            st.button(
                f"{control.label} {'▴' if is_open else '▾'}",
                key=f"nav-full-cat-{control.category}",
                type="primary" if control.active else "secondary",
                use_container_width=True,
                on_click=dashboard.nav.toggle_category,
                args=(control.category,),
            )
            if is_open:
                for sub in controls:
                    if sub.category == control.category and sub.section is not None:
                        st.button(
                            sub.label,
                            key=f"nav-full-{sub.section}",
                            type="primary" if sub.active else "tertiary",
                            use_container_width=True,
                            on_click=dashboard.navigate,
                            args=(sub.section, control.category),
                        )
    spec = registry.spec(dashboard.state.nav.active_section or "")
    if spec is not None:
        st.markdown(f'<div class="section-header">{spec.title}</div>', unsafe_allow_html=True)


def _render_sidebar(dashboard: Dashboard):
    """Condensed nav, source status and refresh."""
    with st.sidebar:
        st.markdown("### Sections")
        for control in dashboard.page.controls("condensed"):
            if control.section is None:
                st.caption(control.label)
                continue
            st.button(
                control.label,
                key=f"nav-condensed-{control.section}",
                type="primary" if control.active else "secondary",
                use_container_width=True,
                on_click=dashboard.navigate,
                args=(control.section,),
            )

        st.markdown("---")
        st.markdown("### Data")
        for source, status in dashboard.state.store.summary().items():
            st.caption(f"{source}: {status}")
        if st.button("Refresh data", key="refresh", use_container_width=True):
            with st.spinner("Refreshing..."):
                run_async(dashboard.refresh())


# =============================================================================
# Section layouts
# =============================================================================

def _layout_overview(dashboard: Dashboard, surface: Surface):
    surface.bind("overviewStats")
    left, right = st.columns(2)
    with left:
        surface.bind("decadeChart")
        surface.bind("populationChart")
    with right:
        surface.bind("useTypeChart")
        surface.bind("migrationChart")


def _apply_filters():
    predicate = LayoutPredicate(
        text=st.session_state.get("layoutSearch", "") or "",
        taluk=st.session_state.get("talukFilter", "") or "",
        use_type=st.session_state.get("useTypeFilter", "") or "",
        year=st.session_state.get("yearFilter", "") or "",
    )
    st.session_state.dashboard.set_filter(predicate)


def _layout_layouts(dashboard: Dashboard, surface: Surface):
    options = dashboard.filter_options()
    c1, c2, c3, c4, c5 = st.columns([3, 2, 2, 2, 1])
    with c1:
        st.text_input("Search", key="layoutSearch", placeholder="Layout name or village",
                      on_change=_apply_filters)
    with c2:
        st.selectbox("Taluk", [""] + options["taluk"], key="talukFilter", on_change=_apply_filters,
                     format_func=lambda v: v or "All taluks")
    with c3:
        st.selectbox("Use type", [""] + options["use_type"], key="useTypeFilter", on_change=_apply_filters,
                     format_func=lambda v: v or "All use types")
    with c4:
        st.text_input("Year", key="yearFilter", placeholder="e.g. 2015", on_change=_apply_filters)
    with c5:
        export = dashboard.export_layouts()
        st.download_button(
            "Export CSV",
            data=export.data if export else "",
            file_name=export.filename if export else "bda-layouts.csv",
            mime="text/csv",
            disabled=export is None,
            key="export-layouts",
        )

    count_col, _ = st.columns([1, 5])
    with count_col:
        surface.bind("layoutCount")
    surface.bind("layoutsTableBody")
    surface.bind("layoutsMap")


def _layout_master_plan(dashboard: Dashboard, surface: Surface):
    surface.bind("map")
    surface.bind("boundaryLegend")


def _layout_planning_districts(dashboard: Dashboard, surface: Surface):
    cols = st.columns(len(PLAN_VERSIONS) + 4)
    for col, version in zip(cols, PLAN_VERSIONS):
        control = dashboard.page.plan_controls[version]
        with col:
            st.button(
                control.label,
                key=f"plan-{version}",
                type="primary" if control.active else "secondary",
                on_click=dashboard.toggle_plan,
                args=(version,),
            )
    surface.bind("districtList")
    left, right = st.columns(2)
    with left:
        surface.bind("planComparison")
    with right:
        surface.bind("zoneSummary")


def _layout_departments(dashboard: Dashboard, surface: Surface):
    surface.bind("departmentCardsContainer")
    left, right = st.columns(2)
    with left:
        st.markdown("**Performance highlights**")
        surface.bind("performanceHighlights")
    with right:
        st.markdown("**Critical gaps**")
        surface.bind("criticalGaps")
    st.markdown("**Department analysis**")
    surface.bind("departmentAnalysisContainer")
    st.markdown("**Overall assessment**")
    surface.bind("complianceRating")
    surface.bind("complianceExplanation")
    surface.bind("recommendations")
    st.markdown("**Sources**")
    surface.bind("departmentSources")


def _layout_economic(dashboard: Dashboard, surface: Surface):
    left, right = st.columns([1, 2])
    with left:
        surface.bind("sectorsChart")
    with right:
        surface.bind("economicIndicators")
    surface.bind("economicProjects")


def _layout_auction(dashboard: Dashboard, surface: Surface):
    surface.bind("auctionSummary")
    surface.bind("auctionList")


def _layout_infrastructure(dashboard: Dashboard, surface: Surface):
    surface.bind("infrastructureProjects")
    surface.bind("infrastructureFunctions")


def _layout_sources(dashboard: Dashboard, surface: Surface):
    export = dashboard.export_sources()
    st.download_button(
        "Export JSON",
        data=export.data if export else "",
        file_name=export.filename if export else "bda-data-sources.json",
        mime="application/json",
        disabled=export is None,
        key="export-sources",
    )
    surface.bind("sourceCitations")


SECTION_LAYOUTS = {
    "overview": _layout_overview,
    "layouts": _layout_layouts,
    "master-plan": _layout_master_plan,
    "planning-districts": _layout_planning_districts,
    "departments": _layout_departments,
    "economic-development": _layout_economic,
    "e-auction": _layout_auction,
    "infrastructure": _layout_infrastructure,
    "sources": _layout_sources,
}


if __name__ == "__main__":
    main()
