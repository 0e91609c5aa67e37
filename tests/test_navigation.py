from bda_dashboard.core.sources import SourceId
from bda_dashboard.core.state import AppState
from bda_dashboard.ui.maps import MapRenderer
from bda_dashboard.ui.navigation import NavigationController
from bda_dashboard.ui.page import Page, Scheduler
from bda_dashboard.ui.registry import ViewRegistry


def _controller():
    state = AppState()
    registry = ViewRegistry()
    page = registry.build_page()
    maps = MapRenderer()
    scheduler = Scheduler()
    return NavigationController(state, page, registry, maps, scheduler)


def _active(page, variant):
    return sorted((c.section or c.category) for c in page.controls(variant) if c.active)


class TestShow:
    def test_exactly_one_section_visible(self):
        nav = _controller()
        nav.show("departments")
        visible = nav.page.visible_sections()
        assert [n.section_id for n in visible] == ["departments"]
        assert visible[0].dom_id == "departments-section"

    def test_category_resolved_from_membership(self):
        nav = _controller()
        nav.show("e-auction")
        assert nav.active_section == "e-auction"
        assert nav.active_category == "economy"

    def test_both_control_sets_in_sync(self):
        """Full-width and condensed controls show the same active state."""
        nav = _controller()
        nav.show("master-plan")
        for variant in Page.NAV_VARIANTS:
            assert _active(nav.page, variant) == ["master-plan", "planning"]

        nav.show("overview")
        for variant in Page.NAV_VARIANTS:
            assert _active(nav.page, variant) == ["overview"]
        assert nav.active_category is None

    def test_unknown_section_shows_nothing(self):
        nav = _controller()
        nav.show("overview")
        nav.show("does-not-exist")
        assert nav.page.visible_sections() == []
        assert nav.active_section is None
        assert _active(nav.page, "full") == []
        assert nav.scheduler.pending == 0

    def test_unknown_section_with_category_activates_nothing(self):
        nav = _controller()
        nav.show("master-plan")
        nav.show("does-not-exist", "planning")
        assert nav.active_category is None
        for variant in Page.NAV_VARIANTS:
            assert _active(nav.page, variant) == []


class TestDeferredWork:
    def test_map_section_schedules_resize(self):
        nav = _controller()
        nav.maps.initialize("layouts")
        nav.show("layouts")
        assert nav.maps.instance("layouts").size_revision == 0

        nav.scheduler.flush()
        assert nav.maps.instance("layouts").size_revision == 1

    def test_resize_is_collapsed(self):
        """Repeated transitions before a flush resize once."""
        nav = _controller()
        nav.maps.initialize("overview")
        nav.show("master-plan")
        nav.show("master-plan")
        nav.scheduler.flush()
        assert nav.maps.instance("overview").size_revision == 1

    def test_rerender_only_when_data_loaded(self):
        nav = _controller()
        calls = []
        nav.registry.register_renderer("sources", lambda: calls.append("sources"))

        nav.show("sources")
        nav.scheduler.flush()
        assert calls == []

        nav.state.store.mark_loaded(SourceId.SOURCES, {"categories": []})
        nav.show("sources")
        nav.scheduler.flush()
        assert calls == ["sources"]


def test_toggle_category_is_independent():
    nav = _controller()
    nav.show("overview")
    assert nav.toggle_category("planning") is True
    assert nav.is_open("planning")
    assert nav.active_section == "overview"
    assert nav.toggle_category("planning") is False
    assert not nav.is_open("economy")


def test_scheduler_absorbs_failures(caplog):
    scheduler = Scheduler()
    calls = []

    def broken():
        raise ValueError("bad")

    scheduler.defer(broken)
    scheduler.defer(lambda: calls.append(1), key="a")
    scheduler.defer(lambda: calls.append(2), key="a")
    assert scheduler.flush() == 2
    assert calls == [1]
    assert "failed" in caplog.text
