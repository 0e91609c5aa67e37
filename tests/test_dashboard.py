import asyncio

from bda_dashboard.config import DashboardConfig
from bda_dashboard.core.filters import LayoutPredicate
from bda_dashboard.core.sources import SourceId
from bda_dashboard.core.store import SourceStatus
from bda_dashboard.ui.content import MapView
from bda_dashboard.ui.dashboard import Dashboard

from conftest import PAYLOADS, write_data


class TestStartup:
    def test_start_loads_everything(self, config):
        dashboard = Dashboard(config)
        statuses = asyncio.run(dashboard.start())

        assert set(statuses.values()) == {SourceStatus.LOADED}
        assert dashboard.state.started
        assert dashboard.state.nav.active_section == "overview"
        assert dashboard.page.mount("overviewStats").content.items["Approved layouts"] == 4
        assert dashboard.charts.values("decade") == [1, 2, 3, 4, 5, 6]
        assert len(dashboard.maps.shapes("overview", "corporations")) == 2
        assert dashboard.maps.shapes("overview", "city-bounds")

    def test_default_section_from_config(self, data_dir):
        dashboard = Dashboard(DashboardConfig(data_base_path=str(data_dir), default_section="sources"))
        asyncio.run(dashboard.start())
        assert dashboard.state.nav.active_section == "sources"
        assert dashboard.page.section("sources").hidden is False


class TestMapRaces:
    def test_data_before_map(self, config):
        """Layers appear when the map initializes after the data arrived."""
        dashboard = Dashboard(config)
        asyncio.run(dashboard.loader.load_all())
        assert dashboard.maps.shapes("layouts", "boundaries") == []

        dashboard.initialize_maps()
        assert len(dashboard.maps.shapes("layouts", "boundaries")) == 2
        assert len(dashboard.maps.shapes("layouts", "markers")) == 2
        assert len(dashboard.maps.shapes("overview", "jurisdiction")) == 1

    def test_map_before_data(self, config):
        """Layers appear when the data arrives after the map initialized."""
        dashboard = Dashboard(config)
        dashboard.initialize_maps()
        assert dashboard.maps.shapes("overview", "corporations") == []

        asyncio.run(dashboard.loader.load_all())
        assert len(dashboard.maps.shapes("layouts", "boundaries")) == 2
        assert len(dashboard.maps.shapes("overview", "corporations")) == 2

    def test_metadata_after_corporations_recolours(self, config):
        dashboard = Dashboard(config)
        dashboard.initialize_maps()
        asyncio.run(dashboard.loader.load(SourceId.CORPORATION_BOUNDARIES))
        assert dashboard.maps.shapes("overview", "corporations")[0].style.color == "#8b6f47"

        asyncio.run(dashboard.loader.load(SourceId.ADMIN_BOUNDARIES))
        assert dashboard.maps.shapes("overview", "corporations")[0].style.color == "#aa0000"


class TestFailures:
    def test_failed_source_leaves_section_empty(self, tmp_path):
        """Other sections keep working when one source fails."""
        payloads = {k: v for k, v in PAYLOADS.items() if k != "departments.json"}
        dashboard = Dashboard(DashboardConfig(data_base_path=str(write_data(tmp_path, payloads))))
        dashboard.open("departments")
        statuses = asyncio.run(dashboard.start())

        assert statuses[SourceId.DEPARTMENTS] is SourceStatus.FAILED
        dashboard.navigate("departments")
        assert dashboard.page.mount("departmentCardsContainer").content is None

        dashboard.navigate("sources")
        assert dashboard.page.mount("sourceCitations").content is not None

    def test_nothing_loads(self, tmp_path):
        dashboard = Dashboard(DashboardConfig(data_base_path=str(tmp_path / "missing")))
        statuses = asyncio.run(dashboard.start())
        assert set(statuses.values()) == {SourceStatus.FAILED}
        assert dashboard.export_layouts() is None
        assert dashboard.export_sources() is None
        assert dashboard.filter_options() == {"taluk": [], "use_type": []}


class TestInteraction:
    def _started(self, config):
        dashboard = Dashboard(config)
        asyncio.run(dashboard.start())
        return dashboard

    def test_navigate_to_map_section_redraws(self, config):
        dashboard = self._started(config)
        dashboard.navigate("layouts")
        content = dashboard.page.mount("layoutsMap").content
        assert isinstance(content, MapView)
        assert content.size_revision == 1
        assert dashboard.state.nav.active_section == "layouts"

    def test_set_filter_rerenders_table(self, config):
        dashboard = self._started(config)
        dashboard.set_filter(LayoutPredicate(use_type="Industrial"))
        frame = dashboard.page.mount("layoutsTableBody").content
        assert list(frame["Layout Name"]) == ["Peenya Industrial Estate"]

        dashboard.set_filter(LayoutPredicate())
        assert len(dashboard.page.mount("layoutsTableBody").content) == 4

    def test_typed_year_must_match_exactly(self, config):
        dashboard = self._started(config)
        dashboard.set_filter(LayoutPredicate(year="201"))
        assert dashboard.page.mount("layoutCount").content.value == "0"
        dashboard.set_filter(LayoutPredicate(year="2019"))
        assert dashboard.page.mount("layoutCount").content.value == "2"

    def test_toggle_plan(self, config):
        dashboard = self._started(config)
        assert dashboard.page.plan_controls["2031"].active
        assert dashboard.toggle_plan("2015")
        assert dashboard.state.plan_version == "2015"
        assert dashboard.page.plan_controls["2015"].active
        assert not dashboard.page.plan_controls["2031"].active
        assert list(dashboard.page.mount("districtList").content["District"]) == ["Core Area"]

        assert dashboard.toggle_plan("1999") is False
        assert dashboard.state.plan_version == "2015"

    def test_exports(self, config):
        dashboard = self._started(config)
        layouts = dashboard.export_layouts()
        assert layouts.filename == "bda-layouts.csv"
        assert layouts.data.split("\n")[0].startswith("id,name,village,taluk")
        assert len(layouts.data.split("\n")) == 5
        assert dashboard.export_sources().filename == "bda-data-sources.json"

    def test_replay_redraws_visible_section(self, config):
        dashboard = self._started(config)
        dashboard.navigate("sources")
        mount = dashboard.page.mount("sourceCitations")
        before = mount.revision
        dashboard.replay()
        assert mount.revision == before + 1

    def test_refresh(self, config, data_dir):
        dashboard = self._started(config)
        (data_dir / "sources.json").write_text('{"categories": []}', encoding="utf-8")
        asyncio.run(dashboard.refresh())
        assert dashboard.state.store.payload(SourceId.SOURCES) == {"categories": []}
