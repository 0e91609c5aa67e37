import folium

from bda_dashboard.ui.content import MapView
from bda_dashboard.ui.maps import (
    HOVER_FILL_DELTA,
    MapRenderer,
    Shape,
    ShapeStyle,
    base_style,
    hover_style,
)
from bda_dashboard.ui.page import Page


def _page():
    page = Page()
    page.add_section("master-plan", mount_ids=["map"])
    page.add_section("layouts", mount_ids=["layoutsMap"])
    return page


def _square(offset=0.0):
    return Shape.polygon([[(12.9 + offset, 77.5), (13.0 + offset, 77.5), (13.0 + offset, 77.6)]])


class TestLayerGroups:
    def test_set_before_initialize_is_noop(self):
        maps = MapRenderer()
        assert maps.set_layer_group("overview", "corporations", [_square()]) is False
        assert maps.shapes("overview", "corporations") == []

    def test_second_set_replaces_first(self):
        """Only the shapes from the latest call remain."""
        maps = MapRenderer()
        maps.initialize("overview")
        first = [_square(), _square(0.1)]
        second = [_square(0.2)]
        maps.set_layer_group("overview", "corporations", first)
        maps.set_layer_group("overview", "corporations", second)
        assert maps.shapes("overview", "corporations") == second

    def test_groups_and_instances_are_independent(self):
        maps = MapRenderer()
        maps.initialize("overview")
        maps.initialize("layouts")
        maps.set_layer_group("overview", "jurisdiction", [_square()])
        maps.set_layer_group("layouts", "jurisdiction", [_square(), _square()])
        maps.set_layer_group("overview", "corporations", [])
        assert len(maps.shapes("overview", "jurisdiction")) == 1
        assert len(maps.shapes("layouts", "jurisdiction")) == 2
        assert maps.shapes("overview", "corporations") == []


class TestReadiness:
    def test_ready_hooks_run_on_initialize(self):
        maps = MapRenderer()
        calls = []
        maps.on_ready("layouts", lambda: calls.append(maps.is_initialized("layouts")))
        assert not maps.is_initialized("layouts")
        maps.initialize("layouts")
        assert calls == [True]

    def test_failing_hook_is_logged(self, caplog):
        maps = MapRenderer()

        def broken():
            raise RuntimeError("boom")

        maps.on_ready("overview", broken)
        maps.initialize("overview")
        assert maps.is_initialized("overview")
        assert "ready hook failed" in caplog.text

    def test_invalidate_size_bumps_revision(self):
        maps = MapRenderer()
        maps.invalidate_size("overview")
        maps.initialize("overview")
        maps.invalidate_size("overview")
        assert maps.instance("overview").size_revision == 1


class TestStyles:
    def test_hover_raises_fill_and_weight(self):
        style = ShapeStyle(color="#aa0000", weight=2, fill_opacity=0.2, dash_array="4 4")
        resting = base_style(style)
        hover = hover_style(style)
        assert resting == {"color": "#aa0000", "weight": 2, "fillOpacity": 0.2,
                           "fillColor": "#aa0000", "dashArray": "4 4"}
        assert hover["fillOpacity"] == 0.2 + HOVER_FILL_DELTA
        assert hover["weight"] == 3

    def test_hover_fill_capped(self):
        assert hover_style(ShapeStyle(fill_opacity=0.95))["fillOpacity"] == 1.0


class TestFeatures:
    def test_polygon_rings_closed_and_lon_lat(self):
        feature = _square().to_feature()
        ring = feature["geometry"]["coordinates"][0][0]
        assert feature["geometry"]["type"] == "MultiPolygon"
        assert ring[0] == [77.5, 12.9]
        assert ring[0] == ring[-1]

    def test_rectangle_and_circle(self):
        rect = Shape.rectangle((12.7, 77.3), (13.1, 77.8)).to_feature()
        assert rect["geometry"]["coordinates"][0][2] == [77.8, 13.1]
        point = Shape.circle((12.9, 77.5)).to_feature()
        assert point["geometry"] == {"type": "Point", "coordinates": [77.5, 12.9]}


class TestDisplay:
    def test_to_folium_has_group_per_layer(self):
        maps = MapRenderer()
        maps.initialize("overview")
        maps.set_layer_group("overview", "jurisdiction", [_square()])
        maps.set_layer_group("overview", "markers", [Shape.circle((12.9, 77.5), popup="<b>x</b>")])
        fmap = maps.to_folium("overview")

        assert isinstance(fmap, folium.Map)
        groups = [c for c in fmap._children.values() if isinstance(c, folium.FeatureGroup)]
        assert sorted(g.layer_name for g in groups) == ["jurisdiction", "markers"]

    def test_draw_needs_instance_and_mount(self):
        maps = MapRenderer()
        page = _page()
        assert maps.draw("overview", page) is False

        maps.initialize("overview")
        assert maps.draw("overview", page) is True
        content = page.mount("map").content
        assert isinstance(content, MapView)
        assert content.instance_id == "overview"

        page.remove_mount("layoutsMap")
        maps.initialize("layouts")
        assert maps.draw("layouts", page) is False
