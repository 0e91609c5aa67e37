from bda_dashboard.ui.charts import CHART_SPECS, ChartRenderer
from bda_dashboard.ui.page import Page


def _renderer():
    charts = ChartRenderer()
    charts.create_all()
    return charts


def test_charts_start_with_static_values():
    charts = _renderer()
    assert charts.values("use_type") == [934, 51, 32]
    assert charts.values("migration") == [35, 25, 15, 12, 13]
    assert set(charts.specs) == {s.name for s in CHART_SPECS}


def test_update_replaces_data_only():
    """Fresh values rebind the trace; the figure object is reused."""
    charts = _renderer()
    fig = charts.figure("decade")
    labels = list(fig.data[0].x)

    assert charts.update_chart("decade", [1, 2, 3, 4, 5, 6])
    assert charts.figure("decade") is fig
    assert charts.values("decade") == [1, 2, 3, 4, 5, 6]
    assert list(fig.data[0].x) == labels
    assert charts.revision("decade") == 1
    assert fig.layout.datarevision == 1


def test_horizontal_bar_updates_x():
    charts = _renderer()
    charts.update_chart("migration", [10, 20, 30, 20, 20])
    assert list(charts.figure("migration").data[0].x) == [10, 20, 30, 20, 20]


def test_update_unknown_chart():
    assert _renderer().update_chart("nope", [1]) is False
    assert ChartRenderer().update_chart("decade", [1]) is False


def test_create_all_is_idempotent():
    charts = _renderer()
    fig = charts.figure("population")
    charts.create_all()
    assert charts.figure("population") is fig


def test_draw_into_page():
    page = Page()
    page.add_section("overview", mount_ids=["decadeChart", "useTypeChart"])
    charts = _renderer()
    assert charts.draw_all(page) == 2
    assert page.mount("decadeChart").content is charts.figure("decade")
    assert charts.draw("sectors", page) is False
