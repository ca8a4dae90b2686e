import pandas as pd

from frontend.ui.charts import (
    build_degradation_chart,
    build_line_chart,
    build_orientation_heatmap,
    build_orientation_surface,
    build_parallel_figure,
    build_pareto_3d_figure,
    build_pareto_chart,
)
from services.record_store import merge_tagged
from services.views import (
    ChartSeries,
    build_degradation_view,
    build_orientation_view,
    build_parallel_dimensions,
    build_pareto_3d,
    build_pareto_scatter,
)


def _designs() -> pd.DataFrame:
    frame = pd.DataFrame(
        {
            "Modules": [10, 12],
            "Battery_kWh": [4.0, 9.0],
            "Tilt": [20.0, 35.0],
            "Azimuth": [0.0, 5.0],
            "Grid_Independence_%": [50.0, 61.0],
            "NPV_Eur": [1000.0, 1500.0],
            "ZEB_Ratio": [0.7, 0.9],
        }
    )
    return merge_tagged({"porto": frame, "berlin": frame}, "_location")


def test_line_chart_layers_zero_rule():
    series = [ChartSeries(name="Porto", key="porto", x=[1, 2], y=[-10.0, 5.0])]

    spec = build_line_chart(series, "Savings (EUR)", zero_rule=True).to_dict()

    assert len(spec["layer"]) == 2


def test_degradation_chart_includes_event_rules():
    soh = [90.0] * 20 + [100.0] * 20
    view = build_degradation_view({"porto": pd.DataFrame({"SOH": soh})}, stride=10, total_span=4.0)

    spec = build_degradation_chart(view).to_dict()

    assert len(view.events) == 1
    assert len(spec["layer"]) == 3


def test_heatmap_marks_optimum():
    grid = pd.DataFrame({"Azimuth": [0, 10, 0], "Slope": [20, 20, 30], "Metric": [1.0, 3.0, 2.0]})
    view = build_orientation_view(grid)

    spec = build_orientation_heatmap(view).to_dict()

    assert len(spec["layer"]) == 2


def test_pareto_chart_handles_empty_series():
    assert build_pareto_chart([]).to_dict()["layer"]
    assert len(build_pareto_chart(build_pareto_scatter(_designs())).to_dict()["layer"]) == 2


def test_plotly_figures_carry_one_trace_per_series():
    designs = _designs()

    surface = build_orientation_surface(
        build_orientation_view(pd.DataFrame({"Azimuth": [0, 10], "Slope": [20, 20], "Metric": [1.0, 2.0]}))
    )
    scatter3d = build_pareto_3d_figure(build_pareto_3d(designs))
    parcoords = build_parallel_figure(build_parallel_dimensions(designs), designs["NPV_Eur"].tolist())

    assert surface.data[0].type == "surface"
    assert [t.name for t in scatter3d.data] == ["Porto", "Berlin"]
    assert list(parcoords.data[0].dimensions[0].ticktext) == ["Porto", "Berlin"]
