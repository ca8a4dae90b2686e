"""Chart builders for the explorer views.

Two-dimensional charts use Altair; the surface, 3D scatter, and parallel
coordinates use Plotly since Altair has no equivalent marks.
"""

from typing import List, Optional, Sequence, Tuple

import altair as alt
import pandas as pd
import plotly.graph_objects as go

from services.views import ChartSeries, DegradationView, OrientationView, scenario_colors, series_frame
from utils.catalog import COLORS, END_OF_LIFE_SOH_PCT, PROJECT_YEARS
from utils.dimensions import EncodedDimension

GRID_COLOR = "#eeeeee"
SOH_DOMAIN = (65.0, 102.0)
LOCATION_SHAPES = {"porto": "circle", "berlin": "diamond"}
LOCATION_SCALES = {
    "porto": ["#FFF3E0", "#FB8C00", "#E65100"],
    "berlin": ["#E3F2FD", "#42A5F5", "#0D47A1"],
}


def _color_scale(series: Sequence[ChartSeries]) -> alt.Scale:
    return alt.Scale(domain=[s.name for s in series], range=scenario_colors(series))


def build_line_chart(
    series: Sequence[ChartSeries],
    y_title: str,
    *,
    y_format: str = ",.1f",
    x_title: str = "Year",
    x_domain: Optional[Tuple[float, float]] = (0.5, 20.5),
    zero_rule: bool = False,
) -> alt.LayerChart:
    """Lines with markers, one per scenario, optionally with a dashed zero rule."""

    source = series_frame(series)
    x_scale = alt.Scale(domain=list(x_domain)) if x_domain else alt.Undefined
    lines = (
        alt.Chart(source)
        .mark_line(point=alt.OverlayMarkDef(size=30), strokeWidth=2)
        .encode(
            x=alt.X("x:Q", title=x_title, scale=x_scale, axis=alt.Axis(tickMinStep=1, gridColor=GRID_COLOR)),
            y=alt.Y("y:Q", title=y_title, axis=alt.Axis(gridColor=GRID_COLOR)),
            color=alt.Color("series:N", scale=_color_scale(series), title=None, legend=alt.Legend(orient="bottom")),
            tooltip=[
                alt.Tooltip("series:N", title="Scenario"),
                alt.Tooltip("x:Q", title=x_title),
                alt.Tooltip("y:Q", title=y_title, format=y_format),
            ],
        )
    )
    layers: List[alt.Chart] = [lines]
    if zero_rule:
        layers.insert(
            0,
            alt.Chart(pd.DataFrame({"zero": [0.0]}))
            .mark_rule(color="#999999", strokeDash=[6, 4], strokeWidth=1.5)
            .encode(y="zero:Q"),
        )
    return alt.layer(*layers).properties(height=420)


def build_degradation_chart(view: DegradationView) -> alt.LayerChart:
    """SOH traces with the end-of-life threshold and replacement markers."""

    source = series_frame(view.series)
    y_scale = alt.Scale(domain=list(SOH_DOMAIN))
    lines = (
        alt.Chart(source)
        .mark_line(strokeWidth=1.5, clip=True)
        .encode(
            x=alt.X("x:Q", title="Year", scale=alt.Scale(domain=[0, PROJECT_YEARS]), axis=alt.Axis(tickMinStep=1)),
            y=alt.Y("y:Q", title="State of Health (%)", scale=y_scale),
            color=alt.Color("series:N", scale=_color_scale(view.series), title=None, legend=alt.Legend(orient="bottom")),
            tooltip=[
                alt.Tooltip("series:N", title="Scenario"),
                alt.Tooltip("x:Q", title="Year", format=".1f"),
                alt.Tooltip("y:Q", title="SOH (%)", format=".1f"),
            ],
        )
    )
    eol_rule = (
        alt.Chart(pd.DataFrame({"eol": [END_OF_LIFE_SOH_PCT]}))
        .mark_rule(color="#C62828", strokeDash=[6, 4], strokeWidth=1.5)
        .encode(y=alt.Y("eol:Q", scale=y_scale))
    )
    layers: List[alt.Chart] = [lines, eol_rule]

    if view.events:
        events_df = pd.DataFrame(
            {
                "year": [e.time for e in view.events],
                "scenario": [e.series for e in view.events],
                "color": [COLORS.get(e.series or "", "#888888") for e in view.events],
            }
        )
        layers.append(
            alt.Chart(events_df)
            .mark_rule(strokeDash=[2, 2], strokeWidth=1)
            .encode(
                x="year:Q",
                color=alt.Color("color:N", scale=None),
                tooltip=[alt.Tooltip("scenario:N", title="Replacement"), alt.Tooltip("year:Q", format=".1f")],
            )
        )
    return alt.layer(*layers).resolve_scale(color="independent").properties(height=420)


def build_orientation_heatmap(view: OrientationView, metric_title: str = "NPV (EUR)") -> alt.LayerChart:
    """Slope × azimuth heatmap with the optimal orientation marked."""

    source = view.pivot.to_long(row_name="slope", col_name="azimuth", value_name="metric")
    heatmap = (
        alt.Chart(source)
        .mark_rect()
        .encode(
            x=alt.X("azimuth:O", title="Azimuth (°)"),
            y=alt.Y("slope:O", title="Slope (°)", sort="descending"),
            color=alt.Color("metric:Q", title=metric_title, scale=alt.Scale(scheme="yelloworangered")),
            tooltip=[
                alt.Tooltip("azimuth:O", title="Azimuth (°)"),
                alt.Tooltip("slope:O", title="Slope (°)"),
                alt.Tooltip("metric:Q", title=metric_title, format=",.0f"),
            ],
        )
    )
    layers: List[alt.Chart] = [heatmap]
    optimum = view.optimum
    if optimum is not None and optimum.value is not None:
        best = pd.DataFrame(
            {
                "azimuth": [optimum.coordinates.get("Azimuth")],
                "slope": [optimum.coordinates.get("Slope")],
                "metric": [optimum.value],
            }
        )
        layers.append(
            alt.Chart(best)
            .mark_point(shape="diamond", size=220, filled=True, color="#ffffff", stroke="#333333", strokeWidth=2)
            .encode(x="azimuth:O", y=alt.Y("slope:O", sort="descending"), tooltip=[alt.Tooltip("metric:Q", title="Optimal", format=",.0f")])
        )
    return alt.layer(*layers).properties(height=500)


def build_pareto_chart(series: Sequence[ChartSeries]) -> alt.LayerChart:
    """Grid independence vs NPV, one layer per location colored by ZEB ratio."""

    layers: List[alt.Chart] = []
    for s in series:
        source = s.to_frame()
        layers.append(
            alt.Chart(source)
            .mark_point(filled=True, size=90, shape=LOCATION_SHAPES.get(s.key or "", "circle"), stroke=COLORS.get(s.key or "", "#333333"))
            .encode(
                x=alt.X("x:Q", title="Grid Independence (%)", scale=alt.Scale(zero=False)),
                y=alt.Y("y:Q", title="NPV (EUR)", scale=alt.Scale(zero=False)),
                color=alt.Color(
                    "color:Q",
                    title=f"ZEB Ratio ({s.name})",
                    scale=alt.Scale(range=LOCATION_SCALES.get(s.key or "", ["#dddddd", "#333333"])),
                ),
                tooltip=[
                    alt.Tooltip("series:N", title="Location"),
                    alt.Tooltip("x:Q", title="GI (%)", format=".1f"),
                    alt.Tooltip("y:Q", title="NPV (EUR)", format=",.0f"),
                    alt.Tooltip("color:Q", title="ZEB", format=".2f"),
                ],
            )
        )
    if not layers:
        return alt.layer(alt.Chart(pd.DataFrame({"x": [], "y": []})).mark_point()).properties(height=500)
    return alt.layer(*layers).resolve_scale(color="independent").properties(height=500)


def build_orientation_surface(view: OrientationView, metric_title: str = "NPV (EUR)") -> go.Figure:
    fig = go.Figure(
        go.Surface(
            x=view.pivot.col_axis,
            y=view.pivot.row_axis,
            z=view.pivot.matrix,
            colorscale="YlOrRd",
            colorbar=dict(title=metric_title),
            hovertemplate="Azimuth: %{x}°<br>Slope: %{y}°<br>NPV: %{z:,.0f} EUR<extra></extra>",
        )
    )
    fig.update_layout(
        height=550,
        margin=dict(l=0, r=0, t=10, b=10),
        scene=dict(
            xaxis_title="Azimuth (°)",
            yaxis_title="Slope (°)",
            zaxis_title=metric_title,
            camera=dict(eye=dict(x=1.3, y=-1.5, z=0.8)),
        ),
    )
    return fig


def build_pareto_3d_figure(series: Sequence[ChartSeries]) -> go.Figure:
    fig = go.Figure()
    for s in series:
        fig.add_trace(
            go.Scatter3d(
                x=s.x,
                y=s.y,
                z=s.z,
                text=s.text,
                name=s.name,
                mode="markers",
                marker=dict(size=5, color=COLORS.get(s.key or "", "#888888"), opacity=0.85),
                hovertemplate="GI: %{x:.1f}%<br>NPV: %{y:,.0f}<br>ZEB: %{z:.2f}<br>%{text}<extra>" + s.name + "</extra>",
            )
        )
    fig.update_layout(
        height=550,
        margin=dict(l=0, r=0, t=10, b=10),
        scene=dict(
            xaxis_title="Grid Independence (%)",
            yaxis_title="NPV (EUR)",
            zaxis_title="ZEB Ratio",
            camera=dict(eye=dict(x=1.5, y=1.5, z=0.8)),
        ),
    )
    return fig


def build_parallel_figure(dimensions: Sequence[EncodedDimension], color_values: Sequence[Optional[float]]) -> go.Figure:
    """Parallel coordinates; categorical dimensions carry their tick labels."""

    plotly_dims = []
    for dim in dimensions:
        entry = dict(label=dim.label, values=dim.values)
        if dim.is_categorical:
            entry.update(tickvals=dim.tickvals, ticktext=dim.ticktext)
        plotly_dims.append(entry)

    fig = go.Figure(
        go.Parcoords(
            line=dict(
                color=list(color_values),
                colorscale="Viridis",
                showscale=True,
                colorbar=dict(title="NPV (EUR)"),
            ),
            dimensions=plotly_dims,
        )
    )
    fig.update_layout(height=450, margin=dict(l=60, r=60, t=30, b=30))
    return fig
