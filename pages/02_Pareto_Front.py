import math
from dataclasses import replace

import streamlit as st

from frontend.ui.charts import build_parallel_figure, build_pareto_3d_figure, build_pareto_chart
from frontend.ui.rendering import render_formatted_dataframe, render_view
from services.record_store import column, merge_tagged
from services.views import build_parallel_dimensions, build_pareto_3d, build_pareto_scatter
from utils.catalog import LOCATION_FIELD, LOCATION_LABELS, LOCATION_ORDER, PARETO_COLUMNS, RESOURCE_SCHEMAS, pareto_resource
from utils.errors import LoadError
from utils.filters import describe_predicates, distinct_values, filter_records
from utils.records import numeric_values
from utils.ui_layout import init_page_layout
from utils.ui_state import (
    ALL_LOCATIONS,
    ALL_TILTS,
    get_pareto_filter_state,
    load_resources,
    location_options,
    set_pareto_filter_state,
)

render_layout = init_page_layout(
    page_title="Pareto front",
    main_title="NSGA-II Pareto front",
    description="Trade-off between grid independence, NPV, and ZEB ratio for Porto and Berlin designs.",
)
render_layout()

try:
    pareto = load_resources(
        {location: pareto_resource(location) for location in LOCATION_ORDER},
        RESOURCE_SCHEMAS["pareto"],
    )
except LoadError as exc:
    st.warning(f"Pareto results are unavailable: {exc}", icon="⚠️")
    st.stop()

designs = merge_tagged(pareto, LOCATION_FIELD)
battery_values = [v for v in numeric_values(designs, "Battery_kWh") if not math.isnan(v)]
max_battery = float(math.ceil(max(battery_values))) if battery_values else 0.0
state = get_pareto_filter_state(max_battery)

st.subheader("2D Pareto scatter")
filter_cols = st.columns(3)
with filter_cols[0]:
    location = st.radio(
        "Location",
        location_options(),
        index=location_options().index(state.location),
        format_func=lambda key: "Both" if key == ALL_LOCATIONS else LOCATION_LABELS[key],
        horizontal=True,
    )
with filter_cols[1]:
    battery_min = st.slider("Battery min (kWh)", 0.0, max(max_battery, 1.0), float(state.battery_min))
    battery_max = st.slider("Battery max (kWh)", 0.0, max(max_battery, 1.0), float(state.battery_max))
with filter_cols[2]:
    tilt_options = [ALL_TILTS, *distinct_values(designs, "Tilt")]
    tilt = st.selectbox(
        "Tilt",
        tilt_options,
        index=tilt_options.index(state.tilt) if state.tilt in tilt_options else 0,
        format_func=lambda t: "All" if t == ALL_TILTS else f"{t:g}°",
    )

moved = "min" if battery_min != state.battery_min else "max"
state = state.with_battery_range(battery_min, battery_max, moved)
state = replace(state, location=location, tilt=tilt)
set_pareto_filter_state(state)
st.caption(f"Battery range: {state.battery_min:g} – {state.battery_max:g} kWh")

predicates = state.to_predicates()
active = describe_predicates(predicates)
if active:
    st.caption("Filters: " + "; ".join(active))

render_view(
    "Pareto scatter",
    lambda: build_pareto_scatter(designs, predicates),
    lambda series: st.altair_chart(build_pareto_chart(series), use_container_width=True)
    if series
    else st.info("No designs match the current filters.", icon="ℹ️"),
)

with st.expander("Filtered designs"):
    render_formatted_dataframe(
        filter_records(designs, predicates)[[LOCATION_FIELD, *PARETO_COLUMNS]],
        {"Grid_Independence_%": "{:.1f}", "NPV_Eur": "{:,.0f}", "ZEB_Ratio": "{:.2f}"},
        hide_index=True,
    )

st.subheader("Parallel coordinates")
render_view(
    "Parallel coordinates",
    lambda: build_parallel_dimensions(designs),
    lambda dims: st.plotly_chart(
        build_parallel_figure(dims, column(designs, "NPV_Eur")), use_container_width=True
    ),
)

st.subheader("3D objective space")
render_view(
    "3D Pareto scatter",
    lambda: build_pareto_3d(designs),
    lambda series: st.plotly_chart(build_pareto_3d_figure(series), use_container_width=True),
)
