import streamlit as st

from frontend.ui.charts import build_degradation_chart, build_line_chart
from frontend.ui.rendering import render_view
from services.views import build_degradation_view, build_performance_series, build_savings_series
from utils.catalog import (
    END_OF_LIFE_SOH_PCT,
    PERFORMANCE_METRICS,
    RESOURCE_SCHEMAS,
    SAVINGS_METRICS,
    scenario_resources,
)
from utils.errors import LoadError
from utils.ui_layout import init_page_layout
from utils.ui_state import DEGRADATION_LOADED_KEY, load_resources

render_layout = init_page_layout(
    page_title="Scenario comparison",
    main_title="Porto vs Berlin scenario comparison",
    description="Yearly performance, cumulative savings, and battery degradation for the five study scenarios.",
)
render_layout()


def _load(kind: str, schema_key: str):
    return load_resources(scenario_resources(kind), RESOURCE_SCHEMAS[schema_key])


st.subheader("Performance")
metric_labels = [m.short_label for m in PERFORMANCE_METRICS]
metric_choice = st.radio("Metric", metric_labels, horizontal=True, key="performance_metric")
metric = PERFORMANCE_METRICS[metric_labels.index(metric_choice)]

summaries = None
try:
    summaries = _load("yearly_summary", "yearly_summary")
except LoadError as exc:
    st.warning(f"Yearly summaries are unavailable: {exc}", icon="⚠️")

if summaries is not None:
    render_view(
        "Performance chart",
        lambda: build_performance_series(summaries, metric.column),
        lambda series: st.altair_chart(
            build_line_chart(series, metric.label, y_format=",.1f"), use_container_width=True
        ),
    )

st.subheader("Economics / break-even")
use_npv = st.radio("Savings basis", ["NPV", "Nominal"], horizontal=True, key="savings_basis") == "NPV"
savings_metric = SAVINGS_METRICS[use_npv]

costs = None
try:
    costs = _load("cost_projection", "cost_projection")
except LoadError as exc:
    st.warning(f"Cost projections are unavailable: {exc}", icon="⚠️")

if costs is not None:
    render_view(
        "Savings chart",
        lambda: build_savings_series(costs, use_npv=use_npv),
        lambda series: st.altair_chart(
            build_line_chart(series, savings_metric.label, y_format=",.0f", zero_rule=True),
            use_container_width=True,
        ),
    )

st.subheader("Battery degradation")
st.caption(
    f"Daily samples of 15-minute state-of-health logs. Dotted rules mark battery replacements; "
    f"the dashed line is the {END_OF_LIFE_SOH_PCT:.0f}% end-of-life threshold."
)
st.session_state.setdefault(DEGRADATION_LOADED_KEY, False)
if not st.session_state[DEGRADATION_LOADED_KEY]:
    if st.button("Load degradation data", help="The degradation logs are large; load them on demand."):
        st.session_state[DEGRADATION_LOADED_KEY] = True

if st.session_state[DEGRADATION_LOADED_KEY]:
    degradation = None
    with st.spinner("Loading degradation data..."):
        try:
            degradation = _load("degradation_data", "degradation")
        except LoadError as exc:
            st.warning(f"Degradation data is unavailable: {exc}", icon="⚠️")

    if degradation is not None:
        view = render_view(
            "Degradation chart",
            lambda: build_degradation_view(degradation),
            lambda built: st.altair_chart(build_degradation_chart(built), use_container_width=True),
        )
        if view is not None and view.events:
            st.caption(f"{len(view.events)} replacement events detected across scenarios.")
