import streamlit as st

from frontend.ui.charts import build_orientation_heatmap, build_orientation_surface
from frontend.ui.rendering import MetricSpec, render_metrics, render_view
from services.views import OrientationView, build_orientation_view
from utils.catalog import GRID_SEARCH_RESOURCE, RESOURCE_SCHEMAS
from utils.errors import LoadError
from utils.ui_layout import init_page_layout
from utils.ui_state import load_resources

render_layout = init_page_layout(
    page_title="PV orientation",
    main_title="PV orientation optimization",
    description="Grid search over panel azimuth and slope; the metric is project NPV in EUR.",
)
render_layout()

try:
    grid = load_resources({"grid": GRID_SEARCH_RESOURCE}, RESOURCE_SCHEMAS["grid_search"])["grid"]
except LoadError as exc:
    st.warning(f"Grid search results are unavailable: {exc}", icon="⚠️")
    st.stop()


def _degrees(value, spec: str) -> str:
    return "n/a" if value is None else f"{value:{spec}}°"


def _render_optimum(view: OrientationView) -> None:
    optimum = view.optimum
    if optimum is None or optimum.value is None:
        st.info("The grid search contains no metric values.", icon="ℹ️")
        return
    render_metrics(
        st.columns(3),
        [
            MetricSpec("Optimal azimuth", _degrees(optimum.coordinates.get("Azimuth"), "g")),
            MetricSpec("Optimal slope", _degrees(optimum.coordinates.get("Slope"), ".0f")),
            MetricSpec("NPV", f"{optimum.value:,.0f} EUR", caption="Best record in the sweep."),
        ],
    )


def _render_charts(view: OrientationView) -> None:
    _render_optimum(view)
    heat_col, surface_col = st.columns(2)
    with heat_col:
        st.markdown("**Heatmap**")
        st.altair_chart(build_orientation_heatmap(view), use_container_width=True)
    with surface_col:
        st.markdown("**3D surface**")
        st.plotly_chart(build_orientation_surface(view), use_container_width=True)


render_view("Orientation sweep", lambda: build_orientation_view(grid), _render_charts)
