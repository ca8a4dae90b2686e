# app.py: PV + storage explorer
# Overview page: study summary, data status, and a cache reset for reloading CSVs.

import logging

import streamlit as st

from utils.catalog import SCENARIO_KEYS, SCENARIO_LABELS, comparison_resource
from utils.ui_layout import init_page_layout
from utils.ui_state import get_data_dir, get_record_store

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

render_layout = init_page_layout(
    page_title="PV + storage explorer",
    main_title="PV + storage techno-economic explorer",
    description="Interactive charts for the Porto vs Berlin solar-plus-battery study.",
)
render_layout()

st.markdown(
    """
### What is inside
- **Scenario comparison:** yearly grid independence, PV production, import/export, battery SOH and load for
  five scenarios, cumulative savings (NPV or nominal), and lazily loaded battery degradation with replacement
  events.
- **Pareto front:** NSGA-II designs for Porto and Berlin, filterable by location, battery size, and tilt, plus
  parallel coordinates and a 3D view of the objective space.
- **PV orientation:** azimuth/slope grid search as a heatmap and 3D surface with the optimum marked.

All values (NPV, degradation, grid independence) are pre-computed in the CSV files; the explorer only reshapes
and filters them.
    """
)

data_dir = get_data_dir()
st.markdown("### Expected files")
expected = [comparison_resource(key, "yearly_summary") for key in SCENARIO_KEYS]
status_rows = [
    {
        "Scenario": SCENARIO_LABELS[key],
        "Yearly summary": "✅" if (data_dir / resource).exists() else "missing",
    }
    for key, resource in zip(SCENARIO_KEYS, expected)
]
st.dataframe(status_rows, use_container_width=True, hide_index=True)

if st.button("Reload data", help="Clear the in-memory cache so the next view re-reads every CSV."):
    get_record_store().invalidate()
    st.success("Cache cleared. Charts will re-read their CSV files on the next view.")
