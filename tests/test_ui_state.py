from __future__ import annotations

import pandas as pd

from services.record_store import RecordStore
from utils.filters import filter_records
from utils.ui_state import (
    ALL_LOCATIONS,
    DATA_DIR_ENV_VAR,
    ParetoFilterState,
    get_base_dir,
    get_data_dir,
    load_resources,
    location_options,
)


def _designs() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "_location": ["porto", "berlin", "porto"],
            "Battery_kWh": [2.0, 6.0, 11.0],
            "Tilt": [20, 30, 30],
        }
    )


def test_default_state_passes_every_design() -> None:
    state = ParetoFilterState(battery_min=0.0, battery_max=11.0)

    result = filter_records(_designs(), state.to_predicates())

    assert len(result) == 3


def test_state_filters_location_tilt_and_battery() -> None:
    state = ParetoFilterState(battery_min=0.0, battery_max=10.0, location="porto", tilt="30")

    assert filter_records(_designs(), state.to_predicates()).empty

    state = ParetoFilterState(battery_min=0.0, battery_max=12.0, location="porto", tilt=30.0)
    assert filter_records(_designs(), state.to_predicates()).index.tolist() == [2]


def test_crossed_slider_handles_are_corrected() -> None:
    state = ParetoFilterState(battery_min=0.0, battery_max=5.0)

    moved_min = state.with_battery_range(8.0, 5.0, "min")
    moved_max = state.with_battery_range(3.0, 1.0, "max")

    assert (moved_min.battery_min, moved_min.battery_max) == (8.0, 8.0)
    assert (moved_max.battery_min, moved_max.battery_max) == (1.0, 1.0)


def test_location_options_lead_with_both() -> None:
    assert location_options() == [ALL_LOCATIONS, "porto", "berlin"]


def test_data_dir_env_override(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv(DATA_DIR_ENV_VAR, str(tmp_path))
    assert get_data_dir() == tmp_path

    monkeypatch.delenv(DATA_DIR_ENV_VAR)
    assert get_data_dir() == get_base_dir() / "data"


def test_load_resources_runs_concurrent_loads(tmp_path) -> None:
    (tmp_path / "a.csv").write_text("v\n1\n", encoding="utf-8")
    (tmp_path / "b.csv").write_text("v\n2\n", encoding="utf-8")
    store = RecordStore(tmp_path)

    loaded = load_resources({"a": "a.csv", "b": "b.csv"}, store=store)

    assert loaded["a"]["v"].tolist() == [1]
    assert loaded["b"]["v"].tolist() == [2]
    assert store.is_cached("a.csv") and store.is_cached("b.csv")
