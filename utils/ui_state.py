"""Shared UI helpers for session-scoped data and configuration."""

from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Union

import pandas as pd
import streamlit as st

from services.record_store import RecordStore
from utils.catalog import LOCATION_FIELD, LOCATION_ORDER, ResourceSchema
from utils.filters import MembershipPredicate, NO_RESTRICTION, RangePredicate, RecordPredicate, clamp_range

DATA_DIR_ENV_VAR = "PVX_DATA_DIR"
PARETO_FILTER_KEY = "pareto_filter_state"
DEGRADATION_LOADED_KEY = "degradation_loaded"

ALL_LOCATIONS = "both"
ALL_TILTS = "all"


def get_base_dir() -> Path:
    return Path(__file__).resolve().parent.parent


def get_data_dir() -> Path:
    """Return the CSV data directory.

    The lookup order is the ``PVX_DATA_DIR`` environment variable, then the
    ``data`` folder at the repository root.
    """

    override = os.environ.get(DATA_DIR_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return get_base_dir() / "data"


@st.cache_resource
def get_record_store() -> RecordStore:
    """Process-wide record store so every page and rerun shares one load cache."""

    return RecordStore(get_data_dir())


def load_resources(
    entries: Mapping[str, str],
    schema: Optional[ResourceSchema] = None,
    store: Optional[RecordStore] = None,
) -> Dict[str, pd.DataFrame]:
    """Load several resources concurrently from a synchronous Streamlit script."""

    store = store or get_record_store()
    return asyncio.run(store.load_multiple(entries, schema))


@dataclass(frozen=True)
class ParetoFilterState:
    """Current Pareto explorer filters as chosen in the sidebar widgets."""

    battery_min: float
    battery_max: float
    location: str = ALL_LOCATIONS
    tilt: Union[str, float] = ALL_TILTS

    def to_predicates(self) -> List[RecordPredicate]:
        locations = NO_RESTRICTION if self.location == ALL_LOCATIONS else frozenset({self.location})
        tilts = NO_RESTRICTION if self.tilt == ALL_TILTS else frozenset({float(self.tilt)})
        return [
            MembershipPredicate(LOCATION_FIELD, locations),
            RangePredicate("Battery_kWh", self.battery_min, self.battery_max),
            MembershipPredicate("Tilt", tilts),
        ]

    def with_battery_range(self, minimum: float, maximum: float, moved: str) -> "ParetoFilterState":
        """Apply a slider move, pulling the other handle along if they cross."""

        low, high = clamp_range(float(minimum), float(maximum), moved)
        return replace(self, battery_min=low, battery_max=high)


def get_pareto_filter_state(max_battery: float) -> ParetoFilterState:
    """Return the session's filter state, seeding it with the unrestricted range."""

    state = st.session_state.get(PARETO_FILTER_KEY)
    if state is None:
        state = ParetoFilterState(battery_min=0.0, battery_max=float(max_battery))
        st.session_state[PARETO_FILTER_KEY] = state
    return state


def set_pareto_filter_state(state: ParetoFilterState) -> None:
    st.session_state[PARETO_FILTER_KEY] = state


def location_options() -> List[str]:
    return [ALL_LOCATIONS, *LOCATION_ORDER]
