"""Scenario, metric, and resource metadata for the explorer views."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class ResourceSchema:
    """Columns a CSV resource must carry.

    ``numeric_columns`` are coerced at load time; cells that fail coercion
    become absent instead of leaking strings into numeric series.
    """

    required_columns: Tuple[str, ...]
    numeric_columns: Tuple[str, ...] = ()


@dataclass(frozen=True)
class MetricDefinition:
    column: str
    label: str
    suffix: str = ""

    @property
    def short_label(self) -> str:
        """Label without the unit suffix, used on metric switch buttons."""
        return self.label.split(" (")[0]


SCENARIO_KEYS: Tuple[str, ...] = (
    "porto",
    "berlin",
    "berlin_de_costs",
    "berlin_de_rlp",
    "berlin_de_full",
)

SCENARIO_LABELS: Dict[str, str] = {
    "porto": "Porto",
    "berlin": "Berlin (PT)",
    "berlin_de_costs": "Berlin (DE costs)",
    "berlin_de_rlp": "Berlin (DE load)",
    "berlin_de_full": "Berlin",
}

COLORS: Dict[str, str] = {
    "porto": "#E8820C",
    "berlin": "#2196F3",
    "berlin_de_costs": "#00897B",
    "berlin_de_rlp": "#7B1FA2",
    "berlin_de_full": "#C62828",
}

LOCATION_ORDER: Tuple[str, ...] = ("porto", "berlin")
LOCATION_FIELD = "_location"
LOCATION_LABELS: Dict[str, str] = {"porto": "Porto", "berlin": "Berlin"}

PERFORMANCE_METRICS: Tuple[MetricDefinition, ...] = (
    MetricDefinition("Grid_Independence_%", "Grid Independence (%)", "%"),
    MetricDefinition("PV_Production_kWh", "PV Production (kWh)", " kWh"),
    MetricDefinition("Import_kWh", "Grid Import (kWh)", " kWh"),
    MetricDefinition("Export_kWh", "Grid Export (kWh)", " kWh"),
    MetricDefinition("Battery_SOH_%", "Battery SOH (%)", "%"),
    MetricDefinition("Load_kWh", "Annual Load (kWh)", " kWh"),
)

SAVINGS_METRICS: Dict[bool, MetricDefinition] = {
    True: MetricDefinition("Savings_Cumulative_NPV", "Cumulative Savings NPV (EUR)", " EUR"),
    False: MetricDefinition("Savings_Cumulative", "Cumulative Savings Nominal (EUR)", " EUR"),
}

# Degradation logs are 15-minute resolution over a 20-year horizon.
DAILY_STRIDE = 96
PROJECT_YEARS = 20.0
REPLACEMENT_JUMP_PCT = 5.0
END_OF_LIFE_SOH_PCT = 70.0

PARETO_COLUMNS: Tuple[str, ...] = (
    "Modules",
    "Battery_kWh",
    "Tilt",
    "Azimuth",
    "Grid_Independence_%",
    "NPV_Eur",
    "ZEB_Ratio",
)

RESOURCE_SCHEMAS: Dict[str, ResourceSchema] = {
    "yearly_summary": ResourceSchema(
        required_columns=("Year",),
        numeric_columns=("Year",) + tuple(m.column for m in PERFORMANCE_METRICS),
    ),
    "cost_projection": ResourceSchema(
        required_columns=("Year", "Savings_Cumulative_NPV", "Savings_Cumulative"),
        numeric_columns=("Year", "Savings_Cumulative_NPV", "Savings_Cumulative"),
    ),
    "degradation": ResourceSchema(required_columns=("SOH",), numeric_columns=("SOH",)),
    "pareto": ResourceSchema(required_columns=PARETO_COLUMNS, numeric_columns=PARETO_COLUMNS),
    "grid_search": ResourceSchema(
        required_columns=("Azimuth", "Slope", "Metric"),
        numeric_columns=("Azimuth", "Slope", "Metric"),
    ),
}

GRID_SEARCH_RESOURCE = "azislope/grid_search_data.csv"


def comparison_resource(scenario_key: str, kind: str) -> str:
    """Return the resource id of a per-scenario comparison table.

    ``kind`` is one of ``yearly_summary``, ``cost_projection`` or
    ``degradation_data``.
    """

    return f"comparison/{scenario_key}_{kind}.csv"


def pareto_resource(location: str) -> str:
    return f"optimization/pareto_{location}.csv"


def scenario_resources(kind: str) -> Dict[str, str]:
    """Map each scenario key to its resource id for one comparison table kind."""

    return {key: comparison_resource(key, kind) for key in SCENARIO_KEYS}
