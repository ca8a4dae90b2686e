"""Chart-ready series for the comparison, Pareto, and orientation views.

Each builder takes loaded record collections and returns named series plus
derived scalars. Chart construction lives in ``frontend.ui.charts``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

import pandas as pd

from utils.catalog import (
    COLORS,
    DAILY_STRIDE,
    LOCATION_FIELD,
    LOCATION_LABELS,
    LOCATION_ORDER,
    PROJECT_YEARS,
    REPLACEMENT_JUMP_PCT,
    SAVINGS_METRICS,
    SCENARIO_LABELS,
)
from utils.dimensions import EncodedDimension, encode_dimension
from utils.errors import InvalidParameterError
from utils.extremum import Extremum, find_max
from utils.filters import RecordPredicate, filter_records
from utils.pivot import PivotMatrix, build_pivot
from utils.records import column, to_record
from utils.sampling import Event, detect_events, downsample


@dataclass(frozen=True)
class ChartSeries:
    """One named trace; every supplied sequence must match ``x`` in length."""

    name: str
    x: List[Any]
    y: List[Any]
    z: Optional[List[Any]] = None
    color: Optional[List[Any]] = None
    text: Optional[List[str]] = None
    key: Optional[str] = None

    def __post_init__(self) -> None:
        expected = len(self.x)
        for attr in ("y", "z", "color", "text"):
            seq = getattr(self, attr)
            if seq is not None and len(seq) != expected:
                raise InvalidParameterError(
                    f"Series '{self.name}': {attr} has {len(seq)} values, x has {expected}"
                )

    def __len__(self) -> int:
        return len(self.x)

    def to_frame(self) -> pd.DataFrame:
        data: Dict[str, Any] = {"series": [self.name] * len(self.x), "x": self.x, "y": self.y}
        for attr in ("z", "color", "text"):
            seq = getattr(self, attr)
            if seq is not None:
                data[attr] = seq
        return pd.DataFrame(data)


@dataclass(frozen=True)
class DegradationView:
    series: List[ChartSeries]
    events: List[Event] = field(default_factory=list)


@dataclass(frozen=True)
class OrientationView:
    pivot: PivotMatrix
    optimum: Optional[Extremum]


def _scenario_label(key: str) -> str:
    return SCENARIO_LABELS.get(key, key)


def series_frame(series: Sequence[ChartSeries]) -> pd.DataFrame:
    """Stack several series into one long frame for Altair encodings."""

    frames = [s.to_frame() for s in series if len(s)]
    if not frames:
        return pd.DataFrame(columns=["series", "x", "y"])
    return pd.concat(frames, ignore_index=True)


# --- Scenario comparison ---------------------------------------------------


def build_performance_series(
    summaries: Mapping[str, pd.DataFrame],
    metric_column: str,
    x_field: str = "Year",
) -> List[ChartSeries]:
    """One yearly line per scenario for the selected performance metric."""

    return [
        ChartSeries(
            name=_scenario_label(key),
            key=key,
            x=column(records, x_field),
            y=column(records, metric_column),
        )
        for key, records in summaries.items()
    ]


def build_savings_series(costs: Mapping[str, pd.DataFrame], use_npv: bool = True) -> List[ChartSeries]:
    """Cumulative savings per scenario, discounted (NPV) or nominal."""

    return build_performance_series(costs, SAVINGS_METRICS[use_npv].column)


def build_degradation_view(
    degradation: Mapping[str, pd.DataFrame],
    value_field: str = "SOH",
    stride: int = DAILY_STRIDE,
    total_span: float = PROJECT_YEARS,
    threshold: float = REPLACEMENT_JUMP_PCT,
) -> DegradationView:
    """Daily SOH traces on a project-year axis plus battery replacement events."""

    series: List[ChartSeries] = []
    events: List[Event] = []
    for key, records in degradation.items():
        sampled = downsample(records, stride, total_span)
        series.append(
            ChartSeries(
                name=_scenario_label(key),
                key=key,
                x=list(sampled.times),
                y=sampled.values(value_field),
            )
        )
        events.extend(detect_events(sampled, value_field, threshold, series=key))
    return DegradationView(series=series, events=events)


# --- Pareto front ----------------------------------------------------------

PARETO_X = "Grid_Independence_%"
PARETO_Y = "NPV_Eur"
PARETO_Z = "ZEB_Ratio"


def _fmt(value: Any, spec: str = "") -> str:
    if value is None:
        return "n/a"
    try:
        return format(value, spec)
    except (TypeError, ValueError):
        return str(value)


def _design_hover(record: Mapping[str, Any]) -> str:
    return (
        f"Modules: {_fmt(record.get('Modules'))}<br>"
        f"Battery: {_fmt(record.get('Battery_kWh'))} kWh<br>"
        f"Tilt: {_fmt(record.get('Tilt'))}°<br>"
        f"Azimuth: {_fmt(record.get('Azimuth'))}°<br>"
        f"ZEB: {_fmt(record.get(PARETO_Z), '.2f')}"
    )


def _split_by_location(records: pd.DataFrame, location_field: str) -> Dict[str, pd.DataFrame]:
    if location_field not in records.columns:
        return {}
    groups: Dict[str, pd.DataFrame] = {}
    for location in LOCATION_ORDER:
        subset = records.loc[records[location_field] == location]
        if not subset.empty:
            groups[location] = subset
    return groups


def build_pareto_scatter(
    records: pd.DataFrame,
    predicates: Sequence[RecordPredicate] = (),
    location_field: str = LOCATION_FIELD,
) -> List[ChartSeries]:
    """Grid independence vs NPV per location, after applying the filters.

    Locations with no surviving designs produce no series.
    """

    filtered = filter_records(records, predicates)
    series: List[ChartSeries] = []
    for location, subset in _split_by_location(filtered, location_field).items():
        series.append(
            ChartSeries(
                name=LOCATION_LABELS[location],
                key=location,
                x=column(subset, PARETO_X),
                y=column(subset, PARETO_Y),
                color=column(subset, PARETO_Z),
                text=[_design_hover(to_record(row)) for _, row in subset.iterrows()],
            )
        )
    return series


def build_pareto_3d(records: pd.DataFrame, location_field: str = LOCATION_FIELD) -> List[ChartSeries]:
    """Grid independence, NPV, and ZEB ratio per location for the 3D scatter."""

    series: List[ChartSeries] = []
    for location, subset in _split_by_location(records, location_field).items():
        series.append(
            ChartSeries(
                name=LOCATION_LABELS[location],
                key=location,
                x=column(subset, PARETO_X),
                y=column(subset, PARETO_Y),
                z=column(subset, PARETO_Z),
                text=[
                    f"{_fmt(row.get('Modules'))} mod, {_fmt(row.get('Battery_kWh'))} kWh"
                    for row in (to_record(r) for _, r in subset.iterrows())
                ],
            )
        )
    return series


PARALLEL_DIMENSIONS = (
    ("Modules", "Modules"),
    ("Battery_kWh", "Battery (kWh)"),
    ("Tilt", "Tilt (°)"),
    (PARETO_X, "Grid Ind. (%)"),
    (PARETO_Y, "NPV (EUR)"),
    (PARETO_Z, "ZEB Ratio"),
)


def build_parallel_dimensions(
    records: pd.DataFrame,
    location_field: str = LOCATION_FIELD,
) -> List[EncodedDimension]:
    """Location (coded) followed by the design and objective axes."""

    dimensions = [
        encode_dimension(
            records,
            location_field,
            category_order=LOCATION_ORDER,
            label="Location",
            category_labels=LOCATION_LABELS,
        )
    ]
    dimensions.extend(
        encode_dimension(records, name, label=label) for name, label in PARALLEL_DIMENSIONS
    )
    return dimensions


# --- Orientation sweep -----------------------------------------------------


def build_orientation_view(
    records: pd.DataFrame,
    row_field: str = "Slope",
    col_field: str = "Azimuth",
    value_field: str = "Metric",
) -> OrientationView:
    """Slope × azimuth metric grid and the best orientation.

    An empty sweep yields an empty grid and no optimum rather than an error.
    """

    pivot = build_pivot(records, row_field, col_field, value_field)
    optimum = None
    if len(records):
        optimum = find_max(records, value_field, coordinate_fields=(col_field, row_field))
    return OrientationView(pivot=pivot, optimum=optimum)


def scenario_colors(series: Sequence[ChartSeries]) -> List[str]:
    """Palette aligned with ``series`` order, grey for unknown keys."""

    return [COLORS.get(s.key or "", "#888888") for s in series]
