"""Fixed-stride downsampling and jump detection for long time series."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

import numpy as np
import pandas as pd

from utils.errors import InvalidParameterError
from utils.records import column, numeric_values


@dataclass(frozen=True)
class SampledSeries:
    """Retained records with their normalized times.

    ``times[i] = (i / N) * total_span`` for ``N`` retained samples, so the axis
    reflects sample count rather than any timestamp carried by the source.
    Uniform source cadence is assumed and not checked.
    """

    times: List[float]
    records: pd.DataFrame
    total_span: float

    def __len__(self) -> int:
        return len(self.times)

    def values(self, field: str) -> List[Any]:
        return column(self.records, field)


@dataclass(frozen=True)
class Event:
    """An upward jump between consecutive samples (e.g. a battery replacement)."""

    time: float
    series: Optional[str]
    index: int
    delta: float


def downsample(series: pd.DataFrame, stride: int, total_span: float) -> SampledSeries:
    """Keep rows ``0, stride, 2*stride, ...`` and rescale them onto ``[0, total_span)``."""

    if stride <= 0 or stride > len(series):
        raise InvalidParameterError(
            f"stride must be between 1 and the series length ({len(series)}), got {stride}"
        )

    retained = series.iloc[::stride].reset_index(drop=True)
    count = len(retained)
    times = [(i / count) * total_span for i in range(count)]
    return SampledSeries(times=times, records=retained, total_span=float(total_span))


def detect_events(
    sampled: SampledSeries,
    value_field: str,
    threshold: float,
    series: Optional[str] = None,
) -> List[Event]:
    """Emit an event at ``i`` whenever ``value[i] - value[i-1] > threshold``.

    Drops never qualify and there is no debouncing: each qualifying pair emits
    on its own. Pairs involving an absent value are skipped.
    """

    values = numeric_values(sampled.records, value_field)
    if len(values) < 2:
        return []

    deltas = np.diff(values)
    with np.errstate(invalid="ignore"):
        hits = np.flatnonzero(deltas > threshold) + 1
    return [
        Event(time=sampled.times[i], series=series, index=int(i), delta=float(deltas[i - 1]))
        for i in hits
    ]
