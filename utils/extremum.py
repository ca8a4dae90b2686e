"""Locate the record that maximizes a numeric field."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence

import numpy as np
import pandas as pd

from utils.errors import EmptyInputError
from utils.records import numeric_values, to_record


@dataclass(frozen=True)
class Extremum:
    record: Dict[str, Any]
    value: Optional[float]
    index: int
    coordinates: Dict[str, Any] = field(default_factory=dict)


def find_max(
    records: pd.DataFrame,
    field: str,
    coordinate_fields: Sequence[str] = (),
) -> Extremum:
    """Return the first record attaining the maximum of ``field``.

    Absent or non-numeric values rank as ``-inf``. When every value is absent
    the first record is returned with ``value=None``.
    """

    if len(records) == 0:
        raise EmptyInputError(f"Cannot locate the maximum of '{field}' in an empty collection")

    values = numeric_values(records, field)
    best_index = 0
    best_value = -np.inf
    for i, value in enumerate(values):
        if np.isnan(value):
            continue
        if value > best_value:
            best_value = value
            best_index = i

    record = to_record(records.iloc[best_index])
    return Extremum(
        record=record,
        value=None if np.isneginf(best_value) else float(best_value),
        index=best_index,
        coordinates={name: record.get(name) for name in coordinate_fields},
    )
