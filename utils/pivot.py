"""Dense two-axis pivots for sweep results (e.g. slope × azimuth NPV grids)."""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Real
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from utils.errors import InvalidParameterError
from utils.records import coerce_cell, field_series, is_absent


@dataclass(frozen=True)
class PivotMatrix:
    """Metric grid indexed ``matrix[row_index][col_index]``.

    ``None`` marks a cell with no matching record so a measured zero stays
    distinguishable from missing data.
    """

    row_axis: List[Any]
    col_axis: List[Any]
    matrix: List[List[Optional[float]]]

    @property
    def shape(self) -> Tuple[int, int]:
        return len(self.row_axis), len(self.col_axis)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            self.matrix,
            index=pd.Index(self.row_axis),
            columns=pd.Index(self.col_axis),
            dtype=float,
        )

    def to_long(self, row_name: str = "row", col_name: str = "col", value_name: str = "value") -> pd.DataFrame:
        """One row per filled cell, the layout Altair's ``mark_rect`` expects."""

        rows = [
            {row_name: r, col_name: c, value_name: value}
            for r, cells in zip(self.row_axis, self.matrix)
            for c, value in zip(self.col_axis, cells)
            if value is not None
        ]
        return pd.DataFrame(rows, columns=[row_name, col_name, value_name])


def _axis_values(values: pd.Series, field: str) -> List[Any]:
    """Numeric axis values in record order, ``None`` where absent."""

    coerced: List[Any] = []
    for value in values.tolist():
        if is_absent(value):
            coerced.append(None)
            continue
        number = coerce_cell(value)
        if not isinstance(number, Real):
            raise InvalidParameterError(f"Axis field '{field}' has non-numeric value {value!r}")
        coerced.append(number)
    return coerced


def build_pivot(
    records: pd.DataFrame,
    row_field: str,
    col_field: str,
    value_field: str,
) -> PivotMatrix:
    """Pivot ``value_field`` onto sorted distinct values of two axis fields.

    Axis values are numbers; numeric text is parsed and anything else raises
    ``InvalidParameterError``. Records with an absent axis value cannot be
    placed and are skipped. If two records share a (row, col) pair the later
    one wins.
    """

    rows = _axis_values(field_series(records, row_field), row_field)
    cols = _axis_values(field_series(records, col_field), col_field)
    values = field_series(records, value_field).tolist()

    row_axis = sorted({r for r in rows if r is not None})
    col_axis = sorted({c for c in cols if c is not None})

    cells: Dict[Tuple[Any, Any], Optional[float]] = {}
    for r, c, v in zip(rows, cols, values):
        if r is None or c is None:
            continue
        cells[(r, c)] = None if is_absent(v) else coerce_cell(v)

    matrix = [[cells.get((r, c)) for c in col_axis] for r in row_axis]
    return PivotMatrix(row_axis=row_axis, col_axis=col_axis, matrix=matrix)
