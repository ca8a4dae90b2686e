"""Record collection helpers: absent-value handling, projection, tagging."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

import numpy as np
import pandas as pd

from utils.errors import InvalidParameterError


def is_absent(value: Any) -> bool:
    """True for ``None`` and NaN-like cells (blank or failed numeric coercion)."""

    if value is None:
        return True
    result = pd.isna(value)
    return bool(result) if isinstance(result, (bool, np.bool_)) else False


def _clean(value: Any) -> Any:
    if is_absent(value):
        return None
    if isinstance(value, np.generic):
        return value.item()
    return value


def coerce_cell(value: Any) -> Any:
    """Parse a text cell as a number when it reads as one; other cells pass through."""

    if isinstance(value, str):
        text = value.strip()
        if text:
            number = pd.to_numeric(text, errors="coerce")
            if not is_absent(number):
                return _clean(number)
    return value


def field_series(records: pd.DataFrame, field: str) -> pd.Series:
    """Return ``records[field]``, or an all-NaN series when the field is missing."""

    if field in records.columns:
        return records[field]
    return pd.Series(np.nan, index=records.index, dtype=float, name=field)


def numeric_values(records: pd.DataFrame, field: str) -> np.ndarray:
    """Float array of ``field`` with non-numeric and absent cells as NaN."""

    return pd.to_numeric(field_series(records, field), errors="coerce").to_numpy(dtype=float)


def column(records: pd.DataFrame, field: str) -> List[Any]:
    """Project one field from every record in order.

    Absent cells come back as ``None``; a field the collection does not carry
    projects as all ``None`` rather than raising.
    """

    return [_clean(v) for v in field_series(records, field).tolist()]


def to_record(row: Mapping[str, Any]) -> Dict[str, Any]:
    """Convert a row (Series or mapping) into a plain dict with ``None`` for absent."""

    return {str(k): _clean(v) for k, v in row.items()}


def tag_records(records: pd.DataFrame, field: str, value: Any) -> pd.DataFrame:
    """Return a copy of ``records`` with a constant provenance column added."""

    if field in records.columns:
        raise InvalidParameterError(f"Field '{field}' already exists; tags never overwrite data")
    tagged = records.copy()
    tagged[field] = value
    return tagged


def merge_tagged(collections: Mapping[str, pd.DataFrame], field: str) -> pd.DataFrame:
    """Tag each collection with its label and concatenate them in mapping order."""

    frames = [tag_records(df, field, label) for label, df in collections.items()]
    if not frames:
        return pd.DataFrame(columns=[field])
    return pd.concat(frames, ignore_index=True)
