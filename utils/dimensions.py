"""Numeric encoding of record fields for parallel-coordinate axes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

import pandas as pd

from utils.errors import UnknownCategoryError
from utils.records import column, field_series, is_absent


@dataclass(frozen=True)
class EncodedDimension:
    label: str
    values: List[Any]
    code_to_label: Dict[int, str] = field(default_factory=dict)

    @property
    def is_categorical(self) -> bool:
        return bool(self.code_to_label)

    @property
    def tickvals(self) -> List[int]:
        return sorted(self.code_to_label)

    @property
    def ticktext(self) -> List[str]:
        return [self.code_to_label[code] for code in self.tickvals]


def encode_dimension(
    records: pd.DataFrame,
    field: str,
    category_order: Optional[Sequence[Any]] = None,
    label: Optional[str] = None,
    category_labels: Optional[Mapping[Any, str]] = None,
) -> EncodedDimension:
    """Project ``field`` as numeric axis values.

    With ``category_order`` each value becomes its index in that order and
    ``code_to_label`` maps the codes back to display labels (``category_labels``
    or the raw category). Without it numeric values pass through unchanged.
    """

    label = label or field
    if category_order is None:
        return EncodedDimension(label=label, values=column(records, field))

    codes = {category: code for code, category in enumerate(category_order)}
    values: List[int] = []
    for value in field_series(records, field).tolist():
        if is_absent(value) or value not in codes:
            raise UnknownCategoryError(field, value, category_order)
        values.append(codes[value])

    labels = category_labels or {}
    code_to_label = {code: str(labels.get(category, category)) for category, code in codes.items()}
    return EncodedDimension(label=label, values=values, code_to_label=code_to_label)
