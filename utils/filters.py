"""Conjunctive record filters for the Pareto explorer.

Each predicate produces a boolean mask over a record collection; a record is
kept when every mask is True. Predicates in their pass-through state keep
every record, including ones with absent values.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, FrozenSet, Iterable, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from utils.errors import InvalidParameterError
from utils.records import field_series, is_absent, numeric_values

NO_RESTRICTION = None


class RecordPredicate(ABC):
    field: str

    @property
    @abstractmethod
    def active(self) -> bool:
        """False when the predicate passes every record."""

    @abstractmethod
    def mask(self, records: pd.DataFrame) -> np.ndarray:
        """Boolean array, True = keep."""


@dataclass(frozen=True)
class MembershipPredicate(RecordPredicate):
    """Keep records whose ``field`` equals one of ``allowed``."""

    field: str
    allowed: Optional[FrozenSet[Any]] = NO_RESTRICTION

    def __post_init__(self) -> None:
        if isinstance(self.allowed, str):
            object.__setattr__(self, "allowed", frozenset({self.allowed}))
        elif self.allowed is not None and not isinstance(self.allowed, frozenset):
            object.__setattr__(self, "allowed", frozenset(self.allowed))

    @property
    def active(self) -> bool:
        return self.allowed is not NO_RESTRICTION

    def mask(self, records: pd.DataFrame) -> np.ndarray:
        if not self.active:
            return np.ones(len(records), dtype=bool)
        allowed = self.allowed
        return np.array(
            [not is_absent(v) and v in allowed for v in field_series(records, self.field).tolist()],
            dtype=bool,
        )


@dataclass(frozen=True)
class RangePredicate(RecordPredicate):
    """Keep records with ``minimum <= field <= maximum``.

    A ``None`` bound is open. Once either bound is set, absent values fail.
    """

    field: str
    minimum: Optional[float] = None
    maximum: Optional[float] = None

    def __post_init__(self) -> None:
        if self.minimum is not None and self.maximum is not None and self.minimum > self.maximum:
            raise InvalidParameterError(
                f"Range for '{self.field}' has minimum {self.minimum} above maximum {self.maximum}"
            )

    @property
    def active(self) -> bool:
        return self.minimum is not None or self.maximum is not None

    def mask(self, records: pd.DataFrame) -> np.ndarray:
        if not self.active:
            return np.ones(len(records), dtype=bool)
        values = numeric_values(records, self.field)
        keep = ~np.isnan(values)
        if self.minimum is not None:
            keep &= values >= self.minimum
        if self.maximum is not None:
            keep &= values <= self.maximum
        return keep


def filter_records(records: pd.DataFrame, predicates: Iterable[RecordPredicate]) -> pd.DataFrame:
    """Return a new collection with the records passing every predicate.

    Relative order and the original index are preserved and ``records`` is not
    modified, so filtering twice with the same predicates is a no-op.
    """

    keep = np.ones(len(records), dtype=bool)
    for predicate in predicates:
        keep &= predicate.mask(records)
    return records.loc[keep].copy()


def clamp_range(minimum: float, maximum: float, moved: str = "min") -> Tuple[float, float]:
    """Resolve crossed slider handles by dragging the other handle along.

    ``moved`` names the handle the user just changed (``"min"`` or ``"max"``).
    """

    if moved not in ("min", "max"):
        raise InvalidParameterError(f"moved must be 'min' or 'max', got {moved!r}")
    if minimum <= maximum:
        return minimum, maximum
    if moved == "min":
        return minimum, minimum
    return maximum, maximum


def distinct_values(records: pd.DataFrame, field: str) -> List[Any]:
    """Sorted distinct non-absent values of ``field`` (dropdown options)."""

    return sorted({v for v in field_series(records, field).tolist() if not is_absent(v)})


def describe_predicates(predicates: Sequence[RecordPredicate]) -> List[str]:
    """Short human-readable summary of the active predicates."""

    parts: List[str] = []
    for predicate in predicates:
        if not predicate.active:
            continue
        if isinstance(predicate, MembershipPredicate):
            options = ", ".join(str(v) for v in sorted(predicate.allowed, key=str))
            parts.append(f"{predicate.field} in {{{options}}}")
        elif isinstance(predicate, RangePredicate):
            low = "-inf" if predicate.minimum is None else f"{predicate.minimum:g}"
            high = "inf" if predicate.maximum is None else f"{predicate.maximum:g}"
            parts.append(f"{low} <= {predicate.field} <= {high}")
    return parts
