"""Asynchronous CSV record loading with a process-lifetime cache."""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

import pandas as pd

from utils.catalog import ResourceSchema
from utils.errors import LoadError
from utils.records import coerce_cell, column, is_absent, merge_tagged, tag_records, to_record

__all__ = [
    "RecordStore",
    "column",
    "merge_tagged",
    "normalize_records",
    "tag_records",
    "to_record",
]

LOGGER = logging.getLogger(__name__)

Reader = Callable[[Any], pd.DataFrame]


def _read_csv(source: Any) -> pd.DataFrame:
    return pd.read_csv(source, skip_blank_lines=True)


def normalize_records(
    raw: pd.DataFrame,
    resource_id: str,
    schema: Optional[ResourceSchema] = None,
) -> pd.DataFrame:
    """Validate a parsed table against ``schema`` and normalize absent cells.

    Numeric columns keep NaN for absent cells. In text columns each cell that
    reads as a number becomes one, the rest stay strings, and blanks hold
    ``None`` so a blank string cell is never mistaken for data.
    """

    df = raw.copy()
    df.columns = [str(c).strip() for c in df.columns]

    if schema is not None:
        missing = [c for c in schema.required_columns if c not in df.columns]
        if missing:
            raise LoadError(resource_id, f"missing required columns {missing}")

        for col in schema.numeric_columns:
            if col not in df.columns:
                continue
            coerced = pd.to_numeric(df[col], errors="coerce")
            failed = coerced.isna() & df[col].notna()
            if failed.any():
                LOGGER.warning(
                    "%s: %d non-numeric cells in '%s' treated as absent",
                    resource_id,
                    int(failed.sum()),
                    col,
                )
            df[col] = coerced.astype(float)

    for col in df.columns:
        if df[col].dtype == object:
            df[col] = pd.Series(
                [None if is_absent(v) else coerce_cell(v) for v in df[col]],
                index=df.index,
                dtype=object,
            )

    return df


class RecordStore:
    """Load named CSV resources once and serve them from memory afterwards.

    Resource ids are paths relative to ``base_dir`` or absolute ``http(s)``
    URLs. Concurrent first loads of the same id are not deduplicated; both
    fetch and the later one overwrites the cache entry with equal data.
    """

    def __init__(self, base_dir: Path, reader: Optional[Reader] = None) -> None:
        self.base_dir = Path(base_dir)
        self._reader = reader or _read_csv
        self._cache: Dict[str, pd.DataFrame] = {}

    def resolve(self, resource_id: str) -> Any:
        if resource_id.startswith(("http://", "https://")):
            return resource_id
        return self.base_dir / resource_id

    def is_cached(self, resource_id: str) -> bool:
        return resource_id in self._cache

    def invalidate(self, resource_id: Optional[str] = None) -> None:
        """Drop one cached resource, or all of them, so the next load re-fetches."""

        if resource_id is None:
            self._cache.clear()
        else:
            self._cache.pop(resource_id, None)

    async def load(self, resource_id: str, schema: Optional[ResourceSchema] = None) -> pd.DataFrame:
        cached = self._cache.get(resource_id)
        if cached is not None:
            LOGGER.debug("Cache hit for %s", resource_id)
            return cached

        LOGGER.debug("Fetching %s", resource_id)
        records = await asyncio.to_thread(self._fetch, resource_id, schema)
        self._cache[resource_id] = records
        return records

    async def load_multiple(
        self,
        entries: Mapping[str, str],
        schema: Optional[ResourceSchema] = None,
    ) -> Dict[str, pd.DataFrame]:
        """Load several resources concurrently; results are keyed by label."""

        labels = list(entries)
        frames = await asyncio.gather(*(self.load(entries[label], schema) for label in labels))
        return dict(zip(labels, frames))

    def _fetch(self, resource_id: str, schema: Optional[ResourceSchema]) -> pd.DataFrame:
        source = self.resolve(resource_id)
        try:
            raw = self._reader(source)
        except (OSError, ValueError) as exc:
            raise LoadError(resource_id, str(exc)) from exc
        return normalize_records(raw, resource_id, schema)
