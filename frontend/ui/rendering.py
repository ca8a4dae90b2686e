"""Shared rendering helpers for Streamlit pages."""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Sequence, TypeVar, Union

import pandas as pd
import streamlit as st
from streamlit.delta_generator import DeltaGenerator

from utils.errors import ExplorerError

Formatter = Union[str, Callable[[Any], str]]
T = TypeVar("T")

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class MetricSpec:
    """Specification for a Streamlit metric card."""

    label: str
    value: str
    help: Optional[str] = None
    caption: Optional[str] = None


def render_metrics(columns: Sequence[DeltaGenerator], specs: Sequence[MetricSpec]) -> None:
    """Render metric cards from specs to keep layout and captions consistent."""

    for col, spec in zip(columns, specs):
        col.metric(spec.label, spec.value, help=spec.help)
        if spec.caption:
            col.caption(spec.caption)


def render_formatted_dataframe(
    df: pd.DataFrame,
    formatters: Mapping[str, Formatter],
    *,
    use_container_width: bool = True,
    **dataframe_kwargs: Any,
) -> None:
    """Render a dataframe with shared number formatting to avoid repeated style blocks."""

    st.dataframe(
        df.style.format(formatters, na_rep="–"),
        use_container_width=use_container_width,
        **dataframe_kwargs,
    )


def render_view(
    title: str,
    build: Callable[[], T],
    render: Callable[[T], None],
    container: Optional[DeltaGenerator] = None,
) -> Optional[T]:
    """Build and render one view, replacing it with a placeholder on failure.

    Errors while shaping the data or drawing the chart stay local to the view
    so the rest of the page still renders. Returns the built value, or
    ``None`` when the view failed.
    """

    target = container or st.container()
    try:
        built = build()
        with target:
            render(built)
    except ExplorerError as exc:
        LOGGER.warning("Skipping view '%s': %s", title, exc)
        target.warning(f"{title} is unavailable: {exc}", icon="⚠️")
        return None
    except Exception as exc:
        LOGGER.exception("View '%s' failed", title)
        target.warning(f"{title} could not be drawn: {exc}", icon="⚠️")
        return None
    return built
