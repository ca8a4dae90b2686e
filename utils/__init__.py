"""Record shaping helpers shared by the views and Streamlit pages."""

from utils.dimensions import encode_dimension
from utils.errors import (
    EmptyInputError,
    InvalidParameterError,
    LoadError,
    UnknownCategoryError,
)
from utils.extremum import find_max
from utils.filters import MembershipPredicate, RangePredicate, filter_records
from utils.pivot import build_pivot
from utils.records import column
from utils.sampling import detect_events, downsample

__all__ = [
    "EmptyInputError",
    "InvalidParameterError",
    "LoadError",
    "MembershipPredicate",
    "RangePredicate",
    "UnknownCategoryError",
    "build_pivot",
    "column",
    "detect_events",
    "downsample",
    "encode_dimension",
    "filter_records",
    "find_max",
]
