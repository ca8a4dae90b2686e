import math

import pandas as pd
import pytest

from utils.dimensions import encode_dimension
from utils.errors import UnknownCategoryError


def _designs() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "_location": ["porto", "berlin", "berlin", "porto"],
            "Modules": [10, 12, math.nan, 8],
        }
    )


def test_categorical_field_maps_to_order_index():
    dim = encode_dimension(
        _designs(),
        "_location",
        category_order=("porto", "berlin"),
        label="Location",
        category_labels={"porto": "Porto", "berlin": "Berlin"},
    )

    assert dim.label == "Location"
    assert dim.values == [0, 1, 1, 0]
    assert dim.code_to_label == {0: "Porto", 1: "Berlin"}
    assert dim.tickvals == [0, 1]
    assert dim.ticktext == ["Porto", "Berlin"]
    assert dim.is_categorical


def test_codes_follow_caller_order_not_appearance():
    dim = encode_dimension(_designs(), "_location", category_order=("berlin", "porto"))

    assert dim.values == [1, 0, 0, 1]
    assert dim.code_to_label == {0: "berlin", 1: "porto"}


def test_numeric_field_passes_through():
    dim = encode_dimension(_designs(), "Modules", label="Modules")

    assert dim.values == [10.0, 12.0, None, 8.0]
    assert dim.code_to_label == {}
    assert not dim.is_categorical


def test_unknown_category_raises():
    records = pd.DataFrame({"_location": ["porto", "lisbon"]})

    with pytest.raises(UnknownCategoryError) as excinfo:
        encode_dimension(records, "_location", category_order=("porto", "berlin"))

    assert excinfo.value.value == "lisbon"


def test_absent_category_raises():
    records = pd.DataFrame({"_location": ["porto", None]})

    with pytest.raises(UnknownCategoryError):
        encode_dimension(records, "_location", category_order=("porto", "berlin"))
