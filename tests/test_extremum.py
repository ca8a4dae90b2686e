import math

import numpy as np
import pandas as pd
import pytest

from utils.errors import EmptyInputError
from utils.extremum import find_max


def test_returns_record_with_largest_value_and_coordinates():
    records = pd.DataFrame(
        {
            "Azimuth": [0, 10, 20],
            "Slope": [20, 30, 40],
            "Metric": [100.0, 250.0, 180.0],
        }
    )

    best = find_max(records, "Metric", coordinate_fields=("Azimuth", "Slope"))

    assert best.value == 250.0
    assert best.index == 1
    assert best.record == {"Azimuth": 10, "Slope": 30, "Metric": 250.0}
    assert best.coordinates == {"Azimuth": 10, "Slope": 30}


def test_first_record_wins_ties():
    records = pd.DataFrame({"id": ["a", "b", "c"], "v": [1.0, 5.0, 5.0]})

    best = find_max(records, "v")

    assert best.record["id"] == "b"


def test_absent_values_never_win():
    records = pd.DataFrame({"id": ["a", "b", "c"], "v": [math.nan, -50.0, math.nan]})

    best = find_max(records, "v")

    assert best.record["id"] == "b"
    assert best.value == -50.0


def test_all_absent_returns_first_record_without_raising():
    records = pd.DataFrame({"id": ["a", "b"], "v": [None, None]})

    best = find_max(records, "v")

    assert best.index == 0
    assert best.value is None


def test_missing_field_behaves_like_all_absent():
    best = find_max(pd.DataFrame({"id": ["a", "b"]}), "v")

    assert best.record == {"id": "a"}
    assert best.value is None


def test_empty_collection_raises():
    with pytest.raises(EmptyInputError):
        find_max(pd.DataFrame(columns=["v"]), "v")


def test_result_dominates_every_record():
    rng = np.random.default_rng(7)
    values = rng.integers(-20, 20, size=200).astype(float)
    records = pd.DataFrame({"v": values})

    best = find_max(records, "v")

    assert all(best.value >= v for v in values)
    assert best.index == int(np.argmax(values))


def test_rows_without_columns_are_not_empty():
    best = find_max(pd.DataFrame(index=range(3)), "v")

    assert best.index == 0
    assert best.value is None
