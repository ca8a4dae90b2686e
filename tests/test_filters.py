import math
import unittest

import pandas as pd

from utils.errors import InvalidParameterError
from utils.filters import (
    NO_RESTRICTION,
    MembershipPredicate,
    RangePredicate,
    clamp_range,
    describe_predicates,
    distinct_values,
    filter_records,
)


def _designs() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "_location": ["porto", "berlin", "porto", "berlin", "porto"],
            "Battery_kWh": [5.0, 10.0, math.nan, 0.0, 20.0],
            "Tilt": [20.0, 30.0, 20.0, 35.0, 30.0],
        }
    )


class FilterRecordsTests(unittest.TestCase):
    def test_location_and_battery_example(self) -> None:
        records = pd.DataFrame([{"loc": "a", "batt": 5}, {"loc": "b", "batt": 10}])

        result = filter_records(
            records,
            [MembershipPredicate("loc", {"a"}), RangePredicate("batt", 0, 20)],
        )

        self.assertEqual(result.to_dict(orient="records"), [{"loc": "a", "batt": 5}])

    def test_no_restriction_returns_equal_collection(self) -> None:
        records = _designs()
        predicates = [
            MembershipPredicate("_location", NO_RESTRICTION),
            RangePredicate("Battery_kWh"),
            MembershipPredicate("Tilt"),
        ]

        result = filter_records(records, predicates)

        pd.testing.assert_frame_equal(result, records)
        self.assertIsNot(result, records)

    def test_filter_is_idempotent(self) -> None:
        predicates = [MembershipPredicate("_location", {"porto"}), RangePredicate("Battery_kWh", 0, 15)]

        once = filter_records(_designs(), predicates)
        twice = filter_records(once, predicates)

        pd.testing.assert_frame_equal(once, twice)

    def test_range_is_inclusive_and_excludes_absent(self) -> None:
        result = filter_records(_designs(), [RangePredicate("Battery_kWh", 0.0, 10.0)])

        self.assertEqual(result["Battery_kWh"].tolist(), [5.0, 10.0, 0.0])
        self.assertEqual(result.index.tolist(), [0, 1, 3])

    def test_open_bound(self) -> None:
        result = filter_records(_designs(), [RangePredicate("Battery_kWh", minimum=10.0)])

        self.assertEqual(result["Battery_kWh"].tolist(), [10.0, 20.0])

    def test_numeric_membership_matches_ints_and_floats(self) -> None:
        result = filter_records(_designs(), [MembershipPredicate("Tilt", {30})])

        self.assertEqual(result.index.tolist(), [1, 4])

    def test_input_is_not_mutated(self) -> None:
        records = _designs()
        snapshot = records.copy()

        filter_records(records, [MembershipPredicate("_location", {"berlin"})])

        pd.testing.assert_frame_equal(records, snapshot)

    def test_missing_field_fails_active_predicates(self) -> None:
        records = _designs()

        self.assertTrue(filter_records(records, [RangePredicate("ZEB_Ratio", 0, 1)]).empty)
        self.assertEqual(len(filter_records(records, [RangePredicate("ZEB_Ratio")])), len(records))

    def test_inverted_range_is_rejected(self) -> None:
        with self.assertRaises(InvalidParameterError):
            RangePredicate("Battery_kWh", 10.0, 5.0)

    def test_single_string_membership_is_one_value(self) -> None:
        predicate = MembershipPredicate("_location", "porto")

        self.assertEqual(predicate.allowed, frozenset({"porto"}))
        self.assertEqual(filter_records(_designs(), [predicate]).index.tolist(), [0, 2, 4])


def test_clamp_range_moves_other_handle():
    assert clamp_range(2.0, 8.0, "min") == (2.0, 8.0)
    assert clamp_range(9.0, 8.0, "min") == (9.0, 9.0)
    assert clamp_range(9.0, 3.0, "max") == (3.0, 3.0)


def test_clamp_range_rejects_unknown_handle():
    try:
        clamp_range(1.0, 0.0, "middle")
    except InvalidParameterError:
        pass
    else:
        raise AssertionError("expected InvalidParameterError")


def test_distinct_values_sorted_without_absent():
    assert distinct_values(_designs(), "Battery_kWh") == [0.0, 5.0, 10.0, 20.0]
    assert distinct_values(_designs(), "missing") == []


def test_describe_predicates_skips_pass_through():
    parts = describe_predicates(
        [
            MembershipPredicate("_location", {"porto"}),
            RangePredicate("Battery_kWh", 0.0, 12.5),
            MembershipPredicate("Tilt"),
        ]
    )

    assert parts == ["_location in {porto}", "0 <= Battery_kWh <= 12.5"]
