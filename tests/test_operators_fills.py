# =============================================================================
# tests/test_operators_fills.py - Statistical Fill Tests
# =============================================================================
# Tests for the FILL_WITH_* operators, with and without a column schema.
# =============================================================================

import pytest


def column(rows, name="v"):
    return [row.get(name) for row in rows]


def rows_of(*values):
    return [{"v": value} for value in values]


class TestMeanAndMedian:
    """Tests for FILL_WITH_MEAN, FILL_WITH_AVERAGE and FILL_WITH_MEDIAN."""

    @pytest.mark.parametrize("action_type", ["FILL_WITH_MEAN", "FILL_WITH_AVERAGE"])
    def test_fills_missing_from_valid_values(self, run, people, people_schema, action_type):
        result = run(people, {"type": action_type, "column": "age"}, people_schema)
        # "abc" and -5 break the schema, so only 30 and 40 feed the mean
        assert column(result, "age") == [30, 35, "abc", 40, -5]

    def test_issue_type_also_fills_invalid_cells(self, run, people, people_schema):
        result = run(people, {"type": "FILL_WITH_MEAN", "column": "age", "issueType": "TYPE_MISMATCH"}, people_schema)
        assert column(result, "age") == [30, 35, 35, 40, 35]

    def test_null_issue_type_only_fills_missing(self, run, people, people_schema):
        result = run(people, {"type": "FILL_WITH_MEAN", "column": "age", "issueType": "NULL_VALUE"}, people_schema)
        assert column(result, "age") == [30, 35, "abc", 40, -5]

    def test_mean_keeps_fraction(self, run):
        result = run(rows_of(1, 2, None), {"type": "FILL_WITH_MEAN", "column": "v"})
        assert column(result) == [1, 2, 1.5]

    def test_median(self, run):
        result = run(rows_of(1, None, 3, 10), {"type": "FILL_WITH_MEDIAN", "column": "v"})
        assert column(result) == [1, 3, 3, 10]

    def test_no_numeric_values_is_noop(self, run):
        rows = rows_of("a", None)
        assert run(rows, {"type": "FILL_WITH_MEAN", "column": "v"}) == rows


class TestMode:
    """Tests for FILL_WITH_MODE."""

    def test_most_frequent(self, run):
        result = run(rows_of("a", "b", "a", None, ""), {"type": "FILL_WITH_MODE", "column": "v"})
        assert column(result) == ["a", "b", "a", "a", "a"]

    def test_ties_go_to_first_seen(self, run):
        result = run(rows_of("y", "x", None), {"type": "FILL_WITH_MODE", "column": "v"})
        assert column(result) == ["y", "x", "y"]

    def test_booleans_counted_apart_from_numbers(self, run):
        result = run(rows_of(True, 1, 1, None), {"type": "FILL_WITH_MODE", "column": "v"})
        assert column(result) == [True, 1, 1, 1]
        assert type(result[3]["v"]) is int

    def test_int_and_float_count_together(self, run):
        result = run(rows_of("1", 2.0, 2, 1.0, None), {"type": "FILL_WITH_MODE", "column": "v"})
        # 2.0 and 2 are one value; "1" and 1.0 are not
        assert column(result)[4] == 2.0
        assert type(result[4]["v"]) is float


class TestNeighbourFills:
    """Tests for FILL_WITH_UPPER_ROW and FILL_WITH_LOWER_ROW."""

    def test_upper_row(self, run):
        result = run(rows_of(1, None, "", 4), {"type": "FILL_WITH_UPPER_ROW", "column": "v"})
        assert column(result) == [1, 1, 1, 4]

    def test_upper_row_leading_gap_stays(self, run):
        result = run(rows_of(None, 2), {"type": "FILL_WITH_UPPER_ROW", "column": "v"})
        assert column(result) == [None, 2]

    def test_lower_row(self, run):
        result = run(rows_of(None, 2, None), {"type": "FILL_WITH_LOWER_ROW", "column": "v"})
        assert column(result) == [2, 2, None]

    def test_skips_invalid_neighbours(self, run):
        schema = {"v": {"dataType": "Integer"}}
        result = run(rows_of(5, "abc", None), {"type": "FILL_WITH_UPPER_ROW", "column": "v"}, schema)
        assert column(result) == [5, "abc", 5]


class TestRandomFill:
    """Tests for FILL_WITH_RANDOM."""

    def test_values_come_from_column(self, run):
        rows = rows_of("a", "b", None, None, None)
        result = run(rows, {"type": "FILL_WITH_RANDOM", "column": "v"})
        assert all(value in ("a", "b") for value in column(result))

    def test_same_seed_same_result(self, run):
        rows = rows_of(1, 2, 3, None, None, None)
        first = run(rows, {"type": "FILL_WITH_RANDOM", "column": "v"}, seed=42)
        second = run(rows, {"type": "FILL_WITH_RANDOM", "column": "v"}, seed=42)
        assert first == second

    def test_no_sources_is_noop(self, run):
        rows = rows_of(None, "")
        assert run(rows, {"type": "FILL_WITH_RANDOM", "column": "v"}) == rows
