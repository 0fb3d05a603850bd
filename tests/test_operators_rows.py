# =============================================================================
# tests/test_operators_rows.py - Row Operation Tests
# =============================================================================
# Tests for conditional deletes, duplicate handling, sorting and LIMIT_ROWS.
# =============================================================================

from functools import cmp_to_key

import pytest

from cleaning_actions import InvalidParameterError, MissingParameterError


def ids(rows):
    return [row["id"] for row in rows]


# =============================================================================
# Conditional Deletes
# =============================================================================

class TestConditionalDeletes:
    """Tests for DELETE_ROWS_WHERE_* operators."""

    def test_equals_is_strict(self, run):
        rows = [{"id": 1, "v": 5}, {"id": 2, "v": "5"}, {"id": 3, "v": 5.0}]
        result = run(rows, {"type": "DELETE_ROWS_WHERE_VALUE_EQUALS", "column": "v", "value": 5})
        assert ids(result) == [2]

    def test_equals_null(self, run, people):
        result = run(people, {"type": "DELETE_ROWS_WHERE_VALUE_EQUALS", "column": "age", "value": None})
        assert ids(result) == [1, 3, 4, 5]

    def test_less_than_keeps_non_numeric(self, run, people):
        result = run(people, {"type": "DELETE_ROWS_WHERE_VALUE_LESS_THAN", "column": "age", "value": 35})
        # 30 and -5 go; None and "abc" are not numbers and stay
        assert ids(result) == [2, 3, 4]

    def test_greater_than_accepts_numeric_string_threshold(self, run, people):
        result = run(people, {"type": "DELETE_ROWS_WHERE_VALUE_GREATER_THAN", "column": "age", "value": "35"})
        assert ids(result) == [1, 2, 3, 5]

    def test_non_numeric_threshold_raises(self, run, people):
        with pytest.raises(InvalidParameterError):
            run(people, {"type": "DELETE_ROWS_WHERE_VALUE_LESS_THAN", "column": "age", "value": "ten"})

    def test_not_in_range(self, run, people):
        result = run(people, {
            "type": "DELETE_ROWS_WHERE_VALUE_NOT_IN_RANGE", "column": "age", "minValue": 0, "maxValue": 35,
        })
        assert ids(result) == [1, 2, 3]

    def test_open_ended_range(self, run, people):
        result = run(people, {"type": "DELETE_ROWS_WHERE_VALUE_NOT_IN_RANGE", "column": "age", "minValue": 0})
        assert ids(result) == [1, 2, 3, 4]

    def test_range_needs_a_bound(self, run, people):
        with pytest.raises(MissingParameterError):
            run(people, {"type": "DELETE_ROWS_WHERE_VALUE_NOT_IN_RANGE", "column": "age"})

    def test_with_nulls_in_column(self, run, people):
        result = run(people, {"type": "DELETE_ROWS_WITH_NULLS", "column": "city"})
        assert ids(result) == [1, 3, 4, 5]

    def test_with_nulls_anywhere(self, run, people):
        result = run(people, {"type": "DELETE_ROWS_WITH_NULLS"})
        assert ids(result) == [1, 3, 4, 5]

    def test_with_negative_values(self, run, people):
        result = run(people, {"type": "DELETE_ROWS_WITH_NEGATIVE_VALUES", "column": "age"})
        assert ids(result) == [1, 2, 3, 4]


# =============================================================================
# Duplicates
# =============================================================================

class TestDuplicates:
    """Tests for DELETE_DUPLICATE_ROWS and KEEP_ONLY_UNIQUE_ROWS."""

    def test_delete_duplicates_by_column_keeps_first(self, run, people):
        result = run(people, {"type": "DELETE_DUPLICATE_ROWS", "column": "name"})
        assert ids(result) == [1, 2, 3, 4]

    def test_delete_whole_row_duplicates(self, run):
        rows = [{"a": 1, "b": "x"}, {"b": "x", "a": 1.0}, {"a": 1, "b": "y"}]
        result = run(rows, {"type": "DELETE_DUPLICATE_ROWS"})
        assert result == [{"a": 1, "b": "x"}, {"a": 1, "b": "y"}]

    def test_number_and_string_are_distinct(self, run):
        rows = [{"id": 1, "v": 1}, {"id": 2, "v": "1"}]
        result = run(rows, {"type": "DELETE_DUPLICATE_ROWS", "column": "v"})
        assert ids(result) == [1, 2]

    def test_keep_only_unique_drops_all_copies(self, run, people):
        result = run(people, {"type": "KEEP_ONLY_UNIQUE_ROWS", "column": "city"})
        assert ids(result) == [2, 3, 5]


# =============================================================================
# Sorting and Limit
# =============================================================================

class TestSorting:
    """Tests for SORT_ROWS_ASCENDING and SORT_ROWS_DESCENDING."""

    def test_ascending_numbers_nulls_first(self, run):
        rows = [{"id": 1, "v": 10}, {"id": 2, "v": None}, {"id": 3, "v": 2}]
        result = run(rows, {"type": "SORT_ROWS_ASCENDING", "column": "v"})
        assert ids(result) == [2, 3, 1]

    def test_descending_nulls_last(self, run):
        rows = [{"id": 1, "v": 10}, {"id": 2, "v": None}, {"id": 3, "v": 2}]
        result = run(rows, {"type": "SORT_ROWS_DESCENDING", "column": "v"})
        assert ids(result) == [1, 3, 2]

    def test_numeric_strings_in_numeric_column(self, run):
        rows = [{"id": 1, "v": "10"}, {"id": 2, "v": "9"}]
        result = run(rows, {"type": "SORT_ROWS_ASCENDING", "column": "v"}, {"v": {"dataType": "Integer"}})
        assert ids(result) == [2, 1]

    def test_text_column_sorts_as_text(self, run):
        rows = [{"id": 1, "v": "10"}, {"id": 2, "v": "9"}]
        result = run(rows, {"type": "SORT_ROWS_ASCENDING", "column": "v"})
        assert ids(result) == [1, 2]

    def test_case_insensitive_and_stable(self, run):
        rows = [{"id": 1, "v": "b"}, {"id": 2, "v": "A"}, {"id": 3, "v": "a"}, {"id": 4, "v": "a"}]
        result = run(rows, {"type": "SORT_ROWS_ASCENDING", "column": "v"})
        assert ids(result) == [2, 3, 4, 1]

    def test_descending_keeps_input_order_among_equal_keys(self, run):
        rows = [
            {"id": 1, "v": 2},
            {"id": 2, "v": 5},
            {"id": 3, "v": 2.0},
            {"id": 4, "v": None},
            {"id": 5, "v": 5},
            {"id": 6, "v": 2},
            {"id": 7, "v": None},
        ]
        result = run(rows, {"type": "SORT_ROWS_DESCENDING", "column": "v"})
        assert ids(result) == [2, 5, 1, 3, 6, 4, 7]

    def test_descending_matches_stable_reference_sort(self, run):
        rows = [{"id": i, "v": v} for i, v in enumerate(["b", "a", "B", None, "a", "c", "b", None])]
        result = run(rows, {"type": "SORT_ROWS_DESCENDING", "column": "v"})

        def reference(left, right):
            if left["v"] is None or right["v"] is None:
                return (left["v"] is None) - (right["v"] is None)
            a, b = left["v"].casefold(), right["v"].casefold()
            if a != b:
                return (a < b) - (a > b)
            return (left["v"] < right["v"]) - (left["v"] > right["v"])

        assert ids(result) == ids(sorted(rows, key=cmp_to_key(reference)))
        assert ids(result) == [5, 0, 6, 2, 1, 4, 3, 7]


class TestLimitRows:
    """Tests for LIMIT_ROWS."""

    def test_keeps_first_rows(self, run, people):
        assert ids(run(people, {"type": "LIMIT_ROWS", "count": 2})) == [1, 2]

    def test_count_above_length(self, run, people):
        assert len(run(people, {"type": "LIMIT_ROWS", "count": 50})) == 5
