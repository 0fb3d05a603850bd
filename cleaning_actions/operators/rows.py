# =============================================================================
# cleaning_actions/operators/rows.py - Row Operations
# =============================================================================
# Operators that remove, reorder or truncate rows. None of them ever adds a
# row, so the row count after any of these is <= the row count before.
# =============================================================================

from __future__ import annotations

from collections import Counter
from functools import cmp_to_key
from typing import Any, Callable

from cleaning_actions.coercion import is_missing, is_number, same_value, stringify, to_number, value_key
from cleaning_actions.exceptions import InvalidParameterError, MissingParameterError
from cleaning_actions.operators.base import copy_rows, require
from cleaning_actions.registry import register
from cleaning_actions.schema import numeric_sort_value
from cleaning_actions.types import ActionContext, ActionDescriptor, ActionType, ColumnSchema, Dataset


def _keep(rows: Dataset, drop: Callable[[dict], bool]) -> Dataset:
    return [dict(row) for row in rows if not drop(row)]


def _numeric_cell(row: dict, column: str) -> int | float | None:
    return to_number(row[column]) if column in row else None


# =============================================================================
# Conditional Deletes
# =============================================================================

@register(
    ActionType.DELETE_ROWS_WHERE_VALUE_EQUALS,
    category="rows",
    description="Delete rows whose cell equals value (strict equality)",
    required=("column",),
    optional=("value",),
)
def delete_rows_where_value_equals(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    column = require(action, "column")
    return _keep(rows, lambda row: column in row and same_value(row[column], action.value))


def _threshold(action: ActionDescriptor, name: str, wire_name: str) -> int | float:
    raw = require(action, name, wire_name)
    number = to_number(raw)
    if number is None:
        raise InvalidParameterError(action.type, wire_name, f"'{raw}' is not a number")
    return number


@register(
    ActionType.DELETE_ROWS_WHERE_VALUE_LESS_THAN,
    category="rows",
    description="Delete rows whose numeric cell is below value; non-numeric cells are kept",
    required=("column", "value"),
)
def delete_rows_where_value_less_than(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    column = require(action, "column")
    limit = _threshold(action, "value", "value")

    def drop(row):
        number = _numeric_cell(row, column)
        return number is not None and number < limit

    return _keep(rows, drop)


@register(
    ActionType.DELETE_ROWS_WHERE_VALUE_GREATER_THAN,
    category="rows",
    description="Delete rows whose numeric cell is above value; non-numeric cells are kept",
    required=("column", "value"),
)
def delete_rows_where_value_greater_than(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    column = require(action, "column")
    limit = _threshold(action, "value", "value")

    def drop(row):
        number = _numeric_cell(row, column)
        return number is not None and number > limit

    return _keep(rows, drop)


@register(
    ActionType.DELETE_ROWS_WHERE_VALUE_NOT_IN_RANGE,
    category="rows",
    description="Delete rows whose numeric cell falls outside [minValue, maxValue]",
    required=("column",),
    optional=("min_value", "max_value"),
)
def delete_rows_where_value_not_in_range(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    column = require(action, "column")
    if not action.provided("min_value") and not action.provided("max_value"):
        raise MissingParameterError(action.type, "minValue")

    low = _threshold(action, "min_value", "minValue") if action.provided("min_value") else None
    high = _threshold(action, "max_value", "maxValue") if action.provided("max_value") else None

    def drop(row):
        number = _numeric_cell(row, column)
        if number is None:
            return False
        return (low is not None and number < low) or (high is not None and number > high)

    return _keep(rows, drop)


@register(
    ActionType.DELETE_ROWS_WITH_NULLS,
    category="rows",
    description="Delete rows with a null or empty cell in column (or in any column when none is given)",
    optional=("column",),
)
def delete_rows_with_nulls(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    column = action.column
    if column:
        return _keep(rows, lambda row: column in row and is_missing(row[column]))
    return _keep(rows, lambda row: any(is_missing(v) for v in row.values()))


def _is_negative(value: Any) -> bool:
    number = to_number(value)
    return number is not None and number < 0


@register(
    ActionType.DELETE_ROWS_WITH_NEGATIVE_VALUES,
    category="rows",
    description="Delete rows with a negative number in column (or in any column when none is given)",
    optional=("column",),
)
def delete_rows_with_negative_values(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    column = action.column
    if column:
        return _keep(rows, lambda row: column in row and _is_negative(row[column]))
    return _keep(rows, lambda row: any(_is_negative(v) for v in row.values()))


# =============================================================================
# Duplicates
# =============================================================================

def _row_key(row: dict, column: str | None) -> tuple:
    if column:
        return value_key(row.get(column))
    return tuple(sorted((key, value_key(value)) for key, value in row.items()))


@register(
    ActionType.DELETE_DUPLICATE_ROWS,
    category="rows",
    description="Keep the first row for each value of column (whole-row duplicates when no column)",
    optional=("column",),
)
def delete_duplicate_rows(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    seen = set()
    result = []
    for row in rows:
        key = _row_key(row, action.column)
        if key in seen:
            continue
        seen.add(key)
        result.append(dict(row))
    return result


@register(
    ActionType.KEEP_ONLY_UNIQUE_ROWS,
    category="rows",
    description="Drop every row whose value in column (or whole row) occurs more than once",
    optional=("column",),
)
def keep_only_unique_rows(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    counts = Counter(_row_key(row, action.column) for row in rows)
    return _keep(rows, lambda row: counts[_row_key(row, action.column)] > 1)


# =============================================================================
# Sorting
# =============================================================================

def _compare(left: Any, right: Any, column_schema: ColumnSchema | None) -> int:
    """
    Three-way compare with nulls first.

    Two numbers (or two numeric-looking cells of a numeric column) compare
    numerically; everything else compares as text, case-insensitively first.
    """
    if left is None and right is None:
        return 0
    if left is None:
        return -1
    if right is None:
        return 1

    left_num = numeric_sort_value(left, column_schema)
    right_num = numeric_sort_value(right, column_schema)
    if left_num is not None and right_num is not None:
        return (left_num > right_num) - (left_num < right_num)

    left_text, right_text = stringify(left), stringify(right)
    left_fold, right_fold = left_text.casefold(), right_text.casefold()
    if left_fold != right_fold:
        return (left_fold > right_fold) - (left_fold < right_fold)
    return (left_text > right_text) - (left_text < right_text)


def _sort(rows: Dataset, action: ActionDescriptor, context: ActionContext, descending: bool) -> Dataset:
    column = require(action, "column")
    column_schema = context.column_schema(column)
    sign = -1 if descending else 1

    # Descending negates the same comparator, so nulls end up last there.
    # sorted() is stable, so equal keys keep their input order either way.
    key = cmp_to_key(lambda a, b: sign * _compare(a.get(column), b.get(column), column_schema))
    return [dict(row) for row in sorted(rows, key=key)]


@register(
    ActionType.SORT_ROWS_ASCENDING,
    category="rows",
    description="Stable sort by column, smallest first (nulls first)",
    required=("column",),
)
def sort_rows_ascending(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    return _sort(rows, action, context, descending=False)


@register(
    ActionType.SORT_ROWS_DESCENDING,
    category="rows",
    description="Stable sort by column, largest first (nulls last)",
    required=("column",),
)
def sort_rows_descending(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    return _sort(rows, action, context, descending=True)


# =============================================================================
# Limit
# =============================================================================

@register(
    ActionType.LIMIT_ROWS,
    category="rows",
    description="Keep only the first count rows",
    required=("count",),
)
def limit_rows(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    count = max(require(action, "count"), 0)
    return copy_rows(rows[:count])
