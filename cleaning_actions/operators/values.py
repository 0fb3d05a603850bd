# =============================================================================
# cleaning_actions/operators/values.py - Value Replacement
# =============================================================================
# Operators that overwrite individual cells with literal values:
# fill missing, replace value, replace negatives, overwrite a column or a row.
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from cleaning_actions.coercion import is_missing, same_value, to_number
from cleaning_actions.operators.base import copy_rows, map_column, require
from cleaning_actions.registry import register
from cleaning_actions.types import ActionContext, ActionDescriptor, ActionType, Dataset

logger = logging.getLogger(__name__)


@register(
    ActionType.FILL_MISSING,
    category="values",
    description="Fill null or empty cells of a column with a default value",
    required=("column", "default_value"),
)
def fill_missing(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    column = require(action, "column")
    default = require(action, "default_value", "defaultValue")
    return map_column(rows, column, lambda value: default if is_missing(value) else value)


@register(
    ActionType.REPLACE_VALUE,
    category="values",
    description="Replace cells equal to oldValue with newValue (strict equality)",
    required=("column",),
    optional=("old_value", "new_value"),
)
def replace_value(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    column = require(action, "column")
    old, new = action.old_value, action.new_value
    return map_column(rows, column, lambda value: new if same_value(value, old) else value)


def _replace_if_negative(value: Any, new: Any) -> Any:
    number = to_number(value)
    if number is not None and number < 0:
        return new
    return value


@register(
    ActionType.REPLACE_NEGATIVE_VALUES,
    category="values",
    description="Replace numerically negative cells with newValue; non-numeric cells are kept",
    required=("column",),
    optional=("new_value",),
)
def replace_negative_values(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    column = require(action, "column")
    return map_column(rows, column, lambda value: _replace_if_negative(value, action.new_value))


@register(
    ActionType.REPLACE_COLUMN_VALUES,
    category="values",
    description="Set every cell of a column to newValue",
    required=("column",),
    optional=("new_value",),
)
def replace_column_values(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    column = require(action, "column")
    return [{**row, column: action.new_value} for row in rows]


@register(
    ActionType.REPLACE_ROW,
    category="values",
    description="Overwrite cells of one row (rowNumber is 1-based) with newValues",
    required=("row_number", "new_values"),
)
def replace_row(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    row_number = require(action, "row_number", "rowNumber")
    new_values = require(action, "new_values", "newValues")

    result = copy_rows(rows)
    if not 1 <= row_number <= len(result):
        logger.warning(f"REPLACE_ROW: row {row_number} is outside 1..{len(result)}, nothing changed")
        return result

    target = result[row_number - 1]
    unknown = [key for key in new_values if key not in target]
    if unknown:
        # New keys would give this row a different column set from the others
        logger.warning(f"REPLACE_ROW: ignoring unknown columns {unknown}")

    result[row_number - 1] = {
        key: (new_values[key] if key in new_values else value)
        for key, value in target.items()
    }
    return result
