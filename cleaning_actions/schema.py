# =============================================================================
# cleaning_actions/schema.py - Schema-Aware Helpers
# =============================================================================
# Helpers that read or evolve the column schema:
#
# - conforms(): does a cell satisfy its column's declared type and sign?
# - is_fill_target(): which cells a FILL_WITH_* action should overwrite
# - evolve_schema(): the schema after an action has been applied, so later
#   actions in the same batch see renamed, removed or retyped columns
# =============================================================================

from __future__ import annotations

import re
from typing import Any

from cleaning_actions.coercion import is_missing, is_number, to_boolean, to_iso_date, to_number
from cleaning_actions.types import (
    ActionDescriptor,
    ActionType,
    ColumnSchema,
    DataType,
    IssueType,
    Schema,
)


NUMERIC_TYPES = {DataType.INTEGER, DataType.FLOAT}

# CONVERT_DATA_TYPES target -> declared type afterwards
_CONVERTED_TYPES = {
    "NUMBER": DataType.FLOAT,
    "STRING": DataType.STRING,
    "BOOLEAN": DataType.BOOLEAN,
    "DATE": DataType.DATE,
}

_MULTI_COLUMN_ACTIONS = {
    ActionType.ADDITION_MULTIPLE_COLUMN,
    ActionType.SUBSTRACTION_MULTIPLE_COLUMN,
    ActionType.MULTIPLICATION_MULTIPLE_COLUMN,
    ActionType.DIVIDE_MULTIPLE_COLUMN,
}

# A separator between two field tokens of a declared format, as in "YYYY-MM-DD"
_BETWEEN_FIELDS = re.compile(r"(?<=[YMD])[-/. ](?=[YMD])")


# =============================================================================
# Cell Checks
# =============================================================================

def conforms(value: Any, column_schema: ColumnSchema) -> bool:
    """
    Check a non-missing cell against its declared type and numeric sign.

    Example:
        conforms("12", ColumnSchema(dataType="Integer"))   # True
        conforms("12.5", ColumnSchema(dataType="Integer")) # False
    """
    data_type = column_schema.data_type

    if data_type in NUMERIC_TYPES:
        number = to_number(value)
        if number is None:
            return False
        if data_type == DataType.INTEGER and not float(number).is_integer():
            return False
        sign = (column_schema.numeric_sign or "").lower()
        if sign == "positive" and number < 0:
            return False
        if sign == "negative" and number > 0:
            return False
        return True

    if data_type == DataType.BOOLEAN:
        return to_boolean(value) is not None

    if data_type in (DataType.DATE, DataType.DATETIME):
        return to_iso_date(value) is not None

    return isinstance(value, str)


def is_fill_target(value: Any, issue_type: str | None, column_schema: ColumnSchema | None) -> bool:
    """
    Decide whether a FILL_WITH_* action should overwrite this cell.

    Missing cells are always targets. For issue types other than NULL_VALUE,
    cells that break the column's declared schema are targets too; without a
    schema entry there is nothing to check them against.
    """
    if is_missing(value):
        return True
    if not issue_type or issue_type == IssueType.NULL_VALUE.value:
        return False
    if column_schema is None:
        return False
    return not conforms(value, column_schema)


def is_valid_source(value: Any, column_schema: ColumnSchema | None) -> bool:
    """True when a cell may be used as a source for statistical fills."""
    if is_missing(value):
        return False
    if column_schema is None:
        return True
    return conforms(value, column_schema)


def is_numeric_column(column_schema: ColumnSchema | None) -> bool:
    return column_schema is not None and column_schema.data_type in NUMERIC_TYPES


def numeric_sort_value(value: Any, column_schema: ColumnSchema | None) -> int | float | None:
    """Number to sort by, or None when the cell should compare as text."""
    if is_number(value):
        return value
    if is_numeric_column(column_schema):
        return to_number(value)
    return None


# =============================================================================
# Schema Evolution
# =============================================================================

def evolve_schema(schema: Schema, action: ActionDescriptor) -> Schema:
    """
    Return the schema as it stands after an action was applied.

    The input schema is not modified.
    """
    action_type = action.action_type
    result = dict(schema)

    if action_type == ActionType.DELETE_COLUMN:
        result.pop(action.column, None)

    elif action_type == ActionType.RENAME_COLUMN:
        if action.from_ in result and action.from_ != action.to:
            result = {
                (action.to if name == action.from_ else name): entry
                for name, entry in result.items()
                if name != action.to
            }

    elif action_type == ActionType.CONVERT_DATA_TYPES:
        new_type = _CONVERTED_TYPES.get((action.data_type or "").upper())
        if new_type is not None:
            entry = result.get(action.column) or ColumnSchema()
            result[action.column] = entry.model_copy(update={"data_type": new_type})

    elif action_type == ActionType.CHANGE_DATE_FORMAT:
        entry = result.get(action.column) or ColumnSchema(dataType=DataType.DATE)
        new_format = action.new_format.upper()
        separator = "/" if "/" in new_format else "-"
        result[action.column] = entry.model_copy(
            update={"format": new_format, "separator": separator}
        )

    elif action_type == ActionType.CHANGE_SEPARATOR:
        entry = result.get(action.column)
        if entry is not None:
            update: dict[str, Any] = {"separator": action.new_separator}
            if entry.format:
                separator = action.new_separator
                update["format"] = _BETWEEN_FIELDS.sub(lambda _: separator, entry.format)
            result[action.column] = entry.model_copy(update=update)

    elif action_type in _MULTI_COLUMN_ACTIONS:
        result.setdefault(action.update, ColumnSchema(dataType=DataType.FLOAT))

    elif action_type == ActionType.GENERATE_UNIQUE_ID:
        column = action.column_name or action.column
        data_type = DataType.INTEGER if (action.id_type or "").upper() == "AUTOINCREMENT" else DataType.STRING
        result[column] = ColumnSchema(dataType=data_type, unique=True)

    return result
