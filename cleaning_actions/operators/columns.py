# =============================================================================
# cleaning_actions/operators/columns.py - Column Operations
# =============================================================================
# Operators that remove, rename, retype or add whole columns.
# Column-set changes are applied uniformly to every row.
# =============================================================================

from __future__ import annotations

import uuid
from typing import Any

from cleaning_actions.coercion import stringify, to_boolean, to_iso_date, to_number
from cleaning_actions.exceptions import InvalidParameterError, MissingParameterError
from cleaning_actions.operators.base import map_column, require, set_column
from cleaning_actions.registry import register
from cleaning_actions.types import ActionContext, ActionDescriptor, ActionType, Dataset


# =============================================================================
# DELETE_COLUMN
# =============================================================================

@register(
    ActionType.DELETE_COLUMN,
    category="columns",
    description="Remove a column from every row",
    required=("column",),
)
def delete_column(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    column = require(action, "column")
    return [{k: v for k, v in row.items() if k != column} for row in rows]


# =============================================================================
# RENAME_COLUMN
# =============================================================================

@register(
    ActionType.RENAME_COLUMN,
    category="columns",
    description="Rename a column, keeping its position and values",
    required=("from_", "to"),
)
def rename_column(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    old = require(action, "from_", "from")
    new = require(action, "to")

    result = []
    for row in rows:
        if old not in row or old == new:
            result.append(dict(row))
            continue
        # An existing column named `new` is overwritten by the renamed one
        renamed = {}
        for key, value in row.items():
            if key == old:
                renamed[new] = value
            elif key != new:
                renamed[key] = value
        result.append(renamed)
    return result


# =============================================================================
# CONVERT_DATA_TYPES
# =============================================================================

def _convert(value: Any, data_type: str) -> Any:
    if value is None:
        return None
    if data_type == "NUMBER":
        return to_number(value)
    if data_type == "STRING":
        return stringify(value)
    if data_type == "BOOLEAN":
        return to_boolean(value)
    return to_iso_date(value)


@register(
    ActionType.CONVERT_DATA_TYPES,
    category="columns",
    description="Convert a column to NUMBER, STRING, BOOLEAN or DATE; failed conversions become null",
    required=("column", "data_type"),
)
def convert_data_types(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    column = require(action, "column")
    data_type = require(action, "data_type", "dataType").upper()

    if data_type not in ("NUMBER", "STRING", "BOOLEAN", "DATE"):
        raise InvalidParameterError(action.type, "dataType", f"unsupported type '{data_type}'")

    return map_column(rows, column, lambda value: _convert(value, data_type))


# =============================================================================
# GENERATE_UNIQUE_ID
# =============================================================================

@register(
    ActionType.GENERATE_UNIQUE_ID,
    category="columns",
    description="Add an identifier column: a random UUID or a 1-based row position",
    required=("id_type",),
    optional=("column_name",),
)
def generate_unique_id(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    column = action.column_name or action.column
    if not column:
        raise MissingParameterError(action.type, "columnName")

    id_type = require(action, "id_type", "idType").upper()
    if id_type == "UUID":
        values = [str(uuid.uuid4()) for _ in rows]
    elif id_type == "AUTOINCREMENT":
        # Position in the dataset as it is now, not the original upload order
        values = list(range(1, len(rows) + 1))
    else:
        raise InvalidParameterError(action.type, "idType", f"expected UUID or AUTOINCREMENT, got '{id_type}'")

    return set_column(rows, column, values)
