# =============================================================================
# cleaning_actions/operators/base.py - Shared Operator Helpers
# =============================================================================
# Row-mapping helpers used by every operator module.
#
# Operators never mutate the rows they receive: each helper builds new row
# dicts, so a caller holding the input dataset never observes a change.
# =============================================================================

from __future__ import annotations

from typing import Any, Callable

from cleaning_actions.exceptions import MissingParameterError
from cleaning_actions.types import ActionDescriptor, Dataset


def require(action: ActionDescriptor, name: str, wire_name: str | None = None) -> Any:
    """Return a parameter value or raise MissingParameterError."""
    if not action.provided(name):
        raise MissingParameterError(action.type, wire_name or name)
    return getattr(action, name)


def map_column(rows: Dataset, column: str, func: Callable[[Any], Any]) -> Dataset:
    """
    Apply func to one column of every row that has it.

    Rows without the column are copied unchanged, which matches how the
    operators treat an absent key: as "not a value", never as an error.
    """
    result = []
    for row in rows:
        if column in row:
            result.append({**row, column: func(row[column])})
        else:
            result.append(dict(row))
    return result


def set_column(rows: Dataset, column: str, values: list[Any]) -> Dataset:
    """Write one value per row into column (adding it where absent)."""
    return [{**row, column: value} for row, value in zip(rows, values)]


def copy_rows(rows: Dataset) -> Dataset:
    return [dict(row) for row in rows]
