# =============================================================================
# cleaning_actions/operators/dates.py - Date Operations
# =============================================================================
# Operators for date cells stored as text, such as "2024/01/05" or "05-01-2024".
#
# A date-like cell is three digit groups separated by '-', '/', '.', a space,
# or the separator declared in the column schema. Anything else (including
# full ISO timestamps) is left untouched.
# =============================================================================

from __future__ import annotations

import datetime as dt
import re
from typing import Any

from cleaning_actions.exceptions import InvalidParameterError
from cleaning_actions.operators.base import map_column, require
from cleaning_actions.registry import register
from cleaning_actions.types import DATE_FORMATS, ActionContext, ActionDescriptor, ActionType, ColumnSchema, Dataset


_DEFAULT_SEPARATORS = r"[-/.\s]"
_FIELD_TOKENS = re.compile(r"Y+|M+|D+")


def _date_parts(value: Any, column_schema: ColumnSchema | None) -> list[str] | None:
    """Split a cell into its three digit groups, or None when it is not date-like."""
    if not isinstance(value, str):
        return None

    splitter = _DEFAULT_SEPARATORS
    if column_schema is not None and column_schema.separator:
        splitter = f"(?:{_DEFAULT_SEPARATORS}|{re.escape(column_schema.separator)})"

    parts = re.split(splitter, value.strip())
    if len(parts) != 3 or not all(part.isascii() and part.isdecimal() for part in parts):
        return None
    return parts


def _field_order(fmt: str | None) -> str | None:
    """'DD/MM/YYYY' -> 'DMY'. None when the format does not name Y, M and D once each."""
    if not fmt:
        return None
    order = "".join(token[0] for token in _FIELD_TOKENS.findall(fmt.upper()))
    return order if sorted(order) == ["D", "M", "Y"] else None


# =============================================================================
# CHANGE_SEPARATOR
# =============================================================================

@register(
    ActionType.CHANGE_SEPARATOR,
    category="dates",
    description="Rejoin date-like cells with newSeparator, keeping the field order",
    required=("column", "new_separator"),
)
def change_separator(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    column = require(action, "column")
    separator = require(action, "new_separator", "newSeparator")
    column_schema = context.column_schema(column)

    def convert(value: Any) -> Any:
        parts = _date_parts(value, column_schema)
        return separator.join(parts) if parts else value

    return map_column(rows, column, convert)


# =============================================================================
# CHANGE_DATE_FORMAT
# =============================================================================

def _infer_order(parts: list[str]) -> str | None:
    if len(parts[0]) == 4:
        return "YMD"
    if len(parts[2]) == 4:
        # Ambiguous D/M vs M/D: only a first group above 12 proves it is the day
        return "DMY" if int(parts[0]) > 12 else "MDY"
    return None


def _source_order(parts: list[str], declared: str | None) -> str | None:
    # A declared order is only trusted when its year lands on the 4-digit group
    if declared is not None and len(parts[declared.index("Y")]) == 4:
        return declared
    return _infer_order(parts)


def _reformat(
    value: Any,
    declared: str | None,
    target: str,
    separator: str,
    column_schema: ColumnSchema | None,
) -> Any:
    parts = _date_parts(value, column_schema)
    if parts is None:
        return value

    order = _source_order(parts, declared)
    if order is None:
        return value

    fields = dict(zip(order, (int(part) for part in parts)))
    try:
        dt.date(fields["Y"], fields["M"], fields["D"])
    except ValueError:
        return value

    rendered = {
        "Y": f"{fields['Y']:04d}",
        "M": f"{fields['M']:02d}",
        "D": f"{fields['D']:02d}",
    }
    return separator.join(rendered[field] for field in target)


@register(
    ActionType.CHANGE_DATE_FORMAT,
    category="dates",
    description=f"Rewrite date-like cells in newFormat (one of {', '.join(DATE_FORMATS)})",
    required=("column", "new_format"),
)
def change_date_format(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    column = require(action, "column")
    new_format = require(action, "new_format", "newFormat").upper()
    if new_format not in DATE_FORMATS:
        raise InvalidParameterError(
            action.type, "newFormat", f"expected one of {', '.join(DATE_FORMATS)}, got '{new_format}'"
        )

    column_schema = context.column_schema(column)
    declared = _field_order(column_schema.format) if column_schema is not None else None
    target = _field_order(new_format)
    separator = "/" if "/" in new_format else "-"

    return map_column(
        rows,
        column,
        lambda value: _reformat(value, declared, target, separator, column_schema),
    )
