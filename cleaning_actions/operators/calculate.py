# =============================================================================
# cleaning_actions/operators/calculate.py - Arithmetic Operations
# =============================================================================
# Column arithmetic:
#
# - Constant operators (ADDITION_TO_COLUMN, ..., ROUND_COLUMN) change one
#   column in place. Only numeric cells change; text like "abc" is left alone.
# - Multi-column operators fold the listed columns left to right and write
#   the result into the 'update' column (created if absent).
# =============================================================================

from __future__ import annotations

import math
from typing import Any, Callable

from cleaning_actions.coercion import tidy_number, to_number
from cleaning_actions.exceptions import InvalidParameterError
from cleaning_actions.operators.base import copy_rows, map_column, require
from cleaning_actions.registry import register
from cleaning_actions.types import ActionContext, ActionDescriptor, ActionType, Dataset

Number = int | float


def _operand(action: ActionDescriptor) -> Number:
    raw = require(action, "by")
    number = to_number(raw)
    if number is None:
        raise InvalidParameterError(action.type, "by", f"'{raw}' is not a number")
    return number


def _apply_numeric(rows: Dataset, action: ActionDescriptor, op: Callable[[Number], Number | None]) -> Dataset:
    column = require(action, "column")

    def convert(value: Any) -> Any:
        number = to_number(value)
        if number is None:
            return value
        result = op(number)
        return value if result is None else tidy_number(result)

    return map_column(rows, column, convert)


# =============================================================================
# Constant Arithmetic
# =============================================================================

@register(
    ActionType.ADDITION_TO_COLUMN,
    category="arithmetic",
    description="Add 'by' to every numeric cell of column",
    required=("column", "by"),
)
def addition_to_column(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    by = _operand(action)
    return _apply_numeric(rows, action, lambda x: x + by)


@register(
    ActionType.SUBTRACTION_FROM_COLUMN,
    category="arithmetic",
    description="Subtract 'by' from every numeric cell of column",
    required=("column", "by"),
)
def subtraction_from_column(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    by = _operand(action)
    return _apply_numeric(rows, action, lambda x: x - by)


@register(
    ActionType.MULTIPLICATION_COLUMN,
    category="arithmetic",
    description="Multiply every numeric cell of column by 'by'",
    required=("column", "by"),
)
def multiplication_column(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    by = _operand(action)
    return _apply_numeric(rows, action, lambda x: x * by)


@register(
    ActionType.DIVISION_COLUMN,
    category="arithmetic",
    description="Divide every numeric cell of column by 'by'; a zero divisor changes nothing",
    required=("column", "by"),
)
def division_column(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    by = _operand(action)
    if by == 0:
        require(action, "column")
        return copy_rows(rows)
    return _apply_numeric(rows, action, lambda x: x / by)


# Beyond this a float carries no further decimal digits
_MAX_DECIMALS = 15


def _round_half_up(number: Number, decimals: int) -> Number:
    if isinstance(number, int):
        if decimals >= 0:
            return number
        step = 10 ** -decimals
        return (number + step // 2) // step * step
    factor = 10 ** decimals
    scaled = float(number) * factor
    if not math.isfinite(scaled):
        return number
    return math.floor(scaled + 0.5) / factor


@register(
    ActionType.ROUND_COLUMN,
    category="arithmetic",
    description="Round numeric cells half-up to 'by' decimal places (default 0)",
    required=("column",),
    optional=("by",),
)
def round_column(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    decimals = _operand(action) if action.provided("by") else 0
    if not float(decimals).is_integer():
        raise InvalidParameterError(action.type, "by", f"decimal places must be a whole number, got {decimals}")
    decimals = int(decimals)
    if abs(decimals) > _MAX_DECIMALS:
        raise InvalidParameterError(
            action.type, "by", f"decimal places must be between -{_MAX_DECIMALS} and {_MAX_DECIMALS}, got {decimals}"
        )
    return _apply_numeric(rows, action, lambda x: _round_half_up(x, decimals))


# =============================================================================
# Multi-Column Folds
# =============================================================================

def _fold_columns(
    rows: Dataset,
    action: ActionDescriptor,
    fold: Callable[[list[Number | None]], Number | None],
) -> Dataset:
    columns = require(action, "target_column", "targetColumn")
    update = require(action, "update")

    result = []
    for row in rows:
        values = [to_number(row.get(column)) for column in columns]
        folded = fold(values)
        result.append({**row, update: None if folded is None else tidy_number(folded)})
    return result


def _sum(values: list[Number | None]) -> Number:
    total: Number = 0
    for value in values:
        if value is not None:
            total += value
    return total


def _difference(values: list[Number | None]) -> Number:
    acc: Number = 0
    for index, value in enumerate(values):
        if value is None:
            continue
        acc = value if index == 0 else acc - value
    return acc


def _product(values: list[Number | None]) -> Number:
    acc: Number = 1
    for value in values:
        if value is not None:
            acc *= value
    return acc


def _quotient(values: list[Number | None]) -> Number | None:
    acc: Number | None = None
    for index, value in enumerate(values):
        if value is None or value == 0:
            continue
        if index == 0:
            acc = value
        else:
            # No usable first column: the running quotient counts as 0
            acc = (acc or 0) / value
    return acc


@register(
    ActionType.ADDITION_MULTIPLE_COLUMN,
    category="arithmetic",
    description="Write the sum of targetColumn into update; non-numeric cells are skipped",
    required=("target_column", "update"),
)
def addition_multiple_column(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    return _fold_columns(rows, action, _sum)


@register(
    ActionType.SUBSTRACTION_MULTIPLE_COLUMN,
    category="arithmetic",
    description="Write the first targetColumn minus the rest into update",
    required=("target_column", "update"),
)
def substraction_multiple_column(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    return _fold_columns(rows, action, _difference)


@register(
    ActionType.MULTIPLICATION_MULTIPLE_COLUMN,
    category="arithmetic",
    description="Write the product of targetColumn into update; non-numeric cells are skipped",
    required=("target_column", "update"),
)
def multiplication_multiple_column(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    return _fold_columns(rows, action, _product)


@register(
    ActionType.DIVIDE_MULTIPLE_COLUMN,
    category="arithmetic",
    description="Write the first targetColumn divided by the rest into update; zero divisors are skipped",
    required=("target_column", "update"),
)
def divide_multiple_column(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    return _fold_columns(rows, action, _quotient)
