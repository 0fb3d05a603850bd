# =============================================================================
# cleaning_actions/operators/fills.py - Statistical Fills
# =============================================================================
# FILL_WITH_* operators: fill problem cells from the column's own values.
#
# Which cells are filled is decided by is_fill_target() (missing cells, plus
# schema violations when an issueType other than NULL_VALUE is given). The
# source values are the column's remaining valid cells.
# =============================================================================

from __future__ import annotations

from collections import Counter
from typing import Any, Callable

import pandas as pd

from cleaning_actions.coercion import tidy_number, to_number, value_key
from cleaning_actions.operators.base import copy_rows, require
from cleaning_actions.registry import register
from cleaning_actions.schema import is_fill_target, is_valid_source
from cleaning_actions.types import ActionContext, ActionDescriptor, ActionType, Dataset


def _split_column(rows: Dataset, action: ActionDescriptor, context: ActionContext):
    """Return (column, target flags per row, valid source values in row order)."""
    column = require(action, "column")
    column_schema = context.column_schema(column)

    targets = []
    sources = []
    for row in rows:
        if column not in row:
            targets.append(False)
            continue
        value = row[column]
        is_target = is_fill_target(value, action.issue_type, column_schema)
        targets.append(is_target)
        if not is_target and is_valid_source(value, column_schema):
            sources.append(value)
    return column, targets, sources


def _fill_with_constant(
    rows: Dataset,
    action: ActionDescriptor,
    context: ActionContext,
    pick: Callable[[list[Any]], Any],
) -> Dataset:
    column, targets, sources = _split_column(rows, action, context)
    fill = pick(sources)
    if fill is None:
        return copy_rows(rows)
    return [
        {**row, column: fill} if is_target else dict(row)
        for row, is_target in zip(rows, targets)
    ]


def _numeric_sources(sources: list[Any]) -> pd.Series:
    numbers = [n for n in (to_number(v) for v in sources) if n is not None]
    return pd.Series(numbers, dtype="float64")


def _mean(sources: list[Any]) -> Any:
    series = _numeric_sources(sources)
    if series.empty:
        return None
    return tidy_number(float(series.mean()))


def _median(sources: list[Any]) -> Any:
    series = _numeric_sources(sources)
    if series.empty:
        return None
    return tidy_number(float(series.median()))


def _mode(sources: list[Any]) -> Any:
    # Keyed like same_value(): a boolean never counts as a number
    counts: Counter = Counter()
    first_seen: dict[tuple, Any] = {}
    for value in sources:
        key = value_key(value)
        counts[key] += 1
        first_seen.setdefault(key, value)
    if not counts:
        return None
    # most_common keeps first-seen order among equal counts
    return first_seen[counts.most_common(1)[0][0]]


# =============================================================================
# Mean / Average / Median / Mode
# =============================================================================

@register(
    ActionType.FILL_WITH_AVERAGE,
    category="fills",
    description="Fill missing or invalid cells with the column's numeric average",
    required=("column",),
    optional=("issue_type",),
)
def fill_with_average(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    return _fill_with_constant(rows, action, context, _mean)


@register(
    ActionType.FILL_WITH_MEAN,
    category="fills",
    description="Fill missing or invalid cells with the column's numeric mean",
    required=("column",),
    optional=("issue_type",),
)
def fill_with_mean(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    return _fill_with_constant(rows, action, context, _mean)


@register(
    ActionType.FILL_WITH_MEDIAN,
    category="fills",
    description="Fill missing or invalid cells with the column's numeric median",
    required=("column",),
    optional=("issue_type",),
)
def fill_with_median(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    return _fill_with_constant(rows, action, context, _median)


@register(
    ActionType.FILL_WITH_MODE,
    category="fills",
    description="Fill missing or invalid cells with the column's most frequent value",
    required=("column",),
    optional=("issue_type",),
)
def fill_with_mode(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    return _fill_with_constant(rows, action, context, _mode)


# =============================================================================
# Forward / Backward Fill
# =============================================================================

def _fill_from_neighbour(rows: Dataset, action: ActionDescriptor, context: ActionContext, backward: bool) -> Dataset:
    column, targets, _ = _split_column(rows, action, context)
    column_schema = context.column_schema(column)

    result = copy_rows(rows)
    order = range(len(result) - 1, -1, -1) if backward else range(len(result))
    last_valid = None
    has_valid = False

    for i in order:
        row = result[i]
        if column not in row:
            continue
        if targets[i]:
            if has_valid:
                row[column] = last_valid
        elif is_valid_source(row[column], column_schema):
            last_valid = row[column]
            has_valid = True
    return result


@register(
    ActionType.FILL_WITH_UPPER_ROW,
    category="fills",
    description="Forward fill: take the nearest valid value from the rows above",
    required=("column",),
    optional=("issue_type",),
)
def fill_with_upper_row(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    return _fill_from_neighbour(rows, action, context, backward=False)


@register(
    ActionType.FILL_WITH_LOWER_ROW,
    category="fills",
    description="Backward fill: take the nearest valid value from the rows below",
    required=("column",),
    optional=("issue_type",),
)
def fill_with_lower_row(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    return _fill_from_neighbour(rows, action, context, backward=True)


# =============================================================================
# Random Fill
# =============================================================================

@register(
    ActionType.FILL_WITH_RANDOM,
    category="fills",
    description="Fill missing or invalid cells with a random valid value from the same column",
    required=("column",),
    optional=("issue_type",),
)
def fill_with_random(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    column, targets, sources = _split_column(rows, action, context)
    if not sources:
        return copy_rows(rows)

    result = []
    for row, is_target in zip(rows, targets):
        if is_target:
            pick = sources[int(context.rng.integers(len(sources)))]
            result.append({**row, column: pick})
        else:
            result.append(dict(row))
    return result
