# =============================================================================
# cleaning_actions/engine.py - Action Dispatcher
# =============================================================================
# Applies a list of action descriptors to a dataset, strictly in order.
#
# A single bad action never aborts the batch:
#   - unknown type          -> recorded as SKIPPED, batch continues
#   - invalid / incomplete  -> recorded as FAILED, dataset unchanged for that step
#   - operator error        -> recorded as FAILED, dataset unchanged for that step
#
# Only a structurally invalid action list (not a list, or an entry without a
# 'type') raises, since that is the caller's precondition.
# =============================================================================

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

import numpy as np
import pandas as pd
from pydantic import ValidationError

from cleaning_actions.exceptions import ActionError, InvalidActionListError
from cleaning_actions.operators.base import copy_rows
from cleaning_actions.registry import get_operator, wire_name
from cleaning_actions.schema import evolve_schema
from cleaning_actions.summary import SummaryGenerator, TemplateSummaryGenerator
from cleaning_actions.types import (
    ActionContext,
    ActionDescriptor,
    ActionStatus,
    AppliedAction,
    Dataset,
    Schema,
    parse_schema,
)

logger = logging.getLogger(__name__)


@dataclass
class ApplyResult:
    """
    Result of applying a batch of actions.

    Contains the final dataset, the schema after column-affecting actions,
    and one audit record per action in the batch.
    """
    dataset: Dataset
    schema: Schema = field(default_factory=dict)
    actions: list[AppliedAction] = field(default_factory=list)
    summary: str | None = None
    duration_ms: float = 0.0

    @property
    def applied(self) -> list[AppliedAction]:
        return [a for a in self.actions if a.status == ActionStatus.APPLIED]

    @property
    def skipped(self) -> list[AppliedAction]:
        return [a for a in self.actions if a.status == ActionStatus.SKIPPED]

    @property
    def failed(self) -> list[AppliedAction]:
        return [a for a in self.actions if a.status == ActionStatus.FAILED]

    @property
    def narratives(self) -> list[dict[str, str]]:
        """Title/response pairs of the applied actions, in order."""
        return [{"title": a.title, "response": a.response} for a in self.applied]

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame.from_records(self.dataset)


def _check_action_list(actions: Any) -> None:
    if not isinstance(actions, (list, tuple)):
        raise InvalidActionListError(
            f"Actions must be a list, got {type(actions).__name__}",
            details={"received_type": type(actions).__name__},
        )

    for index, action in enumerate(actions):
        if isinstance(action, ActionDescriptor):
            continue
        if not isinstance(action, Mapping):
            raise InvalidActionListError(
                f"Action {index} must be an object, got {type(action).__name__}",
                details={"index": index},
            )
        if action.get("type") in (None, ""):
            raise InvalidActionListError(f"Action {index} has no 'type'", details={"index": index})


def _validation_reason(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'action'}: {err['msg']}"
        for err in error.errors()
    )


class ActionEngine:
    """
    Dispatches action descriptors to registered operators.

    The engine holds configuration only; every call builds a fresh
    ActionContext, so one engine can serve many requests.

    Usage:
        engine = ActionEngine()
        result = engine.apply_actions(
            [{"name": "Ada", "age": None}],
            [{"type": "FILL_MISSING", "column": "age", "defaultValue": 0}],
        )
        result.dataset   # [{"name": "Ada", "age": 0}]
        result.summary   # "1 change was applied to the dataset."
    """

    def __init__(self, summary_generator: SummaryGenerator | None = None, seed: int | None = None):
        """
        Args:
            summary_generator: Turns applied-action responses into one summary.
                               Defaults to the deterministic template generator.
            seed: Seeds the random generator used by FILL_WITH_RANDOM.
        """
        self.summary_generator = summary_generator or TemplateSummaryGenerator()
        self.seed = seed

    def apply_actions(
        self,
        dataset: Dataset,
        actions: Sequence[dict[str, Any] | ActionDescriptor],
        schema: Mapping[str, Any] | None = None,
        summarize: bool = True,
    ) -> ApplyResult:
        """
        Apply actions in order and return the transformed dataset.

        Args:
            dataset: List of row dicts. Never modified.
            actions: Action descriptors (wire dicts or ActionDescriptor).
            schema: Column schema, as ColumnSchema entries or camelCase dicts.
            summarize: Set False to skip the summary generator.

        Raises:
            InvalidActionListError: actions is not a list, or an entry has no type
        """
        _check_action_list(actions)
        start_time = time.time()

        context = ActionContext(
            schema=parse_schema(dict(schema) if schema else None),
            rng=np.random.default_rng(self.seed),
        )
        current = copy_rows(dataset)
        records: list[AppliedAction] = []

        for index, raw in enumerate(actions):
            current, record = self._apply_one(index, raw, current, context)
            records.append(record)

        summary = None
        if summarize:
            summary = self.summary_generator.summarize(
                [r.response for r in records if r.status == ActionStatus.APPLIED]
            )

        result = ApplyResult(
            dataset=current,
            schema=context.schema,
            actions=records,
            summary=summary,
            duration_ms=(time.time() - start_time) * 1000,
        )
        logger.info(
            f"Applied {len(result.applied)}/{len(records)} actions "
            f"({len(result.skipped)} skipped, {len(result.failed)} failed), "
            f"{len(dataset)} -> {len(current)} rows in {result.duration_ms:.1f}ms"
        )
        return result

    def _apply_one(
        self,
        index: int,
        raw: dict[str, Any] | ActionDescriptor,
        rows: Dataset,
        context: ActionContext,
    ) -> tuple[Dataset, AppliedAction]:
        if isinstance(raw, ActionDescriptor):
            raw_type, title, response = raw.type, raw.title, raw.response
        else:
            raw_type = str(raw.get("type"))
            title = str(raw.get("title") or "")
            response = str(raw.get("response") or "")

        def record(status: ActionStatus, reason: str | None = None, after: Dataset = rows) -> AppliedAction:
            return AppliedAction(
                index=index,
                type=raw_type,
                title=title,
                response=response,
                status=status,
                reason=reason,
                rows_before=len(rows),
                rows_after=len(after),
            )

        try:
            action = raw if isinstance(raw, ActionDescriptor) else ActionDescriptor.model_validate(raw)
        except ValidationError as e:
            reason = _validation_reason(e)
            logger.warning(f"Action {index} ({raw_type}) failed validation: {reason}")
            return rows, record(ActionStatus.FAILED, reason)

        spec = get_operator(action.type)
        if spec is None:
            logger.warning(f"Action {index}: unknown type '{action.type}', skipping")
            return rows, record(ActionStatus.SKIPPED, f"Unknown action type '{action.type}'")

        missing = spec.missing_parameters(action)
        if missing:
            reason = f"Missing required parameter(s): {', '.join(wire_name(m) for m in missing)}"
            logger.warning(f"Action {index} ({action.type}): {reason}")
            return rows, record(ActionStatus.FAILED, reason)

        logger.debug(f"Action {index}: {action.type} on {len(rows)} rows")
        try:
            result = spec.func(rows, action, context)
            schema = evolve_schema(context.schema, action)
        except ActionError as e:
            logger.warning(f"Action {index} ({action.type}) failed: {e.message}")
            return rows, record(ActionStatus.FAILED, e.message)
        except Exception as e:
            logger.exception(f"Action {index} ({action.type}) raised unexpectedly")
            return rows, record(ActionStatus.FAILED, f"Unexpected error: {e}")

        # Rows and schema move forward together, only once both succeeded
        context.schema = schema
        return result, record(ActionStatus.APPLIED, after=result)

    def validate_actions(self, actions: Sequence[dict[str, Any] | ActionDescriptor]) -> tuple[bool, list[str]]:
        """
        Validate actions without executing them.

        Checks that every type is known and required parameters are present.

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        _check_action_list(actions)
        errors = []

        for index, raw in enumerate(actions):
            try:
                action = raw if isinstance(raw, ActionDescriptor) else ActionDescriptor.model_validate(raw)
            except ValidationError as e:
                errors.append(f"Action {index}: {_validation_reason(e)}")
                continue

            spec = get_operator(action.type)
            if spec is None:
                errors.append(f"Action {index}: Unknown action type '{action.type}'")
                continue

            for name in spec.missing_parameters(action):
                errors.append(f"Action {index}: {action.type} requires '{wire_name(name)}'")

        return len(errors) == 0, errors


def apply_actions(
    dataset: Dataset,
    actions: Sequence[dict[str, Any] | ActionDescriptor],
    schema: Mapping[str, Any] | None = None,
    summary_generator: SummaryGenerator | None = None,
) -> ApplyResult:
    """Apply actions with a default engine. See ActionEngine.apply_actions."""
    return ActionEngine(summary_generator=summary_generator).apply_actions(dataset, actions, schema)


def validate_actions(actions: Sequence[dict[str, Any] | ActionDescriptor]) -> tuple[bool, list[str]]:
    return ActionEngine().validate_actions(actions)
