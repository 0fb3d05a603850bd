# =============================================================================
# cleaning_actions/registry.py - Operator Registry
# =============================================================================
# Maps ActionType values to operator functions.
#
# Each operator takes (rows, action, context) and returns a new list of rows.
# Operators are registered with the @register decorator, which also records
# the parameters the dispatcher must check before calling the operator.
#
# Example:
#   @register(
#       ActionType.DELETE_COLUMN,
#       category="columns",
#       description="Remove a column from every row",
#       required=("column",),
#   )
#   def delete_column(rows, action, context):
#       return [{k: v for k, v in row.items() if k != action.column} for row in rows]
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from cleaning_actions.types import ActionContext, ActionDescriptor, ActionType, Dataset


# Type alias for operator functions
OperatorFunc = Callable[[Dataset, ActionDescriptor, ActionContext], Dataset]


@dataclass(frozen=True)
class OperatorSpec:
    """Registered operator plus the metadata used for validation and docs."""
    action_type: ActionType
    func: OperatorFunc
    category: str
    description: str
    required: tuple[str, ...] = ()
    optional: tuple[str, ...] = ()

    def missing_parameters(self, action: ActionDescriptor) -> list[str]:
        """Names of required parameters the action did not provide."""
        return [name for name in self.required if not action.provided(name)]


# Global registry: ActionType -> OperatorSpec
OPERATOR_REGISTRY: dict[ActionType, OperatorSpec] = {}


def register(
    action_type: ActionType,
    *,
    category: str,
    description: str,
    required: tuple[str, ...] = (),
    optional: tuple[str, ...] = (),
):
    """
    Decorator to register an operator function.

    Usage:
        @register(ActionType.TRIM_TEXT, category="text",
                  description="Trim whitespace", required=("column",))
        def trim_text(rows, action, context):
            ...
            return new_rows
    """
    def decorator(func: OperatorFunc) -> OperatorFunc:
        if action_type in OPERATOR_REGISTRY:
            raise ValueError(f"Operator for '{action_type.value}' is already registered")
        OPERATOR_REGISTRY[action_type] = OperatorSpec(
            action_type=action_type,
            func=func,
            category=category,
            description=description,
            required=required,
            optional=optional,
        )
        return func
    return decorator


def get_operator(action_type: ActionType | str) -> OperatorSpec | None:
    """
    Get the registered operator for an action type.

    Args:
        action_type: ActionType enum or its string value

    Returns:
        The OperatorSpec, or None if the type is unknown
    """
    if not isinstance(action_type, ActionType):
        action_type = ActionType.parse(action_type)
        if action_type is None:
            return None
    return OPERATOR_REGISTRY.get(action_type)


def list_actions(category: str | None = None) -> list[str]:
    """
    List registered action types.

    Args:
        category: If provided, filter by category (e.g., "rows", "text")
    """
    return [
        spec.action_type.value
        for spec in OPERATOR_REGISTRY.values()
        if category is None or spec.category == category
    ]


def wire_name(name: str) -> str:
    # Parameter names are stored in snake_case; the wire uses camelCase
    if name == "from_":
        return "from"
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def describe_actions() -> list[dict]:
    """Registry contents as plain dicts (wire parameter names)."""
    return [
        {
            "type": spec.action_type.value,
            "category": spec.category,
            "description": spec.description,
            "required": [wire_name(p) for p in spec.required],
            "optional": [wire_name(p) for p in spec.optional],
        }
        for spec in OPERATOR_REGISTRY.values()
    ]


def export_action_catalogue() -> str:
    """
    Export the action catalogue as a bullet list.

    Used to build the planner's system prompt, so the model only ever sees
    actions the engine can actually run.
    """
    lines = []
    for entry in describe_actions():
        fields = ", ".join(
            [f'{p}: <{p}>' for p in entry["required"]]
            + [f'{p}?: <{p}>' for p in entry["optional"]]
        )
        shape = f'{{ type: "{entry["type"]}"' + (f", {fields}" if fields else "") + " }"
        lines.append(f"- {entry['type']}: {shape} - {entry['description']}")
    return "\n".join(lines)
