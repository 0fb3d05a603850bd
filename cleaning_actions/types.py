# =============================================================================
# cleaning_actions/types.py - Core Types and Schemas
# =============================================================================
# Defines the types that flow through the action engine:
#
#   ActionType        - discriminant of every action the engine knows
#   ActionDescriptor  - one structured instruction (usually LLM-authored)
#   ColumnSchema      - per-column type and formatting metadata
#   AppliedAction     - audit entry describing what happened to one action
#   ActionContext     - per-call state handed to operators (schema, RNG)
#
# Descriptors arrive as camelCase JSON (e.g. "defaultValue", "targetColumn").
# The models accept those aliases and expose snake_case attributes.
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator


# Type aliases
Row = dict[str, Any]
Dataset = list[Row]


# =============================================================================
# Enums
# =============================================================================

class ActionType(str, Enum):
    """
    Every transformation the engine can dispatch.

    Organized by category:
    - Column operations: remove, rename, add or retype whole columns
    - Value replacement: fill or overwrite individual cells
    - Row operations: delete, deduplicate, sort and limit rows
    - Statistical fills: fill missing cells from the column itself
    - Arithmetic: single-column constants and multi-column aggregates
    - Dates: separator and field-order changes
    - Text: casing, normalization, find/replace, tokenizing, encoding
    """

    # -------------------------------------------------------------------------
    # Column Operations
    # -------------------------------------------------------------------------
    DELETE_COLUMN = "DELETE_COLUMN"
    RENAME_COLUMN = "RENAME_COLUMN"
    CONVERT_DATA_TYPES = "CONVERT_DATA_TYPES"
    GENERATE_UNIQUE_ID = "GENERATE_UNIQUE_ID"

    # -------------------------------------------------------------------------
    # Value Replacement
    # -------------------------------------------------------------------------
    FILL_MISSING = "FILL_MISSING"
    REPLACE_VALUE = "REPLACE_VALUE"
    REPLACE_NEGATIVE_VALUES = "REPLACE_NEGATIVE_VALUES"
    REPLACE_ROW = "REPLACE_ROW"
    REPLACE_COLUMN_VALUES = "REPLACE_COLUMN_VALUES"

    # -------------------------------------------------------------------------
    # Row Operations
    # -------------------------------------------------------------------------
    DELETE_ROWS_WHERE_VALUE_EQUALS = "DELETE_ROWS_WHERE_VALUE_EQUALS"
    DELETE_ROWS_WHERE_VALUE_LESS_THAN = "DELETE_ROWS_WHERE_VALUE_LESS_THAN"
    DELETE_ROWS_WHERE_VALUE_GREATER_THAN = "DELETE_ROWS_WHERE_VALUE_GREATER_THAN"
    DELETE_ROWS_WHERE_VALUE_NOT_IN_RANGE = "DELETE_ROWS_WHERE_VALUE_NOT_IN_RANGE"
    DELETE_ROWS_WITH_NULLS = "DELETE_ROWS_WITH_NULLS"
    DELETE_ROWS_WITH_NEGATIVE_VALUES = "DELETE_ROWS_WITH_NEGATIVE_VALUES"
    DELETE_DUPLICATE_ROWS = "DELETE_DUPLICATE_ROWS"
    KEEP_ONLY_UNIQUE_ROWS = "KEEP_ONLY_UNIQUE_ROWS"
    SORT_ROWS_ASCENDING = "SORT_ROWS_ASCENDING"
    SORT_ROWS_DESCENDING = "SORT_ROWS_DESCENDING"
    LIMIT_ROWS = "LIMIT_ROWS"

    # -------------------------------------------------------------------------
    # Statistical Fills
    # -------------------------------------------------------------------------
    FILL_WITH_AVERAGE = "FILL_WITH_AVERAGE"
    FILL_WITH_MEAN = "FILL_WITH_MEAN"
    FILL_WITH_MODE = "FILL_WITH_MODE"
    FILL_WITH_MEDIAN = "FILL_WITH_MEDIAN"
    FILL_WITH_UPPER_ROW = "FILL_WITH_UPPER_ROW"
    FILL_WITH_LOWER_ROW = "FILL_WITH_LOWER_ROW"
    FILL_WITH_RANDOM = "FILL_WITH_RANDOM"

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------
    ROUND_COLUMN = "ROUND_COLUMN"
    ADDITION_TO_COLUMN = "ADDITION_TO_COLUMN"
    SUBTRACTION_FROM_COLUMN = "SUBTRACTION_FROM_COLUMN"
    MULTIPLICATION_COLUMN = "MULTIPLICATION_COLUMN"
    DIVISION_COLUMN = "DIVISION_COLUMN"
    ADDITION_MULTIPLE_COLUMN = "ADDITION_MULTIPLE_COLUMN"
    SUBSTRACTION_MULTIPLE_COLUMN = "SUBSTRACTION_MULTIPLE_COLUMN"
    MULTIPLICATION_MULTIPLE_COLUMN = "MULTIPLICATION_MULTIPLE_COLUMN"
    DIVIDE_MULTIPLE_COLUMN = "DIVIDE_MULTIPLE_COLUMN"

    # -------------------------------------------------------------------------
    # Dates
    # -------------------------------------------------------------------------
    CHANGE_SEPARATOR = "CHANGE_SEPARATOR"
    CHANGE_DATE_FORMAT = "CHANGE_DATE_FORMAT"

    # -------------------------------------------------------------------------
    # Text
    # -------------------------------------------------------------------------
    TRANSFORM_TEXT = "TRANSFORM_TEXT"
    STANDARDIZE_TEXT_FORMAT = "STANDARDIZE_TEXT_FORMAT"
    REPLACE_TEXT = "REPLACE_TEXT"
    TRIM_TEXT = "TRIM_TEXT"
    EXTRACT_KEYWORDS = "EXTRACT_KEYWORDS"
    TOKENIZE_TEXT = "TOKENIZE_TEXT"
    CONVERT_TEXT_ENCODING = "CONVERT_TEXT_ENCODING"
    REMOVE_SPECIAL_CHARACTERS = "REMOVE_SPECIAL_CHARACTERS"
    REMOVE_ALL_SPECIAL_CHARACTERS = "REMOVE_ALL_SPECIAL_CHARACTERS"

    @classmethod
    def parse(cls, value: str) -> "ActionType | None":
        """Look up a wire string, returning None for unknown types."""
        try:
            return cls(value)
        except ValueError:
            return None


class ActionStatus(str, Enum):
    """Outcome of one action in a batch."""
    APPLIED = "APPLIED"
    SKIPPED = "SKIPPED"   # Unknown action type
    FAILED = "FAILED"     # Known type, but the action could not be applied


class DataType(str, Enum):
    """Declared column types, as produced by the upload wizard."""
    STRING = "String"
    INTEGER = "Integer"
    FLOAT = "Float"
    BOOLEAN = "Boolean"
    DATE = "Date"
    DATETIME = "DateTime"


class IssueType(str, Enum):
    """Issue categories reported by the detection service."""
    NULL_VALUE = "NULL_VALUE"
    DUPLICATE_VALUE = "DUPLICATE_VALUE"
    TYPE_MISMATCH = "TYPE_MISMATCH"
    INVALID_VALUE = "INVALID_VALUE"
    INVALID_FORMAT = "INVALID_FORMAT"
    INVALID_SEPARATOR = "INVALID_SEPARATOR"
    INVALID_DATE = "INVALID_DATE"


# Date formats accepted by CHANGE_DATE_FORMAT
DATE_FORMATS = [
    "YYYY/MM/DD",
    "DD/MM/YYYY",
    "MM/DD/YYYY",
    "YYYY-MM-DD",
    "DD-MM-YYYY",
    "MM-DD-YYYY",
]

# Characters accepted by REMOVE_SPECIAL_CHARACTERS
SPECIAL_CHARACTERS = [
    "@", "#", "$", "%", "^", "&", "*", "(", ")", "-", "_", "+", "=",
    "{", "}", "[", "]", "|", ";", ":", "'", "\"", "<", ">", ",", ".",
    "?", "/", "`", "~",
]


# =============================================================================
# Column Schema
# =============================================================================

class ColumnSchema(BaseModel):
    """
    Declared metadata for one column.

    Operators that need type context read it: statistical fills use it to
    decide which cells are invalid, date operators use format/separator to
    know the current field order.
    """

    model_config = ConfigDict(populate_by_name=True)

    data_type: DataType = Field(default=DataType.STRING, alias="dataType")
    unique: bool = False
    numeric_sign: str | None = Field(default=None, alias="numericSign")
    precision: int | None = None
    format: str | None = None
    separator: str | None = None
    desc: str | None = None

    @field_validator("data_type", mode="before")
    @classmethod
    def map_data_type(cls, v: Any) -> Any:
        # Unknown types (including "Time") are treated as free text
        if isinstance(v, DataType):
            return v
        try:
            return DataType(v)
        except ValueError:
            return DataType.STRING

    def to_wire(self) -> dict[str, Any]:
        """Serialize with the camelCase keys the client expects."""
        return self.model_dump(by_alias=True, mode="json")


Schema = dict[str, ColumnSchema]


def parse_schema(raw: dict[str, Any] | None) -> Schema:
    """
    Build a Schema from a wire-format mapping.

    Accepts either ColumnSchema instances or plain dicts with camelCase keys.
    """
    if not raw:
        return {}
    return {
        name: entry if isinstance(entry, ColumnSchema) else ColumnSchema.model_validate(entry or {})
        for name, entry in raw.items()
    }


# =============================================================================
# Action Descriptor
# =============================================================================

class ActionDescriptor(BaseModel):
    """
    One structured instruction to transform the dataset.

    Only 'type' is always required; which other fields are needed depends on
    the action (see the operator registry). 'title' and 'response' are
    narrative fields authored by the language model and passed through to
    the audit trail unchanged.

    Example:
        ActionDescriptor.model_validate({
            "type": "FILL_MISSING",
            "column": "age",
            "defaultValue": 0,
            "title": "Filled missing ages",
            "response": "Every empty age was set to 0.",
        })
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="allow")

    type: str

    # Column targeting
    column: str | None = None
    columns: list[str] | None = None
    target_column: list[str] | None = Field(default=None, alias="targetColumn")
    update: str | None = None
    column_name: str | None = Field(default=None, alias="columnName")
    from_: str | None = Field(default=None, alias="from")
    to: str | None = None

    # Literal values
    default_value: Any = Field(default=None, alias="defaultValue")
    old_value: Any = Field(default=None, alias="oldValue")
    new_value: Any = Field(default=None, alias="newValue")
    value: Any = None
    min_value: Any = Field(default=None, alias="minValue")
    max_value: Any = Field(default=None, alias="maxValue")
    by: Any = None
    count: int | None = None
    row_number: int | None = Field(default=None, alias="rowNumber")
    new_values: dict[str, Any] | None = Field(default=None, alias="newValues")

    # Text
    find_text: str | None = Field(default=None, alias="findText")
    replace_text: str | None = Field(default=None, alias="replaceText")
    extract_word: str | None = Field(default=None, alias="extractWord")
    use_regex: bool = Field(default=False, alias="useRegex")
    transform: str | None = None
    encoding: str | None = None
    character: str | None = None

    # Types and formats
    data_type: str | None = Field(default=None, alias="dataType")
    new_format: str | None = Field(default=None, alias="newFormat")
    new_separator: str | None = Field(default=None, alias="newSeparator")
    id_type: str | None = Field(default=None, alias="idType")
    issue_type: str | None = Field(default=None, alias="issueType")

    # Narrative
    title: str = ""
    response: str = ""

    @field_validator("target_column", "columns", mode="before")
    @classmethod
    def wrap_single_column(cls, v: Any) -> Any:
        if isinstance(v, str):
            return [v]
        return v

    @field_validator("title", "response", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @property
    def action_type(self) -> ActionType | None:
        """The parsed ActionType, or None when the type is unknown."""
        return ActionType.parse(self.type)

    def provided(self, name: str) -> bool:
        """True when a parameter was sent with a usable (non-null, non-empty) value."""
        value = getattr(self, name, None)
        if value is None:
            return False
        if isinstance(value, (str, list, dict)) and len(value) == 0:
            return False
        return True

    def to_wire(self) -> dict[str, Any]:
        """Serialize back to camelCase, dropping unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


# =============================================================================
# Applied-Action Record
# =============================================================================

class AppliedAction(BaseModel):
    """
    Audit entry for one action in a batch.

    The narrative is kept whatever the status, so the client can show what
    was attempted as well as what happened.
    """

    index: int = Field(..., ge=0, description="Position of the action in the batch")
    type: str = Field(..., description="Action type as received")
    title: str = ""
    response: str = ""
    status: ActionStatus
    reason: str | None = Field(default=None, description="Why the action was skipped or failed")
    rows_before: int = Field(default=0, ge=0)
    rows_after: int = Field(default=0, ge=0)

    @property
    def applied(self) -> bool:
        return self.status == ActionStatus.APPLIED

    @property
    def rows_changed(self) -> int:
        return self.rows_after - self.rows_before


# =============================================================================
# Action Context
# =============================================================================

@dataclass
class ActionContext:
    """
    Per-call state passed to every operator.

    A fresh context is built for each apply_actions() call, so nothing
    leaks between requests.
    """
    schema: Schema = field(default_factory=dict)
    rng: np.random.Generator = field(default_factory=np.random.default_rng)

    def column_schema(self, column: str | None) -> ColumnSchema | None:
        if column is None:
            return None
        return self.schema.get(column)
