# =============================================================================
# cleaning_actions/coercion.py - Value Coercion Utilities
# =============================================================================
# Deterministic scalar conversions shared by the operators.
#
# Every function here is total: it returns a value or a "could not convert"
# sentinel (None) and never raises. Operators run over already-dirty data, so
# one bad cell must never abort a batch.
# =============================================================================

from __future__ import annotations

import datetime as dt
import math
import numbers
import re
from typing import Any

import pandas as pd


_INT_LITERAL = re.compile(r"^[+-]?\d+$")


# =============================================================================
# Predicates
# =============================================================================

def is_number(value: Any) -> bool:
    """True for real numbers. Booleans are not numbers here."""
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def is_missing(value: Any) -> bool:
    """A cell counts as missing when it is None or an empty string."""
    return value is None or (isinstance(value, str) and value == "")


def same_value(left: Any, right: Any) -> bool:
    """
    Strict equality between two cell values.

    Numbers compare by value (1 equals 1.0), but a number never equals a
    string or a boolean, and a boolean only equals a boolean.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if is_number(left) and is_number(right):
        return left == right
    return type(left) is type(right) and left == right


def value_key(value: Any) -> tuple:
    """Hashable key that groups cells exactly when same_value() says they match."""
    if value is None:
        return ("null",)
    if isinstance(value, bool):
        return ("bool", value)
    if is_number(value):
        return ("number", float(value))
    if isinstance(value, str):
        return ("text", value)
    return ("other", repr(value))


# =============================================================================
# Conversions
# =============================================================================

def to_number(value: Any) -> int | float | None:
    """
    Convert a cell to a finite number.

    Returns None ("not a number") for None, booleans, empty or non-numeric
    strings, and non-finite values. Integer literals come back as int.

    Example:
        to_number(" 42 ")  # 42
        to_number("3.5")   # 3.5
        to_number("abc")   # None
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, numbers.Integral):
        return int(value)

    if isinstance(value, numbers.Real):
        number = float(value)
        return number if math.isfinite(number) else None

    if isinstance(value, str):
        text = value.strip()
        if not text or "_" in text:
            return None
        if _INT_LITERAL.match(text):
            return int(text)
        try:
            number = float(text)
        except ValueError:
            return None
        return number if math.isfinite(number) else None

    return None


def to_boolean(value: Any) -> bool | None:
    """
    Convert a cell to a boolean.

    Booleans pass through; the strings "true"/"false" (any case, surrounding
    whitespace ignored) map to True/False. Everything else is undetermined
    and returns None so the caller picks the fallback.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    return None


def to_iso_date(value: Any) -> str | None:
    """
    Parse a cell as a date and return it as YYYY-MM-DD, or None if invalid.

    Numbers are treated as epoch milliseconds. Strings go through
    pandas.to_datetime and are normalized to UTC before the date is taken.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, dt.datetime):
        return value.date().isoformat()
    if isinstance(value, dt.date):
        return value.isoformat()

    try:
        if is_number(value):
            if not math.isfinite(float(value)):
                return None
            timestamp = pd.Timestamp(float(value), unit="ms", tz="UTC")
        elif isinstance(value, str):
            text = value.strip()
            if not text:
                return None
            timestamp = pd.to_datetime(text, errors="coerce", utc=True)
        else:
            return None
    except (ValueError, TypeError, OverflowError):
        return None

    if pd.isna(timestamp):
        return None
    return timestamp.strftime("%Y-%m-%d")


def capitalize_word(value: Any) -> Any:
    """First character upper-cased, the rest lower-cased. Non-strings pass through."""
    if not isinstance(value, str):
        return value
    return value[:1].upper() + value[1:].lower()


# =============================================================================
# Rendering
# =============================================================================

def tidy_number(value: int | float) -> int | float:
    """Collapse integral floats to int so 30.0 is stored as 30."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def stringify(value: Any) -> str:
    """
    Render a cell as text.

    Booleans become "true"/"false", integral floats drop the ".0", and
    sequences are joined with commas.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return str(tidy_number(value))
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(item) for item in value)
    return str(value)
