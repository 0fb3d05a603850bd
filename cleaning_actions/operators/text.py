# =============================================================================
# cleaning_actions/operators/text.py - Text Operations
# =============================================================================
# String operators. Unless noted otherwise they only touch string cells;
# numbers, booleans and nulls pass through unchanged.
#
# Find/replace and keyword extraction match literally by default. Setting
# useRegex on the action treats findText / extractWord as a pattern.
# =============================================================================

from __future__ import annotations

import codecs
import logging
import re
from typing import Any, Callable

from cleaning_actions.coercion import capitalize_word, is_number, stringify, to_number
from cleaning_actions.exceptions import InvalidParameterError, MissingParameterError
from cleaning_actions.operators.base import map_column, require
from cleaning_actions.registry import register
from cleaning_actions.types import ActionContext, ActionDescriptor, ActionType, Dataset

logger = logging.getLogger(__name__)


TEXT_TRANSFORMS = ("UPPERCASE", "LOWERCASE", "CAPITALIZE")

# Wire names -> Python codec names
ENCODINGS = {
    "UTF-8": "utf-8",
    "ASCII": "ascii",
    "ISO-8859-1": "latin-1",
}

_WORD = re.compile(r"\S+")
_TOKEN = re.compile(r"\b[\w']+\b")
_NOT_ALPHANUMERIC = re.compile(r"[^A-Za-z0-9\s]")
_NOT_ALPHANUMERIC_OR_DOT = re.compile(r"[^a-zA-Z0-9.\s]")


def _map_strings(rows: Dataset, column: str, func: Callable[[str], Any]) -> Dataset:
    return map_column(rows, column, lambda value: func(value) if isinstance(value, str) else value)


def _capitalize_words(text: str) -> str:
    return _WORD.sub(lambda match: capitalize_word(match.group(0)), text)


def _compile(action: ActionDescriptor, pattern: str, wire_name: str) -> re.Pattern:
    source = pattern if action.use_regex else re.escape(pattern)
    try:
        return re.compile(source, re.IGNORECASE)
    except re.error as e:
        raise InvalidParameterError(action.type, wire_name, f"invalid pattern: {e}") from e


# =============================================================================
# Casing and Whitespace
# =============================================================================

@register(
    ActionType.TRANSFORM_TEXT,
    category="text",
    description="Change casing: UPPERCASE, LOWERCASE or CAPITALIZE (each word)",
    required=("column", "transform"),
)
def transform_text(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    column = require(action, "column")
    transform = require(action, "transform").upper()

    if transform == "UPPERCASE":
        return _map_strings(rows, column, str.upper)
    if transform == "LOWERCASE":
        return _map_strings(rows, column, str.lower)
    if transform == "CAPITALIZE":
        return _map_strings(rows, column, _capitalize_words)

    raise InvalidParameterError(
        action.type, "transform", f"expected one of {', '.join(TEXT_TRANSFORMS)}, got '{transform}'"
    )


def _standardize(text: str) -> str:
    collapsed = " ".join(text.split())
    return _NOT_ALPHANUMERIC.sub("", _capitalize_words(collapsed))


@register(
    ActionType.STANDARDIZE_TEXT_FORMAT,
    category="text",
    description="Trim and collapse whitespace, capitalize each word, strip non-alphanumerics",
    required=("column",),
)
def standardize_text_format(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    return _map_strings(rows, require(action, "column"), _standardize)


def _trim(text: str) -> str:
    text = re.sub(r"\s*-\s*", "-", text.strip())
    return re.sub(r"\s+", " ", text)


@register(
    ActionType.TRIM_TEXT,
    category="text",
    description="Trim, remove spaces around hyphens and collapse whitespace runs",
    required=("column",),
)
def trim_text(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    return _map_strings(rows, require(action, "column"), _trim)


# =============================================================================
# Find / Replace and Extraction
# =============================================================================

def _cased(match: re.Match, replacement: str) -> str:
    found = match.group(0)
    if found == found.upper():
        return replacement.upper()
    if found == found.lower():
        return replacement.lower()
    return replacement


@register(
    ActionType.REPLACE_TEXT,
    category="text",
    description="Case-insensitive find/replace that keeps the matched casing; literal unless useRegex",
    required=("column", "find_text"),
    optional=("replace_text", "use_regex"),
)
def replace_text(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    column = require(action, "column")
    pattern = _compile(action, require(action, "find_text", "findText"), "findText")
    if action.replace_text is None:
        # An empty string is a valid replacement (delete the match)
        raise MissingParameterError(action.type, "replaceText")

    replacement = action.replace_text
    return _map_strings(rows, column, lambda text: pattern.sub(lambda m: _cased(m, replacement), text))


@register(
    ActionType.EXTRACT_KEYWORDS,
    category="text",
    description="Replace each cell with its first case-insensitive match of extractWord",
    required=("column", "extract_word"),
    optional=("use_regex",),
)
def extract_keywords(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    column = require(action, "column")
    pattern = _compile(action, require(action, "extract_word", "extractWord"), "extractWord")

    def extract(text: str) -> str:
        match = pattern.search(text)
        return match.group(0) if match else text

    return _map_strings(rows, column, extract)


@register(
    ActionType.TOKENIZE_TEXT,
    category="text",
    description="Split text into a list of word tokens (apostrophes kept inside words)",
    required=("column",),
)
def tokenize_text(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    return _map_strings(rows, require(action, "column"), lambda text: _TOKEN.findall(text) or [text])


# =============================================================================
# Encoding
# =============================================================================

def _codec(action: ActionDescriptor) -> str:
    encoding = require(action, "encoding")
    name = ENCODINGS.get(encoding.upper(), encoding)
    try:
        return codecs.lookup(name).name
    except LookupError as e:
        raise InvalidParameterError(action.type, "encoding", f"unknown encoding '{encoding}'") from e


@register(
    ActionType.CONVERT_TEXT_ENCODING,
    category="text",
    description="Round-trip text through an encoding (UTF-8, ASCII, ISO-8859-1); unencodable cells are kept",
    required=("column", "encoding"),
)
def convert_text_encoding(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    column = require(action, "column")
    codec = _codec(action)

    def convert(text: str) -> str:
        try:
            return text.encode(codec).decode(codec)
        except UnicodeError as e:
            logger.warning(f"CONVERT_TEXT_ENCODING: cannot represent {text!r} as {codec}: {e}")
            return text

    return _map_strings(rows, column, convert)


# =============================================================================
# Special Characters
# =============================================================================

def _strip_characters(value: Any, pattern: re.Pattern) -> Any:
    if isinstance(value, str):
        return pattern.sub("", value)
    if is_number(value):
        # Numbers are cleaned in their text form and parsed back
        cleaned = to_number(pattern.sub("", stringify(value)))
        return value if cleaned is None else cleaned
    return value


@register(
    ActionType.REMOVE_SPECIAL_CHARACTERS,
    category="text",
    description="Remove every occurrence of one character (or literal string) from column",
    required=("column", "character"),
)
def remove_special_characters(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    column = require(action, "column")
    pattern = re.compile(re.escape(require(action, "character")))
    return map_column(rows, column, lambda value: _strip_characters(value, pattern))


@register(
    ActionType.REMOVE_ALL_SPECIAL_CHARACTERS,
    category="text",
    description="Remove everything except letters, digits, dots and whitespace",
    required=("column",),
)
def remove_all_special_characters(rows: Dataset, action: ActionDescriptor, context: ActionContext) -> Dataset:
    column = require(action, "column")
    return map_column(rows, column, lambda value: _strip_characters(value, _NOT_ALPHANUMERIC_OR_DOT))
