from __future__ import annotations

from typing import Any, NamedTuple

NULL_FIELD_TEXT = 'null'


class FormattedValue(NamedTuple):
    text: str
    align: str  # "left" | "right"


def is_numeric(value: Any) -> bool:
    """JSON numbers only; booleans are ints in Python but never numeric cells."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def format_value(value: Any) -> FormattedValue:
    """Format a table cell. Absent values render as empty text."""
    if value is None:
        return FormattedValue('', 'left')
    if is_numeric(value):
        return FormattedValue(str(value), 'right')
    return FormattedValue(str(value), 'left')


def format_field_value(value: Any) -> str:
    """Format a FieldSet entry. Absent values render as the literal 'null'."""
    if value is None:
        return NULL_FIELD_TEXT
    return format_value(value).text


def cell_text(value: Any) -> str:
    return format_value(value).text
