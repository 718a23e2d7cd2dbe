"""Source spans and runtime value helpers for Numerus++.

Numerus++ has two runtime types, Number and String, represented directly
by Python ``int`` and ``str``. This module defines the numeric bounds the
interpreter enforces, the rules for rendering values as text, and the
``Span`` record that ties tokens, AST nodes, errors and diagnostics back to
the source.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .roman import MAX_ROMAN, MIN_ROMAN, to_roman


# Runtime numbers are signed 32-bit integers.
MIN_NUMBER = -2 ** 31
MAX_NUMBER = 2 ** 31 - 1

# Numeric literals written in source.
MAX_LITERAL = MAX_ROMAN


@dataclass(frozen=True)
class Span:
    """A region of source text.

    ``start`` and ``end`` are 0-based character offsets (``end`` is
    exclusive). Lines and columns are 1-based; ``end_column`` is the column
    just past the last character.
    """
    start: int
    end: int
    line: int
    column: int
    end_line: int
    end_column: int

    def merge(self, other: 'Span') -> 'Span':
        first = self if self.start <= other.start else other
        last = other if other.end >= self.end else self
        return Span(first.start, last.end, first.line, first.column, last.end_line, last.end_column)

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


def type_name(value: Any) -> str:
    """Return the Numerus++ type name of a runtime value."""
    if isinstance(value, int):
        return 'Number'
    if isinstance(value, str):
        return 'String'
    return type(value).__name__


def in_number_range(value: int) -> bool:
    return MIN_NUMBER <= value <= MAX_NUMBER


def to_string(value: Any) -> str:
    """Render a value as display text.

    Numbers that have a Roman spelling are shown as Roman numerals. Zero,
    negatives and values above 3999 fall back to Arabic digits.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        if MIN_ROMAN <= value <= MAX_ROMAN:
            return to_roman(value)
        return str(value)
    raise TypeError(f"not a Numerus++ value: {value!r}")
