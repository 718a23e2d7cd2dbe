"""Roman numeral conversion for Numerus++.

The codec converts between integers in the range 1..3999 and their
canonical Roman numeral spelling. It is used by the lexer to resolve Roman
literals and by the interpreter for default number formatting and the
``ROMANIZA`` builtin.
"""

from __future__ import annotations

from typing import List, Tuple


ROMAN_VALUES: List[Tuple[int, str]] = [
    (1000, 'M'),
    (900, 'CM'),
    (500, 'D'),
    (400, 'CD'),
    (100, 'C'),
    (90, 'XC'),
    (50, 'L'),
    (40, 'XL'),
    (10, 'X'),
    (9, 'IX'),
    (5, 'V'),
    (4, 'IV'),
    (1, 'I'),
]

SYMBOL_VALUES = {'I': 1, 'V': 5, 'X': 10, 'L': 50, 'C': 100, 'D': 500, 'M': 1000}

# Pairs allowed in subtractive position: (smaller, larger)
SUBTRACTIVE_PAIRS = {(1, 5), (1, 10), (10, 50), (10, 100), (100, 500), (100, 1000)}

MIN_ROMAN = 1
MAX_ROMAN = 3999


class RomanNumeralError(ValueError):
    """Base class for codec failures."""


class OutOfRange(RomanNumeralError):
    def __init__(self, value: int):
        super().__init__(f"{value} cannot be written as a Roman numeral (range {MIN_ROMAN}..{MAX_ROMAN})")
        self.value = value


class InvalidNumeral(RomanNumeralError):
    def __init__(self, numeral: str, reason: str):
        super().__init__(f"invalid Roman numeral {numeral!r}: {reason}")
        self.numeral = numeral
        self.reason = reason


def to_roman(n: int) -> str:
    """Return the canonical Roman numeral for ``n``."""
    if n < MIN_ROMAN or n > MAX_ROMAN:
        raise OutOfRange(n)
    result: List[str] = []
    for value, symbol in ROMAN_VALUES:
        while n >= value:
            result.append(symbol)
            n -= value
    return ''.join(result)


def from_roman(s: str) -> int:
    """Parse a Roman numeral, rejecting anything that is not well formed.

    The string is scanned right to left. A symbol smaller than the one to
    its right is subtracted, which is only legal for the six standard
    pairs. ``V``, ``L`` and ``D`` may not repeat; ``I``, ``X``, ``C`` and
    ``M`` may appear at most three times in a row. Finally the total is
    converted back and compared, which rejects orderings such as ``IIX``
    or ``IXI`` that pass the local checks.
    """
    if not s:
        raise InvalidNumeral(s, 'empty numeral')
    numeral = s.upper()
    total = 0
    prev_value = 0
    prev_char = ''
    run = 0
    for ch in reversed(numeral):
        value = SYMBOL_VALUES.get(ch)
        if value is None:
            raise InvalidNumeral(s, f'unknown symbol {ch!r}')
        if ch == prev_char:
            run += 1
            if ch in 'VLD':
                raise InvalidNumeral(s, f'{ch!r} cannot be repeated')
            if run > 3:
                raise InvalidNumeral(s, f'{ch!r} repeated more than three times')
        else:
            run = 1
        if value < prev_value:
            if (value, prev_value) not in SUBTRACTIVE_PAIRS:
                raise InvalidNumeral(s, 'invalid subtractive pair')
            total -= value
        else:
            total += value
        prev_value = value
        prev_char = ch
    if total < MIN_ROMAN or total > MAX_ROMAN or to_roman(total) != numeral:
        raise InvalidNumeral(s, 'not in canonical form')
    return total


def looks_like_roman(s: str) -> bool:
    return bool(s) and all(ch in SYMBOL_VALUES for ch in s)
