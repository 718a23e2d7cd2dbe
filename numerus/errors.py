from typing import List, Optional

from numerus.types import Span


class NumerusError(Exception):
    """Base class for every error reported against Numerus++ source."""
    def __init__(self, kind: str, message: str, span: Optional[Span] = None):
        where = f" at {span}" if span is not None else ''
        super().__init__(f"{kind}: {message}{where}")
        self.kind = kind
        self.message = message
        self.span = span


class LexError(NumerusError):
    """Malformed characters or literals found while tokenizing."""
    UNEXPECTED_CHARACTER = 'UnexpectedCharacter'
    UNTERMINATED_STRING = 'UnterminatedString'
    INVALID_NUMERAL = 'InvalidNumeral'
    NUMBER_OUT_OF_RANGE = 'NumberOutOfRange'

    def __init__(self, kind: str, message: str, span: Span, character: Optional[str] = None):
        super().__init__(kind, message, span)
        self.character = character


class ParseError(NumerusError):
    """Grammar violation. ``expected`` lists what would have been accepted."""
    def __init__(self, expected: List[str], found: str, span: Optional[Span]):
        if len(expected) == 1:
            wanted = expected[0]
        else:
            wanted = 'one of ' + ', '.join(expected)
        super().__init__('SyntaxError', f"expected {wanted}, found {found}", span)
        self.expected = expected
        self.found = found


class EvalError(NumerusError):
    """Runtime failure raised by the interpreter. Aborts the run."""
    UNDECLARED_VARIABLE = 'UndeclaredVariable'
    DUPLICATE_DECLARATION = 'DuplicateDeclaration'
    DIVISION_BY_ZERO = 'DivisionByZero'
    TYPE_MISMATCH = 'TypeMismatch'
    NUMERAL_OUT_OF_RANGE = 'NumeralOutOfRange'
