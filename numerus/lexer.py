"""Tokenizer for Numerus++ source text.

The lexer turns source text into a flat list of tokens. Keywords and
operator words are resolved against a fixed table here, once, so later
stages only compare token kinds. Numeric literals are resolved to their
integer value at lex time: digit runs are Arabic, words spelled only with
``IVXLCDM`` are Roman and go through the codec.

Statements end at newlines. A ``NEWLINE`` token is emitted only outside
parentheses and only after some other token, so blank lines and comment
lines produce nothing and the token list always alternates between
statement tokens and single terminators. The list ends with ``EOF``.
A line that plainly opens a new statement closes any parentheses left
open above it, so an expression may span lines but a missing ``)`` is
reported where it happens.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

from .errors import LexError
from .roman import InvalidNumeral, from_roman, looks_like_roman
from .types import MAX_LITERAL, Span


KEYWORDS = {
    'DECLARA': 'DECLARA',
    'EST': 'EST',
    'SCRIBE': 'SCRIBE',
    'AVTEM': 'AVTEM',
    'ADDIUS': 'ADDIUS',
    'SUBTRAHE': 'SUBTRAHE',
    'MULTIPLICA': 'MULTIPLICA',
    'DIVIDE': 'DIVIDE',
    'ROMANIZA': 'ROMANIZA',
    'ARABIZA': 'ARABIZA',
}

OPERATORS = ('ADDIUS', 'SUBTRAHE', 'MULTIPLICA', 'DIVIDE')
BUILTINS = ('ROMANIZA', 'ARABIZA')
STATEMENT_KEYWORDS = ('DECLARA', 'SCRIBE', 'AVTEM')

COMMENT_MARKER = 'NOTA'


@dataclass(frozen=True)
class Token:
    kind: str
    lexeme: str
    span: Span
    literal: Any = None
    form: Optional[str] = None  # 'arabic' or 'roman' for NUMBER tokens

    def __str__(self) -> str:
        return self.lexeme


@dataclass
class Lexer:
    source: str
    pos: int = 0
    line: int = 1
    column: int = 1
    depth: int = 0
    tokens: List[Token] = field(default_factory=list)

    def peek(self, offset: int = 0) -> str:
        i = self.pos + offset
        return self.source[i] if i < len(self.source) else ''

    def advance(self, n: int = 1):
        for _ in range(n):
            if self.pos < len(self.source) and self.source[self.pos] == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def span_from(self, start: int, line: int, column: int) -> Span:
        return Span(start, self.pos, line, column, self.line, self.column)

    def tokenize(self, errors: Optional[List[LexError]] = None) -> List[Token]:
        """Scan the whole source.

        Without ``errors`` the first problem raises. With a list, each
        ``LexError`` is appended, the remainder of the line is skipped and
        the tokens already produced for that statement are discarded.
        """
        while self.pos < len(self.source):
            try:
                self.scan_token()
            except LexError as err:
                if errors is None:
                    raise
                errors.append(err)
                self.recover()
        if self.tokens and self.tokens[-1].kind != 'NEWLINE':
            self.emit('NEWLINE', '', self.span_from(self.pos, self.line, self.column))
        self.emit('EOF', '', self.span_from(self.pos, self.line, self.column))
        return self.tokens

    def recover(self):
        while self.pos < len(self.source) and self.source[self.pos] != '\n':
            self.advance()
        self.depth = 0
        while self.tokens and self.tokens[-1].kind != 'NEWLINE':
            self.tokens.pop()

    def emit(self, kind: str, lexeme: str, span: Span, literal: Any = None, form: Optional[str] = None):
        self.tokens.append(Token(kind, lexeme, span, literal, form))

    def scan_token(self):
        c = self.source[self.pos]
        start, line, column = self.pos, self.line, self.column
        if c == '\n':
            self.advance()
            # An unclosed '(' must not swallow the statements that follow it.
            if self.depth > 0 and self.starts_statement():
                self.depth = 0
            if self.depth == 0 and self.tokens and self.tokens[-1].kind != 'NEWLINE':
                self.emit('NEWLINE', '\n', self.span_from(start, line, column))
            return
        if c.isspace():
            self.advance()
            return
        if c.isalpha() or c == '_':
            self.scan_word()
            return
        if is_digit(c):
            self.scan_number()
            return
        if c == '"':
            self.scan_string()
            return
        if c == '(':
            self.advance()
            self.depth += 1
            self.emit('LPAR', c, self.span_from(start, line, column))
            return
        if c == ')':
            self.advance()
            if self.depth > 0:
                self.depth -= 1
            self.emit('RPAR', c, self.span_from(start, line, column))
            return
        self.advance()
        raise LexError(LexError.UNEXPECTED_CHARACTER, f"unexpected character {c!r}",
                       self.span_from(start, line, column), character=c)

    def word_at(self, i: int) -> str:
        end = i
        while end < len(self.source) and is_word_char(self.source[end]):
            end += 1
        return self.source[i:end]

    def starts_statement(self) -> bool:
        """Whether the line at the current position opens a new statement.

        True for a line beginning with ``DECLARA``, ``SCRIBE`` or ``AVTEM``,
        or with ``name EST``. None of these can continue an expression.
        """
        i = self.pos
        while i < len(self.source) and self.source[i] in ' \t\r':
            i += 1
        word = self.word_at(i)
        if word in STATEMENT_KEYWORDS:
            return True
        if not word or word in KEYWORDS:
            return False
        i += len(word)
        while i < len(self.source) and self.source[i] in ' \t':
            i += 1
        return self.word_at(i) == 'EST'

    def scan_word(self):
        start, line, column = self.pos, self.line, self.column
        while self.pos < len(self.source) and is_word_char(self.source[self.pos]):
            self.advance()
        word = self.source[start:self.pos]
        if word == COMMENT_MARKER and self.peek() == ':':
            while self.pos < len(self.source) and self.source[self.pos] != '\n':
                self.advance()
            return
        span = self.span_from(start, line, column)
        if word in KEYWORDS:
            self.emit(KEYWORDS[word], word, span)
            return
        # Single letters such as I or X stay usable as variable names.
        if len(word) >= 2 and looks_like_roman(word):
            try:
                value = from_roman(word)
            except InvalidNumeral as e:
                raise LexError(LexError.INVALID_NUMERAL, str(e), span)
            self.emit('NUMBER', word, span, value, 'roman')
            return
        self.emit('IDENT', word, span)

    def scan_number(self):
        start, line, column = self.pos, self.line, self.column
        while self.pos < len(self.source) and is_digit(self.source[self.pos]):
            self.advance()
        digits = self.source[start:self.pos]
        span = self.span_from(start, line, column)
        value = int(digits)
        if value > MAX_LITERAL:
            raise LexError(LexError.NUMBER_OUT_OF_RANGE,
                           f"number {digits} is out of range (0..{MAX_LITERAL})", span)
        self.emit('NUMBER', digits, span, value, 'arabic')

    def scan_string(self):
        start, line, column = self.pos, self.line, self.column
        self.advance()  # opening quote
        chars: List[str] = []
        while True:
            ch = self.peek()
            if ch == '' or ch == '\n':
                raise LexError(LexError.UNTERMINATED_STRING, 'unterminated string literal',
                               self.span_from(start, line, column))
            if ch == '"':
                self.advance()
                break
            if ch == '\\':
                nxt = self.peek(1)
                if nxt == '' or nxt == '\n':
                    self.advance()
                    continue
                chars.append(ESCAPES.get(nxt, '\\' + nxt))
                self.advance(2)
                continue
            chars.append(ch)
            self.advance()
        self.emit('STRING', self.source[start:self.pos], self.span_from(start, line, column), ''.join(chars))


ESCAPES = {'"': '"', '\\': '\\', 'n': '\n', 't': '\t'}


def is_digit(c: str) -> bool:
    # str.isdigit() also accepts characters such as '²' that int() rejects
    return '0' <= c <= '9'


def is_word_char(c: str) -> bool:
    return c.isalpha() or is_digit(c) or c == '_'


def tokenize(source: str) -> List[Token]:
    """Convert source text into a list of tokens, raising on the first error."""
    return Lexer(source).tokenize()
