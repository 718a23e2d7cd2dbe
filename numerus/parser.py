"""Parser for the Numerus++ language.

This module implements a two-stage parsing pipeline:

1. **Lexing**: ``numerus.lexer`` turns the source into tokens with
   resolved keyword kinds, literal values and source spans. Newlines that
   end statements are already explicit ``NEWLINE`` tokens.

2. **Parsing**: the token list is fed straight into a Lark LALR parser
   through a small custom lexer class, so Lark never re-scans the text.
   The resulting parse tree is transformed into an abstract syntax tree
   (AST) using a custom transformer.

``parse_program`` is the public entry point and returns a ``Program`` AST
node for an entire source file. ``parse_statement`` parses one
newline-terminated statement and is used by check mode to resume after an
error.
"""

from __future__ import annotations

from typing import Iterator, List

from lark import Lark, Transformer
from lark.exceptions import UnexpectedEOF, UnexpectedToken
from lark.lexer import Lexer as LarkLexer, Token as LarkToken

from .ast import (
    Program, VarDecl, Assign, PrintStmt, NoOp, BinaryOp, Literal, Ident, Call, Node
)
from .errors import ParseError
from .lexer import Token, tokenize


NUMERUS_GRAMMAR = r"""
    start: (statement NEWLINE)*
    line: statement NEWLINE

    ?statement: declaration
              | assignment
              | print_stmt
              | noop

    declaration: DECLARA IDENT EST expression
    assignment: IDENT EST expression
    print_stmt: SCRIBE LPAR expression RPAR
    noop: AVTEM

    // Expressions with precedence
    ?expression: term ((ADDIUS | SUBTRAHE) term)*
    ?term: factor ((MULTIPLICA | DIVIDE) factor)*
    ?factor: literal
           | variable
           | call
           | group
    literal: NUMBER | STRING
    variable: IDENT
    call: (ROMANIZA | ARABIZA) LPAR expression RPAR
    group: LPAR expression RPAR

    // Tokens come pre-scanned from numerus.lexer
    %declare DECLARA EST SCRIBE AVTEM
    %declare ADDIUS SUBTRAHE MULTIPLICA DIVIDE ROMANIZA ARABIZA
    %declare IDENT NUMBER STRING LPAR RPAR NEWLINE
"""


# Human readable names used in syntax error messages.
TERMINAL_NAMES = {
    'IDENT': 'identifier',
    'NUMBER': 'number',
    'STRING': 'string',
    'LPAR': "'('",
    'RPAR': "')'",
    'NEWLINE': 'end of line',
    'EOF': 'end of input',
    '$END': 'end of input',
}


class TokenStream(LarkLexer):
    """Hands tokens from ``numerus.lexer`` to Lark unchanged.

    The Lark token's value is the numerus ``Token`` so the transformer
    can read its span and resolved literal.
    """
    def __init__(self, lexer_conf):
        pass

    def lex(self, tokens: List[Token]) -> Iterator[LarkToken]:
        for token in tokens:
            if token.kind == 'EOF':
                break
            span = token.span
            yield LarkToken(token.kind, token, span.start, span.line, span.column,
                            span.end_line, span.end_column, span.end)


NUMERUS_PARSER = Lark(
    NUMERUS_GRAMMAR,
    parser='lalr',
    lexer=TokenStream,
    start=['start', 'line'],
    maybe_placeholders=False,
)


def describe_token(token: Token) -> str:
    if token.kind in ('IDENT', 'NUMBER'):
        return f"{TERMINAL_NAMES[token.kind]} '{token.lexeme}'"
    if token.kind == 'STRING':
        return f"string {token.lexeme}"
    if token.kind in TERMINAL_NAMES:
        return TERMINAL_NAMES[token.kind]
    return f"'{token.lexeme}'"


def expected_names(terminals) -> List[str]:
    names = {TERMINAL_NAMES.get(name, f"'{name}'") for name in terminals}
    return sorted(names)


class ASTTransformer(Transformer):
    """Transforms the raw parse tree into an AST."""

    def start(self, items):
        body = [item for item in items if isinstance(item, Node)]
        span = body[0].span.merge(body[-1].span) if body else None
        return Program(body=body, span=span)

    def line(self, items):
        return items[0]

    def declaration(self, items):
        keyword, name, _, expr = items
        return VarDecl(name=name.value.lexeme, expr=expr, span=keyword.value.span.merge(expr.span))

    def assignment(self, items):
        name, _, value = items
        return Assign(name=name.value.lexeme, value=value, span=name.value.span.merge(value.span))

    def print_stmt(self, items):
        keyword, _, expr, close = items
        return PrintStmt(expr=expr, span=keyword.value.span.merge(close.value.span))

    def noop(self, items):
        return NoOp(span=items[0].value.span)

    def binary_expr(self, items):
        # items pattern: expr (op expr)*, folded left-associatively
        left = items[0]
        i = 1
        while i < len(items):
            op = items[i]
            right = items[i + 1]
            left = BinaryOp(op=op.type, left=left, right=right, span=left.span.merge(right.span))
            i += 2
        return left

    def expression(self, items):
        return self.binary_expr(items)

    def term(self, items):
        return self.binary_expr(items)

    def literal(self, items):
        token = items[0].value
        if token.kind == 'NUMBER':
            return Literal(token.literal, 'Number', token.form, span=token.span)
        return Literal(token.literal, 'Str', span=token.span)

    def variable(self, items):
        token = items[0].value
        return Ident(token.lexeme, span=token.span)

    def call(self, items):
        func, _, arg, close = items
        return Call(func=func.type, arg=arg, span=func.value.span.merge(close.value.span))

    def group(self, items):
        # Parentheses only shape the tree; keep the inner node.
        return items[1]


def parse(tokens: List[Token], start: str = 'start') -> Node:
    """Parse a token list produced by ``numerus.lexer``.

    Raises ``ParseError`` at the first token that does not fit the grammar.
    """
    try:
        tree = NUMERUS_PARSER.parse(tokens, start=start)
    except UnexpectedToken as e:
        if e.token.type == '$END':
            span = tokens[-1].span if tokens else None
            raise ParseError(expected_names(e.expected), 'end of input', span) from e
        raise ParseError(expected_names(e.expected), describe_token(e.token.value), e.token.value.span) from e
    except UnexpectedEOF as e:
        span = tokens[-1].span if tokens else None
        raise ParseError(expected_names(e.expected), 'end of input', span) from e
    return ASTTransformer().transform(tree)


def parse_statement(tokens: List[Token]) -> Node:
    """Parse exactly one statement terminated by ``NEWLINE``."""
    return parse(tokens, start='line')


def split_statements(tokens: List[Token]) -> List[List[Token]]:
    """Group tokens into newline-terminated statements, dropping ``EOF``."""
    groups: List[List[Token]] = []
    current: List[Token] = []
    for token in tokens:
        if token.kind == 'EOF':
            break
        current.append(token)
        if token.kind == 'NEWLINE':
            groups.append(current)
            current = []
    if current:
        groups.append(current)
    return groups


def parse_program(source: str) -> Program:
    """Parse Numerus++ source code into an AST Program.

    Lex errors surface as ``LexError`` and grammar violations as
    ``ParseError``; both carry the offending source span.
    """
    tokens = tokenize(source)
    return parse(tokens)
