"""Static checking of Numerus++ source without running it.

``check`` lexes and parses a whole file, recording an error diagnostic for
every lex or syntax problem and resuming at the next statement, so one pass
reports all independent mistakes. When the file is syntactically clean a
semantic pass looks for problems that would certainly fail at run time and
reports them as warnings.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Set

from .ast import Program, VarDecl, Assign, PrintStmt, BinaryOp, Literal, Ident, Call, Node
from .errors import LexError, NumerusError, ParseError
from .lexer import Lexer
from .parser import parse_statement, split_statements
from .roman import MAX_ROMAN, MIN_ROMAN
from .types import Span


ERROR = 'error'
WARNING = 'warning'


@dataclass(frozen=True)
class Diagnostic:
    severity: str
    message: str
    span: Span

    def to_obj(self) -> Dict[str, Any]:
        return {
            "line": self.span.line,
            "column": self.span.column,
            "end_line": self.span.end_line,
            "end_column": self.span.end_column,
            "severity": self.severity,
            "message": self.message,
        }


def error_diagnostic(err: NumerusError) -> Diagnostic:
    return Diagnostic(ERROR, f"{err.kind}: {err.message}", err.span)


def check(source: str) -> List[Diagnostic]:
    """Return diagnostics for ``source`` ordered by position."""
    lex_errors: List[LexError] = []
    tokens = Lexer(source).tokenize(errors=lex_errors)
    diagnostics = [error_diagnostic(err) for err in lex_errors]

    body: List[Node] = []
    for group in split_statements(tokens):
        try:
            body.append(parse_statement(group))
        except ParseError as err:
            diagnostics.append(error_diagnostic(err))

    if not diagnostics:
        diagnostics.extend(SemanticChecker().check(Program(body)))
    return sorted(diagnostics, key=lambda d: (d.span.start, d.span.end))


def has_errors(diagnostics: List[Diagnostic]) -> bool:
    return any(d.severity == ERROR for d in diagnostics)


def render_json(diagnostics: List[Diagnostic]) -> str:
    return json.dumps({"diagnostics": [d.to_obj() for d in diagnostics]})


class SemanticChecker:
    """Walks a parsed program in order, tracking which names are declared."""
    def __init__(self):
        self.declared: Set[str] = set()
        self.diagnostics: List[Diagnostic] = []

    def warn(self, message: str, span: Span):
        self.diagnostics.append(Diagnostic(WARNING, message, span))

    def check(self, program: Program) -> List[Diagnostic]:
        for stmt in program.body:
            self.check_statement(stmt)
        return self.diagnostics

    def check_statement(self, node: Node):
        if isinstance(node, VarDecl):
            self.check_expression(node.expr)
            if node.name in self.declared:
                self.warn(f"variable {node.name} is already declared", node.span)
            self.declared.add(node.name)
        elif isinstance(node, Assign):
            self.check_expression(node.value)
            if node.name not in self.declared:
                self.warn(f"assignment to undeclared variable {node.name}", node.span)
        elif isinstance(node, PrintStmt):
            self.check_expression(node.expr)

    def check_expression(self, node: Node):
        if isinstance(node, Ident):
            if node.name not in self.declared:
                self.warn(f"variable {node.name} is not declared", node.span)
        elif isinstance(node, BinaryOp):
            self.check_expression(node.left)
            self.check_expression(node.right)
            if node.op == 'DIVIDE' and isinstance(node.right, Literal) and node.right.value == 0:
                self.warn("division by zero", node.span)
        elif isinstance(node, Call):
            self.check_expression(node.arg)
            arg = node.arg
            if (node.func == 'ROMANIZA' and isinstance(arg, Literal) and arg.literal_type == 'Number'
                    and not MIN_ROMAN <= arg.value <= MAX_ROMAN):
                self.warn(f"{arg.value} cannot be written as a Roman numeral", node.span)
