"""Abstract Syntax Tree (AST) definitions for Numerus++.

The AST classes defined in this module represent the syntactic structure
of parsed Numerus++ programs. Every node records the ``Span`` of the source
it was built from; spans are left out of equality so trees can be compared
structurally in tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

from .types import Span


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass
class Program(Node):
    body: List[Node]
    span: Optional[Span] = field(default=None, compare=False, repr=False)


@dataclass
class VarDecl(Node):
    name: str
    expr: Node  # initial value
    span: Optional[Span] = field(default=None, compare=False, repr=False)


@dataclass
class Assign(Node):
    name: str
    value: Node
    span: Optional[Span] = field(default=None, compare=False, repr=False)


@dataclass
class PrintStmt(Node):
    expr: Node
    span: Optional[Span] = field(default=None, compare=False, repr=False)


@dataclass
class NoOp(Node):
    span: Optional[Span] = field(default=None, compare=False, repr=False)


@dataclass
class BinaryOp(Node):
    op: str  # ADDIUS, SUBTRAHE, MULTIPLICA or DIVIDE
    left: Node
    right: Node
    span: Optional[Span] = field(default=None, compare=False, repr=False)


@dataclass
class Literal(Node):
    value: Any
    literal_type: str  # 'Number' or 'Str'
    form: Optional[str] = None  # 'arabic' or 'roman' for numbers
    span: Optional[Span] = field(default=None, compare=False, repr=False)


@dataclass
class Ident(Node):
    name: str
    span: Optional[Span] = field(default=None, compare=False, repr=False)


@dataclass
class Call(Node):
    func: str  # ROMANIZA or ARABIZA
    arg: Node
    span: Optional[Span] = field(default=None, compare=False, repr=False)
