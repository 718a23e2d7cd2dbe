"""JSON serialization for the Numerus++ AST.

This module converts AST dataclasses into plain Python dict/list
structures suitable for JSON encoding. Spans are included so editor
tooling can map nodes back to the source.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from .ast import (
    Program,
    VarDecl,
    Assign,
    PrintStmt,
    NoOp,
    BinaryOp,
    Literal,
    Ident,
    Call,
)
from .types import Span


def span_to_obj(span: Optional[Span]) -> Optional[Dict[str, int]]:
    if span is None:
        return None
    return {
        "start": span.start,
        "end": span.end,
        "line": span.line,
        "column": span.column,
        "end_line": span.end_line,
        "end_column": span.end_column,
    }


def ast_to_obj(node: Any) -> Any:
    # Primitives
    if node is None:
        return None
    if isinstance(node, (int, str)):
        return node

    # Node types
    if isinstance(node, Program):
        return {"type": "Program", "body": [ast_to_obj(n) for n in node.body], "span": span_to_obj(node.span)}
    if isinstance(node, VarDecl):
        return {
            "type": "VarDecl",
            "name": node.name,
            "expr": ast_to_obj(node.expr),
            "span": span_to_obj(node.span),
        }
    if isinstance(node, Assign):
        return {
            "type": "Assign",
            "name": node.name,
            "value": ast_to_obj(node.value),
            "span": span_to_obj(node.span),
        }
    if isinstance(node, PrintStmt):
        return {"type": "PrintStmt", "expr": ast_to_obj(node.expr), "span": span_to_obj(node.span)}
    if isinstance(node, NoOp):
        return {"type": "NoOp", "span": span_to_obj(node.span)}
    if isinstance(node, BinaryOp):
        return {
            "type": "BinaryOp",
            "op": node.op,
            "left": ast_to_obj(node.left),
            "right": ast_to_obj(node.right),
            "span": span_to_obj(node.span),
        }
    if isinstance(node, Literal):
        return {
            "type": "Literal",
            "value": node.value,
            "literal_type": node.literal_type,
            "form": node.form,
            "span": span_to_obj(node.span),
        }
    if isinstance(node, Ident):
        return {"type": "Ident", "name": node.name, "span": span_to_obj(node.span)}
    if isinstance(node, Call):
        return {
            "type": "Call",
            "func": node.func,
            "arg": ast_to_obj(node.arg),
            "span": span_to_obj(node.span),
        }
    raise TypeError(f"ast_to_obj: unsupported node {type(node).__name__}")
