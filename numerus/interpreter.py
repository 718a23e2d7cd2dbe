"""Tree-walking interpreter for the Numerus++ language.

The interpreter executes a ``Program`` produced by ``numerus.parser``
statement by statement against an ``Environment``. Output produced by
``SCRIBE`` is collected as a list of lines and, when echoing, printed as
soon as it is produced. The first runtime error aborts the run.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .ast import (
    Program, VarDecl, Assign, PrintStmt, NoOp, BinaryOp, Literal, Ident, Call, Node
)
from .builtin_function import BuiltinFunction
from .environment import Environment
from .errors import EvalError
from .parser import parse_program
from .roman import OutOfRange, to_roman
from .types import Span, in_number_range, to_string, type_name


class Interpreter:
    """Core interpreter that executes a Numerus++ AST.

    The environment lives as long as the interpreter, so repeated calls to
    ``run`` see earlier declarations.
    """
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt', echo: bool = False):
        self.env = Environment()
        self.builtins: Dict[str, BuiltinFunction] = {}
        self.output: List[str] = []
        self.echo = echo
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None
        self.load_builtins()

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def load_builtins(self):

        def numerus_romaniza(args: List[Any], span: Optional[Span]) -> Any:
            n = args[0]
            if not isinstance(n, int):
                raise EvalError(EvalError.TYPE_MISMATCH, f'ROMANIZA expects a Number, got {type_name(n)}', span)
            try:
                return to_roman(n)
            except OutOfRange as e:
                raise EvalError(EvalError.NUMERAL_OUT_OF_RANGE, str(e), span)

        def numerus_arabiza(args: List[Any], span: Optional[Span]) -> Any:
            n = args[0]
            if not isinstance(n, int):
                raise EvalError(EvalError.TYPE_MISMATCH, f'ARABIZA expects a Number, got {type_name(n)}', span)
            return str(n)

        self.builtins['ROMANIZA'] = BuiltinFunction('ROMANIZA', 1, numerus_romaniza)
        self.builtins['ARABIZA'] = BuiltinFunction('ARABIZA', 1, numerus_arabiza)

    # Public API
    def run(self, program: Program, env: Optional[Environment] = None) -> List[str]:
        """Execute ``program`` and return the lines it printed."""
        if env is None:
            env = self.env
        self.output = []
        self.debug(f"run {len(program.body)} statements")
        for stmt in program.body:
            self.execute(stmt, env)
        return list(self.output)

    def emit(self, line: str):
        self.output.append(line)
        if self.echo:
            print(line)

    def execute(self, node: Node, env: Environment):
        if isinstance(node, VarDecl):
            value = self.evaluate(node.expr, env)
            env.declare(node.name, value, node.span)
            if self.debug_level >= 2:
                self.debug(f"declare {node.name}: {type_name(value)} = {value!r}")
            return
        if isinstance(node, Assign):
            value = self.evaluate(node.value, env)
            env.assign(node.name, value, node.span)
            if self.debug_level >= 2:
                self.debug(f"assign {node.name}: {type_name(value)} = {value!r}")
            return
        if isinstance(node, PrintStmt):
            text = to_string(self.evaluate(node.expr, env))
            if self.debug_level >= 2:
                self.debug(f"print {text!r}")
            self.emit(text)
            return
        if isinstance(node, NoOp):
            return
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def evaluate(self, node: Node, env: Environment) -> Any:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Ident):
            return env.get(node.name, node.span)
        if isinstance(node, BinaryOp):
            a = self.evaluate(node.left, env)
            b = self.evaluate(node.right, env)
            result = self.apply_binary_op(node.op, a, b, node.span)
            if self.debug_level >= 3:
                self.debug(f"{a!r} {node.op} {b!r} -> {result!r}")
            return result
        if isinstance(node, Call):
            arg = self.evaluate(node.arg, env)
            return self.call_builtin(node.func, [arg], node.span)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def call_builtin(self, name: str, args: List[Any], span: Optional[Span] = None) -> Any:
        func = self.builtins[name]
        if len(args) != func.arity:
            raise EvalError(EvalError.TYPE_MISMATCH,
                            f'{func.name} expects {func.arity} argument, got {len(args)}', span)
        result = func.fn(args, span)
        if self.debug_level >= 3:
            self.debug(f"{func.name}({', '.join(repr(a) for a in args)}) -> {result!r}")
        return result

    def apply_binary_op(self, op: str, a: Any, b: Any, span: Optional[Span] = None) -> Any:
        if op == 'ADDIUS':
            # If either operand is a string, perform concatenation
            if isinstance(a, str) or isinstance(b, str):
                return to_string(a) + to_string(b)
            return self.check_range(a + b, span)
        if not isinstance(a, int) or not isinstance(b, int):
            raise EvalError(EvalError.TYPE_MISMATCH,
                            f'{op} requires Number operands, got {type_name(a)} and {type_name(b)}', span)
        if op == 'SUBTRAHE':
            return self.check_range(a - b, span)
        if op == 'MULTIPLICA':
            return self.check_range(a * b, span)
        if op == 'DIVIDE':
            if b == 0:
                raise EvalError(EvalError.DIVISION_BY_ZERO, 'division by zero', span)
            # integer division truncating toward zero
            quotient = abs(a) // abs(b)
            return self.check_range(quotient if (a < 0) == (b < 0) else -quotient, span)
        raise EvalError(EvalError.TYPE_MISMATCH, f'unknown operator {op}', span)

    def check_range(self, value: int, span: Optional[Span]) -> int:
        if not in_number_range(value):
            raise EvalError(EvalError.NUMERAL_OUT_OF_RANGE, f'{value} does not fit in a Number', span)
        return value


def evaluate(program: Program, env: Optional[Environment] = None) -> List[str]:
    """Run ``program`` in a fresh interpreter and return its output lines."""
    return Interpreter().run(program, env)


def run_program(source: str, debug_level: int = 0) -> List[str]:
    """Convenience function to parse and run a Numerus++ program, printing its output."""
    ast_program = parse_program(source)
    interpreter = Interpreter(debug_level=debug_level, echo=True)
    try:
        return interpreter.run(ast_program)
    finally:
        interpreter.close()
