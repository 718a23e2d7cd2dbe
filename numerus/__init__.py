# Numerus++ language package
# This package provides a lexer, parser, interpreter and checker for Numerus++.
__version__ = '0.1.0'

from .interpreter import run_program, evaluate, Interpreter
from .errors import NumerusError, LexError, ParseError, EvalError
from .check import check, Diagnostic

__all__ = [
    'run_program',
    'evaluate',
    'Interpreter',
    'check',
    'Diagnostic',
    'NumerusError',
    'LexError',
    'ParseError',
    'EvalError',
]
