"""CLI entry point for the Numerus++ interpreter.

Usage:
    python -m numerus [-v|-vv|-vvv] <program.npp>
    python -m numerus --check <program.npp>
    python -m numerus --emit-ast <program.npp>

Options:
  -v            Increase debug verbosity (can be repeated)
  --debug-file  Where debug trace lines are written (default: debug.txt)
  --check       Lex and parse without running; print diagnostics as JSON
  --emit-ast    Parse the given .npp file and emit an AST JSON file

Exit status is 1 when the program fails to lex, parse or run, or when
``--check`` finds an error.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from termcolor import colored

from . import __version__
from .ast_json import ast_to_obj
from .check import Diagnostic, check, has_errors, render_json
from .errors import NumerusError
from .interpreter import Interpreter
from .parser import parse_program
from .types import Span

ERROR_COLOR = "red"


def diagnose(line: str, span: Span) -> str:
    """Returns the offending source line with the span underlined."""
    if span.end_line == span.line:
        width = span.end_column - span.column
    else:
        width = len(line) - span.column + 1
    width = max(width, 1)
    diagnosis = "  " + line + "\n"
    diagnosis += "  " + " " * (span.column - 1)
    diagnosis += colored("^" + "~" * (width - 1), ERROR_COLOR, attrs=["bold"])
    return diagnosis


def format_error(path: str, source: str, error: NumerusError) -> str:
    message = colored("error: ", ERROR_COLOR, attrs=["bold"]) + f"{error.kind}: {error.message}"
    span = error.span
    if span is None:
        return colored(f"{path}: ", attrs=["bold"]) + message
    error_msg = colored(f"{path}:{span.line}:{span.column}: ", attrs=["bold"]) + message
    lines = source.splitlines()
    if 0 < span.line <= len(lines):
        error_msg += "\n" + diagnose(lines[span.line - 1], span)
    return error_msg


def read_source(path: Path) -> str:
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def load_source(program_file: Path) -> str:
    """Reads a program for execution, exiting with status 1 if that fails."""
    if not program_file.exists():
        print(f"Error: file {program_file} not found", file=sys.stderr)
        sys.exit(1)
    try:
        return read_source(program_file)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: cannot read file {program_file}: {e}", file=sys.stderr)
        sys.exit(1)


def run_check(path: Path) -> int:
    try:
        source = read_source(path)
    except (OSError, UnicodeDecodeError) as e:
        diagnostics = [Diagnostic('error', f"cannot read file: {e}", Span(0, 0, 1, 1, 1, 1))]
    else:
        diagnostics = check(source)
    print(render_json(diagnostics))
    return 1 if has_errors(diagnostics) else 0


def main(argv: Optional[list] = None) -> None:
    parser = argparse.ArgumentParser(prog='numerus', description="Numerus++ language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--debug-file', default='debug.txt', help='file receiving debug trace lines')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--check', metavar='NPP_FILE', help='check the given file and print JSON diagnostics')
    group.add_argument('--emit-ast', metavar='NPP_FILE', help='emit AST JSON for the given .npp file')
    parser.add_argument('program', nargs='?', help='Numerus++ program file (.npp) to execute')
    args = parser.parse_args(argv)

    # Check mode
    if args.check:
        status = run_check(Path(args.check))
        if status:
            sys.exit(status)
        return

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        source = load_source(program_file)
        try:
            ast_program = parse_program(source)
        except NumerusError as e:
            print(format_error(str(program_file), source, e), file=sys.stderr)
            sys.exit(1)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(ast_to_obj(ast_program), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Default: execute source file
    if not args.program:
        parser.error('missing program file; or use --check/--emit-ast')
    program_file = Path(args.program)
    source = load_source(program_file)
    try:
        ast_program = parse_program(source)
        interpreter = Interpreter(debug_level=args.v, debug_file=args.debug_file, echo=True)
        try:
            interpreter.run(ast_program)
        finally:
            interpreter.close()
    except NumerusError as e:
        print(format_error(str(program_file), source, e), file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
