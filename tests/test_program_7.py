import pytest

from numerus.errors import EvalError
from numerus.interpreter import parse_program, Interpreter


def test_program_7_division_by_zero_stops_run(capsys):
    with open('examples/program_7.npp', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter(echo=True)
    with pytest.raises(EvalError) as excinfo:
        interp.run(ast)
    out = capsys.readouterr().out.strip()
    assert out == 'ante'
    assert excinfo.value.kind == 'DivisionByZero'
    assert excinfo.value.span.line == 2
