from numerus.interpreter import parse_program, Interpreter


def test_program_2_sum_of_mixed_literals(capsys):
    with open('examples/program_2.npp', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter(echo=True)
    lines = interp.run(ast)
    out = capsys.readouterr().out.strip()
    assert out == 'XLII'
    assert lines == ['XLII']
