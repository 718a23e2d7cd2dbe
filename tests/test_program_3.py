from numerus.interpreter import parse_program, Interpreter


def test_program_3_precedence(capsys):
    with open('examples/program_3.npp', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter(echo=True)
    interp.run(ast)
    out = capsys.readouterr().out.strip().splitlines()
    assert out == ['14', 'XX', '2', '12']
