from numerus.interpreter import parse_program, Interpreter


def test_program_5_roman_literals_and_assignment(capsys):
    with open('examples/program_5.npp', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter(echo=True)
    interp.run(ast)
    out = capsys.readouterr().out.strip().splitlines()
    assert out == ['Aetas: XXV', 'XII']
    assert interp.env.get('aetas') == 12
