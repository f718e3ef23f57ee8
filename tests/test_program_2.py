from pathlib import Path
from pelikan.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_2_xor_table(capsys):
    """Test program 2: xor from the built-in std_logic feather.

    The feather builds xor out of and/or/not, which are themselves thin
    wrappers over std_func natives, so this exercises imports, dotted calls
    and foreign calls together.
    """
    with open(EXAMPLES / 'program_2.pl', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == [
        'false xor false = false',
        'false xor true = true',
        'true xor false = true',
        'true xor true = false',
    ]
