import json

import pytest

from pelikan.ast_json import ast_from_obj, ast_to_obj
from pelikan.interpreter import Interpreter
from pelikan.parser import parse_program
from pelikan.types import NUN

SOURCE = '''
imp std_logic
imp "lib/geometry"
fn any pick(bool a, Point p) { return nun }
std_logic.xor(true, false)
RUST[std_io::print]("x\\ty", -1.5)
'''


def test_json_round_trip_preserves_ast():
    program = parse_program(SOURCE)
    restored = ast_from_obj(json.loads(json.dumps(ast_to_obj(program))))
    assert restored == program


def test_positions_survive_round_trip():
    program = parse_program('\n  foo(1)')
    restored = ast_from_obj(json.loads(json.dumps(ast_to_obj(program))))
    assert restored.body[0].expr.pos == (2, 3)


def test_nun_literal_encoding():
    obj = ast_to_obj(parse_program('nun'))
    assert obj['body'][0]['expr']['value'] == {'__type__': 'Nun'}
    assert ast_from_obj(obj).body[0].expr.value is NUN


def test_integer_numbers_decode_as_floats():
    obj = {'type': 'Program', 'body': [
        {'type': 'ExprStmt', 'expr': {'type': 'Literal', 'value': 3, 'literal_type': 'num'}},
    ]}
    program = ast_from_obj(obj)
    assert Interpreter().run(program) == 3.0
    assert isinstance(program.body[0].expr.value, float)


def test_unknown_node_type():
    with pytest.raises(ValueError):
        ast_from_obj({'type': 'WhileLoop'})
