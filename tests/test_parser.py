import pytest

from pelikan.ast import (
    Program, ImportStmt, FuncParam, FuncDecl, Block, ReturnStmt, ExprStmt,
    Literal, Ident, Member, Call, ForeignCall,
)
from pelikan.errors import ParseError
from pelikan.parser import parse_program
from pelikan.types import TypeSpec, NUN


def test_function_with_foreign_call():
    program = parse_program('fn bool not(bool a) { RUST[std_func::not](a) }')
    assert program == Program([
        FuncDecl('not', [FuncParam(TypeSpec('bool'), 'a')], TypeSpec('bool'),
                 Block([ExprStmt(ForeignCall('std_func', 'not', [Ident('a')]))])),
    ])


def test_imports():
    program = parse_program('imp std_logic\nimp "lib/geometry"')
    assert program.body == [ImportStmt('std_logic'), ImportStmt('lib/geometry', True)]


def test_calls_and_dotted_calls():
    program = parse_program('f(1, "x", true, nun) std_math.add(a, g())')
    assert program.body == [
        ExprStmt(Call(Ident('f'), [Literal(1.0, 'num'), Literal('x', 'str'),
                                   Literal(True, 'bool'), Literal(NUN, 'nun')])),
        ExprStmt(Call(Member(Ident('std_math'), 'add'), [Ident('a'), Call(Ident('g'), [])])),
    ]


def test_return_and_nested_definitions():
    program = parse_program('fn num outer() { fn num inner() { return 1 } inner() }')
    outer = program.body[0]
    inner = outer.body.statements[0]
    assert isinstance(inner, FuncDecl)
    assert inner.body.statements == [ReturnStmt(Literal(1.0, 'num'))]


def test_type_tags_are_recorded():
    program = parse_program('fn nun f(num a, str b, any c, Point d) { nun }')
    decl = program.body[0]
    assert decl.return_type == TypeSpec.nun()
    assert [p.type_spec.kind for p in decl.params] == ['num', 'str', 'any', 'Point']
    assert not decl.params[3].type_spec.is_builtin


def test_parsing_is_deterministic():
    source = 'imp std_math fn num sq(num x) { std_math.multiply(x, x) } sq(3)'
    assert parse_program(source) == parse_program(source)


def test_empty_program():
    assert parse_program('') == Program([])


def test_positions_recorded_on_calls():
    program = parse_program('\n  foo(1)')
    call = program.body[0].expr
    assert call.pos == (2, 3)


@pytest.mark.parametrize('source', [
    'fn num (num a) { a }',
    'fn num f(num a { a }',
    'fn num f(num a, ) { a }',
    'fn num f() { a',
    'fn f() { 1 }',
    'f(1,)',
    'f(1 2)',
    'RUST[std_func.not](true)',
    'RUST[std_func::not]',
    'imp',
    'imp 42',
    'imp ""',
    ')',
])
def test_syntax_errors(source):
    with pytest.raises(ParseError):
        parse_program(source)


def test_member_access_requires_call():
    with pytest.raises(ParseError) as exc:
        parse_program('std_math.add')
    assert 'end of input' in exc.value.found


def test_import_only_at_top_level():
    with pytest.raises(ParseError):
        parse_program('fn nun f() { imp std_math }')


def test_parse_error_reports_expected_and_found():
    with pytest.raises(ParseError) as exc:
        parse_program('fn num f(num a) a')
    assert exc.value.expected == '{'
    assert exc.value.found == "IDENT 'a'"
    assert exc.value.position == (1, 17)
