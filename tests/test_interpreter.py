import pytest

from pelikan.errors import (
    ArityMismatchError, NotCallableError, UndefinedNameError, UndefinedExportError,
)
from pelikan.interpreter import FunctionValue, Interpreter, run_program
from pelikan.parser import parse_program
from pelikan.types import NUN


def test_result_is_last_expression():
    assert run_program('1 "two" 3') == 3.0


def test_definitions_and_empty_program_yield_nun():
    assert run_program('') is NUN
    assert run_program('fn num f() { 1 }') is NUN


def test_function_returns_last_statement_value():
    assert run_program('fn str greet(str name) { name } greet("pel")') == 'pel'


def test_empty_body_returns_nun():
    assert run_program('fn nun noop() { } noop()') is NUN


def test_return_exits_early():
    source = '''
    fn num first() {
        return 1
        RUST[std_io::print]("unreachable")
        2
    }
    first()
    '''
    assert run_program(source) == 1.0


def test_return_at_top_level_ends_program(capsys):
    assert run_program('return "done" RUST[std_io::print]("after")') == 'done'
    assert capsys.readouterr().out == ''


def test_function_value_is_first_class():
    value = run_program('fn num f() { 1 } f')
    assert isinstance(value, FunctionValue)
    assert value.name == 'f'
    assert value.arity == 0


def test_arguments_evaluated_left_to_right(capsys):
    source = '''
    fn nun log(str s) { RUST[std_io::print](s) }
    fn nun pair(nun a, nun b) { nun }
    pair(log("left"), log("right"))
    '''
    run_program(source)
    assert capsys.readouterr().out.split('\n')[:2] == ['left', 'right']


def test_redefinition_replaces_binding():
    assert run_program('fn num f() { 1 } fn num f() { 2 } f()') == 2.0


def test_type_tags_not_enforced_for_user_functions():
    assert run_program('fn num f(num x) { x } f("not a number")') == 'not a number'


def test_undefined_name():
    with pytest.raises(UndefinedNameError) as exc:
        run_program('missing')
    assert exc.value.position == (1, 1)


def test_not_callable_raised_before_arguments(capsys):
    source = '''
    fn nun shout() { RUST[std_io::print]("evaluated") }
    fn num f(num x) { x(shout()) }
    f(1)
    '''
    with pytest.raises(NotCallableError) as exc:
        run_program(source)
    assert 'x is a num value' in str(exc.value)
    assert capsys.readouterr().out == ''


def test_arity_mismatch():
    with pytest.raises(ArityMismatchError) as exc:
        run_program('fn num f(num a, num b) { a } f(1)')
    assert 'expects 2 arguments, got 1' in str(exc.value)


def test_dotted_call_without_import():
    with pytest.raises(UndefinedNameError):
        run_program('std_math.add(1, 2)')


def test_missing_feather_export():
    with pytest.raises(UndefinedExportError):
        run_program('imp std_math std_math.modulo(1, 2)')


def test_program_can_run_twice():
    program = parse_program('fn num f() { 7 } f()')
    assert Interpreter().run(program) == 7.0
    assert Interpreter().run(program) == 7.0


def test_debug_output_written_to_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    run_program('fn num f(num x) { RUST[std_func::add](x, 1) } f(1)', debug_level=4)
    log = (tmp_path / 'debug.txt').read_text(encoding='utf-8')
    assert 'define fn num f(num x)' in log
    assert 'call f(num)' in log
    assert 'native std_func::add(num, num)' in log
    assert 'native std_func::add -> 2' in log


def test_debug_level_limits_output(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    run_program('fn num f() { RUST[std_func::add](1, 1) } f()', debug_level=2)
    log = (tmp_path / 'debug.txt').read_text(encoding='utf-8')
    assert 'define fn' in log
    assert 'call f' not in log
    assert 'native' not in log
