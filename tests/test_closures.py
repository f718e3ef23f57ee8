from pelikan.context import ExecutionContext
from pelikan.interpreter import Interpreter, run_program
from pelikan.parser import parse_program


def test_closure_sees_definition_scope_not_call_scope():
    source = '''
    fn str greeting() { "outer" }
    fn str speak() { greeting() }
    fn str shadow() {
        fn str greeting() { "inner" }
        speak()
    }
    shadow()
    '''
    assert run_program(source) == 'outer'


def test_inner_definition_shadows_outer():
    source = '''
    fn str name() { "outer" }
    fn str wrapper() {
        fn str name() { "inner" }
        name()
    }
    wrapper()
    '''
    assert run_program(source) == 'inner'


def test_inner_function_captures_parameters():
    source = '''
    fn str outer(str word) {
        fn str inner() { word }
        inner()
    }
    outer("captured")
    '''
    assert run_program(source) == 'captured'


def test_returned_closure_keeps_its_scope():
    source = '''
    fn any make(str word) {
        fn str get() { word }
        get
    }
    fn str call(any f) { f() }
    call(make("kept"))
    '''
    assert run_program(source) == 'kept'


def test_mutual_recursion_through_shared_scope():
    # The language has no conditionals, so branch selection is a host native.
    context = ExecutionContext.create()
    context.registry.register('test', 'choose', 3, ('bool', 'any', 'any'),
                              lambda args: args[1] if args[0] else args[2])
    source = '''
    fn any invoke(any f) { f() }
    fn bool pick(bool cond, any yes, any no) {
        invoke(RUST[test::choose](cond, yes, no))
    }
    fn bool is_even(num n) {
        fn bool done() { true }
        fn bool step() { is_odd(RUST[std_func::subtract](n, 1)) }
        pick(RUST[std_func::eq](n, 0), done, step)
    }
    fn bool is_odd(num n) {
        fn bool done() { false }
        fn bool step() { is_even(RUST[std_func::subtract](n, 1)) }
        pick(RUST[std_func::eq](n, 0), done, step)
    }
    '''
    interp = Interpreter(context)
    interp.execute_program(parse_program(source), interp.global_env)
    assert interp.execute_program(parse_program('is_even(4)'), interp.global_env) is True
    assert interp.execute_program(parse_program('is_odd(3)'), interp.global_env) is True
    assert interp.execute_program(parse_program('is_even(3)'), interp.global_env) is False


def test_later_definition_visible_to_earlier_function():
    source = '''
    fn str first() { second() }
    fn str second() { "found" }
    first()
    '''
    assert run_program(source) == 'found'
