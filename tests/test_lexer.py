import pytest

from pelikan.errors import LexError
from pelikan.lexer import Token, read_source, tokenize, untokenize


def kinds(source):
    return [(t.type, t.value) for t in tokenize(source)]


def test_function_definition_tokens():
    tokens = kinds('fn num add(num a, num b) { RUST[std_func::add](a, b) }')
    assert tokens == [
        ('KEYWORD', 'fn'), ('TYPE', 'num'), ('IDENT', 'add'), ('(', '('),
        ('TYPE', 'num'), ('IDENT', 'a'), (',', ','), ('TYPE', 'num'), ('IDENT', 'b'),
        (')', ')'), ('{', '{'), ('KEYWORD', 'RUST'), ('[', '['), ('IDENT', 'std_func'),
        ('::', '::'), ('IDENT', 'add'), (']', ']'), ('(', '('), ('IDENT', 'a'), (',', ','),
        ('IDENT', 'b'), (')', ')'), ('}', '}'), ('EOF', ''),
    ]


def test_word_literals():
    tokens = tokenize('true false nun imp return')
    assert [t.type for t in tokens] == ['BOOL', 'BOOL', 'NUN', 'KEYWORD', 'KEYWORD', 'EOF']
    assert tokens[0].literal is True
    assert tokens[1].literal is False


def test_number_literals():
    tokens = tokenize('42 3.5 -7 1e3 2.5E-2')
    assert [t.literal for t in tokens[:-1]] == [42.0, 3.5, -7.0, 1000.0, 0.025]
    assert all(isinstance(t.literal, float) for t in tokens[:-1])


def test_string_escapes():
    token = tokenize(r'"a\tb\n\"q\"\\"')[0]
    assert token.type == 'STRING'
    assert token.literal == 'a\tb\n"q"\\'
    assert token.value == r'"a\tb\n\"q\"\\"'


def test_comments_are_skipped():
    source = '''
    # hash comment
    // line comment
    /* block
       comment */ foo
    '''
    assert kinds(source) == [('IDENT', 'foo'), ('EOF', '')]


def test_positions_are_one_based():
    tokens = tokenize('foo\n  bar')
    assert tokens[0].position == (1, 1)
    assert tokens[1].position == (2, 3)


def test_empty_source_is_just_eof():
    assert kinds('') == [('EOF', '')]
    assert kinds('   \n\t ') == [('EOF', '')]


@pytest.mark.parametrize('source', ['1.', '1.2.3', '1e', '12abc', '3.x'])
def test_malformed_numbers(source):
    with pytest.raises(LexError):
        tokenize(source)


def test_unterminated_string():
    with pytest.raises(LexError) as exc:
        tokenize('print("oops)')
    assert exc.value.position == (1, 7)


def test_unknown_escape():
    with pytest.raises(LexError):
        tokenize(r'"bad \q escape"')


def test_unterminated_block_comment():
    with pytest.raises(LexError):
        tokenize('/* never closed')


@pytest.mark.parametrize('char', ['@', '+', '=', ';', '-', ':', '²', 'é'])
def test_unexpected_characters(char):
    with pytest.raises(LexError) as exc:
        tokenize(f'foo {char} bar')
    assert exc.value.character == char
    assert exc.value.position == (1, 5)


def test_untokenize_lexes_back_to_same_tokens():
    source = 'imp std_math\nfn num f(num x) { std_math.add(x, -1.5) } f(2) "s\\n"'
    tokens = tokenize(source)
    assert tokenize(untokenize(tokens)) == tokens


def test_token_equality_ignores_position():
    assert Token('IDENT', 'a', None, 1, 1) == Token('IDENT', 'a', None, 5, 9)


def test_unicode_digits_are_not_numbers():
    with pytest.raises(LexError) as exc:
        tokenize('f(²)')
    assert exc.value.character == '²'
    assert exc.value.position == (1, 3)


def test_read_source_rejects_invalid_utf8(tmp_path):
    path = tmp_path / 'bad.pl'
    path.write_bytes(b'fn num f() {\n  "\xff" }')
    with pytest.raises(LexError) as exc:
        read_source(path)
    assert exc.value.position == (2, 4)
    assert exc.value.character == '\\xff'
    assert isinstance(exc.value.__cause__, UnicodeDecodeError)
