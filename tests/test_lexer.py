import pytest

from froggle.errors import LexError
from froggle.lexer import scan


def kinds(source):
    return [(t.type, t.value) for t in scan(source)]


def test_single_identifier():
    assert kinds('frog') == [('IDENT', 'frog'), ('EOF', '')]


def test_let_assignment():
    assert kinds('let x = 42;') == [
        ('KEYWORD', 'let'),
        ('IDENT', 'x'),
        ('OPERATOR', '='),
        ('NUMBER', '42'),
        ('PUNCTUATION', ';'),
        ('EOF', ''),
    ]


def test_arithmetic_expression():
    assert kinds('1 + 2 * 3') == [
        ('NUMBER', '1'),
        ('OPERATOR', '+'),
        ('NUMBER', '2'),
        ('OPERATOR', '*'),
        ('NUMBER', '3'),
        ('EOF', ''),
    ]


def test_double_equals_is_one_operator():
    assert kinds('a==b=c')[:5] == [
        ('IDENT', 'a'),
        ('OPERATOR', '=='),
        ('IDENT', 'b'),
        ('OPERATOR', '='),
        ('IDENT', 'c'),
    ]


def test_keywords_need_an_exact_match():
    assert kinds('letter croaked iffy') == [
        ('IDENT', 'letter'),
        ('IDENT', 'croaked'),
        ('IDENT', 'iffy'),
        ('EOF', ''),
    ]


def test_keyword_set():
    words = 'let croak while func return if else number bool void'
    assert all(kind == 'KEYWORD' for kind, _ in kinds(words)[:-1])


def test_boolean_literals():
    assert kinds('true false') == [('BOOL', 'true'), ('BOOL', 'false'), ('EOF', '')]


def test_punctuation():
    assert [v for _, v in kinds('func f(a: number, b: bool): void {}')] == [
        'func', 'f', '(', 'a', ':', 'number', ',', 'b', ':', 'bool', ')', ':', 'void', '{', '}', '',
    ]


def test_positions_track_lines_and_columns():
    tokens = scan('let\n  x = 1;')
    x = tokens[1]
    assert (x.line, x.column) == (2, 3)
    eof = tokens[-1]
    assert (eof.line, eof.column) == (2, 9)


def test_unknown_character():
    with pytest.raises(LexError) as info:
        scan('let x = 5 @')
    assert info.value.char == '@'
    assert (info.value.line, info.value.column) == (1, 11)
    assert str(info.value) == "LexError: unexpected character '@' at 1:11"


def test_word_starting_with_digits_is_an_identifier():
    assert kinds('croak 12abc;') == [
        ('KEYWORD', 'croak'),
        ('IDENT', '12abc'),
        ('PUNCTUATION', ';'),
        ('EOF', ''),
    ]
    assert kinds('007') == [('NUMBER', '007'), ('EOF', '')]


def test_empty_source_is_just_eof():
    assert kinds('  \n\t ') == [('EOF', '')]
