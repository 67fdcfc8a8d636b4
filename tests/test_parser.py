import pytest

from froggle.ast import (
    Program, Declaration, Assignment, Print, Block, While, If, Param,
    FunctionDecl, Return, ExpressionStatement, NumberLiteral, BoolLiteral,
    Identifier, Binary, Call, Grouping,
)
from froggle.errors import ParseError
from froggle.parser import parse_program
from froggle.types import NUMBER, BOOL, VOID


def parse_expr(source):
    program = parse_program(f'croak {source};')
    return program.body[0].expr


def num(n):
    return NumberLiteral(n)


def test_parse_declaration():
    assert parse_program('let x = 42;') == Program([Declaration('x', None, num(42))])


def test_parse_annotated_declaration():
    assert parse_program('let ok: bool = true;') == Program([Declaration('ok', BOOL, BoolLiteral(True))])


def test_parse_print_statement():
    assert parse_program('croak x;') == Program([Print(Identifier('x'))])


def test_multiplication_binds_tighter_than_addition():
    assert parse_expr('1 + 2 * 3') == Binary('+', num(1), Binary('*', num(2), num(3)))


def test_grouped_expression():
    assert parse_expr('(1 + 2) * 3') == Binary('*', Grouping(Binary('+', num(1), num(2))), num(3))


def test_operators_are_left_associative():
    assert parse_expr('10 - 4 - 3') == Binary('-', Binary('-', num(10), num(4)), num(3))
    assert parse_expr('8 / 4 * 2') == Binary('*', Binary('/', num(8), num(4)), num(2))


def test_relational_operators_bind_loosest():
    assert parse_expr('1 + 2 == 3') == Binary('==', Binary('+', num(1), num(2)), num(3))
    assert parse_expr('a < b * 2') == Binary('<', Identifier('a'), Binary('*', Identifier('b'), num(2)))


def test_assignment_versus_expression_statement():
    program = parse_program('x = 5; x == 5; f(1, 2);')
    assert program.body == [
        Assignment('x', num(5)),
        ExpressionStatement(Binary('==', Identifier('x'), num(5))),
        ExpressionStatement(Call('f', [num(1), num(2)])),
    ]


def test_function_declaration():
    program = parse_program('func add(a: number, b: number): number { return a + b; }')
    assert program.body == [
        FunctionDecl(
            'add',
            [Param('a', NUMBER), Param('b', NUMBER)],
            NUMBER,
            Block([Return(Binary('+', Identifier('a'), Identifier('b')))]),
        )
    ]


def test_void_function_with_bare_return():
    decl = parse_program('func hop(): void { return; }').body[0]
    assert decl.params == []
    assert decl.return_type == VOID
    assert decl.body == Block([Return(None)])


def test_if_else_if_chain():
    program = parse_program('if a { croak 1; } else if b { croak 2; } else { croak 3; }')
    assert program.body == [
        If(
            Identifier('a'),
            Block([Print(num(1))]),
            If(Identifier('b'), Block([Print(num(2))]), Block([Print(num(3))])),
        )
    ]


def test_while_and_nested_block():
    program = parse_program('while i < 3 { { let j = i; } i = i + 1; }')
    assert program.body == [
        While(
            Binary('<', Identifier('i'), num(3)),
            Block([
                Block([Declaration('j', None, Identifier('i'))]),
                Assignment('i', Binary('+', Identifier('i'), num(1))),
            ]),
        )
    ]


def test_stray_semicolons_are_skipped():
    assert parse_program(';; croak 1;; { ; }').body == [Print(num(1)), Block([])]


def test_missing_identifier_after_let():
    with pytest.raises(ParseError) as info:
        parse_program('let = 5;')
    assert info.value.message == "expected identifier, found '='"
    assert (info.value.line, info.value.column) == (1, 5)


def test_missing_semicolon():
    with pytest.raises(ParseError) as info:
        parse_program('croak 1')
    assert info.value.message == "expected ';', found end of input"


def test_unmatched_parenthesis():
    with pytest.raises(ParseError):
        parse_program('croak (1 + 2;')


def test_unterminated_block():
    with pytest.raises(ParseError) as info:
        parse_program('while true { croak 1;')
    assert "'}'" in info.value.message


def test_parameters_require_annotations():
    with pytest.raises(ParseError):
        parse_program('func f(a): number { return a; }')


def test_return_type_is_required():
    with pytest.raises(ParseError) as info:
        parse_program('func f() { }')
    assert info.value.message == "expected ':', found '{'"


def test_unknown_type_name():
    with pytest.raises(ParseError) as info:
        parse_program('let x: string = 1;')
    assert "one of 'number', 'bool', 'void'" in info.value.message


def test_expression_expected():
    with pytest.raises(ParseError) as info:
        parse_program('croak * 2;')
    assert info.value.message == "expected expression, found '*'"


def test_deep_nesting_is_a_parse_error():
    source = 'croak ' + '(' * 50000 + '1' + ')' * 50000 + ';'
    with pytest.raises(ParseError) as info:
        parse_program(source)
    assert 'nested too deeply' in info.value.message
