"""Recursive-descent parser for the Froggle language.

Statements are dispatched on their leading token. Expressions are parsed by
precedence climbing over three binding levels, tightest first:

    * /        multiplicative
    + -        additive
    == > <     relational / equality

All binary operators are left-associative. The `parse_program` function is
the public entry point and returns a `Program` AST node; any syntax error
raises `ParseError` and no AST is returned.
"""

from __future__ import annotations

from typing import List, Optional, Union

from lark import Token

from .ast import (
    Program, Declaration, Assignment, Print, Block, While, If, Param,
    FunctionDecl, Return, ExpressionStatement, NumberLiteral, BoolLiteral,
    Identifier, Binary, Call, Grouping, Node,
)
from .errors import ParseError
from .lexer import (
    scan, TOKEN_KINDS, KEYWORD, IDENT, NUMBER, BOOL, OPERATOR, PUNCTUATION, EOF,
)
from .types import TypeSpec

BINDING_POWER = {
    '*': 3, '/': 3,
    '+': 2, '-': 2,
    '==': 1, '>': 1, '<': 1,
}


KIND_NAMES = {
    KEYWORD: 'keyword',
    IDENT: 'identifier',
    NUMBER: 'number literal',
    BOOL: 'boolean literal',
    OPERATOR: 'operator',
    PUNCTUATION: 'punctuation',
    EOF: 'end of input',
}


def describe(token: Token) -> str:
    if token.type == EOF:
        return 'end of input'
    if token.type in (IDENT, NUMBER):
        return f"{KIND_NAMES[token.type]} {token.value!r}"
    return repr(token.value)


def describe_expected(expected: str) -> str:
    if expected in TOKEN_KINDS:
        return KIND_NAMES[expected]
    return repr(expected)


class Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0

    def peek(self, offset: int = 0) -> Token:
        index = min(self.pos + offset, len(self.tokens) - 1)
        return self.tokens[index]

    @staticmethod
    def matches(token: Token, expected: str) -> bool:
        # Token kinds match on type; anything else is a literal lexeme
        if expected in TOKEN_KINDS:
            return token.type == expected
        return token.type in (KEYWORD, OPERATOR, PUNCTUATION) and token.value == expected

    def match(self, expected: Union[str, List[str]]) -> bool:
        token = self.peek()
        if isinstance(expected, list):
            return any(self.matches(token, e) for e in expected)
        return self.matches(token, expected)

    def consume(self, expected: Union[str, List[str]]) -> Token:
        token = self.peek()
        if not self.match(expected):
            if isinstance(expected, list):
                wanted = 'one of ' + ', '.join(describe_expected(e) for e in expected)
            else:
                wanted = describe_expected(expected)
            raise ParseError(f"expected {wanted}, found {describe(token)}", token.line, token.column)
        self.pos += 1
        return token

    def parse_program(self) -> Program:
        statements: List[Node] = []
        while not self.match(EOF):
            if self.match(';'):
                self.consume(';')
                continue
            statements.append(self.parse_statement())
        return Program(statements)

    def parse_statement(self) -> Node:
        token = self.peek()
        if self.match('let'):
            return self.parse_declaration()
        if self.match('croak'):
            return self.parse_print()
        if self.match('while'):
            return self.parse_while()
        if self.match('func'):
            return self.parse_function_decl()
        if self.match('return'):
            return self.parse_return()
        if self.match('if'):
            return self.parse_if()
        if self.match('{'):
            return self.parse_block()
        if token.type == IDENT and self.matches(self.peek(1), '='):
            return self.parse_assignment()
        # Bare calls and arithmetic used as a statement
        expr = self.parse_expression()
        self.consume(';')
        return ExpressionStatement(expr)

    def parse_type_spec(self) -> TypeSpec:
        token = self.consume(['number', 'bool', 'void'])
        return TypeSpec.from_name(token.value)

    def parse_declaration(self) -> Declaration:
        self.consume('let')
        name_token = self.consume(IDENT)
        type_spec: Optional[TypeSpec] = None
        if self.match(':'):
            self.consume(':')
            type_spec = self.parse_type_spec()
        self.consume('=')
        expr = self.parse_expression()
        self.consume(';')
        return Declaration(name_token.value, type_spec, expr)

    def parse_assignment(self) -> Assignment:
        name_token = self.consume(IDENT)
        self.consume('=')
        expr = self.parse_expression()
        self.consume(';')
        return Assignment(name_token.value, expr)

    def parse_print(self) -> Print:
        self.consume('croak')
        expr = self.parse_expression()
        self.consume(';')
        return Print(expr)

    def parse_block(self) -> Block:
        self.consume('{')
        statements: List[Node] = []
        while not self.match('}'):
            if self.match(EOF):
                token = self.peek()
                raise ParseError("expected '}' to close block, found end of input", token.line, token.column)
            # handle stray semicolons
            if self.match(';'):
                self.consume(';')
                continue
            statements.append(self.parse_statement())
        self.consume('}')
        return Block(statements)

    def parse_while(self) -> While:
        self.consume('while')
        condition = self.parse_expression()
        body = self.parse_block()
        return While(condition, body)

    def parse_if(self) -> If:
        self.consume('if')
        condition = self.parse_expression()
        then_branch = self.parse_block()
        else_branch: Optional[Node] = None
        if self.match('else'):
            self.consume('else')
            if self.match('if'):
                else_branch = self.parse_if()
            else:
                else_branch = self.parse_block()
        return If(condition, then_branch, else_branch)

    def parse_function_decl(self) -> FunctionDecl:
        self.consume('func')
        name_token = self.consume(IDENT)
        self.consume('(')
        params: List[Param] = []
        if not self.match(')'):
            params = self.parse_param_list()
        self.consume(')')
        self.consume(':')
        return_type = self.parse_type_spec()
        body = self.parse_block()
        return FunctionDecl(name_token.value, params, return_type, body)

    def parse_param_list(self) -> List[Param]:
        params: List[Param] = []
        while True:
            name_token = self.consume(IDENT)
            self.consume(':')
            params.append(Param(name_token.value, self.parse_type_spec()))
            if not self.match(','):
                break
            self.consume(',')
        return params

    def parse_return(self) -> Return:
        self.consume('return')
        if self.match(';'):
            self.consume(';')
            return Return(None)
        value = self.parse_expression()
        self.consume(';')
        return Return(value)

    # Expression parsing (precedence climbing)
    def parse_expression(self, min_power: int = 1) -> Node:
        left = self.parse_primary()
        while True:
            token = self.peek()
            power = BINDING_POWER.get(token.value) if token.type == OPERATOR else None
            if power is None or power < min_power:
                break
            self.pos += 1
            # power + 1 keeps operators of equal strength left-associative
            right = self.parse_expression(power + 1)
            left = Binary(token.value, left, right)
        return left

    def parse_primary(self) -> Node:
        token = self.peek()
        if token.type == NUMBER:
            self.consume(NUMBER)
            return NumberLiteral(int(token.value))
        if token.type == BOOL:
            self.consume(BOOL)
            return BoolLiteral(token.value == 'true')
        if token.type == IDENT:
            self.consume(IDENT)
            if self.match('('):
                return Call(token.value, self.parse_arguments())
            return Identifier(token.value)
        if self.match('('):
            self.consume('(')
            expr = self.parse_expression()
            self.consume(')')
            return Grouping(expr)
        raise ParseError(f"expected expression, found {describe(token)}", token.line, token.column)

    def parse_arguments(self) -> List[Node]:
        self.consume('(')
        args: List[Node] = []
        if not self.match(')'):
            args.append(self.parse_expression())
            while self.match(','):
                self.consume(',')
                args.append(self.parse_expression())
        self.consume(')')
        return args


def parse_program(source: str) -> Program:
    """Scan and parse a complete Froggle unit."""
    tokens = scan(source)
    try:
        return Parser(tokens).parse_program()
    except RecursionError:
        raise ParseError('program is nested too deeply') from None
