"""Tokenizer for the Froggle language.

Scanning is done by a Lark lexer configured with a terminal-only grammar.
Lark splits the source into words, operators and punctuation and tracks
line/column positions. Words are then reclassified: keywords and boolean
literals are recognised by exact match, all-digit words become number
literals and everything else becomes an identifier.

The `scan` function is the public entry point and returns a list of
`lark.Token` objects terminated by an `EOF` token.
"""

from __future__ import annotations

from typing import List

from lark import Lark, Token
from lark.exceptions import UnexpectedCharacters

from .errors import LexError

KEYWORDS = frozenset({
    'let', 'croak', 'while', 'func', 'return', 'if', 'else',
    'number', 'bool', 'void',
})
BOOLEANS = frozenset({'true', 'false'})

# Token kinds handed to the parser
KEYWORD = 'KEYWORD'
IDENT = 'IDENT'
NUMBER = 'NUMBER'
BOOL = 'BOOL'
OPERATOR = 'OPERATOR'
PUNCTUATION = 'PUNCTUATION'
EOF = 'EOF'

TOKEN_KINDS = frozenset({KEYWORD, IDENT, NUMBER, BOOL, OPERATOR, PUNCTUATION, EOF})


FROGGLE_TOKENS = r"""
    start: _token*
    _token: WORD | OPERATOR | PUNCTUATION

    WORD: /[A-Za-z0-9_]+/
    OPERATOR: /==|[=+\-*\/<>]/
    PUNCTUATION: /[:;{}(),]/

    %import common.WS
    %ignore WS
"""


FROGGLE_LEXER = Lark(
    FROGGLE_TOKENS,
    parser='lalr',
    lexer='basic',
)


def classify_word(token: Token) -> Token:
    """Re-type a WORD token as a keyword, boolean, number or identifier."""
    word = token.value
    if word in KEYWORDS:
        return Token.new_borrow_pos(KEYWORD, word, token)
    if word in BOOLEANS:
        return Token.new_borrow_pos(BOOL, word, token)
    if word.isdigit():
        return Token.new_borrow_pos(NUMBER, word, token)
    # any other run of letters, digits and `_`, including `12abc`
    return Token.new_borrow_pos(IDENT, word, token)


def end_of_input(source: str) -> Token:
    line = source.count('\n') + 1
    column = len(source) - (source.rfind('\n') + 1) + 1
    return Token(EOF, '', start_pos=len(source), line=line, column=column)


def scan(source: str) -> List[Token]:
    """Convert source code into a list of tokens ending with `EOF`."""
    tokens: List[Token] = []
    try:
        for token in FROGGLE_LEXER.lex(source):
            if token.type == 'WORD':
                tokens.append(classify_word(token))
            else:
                tokens.append(token)
    except UnexpectedCharacters as e:
        raise LexError(source[e.pos_in_stream], e.line, e.column) from None
    tokens.append(end_of_input(source))
    return tokens
