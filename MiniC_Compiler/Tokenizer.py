from collections import namedtuple
from enum import Enum

import ply.lex as lex


class TokenKind(str, Enum):
    KEYWORD = 'KEYWORD'
    IDENTIFIER = 'IDENTIFIER'
    STRING = 'STRING'
    NUMBER = 'NUMBER'
    OPERATOR = 'OPERATOR'
    PUNCTUATION = 'PUNCTUATION'
    ERROR = 'ERROR'


Token = namedtuple('Token', ['kind', 'text', 'line', 'column'])

KEYWORDS = {
    'int', 'char', 'float', 'double', 'void',
    'if', 'else', 'while', 'for', 'return',
    'printf',
}

tokens = [kind.value for kind in TokenKind]

t_ignore = ' \t\r\f\v'


def t_newline(t):
    r'\n+'
    t.lexer.lineno += len(t.value)


def t_STRING(t):
    r'"[^"]*"'
    t.lexer.lineno += t.value.count('\n')
    return t


def t_NUMBER(t):
    r'\d+(?:\.\d+)?(?:[eE][+-]?\d+)?'
    return t


def t_IDENTIFIER(t):
    r'[a-zA-Z_][a-zA-Z0-9_]*'
    if t.value in KEYWORDS:
        t.type = 'KEYWORD'
    return t


def t_OPERATOR(t):
    r'&&|\|\||\+\+|--|[+\-*/%=<>!&|^]=?'
    return t


def t_PUNCTUATION(t):
    r'[;,(){}\[\].]'
    return t


def t_error(t):
    t.type = 'ERROR'
    t.value = t.value[0]
    t.lexer.skip(1)
    return t


_lexer = lex.lex()


def tokenize(source):
    """Split source text into Tokens, one ERROR token per unknown character."""
    lexer = _lexer.clone()
    lexer.lineno = 1
    lexer.input(source)

    result = []
    line, line_start = 1, 0
    for tok in lexer:
        if tok.lineno != line:
            line, line_start = tok.lineno, source.rfind('\n', 0, tok.lexpos) + 1
        result.append(Token(TokenKind(tok.type), tok.value, tok.lineno, tok.lexpos - line_start + 1))
    return result


def format_token_table(token_list):
    rows = [
        f"| {'Line':^10} | {'Column':^10} | {'Token':^15} | {'Value':^10}",
        "|------------|------------|-----------------|------------",
    ]
    for tok in token_list:
        rows.append(f"| {tok.line:^10} | {tok.column:^10} | {tok.kind.value:^15} |   {tok.text}")
    return "\n".join(rows)
