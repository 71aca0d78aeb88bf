from enum import Enum
from functools import reduce
from typing import NamedTuple, Optional
import operator

import regex

from .util import InvalidCharacter, MalformedNumber


class TokenKind(Enum):
    NUMBER = 'number'

    ADD = '+'
    SUB = '-'
    MUL = '*'
    DIV = '/'
    POW = '^'
    PERCENT = '%'
    FACT = '!'
    LPAREN = '('
    RPAREN = ')'

    PI = 'pi'
    SQRT = 'sqrt'
    SIN = 'sin'
    COS = 'cos'
    TAN = 'tan'
    ASIN = 'asin'
    ACOS = 'acos'
    ATAN = 'atan'
    DEG = 'deg'

    END = 'end of input'


class Token(NamedTuple):
    kind: TokenKind
    value: Optional[float] = None
    offset: int = 0

    def __str__(self):
        if self.kind is TokenKind.NUMBER:
            return 'number {!r}'.format(self.value)
        elif self.kind is TokenKind.END:
            return self.kind.value
        return repr(self.kind.value)


class Tokenizer:
    '''
    Lexer for the infix calculator grammar.

    Produces one token per next_token() call, scanning only as far as the
    token it returns. Once the input is exhausted, keeps returning END.
    '''
    OPERATORS = {
        kind.value: kind
        for kind
        in (TokenKind.ADD, TokenKind.SUB, TokenKind.MUL, TokenKind.DIV,
            TokenKind.POW, TokenKind.PERCENT, TokenKind.FACT,
            TokenKind.LPAREN, TokenKind.RPAREN)
    }
    # No two keywords share a prefix, so order doesn't matter.
    KEYWORDS = {
        kind.value: kind
        for kind
        in (TokenKind.PI, TokenKind.SIN, TokenKind.COS, TokenKind.TAN,
            TokenKind.ASIN, TokenKind.ACOS, TokenKind.ATAN,
            TokenKind.SQRT, TokenKind.DEG)
    }

    # Greedy on dots; float() gets to reject 1.2.3 afterwards.
    NUMBER = r'[0-9][0-9.]*'
    assert not [symbol
                for symbol
                in OPERATORS
                if len(symbol) != 1]
    OPERATOR = r'(?:' + r'|'.join(map(regex.escape, OPERATORS)) + r')'
    KEYWORD = r'(?:' + r'|'.join(map(regex.escape, KEYWORDS)) + r')'
    # ASCII whitespace only.
    SPACE = r'[\t\n\x0b\x0c\r\x20]+'

    # All possible lexemes, whitespace aside.
    LEXEME = r'(?<number>' + NUMBER + r')|' \
             r'(?<operator>' + OPERATOR + r')|' \
             r'(?<keyword>' + KEYWORD + r')'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.POSIX,
                    regex.DOTALL,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    _lexeme = regex.compile(LEXEME, flags=FLAGS)
    _space = regex.compile(SPACE, flags=FLAGS)

    def __init__(self, text):
        self.text = text
        self.offset = 0

    def __iter__(self):
        '''
        Yield tokens up to and including the first END.
        '''
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenKind.END:
                return

    def next_token(self):
        '''
        Scan and return the next token.
        '''
        space = self._space.match(self.text, self.offset)
        if space is not None:
            self.offset = space.end()
        start = self.offset
        if start >= len(self.text):
            return Token(TokenKind.END, offset=len(self.text))

        match = self._lexeme.match(self.text, start)
        if match is None:
            raise InvalidCharacter(self.text[start], start)
        self.offset = match.end()

        if match.group('number') is not None:
            return Token(TokenKind.NUMBER,
                         self._parse_number(match.group('number'), start),
                         start)
        elif match.group('operator') is not None:
            return Token(self.OPERATORS[match.group('operator')],
                         offset=start)
        else:
            return Token(self.KEYWORDS[match.group('keyword')],
                         offset=start)

    def _parse_number(self, text, offset):
        try:
            return float(text)
        except ValueError:
            raise MalformedNumber(text, offset) from None
