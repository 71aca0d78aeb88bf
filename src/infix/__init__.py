'''
Infix calculator.

Evaluates one arithmetic expression per line: + - * / ^, parentheses,
postfix factorial, prefix percent, pi, sqrt and the trigonometric
functions, the latter optionally in degrees::

    >>> evaluate('2^3^2')
    512.0
    >>> evaluate('sqrt(16)')
    4.0

Each line is tokenized lazily and evaluated in a single recursive-descent
pass; nothing is kept between lines.
'''

from .cli import CLI
from .evaluator import Evaluator, evaluate
from .tokenizer import Token, TokenKind, Tokenizer
from .util import (InfixError, InvalidCharacter, MalformedNumber,
                   UnexpectedToken, DivisionByZero, NegativeFactorial,
                   NegativeSquareRoot, DomainError)


__all__ = ('evaluate', 'Evaluator', 'Tokenizer', 'Token', 'TokenKind', 'CLI',
           'InfixError', 'InvalidCharacter', 'MalformedNumber',
           'UnexpectedToken', 'DivisionByZero', 'NegativeFactorial',
           'NegativeSquareRoot', 'DomainError')
