import math

from .tokenizer import Tokenizer, TokenKind
from .util import (DivisionByZero, DomainError, NegativeFactorial,
                   NegativeSquareRoot, UnexpectedToken, wrap_user_errors)


class Evaluator:
    '''
    Recursive-descent evaluator for the infix calculator grammar.

    Pulls tokens one at a time from a token source (anything with a
    next_token() method) and computes the value as it goes; no tree is
    built. Holds only the current token.

    ::

        Expression := Term (('+' | '-') Term)*
        Term       := Factor (('*' | '/') Factor)*
        Factor     := Power ('!')?
        Power      := Unary ('^' Factor)?
        Unary      := ('+' | '-' | '%') Primary | Primary
        Primary    := Number
                    | '(' Expression ')'
                    | 'sqrt' '(' Expression ')'
                    | 'pi'
                    | TrigFn '(' Expression 'deg'? ')'
    '''

    # Function, and whether deg describes its output rather than its input.
    TRIG = {
        TokenKind.SIN: (math.sin, False),
        TokenKind.COS: (math.cos, False),
        TokenKind.TAN: (math.tan, False),
        TokenKind.ASIN: (math.asin, True),
        TokenKind.ACOS: (math.acos, True),
        TokenKind.ATAN: (math.atan, True),
    }

    def __init__(self, source, *, strict=False):
        '''
        :param source: Token source, e.g. a Tokenizer.
        :param strict: Reject tokens left over after the expression.
        '''
        self.source = source
        self.strict = strict
        self.current = None

    def evaluate(self):
        '''
        Evaluate one whole expression from the token source.

        Unless strict, whatever follows a complete expression is ignored.
        Overflow anywhere along the way surfaces here as a DomainError.
        '''
        self._advance()
        result = self.parse_expression()
        if self.strict and self.current.kind is not TokenKind.END:
            raise UnexpectedToken(TokenKind.END.value, self.current)
        if not math.isfinite(result):
            raise DomainError('Result is not finite: {}'.format(result))
        return result

    def _advance(self):
        self.current = self.source.next_token()

    def _expect(self, kind, expected):
        if self.current.kind is not kind:
            raise UnexpectedToken(expected, self.current)
        self._advance()

    def parse_expression(self):
        result = self.parse_term()
        while self.current.kind in (TokenKind.ADD, TokenKind.SUB):
            if self.current.kind is TokenKind.ADD:
                self._advance()
                result += self.parse_term()
            else:
                self._advance()
                result -= self.parse_term()
        return result

    def parse_term(self):
        result = self.parse_factor()
        while self.current.kind in (TokenKind.MUL, TokenKind.DIV):
            if self.current.kind is TokenKind.MUL:
                self._advance()
                result *= self.parse_factor()
            else:
                self._advance()
                divisor = self.parse_factor()
                if divisor == 0:
                    raise DivisionByZero()
                result /= divisor
        return result

    def parse_factor(self):
        result = self.parse_power()
        if self.current.kind is TokenKind.FACT:
            self._advance()
            if result < 0:
                raise NegativeFactorial(result)
            return self._factorial(result)
        return result

    def parse_power(self):
        result = self.parse_unary()
        if self.current.kind is TokenKind.POW:
            self._advance()
            # Factor, not Power: right-associative.
            exponent = self.parse_factor()
            result = self._power(result, exponent)
        return result

    def parse_unary(self):
        if self.current.kind is TokenKind.ADD:
            self._advance()
            return +self.parse_primary()
        if self.current.kind is TokenKind.SUB:
            self._advance()
            return -self.parse_primary()
        if self.current.kind is TokenKind.PERCENT:
            self._advance()
            return self.parse_primary() / 100.0
        return self.parse_primary()

    def parse_primary(self):
        kind = self.current.kind
        if kind is TokenKind.NUMBER:
            value = self.current.value
            self._advance()
            return value
        elif kind is TokenKind.LPAREN:
            self._advance()
            value = self.parse_expression()
            self._expect(TokenKind.RPAREN, "')'")
            return value
        elif kind is TokenKind.SQRT:
            self._advance()
            self._expect(TokenKind.LPAREN, "'(' after sqrt")
            value = self.parse_expression()
            self._expect(TokenKind.RPAREN, "')'")
            if value < 0:
                raise NegativeSquareRoot(value)
            return math.sqrt(value)
        elif kind is TokenKind.PI:
            self._advance()
            return math.pi
        elif kind in self.TRIG:
            self._advance()
            self._expect(TokenKind.LPAREN, "'(' after {}".format(kind.value))
            value = self.parse_expression()
            degrees = False
            if self.current.kind is TokenKind.DEG:
                degrees = True
                self._advance()
            self._expect(TokenKind.RPAREN, "')'")
            return self._trig(kind, value, degrees)
        raise UnexpectedToken("number, '(' or function", self.current)

    @wrap_user_errors('Cannot compute factorial of {1}')
    def _factorial(self, value):
        '''
        Product of 2..floor(value); 1 for anything below 2.
        '''
        result = 1.0
        for i in range(2, int(value) + 1):
            result *= i
            if math.isinf(result):
                break
        return result

    @wrap_user_errors('Cannot raise {1} to the power of {2}')
    def _power(self, base, exponent):
        return math.pow(base, exponent)

    @wrap_user_errors('Cannot compute {1.value} of {2}')
    def _trig(self, kind, value, degrees):
        function, inverse = self.TRIG[kind]
        if degrees and not inverse:
            value = value * math.pi / 180.0
        result = function(value)
        if degrees and inverse:
            result = result * 180.0 / math.pi
        return result


def evaluate(line, *, strict=False):
    '''
    Evaluate one line of input and return its value as a float.

    Raises an InfixError subclass describing the first problem found.
    '''
    return Evaluator(Tokenizer(line), strict=strict).evaluate()
