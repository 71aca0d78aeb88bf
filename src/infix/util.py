from functools import wraps


class InfixError(Exception):
    '''
    Base of every error raised while evaluating a line.

    The human-readable message is always args[0].
    '''


class InvalidCharacter(InfixError):
    def __init__(self, character, offset):
        super().__init__('Invalid character {!r} at offset {}'
                         .format(character, offset))
        self.character = character
        self.offset = offset


class MalformedNumber(InfixError):
    def __init__(self, text, offset):
        super().__init__('Malformed number {!r} at offset {}'
                         .format(text, offset))
        self.text = text
        self.offset = offset


class UnexpectedToken(InfixError):
    def __init__(self, expected, found):
        super().__init__('Expected {}, found {}'.format(expected, found))
        self.expected = expected
        self.found = found


class DivisionByZero(InfixError):
    def __init__(self):
        super().__init__('Division by zero')


class NegativeFactorial(InfixError):
    def __init__(self, value):
        super().__init__('Cannot compute factorial of negative number {}'
                         .format(value))
        self.value = value


class NegativeSquareRoot(InfixError):
    def __init__(self, value):
        super().__init__('Cannot compute square root of negative number {}'
                         .format(value))
        self.value = value


class DomainError(InfixError):
    pass


def wrap_user_errors(fmt):
    '''
    Decorator that converts math errors into DomainErrors.

    Passes through InfixErrors. fmt is formatted with the positional
    arguments of the call, self included.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except InfixError:
                raise
            except (ValueError, OverflowError) as e:
                raise DomainError(fmt.format(*args, **kwargs), e) from e
        return wrapper
    return decorator
