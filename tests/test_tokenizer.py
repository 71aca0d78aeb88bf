'''
Tokenizer tests
'''

import regex

from infix.util import InvalidCharacter, MalformedNumber
from infix.tokenizer import Token, TokenKind, Tokenizer

from pytest import mark, raises


def kinds(text):
    return [token.kind for token in Tokenizer(text)]


def test_operators():
    assert kinds('+-*/^%!()') == [
        TokenKind.ADD, TokenKind.SUB, TokenKind.MUL, TokenKind.DIV,
        TokenKind.POW, TokenKind.PERCENT, TokenKind.FACT,
        TokenKind.LPAREN, TokenKind.RPAREN, TokenKind.END,
    ]


def test_keywords():
    assert kinds('pi sin cos tan asin acos atan sqrt deg') == [
        TokenKind.PI, TokenKind.SIN, TokenKind.COS, TokenKind.TAN,
        TokenKind.ASIN, TokenKind.ACOS, TokenKind.ATAN, TokenKind.SQRT,
        TokenKind.DEG, TokenKind.END,
    ]


def test_keywords_need_no_separator():
    assert kinds('2pi') == [TokenKind.NUMBER, TokenKind.PI, TokenKind.END]
    assert kinds('sqrt(pi)') == [TokenKind.SQRT, TokenKind.LPAREN,
                                 TokenKind.PI, TokenKind.RPAREN,
                                 TokenKind.END]


@mark.parametrize('text, value', [
    ('0', 0.0),
    ('42', 42.0),
    ('3.25', 3.25),
    ('007', 7.0),
    ('5.', 5.0),
])
def test_numbers(text, value):
    token = Tokenizer(text).next_token()
    assert token == Token(TokenKind.NUMBER, value, 0)


def test_offsets_skip_whitespace():
    tokens = list(Tokenizer('  12 +\tsin'))
    assert [token.offset for token in tokens] == [2, 5, 7, 10]
    assert tokens[-1].kind is TokenKind.END


def test_ascii_whitespace():
    assert kinds(' \t\n\x0b\x0c\r1\r\n') == [TokenKind.NUMBER, TokenKind.END]


@mark.parametrize('space', ['\N{NO-BREAK SPACE}', '\N{EM SPACE}',
                            '\N{IDEOGRAPHIC SPACE}'])
def test_unicode_whitespace_rejected(space):
    with raises(InvalidCharacter) as info:
        list(Tokenizer('2' + space + '+ 3'))
    assert info.value.character == space
    assert info.value.offset == 1


def test_end_is_sticky():
    tokenizer = Tokenizer('1 ')
    assert tokenizer.next_token().kind is TokenKind.NUMBER
    for _ in range(3):
        assert tokenizer.next_token() == Token(TokenKind.END, offset=2)
    assert tokenizer.offset == 2


def test_empty_input():
    assert list(Tokenizer('')) == [Token(TokenKind.END, offset=0)]
    assert list(Tokenizer('   ')) == [Token(TokenKind.END, offset=3)]


def test_scans_lazily():
    tokenizer = Tokenizer('1 + $')
    assert tokenizer.next_token().value == 1.0
    assert tokenizer.next_token().kind is TokenKind.ADD
    with raises(InvalidCharacter):
        tokenizer.next_token()


def test_multiple_dots():
    with raises(MalformedNumber,
                match=regex.escape("Malformed number '1.2.3' at offset 4")):
        list(Tokenizer('1 + 1.2.3'))


def test_leading_dot():
    with raises(InvalidCharacter) as info:
        list(Tokenizer('.5'))
    assert info.value.character == '.'
    assert info.value.offset == 0


@mark.parametrize('text, character, offset', [
    ('2 $ 3', '$', 2),
    ('sinx', 'x', 3),
    ('Pi', 'P', 0),
    ('x', 'x', 0),
    ('\N{ARABIC-INDIC DIGIT THREE}', '\N{ARABIC-INDIC DIGIT THREE}', 0),
])
def test_invalid_characters(text, character, offset):
    with raises(InvalidCharacter,
                match=regex.escape('Invalid character {!r} at offset {}'
                                   .format(character, offset))):
        list(Tokenizer(text))


def test_token_descriptions():
    assert str(Token(TokenKind.RPAREN)) == "')'"
    assert str(Token(TokenKind.SQRT)) == "'sqrt'"
    assert str(Token(TokenKind.NUMBER, 2.5)) == 'number 2.5'
    assert str(Token(TokenKind.END)) == 'end of input'
