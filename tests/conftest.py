from pytest import Item, fixture

from infix import CLI, Token, TokenKind


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every passing assertion with the line it checked, so a run over
    many expressions can be audited afterwards.

    Needs enable_assertion_pass_hook; use with pytest -rP.
    '''
    where = '{}:{}'.format(item.nodeid, lineno)
    print(where, 'given', orig)
    # Drop the trailing full-diff hint pytest appends.
    for line in expl.splitlines()[:-2]:
        print(where, 'actual', line)


class ScriptedSource:
    '''
    Token source replaying a fixed list of tokens, then END forever.
    '''
    def __init__(self, *tokens):
        self.tokens = list(tokens)
        self.calls = 0

    def next_token(self):
        self.calls += 1
        if self.tokens:
            return self.tokens.pop(0)
        return Token(TokenKind.END)


@fixture
def scripted():
    return ScriptedSource


@fixture
def run_cli(capsys):
    '''
    Run the CLI on some arguments, returning (stdout, stderr).
    '''
    def run(*args):
        CLI().run(args=list(args))
        captured = capsys.readouterr()
        return captured.out, captured.err
    return run
