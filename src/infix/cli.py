from os import isatty
import sys
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import traceback

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import InMemoryHistory

from .util import InfixError
from .tokenizer import Tokenizer
from .evaluator import evaluate


class InteractiveInput:
    '''
    Prompting line source, completing function names and keeping
    history for the session.
    '''
    def __init__(self, prompt):
        self.prompt = prompt
        self.completer = WordCompleter(sorted(Tokenizer.KEYWORDS))
        self.history = InMemoryHistory()

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    enable_suspend=True,
                                    completer=self.completer,
                                    complete_while_typing=False,
                                    history=self.history,
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the infix calculator.
    '''

    DEFAULT_PROMPT = '> '
    DEFAULT_EXIT_KEYWORD = 'END'
    # As with %g.
    DEFAULT_PRECISION = 6

    def _lines(self):
        '''
        Yield non-blank input lines until the exit keyword.
        '''
        expressions = self.args.expressions
        if expressions is None:
            expressions = self._prompting_input()
        for line in expressions:
            line = line.rstrip('\r\n')
            if line.strip() == self.args.exit_keyword:
                return
            if line.strip():
                yield line

    def format_result(self, value):
        return '{:.{}g}'.format(value, self.args.precision)

    def dumper(self):
        '''
        Dump every token of every line: kind, text, offset.
        '''
        print('<kind>\t<repr(text)>\t<offset>')
        for line in self._lines():
            try:
                tokens = list(Tokenizer(line))
            except InfixError as e:
                self._report(e)
                continue
            ends = [token.offset for token in tokens[1:]] + [len(line)]
            for token, end in zip(tokens, ends):
                text = line[token.offset:end].rstrip()
                print(token.kind.name, repr(text), token.offset, sep='\t')

    def executor(self):
        '''
        Evaluate each line, printing its result or error.
        '''
        for line in self._lines():
            try:
                result = evaluate(line, strict=self.args.strict)
            # Deep enough nesting exhausts the stack.
            except (InfixError, RecursionError) as e:
                self._report(e)
            else:
                print('Result:', self.format_result(result), flush=True)

    def _report(self, error):
        if self.args.verbose:
            traceback.print_exception(type(error), error,
                                      error.__traceback__, file=sys.stderr)
        print('Error:', error.args[0], file=sys.stderr, flush=True)

    def raw_grammar(self):
        '''
        Print the tokenizer's lexeme regular expression.
        '''
        print(Tokenizer.LEXEME)

    def _prompting_input(self):
        '''
        Return a prompting input iterable if either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           isatty(sys.stdin.fileno()) and isatty(sys.stdout.fileno()):
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT)
        else:
            return sys.stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(
            description='Infix calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        self.argument_parser.add_argument('-s', '--strict',
                                          action='store_true',
                                          help='reject trailing tokens')
        self.argument_parser.add_argument('-k', '--precision',
                                          type=int,
                                          default=self.DEFAULT_PRECISION,
                                          help='significant digits shown')
        self.argument_parser.add_argument('-x', '--exit-keyword',
                                          default=self.DEFAULT_EXIT_KEYWORD)
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=None)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        try:
            self.args.action()
        except KeyboardInterrupt:
            sys.exit(1)
