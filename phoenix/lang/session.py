"""Running Phoenix source. `run` takes text through the whole pipeline (lexer, parser, evaluator) and hands the stack
back so the next call can continue where this one stopped. Session drives `run` line by line, either from a file or from
the interactive shell.
"""

from dataclasses import dataclass

from phoenix.lang.context import Context
from phoenix.lang.error import PhoenixError
from phoenix.lang.stack import Stack
from phoenix.lang.types import Integer
from phoenix.lang.visit import visit
from phoenix.syntax.lexical import tokenize
from phoenix.syntax.parser import parse
from phoenix.syntax.tokens import Ident

BUILTINS = {
    "null": Integer(0),
    "true": Integer(1),
    "false": Integer(0),
}


@dataclass
class InterpretationResult:
    result: object  # value, or the PhoenixError that stopped the run
    stack: Stack

    @property
    def error(self):
        return self.result if isinstance(self.result, PhoenixError) else None


def new_stack():
    return Stack()


def run(text, filename, stack=None, line=0, error_handler=None):
    """Lexes, parses and evaluates text. Never raises a PhoenixError: errors are returned as the result, together with
    the stack passed in. line is the line number text starts on, for error messages.
    """
    if stack is None:
        stack = new_stack()

    for name, value in BUILTINS.items():
        stack.set(Ident(name), value)

    try:
        tokens = tokenize(text, filename, line)
        if error_handler:
            error_handler.register_step("tokens", [token for token, __ in tokens])

        tree = parse(tokens)
        if error_handler:
            error_handler.register_step("tree", tree.display())

        value, context = visit(tree, Context.root(filename, stack, line))
    except PhoenixError as error:
        return InterpretationResult(error, stack)

    return InterpretationResult(value, context.stack)


class Session:
    """Governs a Phoenix session: one stack shared by every line run in it."""
    SH_FILE = "<stdin>"  # command-line interpreter filename
    GROUPS = ("({", ")}")

    def __init__(self, error_handler, path=SH_FILE):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path
        self.stack = new_stack()
        self.results = []  # values of lines run from a file

        self.lines = []
        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    self.lines = Session.read_lines(file)
            except OSError:
                self.error_handler.fail(f"'{path}' could not be opened")

    @staticmethod
    def preprocess_line(line, prev=""):
        """Joins line to prev, the unfinished line before it, if any. Returns the line and whether it continues on the
        next one (more groups opened than closed).
        """
        line = line.strip()
        if prev:
            line = f"{prev} {line}" if line else prev

        opened, closed = Session.GROUPS
        add_to_prev = sum(line.count(char) for char in opened) > sum(line.count(char) for char in closed)
        return line, add_to_prev

    @staticmethod
    def read_lines(file):
        """Returns (logical line, line number) pairs of file, skipping blank lines."""
        lines = []
        prev, start = "", 0

        for line_num, line in enumerate(file, start=1):
            line, add_to_prev = Session.preprocess_line(line, prev)
            if not prev:
                start = line_num

            if add_to_prev:
                prev = line
            else:
                prev = ""
                if line:
                    lines.append((line, start))

        if prev:
            lines.append((prev, start))  # unbalanced at end of file: let the parser report it
        return lines

    def execute(self, line, line_num=1):
        """Runs line, keeping the resulting stack. Returns the value or raises the PhoenixError."""
        self.error_handler.register_line(self.path, line, line_num)  # in case error is raised

        res = run(line, self.path, self.stack, line_num - 1, self.error_handler)
        self.stack = res.stack
        if res.error is not None:
            raise res.error

        self.error_handler.remove_line(self.path)  # error was not raised
        return res.result

    def run(self):
        """Runs every line read from this session's file, printing each value."""
        for line, line_num in self.lines:
            value = self.execute(line, line_num)
            self.results.append(value)
            print(value)
