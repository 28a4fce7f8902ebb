"""Error handling for the Phoenix language.

Every problem the language itself can report (a bad character, a grammar violation, an unbound name, a division by
zero...) is raised as a PhoenixError. PhoenixErrors propagate as ordinary Python exceptions through the lexer, parser
and evaluator; `session.run` is the only place that turns them back into values. Anything other than a PhoenixError that
makes it all the way to ErrorHandler is assumed to be an internal issue.
"""

import sys
from enum import Enum

from termcolor import colored


class ErrorKind(Enum):
    SyntaxError = "SyntaxError"
    EndOfFile = "EndOfFile"      # input ran out where an atom was expected
    Undefined = "Undefined"
    Unimplemented = "Undefined"  # alias: operation not defined for a value type
    NameError = "NameError"
    ZeroDivision = "ZeroDivision"
    TypeError = "TypeError"

    def __str__(self):
        return self.value


class PhoenixError(Exception):
    """A Phoenix error. Lexer and parser errors carry the offending position; runtime errors carry the evaluation
    context they were raised in, whose parent chain is the traceback.
    """

    def __init__(self, kind, message, position=None, context=None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.position = position
        self.context = context

    def with_context(self, context):
        """Returns a copy of this error attributed to context."""
        return PhoenixError(self.kind, self.message, self.position, context)

    @property
    def span(self):
        """Innermost known position of the error, if any."""
        if self.context is not None:
            return self.context.position
        return self.position

    def traceback(self):
        """Positions of the error, outermost first."""
        if self.context is None:
            return [self.position] if self.position is not None else []

        positions = []
        context = self.context
        while context is not None:
            positions.insert(0, context.position)
            context = context.parent
        return positions

    def traceback_text(self):
        """Header and one "File" line per traceback position, each ending in a newline."""
        result = "ERROR - Traceback:\n"
        for position in self.traceback():
            result += f"  File {position.filename}, line {position.line + 1}, column {position.column}:\n"
        return result

    def __str__(self):
        return self.traceback_text() + f"{self.kind}: {self.message}"

    def __repr__(self):
        return f"PhoenixError({self.kind}, {self.message!r})"


def syntax_error(message, position=None):
    return PhoenixError(ErrorKind.SyntaxError, message, position)


def unimplemented(method, value):
    return PhoenixError(ErrorKind.Unimplemented, f"method '{method}' is not implemented for {value}")


class ErrorHandler:
    """Context manager that prints Phoenix errors instead of letting them escape. Also prints intermediate pipeline
    steps when verbose.
    """
    ERROR = "red"
    STEP = "magenta"

    def __init__(self, fatal=True, verbose=False):
        self.fatal = fatal
        self.verbose = verbose
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called before the line is run."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after the line ran successfully."""
        self.traceback[path] = (None, None)

    def register_step(self, label, text):
        """Prints an intermediate result (tokens, syntax tree) if verbose."""
        if self.verbose:
            print(colored(f"{label}: ", ErrorHandler.STEP, attrs=["bold"]) + str(text))

    @staticmethod
    def diagnose(line, span):
        """Returns line with the part covered by span highlighted and underlined."""
        start = min(max(span.index, 0), len(line))
        end = min(max(span.end, start + 1), len(line) + 1)

        diagnosis = "  " + line[:start]
        diagnosis += colored(line[start:end], ErrorHandler.ERROR, attrs=["bold"])
        diagnosis += line[end:] + "\n"

        diagnosis += "  " + " " * start
        diagnosis += colored("^" + "~" * (end - start - 1), ErrorHandler.ERROR, attrs=["bold"])

        return diagnosis

    def throw(self, error):
        """Prints error with its traceback and, if the offending line is registered, a diagnosis."""
        error_msg = error.traceback_text()
        error_msg += colored(f"{error.kind}: ", ErrorHandler.ERROR, attrs=["bold"]) + error.message
        print(error_msg)

        span = error.span
        if span is not None:
            line, __ = self.traceback.get(span.filename, (None, None))
            if line:
                print(ErrorHandler.diagnose(line, span))

        self._finish()

    def fail(self, msg, internal=False):
        """Prints an error that did not come from Phoenix code."""
        error_msg = colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"]) if internal else ""
        print(error_msg + colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + msg)
        self._finish()

    def _finish(self):
        if self.fatal:
            sys.exit(1)
        for path in self.traceback:  # if error occurred, forget offending lines (no need if error is fatal)
            self.traceback[path] = (None, None)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.fail("keyboard interrupt")
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.fail("maximum recursion depth exceeded, expression is nested too deeply")
        elif exc_type is PhoenixError:
            self.throw(exc_val)
        elif exc_type is not None:
            self.fail(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True)
            do_exit = True

        return not do_exit
