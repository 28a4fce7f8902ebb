"""Source positions for Phoenix diagnostics.

A Position is a cursor into the source text that doubles as a span: `index`, `line` and `column` mark where the span
starts and `length` how many characters it covers. The lexer owns a single Position and advances it one character at a
time, copying it whenever a token needs to remember where it started.
"""


class Position:
    """Cursor/span over a named piece of source text. Lines and columns are 0-based."""

    def __init__(self, index, filename, line, column, length):
        self.index = index
        self.filename = filename
        self.line = line
        self.column = column
        self.length = length

    def advance(self, current_char=None):
        """Moves the cursor past current_char, starting a new line if current_char is a newline."""
        self.index += 1
        self.column += 1

        if current_char == "\n":
            self.line += 1
            self.column = 0

        return self

    def copy(self, length=None):
        return Position(self.index, self.filename, self.line, self.column, self.length if length is None else length)

    def combine(self, other):
        """Returns a span starting at self and reaching to the end of other."""
        return Position(self.index, self.filename, self.line, self.column, other.index - self.index + other.length)

    @property
    def end(self):
        return self.index + self.length

    def __eq__(self, other):
        return isinstance(other, Position) and (self.index, self.filename, self.line, self.column, self.length) == (
            other.index, other.filename, other.line, other.column, other.length
        )

    def __repr__(self):
        return f"Position(index={self.index}, filename={self.filename!r}, line={self.line}, column={self.column}, " \
               f"length={self.length})"
