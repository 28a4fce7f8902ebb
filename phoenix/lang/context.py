"""Evaluation context: what the evaluator threads through every step."""

from phoenix.syntax.position import Position


class Context:
    """Position being evaluated, the live Stack, and optionally the context this one was entered from. The parent chain
    becomes the traceback of an error raised in this context.
    """

    def __init__(self, position, stack, parent=None):
        self.position = position
        self.stack = stack
        self.parent = parent

    @classmethod
    def root(cls, filename, stack, line=0):
        return cls(Position(0, filename, line, 0, 0), stack)

    def fork(self):
        """Returns a context whose assignments don't affect this one."""
        return Context(self.position, self.stack.copy(), self.parent)

    def combine(self, other):
        """Context covering self and other, with other's stack. Symbols only self's stack defines are written into
        other's, so assignments made in either land on the stack other was evaluated against. The parent is self's if it
        has one, else other's.
        """
        other.stack.absorb(self.stack)
        return Context(
            self.position.combine(other.position),
            other.stack,
            self.parent if self.parent is not None else other.parent,
        )

    def __repr__(self):
        return f"Context({self.position!r}, {self.stack!r})"
