"""Variable storage for Phoenix evaluation."""


class Stack:
    """Mapping of Ident to value. Lookups fall through to the parent stack; writes always go to this one."""

    def __init__(self, parent=None):
        self.symbols = {}
        self.parent = parent

    def get(self, name):
        """Returns the value bound to name, or None if it is unbound here and in every parent."""
        if name in self.symbols:
            return self.symbols[name]
        elif self.parent is not None:
            return self.parent.get(name)
        return None

    def set(self, name, value):
        self.symbols[name] = value

    def absorb(self, other):
        """In-place union with other's own symbols. self wins on conflicts."""
        for name, value in other.symbols.items():
            self.symbols.setdefault(name, value)

    def copy(self):
        """Copy whose writes don't affect self. The parent stack is shared, since it is never written through."""
        stack = Stack(self.parent)
        stack.symbols = dict(self.symbols)
        return stack

    def __contains__(self, name):
        return self.get(name) is not None

    def __repr__(self):
        return f"Stack({', '.join(f'{name}={value}' for name, value in self.symbols.items())})"
