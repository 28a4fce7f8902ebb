"""Abstract syntax tree of the Phoenix language.

The tree is a closed set of node types, each an immutable dataclass that owns its children. Every node carries the
Position it was parsed from; positions take no part in node equality, so two trees parsed from differently spaced source
compare equal.

`str(node)` renders a node back to Phoenix source, wrapping every compound node in parentheses so that the rendered text
parses back to an equivalent tree. `node.display()` renders the tree for debugging.
"""

from dataclasses import dataclass, field
from enum import Enum

from phoenix.syntax.tokens import TokenType


class UnarySign(Enum):
    PLUS = "+"
    MINUS = "-"
    NOT = "!"

    @staticmethod
    def from_token(token):
        """Returns the sign for a +, - or ! token, or None."""
        return {
            TokenType.PLUS: UnarySign.PLUS,
            TokenType.MINUS: UnarySign.MINUS,
            TokenType.BANG: UnarySign.NOT,
        }.get(token.type)

    def __str__(self):
        return self.value


def _position():
    return field(default=None, compare=False, repr=False)


class Node:
    """Superclass of every syntax tree node."""

    @property
    def nodes(self):
        """Direct children, in source order."""
        return []

    def display(self, indents=0):
        """Recursively displays the tree with readable format.

        Format:
        <Node>(expr='<expr>', nodes=[
            <Node>(expr='<expr>', nodes=[
                ...
                <Node>(expr='<expr>')  # <-- if nodes is empty
            ])
        ])
        """
        result = f"{'    ' * indents}{type(self).__name__}(expr='{self}'"
        if self.nodes:
            result += ", nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    def __repr__(self):
        return f"{type(self).__name__}('{self}')"


@dataclass(frozen=True, repr=False)
class Literal(Node):
    value: object
    position: object = _position()

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True, repr=False)
class Variable(Node):
    name: object
    position: object = _position()

    def __str__(self):
        return str(self.name)


@dataclass(frozen=True, repr=False)
class Assignment(Node):
    name: object
    expr: Node
    position: object = _position()

    @property
    def nodes(self):
        return [self.expr]

    def __str__(self):
        return f"(let {self.name} = {self.expr})"


@dataclass(frozen=True, repr=False)
class UnaryOperation(Node):
    operation: UnarySign
    node: Node
    position: object = _position()

    @property
    def nodes(self):
        return [self.node]

    def __str__(self):
        return f"({self.operation}{self.node})"


@dataclass(frozen=True, repr=False)
class BinaryOperation(Node):
    left: Node
    operation: object  # Token
    right: Node
    position: object = _position()

    @property
    def nodes(self):
        return [self.left, self.right]

    def __str__(self):
        return f"({self.left} {self.operation} {self.right})"


@dataclass(frozen=True, repr=False)
class IfNode(Node):
    cases: tuple  # ((condition, expr), ...), tried in order
    else_case: object = None
    position: object = _position()

    @property
    def nodes(self):
        nodes = [node for case in self.cases for node in case]
        if self.else_case is not None:
            nodes.append(self.else_case)
        return nodes

    def __str__(self):
        (condition, expr), *elifs = self.cases

        result = f"(if {condition} then {expr}"
        for condition, expr in elifs:
            result += f" elif {condition} then {expr}"
        if self.else_case is not None:
            result += f" else {self.else_case}"
        return result + ")"


@dataclass(frozen=True, repr=False)
class WhileNode(Node):
    condition: Node
    body: Node
    position: object = _position()

    @property
    def nodes(self):
        return [self.condition, self.body]

    def __str__(self):
        return f"(while {self.condition} then {self.body})"


@dataclass(frozen=True, repr=False)
class ForNode(Node):
    var_name: object
    start: Node
    end: Node
    body: Node
    position: object = _position()

    @property
    def nodes(self):
        return [self.start, self.end, self.body]

    def __str__(self):
        return f"(for {self.var_name} in {self.start} to {self.end} then {self.body})"


NODE_TYPES = (Literal, Variable, Assignment, UnaryOperation, BinaryOperation, IfNode, WhileNode, ForNode)
