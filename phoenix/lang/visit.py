"""Tree-walking evaluator for the Phoenix language.

`visit(node, context)` evaluates node and returns `(value, context)`, where the returned context holds the stack as it
stands after node's side effects. Contexts are forked wherever a sub-expression must not see its sibling's assignments:
the two operands of a binary operation are both evaluated against the incoming context and their resulting contexts are
merged afterwards into the incoming stack, and if-conditions are evaluated in a throwaway fork. Apart from those forks,
every assignment is written straight into the stack passed to the outermost call.

Operands of `&&` and `||` are always both evaluated: there is no short-circuiting.
"""

from phoenix.lang.context import Context
from phoenix.lang.error import ErrorKind, PhoenixError
from phoenix.lang.types import NONE, CmpResult, Integer
from phoenix.syntax.nodes import (
    Assignment, BinaryOperation, ForNode, IfNode, Literal, UnaryOperation, UnarySign, Variable, WhileNode
)
from phoenix.syntax.position import Position
from phoenix.syntax.tokens import TokenType

BINARY_OPERATIONS = {
    TokenType.PLUS: lambda left, right: left.add(right),
    TokenType.MINUS: lambda left, right: left.sub(right),
    TokenType.STAR: lambda left, right: left.mul(right),
    TokenType.SLASH: lambda left, right: left.div(right),
    TokenType.DOUBLE_EQUAL: lambda left, right: left.eq(right),
    TokenType.NON_EQUAL: lambda left, right: left.neq(right),
    TokenType.LESS_THAN: lambda left, right: left.lt(right),
    TokenType.GREATER_THAN: lambda left, right: left.gt(right),
    TokenType.LESS_THAN_EQ: lambda left, right: left.lte(right),
    TokenType.GREATER_THAN_EQ: lambda left, right: left.gte(right),
    TokenType.DOUBLE_AND: lambda left, right: left.and_(right),
    TokenType.DOUBLE_OR: lambda left, right: left.or_(right),
}

UNARY_OPERATIONS = {
    UnarySign.PLUS: lambda value: value,
    UnarySign.MINUS: lambda value: value.neg(),
    UnarySign.NOT: lambda value: value.not_(),
}

FOR_STEP = Integer(1)


def visit(node, context):
    """Evaluates node in context, returning (value, context)."""
    try:
        visitor = VISITORS[type(node)]
    except KeyError:
        raise PhoenixError(ErrorKind.Undefined, f"can't evaluate {type(node).__name__}", context=context)

    try:
        return visitor(node, context)
    except PhoenixError as error:
        if error.context is None and error.position is None:  # raised by a value operation
            raise error.with_context(context) from None
        raise


def visit_literal(node, context):
    return node.value, context


def visit_variable(node, context):
    value = context.stack.get(node.name)
    if value is None:
        raise PhoenixError(ErrorKind.NameError, f"{node.name} is not defined", context=context)
    return value, context


def visit_assignment(node, context):
    value, context = visit(node.expr, context)
    context.stack.set(node.name, value)
    return value, context


def visit_if_node(node, context):
    for condition, expr in node.cases:
        condition_value, __ = visit(condition, context.fork())
        if condition_value.to_bool():
            return visit(expr, context)

    if node.else_case is not None:
        return visit(node.else_case, context)
    return NONE, context


def visit_while_node(node, context):
    value = NONE
    while True:
        condition_value, context = visit(node.condition, context)
        if not condition_value.to_bool():
            return value, context
        value, context = visit(node.body, context)


def visit_for_node(node, context):
    start, context = visit(node.start, context)
    end, context = visit(node.end, context)

    # the variable starts one step early so that every iteration is "step, compare, run"
    context.stack.set(node.var_name, start.sub(FOR_STEP))

    value = NONE
    while True:
        candidate = context.stack.get(node.var_name).add(FOR_STEP)
        if end.cmp(candidate) != CmpResult.GREATER:
            return value, context

        context.stack.set(node.var_name, candidate)
        value, context = visit(node.body, context)


def visit_binary_operation(node, context):
    left, left_context = visit(node.left, context.fork())
    try:
        right, right_context = visit(node.right, context)
    except PhoenixError:
        context.stack.absorb(left_context.stack)  # left's assignments completed before the error
        raise
    context = left_context.combine(right_context)

    try:
        operation = BINARY_OPERATIONS[node.operation.type]
    except KeyError:
        raise PhoenixError(ErrorKind.Undefined, f"can't operate on token {node.operation}", context=context)

    try:
        return operation(left, right), context
    except PhoenixError as error:
        raise error.with_context(context) from None


def visit_unary_operation(node, context):
    value, operand_context = visit(node.node, context)

    position = operand_context.position
    position = Position(position.index - 1, position.filename, position.line, position.column, position.length + 1)
    unary_context = Context(position, context.stack, context)

    try:
        return UNARY_OPERATIONS[node.operation](value), unary_context
    except PhoenixError as error:
        raise error.with_context(unary_context) from None


VISITORS = {
    Literal: visit_literal,
    Variable: visit_variable,
    Assignment: visit_assignment,
    IfNode: visit_if_node,
    WhileNode: visit_while_node,
    ForNode: visit_for_node,
    BinaryOperation: visit_binary_operation,
    UnaryOperation: visit_unary_operation,
}
