"""Runtime values of the Phoenix language: Integer, Float and None.

Operations on values are grouped into three capabilities, each a mixin whose methods fail with an Unimplemented error by
default, so a value type only overrides what it actually supports:

```
Comparable  ::= cmp                                 ; ==, !=, <, >, <=, >= are all defined once in terms of cmp
Operators   ::= add | sub | mul | div | neg         ; arithmetic
              | and_ | or_ | not_                   ; logical (non-zero is truthy, results are Integer 1 or 0)
Conversion  ::= to_bool                             ; used by if/while conditions
```

There is no implicit numeric coercion: an Integer never equals or combines with a Float, and mixing them is a TypeError.
Values are immutable; every operation returns a new value.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from phoenix.lang.error import ErrorKind, PhoenixError, unimplemented


class CmpResult(Enum):
    LESS = -1
    EQUAL = 0
    GREATER = 1


def type_error(method, value, other):
    return PhoenixError(ErrorKind.TypeError, f"can't {method} {type(value).__name__} and {type(other).__name__}")


def boolean(condition):
    return Integer(1 if condition else 0)


class Comparable:

    def cmp(self, other):
        """Compares self to other, returning a CmpResult."""
        raise unimplemented("cmp", self)

    def eq(self, other):
        return boolean(self.cmp(other) == CmpResult.EQUAL)

    def neq(self, other):
        return boolean(self.cmp(other) != CmpResult.EQUAL)

    def lt(self, other):
        return boolean(self.cmp(other) == CmpResult.LESS)

    def gt(self, other):
        return boolean(self.cmp(other) == CmpResult.GREATER)

    def lte(self, other):
        return boolean(self.cmp(other) != CmpResult.GREATER)

    def gte(self, other):
        return boolean(self.cmp(other) != CmpResult.LESS)


class Operators:

    def add(self, other):
        raise unimplemented("add", self)

    def sub(self, other):
        raise unimplemented("sub", self)

    def mul(self, other):
        raise unimplemented("mul", self)

    def div(self, other):
        """Implementations must raise ZeroDivision themselves before dividing."""
        raise unimplemented("div", self)

    def neg(self):
        raise unimplemented("neg", self)

    def and_(self, other):
        raise unimplemented("and", self)

    def or_(self, other):
        raise unimplemented("or", self)

    def not_(self):
        raise unimplemented("not", self)


class Conversion:

    def to_bool(self):
        raise unimplemented("to_bool", self)


class Type(Comparable, Operators, Conversion):
    """Superclass of every Phoenix value."""


@dataclass(frozen=True)
class Integer(Type):
    value: int

    def cmp(self, other):
        if not isinstance(other, Integer):
            raise type_error("compare", self, other)
        return _cmp(self.value, other.value)

    def add(self, other):
        if not isinstance(other, Integer):
            raise type_error("add", self, other)
        return Integer(self.value + other.value)

    def sub(self, other):
        if not isinstance(other, Integer):
            raise type_error("subtract", self, other)
        return Integer(self.value - other.value)

    def mul(self, other):
        if not isinstance(other, Integer):
            raise type_error("multiply", self, other)
        return Integer(self.value * other.value)

    def div(self, other):
        if other == Integer(0):
            raise PhoenixError(ErrorKind.ZeroDivision, "can't divide by 0")
        if not isinstance(other, Integer):
            raise type_error("divide", self, other)

        quotient = abs(self.value) // abs(other.value)  # truncates toward zero
        return Integer(quotient if (self.value < 0) == (other.value < 0) else -quotient)

    def neg(self):
        return Integer(-self.value)

    def and_(self, other):
        if not isinstance(other, Integer):
            raise type_error("and", self, other)
        return boolean(self.value != 0 and other.value != 0)

    def or_(self, other):
        if not isinstance(other, Integer):
            raise type_error("or", self, other)
        return boolean(self.value != 0 or other.value != 0)

    def not_(self):
        return boolean(self.value == 0)

    def to_bool(self):
        return self.value != 0

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class Float(Type):
    value: float

    def cmp(self, other):
        if not isinstance(other, Float):
            raise type_error("compare", self, other)
        if self.value != self.value or other.value != other.value:  # NaN
            raise PhoenixError(ErrorKind.Undefined, f"Invalid float comparison between {self} and {other}")
        return _cmp(self.value, other.value)

    def add(self, other):
        if not isinstance(other, Float):
            raise type_error("add", self, other)
        return Float(self.value + other.value)

    def sub(self, other):
        if not isinstance(other, Float):
            raise type_error("subtract", self, other)
        return Float(self.value - other.value)

    def mul(self, other):
        if not isinstance(other, Float):
            raise type_error("multiply", self, other)
        return Float(self.value * other.value)

    def div(self, other):
        if other == Float(0.0):
            raise PhoenixError(ErrorKind.ZeroDivision, "can't divide by 0")
        if not isinstance(other, Float):
            raise type_error("divide", self, other)
        return Float(self.value / other.value)

    def neg(self):
        return Float(-self.value)

    def to_bool(self):
        return self.value != 0.0

    def __str__(self):
        """Positional notation with at least one digit after the ".", so the text lexes back to the same Float."""
        text = repr(self.value)
        if "e" not in text:
            return text  # also covers inf and nan

        text = format(Decimal(text), "f")
        return text if "." in text else text + ".0"


@dataclass(frozen=True)
class NoneValue(Type):
    """Result of an if without a matching case or a loop whose body never ran. Supports no operations."""

    def __str__(self):
        return "None"


NONE = NoneValue()


def _cmp(left, right):
    if left < right:
        return CmpResult.LESS
    elif left > right:
        return CmpResult.GREATER
    return CmpResult.EQUAL
