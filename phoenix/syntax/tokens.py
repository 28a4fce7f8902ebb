"""Tokens produced by the lexer and consumed by the parser.

Tokens are immutable and compare structurally, so the parser can ask "is the current token one of these operators"
with a plain `in` check against a list of tokens.
"""

from dataclasses import dataclass
from enum import Enum


class Keyword(Enum):
    LET = "let"
    IF = "if"
    ELSE = "else"
    THEN = "then"
    ELIF = "elif"
    FOR = "for"
    WHILE = "while"
    IN = "in"
    TO = "to"

    @staticmethod
    def is_keyword(word):
        return word in KEYWORDS

    @staticmethod
    def from_str(word):
        """Returns the Keyword spelled word, or None."""
        return KEYWORDS.get(word)

    def __str__(self):
        return self.value


KEYWORDS = {keyword.value: keyword for keyword in Keyword}


@dataclass(frozen=True)
class Ident:
    """Name of a variable."""
    name: str

    def __str__(self):
        return self.name


class TokenType(Enum):
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    LEFT_PARENTHESIS = "("
    RIGHT_PARENTHESIS = ")"
    LEFT_BRACE = "{"
    RIGHT_BRACE = "}"
    EQUAL = "="
    DOUBLE_EQUAL = "=="
    NON_EQUAL = "!="
    LESS_THAN = "<"
    GREATER_THAN = ">"
    LESS_THAN_EQ = "<="
    GREATER_THAN_EQ = ">="
    DOUBLE_AND = "&&"
    DOUBLE_OR = "||"
    BANG = "!"

    LITERAL = "literal"  # value is an Integer or Float
    IDENT = "ident"      # value is an Ident
    KEYWORD = "keyword"  # value is a Keyword
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: object = None

    @classmethod
    def literal(cls, value):
        return cls(TokenType.LITERAL, value)

    @classmethod
    def ident(cls, name):
        return cls(TokenType.IDENT, Ident(name))

    @classmethod
    def keyword(cls, keyword):
        return cls(TokenType.KEYWORD, keyword)

    def matches(self, type_, value=None):
        return self.type == type_ and (value is None or self.value == value)

    def is_keyword(self, keyword):
        return self.matches(TokenType.KEYWORD, keyword)

    def __str__(self):
        if self.value is not None:
            return str(self.value)
        return self.type.value

    def __repr__(self):
        if self.value is not None:
            return f"{self.type.name}:{self.value}"
        return self.type.name


# single-character tokens that never need lookahead
SINGLE_CHARS = {
    "+": Token(TokenType.PLUS),
    "-": Token(TokenType.MINUS),
    "*": Token(TokenType.STAR),
    "/": Token(TokenType.SLASH),
    "(": Token(TokenType.LEFT_PARENTHESIS),
    ")": Token(TokenType.RIGHT_PARENTHESIS),
    "{": Token(TokenType.LEFT_BRACE),
    "}": Token(TokenType.RIGHT_BRACE),
}
