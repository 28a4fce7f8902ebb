"""Lexical analysis for the Phoenix language.

The lexer scans the source left to right and produces (Token, Position) pairs:

```
<operator>   ::= "+" | "-" | "*" | "/" | "(" | ")" | "{" | "}"
               | "=" | "==" | "!" | "!=" | "<" | "<=" | ">" | ">="     ; one character of lookahead for "="
               | "&&" | "||"                                          ; there is no single "&" or "|"
<number>     ::= <digit> (<digit> | ".")*                             ; at most one ".", a second one ends the number
<word>       ::= <alpha> (<alnum> | "_")*                             ; keyword if in Keyword, identifier otherwise
```

Spaces and tabs are skipped. Any other character is a SyntaxError, and lexing stops at the first error. A successful
scan always ends with an EOF token.
"""

from phoenix.lang.error import syntax_error
from phoenix.lang.types import Float, Integer
from phoenix.syntax.position import Position
from phoenix.syntax.tokens import SINGLE_CHARS, Keyword, Token, TokenType

DIGITS = "0123456789"
WHITESPACE = " \t"


class Lexer:
    """Turns source text into a list of (Token, Position) pairs."""

    def __init__(self, text, filename, line=0):
        self.text = text
        self.pos = Position(-1, filename, line, -1, 1)
        self.current_char = None
        self.advance()

    def advance(self):
        self.pos.advance(self.current_char)
        if 0 <= self.pos.index < len(self.text):
            self.current_char = self.text[self.pos.index]
        else:
            self.current_char = None

    def make_tokens(self):
        tokens = []

        while self.current_char is not None:
            char = self.current_char

            if char in WHITESPACE:
                self.advance()
            elif char in SINGLE_CHARS:
                tokens.append((SINGLE_CHARS[char], self.pos.copy()))
                self.advance()
            elif char == "!":
                tokens.append(self.check_eq(Token(TokenType.NON_EQUAL), Token(TokenType.BANG)))
            elif char == "=":
                tokens.append(self.check_eq(Token(TokenType.DOUBLE_EQUAL), Token(TokenType.EQUAL)))
            elif char == "<":
                tokens.append(self.check_eq(Token(TokenType.LESS_THAN_EQ), Token(TokenType.LESS_THAN)))
            elif char == ">":
                tokens.append(self.check_eq(Token(TokenType.GREATER_THAN_EQ), Token(TokenType.GREATER_THAN)))
            elif char == "&":
                tokens.append(self.make_double("&", Token(TokenType.DOUBLE_AND)))
            elif char == "|":
                tokens.append(self.make_double("|", Token(TokenType.DOUBLE_OR)))
            elif char in DIGITS:
                tokens.append(self.make_number())
            elif char.isascii() and char.isalpha():
                tokens.append(self.make_ident())
            else:
                raise syntax_error(f"Illegal character: {char}", self.pos.copy())

        tokens.append((Token(TokenType.EOF), self.pos.copy()))
        return tokens

    def check_eq(self, with_eq, without_eq):
        """Consumes the current character and, if it is followed by "=", that one too."""
        pos = self.pos.copy()
        self.advance()

        if self.current_char == "=":
            self.advance()
            return with_eq, pos.combine(self.pos.copy(length=0))
        return without_eq, pos

    def make_double(self, char, token):
        """Consumes char twice, for operators that only exist doubled."""
        pos = self.pos.copy()
        self.advance()

        if self.current_char != char:
            raise syntax_error(f"expected {char}", self.pos.copy())

        self.advance()
        return token, pos.combine(self.pos.copy(length=0))

    def make_number(self):
        number = ""
        dots = 0
        pos = self.pos.copy()

        while self.current_char is not None and self.current_char in DIGITS + ".":
            if self.current_char == ".":
                if dots == 1:
                    break  # second "." is left for the next token
                dots += 1
            number += self.current_char
            self.advance()

        pos.length = len(number)
        if dots == 0:
            return Token.literal(Integer(int(number))), pos
        return Token.literal(Float(float(number))), pos

    def make_ident(self):
        word = ""
        pos = self.pos.copy()

        while self.current_char is not None and (
            self.current_char.isascii() and self.current_char.isalnum() or self.current_char == "_"
        ):
            word += self.current_char
            self.advance()

        pos.length = len(word)
        if Keyword.is_keyword(word):
            return Token.keyword(Keyword.from_str(word)), pos
        return Token.ident(word), pos


def tokenize(text, filename, line=0):
    """Returns the (Token, Position) pairs of text. Raises a PhoenixError at the first illegal character."""
    return Lexer(text, filename, line).make_tokens()
