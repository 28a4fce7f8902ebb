"""Recursive-descent parser for the Phoenix language.

The grammar, from lowest to highest binding, is

```
<expr>      ::= "let" <ident> "=" <expr> | <or_expr>
<or_expr>   ::= <comp_expr> (("&&" | "||") <comp_expr>)*
<comp_expr> ::= "!" <comp_expr> | <arith_expr> (("==" | "!=" | "<" | ">" | "<=" | ">=") <arith_expr>)*
<arith_expr>::= <term> (("+" | "-") <term>)*
<term>      ::= <atom> (("*" | "/") <atom>)*
<atom>      ::= <integer> | <float> | <ident> | ("+" | "-") <atom>
              | "(" <expr> ")" | "{" <expr> "}"
              | "if" <expr> "then" <expr> ("elif" <expr> "then" <expr>)* ("else" <expr>)?
              | "while" <expr> "then" <expr>
              | "for" <ident> "in" <expr> "to" <expr> "then" <expr>
```

Every binary level is left-associative. Running out of tokens where an atom is expected raises EndOfFile rather than
SyntaxError, so a caller can tell incomplete input from invalid input.
"""

from phoenix.lang.error import ErrorKind, PhoenixError, syntax_error
from phoenix.syntax.nodes import (
    Assignment, BinaryOperation, ForNode, IfNode, Literal, UnaryOperation, UnarySign, Variable, WhileNode
)
from phoenix.syntax.tokens import Keyword, Token, TokenType

OR_OPERATIONS = [Token(TokenType.DOUBLE_AND), Token(TokenType.DOUBLE_OR)]
COMP_OPERATIONS = [
    Token(TokenType.DOUBLE_EQUAL),
    Token(TokenType.NON_EQUAL),
    Token(TokenType.LESS_THAN),
    Token(TokenType.GREATER_THAN),
    Token(TokenType.LESS_THAN_EQ),
    Token(TokenType.GREATER_THAN_EQ),
]
ARITH_OPERATIONS = [Token(TokenType.PLUS), Token(TokenType.MINUS)]
TERM_OPERATIONS = [Token(TokenType.STAR), Token(TokenType.SLASH)]

GROUPS = {TokenType.LEFT_PARENTHESIS: TokenType.RIGHT_PARENTHESIS, TokenType.LEFT_BRACE: TokenType.RIGHT_BRACE}


class Parser:
    """Builds a syntax tree from the (Token, Position) pairs produced by the lexer."""

    def __init__(self, tokens):
        self.tokens = tokens
        self.index = -1
        self.advance()

    def current_token(self):
        """Returns the current (Token, Position) pair, or None past the end of the tokens."""
        if 0 <= self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def advance(self):
        self.index += 1
        return self.current_token()

    def at(self, type_, value=None):
        current = self.current_token()
        return current is not None and current[0].matches(type_, value)

    def at_keyword(self, keyword):
        return self.at(TokenType.KEYWORD, keyword)

    def position(self):
        """Position of the current token, or None past the end of the tokens."""
        current = self.current_token()
        return current[1] if current is not None else None

    def parse(self):
        """Parses the whole token list into a single expression."""
        node = self.expr()

        current = self.current_token()
        if current is not None and current[0].type != TokenType.EOF:
            raise syntax_error("Expected one of the following: '+' '-' '*' or '/'", current[1])
        return node

    def binary_operation(self, func, operations):
        """Parses func, then folds in `<operation> func` for as long as the current token is in operations."""
        left = func()

        while self.current_token() is not None and self.current_token()[0] in operations:
            operation, __ = self.current_token()
            self.advance()
            right = func()
            left = BinaryOperation(left, operation, right, left.position.combine(right.position))

        return left

    def expr(self):
        if not self.at_keyword(Keyword.LET):
            return self.binary_operation(self.comp_expr, OR_OPERATIONS)

        self.advance()
        current = self.current_token()
        if current is None or current[0].type == TokenType.EOF:
            raise syntax_error("expected expression", self.position())

        token, pos = current
        if token.type != TokenType.IDENT:
            raise syntax_error("expected identifier", pos)

        self.advance()
        if not self.at(TokenType.EQUAL):
            raise syntax_error("expected =", pos)

        self.advance()
        return Assignment(token.value, self.expr(), pos)

    def comp_expr(self):
        if self.at(TokenType.BANG):
            pos = self.position()
            self.advance()
            node = self.comp_expr()
            return UnaryOperation(UnarySign.NOT, node, pos)

        return self.binary_operation(self.arith_expr, COMP_OPERATIONS)

    def arith_expr(self):
        return self.binary_operation(self.term, ARITH_OPERATIONS)

    def term(self):
        return self.binary_operation(self.atom, TERM_OPERATIONS)

    def atom(self):
        current = self.current_token()
        if current is None:
            raise syntax_error("can't parse empty token")

        token, pos = current

        if token.type == TokenType.LITERAL:
            self.advance()
            return Literal(token.value, pos)

        elif token.type == TokenType.IDENT:
            self.advance()
            return Variable(token.value, pos)

        elif token.type in (TokenType.PLUS, TokenType.MINUS):
            self.advance()
            node = self.atom()
            return UnaryOperation(UnarySign.from_token(token), node, pos)

        elif token.type == TokenType.EOF:
            raise PhoenixError(ErrorKind.EndOfFile, "expected something but reached the end of file", pos)

        elif token.type in GROUPS:
            self.advance()
            node = self.expr()
            if not self.at(GROUPS[token.type]):
                raise syntax_error(f"expected {GROUPS[token.type].value}", pos)
            self.advance()
            return node

        elif token.is_keyword(Keyword.IF):
            return self.if_expr(pos)

        elif token.is_keyword(Keyword.WHILE):
            return self.while_expr(pos)

        elif token.is_keyword(Keyword.FOR):
            return self.for_expr(pos)

        raise syntax_error(f"{token} is not valid in this context", pos)

    def expect_keyword(self, keyword, msg, pos=None):
        """Consumes keyword, raising a SyntaxError with msg if the current token is something else."""
        if not self.at_keyword(keyword):
            raise syntax_error(msg, pos if pos is not None else self.position())
        self.advance()

    def if_expr(self, position):
        self.advance()
        condition = self.expr()
        self.expect_keyword(Keyword.THEN, "expected then")
        cases = [(condition, self.expr())]

        while self.at_keyword(Keyword.ELIF):
            self.advance()
            condition = self.expr()
            self.expect_keyword(Keyword.THEN, "expected then")
            cases.append((condition, self.expr()))

        else_case = None
        if self.at_keyword(Keyword.ELSE):
            self.advance()
            else_case = self.expr()

        end = self.position()
        pos = position.combine(end) if end is not None else position
        return IfNode(tuple(cases), else_case, pos)

    def while_expr(self, position):
        self.advance()
        condition = self.expr()
        self.expect_keyword(Keyword.THEN, "expected 'then'", position)
        body = self.expr()
        return WhileNode(condition, body, position.combine(body.position))

    def for_expr(self, position):
        self.advance()
        if not self.at(TokenType.IDENT):
            raise syntax_error("expected ident", position)
        var_name = self.current_token()[0].value

        self.advance()
        self.expect_keyword(Keyword.IN, "expected 'in'", position)
        start = self.expr()
        self.expect_keyword(Keyword.TO, "expected 'to'", position)
        end = self.expr()
        self.expect_keyword(Keyword.THEN, "expected 'then'", position)
        body = self.expr()
        return ForNode(var_name, start, end, body, position.combine(end.position))


def parse(tokens):
    """Returns the syntax tree of tokens. Raises a PhoenixError if tokens are not a single valid expression."""
    return Parser(tokens).parse()
