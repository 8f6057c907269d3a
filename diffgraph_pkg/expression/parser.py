"""Recursive-descent parser producing the formula AST.

Grammar, lowest to highest binding power::

    expr    := term (("+" | "-") term)*
    term    := unary (("*" | "/") unary)*
    unary   := "-" unary | power
    power   := primary ("^" unary)?
    primary := NUMBER | IDENT | IDENT "(" expr ("," expr)* ")" | "(" expr ")"

``^`` is right-associative and binds tighter than unary minus on its left,
so ``-x^2`` is ``-(x^2)`` while ``x^-1`` is still accepted. Adjacent primaries
without an operator (``2x``) are an error.
"""

from __future__ import annotations

from .. import config
from ..types import ErrorKind
from ..types import ParseError
from .functions import get_function
from .lexer import Token
from .lexer import TokenKind
from .lexer import tokenize
from .nodes import BinaryOp
from .nodes import BinaryOperator
from .nodes import Call
from .nodes import Constant
from .nodes import Node
from .nodes import UnaryOp
from .nodes import UnaryOperator
from .nodes import Variable

_ADDITIVE = {"+": BinaryOperator.ADD, "-": BinaryOperator.SUB}
_MULTIPLICATIVE = {"*": BinaryOperator.MUL, "/": BinaryOperator.DIV}


class Parser:
    """Single-use parser over a token list ending in an END token."""

    def __init__(self, tokens: list[Token]):
        if not tokens or tokens[-1].kind != TokenKind.END:
            raise ValueError("token stream must end with an END token")
        self.tokens = tokens
        self.index = 0
        self.depth = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.index]

    def _advance(self) -> Token:
        token = self.tokens[self.index]
        if token.kind != TokenKind.END:
            self.index += 1
        return token

    def _at_operator(self, symbols) -> bool:
        return self.current.kind == TokenKind.OPERATOR and self.current.value in symbols

    def _error(self, expected: str, kind: ErrorKind = ErrorKind.UNEXPECTED_TOKEN):
        token = self.current
        return ParseError(kind, expected, token.describe(), token.position)

    def _expect(self, kind: TokenKind, expected: str) -> Token:
        if self.current.kind != kind:
            error_kind = ErrorKind.UNEXPECTED_TOKEN
            if kind == TokenKind.RIGHT_PAREN and self.current.kind == TokenKind.END:
                error_kind = ErrorKind.UNBALANCED_PARENTHESIS
            raise self._error(expected, error_kind)
        return self._advance()

    def parse(self) -> Node:
        node = self._expr()
        if self.current.kind == TokenKind.RIGHT_PAREN:
            raise self._error("end of input", ErrorKind.UNBALANCED_PARENTHESIS)
        if self.current.kind != TokenKind.END:
            raise self._error("operator or end of input")
        return node

    def _expr(self) -> Node:
        node = self._term()
        while self._at_operator(_ADDITIVE):
            op = _ADDITIVE[self._advance().value]
            node = BinaryOp(op, node, self._term())
        return node

    def _term(self) -> Node:
        node = self._unary()
        while self._at_operator(_MULTIPLICATIVE):
            op = _MULTIPLICATIVE[self._advance().value]
            node = BinaryOp(op, node, self._unary())
        return node

    def _unary(self) -> Node:
        self.depth += 1
        try:
            if self.depth > config.MAX_EXPRESSION_DEPTH:
                raise self._error(
                    f"at most {config.MAX_EXPRESSION_DEPTH} levels of nesting",
                    ErrorKind.TOO_DEEP,
                )
            if self._at_operator("-"):
                self._advance()
                return UnaryOp(UnaryOperator.NEG, self._unary())
            return self._power()
        finally:
            self.depth -= 1

    def _power(self) -> Node:
        base = self._primary()
        if self._at_operator("^"):
            self._advance()
            return BinaryOp(BinaryOperator.POW, base, self._unary())
        return base

    def _primary(self) -> Node:
        token = self.current
        if token.kind == TokenKind.NUMBER:
            self._advance()
            return Constant(token.value)

        if token.kind == TokenKind.IDENTIFIER:
            self._advance()
            if self.current.kind == TokenKind.LEFT_PAREN:
                return self._call(token)
            if get_function(token.value) is not None:
                raise self._error(f"'(' after function name '{token.value}'")
            if token.value in config.NAMED_CONSTANTS:
                return Constant(config.NAMED_CONSTANTS[token.value])
            return Variable(token.value)

        if token.kind == TokenKind.LEFT_PAREN:
            self._advance()
            node = self._expr()
            self._expect(TokenKind.RIGHT_PAREN, "')'")
            return node

        raise self._error("expression")

    def _call(self, name_token: Token) -> Call:
        name = name_token.value
        spec = get_function(name)
        if spec is None:
            raise ParseError(
                ErrorKind.UNKNOWN_FUNCTION,
                "a known function name",
                f"'{name}'",
                name_token.position,
                message=f"Unknown function '{name}'",
            )
        self._expect(TokenKind.LEFT_PAREN, "'('")
        args = [self._expr()]
        while self.current.kind == TokenKind.COMMA:
            self._advance()
            args.append(self._expr())
        self._expect(TokenKind.RIGHT_PAREN, "',' or ')'")

        if not spec.accepts(len(args)):
            if spec.min_args == spec.max_args:
                wanted = f"{spec.min_args} argument(s)"
            else:
                wanted = f"{spec.min_args} to {spec.max_args} arguments"
            raise ParseError(
                ErrorKind.ARITY_MISMATCH,
                wanted,
                f"{len(args)} argument(s)",
                name_token.position,
                message=f"{name}() takes {wanted}, got {len(args)}",
            )
        return Call(name, tuple(args))


def parse(tokens: list[Token]) -> Node:
    """Build an AST from a token list produced by ``tokenize``.

    Raises:
        ParseError: On any grammar violation
    """
    return Parser(tokens).parse()


def parse_formula(text: str) -> Node:
    """Tokenize and parse ``text`` in one step."""
    return parse(tokenize(text))
