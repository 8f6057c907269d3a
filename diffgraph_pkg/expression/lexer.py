"""Tokenizer for formula text."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from enum import auto
from typing import Union

from ..config import IDENT_RE
from ..config import NUMBER_RE
from ..config import OPERATOR_CHARS
from ..config import WHITESPACE_RE
from ..types import LexError


class TokenKind(Enum):
    NUMBER = auto()
    IDENTIFIER = auto()
    OPERATOR = auto()
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    COMMA = auto()
    END = auto()


@dataclass(frozen=True)
class Token:
    """A lexical unit.

    Attributes:
        kind: Token category
        value: float for NUMBER, source text for everything else ("" for END)
        position: 0-based offset of the first character in the source text
    """

    kind: TokenKind
    value: Union[float, str]
    position: int

    def describe(self) -> str:
        """Short description used in parse diagnostics."""
        if self.kind == TokenKind.END:
            return "end of input"
        return f"'{self.value}'"


_PUNCTUATION = {
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
    ",": TokenKind.COMMA,
}


def tokenize(text: str) -> list[Token]:
    """Split ``text`` into tokens, always terminated by an END token.

    Raises:
        LexError: On the first character that starts no token
    """
    tokens: list[Token] = []
    pos = 0
    length = len(text)
    while pos < length:
        match = WHITESPACE_RE.match(text, pos)
        if match:
            pos = match.end()
            continue

        char = text[pos]
        match = NUMBER_RE.match(text, pos)
        if match:
            tokens.append(Token(TokenKind.NUMBER, float(match.group(0)), pos))
            pos = match.end()
            continue

        match = IDENT_RE.match(text, pos)
        if match:
            tokens.append(Token(TokenKind.IDENTIFIER, match.group(0), pos))
            pos = match.end()
            continue

        if char in OPERATOR_CHARS:
            tokens.append(Token(TokenKind.OPERATOR, char, pos))
        elif char in _PUNCTUATION:
            tokens.append(Token(_PUNCTUATION[char], char, pos))
        else:
            raise LexError(pos, char)
        pos += 1

    tokens.append(Token(TokenKind.END, "", length))
    return tokens
