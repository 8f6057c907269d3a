"""Error types shared across the formula pipeline.

Every failure the core can report is a ``DiffGraphError`` carrying a ``kind``
tag and, where it applies, the character position in the formula text. The
boundaries (session workspace, API, CLI, Streamlit page) catch these and turn
them into diagnostics; nothing inside the core terminates the process.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Machine-readable tags for pipeline failures."""

    UNRECOGNIZED_CHARACTER = "UnrecognizedCharacter"
    UNEXPECTED_TOKEN = "UnexpectedToken"
    UNKNOWN_FUNCTION = "UnknownFunction"
    ARITY_MISMATCH = "ArityMismatch"
    UNBALANCED_PARENTHESIS = "UnbalancedParenthesis"
    TOO_DEEP = "TooDeep"
    UNBOUND_VARIABLE = "UnboundVariable"
    EMPTY_INPUT = "EmptyInput"
    INPUT_TOO_LONG = "InputTooLong"
    INVALID_POINT_COUNT = "InvalidPointCount"


class DiffGraphError(Exception):
    """Base class for all recoverable formula errors."""

    def __init__(
        self, kind: ErrorKind, message: str, position: int | None = None
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.position = position

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": False,
            "error": self.message,
            "error_type": self.kind.value,
            "position": self.position,
        }

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (at position {self.position})"


class LexError(DiffGraphError):
    """Unrecognized character in the formula text."""

    def __init__(self, position: int, char: str) -> None:
        super().__init__(
            ErrorKind.UNRECOGNIZED_CHARACTER,
            f"Unrecognized character '{char}'",
            position,
        )
        self.char = char


class ParseError(DiffGraphError):
    """Grammar violation while building the AST.

    Attributes:
        expected: Human-readable description of what the parser wanted
        found: Text of the offending token ("end of input" at the END token)
    """

    def __init__(
        self,
        kind: ErrorKind,
        expected: str,
        found: str,
        position: int,
        message: str | None = None,
    ) -> None:
        if message is None:
            message = f"Expected {expected}, found {found}"
        super().__init__(kind, message, position)
        self.expected = expected
        self.found = found

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["expected"] = self.expected
        data["found"] = self.found
        return data


class EvalError(DiffGraphError):
    """Evaluation could not proceed (missing binding or unknown function)."""

    def __init__(self, kind: ErrorKind, name: str) -> None:
        if kind == ErrorKind.UNBOUND_VARIABLE:
            message = f"Unbound variable '{name}'"
        else:
            message = f"Unknown function '{name}'"
        super().__init__(kind, message)
        self.name = name


class ValidationError(DiffGraphError):
    """Input rejected at the submission boundary before parsing."""
