"""Formula sessions: one accepted formula and everything derived from it.

A session is built in one synchronous step (lex, parse, differentiate,
simplify, format) and never changes afterwards. ``Workspace`` holds the
current session for an interactive front end and only swaps it when a new
submission succeeds, so a typo never blanks the display.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from dataclasses import field

from . import config
from .expression import differentiate
from .expression import evaluate
from .expression import format_expression
from .expression import free_variables
from .expression import parse_formula
from .expression import simplify
from .expression.nodes import Node
from .logging_config import get_logger
from .types import DiffGraphError
from .types import ErrorKind
from .types import EvalError
from .types import ValidationError

logger = get_logger("session")


@dataclass(frozen=True)
class FormulaSession:
    """Bundle of trees derived from one accepted formula.

    Attributes:
        text: Formula exactly as submitted (stripped)
        ast: Parsed formula
        derivative: Raw derivative of ``ast``
        simplified_derivative: ``derivative`` after simplification
        derivative_text: Formatted ``simplified_derivative``
        variable: Name of the free variable
    """

    text: str
    ast: Node
    derivative: Node
    simplified_derivative: Node
    derivative_text: str
    variable: str = "x"

    def f(self, x):
        """Evaluate the formula at ``x`` (float or numpy array)."""
        return evaluate(self.ast, {self.variable: x})

    def f_prime(self, x):
        """Evaluate the simplified derivative at ``x``."""
        return evaluate(self.simplified_derivative, {self.variable: x})


def validate_text(text: str) -> str:
    """Strip ``text`` and reject empty or oversized input."""
    if text is None:
        raise ValidationError(ErrorKind.EMPTY_INPUT, "Empty formula", 0)
    stripped = text.strip()
    if not stripped:
        raise ValidationError(ErrorKind.EMPTY_INPUT, "Empty formula", 0)
    if len(stripped) > config.MAX_INPUT_LENGTH:
        raise ValidationError(
            ErrorKind.INPUT_TOO_LONG,
            f"Formula longer than {config.MAX_INPUT_LENGTH} characters",
        )
    return stripped


def build_session(text: str, variable: str | None = None) -> FormulaSession:
    """Run the whole pipeline on ``text``.

    Raises:
        ValidationError: Empty or oversized input
        LexError: Unrecognized character
        ParseError: Grammar violation or unknown function
        EvalError: The formula uses a variable other than ``variable``
    """
    variable = variable or config.VARIABLE_NAME
    stripped = validate_text(text)
    ast = parse_formula(stripped)

    unknown = sorted(free_variables(ast) - {variable})
    if unknown:
        raise EvalError(ErrorKind.UNBOUND_VARIABLE, unknown[0])

    derivative = differentiate(ast, variable)
    simplified = simplify(derivative)
    session = FormulaSession(
        text=stripped,
        ast=ast,
        derivative=derivative,
        simplified_derivative=simplified,
        derivative_text=format_expression(simplified),
        variable=variable,
    )
    logger.debug("Built session for %r: f'(x) = %s", stripped, session.derivative_text)
    return session


@dataclass
class SubmissionResult:
    """Outcome of ``Workspace.submit``: the session in effect and any error."""

    session: FormulaSession | None
    error: DiffGraphError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class Workspace:
    """Current formula state for an interactive front end."""

    session: FormulaSession | None = None
    last_error: DiffGraphError | None = None
    history: deque = field(
        default_factory=lambda: deque(maxlen=config.HISTORY_SIZE)
    )

    def submit(self, text: str) -> SubmissionResult:
        """Try to replace the current session with one built from ``text``.

        On failure the current session is left in place and the error is
        recorded in ``last_error``.
        """
        try:
            session = build_session(text)
        except DiffGraphError as e:
            logger.info("Rejected formula %r: %s", text, e)
            self.last_error = e
            return SubmissionResult(self.session, e)

        self.session = session
        self.last_error = None
        self.history.append(session.text)
        return SubmissionResult(session)
