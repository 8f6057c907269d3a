"""Formula expression pipeline.

This module turns formula text into an AST and provides everything the
plotting layer needs from it: numeric evaluation, symbolic differentiation,
simplification and formatting.

Main Components:
    - tokenize / parse / parse_formula: text to AST
    - evaluate: AST plus bindings to a float (or numpy array)
    - differentiate: AST to derivative AST
    - simplify: constant folding and identity elimination
    - format_expression / to_latex: AST back to text

Example:
    >>> from diffgraph_pkg.expression import parse_formula, differentiate, simplify
    >>> from diffgraph_pkg.expression import format_expression
    >>> tree = parse_formula("x^2")
    >>> format_expression(simplify(differentiate(tree, "x")))
    '2 * x'
"""

from .differentiator import differentiate
from .evaluator import evaluate
from .formatter import format_expression
from .formatter import to_latex
from .formatter import to_sympy
from .functions import FUNCTIONS
from .functions import FunctionSpec
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
from .nodes import free_variables
from .parser import parse
from .parser import parse_formula
from .simplifier import simplify

__all__ = [
    # Tokens and nodes
    "Token",
    "TokenKind",
    "Node",
    "Constant",
    "Variable",
    "UnaryOp",
    "UnaryOperator",
    "BinaryOp",
    "BinaryOperator",
    "Call",
    "free_variables",
    # Function registry
    "FUNCTIONS",
    "FunctionSpec",
    # Pipeline
    "tokenize",
    "parse",
    "parse_formula",
    "evaluate",
    "differentiate",
    "simplify",
    "format_expression",
    "to_sympy",
    "to_latex",
]
