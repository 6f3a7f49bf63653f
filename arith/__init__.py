"""
arith: integer arithmetic calculator.

Pipeline: text -> characters -> tokens -> tree -> integer.
"""

from .errors import ArithUserError, ExpressionTooDeep
from .evaluator import DivisionByZero, EvaluationError, IntegerOverflow, evaluate, evaluate_line
from .lexer import Lexer, TokenStream
from .parser import InvalidExpression, Parser, parse
from .tokens import Position, Token, TokenKind

__all__ = [
    "ArithUserError",
    "DivisionByZero",
    "EvaluationError",
    "ExpressionTooDeep",
    "IntegerOverflow",
    "InvalidExpression",
    "Lexer",
    "Parser",
    "Position",
    "Token",
    "TokenKind",
    "TokenStream",
    "evaluate",
    "evaluate_line",
    "parse",
]
