"""
Вычислитель арифметических выражений.

Проходит по синтаксическому дереву сверху вниз и вычисляет его значение
как 32-битное знаковое целое.
"""

from __future__ import annotations

import logging
from typing import cast

from .errors import ArithUserError, ExpressionTooDeep
from .model import (
    AnyNode,
    BinaryExpression,
    BinaryTerm,
    FactorTerm,
    GroupFactor,
    LiteralFactor,
    NodeType,
    TermExpression,
)
from .tokens import INT32_MAX, INT32_MIN

logger = logging.getLogger(__name__)


class EvaluationError(ArithUserError):
    """Ошибка при вычислении выражения."""
    pass


class DivisionByZero(EvaluationError):
    """Делитель обратился в ноль."""

    def __init__(self, node: AnyNode):
        self.node = node
        super().__init__(f"Division by zero in '{node}'.")


class IntegerOverflow(EvaluationError):
    """Результат операции не помещается в 32-битное знаковое целое."""

    def __init__(self, node: AnyNode, value: int):
        self.node = node
        self.value = value
        super().__init__(f"Integer overflow in '{node}': {value} is out of 32-bit range.")


def _divide(dividend: int, divisor: int) -> int:
    """Целочисленное деление с округлением к нулю."""
    quotient = abs(dividend) // abs(divisor)
    return quotient if (dividend < 0) == (divisor < 0) else -quotient


class ExpressionEvaluator:
    """
    Вычислитель дерева выражения.

    Диспетчеризация по NodeType: закрытое множество узлов из model.py.
    """

    def evaluate(self, node: AnyNode) -> int:
        """
        Вычисляет значение узла.

        Raises:
            DivisionByZero: При делении на ноль
            IntegerOverflow: При выходе за пределы 32-битного целого
            EvaluationError: Для неизвестного типа узла
        """
        node_type = node.get_type()

        if node_type == NodeType.LITERAL:
            return cast(LiteralFactor, node).value
        elif node_type == NodeType.GROUP:
            return self.evaluate(cast(GroupFactor, node).expression)
        elif node_type == NodeType.FACTOR_TERM:
            return self.evaluate(cast(FactorTerm, node).factor)
        elif node_type == NodeType.TERM_EXPRESSION:
            return self.evaluate(cast(TermExpression, node).term)
        elif node_type in (NodeType.ADD, NodeType.SUB, NodeType.MUL, NodeType.DIV):
            return self._evaluate_binary(cast(BinaryExpression | BinaryTerm, node))
        else:
            raise EvaluationError(f"Unknown node type: {node_type}")

    def _evaluate_binary(self, node: BinaryExpression | BinaryTerm) -> int:
        left = self.evaluate(node.left)
        right = self.evaluate(node.right)

        operator = node.operator
        if operator == NodeType.ADD:
            result = left + right
        elif operator == NodeType.SUB:
            result = left - right
        elif operator == NodeType.MUL:
            result = left * right
        else:
            if right == 0:
                raise DivisionByZero(node)
            result = _divide(left, right)

        if not INT32_MIN <= result <= INT32_MAX:
            raise IntegerOverflow(node, result)
        return result


def evaluate(node: AnyNode) -> int:
    """Вычисляет значение дерева."""
    try:
        return ExpressionEvaluator().evaluate(node)
    except RecursionError:
        raise ExpressionTooDeep() from None


def evaluate_line(text: str) -> int:
    """
    Разбирает и вычисляет одну строку ввода.

    Args:
        text: Строка с арифметическим выражением

    Returns:
        Значение выражения

    Raises:
        InvalidExpression: При синтаксической ошибке
        EvaluationError: При ошибке вычисления
        ExpressionTooDeep: Если вложенность превышает предел рекурсии
    """
    from .parser import Parser

    expression = Parser.from_str(text).parse()
    result = evaluate(expression)
    logger.debug("Evaluated %s = %d", expression, result)
    return result


__all__ = [
    "EvaluationError",
    "DivisionByZero",
    "IntegerOverflow",
    "ExpressionEvaluator",
    "evaluate",
    "evaluate_line",
]
