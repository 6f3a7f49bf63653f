"""
Модели синтаксического дерева арифметических выражений.

Три взаимно рекурсивных семейства узлов повторяют грамматику:
- Factor: целый литерал или выражение в скобках
- Term: один множитель или left (* | /) right
- Expression: одно слагаемое или left (+ | -) right

Каждый узел неизменяем и владеет своими потомками единолично.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Union


class NodeType(Enum):
    """Типы узлов дерева."""
    LITERAL = "literal"
    GROUP = "group"  # выражение в скобках
    FACTOR_TERM = "factor_term"
    TERM_EXPRESSION = "term_expression"
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"


ADDITIVE_OPERATORS = (NodeType.ADD, NodeType.SUB)
MULTIPLICATIVE_OPERATORS = (NodeType.MUL, NodeType.DIV)


@dataclass(frozen=True)
class Node(ABC):
    """Базовый абстрактный класс для всех узлов дерева."""

    @abstractmethod
    def get_type(self) -> NodeType:
        """Возвращает тип узла."""
        pass

    def __str__(self) -> str:
        """Нормализованный исходный текст узла."""
        return self._to_string()

    @abstractmethod
    def _to_string(self) -> str:
        pass


# ---- Factor ----

@dataclass(frozen=True)
class LiteralFactor(Node):
    """Целый литерал."""
    value: int

    def get_type(self) -> NodeType:
        return NodeType.LITERAL

    def _to_string(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class GroupFactor(Node):
    """
    Выражение в скобках: ( expression )

    Скобки сбрасывают приоритет и ассоциативность вложенного выражения.
    """
    expression: "Expression"

    def get_type(self) -> NodeType:
        return NodeType.GROUP

    def _to_string(self) -> str:
        return f"({self.expression})"


# ---- Term ----

@dataclass(frozen=True)
class FactorTerm(Node):
    """Слагаемое из единственного множителя."""
    factor: "Factor"

    def get_type(self) -> NodeType:
        return NodeType.FACTOR_TERM

    def _to_string(self) -> str:
        return str(self.factor)


@dataclass(frozen=True)
class BinaryTerm(Node):
    """
    Мультипликативная операция: left op right

    Правая часть снова Term, поэтому цепочки группируются справа:
    a / b / c == a / (b / c).
    """
    left: "Factor"
    right: "Term"
    operator: NodeType  # MUL или DIV

    def get_type(self) -> NodeType:
        return self.operator

    def _to_string(self) -> str:
        return f"{self.left} {self.operator.value} {self.right}"


# ---- Expression ----

@dataclass(frozen=True)
class TermExpression(Node):
    """Выражение из единственного слагаемого."""
    term: "Term"

    def get_type(self) -> NodeType:
        return NodeType.TERM_EXPRESSION

    def _to_string(self) -> str:
        return str(self.term)


@dataclass(frozen=True)
class BinaryExpression(Node):
    """
    Аддитивная операция: left op right

    Правая часть снова Expression, поэтому a - b - c == a - (b - c).
    """
    left: "Term"
    right: "Expression"
    operator: NodeType  # ADD или SUB

    def get_type(self) -> NodeType:
        return self.operator

    def _to_string(self) -> str:
        return f"{self.left} {self.operator.value} {self.right}"


# Закрытые семейства узлов по уровням грамматики
Factor = Union[LiteralFactor, GroupFactor]
Term = Union[FactorTerm, BinaryTerm]
Expression = Union[TermExpression, BinaryExpression]
AnyNode = Union[Factor, Term, Expression]

__all__ = [
    "Node",
    "NodeType",
    "ADDITIVE_OPERATORS",
    "MULTIPLICATIVE_OPERATORS",
    "LiteralFactor",
    "GroupFactor",
    "FactorTerm",
    "BinaryTerm",
    "TermExpression",
    "BinaryExpression",
    "Factor",
    "Term",
    "Expression",
    "AnyNode",
]
