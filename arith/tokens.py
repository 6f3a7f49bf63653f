"""
Лексические типы калькулятора.

Определяет виды токенов, позицию в исходном тексте и сам токен.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional


INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1


class TokenKind(enum.Enum):
    """Виды токенов. Значение enum используется при выводе сообщений об ошибках."""

    INT_LITERAL = "IntLiteral"
    ADD_OPERATOR = "AddOperator"
    SUB_OPERATOR = "SubOperator"
    MUL_OPERATOR = "MulOperator"
    DIV_OPERATOR = "DivOperator"
    PARENTHESIS_OPEN = "ParenthesisOpen"
    PARENTHESIS_CLOSE = "ParenthesisClose"
    UNRECOGNIZED = "Unrecognized"
    END_OF_INPUT = "EndOfInput"

    def __str__(self) -> str:
        return self.value


# Односимвольные токены: операторы и скобки никогда не сливаются с соседями
SINGLE_CHAR_KINDS = {
    "+": TokenKind.ADD_OPERATOR,
    "-": TokenKind.SUB_OPERATOR,
    "*": TokenKind.MUL_OPERATOR,
    "/": TokenKind.DIV_OPERATOR,
    "(": TokenKind.PARENTHESIS_OPEN,
    ")": TokenKind.PARENTHESIS_CLOSE,
}


@dataclass(frozen=True)
class Position:
    """Позиция в исходном тексте. Строки и колонки нумеруются с 1."""
    row: int = 1
    column: int = 1

    def advanced(self, char: str) -> "Position":
        """Позиция после потребления символа char."""
        if char == "\n":
            return Position(row=self.row + 1, column=1)
        return Position(row=self.row, column=self.column + 1)

    def __str__(self) -> str:
        return f"{self.row}:{self.column}"


@dataclass(frozen=True)
class Token:
    """
    Токен с позиционной информацией для точной диагностики ошибок.

    Attributes:
        start: Позиция первого символа лексемы
        end: Позиция сразу после последнего символа лексемы
        lexem: Потреблённая подстрока без изменений
        kind: Вид токена
        value: Значение для IntLiteral, иначе None
    """
    start: Position
    end: Position
    lexem: str
    kind: TokenKind
    value: Optional[int] = None

    def describe(self) -> str:
        """Вид токена для сообщений: IntLiteral(3), MulOperator, ..."""
        if self.kind is TokenKind.INT_LITERAL:
            return f"{self.kind}({self.value})"
        return str(self.kind)

    def __repr__(self) -> str:
        return f"Token({self.describe()}, {self.lexem!r}, {self.start}-{self.end})"


__all__ = [
    "INT32_MIN",
    "INT32_MAX",
    "TokenKind",
    "SINGLE_CHAR_KINDS",
    "Position",
    "Token",
]
