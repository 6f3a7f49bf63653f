"""
Парсер арифметических выражений с рекурсивным спуском.

Строит синтаксическое дерево из потока токенов, просматривая не больше
одного токена вперёд и без откатов.

Грамматика:
expression → term ( ("+" | "-") expression )?
term       → factor ( ("*" | "/") term )?
factor     → IntLiteral | "(" expression ")"

Правая часть оператора снова вызывает то же правило, а не цикл, поэтому
цепочки операторов одного приоритета группируются справа:
3 - 2 - 1 == 3 - (2 - 1).
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional, Union

from .errors import ArithUserError, ExpressionTooDeep
from .lexer import Lexer, TokenStream
from .model import (
    BinaryExpression,
    BinaryTerm,
    Expression,
    Factor,
    FactorTerm,
    GroupFactor,
    LiteralFactor,
    NodeType,
    Term,
    TermExpression,
)
from .tokens import Position, Token, TokenKind

logger = logging.getLogger(__name__)

_TERM_OPERATORS = {
    TokenKind.MUL_OPERATOR: NodeType.MUL,
    TokenKind.DIV_OPERATOR: NodeType.DIV,
}

_EXPRESSION_OPERATORS = {
    TokenKind.ADD_OPERATOR: NodeType.ADD,
    TokenKind.SUB_OPERATOR: NodeType.SUB,
}

# Токены, с которых начинается операнд. Встретив такой токен сразу после
# законченного операнда, правило завершается и оставляет его объемлющему
# правилу: на верхнем уровне это ошибка EndOfInput, внутри скобок ParenthesisClose.
_OPERAND_START = frozenset({TokenKind.INT_LITERAL, TokenKind.PARENTHESIS_OPEN})

# Токены, завершающие term: они принадлежат expression или factor
_TERM_FOLLOW = frozenset({
    TokenKind.ADD_OPERATOR,
    TokenKind.SUB_OPERATOR,
    TokenKind.PARENTHESIS_CLOSE,
})


class InvalidExpression(ArithUserError):
    """
    Первое нарушение грамматики.

    Attributes:
        expected: Вид токена, который ожидало правило
        got: Фактический токен или None, если вход исчерпан
    """

    def __init__(self, expected: TokenKind, got: Optional[Token]):
        self.expected = expected
        self.got = got
        super().__init__(self._render())

    def _render(self) -> str:
        if self.got is None:
            return f"Unexpected end of input — expected {self.expected}."
        return f"Expected {self.expected}, got: {self.got.describe()} ({self.got.start})."

    @property
    def position(self) -> Optional[Position]:
        return self.got.start if self.got is not None else None


class _Lookahead:
    """Просмотр на один токен вперёд поверх произвольного итерируемого источника токенов."""

    def __init__(self, tokens: Iterable[Token]):
        self._tokens: Iterator[Token] = iter(tokens)
        self._lookahead: Optional[Token] = None
        self._has_lookahead = False

    def peek(self) -> Optional[Token]:
        if not self._has_lookahead:
            self._lookahead = next(self._tokens, None)
            self._has_lookahead = True
        return self._lookahead

    def advance(self) -> Optional[Token]:
        if self._has_lookahead:
            self._has_lookahead = False
            token, self._lookahead = self._lookahead, None
            return token
        return next(self._tokens, None)


class Parser:
    """
    Парсер с рекурсивным спуском.

    Принимает TokenStream лексера или любой итерируемый набор токенов.
    Разбор прерывается на первой ошибке: частичное дерево не возвращается.
    """

    def __init__(self, tokens: Union[TokenStream, Iterable[Token]]):
        if isinstance(tokens, TokenStream):
            self._tokens: Union[TokenStream, _Lookahead] = tokens
        else:
            self._tokens = _Lookahead(tokens)

    @classmethod
    def from_str(cls, text: str) -> "Parser":
        return cls(Lexer.from_str(text).tokens())

    def parse(self) -> Expression:
        """
        Разбирает выражение целиком.

        Returns:
            Корень дерева

        Raises:
            InvalidExpression: При синтаксической ошибке или лишнем токене в конце
            ExpressionTooDeep: Если вложенность превышает предел рекурсии
        """
        try:
            expression = self.match_expression()
        except RecursionError:
            raise ExpressionTooDeep() from None

        trailing = self._tokens.peek()
        if trailing is not None:
            raise InvalidExpression(TokenKind.END_OF_INPUT, trailing)

        logger.debug("Parsed expression: %s", expression)
        return expression

    def match_expression(self) -> Expression:
        """expression → term ( ("+" | "-") expression )?"""
        term = self.match_term()

        token = self._tokens.peek()
        if token is None or token.kind is TokenKind.PARENTHESIS_CLOSE:
            # ")" принадлежит объемлющему factor
            return TermExpression(term=term)

        if token.kind in _OPERAND_START:
            return TermExpression(term=term)

        self._tokens.advance()
        right = self.match_expression()
        return BinaryExpression(left=term, right=right, operator=_EXPRESSION_OPERATORS[token.kind])

    def match_term(self) -> Term:
        """term → factor ( ("*" | "/") term )?"""
        factor = self.match_factor()

        token = self._tokens.peek()
        if token is None or token.kind in _TERM_FOLLOW or token.kind in _OPERAND_START:
            # +, -, ) и начало операнда разбираются объемлющим правилом
            return FactorTerm(factor=factor)

        if token.kind not in _TERM_OPERATORS:
            raise InvalidExpression(TokenKind.MUL_OPERATOR, token)

        self._tokens.advance()
        right = self.match_term()
        return BinaryTerm(left=factor, right=right, operator=_TERM_OPERATORS[token.kind])

    def match_factor(self) -> Factor:
        """factor → IntLiteral | "(" expression ")" """
        token = self._tokens.advance()

        if token is not None and token.kind is TokenKind.INT_LITERAL:
            return LiteralFactor(value=token.value)

        if token is not None and token.kind is TokenKind.PARENTHESIS_OPEN:
            expression = self.match_expression()
            closing = self._tokens.advance()
            if closing is None or closing.kind is not TokenKind.PARENTHESIS_CLOSE:
                raise InvalidExpression(TokenKind.PARENTHESIS_CLOSE, closing)
            return GroupFactor(expression=expression)

        raise InvalidExpression(TokenKind.INT_LITERAL, token)


def parse(text: str) -> Expression:
    """Удобная функция: разбор строки в дерево."""
    return Parser.from_str(text).parse()


__all__ = ["InvalidExpression", "Parser", "parse"]
