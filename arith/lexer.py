"""
Лексический анализатор арифметических выражений.

Читает символы из CharacterSource и разбивает их на токены:
- целые литералы (IntLiteral)
- операторы + - * /
- скобки ( )
- нераспознанные фрагменты (Unrecognized)

Пробельные символы пропускаются. Лексер никогда не выбрасывает исключений:
любой некорректный фрагмент превращается в токен Unrecognized.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from .source import CharacterSource, StringSource
from .tokens import INT32_MAX, SINGLE_CHAR_KINDS, Position, Token, TokenKind

logger = logging.getLogger(__name__)

DIGITS = frozenset("0123456789")


def _is_delimiter(char: Optional[str]) -> bool:
    """Конец входа, пробел, оператор или скобка завершают многосимвольную лексему."""
    return char is None or char.isspace() or char in SINGLE_CHAR_KINDS


class Lexer:
    """
    Лексер с отслеживанием позиции.

    Позиция обновляется при каждом потреблённом символе: перевод строки
    увеличивает номер строки и сбрасывает колонку в 1.
    """

    def __init__(self, source: CharacterSource):
        self.source = source
        self.position = Position(row=1, column=1)

    @classmethod
    def from_str(cls, text: str) -> "Lexer":
        return cls(StringSource(text))

    def tokens(self) -> "TokenStream":
        """Ленивый однопроходный поток токенов поверх этого лексера."""
        return TokenStream(self)

    def __iter__(self) -> "TokenStream":
        return self.tokens()

    def next_token(self) -> Optional[Token]:
        """
        Выделяет следующий токен.

        Returns:
            Токен или None, если после пробелов вход исчерпан
        """
        self._skip_whitespace()

        char = self.source.peek()
        if char is None:
            return None

        if char in DIGITS:
            token = self._scan_int_literal()
        elif char in SINGLE_CHAR_KINDS:
            token = self._scan_single_char()
        else:
            token = self._scan_unrecognized()

        logger.debug("Lexed %r", token)
        return token

    def _advance_character(self) -> Optional[str]:
        char = self.source.next()
        if char is not None:
            self.position = self.position.advanced(char)
        return char

    def _skip_whitespace(self) -> None:
        while True:
            char = self.source.peek()
            if char is None or not char.isspace():
                return
            self._advance_character()

    def _consume_run(self) -> str:
        """Потребляет символы до ближайшего разделителя."""
        chars = []
        while not _is_delimiter(self.source.peek()):
            chars.append(self._advance_character())
        return "".join(chars)

    def _scan_int_literal(self) -> Token:
        start = self.position
        lexem = self._consume_run()

        # Цифры вперемешку с другими символами (65a2) дают одну лексему
        if not all(c in DIGITS for c in lexem):
            return Token(start, self.position, lexem, TokenKind.UNRECOGNIZED)

        # Ведущий ноль допустим только у самого литерала "0"
        if lexem[0] == "0" and len(lexem) > 1:
            return Token(start, self.position, lexem, TokenKind.UNRECOGNIZED)

        value = int(lexem)
        if value > INT32_MAX:
            return Token(start, self.position, lexem, TokenKind.UNRECOGNIZED)

        return Token(start, self.position, lexem, TokenKind.INT_LITERAL, value)

    def _scan_single_char(self) -> Token:
        start = self.position
        char = self._advance_character()
        return Token(start, self.position, char, SINGLE_CHAR_KINDS[char])

    def _scan_unrecognized(self) -> Token:
        start = self.position
        lexem = self._consume_run()
        return Token(start, self.position, lexem, TokenKind.UNRECOGNIZED)


class TokenStream:
    """
    Однопроходный ленивый поток токенов.

    Каждый запрос токена продвигает исходный CharacterSource. Поток нельзя
    перезапустить: повторная итерация продолжает с текущего места.
    Для парсера предоставляет просмотр на один токен вперёд (peek/advance).
    """

    def __init__(self, lexer: Lexer):
        self._lexer = lexer
        self._lookahead: Optional[Token] = None
        self._has_lookahead = False

    def peek(self) -> Optional[Token]:
        """Возвращает следующий токен, не потребляя его."""
        if not self._has_lookahead:
            self._lookahead = self._lexer.next_token()
            self._has_lookahead = True
        return self._lookahead

    def advance(self) -> Optional[Token]:
        """Потребляет и возвращает следующий токен (None в конце потока)."""
        if self._has_lookahead:
            self._has_lookahead = False
            token, self._lookahead = self._lookahead, None
            return token
        return self._lexer.next_token()

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        token = self.advance()
        if token is None:
            raise StopIteration
        return token


def tokenize(text: str) -> TokenStream:
    """Удобная функция: поток токенов для строки."""
    return Lexer.from_str(text).tokens()


__all__ = ["Lexer", "TokenStream", "tokenize"]
