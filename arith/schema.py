"""
JSON report models for `--format json`.

Serialized with camelCase aliases: model_dump(mode="json", by_alias=True).
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .tokens import Position, Token


class _Schema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class PositionInfo(_Schema):
    row: int
    column: int

    @classmethod
    def of(cls, position: Position) -> "PositionInfo":
        return cls(row=position.row, column=position.column)


class TokenInfo(_Schema):
    kind: str
    lexem: str
    value: Optional[int] = None
    start: PositionInfo
    end: PositionInfo

    @classmethod
    def of(cls, token: Token) -> "TokenInfo":
        return cls(
            kind=str(token.kind),
            lexem=token.lexem,
            value=token.value,
            start=PositionInfo.of(token.start),
            end=PositionInfo.of(token.end),
        )


class TokensReport(_Schema):
    expression: str
    tokens: List[TokenInfo]


class ErrorInfo(_Schema):
    type: str
    message: str
    expected_kind: Optional[str] = None
    got: Optional[TokenInfo] = None


class EvalReport(_Schema):
    """Result of one evaluated line: exactly one of `result` / `error` is set."""
    expression: str
    result: Optional[int] = None
    error: Optional[ErrorInfo] = None


__all__ = ["PositionInfo", "TokenInfo", "TokensReport", "ErrorInfo", "EvalReport"]
