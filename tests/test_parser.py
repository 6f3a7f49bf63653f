"""
Tests for the recursive-descent parser.
"""

import pytest

from arith.lexer import tokenize
from arith.model import (
    BinaryExpression,
    BinaryTerm,
    FactorTerm,
    GroupFactor,
    LiteralFactor,
    NodeType,
    TermExpression,
)
from arith.errors import ArithUserError, ExpressionTooDeep
from arith.parser import InvalidExpression, Parser, parse
from arith.tokens import Position, Token, TokenKind


class TestParser:

    def test_single_literal(self):
        result = parse("6")

        assert isinstance(result, TermExpression)
        assert isinstance(result.term, FactorTerm)
        assert result.term.factor == LiteralFactor(value=6)

    def test_term_binds_tighter_than_expression(self):
        result = parse("2*3-5")

        assert isinstance(result, BinaryExpression)
        assert result.operator == NodeType.SUB
        assert isinstance(result.left, BinaryTerm)
        assert result.left.operator == NodeType.MUL
        assert result.left.left == LiteralFactor(2)
        assert result.left.right == FactorTerm(LiteralFactor(3))
        assert result.right == TermExpression(FactorTerm(LiteralFactor(5)))

    def test_additive_chain_groups_right(self):
        """3-2-1 is parsed as 3-(2-1)"""
        result = parse("3-2-1")

        assert isinstance(result, BinaryExpression)
        assert result.left == FactorTerm(LiteralFactor(3))
        assert isinstance(result.right, BinaryExpression)
        assert result.right.left == FactorTerm(LiteralFactor(2))
        assert result.right.right == TermExpression(FactorTerm(LiteralFactor(1)))

    def test_multiplicative_chain_groups_right(self):
        """8/4/2 is parsed as 8/(4/2)"""
        result = parse("8/4/2")

        term = result.term
        assert isinstance(term, BinaryTerm)
        assert term.operator == NodeType.DIV
        assert term.left == LiteralFactor(8)
        assert isinstance(term.right, BinaryTerm)
        assert term.right.left == LiteralFactor(4)

    def test_parenthesized_expression(self):
        result = parse("9*(4-5)")

        term = result.term
        assert isinstance(term, BinaryTerm)
        factor = term.right.factor
        assert isinstance(factor, GroupFactor)
        assert isinstance(factor.expression, BinaryExpression)
        assert factor.expression.operator == NodeType.SUB

    def test_nested_parentheses(self):
        result = parse("((7))")
        outer = result.term.factor
        assert isinstance(outer, GroupFactor)
        inner = outer.expression.term.factor
        assert isinstance(inner, GroupFactor)
        assert inner.expression.term.factor == LiteralFactor(7)

    def test_string_representation(self):
        assert str(parse("9*(4-5)")) == "9 * (4 - 5)"
        assert str(parse(" 3 -2- 1")) == "3 - 2 - 1"
        assert str(parse("(1+2)/3")) == "(1 + 2) / 3"

    def test_representation_reparses_to_same_tree(self):
        tree = parse("1+2*(3-4)/5-6")
        assert parse(str(tree)) == tree

    def test_accepts_plain_token_iterable(self):
        tokens = list(tokenize("1+2"))
        result = Parser(tokens).parse()
        assert isinstance(result, BinaryExpression)
        assert result.operator == NodeType.ADD


class TestParserErrors:

    def _error(self, text) -> InvalidExpression:
        with pytest.raises(InvalidExpression) as exc_info:
            parse(text)
        return exc_info.value

    def test_empty_input(self):
        error = self._error("")
        assert error.expected == TokenKind.INT_LITERAL
        assert error.got is None
        assert str(error) == "Unexpected end of input — expected IntLiteral."

    def test_dangling_operator(self):
        error = self._error("2+")
        assert error.expected == TokenKind.INT_LITERAL
        assert error.got is None

    def test_trailing_operand(self):
        """2 3 is rejected by the top-level exhaustion check"""
        error = self._error("2 3")
        assert error.expected == TokenKind.END_OF_INPUT
        assert error.got.kind == TokenKind.INT_LITERAL
        assert error.got.value == 3
        assert error.got.start == Position(1, 3)
        assert str(error) == "Expected EndOfInput, got: IntLiteral(3) (1:3)."

    def test_trailing_parenthesis(self):
        error = self._error("1+2)")
        assert error.expected == TokenKind.END_OF_INPUT
        assert error.got.kind == TokenKind.PARENTHESIS_CLOSE
        assert str(error) == "Expected EndOfInput, got: ParenthesisClose (1:4)."

    def test_trailing_group(self):
        error = self._error("2 (3)")
        assert error.expected == TokenKind.END_OF_INPUT
        assert error.got.kind == TokenKind.PARENTHESIS_OPEN

    def test_unclosed_parenthesis(self):
        error = self._error("(4-5")
        assert error.expected == TokenKind.PARENTHESIS_CLOSE
        assert error.got is None
        assert str(error) == "Unexpected end of input — expected ParenthesisClose."

    def test_operand_inside_group_requires_close(self):
        error = self._error("(2 3)")
        assert error.expected == TokenKind.PARENTHESIS_CLOSE
        assert error.got.value == 3

    def test_empty_group(self):
        error = self._error("()")
        assert error.expected == TokenKind.INT_LITERAL
        assert error.got.kind == TokenKind.PARENTHESIS_CLOSE

    def test_unrecognized_operand(self):
        error = self._error("0423 + 1")
        assert error.expected == TokenKind.INT_LITERAL
        assert error.got.kind == TokenKind.UNRECOGNIZED
        assert str(error) == "Expected IntLiteral, got: Unrecognized (1:1)."

    def test_unrecognized_after_factor(self):
        error = self._error("2 abc")
        assert error.expected == TokenKind.MUL_OPERATOR
        assert error.got.lexem == "abc"

    def test_unary_minus_not_supported(self):
        error = self._error("-1")
        assert error.expected == TokenKind.INT_LITERAL
        assert error.got.kind == TokenKind.SUB_OPERATOR

    def test_foreign_token_after_term(self):
        """A token no rule owns is rejected by the term rule"""
        start, end = Position(1, 2), Position(1, 2)
        tokens = [
            Token(Position(1, 1), start, "1", TokenKind.INT_LITERAL, 1),
            Token(start, end, "", TokenKind.END_OF_INPUT),
        ]
        with pytest.raises(InvalidExpression) as exc_info:
            Parser(tokens).parse()
        assert exc_info.value.expected == TokenKind.MUL_OPERATOR
        assert exc_info.value.got.kind == TokenKind.END_OF_INPUT

    def test_error_position_on_second_line(self):
        lexer_text = "1 +\n  )"
        error = self._error(lexer_text)
        assert error.expected == TokenKind.INT_LITERAL
        assert error.position == Position(2, 3)

    def test_fail_fast_stops_consuming(self):
        """The parser stops at the first violation"""
        stream = tokenize("2 + * 3 4")
        with pytest.raises(InvalidExpression):
            Parser(stream).parse()
        assert stream.advance().value == 3

    def test_deep_nesting_is_a_user_error(self):
        with pytest.raises(ExpressionTooDeep) as exc_info:
            parse("(" * 2000 + "1" + ")" * 2000)
        assert isinstance(exc_info.value, ArithUserError)
