"""
Tests for expression evaluation and the calculate pipeline.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

import pytest

from operorder import (
    CalculatorConfig,
    ConfigurationError,
    DivisionByZeroError,
    EvaluationError,
    Evaluator,
    ExpressionLimits,
    ExpressionNode,
    InvalidCharacterError,
    LimitExceededError,
    MalformedExpressionError,
    NumberFormatError,
    UnbalancedParenthesesError,
    calculate,
    parse_expression,
    try_calculate,
)

SINGLE_POP = CalculatorConfig(mode="single_pop")


class TestArithmetic:
    """Tests for arithmetic results."""

    def test_multiplication_binds_tighter_than_addition(self):
        assert calculate("2+3*4") == 14.0

    def test_parentheses_override_precedence(self):
        assert calculate("(2+3)*4") == 20.0

    def test_exponent_is_right_associative(self):
        assert calculate("2^3^2") == 512.0
        assert calculate("2**3**2") == 512.0

    def test_grouping_comma_and_decimal(self):
        assert calculate("1,234.5+1") == 1235.5

    def test_left_associative_subtraction_and_division(self):
        assert calculate("10-4-3") == 3.0
        assert calculate("100/10/5") == 2.0

    def test_mixed_expression(self):
        assert calculate("2*(3+4)^2") == 98.0
        assert calculate("1-2*3+4") == -1.0

    def test_decimals(self):
        assert calculate("0.1+0.2") == pytest.approx(0.3)
        assert calculate(".5*4") == 2.0

    def test_whitespace_is_ignored(self):
        assert calculate("  ( 2 + 3 )\t* 4\n") == 20.0

    def test_result_is_float(self):
        assert isinstance(calculate("7"), float)

    def test_zero_numerator(self):
        assert calculate("0/5") == 0.0


class TestSinglePopMode:
    """Tests pinning the single_pop converter output."""

    def test_mixed_chain_differs_from_standard(self):
        assert calculate("1-2*3+4", SINGLE_POP) == -9.0

    @pytest.mark.parametrize(
        "expression,expected",
        [("2+3*4", 14.0), ("(2+3)*4", 20.0), ("2^3^2", 512.0), ("1-2-3", -4.0)],
    )
    def test_short_chains_match_standard(self, expression, expected):
        assert calculate(expression, SINGLE_POP) == expected
        assert calculate(expression) == expected


class TestEdgeCases:
    """Tests for empty input and repeated evaluation."""

    def test_empty_expression_is_zero(self):
        assert calculate("") == 0.0
        assert calculate("   ") == 0.0

    def test_empty_parentheses_are_zero(self):
        assert calculate("()") == 0.0

    def test_evaluate_none_is_zero(self):
        assert Evaluator().evaluate(None) == 0.0

    def test_repeated_evaluation_is_identical(self):
        first = calculate("3.5*(2-0.25)^2/7")
        second = calculate("3.5*(2-0.25)^2/7")
        assert first == second

    def test_concurrent_evaluations_are_independent(self):
        expressions = ["2+3*4", "(2+3)*4", "2^3^2", "1,234.5+1"] * 25
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(calculate, expressions))
        assert results == [calculate(e) for e in expressions]


class TestErrors:
    """Tests for evaluation errors."""

    def test_division_by_zero(self):
        with pytest.raises(DivisionByZeroError) as exc_info:
            calculate("10/0")
        assert exc_info.value.position == 2

    def test_division_by_computed_zero(self):
        with pytest.raises(DivisionByZeroError):
            calculate("10/(5-5)")

    def test_unbalanced_parentheses(self):
        with pytest.raises(UnbalancedParenthesesError):
            calculate("(1+2")

    def test_malformed_expression(self):
        with pytest.raises(MalformedExpressionError):
            calculate("1+*2")

    def test_invalid_character(self):
        with pytest.raises(InvalidCharacterError):
            calculate("2 x 3")

    def test_number_format_error(self):
        with pytest.raises(NumberFormatError) as exc_info:
            calculate("1.2.3+1")
        assert exc_info.value.text == "1.2.3"
        assert exc_info.value.position == 0

    def test_lone_decimal_point(self):
        with pytest.raises(NumberFormatError):
            calculate(".")

    def test_zero_to_negative_power(self):
        with pytest.raises(EvaluationError) as exc_info:
            calculate("0^(0-1)")
        assert not isinstance(exc_info.value, DivisionByZeroError)

    def test_negative_base_fractional_exponent(self):
        with pytest.raises(EvaluationError):
            calculate("(0-8)^0.5")

    def test_overflow(self):
        with pytest.raises(EvaluationError) as exc_info:
            calculate("10^400")
        assert "overflow" in exc_info.value.message

    def test_limits_from_config(self):
        config = CalculatorConfig(expression_limits=ExpressionLimits(max_expression_length=3))
        with pytest.raises(LimitExceededError):
            calculate("1+2+3", config)


class TestEvaluatorDirect:
    """Tests for the tree evaluator on hand-built trees."""

    def test_unknown_operator_node(self):
        node = ExpressionNode("%", 1, ExpressionNode("1", 0), ExpressionNode("2", 2))
        with pytest.raises(ConfigurationError):
            Evaluator().evaluate(node)

    def test_non_finite_leaf_text_is_rejected(self):
        with pytest.raises(NumberFormatError):
            Evaluator().evaluate(ExpressionNode("inf", 0))

    def test_operator_with_one_child(self):
        node = ExpressionNode("+", 0, left=ExpressionNode("1", 0))
        with pytest.raises(EvaluationError):
            Evaluator().evaluate(node)

    def test_custom_functions(self):
        node = parse_expression("3+4")
        evaluator = Evaluator(functions={"+": lambda a, b: a * b})
        assert evaluator.evaluate(node) == 12.0


class TestTryCalculate:
    """Tests for the result-returning wrapper."""

    def test_success(self):
        result = try_calculate("(2+3)*4")
        assert result.success
        assert result.value == 20.0
        assert result.error is None
        assert result.error_type is None

    def test_failure_reports_error_kind(self):
        result = try_calculate("10/0")
        assert not result.success
        assert result.value is None
        assert result.error_type == "DivisionByZeroError"
        assert result.error == "Division by zero\n  10/0\n    ^"

    def test_failure_for_unbalanced_parentheses(self):
        result = try_calculate("(1+2")
        assert result.error_type == "UnbalancedParenthesesError"


class TestTrace:
    """Tests for trace logging."""

    def test_trace_logs_tree(self, caplog):
        caplog.set_level(logging.DEBUG, logger="operorder.evaluator")
        calculate("2+3*4", CalculatorConfig(trace=True))

        records = [r for r in caplog.records if r.getMessage() == "expression_tree_built"]
        assert len(records) == 1
        assert records[0].infix == "2+3*4"
        assert records[0].postfix == "2 3 4 * +"
        assert records[0].mode == "standard"

    def test_no_tree_log_without_trace(self, caplog):
        caplog.set_level(logging.DEBUG, logger="operorder.evaluator")
        calculate("2+3*4")
        assert not [r for r in caplog.records if r.getMessage() == "expression_tree_built"]
        assert [r for r in caplog.records if r.getMessage() == "expression_evaluated"]
