"""
Expression evaluator.

Walks an expression tree and returns a float. Also hosts the full
string-to-number pipeline:

    tokenize -> to_postfix -> build_tree -> Evaluator.evaluate

Failure semantics:
- An empty tree (empty expression) evaluates to 0.0.
- Division by exactly zero raises DivisionByZeroError.
- Results are never inf or NaN; overflow and power domain errors raise
  EvaluationError.
"""

import logging
import math
import operator
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from .config import DEFAULT_CALCULATOR_CONFIG, CalculatorConfig
from .errors import (
    ConfigurationError,
    DivisionByZeroError,
    EvaluationError,
    ExpressionError,
    NumberFormatError,
)
from .operators import DEFAULT_OPERATOR_TABLE, OperatorTable
from .shunting_yard import postfix_to_string, to_postfix
from .tokenizer import tokenize
from .tree import ExpressionNode, build_tree, to_infix

logger = logging.getLogger("operorder.evaluator")

ArithmeticFunction = Callable[[float, float], float]


def _divide(left: float, right: float) -> float:
    # Caller guarantees right != 0
    return left / right


DEFAULT_ARITHMETIC_FUNCTIONS: Mapping[str, ArithmeticFunction] = MappingProxyType(
    {
        "+": operator.add,
        "-": operator.sub,
        "*": operator.mul,
        "/": _divide,
        "^": math.pow,
        "**": math.pow,
    }
)


class Evaluator:
    """Evaluates an expression tree and returns the result."""

    def __init__(
        self,
        source: str = "",
        functions: Optional[Mapping[str, ArithmeticFunction]] = None,
    ):
        self._source = source
        self._functions = functions or DEFAULT_ARITHMETIC_FUNCTIONS

    def evaluate(self, node: Optional[ExpressionNode]) -> float:
        """Evaluates a tree node and returns the value."""
        if node is None:
            return 0.0

        if node.is_leaf:
            return self._evaluate_number(node)

        if node.left is None or node.right is None:
            raise EvaluationError(
                f"Operator '{node.value}' requires two operands",
                node.position,
                self._source,
            )

        left_value = self.evaluate(node.left)
        right_value = self.evaluate(node.right)
        return self._apply(node, left_value, right_value)

    def _evaluate_number(self, node: ExpressionNode) -> float:
        try:
            value = float(node.value)
        except ValueError:
            raise NumberFormatError(node.value, node.position, self._source) from None

        # float() also accepts "inf" and "nan", which the tokenizer never produces
        if not math.isfinite(value):
            raise NumberFormatError(node.value, node.position, self._source)
        return value

    def _apply(self, node: ExpressionNode, left: float, right: float) -> float:
        function = self._functions.get(node.value)
        if function is None:
            raise ConfigurationError(
                f"No arithmetic function for operator '{node.value}'",
                node.position,
                self._source,
            )

        if node.value == "/" and right == 0:
            raise DivisionByZeroError(node.position, self._source)

        try:
            result = function(left, right)
        except ValueError:
            # e.g. 0 ^ -1, or a negative base with a fractional exponent
            raise EvaluationError(
                f"Math domain error: {left} {node.value} {right}",
                node.position,
                self._source,
            ) from None
        except OverflowError:
            raise EvaluationError(
                f"Numeric overflow: {left} {node.value} {right}",
                node.position,
                self._source,
            ) from None

        if not math.isfinite(result):
            raise EvaluationError(
                f"Numeric overflow: {left} {node.value} {right}",
                node.position,
                self._source,
            )
        return result


@dataclass
class CalculationResult:
    """Result of a calculation that reports failures as values."""

    value: Optional[float]
    """The computed value, or None if the calculation failed."""

    success: bool
    """Whether the calculation succeeded."""

    error: Optional[str] = None
    """Error message with position context if the calculation failed."""

    error_type: Optional[str] = None
    """Class name of the error, e.g. ``DivisionByZeroError``."""


def parse_expression(
    expression: str,
    config: Optional[CalculatorConfig] = None,
    operators: Optional[OperatorTable] = None,
) -> Optional[ExpressionNode]:
    """
    Parses an expression string into a tree without evaluating it.

    Returns:
        The root node, or None for an empty expression

    Raises:
        ExpressionError: A subclass describing the failure
    """
    config = config or DEFAULT_CALCULATOR_CONFIG
    operators = operators or DEFAULT_OPERATOR_TABLE
    limits = config.expression_limits

    tokens = tokenize(expression, limits)
    postfix = to_postfix(tokens, operators, config.mode, expression)
    tree = build_tree(postfix, limits, expression)

    if config.trace:
        logger.debug(
            "expression_tree_built",
            extra={
                "expression": expression,
                "postfix": postfix_to_string(postfix),
                "infix": to_infix(tree),
                "mode": config.mode,
            },
        )

    return tree


def calculate(
    expression: str,
    config: Optional[CalculatorConfig] = None,
    operators: Optional[OperatorTable] = None,
) -> float:
    """
    Evaluates an arithmetic expression string.

    Args:
        expression: The expression, e.g. ``"(2+3)*4"``
        config: Optional calculator config
        operators: Optional operator table (defaults to the built-in table)

    Returns:
        The numeric result

    Raises:
        ExpressionError: A subclass describing the failure
    """
    tree = parse_expression(expression, config, operators)
    value = Evaluator(expression).evaluate(tree)

    logger.debug(
        "expression_evaluated", extra={"expression": expression, "value": value}
    )
    return value


def try_calculate(
    expression: str,
    config: Optional[CalculatorConfig] = None,
    operators: Optional[OperatorTable] = None,
) -> CalculationResult:
    """
    Evaluates an arithmetic expression and reports failure as a value.

    Returns:
        The calculation result with value, success status and error kind
    """
    try:
        value = calculate(expression, config, operators)
        return CalculationResult(value=value, success=True)
    except ExpressionError as error:
        return CalculationResult(
            value=None,
            success=False,
            error=error.format_with_context(),
            error_type=type(error).__name__,
        )
