"""
Resource limits for expression tokenization and tree construction.

These limits bound the work done for a single expression, so that deeply
nested or very long input fails early instead of exhausting the stack.
"""

from dataclasses import dataclass
from typing import Optional

from .errors import LimitExceededError


@dataclass(frozen=True)
class ExpressionLimits:
    """Expression limits configuration."""

    # Maximum expression string length in characters
    max_expression_length: int = 4096

    # Maximum expression tree depth (nesting level)
    max_tree_depth: int = 256

    # Maximum number of expression tree nodes
    max_tree_nodes: int = 2048


# Default expression limits.
#
# Deep enough for hand-written arithmetic while keeping the recursive
# evaluator well below the interpreter's recursion limit.
DEFAULT_EXPRESSION_LIMITS = ExpressionLimits()


def check_expression_length(
    expression: str, limits: Optional[ExpressionLimits] = None
) -> None:
    """Validates that expression length is within limits."""
    limits = limits or DEFAULT_EXPRESSION_LIMITS
    if len(expression) > limits.max_expression_length:
        raise LimitExceededError(
            "max_expression_length", limits.max_expression_length, len(expression)
        )


def check_tree_depth(depth: int, limits: Optional[ExpressionLimits] = None) -> None:
    """Validates tree depth during construction."""
    limits = limits or DEFAULT_EXPRESSION_LIMITS
    if depth > limits.max_tree_depth:
        raise LimitExceededError("max_tree_depth", limits.max_tree_depth, depth)


def check_tree_node_count(
    count: int, limits: Optional[ExpressionLimits] = None
) -> None:
    """Validates tree node count during construction."""
    limits = limits or DEFAULT_EXPRESSION_LIMITS
    if count > limits.max_tree_nodes:
        raise LimitExceededError("max_tree_nodes", limits.max_tree_nodes, count)
