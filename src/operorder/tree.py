"""
Expression tree types and the postfix-to-tree builder.

The tree is produced by the builder and consumed by the evaluator. Leaves hold
number text; internal nodes hold an operator symbol and exactly two children.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .errors import MalformedExpressionError
from .limits import (
    DEFAULT_EXPRESSION_LIMITS,
    ExpressionLimits,
    check_tree_depth,
    check_tree_node_count,
)
from .tokenizer import Token, TokenType

# ============================================================
# Tree Node Type
# ============================================================


@dataclass(frozen=True)
class ExpressionNode:
    """Binary expression tree node."""

    value: str
    """Number text for leaves, operator symbol for internal nodes."""

    position: int
    """Position in source expression (for error reporting)."""

    left: Optional["ExpressionNode"] = None
    right: Optional["ExpressionNode"] = None

    depth: int = field(init=False, compare=False)

    def __post_init__(self) -> None:
        child_depth = max(
            self.left.depth if self.left is not None else 0,
            self.right.depth if self.right is not None else 0,
        )
        object.__setattr__(self, "depth", child_depth + 1)

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None


# ============================================================
# Builder
# ============================================================


class TreeBuilder:
    """Builds an expression tree from a postfix token list."""

    def __init__(
        self,
        postfix: Sequence[Token],
        source: str = "",
        limits: ExpressionLimits = DEFAULT_EXPRESSION_LIMITS,
    ):
        self._postfix = postfix
        self._source = source
        self._limits = limits
        self._operands: List[ExpressionNode] = []

    def build(self) -> Optional[ExpressionNode]:
        """Builds the tree; returns None for an empty postfix list."""
        check_tree_node_count(len(self._postfix), self._limits)
        self._operands = []

        for token in self._postfix:
            if token.type == TokenType.NUMBER:
                self._operands.append(ExpressionNode(token.value, token.position))
            elif token.type == TokenType.OPERATOR:
                self._combine(token)
            else:
                raise MalformedExpressionError(
                    f"Unexpected token in postfix sequence: '{token.value}'",
                    token.position,
                    self._source,
                )

        if not self._operands:
            return None

        if len(self._operands) > 1:
            raise MalformedExpressionError(
                "Missing operator between operands",
                self._operands[-1].position,
                self._source,
            )

        return self._operands.pop()

    def _combine(self, token: Token) -> None:
        if len(self._operands) < 2:
            raise MalformedExpressionError(
                f"Missing operand for '{token.value}'", token.position, self._source
            )

        # Popped in reverse: the most recent tree is the right operand
        right = self._operands.pop()
        left = self._operands.pop()
        node = ExpressionNode(token.value, token.position, left, right)
        check_tree_depth(node.depth, self._limits)
        self._operands.append(node)


def build_tree(
    postfix: Sequence[Token],
    limits: Optional[ExpressionLimits] = None,
    source: str = "",
) -> Optional[ExpressionNode]:
    """
    Builds an expression tree from postfix tokens.

    Args:
        postfix: Tokens in postfix order
        limits: Optional expression limits
        source: Source expression for error reporting

    Returns:
        The root node, or None if there were no tokens

    Raises:
        MalformedExpressionError: If operators and operands do not pair up
        LimitExceededError: If the tree is too deep or too large
    """
    builder = TreeBuilder(postfix, source, limits or DEFAULT_EXPRESSION_LIMITS)
    return builder.build()


# ============================================================
# Tree Utilities
# ============================================================


def count_nodes(node: Optional[ExpressionNode]) -> int:
    """Counts the total number of nodes in a tree."""
    if node is None:
        return 0
    return 1 + count_nodes(node.left) + count_nodes(node.right)


def to_infix(node: Optional[ExpressionNode], parenthesize: bool = False) -> str:
    """Renders a tree by in-order traversal.

    Without ``parenthesize`` this is the flat trace the original calculator
    printed (``2+3*4``); with it every internal node is wrapped in
    parentheses, which makes the grouping visible (``(2+(3*4))``).
    """
    if node is None:
        return ""
    if node.is_leaf:
        return node.value

    text = f"{to_infix(node.left, parenthesize)}{node.value}{to_infix(node.right, parenthesize)}"
    return f"({text})" if parenthesize else text


def tree_to_string(node: Optional[ExpressionNode], indent: int = 0) -> str:
    """Returns a human-readable representation of a tree for debugging."""
    prefix = "  " * indent

    if node is None:
        return f"{prefix}Empty"

    if node.is_leaf:
        return f"{prefix}Number: {node.value}"

    return (
        f"{prefix}BinaryOp: {node.value}\n"
        f"{tree_to_string(node.left, indent + 1)}\n"
        f"{tree_to_string(node.right, indent + 1)}"
    )
