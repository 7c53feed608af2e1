"""
Shunting-yard converter.

Reorders infix tokens into postfix (Reverse Polish) order using an operator
hold area driven by the operator precedence table.

Two modes are supported:

- ``standard``: the textbook algorithm. Before an incoming operator is held,
  every held operator that binds tighter (or equally tight, for a
  left-associative incoming operator) is moved to the output.
- ``single_pop``: at most one held operator is moved per incoming operator.
  This reproduces the output of the original calculator, which is wrong for
  some mixed-precedence chains (``1-2*3+4`` evaluates to ``-9``).
"""

from typing import List, Literal, Optional, Sequence

from .errors import ConfigurationError, UnbalancedParenthesesError
from .operators import DEFAULT_OPERATOR_TABLE, OperatorDescriptor, OperatorTable, Precedence
from .tokenizer import Token, TokenType

ConverterMode = Literal["standard", "single_pop"]

CONVERTER_MODES = ("standard", "single_pop")


class ShuntingYardConverter:
    """Converts an infix token list into postfix order."""

    def __init__(
        self,
        tokens: Sequence[Token],
        source: str = "",
        operators: OperatorTable = DEFAULT_OPERATOR_TABLE,
        mode: ConverterMode = "standard",
    ):
        if mode not in CONVERTER_MODES:
            raise ConfigurationError(f"Unknown converter mode: '{mode}'")
        self._tokens = tokens
        self._source = source
        self._operators = operators
        self._mode = mode
        self._holding: List[Token] = []
        self._output: List[Token] = []

    def convert(self) -> List[Token]:
        """Runs the conversion and returns a new postfix token list."""
        self._holding = []
        self._output = []

        for token in self._tokens:
            if token.type == TokenType.NUMBER:
                self._output.append(token)
            elif token.type == TokenType.OPERATOR:
                self._hold_operator(token)
            elif token.type == TokenType.LPAREN:
                self._holding.append(token)
            elif token.type == TokenType.RPAREN:
                self._close_group(token)

        while self._holding:
            token = self._holding.pop()
            if token.type == TokenType.LPAREN:
                raise UnbalancedParenthesesError(
                    "Unclosed '('", token.position, self._source
                )
            self._output.append(token)

        return self._output

    def _hold_operator(self, token: Token) -> None:
        incoming = self._operators.lookup(token.value, token.position)

        while self._should_release(incoming):
            self._output.append(self._holding.pop())
            if self._mode == "single_pop":
                break

        self._holding.append(token)

    def _should_release(self, incoming: OperatorDescriptor) -> bool:
        if not self._holding:
            return False

        top = self._holding[-1]
        if top.type == TokenType.LPAREN:
            return False

        order = self._operators.compare(top.value, incoming.symbol)
        if order is Precedence.HIGHER:
            return True
        return order is Precedence.EQUAL and incoming.is_left_associative

    def _close_group(self, token: Token) -> None:
        while self._holding and self._holding[-1].type != TokenType.LPAREN:
            self._output.append(self._holding.pop())

        if not self._holding:
            raise UnbalancedParenthesesError(
                "Unmatched ')'", token.position, self._source
            )

        # Discard the '(' marker
        self._holding.pop()


def to_postfix(
    tokens: Sequence[Token],
    operators: Optional[OperatorTable] = None,
    mode: ConverterMode = "standard",
    source: str = "",
) -> List[Token]:
    """
    Converts infix tokens to postfix order.

    Args:
        tokens: Tokens produced by the tokenizer
        operators: Operator table (defaults to the built-in table)
        mode: ``"standard"`` or ``"single_pop"``
        source: Source expression for error reporting

    Returns:
        Tokens in postfix order

    Raises:
        UnbalancedParenthesesError: If parentheses do not pair up
        ConfigurationError: If the mode or an operator symbol is unknown
    """
    converter = ShuntingYardConverter(
        tokens, source, operators or DEFAULT_OPERATOR_TABLE, mode
    )
    return converter.convert()


def postfix_to_string(tokens: Sequence[Token]) -> str:
    """Renders a postfix token list as space-separated text."""
    return " ".join(token.value for token in tokens)
