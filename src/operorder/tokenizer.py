"""
Tokenizer (lexer) for arithmetic expressions.

Converts expression strings into a list of tokens for the shunting-yard
converter.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .errors import InvalidCharacterError
from .limits import ExpressionLimits, check_expression_length


class TokenType(Enum):
    """Token types produced by the tokenizer."""

    NUMBER = "NUMBER"
    OPERATOR = "OPERATOR"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"


@dataclass(frozen=True)
class Token:
    """A token produced by the tokenizer."""

    type: TokenType
    value: str
    position: int


# Single-character operator symbols; "**" is recognized separately
OPERATOR_CHARS = frozenset("+-*/^")

GROUPING_SEPARATOR = ","


def _is_digit(ch: str) -> bool:
    """Checks if a character is a digit."""
    return "0" <= ch <= "9"


def _is_number_part(ch: str) -> bool:
    """Checks if a character can appear inside a number run."""
    return _is_digit(ch) or ch == "." or ch == GROUPING_SEPARATOR


def _is_whitespace(ch: str) -> bool:
    """Checks if a character is whitespace."""
    return ch in (" ", "\t", "\n", "\r")


class Tokenizer:
    """Tokenizer for arithmetic expression strings."""

    def __init__(self, source: str, limits: Optional[ExpressionLimits] = None):
        self._source = source
        self._limits = limits
        # Whitespace is removed before scanning, so "1 2" reads as 12.
        # Each entry keeps its index in the original source for error reporting.
        self._chars: List[Tuple[int, str]] = [
            (index, ch) for index, ch in enumerate(source) if not _is_whitespace(ch)
        ]
        self._current = 0
        self._tokens: List[Token] = []

    def tokenize(self) -> List[Token]:
        """Tokenizes the source expression and returns all tokens."""
        check_expression_length(self._source, self._limits)

        while not self._is_at_end():
            self._scan_token()

        return self._tokens

    def _is_at_end(self) -> bool:
        return self._current >= len(self._chars)

    def _peek(self) -> str:
        if self._is_at_end():
            return "\0"
        return self._chars[self._current][1]

    def _position(self) -> int:
        if self._is_at_end():
            return len(self._source)
        return self._chars[self._current][0]

    def _advance(self) -> str:
        ch = self._chars[self._current][1]
        self._current += 1
        return ch

    def _add_token(self, token_type: TokenType, value: str, position: int) -> None:
        self._tokens.append(Token(token_type, value, position))

    def _scan_token(self) -> None:
        start_position = self._position()
        ch = self._advance()

        if ch == "(":
            self._add_token(TokenType.LPAREN, ch, start_position)
            return

        if ch == ")":
            self._add_token(TokenType.RPAREN, ch, start_position)
            return

        if ch == "*" and self._peek() == "*":
            self._advance()
            self._add_token(TokenType.OPERATOR, "**", start_position)
            return

        if ch in OPERATOR_CHARS:
            self._add_token(TokenType.OPERATOR, ch, start_position)
            return

        if _is_number_part(ch):
            self._scan_number(start_position)
            return

        raise InvalidCharacterError(ch, start_position, self._source)

    def _scan_number(self, start_position: int) -> None:
        # Back up to include the first character
        self._current -= 1

        value = ""

        # Grouping commas are dropped without checking group widths.
        # Decimal points are kept as-is; a malformed run such as "1.2.3"
        # is rejected when the number is parsed.
        while _is_number_part(self._peek()):
            ch = self._advance()
            if ch != GROUPING_SEPARATOR:
                value += ch

        self._add_token(TokenType.NUMBER, value, start_position)


def tokenize(source: str, limits: Optional[ExpressionLimits] = None) -> List[Token]:
    """
    Tokenizes an expression string into tokens.

    Args:
        source: The expression string to tokenize
        limits: Optional expression limits

    Returns:
        List of tokens

    Raises:
        InvalidCharacterError: If the expression contains an unknown character
        LimitExceededError: If the expression is too long
    """
    tokenizer = Tokenizer(source, limits)
    return tokenizer.tokenize()
