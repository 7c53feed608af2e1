"""
Error types for the calculator.

All calculator errors extend ExpressionError so callers can catch one base
class, or branch on the concrete kind.
"""

from typing import Optional


class ExpressionError(Exception):
    """
    Base error class for all expression-related errors.
    """

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        expression: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.position = position
        self.expression = expression

    def format_with_context(self) -> str:
        """
        Returns a formatted error message with position context.
        """
        if self.expression is None or self.position is None:
            return self.message

        pointer = " " * self.position + "^"
        return f"{self.message}\n  {self.expression}\n  {pointer}"


class TokenizerError(ExpressionError):
    """
    Error thrown during tokenization (lexical analysis).
    """

    pass


class InvalidCharacterError(TokenizerError):
    """
    Error thrown when the source contains a character that is not a digit,
    separator, operator or parenthesis.
    """

    def __init__(self, character: str, position: int, expression: Optional[str] = None):
        super().__init__(f"Invalid character: '{character}'", position, expression)
        self.character = character


class ConfigurationError(ExpressionError):
    """
    Error thrown when an operator symbol or converter mode is not configured.

    This signals an internal inconsistency rather than bad user input.
    """

    pass


class ParseError(ExpressionError):
    """
    Error thrown while ordering tokens or building the expression tree.
    """

    pass


class UnbalancedParenthesesError(ParseError):
    """
    Error thrown when a parenthesis has no matching counterpart.
    """

    pass


class MalformedExpressionError(ParseError):
    """
    Error thrown when operators and operands do not pair up.
    """

    pass


class EvaluationError(ExpressionError):
    """
    Error thrown during evaluation (runtime error).
    """

    pass


class NumberFormatError(EvaluationError):
    """
    Error thrown when a number token cannot be parsed as a float.
    """

    def __init__(
        self,
        text: str,
        position: Optional[int] = None,
        expression: Optional[str] = None,
    ):
        super().__init__(f"Invalid number: '{text}'", position, expression)
        self.text = text


class DivisionByZeroError(EvaluationError):
    """
    Error thrown when the right operand of a division is zero.
    """

    def __init__(self, position: Optional[int] = None, expression: Optional[str] = None):
        super().__init__("Division by zero", position, expression)


class LimitExceededError(ExpressionError):
    """
    Error thrown when expression limits are exceeded.
    """

    def __init__(self, limit_name: str, limit: int, actual: int):
        message = f"Limit exceeded: {limit_name} (limit: {limit}, actual: {actual})"
        super().__init__(message)
        self.limit_name = limit_name
        self.limit = limit
        self.actual = actual
